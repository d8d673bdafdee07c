"""
Contacts API — Contact Service
================================

What:  CRUD over the ``contacts`` collection.
How:   Inherits the shared operation flow from DocumentService and adds the
       contact completeness rule: all five fields present and non-empty on
       every create and every full replacement.
"""

from typing import Any, Dict

from contacts_api.exceptions import ValidationError
from contacts_api.services.document_service import DocumentService
from contacts_api.validators import CONTACT_FIELDS, is_complete_contact


class ContactService(DocumentService):
    collection_name = "contacts"
    resource = "contact"

    def build_document(self, payload: Any) -> Dict[str, Any]:
        """
        Return the five contact fields of ``payload``.

        Raises:
            ValidationError: any required field is missing or empty. The
                missing names are reported in the error details.
        """
        if not is_complete_contact(payload):
            source = payload if isinstance(payload, dict) else {}
            missing = [field for field in CONTACT_FIELDS if not source.get(field)]
            raise ValidationError(
                message="All fields are required",
                context={"missing": missing},
            )
        return {field: payload[field] for field in CONTACT_FIELDS}
