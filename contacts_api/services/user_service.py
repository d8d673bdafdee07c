"""Contacts API — User Service: CRUD over the schema-less ``users`` collection."""

from typing import Any, Dict

from contacts_api.exceptions import ValidationError
from contacts_api.services.document_service import DocumentService
from contacts_api.validators import RESERVED_KEYS, has_storable_keys, is_nonempty_payload


class UserService(DocumentService):
    collection_name = "users"
    resource = "user"

    def build_document(self, payload: Any) -> Dict[str, Any]:
        # Identifiers are server-assigned; client-sent id/_id keys are dropped.
        if not is_nonempty_payload(payload):
            raise ValidationError(message="User payload must be a non-empty JSON object")
        if not has_storable_keys(payload):
            raise ValidationError(
                message="Field names may not start with '$' or contain '.'",
                context={
                    "invalid_keys": [
                        key for key in payload if key.startswith("$") or "." in key
                    ]
                },
            )
        return {key: value for key, value in payload.items() if key not in RESERVED_KEYS}
