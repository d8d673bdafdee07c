"""
Contacts API — Document Service (shared CRUD logic)
=====================================================

What:  The five CRUD operations over one MongoDB collection.
How:   Every operation validates its inputs first, then borrows the handle from
       the DatabaseAccessor and issues exactly one driver call. Driver failures
       are wrapped in StorageError; empty results become NotFoundError.
       Values BSON cannot encode are client errors (ValidationError).
Who:   Subclassed by ContactService and UserService, which decide what a
       valid write payload is.

Operation flow:
    ┌───────────┐    ┌──────────────┐    ┌─────────────┐    ┌───────────┐
    │  Route    │───▶│  Validate id │───▶│ get_handle  │───▶│ one driver│
    │           │    │  / payload   │    │             │    │   call    │
    └───────────┘    └──────────────┘    └─────────────┘    └───────────┘
          400 ◀──────────────┘      500 ◀───────┘     404 / 500 ◀─┘

Validation always runs before ``get_handle``, so a malformed id is a 400 even
when the database was never reached.
"""

import logging
from typing import Any, Dict, List, Mapping

from bson import ObjectId
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from contacts_api.database import DatabaseAccessor
from contacts_api.exceptions import NotFoundError, StorageError, ValidationError
from contacts_api.validators import is_valid_id

logger = logging.getLogger(__name__)


def serialize_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename ``_id`` to ``id`` and render ObjectId values as hex strings."""
    body = {
        key: str(value) if isinstance(value, ObjectId) else value
        for key, value in document.items()
        if key != "_id"
    }
    return {"id": str(document["_id"]), **body}


class DocumentService:
    """
    CRUD operations for a single collection.

    Subclasses set ``collection_name`` and ``resource`` and implement
    ``build_document`` to validate and shape write payloads.
    """

    collection_name: str = ""
    resource: str = "document"

    def __init__(self, accessor: DatabaseAccessor):
        self._accessor = accessor

    def build_document(self, payload: Any) -> Dict[str, Any]:
        """Validate a create/replace payload and return the body to store."""
        raise NotImplementedError

    def _collection(self):
        return self._accessor.get_handle().get_collection(self.collection_name)

    def _parse_id(self, raw_id: str) -> ObjectId:
        if not is_valid_id(raw_id):
            raise ValidationError(
                message="Invalid ID format",
                field="id",
                context={"resource": self.resource},
            )
        return ObjectId(raw_id)

    def _encoding_error(self, error: Exception) -> ValidationError:
        logger.info("Unstorable %s payload: %s", self.resource, str(error))
        return ValidationError(
            message="Payload contains values that cannot be stored",
            context={"resource": self.resource, "error_type": type(error).__name__},
        )

    def _storage_error(self, operation: str, error: Exception, **context) -> StorageError:
        logger.error(
            "Error during %s on %s: %s", operation, self.collection_name, str(error)
        )
        return StorageError(
            message=f"Could not {operation} {self.resource}",
            context={
                "collection": self.collection_name,
                "operation": operation,
                "error_type": type(error).__name__,
                **context,
            },
        )

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_all(self) -> List[Dict[str, Any]]:
        collection = self._collection()
        try:
            documents = await collection.find({}).to_list(length=None)
        except PyMongoError as e:
            raise self._storage_error("fetch", e) from e
        return [serialize_document(doc) for doc in documents]

    async def get(self, raw_id: str) -> Dict[str, Any]:
        object_id = self._parse_id(raw_id)
        collection = self._collection()
        try:
            document = await collection.find_one({"_id": object_id})
        except PyMongoError as e:
            raise self._storage_error("fetch", e, resource_id=raw_id) from e
        if document is None:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        return serialize_document(document)

    # ── Write ─────────────────────────────────────────────────────────────

    async def create(self, payload: Any) -> str:
        """Insert a new document and return its generated identifier."""
        document = self.build_document(payload)
        collection = self._collection()
        try:
            result = await collection.insert_one(document)
        except (BSONError, OverflowError) as e:
            raise self._encoding_error(e) from e
        except PyMongoError as e:
            raise self._storage_error("create", e) from e
        new_id = str(result.inserted_id)
        logger.info("Created %s %s", self.resource, new_id)
        return new_id

    async def replace(self, raw_id: str, payload: Any) -> None:
        """
        Replace the whole document named by ``raw_id``.

        Not-found is decided on the matched count, so writing identical
        content over an existing document still succeeds.
        """
        object_id = self._parse_id(raw_id)
        document = self.build_document(payload)
        collection = self._collection()
        try:
            result = await collection.replace_one({"_id": object_id}, document)
        except (BSONError, OverflowError) as e:
            raise self._encoding_error(e) from e
        except PyMongoError as e:
            raise self._storage_error("update", e, resource_id=raw_id) from e
        if result.matched_count == 0:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        logger.info("Replaced %s %s", self.resource, raw_id)

    async def delete(self, raw_id: str) -> None:
        object_id = self._parse_id(raw_id)
        collection = self._collection()
        try:
            result = await collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            raise self._storage_error("delete", e, resource_id=raw_id) from e
        if result.deleted_count == 0:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        logger.info("Deleted %s %s", self.resource, raw_id)
