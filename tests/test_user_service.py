"""
Contacts API — User Service Unit Tests
========================================

What:  Payload rules specific to the schema-less users collection.
How:   Same MagicMock collection with AsyncMock driver methods as the
       contact service tests.

What we test:
    ✅ Operator and dotted top-level keys are rejected before any storage call
    ✅ Values BSON cannot encode become ValidationError, not a server error
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from bson.errors import InvalidDocument

from contacts_api.exceptions import ValidationError
from contacts_api.services import UserService


@pytest.fixture
def mock_collection():
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.replace_one = AsyncMock()
    return collection


@pytest.fixture
def service(mock_collection):
    accessor = MagicMock()
    accessor.get_handle.return_value.get_collection.return_value = mock_collection
    return UserService(accessor)


class TestPayloadKeys:

    @pytest.mark.asyncio
    async def test_operator_key_rejected_on_replace(self, service, mock_collection):
        with pytest.raises(ValidationError) as exc_info:
            await service.replace(str(ObjectId()), {"$set": {"a": 1}})

        assert exc_info.value.context["invalid_keys"] == ["$set"]
        mock_collection.replace_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_dotted_key_rejected_on_create(self, service, mock_collection):
        with pytest.raises(ValidationError):
            await service.create({"username": "ada", "profile.name": "Ada"})

        mock_collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_plain_keys_stored(self, service, mock_collection):
        mock_collection.insert_one.return_value = SimpleNamespace(inserted_id=ObjectId())

        await service.create({"username": "ada", "id": "forged"})

        assert mock_collection.insert_one.await_args.args[0] == {"username": "ada"}


class TestUnencodableValues:

    @pytest.mark.asyncio
    async def test_integer_overflow_is_validation_error(self, service, mock_collection):
        mock_collection.insert_one.side_effect = OverflowError(
            "MongoDB can only handle up to 8-byte ints"
        )

        with pytest.raises(ValidationError, match="cannot be stored") as exc_info:
            await service.create({"n": 99999999999999999999})

        assert exc_info.value.context["error_type"] == "OverflowError"

    @pytest.mark.asyncio
    async def test_invalid_document_on_replace_is_validation_error(self, service, mock_collection):
        mock_collection.replace_one.side_effect = InvalidDocument("cannot encode object")

        with pytest.raises(ValidationError):
            await service.replace(str(ObjectId()), {"username": "ada"})
