"""
Contacts API — Contact Schemas
================================

What:  Request and response models for the /contacts routes.
How:   Python attributes are snake_case; the JSON contract keeps the camelCase
       names (firstName, favoriteColor, ...) through field aliases.

Every request field is optional at the schema level. Completeness is decided by
``validators.is_complete_contact`` so an incomplete payload is a 400 from the
service, not a schema error.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContactPayload(BaseModel):
    """Body of POST /contacts and PUT /contacts/{id}. Unknown keys are dropped."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "ada@example.com",
                "favoriteColor": "green",
                "birthday": "1815-12-10",
            }
        },
    )

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = Field(default=None, alias="email")
    favorite_color: Optional[str] = Field(default=None, alias="favoriteColor")
    birthday: Optional[str] = Field(
        default=None,
        alias="birthday",
        description="Free-form date text; not parsed",
    )

    def to_document(self) -> dict:
        """The stored document body, keyed by the JSON field names."""
        return self.model_dump(by_alias=True)


class ContactResponse(BaseModel):
    """
    A stored contact as returned by GET /contacts and GET /contacts/{id}.

    Field values are passed through untyped: the collection may hold documents
    written by other clients (e.g. a BSON date birthday).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="24-character hexadecimal document identifier")
    first_name: Any = Field(default=None, alias="firstName")
    last_name: Any = Field(default=None, alias="lastName")
    email: Any = Field(default=None, alias="email")
    favorite_color: Any = Field(default=None, alias="favoriteColor")
    birthday: Any = Field(default=None, alias="birthday")
