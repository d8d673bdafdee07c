"""
Contacts API — Services Layer
===============================

What:  Business logic between the routes (HTTP) and the database accessor.

Service Inventory:
    - DocumentService: validate-then-one-call CRUD flow for one collection
    - ContactService:  contacts collection, five required fields
    - UserService:     users collection, any non-empty JSON object

Services are built once by the application factory with the shared
DatabaseAccessor and fetched by routes through FastAPI dependencies.
"""

from fastapi import Request

from contacts_api.services.contact_service import ContactService
from contacts_api.services.document_service import DocumentService
from contacts_api.services.user_service import UserService

__all__ = [
    "ContactService",
    "DocumentService",
    "UserService",
    "get_contact_service",
    "get_user_service",
]


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service
