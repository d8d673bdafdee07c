"""
Contacts API — Contact Route Handlers
=======================================

What:  The canonical routing table for the ``contacts`` collection.
How:   Each handler makes a single ContactService call. Identifier and
       completeness checks happen inside the service before storage is touched.

    GET    /contacts        → 200 [Contact]
    GET    /contacts/{id}   → 200 Contact  | 400 | 404
    POST   /contacts        → 201 {id}     | 400
    PUT    /contacts/{id}   → 204          | 400 | 404
    DELETE /contacts/{id}   → 204          | 400 | 404

Any route may also answer 500 when the database fails or is not connected.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from contacts_api.schemas.common import CreatedResponse, ErrorResponse
from contacts_api.schemas.contact import ContactPayload, ContactResponse
from contacts_api.services import ContactService, get_contact_service

router = APIRouter(prefix="/contacts", tags=["Contacts"])

_INVALID_ID = {400: {"description": "Invalid ID format", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Contact not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[ContactResponse],
    response_model_by_alias=True,
    responses={**_SERVER_ERROR},
    summary="Get all contacts",
)
async def list_contacts(
    service: ContactService = Depends(get_contact_service),
):
    return await service.list_all()


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    response_model_by_alias=True,
    responses={**_INVALID_ID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a contact by ID",
)
async def get_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    return await service.get(contact_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreatedResponse,
    responses={
        400: {"description": "A required field is missing or empty", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Create a new contact",
    description="All of firstName, lastName, email, favoriteColor and birthday are required.",
)
async def create_contact(
    payload: ContactPayload,
    service: ContactService = Depends(get_contact_service),
) -> CreatedResponse:
    new_id = await service.create(payload.to_document())
    return CreatedResponse(id=new_id)


@router.put(
    "/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Invalid ID format or incomplete contact", "model": ErrorResponse},
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Replace a contact by ID",
    description="Full replacement: every contact field is required again.",
)
async def replace_contact(
    contact_id: str,
    payload: ContactPayload,
    service: ContactService = Depends(get_contact_service),
) -> Response:
    await service.replace(contact_id, payload.to_document())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_INVALID_ID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a contact by ID",
)
async def delete_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> Response:
    await service.delete(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
