"""
Contacts API — User Route Handlers
====================================

Same five-operation surface as /contacts over the ``users`` collection.
User documents have no fixed schema; writes only require a non-empty
JSON object.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from contacts_api.schemas.common import CreatedResponse, ErrorResponse
from contacts_api.services import UserService, get_user_service

router = APIRouter(prefix="/users", tags=["Users"])

_INVALID_ID = {400: {"description": "Invalid ID format", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}

_USER_EXAMPLE = {"username": "ada", "email": "ada@example.com"}


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses={**_SERVER_ERROR},
    summary="Get all users",
)
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_all()


@router.get(
    "/{user_id}",
    response_model=Dict[str, Any],
    responses={**_INVALID_ID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a user by ID",
)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return await service.get(user_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Empty or non-object payload", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Create a new user",
)
async def create_user(
    payload: Dict[str, Any] = Body(..., examples=[_USER_EXAMPLE]),
    service: UserService = Depends(get_user_service),
) -> CreatedResponse:
    new_id = await service.create(payload)
    return CreatedResponse(id=new_id)


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Invalid ID format or empty payload", "model": ErrorResponse},
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Replace a user by ID",
)
async def replace_user(
    user_id: str,
    payload: Dict[str, Any] = Body(..., examples=[_USER_EXAMPLE]),
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.replace(user_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_INVALID_ID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a user by ID",
)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Response:
    await service.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
