"""Admin-only user management routes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, status

from devcamper.domain.query import ListQuery
from devcamper.routes.dependencies import get_user_list_query, get_user_service, require_admin
from devcamper.schemas.envelope import DataEnvelope, ErrorEnvelope, PagedEnvelope
from devcamper.schemas.user import CreateUserRequest, UpdateUserRequest, User
from devcamper.services.users import UserService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorEnvelope}, 403: {"model": ErrorEnvelope}},
)


@router.get("", response_model=PagedEnvelope)
async def list_users(
    query: Annotated[ListQuery, Depends(get_user_list_query)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> PagedEnvelope:
    return service.list_users(query=query)


@router.get("/{userId}", response_model=DataEnvelope[User], responses={404: {"model": ErrorEnvelope}})
async def get_user(
    user_id: Annotated[str, Path(alias="userId")],
    service: Annotated[UserService, Depends(get_user_service)],
) -> DataEnvelope[User]:
    return DataEnvelope[User](data=service.get_user(user_id=user_id))


@router.post(
    "",
    response_model=DataEnvelope[User],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorEnvelope}},
)
async def create_user(
    payload: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> DataEnvelope[User]:
    return DataEnvelope[User](data=service.create_user(payload=payload))


@router.put(
    "/{userId}",
    response_model=DataEnvelope[User],
    responses={400: {"model": ErrorEnvelope}, 404: {"model": ErrorEnvelope}},
)
async def update_user(
    user_id: Annotated[str, Path(alias="userId")],
    payload: UpdateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> DataEnvelope[User]:
    return DataEnvelope[User](data=service.update_user(user_id=user_id, payload=payload))


@router.delete("/{userId}", response_model=DataEnvelope[dict[str, Any]], responses={404: {"model": ErrorEnvelope}})
async def delete_user(
    user_id: Annotated[str, Path(alias="userId")],
    service: Annotated[UserService, Depends(get_user_service)],
) -> DataEnvelope[dict[str, Any]]:
    service.delete_user(user_id=user_id)
    return DataEnvelope[dict[str, Any]](data={})
