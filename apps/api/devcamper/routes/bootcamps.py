"""Bootcamp routes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Path, UploadFile, status

from devcamper.adapters.storage import FileStore
from devcamper.core.config import Settings
from devcamper.domain.query import ListQuery
from devcamper.routes.dependencies import (
    get_app_settings,
    get_authenticated_principal,
    get_bootcamp_list_query,
    get_bootcamp_service,
    get_file_store,
)
from devcamper.schemas.auth import AuthPrincipal
from devcamper.schemas.bootcamp import Bootcamp, CreateBootcampRequest, UpdateBootcampRequest
from devcamper.schemas.envelope import DataEnvelope, ErrorEnvelope, ListEnvelope, PagedEnvelope
from devcamper.services.bootcamps import BootcampService, UploadedFile

router = APIRouter(prefix="/bootcamps", tags=["Bootcamps"])

_MUTATION_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    403: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
}


@router.get("", response_model=PagedEnvelope)
async def list_bootcamps(
    query: Annotated[ListQuery, Depends(get_bootcamp_list_query)],
    service: Annotated[BootcampService, Depends(get_bootcamp_service)],
) -> PagedEnvelope:
    return service.list_bootcamps(query=query)


@router.get(
    "/radius/{zipcode}/{distance}",
    response_model=ListEnvelope,
    responses={400: {"model": ErrorEnvelope}, 404: {"model": ErrorEnvelope}},
)
async def list_bootcamps_in_radius(
    zipcode: str,
    distance: Annotated[float, Path(ge=0, description="Radius in miles")],
    service: Annotated[BootcampService, Depends(get_bootcamp_service)],
) -> ListEnvelope:
    return service.bootcamps_in_radius(zipcode=zipcode, distance_miles=distance)


@router.get(
    "/{bootcampId}",
    response_model=DataEnvelope[Bootcamp],
    responses={404: {"model": ErrorEnvelope}},
)
async def get_bootcamp(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    service: Annotated[BootcampService, Depends(get_bootcamp_service)],
) -> DataEnvelope[Bootcamp]:
    return DataEnvelope[Bootcamp](data=service.get_bootcamp(bootcamp_id=bootcamp_id))


@router.post(
    "",
    response_model=DataEnvelope[Bootcamp],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorEnvelope}, 401: {"model": ErrorEnvelope}},
)
async def create_bootcamp(
    payload: CreateBootcampRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[BootcampService, Depends(get_bootcamp_service)],
) -> DataEnvelope[Bootcamp]:
    return DataEnvelope[Bootcamp](data=service.create_bootcamp(principal=principal, payload=payload))


@router.put("/{bootcampId}", response_model=DataEnvelope[Bootcamp], responses=_MUTATION_ERRORS)
async def update_bootcamp(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    payload: UpdateBootcampRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[BootcampService, Depends(get_bootcamp_service)],
) -> DataEnvelope[Bootcamp]:
    return DataEnvelope[Bootcamp](
        data=service.update_bootcamp(principal=principal, bootcamp_id=bootcamp_id, payload=payload)
    )


@router.delete("/{bootcampId}", response_model=DataEnvelope[dict[str, Any]], responses=_MUTATION_ERRORS)
async def delete_bootcamp(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[BootcampService, Depends(get_bootcamp_service)],
) -> DataEnvelope[dict[str, Any]]:
    service.delete_bootcamp(principal=principal, bootcamp_id=bootcamp_id)
    return DataEnvelope[dict[str, Any]](data={})


@router.put("/{bootcampId}/photo", response_model=DataEnvelope[str], responses=_MUTATION_ERRORS)
async def upload_bootcamp_photo(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[BootcampService, Depends(get_bootcamp_service)],
    file_store: Annotated[FileStore, Depends(get_file_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    file: Annotated[UploadFile | None, File()] = None,
) -> DataEnvelope[str]:
    upload = None
    if file is not None:
        upload = UploadedFile(filename=file.filename, content_type=file.content_type, content=await file.read())

    filename = service.upload_photo(
        principal=principal,
        bootcamp_id=bootcamp_id,
        upload=upload,
        file_store=file_store,
        max_size=settings.max_file_upload,
    )
    return DataEnvelope[str](data=filename)
