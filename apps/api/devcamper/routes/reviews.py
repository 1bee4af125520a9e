from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, status

from devcamper.domain.query import ListQuery
from devcamper.routes.dependencies import get_authenticated_principal, get_review_list_query, get_review_service
from devcamper.schemas.auth import AuthPrincipal
from devcamper.schemas.envelope import DataEnvelope, ErrorEnvelope, ListEnvelope, PagedEnvelope
from devcamper.schemas.review import CreateReviewRequest, Review, UpdateReviewRequest
from devcamper.services.reviews import ReviewService

router = APIRouter(tags=["Reviews"])

_MUTATION_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    403: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
}


@router.get("/reviews", response_model=PagedEnvelope)
async def list_reviews(
    query: Annotated[ListQuery, Depends(get_review_list_query)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> PagedEnvelope:
    return service.list_reviews(query=query)


@router.get(
    "/bootcamps/{bootcampId}/reviews",
    response_model=ListEnvelope,
    responses={404: {"model": ErrorEnvelope}},
)
async def list_bootcamp_reviews(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> ListEnvelope:
    return service.list_bootcamp_reviews(bootcamp_id=bootcamp_id)


@router.get("/reviews/{reviewId}", response_model=DataEnvelope[Review], responses={404: {"model": ErrorEnvelope}})
async def get_review(
    review_id: Annotated[str, Path(alias="reviewId")],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> DataEnvelope[Review]:
    return DataEnvelope[Review](data=service.get_review(review_id=review_id))


@router.post(
    "/bootcamps/{bootcampId}/reviews",
    response_model=DataEnvelope[Review],
    status_code=status.HTTP_201_CREATED,
    responses=_MUTATION_ERRORS,
)
async def add_review(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    payload: CreateReviewRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> DataEnvelope[Review]:
    return DataEnvelope[Review](data=service.add_review(principal=principal, bootcamp_id=bootcamp_id, payload=payload))


@router.put("/reviews/{reviewId}", response_model=DataEnvelope[Review], responses=_MUTATION_ERRORS)
async def update_review(
    review_id: Annotated[str, Path(alias="reviewId")],
    payload: UpdateReviewRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> DataEnvelope[Review]:
    return DataEnvelope[Review](data=service.update_review(principal=principal, review_id=review_id, payload=payload))


@router.delete("/reviews/{reviewId}", response_model=DataEnvelope[dict[str, Any]], responses=_MUTATION_ERRORS)
async def delete_review(
    review_id: Annotated[str, Path(alias="reviewId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[ReviewService, Depends(get_review_service)],
) -> DataEnvelope[dict[str, Any]]:
    service.delete_review(principal=principal, review_id=review_id)
    return DataEnvelope[dict[str, Any]](data={})
