from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, status

from devcamper.domain.query import ListQuery
from devcamper.routes.dependencies import get_authenticated_principal, get_course_list_query, get_course_service
from devcamper.schemas.auth import AuthPrincipal
from devcamper.schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from devcamper.schemas.envelope import DataEnvelope, ErrorEnvelope, ListEnvelope, PagedEnvelope
from devcamper.services.courses import CourseService

router = APIRouter(tags=["Courses"])

_MUTATION_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    403: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
}


@router.get("/courses", response_model=PagedEnvelope)
async def list_courses(
    query: Annotated[ListQuery, Depends(get_course_list_query)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> PagedEnvelope:
    return service.list_courses(query=query)


@router.get(
    "/bootcamps/{bootcampId}/courses",
    response_model=ListEnvelope,
    responses={404: {"model": ErrorEnvelope}},
)
async def list_bootcamp_courses(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> ListEnvelope:
    return service.list_bootcamp_courses(bootcamp_id=bootcamp_id)


@router.get("/courses/{courseId}", response_model=DataEnvelope[Course], responses={404: {"model": ErrorEnvelope}})
async def get_course(
    course_id: Annotated[str, Path(alias="courseId")],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> DataEnvelope[Course]:
    return DataEnvelope[Course](data=service.get_course(course_id=course_id))


@router.post(
    "/bootcamps/{bootcampId}/courses",
    response_model=DataEnvelope[Course],
    status_code=status.HTTP_201_CREATED,
    responses=_MUTATION_ERRORS,
)
async def add_course(
    bootcamp_id: Annotated[str, Path(alias="bootcampId")],
    payload: CreateCourseRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> DataEnvelope[Course]:
    return DataEnvelope[Course](data=service.add_course(principal=principal, bootcamp_id=bootcamp_id, payload=payload))


@router.put("/courses/{courseId}", response_model=DataEnvelope[Course], responses=_MUTATION_ERRORS)
async def update_course(
    course_id: Annotated[str, Path(alias="courseId")],
    payload: UpdateCourseRequest,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> DataEnvelope[Course]:
    return DataEnvelope[Course](data=service.update_course(principal=principal, course_id=course_id, payload=payload))


@router.delete("/courses/{courseId}", response_model=DataEnvelope[dict[str, Any]], responses=_MUTATION_ERRORS)
async def delete_course(
    course_id: Annotated[str, Path(alias="courseId")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> DataEnvelope[dict[str, Any]]:
    service.delete_course(principal=principal, course_id=course_id)
    return DataEnvelope[dict[str, Any]](data={})
