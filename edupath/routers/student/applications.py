from typing import Annotated
from fastapi import APIRouter, Depends, Request, status

from edupath.middlewares.auth_middleware import AuthState, require_student
from edupath.schemas.application_schemas import (
    CreateScholarshipApplicationRequest,
    CreateUniversityApplicationRequest,
)
from edupath.services.student.application_service import (
    ApplicationService,
    get_application_service,
)
from edupath.utils.responses import ResponseBuilder

applications_router = APIRouter()

# Owner fields are only filled on the admin side
_OWNER_FIELDS = {"student_name", "student_email"}


@applications_router.post("/applications", status_code=status.HTTP_201_CREATED)
async def apply_to_university(
    body: CreateUniversityApplicationRequest,
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    application_service: ApplicationService = Depends(get_application_service),
):
    """Submit a pending application to a university"""
    application = await application_service.apply_to_university(
        current_user.user_id, body.university_id
    )
    return ResponseBuilder.success(
        request=request,
        data=application.model_dump(by_alias=True, exclude=_OWNER_FIELDS),
        message="Application submitted",
        status_code=status.HTTP_201_CREATED,
    )


@applications_router.post(
    "/scholarship-applications", status_code=status.HTTP_201_CREATED
)
async def apply_to_scholarship(
    body: CreateScholarshipApplicationRequest,
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    application_service: ApplicationService = Depends(get_application_service),
):
    """Submit a pending application to a scholarship"""
    application = await application_service.apply_to_scholarship(
        current_user.user_id, body.scholarship_id
    )
    return ResponseBuilder.success(
        request=request,
        data=application.model_dump(by_alias=True, exclude=_OWNER_FIELDS),
        message="Scholarship application submitted",
        status_code=status.HTTP_201_CREATED,
    )


@applications_router.get("/applications")
async def get_my_applications(
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    application_service: ApplicationService = Depends(get_application_service),
):
    overview = await application_service.get_user_applications(current_user.user_id)

    return ResponseBuilder.success(
        request=request,
        data={
            "universityApps": [
                a.model_dump(by_alias=True, exclude=_OWNER_FIELDS)
                for a in overview.university_apps
            ],
            "scholarshipApps": [
                a.model_dump(by_alias=True, exclude=_OWNER_FIELDS)
                for a in overview.scholarship_apps
            ],
        },
        message=f"Retrieved {len(overview.university_apps) + len(overview.scholarship_apps)} applications",
    )
