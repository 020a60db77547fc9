from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Path, Query, Request

from edupath.schemas.application_schemas import UpdateStatusRequest
from edupath.services.admin.review_service import ReviewService, get_review_service
from edupath.services.admin.status_change_service import (
    StatusChangeService,
    get_status_change_service,
    to_status_change_response,
)
from edupath.utils.responses import ResponseBuilder

applications_router = APIRouter()


@applications_router.get("/applications")
async def list_applications(
    request: Request,
    status: Annotated[
        Optional[str], Query(description="Filter by pending, approved or rejected")
    ] = None,
    review_service: ReviewService = Depends(get_review_service),
):
    """All university and scholarship applications with the applicant's name and email"""
    overview = await review_service.list_all_applications(status=status)

    return ResponseBuilder.success(
        request=request,
        data={
            "universityApps": [
                a.model_dump(by_alias=True) for a in overview.university_apps
            ],
            "scholarshipApps": [
                a.model_dump(by_alias=True) for a in overview.scholarship_apps
            ],
        },
        message=f"Retrieved {len(overview.university_apps) + len(overview.scholarship_apps)} applications",
    )


@applications_router.put("/applications/{application_id}/status")
async def update_application_status(
    body: UpdateStatusRequest,
    request: Request,
    application_id: Annotated[int, Path(description="University application ID")],
    status_service: StatusChangeService = Depends(get_status_change_service),
):
    """
    Approve or reject a pending university application.

    The applicant gets a stored notification and, when connected, a live push.
    """
    result = await status_service.update_application_status(
        application_id, body.status
    )
    return ResponseBuilder.success(
        request=request,
        data=to_status_change_response(result),
        message=f"Application {result.status.value}",
    )


@applications_router.put("/scholarship-applications/{application_id}/status")
async def update_scholarship_application_status(
    body: UpdateStatusRequest,
    request: Request,
    application_id: Annotated[int, Path(description="Scholarship application ID")],
    status_service: StatusChangeService = Depends(get_status_change_service),
):
    """Approve or reject a pending scholarship application"""
    result = await status_service.update_scholarship_application_status(
        application_id, body.status
    )
    return ResponseBuilder.success(
        request=request,
        data=to_status_change_response(result),
        message=f"Scholarship application {result.status.value}",
    )
