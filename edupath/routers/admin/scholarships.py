from typing import Annotated
from fastapi import APIRouter, Depends, Path, Request, status

from edupath.schemas.university_schemas import ScholarshipBody
from edupath.services.scholarship_service import (
    ScholarshipService,
    get_scholarship_service,
)
from edupath.utils.responses import ResponseBuilder

scholarships_router = APIRouter()


@scholarships_router.post("", status_code=status.HTTP_201_CREATED)
async def create_scholarship(
    body: ScholarshipBody,
    request: Request,
    scholarship_service: ScholarshipService = Depends(get_scholarship_service),
):
    """Create a scholarship under an existing university"""
    scholarship = await scholarship_service.create_scholarship(body)
    return ResponseBuilder.success(
        request=request,
        data=scholarship.model_dump(by_alias=True),
        message="Scholarship created",
        status_code=status.HTTP_201_CREATED,
    )


@scholarships_router.put("/{scholarship_id}")
async def update_scholarship(
    body: ScholarshipBody,
    request: Request,
    scholarship_id: Annotated[int, Path(description="Scholarship ID")],
    scholarship_service: ScholarshipService = Depends(get_scholarship_service),
):
    scholarship = await scholarship_service.update_scholarship(scholarship_id, body)
    return ResponseBuilder.success(
        request=request,
        data=scholarship.model_dump(by_alias=True),
        message="Scholarship updated",
    )


@scholarships_router.delete("/{scholarship_id}")
async def delete_scholarship(
    request: Request,
    scholarship_id: Annotated[int, Path(description="Scholarship ID")],
    scholarship_service: ScholarshipService = Depends(get_scholarship_service),
):
    await scholarship_service.delete_scholarship(scholarship_id)
    return ResponseBuilder.success(
        request=request,
        data={"id": scholarship_id},
        message="Scholarship deleted",
    )
