from typing import Annotated
from fastapi import APIRouter, Depends, Path, Request

from edupath.services.scholarship_service import (
    ScholarshipService,
    get_scholarship_service,
)
from edupath.utils.responses import ResponseBuilder

scholarships_router = APIRouter()


@scholarships_router.get("")
async def list_scholarships(
    request: Request,
    scholarship_service: ScholarshipService = Depends(get_scholarship_service),
):
    """
    All scholarships with the owning university's name.

    A scholarship whose university was deleted is still listed, with a null
    university name.
    """
    scholarships = await scholarship_service.list_scholarships()
    return ResponseBuilder.success(
        request=request,
        data=[s.model_dump(by_alias=True) for s in scholarships],
        message=f"Retrieved {len(scholarships)} scholarships",
    )


@scholarships_router.get("/{scholarship_id}")
async def get_scholarship(
    request: Request,
    scholarship_id: Annotated[int, Path(description="Scholarship ID")],
    scholarship_service: ScholarshipService = Depends(get_scholarship_service),
):
    scholarship = await scholarship_service.get_scholarship(scholarship_id)
    return ResponseBuilder.success(
        request=request,
        data=scholarship.model_dump(by_alias=True),
        message="Scholarship retrieved",
    )
