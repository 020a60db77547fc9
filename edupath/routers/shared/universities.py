from typing import Annotated
from fastapi import APIRouter, Depends, Path, Request

from edupath.services.university_service import (
    UniversityService,
    get_university_service,
)
from edupath.utils.responses import ResponseBuilder

universities_router = APIRouter()


@universities_router.get("")
async def list_universities(
    request: Request,
    university_service: UniversityService = Depends(get_university_service),
):
    """Public catalog of universities with their admission minimums"""
    universities = await university_service.list_universities()
    return ResponseBuilder.success(
        request=request,
        data=[u.model_dump(by_alias=True) for u in universities],
        message=f"Retrieved {len(universities)} universities",
    )


@universities_router.get("/{university_id}")
async def get_university(
    request: Request,
    university_id: Annotated[int, Path(description="University ID")],
    university_service: UniversityService = Depends(get_university_service),
):
    university = await university_service.get_university(university_id)
    return ResponseBuilder.success(
        request=request,
        data=university.model_dump(by_alias=True),
        message="University retrieved",
    )
