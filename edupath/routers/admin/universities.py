from typing import Annotated
from fastapi import APIRouter, Depends, Path, Request, status

from edupath.schemas.university_schemas import UniversityBody
from edupath.services.university_service import (
    UniversityService,
    get_university_service,
)
from edupath.utils.responses import ResponseBuilder

universities_router = APIRouter()


@universities_router.post("", status_code=status.HTTP_201_CREATED)
async def create_university(
    body: UniversityBody,
    request: Request,
    university_service: UniversityService = Depends(get_university_service),
):
    university = await university_service.create_university(body)
    return ResponseBuilder.success(
        request=request,
        data=university.model_dump(by_alias=True),
        message="University created",
        status_code=status.HTTP_201_CREATED,
    )


@universities_router.put("/{university_id}")
async def update_university(
    body: UniversityBody,
    request: Request,
    university_id: Annotated[int, Path(description="University ID")],
    university_service: UniversityService = Depends(get_university_service),
):
    """Replace every editable field of a university"""
    university = await university_service.update_university(university_id, body)
    return ResponseBuilder.success(
        request=request,
        data=university.model_dump(by_alias=True),
        message="University updated",
    )


@universities_router.delete("/{university_id}")
async def delete_university(
    request: Request,
    university_id: Annotated[int, Path(description="University ID")],
    university_service: UniversityService = Depends(get_university_service),
):
    """
    Delete a university.

    Its scholarships stay listed with a null university name.
    """
    await university_service.delete_university(university_id)
    return ResponseBuilder.success(
        request=request,
        data={"id": university_id},
        message="University deleted",
    )
