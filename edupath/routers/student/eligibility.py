from typing import Annotated
from fastapi import APIRouter, Depends, Path, Request

from edupath.middlewares.auth_middleware import AuthState, require_student
from edupath.services.eligibility_service import (
    EligibilityService,
    get_eligibility_service,
)
from edupath.utils.responses import ResponseBuilder

eligibility_router = APIRouter()


@eligibility_router.get("")
async def get_eligibility(
    request: Request,
    current_user: Annotated[AuthState, Depends(require_student)],
    eligibility_service: EligibilityService = Depends(get_eligibility_service),
):
    """
    Every university flagged with whether the current student meets both
    GPA minimums, plus the eligible subset.
    """
    overview = await eligibility_service.get_eligibility_overview(
        current_user.user_id
    )
    eligible = [item for item in overview if item.eligible]

    return ResponseBuilder.success(
        request=request,
        data={
            "universities": [item.model_dump(by_alias=True) for item in overview],
            "eligibleUniversities": [
                item.model_dump(by_alias=True) for item in eligible
            ],
            "eligibleCount": len(eligible),
        },
        message=f"Eligible for {len(eligible)} of {len(overview)} universities",
    )


@eligibility_router.get("/{university_id}")
async def check_university_eligibility(
    request: Request,
    university_id: Annotated[int, Path(description="University ID")],
    current_user: Annotated[AuthState, Depends(require_student)],
    eligibility_service: EligibilityService = Depends(get_eligibility_service),
):
    item = await eligibility_service.check_university(
        current_user.user_id, university_id
    )
    return ResponseBuilder.success(
        request=request,
        data=item.model_dump(by_alias=True),
        message="Eligible" if item.eligible else "Not eligible",
    )
