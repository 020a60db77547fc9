from fastapi import APIRouter, Depends

from edupath.middlewares.auth_middleware import require_student

from .applications import applications_router
from .documents import documents_router
from .eligibility import eligibility_router
from .profile import profile_router

student_router = APIRouter(dependencies=[Depends(require_student)])

# Include sub-routers
student_router.include_router(
    profile_router, prefix="/profile", tags=["Student - Profile"]
)
student_router.include_router(
    eligibility_router, prefix="/eligibility", tags=["Student - Eligibility"]
)
student_router.include_router(applications_router, tags=["Student - Applications"])
student_router.include_router(
    documents_router, prefix="/documents", tags=["Student - Documents"]
)
