from fastapi import APIRouter, Depends

from edupath.middlewares.auth_middleware import require_admin

from .applications import applications_router
from .documents import documents_router
from .scholarships import scholarships_router
from .universities import universities_router
from .users import users_router

admin_router = APIRouter(dependencies=[Depends(require_admin)])

# Include sub-routers
admin_router.include_router(users_router, prefix="/users", tags=["Admin - Users"])
admin_router.include_router(
    applications_router, tags=["Admin - Application Review"]
)
admin_router.include_router(
    documents_router, prefix="/documents", tags=["Admin - Document Review"]
)
admin_router.include_router(
    universities_router, prefix="/universities", tags=["Admin - Universities"]
)
admin_router.include_router(
    scholarships_router, prefix="/scholarships", tags=["Admin - Scholarships"]
)
