from fastapi import APIRouter

from edupath.routers.admin import admin_router
from edupath.routers.realtime import realtime_router
from edupath.routers.shared import shared_router
from edupath.routers.student import student_router

main_router = APIRouter()

# Include domain-based routers
main_router.include_router(admin_router, prefix="/admin", tags=["Admin"])
main_router.include_router(student_router, prefix="/student", tags=["Student"])
main_router.include_router(shared_router, prefix="/shared", tags=["Shared Services"])
main_router.include_router(realtime_router, tags=["Realtime"])
