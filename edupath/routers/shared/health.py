from fastapi import APIRouter, Request

from edupath.config.settings import settings
from edupath.services.realtime import ConnectionRegistry
from edupath.utils.responses import ResponseBuilder

health_router = APIRouter()


@health_router.get("")
async def health_check(request: Request):
    """
    Basic health check endpoint

    Returns application status and the number of live push connections
    """
    registry: ConnectionRegistry = request.app.state.connection_registry
    return ResponseBuilder.success(
        request=request,
        data={
            "status": "healthy",
            "service": settings.NAME,
            "version": settings.VERSION,
            "liveConnections": len(registry),
        },
        message="Service is running",
    )
