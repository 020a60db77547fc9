from typing import Any, Dict, List, Optional
from fastapi import status, Request
from fastapi.responses import JSONResponse
from edupath.schemas.response_schemas import ApiResponse, ResponseStatus
from edupath.utils.context import get_request_id


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or get_request_id()


class ResponseBuilder:
    """Builder class for creating standardized responses"""

    @staticmethod
    def success(
        request: Request,
        data: Any = None,
        message: str = "Request successful",
        meta: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_200_OK,
    ) -> JSONResponse:
        """Create a success response"""
        response = ApiResponse(
            success=True,
            status=ResponseStatus.SUCCESS,
            message=message,
            data=data,
            meta=meta,
            path=str(request.url.path),
        )
        request_id = _request_id(request)
        if request_id:
            response.request_id = request_id
        return JSONResponse(
            status_code=status_code,
            content=response.model_dump(exclude_none=True),
        )

    @staticmethod
    def error(
        request: Request,
        message: str = "An error occurred",
        errors: Optional[List[Dict[str, Any]]] = None,
        error_code: Optional[str] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        data: Any = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """Create an error response"""
        response_meta = meta or {}
        if error_code:
            response_meta["error_code"] = error_code

        response = ApiResponse(
            success=False,
            status=ResponseStatus.ERROR,
            message=message,
            data=data,
            meta=response_meta if response_meta else None,
            errors=errors,
            path=str(request.url.path),
        )
        request_id = _request_id(request)
        if request_id:
            response.request_id = request_id
        return JSONResponse(
            status_code=status_code,
            content=response.model_dump(exclude_none=True),
        )
