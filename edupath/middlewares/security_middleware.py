from typing import Callable, Dict, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class _SecurityHeadersMiddleware(BaseHTTPMiddleware):
    default_headers: Dict[str, str] = {}

    def __init__(self, app, custom_headers: Optional[Dict[str, str]] = None):
        super().__init__(app)
        self.headers = {**self.default_headers, **(custom_headers or {})}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for header_name, header_value in self.headers.items():
            response.headers[header_name] = header_value

        return response


class ProdSecurityMiddleware(_SecurityHeadersMiddleware):
    default_headers = {
        # Prevent clickjacking attacks
        "X-Frame-Options": "DENY",
        # Prevent MIME type sniffing
        "X-Content-Type-Options": "nosniff",
        # Strict transport security (HTTPS only)
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        # The API serves JSON only; the socket endpoint needs wss: for the client
        "Content-Security-Policy": "default-src 'none'; connect-src 'self' wss:; frame-ancestors 'none';",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Permissions-Policy": "camera=(), microphone=(), geolocation=(), payment=()",
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
    }


class DevSecurityMiddleware(_SecurityHeadersMiddleware):
    # More permissive so the interactive docs and a local client keep working
    default_headers = {
        "X-Frame-Options": "SAMEORIGIN",
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Content-Security-Policy": "default-src 'self' 'unsafe-inline' 'unsafe-eval' https:; img-src 'self' data: https: http:; connect-src 'self' ws: wss:;",
    }
