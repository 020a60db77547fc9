from .request_id_middleware import RequestIDMiddleware
from .security_middleware import DevSecurityMiddleware, ProdSecurityMiddleware
from .auth_middleware import AuthState, get_current_user, require_admin, require_student

__all__ = [
    "RequestIDMiddleware",
    "DevSecurityMiddleware",
    "ProdSecurityMiddleware",
    "AuthState",
    "get_current_user",
    "require_admin",
    "require_student",
]
