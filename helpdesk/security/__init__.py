# helpdesk/security/__init__.py
from .jwt_util import JWTUtil, JWT_ALGORITHM

__all__ = ["JWTUtil", "JWT_ALGORITHM"]
