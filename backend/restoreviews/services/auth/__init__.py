from .dto import LoginIn, LoginOut, RegisterIn
from .service import AuthService

__all__ = ["AuthService", "LoginIn", "LoginOut", "RegisterIn"]
