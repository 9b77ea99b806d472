from .dto import UserCreateIn, UserPublicOut, UserUpdateIn
from .service import UserService

__all__ = ["UserCreateIn", "UserPublicOut", "UserService", "UserUpdateIn"]
