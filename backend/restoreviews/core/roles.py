"""Account roles shared by the models, the token claims and the route guards."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role enumeration aligned with the ``enum_role`` DB type."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Return the wire values in declaration order."""
        return [member.value for member in cls]
