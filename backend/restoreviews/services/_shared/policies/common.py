"""Pure ownership and role predicates shared by services."""

from __future__ import annotations

from typing import Any

from restoreviews.core.roles import Role


def is_owner(*, actor_id: int | None, owner_id: Any) -> bool:
    """``True`` when ``actor_id`` identifies the owner (``"7"`` and ``7`` match)."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def is_admin(role: Role | str | None) -> bool:
    try:
        return Role(role) is Role.ADMIN
    except ValueError:
        return False
