"""
restoreviews.services._shared.ports
===================================

*Ports* (hexagonal interfaces) that the service layer depends on.

Modules
-------
- :mod:`token_service`:
    Defines :class:`~.TokenService`, which issues and verifies session
    tokens, plus the :class:`~.Identity` and :class:`~.SessionClaims`
    value objects exchanged with it.

Concrete adapters live under ``restoreviews.infra``.
"""

from __future__ import annotations

from .token_service import Identity, SessionClaims, TokenService

__all__ = [
    "Identity",
    "SessionClaims",
    "TokenService",
]
