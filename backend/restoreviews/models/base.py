"""Column mixins and the validation error shared by ``User``, ``Restaurant`` and ``Review``."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class ModelValidationError(ValueError):
    """A field value was rejected by a model validator; the message is client-safe."""


class PKMixin:
    """Integer surrogate key ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """
    Database-maintained ``created_at``/``updated_at`` (timezone-aware).

    Both default to ``now()`` on insert; ``updated_at`` is bumped on every ORM
    update of the row.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class ReprMixin:
    """``<Restaurant id=3 name='Casa Lola'>``-style reprs for logs and debugging.

    Set ``__repr_label__`` to the attribute shown after the id; it must never
    be a secret (password hashes, tokens).
    """

    __repr_label__: ClassVar[str | None] = None

    def __repr__(self) -> str:
        parts = [f"id={getattr(self, 'id', None)}"]
        if self.__repr_label__:
            parts.append(f"{self.__repr_label__}={getattr(self, self.__repr_label__, None)!r}")
        return f"<{type(self).__name__} {' '.join(parts)}>"
