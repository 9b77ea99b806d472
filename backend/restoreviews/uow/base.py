"""The unit-of-work contract services program against."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from restoreviews.repositories import (
        RestaurantRepository,
        ReviewRepository,
        UserRepository,
    )


class UnitOfWork(ABC):
    """
    One transactional boundary for one use case.

    Used as a context manager. The three repositories share the unit's session,
    so everything a use case reads and writes lands in a single transaction.
    Read-only units (``read_only = True``) refuse to persist anything.
    """

    read_only: ClassVar[bool] = False

    users: UserRepository
    restaurants: RestaurantRepository
    reviews: ReviewRepository

    def __enter__(self) -> UnitOfWork:
        return self

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
