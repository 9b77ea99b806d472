"""
Units of work over the Flask-SQLAlchemy session.

Both flavours bind to ``db.session()`` (the request's real
:class:`~sqlalchemy.orm.Session`, not the scoped proxy) so event listeners and
transaction checks target the object repositories actually use.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, SessionTransaction

from restoreviews.core.extensions import db
from restoreviews.repositories import (
    RestaurantRepository,
    ReviewRepository,
    UserRepository,
)
from restoreviews.uow.base import UnitOfWork


class _SessionBound(UnitOfWork):
    def __init__(self) -> None:
        self.session: Session = db.session()
        self.users = UserRepository(session=self.session)
        self.restaurants = RestaurantRepository(session=self.session)
        self.reviews = ReviewRepository(session=self.session)


class SQLAlchemyUnitOfWork(_SessionBound):
    """
    Read-write unit: commits when the block exits cleanly, rolls back otherwise.

    A failing commit (constraint violation at flush time...) is rolled back
    and re-raised for the service to translate.
    """

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(_SessionBound):
    """
    Read-only unit used by list and detail queries.

    * Starts (and later rolls back) its own transaction only when the session
      has none; inside an outer transaction, such as the per-test SAVEPOINT,
      it leaves that transaction alone.
    * Any flush carrying new, dirty or deleted objects raises ``RuntimeError``
      while the block is open.
    * :meth:`commit` always raises.
    """

    read_only = True

    def __init__(self) -> None:
        super().__init__()
        self._own_txn: SessionTransaction | None = None
        self._listening = False

    @staticmethod
    def _block_writes(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError("Read-only UnitOfWork: flush with pending changes blocked.")

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        if not self.session.in_transaction():
            self._own_txn = self.session.begin()
        event.listen(self.session, "before_flush", self._block_writes)
        self._listening = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._listening:
            event.remove(self.session, "before_flush", self._block_writes)
            self._listening = False
        self.rollback()

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork cannot commit.")

    def rollback(self) -> None:
        txn, self._own_txn = self._own_txn, None
        if txn is not None and txn.is_active:
            txn.rollback()
