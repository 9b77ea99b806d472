"""Persistence-only base repository over SQLAlchemy 2.x ``select()``.

Repositories never commit or roll back; the unit of work that created them
owns the transaction. Everything a client can influence (sort keys, filter
keys, updated columns) goes through per-repository whitelists declared as
class attributes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from restoreviews.core.extensions import db
from restoreviews.services._shared.pagination import Page, paginate

E = TypeVar("E")


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """
    Split public sort tokens into ``(key, descending)`` pairs.

    ``["-average_rating", " name "]`` gives
    ``[("average_rating", True), ("name", False)]``; blank tokens are dropped.
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        token = token.strip()
        descending = token.startswith("-")
        key = token.lstrip("-").strip()
        if key:
            parsed.append((key, descending))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    columns: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    tiebreaker: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """
    Add ``ORDER BY`` clauses for the whitelisted keys in ``tokens``.

    Unknown keys are skipped. ``tiebreaker`` (normally the primary key) is
    always ordered last so equal sort values still page deterministically.
    """
    clauses = [
        columns[key].desc() if descending else columns[key].asc()
        for key, descending in parse_sort_tokens(tokens)
        if key in columns
    ]
    if tiebreaker is not None:
        clauses.append(tiebreaker.asc())
    return stmt.order_by(*clauses) if clauses else stmt


def paginate_select(session: Session, stmt: Select[Any], *, page: int, take: int) -> Page[Any]:
    """
    Run ``stmt`` as one page plus a ``COUNT(*)`` of every matching row.

    The count drops the ``ORDER BY``. Both queries share the session but not
    necessarily a snapshot, so the total may lag the slice under concurrent
    writes.

    :param session: Session executing both queries.
    :type session: :class:`sqlalchemy.orm.Session`
    :param stmt: Filtered and ordered select of one entity.
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param page: Requested 1-based page.
    :type page: int
    :param take: Requested page size.
    :type take: int
    :rtype: Page
    """
    total = session.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()
    window = paginate(total, page, take)
    rows = session.execute(stmt.offset(window.skip).limit(window.take)).scalars().all()
    return Page(
        items=list(rows),
        total_count=int(total),
        page=window.page,
        take=window.take,
        page_count=window.page_count,
    )


class BaseRepository(Generic[E]):
    """
    CRUD and listing for one mapped model.

    Subclasses set :attr:`model` and whichever whitelists they need:

    ``sortable``
        Public sort key -> model attribute name. Several keys may point at
        the same column (``averageRating`` and ``average_rating``).
    ``filterable``
        Attribute names accepted as equality filters; others are ignored.
    ``updatable``
        Attribute names :meth:`update` may assign; others raise ``ValueError``.
    """

    model: type[E]
    sortable: ClassVar[Mapping[str, str]] = {"id": "id"}
    filterable: ClassVar[frozenset[str]] = frozenset()
    updatable: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The injected session, falling back to the Flask-scoped one."""
        return self._session if self._session is not None else cast(Session, db.session)

    # ------------------------------- Columns ---------------------------------

    def _column(self, name: str) -> InstrumentedAttribute[Any]:
        return cast(InstrumentedAttribute[Any], getattr(self.model, name))

    @property
    def _pk(self) -> InstrumentedAttribute[Any]:
        return self._column("id")

    def _sort_columns(self) -> dict[str, InstrumentedAttribute[Any]]:
        return {key: self._column(attr) for key, attr in self.sortable.items()}

    def _where(self, stmt: Select[Any], filters: Mapping[str, Any] | None) -> Select[Any]:
        for key, value in (filters or {}).items():
            if key in self.filterable and value is not None:
                stmt = stmt.where(self._column(key) == value)
        return stmt

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        return self.session.execute(
            select(self.model).where(self._pk == entity_id)
        ).scalar_one_or_none()

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get`, with ``SELECT ... FOR UPDATE`` where the backend supports it."""
        return self.session.execute(
            select(self.model).where(self._pk == entity_id).with_for_update()
        ).scalar_one_or_none()

    def exists(self, **filters: Any) -> bool:
        """``True`` when a row matches the whitelisted equality ``filters``."""
        stmt = self._where(select(self._pk), filters).limit(1)
        return self.session.execute(stmt).first() is not None

    def update(self, instance: E, **changes: Any) -> E:
        """
        Assign ``changes`` through ``setattr`` (model validators run) and flush.

        :raises ValueError: If a key is not in :attr:`updatable`.
        """
        rejected = sorted(set(changes) - self.updatable)
        if rejected:
            raise ValueError(f"Unknown or non-updatable fields: {rejected}")
        for key, value in changes.items():
            setattr(instance, key, value)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    # ------------------------------- Listing ---------------------------------

    def paginate(
        self,
        *,
        page: int,
        take: int,
        sort: Iterable[str] | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> Page[E]:
        """
        One page of rows ordered by ``sort`` (then by id).

        :param page: 1-based page number.
        :type page: int
        :param take: Page size.
        :type take: int
        :param sort: Public sort tokens, ``-`` prefix for descending.
        :type sort: Iterable[str] | None
        :param filters: Equality filters keyed by attribute name.
        :type filters: Mapping[str, Any] | None
        :rtype: Page[E]
        """
        stmt = self._where(select(self.model), filters)
        stmt = apply_sorting(stmt, self._sort_columns(), sort or (), tiebreaker=self._pk)
        return cast(Page[E], paginate_select(self.session, stmt, page=page, take=take))


__all__ = ["BaseRepository", "apply_sorting", "paginate_select", "parse_sort_tokens"]
