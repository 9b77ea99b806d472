"""Per-request helpers shared by the v1 views."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from restoreviews.schemas.common import PaginationQuerySchema
from restoreviews.services._shared.base import ServiceContext

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(slots=True, frozen=True)
class Pagination:
    """Validated ``page``/``take``/``sort`` query arguments."""

    page: int
    take: int
    sort: list[str] = field(default_factory=list)


def parse_pagination() -> Pagination:
    """
    Load the listing arguments of the current request.

    ``take`` defaults to ``PAGINATION_DEFAULT_TAKE`` and is capped at
    ``PAGINATION_MAX_TAKE``.

    :raises marshmallow.ValidationError: On non-numeric or non-positive values.
    """
    cfg = current_app.config
    schema = PaginationQuerySchema(
        default_take=int(cfg.get("PAGINATION_DEFAULT_TAKE", 10)),
        max_take=int(cfg.get("PAGINATION_MAX_TAKE", 100)),
    )
    return Pagination(**schema.load(request.args))


def service_context() -> ServiceContext:
    """Describe the caller from the claims a guard left on ``g`` (anonymous if none)."""
    claims = g.get("claims")
    if claims is None:
        return ServiceContext(actor_id=None, actor_role=None, request_id=g.get("request_id"))
    return ServiceContext(
        actor_id=claims.subject_id, actor_role=claims.role, request_id=g.get("request_id")
    )


def json_response(payload: Any, *, status: int = 200) -> Response:
    response = jsonify(payload)
    response.status_code = status
    return response


def empty_response(status: int = 204) -> Response:
    return Response(status=status)


def timing(func: F) -> F:
    """Log the handler's wall time at DEBUG as ``request.elapsed``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            current_app.logger.debug(
                "request.elapsed",
                extra={
                    "endpoint": request.endpoint,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )

    return wrapper  # type: ignore[return-value]
