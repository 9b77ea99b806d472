"""RFC 7807 error envelope and the Flask handlers that produce it.

Every failure leaving the API is rendered as ``application/problem+json`` with
a stable ``code`` and the request's correlation id. Service-layer errors are
mapped to HTTP by ``BaseService.translate_exceptions``; database and schema
errors are mapped here.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from restoreviews.core.logger import ensure_request_id

log = logging.getLogger(__name__)

#: Stable machine codes for bare HTTP statuses.
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    500: "internal_server_error",
    503: "service_unavailable",
}


def build_problem(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Assemble a Problem Details body for the current request.

    :param status: HTTP status code.
    :param code: Machine-readable error code.
    :param message: Client-safe summary, used as ``detail``.
    :param details: Optional structured payload (validation messages...).
    :returns: JSON-ready mapping.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def problem_response(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    *,
    exc_info: bool = False,
) -> tuple[Response, int]:
    """Build, log and return a problem response (5xx at ERROR, the rest at WARNING)."""
    problem = build_problem(status, code, message, details)
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "request.failed code=%s status=%s detail=%s",
        code,
        status,
        message,
        extra={"path": problem["instance"]},
        exc_info=exc_info,
    )
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp, int(status)


class APIError(Exception):
    """
    An error carrying its own HTTP status and machine code.

    Parameters
    ----------
    message : str
        Client-safe description.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str, optional
        snake_case identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Structured context included in the body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return build_problem(self.status_code, self.code, self.message, self.details or None)


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class Unauthorized(APIError):
    """Missing, malformed, forged or expired session token."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class Forbidden(APIError):
    """Authenticated, but not allowed to touch the resource."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN, code="forbidden")


def init_app(app: Flask) -> None:
    """Register the problem+json handlers on ``app``."""
    from restoreviews.models.base import ModelValidationError
    from restoreviews.services._shared.base import BaseService
    from restoreviews.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return problem_response(err.status_code, err.code, err.message, err.details or None)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if isinstance(translated, APIError):
            return handle_api_error(translated)
        return handle_unexpected_error(err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            # Werkzeug descriptions may contain markup-ish text
            message = (err.description or code.replace("_", " ").capitalize()).strip()
        return problem_response(status, code, message)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        return problem_response(
            HTTPStatus.BAD_REQUEST,
            "validation_error",
            "Validation failed",
            {"errors": err.normalized_messages()},
        )

    # Other ``ValueError``s fall through to the generic 500 handler.
    @app.errorhandler(ModelValidationError)
    def handle_model_validation_error(err: ModelValidationError):
        return problem_response(
            HTTPStatus.BAD_REQUEST, "validation_error", str(err) or "Validation failed"
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        return problem_response(
            HTTPStatus.CONFLICT, "conflict", "Resource conflict", exc_info=True
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
            exc_info=True,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "Unexpected error",
            exc_info=True,
        )


__all__ = [
    "APIError",
    "Conflict",
    "Forbidden",
    "NotFound",
    "STATUS_CODES",
    "Unauthorized",
    "build_problem",
    "init_app",
    "problem_response",
]
