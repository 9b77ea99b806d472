"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from restoreviews.services._shared.pagination import Page

# Keeps ``(page - 1) * take`` inside a 64-bit OFFSET for any capped ``take``.
MAX_PAGE = 2**31 - 1


class PaginationQuerySchema(Schema):
    """Validate ``page``/``take``/``sort`` query parameters with configurable defaults.

    ``sort`` is comma-separated; a leading ``-`` means descending. Other query
    parameters are ignored.
    """

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_take: int = 10, max_take: int = 100, **kwargs: Any) -> None:
        self._default_take = default_take
        self._max_take = max_take
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1, max=MAX_PAGE))
    take = fields.Integer(validate=validate.Range(min=1))
    sort = fields.String(load_default="")

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.get("sort") or ""
        data["sort"] = [segment.strip() for segment in raw.split(",") if segment.strip()]
        take = data.get("take", self._default_take)
        data["take"] = min(max(take, 1), self._max_take)
        data.setdefault("page", 1)
        return data


class PageMetaSchema(Schema):
    """Metadata block of a paginated response."""

    total_count = fields.Integer(required=True, data_key="totalCount")
    page = fields.Integer(required=True)
    take = fields.Integer(required=True)
    page_count = fields.Integer(required=True, data_key="pageCount")


_page_meta_schema = PageMetaSchema()


def dump_page(page: Page[Any], item_schema: Schema) -> dict[str, Any]:
    """Serialize a :class:`Page` as ``{items, totalCount, page, take, pageCount}``.

    :param page: Page returned by a service.
    :type page: Page
    :param item_schema: Schema used for each item (``many`` is not required).
    :type item_schema: marshmallow.Schema
    :returns: JSON-ready mapping.
    :rtype: dict
    """
    body: dict[str, Any] = {"items": item_schema.dump(page.items, many=True)}
    body.update(_page_meta_schema.dump(page))
    return body
