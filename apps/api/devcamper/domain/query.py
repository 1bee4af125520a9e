"""List query parsing: filtering, field selection, sorting and pagination."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import re
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
MAX_LIMIT = 100
DEFAULT_SORT: tuple[tuple[str, int], ...] = (("created_at", -1),)

_RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit"})
_OPERATOR_KEY = re.compile(r"^(?P<field>[A-Za-z0-9_.]+)\[(?P<op>gt|gte|lt|lte|in|nin|ne)\]$")
_FIELD_KEY = re.compile(r"^[A-Za-z0-9_.]+$")
_LIST_OPERATORS = frozenset({"in", "nin"})
# Leading zeros stay strings so postal codes like "02118" survive.
_INT_PATTERN = re.compile(r"^-?(0|[1-9]\d*)$")
_FLOAT_PATTERN = re.compile(r"^-?(0|[1-9]\d*)\.\d+$")

# Fields compared as stored strings, never coerced.
BOOTCAMP_TEXT_FIELDS = frozenset(
    {
        "id",
        "user",
        "name",
        "slug",
        "description",
        "website",
        "phone",
        "email",
        "photo",
        "location.formatted_address",
        "location.street",
        "location.city",
        "location.state",
        "location.zipcode",
        "location.country",
    }
)
COURSE_TEXT_FIELDS = frozenset({"id", "user", "bootcamp", "title", "description", "weeks"})
REVIEW_TEXT_FIELDS = frozenset({"id", "user", "bootcamp", "title", "text"})
USER_TEXT_FIELDS = frozenset({"id", "name", "email"})
USER_HIDDEN_FIELDS = frozenset({"password_hash"})


@dataclass(frozen=True, slots=True)
class ListQuery:
    filter: dict[str, Any] = field(default_factory=dict)
    select: tuple[str, ...] = ()
    sort: tuple[tuple[str, int], ...] = DEFAULT_SORT
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def coerce_scalar(value: str) -> Any:
    """Best-effort conversion of a query-string value to a typed scalar."""
    text = value.strip()
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_PATTERN.match(text):
        return int(text)
    if _FLOAT_PATTERN.match(text):
        return float(text)
    return text


def _positive_int(raw: str | None, default: int, *, maximum: int | None = None) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value < 1:
        return default
    if maximum is not None:
        value = min(value, maximum)
    return value


def _parse_fields(raw: str, hidden: frozenset[str] = frozenset()) -> tuple[str, ...]:
    fields = []
    for part in raw.split(","):
        name = part.strip()
        bare = name.lstrip("-")
        if name and _FIELD_KEY.match(bare) and bare not in hidden:
            fields.append(name)
    return tuple(fields)


def _parse_sort(raw: str | None, hidden: frozenset[str] = frozenset()) -> tuple[tuple[str, int], ...]:
    if not raw:
        return DEFAULT_SORT
    sort = tuple((name.lstrip("-"), -1 if name.startswith("-") else 1) for name in _parse_fields(raw, hidden))
    return sort or DEFAULT_SORT


def parse_list_query(
    params: Iterable[tuple[str, str]],
    *,
    text_fields: frozenset[str] = frozenset(),
    hidden_fields: frozenset[str] = frozenset(),
) -> ListQuery:
    """Build a ListQuery from raw query-string pairs.

    Supported forms::

        ?careers=Business&housing=true        equality filters
        ?average_cost[lte]=10000              comparison operators
        ?careers[in]=Business,Other           membership
        ?select=name,description&sort=-name   projection and ordering
        ?page=2&limit=10                      pagination

    Keys carrying ``$`` or other unexpected characters are ignored. Values for
    ``text_fields`` keep their raw text; ``hidden_fields`` cannot be filtered,
    selected or sorted on.
    """
    filters: dict[str, Any] = {}
    reserved: dict[str, str] = {}

    def convert(name: str, value: str) -> Any:
        if name in text_fields:
            return value.strip()
        return coerce_scalar(value)

    for key, value in params:
        if key in _RESERVED_PARAMS:
            reserved[key] = value
            continue

        operator_match = _OPERATOR_KEY.match(key)
        if operator_match is not None:
            name = operator_match.group("field")
            op = operator_match.group("op")
            if name in hidden_fields:
                continue
            if op in _LIST_OPERATORS:
                operand: Any = [convert(name, item) for item in value.split(",") if item.strip()]
            else:
                operand = convert(name, value)
            existing = filters.get(name)
            clause = existing if isinstance(existing, dict) else {}
            clause[f"${op}"] = operand
            filters[name] = clause
            continue

        if _FIELD_KEY.match(key) and key not in hidden_fields:
            filters[key] = convert(key, value)

    return ListQuery(
        filter=filters,
        select=_parse_fields(reserved.get("select", ""), hidden_fields),
        sort=_parse_sort(reserved.get("sort"), hidden_fields),
        page=_positive_int(reserved.get("page"), DEFAULT_PAGE),
        limit=_positive_int(reserved.get("limit"), DEFAULT_LIMIT, maximum=MAX_LIMIT),
    )


def build_pagination(*, page: int, limit: int, total: int) -> dict[str, dict[str, int]]:
    pagination: dict[str, dict[str, int]] = {}
    if page * limit < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if page > 1:
        pagination["prev"] = {"page": page - 1, "limit": limit}
    return pagination


def project(document: Mapping[str, Any], select: tuple[str, ...]) -> dict[str, Any]:
    """Keep only the selected top-level fields; ``id`` is always kept."""
    if not select:
        return dict(document)
    keep = {"id", *select}
    return {key: value for key, value in document.items() if key in keep}
