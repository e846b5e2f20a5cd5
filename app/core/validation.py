# ============================================================================
# FILE: app/core/validation.py
# Input normalization shared by every endpoint
# ============================================================================
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Type, TypeVar
from pydantic import BaseModel, ValidationError
from app.config import settings
from app.core.exceptions import InvalidArgument
import re

ModelT = TypeVar("ModelT", bound=BaseModel)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

SORT_DIRECTIONS = {"asc": False, "desc": True}


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.match(value))


def validate_object_id(value: Any, label: str = "id") -> str:
    """Return the normalized id or fail before the store is touched"""
    if not is_valid_object_id(value):
        raise InvalidArgument(f"Please provide a valid {label}")
    return value.lower()


def require_text(value: Optional[str], label: str) -> str:
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise InvalidArgument(f"{label} is required")
    return cleaned


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _parse_positive_int(raw: Any, default: int, label: str) -> int:
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise InvalidArgument(f"Please provide a valid {label}")
    if value < 1:
        raise InvalidArgument(f"{label} must be greater than or equal to 1")
    return value


def parse_pagination(page: Any = None, limit: Any = None, default_limit: Optional[int] = None) -> Pagination:
    """
    Normalize raw page/limit query values

    Missing values fall back to page 1 and the default limit.
    Non-numeric, non-positive or oversized values are rejected.
    """
    default_limit = default_limit or settings.DEFAULT_PAGE_LIMIT
    page_value = _parse_positive_int(page, 1, "page")
    limit_value = _parse_positive_int(limit, default_limit, "limit")
    if limit_value > settings.MAX_PAGE_LIMIT:
        raise InvalidArgument(f"limit must not exceed {settings.MAX_PAGE_LIMIT}")
    return Pagination(page=page_value, limit=limit_value)


def parse_sort(
    sort_by: Optional[str],
    sort_type: Optional[str],
    allowed: Mapping[str, Any],
    default: str = "createdAt",
) -> Tuple[Any, bool]:
    """Map a public sort key and direction onto (column, descending)"""
    key = optional_text(sort_by) or default
    if key not in allowed:
        raise InvalidArgument(f"sortBy must be one of: {', '.join(sorted(allowed))}")
    direction = (optional_text(sort_type) or "desc").lower()
    if direction not in SORT_DIRECTIONS:
        raise InvalidArgument("sortType must be either 'asc' or 'desc'")
    return allowed[key], SORT_DIRECTIONS[direction]


def validate_payload(schema: Type[ModelT], **fields: Any) -> ModelT:
    """Build a schema from loose form fields, surfacing failures as InvalidArgument"""
    try:
        return schema(**fields)
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        message = f"{errors[0]['field']}: {errors[0]['message']}" if errors else None
        raise InvalidArgument(message, errors=errors)
