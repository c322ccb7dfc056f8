"""Sort keys and paging rules shared by the question and answer listings."""
import enum
from dataclasses import dataclass, field
from typing import Any

from flask import current_app

from devflow.errors import ValidationError


class QuestionFilter(enum.Enum):
    NEWEST = "newest"
    FREQUENT = "frequent"
    UNANSWERED = "unanswered"


class AnswerSort(enum.Enum):
    HIGHEST_UPVOTES = "highestUpvotes"
    LOWEST_UPVOTES = "lowestUpvotes"
    RECENT = "recent"
    OLD = "old"


@dataclass
class Page:
    items: list[Any] = field(default_factory=list)
    has_next: bool = False
    total: int = 0
    page: int = 1
    page_size: int = 0


def parse_key(enum_cls, value):
    """Map a raw sort/filter string onto ``enum_cls``.

    ``None`` and ``""`` mean "no sort"; anything else that is not a member is
    rejected instead of silently ignored.
    """
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Unknown sort key '{value}'. Expected one of: {allowed}.")


def _as_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer.")


def normalize_paging(page, page_size, default_size: int) -> tuple[int, int]:
    page = 1 if page is None else _as_int(page, "page")
    page_size = default_size if page_size is None else _as_int(page_size, "page_size")

    # page 0 and below behave like the first page
    page = max(page, 1)
    if page_size < 1:
        raise ValidationError("page_size must be a positive integer.")
    max_size = current_app.config.get("MAX_PAGE_SIZE", 100)
    if page_size > max_size:
        raise ValidationError(f"page_size must not exceed {max_size}.")
    return page, page_size


def paginate(query, page: int, page_size: int) -> Page:
    pagination = query.paginate(page=page, per_page=page_size, error_out=False, count=True)
    skip = (page - 1) * page_size
    items = list(pagination.items)
    return Page(
        items=items,
        has_next=pagination.total > skip + len(items),
        total=pagination.total,
        page=page,
        page_size=page_size,
    )
