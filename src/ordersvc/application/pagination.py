"""Translate page/limit requests into skip/take windows."""

from __future__ import annotations

from dataclasses import dataclass

from ordersvc.domain.exceptions import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class Page:
    skip: int
    take: int
    last_page: int


def check_window(page: int, limit: int) -> None:
    """Reject a page or limit below 1."""
    if page < 1:
        raise ValidationError("Page must be 1 or greater")
    if limit < 1:
        raise ValidationError("Limit must be 1 or greater")


def paginate(page: int, limit: int, total: int) -> Page:
    """Return the window for *page* of size *limit* over *total* rows.

    ``last_page`` is 0 when there are no rows at all.
    """
    check_window(page, limit)
    return Page(
        skip=(page - 1) * limit,
        take=limit,
        last_page=-(-total // limit),
    )
