"""Helpers for free-text filtering."""

from __future__ import annotations


def contains_pattern(term: str) -> str:
    """Turn a search term into a LIKE pattern matching it literally anywhere.

    Use with ``escape="\\\\"``.
    """

    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
