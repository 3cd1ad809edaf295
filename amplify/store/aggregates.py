"""Amplify: Aggregate column specs.

An aggregate spec maps output names to one of these, e.g.::

    {"likes": count_where("type", "like"), "total_engagement": count_all()}

The store turns each into a single SQL expression so the whole spec is one
group-free query returning one row.
"""

from typing import Any, NamedTuple, Optional


class Aggregate(NamedTuple):
    kind: str  # "count" | "count_where" | "count_present" | "sum"
    field: Optional[str] = None
    value: Any = None


def count_all() -> Aggregate:
    return Aggregate("count")


def count_where(field: str, value: Any) -> Aggregate:
    """Rows where ``field == value``."""
    return Aggregate("count_where", field, value)


def count_present(field: str) -> Aggregate:
    """Rows where ``field`` is not null."""
    return Aggregate("count_present", field)


def sum_of(field: str) -> Aggregate:
    """Sum of ``field``; 0 over an empty set."""
    return Aggregate("sum", field)
