"""Ordered views over registry contents."""

from .base import (
    IdentifierView,
    InsertionOrderView,
    PriorityView,
    SortCriteria,
    SortOrder,
    TasksView,
    UnsupportedOrdering,
    view_for,
)

__all__ = [
    "SortCriteria",
    "SortOrder",
    "TasksView",
    "InsertionOrderView",
    "IdentifierView",
    "PriorityView",
    "UnsupportedOrdering",
    "view_for",
]
