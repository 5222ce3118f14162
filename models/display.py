from __future__ import annotations
from typing import Dict, Union

from models.events import EventStatus
from models.orders import OrderStatus

Status = Union[EventStatus, OrderStatus]

# Keyed by wire value so event and order statuses share one table.
_TITLES: Dict[str, str] = {
    "submitted": "Submitted",
    "routed": "Routed",
    "partially_filled": "Partially Completed",
    "filled": "Completed",
    "cancelled": "Cancelled",
    "rejected": "Rejected",
}

# rich colour names
_COLORS: Dict[str, str] = {
    "submitted": "blue",
    "routed": "orange1",
    "partially_filled": "yellow",
    "filled": "green",
    "cancelled": "red",
    "rejected": "grey50",
}


def status_title(status: Status) -> str:
    """User-facing title for a status, e.g. filled -> "Completed"."""
    return _TITLES[status.value]


def status_color(status: Status) -> str:
    return _COLORS[status.value]


def status_markup(status: Status) -> str:
    """Rich markup rendering of a status: its title in its colour."""
    color = status_color(status)
    return f"[{color}]{status_title(status)}[/{color}]"
