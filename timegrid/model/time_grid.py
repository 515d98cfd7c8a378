"""Column registry and element tree consumed by the time interaction handlers."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from timegrid.events import EventHub


@dataclass
class GridElement:
    """Node of the rendered grid: a class string and an optional parent."""

    class_name: str = ""
    parent: Optional["GridElement"] = None


@dataclass
class TimeColumn:
    """One vertical lane of the grid (a single day).

    ``top`` and ``height`` are expressed in the same coordinate space as the
    pointer events delivered by the gesture source.
    """

    view_id: str
    date: datetime
    top: float
    height: float
    hour_start: int = 0
    hour_end: int = 24

    def __post_init__(self) -> None:
        if not 0 <= self.hour_start < self.hour_end <= 24:
            raise ValueError(
                f"Invalid hour range {self.hour_start}-{self.hour_end} for column {self.view_id}"
            )
        if self.height <= 0:
            raise ValueError(f"Column {self.view_id} must have a positive height")

    @property
    def hour_length(self) -> int:
        return self.hour_end - self.hour_start

    @property
    def start_time(self) -> datetime:
        day = self.date.replace(hour=0, minute=0, second=0, microsecond=0)
        return day + timedelta(hours=self.hour_start)


@dataclass
class TimeGrid:
    """Registry of columns keyed by view id plus the grid container events."""

    children: dict[str, TimeColumn] = field(default_factory=dict)
    container: EventHub = field(default_factory=EventHub)

    def add_column(self, column: TimeColumn) -> None:
        self.children[column.view_id] = column
