"""Pointer-to-time conversion shared by the time creation handlers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
import math
from typing import Callable

from timegrid.interaction import PointerEvent
from timegrid.model.time_grid import TimeColumn


@dataclass(frozen=True)
class TimeSlotData:
    column: TimeColumn
    origin_event: PointerEvent
    mouse_y: float
    grid_y: float
    time_y: datetime
    nearest_grid_y: float
    nearest_grid_time_y: datetime
    trigger_event: str


@dataclass(frozen=True)
class TimeCreationRange:
    column: TimeColumn
    start: datetime
    end: datetime


class CoordinateResolver:
    """Maps pointer positions inside a column to times snapped to the grid."""

    def __init__(self, slot_minutes: int = 30) -> None:
        if slot_minutes <= 0 or 60 % slot_minutes:
            raise ValueError("slot_minutes must evenly divide an hour")
        self._slot_minutes = slot_minutes

    @property
    def slot_minutes(self) -> int:
        return self._slot_minutes

    @property
    def slot(self) -> timedelta:
        return timedelta(minutes=self._slot_minutes)

    def grid_y(self, column: TimeColumn, mouse_y: float) -> float:
        hours = column.hour_length * mouse_y / column.height
        return min(max(hours, 0.0), float(column.hour_length))

    def nearest_grid_y(self, column: TimeColumn, grid_y: float) -> float:
        slots_per_hour = 60 // self._slot_minutes
        index = math.floor(grid_y * slots_per_hour)
        # the bottom edge belongs to the last slot
        index = min(index, column.hour_length * slots_per_hour - 1)
        return index / slots_per_hour

    def retrieve_schedule_data(
        self, column: TimeColumn
    ) -> Callable[[PointerEvent], TimeSlotData]:
        start_time = column.start_time

        def get_schedule_data(event: PointerEvent) -> TimeSlotData:
            mouse_y = event.y - column.top
            grid_y = self.grid_y(column, mouse_y)
            nearest = self.nearest_grid_y(column, grid_y)
            return TimeSlotData(
                column=column,
                origin_event=event,
                mouse_y=mouse_y,
                grid_y=grid_y,
                time_y=start_time + timedelta(hours=grid_y),
                nearest_grid_y=nearest,
                nearest_grid_time_y=start_time + timedelta(hours=nearest),
                trigger_event=event.kind,
            )

        return get_schedule_data

    def creation_range(self, start: TimeSlotData, end: TimeSlotData) -> TimeCreationRange:
        first, last = sorted((start.nearest_grid_time_y, end.nearest_grid_time_y))
        return TimeCreationRange(column=start.column, start=first, end=last + self.slot)
