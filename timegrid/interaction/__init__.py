"""Pointer payloads and gesture-source contract for the time-grid handlers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from timegrid.model.time_grid import GridElement


@dataclass
class PointerEvent:
    pos: tuple[float, float]
    kind: str = "mousemove"
    button: Optional[str] = None

    @property
    def y(self) -> float:
        return self.pos[1]


@dataclass
class GestureEvent:
    """Normalized signal from the drag-gesture source."""

    target: Optional[GridElement]
    origin_event: PointerEvent


class GestureSource(Protocol):
    def on(self, event: Any, handler: Optional[Callable[..., Any]] = None, context: Any = None) -> None:
        ...

    def off(self, target: Any = None, context: Any = None) -> None:
        ...
