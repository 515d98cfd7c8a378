"""Preview state for a time entry that is being created."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from PyQt5 import QtCore

from timegrid.interaction.time_core import TimeSlotData
from timegrid.model.time_grid import TimeColumn

if TYPE_CHECKING:
    from timegrid.interaction.mouse_move import TimeMouseMoveController


@dataclass(frozen=True)
class GuidePreview:
    column: TimeColumn
    start: datetime
    end: datetime


class TimeCreationGuide(QtCore.QObject):
    """Tracks the preview block shown while a time entry is being created.

    Rendering is left to whoever listens to ``previewChanged``.
    """

    previewChanged = QtCore.pyqtSignal(object)

    def __init__(self, controller: "TimeMouseMoveController") -> None:
        super().__init__()
        self._controller: Optional["TimeMouseMoveController"] = controller
        self._preview: GuidePreview | None = None
        self._drag_start: TimeSlotData | None = None
        controller.on(
            {
                "timeCreationDragstart": self._on_drag_start,
                "timeCreationDrag": self._on_drag,
                "timeCreationClick": self._on_click,
            },
            context=self,
        )

    @property
    def preview(self) -> GuidePreview | None:
        return self._preview

    def clear_guide_element(self) -> None:
        if self._preview is None:
            return
        self._preview = None
        self.previewChanged.emit(None)

    def destroy(self) -> None:
        self.clear_guide_element()
        self._drag_start = None
        if self._controller is not None:
            self._controller.off(self)
            self._controller = None

    def _show(self, first: TimeSlotData, second: TimeSlotData) -> None:
        if self._controller is None:
            return
        span = self._controller.resolver.creation_range(first, second)
        preview = GuidePreview(span.column, span.start, span.end)
        if preview == self._preview:
            return
        self._preview = preview
        self.previewChanged.emit(preview)

    def _on_drag_start(self, data: TimeSlotData) -> None:
        self._drag_start = data
        self._show(data, data)

    def _on_drag(self, data: TimeSlotData) -> None:
        if self._drag_start is None:
            return
        self._show(self._drag_start, data)

    def _on_click(self, data: TimeSlotData) -> None:
        self._drag_start = None
        self._show(data, data)
