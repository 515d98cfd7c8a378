"""Click and drag creation of time entries on the time grid."""
from __future__ import annotations

import logging
from typing import Any, Callable, Literal, Optional, Union

from PyQt5 import QtCore

from timegrid.config import SCHEDULE_BLOCK_WRAP, InteractionSettings
from timegrid.events import EventHub, Handler
from timegrid.interaction import GestureEvent, GestureSource
from timegrid.interaction.creation_guide import TimeCreationGuide
from timegrid.interaction.time_core import CoordinateResolver, TimeSlotData
from timegrid.model.time_grid import GridElement, TimeColumn, TimeGrid

log = logging.getLogger(__name__)


class TimeMouseMoveController(QtCore.QObject):
    """Turns gesture signals over the time grid into creation intents.

    A ``mousemove`` over a column arms a click confirmation that fires
    ``timeCreationClick`` on the next event-loop turn unless a ``dragStart``
    or ``drag`` signal arrives first. A drag that starts over a column emits
    ``timeCreationDragstart``, ``timeCreationDrag`` and, on release,
    ``timeCreation`` with the dragged range.
    """

    intentEmitted = QtCore.pyqtSignal(str, object)

    def __init__(
        self,
        drag_handler: GestureSource,
        time_grid: TimeGrid,
        base_controller: Any,
        *,
        settings: InteractionSettings | None = None,
        resolver: CoordinateResolver | None = None,
        guide_factory: Callable[["TimeMouseMoveController"], TimeCreationGuide] = TimeCreationGuide,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or InteractionSettings()
        self._resolver = resolver or CoordinateResolver(self._settings.slot_minutes)
        self._drag_handler: Optional[GestureSource] = drag_handler
        self._time_grid: Optional[TimeGrid] = time_grid
        self._base_controller = base_controller
        self._events = EventHub()
        self._closed = False

        # single drag session scratch, both set or both None
        self._get_schedule_data_func: Optional[Callable[..., TimeSlotData]] = None
        self._drag_start: TimeSlotData | None = None

        self._request_on_click = False
        self._pending_click: TimeSlotData | None = None
        self._click_timer = QtCore.QTimer(self)
        self._click_timer.setSingleShot(True)
        self._click_timer.setInterval(self._settings.click_delay_ms)
        self._click_timer.timeout.connect(self._on_click_timeout)

        self._guide: Optional[TimeCreationGuide] = guide_factory(self)

        drag_handler.on("mousemove", self._on_mouse_move, self)
        drag_handler.on("dragStart", self._on_click, self)
        drag_handler.on("drag", self._on_click, self)
        drag_handler.on("dragStart", self._on_drag_start, self)
        if self._settings.dblclick_create:
            time_grid.container.on("dblclick", self._on_dbl_click, self)

    @property
    def settings(self) -> InteractionSettings:
        return self._settings

    @property
    def resolver(self) -> CoordinateResolver:
        return self._resolver

    @property
    def guide(self) -> Optional[TimeCreationGuide]:
        return self._guide

    @property
    def base_controller(self) -> Any:
        return self._base_controller

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def click_pending(self) -> bool:
        return self._request_on_click

    def on(
        self,
        event: Union[str, dict[str, Handler]],
        handler: Optional[Handler] = None,
        context: Any = None,
    ) -> None:
        if self._closed:
            return
        self._events.on(event, handler, context)

    def off(self, target: Any = None, context: Any = None) -> None:
        if self._closed:
            return
        self._events.off(target, context)

    def destroy(self) -> None:
        if self._closed:
            return
        self._click_timer.stop()
        self._request_on_click = False
        self._pending_click = None
        if self._guide is not None:
            self._guide.destroy()
        if self._drag_handler is not None:
            self._drag_handler.off(self)
        container = getattr(self._time_grid, "container", None)
        if container is not None:
            container.off("dblclick", self)
        self._events.off()
        self._closed = True
        self._drag_handler = self._time_grid = self._base_controller = None
        self._get_schedule_data_func = self._drag_start = self._guide = None
        log.debug("Time creation controller destroyed")

    def check_expected_condition(
        self, target: GridElement | None
    ) -> Union[TimeColumn, Literal[False]]:
        """Return the column under *target*, or False when it is not a column."""
        if self._closed or target is None or self._time_grid is None:
            return False
        class_names = self._settings.class_names
        css_class = target.class_name or ""
        if css_class == class_names.classname(SCHEDULE_BLOCK_WRAP):
            if target.parent is None:
                return False
            target = target.parent
            css_class = target.class_name or ""

        matches = class_names.view_id_regexp.match(css_class)
        if not matches or matches.lastindex is None or not matches.group(1):
            return False

        column = self._time_grid.children.get(matches.group(1))
        if column is None:
            return False
        return column

    def _fire(self, event: str, payload: object) -> None:
        log.debug("Firing %s", event)
        self._events.fire(event, payload)
        self.intentEmitted.emit(event, payload)

    def _reset_drag_session(self) -> None:
        if self._drag_handler is not None:
            self._drag_handler.off(
                {"drag": self._on_drag, "dragEnd": self._on_drag_end}, self
            )
        self._drag_start = self._get_schedule_data_func = None

    def _on_mouse_move(self, event: GestureEvent) -> None:
        if self._closed:
            return
        self._reset_drag_session()
        if self._settings.dblclick_create:
            return

        column = self.check_expected_condition(event.target)
        if not column:
            log.debug("Ignoring mousemove outside of time columns")
            return

        get_schedule_data = self._resolver.retrieve_schedule_data(column)
        self._pending_click = get_schedule_data(event.origin_event)
        self._request_on_click = True
        self._click_timer.start()

    def _on_click_timeout(self) -> None:
        event_data = self._pending_click
        if self._request_on_click and not self._closed and event_data is not None:
            self._fire("timeCreationClick", event_data)
        self._request_on_click = False
        self._pending_click = None

    def _on_click(self, event: GestureEvent) -> None:
        """Cancel a pending click: the gesture turned into a drag."""
        if self._closed:
            return
        self._request_on_click = False
        self._pending_click = None
        self._click_timer.stop()
        # an active drag session keeps its preview; _on_drag updates it
        if self._guide is not None and self._get_schedule_data_func is None:
            self._guide.clear_guide_element()

    def _on_drag_start(self, event: GestureEvent) -> None:
        if self._closed:
            return
        self._reset_drag_session()
        column = self.check_expected_condition(event.target)
        if not column:
            return

        get_schedule_data = self._resolver.retrieve_schedule_data(column)
        self._get_schedule_data_func = get_schedule_data
        self._drag_start = get_schedule_data(event.origin_event)
        self._drag_handler.on(
            {"drag": self._on_drag, "dragEnd": self._on_drag_end}, context=self
        )
        self._fire("timeCreationDragstart", self._drag_start)

    def _on_drag(self, event: GestureEvent) -> None:
        if self._closed or self._get_schedule_data_func is None:
            return
        self._fire("timeCreationDrag", self._get_schedule_data_func(event.origin_event))

    def _on_drag_end(self, event: GestureEvent) -> None:
        if self._closed:
            return
        get_schedule_data = self._get_schedule_data_func
        drag_start = self._drag_start
        self._reset_drag_session()
        if get_schedule_data is None or drag_start is None:
            return
        end_data = get_schedule_data(event.origin_event)
        self._fire("timeCreation", self._resolver.creation_range(drag_start, end_data))

    def _on_dbl_click(self, event: GestureEvent) -> None:
        if self._closed:
            return
        column = self.check_expected_condition(event.target)
        if not column:
            return
        get_schedule_data = self._resolver.retrieve_schedule_data(column)
        self._fire("timeCreationClick", get_schedule_data(event.origin_event))
