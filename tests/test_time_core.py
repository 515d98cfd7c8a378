from datetime import datetime

import pytest

from timegrid.interaction import PointerEvent
from timegrid.interaction.time_core import CoordinateResolver
from timegrid.model.time_grid import TimeColumn


@pytest.fixture
def column():
    # 24 hours over 480px: 20px per hour
    return TimeColumn(view_id="3", date=datetime(2026, 10, 19, 13, 45), top=100.0, height=480.0)


def test_schedule_data_for_pointer_position(column):
    get_schedule_data = CoordinateResolver().retrieve_schedule_data(column)

    data = get_schedule_data(PointerEvent(pos=(40.0, 100.0 + 190.0)))

    assert data.column is column
    assert data.mouse_y == 190.0
    assert data.grid_y == 9.5
    assert data.time_y == datetime(2026, 10, 19, 9, 30)
    assert data.nearest_grid_time_y == datetime(2026, 10, 19, 9, 30)
    assert data.trigger_event == "mousemove"


def test_nearest_grid_floors_to_slot(column):
    get_schedule_data = CoordinateResolver(slot_minutes=30).retrieve_schedule_data(column)

    data = get_schedule_data(PointerEvent(pos=(0.0, 100.0 + 199.0)))

    assert data.nearest_grid_y == 9.5
    assert data.nearest_grid_time_y == datetime(2026, 10, 19, 9, 30)


def test_positions_outside_column_are_clamped(column):
    get_schedule_data = CoordinateResolver().retrieve_schedule_data(column)

    above = get_schedule_data(PointerEvent(pos=(0.0, 0.0)))
    below = get_schedule_data(PointerEvent(pos=(0.0, 2000.0)))

    assert above.grid_y == 0.0
    assert above.nearest_grid_time_y == datetime(2026, 10, 19, 0, 0)
    assert below.grid_y == 24.0
    assert below.nearest_grid_time_y == datetime(2026, 10, 19, 23, 30)


def test_hour_start_offsets_times():
    column = TimeColumn(
        view_id="1", date=datetime(2026, 10, 19), top=0.0, height=300.0, hour_start=8, hour_end=18
    )
    get_schedule_data = CoordinateResolver(slot_minutes=15).retrieve_schedule_data(column)

    data = get_schedule_data(PointerEvent(pos=(0.0, 45.0)))

    assert data.grid_y == 1.5
    assert data.nearest_grid_time_y == datetime(2026, 10, 19, 9, 30)


def test_creation_range_orders_and_extends_by_one_slot(column):
    resolver = CoordinateResolver()
    get_schedule_data = resolver.retrieve_schedule_data(column)
    later = get_schedule_data(PointerEvent(pos=(0.0, 100.0 + 220.0)))
    earlier = get_schedule_data(PointerEvent(pos=(0.0, 100.0 + 180.0)))

    span = resolver.creation_range(later, earlier)

    assert span.column is column
    assert span.start == datetime(2026, 10, 19, 9, 0)
    assert span.end == datetime(2026, 10, 19, 11, 30)


def test_invalid_slot_and_column_are_rejected():
    with pytest.raises(ValueError):
        CoordinateResolver(slot_minutes=0)
    with pytest.raises(ValueError):
        TimeColumn(view_id="x", date=datetime(2026, 1, 1), top=0.0, height=0.0)
    with pytest.raises(ValueError):
        TimeColumn(view_id="x", date=datetime(2026, 1, 1), top=0.0, height=10.0, hour_start=9, hour_end=9)
