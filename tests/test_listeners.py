import enum

import pytest

from sentinel_core.events import AxisValue
from sentinel_core.listeners import (
    BUTTON_PRESS, BUTTON_RELEASE, MOTION, PointerEventSource, PointerQueryError,
    button_number, clamp_int16,
)


class XorgButton(enum.Enum):
    left = 1
    right = 3
    unknown = None


class Win32Button(enum.Enum):
    left = (1, 2)
    middle = (3, 4)
    x2 = (5, 6)


def test_button_numbers():
    assert button_number(XorgButton.left) == 1
    assert button_number(XorgButton.right) == 3
    assert button_number(XorgButton.unknown) == 0
    assert button_number(Win32Button.middle) == 2
    assert button_number(Win32Button.x2) == 9


def test_clamp_to_int16():
    assert clamp_int16(40000) == 32767
    assert clamp_int16(-40000) == -32768
    assert clamp_int16(12.7) == 12


def test_move_callbacks_emit_two_axis_deltas():
    source = PointerEventSource()

    source._on_move(100, 100)
    source._on_move(103.5, 98)

    first, second = source.next_event(timeout=1), source.next_event(timeout=1)
    assert first.kind == MOTION and first.axes == (AxisValue(0), AxisValue(0))
    assert second.axes == (AxisValue.from_float(3.5), AxisValue(-2))


def test_scroll_callback_emits_single_axis():
    source = PointerEventSource()

    source._on_scroll(0, 0, 0, -1)
    source._on_scroll(0, 0, 2, 0)

    assert source.next_event(timeout=1).axes == (AxisValue(-1),)
    assert source.next_event(timeout=1).axes == (AxisValue(2),)


def test_click_callback_emits_press_and_release():
    source = PointerEventSource()

    source._on_click(5, 5, XorgButton.right, True)
    source._on_click(5, 5, XorgButton.right, False)

    press, release = source.next_event(timeout=1), source.next_event(timeout=1)
    assert (press.kind, press.detail) == (BUTTON_PRESS, 3)
    assert (release.kind, release.detail) == (BUTTON_RELEASE, 3)


def test_next_event_returns_none_on_timeout():
    assert PointerEventSource().next_event(timeout=0.05) is None


def test_query_pointer_before_start_fails():
    with pytest.raises(PointerQueryError):
        PointerEventSource().query_pointer()


def test_query_pointer_clamps_controller_position():
    class Controller:
        position = (70000.0, -5.0)

    source = PointerEventSource()
    source._controller = Controller()

    pointer = source.query_pointer()
    assert (pointer.root_x, pointer.root_y) == (32767, -5)


def test_first_move_is_relative_to_seeded_position():
    class Controller:
        position = (100, 100)

    source = PointerEventSource()
    source._controller = Controller()
    source._seed_position()

    source._on_move(103, 98)

    assert source.next_event(timeout=1).axes == (AxisValue(3), AxisValue(-2))
