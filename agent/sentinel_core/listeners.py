"""
Pointer input source (pynput → queue, one background listener thread).

Exposes the blocking contract the multiplexer expects:
  next_event()     — next raw pointer event, blocks until one arrives
  query_pointer()  — current root-window pointer coordinates

pynput is imported inside start(): on X11 the import itself opens a display
connection, and failing to get one is a fatal startup error.
"""

import queue
import threading
from dataclasses import dataclass
from typing import Tuple

from .config import log
from .constants import INT16_MIN, INT16_MAX, LISTENER_READY_TIMEOUT_SEC
from .events import AxisValue
from .state import now_ms


class InputSourceError(RuntimeError):
    """The input event source could not be established. Fatal at startup."""


class PointerQueryError(RuntimeError):
    """Pointer coordinates could not be resolved for one event."""


# Raw event kinds. "motion" carries 1 axis (scroll) or 2 axes (movement).
MOTION = "motion"
TOUCH_BEGIN = "touch_begin"
TOUCH_UPDATE = "touch_update"
TOUCH_END = "touch_end"
BUTTON_PRESS = "button_press"
BUTTON_RELEASE = "button_release"


@dataclass(frozen=True)
class RawInputEvent:
    kind: str
    time: int
    axes: Tuple[AxisValue, ...] = ()
    detail: int = 0


@dataclass(frozen=True)
class PointerPosition:
    root_x: int
    root_y: int


_BUTTON_NUMBERS = {"left": 1, "middle": 2, "right": 3, "x1": 8, "x2": 9}


def button_number(button):
    """X11 button number for a pynput Button. 0 when unknown."""
    value = getattr(button, "value", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return _BUTTON_NUMBERS.get(getattr(button, "name", ""), 0)


def clamp_int16(value):
    return max(INT16_MIN, min(INT16_MAX, int(value)))


class PointerEventSource:
    """
    Lifecycle:
      start()  → imports pynput, starts the mouse listener, waits until ready
      stop()   → stops the listener
    Callbacks run on pynput's thread and only touch the internal queue.
    """

    def __init__(self):
        self._queue = queue.Queue()
        self._listener = None
        self._controller = None
        self._last_position = None

    # ── Lifecycle ─────────────────────────────────────────────

    def start(self):
        try:
            from pynput import mouse
        except Exception as e:
            raise InputSourceError(f"pynput backend unavailable: {e}") from e

        try:
            self._controller = mouse.Controller()
            self._seed_position()
            self._listener = mouse.Listener(
                on_move=self._on_move,
                on_click=self._on_click,
                on_scroll=self._on_scroll,
            )
            self._listener.daemon = True
            self._listener.start()
        except Exception as e:
            raise InputSourceError(f"Could not start pointer listener: {e}") from e

        waiter = threading.Thread(target=self._listener.wait, daemon=True)
        waiter.start()
        waiter.join(LISTENER_READY_TIMEOUT_SEC)
        if waiter.is_alive() or not self._listener.is_alive():
            self.stop()
            raise InputSourceError("Pointer listener did not become ready")

        log.info("Pointer listener started")

    def stop(self):
        if self._listener is not None:
            try:
                self._listener.stop()
            except Exception as e:
                log.warning("Error stopping pointer listener: %s", e)
            self._listener = None

    def _seed_position(self):
        try:
            self._last_position = tuple(self._controller.position)
        except Exception as e:
            log.warning("Could not read initial pointer position: %s", e)

    # ── Source contract ───────────────────────────────────────

    def next_event(self, timeout=None):
        """Block until the next raw event. Returns None only if `timeout` elapses."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def query_pointer(self) -> PointerPosition:
        if self._controller is None:
            raise PointerQueryError("Pointer source not started")
        try:
            x, y = self._controller.position
        except Exception as e:
            raise PointerQueryError(f"Could not query pointer: {e}") from e
        return PointerPosition(clamp_int16(x), clamp_int16(y))

    # ── pynput callbacks ──────────────────────────────────────

    def _on_move(self, x, y):
        if self._last_position is None:
            dx = dy = 0.0
        else:
            dx = x - self._last_position[0]
            dy = y - self._last_position[1]
        self._last_position = (x, y)
        self._queue.put(RawInputEvent(
            MOTION, now_ms(), (AxisValue.from_float(dx), AxisValue.from_float(dy)),
        ))

    def _on_scroll(self, x, y, dx, dy):
        value = dy if dy else dx
        self._queue.put(RawInputEvent(MOTION, now_ms(), (AxisValue.from_float(value),)))

    def _on_click(self, x, y, button, pressed):
        kind = BUTTON_PRESS if pressed else BUTTON_RELEASE
        self._queue.put(RawInputEvent(kind, now_ms(), detail=button_number(button)))
