"""
PipelineState — the buffering state machine.

All mutations happen on the consumer thread. No locks needed: the buffer
and session are never touched by any other thread.

  push(record)  → append; if len(buffer) > buffer_size_limit → flush()
  flush()       → swap buffer for an empty one; submit the batch if non-empty
  idle trigger  → the consumer loop calls flush() when receive() times out
"""

from .config import log
from .events import (
    MotionEvent, ScrollEvent, TouchBeginEvent, TouchUpdateEvent, TouchEndEvent,
    ButtonPressEvent, ButtonReleaseEvent, MetadataChangedEvent,
)
from .listeners import (
    MOTION, TOUCH_BEGIN, TOUCH_UPDATE, TOUCH_END, BUTTON_PRESS, BUTTON_RELEASE,
)
from .multiplexer import InputMessage, MetadataRefresh
from .state import now_ms

_TOUCH_RECORDS = {
    TOUCH_BEGIN: TouchBeginEvent,
    TOUCH_UPDATE: TouchUpdateEvent,
    TOUCH_END: TouchEndEvent,
}

_BUTTON_RECORDS = {
    BUTTON_PRESS: ButtonPressEvent,
    BUTTON_RELEASE: ButtonReleaseEvent,
}


def translate(event, pointer):
    """
    Map a raw event + resolved pointer to its EventRecord, or None.

    Raw motion is disambiguated by axis count: one axis is a scroll,
    two axes are pointer movement. Any other count is dropped.
    """
    if event.kind == MOTION:
        if len(event.axes) == 1:
            return ScrollEvent(event.time, event.axes[0], pointer.root_x, pointer.root_y)
        if len(event.axes) == 2:
            return MotionEvent(event.time, event.axes[0], event.axes[1],
                               pointer.root_x, pointer.root_y)
        return None

    touch_cls = _TOUCH_RECORDS.get(event.kind)
    if touch_cls is not None:
        if len(event.axes) < 2:
            return None
        return touch_cls(event.time, event.axes[0], event.axes[1],
                         pointer.root_x, pointer.root_y)

    button_cls = _BUTTON_RECORDS.get(event.kind)
    if button_cls is not None:
        return button_cls(event.time, pointer.root_x, pointer.root_y, event.detail)

    return None


class PipelineState:
    """Owns the buffer. Hands non-empty batches to the submitter."""

    def __init__(self, config, submitter, probe):
        self._buffer_size_limit = config.buffer_size_limit
        self._submitter = submitter
        self._probe = probe
        self._buffer = []

    def __len__(self):
        return len(self._buffer)

    # ── Message handling ──────────────────────────────────────

    def handle(self, message):
        if isinstance(message, InputMessage):
            record = translate(message.event, message.pointer)
            if record is None:
                log.debug("Ignoring raw event %s with %d axes",
                          message.event.kind, len(message.event.axes))
                return
            self.push(record)
        elif isinstance(message, MetadataRefresh):
            self.push_metadata()
        else:
            log.warning("Unknown message type: %r", message)

    def push_metadata(self):
        metadata = self._probe.snapshot()
        self.push(MetadataChangedEvent(now_ms(), metadata))

    # ── Buffer ────────────────────────────────────────────────

    def push(self, record):
        self._buffer.append(record)
        if len(self._buffer) > self._buffer_size_limit:
            self.flush()

    def flush(self):
        """Submit everything buffered so far. Returns False if there was nothing."""
        batch, self._buffer = self._buffer, []
        if not batch:
            return False
        self._submitter.submit(batch)
        return True
