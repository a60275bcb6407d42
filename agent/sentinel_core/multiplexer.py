"""
EventMultiplexer — merges the two producers into one FIFO for the consumer.

  input producer   — next raw event → resolve pointer → InputMessage
  metadata timer   — every metadata_query_interval ms → MetadataRefresh

Order is preserved within a producer. Interleaving between producers is
whatever order the messages were enqueued in.
"""

import queue
import threading
from dataclasses import dataclass

from .config import log
from .listeners import PointerPosition, RawInputEvent

# How long the input producer blocks per read before re-checking stop().
_SOURCE_POLL_SEC = 0.5


@dataclass(frozen=True)
class InputMessage:
    event: RawInputEvent
    pointer: PointerPosition


@dataclass(frozen=True)
class MetadataRefresh:
    pass


@dataclass(frozen=True)
class Wakeup:
    """Unblocks a pending receive() so the consumer can observe stop()."""


class EventMultiplexer:
    """Multi-producer, single-consumer channel with receive-with-timeout."""

    def __init__(self, source, metadata_query_interval):
        self._source = source
        self._metadata_interval_sec = metadata_query_interval / 1000.0
        self._queue = queue.Queue()
        self._stop = threading.Event()
        self._threads = []

    def start(self):
        for name, target in (
            ("input-producer", self._input_producer),
            ("metadata-timer", self._metadata_timer),
        ):
            t = threading.Thread(target=target, name=name, daemon=True)
            t.start()
            self._threads.append(t)
        log.info("Multiplexer started (metadata interval=%.0fs)", self._metadata_interval_sec)

    def stop(self, join_timeout=2.0):
        self._stop.set()
        for t in self._threads:
            t.join(join_timeout)
        self._threads = []

    def wakeup(self):
        self._queue.put(Wakeup())

    def receive(self, timeout_ms):
        """Next message, or None if nothing arrived within `timeout_ms`."""
        try:
            return self._queue.get(timeout=timeout_ms / 1000.0)
        except queue.Empty:
            return None

    # ── Producers ─────────────────────────────────────────────

    def _input_producer(self):
        while not self._stop.is_set():
            try:
                event = self._source.next_event(timeout=_SOURCE_POLL_SEC)
                if event is None:
                    continue
                pointer = self._source.query_pointer()
            except Exception as e:
                log.warning("Dropped input event: %s", e)
                continue
            self._queue.put(InputMessage(event, pointer))

    def _metadata_timer(self):
        while not self._stop.wait(self._metadata_interval_sec):
            self._queue.put(MetadataRefresh())
