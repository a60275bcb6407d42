import queue
import threading
import time

import pytest
import requests

from sentinel_core.config import Config
from sentinel_core.events import AxisValue, Metadata, MotionEvent, OsInfo
from sentinel_core.listeners import (
    MOTION, PointerPosition, PointerQueryError, RawInputEvent,
)
from sentinel_core.state import Session


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=""):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json


class FakeHttp:
    """Stands in for requests.Session. Records every call."""

    def __init__(self, status_code=200, error=None, get_json=None):
        self.status_code = status_code
        self.error = error
        self.get_json = get_json
        self.posts = []
        self.gets = []
        self._lock = threading.Lock()

    def post(self, url, json=None, headers=None, timeout=None):
        with self._lock:
            self.posts.append({"url": url, "json": json, "headers": headers,
                               "timeout": timeout, "at": time.monotonic()})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status_code)

    def get(self, url, headers=None, timeout=None):
        self.gets.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status_code, self.get_json)

    @property
    def sequence_numbers(self):
        return [p["json"]["metadata"]["sequenceNumber"] for p in self.posts]


class FakeSource:
    """
    Pointer source fed by the test. Events listed in `bad` fail pointer lookup.
    The first `read_errors` calls to next_event() raise OSError.
    """

    def __init__(self, events=(), bad=(), read_errors=0):
        self._read_errors = read_errors
        self._queue = queue.Queue()
        self._bad = set(bad)
        self._current = None
        self.started = False
        self.stopped = False
        for e in events:
            self.feed(e)

    def feed(self, event):
        self._queue.put(event)

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def next_event(self, timeout=None):
        if self._read_errors:
            self._read_errors -= 1
            raise OSError("device read failed")
        try:
            self._current = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        return self._current

    def query_pointer(self):
        if self._current is not None and self._current.time in self._bad:
            raise PointerQueryError("pointer gone")
        return PointerPosition(10, 20)


class FakeProbe:
    def __init__(self):
        self.calls = 0

    def snapshot(self):
        self.calls += 1
        return Metadata(user_id="tester", host_id="host-1", os=OsInfo(os_type="Linux"))


def raw_motion(t, dx=1.0, dy=2.0):
    return RawInputEvent(MOTION, t, (AxisValue.from_float(dx), AxisValue.from_float(dy)))


def raw_scroll(t, value=-1.0):
    return RawInputEvent(MOTION, t, (AxisValue.from_float(value),))


def motion_record(t):
    return MotionEvent(t, AxisValue(1), AxisValue(2), 10, 20)


@pytest.fixture
def config():
    return Config(buffer_size_limit=3, submit_url="http://collector.test/chunk",
                  status_base_url="http://collector.test/status", user_id="u-1")


@pytest.fixture
def session():
    return Session(session_id="tty7", user_id="u-1", stream_id="stream-1", epoch=1_700_000_000_000)


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def failing_http():
    return FakeHttp(error=requests.ConnectionError("collector down"))
