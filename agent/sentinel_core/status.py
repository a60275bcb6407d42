"""
Status poller — background thread that queries the collector's verdict.

Every status_interval seconds:
  fetch status → notify the user → lock the session when the verify score
  drops below lock_threshold (only if lock_enabled).

Only reads immutable identifiers (user_id, stream_id). Never touches the
pipeline's buffer or sequence counter.
"""

import threading

from .api import fetch_status
from .config import log
from .constants import APP_NAME, STATUS_VERIFY_PHASE
from .platform_linux import lock_session, show_notification


def should_lock(config, status):
    return (
        config.lock_enabled
        and status.phase == STATUS_VERIFY_PHASE
        and status.value < config.lock_threshold
    )


def format_status(status):
    return f"Phase: {status.phase}, Description: {status.description}, value: {status.value}"


class StatusPoller:

    def __init__(self, config, session, http=None):
        self._config = config
        self._session = session
        self._http = http
        self._stop = threading.Event()
        self._thread = None

    def start(self):
        self._thread = threading.Thread(target=self._run, name="status-poller", daemon=True)
        self._thread.start()
        log.info("Status poller started (interval=%ds)", self._config.status_interval)

    def stop(self, join_timeout=2.0):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(join_timeout)
            self._thread = None

    def poll_once(self):
        """One poll cycle. Returns the Status, or None if the query failed."""
        status = fetch_status(self._config, self._session, http=self._http)
        if status is None:
            return None

        log.info("Status | phase=%s | description=%s | value=%s",
                 status.phase, status.description, status.value)
        show_notification(f"{APP_NAME} Status Update", format_status(status))

        if should_lock(self._config, status):
            log.warning("Verify score %.3f below threshold %.3f, locking session",
                        status.value, self._config.lock_threshold)
            lock_session(self._config.lock_utility)
        return status

    def _run(self):
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception as e:
                log.error("Status poll error: %s", e, exc_info=True)
            self._stop.wait(self._config.status_interval)
