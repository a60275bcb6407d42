"""
SentinelApp — wires the producers, the pipeline, and the status poller.

Threads:
  input-producer   — pointer source → multiplexer (listeners.py / multiplexer.py)
  metadata-timer   — periodic MetadataRefresh      (multiplexer.py)
  status-poller    — collector status, lock action (status.py)
  consumer         — the thread that calls run(); the ONLY thread that
                     touches the buffer and the session's sequence counter.

No flush on exit: events still buffered when the process ends are lost.
"""

import threading

from .api import SubmissionManager
from .config import log
from .constants import AGENT_VERSION
from .listeners import PointerEventSource
from .metadata import MetadataProbe
from .multiplexer import EventMultiplexer
from .pipeline import PipelineState
from .platform_linux import get_session_id
from .state import Session
from .status import StatusPoller


class SentinelApp:

    def __init__(self, config, source=None, probe=None, session=None, http=None,
                 enable_status=True):
        self._config = config
        self._source = source or PointerEventSource()
        self._session = session or Session(session_id=get_session_id(), user_id=config.user_id)
        self._submitter = SubmissionManager(config, self._session, http=http)
        self.pipeline = PipelineState(config, self._submitter, probe or MetadataProbe())
        self._mux = EventMultiplexer(self._source, config.metadata_query_interval)
        self._poller = StatusPoller(config, self._session, http=http) if enable_status else None
        self._stop = threading.Event()

    def run(self):
        """Start the agent. Blocks in the consumer loop until stop()."""
        # Fatal if the pointer source cannot be established.
        self._source.start()

        try:
            self.pipeline.push_metadata()
            self._mux.start()
            if self._poller is not None:
                self._poller.start()

            log.info(
                "v%s started (buffer=%d, idle=%dms, stream=%s)",
                AGENT_VERSION, self._config.buffer_size_limit,
                self._config.idle_timeout, self._session.stream_id,
            )
            self._consume()
        finally:
            self._mux.stop()
            self._source.stop()
            if self._poller is not None:
                self._poller.stop()
            log.info("SentinelApp shut down (%d buffered events discarded)", len(self.pipeline))

    def stop(self):
        self._stop.set()
        self._mux.wakeup()

    # ─── Consumer loop ───────────────────────────────────────

    def _consume(self):
        idle_timeout = self._config.idle_timeout
        while not self._stop.is_set():
            message = self._mux.receive(idle_timeout)
            if self._stop.is_set():
                break
            try:
                if message is None:
                    self.pipeline.flush()
                else:
                    self.pipeline.handle(message)
            except Exception as e:
                log.error("Consumer loop error: %s", e, exc_info=True)
