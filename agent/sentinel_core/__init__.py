"""
sentinel_core — Pointer Telemetry Agent
=======================================
Architecture: two producer threads → one FIFO → single consumer loop.

  constants.py      → Version, defaults, event-type tags, timeouts
  config.py         → Paths, logging, runtime env, Config + load_config()
  events.py         → EventRecord variants + Metadata (flat wire tuples)
  state.py          → Session (ids, epoch, sequence counter)
  metadata.py       → MetadataProbe (host, monitors, input devices, OS)
  listeners.py      → PointerEventSource (pynput → queue)
  multiplexer.py    → EventMultiplexer (input producer + metadata timer)
  pipeline.py       → PipelineState (buffer, push/flush, translation)
  http_client.py    → HTTP session with pooling, GET-only retry
  api.py            → SubmissionManager + status query
  platform_linux.py → Session id, lock utility, notifications
  status.py         → StatusPoller (notify + lock on low score)
  app.py            → SentinelApp (wiring + consumer loop)
  runner.py         → CLI entry point
"""
