"""
Server API calls — chunk submission and status query.

All functions are blocking. submit() runs on the pipeline's consumer
thread, so the consumer does not read the next message until the POST has
completed or timed out. There is no retry and no requeue: a failed chunk
is lost, and its sequence number is still consumed.
"""

from dataclasses import dataclass

import requests

from .config import log
from .constants import API_TIMEOUT_SUBMIT, API_TIMEOUT_STATUS
from .events import chunk_to_wire
from . import http_client


# ─── Chunk submission ────────────────────────────────────────────

class SubmissionManager:
    """Serializes a batch into the envelope, POSTs it, advances the sequence."""

    def __init__(self, config, session, http=None):
        self._config = config
        self._session = session
        self._http = http

    def build_envelope(self, batch):
        return {
            "metadata": self._session.envelope_metadata(),
            "chunk": chunk_to_wire(batch),
        }

    def submit(self, batch):
        """
        Exactly one POST attempt. The sequence number advances by one
        afterwards whatever the outcome. Returns True on a 2xx response.
        """
        envelope = self.build_envelope(batch)
        headers = {"Content-Type": "application/json", **self._config.credential_header}
        http = self._http or http_client.http
        ok = False

        try:
            resp = http.post(
                self._config.submit_url,
                json=envelope,
                headers=headers,
                timeout=API_TIMEOUT_SUBMIT,
            )
            if 200 <= resp.status_code < 300:
                ok = True
                log.info("Chunk #%d submitted | events=%d",
                         self._session.sequence_number, len(batch))
            else:
                log.warning("Chunk #%d rejected: HTTP %d: %s",
                            self._session.sequence_number, resp.status_code, resp.text[:200])
        except requests.RequestException as e:
            log.warning("Chunk #%d network error: %s (%d events dropped)",
                        self._session.sequence_number, e, len(batch))
        finally:
            self._session.advance()

        return ok


# ─── Status query ────────────────────────────────────────────────

@dataclass(frozen=True)
class Status:
    phase: str
    description: str
    value: float


def status_url(config, session):
    return f"{config.status_base_url.rstrip('/')}/{session.user_id}/{session.stream_id}"


def fetch_status(config, session, http=None):
    """GET the client's current status. Returns Status or None on failure."""
    url = status_url(config, session)
    http = http or http_client.http
    try:
        resp = http.get(url, headers=config.credential_header, timeout=API_TIMEOUT_STATUS)
        if resp.status_code != 200:
            log.warning("Status query failed: HTTP %d: %s", resp.status_code, resp.text[:200])
            return None
        data = resp.json()
        return Status(
            phase=str(data["phase"]),
            description=str(data.get("description", "")),
            value=float(data["value"]),
        )
    except requests.RequestException as e:
        log.warning("Status network error: %s", e)
    except (ValueError, KeyError, TypeError) as e:
        log.warning("Malformed status response: %s", e)
    return None
