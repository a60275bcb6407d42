"""
Session — identifiers that scope one process run's submissions.

Owned by the pipeline's consumer thread. Only the SubmissionManager
advances `sequence_number`, exactly once per non-empty flush.
"""

import time
import uuid
from dataclasses import dataclass, field


def now_ms() -> int:
    """Milliseconds since 00:00:00 UTC 1 January 1970."""
    return int(time.time() * 1000)


@dataclass
class Session:
    session_id: str
    user_id: str
    stream_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    epoch: int = field(default_factory=now_ms)
    sequence_number: int = 0

    def advance(self) -> int:
        """Consume the current sequence number. Returns the one just used."""
        used = self.sequence_number
        self.sequence_number += 1
        return used

    def envelope_metadata(self) -> dict:
        return {
            "epoch": {"unit": "millisecond", "value": self.epoch},
            "sessionId": self.session_id,
            "streamId": self.stream_id,
            "sequenceNumber": self.sequence_number,
            "userId": self.user_id,
        }
