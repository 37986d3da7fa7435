"""
GymTastic Event Bus — Domain Event
====================================
Immutable message emitted after a state change has committed.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent:
    """
    Fields:
        event_type:    <source>.<entity>.<action>.v<N>
        source_engine: Engine that emitted the event.
        occurred_at:   Commit time (timezone-aware).
        payload:       JSON-serialisable body.
        event_id:      Unique id, generated when omitted.
    """

    event_type: str
    source_engine: str
    occurred_at: datetime
    payload: Dict[str, Any] = field(default_factory=dict)
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        if not self.event_type or not isinstance(self.event_type, str):
            raise ValueError("event_type must be a non-empty string.")
        if not self.source_engine:
            raise ValueError("source_engine must be non-empty.")
        if self.occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be timezone-aware.")

    def to_dict(self) -> dict:
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "source_engine": self.source_engine,
            "occurred_at": self.occurred_at.isoformat(),
            "payload": dict(self.payload),
        }
