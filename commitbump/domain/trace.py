"""
Trace event domain object for commitbump.

Trace events record the decisions taken during an analysis run:
- tag.unresolved: A matching tag could not be peeled to a commit
- tag.selected: The tag chosen as the last release
- tag.none: No tag matched the format
- history.collected: Commits gathered since the last release
- commit.classified: Release type assigned to one commit
- release.decided: Aggregated release type
- version.computed: Next version string

Components receive a sink (any callable taking a TraceEvent) instead of
printing, so the decision logic can be tested on its own.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Tuple
import json
import logging

trace_logger = logging.getLogger("commitbump.trace")


@dataclass(frozen=True)
class TraceEvent:
    """
    A structured record of one decision.

    Attributes:
        type: Event type (tag.selected, commit.classified, etc.)
        data: Type-specific data (tag name, commit id, rule, etc.)
        timestamp: When the event was emitted (UTC)
    """

    type: str
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'type': self.type,
            'timestamp': self.timestamp.isoformat(),
            'data': self.data,
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __str__(self) -> str:
        details = ' '.join(f"{k}={v}" for k, v in self.data.items())
        return f"{self.type} {details}".rstrip()


TraceSink = Callable[[TraceEvent], None]


def logging_sink(event: TraceEvent) -> None:
    """Default sink: write each event to the ``commitbump.trace`` logger."""
    trace_logger.debug(str(event))


def null_sink(event: TraceEvent) -> None:
    """Sink that discards events."""


def collecting_sink() -> Tuple[List[TraceEvent], TraceSink]:
    """
    Create a sink that appends events to a list.

    Returns:
        Tuple of (events list, sink)
    """
    events: List[TraceEvent] = []
    return events, events.append
