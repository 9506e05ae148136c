"""Domain event constants and publisher.

Defines event type constants and a simple publish() callable used by the
form save/delete and response submission flows.
"""

from __future__ import annotations

from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

FORM_SAVED = "form.saved"
FORM_DELETED = "form.deleted"
RESPONSE_SUBMITTED = "response.submitted"


# In-memory buffer for domain events (test-only visibility)
EVENT_BUFFER: List[Dict[str, Any]] = []


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    """Publish a domain event to the log and the in-memory buffer."""
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": payload})


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered domain events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


__all__ = [
    "FORM_SAVED",
    "FORM_DELETED",
    "RESPONSE_SUBMITTED",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
]
