from __future__ import annotations

import datetime as _dt
from collections import deque
from typing import Optional

from .contracts import AuditEvent, AuditEventType


def _ts_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat()


def _sanitize_detail(detail: str) -> str:
    # IMPORTANT: Never include note bodies in detail.
    detail = (detail or "").replace("\n", " ").strip()
    if len(detail) > 200:
        detail = detail[:200] + "…"
    return detail


class AuditTrail:
    def __init__(self, max_events: int = 500) -> None:
        self._events: deque[AuditEvent] = deque(maxlen=max(1, int(max_events)))

    def append(self, event: AuditEvent) -> None:
        self._events.append(event)

    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()


def log_event(
    trail: AuditTrail,
    event_type: AuditEventType,
    code: str,
    detail: str = "",
    note_id: Optional[str] = None,
) -> AuditEvent:
    event = AuditEvent(
        ts_iso=_ts_iso(),
        type=event_type,
        code=code,
        note_id=note_id,
        detail=_sanitize_detail(detail),
    )
    trail.append(event)
    return event
