"""Structured logging (one JSON line per request or absorbed failure)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any


SERVICE_NAME = "image-product-search"


def _now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def log_request(
    route: str,
    latency_ms: float,
    session_id: str | None = None,
    request_id: str | None = None,
    keyword_source: str | None = None,
    result_count: int = 0,
    fallback_used: bool = False,
    error: bool = False,
) -> None:
    """Emit one JSON line with required fields."""
    payload: dict[str, Any] = {
        "ts": _now(),
        "service": SERVICE_NAME,
        "route": route,
        "latency_ms": round(latency_ms, 2),
        "session_id": session_id,
        "request_id": request_id,
        "keyword_source": keyword_source,
        "result_count": result_count,
        "fallback_used": fallback_used,
        "error": error,
    }
    print(json.dumps(payload))


def log_event(event: str, **fields: Any) -> None:
    """Emit one JSON line for an internal event (e.g. an absorbed vision failure)."""
    payload: dict[str, Any] = {"ts": _now(), "service": SERVICE_NAME, "event": event}
    payload.update(fields)
    print(json.dumps(payload, default=str))
