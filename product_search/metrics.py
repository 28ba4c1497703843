"""In-memory metrics since process start (requests, keyword sources, recency fallback, avg latency)."""

from __future__ import annotations

_metrics: dict[str, int | float] = {
    "requests_total": 0,
    "errors_total": 0,
    "empty_input_total": 0,
    "external_keywords_total": 0,
    "vocabulary_keywords_total": 0,
    "recency_fallback_total": 0,
    "sum_latency_ms": 0.0,
}


def record_request(
    latency_ms: float,
    keyword_source: str | None = None,
    fallback_used: bool = False,
    empty_input: bool = False,
    error: bool = False,
) -> None:
    """Record one search request for metrics."""
    _metrics["requests_total"] = _metrics.get("requests_total", 0) + 1
    _metrics["sum_latency_ms"] = _metrics.get("sum_latency_ms", 0.0) + latency_ms
    if keyword_source == "external":
        _metrics["external_keywords_total"] = _metrics.get("external_keywords_total", 0) + 1
    elif keyword_source == "vocabulary":
        _metrics["vocabulary_keywords_total"] = _metrics.get("vocabulary_keywords_total", 0) + 1
    if fallback_used:
        _metrics["recency_fallback_total"] = _metrics.get("recency_fallback_total", 0) + 1
    if empty_input:
        _metrics["empty_input_total"] = _metrics.get("empty_input_total", 0) + 1
    if error:
        _metrics["errors_total"] = _metrics.get("errors_total", 0) + 1


def get_metrics() -> dict[str, int | float]:
    """Return current metrics as dict (for /metrics endpoint)."""
    total = _metrics.get("requests_total", 0)
    sum_ms = _metrics.get("sum_latency_ms", 0.0)
    avg = sum_ms / total if total else 0.0
    return {
        "requests_total": total,
        "errors_total": _metrics.get("errors_total", 0),
        "empty_input_total": _metrics.get("empty_input_total", 0),
        "external_keywords_total": _metrics.get("external_keywords_total", 0),
        "vocabulary_keywords_total": _metrics.get("vocabulary_keywords_total", 0),
        "recency_fallback_total": _metrics.get("recency_fallback_total", 0),
        "avg_latency_ms": round(avg, 2),
    }


def reset_metrics() -> None:
    """Reset in-memory counters (for tests only)."""
    for key in _metrics:
        _metrics[key] = 0.0 if key == "sum_latency_ms" else 0
