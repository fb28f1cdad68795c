"""Normalize the performance counters Ollama attaches to a generation."""
from __future__ import annotations
import math
from typing import Any, Mapping

from shsuggest.common.schema import Metrics

# Ollama reports durations in nanoseconds, but nothing in the protocol
# guarantees the unit. Values this large are implausible as seconds.
NANOSECOND_THRESHOLD = 1_000_000
NANOSECONDS_PER_SECOND = 1e9


def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _count(value: Any) -> int | None:
    number = _number(value)
    if number is None or not math.isfinite(number):
        return None
    count = int(number)
    return count if count > 0 else None


def _seconds(value: Any) -> float | None:
    number = _number(value)
    if number is None or not math.isfinite(number) or number <= 0:
        return None
    if number > NANOSECOND_THRESHOLD:
        number /= NANOSECONDS_PER_SECOND
    return number


def record_metrics(raw: Mapping[str, Any] | None) -> Metrics:
    """
    Build a fresh `Metrics` snapshot from a raw `/api/generate` payload.

    Args:
        raw: Decoded response. Empty or None yields all-absent metrics.
    """
    if not raw:
        return Metrics()
    return Metrics(
        eval_count=_count(raw.get("eval_count")),
        eval_duration=_seconds(raw.get("eval_duration")),
        total_duration=_seconds(raw.get("total_duration")),
    )
