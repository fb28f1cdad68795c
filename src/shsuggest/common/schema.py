"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class GenerationRequest(BaseModel):
    """Body of a non-streaming `/api/generate` call."""
    model_config = ConfigDict(frozen=True)

    model: str
    prompt: str
    temperature: float = 0.3
    num_thread: int | None = None

    def to_payload(self) -> dict[str, Any]:
        options: dict[str, Any] = {"temperature": self.temperature}
        if self.num_thread is not None:
            options["num_thread"] = self.num_thread
        return {
            "model": self.model,
            "prompt": self.prompt,
            "stream": False,
            "options": options,
        }


class Suggestion(BaseModel):
    """One ranked command suggestion."""
    model_config = ConfigDict(frozen=True)

    command: str
    description: str = ""

    @field_validator("command")
    @classmethod
    def _command_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("command must not be empty")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()


class ExplanationResult(BaseModel):
    """Explanation of a single shell command."""
    model_config = ConfigDict(frozen=True)

    command: str
    explanation: str


@dataclass(frozen=True)
class Metrics:
    """Performance counters reported by one generation call.

    Durations are in seconds. Every field is None when the server did not
    report it (or reported something unusable).
    """
    eval_count: int | None = None
    eval_duration: float | None = None
    total_duration: float | None = None

    def tokens_per_second(self, fallback_duration: float | None = None) -> float | None:
        """
        Derive generation throughput.

        The duration used is the first positive one of `eval_duration`,
        `total_duration` and `fallback_duration`.

        Returns:
            Tokens per second, or None when no count or usable duration exists.
        """
        if not self.eval_count:
            return None
        for duration in (self.eval_duration, self.total_duration, fallback_duration):
            if duration is not None and duration > 0:
                rate = self.eval_count / duration
                return rate if math.isfinite(rate) and rate > 0 else None
        return None


@dataclass(frozen=True)
class Generation:
    """Raw model text together with the metrics of the call that produced it."""
    text: str
    metrics: Metrics = field(default_factory=Metrics)
    elapsed: float | None = None
