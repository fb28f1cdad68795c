"""Ollama client: suggest and explain shell commands, list installed models.

Each public call performs one blocking round-trip. Metrics are returned
alongside results rather than kept on the instance, so a client can be
shared between threads.
"""
from __future__ import annotations
import logging
import time

import httpx

from shsuggest.common.config import Config
from shsuggest.common.errors import DomainError, InvalidInputError, TransportError
from shsuggest.common.schema import ExplanationResult, Generation, GenerationRequest, Metrics, Suggestion
from shsuggest.common.templates import build_explain_prompt, build_suggestion_prompt
from shsuggest.ollama.extract import extract_json_object
from shsuggest.ollama.mapper import to_explanation, to_model_names, to_suggestions
from shsuggest.ollama.metrics import record_metrics
from shsuggest.ollama.transport import Transport

LOGGER = logging.getLogger("shsuggest.ollama.client")


class OllamaClient:
    def __init__(
        self,
        endpoint: str,
        model: str,
        temperature: float = 0.3,
        timeout: float = 30.0,
        num_thread: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.num_thread = num_thread
        self.transport = Transport(endpoint, timeout=timeout, transport=transport)

    @classmethod
    def from_config(cls, cfg: Config, transport: httpx.BaseTransport | None = None) -> "OllamaClient":
        return cls(
            endpoint=cfg.ollama_endpoint,
            model=cfg.model,
            temperature=cfg.temperature,
            timeout=cfg.request_timeout,
            num_thread=cfg.num_thread,
            transport=transport,
        )

    def generate(self, prompt: str) -> Generation:
        """
        Run one non-streaming generation.

        Raises:
            TransportError: On network/HTTP failure or a server-reported error.
            DomainError: If the payload carries no `response` text.
        """
        request = GenerationRequest(
            model=self.model,
            prompt=prompt,
            temperature=self.temperature,
            num_thread=self.num_thread,
        )
        LOGGER.debug("Generating with model=%s prompt_chars=%d", request.model, len(prompt))
        start = time.perf_counter()
        data = self.transport.post("/api/generate", request.to_payload())
        elapsed = time.perf_counter() - start

        if data.get("response") is None:
            if data.get("error") is not None:
                error = str(data["error"])
                raise TransportError(f"Ollama error: {error}", body=error)
            raise DomainError("Unexpected Ollama response payload.")

        metrics = record_metrics(data)
        rate = metrics.tokens_per_second(elapsed)
        if rate is not None:
            LOGGER.debug("Generated %s tokens in %.2fs (%.1f tok/s)", metrics.eval_count, elapsed, rate)
        return Generation(text=str(data["response"]), metrics=metrics, elapsed=elapsed)

    def suggest_with_metrics(self, prompt: str, count: int = 1) -> tuple[list[Suggestion], Metrics]:
        prompt = prompt.strip()
        if not prompt:
            raise InvalidInputError("Cannot request suggestions for an empty prompt.")

        generation = self.generate(build_suggestion_prompt(prompt, count))
        decoded = extract_json_object(generation.text, "suggestions")
        return to_suggestions(decoded), generation.metrics

    def suggest(self, prompt: str, count: int = 1) -> list[Suggestion]:
        """Return at least one suggestion, in the order the model ranked them."""
        suggestions, _ = self.suggest_with_metrics(prompt, count)
        return suggestions

    def explain_with_metrics(self, command: str) -> tuple[ExplanationResult, Metrics]:
        command = command.strip()
        if not command:
            raise InvalidInputError("Cannot explain an empty command.")

        generation = self.generate(build_explain_prompt(command))
        decoded = extract_json_object(generation.text, "explanation")
        result = ExplanationResult(command=command, explanation=to_explanation(decoded))
        return result, generation.metrics

    def explain(self, command: str) -> ExplanationResult:
        result, _ = self.explain_with_metrics(command)
        return result

    def list_models(self) -> list[str]:
        """Installed model names, de-duplicated and naturally sorted."""
        return to_model_names(self.transport.get("/api/tags"))
