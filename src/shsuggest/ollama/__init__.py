"""Ollama client: transport, metrics, extraction and domain mapping."""
from __future__ import annotations

from shsuggest.ollama.client import OllamaClient

__all__ = ["OllamaClient"]
