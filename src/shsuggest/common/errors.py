"""Error taxonomy shared by the client and the CLI."""
from __future__ import annotations


class ShsuggestError(Exception):
    """Base class for every error the CLI reports as a single line."""


class InvalidInputError(ShsuggestError):
    """Empty prompt or command passed to a public operation."""


class ConfigError(ShsuggestError):
    """Configuration file or value could not be used."""


class TransportError(ShsuggestError):
    """Network failure, non-2xx status or non-JSON body from the server."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ExtractionError(ShsuggestError):
    """No candidate in the model reply parsed as a JSON object."""

    def __init__(self, expected_key: str, raw: str) -> None:
        super().__init__(
            f'Failed to decode JSON with expected "{expected_key}" key. Raw response: {raw}'
        )
        self.expected_key = expected_key
        self.raw = raw


class DomainError(ShsuggestError):
    """Parsed JSON lacked the expected shape or had no usable entries."""
