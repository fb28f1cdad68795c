"""Locate and parse the JSON object inside a free-form model reply.

Local models often wrap the requested JSON in markdown fences, tags or
prose, or drop a comma between two string fields. Extraction tries an
ordered list of candidate substrings, each parsed strictly first and then
once more after a light repair; the first one that yields an object wins.
"""
from __future__ import annotations
import json
import logging
import re
from typing import Any, Callable, Iterator, Union

from shsuggest.common.errors import ExtractionError

LOGGER = logging.getLogger("shsuggest.ollama.extract")

JSONValue = Union[None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]]
JSONObject = dict[str, JSONValue]

_FENCE_RE = re.compile(r"```[\w+.-]*[^\S\n]*\n?(.*?)```", re.DOTALL)
_RESPONSE_TAG_RE = re.compile(r"<response>(.*?)</response>", re.DOTALL | re.IGNORECASE)
_JSON_TAG_RE = re.compile(r"<json>(.*?)</json>", re.DOTALL | re.IGNORECASE)
_KEY_COLON_RE = re.compile(r"\s*:")


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


def _string_end(text: str, start: int) -> int:
    """Index just past the string literal opening at `start`, or -1 if unterminated."""
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        i += 1
    return -1


def first_balanced_object(text: str) -> str | None:
    """
    Return the first brace-balanced `{...}` substring, skipping braces inside strings.

    Single pass: each closing brace pairs with the innermost open one, and the
    pair with the earliest opening brace wins. An unterminated string ends the scan.
    """
    opened: list[int] = []
    best: tuple[int, int] | None = None
    i = text.find("{")
    while 0 <= i < len(text):
        ch = text[i]
        if ch == '"':
            end = _string_end(text, i)
            if end == -1:
                break
            i = end
            continue
        if ch == "{":
            opened.append(i)
        elif ch == "}" and opened:
            start = opened.pop()
            if not opened:
                return text[start:i + 1]
            if best is None or start < best[0]:
                best = (start, i + 1)
        i += 1
    return text[best[0]:best[1]] if best else None


def candidates(raw: str) -> list[str]:
    """Ordered, de-duplicated, non-empty substrings that may hold the JSON object."""
    trimmed = raw.strip()
    found = [
        trimmed,
        _first_group(_FENCE_RE, raw),
        _first_group(_RESPONSE_TAG_RE, raw),
        _first_group(_JSON_TAG_RE, raw),
        first_balanced_object(raw),
    ]
    result: list[str] = []
    for item in found:
        if item is None:
            continue
        item = item.strip()
        if item and item not in result:
            result.append(item)
    return result or [trimmed]


def _string_spans(text: str) -> Iterator[tuple[int, int]]:
    i = text.find('"')
    while i != -1:
        end = _string_end(text, i)
        if end == -1:
            return
        yield i, end
        i = text.find('"', end)


def insert_missing_commas(text: str) -> str:
    """
    Insert a comma between two adjacent string tokens when the second is a key.

    `{"command": "ls" "description": "list"}` becomes
    `{"command": "ls", "description": "list"}`.
    """
    spans = list(_string_spans(text))
    positions = [
        first_end
        for (_, first_end), (second_start, second_end) in zip(spans, spans[1:])
        if not text[first_end:second_start].strip()
        and _KEY_COLON_RE.match(text, second_end)
    ]
    if not positions:
        return text
    pieces: list[str] = []
    prev = 0
    for pos in positions:
        pieces.append(text[prev:pos])
        pieces.append(",")
        prev = pos
    pieces.append(text[prev:])
    return "".join(pieces)


def _unchanged(text: str) -> str:
    return text


_TRANSFORMS: tuple[Callable[[str], str], ...] = (_unchanged, insert_missing_commas)


def parse_object(text: str) -> JSONObject | None:
    """Strict JSON parse; None unless the result is an object."""
    try:
        value = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def _attempts(raw: str) -> Iterator[tuple[str, Callable[[str], str]]]:
    for candidate in candidates(raw):
        for transform in _TRANSFORMS:
            yield candidate, transform


def extract_json_object(raw: str, expected_key: str) -> JSONObject:
    """
    Find the first candidate in `raw` that parses to a JSON object.

    Args:
        raw: Model reply text.
        expected_key: Key the caller is after; used in the error message only.

    Raises:
        ExtractionError: If no candidate parses, even after repair.
    """
    for candidate, transform in _attempts(raw):
        parsed = parse_object(transform(candidate))
        if parsed is not None:
            LOGGER.debug("Extracted JSON via %s (%d chars)", transform.__name__, len(candidate))
            return parsed
    raise ExtractionError(expected_key, raw)
