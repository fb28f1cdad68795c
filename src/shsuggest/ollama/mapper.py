"""Map extracted JSON onto typed results."""
from __future__ import annotations
import json
import re
from typing import Any, Mapping

from shsuggest.common.errors import DomainError
from shsuggest.common.schema import Suggestion

_DIGITS_RE = re.compile(r"(\d+)")


def _text(value: Any) -> str:
    """String form of a JSON scalar; containers and null are rejected."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise DomainError(f"Expected a text value, got {type(value).__name__}.")


def _description(value: Any) -> str:
    """Descriptions never sink an entry; containers are kept as compact JSON."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return _text(value).strip()


def _list_field(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        raise DomainError(f'LLM response missing "{key}" array.')
    return value


def to_suggestions(data: Mapping[str, Any]) -> list[Suggestion]:
    """
    Build the ranked suggestion list.

    Entries that are not objects, lack `command` or have a blank or
    non-scalar command are skipped; the batch only fails when nothing usable remains.
    """
    suggestions: list[Suggestion] = []
    for item in _list_field(data, "suggestions"):
        if not isinstance(item, dict) or item.get("command") is None:
            continue
        try:
            command = _text(item["command"]).strip()
        except DomainError:
            continue
        description = _description(item.get("description"))
        if not command:
            continue
        suggestions.append(Suggestion(command=command, description=description))

    if not suggestions:
        raise DomainError("No usable suggestions were returned by the LLM.")
    return suggestions


def to_explanation(data: Mapping[str, Any]) -> str:
    if data.get("explanation") is None:
        raise DomainError('LLM response missing "explanation" field.')
    return _text(data["explanation"]).strip()


def natural_key(name: str) -> tuple[tuple[int, Any], ...]:
    """Case-insensitive sort key comparing digit runs numerically."""
    return tuple(
        (0, int(part)) if part.isdigit() else (1, part.casefold())
        for part in _DIGITS_RE.split(name)
        if part
    )


def to_model_names(data: Mapping[str, Any]) -> list[str]:
    """
    Installed model names, naturally sorted.

    Names differing only in case are collapsed; the casing seen first wins.
    """
    seen: dict[str, str] = {}
    for entry in _list_field(data, "models"):
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            continue
        name = entry["name"].strip()
        if name:
            seen.setdefault(name.casefold(), name)

    if not seen:
        raise DomainError("No installed models were reported by Ollama.")
    return sorted(seen.values(), key=lambda name: (natural_key(name), name))
