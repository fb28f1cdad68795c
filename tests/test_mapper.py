from __future__ import annotations

import pytest

from shsuggest.common.errors import DomainError
from shsuggest.ollama.mapper import natural_key, to_explanation, to_model_names, to_suggestions


def test_suggestions_keep_order_and_trim() -> None:
    data = {
        "suggestions": [
            {"command": "  ls -la ", "description": " long listing "},
            {"command": "ls"},
        ]
    }
    out = to_suggestions(data)
    assert [s.command for s in out] == ["ls -la", "ls"]
    assert out[0].description == "long listing"
    assert out[1].description == ""


def test_malformed_entries_are_dropped() -> None:
    data = {
        "suggestions": [
            {"command": "ls", "description": "list"},
            {"description": "no command"},
            "just a string",
            {"command": "   "},
        ]
    }
    out = to_suggestions(data)
    assert len(out) == 1
    assert out[0].command == "ls"


def test_scalar_values_are_stringified() -> None:
    out = to_suggestions({"suggestions": [{"command": 42, "description": None}]})
    assert out[0].command == "42"
    assert out[0].description == ""


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"suggestions": "ls"},
        {"suggestions": []},
        {"suggestions": [{"description": "x"}, {"cmd": "ls"}]},
    ],
)
def test_no_usable_suggestions_raise(data: dict) -> None:
    with pytest.raises(DomainError):
        to_suggestions(data)


def test_explanation_trimmed_and_coerced() -> None:
    assert to_explanation({"explanation": "  Lists files.\n"}) == "Lists files."
    assert to_explanation({"explanation": 3.5}) == "3.5"


def test_explanation_missing_raises() -> None:
    with pytest.raises(DomainError):
        to_explanation({"suggestions": []})
    with pytest.raises(DomainError):
        to_explanation({"explanation": {"nested": "x"}})


def test_model_names_dedup_keeps_first_casing() -> None:
    data = {"models": [{"name": "llama3"}, {"name": "Llama3"}, {"name": "gemma3"}]}
    assert to_model_names(data) == ["gemma3", "llama3"]


def test_model_names_natural_order() -> None:
    data = {
        "models": [
            {"name": "qwen2.5:14b"},
            {"name": "qwen2.5:7b"},
            {"name": "Mistral"},
            {"name": "llama3.10"},
            {"name": "llama3.2"},
            {"size": 1},
            "bogus",
        ]
    }
    assert to_model_names(data) == ["llama3.2", "llama3.10", "Mistral", "qwen2.5:7b", "qwen2.5:14b"]


def test_model_names_require_list_and_entries() -> None:
    with pytest.raises(DomainError):
        to_model_names({})
    with pytest.raises(DomainError):
        to_model_names({"models": [{"size": 1}]})


def test_natural_key_numeric_runs() -> None:
    assert natural_key("a10") > natural_key("a9")
    assert natural_key("B2") == natural_key("b2")


def test_container_description_keeps_the_entry() -> None:
    out = to_suggestions({"suggestions": [{"command": "ls", "description": ["list", "files"]}]})
    assert [s.command for s in out] == ["ls"]
    assert out[0].description == '["list", "files"]'


def test_container_command_skips_only_that_entry() -> None:
    out = to_suggestions({"suggestions": [{"command": ["ls"]}, {"command": "pwd", "description": {"a": 1}}]})
    assert [s.command for s in out] == ["pwd"]
    assert out[0].description == '{"a": 1}'
