"""Command-line entry point: suggest or explain shell commands via Ollama."""
from __future__ import annotations
import argparse
import logging
import sys
from typing import Sequence, TextIO

import httpx

from shsuggest import __version__
from shsuggest.common.config import Config, ConfigLoader
from shsuggest.common.errors import InvalidInputError, ShsuggestError
from shsuggest.common.logging_setup import level_from_verbosity, setup_logging
from shsuggest.common.schema import Suggestion
from shsuggest.ollama.client import OllamaClient
from shsuggest.pipe import PipeRunner

LOGGER = logging.getLogger("shsuggest.cli")

EPILOG = """\
PROMPT or COMMAND values can also be provided via STDIN when omitted. When running in a TTY,
multiple suggestions are shown and you can interactively choose one. In non-interactive mode,
only the first suggestion is printed so it can be piped into other tooling."""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shsuggest",
        description="Turn a description into a shell command (or explain one) using a local Ollama model.",
        epilog=EPILOG,
    )
    ap.add_argument("-e", "--explain", action="store_true",
                    help="Explain the provided shell command instead of generating suggestions.")
    ap.add_argument("-n", "--count", type=int, default=None, help="Number of suggestions to request")
    ap.add_argument("-m", "--model", default=None, help="Ollama model to use")
    ap.add_argument("--endpoint", default=None, help="Ollama endpoint URL")
    ap.add_argument("--list-models", action="store_true", help="List installed models and exit")
    ap.add_argument("--config", default=None, help="Config file path (default: ~/.shsuggest)")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("words", nargs=argparse.REMAINDER, metavar="PROMPT", help="Prompt or command text")
    return ap


def resolve_input(words: Sequence[str], question: str, stdin: TextIO, stderr: TextIO) -> str:
    """Positional words, else piped stdin, else an interactive question."""
    words = list(words)
    if words[:1] == ["--"]:
        words = words[1:]
    if words:
        return " ".join(words).strip()
    if not stdin.isatty():
        return stdin.read().strip()
    stderr.write(question)
    stderr.flush()
    return (stdin.readline() or "").strip()


def choose_suggestion(suggestions: Sequence[Suggestion], stdin: TextIO, stderr: TextIO) -> Suggestion:
    """List suggestions on stderr and read a 1-based choice; Enter or EOF picks the first."""
    stderr.write("\nSuggestions:\n")
    for num, suggestion in enumerate(suggestions, start=1):
        stderr.write(f" [{num}] {suggestion.command}\n")
        if suggestion.description:
            stderr.write(f"     {suggestion.description}\n")

    total = len(suggestions)
    while True:
        stderr.write(f"Choose a suggestion [1-{total}] (default 1): ")
        stderr.flush()
        line = stdin.readline()
        if not line:
            return suggestions[0]
        line = line.strip()
        if not line:
            return suggestions[0]
        if line.isdigit() and 1 <= int(line) <= total:
            return suggestions[int(line) - 1]
        stderr.write("Invalid selection.\n")


def _load_config(args: argparse.Namespace) -> Config:
    cfg = ConfigLoader(args.config).load()
    overrides = {
        "model": args.model,
        "ollama_endpoint": args.endpoint,
        "num_suggestions": args.count,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        cfg = Config.from_values({**cfg.model_dump(), **overrides})
    return cfg


def _run(args: argparse.Namespace, transport: httpx.BaseTransport | None) -> int:
    stdin, stdout, stderr = sys.stdin, sys.stdout, sys.stderr
    cfg = _load_config(args)
    client = OllamaClient.from_config(cfg, transport=transport)

    if args.list_models:
        for name in client.list_models():
            stdout.write(name + "\n")
        return 0

    if args.explain:
        command = resolve_input(args.words, "Enter the shell command to explain: ", stdin, stderr)
        if not command:
            raise InvalidInputError("No command provided to explain.")
        result, metrics = client.explain_with_metrics(command)
        LOGGER.info("Explained with %s (eval_count=%s)", cfg.model, metrics.eval_count)
        stdout.write(result.explanation + "\n")
        return 0

    prompt = resolve_input(args.words, "Describe what you want to do: ", stdin, stderr)
    if not prompt:
        raise InvalidInputError("No prompt provided for suggestions.")
    suggestions, metrics = client.suggest_with_metrics(prompt, cfg.num_suggestions)
    LOGGER.info("Received %d suggestion(s) from %s (eval_count=%s)", len(suggestions), cfg.model, metrics.eval_count)

    if cfg.pipe_first_into:
        try:
            PipeRunner().pipe(cfg.pipe_first_into, suggestions[0].command)
            stderr.write(f'First suggestion piped into "{cfg.pipe_first_into}".\n')
        except ShsuggestError as e:
            LOGGER.warning("Pipe failed: %s", e)
            stderr.write(f"Warning: {e}\n")

    if stdin.isatty() and stdout.isatty():
        choice = choose_suggestion(suggestions, stdin, stderr)
        stdout.write(choice.command + "\n")
        if choice.description:
            stderr.write(choice.description + "\n")
    else:
        stdout.write(suggestions[0].command + "\n")
    return 0


def main(argv: Sequence[str] | None = None, transport: httpx.BaseTransport | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level_from_verbosity(args.verbose))
    try:
        return _run(args, transport)
    except ShsuggestError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
