"""
shsuggest package.

Provides:
- Shell command suggestions and explanations from a local Ollama server
- Tolerant extraction of JSON payloads from free-form model replies
- A small CLI (`shsuggest`) with optional piping of the first suggestion
"""

__version__ = "0.1.0.dev0"
