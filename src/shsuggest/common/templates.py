"""Prompt templating helpers."""
from __future__ import annotations

SUGGESTION_TEMPLATE = '''You generate shell commands for experienced terminal users.
Respond ONLY with valid JSON that matches this schema:
{
  "suggestions": [
    {
      "command": "one line shell command",
      "description": "short explanation"
    }
  ]
}
Create {{count}} suggestions that satisfy the schema.
Keep commands concise, safe, and deterministic when possible.
Human prompt:
"""{{input}}"""'''

EXPLAIN_TEMPLATE = '''You explain shell commands clearly and safely.
Respond ONLY with valid JSON that matches this schema:
{
  "explanation": "plain language explanation"
}
Explain the following command and mention potential hazards:
"""{{input}}"""'''


def render_prompt(template: str, user_input: str, **values: object) -> str:
    """
    Render user input into the template.

    Args:
        template: Template content containing {{input}} and optional {{name}} slots.
        user_input: Input string, inserted last so it is never re-rendered.
        values: Extra named slots.

    Returns:
        Rendered prompt.
    """
    for name, value in values.items():
        template = template.replace("{{" + name + "}}", str(value))
    return template.replace("{{input}}", user_input)


def build_suggestion_prompt(user_text: str, count: int) -> str:
    """Instruction asking for `count` (at least 1) command suggestions."""
    return render_prompt(SUGGESTION_TEMPLATE, user_text, count=max(1, int(count)))


def build_explain_prompt(command: str) -> str:
    return render_prompt(EXPLAIN_TEMPLATE, command)
