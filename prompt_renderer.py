# prompt_renderer.py
"""Utilities for rendering LLM prompts using Jinja2 templates."""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

PROMPTS_PATH = Path(__file__).parent / "prompts"
_env = Environment(
    loader=FileSystemLoader(PROMPTS_PATH),
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)


def sanitize_prompt_field(value: str | None, placeholder: str) -> str:
    """Replace a missing or blank prompt input with ``placeholder``."""
    if value is None or not value.strip():
        return placeholder
    return value


def render_prompt(template_name: str, context: dict[str, Any]) -> str:
    """Render a Jinja2 template from the prompts directory."""
    template = _env.get_template(template_name)
    return template.render(**context)
