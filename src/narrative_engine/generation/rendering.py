"""Jinja2 rendering of synthesized descriptions."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

_DESCRIPTIONS_DIR = Path(__file__).parent / "descriptions"
_jinja_env: Environment | None = None


def _get_jinja() -> Environment:
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = Environment(
            loader=FileSystemLoader(str(_DESCRIPTIONS_DIR)),
            autoescape=False,
            trim_blocks=True,
            keep_trailing_newline=False,
        )
    return _jinja_env


def render(template_name: str, **context: Any) -> str:
    return _get_jinja().get_template(template_name).render(**context).strip()
