from __future__ import annotations

"""canopy.utils.templates
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Jinja2 helpers for the line formats used by :class:`canopy.Printer`.

Usage
-----
>>> from canopy.utils.templates import render
>>> render("{{ name }} ({{ value }} KB)", {"name": "a.txt", "value": 120})
'a.txt (120 KB)'
"""

from functools import lru_cache
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, Template

__all__ = ["render", "compile_template"]

# StrictUndefined so a typo in a line format fails loudly instead of printing ""
env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)


@lru_cache(maxsize=64)
def compile_template(template_string: str) -> Template:
    """Return a compiled template; Printer reuses it for every node."""
    return env.from_string(template_string)


def render(template_string: str, data: Mapping[str, Any]) -> str:  # noqa: D401
    """Render the *template_string* with *data* using Jinja2.

    Raises:
        RuntimeError: wrapping any Jinja2 syntax or undefined-variable error.
    """
    try:
        return compile_template(template_string).render(data)
    except Exception as exc:
        raise RuntimeError(
            f"Error rendering template: {exc}\n"
            f"Template: \"{template_string[:100]}{'...' if len(template_string) > 100 else ''}\"\n"
            f"Data keys: {list(data.keys())}"
        ) from exc
