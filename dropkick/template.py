"""Flat placeholder substitution for template files.

Native placeholders are ``{{ field }}``; dotted segments index into lists
(``{{ constant_array.0 }}``). Templates written in the ERB dialect,
``<%= config[:field] %>``, are rewritten to native syntax first.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .errors import TemplateRenderError

_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)*)\s*}}")
_ERB_PATTERN = re.compile(r"<%=\s*config\s*\[\s*:(?P<field>[A-Za-z_][A-Za-z0-9_]*)\s*\]\s*-?%>")


def rewrite_erb_placeholders(template: str) -> str:
    """Translate ``<%= config[:field] %>`` placeholders into ``{{ field }}``."""
    return _ERB_PATTERN.sub(lambda match: "{{ " + match.group("field") + " }}", template)


def _resolve_value(context: Mapping[str, Any], dotted_path: str) -> Any:
    value: Any = context
    for segment in dotted_path.split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                raise KeyError(segment)
            value = value[segment]
            continue
        if isinstance(value, (list, tuple)) and segment.isdigit():
            index = int(segment)
            if index >= len(value):
                raise KeyError(segment)
            value = value[index]
            continue
        raise KeyError(segment)
    return value


def format_value(value: Any) -> str:
    """Stringify one context value: booleans lower-case, lists comma-joined."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(item) for item in value)
    return str(value)


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """Substitute every placeholder in ``template`` from ``context``.

    Raises ``TemplateRenderError`` naming the first placeholder that cannot be
    resolved. Braces that do not form a placeholder are left intact.
    """

    def substitute(match: re.Match[str]) -> str:
        expression = match.group("expression")
        try:
            value = _resolve_value(context, expression)
        except KeyError as exc:
            raise TemplateRenderError(expression) from exc
        return format_value(value)

    return _PLACEHOLDER_PATTERN.sub(substitute, rewrite_erb_placeholders(template))


__all__ = [
    "rewrite_erb_placeholders",
    "format_value",
    "render_template",
]
