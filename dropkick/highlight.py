"""Template text loading and Pygments-backed syntax highlighting.

Produces per-line ``(text, color)`` spans for the file view. Lexer lookup
strips the marker suffix first and special-cases well-known extension-less
build files. Terminal control bytes are neutralized before display.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .tree_model import DEFAULT_MARKER_SUFFIX, strip_marker_suffix

DEFAULT_STYLE = "monokai"
TAB_REPLACEMENT = "  "

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_VALID_STYLES: dict[str, StyleMeta] = {}
_INVALID_STYLES: set[str] = set()
_COLOR_CACHE: dict[tuple[str, object], str] = {}

# Extension-less build files keyed by lower-cased name -> Pygments lexer alias.
SPECIAL_FILENAME_LEXERS: dict[str, str] = {
    "dockerfile": "docker",
    "gemfile": "ruby",
    "rakefile": "ruby",
    "guardfile": "ruby",
    "capfile": "ruby",
    "vagrantfile": "ruby",
    "makefile": "make",
    "cmakelists.txt": "cmake",
    "justfile": "make",
}

Span = tuple[str, str]
StyledLine = list[Span]


def read_template_text(path: Path) -> str | None:
    """Read template text, returning ``None`` for binary content.

    Content is treated as binary when it holds NUL bytes or is not valid
    UTF-8 (a leading BOM is accepted).
    """
    raw = path.read_bytes()
    if b"\x00" in raw:
        return None
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return None


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _style_for_name(style: str) -> StyleMeta:
    """Resolve a Pygments style, falling back to ``monokai`` for unknown names."""
    cached = _VALID_STYLES.get(style)
    if cached is not None:
        return cached
    if style in _INVALID_STYLES:
        return _style_for_name(DEFAULT_STYLE)
    try:
        resolved = get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return _style_for_name(DEFAULT_STYLE)
    _VALID_STYLES[style] = resolved
    return resolved


def lexer_for_path(path: Path, source: str, marker_suffix: str = DEFAULT_MARKER_SUFFIX) -> Lexer:
    """Pick a lexer for a template path.

    Special build-file names win, then filename-based lookup on the name with
    the marker suffix removed, then plain text.
    """
    name = strip_marker_suffix(path.name, marker_suffix)
    options = {"stripnl": False, "ensurenl": True}
    alias = SPECIAL_FILENAME_LEXERS.get(name.lower())
    if alias is not None:
        try:
            return get_lexer_by_name(alias, **options)
        except ClassNotFound:
            pass
    try:
        return get_lexer_for_filename(name, source, **options)
    except ClassNotFound:
        return TextLexer(**options)


def _ansi_color(style: StyleMeta, style_name: str, token_type: object) -> str:
    key = (style_name, token_type)
    cached = _COLOR_CACHE.get(key)
    if cached is not None:
        return cached
    color = style.style_for_token(token_type).get("color")
    sgr = ""
    if color:
        red, green, blue = int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)
        sgr = f"\033[38;2;{red};{green};{blue}m"
    _COLOR_CACHE[key] = sgr
    return sgr


def highlight_lines(
    content: str,
    path: Path,
    style: str = DEFAULT_STYLE,
    marker_suffix: str = DEFAULT_MARKER_SUFFIX,
) -> list[StyledLine]:
    """Highlight ``content`` into one list of ``(text, color)`` spans per line.

    ``color`` is an ANSI SGR prefix (empty for the default foreground). Tabs
    expand to two spaces. Empty content yields no lines.
    """
    if not content:
        return []

    source = sanitize_terminal_text(content)
    lexer = lexer_for_path(path, source, marker_suffix)
    resolved_style = _style_for_name(style)
    style_name = resolved_style.__name__

    lines: list[StyledLine] = [[]]
    for token_type, value in lexer.get_tokens(source):
        color = _ansi_color(resolved_style, style_name, token_type)
        parts = value.replace("\r", "").replace("\t", TAB_REPLACEMENT).split("\n")
        for idx, part in enumerate(parts):
            if idx > 0:
                lines.append([])
            if part:
                lines[-1].append((part, color))
    if not lines[-1]:
        lines.pop()
    return lines


__all__ = [
    "DEFAULT_STYLE",
    "SPECIAL_FILENAME_LEXERS",
    "Span",
    "StyledLine",
    "read_template_text",
    "sanitize_terminal_text",
    "lexer_for_path",
    "highlight_lines",
]
