"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (tree/help/chrome). Syntax highlighting style
for template content remains a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the frame painter."""

    name: str
    reset: str
    border: str
    title: str
    cursor: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    checkbox_checked: str
    filler: str
    help: str
    status: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[38;5;245m",
    title="\033[1m",
    cursor="\033[1;30;46m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    checkbox_checked="\033[38;5;42m",
    filler="\033[90m",
    help="\033[38;5;250m",
    status="\033[38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    border="\033[38;5;31m",
    title="\033[1;38;5;45m",
    cursor="\033[1;30;48;5;39m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    checkbox_checked="\033[38;5;84m",
    filler="\033[2;38;5;24m",
    help="\033[2;38;5;110m",
    status="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    border="",
    title="",
    cursor="\033[7m",
    tree_marker="",
    tree_dir="",
    tree_file="",
    checkbox_checked="",
    filler="",
    help="",
    status="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
