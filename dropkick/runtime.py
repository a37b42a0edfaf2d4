"""Main interactive loop for the template browser.

Draws a frame whenever state or terminal size changed, then waits briefly
for input. Keys queued while a frame was being drawn are coalesced: only the
most recent one is applied, which bounds latency when painting is slow.
"""

from __future__ import annotations

from collections.abc import Callable

from .browser import Browser, FileView, Frame, Mode
from .input import action_for_key, read_latest_key
from .render import render_frame
from .terminal import TerminalController
from .ui_theme import DEFAULT_THEME, UITheme

POLL_TIMEOUT_MS = 120


def run_browser_loop(
    browser: Browser,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme = DEFAULT_THEME,
    paint: Callable[[Frame, int, int, UITheme], None] = render_frame,
) -> Mode:
    """Run the browser until it reaches ``Exit`` or ``Extract`` and return that mode.

    The terminal is held in raw mode for the whole loop and restored on every
    exit path, including exceptions raised by painting or dispatch.
    """
    dirty = True
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while not browser.finished:
            term = terminal.size()
            viewport = terminal.viewport_height()
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                dirty = True
            if dirty:
                paint(browser.frame(viewport), term.columns, term.lines, theme)
                dirty = False

            try:
                key = read_latest_key(stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if not key:
                continue
            action = action_for_key(key, isinstance(browser.mode, FileView))
            if action is None:
                continue
            browser.dispatch(action, viewport)
            dirty = True
    return browser.mode


__all__ = [
    "POLL_TIMEOUT_MS",
    "run_browser_loop",
]
