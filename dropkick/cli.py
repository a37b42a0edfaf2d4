"""Command-line front door for dropkick.

Resolves settings and the template root, builds the template tree, runs the
interactive browser, then materializes the selection into the working
directory. Setup failures exit non-zero with a message before the UI starts.
"""

from __future__ import annotations

import argparse
import logging
import sys
import termios
from functools import partial
from pathlib import Path, PurePath

from .browser import Browser, Extract
from .config import Settings, default_templates_path, load_repo_config, load_settings
from .errors import DropkickError
from .highlight import highlight_lines
from .interpolation import ConfigBuilder
from .materialize import materialize
from .runtime import run_browser_loop
from .terminal import TerminalController
from .tree_model import DirectoryEntry, TreeNode, build_template_tree
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _resolve_templates_dir(args: argparse.Namespace, settings: Settings) -> Path:
    if args.templates is not None:
        return Path(args.templates).expanduser()
    if settings.templates_dir is not None:
        return settings.templates_dir
    return default_templates_path()


def format_tree_listing(nodes: tuple[TreeNode, ...]) -> str:
    """Plain indented listing of the template tree, one node per line."""
    out: list[str] = []
    stack: list[tuple[TreeNode, int]] = [(node, 0) for node in reversed(nodes)]
    while stack:
        node, depth = stack.pop()
        suffix = "/" if isinstance(node, DirectoryEntry) else ""
        out.append(f"{'  ' * depth}{node.name}{suffix}\n")
        if isinstance(node, DirectoryEntry):
            stack.extend((child, depth + 1) for child in reversed(node.children))
    return "".join(out)


def open_terminal() -> TerminalController:
    """Attach to the process stdio; raises when stdin is not a terminal."""
    return TerminalController(sys.stdin.fileno(), sys.stdout.fileno())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dropkick",
        description="Pick template files interactively and copy them into the current project.",
    )
    parser.add_argument("--templates", metavar="DIR", default=None, help="Template root (default: ~/.bundlegem/templates).")
    parser.add_argument("--name", default=None, help="Project name (default: project.name from .dropkickrc).")
    parser.add_argument("--prefix", default=None, help="Prefix stripped for unprefixed_* placeholders.")
    parser.add_argument("--style", default=None, help="Pygments style name for the file view.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable UI colors.")
    parser.add_argument("--list", action="store_true", help="Print the template tree and exit.")
    parser.add_argument("--verbose", action="store_true", help="Log diagnostics to stderr.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, run the browser and export the selection."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    settings = load_settings()
    try:
        templates_dir = _resolve_templates_dir(args, settings)
    except DropkickError as exc:
        raise SystemExit(str(exc)) from exc
    try:
        roots = build_template_tree(
            templates_dir,
            marker_suffix=settings.marker_suffix,
            show_empty_dirs=settings.show_empty_dirs,
        )
    except OSError as exc:
        raise SystemExit(f"Cannot read template root {templates_dir}: {exc.strerror or exc}") from exc

    if args.list:
        sys.stdout.write(format_tree_listing(roots))
        return

    style = args.style or settings.style
    browser = Browser(
        roots=roots,
        highlighter=partial(highlight_lines, style=style, marker_suffix=settings.marker_suffix),
        template_root=templates_dir,
    )
    try:
        terminal = open_terminal()
    except (termios.error, OSError, ValueError) as exc:
        raise SystemExit(f"Cannot initialize terminal: {exc}") from exc

    theme = resolve_theme(args.theme or settings.theme, no_color=args.no_color)
    final_mode = run_browser_loop(browser, terminal, terminal.stdin_fd, theme=theme)
    if not isinstance(final_mode, Extract):
        return

    project = load_repo_config()
    builder = ConfigBuilder(
        name=args.name or project.name,
        prefix=args.prefix if args.prefix is not None else settings.prefix,
        template=project.template,
    )

    def context_for(destination: PurePath, binary: bool):
        return builder.for_destination(destination, binary).build()

    try:
        report = materialize(
            browser.selection,
            templates_dir,
            Path.cwd(),
            context_for,
            sys.stdout,
            marker_suffix=settings.marker_suffix,
        )
    except DropkickError as exc:
        raise SystemExit(str(exc)) from exc
    logger.debug(
        "export finished: %d imported, %d skipped, %d failed",
        len(report.imported),
        len(report.skipped),
        len(report.failed),
    )


if __name__ == "__main__":
    main()
