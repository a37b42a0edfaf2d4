"""Copy selected templates into the project directory, rendering placeholders.

Existing destination files are never overwritten. One file failing to
render is reported and skipped; a missing git ``user.name`` aborts the whole
export before anything is written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import TextIO

from .errors import TemplateRenderError, TemplateRootError
from .interpolation import InterpolationContext
from .template import render_template
from .tree_model import DEFAULT_MARKER_SUFFIX, strip_marker_suffix

logger = logging.getLogger(__name__)

RULE = "=" * 50


@dataclass
class MaterializeReport:
    total: int = 0
    imported: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)


def destination_for(
    source: Path,
    template_root: Path,
    marker_suffix: str = DEFAULT_MARKER_SUFFIX,
) -> PurePath:
    """Destination path relative to the project root.

    The leading template-folder segment is dropped and the marker suffix is
    stripped: ``<root>/gem/lib/foo.rb.tt`` -> ``lib/foo.rb``.
    """
    relative = source.relative_to(template_root)
    parts = relative.parts[1:] if len(relative.parts) > 1 else relative.parts
    stripped = PurePath(*parts)
    return stripped.with_name(strip_marker_suffix(stripped.name, marker_suffix))


def _decode(raw: bytes) -> str | None:
    if b"\x00" in raw:
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


@dataclass(frozen=True)
class _PlannedCopy:
    relative: PurePath
    destination: Path
    payload: bytes | None = None
    error: str | None = None
    exists: bool = False


def _plan_copy(
    source: Path,
    relative: PurePath,
    destination: Path,
    context_for: Callable[[PurePath, bool], InterpolationContext],
) -> _PlannedCopy:
    read_error = ""
    try:
        raw: bytes | None = source.read_bytes()
    except OSError as exc:
        raw, read_error = None, str(exc)
    text = _decode(raw) if raw is not None else None
    # Built for every file, including skipped and binary ones.
    context = context_for(relative, raw is not None and text is None)

    if destination.exists():
        return _PlannedCopy(relative, destination, exists=True)
    if raw is None:
        return _PlannedCopy(relative, destination, error=read_error)
    if text is None:
        return _PlannedCopy(relative, destination, payload=raw)
    try:
        rendered = render_template(text, context.as_dict())
    except TemplateRenderError as exc:
        return _PlannedCopy(relative, destination, error=str(exc))
    return _PlannedCopy(relative, destination, payload=rendered.encode("utf-8"))


def materialize(
    selected: Iterable[str],
    template_root: Path,
    dest_root: Path,
    context_for: Callable[[PurePath, bool], InterpolationContext],
    out: TextIO,
    marker_suffix: str = DEFAULT_MARKER_SUFFIX,
) -> MaterializeReport:
    """Render and write every selected template below ``dest_root``.

    A context is built for every file by
    ``context_for(relative_destination, is_binary)``. Text templates are
    rendered with it; binary templates are copied verbatim. Everything is
    planned before the first write, so a ``GitIdentityError`` raised by
    ``context_for`` propagates with nothing written. ``TemplateRootError`` is
    raised when ``dest_root`` lies inside the template root.
    """
    sources = sorted(selected)
    report = MaterializeReport(total=len(sources))
    if not sources:
        out.write("\nNo files selected.\n\n")
        return report
    if dest_root.resolve().is_relative_to(template_root.resolve()):
        raise TemplateRootError(f"Refusing to write inside the template root {template_root}")

    plan: list[_PlannedCopy] = []
    for identifier in sources:
        source = Path(identifier)
        relative = destination_for(source, template_root, marker_suffix)
        plan.append(_plan_copy(source, relative, dest_root / relative, context_for))

    out.write("\nSelected files:\n")
    out.write(f"{RULE}\n")
    for item in plan:
        out.write(f"  • {item.relative}\n")
        if item.exists or item.destination.exists():
            out.write(f"    Skipping copy because file existed locally. {item.relative}\n")
            report.skipped.append(item.destination)
            continue
        error = item.error
        if error is None and item.payload is not None:
            try:
                item.destination.parent.mkdir(parents=True, exist_ok=True)
                item.destination.write_bytes(item.payload)
            except OSError as exc:
                error = str(exc)
        if error is not None:
            out.write(f"    Error copying {item.relative}: {error}\n")
            report.failed.append((item.destination, error))
            continue
        logger.debug("wrote %s", item.destination)
        report.imported.append(item.destination)

    out.write(f"{RULE}\n")
    out.write(f"Imported {len(report.imported)} of {report.total} file(s)")
    out.write(f" ({len(report.skipped)} skipped, {len(report.failed)} failed)\n\n")
    return report


__all__ = [
    "MaterializeReport",
    "destination_for",
    "materialize",
]
