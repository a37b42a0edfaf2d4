"""Exception types shared by the scaffolding pipeline."""

from __future__ import annotations


class DropkickError(Exception):
    """Base class for errors the CLI reports as a message plus non-zero exit."""


class TemplateRootError(DropkickError):
    """Template root exists but cannot be scanned, or home is unresolved."""


class GitIdentityError(DropkickError):
    """Mandatory git metadata (``user.name``) is not configured."""


class TemplateRenderError(DropkickError):
    """A placeholder references a field missing from the interpolation context."""

    def __init__(self, field: str) -> None:
        super().__init__(f"missing value for '{field}'")
        self.field = field
