"""User settings (JSON) and per-repository project config (YAML).

Settings live in the platform config directory and are read-only at runtime.
The repo config is ``./.dropkickrc``. All access is defensive: a missing or
malformed file falls back to defaults.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import TemplateRootError
from .highlight import DEFAULT_STYLE
from .tree_model import DEFAULT_MARKER_SUFFIX

APP_NAME = "dropkick"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
REPO_CONFIG_FILENAME = ".dropkickrc"
DEFAULT_PROJECT_NAME = "Repo Name"
TEMPLATES_SUBDIR = Path(".bundlegem") / "templates"


@dataclass(frozen=True)
class Settings:
    templates_dir: Path | None = None
    marker_suffix: str = DEFAULT_MARKER_SUFFIX
    prefix: str = ""
    style: str = DEFAULT_STYLE
    theme: str | None = None
    show_empty_dirs: bool = True


@dataclass(frozen=True)
class ProjectConfig:
    name: str = DEFAULT_PROJECT_NAME
    template: str = ""


def load_config() -> dict[str, object]:
    """Load the settings JSON object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _string_setting(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_settings() -> Settings:
    """Build ``Settings`` from the config file, ignoring invalid values."""
    data = load_config()
    templates_dir = _string_setting(data, "templates_dir")
    show_empty_dirs = data.get("show_empty_dirs")
    prefix = data.get("prefix")
    return Settings(
        templates_dir=Path(templates_dir).expanduser() if templates_dir else None,
        marker_suffix=_string_setting(data, "marker_suffix") or DEFAULT_MARKER_SUFFIX,
        prefix=prefix if isinstance(prefix, str) else "",
        style=_string_setting(data, "style") or DEFAULT_STYLE,
        theme=_string_setting(data, "theme"),
        show_empty_dirs=show_empty_dirs if isinstance(show_empty_dirs, bool) else True,
    )


def home_directory() -> Path:
    """Resolve the user's home directory from ``HOME``/``USERPROFILE``."""
    home = os.environ.get("HOME") or os.environ.get("USERPROFILE")
    if not home:
        raise TemplateRootError("Could not determine home directory (HOME is not set).")
    return Path(home)


def default_templates_path() -> Path:
    return home_directory() / TEMPLATES_SUBDIR


def load_repo_config(directory: Path | None = None) -> ProjectConfig:
    """Read ``{project: {name, template?}}`` from ``.dropkickrc``.

    A missing, unreadable or structurally invalid file yields the default
    project named ``Repo Name``.
    """
    path = (directory or Path.cwd()) / REPO_CONFIG_FILENAME
    yaml = YAML(typ="safe")
    try:
        with path.open(encoding="utf-8") as stream:
            data = yaml.load(stream)
    except (OSError, YAMLError):
        return ProjectConfig()

    project = data.get("project") if isinstance(data, dict) else None
    if not isinstance(project, dict):
        return ProjectConfig()
    name = project.get("name")
    if not isinstance(name, str) or not name.strip():
        return ProjectConfig()
    template = project.get("template")
    return ProjectConfig(
        name=name.strip(),
        template=template if isinstance(template, str) else "",
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "REPO_CONFIG_FILENAME",
    "DEFAULT_PROJECT_NAME",
    "Settings",
    "ProjectConfig",
    "load_config",
    "load_settings",
    "home_directory",
    "default_templates_path",
    "load_repo_config",
]
