"""Local ``git config`` lookups for author identity and domain overrides.

Every lookup is a synchronous ``git config <key>`` subprocess. A non-zero
exit means the key is unset; a missing git binary or any other launch
failure degrades to an empty value instead of raising.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

GIT_CONFIG_TIMEOUT_SECONDS = 5.0
DEFAULT_REPO_DOMAIN = "github.com"


@dataclass(frozen=True)
class GitIdentity:
    """Raw git-config values; empty strings mark unset keys."""

    author: str
    email: str
    repo_domain: str
    registry_domain: str
    k8s_domain: str


def _run_git_config(key: str, timeout_seconds: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "config", key],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git config %s failed to run: %s", key, exc)
        return None


def git_config_value(key: str, timeout_seconds: float = GIT_CONFIG_TIMEOUT_SECONDS) -> str:
    """Return the stripped value of ``git config <key>`` or ``""``."""
    proc = _run_git_config(key, timeout_seconds)
    if proc is None or proc.returncode != 0:
        return ""
    return proc.stdout.strip()


def resolve_git_identity(timeout_seconds: float = GIT_CONFIG_TIMEOUT_SECONDS) -> GitIdentity:
    """Query the identity and domain keys consumed by the interpolation context."""
    repo_domain = git_config_value("user.repo-domain", timeout_seconds) or DEFAULT_REPO_DOMAIN
    return GitIdentity(
        author=git_config_value("user.name", timeout_seconds),
        email=git_config_value("user.email", timeout_seconds),
        repo_domain=repo_domain,
        registry_domain=git_config_value("user.registry-domain", timeout_seconds),
        k8s_domain=git_config_value("user.k8s-domain", timeout_seconds),
    )


__all__ = [
    "GIT_CONFIG_TIMEOUT_SECONDS",
    "DEFAULT_REPO_DOMAIN",
    "GitIdentity",
    "git_config_value",
    "resolve_git_identity",
]
