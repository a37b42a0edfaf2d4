"""Interpolation-context construction for one rendered template file.

Combines name-derived identifiers, git identity and per-file flags into an
immutable ``InterpolationContext``. Git is queried on every ``build`` call;
nothing is cached between renders.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, replace
from pathlib import PurePath

from .errors import GitIdentityError
from .git_config import GitIdentity, resolve_git_identity
from .naming import derive_identifiers

MISSING_EMAIL = "TODO: Write your email address"
MISSING_K8S_DOMAIN = "k8s.domain.missing.from.gitconfig.local"
MISSING_USER_NAME_MESSAGE = (
    "Error: git config user.name didn't return a value. You'll probably want to make sure "
    "that's configured with your github username:\n\n"
    "git config --global user.name YOUR_GH_NAME"
)

TEST_DIRECTORY_NAMES = frozenset({"test", "tests", "spec"})


@dataclass(frozen=True)
class FileFlags:
    test: bool = False
    ext: str = ""
    bin: bool = False


def file_flags(destination: PurePath, binary: bool = False) -> FileFlags:
    """Derive per-file flags from a destination path relative to the project root.

    ``binary`` marks templates copied verbatim instead of rendered.
    """
    parts = destination.parts
    stem = destination.stem
    is_test = (
        any(part in TEST_DIRECTORY_NAMES for part in parts[:-1])
        or stem.startswith("test_")
        or stem.endswith(("_test", "_spec"))
    )
    return FileFlags(
        test=is_test,
        ext=destination.suffix[1:],
        bin=binary,
    )


@dataclass(frozen=True)
class InterpolationContext:
    """Every field a template may reference."""

    name: str
    title: str
    unprefixed_name: str
    unprefixed_pascal: str
    underscored_name: str
    pascal_name: str
    camel_name: str
    screamcase_name: str
    namespaced_path: str
    makefile_path: str
    constant_name: str
    constant_array: tuple[str, ...]
    author: str
    email: str
    git_repo_domain: str
    git_repo_url: str
    git_repo_path: str
    image_path: str
    registry_domain: str
    registry_repo_path: str
    k8s_domain: str
    template: str
    test: bool
    ext: str
    bin: bool

    def as_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["constant_array"] = list(self.constant_array)
        return data


@dataclass(frozen=True)
class ConfigBuilder:
    """Collects build inputs; ``build`` resolves git and derives all fields."""

    name: str
    prefix: str = ""
    template: str = ""
    flags: FileFlags = FileFlags()

    def with_template(self, template: str) -> "ConfigBuilder":
        return replace(self, template=template)

    def with_flags(self, flags: FileFlags) -> "ConfigBuilder":
        return replace(self, flags=flags)

    def for_destination(self, destination: PurePath, binary: bool = False) -> "ConfigBuilder":
        return replace(self, flags=file_flags(destination, binary))

    def build(self, resolve: Callable[[], GitIdentity] = resolve_git_identity) -> InterpolationContext:
        """Return a fresh context.

        Raises ``GitIdentityError`` when ``git config user.name`` is empty.
        """
        identity = resolve()
        if not identity.author:
            raise GitIdentityError(MISSING_USER_NAME_MESSAGE)

        ids = derive_identifiers(self.name, self.prefix)
        user = identity.author
        domain = identity.repo_domain
        image_path = f"{user}/{self.name}".lower()
        return InterpolationContext(
            name=ids.name,
            title=ids.title,
            unprefixed_name=ids.unprefixed_name,
            unprefixed_pascal=ids.unprefixed_pascal,
            underscored_name=ids.underscored_name,
            pascal_name=ids.pascal_name,
            camel_name=ids.camel_name,
            screamcase_name=ids.screamcase_name,
            namespaced_path=ids.namespaced_path,
            makefile_path=ids.makefile_path,
            constant_name=ids.constant_name,
            constant_array=ids.constant_array,
            author=user,
            email=identity.email or MISSING_EMAIL,
            git_repo_domain=domain,
            git_repo_url=f"https://{domain}/{user}/{self.name}",
            git_repo_path=f"{domain}/{user}/{self.name}".lower(),
            image_path=image_path,
            registry_domain=identity.registry_domain,
            registry_repo_path=f"{identity.registry_domain}/{image_path}".lower(),
            k8s_domain=identity.k8s_domain or MISSING_K8S_DOMAIN,
            template=self.template,
            test=self.flags.test,
            ext=self.flags.ext,
            bin=self.flags.bin,
        )


__all__ = [
    "MISSING_EMAIL",
    "MISSING_K8S_DOMAIN",
    "MISSING_USER_NAME_MESSAGE",
    "FileFlags",
    "file_flags",
    "InterpolationContext",
    "ConfigBuilder",
]
