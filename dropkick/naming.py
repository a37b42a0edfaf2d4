"""Project-name casing and path variants used by template placeholders.

Templates in the wild depend on these exact rules, so every variant is
derived by plain string splitting rather than a general word segmenter.
"""

from __future__ import annotations

from dataclasses import dataclass


def capitalize_first(token: str) -> str:
    """Upper-case only the first character of ``token``.

    Unicode case rules apply, so one character can expand (``"ßa"`` ->
    ``"SSa"``); characters without an upper-case form pass through. The rest
    of the token is left untouched, unlike ``str.capitalize``.
    """
    if not token:
        return ""
    return token[0].upper() + token[1:]


def _dash_underscore_tokens(name: str) -> list[str]:
    return name.replace("-", "_").split("_")


def title_case(name: str) -> str:
    """``"foo-bar_baz"`` -> ``"Foo Bar Baz"``."""
    return " ".join(capitalize_first(token) for token in _dash_underscore_tokens(name))


def pascal_case(name: str) -> str:
    """``"foo-bar_baz"`` -> ``"FooBarBaz"``."""
    return "".join(capitalize_first(token) for token in _dash_underscore_tokens(name))


def camel_case(name: str) -> str:
    pascal = pascal_case(name)
    if not pascal:
        return ""
    return pascal[0].lower() + pascal[1:]


def unprefixed(name: str, prefix: str) -> str:
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def constant_name(name: str) -> str:
    """Namespaced constant name.

    First pass splits on ``_`` (dropping empty pieces) and joins capitalized
    pieces. When dashes survive, a second pass splits on ``-`` and joins with
    ``::``: ``"foo-bar_baz"`` -> ``"Foo::BarBaz"``.
    """
    joined = "".join(capitalize_first(part) for part in name.split("_") if part)
    if "-" in joined:
        joined = "::".join(capitalize_first(part) for part in joined.split("-"))
    return joined


@dataclass(frozen=True)
class Identifiers:
    """All name-derived variants for one project name."""

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


def derive_identifiers(name: str, prefix: str = "") -> Identifiers:
    """Derive every casing/path variant of ``name``."""
    underscored = name.replace("-", "_")
    unprefixed_name = unprefixed(name, prefix)
    constant = constant_name(name)
    return Identifiers(
        name=name,
        title=title_case(name),
        unprefixed_name=unprefixed_name,
        unprefixed_pascal=pascal_case(unprefixed_name),
        underscored_name=underscored,
        pascal_name=pascal_case(name),
        camel_name=camel_case(name),
        screamcase_name=underscored.upper(),
        namespaced_path=name.replace("-", "/"),
        makefile_path=f"{underscored}/{underscored}",
        constant_name=constant,
        constant_array=tuple(constant.split("::")),
    )


__all__ = [
    "Identifiers",
    "capitalize_first",
    "title_case",
    "pascal_case",
    "camel_case",
    "unprefixed",
    "constant_name",
    "derive_identifiers",
]
