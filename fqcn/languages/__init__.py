"""Language registry - maps file extensions to language analysers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fqcn.languages.base import LanguageAnalyser

_REGISTRY: dict[str, LanguageAnalyser] = {}
_INITIALISED = False


def _init_registry() -> None:
    global _INITIALISED
    if _INITIALISED:
        return

    from fqcn.languages.php import PhpAnalyser

    analysers: list[LanguageAnalyser] = [
        PhpAnalyser(),
    ]

    for analyser in analysers:
        for ext in analyser.extensions:
            _REGISTRY[ext] = analyser

    _INITIALISED = True


def get_analyser(extension: str) -> LanguageAnalyser | None:
    """Get the language analyser for a file extension (e.g. '.php')."""
    _init_registry()
    return _REGISTRY.get(extension.lower())


def supported_extensions() -> set[str]:
    """Return all supported file extensions."""
    _init_registry()
    return set(_REGISTRY.keys())
