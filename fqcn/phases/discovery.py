"""Existence and subtype filtering of scanned candidates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence

from fqcn.config import DEFAULT_EXTENSIONS
from fqcn.namespace import SEPARATOR, Psr4Namespace
from fqcn.phases.scanning import scan_directory
from fqcn.resolution.paths import resolve_directories

logger = logging.getLogger(__name__)


def scan_directories(
    directories: Iterable[str],
    namespace: Psr4Namespace,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    follow_symlinks: bool = True,
) -> list[str]:
    """Concatenate candidates across directories, keeping directory order."""
    candidates: list[str] = []
    for directory in directories:
        candidates.extend(
            scan_directory(directory, namespace, extensions, follow_symlinks)
        )
    return candidates


def filter_existing(
    candidates: Iterable[str], type_exists: Callable[[str], bool]
) -> list[str]:
    """Keep names that denote real constructs, sorted by codepoint order."""
    return sorted(name for name in candidates if type_exists(name))


def filter_subtypes(
    names: Iterable[str],
    supertype: str,
    is_subtype_of: Callable[[str, str], bool],
) -> list[str]:
    """Keep names that extend or implement ``supertype``, preserving order."""
    supertype = supertype.lstrip(SEPARATOR)
    return [
        name for name in names
        if name.lower() != supertype.lower() and is_subtype_of(name, supertype)
    ]


def find_constructs(
    namespace: Psr4Namespace,
    prefix_map: Mapping[str, Sequence[str]],
    type_exists: Callable[[str], bool],
    supertype: str | None = None,
    is_subtype_of: Callable[[str, str], bool] | None = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    follow_symlinks: bool = True,
) -> list[str]:
    """Find every construct declared under ``namespace``.

    Args:
        namespace: Namespace to search.
        prefix_map: PSR-4 prefix to ordered base directories.
        type_exists: Whether a fully-qualified name denotes a construct.
        supertype: Optional name the results must extend or implement.
        is_subtype_of: Required when ``supertype`` is given.

    Raises:
        UnregisteredNamespace: no registered prefix matches the namespace.
    """
    directories = resolve_directories(namespace, prefix_map)
    candidates = scan_directories(directories, namespace, extensions, follow_symlinks)
    constructs = filter_existing(candidates, type_exists)
    logger.debug(
        f"{len(constructs)} of {len(candidates)} candidate(s) under {namespace} exist"
    )

    if supertype is not None:
        if is_subtype_of is None:
            raise ValueError("is_subtype_of is required when supertype is given")
        constructs = filter_subtypes(constructs, supertype, is_subtype_of)
    return constructs
