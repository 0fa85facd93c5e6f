"""Recursive directory scan for candidate construct names."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from fqcn.config import DEFAULT_EXTENSIONS
from fqcn.namespace import SEPARATOR, Psr4Namespace

logger = logging.getLogger(__name__)


def _on_walk_error(error: OSError) -> None:
    logger.warning(f"Skipping unreadable entry {error.filename}: {error.strerror}")


def _match_extension(filename: str, extensions: Sequence[str]) -> str | None:
    """Return the matched extension (case-insensitive), if any."""
    lowered = filename.lower()
    for ext in extensions:
        if lowered.endswith(ext.lower()) and len(filename) > len(ext):
            return ext
    return None


def scan_directory(
    directory: str,
    namespace: Psr4Namespace,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    follow_symlinks: bool = True,
) -> list[str]:
    """Walk ``directory`` and derive a fully-qualified name for each source file.

    ``directory`` is the directory ``namespace`` maps to; a file at
    ``Models/User.php`` under it becomes ``<namespace>Models\\User``.
    Unreadable directories are logged and skipped.
    """
    names: list[str] = []
    for dirpath, dirnames, filenames in os.walk(
        directory, onerror=_on_walk_error, followlinks=follow_symlinks
    ):
        dirnames.sort()
        for filename in sorted(filenames):
            ext = _match_extension(filename, extensions)
            if ext is None:
                continue
            rel_path = os.path.relpath(os.path.join(dirpath, filename), directory)
            rel_name = rel_path[: -len(ext)].replace(os.sep, SEPARATOR)
            names.append(namespace.value + rel_name)

    logger.debug(f"Found {len(names)} candidate(s) in {directory}")
    return names
