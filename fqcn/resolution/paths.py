"""Build filesystem directories for namespaces under PSR-4 base directories."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence

from fqcn.errors import InvalidBasePath, NamespaceMismatch, UnregisteredNamespace
from fqcn.namespace import SEPARATOR, Psr4Namespace
from fqcn.resolution.prefix import find_best_prefix

logger = logging.getLogger(__name__)


def namespace_to_path(fragment: str) -> str:
    """Convert a namespace fragment into a relative path."""
    path = fragment.replace(SEPARATOR, os.sep).replace("//", os.sep)
    return path.strip("\\/")


def _relative_path(namespace: Psr4Namespace, prefix: str) -> str:
    return namespace_to_path(namespace.value[len(prefix):])


def _canonical(base: str, relative: str) -> str:
    """Join and canonicalise, returning '' when the result does not exist."""
    path = os.path.join(base, relative) if relative else base
    path = os.path.realpath(path)
    return path if os.path.exists(path) else ""


def resolve_directories(
    namespace: Psr4Namespace, prefix_map: Mapping[str, Sequence[str]]
) -> list[str]:
    """Resolve a namespace to the existing directories it maps to.

    Directories keep the registration order of the matched prefix. A
    namespace whose directories do not exist resolves to an empty list.

    Raises:
        UnregisteredNamespace: no registered prefix matches the namespace.
    """
    prefix = find_best_prefix(namespace, prefix_map.keys())
    if not prefix:
        raise UnregisteredNamespace(namespace.value)
    logger.debug(f"Matched prefix {prefix!r} for {namespace}")

    relative = _relative_path(namespace, prefix)
    discovered: list[str] = []
    for base in prefix_map[prefix]:
        path = _canonical(base, relative)
        if path and os.path.isdir(path):
            discovered.append(path)
        else:
            logger.debug(f"No directory for {namespace} under {base}")
    return discovered


class PathBuilder:
    """Build directories for namespaces relative to one known base.

    The base path is the directory that ``base_namespace`` maps to.
    """

    def __init__(self, base_path: str, base_namespace: Psr4Namespace) -> None:
        if not os.path.isdir(base_path):
            raise InvalidBasePath(base_path)
        self.base_path = base_path
        self.base_namespace = base_namespace

    def resolve(self, namespace: Psr4Namespace) -> str:
        """Return the absolute directory for ``namespace``, or '' if missing."""
        if not namespace.starts_with(self.base_namespace):
            raise NamespaceMismatch(namespace.value, self.base_namespace.value)
        relative = _relative_path(namespace, self.base_namespace.value)
        return _canonical(self.base_path, relative)
