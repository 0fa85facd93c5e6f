"""Prefix map providers: sources of PSR-4 prefix -> directories mappings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from fqcn.composer.manifest import parse_installed, parse_manifest
from fqcn.errors import InvalidBasePath

logger = logging.getLogger(__name__)


@runtime_checkable
class PrefixMapProvider(Protocol):
    """Anything that can report registered PSR-4 prefixes."""

    def get_prefixes_psr4(self) -> dict[str, list[str]]:
        """Return prefix -> ordered list of base directories."""
        ...


class StaticPrefixMap:
    """A fixed, in-memory prefix map."""

    def __init__(self, mapping: Mapping[str, Sequence[str]]) -> None:
        self.mapping = {prefix: list(dirs) for prefix, dirs in mapping.items()}

    def get_prefixes_psr4(self) -> dict[str, list[str]]:
        return {prefix: list(dirs) for prefix, dirs in self.mapping.items()}


def _merge(target: dict[str, list[str]], source: dict[str, list[str]]) -> None:
    for prefix, dirs in source.items():
        existing = target.setdefault(prefix, [])
        existing.extend(d for d in dirs if d not in existing)


class ComposerPrefixMap:
    """Prefix map read from a Composer project on every call.

    Root package prefixes come first, then autoload-dev, then installed
    vendor packages in the order Composer recorded them.
    """

    def __init__(
        self,
        project_root: str,
        include_dev: bool = True,
        include_vendor: bool = True,
    ) -> None:
        self.project_root = os.path.abspath(project_root)
        self.manifest_path = os.path.join(self.project_root, "composer.json")
        if not os.path.isfile(self.manifest_path):
            raise InvalidBasePath(self.project_root, "does not contain composer.json")
        self.include_dev = include_dev
        self.include_vendor = include_vendor

    @property
    def installed_path(self) -> str:
        return os.path.join(self.project_root, "vendor", "composer", "installed.json")

    def get_prefixes_psr4(self) -> dict[str, list[str]]:
        root = parse_manifest(self.manifest_path)
        prefixes: dict[str, list[str]] = {}
        _merge(prefixes, root.psr4)
        if self.include_dev:
            _merge(prefixes, root.psr4_dev)

        if self.include_vendor and os.path.isfile(self.installed_path):
            for package in parse_installed(self.installed_path):
                _merge(prefixes, package.psr4)

        logger.debug(f"Loaded {len(prefixes)} psr-4 prefix(es) from {self.project_root}")
        return prefixes
