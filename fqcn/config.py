"""Core data types and configuration for construct discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_EXTENSIONS = [".php"]


class ConstructType(str, Enum):
    CLASS = "Class"
    INTERFACE = "Interface"
    TRAIT = "Trait"
    ENUM = "Enum"


@dataclass
class Declaration:
    """A type declaration found in a source file."""
    name: str
    type: ConstructType
    file: str
    line: int
    parents: list[str] = field(default_factory=list)


@dataclass
class DiscoveryConfig:
    project_root: str = ""
    namespace: str = ""
    instance_of: str | None = None
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    include_dev: bool = True
    include_vendor: bool = True
    follow_symlinks: bool = True
    output_path: str | None = None
    verbose: bool = False
    quiet: bool = False


@dataclass
class DiscoveryResult:
    version: str = "1.0"
    metadata: dict[str, Any] = field(default_factory=dict)
    stats: dict[str, Any] = field(default_factory=dict)
    directories: list[str] = field(default_factory=list)
    constructs: list[dict] = field(default_factory=list)
