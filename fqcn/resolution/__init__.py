"""Namespace to directory resolution."""

from fqcn.resolution.paths import PathBuilder, namespace_to_path, resolve_directories
from fqcn.resolution.prefix import find_best_prefix

__all__ = ["PathBuilder", "find_best_prefix", "namespace_to_path", "resolve_directories"]
