"""Source-level type introspection: parse declarations instead of loading code."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

import tree_sitter

from fqcn.composer.prefix_map import PrefixMapProvider
from fqcn.config import DEFAULT_EXTENSIONS, Declaration
from fqcn.graph.type_hierarchy import TypeHierarchy
from fqcn.languages import get_analyser
from fqcn.resolution.paths import namespace_to_path

logger = logging.getLogger(__name__)


class StaticIntrospector:
    """Answers ``type_exists``/``is_subtype_of`` from parsed source files.

    Lookups are two-phase: declarations already loaded are consulted first,
    then the name is "autoloaded" by locating its file through the PSR-4
    prefix map and parsing it. Nothing is ever executed.

    Parsed files and names that could not be found are remembered for the
    life of the instance, so files added afterwards stay invisible until
    ``reset()`` is called.
    """

    def __init__(
        self,
        provider: PrefixMapProvider | None = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.provider = provider
        self.extensions = list(extensions)
        self.hierarchy = TypeHierarchy()
        self._loaded_files: set[str] = set()
        self._missing: set[str] = set()
        self._parsers: dict[str, tree_sitter.Parser] = {}

    # --- Collaborator interface ---

    def type_exists(self, name: str) -> bool:
        return self.hierarchy.is_declared(name) or self._autoload(name)

    def is_subtype_of(self, name: str, supertype: str) -> bool:
        if not self.type_exists(name):
            return False
        self._load_ancestors(name)
        return self.hierarchy.is_subtype(name, supertype)

    def describe(self, name: str) -> dict | None:
        """Return kind, file and line for a loaded declaration."""
        declaration = self.hierarchy.get_declaration(name)
        if declaration is None:
            return None
        return {
            "kind": declaration.get("construct_type"),
            "file": declaration.get("file"),
            "line": declaration.get("line"),
        }

    # --- Loading ---

    def reset(self) -> None:
        """Forget every parsed file, declaration and remembered miss."""
        self.hierarchy = TypeHierarchy()
        self._loaded_files.clear()
        self._missing.clear()

    def locate_file(self, name: str) -> str | None:
        """Find the file PSR-4 maps ``name`` to, trying longer prefixes first."""
        if self.provider is None:
            return None
        name = name.lstrip("\\")
        prefixes = self.provider.get_prefixes_psr4()
        matching = sorted(
            (p for p in prefixes if name.startswith(p)), key=len, reverse=True
        )
        for prefix in matching:
            relative = namespace_to_path(name[len(prefix):])
            for base in prefixes[prefix]:
                for ext in self.extensions:
                    path = os.path.join(base, relative + ext)
                    if os.path.isfile(path):
                        return os.path.realpath(path)
        return None

    def load_file(self, path: str) -> list[Declaration]:
        """Parse a source file and record its declarations.

        Files are parsed at most once; a repeat call returns an empty list.
        """
        path = os.path.realpath(path)
        if path in self._loaded_files:
            return []
        self._loaded_files.add(path)

        ext = os.path.splitext(path)[1].lower()
        analyser = get_analyser(ext)
        if analyser is None:
            logger.debug(f"No analyser for {path}")
            return []

        parser = self._get_parser(analyser)
        if parser is None:
            return []

        try:
            with open(path, "rb") as f:
                source = f.read()
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}")
            return []

        try:
            tree = parser.parse(source)
            declarations = analyser.extract_declarations(tree, source, path)
        except Exception as e:
            logger.warning(f"Failed to parse {path}: {e}")
            return []

        for declaration in declarations:
            self.hierarchy.add_declaration(declaration)
            self._missing.discard(declaration.name.lower())
        return declarations

    def load_directory(self, directory: str) -> list[Declaration]:
        """Parse every source file under ``directory``."""
        declarations = []
        for dirpath, dirnames, filenames in os.walk(directory):
            dirnames.sort()
            for filename in sorted(filenames):
                if filename.lower().endswith(tuple(e.lower() for e in self.extensions)):
                    declarations.extend(self.load_file(os.path.join(dirpath, filename)))
        return declarations

    def _get_parser(self, analyser) -> tree_sitter.Parser | None:
        key = analyser.language_name
        if key not in self._parsers:
            try:
                self._parsers[key] = tree_sitter.Parser(analyser.get_language())
            except Exception as e:
                logger.warning(f"Failed to initialise parser for {key}: {e}")
                return None
        return self._parsers[key]

    def _autoload(self, name: str) -> bool:
        key = name.lstrip("\\").lower()
        if key in self._missing:
            return False

        path = self.locate_file(name)
        if path is not None:
            self.load_file(path)
        if self.hierarchy.is_declared(name):
            return True

        logger.debug(f"{name} is not declared in {path or 'any mapped file'}")
        self._missing.add(key)
        return False

    def _load_ancestors(self, name: str) -> None:
        """Autoload every parent reachable from ``name``."""
        seen = set()
        pending = [name]
        while pending:
            current = pending.pop()
            if current.lower() in seen:
                continue
            seen.add(current.lower())
            for parent in self.hierarchy.parents(current):
                if self.type_exists(parent):
                    pending.append(parent)
