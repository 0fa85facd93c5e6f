"""Abstract base for language analysers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import tree_sitter

from fqcn.config import Declaration


@runtime_checkable
class LanguageAnalyser(Protocol):
    """Protocol that all language analysers must implement."""

    extensions: list[str]
    language_name: str

    def get_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this analyser."""
        ...

    def extract_declarations(
        self, tree: tree_sitter.Tree, source: bytes, file_path: str
    ) -> list[Declaration]:
        """Extract type declarations, with fully-qualified names and parents."""
        ...
