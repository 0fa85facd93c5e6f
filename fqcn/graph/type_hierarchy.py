"""Type hierarchy backed by networkx.DiGraph."""

from __future__ import annotations

import networkx as nx

from fqcn.config import Declaration


def _key(name: str) -> str:
    """PHP type names are case-insensitive."""
    return name.lstrip("\\").lower()


class TypeHierarchy:
    """Declared types as nodes, ``extends``/``implements`` as child -> parent edges.

    Parents that were referenced but never declared are present as bare
    nodes with no ``declared`` attribute.
    """

    def __init__(self) -> None:
        self.graph = nx.DiGraph()

    def add_declaration(self, declaration: Declaration) -> None:
        key = _key(declaration.name)
        self.graph.add_node(
            key,
            declared=True,
            name=declaration.name,
            construct_type=declaration.type.value,
            file=declaration.file,
            line=declaration.line,
        )
        for parent in declaration.parents:
            parent_key = _key(parent)
            if parent_key not in self.graph:
                self.graph.add_node(parent_key, name=parent.lstrip("\\"))
            self.graph.add_edge(key, parent_key)

    def is_declared(self, name: str) -> bool:
        key = _key(name)
        return key in self.graph and self.graph.nodes[key].get("declared", False)

    def get_declaration(self, name: str) -> dict | None:
        """Return the node attributes for a declared type."""
        key = _key(name)
        if not self.is_declared(key):
            return None
        return dict(self.graph.nodes[key])

    def parents(self, name: str) -> list[str]:
        key = _key(name)
        if key not in self.graph:
            return []
        return [self.graph.nodes[p].get("name", p) for p in self.graph.successors(key)]

    def is_subtype(self, name: str, supertype: str) -> bool:
        """True if a non-empty path leads from ``name`` to ``supertype``."""
        key, super_key = _key(name), _key(supertype)
        if key == super_key or key not in self.graph or super_key not in self.graph:
            return False
        return nx.has_path(self.graph, key, super_key)

    def declared_count(self) -> int:
        return sum(1 for _, data in self.graph.nodes(data=True) if data.get("declared"))
