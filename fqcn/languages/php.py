"""PHP language analyser."""

from __future__ import annotations

import re

import tree_sitter
import tree_sitter_php as ts_php

from fqcn.config import ConstructType, Declaration

_DECLARATION_TYPES = {
    "class_declaration": ConstructType.CLASS,
    "interface_declaration": ConstructType.INTERFACE,
    "trait_declaration": ConstructType.TRAIT,
    "enum_declaration": ConstructType.ENUM,
}

_PARENT_CLAUSES = ("base_clause", "class_interface_clause")

_NAME_NODES = ("name", "qualified_name")

_ALIAS_RE = re.compile(r"\s+as\s+", re.IGNORECASE)


def parse_use_statement(text: str) -> dict[str, str]:
    """Parse a ``use`` import into alias (lowercased) -> fully-qualified name.

    Handles aliases and group imports; ``use function`` and ``use const``
    import no types and yield nothing.
    """
    body = text.strip().rstrip(";").strip()
    if body[:3].lower() == "use":
        body = body[3:].strip()
    if not body or body.split(None, 1)[0].lower() in ("function", "const"):
        return {}

    if "{" in body:
        prefix, _, group = body.partition("{")
        prefix = prefix.strip().strip("\\")
        items = [
            f"{prefix}\\{item.strip()}" for item in group.rstrip("}").split(",") if item.strip()
        ]
    else:
        items = body.split(",")

    imports = {}
    for item in items:
        words = item.rsplit("\\", 1)[-1].split()
        if not words or words[0].lower() in ("function", "const"):
            continue
        parts = _ALIAS_RE.split(item)
        name = parts[0].strip().lstrip("\\")
        alias = parts[1].strip() if len(parts) > 1 else name.split("\\")[-1]
        imports[alias.lower()] = name
    return imports


def resolve_name(name: str, namespace: str, imports: dict[str, str]) -> str:
    """Resolve a type reference to its fully-qualified name."""
    if name.startswith("\\"):
        return name[1:]
    if name.lower().startswith("namespace\\"):
        name = name[len("namespace\\"):]
        return f"{namespace}\\{name}" if namespace else name

    first, sep, rest = name.partition("\\")
    target = imports.get(first.lower())
    if target:
        return target + sep + rest
    return f"{namespace}\\{name}" if namespace else name


class PhpAnalyser:
    extensions = [".php"]
    language_name = "php"

    def get_language(self) -> tree_sitter.Language:
        return tree_sitter.Language(ts_php.language_php())

    def extract_declarations(
        self, tree: tree_sitter.Tree, source: bytes, file_path: str
    ) -> list[Declaration]:
        declarations: list[Declaration] = []
        self._walk_scope(tree.root_node, file_path, declarations, namespace="", imports={})
        return declarations

    def _walk_scope(self, node, file_path, declarations, namespace, imports):
        """Walk one namespace scope (a file, or a braced namespace body)."""
        for child in node.children:
            if child.type == "namespace_definition":
                name_node = child.child_by_field_name("name")
                ns = name_node.text.decode("utf-8") if name_node else ""
                body = child.child_by_field_name("body")
                if body is not None:
                    self._walk_scope(body, file_path, declarations, ns, {})
                else:
                    # Unbraced form: applies to the following siblings
                    namespace, imports = ns, {}

            elif child.type == "namespace_use_declaration":
                imports.update(parse_use_statement(child.text.decode("utf-8")))

            elif child.type in _DECLARATION_TYPES:
                declaration = self._make_declaration(child, file_path, namespace, imports)
                if declaration:
                    declarations.append(declaration)

    def _make_declaration(self, node, file_path, namespace, imports) -> Declaration | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        short_name = name_node.text.decode("utf-8")

        parents = []
        for child in node.children:
            if child.type in _PARENT_CLAUSES:
                for c in child.children:
                    if c.type in _NAME_NODES:
                        parents.append(resolve_name(c.text.decode("utf-8"), namespace, imports))

        return Declaration(
            name=f"{namespace}\\{short_name}" if namespace else short_name,
            type=_DECLARATION_TYPES[node.type],
            file=file_path,
            line=node.start_point[0] + 1,
            parents=parents,
        )
