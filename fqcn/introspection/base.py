"""Type introspector protocol and a function-pair adapter."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TypeIntrospector(Protocol):
    """Answers existence and subtype questions about fully-qualified names."""

    def type_exists(self, name: str) -> bool:
        """Whether ``name`` denotes a class, interface, trait or enum."""
        ...

    def is_subtype_of(self, name: str, supertype: str) -> bool:
        """Whether ``name`` extends or implements ``supertype``."""
        ...

    def describe(self, name: str) -> dict | None:
        """Declaration details (kind, file, line) for ``name``, if known."""
        ...


class CallableIntrospector:
    """Adapts a plain ``type_exists``/``is_subtype_of`` function pair."""

    def __init__(
        self,
        type_exists: Callable[[str], bool],
        is_subtype_of: Callable[[str, str], bool] | None = None,
    ) -> None:
        self._type_exists = type_exists
        self._is_subtype_of = is_subtype_of

    def type_exists(self, name: str) -> bool:
        return self._type_exists(name)

    def is_subtype_of(self, name: str, supertype: str) -> bool:
        if self._is_subtype_of is None:
            return False
        return self._is_subtype_of(name, supertype)

    def describe(self, name: str) -> dict | None:
        return None
