"""PSR-4 namespace value object."""

from __future__ import annotations

import re
from dataclasses import dataclass

from fqcn.errors import InvalidNamespace

SEPARATOR = "\\"

_SEGMENT = re.compile(r"[A-Z][A-Za-z0-9_]*")
_REPEATED_SEPARATORS = re.compile(r"\\{2,}")


def normalise(raw: str) -> str:
    """Collapse repeated separators and strip them from both ends."""
    return _REPEATED_SEPARATORS.sub(r"\\", raw).strip(SEPARATOR)


@dataclass(frozen=True, init=False)
class Psr4Namespace:
    """A validated namespace, always stored as ``Segment\\Segment\\``.

    The trailing separator makes ``starts_with`` segment aligned:
    ``Something\\Haha\\`` starts with ``Something\\`` but
    ``SomethingElse\\`` does not.
    """

    value: str

    def __init__(self, raw: str) -> None:
        trimmed = normalise(raw)
        if not trimmed:
            raise InvalidNamespace(raw, "empty")
        for segment in trimmed.split(SEPARATOR):
            if not _SEGMENT.fullmatch(segment):
                raise InvalidNamespace(raw, f"bad segment {segment!r}")
        object.__setattr__(self, "value", trimmed + SEPARATOR)

    @classmethod
    def coerce(cls, namespace: Psr4Namespace | str) -> Psr4Namespace:
        if isinstance(namespace, Psr4Namespace):
            return namespace
        return cls(namespace)

    @property
    def segments(self) -> list[str]:
        return self.value.rstrip(SEPARATOR).split(SEPARATOR)

    def starts_with(self, other: Psr4Namespace) -> bool:
        return self.value.startswith(other.value)

    def equals(self, other: Psr4Namespace) -> bool:
        return self.value == other.value

    def __str__(self) -> str:
        return self.value
