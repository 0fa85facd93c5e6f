"""Longest-prefix matching of a namespace against registered PSR-4 prefixes."""

from __future__ import annotations

from collections.abc import Iterable

from fqcn.namespace import Psr4Namespace


def find_best_prefix(namespace: Psr4Namespace, prefixes: Iterable[str]) -> str:
    """Return the longest prefix that ``namespace`` literally starts with.

    Returns an empty string when nothing matches. Among equal-length
    matches the first one seen wins.
    """
    best = ""
    for prefix in prefixes:
        if namespace.value.startswith(prefix) and len(prefix) > len(best):
            best = prefix
    return best
