"""Exception hierarchy for namespace resolution and construct discovery."""

from __future__ import annotations


class FqcnError(Exception):
    """Base class for all resolution errors."""


class InvalidNamespace(FqcnError, ValueError):
    """Raised when a raw namespace string is not a valid PSR-4 namespace."""

    def __init__(self, namespace: str, reason: str = "") -> None:
        self.namespace = namespace
        message = f"Invalid namespace {namespace!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidBasePath(FqcnError, ValueError):
    """Raised when a base path is not an existing directory."""

    def __init__(self, path: str, reason: str = "is not a directory") -> None:
        self.path = path
        super().__init__(f"Invalid path: {path} {reason}")


class NamespaceMismatch(FqcnError):
    """Raised when a namespace is not under the configured base namespace."""

    def __init__(self, namespace: str, base: str) -> None:
        self.namespace = namespace
        self.base = base
        super().__init__(f"{namespace} is not from the same base as {base}")


class UnregisteredNamespace(FqcnError, LookupError):
    """Raised when no registered PSR-4 prefix matches a namespace."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        super().__init__(
            f"Could not find registered psr4 prefix that matches {namespace}"
        )
