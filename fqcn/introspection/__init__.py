"""Type introspectors answering existence and subtype questions."""

from fqcn.introspection.base import CallableIntrospector, TypeIntrospector
from fqcn.introspection.static import StaticIntrospector

__all__ = ["CallableIntrospector", "StaticIntrospector", "TypeIntrospector"]
