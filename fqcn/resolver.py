"""Resolver facade over a prefix map provider and a type introspector."""

from __future__ import annotations

from fqcn.composer.prefix_map import ComposerPrefixMap, PrefixMapProvider
from fqcn.config import DiscoveryConfig
from fqcn.introspection import StaticIntrospector, TypeIntrospector
from fqcn.namespace import Psr4Namespace
from fqcn.phases.discovery import find_constructs
from fqcn.resolution.paths import resolve_directories


class Resolver:
    """Resolve PSR-4 namespaces to directories and the constructs in them.

    Holds no per-namespace state: the namespace is passed to every call,
    and the prefix map is fetched from the provider each time.
    The default introspector caches parsed declarations and misses; call
    ``introspector.reset()`` after source files change.
    """

    def __init__(
        self,
        provider: PrefixMapProvider,
        introspector: TypeIntrospector | None = None,
        config: DiscoveryConfig | None = None,
    ) -> None:
        self.provider = provider
        self.config = config or DiscoveryConfig()
        self.introspector = introspector or StaticIntrospector(
            provider, self.config.extensions
        )

    def resolve_directory(self, namespace: Psr4Namespace | str) -> list[str]:
        """List the existing directories ``namespace`` maps to."""
        return resolve_directories(
            Psr4Namespace.coerce(namespace), self.provider.get_prefixes_psr4()
        )

    def find_classes(
        self, namespace: Psr4Namespace | str, instance_of: str | None = None
    ) -> list[str]:
        """Find the constructs under ``namespace``, optionally subtypes of ``instance_of``."""
        return find_constructs(
            Psr4Namespace.coerce(namespace),
            self.provider.get_prefixes_psr4(),
            self.introspector.type_exists,
            supertype=instance_of,
            is_subtype_of=self.introspector.is_subtype_of,
            extensions=self.config.extensions,
            follow_symlinks=self.config.follow_symlinks,
        )


def create_resolver(
    project_root: str,
    include_dev: bool = True,
    include_vendor: bool = True,
    config: DiscoveryConfig | None = None,
) -> Resolver:
    """Build a Resolver for a Composer project rooted at ``project_root``."""
    provider = ComposerPrefixMap(project_root, include_dev, include_vendor)
    return Resolver(provider, config=config)
