"""Sequential discovery phases with timing."""

from __future__ import annotations

import time

from fqcn.composer.prefix_map import PrefixMapProvider
from fqcn.config import DiscoveryConfig, DiscoveryResult
from fqcn.introspection import TypeIntrospector
from fqcn.namespace import Psr4Namespace
from fqcn.output import build_result
from fqcn.phases.discovery import filter_existing, filter_subtypes, scan_directories
from fqcn.resolution.paths import resolve_directories


_PHASE_LABELS = {
    "resolve": "Resolving directories",
    "scan": "Scanning source files",
    "filter": "Checking declarations",
    "subtype": "Filtering subtypes",
}


def run_pipeline(
    config: DiscoveryConfig,
    provider: PrefixMapProvider,
    introspector: TypeIntrospector,
    progress_callback=None,
) -> DiscoveryResult:
    """Run the discovery phases for ``config.namespace`` and return the result.

    Args:
        config: Discovery configuration.
        provider: Source of the PSR-4 prefix map.
        introspector: Answers existence and subtype questions.
        progress_callback: Optional callable(phase_name, label) invoked
            when each phase starts. Used by the CLI for Rich progress.
    """
    namespace = Psr4Namespace(config.namespace)
    state: dict[str, list[str]] = {}
    timings: dict[str, float] = {}
    total_start = time.monotonic()

    def resolve():
        state["directories"] = resolve_directories(namespace, provider.get_prefixes_psr4())

    def scan():
        state["candidates"] = scan_directories(
            state["directories"], namespace, config.extensions, config.follow_symlinks
        )

    def filter_():
        state["constructs"] = filter_existing(state["candidates"], introspector.type_exists)

    def subtype():
        state["constructs"] = filter_subtypes(
            state["constructs"], config.instance_of, introspector.is_subtype_of
        )

    phases = [("resolve", resolve), ("scan", scan), ("filter", filter_)]
    if config.instance_of is not None:
        phases.append(("subtype", subtype))

    for name, phase_fn in phases:
        if progress_callback:
            progress_callback(name, _PHASE_LABELS.get(name, name))
        start = time.monotonic()
        phase_fn()
        timings[name] = time.monotonic() - start

    total_ms = (time.monotonic() - total_start) * 1000

    return build_result(
        config,
        state["directories"],
        state["candidates"],
        state["constructs"],
        introspector,
        timings,
        total_ms,
    )
