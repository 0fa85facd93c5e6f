"""JSON serialisation of discovery results."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from fqcn import __version__
from fqcn.config import DiscoveryConfig, DiscoveryResult


def _describe(name: str, introspector) -> dict:
    """Describe a construct, using declaration details when available."""
    entry = {"name": name, "kind": None, "file": None, "line": None}
    details = introspector.describe(name)
    if details:
        entry.update(details)
    return entry


def build_result(
    config: DiscoveryConfig,
    directories: list[str],
    candidates: list[str],
    constructs: list[str],
    introspector,
    timings: dict[str, float],
    total_ms: float,
) -> DiscoveryResult:
    """Build the DiscoveryResult for one discovery run."""
    return DiscoveryResult(
        version="1.0",
        metadata={
            "namespace": config.namespace,
            "instance_of": config.instance_of,
            "project_root": str(Path(config.project_root).resolve()) if config.project_root else None,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "fqcn_version": __version__,
            "duration_ms": round(total_ms, 1),
            "phase_timings": timings,
        },
        stats={
            "directories": len(directories),
            "candidates": len(candidates),
            "constructs": len(constructs),
        },
        directories=list(directories),
        constructs=[_describe(name, introspector) for name in constructs],
    )


def write_output(result: DiscoveryResult, output_path: str) -> None:
    """Write the discovery result to a JSON file."""
    data = asdict(result)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=str)
