"""Parse composer.json and vendor/composer/installed.json autoload sections."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class ComposerPackage:
    """PSR-4 autoload information for one Composer package.

    Directories are absolute, resolved against the package's install path.
    """
    name: str
    install_path: str
    psr4: dict[str, list[str]] = field(default_factory=dict)
    psr4_dev: dict[str, list[str]] = field(default_factory=dict)


def _load_json(path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
    except ValueError as e:
        logger.warning(f"Malformed JSON in {path}: {e}")
    return None


def _psr4_section(autoload, base_dir: str) -> dict[str, list[str]]:
    """Normalise an ``autoload`` block's psr-4 entries to absolute paths.

    A directory may be a string or a list; '' means the package root.
    """
    if not isinstance(autoload, dict):
        return {}
    section = autoload.get("psr-4")
    if not isinstance(section, dict):
        return {}

    mapping: dict[str, list[str]] = {}
    for prefix, dirs in section.items():
        if isinstance(dirs, str):
            dirs = [dirs]
        if not isinstance(dirs, list):
            logger.warning(f"Ignoring psr-4 entry {prefix!r}: unexpected value {dirs!r}")
            continue
        mapping[prefix] = [
            os.path.normpath(os.path.join(base_dir, d)) for d in dirs if isinstance(d, str)
        ]
    return mapping


def parse_manifest(manifest_path: str) -> ComposerPackage:
    """Parse a project's composer.json.

    Returns an empty package if the file is missing or malformed.
    """
    base_dir = os.path.dirname(os.path.abspath(manifest_path))
    package = ComposerPackage(name="", install_path=base_dir)

    data = _load_json(manifest_path)
    if not isinstance(data, dict):
        return package

    package.name = data.get("name", "") or ""
    package.psr4 = _psr4_section(data.get("autoload"), base_dir)
    package.psr4_dev = _psr4_section(data.get("autoload-dev"), base_dir)
    return package


def parse_installed(installed_path: str) -> list[ComposerPackage]:
    """Parse vendor/composer/installed.json.

    Handles the Composer 1 (top-level list) and Composer 2
    (``{"packages": [...]}``) layouts.
    """
    data = _load_json(installed_path)
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("packages", [])
    if not isinstance(data, list):
        logger.warning(f"Unexpected layout in {installed_path}")
        return []

    composer_dir = os.path.dirname(os.path.abspath(installed_path))
    vendor_dir = os.path.dirname(composer_dir)

    packages = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get("name"):
            continue
        name = entry["name"]
        install_path = entry.get("install-path")
        if install_path:
            install_path = os.path.normpath(os.path.join(composer_dir, install_path))
        else:
            install_path = os.path.join(vendor_dir, *name.split("/"))

        packages.append(ComposerPackage(
            name=name,
            install_path=install_path,
            psr4=_psr4_section(entry.get("autoload"), install_path),
        ))

    return packages
