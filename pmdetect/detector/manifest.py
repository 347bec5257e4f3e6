"""package.json reader for package-manager detection.

Extracts the ``packageManager`` and ``devEngines.packageManager`` fields
and hands them to the specifier parser. A missing or unreadable manifest
is not an error: it is simply no signal.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from pmdetect.detector.constants import MANIFEST_FILENAME
from pmdetect.detector.specifier import parse_specifier
from pmdetect.detector.types import DetectResult, Strategy, UnknownHandler

logger = logging.getLogger(__name__)

MANIFEST_STRATEGIES = frozenset({Strategy.PACKAGE_MANAGER_FIELD, Strategy.DEV_ENGINES_FIELD})


def read_manifest(path: Path) -> Optional[dict[str, Any]]:
    """Load a manifest as a dict. Returns None when it cannot be used."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, ValueError) as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None
    return _loads(path, text)


async def read_manifest_async(path: Path) -> Optional[dict[str, Any]]:
    """Non-blocking ``read_manifest``; the read runs in a worker thread."""
    try:
        text = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except (OSError, ValueError) as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None
    return _loads(path, text)


def parse_manifest_fields(
    data: Optional[dict[str, Any]],
    strategies: Iterable[Strategy],
    on_unknown: Optional[UnknownHandler] = None,
) -> Optional[DetectResult]:
    """Resolve the enabled manifest fields, packageManager first."""
    if not data:
        return None
    enabled = set(strategies)

    if Strategy.PACKAGE_MANAGER_FIELD in enabled:
        package_manager = data.get("packageManager")
        if isinstance(package_manager, str):
            return parse_specifier(package_manager, on_unknown)

    if Strategy.DEV_ENGINES_FIELD in enabled:
        specifier = _dev_engines_specifier(data.get("devEngines"))
        if specifier is not None:
            return parse_specifier(specifier, on_unknown)

    return None


def detect_from_manifest(
    directory: Path,
    strategies: Iterable[Strategy],
    on_unknown: Optional[UnknownHandler] = None,
) -> Optional[DetectResult]:
    """Read ``<directory>/package.json`` and resolve its manifest fields."""
    data = read_manifest(Path(directory) / MANIFEST_FILENAME)
    return parse_manifest_fields(data, strategies, on_unknown)


async def detect_from_manifest_async(
    directory: Path,
    strategies: Iterable[Strategy],
    on_unknown: Optional[UnknownHandler] = None,
) -> Optional[DetectResult]:
    data = await read_manifest_async(Path(directory) / MANIFEST_FILENAME)
    return parse_manifest_fields(data, strategies, on_unknown)


def _loads(path: Path, text: str) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.debug("Failed to parse %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.debug("Ignoring %s: top level is %s, not an object", path, type(data).__name__)
        return None
    return data


def _dev_engines_specifier(dev_engines: Any) -> Optional[str]:
    """Build ``name[@version]`` from devEngines.packageManager.

    The field is either a single ``{name, version?}`` object or a list of
    them, in which case the first entry is used.
    """
    if not isinstance(dev_engines, dict):
        return None
    package_manager = dev_engines.get("packageManager")
    if isinstance(package_manager, list):
        package_manager = package_manager[0] if package_manager else None
    if not isinstance(package_manager, dict):
        return None

    name = package_manager.get("name")
    if not isinstance(name, str) or not name:
        return None
    version = package_manager.get("version")
    if isinstance(version, str) and version:
        return f"{name}@{version.removeprefix('^')}"
    return name
