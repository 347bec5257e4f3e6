"""Detection resolver: walks up from cwd and runs strategies per directory.

Detection flow:
1. Optional environment fast path (npm_config_user_agent).
2. For each directory from ``lookup`` (child first), run the configured
   strategies in order. The first non-null result ends the call; no
   further directories are visited.
3. Exhaustion returns None.

Proximity beats precision: a bare lockfile in ``cwd`` wins over an exact
``packageManager`` field in a parent directory.

``detect`` (async) and ``detect_sync`` share every decision helper below;
they differ only in whether probes and manifest reads are awaited.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from pmdetect.detector.constants import (
    INSTALL_METADATA,
    LOCKS,
    YARN_CLASSIC_MARKER,
)
from pmdetect.detector.env import detect_from_env
from pmdetect.detector.manifest import (
    detect_from_manifest,
    detect_from_manifest_async,
)
from pmdetect.detector.probe import kind_for_marker, path_exists, path_exists_async
from pmdetect.detector.types import (
    Agent,
    AgentName,
    DetectOptions,
    DetectResult,
    Strategy,
)
from pmdetect.detector.walker import lookup

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

async def detect(options: Optional[DetectOptions] = None) -> Optional[DetectResult]:
    """Detect the package manager without blocking the event loop."""
    options = options or DetectOptions()
    strategies = _normalize_strategies(options.strategies)

    final, result = detect_from_env(options.env_hint, options.on_unknown)
    if final:
        _log_result(result, source="npm_config_user_agent")
        return result

    for directory in lookup(options.resolved_cwd(), options.stop_dir):
        for strategy in strategies:
            if strategy == Strategy.LOCKFILE:
                result = await _detect_lockfile_async(directory, strategies, options)
            elif strategy == Strategy.INSTALL_METADATA:
                result = await _detect_install_metadata_async(directory)
            else:
                result = await detect_from_manifest_async(directory, (strategy,), options.on_unknown)
            if result is not None:
                _log_result(result, source=f"{strategy} in {directory}")
                return result

    _log_result(None, source=str(options.resolved_cwd()))
    return None


def detect_sync(options: Optional[DetectOptions] = None) -> Optional[DetectResult]:
    """Detect the package manager, blocking on filesystem access."""
    options = options or DetectOptions()
    strategies = _normalize_strategies(options.strategies)

    final, result = detect_from_env(options.env_hint, options.on_unknown)
    if final:
        _log_result(result, source="npm_config_user_agent")
        return result

    for directory in lookup(options.resolved_cwd(), options.stop_dir):
        for strategy in strategies:
            if strategy == Strategy.LOCKFILE:
                result = _detect_lockfile(directory, strategies, options)
            elif strategy == Strategy.INSTALL_METADATA:
                result = _detect_install_metadata(directory)
            else:
                result = detect_from_manifest(directory, (strategy,), options.on_unknown)
            if result is not None:
                _log_result(result, source=f"{strategy} in {directory}")
                return result

    _log_result(None, source=str(options.resolved_cwd()))
    return None


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def _detect_lockfile(
    directory: Path,
    strategies: tuple[Strategy, ...],
    options: DetectOptions,
) -> Optional[DetectResult]:
    for lock, name in LOCKS.items():
        if path_exists(directory / lock, "file"):
            logger.debug("Found %s in %s", lock, directory)
            manifest_result = detect_from_manifest(
                directory, _sibling_manifest_strategies(strategies), options.on_unknown
            )
            return _lockfile_result(name, manifest_result)
    return None


async def _detect_lockfile_async(
    directory: Path,
    strategies: tuple[Strategy, ...],
    options: DetectOptions,
) -> Optional[DetectResult]:
    for lock, name in LOCKS.items():
        if await path_exists_async(directory / lock, "file"):
            logger.debug("Found %s in %s", lock, directory)
            manifest_result = await detect_from_manifest_async(
                directory, _sibling_manifest_strategies(strategies), options.on_unknown
            )
            return _lockfile_result(name, manifest_result)
    return None


def _detect_install_metadata(directory: Path) -> Optional[DetectResult]:
    for marker, name in INSTALL_METADATA.items():
        if path_exists(directory / marker, kind_for_marker(marker)):
            logger.debug("Found install marker %s in %s", marker, directory)
            return _metadata_result(marker, name)
    return None


async def _detect_install_metadata_async(directory: Path) -> Optional[DetectResult]:
    for marker, name in INSTALL_METADATA.items():
        if await path_exists_async(directory / marker, kind_for_marker(marker)):
            logger.debug("Found install marker %s in %s", marker, directory)
            return _metadata_result(marker, name)
    return None


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _normalize_strategies(strategies: Iterable[str]) -> tuple[Strategy, ...]:
    """Accept Strategy members or their string values, keeping order."""
    return tuple(Strategy(strategy) for strategy in strategies)


def _sibling_manifest_strategies(strategies: tuple[Strategy, ...]) -> tuple[Strategy, ...]:
    """Fields read from the package.json next to a lockfile.

    packageManager is always consulted; devEngines only when enabled.
    """
    if Strategy.DEV_ENGINES_FIELD in strategies:
        return (Strategy.PACKAGE_MANAGER_FIELD, Strategy.DEV_ENGINES_FIELD)
    return (Strategy.PACKAGE_MANAGER_FIELD,)


def _lockfile_result(
    name: AgentName,
    manifest_result: Optional[DetectResult],
) -> DetectResult:
    if manifest_result is not None:
        return manifest_result
    return DetectResult(name=name, agent=Agent(name.value))


def _metadata_result(marker: str, name: AgentName) -> DetectResult:
    if name == AgentName.YARN:
        agent = Agent.YARN if marker.endswith(YARN_CLASSIC_MARKER) else Agent.YARN_BERRY
    else:
        agent = Agent(name.value)
    return DetectResult(name=name, agent=agent)


def _log_result(result: Optional[DetectResult], source: str) -> None:
    if result is None:
        logger.info("Detection complete: no package manager found (from %s)", source)
        return
    logger.info(
        "Detection complete: name=%s agent=%s version=%s source=%s",
        result.name,
        result.agent,
        result.version,
        source,
    )
