"""Shared types for the detector module.

Every detection path produces a DetectResult (or None). DetectOptions is
read once per call and never mutated.
"""

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional, Union

if TYPE_CHECKING:
    from pmdetect.detector.walker import StopDir


class AgentName(StrEnum):
    """Package-manager family, version flavor stripped."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    DENO = "deno"


class Agent(StrEnum):
    """Package-manager identity including the version line."""

    NPM = "npm"
    YARN = "yarn"
    YARN_BERRY = "yarn@berry"
    PNPM = "pnpm"
    PNPM_6 = "pnpm@6"
    BUN = "bun"
    DENO = "deno"

    @property
    def agent_name(self) -> AgentName:
        return AgentName(self.value.split("@", 1)[0])


class Strategy(StrEnum):
    """Detection technique evaluated per directory."""

    LOCKFILE = "lockfile"
    PACKAGE_MANAGER_FIELD = "packageManager-field"
    DEV_ENGINES_FIELD = "devEngines-field"
    INSTALL_METADATA = "install-metadata"


class EnvHint(StrEnum):
    """How the npm_config_user_agent hint is consulted before traversal.

    ONLY: use the hint exclusively; no directory traversal.
    PREFER: use the hint when it resolves, otherwise traverse.
    """

    OFF = "off"
    ONLY = "only"
    PREFER = "prefer"


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    Strategy.LOCKFILE,
    Strategy.PACKAGE_MANAGER_FIELD,
    Strategy.DEV_ENGINES_FIELD,
)


@dataclass(frozen=True)
class DetectResult:
    """A detected package manager.

    `agent` is the key into the command table; `name` is the family.
    `version` is whatever the specifier carried ("berry" for Yarn 2+).
    """

    name: AgentName
    agent: Agent
    version: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": str(self.name),
            "agent": str(self.agent),
            "version": self.version,
        }


UnknownHandler = Callable[[str], Optional[DetectResult]]
DirPredicate = Callable[[Path], bool]


@dataclass(frozen=True)
class DetectOptions:
    """Per-call detection configuration."""

    cwd: Union[str, Path, None] = None
    strategies: tuple[Strategy, ...] = DEFAULT_STRATEGIES
    on_unknown: Optional[UnknownHandler] = None
    # Normalized by StopDir.from_value.
    stop_dir: Union["StopDir", str, os.PathLike, DirPredicate, None] = None
    env_hint: EnvHint = EnvHint.OFF

    def resolved_cwd(self) -> Path:
        return Path(os.path.abspath(self.cwd if self.cwd is not None else os.getcwd()))
