"""Package-manager specifier parser.

Turns a raw ``name[@version]`` string, as found in package.json's
``packageManager`` field or in npm_config_user_agent, into a DetectResult.

Rule order (first match wins):
  yarn, major > 1   -> yarn@berry, version "berry"
  pnpm, major < 7   -> pnpm@6, version kept
  known agent name  -> that agent, version kept
  anything else     -> on_unknown(raw)
"""

import re
from typing import Optional

from pmdetect.detector.constants import AGENTS
from pmdetect.detector.types import Agent, AgentName, DetectResult, UnknownHandler

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


def parse_specifier(
    raw: Optional[str],
    on_unknown: Optional[UnknownHandler] = None,
) -> Optional[DetectResult]:
    """Parse a raw specifier into a DetectResult.

    Never raises for malformed input: anything that matches no rule is
    handed to ``on_unknown`` verbatim, and a missing handler or a None
    return yields None.

    Only the first ``@`` splits: ``"bun@1.0.0@x"`` keeps ``"1.0.0@x"`` as
    its version, where a JavaScript ``split("@")`` destructure would keep
    ``"1.0.0"``. Versions compare on their leading ASCII integer only.
    """
    if not raw:
        return None

    name, sep, version_part = raw.removeprefix("^").partition("@")
    version = version_part if sep else None
    major = _leading_int(version)

    if name == "yarn" and major is not None and major > 1:
        # The packageManager version is the berry line, not the binary version.
        return DetectResult(name=AgentName.YARN, agent=Agent.YARN_BERRY, version="berry")
    if name == "pnpm" and major is not None and major < 7:
        return DetectResult(name=AgentName.PNPM, agent=Agent.PNPM_6, version=version)
    if name in AGENTS:
        agent = Agent(name)
        return DetectResult(name=agent.agent_name, agent=agent, version=version)

    if on_unknown is None:
        return None
    return on_unknown(raw) or None


def _leading_int(version: Optional[str]) -> Optional[int]:
    """Leading integer of a version string, or None when there is none."""
    if version is None:
        return None
    match = _LEADING_INT_RE.match(version)
    return int(match.group(1)) if match else None
