"""Detect the package manager governing a JavaScript project.

Usage::

    from pmdetect import DetectOptions, detect_sync, resolve_command

    result = detect_sync(DetectOptions(cwd="path/to/project"))
    if result is not None:
        install = resolve_command(result.agent, "frozen")
"""

from pmdetect.commands import ResolvedCommand, resolve_command
from pmdetect.detector import (
    Agent,
    AgentName,
    DetectOptions,
    DetectResult,
    EnvHint,
    StopDir,
    Strategy,
    detect,
    detect_sync,
    get_user_agent,
    parse_specifier,
)

__all__ = [
    "Agent",
    "AgentName",
    "DetectOptions",
    "DetectResult",
    "EnvHint",
    "ResolvedCommand",
    "StopDir",
    "Strategy",
    "detect",
    "detect_sync",
    "get_user_agent",
    "parse_specifier",
    "resolve_command",
]
