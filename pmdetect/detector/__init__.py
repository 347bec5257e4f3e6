"""Package-manager detection.

Public API:
    detect(options) -> DetectResult | None          (async)
    detect_sync(options) -> DetectResult | None
"""

from pmdetect.detector.env import get_user_agent
from pmdetect.detector.orchestrator import detect, detect_sync
from pmdetect.detector.specifier import parse_specifier
from pmdetect.detector.types import (
    Agent,
    AgentName,
    DetectOptions,
    DetectResult,
    EnvHint,
    Strategy,
)
from pmdetect.detector.walker import StopDir, lookup

__all__ = [
    "Agent",
    "AgentName",
    "DetectOptions",
    "DetectResult",
    "EnvHint",
    "StopDir",
    "Strategy",
    "detect",
    "detect_sync",
    "get_user_agent",
    "lookup",
    "parse_specifier",
]
