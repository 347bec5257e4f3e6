"""Per-agent command table.

Public API:
    resolve_command(agent, command, args) -> ResolvedCommand | None
"""

from pmdetect.commands.table import COMMANDS, get_command_value, resolve_command
from pmdetect.commands.types import (
    ARGS,
    UNSUPPORTED,
    Command,
    CommandValue,
    DynamicCommand,
    FixedCommand,
    ResolvedCommand,
    Unsupported,
)

__all__ = [
    "ARGS",
    "COMMANDS",
    "Command",
    "CommandValue",
    "DynamicCommand",
    "FixedCommand",
    "ResolvedCommand",
    "UNSUPPORTED",
    "Unsupported",
    "get_command_value",
    "resolve_command",
]
