"""Per-agent command table and lookup.

Read-only data for consumers of DetectResult; the resolver never reads it.
"""

from typing import Optional, Sequence, Union

from pmdetect.commands.types import (
    ARGS,
    UNSUPPORTED,
    Command,
    CommandValue,
    DynamicCommand,
    FixedCommand,
    ResolvedCommand,
    Unsupported,
    fixed,
)
from pmdetect.detector.types import Agent


def _npm_style_run(agent: str) -> DynamicCommand:
    """``<agent> run <script> -- <args>``: npm needs ``--`` before script args."""

    def build(args: Sequence[str]) -> list[str]:
        if len(args) > 1:
            return [agent, "run", args[0], "--", *args[1:]]
        return [agent, "run", *args]

    return DynamicCommand(factory=build)


_NPM: dict[Command, CommandValue] = {
    Command.AGENT: fixed("npm", ARGS),
    Command.RUN: _npm_style_run("npm"),
    Command.INSTALL: fixed("npm", "i", ARGS),
    Command.FROZEN: fixed("npm", "ci", ARGS),
    Command.GLOBAL: fixed("npm", "i", "-g", ARGS),
    Command.ADD: fixed("npm", "i", ARGS),
    Command.UPGRADE: fixed("npm", "update", ARGS),
    Command.UPGRADE_INTERACTIVE: UNSUPPORTED,
    Command.EXECUTE: fixed("npx", ARGS),
    Command.EXECUTE_LOCAL: fixed("npx", ARGS),
    Command.UNINSTALL: fixed("npm", "uninstall", ARGS),
    Command.GLOBAL_UNINSTALL: fixed("npm", "uninstall", "-g", ARGS),
}

_YARN: dict[Command, CommandValue] = {
    Command.AGENT: fixed("yarn", ARGS),
    Command.RUN: fixed("yarn", "run", ARGS),
    Command.INSTALL: fixed("yarn", "install", ARGS),
    Command.FROZEN: fixed("yarn", "install", "--frozen-lockfile", ARGS),
    Command.GLOBAL: fixed("yarn", "global", "add", ARGS),
    Command.ADD: fixed("yarn", "add", ARGS),
    Command.UPGRADE: fixed("yarn", "upgrade", ARGS),
    Command.UPGRADE_INTERACTIVE: fixed("yarn", "upgrade-interactive", ARGS),
    Command.EXECUTE: fixed("npx", ARGS),
    Command.EXECUTE_LOCAL: fixed("yarn", "exec", ARGS),
    Command.UNINSTALL: fixed("yarn", "remove", ARGS),
    Command.GLOBAL_UNINSTALL: fixed("yarn", "global", "remove", ARGS),
}

# Berry dropped `yarn global`; global installs go through npm.
_YARN_BERRY: dict[Command, CommandValue] = {
    **_YARN,
    Command.FROZEN: fixed("yarn", "install", "--immutable", ARGS),
    Command.UPGRADE: fixed("yarn", "up", ARGS),
    Command.UPGRADE_INTERACTIVE: fixed("yarn", "up", "-i", ARGS),
    Command.EXECUTE: fixed("yarn", "dlx", ARGS),
    Command.GLOBAL: fixed("npm", "i", "-g", ARGS),
    Command.GLOBAL_UNINSTALL: fixed("npm", "uninstall", "-g", ARGS),
}

_PNPM: dict[Command, CommandValue] = {
    Command.AGENT: fixed("pnpm", ARGS),
    Command.RUN: fixed("pnpm", "run", ARGS),
    Command.INSTALL: fixed("pnpm", "i", ARGS),
    Command.FROZEN: fixed("pnpm", "i", "--frozen-lockfile", ARGS),
    Command.GLOBAL: fixed("pnpm", "add", "-g", ARGS),
    Command.ADD: fixed("pnpm", "add", ARGS),
    Command.UPGRADE: fixed("pnpm", "update", ARGS),
    Command.UPGRADE_INTERACTIVE: fixed("pnpm", "update", "-i", ARGS),
    Command.EXECUTE: fixed("pnpm", "dlx", ARGS),
    Command.EXECUTE_LOCAL: fixed("pnpm", "exec", ARGS),
    Command.UNINSTALL: fixed("pnpm", "remove", ARGS),
    Command.GLOBAL_UNINSTALL: fixed("pnpm", "remove", "--global", ARGS),
}

# pnpm < 7 forwards script arguments only after `--`, like npm.
_PNPM_6: dict[Command, CommandValue] = {
    **_PNPM,
    Command.RUN: _npm_style_run("pnpm"),
}

_BUN: dict[Command, CommandValue] = {
    Command.AGENT: fixed("bun", ARGS),
    Command.RUN: fixed("bun", "run", ARGS),
    Command.INSTALL: fixed("bun", "install", ARGS),
    Command.FROZEN: fixed("bun", "install", "--frozen-lockfile", ARGS),
    Command.GLOBAL: fixed("bun", "add", "-g", ARGS),
    Command.ADD: fixed("bun", "add", ARGS),
    Command.UPGRADE: fixed("bun", "update", ARGS),
    Command.UPGRADE_INTERACTIVE: fixed("bun", "update", ARGS),
    Command.EXECUTE: fixed("bun", "x", ARGS),
    Command.EXECUTE_LOCAL: fixed("bun", "x", ARGS),
    Command.UNINSTALL: fixed("bun", "remove", ARGS),
    Command.GLOBAL_UNINSTALL: fixed("bun", "remove", "-g", ARGS),
}

_DENO: dict[Command, CommandValue] = {
    Command.AGENT: fixed("deno", ARGS),
    Command.RUN: fixed("deno", "task", ARGS),
    Command.INSTALL: fixed("deno", "install", ARGS),
    Command.FROZEN: fixed("deno", "install", "--frozen", ARGS),
    Command.GLOBAL: fixed("deno", "install", "-g", ARGS),
    Command.ADD: fixed("deno", "add", ARGS),
    Command.UPGRADE: fixed("deno", "outdated", "--update", ARGS),
    Command.UPGRADE_INTERACTIVE: fixed("deno", "outdated", "--update", ARGS),
    Command.EXECUTE: fixed("deno", "run", ARGS),
    Command.EXECUTE_LOCAL: fixed("deno", "task", "--eval", ARGS),
    Command.UNINSTALL: fixed("deno", "remove", ARGS),
    Command.GLOBAL_UNINSTALL: fixed("deno", "uninstall", "-g", ARGS),
}

COMMANDS: dict[Agent, dict[Command, CommandValue]] = {
    Agent.NPM: _NPM,
    Agent.YARN: _YARN,
    Agent.YARN_BERRY: _YARN_BERRY,
    Agent.PNPM: _PNPM,
    Agent.PNPM_6: _PNPM_6,
    Agent.BUN: _BUN,
    Agent.DENO: _DENO,
}


def get_command_value(agent: Union[Agent, str], command: Union[Command, str]) -> CommandValue:
    """Raw table entry. Raises KeyError for an unknown agent or command."""
    try:
        return COMMANDS[Agent(agent)][Command(command)]
    except ValueError as exc:
        raise KeyError(str(exc)) from exc


def resolve_command(
    agent: Union[Agent, str],
    command: Union[Command, str],
    args: Sequence[str] = (),
) -> Optional[ResolvedCommand]:
    """Resolve ``command`` for ``agent`` with ``args`` merged in.

    Returns None when the agent has no equivalent command.
    """
    value = get_command_value(agent, command)
    if isinstance(value, Unsupported):
        return None
    if isinstance(value, (FixedCommand, DynamicCommand)):
        tokens = value.build(args)
        return ResolvedCommand(command=tokens[0], args=tokens[1:])
    raise TypeError(f"Unexpected command value: {value!r}")
