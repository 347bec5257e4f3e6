"""Command value variants.

A command table entry is exactly one of:
  FixedCommand    token list; ``ARGS`` expands to the caller's arguments
  DynamicCommand  function from arguments to tokens
  UNSUPPORTED     the agent has no equivalent
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Sequence, Union


class Command(StrEnum):
    AGENT = "agent"
    RUN = "run"
    INSTALL = "install"
    FROZEN = "frozen"
    GLOBAL = "global"
    ADD = "add"
    UPGRADE = "upgrade"
    UPGRADE_INTERACTIVE = "upgrade-interactive"
    EXECUTE = "execute"
    EXECUTE_LOCAL = "execute-local"
    UNINSTALL = "uninstall"
    GLOBAL_UNINSTALL = "global_uninstall"


class _ArgsPlaceholder:
    def __repr__(self) -> str:
        return "ARGS"


ARGS = _ArgsPlaceholder()


@dataclass(frozen=True)
class FixedCommand:
    tokens: tuple[Union[str, _ArgsPlaceholder], ...]

    def build(self, args: Sequence[str]) -> list[str]:
        out: list[str] = []
        for token in self.tokens:
            if token is ARGS:
                out.extend(args)
            else:
                out.append(token)
        return out


@dataclass(frozen=True)
class DynamicCommand:
    factory: Callable[[Sequence[str]], list[str]]

    def build(self, args: Sequence[str]) -> list[str]:
        return list(self.factory(list(args)))


@dataclass(frozen=True)
class Unsupported:
    pass


UNSUPPORTED = Unsupported()

CommandValue = Union[FixedCommand, DynamicCommand, Unsupported]


@dataclass(frozen=True)
class ResolvedCommand:
    """Executable plus its arguments, user arguments already merged."""

    command: str
    args: list[str]

    def to_list(self) -> list[str]:
        return [self.command, *self.args]


def fixed(*tokens: Union[str, _ArgsPlaceholder]) -> FixedCommand:
    return FixedCommand(tokens=tuple(tokens))
