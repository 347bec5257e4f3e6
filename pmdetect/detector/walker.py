"""Ascending directory walk used by the strategy engine.

The walk is lexical: paths are made absolute with ``os.path.abspath`` and
climbed with ``Path.parent``; nothing touches the filesystem.

A stop directory that is not an ancestor of ``cwd`` never matches, so the
walk runs up to (and excluding) the filesystem root.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from pmdetect.detector.types import DirPredicate


class StopDir(ABC):
    """Where the upward walk ends. The matching directory is never yielded."""

    @abstractmethod
    def matches(self, directory: Path) -> bool:
        """True when the walk must stop before ``directory``."""

    @classmethod
    def from_value(cls, value: Union["StopDir", str, os.PathLike, DirPredicate, None]) -> "StopDir":
        if value is None:
            return NoStop()
        if isinstance(value, StopDir):
            return value
        if isinstance(value, (str, os.PathLike)):
            return StopAtPath(Path(os.path.abspath(value)))
        if callable(value):
            return StopWhen(value)
        raise TypeError(f"stop_dir must be a path or a predicate, got {type(value).__name__}")


@dataclass(frozen=True)
class NoStop(StopDir):
    def matches(self, directory: Path) -> bool:
        return False


@dataclass(frozen=True)
class StopAtPath(StopDir):
    path: Path

    def matches(self, directory: Path) -> bool:
        return directory == self.path


@dataclass(frozen=True)
class StopWhen(StopDir):
    predicate: DirPredicate

    def matches(self, directory: Path) -> bool:
        return bool(self.predicate(directory))


def lookup(
    cwd: Union[str, os.PathLike, None] = None,
    stop_dir: Union[StopDir, str, os.PathLike, DirPredicate, None] = None,
) -> Iterator[Path]:
    """Yield ``cwd`` and each of its parents, child first.

    Stops before the filesystem root and before the first directory
    matching ``stop_dir``.
    """
    directory = Path(os.path.abspath(cwd if cwd is not None else os.getcwd()))
    stop = StopDir.from_value(stop_dir)

    while directory.parent != directory and not stop.matches(directory):
        yield directory
        directory = directory.parent
