"""
Decides what a command name refers to: a builtin, an executable found on
the search path, or nothing.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Set, Union


log = logging.getLogger(__name__)


class BuiltinKind(Enum):
    """The fixed set of commands implemented inside the shell."""
    EXIT = "exit"
    ECHO = "echo"
    TYPE = "type"
    PWD = "pwd"
    CD = "cd"
    CAT = "cat"
    HELP = "help"
    CLEAR = "clear"

    @classmethod
    def lookup(cls, name: str) -> Optional["BuiltinKind"]:
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def names(cls) -> List[str]:
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class Builtin:
    kind: BuiltinKind


@dataclass(frozen=True)
class External:
    path: str


@dataclass(frozen=True)
class NotFound:
    name: str


Resolution = Union[Builtin, External, NotFound]


def search_dirs(path: Optional[str] = None) -> List[str]:
    """Directories of ``path`` (default ``$PATH``) in order, empty entries dropped."""
    if path is None:
        path = os.environ.get("PATH", "")
    return [d for d in path.split(os.pathsep) if d]


def is_executable_file(full_path: str) -> bool:
    return os.path.isfile(full_path) and os.access(full_path, os.X_OK)


def find_executable(name: str, path: Optional[str] = None) -> Optional[str]:
    """
    First ``dir/name`` on the search path that is a regular file. The execute
    bit is not checked here; a file without it fails when spawned.
    """
    for directory in search_dirs(path):
        full_path = os.path.join(directory, name)
        if os.path.isfile(full_path):
            return full_path
    return None


def resolve(name: str, path: Optional[str] = None) -> Resolution:
    """Builtins match exactly and case-sensitively, then the search path is tried."""
    kind = BuiltinKind.lookup(name)
    if kind is not None:
        result: Resolution = Builtin(kind)
    elif os.sep in name:
        # Explicit paths skip the search.
        result = External(name) if os.path.isfile(name) else NotFound(name)
    else:
        full_path = find_executable(name, path)
        result = External(full_path) if full_path else NotFound(name)

    log.debug("resolved %r -> %r", name, result)
    return result


def iter_path_executables(path: Optional[str] = None) -> Iterator[str]:
    """Basenames of every executable regular file on the search path."""
    for directory in search_dirs(path):
        try:
            entries = os.listdir(directory)
        except OSError as e:
            log.debug("skipping unreadable PATH entry %s: %s", directory, e)
            continue
        for entry in entries:
            if is_executable_file(os.path.join(directory, entry)):
                yield entry


def command_names(path: Optional[str] = None) -> Set[str]:
    """All names the shell can run: builtins plus PATH executables."""
    names = set(BuiltinKind.names())
    names.update(iter_path_executables(path))
    return names
