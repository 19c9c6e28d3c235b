"""
Stdout/stderr redirection.

``detect_redirection`` turns a token list into a CommandLine, pulling out the
``>``-style operators (whole tokens only, so a filename like ``a>b`` is just an
argument). ``write_redirected`` puts captured bytes into the target file.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from pyshell.errors import RedirectionSyntaxError, RedirectionWriteError


log = logging.getLogger(__name__)


class Stream(Enum):
    STDOUT = 1
    STDERR = 2


class Mode(Enum):
    OVERWRITE = "wb"
    APPEND = "ab"


OPERATORS = {
    ">": (Stream.STDOUT, Mode.OVERWRITE),
    "1>": (Stream.STDOUT, Mode.OVERWRITE),
    ">>": (Stream.STDOUT, Mode.APPEND),
    "1>>": (Stream.STDOUT, Mode.APPEND),
    "2>": (Stream.STDERR, Mode.OVERWRITE),
    "2>>": (Stream.STDERR, Mode.APPEND),
}


@dataclass(frozen=True)
class RedirectionSpec:
    stream: Stream
    mode: Mode
    target: str


@dataclass(frozen=True)
class CommandLine:
    argv: Tuple[str, ...]
    redirection: Optional[RedirectionSpec] = None

    @property
    def name(self) -> str:
        return self.argv[0] if self.argv else ""

    @property
    def args(self) -> Tuple[str, ...]:
        return self.argv[1:]


def detect_redirection(tokens: Sequence[str]) -> CommandLine:
    """
    Split ``tokens`` into command words and at most one RedirectionSpec.

    The command is every token before the first operator. Each operator
    takes the token after it as its target; when several operators appear,
    the last one wins and the earlier ones are dropped. Words after the
    operators that are not targets are ignored.

    Raises:
        RedirectionSyntaxError: an operator is the last token or is
            followed by another operator.
    """
    first = next((i for i, token in enumerate(tokens) if token in OPERATORS), None)
    if first is None:
        return CommandLine(tuple(tokens))

    specs = []
    i = first
    while i < len(tokens):
        token = tokens[i]
        if token not in OPERATORS:
            i += 1
            continue
        if i + 1 >= len(tokens):
            raise RedirectionSyntaxError(token)
        target = tokens[i + 1]
        if target in OPERATORS:
            raise RedirectionSyntaxError(token, unexpected=target)
        stream, mode = OPERATORS[token]
        specs.append(RedirectionSpec(stream, mode, target))
        i += 2

    if len(specs) > 1:
        log.warning(
            "%d redirections on one line, only the last (%s) is used",
            len(specs), specs[-1].target,
        )
    return CommandLine(tuple(tokens[:first]), specs[-1])


def write_redirected(command: str, spec: RedirectionSpec, data: bytes) -> None:
    """
    Write ``data`` to ``spec.target``, creating parent directories first.

    Raises:
        RedirectionWriteError: the directory or file could not be written.
    """
    directory = os.path.dirname(spec.target)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(spec.target, spec.mode.value) as f:
            f.write(data)
    except OSError as e:
        reason = e.strerror or str(e)
        raise RedirectionWriteError(command, spec.target, reason) from e

    log.debug("wrote %d bytes to %s (%s)", len(data), spec.target, spec.mode.name)
