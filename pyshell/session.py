"""Mutable state for one interactive session."""

import os
import sys
from dataclasses import dataclass, field
from typing import BinaryIO, MutableMapping, Optional

from pyshell.config import ShellConfig


@dataclass
class CompletionState:
    last_prefix: Optional[str] = None
    repeat_count: int = 0

    def reset(self) -> None:
        self.last_prefix = None
        self.repeat_count = 0


@dataclass
class ShellSession:
    """
    Everything that outlives a single command line: configuration, the
    environment, the interactive streams, completion state and whether the
    loop should keep going. The working directory is the process cwd.
    """
    config: ShellConfig = field(default_factory=ShellConfig)
    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)
    stdout: BinaryIO = field(default_factory=lambda: sys.stdout.buffer)
    stderr: BinaryIO = field(default_factory=lambda: sys.stderr.buffer)
    completion: CompletionState = field(default_factory=CompletionState)
    running: bool = True
    last_status: int = 0

    @property
    def path(self) -> str:
        return self.environ.get("PATH", "")

    @property
    def home(self) -> str:
        return self.environ.get("HOME") or os.path.expanduser("~")

    def write_out(self, text: str) -> None:
        self.stdout.write(text.encode())
        self.stdout.flush()

    def write_err(self, text: str) -> None:
        self.stderr.write(text.encode())
        self.stderr.flush()
