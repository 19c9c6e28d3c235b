"""
Runs one CommandLine: a builtin in-process or an external program through
subprocess, with stdout or stderr optionally sent to a file.
"""

import io
import logging
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from pyshell.builtins import run_builtin
from pyshell.errors import CommandNotFoundError, RedirectionWriteError
from pyshell.redirection import (
    CommandLine, RedirectionSpec, Stream, detect_redirection, write_redirected,
)
from pyshell.resolver import Builtin, External, resolve
from pyshell.session import ShellSession
from pyshell.tokenizer import tokenize


log = logging.getLogger(__name__)

# Status reported when a found program cannot be started.
STATUS_CANNOT_EXECUTE = 126
STATUS_NOT_FOUND = 127


@dataclass(frozen=True)
class ExecutionResult:
    stdout: bytes
    stderr: bytes
    status: int


@dataclass(frozen=True)
class LaunchSpec:
    """How to start a program: ``argv[0]`` is the name as typed, ``executable`` where it lives."""
    executable: str
    argv: Sequence[str]
    env: Optional[Mapping[str, str]] = None


def spawn(launch: LaunchSpec, capture: bool) -> ExecutionResult:
    """Start the program and wait; stdin is always inherited."""
    log.debug("spawning %s as %r (capture=%s)", launch.executable, list(launch.argv), capture)
    completed = subprocess.run(
        list(launch.argv),
        executable=launch.executable,
        env=dict(launch.env) if launch.env is not None else None,
        stdout=subprocess.PIPE if capture else None,
        stderr=subprocess.PIPE if capture else None,
    )
    log.debug("%s exited with %d", launch.argv[0], completed.returncode)
    return ExecutionResult(completed.stdout or b"", completed.stderr or b"", completed.returncode)


def _run_captured(cmdline: CommandLine, session: ShellSession) -> ExecutionResult:
    result = resolve(cmdline.name, session.path)
    if isinstance(result, Builtin):
        out, err = io.BytesIO(), io.BytesIO()
        status = run_builtin(result.kind, session, cmdline.args, out, err)
        return ExecutionResult(out.getvalue(), err.getvalue(), status)
    if isinstance(result, External):
        return spawn(LaunchSpec(result.path, cmdline.argv, session.environ), capture=True)
    raise CommandNotFoundError(cmdline.name)


def _run_inherited(cmdline: CommandLine, session: ShellSession) -> int:
    result = resolve(cmdline.name, session.path)
    if isinstance(result, Builtin):
        return run_builtin(result.kind, session, cmdline.args, session.stdout, session.stderr)
    if isinstance(result, External):
        session.stdout.flush()
        session.stderr.flush()
        return spawn(LaunchSpec(result.path, cmdline.argv, session.environ), capture=False).status
    raise CommandNotFoundError(cmdline.name)


def _deliver(cmdline: CommandLine, spec: RedirectionSpec, result: ExecutionResult,
             session: ShellSession) -> None:
    """Targeted stream to the file, the other one to the terminal."""
    if spec.stream is Stream.STDOUT:
        targeted, forwarded, terminal = result.stdout, result.stderr, session.stderr
    else:
        targeted, forwarded, terminal = result.stderr, result.stdout, session.stdout

    if forwarded:
        terminal.write(forwarded)
        terminal.flush()
    write_redirected(cmdline.name, spec, targeted)


def execute(cmdline: CommandLine, session: ShellSession) -> int:
    """
    Run ``cmdline`` and return its exit status.

    Failures local to the line are reported on the session's error stream:
    a missing command yields 127, a program that cannot be started 126 and
    an unwritable redirection target 1.
    """
    if not cmdline.argv:
        return 0

    try:
        if cmdline.redirection is None:
            status = _run_inherited(cmdline, session)
        else:
            result = _run_captured(cmdline, session)
            status = result.status
            _deliver(cmdline, cmdline.redirection, result, session)
    except CommandNotFoundError as e:
        session.write_err(e.message + "\n")
        status = STATUS_NOT_FOUND
    except RedirectionWriteError as e:
        session.write_err(e.message + "\n")
        status = 1
    except OSError as e:
        # Found on PATH but could not be started (bad format, lost permission).
        log.debug("failed to start %s", cmdline.name, exc_info=True)
        session.write_err(f"{cmdline.name}: {e.strerror or e}\n")
        status = STATUS_CANNOT_EXECUTE

    session.last_status = status
    return status


def run_line(line: str, session: ShellSession) -> Optional[int]:
    """
    Tokenize, detect redirection and execute. Returns None for a blank line.

    Raises:
        TokenizeError: strict quoting is on and the line is unterminated.
        RedirectionSyntaxError: a redirection operator has no target.
    """
    tokens = tokenize(line, session.config.quote_mode)
    if not tokens:
        return None
    return execute(detect_redirection(tokens), session)
