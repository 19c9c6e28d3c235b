"""
Commands implemented inside the shell.

Handlers are registered against BuiltinKind with the ``command`` decorator.
Each one takes the session, its arguments and the binary streams it should
write to, and returns an exit status.
"""

import logging
import os
from typing import BinaryIO, Callable, Dict, Sequence

from pyshell.resolver import Builtin, BuiltinKind, External, resolve
from pyshell.session import ShellSession


log = logging.getLogger(__name__)

Handler = Callable[[ShellSession, Sequence[str], BinaryIO, BinaryIO], int]

HANDLERS: Dict[BuiltinKind, Handler] = {}

CLEAR_SCREEN = "\x1b[H\x1b[2J"


def command(kind: BuiltinKind):
    """ Decorator to register a builtin handler """
    def register(func: Handler) -> Handler:
        HANDLERS[kind] = func
        return func
    return register


def _write(stream: BinaryIO, text: str) -> None:
    stream.write(text.encode())


def run_builtin(kind: BuiltinKind, session: ShellSession, args: Sequence[str],
                out: BinaryIO, err: BinaryIO) -> int:
    log.debug("builtin %s %r", kind.value, list(args))
    status = HANDLERS[kind](session, args, out, err)
    out.flush()
    err.flush()
    return status


@command(BuiltinKind.EXIT)
def shell_exit(session, args, out, err):
    """ Stops the REPL; arguments are ignored and the shell exits 0 """
    session.running = False
    return 0


@command(BuiltinKind.ECHO)
def shell_echo(session, args, out, err):
    _write(out, " ".join(args) + "\n")
    return 0


@command(BuiltinKind.TYPE)
def shell_type(session, args, out, err):
    """ Reports how each name would be run """
    status = 0
    for name in args:
        result = resolve(name, session.path)
        if isinstance(result, Builtin):
            _write(out, f"{name} is a shell builtin\n")
        elif isinstance(result, External):
            _write(out, f"{name} is {result.path}\n")
        else:
            _write(out, f"{name}: not found\n")
            status = 1
    return status


@command(BuiltinKind.PWD)
def shell_pwd(session, args, out, err):
    _write(out, os.getcwd() + "\n")
    return 0


@command(BuiltinKind.CD)
def shell_cd(session, args, out, err):
    target = args[0] if args else "~"
    path = session.home if target == "~" else target
    try:
        os.chdir(path)
    except (FileNotFoundError, NotADirectoryError):
        _write(err, f"cd: {target}: No such file or directory\n")
        return 1
    except PermissionError:
        _write(err, f"cd: {target}: Permission denied\n")
        return 1
    log.debug("cwd is now %s", os.getcwd())
    return 0


@command(BuiltinKind.CAT)
def shell_cat(session, args, out, err):
    """ Copies each file to stdout, reporting bad paths and moving on """
    status = 0
    for path in args:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except FileNotFoundError:
            _write(err, f"cat: {path}: No such file or directory\n")
            status = 1
            continue
        except PermissionError:
            _write(err, f"cat: {path}: Permission denied\n")
            status = 1
            continue
        except OSError as e:
            _write(err, f"cat: {path}: {e.strerror}\n")
            status = 1
            continue
        out.write(data)
    return status


@command(BuiltinKind.HELP)
def shell_help(session, args, out, err):
    for name in sorted(BuiltinKind.names()):
        _write(out, name + "\n")
    return 0


@command(BuiltinKind.CLEAR)
def shell_clear(session, args, out, err):
    """ Homes the cursor and erases the screen """
    _write(out, CLEAR_SCREEN)
    return 0
