"""
Interactive entry point: read a line, run it, repeat.
"""

import argparse
import logging
import os
import readline
import sys
from typing import Callable, List, Optional

from pyshell.completion import ReadlineCompleter
from pyshell.config import ShellConfig, parse_log_level
from pyshell.errors import ShellError
from pyshell.executor import run_line
from pyshell.log import setup_logging
from pyshell.session import ShellSession
from pyshell.tokenizer import QuoteMode


log = logging.getLogger(__name__)

# Status of a line that failed to parse.
STATUS_USAGE = 2


def run_one(line: str, session: ShellSession) -> int:
    """Run a single line, reporting line-level errors instead of raising them."""
    try:
        status = run_line(line, session)
    except ShellError as e:
        session.write_err(e.message + "\n")
        status = STATUS_USAGE
    if status is None:
        return session.last_status
    session.last_status = status
    return status


def repl(session: ShellSession, read_line: Callable[[str], str] = input) -> int:
    """
    Loop until ``exit`` or end of input. The shell itself always exits 0;
    statuses of individual commands are kept on ``session.last_status``.
    """
    while session.running:
        try:
            line = read_line(session.config.prompt)
            run_one(line, session)
        except EOFError:
            session.write_out("\n")
            break
        except KeyboardInterrupt:
            # Ctrl-C at the prompt or while a child runs drops the line.
            session.write_out("\n")
    return 0


def setup_readline(session: ShellSession) -> None:
    """ Wires tab completion and history into readline """
    config = session.config
    if config.completion:
        readline.set_completer(ReadlineCompleter(
            session, readline.get_line_buffer, readline.get_begidx,
        ))
        readline.set_completer_delims(" \t\n")
        readline.parse_and_bind("tab: complete")

    if config.history_file:
        readline.set_history_length(config.history_size)
        try:
            readline.read_history_file(config.history_file)
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning("could not read history from %s: %s", config.history_file, e)


def save_history(config: ShellConfig) -> None:
    if not config.history_file:
        return
    try:
        readline.write_history_file(config.history_file)
    except OSError as e:
        log.warning("could not save history to %s: %s", config.history_file, e)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pyshell", description="A small interactive shell")
    parser.add_argument('-c', '--command', help='Run one command line and exit with its status')
    parser.add_argument('--prompt', help='Prompt string (default "$ ")')
    parser.add_argument('--strict-quotes', action='store_true',
                        help='Reject lines that end inside a quote or escape')
    parser.add_argument('--log-level', help='Diagnostic log level, e.g. DEBUG')
    parser.add_argument('--log-file', help='Write diagnostics to this file')
    parser.add_argument('--history-file', help='Load and save command history here')
    parser.add_argument('--no-completion', action='store_true', help='Disable tab completion')
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> ShellConfig:
    config = ShellConfig.from_env(os.environ)
    return config.with_overrides(
        prompt=args.prompt,
        quote_mode=QuoteMode.STRICT if args.strict_quotes else None,
        log_level=parse_log_level(args.log_level) if args.log_level else None,
        log_file=args.log_file,
        history_file=args.history_file,
        completion=False if args.no_completion else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """ Main shell loop """
    args = parse_args(argv)
    try:
        config = load_config(args)
    except ShellError as e:
        sys.stderr.write(f"pyshell: {e.message}\n")
        return STATUS_USAGE

    setup_logging(config)
    session = ShellSession(config=config)

    if args.command is not None:
        return run_one(args.command, session)

    setup_readline(session)
    log.debug("starting interactive session in %s", os.getcwd())
    try:
        return repl(session)
    finally:
        save_history(config)


if __name__ == "__main__":
    sys.exit(main())
