"""
Tab completion of command names.

``complete`` decides what a tab press should do; ``ReadlineCompleter``
adapts that decision to readline's ``completer(text, state)`` protocol.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional

from pyshell.resolver import command_names
from pyshell.session import ShellSession


log = logging.getLogger(__name__)

BELL = "\a"


class Action(Enum):
    BELL = "bell"
    REPLACE = "replace"
    LIST = "list"


@dataclass(frozen=True)
class Proposal:
    action: Action
    text: str = ""
    matches: List[str] = field(default_factory=list)


def longest_common_prefix(words: Iterable[str]) -> str:
    return os.path.commonprefix(list(words))


def complete(prefix: str, session: ShellSession,
             candidates: Optional[Iterable[str]] = None) -> Proposal:
    """
    Work out the completion for ``prefix``.

    ``candidates`` defaults to the builtins plus every executable on the
    session's PATH. A unique match gets a trailing space; a longer shared
    prefix is filled in without one. When nothing can be added, the first
    press rings the bell and a repeated press on the same prefix lists the
    matches.
    """
    state = session.completion
    prefix = prefix.strip()
    if candidates is None:
        candidates = command_names(session.path)

    matches = sorted({c for c in candidates if c.startswith(prefix)})

    if prefix != state.last_prefix:
        state.reset()

    if not matches:
        log.debug("no completion for %r", prefix)
        return Proposal(Action.BELL)

    lcp = longest_common_prefix(matches)
    if len(matches) == 1:
        state.reset()
        return Proposal(Action.REPLACE, matches[0] + " ", matches)
    if len(lcp) > len(prefix):
        state.reset()
        return Proposal(Action.REPLACE, lcp, matches)

    if state.last_prefix == prefix and state.repeat_count > 0:
        log.debug("listing %d matches for %r", len(matches), prefix)
        state.reset()
        return Proposal(Action.LIST, prefix, matches)

    state.last_prefix = prefix
    state.repeat_count += 1
    return Proposal(Action.BELL, prefix, matches)


class ReadlineCompleter:
    """
    ``readline.set_completer`` callback. Only the first word of the line is
    completed; bells and match lists are written straight to the session's
    stdout since readline has no hook for either.
    """

    def __init__(self, session: ShellSession, line_buffer: Callable[[], str],
                 begidx: Callable[[], int]):
        self._session = session
        self._line_buffer = line_buffer
        self._begidx = begidx
        self._proposal: Optional[Proposal] = None

    def __call__(self, text: str, state: int) -> Optional[str]:
        if state == 0:
            self._proposal = self._propose(text)
        proposal = self._proposal
        if proposal is not None and proposal.action is Action.REPLACE and state == 0:
            return proposal.text
        return None

    def _propose(self, text: str) -> Optional[Proposal]:
        if self._line_buffer()[:self._begidx()].strip():
            return None

        proposal = complete(text, self._session)
        if proposal.action is Action.BELL:
            self._session.write_out(BELL)
        elif proposal.action is Action.LIST:
            prompt = self._session.config.prompt
            self._session.write_out(
                "\n" + "  ".join(proposal.matches) + "\n" + prompt + self._line_buffer()
            )
        return proposal
