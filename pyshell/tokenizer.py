"""
Quote- and escape-aware word splitting.

Works one character at a time over a small QuoteContext. What happens when
the input ends inside a quote is a named policy: PERMISSIVE keeps what was
collected, STRICT raises UnterminatedQuoteError.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

from pyshell.errors import UnterminatedQuoteError


log = logging.getLogger(__name__)

# Characters a backslash escapes inside double quotes.
DOUBLE_QUOTE_ESCAPES = frozenset('$`"\\\n')

WORD_SEPARATORS = frozenset(" \t")


class QuoteMode(Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"


@dataclass
class QuoteContext:
    in_single_quote: bool = False
    in_double_quote: bool = False
    pending_escape: bool = False

    @property
    def open_quote(self) -> str:
        if self.in_single_quote:
            return "'"
        if self.in_double_quote:
            return '"'
        if self.pending_escape:
            return "\\"
        return ""


def tokenize(line: str, mode: QuoteMode = QuoteMode.PERMISSIVE) -> List[str]:
    """Split ``line`` into argv words with all quoting resolved."""
    tokens: List[str] = []
    current: List[str] = []
    ctx = QuoteContext()

    for char in line:
        if ctx.pending_escape:
            ctx.pending_escape = False
            if ctx.in_double_quote and char not in DOUBLE_QUOTE_ESCAPES:
                current.append("\\")
            current.append(char)
        elif ctx.in_single_quote:
            if char == "'":
                ctx.in_single_quote = False
            else:
                current.append(char)
        elif ctx.in_double_quote:
            if char == '"':
                ctx.in_double_quote = False
            elif char == "\\":
                ctx.pending_escape = True
            else:
                current.append(char)
        elif char == "\\":
            ctx.pending_escape = True
        elif char == "'":
            ctx.in_single_quote = True
        elif char == '"':
            ctx.in_double_quote = True
        elif char in WORD_SEPARATORS:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if ctx.open_quote:
        if mode is QuoteMode.STRICT:
            raise UnterminatedQuoteError(ctx.open_quote)
        log.debug("unterminated %s at end of input, keeping partial token", ctx.open_quote)
        # A dangling backslash inside double quotes is kept, like any other
        # backslash there that escapes nothing.
        if ctx.pending_escape and ctx.in_double_quote:
            current.append("\\")

    if current:
        tokens.append("".join(current))

    log.debug("tokenized %r -> %r", line, tokens)
    return tokens
