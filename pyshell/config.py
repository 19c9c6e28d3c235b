"""
Shell configuration.

Defaults live on the dataclass; ``from_env`` overlays ``PYSHELL_*``
environment variables and the REPL driver overlays command-line flags on top.
"""

import logging
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from pyshell.errors import ConfigError
from pyshell.tokenizer import QuoteMode


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {value!r}")


def parse_log_level(value: str) -> int:
    """Accept a level name (``debug``) or number (``10``)."""
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ConfigError(f"unknown log level: {value!r}")
    return level


@dataclass(frozen=True)
class ShellConfig:
    """Runtime settings for one shell process."""
    prompt: str = "$ "
    quote_mode: QuoteMode = QuoteMode.PERMISSIVE
    log_level: int = logging.WARNING
    log_file: Optional[str] = None
    history_file: Optional[str] = None
    history_size: int = 1000
    completion: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ShellConfig":
        config = cls()
        changes = {}

        if "PYSHELL_PROMPT" in environ:
            changes["prompt"] = environ["PYSHELL_PROMPT"]
        if "PYSHELL_STRICT_QUOTES" in environ:
            strict = _parse_bool("PYSHELL_STRICT_QUOTES", environ["PYSHELL_STRICT_QUOTES"])
            changes["quote_mode"] = QuoteMode.STRICT if strict else QuoteMode.PERMISSIVE
        if "PYSHELL_LOG_LEVEL" in environ:
            changes["log_level"] = parse_log_level(environ["PYSHELL_LOG_LEVEL"])
        if environ.get("PYSHELL_LOG_FILE"):
            changes["log_file"] = environ["PYSHELL_LOG_FILE"]
        if environ.get("PYSHELL_HISTFILE"):
            changes["history_file"] = environ["PYSHELL_HISTFILE"]
        if "PYSHELL_HISTSIZE" in environ:
            raw = environ["PYSHELL_HISTSIZE"]
            try:
                changes["history_size"] = int(raw)
            except ValueError:
                raise ConfigError(f"PYSHELL_HISTSIZE: expected an integer, got {raw!r}") from None
        if "PYSHELL_NO_COMPLETION" in environ:
            changes["completion"] = not _parse_bool(
                "PYSHELL_NO_COMPLETION", environ["PYSHELL_NO_COMPLETION"]
            )

        return replace(config, **changes)

    def with_overrides(self, **overrides) -> "ShellConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
