import logging

import pytest

from pyshell.config import ShellConfig, parse_log_level
from pyshell.errors import ConfigError
from pyshell.tokenizer import QuoteMode


class TestShellConfig:

    def test_defaults(self):
        config = ShellConfig.from_env({})
        assert config == ShellConfig()
        assert config.prompt == "$ "
        assert config.quote_mode is QuoteMode.PERMISSIVE
        assert config.completion is True

    def test_environment(self):
        config = ShellConfig.from_env({
            "PYSHELL_PROMPT": "> ",
            "PYSHELL_STRICT_QUOTES": "yes",
            "PYSHELL_LOG_LEVEL": "debug",
            "PYSHELL_LOG_FILE": "/tmp/pyshell.log",
            "PYSHELL_HISTFILE": "/tmp/history",
            "PYSHELL_HISTSIZE": "50",
            "PYSHELL_NO_COMPLETION": "1",
        })
        assert config.prompt == "> "
        assert config.quote_mode is QuoteMode.STRICT
        assert config.log_level == logging.DEBUG
        assert config.log_file == "/tmp/pyshell.log"
        assert config.history_file == "/tmp/history"
        assert config.history_size == 50
        assert config.completion is False

    @pytest.mark.parametrize("environ", [
        {"PYSHELL_STRICT_QUOTES": "maybe"},
        {"PYSHELL_HISTSIZE": "lots"},
        {"PYSHELL_LOG_LEVEL": "loud"},
    ])
    def test_invalid_values(self, environ):
        with pytest.raises(ConfigError):
            ShellConfig.from_env(environ)

    def test_overrides_skip_none(self):
        config = ShellConfig().with_overrides(prompt="% ", log_file=None)
        assert config.prompt == "% "
        assert config.log_file is None

    def test_numeric_log_level(self):
        assert parse_log_level("15") == 15
