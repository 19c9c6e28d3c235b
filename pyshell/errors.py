"""
Exception hierarchy for pyshell.

    ShellError
    ├── ConfigError
    ├── TokenizeError
    │   └── UnterminatedQuoteError
    ├── RedirectionError
    │   ├── RedirectionSyntaxError
    │   └── RedirectionWriteError
    └── CommandNotFoundError

Every error carries the exact line the REPL prints for it, so the driver
only has to catch ShellError and write ``message``.
"""


class ShellError(Exception):
    """Base class for errors local to a single command line."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(ShellError):
    """Raised when a configuration value cannot be parsed."""
    pass


class TokenizeError(ShellError):
    pass


class UnterminatedQuoteError(TokenizeError):
    """Raised in strict mode when input ends inside a quote or escape."""

    def __init__(self, quote: str):
        if quote == "\\":
            message = "syntax error: unexpected end of input after escape"
        else:
            message = f"syntax error: unexpected end of input, missing closing {quote}"
        super().__init__(message)
        self.quote = quote


class RedirectionError(ShellError):
    pass


class RedirectionSyntaxError(RedirectionError):
    """Raised when a redirection operator has no usable target after it."""

    def __init__(self, operator: str, unexpected: str = "newline"):
        super().__init__(f"syntax error near unexpected token `{unexpected}' after {operator}")
        self.operator = operator
        self.unexpected = unexpected


class RedirectionWriteError(RedirectionError):
    """Raised when the redirection target cannot be created or written."""

    def __init__(self, command: str, target: str, reason: str):
        super().__init__(f"{command}: {target}: {reason}")
        self.command = command
        self.target = target
        self.reason = reason


class CommandNotFoundError(ShellError):

    def __init__(self, name: str):
        super().__init__(f"{name}: command not found")
        self.name = name
