"""pyshell: a small POSIX-flavoured interactive shell."""

__version__ = "0.1.0"
