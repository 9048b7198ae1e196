# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by clitree.

Parsing itself never raises. Problems found while parsing a command line
are collected as `ParseError` values on the `ParseResult` instead, so one bad
token never hides the diagnostics for the rest of the input.

Exception Hierarchy:
- ClitreeError
    ├── GrammarError
    ├── OptionNotFoundError
    ├── CommandLineError
    └── ConfigError
"""


class ClitreeError(Exception):
    """Base exception for clitree."""


class GrammarError(ClitreeError, ValueError):
    """Raised when a grammar cannot be built (duplicate alias, bad rule, None symbol)."""


class OptionNotFoundError(ClitreeError, KeyError):
    """Raised when looking up an alias that was not applied at this level of the result."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class CommandLineError(ClitreeError, ValueError):
    """Raised when a parse result cannot be written back as a raw command line."""


class ConfigError(ClitreeError, ValueError):
    """Raised when a grammar definition file cannot be converted into a Parser."""
