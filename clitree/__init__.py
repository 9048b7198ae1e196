"""
Clitree CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .exceptions import (
    ClitreeError,
    CommandLineError,
    ConfigError,
    GrammarError,
    OptionNotFoundError,
)
from .logger import logger
from .parser import (
    AppliedOption,
    ArgumentsRule,
    Arity,
    ParseError,
    Parser,
    ParseResult,
    any_one_of,
    command,
    exactly_one_argument,
    no_arguments,
    one_or_more_arguments,
    option,
    zero_or_more_arguments,
    zero_or_one_argument,
)

__all__ = [
    "AppliedOption",
    "ArgumentsRule",
    "Arity",
    "ClitreeError",
    "CommandLineError",
    "ConfigError",
    "GrammarError",
    "OptionNotFoundError",
    "ParseError",
    "ParseResult",
    "Parser",
    "any_one_of",
    "command",
    "exactly_one_argument",
    "logger",
    "no_arguments",
    "one_or_more_arguments",
    "option",
    "zero_or_more_arguments",
    "zero_or_one_argument",
]
