"""
Clitree CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .accept import (
    Arity,
    any_one_of,
    exactly_one_argument,
    no_arguments,
    one_or_more_arguments,
    zero_or_more_arguments,
    zero_or_one_argument,
)
from .arguments_rule import ArgumentsRule, with_defaults
from .parser import Parser
from .result import AppliedOption, AppliedOptions, ParseError, ParseResult
from .symbol import Symbol, SymbolKind, command, option
from .tokenizer import Token, TokenKind, TokenStream, tokenize

__all__ = [
    "AppliedOption",
    "AppliedOptions",
    "ArgumentsRule",
    "Arity",
    "ParseError",
    "ParseResult",
    "Parser",
    "Symbol",
    "SymbolKind",
    "Token",
    "TokenKind",
    "TokenStream",
    "any_one_of",
    "command",
    "exactly_one_argument",
    "no_arguments",
    "one_or_more_arguments",
    "option",
    "tokenize",
    "with_defaults",
    "zero_or_more_arguments",
    "zero_or_one_argument",
]
