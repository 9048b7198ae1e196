# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lexical analysis for clitree command lines.

Turns a raw command-line string, or an already split argument list, into an
ordered `TokenStream`. The tokenizer only knows about lexical shape:

- whitespace splitting with double-quoted spans kept verbatim (quotes removed,
  backslashes never treated as escapes, so Windows paths survive intact)
- the bare `--` raw-args delimiter
- option-like tokens (`-x`, `--xyz`, `/x`)

Decisions that depend on the grammar (whether `-x=1` carries an inline value,
whether `-xyz` is a bundle, whether `/temp/file` is an option or a path) are
made by the matcher with the helpers at the bottom of this module, because they
depend on which aliases are reachable at the current scope.
"""
from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from clitree.logger import logger

DELIMITER = "--"
OPTION_PREFIXES = ("-", "/")
INLINE_DELIMITERS = ("=", ":")


class TokenKind(Enum):
    """Lexical category of a token."""

    VALUE = "value"
    OPTION = "option"
    DELIMITER = "delimiter"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single lexical unit of a command line."""

    value: str
    kind: TokenKind
    position: int
    synthetic: bool = False

    @classmethod
    def classify(cls, value: str, position: int, synthetic: bool = False) -> Token:
        if synthetic:
            return cls(value, TokenKind.VALUE, position, synthetic=True)
        if value == DELIMITER:
            kind = TokenKind.DELIMITER
        elif looks_like_option(value):
            kind = TokenKind.OPTION
        else:
            kind = TokenKind.VALUE
        return cls(value, kind, position)


@dataclass(frozen=True)
class TokenStream:
    """
    The output of `tokenize()`.

    Attributes:
        tokens (tuple[Token, ...]): Tokens in input order.
        partial (str | None): The trailing token of a raw string that does not
            end in whitespace. It is still part of `tokens`, but completion
            treats it as a prefix still being typed.
        errors (tuple[str, ...]): Lexical problems found while splitting.
    """

    tokens: tuple[Token, ...]
    partial: str | None = None
    errors: tuple[str, ...] = ()

    @property
    def values(self) -> list[str]:
        return [token.value for token in self.tokens]

    def committed(self) -> TokenStream:
        """Return the stream without its trailing partial token."""
        if self.partial is None or not self.tokens:
            return self
        return TokenStream(self.tokens[:-1], None, self.errors)

    def __len__(self) -> int:
        return len(self.tokens)


def _split(text: str) -> list[str]:
    lexer = shlex.shlex(text, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.quotes = '"'
    lexer.escape = ""
    return list(lexer)


def split_command_line(text: str) -> tuple[list[str], list[str]]:
    """
    Split a raw command line into argument strings.

    Returns:
        tuple[list[str], list[str]]: The arguments and any lexical errors.
    """
    try:
        return _split(text), []
    except ValueError as error:
        logger.debug("Closing unterminated quote in %r: %s", text, error)
        return _split(f'{text}"'), ["Unterminated quoted segment in input."]


def tokenize(args: str | Sequence[str]) -> TokenStream:
    """
    Tokenize a raw command line or a pre-split argument list.

    Args:
        args (str | Sequence[str]): Raw text to split, or arguments to take verbatim.

    Returns:
        TokenStream: The classified tokens.
    """
    if isinstance(args, str):
        values, errors = split_command_line(args)
        partial = None
        if values and args and not args[-1].isspace():
            partial = values[-1]
    else:
        values, errors, partial = list(args), [], None
        for value in values:
            if not isinstance(value, str):
                raise TypeError(f"Arguments must be strings, got {type(value).__name__}")

    tokens = tuple(Token.classify(value, index) for index, value in enumerate(values))
    return TokenStream(tokens, partial, tuple(errors))


def looks_like_option(text: str) -> bool:
    """Return True if the text carries an option prefix (`-x`, `--xyz`, `/x`)."""
    return len(text) > 1 and text.startswith(OPTION_PREFIXES) and text != DELIMITER


def prefix_length(text: str) -> int:
    if text.startswith("/"):
        return 1
    return len(text) - len(text.lstrip("-"))


def unprefix(text: str) -> str:
    """Strip leading dashes, or a single leading slash, from an alias or token."""
    return text[prefix_length(text) :]


def split_inline_value(text: str) -> tuple[str, str] | None:
    """
    Split `--name=value`, `-x=value`, `/x:value` into name and value.

    Returns None when the token is not option-like or carries no delimiter.
    """
    if not looks_like_option(text):
        return None
    start = prefix_length(text)
    for index in range(start + 1, len(text)):
        if text[index] in INLINE_DELIMITERS:
            return text[:index], text[index + 1 :]
    return None


def expand_bundle(text: str) -> list[str] | None:
    """
    Expand POSIX-style bundled short flags.

    e.g. `-abc` -> `["-a", "-b", "-c"]`. Returns None when the token cannot
    be a bundle.
    """
    if text.startswith("-") and not text.startswith("--") and len(text) > 2:
        return [f"-{char}" for char in text[1:]]
    return None
