# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Matches a `TokenStream` against a grammar and builds the result tree.

The matcher walks the tokens once, left to right, keeping:

- a scope chain: the parser root followed by each Command matched so far
  along the current path,
- at most one open Option that may still claim values,
- a queue of pending tokens, into which inline `=`/`:` values and expanded
  short-flag bundles are pushed back.

Alias resolution walks the scope chain from the outermost scope inward, so an
alias declared on both a Command and one of its subcommands always binds to
the outer Command, wherever the token appears.

Values are claimed by the open Option while it has room, then by the
innermost open Command with room. Anything left over is reported as not
recognized. Once all tokens are consumed, defaults are filled and every
AppliedOption is validated. Nothing here raises on bad input: all problems
become `ParseError` entries.
"""
from __future__ import annotations

import os
from collections import deque
from pathlib import PureWindowsPath
from typing import TYPE_CHECKING

from clitree.logger import logger
from clitree.parser.result import AppliedOption, ParseError, ParseResult
from clitree.parser.symbol import Symbol
from clitree.parser.tokenizer import (
    Token,
    TokenKind,
    TokenStream,
    expand_bundle,
    split_inline_value,
)

if TYPE_CHECKING:
    from clitree.parser.parser import Parser

EXECUTABLE_EXTENSIONS = (".exe", ".cmd", ".bat", ".com")


def matches_executable(token: str, command: Symbol) -> bool:
    """
    Return True if `token` is a path to an executable named after `command`.

    e.g. `dev/outer.exe`, `C:\\tools\\outer.cmd` or `/usr/bin/outer` for `outer`.
    """
    name = PureWindowsPath(token).name
    stem, extension = os.path.splitext(name)
    if extension.lower() in EXECUTABLE_EXTENSIONS:
        name = stem
    return name != token and name in command.aliases


class Matcher:
    """
    Single-use matching pass of one TokenStream against one Parser.

    `run()` only matches, which is what the suggestion engine needs.
    `finish()` also fills defaults, validates and returns a `ParseResult`.
    """

    def __init__(self, parser: Parser, stream: TokenStream) -> None:
        self.parser = parser
        self.stream = stream
        self.root = AppliedOption(parser.root)
        self.scopes: list[AppliedOption] = [self.root]
        self.open_option: AppliedOption | None = None
        self.applied_commands: set[int] = set()
        self.errors: list[ParseError] = [ParseError(message) for message in stream.errors]
        self.unparsed: list[str] = []
        self.unmatched: list[str] = []
        self.consumed: int = 0
        self._pending: deque[Token] = deque(stream.tokens)
        self._delimited = False

    @property
    def innermost(self) -> AppliedOption:
        return self.scopes[-1]

    def run(self) -> Matcher:
        while self._pending:
            token = self._pending.popleft()
            self._match(token)
        return self

    def finish(self) -> ParseResult:
        self.run()
        self.root._fill_defaults()
        for applied in self.root._children:
            self.errors.extend(applied.validate_all())
        logger.debug(
            "Matched %d tokens: %d applied, %d unparsed, %d errors",
            len(self.stream),
            len(self.root._children),
            len(self.unparsed),
            len(self.errors),
        )
        return ParseResult(
            parser=self.parser,
            stream=self.stream,
            applied=self.root._children,
            errors=self.errors,
            unparsed_tokens=self.unparsed,
            unmatched_tokens=self.unmatched,
            root_unmatched=self.root._unmatched,
        )

    def _match(self, token: Token) -> None:
        first = self.consumed == 0
        self.consumed += 1

        if self._delimited:
            if token.kind is TokenKind.VALUE:
                self.unparsed.append(token.value)
            else:
                logger.debug("Dropping option-like token '%s' after '--'", token.value)
            return

        if token.kind is TokenKind.DELIMITER:
            self.open_option = None
            self._delimited = True
            return

        if token.synthetic:
            self._claim(token.value)
            return

        if first and self._match_root(token):
            return

        found = self.resolve(token.value)
        if found is not None:
            self._apply(*found)
            return

        if token.kind is TokenKind.OPTION and self._expand(token):
            return

        self._claim(token.value)

    def _match_root(self, token: Token) -> bool:
        """
        Handle the first token when the grammar has a single top-level Command.

        Returns True if the token was consumed as the root Command.
        """
        command = self.parser.root_command
        if command is None or self.parser.root.resolve(token.value) is not None:
            return False
        self._apply(command, 0)
        if matches_executable(token.value, command):
            logger.debug("Matched '%s' as the path of root command '%s'", token.value, command.name)
            return True
        logger.debug("Root command '%s' omitted, implying it", command.name)
        return False

    def resolve(self, value: str) -> tuple[Symbol, int] | None:
        """
        Find the Symbol a token refers to and the depth of the scope declaring it.

        Scopes are searched outermost first. Commands already applied in this
        parse are not matched again.
        """
        for depth, scope in enumerate(self.scopes):
            symbol = scope.symbol.resolve(value)
            if symbol is None:
                continue
            if symbol.is_command and id(symbol) in self.applied_commands:
                continue
            return symbol, depth
        return None

    def _apply(self, symbol: Symbol, depth: int) -> None:
        self.open_option = None
        applied = self.scopes[depth]._apply(symbol)
        if symbol.is_command:
            self.applied_commands.add(id(symbol))
            del self.scopes[depth + 1 :]
            self.scopes.append(applied)
        else:
            self.open_option = applied

    def _expand(self, token: Token) -> bool:
        """Split an inline value or a bundle of short flags back into the queue."""
        inline = split_inline_value(token.value)
        if inline is not None:
            name, value = inline
            found = self.resolve(name)
            if found is not None and found[0].is_option:
                self._pending.appendleft(Token.classify(value, token.position, synthetic=True))
                self._apply(*found)
                return True

        bundle = expand_bundle(token.value)
        if bundle is not None:
            for flag in bundle:
                found = self.resolve(flag)
                if found is None or not found[0].is_option or not found[0].takes_no_arguments:
                    return False
            self._pending.extendleft(
                Token(flag, TokenKind.OPTION, token.position) for flag in reversed(bundle)
            )
            return True
        return False

    def _claim(self, value: str) -> None:
        if self.open_option is not None and self.open_option.has_capacity():
            self.open_option._claim(value)
            return
        self.open_option = None
        for scope in reversed(self.scopes[1:]):
            if scope.has_capacity():
                scope._claim(value)
                return
        self.innermost._unmatched.append(value)
        self.unmatched.append(value)
        self.errors.append(ParseError(f"Option '{value}' is not recognized."))
