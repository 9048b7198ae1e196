# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Parser`, the entry point that binds a grammar to command lines.

A Parser holds the top-level Symbols of a grammar. It is built once, never
modified afterwards, and can be shared between threads: every call to
`parse()` creates its own Matcher and result tree.

Example:
    parser = Parser(
        option("-v|--verbose"),
        command("deploy", "Deploy the app", option("--env", "", any_one_of("dev", "prod"))),
    )
    result = parser.parse("deploy --env prod")
    assert result["deploy"]["env"].arguments == ["prod"]
"""
from __future__ import annotations

from typing import Iterator, Sequence

from clitree.logger import logger
from clitree.parser.matcher import Matcher
from clitree.parser.result import ParseResult
from clitree.parser.symbol import Symbol, SymbolKind
from clitree.parser.tokenizer import TokenStream, looks_like_option, tokenize

ROOT_ALIAS = "<root>"


def _bare_aliases(symbols: Sequence[Symbol]) -> Iterator[str]:
    for symbol in symbols:
        yield from (alias for alias in symbol.aliases if not looks_like_option(alias))
        yield from _bare_aliases(symbol.children)


class Parser:
    """
    Root collection of top-level Commands and Options.

    Args:
        *symbols (Symbol): Top-level Symbols. A single list or tuple of
            Symbols is also accepted.

    Raises:
        GrammarError: If a symbol is None or two symbols share an alias.
    """

    def __init__(self, *symbols: Symbol | Sequence[Symbol]) -> None:
        if len(symbols) == 1 and isinstance(symbols[0], (list, tuple)):
            symbols = tuple(symbols[0])
        self.root: Symbol = Symbol(
            kind=SymbolKind.COMMAND,
            aliases=(ROOT_ALIAS,),
            children=tuple(symbols),
            exclusive_subcommands=False,
        )
        commands = [symbol for symbol in self.root.children if symbol.is_command]
        self.root_command: Symbol | None = commands[0] if len(commands) == 1 else None
        self.bare_aliases: frozenset[str] = frozenset(_bare_aliases(self.root.children))
        logger.debug(
            "Built parser with %d top-level symbols (root command: %s)",
            len(self.root.children),
            self.root_command.name if self.root_command else None,
        )

    @property
    def symbols(self) -> tuple[Symbol, ...]:
        return self.root.children

    def __getitem__(self, alias: str) -> Symbol:
        return self.root.child(alias)

    def __contains__(self, alias: object) -> bool:
        return isinstance(alias, str) and any(symbol.has_alias(alias) for symbol in self.symbols)

    def tokenize(self, *args: str | Sequence[str]) -> TokenStream:
        """
        Normalize the accepted call forms into a TokenStream.

        `("raw text")` is split, `(["a", "b"])` and `("a", "b")` are taken verbatim.
        """
        if not args:
            return tokenize([])
        if len(args) == 1:
            return tokenize(args[0])
        return tokenize(list(args))  # type: ignore[arg-type]

    def parse(self, *args: str | Sequence[str]) -> ParseResult:
        """
        Parse a command line.

        Never raises for malformed input; problems are reported in
        `ParseResult.errors`.

        Args:
            *args (str | Sequence[str]): A raw string, a list of arguments,
                or several argument strings.

        Returns:
            ParseResult: The result tree and diagnostics.
        """
        stream = self.tokenize(*args)
        result = Matcher(self, stream).finish()
        logger.debug(
            "Parsed %r: %d tokens, %d errors",
            stream.values,
            len(stream),
            len(result.errors),
        )
        return result

    def suggest(self, *args: str | Sequence[str]) -> list[str]:
        """Shorthand for `parse(*args).suggestions()`."""
        return self.parse(*args).suggestions()

    def __repr__(self) -> str:
        return f"Parser(symbols={[symbol.name for symbol in self.symbols]})"
