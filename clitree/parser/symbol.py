# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the grammar model: `Symbol` nodes and the `option()` / `command()` builders.

A Symbol is either a Command or an Option (a tagged variant, see `SymbolKind`).
Both carry the same fields: declared aliases, a description, an `ArgumentsRule`
and an ordered tuple of children. Commands additionally carry the
`exclusive_subcommands` policy.

Each Symbol builds a map from unprefixed alias to child Symbol once, at
construction time. Two children sharing an alias is a `GrammarError` raised
immediately, never a parse-time diagnostic. After construction a Symbol is
never modified and can be shared freely across parses.

Example:
    grammar = command(
        "outer",
        "Outer command",
        option("-v|--verbose"),
        command("inner", "", option("-x", "", exactly_one_argument())),
    )
    result = grammar.parse("outer inner -x hello")
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Sequence

from clitree.exceptions import GrammarError
from clitree.logger import logger
from clitree.parser.accept import no_arguments
from clitree.parser.arguments_rule import ArgumentsRule
from clitree.parser.tokenizer import looks_like_option, unprefix

if TYPE_CHECKING:
    from clitree.parser.result import ParseResult

ALIAS_SEPARATOR = "|"


class SymbolKind(Enum):
    """Tag distinguishing Commands from Options."""

    COMMAND = "command"
    OPTION = "option"

    def __str__(self) -> str:
        return self.value


def build_alias_map(symbols: Iterable[Symbol | None]) -> dict[str, Symbol]:
    """
    Map every unprefixed alias of `symbols` to its Symbol.

    Raises:
        GrammarError: If a symbol is None or two symbols share an alias.
    """
    alias_map: dict[str, Symbol] = {}
    seen: set[int] = set()
    for symbol in symbols:
        if symbol is None:
            raise GrammarError("Symbol must not be None")
        if not isinstance(symbol, Symbol):
            raise GrammarError(f"Expected a Symbol, got {type(symbol).__name__}")
        if id(symbol) in seen:
            raise GrammarError(f"Alias '{symbol.name}' is already in use.")
        seen.add(id(symbol))
        for key in symbol.keys:
            if key in alias_map:
                raise GrammarError(f"Alias '{key}' is already in use.")
            alias_map[key] = symbol
    return alias_map


def resolve_alias(alias_map: dict[str, Symbol], token: str) -> Symbol | None:
    """
    Find the Symbol a token refers to.

    Prefixed tokens (`-x`, `--x`, `/x`) match any alias with the same unprefixed
    form. Bare tokens only match aliases that were declared bare.
    """
    if looks_like_option(token):
        return alias_map.get(unprefix(token))
    symbol = alias_map.get(token)
    if symbol is not None and token in symbol.aliases:
        return symbol
    return None


@dataclass(frozen=True, eq=False)
class Symbol:
    """
    A declared grammar node.

    Attributes:
        kind (SymbolKind): Command or Option.
        aliases (tuple[str, ...]): Aliases as declared, prefixes included.
        description (str): Human description.
        arguments (ArgumentsRule): Policy for the values this Symbol claims.
        children (tuple[Symbol, ...]): Nested Symbols, empty for Options.
        exclusive_subcommands (bool): For Commands, whether at most one child
            Command may be matched in a single parse.
    """

    kind: SymbolKind
    aliases: tuple[str, ...]
    description: str = ""
    arguments: ArgumentsRule = field(default_factory=no_arguments)
    children: tuple[Symbol, ...] = ()
    exclusive_subcommands: bool = True
    keys: frozenset[str] = field(init=False, repr=False)
    _alias_map: dict[str, Symbol] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, SymbolKind):
            object.__setattr__(self, "kind", SymbolKind(self.kind))
        object.__setattr__(self, "aliases", parse_aliases(self.aliases))
        if not isinstance(self.arguments, ArgumentsRule):
            raise GrammarError(
                f"arguments must be an ArgumentsRule, got {type(self.arguments).__name__}"
            )
        children = tuple(self.children)
        if self.kind is SymbolKind.OPTION and children:
            raise GrammarError(f"Option '{self.aliases[0]}' cannot have children")
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "keys", frozenset(unprefix(alias) for alias in self.aliases))
        object.__setattr__(self, "_alias_map", build_alias_map(children))

    @property
    def name(self) -> str:
        """
        Canonical name, unprefixed.

        The first `--long` alias, else the first bare alias, else the longest
        alias (the earliest declared on a tie).
        """
        for alias in self.aliases:
            if alias.startswith("--"):
                return unprefix(alias)
        for alias in self.aliases:
            if not looks_like_option(alias):
                return alias
        return max((unprefix(alias) for alias in self.aliases), key=len)

    @property
    def primary_alias(self) -> str:
        return self.aliases[0]

    @property
    def is_command(self) -> bool:
        return self.kind is SymbolKind.COMMAND

    @property
    def is_option(self) -> bool:
        return self.kind is SymbolKind.OPTION

    @property
    def takes_no_arguments(self) -> bool:
        return self.arguments.max_count == 0

    def has_alias(self, alias: str) -> bool:
        """Return True if `alias`, prefixed or bare, names this Symbol."""
        return unprefix(alias) in self.keys

    def resolve(self, token: str) -> Symbol | None:
        """Return the direct child a token refers to, if any."""
        return resolve_alias(self._alias_map, token)

    def child(self, alias: str) -> Symbol:
        """Return the direct child with the given alias."""
        symbol = self._alias_map.get(unprefix(alias))
        if symbol is None:
            raise KeyError(alias)
        return symbol

    def parse(self, *args: str | Sequence[str]) -> ParseResult:
        """Parse a command line against a Parser containing only this Symbol."""
        from clitree.parser.parser import Parser

        return Parser(self).parse(*args)

    def __repr__(self) -> str:
        return (
            f"Symbol(kind={self.kind}, aliases={self.aliases!r}, "
            f"arguments={self.arguments}, children={len(self.children)})"
        )

    def __str__(self) -> str:
        return f"{self.kind.value.title()}('{self.primary_alias}')"


def parse_aliases(aliases: str | Iterable[str]) -> tuple[str, ...]:
    """
    Normalize declared aliases.

    Accepts a `|`-separated string (`"-o|--one"`) or an iterable of aliases.

    Raises:
        GrammarError: If no alias is given or an alias is empty or contains whitespace.
    """
    if isinstance(aliases, str):
        parts = aliases.split(ALIAS_SEPARATOR)
    else:
        try:
            parts = list(aliases)
        except TypeError:
            raise GrammarError(f"Invalid aliases: {aliases!r}") from None
    if not parts:
        raise GrammarError("At least one alias is required")
    normalized = []
    for part in parts:
        if not isinstance(part, str):
            raise GrammarError(f"Alias {part!r} must be a string")
        alias = part.strip()
        if not alias or not unprefix(alias):
            raise GrammarError(f"Invalid alias {part!r} in {aliases!r}")
        if any(char.isspace() for char in alias):
            raise GrammarError(f"Alias '{alias}' cannot contain whitespace")
        if alias not in normalized:
            normalized.append(alias)
    return tuple(normalized)


def option(
    aliases: str | Iterable[str],
    description: str = "",
    arguments: ArgumentsRule | None = None,
) -> Symbol:
    """
    Declare an Option.

    Args:
        aliases (str | Iterable[str]): e.g. `"-o|--one"`.
        description (str): Human description.
        arguments (ArgumentsRule | None): Arity policy, `no_arguments()` by default.
    """
    return Symbol(
        kind=SymbolKind.OPTION,
        aliases=parse_aliases(aliases),
        description=description,
        arguments=arguments if arguments is not None else no_arguments(),
    )


def command(
    aliases: str | Iterable[str],
    description: str = "",
    *children: Symbol | ArgumentsRule,
    arguments: ArgumentsRule | None = None,
    exclusive_subcommands: bool = True,
) -> Symbol:
    """
    Declare a Command.

    Children are nested Options and Commands. An `ArgumentsRule` may also be
    passed among the children instead of the `arguments` keyword; it describes
    the free values the Command itself accepts.

    Args:
        aliases (str | Iterable[str]): e.g. `"move|mv"`.
        description (str): Human description.
        *children (Symbol | ArgumentsRule): Nested Symbols (and optionally the rule).
        arguments (ArgumentsRule | None): Arity policy, `no_arguments()` by default.
        exclusive_subcommands (bool): Allow at most one child Command per parse.
    """
    symbols: list[Symbol] = []
    for child in children:
        if isinstance(child, ArgumentsRule):
            if arguments is not None:
                raise GrammarError(f"Command '{aliases}' was given more than one ArgumentsRule")
            arguments = child
        elif child is None:
            raise GrammarError(f"Command '{aliases}' was given a None child")
        else:
            symbols.append(child)
    symbol = Symbol(
        kind=SymbolKind.COMMAND,
        aliases=parse_aliases(aliases),
        description=description,
        arguments=arguments if arguments is not None else no_arguments(),
        children=tuple(symbols),
        exclusive_subcommands=exclusive_subcommands,
    )
    logger.debug("Declared %s with %d children", symbol, len(symbol.children))
    return symbol
