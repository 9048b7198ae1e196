# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Result tree produced by a parse.

- `ParseError`: a diagnostic message with an optional reference to the Symbol
  it concerns.
- `AppliedOption`: one matched Symbol with the values it claimed and the
  AppliedOptions nested under it.
- `AppliedOptions`: an ordered collection that can also be indexed by alias.
- `ParseResult`: the root of the tree, with errors, unparsed tokens (after
  `--`) and suggestions for completion.

Lookups by alias (`result["outer"]`, `has_option("x")`) only search the
immediate children of a node. Callers navigate level by level, mirroring the
nesting of the grammar: `result["outer"]["inner"]["x"]`.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence, overload

from rich.text import Text
from rich.tree import Tree

from clitree.exceptions import CommandLineError, OptionNotFoundError
from clitree.parser.symbol import Symbol
from clitree.parser.tokenizer import DELIMITER, Token, TokenStream, looks_like_option

if TYPE_CHECKING:
    from clitree.parser.parser import Parser


@dataclass(frozen=True)
class ParseError:
    """
    A parse-time diagnostic.

    Attributes:
        message (str): Human-readable description.
        symbol (Symbol | None): The Symbol implicated, if any.
    """

    message: str
    symbol: Symbol | None = None

    def __str__(self) -> str:
        return self.message


def quote(value: str) -> str:
    """
    Quote a value so that it lexes back into a single token.

    Raises:
        CommandLineError: If the value contains a double quote, which the
            tokenizer has no way to escape.
    """
    if '"' in value:
        raise CommandLineError(
            f"Value {value!r} contains a double quote and cannot be written as a raw "
            "command line; use to_args() instead."
        )
    if not value or any(char.isspace() for char in value):
        return f'"{value}"'
    return value


def _inline(symbol: Symbol, value: str) -> str:
    alias = symbol.primary_alias
    if not looks_like_option(alias):
        alias = f"--{alias}"
    return f"{alias}={value}"


class AppliedOption:
    """
    A Symbol matched during one parse.

    Repeated occurrences of the same Option collate into one AppliedOption whose
    arguments are the concatenation of every occurrence.
    """

    def __init__(self, symbol: Symbol) -> None:
        self.symbol: Symbol = symbol
        self._arguments: list[str] = []
        self._children: list[AppliedOption] = []
        self._unmatched: list[str] = []

    @property
    def name(self) -> str:
        return self.symbol.name

    @property
    def aliases(self) -> tuple[str, ...]:
        return self.symbol.aliases

    @property
    def arguments(self) -> list[str]:
        return list(self._arguments)

    @property
    def applied_options(self) -> AppliedOptions:
        return AppliedOptions(self._children)

    @property
    def unmatched_tokens(self) -> list[str]:
        return list(self._unmatched)

    def has_alias(self, alias: str) -> bool:
        return self.symbol.has_alias(alias)

    def has_option(self, alias: str) -> bool:
        return self.applied_options.has_option(alias)

    def __getitem__(self, alias: str) -> AppliedOption:
        return self.applied_options[alias]

    def __contains__(self, alias: object) -> bool:
        return alias in self.applied_options

    def has_capacity(self) -> bool:
        return self.symbol.arguments.has_capacity(len(self._arguments))

    def _claim(self, value: str) -> None:
        self._arguments.append(value)

    def _apply(self, symbol: Symbol) -> AppliedOption:
        """Return the child for `symbol`, creating it on first occurrence."""
        for child in self._children:
            if child.symbol is symbol:
                return child
        child = AppliedOption(symbol)
        self._children.append(child)
        return child

    def _fill_defaults(self) -> None:
        if not self._arguments:
            default = self.symbol.arguments.get_default()
            if default is not None:
                self._arguments.append(default)
        for child in self._children:
            child._fill_defaults()

    def subcommands(self) -> list[AppliedOption]:
        return [child for child in self._children if child.symbol.is_command]

    def validate(self) -> list[ParseError]:
        """Validate this node only."""
        errors = []
        if not self.symbol.arguments.validate(self._arguments):
            errors.append(
                ParseError(
                    f"Required argument missing for option: {self.symbol.primary_alias}",
                    self.symbol,
                )
            )
        subcommands = self.subcommands()
        if self.symbol.is_command and self.symbol.exclusive_subcommands and len(subcommands) > 1:
            names = ", ".join(child.name for child in subcommands)
            errors.append(
                ParseError(
                    f"Command '{self.name}' only accepts a single subcommand but "
                    f"{len(subcommands)} were provided: {names}",
                    self.symbol,
                )
            )
        return errors

    def validate_all(self) -> list[ParseError]:
        """Validate this node and every node beneath it, in tree order."""
        errors = self.validate()
        for child in self._children:
            errors.extend(child.validate_all())
        return errors

    def to_args(self, reserved: frozenset[str] = frozenset()) -> list[str]:
        """
        Rebuild the tokens that produce this subtree.

        Children are emitted in the order they were first matched. Unrecognized
        tokens go right after this node's own values, where the node is
        already full, so they are reported again on reparse.

        An Option value that would be read as structure on reparse (anything
        option-like, `--`, or one of the `reserved` bare aliases) is written
        inline as `--name=value`, whose value is never matched as an alias.

        Args:
            reserved (frozenset[str]): Bare aliases declared anywhere in the grammar.
        """
        args = [self.symbol.primary_alias]
        for index, value in enumerate(self._arguments):
            if self.symbol.is_option and (
                looks_like_option(value) or value == DELIMITER or value in reserved
            ):
                # The inline form opens the option itself.
                if index == 0:
                    args.pop()
                args.append(_inline(self.symbol, value))
            else:
                args.append(value)
        args.extend(self._unmatched)
        for child in self._children:
            args.extend(child.to_args(reserved))
        return args

    def diagram(self) -> str:
        parts = [self.symbol.primary_alias]
        parts.extend(f"<{argument}>" for argument in self._arguments)
        parts.extend(child.diagram() for child in self._children)
        return f"[ {' '.join(parts)} ]"

    def _label(self) -> Text:
        label = Text(self.symbol.primary_alias, style="bold" if self.symbol.is_command else "")
        if self._arguments:
            label.append(" " + " ".join(f"<{argument}>" for argument in self._arguments), style="dim")
        return label

    def _build_tree(self, tree: Tree) -> None:
        branch = tree.add(self._label())
        for child in self._children:
            child._build_tree(branch)

    def __rich__(self) -> Tree:
        tree = Tree(self._label())
        for child in self._children:
            child._build_tree(tree)
        return tree

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppliedOption):
            return NotImplemented
        return (
            self.symbol is other.symbol
            and self._arguments == other._arguments
            and _same_children(self._children, other._children)
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.diagram()

    def __repr__(self) -> str:
        return (
            f"AppliedOption(name='{self.name}', arguments={self._arguments!r}, "
            f"children={[child.name for child in self._children]})"
        )


def _same_children(left: Sequence[AppliedOption], right: Sequence[AppliedOption]) -> bool:
    """
    Compare applied children regardless of match order.

    Each Symbol is applied at most once per parent, so children pair up by
    Symbol identity.
    """
    if len(left) != len(right):
        return False
    by_symbol = {id(child.symbol): child for child in right}
    return all(by_symbol.get(id(child.symbol)) == child for child in left)


class AppliedOptions(Sequence[AppliedOption]):
    """An ordered, read-only view of AppliedOptions, indexable by position or alias."""

    def __init__(self, options: Sequence[AppliedOption]) -> None:
        self._options: tuple[AppliedOption, ...] = tuple(options)

    def find(self, alias: str) -> AppliedOption | None:
        return next((option for option in self._options if option.has_alias(alias)), None)

    def has_option(self, alias: str) -> bool:
        return self.find(alias) is not None

    @overload
    def __getitem__(self, key: int) -> AppliedOption: ...

    @overload
    def __getitem__(self, key: str) -> AppliedOption: ...

    @overload
    def __getitem__(self, key: slice) -> Sequence[AppliedOption]: ...

    def __getitem__(self, key):
        if isinstance(key, str):
            found = self.find(key)
            if found is None:
                raise OptionNotFoundError(f"No option with alias '{key}' was applied.")
            return found
        return self._options[key]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self.has_option(item)
        return item in self._options

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[AppliedOption]:
        return iter(self._options)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AppliedOptions):
            return self._options == other._options
        if isinstance(other, (list, tuple)):
            return list(self._options) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AppliedOptions({[option.name for option in self._options]})"


class ParseResult:
    """
    The outcome of `Parser.parse()`.

    Attributes:
        parser (Parser): The Parser that produced this result.
        stream (TokenStream): The tokens that were matched.
        applied_options (AppliedOptions): Top-level matches.
        errors (list[ParseError]): Every diagnostic, in the order found.
        unparsed_tokens (list[str]): Values that followed the `--` delimiter.
        unmatched_tokens (list[str]): Tokens reported as not recognized.
    """

    def __init__(
        self,
        parser: Parser,
        stream: TokenStream,
        applied: Sequence[AppliedOption],
        errors: Sequence[ParseError],
        unparsed_tokens: Sequence[str],
        unmatched_tokens: Sequence[str],
        root_unmatched: Sequence[str] = (),
    ) -> None:
        self.parser = parser
        self.stream = stream
        self._applied: tuple[AppliedOption, ...] = tuple(applied)
        self._errors: tuple[ParseError, ...] = tuple(errors)
        self._unparsed: tuple[str, ...] = tuple(unparsed_tokens)
        self._unmatched: tuple[str, ...] = tuple(unmatched_tokens)
        self._root_unmatched: tuple[str, ...] = tuple(root_unmatched)

    @property
    def tokens(self) -> list[Token]:
        return list(self.stream.tokens)

    @property
    def applied_options(self) -> AppliedOptions:
        return AppliedOptions(self._applied)

    @property
    def errors(self) -> list[ParseError]:
        return list(self._errors)

    @property
    def unparsed_tokens(self) -> list[str]:
        return list(self._unparsed)

    @property
    def unmatched_tokens(self) -> list[str]:
        return list(self._unmatched)

    def has_option(self, alias: str) -> bool:
        return self.applied_options.has_option(alias)

    def __getitem__(self, alias: str) -> AppliedOption:
        return self.applied_options[alias]

    def __contains__(self, alias: object) -> bool:
        return alias in self.applied_options

    def suggestions(self) -> list[str]:
        """Sorted, de-duplicated tokens that are valid next at the end of the input."""
        from clitree.parser.suggestions import suggest

        return suggest(self.parser, self.stream)

    def to_args(self) -> list[str]:
        """
        Rebuild an argument list that parses into an equivalent result.

        Bundles are expanded, an omitted root command is restored and repeated
        options are merged. Children follow match order. Option values that
        would otherwise be read as an alias are kept inline (`-x=-y`).
        """
        args = list(self._root_unmatched)
        for applied in self._applied:
            args.extend(applied.to_args(self.parser.bare_aliases))
        if self._unparsed:
            args.append("--")
            args.extend(self._unparsed)
        return args

    def command_line(self) -> str:
        """`to_args()` joined into a raw string with quoting where needed."""
        return " ".join(quote(arg) for arg in self.to_args())

    def diagram(self) -> str:
        return " ".join(applied.diagram() for applied in self._applied)

    def __rich__(self) -> Tree:
        tree = Tree(Text("parse result", style="bold"))
        for applied in self._applied:
            applied._build_tree(tree)
        if self._unparsed:
            tree.add(Text(f"-- {' '.join(self._unparsed)}", style="dim"))
        for error in self._errors:
            tree.add(Text(error.message, style="red"))
        return tree

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseResult):
            return NotImplemented
        return (
            _same_children(self._applied, other._applied)
            and self._unparsed == other._unparsed
            and Counter(error.message for error in self._errors)
            == Counter(error.message for error in other._errors)
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.diagram()

    def __repr__(self) -> str:
        return (
            f"ParseResult(applied={[applied.name for applied in self._applied]}, "
            f"errors={len(self._errors)}, unparsed={list(self._unparsed)!r})"
        )
