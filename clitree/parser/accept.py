# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Arity presets used to build `ArgumentsRule` instances.

Each factory is stateless and returns a fresh immutable rule:

- `no_arguments()`            0 values (flags, plain commands)
- `zero_or_one_argument()`    0..1
- `exactly_one_argument()`    1
- `zero_or_more_arguments()`  0..*
- `one_or_more_arguments()`   1..*
- `any_one_of(*values)`       exactly 1, restricted to `values`

`Arity` names the same presets for declarative grammars (YAML / TOML) and
accepts the usual shorthands:

Example:
    Arity("one")  → Arity.ONE
    Arity("*")    → Arity.ZERO_OR_MORE (via alias)
    Arity("?")    → Arity.ZERO_OR_ONE
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable

from clitree.exceptions import GrammarError
from clitree.parser.arguments_rule import ArgumentsRule


def no_arguments() -> ArgumentsRule:
    return ArgumentsRule(min_count=0, max_count=0)


def zero_or_one_argument() -> ArgumentsRule:
    return ArgumentsRule(min_count=0, max_count=1)


def exactly_one_argument() -> ArgumentsRule:
    return ArgumentsRule(min_count=1, max_count=1)


def zero_or_more_arguments() -> ArgumentsRule:
    return ArgumentsRule(min_count=0, max_count=None)


def one_or_more_arguments() -> ArgumentsRule:
    return ArgumentsRule(min_count=1, max_count=None)


def any_one_of(*values: str) -> ArgumentsRule:
    """Exactly one argument, which must be one of `values`."""
    if not values:
        raise GrammarError("any_one_of() requires at least one value")
    return ArgumentsRule(min_count=1, max_count=1, allowed_values=tuple(values))


class Arity(Enum):
    """
    Named arity presets.

    Members:
        NONE: No arguments.
        ZERO_OR_ONE: An optional single argument.
        ONE: Exactly one argument.
        ZERO_OR_MORE: Any number of arguments.
        ONE_OR_MORE: At least one argument.

    Aliases:
        - "0", "no" → "none"
        - "?", "optional" → "zero_or_one"
        - "1", "exactly_one" → "one"
        - "*", "any", "many" → "zero_or_more"
        - "+", "some" → "one_or_more"
    """

    NONE = "none"
    ZERO_OR_ONE = "zero_or_one"
    ONE = "one"
    ZERO_OR_MORE = "zero_or_more"
    ONE_OR_MORE = "one_or_more"

    @classmethod
    def choices(cls) -> list[Arity]:
        """Return a list of all arities."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "0": "none",
            "no": "none",
            "?": "zero_or_one",
            "optional": "zero_or_one",
            "1": "one",
            "exactly_one": "one",
            "*": "zero_or_more",
            "any": "zero_or_more",
            "many": "zero_or_more",
            "+": "one_or_more",
            "some": "one_or_more",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> Arity:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def rule(self, allowed_values: Iterable[str] | None = None) -> ArgumentsRule:
        """Build the ArgumentsRule for this arity, optionally restricted to `allowed_values`."""
        base = _PRESETS[self]()
        if allowed_values is None:
            return base
        return ArgumentsRule(
            min_count=base.min_count,
            max_count=base.max_count,
            allowed_values=tuple(allowed_values),
        )

    def __str__(self) -> str:
        return self.value


_PRESETS = {
    Arity.NONE: no_arguments,
    Arity.ZERO_OR_ONE: zero_or_one_argument,
    Arity.ONE: exactly_one_argument,
    Arity.ZERO_OR_MORE: zero_or_more_arguments,
    Arity.ONE_OR_MORE: one_or_more_arguments,
}
