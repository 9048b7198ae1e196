# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentsRule`, the arity and allowed-value policy of a Symbol.

A rule says how many argument values a Command or Option may claim, which
literal values are acceptable, and which value to fall back on when none was
supplied. Rules are immutable and shared by reference; `with_()` returns a new
rule rather than changing one in place.

Example:
    rule = ArgumentsRule(min_count=1, max_count=1, allowed_values=("dev", "prod"))
    rule = rule.with_(name="ENV", default_value="dev")
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable

from clitree.exceptions import GrammarError

DefaultValue = Callable[[], "str | None"]


def _constant(value: str) -> DefaultValue:
    def supplier() -> str:
        return value

    return supplier


@dataclass(frozen=True)
class ArgumentsRule:
    """
    Arity, allowed values and default policy for a Symbol's arguments.

    Attributes:
        min_count (int): Fewest values that satisfy the rule.
        max_count (int | None): Most values the Symbol may claim. None is unbounded.
        allowed_values (tuple[str, ...] | None): If set, every value must be one of these.
        default_value (Callable[[], str | None] | None): Supplies a value when none is given.
        description (str): Human description of the arguments.
        name (str): Display name of the arguments (e.g. `FILE`).
    """

    min_count: int = 0
    max_count: int | None = 0
    allowed_values: tuple[str, ...] | None = None
    default_value: DefaultValue | str | None = None
    description: str = ""
    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.min_count, int) or self.min_count < 0:
            raise GrammarError(f"min_count must be a non-negative integer, got {self.min_count!r}")
        if self.max_count is not None and (
            not isinstance(self.max_count, int) or self.max_count < self.min_count
        ):
            raise GrammarError(
                f"max_count must be None or an integer >= min_count ({self.min_count}), "
                f"got {self.max_count!r}"
            )
        if self.allowed_values is not None:
            allowed = tuple(self.allowed_values)
            if not allowed:
                raise GrammarError("allowed_values cannot be empty")
            if not all(isinstance(value, str) for value in allowed):
                raise GrammarError("allowed_values must only contain strings")
            object.__setattr__(self, "allowed_values", allowed)
        if isinstance(self.default_value, str):
            object.__setattr__(self, "default_value", _constant(self.default_value))
        elif self.default_value is not None and not callable(self.default_value):
            raise GrammarError("default_value must be a string or a callable")

    @property
    def unbounded(self) -> bool:
        return self.max_count is None

    def has_capacity(self, count: int) -> bool:
        """Return True if a Symbol holding `count` values may claim another."""
        return self.max_count is None or count < self.max_count

    def get_default(self) -> str | None:
        if self.default_value is None:
            return None
        assert callable(self.default_value), "default_value should be a supplier"
        return self.default_value()

    def is_allowed(self, value: str) -> bool:
        return self.allowed_values is None or value in self.allowed_values

    def validate(self, arguments: Iterable[str]) -> bool:
        """
        Check claimed values against the rule.

        A value outside the allowed set counts the same as a missing one.
        """
        values = list(arguments)
        if len(values) < self.min_count:
            return False
        return all(self.is_allowed(value) for value in values)

    def with_(
        self,
        description: str | None = None,
        name: str | None = None,
        default_value: DefaultValue | str | None = None,
    ) -> ArgumentsRule:
        """
        Return a copy of this rule with the given fields replaced.

        Args:
            description (str | None): New description, or keep the current one.
            name (str | None): New display name, or keep the current one.
            default_value (Callable | str | None): New default supplier, or keep the current one.
        """
        changes: dict[str, object] = {}
        if description is not None:
            changes["description"] = description
        if name is not None:
            changes["name"] = name
        if default_value is not None:
            changes["default_value"] = default_value
        return replace(self, **changes)

    def __str__(self) -> str:
        upper = "*" if self.max_count is None else str(self.max_count)
        text = f"{self.min_count}..{upper}"
        if self.allowed_values:
            text = f"{text} {{{','.join(self.allowed_values)}}}"
        return text


def with_defaults(
    rule: ArgumentsRule | None,
    description: str | None = None,
    name: str | None = None,
    default_value: DefaultValue | str | None = None,
) -> ArgumentsRule:
    """Functional form of `ArgumentsRule.with_()` that rejects a missing rule."""
    if rule is None:
        raise GrammarError("rule must not be None")
    return rule.with_(description=description, name=name, default_value=default_value)
