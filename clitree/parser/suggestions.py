# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Context-sensitive suggestions for the end of a command line.

The committed tokens (everything but a trailing partial word) are matched
again without validation. Whatever scope the matcher ends in decides what
may come next: the values of an option still waiting for its argument, or
the aliases of the innermost command's children. The partial word, if any,
then filters the candidates by prefix.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from clitree.parser.matcher import Matcher
from clitree.parser.result import AppliedOption
from clitree.parser.symbol import Symbol
from clitree.parser.tokenizer import TokenStream, looks_like_option, unprefix

if TYPE_CHECKING:
    from clitree.parser.parser import Parser


def suggest(parser: Parser, stream: TokenStream) -> list[str]:
    """
    Return the sorted, de-duplicated tokens valid at the end of `stream`.

    Args:
        parser (Parser): The grammar to complete against.
        stream (TokenStream): The tokens typed so far.
    """
    matcher = Matcher(parser, stream.committed()).run()
    candidates = _candidates(matcher)
    partial = stream.partial
    if partial:
        candidates = [candidate for candidate in candidates if completes(candidate, partial)]
    return sorted(set(candidates))


def completes(candidate: str, partial: str) -> bool:
    """Return True if `candidate` is a completion of the word being typed."""
    if candidate.startswith(partial):
        return True
    if looks_like_option(partial) and looks_like_option(candidate):
        return unprefix(candidate).startswith(unprefix(partial))
    return False


def _candidates(matcher: Matcher) -> list[str]:
    candidates: list[str] = []
    option = matcher.open_option
    if option is not None and option.has_capacity():
        rule = option.symbol.arguments
        if rule.allowed_values:
            if len(option.arguments) < rule.min_count:
                return list(rule.allowed_values)
            candidates.extend(rule.allowed_values)

    scope = matcher.innermost
    for child in _available_children(matcher, scope):
        candidates.extend(child.aliases)

    # Nothing typed yet and a single root command: it may be omitted.
    root_command = matcher.parser.root_command
    if matcher.consumed == 0 and root_command is not None:
        candidates.extend(alias for child in root_command.children for alias in child.aliases)
    return candidates


def _available_children(matcher: Matcher, scope: AppliedOption) -> Iterator[Symbol]:
    exclusive = scope.symbol.exclusive_subcommands and bool(scope.subcommands())
    for child in scope.symbol.children:
        if child.is_command and (exclusive or id(child) in matcher.applied_commands):
            continue
        yield child
