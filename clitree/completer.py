# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ParserCompleter`, a Prompt Toolkit completer driven by a clitree `Parser`.

Completions come from `ParseResult.suggestions()`, so they follow the grammar
exactly: subcommands and options of the innermost command typed so far, and
the allowed values of an option waiting for its argument.

Example:
    session = PromptSession(completer=ParserCompleter(parser))
"""

from __future__ import annotations

import os
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from clitree.parser.parser import Parser


class ParserCompleter(Completer):
    """
    Prompt Toolkit completer for command lines of a clitree grammar.

    Inserts the longest common prefix of the candidates when it extends the
    word being typed, and quotes candidates containing whitespace.

    Args:
        parser (Parser): The grammar to complete against.
    """

    def __init__(self, parser: Parser):
        self.parser = parser

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Compute completions for the text before the cursor.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event, unused.

        Yields:
            Completion: Candidates for the word being typed.
        """
        text = document.text_before_cursor
        stream = self.parser.tokenize(text)
        if stream.errors:
            return
        stub = stream.partial or ""
        suggestions = self.parser.parse(text).suggestions()
        yield from self._yield_lcp_completions(suggestions, stub)

    def _ensure_quote(self, text: str) -> str:
        """Quote a suggestion containing whitespace so it stays a single token."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions: list[str], stub: str) -> Iterable[Completion]:
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Behavior:
        - If only one match → yield it fully.
        - If multiple matches share a longer prefix → insert the prefix, but also
            display all matches in the menu.
        - If no shared prefix → list all matches individually.

        Args:
            suggestions (list[str]): Candidates, already filtered by the stub.
            stub (str): The currently typed prefix (used to offset insertion).
        """
        if not suggestions:
            return

        lcp = os.path.commonprefix(suggestions)

        if len(suggestions) == 1:
            yield Completion(
                self._ensure_quote(suggestions[0]),
                start_position=-len(stub),
                display=suggestions[0],
            )
        elif len(lcp) > len(stub) and lcp.startswith(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in suggestions:
                yield Completion(self._ensure_quote(match), start_position=-len(stub), display=match)
        else:
            for match in suggestions:
                yield Completion(self._ensure_quote(match), start_position=-len(stub), display=match)
