# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Input validators for Prompt Toolkit sessions that read clitree command lines.

- ParseResultValidator: rejects input that does not parse cleanly.
- parse_validator: the same check built with `Validator.from_callable`.
"""
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError, Validator

from clitree.parser.parser import Parser


class ParseResultValidator(Validator):
    """Reports the first parse error of the input, positioned at the end of the text."""

    def __init__(self, parser: Parser, allow_empty: bool = True) -> None:
        self.parser = parser
        self.allow_empty = allow_empty
        super().__init__()

    def validate(self, document: Document) -> None:
        text = document.text
        if not text.strip():
            if self.allow_empty:
                return
            raise ValidationError(message="Enter a command.")
        result = self.parser.parse(text)
        if result.errors:
            raise ValidationError(message=result.errors[0].message, cursor_position=len(text))


def parse_validator(parser: Parser) -> Validator:
    """Validator accepting only input without parse errors."""

    def validate(text: str) -> bool:
        return not parser.parse(text).errors

    return Validator.from_callable(validate, error_message="Invalid command line.")
