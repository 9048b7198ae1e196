from prompt_toolkit import PromptSession
from rich.console import Console

from clitree import Parser, any_one_of, command, exactly_one_argument, option
from clitree.completer import ParserCompleter
from clitree.validators import ParseResultValidator

parser = Parser(
    command(
        "sandwich",
        "Order a sandwich",
        option("--bread", "", any_one_of("wheat", "sourdough", "rye")),
        option("--cheese", "", any_one_of("provolone", "cheddar", "cream cheese")),
        option("--name", "", exactly_one_argument()),
    )
)

if __name__ == "__main__":
    console = Console()
    session = PromptSession(
        "sandwich > ",
        completer=ParserCompleter(parser),
        validator=ParseResultValidator(parser),
        validate_while_typing=False,
    )
    while True:
        try:
            text = session.prompt()
        except (EOFError, KeyboardInterrupt):
            break
        console.print(parser.parse(text))
