import sys

from rich.console import Console

from clitree import Parser, any_one_of, command, one_or_more_arguments, option
from clitree.utils import setup_logging

setup_logging()

console = Console()

# Declare the grammar once
parser = Parser(
    command(
        "deploy",
        "Deploy one or more services",
        one_or_more_arguments(),
        option("-e|--env", "Target environment", any_one_of("dev", "staging", "prod")),
        option("-f|--force", "Skip confirmation"),
        command("rollback", "Roll back the last deploy"),
    )
)

# Entry point
if __name__ == "__main__":
    result = parser.parse(sys.argv[1:])
    console.print(result)
    for error in result.errors:
        console.print(f"[red]{error.message}[/]")
    console.print(f"Next: {', '.join(result.suggestions())}")
