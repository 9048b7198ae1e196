"""config_loading.py"""

from pathlib import Path

from rich.console import Console

from clitree.config import loader

parser = loader(Path(__file__).parent / "clitree.yaml")

if __name__ == "__main__":
    console = Console()
    for line in ("deploy api web --env prod", "api --env=dev -f", "deploy api rollback now"):
        result = parser.parse(line)
        console.print(result)
        console.print(f"  command line: {result.command_line()}")
