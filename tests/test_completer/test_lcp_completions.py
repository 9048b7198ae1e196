from prompt_toolkit.document import Document

from clitree.completer import ParserCompleter
from clitree.parser import Parser, command


def test_lcp_completions():
    parser = Parser(command("aetherwarp"), command("aetherzoom"))
    completer = ParserCompleter(parser)
    results = list(completer.get_completions(Document("a"), None))
    assert any(c.text == "aether" for c in results)
    assert any(c.text == "aetherwarp" for c in results)
    assert any(c.text == "aetherzoom" for c in results)


def test_lcp_not_inserted_for_options():
    completer = ParserCompleter(Parser())
    completions = list(completer._yield_lcp_completions(["--tag", "--tags"], "--t"))
    assert [c.text for c in completions] == ["--tag", "--tags"]


def test_lcp_completions_space():
    completer = ParserCompleter(Parser())
    suggestions = ["New Jersey", "New York"]
    completions = list(completer._yield_lcp_completions(suggestions, "N"))
    assert completions[0].text == "New "
    assert any(c.text == '"New York"' for c in completions)


def test_lcp_completions_empty():
    completer = ParserCompleter(Parser())
    assert list(completer._yield_lcp_completions([], "x")) == []
