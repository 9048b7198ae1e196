import pytest
from rich.console import Console
from rich.tree import Tree

from clitree.exceptions import CommandLineError, OptionNotFoundError
from clitree.parser import (
    AppliedOptions,
    ParseError,
    Parser,
    command,
    exactly_one_argument,
    option,
    zero_or_more_arguments,
)
from clitree.parser.result import quote


@pytest.fixture
def parser():
    return Parser(
        command(
            "outer",
            "",
            command("inner", "", zero_or_more_arguments(), option("-x", "", exactly_one_argument())),
            option("-v|--verbose"),
        )
    )


def test_lookup_only_searches_immediate_children(parser):
    result = parser.parse("outer inner -x hello")
    assert result.has_option("outer")
    assert not result.has_option("inner")
    assert not result.has_option("x")
    assert result["outer"].has_option("inner")
    assert not result["outer"].has_option("x")
    assert result["outer"]["inner"]["x"].arguments == ["hello"]


def test_missing_alias_raises(parser):
    result = parser.parse("outer")
    with pytest.raises(OptionNotFoundError, match="No option with alias 'inner' was applied."):
        result["outer"]["inner"]
    with pytest.raises(KeyError):
        result["missing"]


def test_contains(parser):
    result = parser.parse("outer -v")
    assert "outer" in result
    assert "verbose" in result["outer"]
    assert "--v" in result["outer"]
    assert "inner" not in result["outer"]


def test_applied_options_sequence(parser):
    result = parser.parse("outer -v inner")
    applied = result["outer"].applied_options
    assert isinstance(applied, AppliedOptions)
    assert len(applied) == 2
    assert applied[0].name == "verbose"
    assert applied["inner"] is applied[1]
    assert [option.name for option in applied[:1]] == ["verbose"]
    assert applied.find("missing") is None


def test_arguments_are_a_copy(parser):
    result = parser.parse("outer inner a")
    result["outer"]["inner"].arguments.append("b")
    assert result["outer"]["inner"].arguments == ["a"]


def test_diagram(parser):
    result = parser.parse("outer -v inner a b -x hello")
    assert result.diagram() == "[ outer [ -v ] [ inner <a> <b> [ -x <hello> ] ] ]"
    assert str(result) == result.diagram()
    assert str(result["outer"]["inner"]) == "[ inner <a> <b> [ -x <hello> ] ]"


def test_rich_rendering(parser):
    result = parser.parse("outer stray inner -x hello")
    assert isinstance(result.__rich__(), Tree)

    console = Console(record=True, width=80)
    console.print(result)
    text = console.export_text()
    assert "outer" in text
    assert "-x <hello>" in text
    assert "Option 'stray' is not recognized." in text


def test_errors_are_parse_errors(parser):
    result = parser.parse("outer inner -x")
    assert len(result.errors) == 1
    error = result.errors[0]
    assert isinstance(error, ParseError)
    assert str(error) == "Required argument missing for option: -x"
    assert error.symbol is parser["outer"].child("inner").child("x")


def test_validate_only_checks_own_node(parser):
    result = parser.parse("outer inner -x")
    inner = result["outer"]["inner"]
    assert inner.validate() == []
    assert [error.message for error in inner.validate_all()] == [
        "Required argument missing for option: -x"
    ]


def test_unmatched_tokens(parser):
    result = parser.parse("outer -v stray")
    assert result.unmatched_tokens == ["stray"]
    assert result["outer"].unmatched_tokens == ["stray"]
    assert result["outer"]["verbose"].unmatched_tokens == []


def test_tokens(parser):
    result = parser.parse("outer inner")
    assert [token.value for token in result.tokens] == ["outer", "inner"]


def test_equality_compares_error_messages_as_a_multiset(parser):
    assert parser.parse("outer a b") == parser.parse("outer b a")
    assert parser.parse("outer a") != parser.parse("outer a a")
    assert parser.parse("outer") != parser.parse("outer -v")


def test_quote():
    assert quote("plain") == "plain"
    assert quote("the file.txt") == '"the file.txt"'
    assert quote("") == '""'
    with pytest.raises(CommandLineError):
        quote('a"b')


@pytest.mark.parametrize(
    "command_line",
    [
        "outer inner -x hello",
        "inner -x hello",
        "outer inner a -x hello b",
        "outer -v -v inner",
        'outer inner "a b" -x "c:\\temp\\the file.txt\\"',
        "outer inner -x=hello",
        "outer stray inner -- x y",
        "outer inner -x",
    ],
)
def test_command_line_round_trip(parser, command_line):
    result = parser.parse(command_line)
    rebuilt = parser.parse(result.command_line())
    assert rebuilt == result
    assert parser.parse(rebuilt.command_line()) == rebuilt
    assert parser.parse(result.to_args()) == result


def test_to_args_restores_omitted_root(parser):
    result = parser.parse("inner -x=hello")
    assert result.to_args() == ["outer", "inner", "-x", "hello"]


def test_to_args_merges_repeated_options():
    parser = Parser(
        option("-a|--animals", "", zero_or_more_arguments()),
        option("-v|--vegetables", "", zero_or_more_arguments()),
    )
    result = parser.parse("-a cat -v carrot -a dog")
    assert result.command_line() == "-a cat dog -v carrot"
    assert parser.parse(result.command_line()) == result


def test_to_args_keeps_unparsed_tokens():
    parser = Parser(option("-o"))
    result = parser.parse('-o "some stuff" -- x y')
    assert result.to_args() == ["some stuff", "-o", "--", "x", "y"]
    assert parser.parse(result.command_line()) == result
