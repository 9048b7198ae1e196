import pytest

from clitree.parser import (
    Arity,
    Parser,
    any_one_of,
    command,
    exactly_one_argument,
    option,
    tokenize,
)
from clitree.parser.suggestions import completes, suggest


@pytest.fixture
def sandwich_parser():
    return Parser(
        option("--bread", "", any_one_of("wheat", "sourdough", "rye")),
        option("--cheese", "", any_one_of("provolone", "cheddar", "cream cheese")),
    )


@pytest.fixture
def outer_parser():
    return Parser(
        command(
            "outer",
            "",
            command("inner1", "", option("--force")),
            command("inner2", "", exactly_one_argument()),
            option("-v|--verbose"),
        )
    )


def test_open_option_suggests_its_allowed_values(sandwich_parser):
    result = sandwich_parser.parse("--bread ")
    assert result.suggestions() == ["rye", "sourdough", "wheat"]


def test_later_option_suggests_its_allowed_values(sandwich_parser):
    result = sandwich_parser.parse("--bread wheat ---cheese ")
    assert result.suggestions() == ["cheddar", "cream cheese", "provolone"]


def test_partial_value_filters_allowed_values(sandwich_parser):
    assert sandwich_parser.suggest("--cheese c") == ["cheddar", "cream cheese"]


def test_filled_option_suggests_sibling_options(sandwich_parser):
    assert sandwich_parser.suggest("--bread rye ") == ["--bread", "--cheese"]


def test_empty_input_suggests_top_level_aliases(sandwich_parser):
    assert sandwich_parser.suggest("") == ["--bread", "--cheese"]


def test_partial_option_is_completed(sandwich_parser):
    assert sandwich_parser.suggest("--ch") == ["--cheese"]
    assert sandwich_parser.suggest("/ch") == ["--cheese"]
    assert sandwich_parser.suggest("-") == ["--bread", "--cheese"]


def test_command_suggests_its_children(outer_parser):
    assert outer_parser.suggest("outer ") == ["--verbose", "-v", "inner1", "inner2"]


def test_partial_subcommand(outer_parser):
    assert outer_parser.suggest("outer inn") == ["inner1", "inner2"]


def test_subcommand_suggests_its_own_children(outer_parser):
    assert outer_parser.suggest("outer inner1 ") == ["--force"]
    assert outer_parser.suggest("outer inner2 ") == []


def test_omitted_root_command_children_are_suggested(outer_parser):
    assert outer_parser.suggest("") == ["--verbose", "-v", "inner1", "inner2", "outer"]
    assert outer_parser.suggest("inn") == ["inner1", "inner2"]


def test_option_with_optional_allowed_values_also_suggests_siblings():
    parser = Parser(
        option("--tag", "", Arity.ZERO_OR_MORE.rule(["alpha", "beta"])),
        option("--all"),
    )
    assert parser.suggest("--tag ") == ["--all", "--tag", "alpha", "beta"]


def test_suggestions_are_deduplicated():
    parser = Parser(option("--tag", "", Arity.ZERO_OR_ONE.rule(["--tag", "other"])))
    assert parser.suggest("--tag ") == ["--tag", "other"]


def test_suggest_function_matches_result_suggestions(outer_parser):
    stream = tokenize("outer inn")
    assert suggest(outer_parser, stream) == outer_parser.parse("outer inn").suggestions()


def test_completes():
    assert completes("--cheese", "--ch")
    assert completes("--cheese", "/ch")
    assert completes("--cheese", "-c")
    assert not completes("--cheese", "ch")
    assert completes("cheddar", "ch")
