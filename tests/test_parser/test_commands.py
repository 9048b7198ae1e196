import os

import pytest

from clitree.parser import (
    Parser,
    command,
    exactly_one_argument,
    no_arguments,
    one_or_more_arguments,
    option,
    zero_or_more_arguments,
)


@pytest.fixture
def move_parser():
    return Parser(
        command("move", "", one_or_more_arguments(), option("-x", "", exactly_one_argument()))
    )


@pytest.fixture
def outer_command():
    return command("outer", "", command("inner", "", option("-x", "", exactly_one_argument())))


def test_command_with_multiple_nested_options():
    parser = Parser(
        command(
            "outer",
            "",
            option("inner1", "", exactly_one_argument()),
            option("inner2", "", exactly_one_argument()),
        )
    )
    result = parser.parse("outer inner1 argument1 inner2 argument2")

    assert len(result.applied_options) == 1
    applied = result.applied_options[0]
    assert applied.validate_all() == []
    assert [(child.name, child.arguments) for child in applied.applied_options] == [
        ("inner1", ["argument1"]),
        ("inner2", ["argument2"]),
    ]


def test_relative_order_of_arguments_and_options_does_not_matter(move_parser):
    result1 = move_parser.parse("move -x the-option arg1 arg2")
    result2 = move_parser.parse("move arg1 -x the-option arg2")
    result3 = move_parser.parse("move arg1 arg2 -x the-option")

    assert result1 == result2
    assert result1 == result3
    assert result1["move"].arguments == ["arg1", "arg2"]
    assert result1["move"]["x"].arguments == ["the-option"]
    assert result1.errors == []


def test_order_of_free_arguments_is_preserved(move_parser):
    result1 = move_parser.parse("move -x the-option arg1 arg2")
    result4 = move_parser.parse("move arg2 arg1 -x the-option")

    assert result4["move"].arguments == ["arg2", "arg1"]
    assert result1 != result4


def test_command_missing_required_arguments(move_parser):
    result = move_parser.parse("move -x the-option")
    assert [error.message for error in result.errors] == [
        "Required argument missing for option: move"
    ]


def test_multiple_sibling_commands_are_an_error():
    parser = Parser(
        command(
            "outer",
            "",
            command("inner1", "", exactly_one_argument()),
            command("inner2", "", exactly_one_argument()),
        )
    )
    result = parser.parse("outer inner1 argument1 inner2 argument2")

    assert (
        "Command 'outer' only accepts a single subcommand but 2 were provided: inner1, inner2"
        in [error.message for error in result.errors]
    )
    assert result["outer"]["inner1"].arguments == ["argument1"]
    assert result["outer"]["inner2"].arguments == ["argument2"]


def test_non_exclusive_command_accepts_sibling_commands():
    parser = Parser(
        command(
            "outer",
            "",
            command("inner1", "", exactly_one_argument()),
            command("inner2", "", exactly_one_argument()),
            exclusive_subcommands=False,
        )
    )
    result = parser.parse("outer inner1 argument1 inner2 argument2")
    assert result.errors == []


def test_when_child_option_will_not_accept_arg_then_parent_can():
    parser = Parser(
        command("the-command", "", zero_or_more_arguments(), option("-x", "", no_arguments()))
    )
    result = parser.parse("the-command -x two")

    the_command = result["the-command"]
    assert the_command["x"].arguments == []
    assert the_command.arguments == ["two"]


def test_when_parent_command_will_not_accept_arg_then_child_can():
    parser = Parser(
        command("the-command", "", no_arguments(), option("-x", "", exactly_one_argument()))
    )
    result = parser.parse("the-command -x two")

    the_command = result["the-command"]
    assert the_command["x"].arguments == ["two"]
    assert the_command.arguments == []


def test_free_values_go_to_innermost_command_first():
    parser = Parser(
        command(
            "outer",
            "",
            zero_or_more_arguments(),
            command("inner", "", exactly_one_argument()),
        )
    )
    result = parser.parse("outer inner a b")
    assert result["outer"]["inner"].arguments == ["a"]
    assert result["outer"].arguments == ["b"]


def test_shared_option_specified_at_the_end_attaches_to_outer_command():
    parser = Parser(
        command("outer", "", no_arguments(), command("inner", "", option("-x")), option("-x"))
    )
    result = parser.parse("outer inner -x")

    assert len(result["outer"]["inner"].applied_options) == 0
    assert [applied.name for applied in result["outer"].applied_options] == ["inner", "x"]


def test_shared_option_specified_in_between_attaches_to_outer_command():
    parser = Parser(command("outer", "", command("inner", "", option("-x")), option("-x")))
    result = parser.parse("outer -x inner")

    assert len(result["outer"]["inner"].applied_options) == 0
    assert result["outer"].has_option("x")


def test_args_with_names_matching_applied_commands():
    the_command = command(
        "the-command",
        "",
        command("complete", "", exactly_one_argument(), option("--position", "", exactly_one_argument())),
    )
    result = the_command.parse("the-command", "complete", "--position", "7", "the-command")

    complete = result["the-command"]["complete"]
    assert complete.arguments == ["the-command"]
    assert complete["position"].arguments == ["7"]
    assert result.errors == []


def test_root_command_can_be_omitted(outer_command):
    result1 = outer_command.parse("inner -x hello")
    result2 = outer_command.parse("outer inner -x hello")

    assert result1.diagram() == result2.diagram()
    assert result1.diagram() == "[ outer [ inner [ -x <hello> ] ] ]"
    assert result1 == result2


@pytest.mark.parametrize(
    "executable",
    [
        os.path.join("dev", "outer.exe"),
        "/usr/local/bin/outer",
        "C:\\tools\\outer.cmd",
        "./outer.BAT",
    ],
)
def test_root_command_can_match_a_path_to_an_executable(outer_command, executable):
    result1 = outer_command.parse("inner -x hello")
    result2 = outer_command.parse([executable, "inner", "-x", "hello"])

    assert result1.diagram() == result2.diagram()
    assert result2.errors == []


def test_path_with_other_name_is_not_the_root_command(outer_command):
    result = outer_command.parse([os.path.join("dev", "other.exe"), "inner", "-x", "hello"])
    assert result.diagram() == "[ outer [ inner [ -x <hello> ] ] ]"
    assert result.unmatched_tokens == [os.path.join("dev", "other.exe")]


def test_no_implicit_root_with_several_top_level_commands():
    parser = Parser(command("a", "", option("-x")), command("b"))
    result = parser.parse("-x")
    assert len(result.applied_options) == 0
    assert [error.message for error in result.errors] == ["Option '-x' is not recognized."]


def test_absolute_unix_style_paths_are_lexed_correctly():
    parser = Parser(command("rm", "", zero_or_more_arguments()))
    result = parser.parse('rm "/temp/the file.txt"')

    assert result.applied_options["rm"].arguments == ["/temp/the file.txt"]
    assert result.errors == []


def test_absolute_windows_style_paths_are_lexed_correctly():
    parser = Parser(command("rm", "", zero_or_more_arguments()))
    result = parser.parse('rm "c:\\temp\\the file.txt\\"')

    assert result.applied_options["rm"].arguments == ["c:\\temp\\the file.txt\\"]


def test_command_aliases():
    parser = Parser(command("move|mv", "", one_or_more_arguments()))
    result = parser.parse("mv a")
    assert result.has_option("move")
    assert result["mv"].arguments == ["a"]
