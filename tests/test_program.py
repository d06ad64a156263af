#!/usr/bin/env python3
"""
Test tokenizing and bracket validation.
"""

import random

import pytest

from bfvm.errors import BracketError, Position, UnmatchedCloseBracket, UnmatchedOpenBracket, format_error
from bfvm.lexer import Instruction, LocalisedInstruction, tokenize
from bfvm.program import BfProgram, match_brackets


@pytest.mark.parametrize(
    "ch,expected",
    [
        ("<", Instruction.MOVE_LEFT),
        (">", Instruction.MOVE_RIGHT),
        ("+", Instruction.INCREMENT),
        ("-", Instruction.DECREMENT),
        (",", Instruction.INPUT),
        (".", Instruction.OUTPUT),
        ("[", Instruction.JUMP_FORWARD),
        ("]", Instruction.JUMP_BACKWARD),
        ("a", None),
        (" ", None),
        ("#", None),
    ],
)
def test_from_char(ch, expected):
    assert Instruction.from_char(ch) is expected


def test_tokenize_records_line_and_column():
    instructions = tokenize("_<\n__<\n")
    assert instructions == [
        LocalisedInstruction(Instruction.MOVE_LEFT, 1, 2),
        LocalisedInstruction(Instruction.MOVE_LEFT, 2, 3),
    ]
    assert instructions[1].position == Position(2, 3)


def test_tokenize_breaks_lines_on_newline_only():
    instructions = tokenize("+\x0c+\r\n]\x0b+")
    assert [i.position for i in instructions] == [
        Position(1, 1),
        Position(1, 3),
        Position(2, 1),
        Position(2, 3),
    ]


def test_form_feed_keeps_error_line_in_step_with_context():
    source = "+\x0c+\n]"
    with pytest.raises(UnmatchedCloseBracket) as exc_info:
        BfProgram.from_string(source)
    assert exc_info.value.position == Position(2, 1)
    text = format_error(exc_info.value, name="prog.bf", source=source)
    assert ">    2 | ]" in text.split("\n")


def test_tokenize_skips_comments():
    assert tokenize("hello world") == []
    assert [str(i.instruction) for i in tokenize("a+b-c[d]e")] == ["+", "-", "[", "]"]


def test_validate_good_program():
    program = BfProgram.from_string("_>>[<\n].,,[<\n]", name="test_file.bf")
    assert program.name == "test_file.bf"
    assert len(program) == 11
    assert program.loop_count == 2
    assert program.match(2) == 4
    assert program.match(4) == 2
    assert program.match(8) == 10


def test_nested_brackets():
    table = match_brackets(tokenize("[[][]]"))
    assert table == {0: 5, 5: 0, 1: 2, 2: 1, 3: 4, 4: 3}


def test_lone_open_bracket():
    with pytest.raises(UnmatchedOpenBracket) as exc_info:
        BfProgram.from_string("[")
    assert exc_info.value.position == Position(1, 1)


def test_lone_close_bracket():
    with pytest.raises(UnmatchedCloseBracket) as exc_info:
        BfProgram.from_string("]")
    assert exc_info.value.position == Position(1, 1)


def test_earliest_open_bracket_reported():
    with pytest.raises(UnmatchedOpenBracket) as exc_info:
        BfProgram.from_string("+[\n[[]")
    assert exc_info.value.position == Position(1, 2)


def test_first_stray_close_bracket_reported():
    with pytest.raises(UnmatchedCloseBracket) as exc_info:
        BfProgram.from_string("[]\n+]]")
    assert exc_info.value.position == Position(2, 2)


def test_crossed_brackets_rejected():
    with pytest.raises(BracketError):
        BfProgram.from_string("][")


def _balanced(text):
    depth = 0
    for ch in text:
        depth += {"[": 1, "]": -1}.get(ch, 0)
        if depth < 0:
            return False
    return depth == 0


def test_validation_matches_balance_for_random_programs():
    rng = random.Random(1234)
    for _ in range(500):
        text = "".join(rng.choice("[]+") for _ in range(rng.randrange(0, 16)))
        if _balanced(text):
            program = BfProgram.from_string(text)
            for i, j in program.jump_table.items():
                assert program.match(j) == i
                assert text[min(i, j)] == "[" and text[max(i, j)] == "]"
            assert program.loop_count == text.count("[")
        else:
            with pytest.raises(BracketError):
                BfProgram.from_string(text)


def test_program_is_read_only():
    program = BfProgram.from_string("[]")
    with pytest.raises(TypeError):
        program.jump_table[0] = 0
    with pytest.raises(AttributeError):
        program.name = "other"


def test_from_file(tmp_path):
    path = tmp_path / "prog.bf"
    path.write_text("+[-]\n")
    program = BfProgram.from_file(path)
    assert program.name == str(path)
    assert program.source == "+[-]\n"
    assert len(program) == 4
