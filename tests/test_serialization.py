"""
Tests for serialization and deserialization of layoutdsl objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `layoutdsl.serialization`.
"""

import pytest
from layoutdsl.compiler import compile_layout
from layoutdsl.examples import EXAMPLE_SOURCE
from layoutdsl.expressions import Expression
from layoutdsl.parser import parse_program
from layoutdsl.serialization import (
    expr_from_dict,
    expr_to_dict,
    instructions_from_json,
    instructions_from_yaml,
    instructions_to_dict,
    instructions_to_json,
    instructions_to_yaml,
    program_from_json,
    program_from_yaml,
    program_to_dict,
    program_to_json,
    program_to_yaml,
)


SOURCE = EXAMPLE_SOURCE + ', \'c\' 2u8, true -1.5e2 <f>'


def test_program_json_roundtrip():
    program = parse_program(SOURCE)
    restored = program_from_json(program_to_json(program))
    assert restored == program
    assert program_to_dict(restored) == program_to_dict(program)


def test_program_yaml_roundtrip():
    program = parse_program(SOURCE)
    restored = program_from_yaml(program_to_yaml(program))
    assert program_to_dict(restored) == program_to_dict(program)


def test_positions_survive_roundtrip():
    program = parse_program(SOURCE)
    restored = program_from_json(program_to_json(program))
    assert [l.position for l in restored.lines] == [l.position for l in program.lines]


def test_program_without_header():
    program = parse_program('"a"')
    d = program_to_dict(program)
    assert d["header"] is None
    assert d["default_format"] == {"type": "default"}


def test_instructions_json_roundtrip():
    instructions = compile_layout(SOURCE)
    assert instructions_from_json(instructions_to_json(instructions)) == instructions


def test_instructions_yaml_roundtrip():
    instructions = compile_layout(SOURCE)
    assert instructions_from_yaml(instructions_to_yaml(instructions)) == instructions


def test_instruction_dict_shape():
    d = instructions_to_dict(compile_layout('fmt; "Hello"'))
    assert d == {
        "instructions": [
            {
                "text": {"type": "lit", "text": '"Hello"', "value": "Hello"},
                "spacing": {"type": "lit", "text": "0.0", "value": 0.0},
                "format": {"type": "clone", "target": "fmt"},
            }
        ]
    }


def test_unsupported_expression():
    class Strange(Expression):
        pass

    with pytest.raises(TypeError):
        expr_to_dict(Strange())
    with pytest.raises(TypeError):
        expr_from_dict({"type": "strange"})
