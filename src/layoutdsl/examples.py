"""
Example layout program used by the demo and the tests.

Four runs mixing every value kind: a plain literal, a literal with spacing and
an explicit format, a reference, and a bare identifier, under a
`default_fmt;` header.
"""
from typing import Tuple

from layoutdsl.emitter import emit_instructions, resolve_default_format
from layoutdsl.expressions import Identifier, Literal, Reference
from layoutdsl.model import Append, Line, Program


EXAMPLE_SOURCE = """\
default_fmt;
"Hello",
"World!" 1.0 <secondary_fmt>,
&string space,
str_slice space <secondary_fmt>
"""


def build_example_program() -> Program:
    """Build by hand the Program that EXAMPLE_SOURCE parses to."""
    header = Identifier("default_fmt")
    secondary = Identifier("secondary_fmt")
    space = Identifier("space")

    lines = (
        Line(text=Literal('"Hello"', "Hello")),
        Line(text=Literal('"World!"', "World!"), spacing=Literal("1.0", 1.0), format=secondary),
        Line(text=Reference("string"), spacing=space),
        Line(text=Identifier("str_slice"), spacing=space, format=secondary),
    )

    return Program(
        default_format=resolve_default_format(header),
        lines=lines,
        header=header,
    )


def build_example_instructions() -> Tuple[Append, ...]:
    return emit_instructions(build_example_program())
