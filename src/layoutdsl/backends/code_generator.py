"""
Text renderer for layoutdsl builder instructions.

Converts a sequence of Append instructions into text.

Supports multiple modes:
    - NEUTRAL: One `append(text, spacing, clone(fmt))` call per line
    - PYTHON: A Python snippet that builds the job
    - RUST: The block expression the layout macro expands to
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from layoutdsl.expressions import (
    Clone,
    DefaultConstructor,
    Expression,
    Identifier,
    Literal,
    Reference,
)
from layoutdsl.model import Append


class RenderMode(Enum):
    """Output flavours for rendered instructions."""
    NEUTRAL = "neutral"  # Language-independent call notation
    PYTHON = "python"    # Python source
    RUST = "rust"        # Macro expansion


@dataclass(frozen=True)
class RenderOptions:
    """
    Names and layout used by the PYTHON and RUST modes.

    Properties:
        job_type: Name of the layout job type
        format_type: Name of the format type (PYTHON default constructor)
        job_name: Variable holding the job
        indent: Indent for lines inside the RUST block
    """

    job_type: str = "LayoutJob"
    format_type: str = "TextFormat"
    job_name: str = "job"
    indent: str = "    "


def _render_expression(expr: Expression, mode: RenderMode, options: RenderOptions) -> str:
    """Render one value or format expression for the given mode."""
    if isinstance(expr, Literal):
        if mode == RenderMode.PYTHON:
            return repr(expr.value)
        return expr.text

    elif isinstance(expr, Identifier):
        return expr.name

    elif isinstance(expr, Reference):
        # Python has no borrow syntax; the name is passed as-is
        if mode == RenderMode.PYTHON:
            return expr.name
        return f"&{expr.name}"

    elif isinstance(expr, Clone):
        if mode == RenderMode.NEUTRAL:
            return f"clone({expr.target.name})"
        return f"{expr.target.name}.clone()"

    elif isinstance(expr, DefaultConstructor):
        if mode == RenderMode.NEUTRAL:
            return "default()"
        if mode == RenderMode.PYTHON:
            return f"{options.format_type}()"
        return "Default::default()"

    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def render_instruction(
    instruction: Append,
    mode: RenderMode = RenderMode.NEUTRAL,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Render a single append call, without any job setup around it.

    Examples (NEUTRAL):
        append("Hello", 0.0, clone(default_fmt))
        append(&string, space, default())
    """
    options = options or RenderOptions()
    args = ", ".join(
        _render_expression(expr, mode, options)
        for expr in (instruction.text, instruction.spacing, instruction.format)
    )
    if mode == RenderMode.NEUTRAL:
        return f"append({args})"
    call = f"{options.job_name}.append({args})"
    if mode == RenderMode.RUST:
        call += ";"
    return call


def render_instructions(
    instructions: Iterable[Append],
    mode: RenderMode = RenderMode.NEUTRAL,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Render a whole instruction sequence.

    Args:
        instructions: Append instructions, in order
        mode: Output flavour (NEUTRAL, PYTHON, RUST)
        options: Names and indent for PYTHON/RUST

    Returns:
        Rendered text, one line per instruction plus any job setup
    """
    options = options or RenderOptions()
    calls = [render_instruction(instr, mode, options) for instr in instructions]

    if mode == RenderMode.NEUTRAL:
        return "\n".join(calls)

    lines: List[str] = []

    if mode == RenderMode.PYTHON:
        lines.append(f"{options.job_name} = {options.job_type}()")
        lines.extend(calls)
        return "\n".join(lines)

    lines.append("{")
    lines.append(f"{options.indent}let mut {options.job_name} = {options.job_type}::default();")
    lines.extend(f"{options.indent}{call}" for call in calls)
    lines.append(f"{options.indent}{options.job_name}")
    lines.append("}")
    return "\n".join(lines)


def save_rendered(
    instructions: Iterable[Append],
    filename: str,
    mode: RenderMode = RenderMode.NEUTRAL,
    options: Optional[RenderOptions] = None,
) -> None:
    """
    Render instructions and save to file.

    Args:
        instructions: Append instructions to render
        filename: Output file path
        mode: Output flavour
        options: Names and indent for PYTHON/RUST
    """
    text = render_instructions(instructions, mode=mode, options=options)
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(text + "\n")


__all__ = [
    "RenderMode",
    "RenderOptions",
    "render_instruction",
    "render_instructions",
    "save_rendered",
]
