"""Backends for rendering layoutdsl instructions as text (neutral, Python, Rust)."""

from .code_generator import (
    RenderMode,
    RenderOptions,
    render_instruction,
    render_instructions,
    save_rendered,
)

__all__ = [
    "RenderMode",
    "RenderOptions",
    "render_instruction",
    "render_instructions",
    "save_rendered",
]
