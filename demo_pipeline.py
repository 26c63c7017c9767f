#!/usr/bin/env python3
"""
Complete Pipeline Demo: Source → Program → Instructions → Renderings → Job

Shows the full workflow:
1. Parse the example layout description
2. Emit builder instructions
3. Render them in every mode
4. Execute them against a stand-in layout job
"""

from dataclasses import dataclass, field, replace

from layoutdsl.backends import RenderMode, render_instructions
from layoutdsl.emitter import emit_instructions
from layoutdsl.examples import EXAMPLE_SOURCE
from layoutdsl.executor import execute
from layoutdsl.parser import parse_program


@dataclass
class TextFormat:
    color: str = "black"
    italics: bool = False

    def clone(self):
        return replace(self)


@dataclass
class LayoutJob:
    runs: list = field(default_factory=list)

    def append(self, text, leading_space, fmt):
        self.runs.append((text, leading_space, fmt))


def main():
    print("=" * 80)
    print("PIPELINE DEMO: Source → Program → Instructions → Job")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Parse
    # =========================================================================
    print("\n1. PARSING...")
    program = parse_program(EXAMPLE_SOURCE)
    print(f"   ✓ Header: {program.header.name if program.header else '(none)'}")
    print(f"   ✓ Lines: {len(program.lines)}")

    # =========================================================================
    # STEP 2: Emit
    # =========================================================================
    print("\n2. EMITTING...")
    instructions = emit_instructions(program)
    print(f"   ✓ Instructions: {len(instructions)}")

    # =========================================================================
    # STEP 3: Render
    # =========================================================================
    for mode in RenderMode:
        print(f"\n3. {mode.value.upper()} RENDERING:")
        print("-" * 80)
        for line in render_instructions(instructions, mode=mode).splitlines():
            print(f"   {line}")

    # =========================================================================
    # STEP 4: Execute
    # =========================================================================
    print("\n4. EXECUTING...")
    namespace = {
        "string": "This is a string!",
        "str_slice": "This is a slice of a string!",
        "space": 2.0,
        "default_fmt": TextFormat(color="red"),
        "secondary_fmt": TextFormat(color="green", italics=True),
    }
    job = execute(instructions, namespace, LayoutJob, TextFormat)
    for text, space, fmt in job.runs:
        print(f"   {text!r:34} space={space:<4} {fmt}")

    print("\n" + "=" * 80)
    print("PIPELINE COMPLETE!")
    print("=" * 80)


if __name__ == "__main__":
    main()
