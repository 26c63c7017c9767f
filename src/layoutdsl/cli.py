"""
Command-line entry point: compile a layout description and print the result.

    layoutdsl example.layout
    layoutdsl -m rust example.layout
    echo '"Hello" <bold>' | layoutdsl --json
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from layoutdsl.backends import RenderMode, render_instructions
from layoutdsl.compiler import compile_layout
from layoutdsl.errors import LayoutParseError
from layoutdsl.serialization import instructions_to_json, instructions_to_yaml

log = logging.getLogger(__name__)

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Send layoutdsl logs to stderr; DEBUG with -v, WARNING otherwise."""
    handler = RichHandler(console=console, show_time=False, show_path=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("layoutdsl")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers = [handler]
    logger.propagate = False


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layoutdsl",
        description="Compile a layout description into layout job builder calls",
    )
    parser.add_argument("source", nargs="?", default="-", help="Layout file ('-' or omitted for stdin)")
    parser.add_argument(
        "-m", "--mode",
        choices=[m.value for m in RenderMode],
        default=RenderMode.NEUTRAL.value,
        help="Rendering flavour (default: neutral)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print instructions as JSON instead")
    output.add_argument("--yaml", action="store_true", help="Print instructions as YAML instead")
    parser.add_argument("-o", "--output", help="Write to this file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.source == "-":
        name = "<stdin>"
        text = sys.stdin.read()
    else:
        name = args.source
        with open(args.source, 'r', encoding='utf-8') as f:
            text = f.read()

    try:
        instructions = compile_layout(text)
    except LayoutParseError as e:
        pos = e.position
        print(f"{name}:{pos.line}:{pos.column}: {e.message}", file=sys.stderr)
        return 1

    log.debug("Compiled %s into %d instruction(s)", name, len(instructions))

    if args.json:
        rendered = instructions_to_json(instructions)
    elif args.yaml:
        rendered = instructions_to_yaml(instructions).rstrip("\n")
    else:
        rendered = render_instructions(instructions, mode=RenderMode(args.mode))

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(rendered + "\n")
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
