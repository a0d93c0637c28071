"""
BL CLI Entrypoint.

This module provides the command-line interface for checking BL source files.
It tokenizes a file, parses it, and prints the parsed tree back out.

Features:
    - Read source from a file given on the command line, or prompt for a file name.
    - Parse a whole program (default) or a bare statement sequence (`--block`).
    - Print the tree as canonical BL source, or as JSON with `--json`.
    - Report the first grammar error and exit non-zero.

Example usage:
    blparse robot.bl
    blparse robot.bl --json
    blparse loop.bl --block
    blparse --verbose

Functions:
    run_bl(source: str, block: bool = False, as_json: bool = False) -> str:
        Executes the BL pipeline (read → tokenize → parse → print) and returns the output text.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, runs the pipeline and returns the process exit status.
"""

import argparse
import json
import logging
import sys

from blparse.bl_constants import END_OF_INPUT
from blparse.bl_errors import BLSyntaxError
from blparse.bl_parser import Parser
from blparse.bl_printer import pretty_print
from blparse.bl_tokenizer import Tokenizer

logger = logging.getLogger(__name__)

PROMPT = "Enter valid BL program file name: "


def run_bl(source: str, block: bool = False, as_json: bool = False) -> str:
    """
    Run the BL toolchain on the file at `source`.

    Args:
        source (str): Path to a BL source file.
        block (bool): If True, parse the file as a statement sequence instead of a program.
        as_json (bool): If True, return the tree as JSON instead of BL source.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
        BLSyntaxError: If the file is not valid BL.
    """
    # 1. Read source
    with open(source, encoding="utf-8") as f:
        text = f.read()

    # 2. Tokenizing
    tokens = Tokenizer.tokens(text)
    logger.info("read %d tokens from %s", len(tokens), source)

    # 3. Parsing
    parser = Parser(tokens)
    if block:
        tree = parser.parse_block()
        parser.require(
            parser.front() == END_OF_INPUT,
            f"Unexpected {parser.front()!r} after statements",
            token=parser.front(),
        )
        if as_json:
            return json.dumps([stmt.to_dict() for stmt in tree], indent=2)
        return pretty_print(tree)

    program = parser.parse_program()
    if as_json:
        return json.dumps(program.to_dict(), indent=2)
    return pretty_print(program)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the BL CLI.

    Supported flags:
        - `source`: BL file to parse. Prompted for when omitted.
        - `-b`, `--block`: Parse a statement sequence instead of a program.
        - `-j`, `--json`: Print the tree as JSON.
        - `-v`, `--verbose`: Enable debug logging.

    Returns:
        int: 0 on success, 1 on a grammar error, 2 if no readable UTF-8 file was given.
    """
    parser = argparse.ArgumentParser(
        prog="blparse", description="Parse a BL program and pretty-print it."
    )
    parser.add_argument("source", nargs="?", help="BL source file")
    parser.add_argument(
        "-b",
        "--block",
        action="store_true",
        help="Parse statements only, without PROGRAM/BEGIN/END",
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print the tree as JSON"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    source = args.source
    if source is None:
        try:
            source = input(PROMPT).strip()
        except EOFError:
            print("[error] >>> no file name given", file=sys.stderr)
            return 2

    kind = "statement(s)" if args.block else "program"
    print("*** Parsing input file ***")
    try:
        output = run_bl(source, block=args.block, as_json=args.as_json)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[error] >>> cannot read {source}: {e}", file=sys.stderr)
        return 2
    except BLSyntaxError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1

    print(f"*** Pretty print of parsed {kind} ***")
    print(output, end="" if output.endswith("\n") else "\n")
    return 0


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    sys.exit(main())
