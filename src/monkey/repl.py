"""Line-at-a-time read/print loop over the lexer and parser."""

from __future__ import annotations

import sys
from typing import TextIO

from monkey.debug import dump_tokens
from monkey.errors import ParseError
from monkey.lexer import Lexer
from monkey.parser import parse
from monkey.tokens import TokenType

PROMPT = ">> "
MODES = ("parse", "tokens")


def start(
    *,
    prompt: str = PROMPT,
    mode: str = "parse",
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Read lines until end of input, printing tokens or the parsed program for each."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    if mode not in MODES:
        raise ValueError(f"unknown REPL mode {mode!r} (expected one of {', '.join(MODES)})")

    while True:
        stdout.write(prompt)
        stdout.flush()

        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return

        if mode == "tokens":
            tokens = [t for t in Lexer(line) if t.type != TokenType.EOF]
            dump_tokens(tokens, file=stdout)
            continue

        program, errors = parse(line)
        if errors:
            print_parser_errors(errors, stdout)
            continue
        if program.statements:
            stdout.write(f"{program}\n")


def print_parser_errors(errors: list[ParseError], out: TextIO) -> None:
    out.write("parser errors:\n")
    for err in errors:
        out.write(f"\t{err}\n")
