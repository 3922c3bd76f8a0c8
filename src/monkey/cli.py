"""Command-line interface for Monkey."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_NAME = "monkey.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    tokens: bool
    debug: bool
    prompt: str
    mode: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="monkey",
        description="Monkey language lexer and parser",
    )
    p.add_argument("input", nargs="?", help="Source file (default: start the REPL)")
    p.add_argument("--tokens", action="store_true", help="Print the token stream")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--prompt", default=None, metavar="STR", help="REPL prompt")
    return p


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    from monkey.repl import MODES, PROMPT

    input_file = Path(args.input) if args.input else None
    base_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        base_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, base_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    prompt = PROMPT
    mode = "parse"
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt = cfg_prompt
        cfg_mode = cfg_repl.get("mode")
        if isinstance(cfg_mode, str):
            if cfg_mode not in MODES:
                raise argparse.ArgumentTypeError(
                    f"invalid repl mode in config (expected one of {', '.join(MODES)}): {cfg_mode}"
                )
            mode = cfg_mode

    if args.prompt is not None:
        prompt = args.prompt
    if args.tokens:
        mode = "tokens"

    return CliOptions(
        input_file=input_file,
        tokens=args.tokens,
        debug=args.debug,
        prompt=prompt,
        mode=mode,
    )


def run_file(options: CliOptions) -> int:
    """Lex or parse a source file, writing the result to stdout. Returns exit code."""
    from monkey.debug import dump_ast, dump_tokens
    from monkey.lexer import tokenize
    from monkey.parser import parse

    assert options.input_file is not None
    source = options.input_file.read_text(encoding="utf-8")

    if options.tokens:
        dump_tokens(tokenize(source), file=sys.stdout)
        return 0

    program, errors = parse(source)

    if options.debug:
        dump_ast(program, file=sys.stderr)

    if errors:
        for err in errors:
            print(err.format(str(options.input_file)), file=sys.stderr)
        return 1

    sys.stdout.write(f"{program}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.input_file is None:
        from monkey.repl import start

        try:
            start(prompt=options.prompt, mode=options.mode)
        except KeyboardInterrupt:
            pass
        return 0

    try:
        return run_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
