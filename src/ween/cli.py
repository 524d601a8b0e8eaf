"""Command-line interface for the Ween lexer."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ween.errors import LexError

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    allow_illegal: bool
    warnings: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="ween",
        description="Tokenize a Ween (.wn) source file",
    )
    p.add_argument("input", help="Input .wn file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Token dump format (default: text)",
    )
    p.add_argument(
        "--allow-illegal",
        action="store_true",
        help="Dump tokens even when illegal characters are found",
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not report unterminated comments or strings",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover ween.toml)",
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "ween.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    # Output format: config < CLI
    fmt = "text"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config (expected text or json): {cfg_format}"
                )
            fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    # Lexer policy: config < CLI
    allow_illegal = False
    warnings = True
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        if isinstance(cfg_lexer.get("allow_illegal"), bool):
            allow_illegal = cfg_lexer["allow_illegal"]
        if isinstance(cfg_lexer.get("warnings"), bool):
            warnings = cfg_lexer["warnings"]
    if args.allow_illegal:
        allow_illegal = True
    if args.quiet:
        warnings = False

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        allow_illegal=allow_illegal,
        warnings=warnings,
    )


def dump_file(options: CliOptions) -> str:
    """Read and tokenize a Ween file, returning the rendered token dump.

    Warnings go to stderr. Raises LexError on an illegal character unless
    the options allow them.
    """
    from ween.debug import dump_tokens, tokens_to_json
    from ween.lexer import Lexer, check_tokens

    source = options.input_file.read_text(encoding="utf-8")
    lexer = Lexer(source)
    tokens = lexer.tokenize()

    if options.warnings:
        for warning in lexer.warnings:
            print(warning.format(source, str(options.input_file)), file=sys.stderr)

    if not options.allow_illegal:
        check_tokens(tokens, source)

    if options.format == "json":
        return tokens_to_json(tokens) + "\n"
    buf = io.StringIO()
    dump_tokens(tokens, file=buf)
    return buf.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        output = dump_file(options)
    except LexError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror or exc}", file=sys.stderr)
        return 2
    except UnicodeDecodeError:
        print(f"error: {options.input_file} is not valid UTF-8", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
