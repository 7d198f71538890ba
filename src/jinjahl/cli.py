"""Command-line interface for jinjahl."""

from __future__ import annotations

import argparse
import io
import sys
from dataclasses import dataclass
from pathlib import Path

from jinjahl.config import HighlightConfig, load_config
from jinjahl.errors import ConfigError

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    kind: str
    config: HighlightConfig
    force: bool
    format: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="jinjahl",
        description="Classify Jinja template constructs for syntax highlighting",
    )
    p.add_argument("input", help="Template or text file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover jinjahl.toml)",
    )
    p.add_argument(
        "--kind",
        default="",
        metavar="KIND",
        help="Document kind, e.g. plaintext (default: derived from the file name)",
    )
    p.add_argument(
        "--force",
        action="store_true",
        help="Highlight even if the file type is not eligible",
    )
    p.add_argument(
        "--format",
        choices=FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    return p


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions."""
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        kind=args.kind,
        config=config,
        force=args.force,
        format=args.format,
    )


def highlight_file(options: CliOptions) -> str | None:
    """Read and tokenize a file; return the formatted output, None if not eligible."""
    from jinjahl.debug import dump_json, dump_tokens
    from jinjahl.policy import is_eligible
    from jinjahl.scanner import scan
    from jinjahl.tokens import group_tokens

    source = options.input_file.read_text(encoding="utf-8")
    if not options.force and not is_eligible(options.input_file.name, options.kind, options.config):
        return None

    tokens = scan(source)
    out = io.StringIO()
    if options.format == "json":
        dump_json(group_tokens(tokens), file=out)
    else:
        dump_tokens(source, tokens, file=out)
    return out.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    try:
        output = highlight_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2

    if output is None:
        print(f"{options.input_file}: not eligible for highlighting (use --force)", file=sys.stderr)
        output = ""

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
