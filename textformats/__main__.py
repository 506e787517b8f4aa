from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO, Optional

from tabulate import tabulate

from .config import load_options, str_to_bool
from .conll import ConllFormatError
from .engine import JSON_OUTPUT, convert
from .format_registry import registry

logger = logging.getLogger("textformats")

TASK_CHOICES = (
    "convert",
    "formats",
)


def _str_to_bool(value: str) -> bool:
    try:
        return str_to_bool(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _configure_logging(args: argparse.Namespace) -> None:
    if getattr(args, "debug", False):
        level = logging.DEBUG
    elif getattr(args, "verbose", False):
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="[textformats] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    from . import __version__

    format_names = registry.names()

    parser = argparse.ArgumentParser(
        prog="python -m textformats",
        description="Convert between CoNLL, tokenized, untokenized and raw English text",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="task", required=False)

    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")
    parent_parser.add_argument("--verbose", action="store_true", help="Print high-level progress messages")

    # convert -----------------------------------------------------------------
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a file (or STDIN) from one format to another",
        parents=[parent_parser],
    )
    convert_parser.add_argument(
        "--input",
        "-i",
        default="-",
        help="Input file, or '-' for STDIN",
    )
    convert_parser.add_argument(
        "--output",
        "-o",
        default="-",
        help="Output file, or '-' for STDOUT",
    )
    convert_parser.add_argument(
        "--from",
        dest="input_format",
        default="conll-sentence",
        help=f"Input format ({', '.join(format_names)} or an alias)",
    )
    convert_parser.add_argument(
        "--to",
        dest="output_format",
        default="conll-sentence",
        help=f"Output format ({', '.join(format_names)}, {JSON_OUTPUT} or an alias)",
    )
    convert_parser.add_argument(
        "--join-category-to-pos",
        type=_str_to_bool,
        default=None,
        help="Fold CPOSTAG into POSTAG on read and split it on write (overrides config file)",
    )
    convert_parser.add_argument(
        "--add-pos-as-attribute",
        type=_str_to_bool,
        default=None,
        help="Mirror POSTAG into an fPOS attribute on read and strip it on write (overrides config file)",
    )
    convert_parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON config file (default: $TEXTFORMATS_CONFIG or ~/.textformats/config.json)",
    )
    convert_parser.add_argument("--docid", default="", help="Document id stored on every sentence")
    convert_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of threads used to parse records",
    )

    # formats -----------------------------------------------------------------
    subparsers.add_parser(
        "formats",
        help="List the supported document formats",
        parents=[parent_parser],
    )
    return parser


def _open_input(path: str) -> IO:
    if path == "-":
        return sys.stdin
    return open(Path(path), "r", encoding="utf-8", errors="replace")


def _open_output(path: str) -> IO:
    if path == "-":
        return sys.stdout
    return open(Path(path), "w", encoding="utf-8")


def run_convert(args: argparse.Namespace) -> int:
    """Convert between document formats."""
    if registry.get(args.input_format) is None:
        print(f"Error: Unknown input format '{args.input_format}'", file=sys.stderr)
        return 1
    if args.output_format.lower() != JSON_OUTPUT and registry.get(args.output_format) is None:
        print(f"Error: Unknown output format '{args.output_format}'", file=sys.stderr)
        return 1

    options = load_options(
        {
            "join_category_to_pos": args.join_category_to_pos,
            "add_pos_as_attribute": args.add_pos_as_attribute,
        },
        config_path=Path(args.config) if args.config else None,
    )
    logger.debug("Format options: %s", options)

    try:
        stream = _open_input(args.input)
    except OSError as exc:
        print(f"Error: Cannot read {args.input}: {exc}", file=sys.stderr)
        return 1
    try:
        out = _open_output(args.output)
    except OSError as exc:
        if stream is not sys.stdin:
            stream.close()
        print(f"Error: Cannot write {args.output}: {exc}", file=sys.stderr)
        return 1
    try:
        convert(
            stream,
            out,
            args.input_format,
            args.output_format,
            options=options,
            docid=args.docid,
            workers=args.workers,
        )
    except ConllFormatError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if stream is not sys.stdin:
            stream.close()
        if out is not sys.stdout:
            out.close()
    return 0


def run_formats(args: argparse.Namespace) -> int:
    rows = [
        [entry.name, ", ".join(entry.aliases), entry.record_mode, entry.description]
        for entry in registry.entries()
    ]
    print(tabulate(rows, headers=["Format", "Aliases", "Records", "Description"]))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    else:
        argv = list(argv)

    if argv and argv[0] not in TASK_CHOICES and argv[0].startswith("-") and argv[0] not in ("-h", "--help", "-V", "--version"):
        argv = ["convert", *argv]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.task:
        parser.error("No task specified. Use one of: " + ", ".join(TASK_CHOICES))

    _configure_logging(args)

    if args.task == "convert":
        return run_convert(args)
    if args.task == "formats":
        return run_formats(args)

    parser.error(f"Unknown task '{args.task}'. Supported tasks: {', '.join(TASK_CHOICES)}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
