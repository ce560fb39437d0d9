"""Command line front end: ``toon encode`` / ``toon decode``.

Reads JSON or TOON from a file or stdin and writes the converted text to a
file or stdout.  All conversion work is delegated to the core.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO

from . import __version__
from .config import ToonConfig
from .decoder import decode
from .encoder import encode
from .errors import ToonError
from .values import from_python, to_python


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# I/O helpers
# ---------------------------------------------------------------------------

def _read_input(path: str | None, stdin: IO[str]) -> str:
    if path is None:
        return stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def _write_output(text: str, path: str | None, stdout: IO[str]) -> None:
    if path is None:
        print(text, file=stdout)
        return
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(text)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_encode(args: argparse.Namespace, stdin: IO[str], stdout: IO[str]) -> int:
    config = ToonConfig.from_options(
        indent=args.indent, delimiter=args.delimiter, length_marker=args.marker
    )
    source = _read_input(args.file, stdin)
    data = json.loads(source)
    logger.debug("Encoding %d bytes of JSON with %r", len(source), config)
    _write_output(encode(from_python(data), config), args.output, stdout)
    return 0


def _cmd_decode(args: argparse.Namespace, stdin: IO[str], stdout: IO[str]) -> int:
    config = ToonConfig.from_options(indent=args.indent, delimiter=args.delimiter)
    source = _read_input(args.file, stdin)
    logger.debug("Decoding %d lines of TOON with %r", source.count("\n") + 1, config)
    data = to_python(decode(source, config))
    text = json.dumps(
        data,
        indent=2 if args.pretty else None,
        ensure_ascii=False,
    )
    _write_output(text, args.output, stdout)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toon",
        description="Token-Oriented Object Notation converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  toon encode input.json -o output.toon
  toon decode input.toon --pretty
  echo '{"name":"Alice"}' | toon encode
        """,
    )
    parser.add_argument("--version", action="version", version=f"toon {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    enc = subparsers.add_parser("encode", help="Encode JSON to TOON")
    enc.add_argument("file", nargs="?", help="Input JSON file (default: stdin)")
    enc.add_argument("-o", "--output", help="Output file (default: stdout)")
    enc.add_argument("-i", "--indent", help="Indentation spaces (default: 2)")
    enc.add_argument("-d", "--delimiter", help="Array delimiter (default: ,)")
    enc.add_argument("-m", "--marker", help="Length marker prefix (default: none)")
    enc.add_argument("-v", "--verbose", action="store_true", help="Enable debug output")

    dec = subparsers.add_parser("decode", help="Decode TOON to JSON")
    dec.add_argument("file", nargs="?", help="Input TOON file (default: stdin)")
    dec.add_argument("-o", "--output", help="Output file (default: stdout)")
    dec.add_argument("-p", "--pretty", action="store_true", help="Pretty print JSON")
    dec.add_argument("-i", "--indent", help="Indentation spaces (default: 2)")
    dec.add_argument("-d", "--delimiter", help="Array delimiter (default: ,)")
    dec.add_argument("-v", "--verbose", action="store_true", help="Enable debug output")

    return parser


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
) -> int:
    """``toon`` console script / ``python -m toon_core``."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(file=stdout)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = _cmd_encode if args.command == "encode" else _cmd_decode
    try:
        return handler(args, stdin, stdout)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    except json.JSONDecodeError as exc:
        print(f"Error: invalid JSON input: {exc}", file=sys.stderr)
    except ToonError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
