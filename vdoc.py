import argparse
import logging
import os
import sys
from typing import Dict, List

from vhdldoc.config import DocConfig
from vhdldoc.errors import ScanError
from vhdldoc.model import read_source
from vhdldoc.orchestrator import scan_files
from vhdldoc.renderers import renderer_registry


def _collect_files(args: argparse.Namespace, config: DocConfig) -> List[str]:
    """Positional files first, then files only named by ``--lib``."""
    files: List[str] = []
    seen = set()
    for path in list(args.files or []) + config.files():
        key = os.path.normpath(path)
        if key not in seen:
            seen.add(key)
            files.append(path)
    return files


def cmd_doc(args: argparse.Namespace) -> int:
    """Scan VHDL files and print the catalog or one symbol's documentation.

    Without ``--symbol`` an overview of every library is printed.  With
    it, the documentation comment and code of each matching symbol are
    printed.  Files that fail to scan are logged and make the command
    return 1, but the symbols of the other files are still shown.
    """
    config = DocConfig.from_args(args)
    files = _collect_files(args, config)
    if not files:
        sys.exit("Error: No files provided. Usage: vdoc.py doc FILE...")

    report = scan_files(files, config)

    if args.format == "text":
        renderer = renderer_registry.create(args.format, bold=not args.no_bold)
    else:
        renderer = renderer_registry.create(args.format)

    # Failed files were already logged by the orchestrator.
    rc = 0 if report.ok else 1

    if not args.symbol:
        print(renderer.render_catalog(report.libraries))
        return rc

    symbols = report.libraries.resolve(args.symbol)
    if not symbols:
        print(f"Error: symbol '{args.symbol}' not found", file=sys.stderr)
        return 1

    sources: Dict[str, bytes] = {}
    outputs: List[str] = []
    for sym in symbols:
        try:
            if sym.filepath not in sources:
                sources[sym.filepath] = read_source(sym.filepath)
        except ScanError as err:
            print(f"Error: {err}", file=sys.stderr)
            rc = 1
            continue
        outputs.append(renderer.render_symbol(sym, sources[sym.filepath]))
    print("\n\n".join(outputs))
    return rc


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vdoc.py",
        description="Documentation catalog for VHDL sources.",
    )

    # Global options
    parser.add_argument(
        "--format",
        choices=renderer_registry.keys(),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug messages on stderr.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # doc subcommand
    doc = subparsers.add_parser(
        "doc",
        help="List documented symbols or show one of them.",
    )
    doc.add_argument(
        "files",
        metavar="FILE",
        nargs="*",
        help="VHDL file to scan; goes to the default library.",
    )
    doc.add_argument(
        "--lib",
        nargs=2,
        action="append",
        metavar=("LIB", "FILE"),
        help="Scan FILE into library LIB (repeatable).",
    )
    doc.add_argument(
        "--default-lib",
        default=None,
        help="Library for files without --lib (default: work).",
    )
    doc.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of scan threads (default: one per file).",
    )
    doc.add_argument(
        "-s", "--symbol",
        metavar="PATH",
        help="Show symbol PATH, e.g. work.uart_pkg.baud_rate.",
    )
    doc.add_argument(
        "--no-bold",
        action="store_true",
        help="Do not emphasise keywords in text output.",
    )
    doc.set_defaults(func=cmd_doc)

    return parser


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
