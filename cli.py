#!/usr/bin/env python3
"""
strella CLI

Statically resolves every Lua file an entry script pulls in through
`require` calls with literal arguments, without running the script.
"""

import argparse
import logging
import sys
from pathlib import Path

from scanner.builder import ClosureError, build_closure
from scanner.calls import IMPORT_PRIMITIVE
from scanner.resolver import SOURCE_EXTENSION, has_extension
from exporters import to_list, to_ascii, to_json

PROG = "strella"


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Find the Lua files an entry script transitively requires.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  strella main.lua                     # Print dependencies, one per line
  strella main.lua -f tree             # Dependency tree
  strella main.lua -f tree --ascii-style=ascii  # Pure ASCII (no Unicode)
  strella main.lua -f json -o deps.json  # JSON output to file
  strella main.lua -q                  # Hide skipped-import diagnostics
        """,
    )

    # Positional arguments
    parser.add_argument(
        "entry",
        help="Entry Lua source file",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["list", "tree", "json"],
        default="list",
        help="Output format (default: list)",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display (default: entry file's directory)",
    )

    # Scanning options
    parser.add_argument(
        "--primitive",
        default=IMPORT_PRIMITIVE,
        help=f"Name of the import function (default: {IMPORT_PRIMITIVE})",
    )

    parser.add_argument(
        "--extension",
        default=SOURCE_EXTENSION,
        help=f"Required source file extension (default: {SOURCE_EXTENSION})",
    )

    # Reporting options
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print skipped-import diagnostics",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log traversal details to stderr",
    )

    return parser.parse_args(args)


def fail(message) -> int:
    """Print a prefixed error line and return the failure exit status."""
    print(f"{PROG}: {message}", file=sys.stderr)
    return 1


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    extension = parsed.extension
    if not extension.startswith("."):
        extension = "." + extension

    entry = Path(parsed.entry)

    # Fail fast on the entry before any analysis
    if not has_extension(entry, extension):
        return fail(f"input file isn't a {extension} file")

    base = Path(parsed.relative_to).resolve() if parsed.relative_to else entry.resolve().parent

    try:
        graph = build_closure(entry, primitive=parsed.primitive, extension=extension)
    except ClosureError as e:
        return fail(e)

    if not parsed.quiet:
        for diagnostic in graph.diagnostics:
            print(diagnostic.format(base), file=sys.stderr)

    # Generate output
    if parsed.format == "json":
        output = to_json(graph, base=base)
    elif parsed.format == "tree":
        output = to_ascii(graph, base=base, style=parsed.ascii_style)
    else:  # list (default)
        output = to_list(graph, base=base)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n" if output else "", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            return fail(f"cannot write output: {e}")
    elif output:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
