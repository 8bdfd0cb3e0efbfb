#!/usr/bin/env python3
"""
goutline CLI - Outline a Go source file as JSON

Usage:
    goutline -f FILE                  Outline FILE from disk
    goutline -f FILE -imports-only    Only report the import section
    goutline -f FILE -modified        Read FILE's contents from an overlay
                                      archive on standard input
    goutline -f FILE -format text     Human-readable listing
    goutline -version                 Show version information

On failure a single "error: <message>" line goes to stderr, nothing goes to
stdout, and the exit status is 1.
"""

import argparse
import sys
import traceback

from goutline.config import debug_enabled, load_settings, log, set_debug, utf8_io
from goutline.errors import GoutlineError
from goutline.outline import outline_file
from goutline.serializer import SERIALIZERS, get_serializer


def cmd_version(args):
    """Show version information."""
    from goutline import __version__
    from goutline.parser import TREE_SITTER_AVAILABLE

    print(f"goutline version {__version__}")
    print(f"  Go grammar (tree-sitter-language-pack): "
          f"{'Available' if TREE_SITTER_AVAILABLE else 'Not installed'}")


def cmd_outline(args, settings):
    """Outline one file and print it; exits 1 on any failure."""
    indent = args.indent if args.indent is not None else settings.json_indent
    serializer = get_serializer(args.format, indent=indent)

    try:
        root = outline_file(args.file, imports_only=args.imports_only, modified=args.modified)
        # Render fully before writing so a failure never leaves partial stdout
        output = serializer.render(root)
    except GoutlineError as e:
        if debug_enabled():
            traceback.print_exc()
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    log(f"writing {serializer.name} outline ({len(output)} chars)")
    sys.stdout.write(output)
    sys.stdout.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goutline",
        description="Extract a JSON outline of a Go source file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  goutline -f main.go                 Outline main.go
  goutline -f main.go -imports-only   Imports only
  goutline -f main.go -modified < archive
                                      Outline the unsaved buffer for main.go

Environment:
  GOUTLINE_DEBUG=1          Diagnostics and tracebacks on stderr
  GOUTLINE_JSON_INDENT=N    Pretty-print JSON output
        """
    )
    parser.add_argument("-f", dest="file", default="", help="the path to the file to outline")
    parser.add_argument("-imports-only", "--imports-only", dest="imports_only", action="store_true",
                        help="parse imports only")
    parser.add_argument("-modified", "--modified", dest="modified", action="store_true",
                        help="read an archive of the modified file from standard input")
    parser.add_argument("-format", "--format", dest="format", choices=sorted(SERIALIZERS), default="json",
                        help="output format (default: json)")
    parser.add_argument("-indent", "--indent", dest="indent", type=int, default=None,
                        help="indent JSON output by N spaces")
    parser.add_argument("-debug", "--debug", dest="debug", action="store_true",
                        help="print diagnostics to stderr")
    parser.add_argument("-version", "--version", dest="version", action="store_true",
                        help="show version information")
    return parser


def main(argv=None):
    """Main CLI entry point."""
    utf8_io()
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    set_debug(settings.debug or args.debug)

    if args.version:
        cmd_version(args)
        return

    if not args.file:
        parser.error("the following arguments are required: -f")

    cmd_outline(args, settings)


if __name__ == "__main__":
    main()
