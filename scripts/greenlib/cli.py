"""
Command-line interface for greenlib.

Usage:
    greens -t "Anon's week" -a Anon -o week.epub monday.txt tuesday.txt
    greens build --config greens.yaml -v
    greens build -t Title -a Anon -o out.epub --cover cover.png pastes/
    greens lint pastes/ --fix
"""

import argparse
import sys
import traceback

from greenlib.builders import BUILDERS
from greenlib.config import ConfigError, GreenConfig
from greenlib.lint import GreenLinter
from greenlib.report import COLOR_MODES, Reporter
from greenlib.resolve import assemble_inputs


# ── Build command ──────────────────────────────────────────────────────


def load_config(args):
    """Merge --config YAML (if any) with command-line values."""
    overrides = {
        "title": args.title,
        "author": args.author,
        "cover": args.cover,
        "subjects": args.subjects,
        "green_color": args.green_color,
        "spoiler_color": args.spoiler_color,
        "lang": args.lang,
        "output": args.output,
        "files": args.files,
    }
    if args.config:
        return GreenConfig.load(args.config, overrides=overrides)
    return GreenConfig.from_mapping(overrides)


def cmd_build(args):
    """Build the EPUB."""
    reporter = Reporter(verbosity=args.verbose, quiet=args.quiet, color=args.color)
    reporter.debug(f"Parsed arguments: {vars(args)}")

    try:
        config = load_config(args)
    except ConfigError as e:
        reporter.error(str(e))
        sys.exit(1)

    config.summary(reporter)

    input_files = assemble_inputs(config.files)
    if not input_files:
        reporter.error("No input files given")
        sys.exit(1)
    reporter.info(f"  Input:  {len(input_files)} file(s)")

    builder = BUILDERS["epub"](
        config=config,
        input_files=input_files,
        reporter=reporter,
    )
    if not builder.build():
        sys.exit(1)


# ── Lint command ───────────────────────────────────────────────────────


def cmd_lint(args):
    """Lint paste files."""
    color = not args.no_color and sys.stdout.isatty()

    files = assemble_inputs(args.files)
    if not files:
        print("  No paste files found")
        sys.exit(1)

    print(f"\n  Linting: {len(files)} file(s)")
    print(f"  Mode:    {'FIX' if args.fix else 'CHECK'}")
    print()

    linter = GreenLinter(
        files=files,
        fix=args.fix,
        verbose=args.verbose,
        color=color,
    )

    success = linter.run()
    sys.exit(0 if success else 1)


# ── Argument Parser ────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        prog="greens",
        description="Create an EPUB from text files in greentext format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s -t "Title" -a Anon -o out.epub a.txt b.txt   Build an EPUB
  %(prog)s build --config greens.yaml                   Build from a config file
  %(prog)s lint pastes/                                 Check pastes for issues
  %(prog)s lint pastes/ --fix                           Auto-fix what's fixable
        """,
    )

    sub = parser.add_subparsers(dest="command")

    # ── build (default when no subcommand) ─────────────────
    build_p = sub.add_parser("build", help="Build an EPUB (default)")
    _add_build_args(build_p)

    # ── lint ───────────────────────────────────────────────
    lint_p = sub.add_parser("lint", help="Lint paste files")
    lint_p.add_argument("files", nargs="+", help="Paste files or directories")
    lint_p.add_argument("--fix", action="store_true", help="Auto-fix fixable issues")
    lint_p.add_argument("--verbose", "-v", action="store_true")
    lint_p.add_argument("--no-color", action="store_true", help="Plain output")

    return parser


def _add_build_args(parser):
    """Add metadata, styling and output options to a parser."""
    meta = parser.add_argument_group("metadata")
    meta.add_argument("-t", "--title", help="Title of the green")
    meta.add_argument("-a", "--author", help="Name of the author")
    meta.add_argument("-c", "--cover", help="Cover image to use")
    meta.add_argument(
        "-s", "--subjects", action="append", default=None,
        help="Green subject/tag (repeatable)",
    )
    meta.add_argument("--lang", help="Language code (default: en)")

    style = parser.add_argument_group("styling")
    style.add_argument("--green-color", help="Color of the green highlight (default: #2CAF26)")
    style.add_argument("--spoiler-color", help="Color of the spoiler highlight (default: #000)")

    opts = parser.add_argument_group("options")
    opts.add_argument("-o", "--output", help="Path for the generated EPUB file")
    opts.add_argument("--config", help="YAML file with any of the options above")
    opts.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Verbose output, repeat for more detail",
    )
    opts.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    opts.add_argument(
        "--color", choices=COLOR_MODES, default="auto",
        help="When to use terminal colors",
    )
    parser.add_argument("files", nargs="*", help="Text files (or directories) in greentext format")


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None):
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)

    # Allow bare "greens -t T -a A -o out.epub a.txt" without "build":
    # if the first argument isn't a known subcommand or a help flag,
    # prepend "build".
    known_commands = {"build", "lint"}
    if argv and argv[0] not in known_commands and argv[0] not in ("-h", "--help"):
        argv = ["build"] + argv

    args = parser.parse_args(argv)

    dispatch = {
        "build": cmd_build,
        "lint": cmd_lint,
    }

    handler = dispatch.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()


def run():
    """Console entry point with top-level error handling."""
    try:
        main()
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        log_path = "build_error.log"
        with open(log_path, "w") as f:
            traceback.print_exc(file=f)
        print(f"\nUnexpected error: {e}")
        print(f"Full traceback written to {log_path}")
        sys.exit(1)


if __name__ == "__main__":
    run()
