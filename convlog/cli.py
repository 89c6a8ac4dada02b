"""convlog - convert tenhou.net/6 logs to mjai event lines"""

import argparse
import json
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from convlog.engine.convert import ConvertConfig, convert_log
from convlog.engine.errors import ConvertError
from convlog.engine.mjai_writer import write_events
from convlog.tenhou.parser import load_log
from convlog.ui.summary import render_summary

# Diagnostics go to stderr so stdout stays a clean mjai stream.
console = Console(stderr=True)
logger = logging.getLogger("convlog")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="convlog",
        description="Convert a tenhou.net/6 JSON log into mjai events")
    parser.add_argument("input", help="tenhou.net/6 JSON log file")
    parser.add_argument("-o", "--output", default="-",
                        help="Output file for mjai lines (default: stdout)")
    parser.add_argument("--skip-errors", action="store_true",
                        help="Skip kyoku that fail to convert instead of aborting")
    parser.add_argument("--no-ura", action="store_true",
                        help="Do not attach ura dora markers to hora events")
    parser.add_argument("--summary", action="store_true",
                        help="Print a per-kyoku summary table")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    config = ConvertConfig(
        skip_failed_rounds=args.skip_errors,
        include_ura_markers=not args.no_ura,
    )

    try:
        log = load_log(args.input)
        result = convert_log(log, config)
    except OSError as e:
        console.print(f"[red]cannot read {escape(args.input)}: {escape(str(e.strerror or e))}[/red]")
        return 1
    except UnicodeDecodeError as e:
        console.print(f"[red]{escape(args.input)} is not UTF-8: {escape(str(e))}[/red]")
        return 1
    except json.JSONDecodeError as e:
        console.print(f"[red]invalid JSON in {escape(args.input)}: {escape(str(e))}[/red]")
        return 1
    except ConvertError as e:
        console.print(f"[red]conversion failed: {escape(str(e))}[/red]")
        return 1

    try:
        count = write_events(result.events, args.output)
    except OSError as e:
        console.print(f"[red]cannot write {escape(args.output)}: {escape(str(e.strerror or e))}[/red]")
        return 1
    logger.debug("%d events written", count)

    if args.summary:
        render_summary(console, log, result)

    return 0
