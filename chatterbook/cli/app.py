from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from chatterbook import Chatterbook
from chatterbook.cli import output as out
from chatterbook.cli.config import Config, config_exists, config_path_display, load_config
from chatterbook.core.exceptions import ExportFormatError
from chatterbook.export.walker import BranchPolicy

DESCRIPTION = """\
chatterbook — turn a ChatGPT export into readable transcripts

Reads conversations.json from a ChatGPT data export and writes one
Markdown document per conversation, following the active branch of
each chat and copying referenced images next to the transcript."""


# ── convert ─────────────────────────────────────────────────────────


def _apply_overrides(cfg: Config, args: argparse.Namespace) -> Config:
    if args.outpath is not None:
        cfg.output_dir = args.outpath
    if args.uploads is not None:
        cfg.uploads_dir = args.uploads
    if args.branch is not None:
        cfg.branch_policy = args.branch
    return cfg


def cmd_convert(args: argparse.Namespace) -> int:
    try:
        cfg = _apply_overrides(load_config(), args)
        book = Chatterbook.from_config(cfg.to_dict())
    except OSError as exc:
        out.error(f"Cannot set up conversion: {exc}")
        return 1
    except ValueError as exc:
        out.error(str(exc))
        return 1

    try:
        result = book.convert(args.infile)
    except ExportFormatError as exc:
        out.error(exc.message)
        return 1
    except OSError as exc:
        out.error(f"Cannot read {args.infile}: {exc}")
        return 1

    out.header(f"Converted {result.input_path}")
    for name in result.written:
        out.success(f"Wrote {name}")
    for skipped in result.skipped:
        out.warn(f"Skipped {skipped.title!r} ({skipped.reason})")
    for err in result.errors:
        out.error(err)

    print()
    out.kv("Conversations", result.conversations_seen)
    out.kv("Written", result.written_count)
    out.kv("Skipped", len(result.skipped))
    if result.assets_copied:
        out.kv("Images copied", result.assets_copied)
    if result.invalid_records:
        out.kv("Invalid records", result.invalid_records)
    if result.dropped_nodes:
        out.kv("Dropped nodes", result.dropped_nodes)
    if result.errors:
        out.kv("Write errors", result.failed_count)
    print()
    return 0


# ── config ──────────────────────────────────────────────────────────


def cmd_config_show(args: argparse.Namespace) -> int:
    """Display current configuration."""
    try:
        cfg = load_config()
    except ValueError as exc:
        out.error(str(exc))
        return 1
    source = config_path_display() if config_exists() else "defaults"

    out.header(f"Configuration ({source})")
    print()
    out.kv("Output directory", cfg.output_dir)
    out.kv("Uploads directory", cfg.uploads_dir or out.dim("next to the input file"))
    out.kv("Branch policy", cfg.branch_policy)
    out.kv("Skipped titles", ", ".join(cfg.skip_titles) or out.dim("none"))
    out.kv("Scan entry limit", cfg.max_scan_entries)
    print()
    return 0


def cmd_config_path(args: argparse.Namespace) -> int:
    """Print the config file path."""
    print(config_path_display())
    return 0


# ── Parser ──────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatterbook",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  chatterbook convert conversations.json -o transcripts/\n"
            "  chatterbook convert export/conversations.json --branch first\n"
            "  chatterbook config show\n"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed progress logs",
    )
    sub = parser.add_subparsers(dest="command", title="commands")

    p_convert = sub.add_parser(
        "convert",
        help="Convert an export into Markdown transcripts",
        description=(
            "Write one Markdown file per conversation. Conversations without "
            "a root message or without content are skipped and reported."
        ),
    )
    p_convert.add_argument("infile", help="Path to conversations.json")
    p_convert.add_argument(
        "-o",
        "--outpath",
        default=None,
        help="Output directory for Markdown files (default: config or .)",
    )
    p_convert.add_argument(
        "--uploads",
        default=None,
        help="Folder containing user-* upload directories "
        "(default: next to the input file)",
    )
    p_convert.add_argument(
        "--branch",
        choices=[p.value for p in BranchPolicy],
        default=None,
        help="Which branch to follow after edits: the most recent (last) "
        "or the original (first)",
    )

    p_cfg = sub.add_parser("config", help="View settings")
    cfg_sub = p_cfg.add_subparsers(dest="config_command", title="config commands")
    cfg_sub.add_parser("show", help="Show current settings")
    cfg_sub.add_parser("path", help="Print config file location")

    return parser


# ── Dispatch ────────────────────────────────────────────────────────

_CommandHandler = Callable[[argparse.Namespace], int]

_COMMAND_MAP: dict[str, _CommandHandler] = {
    "convert": cmd_convert,
}

_CONFIG_MAP: dict[str, _CommandHandler] = {
    "show": cmd_config_show,
    "path": cmd_config_path,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="  %(name)s: %(message)s",
        )

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "config":
        if not args.config_command:
            parser.parse_args(["config", "--help"])
            return 0
        handler = _CONFIG_MAP.get(args.config_command)
    else:
        handler = _COMMAND_MAP.get(args.command)

    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
