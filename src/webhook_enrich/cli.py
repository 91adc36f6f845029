"""CLI entrypoint for webhook-enrich."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from webhook_enrich.adapters import ADAPTERS
from webhook_enrich.config.loader import DEFAULT_CONFIG_PATH, get_enabled_adapters, load_config
from webhook_enrich.runners.process_envelopes import main as process_envelopes_main
from webhook_enrich.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _load_cli_config(args: argparse.Namespace) -> Dict[str, Any] | None:
    """Load --config if given, else the default file when present."""
    if args.config:
        return load_config(Path(args.config))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return None


def cmd_adapters_list(args: argparse.Namespace) -> None:
    """List registered adapters."""
    config = _load_cli_config(args)
    enabled = get_enabled_adapters(config) if config else list(ADAPTERS)
    
    print(f"{'Vendor':<30} {'Version':<10} {'Enabled':<10}")
    print("-" * 50)
    for vendor, version in sorted(ADAPTERS):
        flag = "Yes" if (vendor, version) in enabled else "No"
        print(f"{vendor:<30} {version:<10} {flag:<10}")


def cmd_process(args: argparse.Namespace) -> None:
    """Convert collector envelopes into raw events."""
    config = _load_cli_config(args)
    if config:
        configure_logging(config["logging"].get("level"))
    enabled = get_enabled_adapters(config) if config else None
    
    stats = process_envelopes_main(
        [Path(p) for p in args.envelopes],
        enabled=enabled,
        fail_fast=args.fail_fast,
    )
    
    rendered = json.dumps(
        [event.model_dump(mode="json") for event in stats["raw_events"]],
        indent=2,
        ensure_ascii=False,
    )
    if args.output:
        Path(args.output).write_text(rendered + "\n", encoding="utf-8")
        logger.info(f"Wrote {stats['events']} raw events to {args.output}")
    else:
        print(rendered)
    
    for path, errors in stats["errors"].items():
        for error in errors:
            print(f"{path}: {error}", file=sys.stderr)
    
    if stats["failed"]:
        sys.exit(1)


def main() -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="webhook-enrich",
        description="Convert vendor webhook payloads into raw events",
    )
    parser.add_argument(
        "--config",
        type=str,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    # adapters command
    adapters_parser = subparsers.add_parser("adapters", help="Adapter commands")
    adapters_subparsers = adapters_parser.add_subparsers(dest="adapters_subcommand", help="Adapters subcommands", required=True)
    adapters_list_parser = adapters_subparsers.add_parser("list", help="List registered adapters")
    adapters_list_parser.set_defaults(func=cmd_adapters_list)
    
    # process command
    process_parser = subparsers.add_parser("process", help="Convert envelope files into raw events")
    process_parser.add_argument(
        "envelopes",
        nargs="+",
        help="Collector envelope JSON files",
    )
    process_parser.add_argument(
        "--output",
        type=str,
        help="Write raw events to this file instead of stdout",
    )
    process_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop on the first envelope that cannot be loaded",
    )
    process_parser.set_defaults(func=cmd_process)
    
    args = parser.parse_args()
    
    if not args.command:
        parser.print_help()
        return
    
    configure_logging()
    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
