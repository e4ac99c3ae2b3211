"""Command-line entry point: ``moodle-mcp`` / ``python -m moodle_mcp``."""

import argparse
import asyncio
import sys

from dotenv import load_dotenv

from moodle_mcp.application import MoodleMCPApplication
from moodle_mcp.catalog import build_registry
from moodle_mcp.config import parse_log_level
from moodle_mcp.errors import MoodleError
from moodle_mcp.registry import format_tool_detail, format_tool_list


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moodle-mcp",
        description="Expose a Moodle site's web services as MCP tools over stdio",
    )
    parser.add_argument("--config", metavar="PATH", help="YAML config file")
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Override the log level (DEBUG, INFO, WARN, ERROR)",
    )
    parser.add_argument(
        "--list-tools", action="store_true", help="Print the tool catalog and exit"
    )
    parser.add_argument("--describe", metavar="NAME", help="Print one tool's mapping and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Catalog inspection needs no site or token
    if args.list_tools or args.describe:
        registry = build_registry()
        if args.list_tools:
            print(format_tool_list(registry.list_tools()))
            return 0
        tool = registry.get(args.describe)
        if tool is None:
            print(f"Error: Unknown tool: {args.describe}", file=sys.stderr)
            return 1
        print(format_tool_detail(tool))
        return 0

    load_dotenv()

    try:
        log_level = parse_log_level(args.log_level) if args.log_level else None
        app = MoodleMCPApplication(config_path=args.config, log_level=log_level)
        asyncio.run(app.start())
    except MoodleError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
