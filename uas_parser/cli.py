# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line access to the parser.
#
# COMMANDS:
# ---------
# 1. Classify a user agent (prints JSON):
#    uas-parser parse "Mozilla/5.0 (Windows NT 10.0) ..."
#    uas-parser lookup "Mozilla/5.0 (Windows NT 10.0) ..."
#
# 2. Run one refresh cycle (exit code 1 on error):
#    uas-parser update
#
# 3. Show the loaded database version and record counts:
#    uas-parser version
#
# GLOBAL OPTIONS:
# ---------------
#   --cache-dir DIR     directory holding uasdata.ini
#   --camel             print provider-style camelCase keys
#   --verbose / -v      debug logging
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import List, Optional

from uas_parser.parser import UASParser


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uas-parser",
        description="Identify browser, OS and device from a user agent string",
    )
    parser.add_argument("--cache-dir", default=None, help="Directory holding the database file")
    parser.add_argument("--camel", action="store_true", help="Print camelCase keys")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Classify a user agent")
    parse_cmd.add_argument("user_agent")

    lookup_cmd = commands.add_parser("lookup", help="Classify a user agent (memoized)")
    lookup_cmd.add_argument("user_agent")

    commands.add_parser("update", help="Run one refresh cycle")
    commands.add_parser("version", help="Show the loaded database version")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    uas = UASParser(cache_directory=args.cache_dir, do_downloads=False)

    if args.command in ("parse", "lookup"):
        method = uas.parse if args.command == "parse" else uas.lookup
        result = method(args.user_agent)
        payload = result.to_camel_dict() if args.camel else result.to_dict()
        print(json.dumps(payload, indent=2))
        return 0

    if args.command == "update":
        result = uas.update_data()
        print(f"{result.outcome.value} (version: {uas.version})")
        if result.error is not None:
            print(f"error: {result.error}", file=sys.stderr)
            return 1
        return 0

    print(json.dumps(uas.get_status(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
