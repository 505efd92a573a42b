"""
Taskboard CLI — Command-Line Interface for the Task Server
===========================================================

Usage:
    # Run the server (default port 3000, or $TASKBOARD_PORT)
    python -m taskboard serve
    python -m taskboard serve --port 8080 --no-seed

    # Show the endpoint map
    python -m taskboard endpoints

    # Print the sample tasks a fresh server starts with
    python -m taskboard seed
"""

from __future__ import annotations

import argparse
import json

from taskboard.config import Settings
from taskboard.store import TaskStore


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_serve(args):
    """Run the HTTP server until interrupted."""
    from taskboard.server import run_server

    settings = Settings.from_env().override(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        seed=False if args.no_seed else None,
    )
    run_server(settings)


def cmd_endpoints(args):
    """Print the endpoint map."""
    from taskboard.server import ENDPOINTS

    print("\n─── Taskboard Endpoints ───")
    width = max(len(route) for route in ENDPOINTS)
    for route, summary in ENDPOINTS.items():
        print(f"  {route.ljust(width)}  {summary}")
    print()


def cmd_seed(args):
    """Print the seed tasks as JSON."""
    tasks = [t.to_dict() for t in TaskStore(seed=True)]
    print(json.dumps(tasks, indent=2))


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Taskboard — in-memory task management HTTP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  taskboard serve --port 3000\n"
            "  taskboard endpoints\n"
            "  taskboard seed\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0)")
    p_serve.add_argument("--port", default=None, type=int,
                         help="Port number (default: 3000)")
    p_serve.add_argument("--log-level", default=None,
                         choices=["critical", "error", "warning", "info", "debug"],
                         help="Log level (default: info)")
    p_serve.add_argument("--no-seed", action="store_true",
                         help="Start with an empty task list")

    # endpoints
    subparsers.add_parser("endpoints", help="Show the endpoint map")

    # seed
    subparsers.add_parser("seed", help="Print the sample tasks as JSON")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "serve": cmd_serve,
        "endpoints": cmd_endpoints,
        "seed": cmd_seed,
    }

    if args.command in commands:
        commands[args.command](args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
