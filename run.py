"""Lava Maze CLI entry point.

Provides subcommands for running the dungeon API server, printing a generated
dungeon, and checking seeds for structural problems. Accepts configuration via
flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
_COLOR_ENABLED = True

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover
    _COLOR_ENABLED = False


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Lava Maze Dungeon Server

    Run the dungeon JSON API, print a generated dungeon, or diagnose seeds.
    Configuration can be provided via CLI flags or environment variables. If
    both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                         Bind address for the web server (default: 0.0.0.0)
          PORT                         Port for the web server (default: 5000)
          DUNGEON_MAX_ATTEMPTS         Retry bound per generation (default: 100)
          DUNGEON_MIN_EXIT_DISTANCE    Minimum slides from start to exit (default: 5)
          DUNGEON_HAZARD_FRACTION      Share of floor-facing walls turned to lava (default: 0.05)
          LAVAMAZE_LOG_LEVEL           debug | info | warn | error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run the server on a custom port
          python run.py server --port 8080

          # Print the 35x35 dungeon for seed 42
          python run.py generate --seed 42

          # Same dungeon as JSON
          python run.py generate --seed 42 --json

          # Check a few seeds for broken invariants
          python run.py diagnose 1 2 3
        """
    )

    parser = argparse.ArgumentParser(
        prog="lavamaze",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Lava Maze {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a dungeon and print it as ASCII (start drawn as @) or JSON.",
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: random)")
    gen_parser.add_argument("--width", type=int, default=35, help="Grid width (default: 35)")
    gen_parser.add_argument("--height", type=int, default=35, help="Grid height (default: 35)")
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Print JSON instead of ASCII")
    gen_parser.set_defaults(command="generate")

    # diagnose subcommand
    diag_parser = subparsers.add_parser(
        "diagnose",
        help="Report structural issues for seeds",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate each seed and check exit reachability, lava landings and floor connectivity.",
    )
    diag_parser.add_argument("seeds", nargs="*", help="Seeds to check (default: 1..10)")
    diag_parser.add_argument("--width", type=int, default=35, help="Grid width (default: 35)")
    diag_parser.add_argument("--height", type=int, default=35, help="Grid height (default: 35)")
    diag_parser.set_defaults(command="diagnose")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _error(msg: str) -> None:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
    print(f"{prefix} {msg}", file=sys.stderr)


def _cmd_generate(args: argparse.Namespace) -> int:
    from lavamaze.dungeon import DungeonError, build_dungeon
    from lavamaze.dungeon.api_helpers.tiles import dungeon_to_dict, render_ascii

    try:
        dungeon = build_dungeon(seed=args.seed, size=(args.width, args.height))
    except DungeonError as exc:
        _error(str(exc))
        return 1
    if args.as_json:
        print(json.dumps(dungeon_to_dict(dungeon, include_metrics=True)))
        return 0
    print(render_ascii(dungeon))
    print(f"seed={dungeon.seed} attempts={dungeon.attempt + 1} exit_distance={dungeon.exit_distance}")
    return 0


def _cmd_diagnose(args: argparse.Namespace) -> int:
    from lavamaze.dungeon import InvalidDungeonConfig
    from lavamaze.dungeon.debug_checks import diagnose_seed

    seeds = args.seeds or [str(i) for i in range(1, 11)]
    try:
        results = [diagnose_seed(s, size=(args.width, args.height)) for s in seeds]
    except InvalidDungeonConfig as exc:
        _error(str(exc))
        return 1
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, otherwise the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _cmd_generate(args)
    if mode == "diagnose":
        return _cmd_diagnose(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from lavamaze.logging_utils import log
    from lavamaze.server import start_server

    # Startup banner
    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Lava Maze Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Lava Maze Server Bootup"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
