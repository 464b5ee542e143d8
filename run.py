"""Dungeon Kit CLI entry point.

Provides subcommands for generating dungeons from the terminal and for
running the HTTP API. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()
if _COLOR_ENABLED:  # pragma: no cover - environment dependent
    _color_init()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.0.0"


__version__ = _load_version()


def _add_config_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--style", default=None, help="stone | crypt | mine | temple | sewer (default: stone)")
    p.add_argument("--rooms", dest="room_count", type=int, default=None, help="Target room count (3-20, default 8)")
    p.add_argument("--min-size", dest="room_min_size", type=int, default=None, help="Minimum room edge (4-10)")
    p.add_argument("--max-size", dest="room_max_size", type=int, default=None, help="Maximum room edge (8-20)")
    p.add_argument("--corridor-width", dest="corridor_width", type=float, default=None, help="Corridor width (2-6)")
    p.add_argument("--wall-height", dest="wall_height", type=float, default=None, help="Wall height (3-8)")
    for name in ("torches", "pillars", "doorways", "treasure"):
        p.add_argument(
            f"--no-{name}",
            dest=f"add_{name}",
            action="store_false",
            default=None,
            help=f"Disable {name}",
        )
    p.add_argument("--seed", default=None, help="Integer or text seed (text is hashed)")
    p.add_argument("--json", dest="as_json", action="store_true", help="Print the full plan as JSON")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Kit

    Generate procedural dungeon layouts (rooms, L-shaped corridors, pillars,
    torches and treasure) or serve them over HTTP. CLI flags take precedence
    over environment variables.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                            Bind address for the API server (default: 0.0.0.0)
          PORT                            Port for the API server (default: 5000)
          DUNGEONKIT_LOG_LEVEL            debug | info | warn | error (default: info)
          DUNGEONKIT_LOG_JSON             1 for JSON log lines
          DUNGEONKIT_ENABLE_PHASE_TIMING  0 to skip per-phase timing

        Examples:
          # Generate a crypt with 12 rooms and a fixed seed
          python run.py generate --style crypt --rooms 12 --seed 42

          # Dump the whole plan as JSON
          python run.py generate --seed goblin-caves --json

          # Preview a single room or corridor
          python run.py room --min-size 9 --max-size 14
          python run.py corridor --corridor-width 4

          # Run the API server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeonkit",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Path to a .env file to load before processing flags")
    parser.add_argument("--log-level", dest="log_level", default=None, help="Override DUNGEONKIT_LOG_LEVEL")
    parser.add_argument("--version", action="version", version=f"Dungeon Kit {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a full dungeon",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Pack rooms, chain them with corridors and decorate them",
    )
    _add_config_flags(gen_parser)
    gen_parser.set_defaults(command="generate")

    room_parser = subparsers.add_parser("room", help="Generate one room at the origin (pillars only)")
    _add_config_flags(room_parser)
    room_parser.set_defaults(command="room")

    corridor_parser = subparsers.add_parser("corridor", help="Generate one corridor from (0,0) to (20,0)")
    _add_config_flags(corridor_parser)
    corridor_parser.set_defaults(command="corridor")

    styles_parser = subparsers.add_parser("styles", help="List the style catalog")
    styles_parser.add_argument("--json", dest="as_json", action="store_true", help="Print the catalog as JSON")
    styles_parser.set_defaults(command="styles")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon HTTP API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server for the dungeon API",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _config_from_args(args: argparse.Namespace):
    from dungeonkit.dungeon.config import DungeonConfig

    keys = (
        "style",
        "room_count",
        "room_min_size",
        "room_max_size",
        "corridor_width",
        "wall_height",
        "add_torches",
        "add_pillars",
        "add_doorways",
        "add_treasure",
    )
    return DungeonConfig.from_mapping({k: getattr(args, k, None) for k in keys}).validate(ranges=True)


def _paint(text, color) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else str(text)


def _print_summary(plan) -> None:
    divider = _paint("=" * 40, Fore.MAGENTA)
    title = _paint("Dungeon Kit", Fore.CYAN + Style.BRIGHT)

    def row(label: str, val) -> str:
        return f"  {_paint(label, Fore.YELLOW):12} {_paint(val, Fore.GREEN)}"

    m = plan.metrics
    lines = [
        divider,
        f"  {title}",
        divider,
        row("Style:", plan.config.style),
        row("Seed:", plan.seed if plan.seed is not None else "-"),
        row("Rooms:", f"{len(plan.rooms)}/{plan.rooms_requested}"),
        row("Corridors:", len(plan.corridors)),
        row("Pillars:", m.get("pillars", 0)),
        row("Torches:", m.get("torches", 0)),
        row("Treasure:", m.get("treasure_chests", 0)),
        row("Runtime:", f"{m.get('runtime_ms', 0)} ms"),
        divider,
    ]
    if plan.degraded:
        lines.insert(-1, "  " + _paint(f"{plan.rooms_dropped} room slot(s) could not be placed", Fore.RED))
    for room in plan.rooms:
        lines.append(f"  Room {room.id:>2}  ({room.center.x:7.2f}, {room.center.z:7.2f})  {room.width:5.2f} x {room.depth:5.2f}")
    print("\n".join(lines))


def _coerce_cli_seed(raw):
    if raw is None:
        return None
    from dungeonkit.routes.dungeon_api import _coerce_seed

    return _coerce_seed(raw)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    from dungeonkit import logging_utils
    from dungeonkit.exceptions import InvalidConfigError

    if args.log_level:
        try:
            logging_utils.set_level(args.log_level)
        except ValueError as exc:
            print(_paint(f"[ERROR] {exc}", Fore.RED), file=sys.stderr)
            return 2
    elif getattr(args, "as_json", False):
        # Keep stdout parseable; errors still go to stderr.
        logging_utils.set_level("error")

    mode = args.command or "generate"

    if mode == "server":
        from dungeonkit.server import start_server

        host = args.host or os.getenv("HOST", "0.0.0.0")
        port = int(args.port or os.getenv("PORT", "5000"))
        logging_utils.log.info(event="startup", mode=mode, host=host, port=port)
        start_server(host=host, port=port, debug=args.debug)
        return 0

    if mode == "styles":
        from dungeonkit.dungeon.styles import catalog_snapshot

        catalog = catalog_snapshot()
        if args.as_json:
            print(json.dumps(catalog, indent=2))
        else:
            for name, entry in catalog.items():
                print(f"{_paint(name, Fore.CYAN):10} {entry['description']}")
        return 0

    from dungeonkit.dungeon.pipeline import corridor_plan, generate_dungeon, single_room_plan

    try:
        config = _config_from_args(args)
        seed = _coerce_cli_seed(args.seed)
    except InvalidConfigError as exc:
        print(_paint(f"[ERROR] {exc.field}: {exc.message}", Fore.RED), file=sys.stderr)
        return 2

    if mode == "room":
        plan = single_room_plan(config, seed=seed)
    elif mode == "corridor":
        plan = corridor_plan(config)
    else:
        plan = generate_dungeon(config, seed=seed)

    if args.as_json:
        print(json.dumps(plan.to_dict(), indent=2))
    else:
        _print_summary(plan)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
