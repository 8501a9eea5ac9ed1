"""
schematalk/main.py
Command line entry point

    schematalk ski [--usa] [--temperature N] [--wind N] [--visibility V]
    schematalk shipping [--prompt TEXT]
    schematalk compare [--domain ski|medicine]
    schematalk registry
    schematalk deck <id-or-path>
    schematalk decks

Frames go to stdout, logs to stderr.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from schematalk import __version__, config
from schematalk.presenter import Presenter, PresenterError
from schematalk.schemas.enums import Domain, Profile, StageExpansion

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


# ============================================================
# Helpers
# ============================================================
def _parse_number(name: str, value: Optional[str]) -> Optional[float]:
    """Unparseable numbers are ignored (the default value is kept)"""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring --{name}={value!r}: not a number")
        return None


def describe_error(error: Exception) -> str:
    """One readable line, no traceback"""
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or error.title
        return f"{location}: {first['msg']}"
    text = str(error)
    return text.splitlines()[0] if text else type(error).__name__


def presenter_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Presenter options from the shared flags (only what was set)"""
    overrides: Dict[str, Any] = {"non_interactive_stages": StageExpansion(args.stages)}
    if args.batch:
        overrides["keyboard_navigation"] = False
    if args.no_clear:
        overrides["clear_on_render"] = False
    return overrides


def _play(presenter: Presenter) -> int:
    asyncio.run(presenter.run())
    return EXIT_OK


# ============================================================
# Commands
# ============================================================
def cmd_ski(args: argparse.Namespace) -> int:
    from schematalk.demos.ski import build_ski_presenter

    overrides = {
        "temperature": _parse_number("temperature", args.temperature),
        "wind": _parse_number("wind", args.wind),
        "visibility": args.visibility,
    }
    profile = Profile.USA if args.usa else Profile.INTL

    async def run() -> None:
        presenter = await build_ski_presenter(profile, overrides, **presenter_overrides(args))
        await presenter.run()

    asyncio.run(run())
    return EXIT_OK


def cmd_shipping(args: argparse.Namespace) -> int:
    from schematalk.demos.shipping import build_shipping_presenter

    async def run() -> None:
        presenter = await build_shipping_presenter(args.prompt, **presenter_overrides(args))
        await presenter.run()

    asyncio.run(run())
    return EXIT_OK


def cmd_compare(args: argparse.Namespace) -> int:
    from schematalk.demos.comparison import build_comparison_presenter

    return _play(build_comparison_presenter(Domain(args.domain), **presenter_overrides(args)))


def cmd_registry(args: argparse.Namespace) -> int:
    from schematalk.demos.registry import build_registry_presenter

    return _play(build_registry_presenter(**presenter_overrides(args)))


def cmd_deck(args: argparse.Namespace) -> int:
    from schematalk.loader import load_presenter

    return _play(load_presenter(args.deck, base_path=args.decks_path, **presenter_overrides(args)))


def cmd_decks(args: argparse.Namespace) -> int:
    from schematalk.loader import DeckLoader

    loader = DeckLoader(args.decks_path)
    decks = loader.list_decks()
    if not decks:
        print(f"No decks found in {loader.base_path}")
        return EXIT_OK
    for deck_id in decks:
        print(deck_id)
    return EXIT_OK


# ============================================================
# Parser
# ============================================================
def build_parser() -> argparse.ArgumentParser:
    from schematalk.services.structurizer import DEFAULT_PROMPT

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--batch", action="store_true", help="Print every frame without reading keys")
    common.add_argument(
        "--stages",
        choices=[e.value for e in StageExpansion],
        default=config.DEFAULT_STAGE_EXPANSION,
        help="Batch playback: every stage, or only the final stage of each slide",
    )
    common.add_argument("--no-clear", action="store_true", help="Do not clear the screen between frames")
    common.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (stderr)")
    common.add_argument("--decks-path", default=None, help="Directory with deck files")

    parser = argparse.ArgumentParser(
        prog="schematalk",
        description="Terminal slide presenter with staged reveals, plus schema/metadata demo talks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schematalk ski --usa --temperature 30    Ski talk, imperial profile
  schematalk shipping --batch              Shipping demo, all frames at once
  schematalk compare --domain medicine     Schema ladder for prescriptions
  schematalk registry --batch             Schema registry and prompt walk-through
  schematalk deck why_metadata             Play a bundled YAML deck
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ski
    sub = subparsers.add_parser("ski", parents=[common], help="Metadata with AI: ski conditions talk")
    sub.add_argument("--usa", action="store_true", help="Normalize to °F and mph")
    sub.add_argument("--temperature", help="Override MCP temperature")
    sub.add_argument("--wind", help="Override MCP wind speed")
    sub.add_argument("--visibility", help="Override MCP visibility")
    sub.set_defaults(func=cmd_ski)

    # shipping
    sub = subparsers.add_parser("shipping", parents=[common], help="Shipping quote: bad vs good flow")
    sub.add_argument("--prompt", default=DEFAULT_PROMPT, help="Shipping request in plain text")
    sub.set_defaults(func=cmd_shipping)

    # compare
    sub = subparsers.add_parser("compare", parents=[common], help="Compare all schema configurations")
    sub.add_argument("--domain", choices=[d.value for d in Domain], default=Domain.SKI.value)
    sub.set_defaults(func=cmd_compare)

    # registry
    sub = subparsers.add_parser(
        "registry", parents=[common], help="Schema registry, prompt building, validation and codec"
    )
    sub.set_defaults(func=cmd_registry)

    # deck
    sub = subparsers.add_parser("deck", parents=[common], help="Play a YAML deck by id or path")
    sub.add_argument("deck", help="Deck id (under the decks directory) or path to a .yaml file")
    sub.set_defaults(func=cmd_deck)

    # decks
    sub = subparsers.add_parser("decks", parents=[common], help="List available decks")
    sub.set_defaults(func=cmd_decks)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format=config.LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        return args.func(args)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except (PresenterError, ValidationError, FileNotFoundError) as e:
        print(f"schematalk: error: {describe_error(e)}", file=sys.stderr)
        logger.debug("command failed", exc_info=True)
        return EXIT_ERROR
    except Exception as e:
        # renderer failures from demo content
        print(f"schematalk: error: {type(e).__name__}: {describe_error(e)}", file=sys.stderr)
        logger.debug("command failed", exc_info=True)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
