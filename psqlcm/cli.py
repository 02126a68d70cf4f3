"""Command line entry point for psqlcm."""

from __future__ import annotations

import argparse
import getpass
import logging
from typing import Sequence

from .config import Settings, StoreConfig, load_settings
from .connectivity import ConnectivityError, ping
from .errors import StoreError
from .manager import ConnectionStore, generate_profile_name
from .prompts import PromptError, collect_profile, confirm, prompt_name

LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--cache-dir", help="Location to store connections")

    parser = argparse.ArgumentParser(prog="psqlcm", description="psql connection manager")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log store operations")
    commands = parser.add_subparsers(dest="command", required=True)

    new = commands.add_parser("new", aliases=["login"], parents=[common], help="New connection")
    new.add_argument("--name", help="Connection name (prompted for when omitted)")
    new.add_argument("--not-current", action="store_true", help="Do not set this new connection as current")
    new.add_argument("--no-test", action="store_true", help="Skip the connection test")
    new.set_defaults(handler=_new)

    ls = commands.add_parser("list", aliases=["ls"], parents=[common], help="List all available connections")
    ls.set_defaults(handler=_list)

    show = commands.add_parser("show", parents=[common], help="Show a connection string")
    show.add_argument("name", nargs="?")
    show.set_defaults(handler=_show)

    delete = commands.add_parser(
        "delete", aliases=["del", "remove"], parents=[common], help="Remove a cached connection"
    )
    delete.add_argument("name")
    delete.set_defaults(handler=_delete)

    current = commands.add_parser("set-current", parents=[common], help="Set a connection as current")
    current.add_argument("name")
    current.set_defaults(handler=_set_current)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    settings = load_settings()
    config = StoreConfig.from_env(directory=args.cache_dir, settings=settings)
    store = ConnectionStore(config)
    try:
        args.handler(store, args, settings)
    except (StoreError, PromptError, ConnectivityError) as exc:
        print(exc)
        return 1
    return 0


def _new(store: ConnectionStore, args: argparse.Namespace, settings: Settings) -> None:
    profile = collect_profile(settings.defaults, read_line=_read_line, read_secret=_read_secret)
    name = args.name or prompt_name(generate_profile_name(), read_line=_read_line)
    if not args.no_test and confirm("Test connection?", read_line=_read_line):
        try:
            latency_ms = ping(profile)
        except ConnectivityError as exc:
            print(f"Error: {exc}")
            if not confirm("Save connection?", read_line=_read_line):
                raise
        else:
            print(f"Connection OK ({latency_ms} ms)")
    store.create_profile(profile, name, set_current=not args.not_current)
    print("Connection saved!")


def _list(store: ConnectionStore, args: argparse.Namespace, settings: Settings) -> None:
    for entry in store.list_profiles():
        print(entry)


def _show(store: ConnectionStore, args: argparse.Namespace, settings: Settings) -> None:
    print(store.show(args.name))


def _delete(store: ConnectionStore, args: argparse.Namespace, settings: Settings) -> None:
    store.delete_profile(args.name)
    print(f"Connection {args.name!r} deleted")


def _set_current(store: ConnectionStore, args: argparse.Namespace, settings: Settings) -> None:
    store.set_current(args.name)


def _read_line(prompt: str) -> str:
    try:
        return input(prompt)
    except (EOFError, KeyboardInterrupt) as exc:
        raise PromptError("input aborted") from exc


def _read_secret(prompt: str) -> str:
    try:
        return getpass.getpass(prompt)
    except (EOFError, KeyboardInterrupt) as exc:
        raise PromptError("input aborted") from exc


__all__ = ["build_parser", "main"]
