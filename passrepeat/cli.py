"""CLI for passrepeat: inspect repeat runs in a password and manage settings."""

import argparse
import logging
import sys

from rich import print, print_json
from rich.markup import escape
from rich.logging import RichHandler
from rich.table import Table

from .config import check_length, int_setting, load_config, parse_setting, save_config
from .errors import PassRepeatError
from .matching import load_wordlist, repeat_match


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])


def cmd_scan(args):
    _setup_logging(args.verbose)
    cfg = load_config()
    pw = args.password
    check_length(pw, cfg)
    ranked = load_wordlist(cfg.get("wordlist_path"))
    matches = repeat_match(pw, ranked_dictionary=ranked, max_depth=int_setting(cfg, "max_depth"))

    if args.json:
        print_json(data=[m.to_dict() for m in matches])
        return
    if not matches:
        print("[yellow]No repeated runs found.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("i", width=4)
    table.add_column("j", width=4)
    table.add_column("Token")
    table.add_column("Base token")
    table.add_column("Count", justify="right")
    table.add_column("Base guesses", justify="right")
    for m in matches:
        table.add_row(str(m.i), str(m.j), escape(m.token), escape(m.base_token), str(m.repeat_count), str(m.base_guesses))
    print(table)


def cmd_config_show(args):
    cfg = load_config()
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in cfg.items():
        table.add_row(key, str(value))
    print(table)


def cmd_config_set(args):
    value = parse_setting(args.key, args.value)
    cfg = load_config()
    cfg[args.key] = value
    save_config(cfg)
    print(f"[green]Saved {args.key} = {cfg[args.key]}[/green]")


def main(argv=None):
    parser = argparse.ArgumentParser(prog="passrepeat")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sc = sub.add_parser("scan", help="List repeated runs in a password")
    sc.add_argument("password", type=str, help="Password to inspect (wrap in quotes)")
    sc.add_argument("--json", action="store_true", help="Print the raw match records as JSON")
    sc.add_argument("--verbose", "-v", action="store_true", help="Log each accepted run")
    sc.set_defaults(func=cmd_scan)

    c = sub.add_parser("config", help="Show or change settings")
    csub = c.add_subparsers(dest="ccmd", required=True)

    c_show = csub.add_parser("show", help="Show current settings")
    c_show.set_defaults(func=cmd_config_show)

    c_set = csub.add_parser("set", help="Change one setting")
    c_set.add_argument("key", type=str, help="Setting name")
    c_set.add_argument("value", type=str, help="New value ('none' to reset to unset)")
    c_set.set_defaults(func=cmd_config_set)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (PassRepeatError, OSError) as e:
        print(f"[red]{escape(str(e))}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
