"""Command-line interface: log in, punch the clock and inspect clockings and balances."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime

from rich.console import Console
from rich.markup import escape

from rhclock.api import ApiError, PeriodError, RhClient
from rhclock.store import Store, StoreError, User
from rhclock.timeutil import format_duration, format_time

VERSION = "1.0.1"

_DASHES = "[bright_black]--------[/bright_black]"
_USER_NOT_FOUND = "user not found, please run 'clock login'"
_ZERO_MOMENT = datetime(1, 1, 1)


@dataclass
class _Context:
    store: Store
    client: RhClient
    out: Console
    err: Console


def color_direction(direction: str) -> str:
    """Markup for a clocking direction: green for entries, red for anything else."""
    if direction == "entry":
        return "[green]🟢 Entry[/green]"
    return "[red]🔴 Exit[/red]"


def color_summary(duration: int) -> str:
    """Markup for a balance in milliseconds: bold green above zero, bold red below."""
    text = format_duration(duration)
    if duration > 0:
        return f"[bold green]{text}[/bold green]"
    if duration == 0:
        return text
    return f"[bold red]{text}[/bold red]"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every subcommand and its defaults."""
    today = date.today()
    parser = argparse.ArgumentParser(
        prog="clock",
        description=(
            "Clock is a tool to help you manage your time. "
            "It is a simple tool to help you track your time and "
            "help you manage your time. Sync to MeuRh."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s version {VERSION}")
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command", metavar="command")

    list_parser = commands.add_parser(
        "list",
        aliases=["ls"],
        help="List all clockings for an range of dates",
        description=(
            "List all clockings for an range of dates. Default range is today. "
            "Example: clock list --start 2025-01-01 --end 2025-01-31"
        ),
    )
    list_parser.add_argument("-s", "--start", default=today.isoformat(), help="Start date (YYYY-MM-DD)")
    list_parser.add_argument("-e", "--end", default=today.isoformat(), help="End date (YYYY-MM-DD)")
    list_parser.set_defaults(handler=_cmd_list)

    login_parser = commands.add_parser("login", help="Login to the system", description="Login to the system.")
    login_parser.add_argument("-u", "--username", default="", help="Username")
    login_parser.add_argument("-p", "--password", default="", help="Password")
    login_parser.add_argument("-n", "--name", default="", help="Name")
    login_commands = login_parser.add_subparsers(dest="login_command", metavar="command")
    login_commands.add_parser(
        "info", help="Get the current user logged info", description="Get the current user info."
    )
    login_parser.set_defaults(handler=_cmd_login)

    punch_parser = commands.add_parser(
        "punch",
        aliases=["p"],
        help="Punch enter or exit",
        description="Punch enter or exit. Register a clocking with the current time.",
    )
    punch_parser.set_defaults(handler=_cmd_punch)

    summary_parser = commands.add_parser(
        "summary", aliases=["s"], help="Get the balance summary between two dates"
    )
    summary_parser.add_argument(
        "-s", "--start", default=today.replace(day=1).isoformat(), help="Start date (YYYY-MM-DD)"
    )
    summary_parser.add_argument("-e", "--end", default=today.isoformat(), help="End date (YYYY-MM-DD)")
    summary_parser.set_defaults(handler=_cmd_summary)

    time_parser = commands.add_parser("time", help="Get the current time", description="Get the current time.")
    time_parser.set_defaults(handler=_cmd_time)

    return parser


@contextmanager
def _spinner(ctx: _Context, message: str) -> Iterator[None]:
    with ctx.err.status(message, spinner="dots", spinner_style="blue"):
        yield


def _credentials(store: Store) -> tuple[User, str]:
    try:
        user = store.get_user()
    except StoreError:
        user = None
    try:
        token = store.get_token()
    except StoreError:
        token = None
    return user or User(), token or ""


def _logged_user(store: Store) -> User | None:
    user, _ = _credentials(store)
    return user if user.username else None


def _moment(day: str, millis: int) -> datetime:
    try:
        return format_time(day, millis)[1]
    except ValueError:
        return _ZERO_MOMENT


def _moment_text(day: str, millis: int) -> str:
    try:
        return format_time(day, millis)[0]
    except ValueError:
        return ""


def _date_text(moment: datetime) -> str:
    return f"{moment.day:02d}/{moment.month:02d}/{moment.year:04d}"


def _print_period_error(ctx: _Context, exc: PeriodError) -> None:
    ctx.out.print("❌ ", f"[red]{escape(str(exc))}[/red]")


def _cmd_list(args: argparse.Namespace, ctx: _Context) -> int:
    start, end = args.start, args.end
    if not end and start:
        end = start
    if not start and end:
        start = end
    user, token = _credentials(ctx.store)

    try:
        with _spinner(ctx, "Requesting clockings..."):
            period = ctx.client.get_clockings(user, token, start, end)
    except PeriodError as exc:
        _print_period_error(ctx, exc)
        return 0
    except ApiError as exc:
        ctx.out.print(escape(str(exc)))
        return 0

    if not period.clockings:
        ctx.out.print("No clockings found")
        return 0

    previous_day: str | None = None
    for clocking in period.clockings:
        moment = _moment(clocking.date, clocking.hour)
        if previous_day is not None and previous_day != clocking.date:
            ctx.out.print(_DASHES)
        ctx.out.print(
            _date_text(moment),
            _DASHES,
            "🕑",
            f"[bold cyan]{moment:%H:%M:%S}[/bold cyan]",
            _DASHES,
            color_direction(clocking.direction),
        )
        previous_day = clocking.date
    return 0


def _cmd_login(args: argparse.Namespace, ctx: _Context) -> int:
    if args.login_command == "info":
        return _cmd_info(args, ctx)

    user = _logged_user(ctx.store)
    if user is not None:
        ctx.out.print("User already logged in with name", escape(user.name))
        return 0

    missing = [flag for flag in ("password", "username") if not getattr(args, flag)]
    if missing:
        names = ", ".join(f'"{flag}"' for flag in missing)
        ctx.err.print(f"Error: required flag(s) {names} not set")
        return 1

    name = args.name or args.username
    try:
        token = ctx.client.login(args.username, args.password)
    except ApiError as exc:
        ctx.out.print(escape(str(exc)))
        token = ""

    ctx.store.save_token(token)
    ctx.store.save_user(User(name=name, username=args.username, password=args.password))
    ctx.out.print("User created")
    ctx.out.print("Login successful with name", escape(name))
    return 0


def _cmd_info(args: argparse.Namespace, ctx: _Context) -> int:
    user = _logged_user(ctx.store)
    if user is None:
        ctx.out.print(_USER_NOT_FOUND)
        return 1
    ctx.out.print(f"Name: {escape(user.name)}; Username: {escape(user.username)}")
    return 0


def _cmd_punch(args: argparse.Namespace, ctx: _Context) -> int:
    user, token = _credentials(ctx.store)
    try:
        with _spinner(ctx, "Requesting clocking..."):
            current = ctx.client.request_clocking(user, token)
    except ApiError as exc:
        ctx.out.print(escape(str(exc)))
        current = None

    if current is None or not current.actual_date:
        ctx.out.print("Error getting time")
        return 1

    text = _moment_text(current.actual_date, current.actual_time)
    ctx.out.print("Clocking registered: 🕑", f"[bold green]{text}[/bold green]")
    return 0


def _cmd_summary(args: argparse.Namespace, ctx: _Context) -> int:
    user, token = _credentials(ctx.store)
    if not user.username:
        ctx.out.print("User not found, please run 'clock login'")
        return 1

    summary = None
    try:
        with _spinner(ctx, "Requesting balance summary..."):
            summary = ctx.client.get_balance_summary(user, token, args.start, args.end)
    except PeriodError as exc:
        _print_period_error(ctx, exc)
    except ApiError as exc:
        ctx.out.print(escape(str(exc)))

    if summary is None:
        ctx.out.print("Error getting balance summary")
        return 1

    rule = "[bright_black]" + "-" * 40 + "[/bright_black]"
    ctx.out.print(rule)
    ctx.out.print(
        "Balance Summary Period: ",
        f"[cyan]{escape(args.start)}[/cyan]",
        " to ",
        f"[cyan]{escape(args.end)}[/cyan]",
    )
    ctx.out.print(rule)
    ctx.out.print("Previous Balance: ", " " * 12, color_summary(summary.previous))
    ctx.out.print("Current Balance: ", " " * 13, color_summary(summary.current))
    ctx.out.print("Next Balance: ", " " * 16, color_summary(summary.next))
    return 0


def _cmd_time(args: argparse.Namespace, ctx: _Context) -> int:
    user = _logged_user(ctx.store)
    if user is None:
        ctx.out.print(_USER_NOT_FOUND)
        return 1
    _, token = _credentials(ctx.store)

    try:
        with _spinner(ctx, "Getting time..."):
            current = ctx.client.get_time(user, token)
    except ApiError as exc:
        ctx.out.print(escape(str(exc)))
        current = None

    if current is None or not current.actual_date:
        ctx.out.print("error getting time")
        return 1

    text = _moment_text(current.actual_date, current.actual_time)
    ctx.out.print("Actual time: 🕑", f"[bold green]{text}[/bold green]")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``clock`` command and return its exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    handler: Callable[[argparse.Namespace, _Context], int] | None = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0

    out = Console(highlight=False, emoji=False, soft_wrap=True)
    err = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
    try:
        store = Store()
    except StoreError as exc:
        err.print(escape(str(exc)))
        return 1
    with store:
        return handler(args, _Context(store=store, client=RhClient(), out=out, err=err))


if __name__ == "__main__":
    sys.exit(main())