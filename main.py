"""
Main entry point for the contact store.

Runs single tool calls, an interactive tool shell and the store maintenance
commands (stats, archive, restore, reset).

File: main.py
Created: 2026-10-18
Last Modified: 2026-10-19
"""

import argparse
import asyncio
import json
import sys

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt, Confirm
from rich.table import Table
from rich import box

from crm.config import Settings, setup_logging
from crm.database import (
    archive_database,
    get_database_stats,
    init_database,
    list_archives,
    open_database,
    reset_database,
    restore_from_archive,
)
from crm.errors import CRMError
from crm.tools import TOOLS, ToolContext, ToolResult, call_tool

console = Console()


def show_tools():
    """Display the available tools."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("Tool", style="cyan")
    table.add_column("Description", style="dim")

    for name, entry in TOOLS.items():
        table.add_row(name, entry.description)

    console.print(table)


def print_result(result: ToolResult):
    style = "green" if result.ok else "red"
    console.print(f"[{style}]{result.message}[/]")
    if result.data is not None:
        console.print_json(json.dumps(result.data, default=str))


def _parse_arguments(raw: str) -> dict:
    raw = raw.strip()
    if not raw:
        return {}
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise ValueError("Tool arguments must be a JSON object")
    return value


async def run_init(settings: Settings):
    async with open_database(settings.db_path) as conn:
        barrier = await init_database(conn)
    console.print(f"[green]Database ready:[/] {settings.db_path}")
    if barrier.needed:
        console.print(f"[dim]Columns added: {', '.join(barrier.applied) or '-'}[/]")


async def run_call(settings: Settings, name: str, raw_args: str) -> int:
    try:
        arguments = _parse_arguments(raw_args)
    except ValueError as e:
        console.print(f"[red]Invalid arguments: {e}[/]")
        return 2

    async with open_database(settings.db_path) as conn:
        await init_database(conn)
        result = await call_tool(ToolContext(conn=conn, settings=settings), name, arguments)

    print_result(result)
    return 0 if result.ok else 1


async def run_shell(settings: Settings):
    """Interactive loop over one connection held for the whole session."""
    console.print()
    console.print(Panel.fit("[bold cyan]CRM[/] - Contacts, history and todos", border_style="cyan"))
    console.print(f"[dim]Database: {settings.db_path}[/]")

    async with open_database(settings.db_path) as conn:
        await init_database(conn)
        context = ToolContext(conn=conn, settings=settings)

        while True:
            console.print()
            show_tools()
            console.print()

            name = Prompt.ask("Select tool", choices=list(TOOLS.keys()) + ["q"], default="q")
            if name == "q":
                console.print("[dim]Goodbye![/]")
                break

            raw = Prompt.ask("Arguments (JSON object)", default="{}")
            try:
                arguments = _parse_arguments(raw)
            except ValueError as e:
                console.print(f"[red]Invalid arguments: {e}[/]")
                continue

            print_result(await call_tool(context, name, arguments))

            console.print()
            if not Confirm.ask("Continue?", default=True):
                console.print("[dim]Goodbye![/]")
                break


async def run_stats(settings: Settings):
    stats = await get_database_stats(settings.db_path)
    if stats is None:
        console.print("[dim]No database found[/]")
        return

    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Contacts", f"{stats.contacts:,}")
    table.add_row("Entries", f"{stats.entries:,}")
    table.add_row("Todos", f"{stats.todos:,}")
    table.add_row("Size", stats.size)
    console.print(table)


def run_archives(settings: Settings):
    archives = list_archives(settings.archive_dir)
    if not archives:
        console.print("[dim]No database archives found[/]")
        return

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("Archive", style="cyan")
    table.add_column("Created", style="white")
    table.add_column("Size", style="dim")
    for archive in archives:
        table.add_row(
            archive.name,
            archive.modified.strftime("%Y-%m-%d %H:%M:%S"),
            f"{archive.size_bytes / 1024:.2f} KB",
        )
    console.print(table)


async def run_reset(settings: Settings, reason, assume_yes: bool):
    if not assume_yes and not Confirm.ask(
        f"Archive and reset {settings.db_path}?", default=False
    ):
        console.print("[dim]Cancelled.[/]")
        return

    archive_path = await reset_database(settings.db_path, settings.archive_dir, reason)
    console.print("[green]Database reset complete![/]")
    if archive_path:
        console.print(f"[dim]Previous data archived to {archive_path}[/]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contact store with history, todos and CSV export")
    parser.add_argument("--db-path", help="SQLite store (overrides CRM_DB_PATH)")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("init", help="Create or upgrade the store schema")
    sub.add_parser("tools", help="List available tools")

    call = sub.add_parser("call", help="Run one tool")
    call.add_argument("tool", help="Tool name")
    call.add_argument("arguments", nargs="?", default="{}", help="Tool arguments as a JSON object")

    sub.add_parser("shell", help="Interactive tool shell (default)")
    sub.add_parser("stats", help="Show store statistics")

    archive = sub.add_parser("archive", help="Copy the store to a timestamped backup")
    archive.add_argument("reason", nargs="?")

    sub.add_parser("archives", help="List backups, most recent first")

    restore = sub.add_parser("restore", help="Restore the store from a backup")
    restore.add_argument("name", help="Archive file name")

    reset = sub.add_parser("reset", help="Archive the store and start with an empty one")
    reset.add_argument("reason", nargs="?")
    reset.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    return parser


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env(args.db_path)
    setup_logging(settings)

    try:
        if args.command == "init":
            await run_init(settings)
        elif args.command == "tools":
            show_tools()
        elif args.command == "call":
            return await run_call(settings, args.tool, args.arguments)
        elif args.command == "stats":
            await run_stats(settings)
        elif args.command == "archive":
            path = archive_database(settings.db_path, settings.archive_dir, args.reason)
            if path:
                console.print(f"[green]Database archived:[/] {path}")
            else:
                console.print("[dim]No existing database to archive[/]")
        elif args.command == "archives":
            run_archives(settings)
        elif args.command == "restore":
            restore_from_archive(settings.db_path, settings.archive_dir, args.name)
            console.print(f"[green]Database restored from {args.name}[/]")
            await run_stats(settings)
        elif args.command == "reset":
            await run_reset(settings, args.reason, args.yes)
        else:
            await run_shell(settings)
    except CRMError as e:
        console.print(f"[red]{e}[/]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
