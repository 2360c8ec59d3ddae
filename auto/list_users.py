#!/usr/bin/env python3
"""
List Users Script.

Prints every registered user with the number of blogs they own.

Usage:
    python auto/list_users.py
"""

from asyncio import run as asyncio_run
from pathlib import Path
from sys import path as sys_path

from rich.console import Console
from rich.table import Table

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys_path.insert(0, str(project_root))

from blogapp.db.database import close_db, transaction  # noqa: E402
from blogapp.repositories import UserRepository  # noqa: E402


async def main() -> None:
    console = Console()
    try:
        async with transaction() as session:
            users = await UserRepository(session).get_all()
    finally:
        await close_db()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title=f"Users ({len(users)})")
    table.add_column("Name", style="bold")
    table.add_column("Email")
    table.add_column("ID", style="dim")
    table.add_column("Blogs", justify="right")
    table.add_column("Joined")
    for user in users:
        table.add_row(
            user.name,
            user.email,
            str(user.id),
            str(len(user.blog_ids or [])),
            user.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


if __name__ == "__main__":
    asyncio_run(main())
