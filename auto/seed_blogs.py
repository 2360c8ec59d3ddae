#!/usr/bin/env python3
"""
Seed Demo Blogs Script.

Creates demo users and blogs so the API has something to show. Blog ids are
appended to each owner's blog list exactly as the API does.

Usage:
    python auto/seed_blogs.py
    python auto/seed_blogs.py --fresh
    python auto/seed_blogs.py --password Secret123 --blogs-per-user 5

Environment Variables:
    DATABASE_URL: Target database (see .env.example)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from pathlib import Path
from sys import exit as sys_exit
from sys import path as sys_path

from rich.console import Console
from sqlalchemy import delete

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys_path.insert(0, str(project_root))

from blogapp.db.database import close_db, init_db, transaction  # noqa: E402
from blogapp.managers.password_manager import hash_password  # noqa: E402
from blogapp.models import BlogDB, CommentDB, UserDB  # noqa: E402
from blogapp.repositories import BlogRepository, CommentRepository, UserRepository  # noqa: E402

console = Console()


@dataclass(frozen=True)
class DemoUser:
    name: str
    email: str


@dataclass(frozen=True)
class DemoBlog:
    title: str
    content: str
    tags: tuple[str, ...]


DEMO_USERS = (
    DemoUser("Jane Smith", "jane.smith@example.com"),
    DemoUser("Ravi Kumar", "ravi.kumar@example.com"),
    DemoUser("Ana Lopez", "ana.lopez@example.com"),
)

DEMO_BLOGS = (
    DemoBlog(
        "Getting Started with React",
        "React is a powerful JavaScript library for building user interfaces.\n\n"
        "Start with components, props and state, then reach for hooks.",
        ("react", "javascript", "frontend"),
    ),
    DemoBlog(
        "Async Python in Practice",
        "asyncio lets one thread juggle thousands of sockets. "
        "Here is how to structure a service around it.",
        ("python", "asyncio", "backend"),
    ),
    DemoBlog(
        "PostgreSQL Full-Text Search",
        "to_tsvector and a GIN index give you fast search without another service.",
        ("postgresql", "search", "backend"),
    ),
    DemoBlog(
        "Designing REST Pagination",
        "Page and limit are simple; return totals and next/prev flags so clients stay dumb.",
        ("api", "design"),
    ),
    DemoBlog(
        "CSS Grid for Layouts",
        "Grid handles two-dimensional layouts that flexbox makes awkward.",
        ("css", "frontend"),
    ),
    DemoBlog(
        "Writing Good Commit Messages",
        "Say what the change does in plain words before how it does it.",
        ("git", "workflow"),
    ),
)

DEMO_COMMENTS = (
    "Great write-up, thanks for sharing!",
    "This cleared up a lot for me.",
    "Would love a follow-up on this topic.",
)


def parse_args() -> Namespace:
    parser = ArgumentParser(
        description="Seed demo users, blogs and comments.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--fresh",
        action="store_true",
        help="Delete all users, blogs and comments first",
    )
    parser.add_argument("--password", default="password123", help="Password for demo users")
    parser.add_argument(
        "--blogs-per-user",
        type=int,
        default=2,
        help="Blogs to create for each demo user",
    )
    return parser.parse_args()


async def clear_data() -> None:
    async with transaction() as session:
        await session.execute(delete(CommentDB))
        await session.execute(delete(BlogDB))
        await session.execute(delete(UserDB))
    console.print("[yellow]🧹 Removed existing users, blogs and comments[/yellow]")


async def seed(password: str, blogs_per_user: int) -> tuple[int, int, int]:
    """
    Create demo data.

    Returns
    -------
    tuple[int, int, int]
        Numbers of users, blogs and comments created.
    """
    password_hash = await hash_password(password)
    created_users = created_blogs = created_comments = 0

    async with transaction() as session:
        users = UserRepository(session)
        blogs = BlogRepository(session)
        comments = CommentRepository(session)

        owners: list[UserDB] = []
        for demo in DEMO_USERS:
            user = await users.get_by_email(demo.email)
            if user is None:
                user = await users.create(demo.name, demo.email, password_hash)
                created_users += 1
            owners.append(user)

        for index, owner in enumerate(owners):
            for offset in range(blogs_per_user):
                demo_blog = DEMO_BLOGS[(index * blogs_per_user + offset) % len(DEMO_BLOGS)]
                blog = await blogs.create(
                    BlogDB(
                        user_id=owner.id,
                        title=demo_blog.title,
                        content=demo_blog.content,
                        tags=list(demo_blog.tags),
                    ),
                )
                await users.add_blog(owner.id, blog.id)
                created_blogs += 1

                commenter = owners[(index + 1) % len(owners)]
                await comments.create(
                    DEMO_COMMENTS[created_blogs % len(DEMO_COMMENTS)],
                    commenter.id,
                    blog.id,
                )
                created_comments += 1

    return created_users, created_blogs, created_comments


async def main() -> int:
    args = parse_args()
    try:
        await init_db()
        if args.fresh:
            await clear_data()
        users, blogs, comments = await seed(args.password, args.blogs_per_user)
    except Exception as e:  # noqa: BLE001
        console.print(f"[red]❌ Seeding failed: {e}[/red]")
        return 1
    finally:
        await close_db()

    console.print(
        f"[green]✅ Created {users} user(s), {blogs} blog(s) and {comments} comment(s)[/green]",
    )
    console.print(f"Demo users log in with password: [bold]{args.password}[/bold]")
    return 0


if __name__ == "__main__":
    sys_exit(asyncio_run(main()))
