"""
Command line front end for the blog API.

Usage:
    blog-api signup --name "Jane Smith" --email jane@example.com
    blog-api login --email jane@example.com
    blog-api blogs --search react --tags react,javascript --page 2
    blog-api show <blog-id>
    blog-api post --title "Hello" --content "First post" --tags intro --image cover.png
    blog-api edit <blog-id> --title "Hello again" --content "Updated"
    blog-api delete <blog-id>
    blog-api mine
    blog-api comment <blog-id> "Nice post!"
    blog-api logout

Environment Variables:
    API_BASE_URL: API origin (default: http://127.0.0.1:5001)
    CLIENT_SESSION_FILE: Where the login session is kept
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from collections.abc import Awaitable, Callable
from getpass import getpass
from sys import exit as sys_exit
from typing import Any

from httpx import HTTPError
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from blogapp.clients import ApiError, BlogApiClient, SessionExpiredError

console = Console()

type Command = Callable[[BlogApiClient, Namespace], Awaitable[None]]


def _tags(raw: str | None) -> list[str]:
    return [tag.strip() for tag in raw.split(",") if tag.strip()] if raw else []


def _blog_table(blogs: list[dict[str, Any]], title: str) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Tags", style="cyan")
    table.add_column("Views", justify="right")
    table.add_column("Created")
    for blog in blogs:
        owner = blog.get("user") or {}
        table.add_row(
            blog["id"],
            blog["title"],
            owner.get("name", "-"),
            ", ".join(blog.get("tags", [])),
            str(blog.get("viewCount", 0)),
            blog["createdAt"][:10],
        )
    return table


def _require_login(api: BlogApiClient) -> None:
    if not api.store.token:
        raise SessionExpiredError("You are not logged in. Run `blog-api login` first.")


async def cmd_signup(api: BlogApiClient, args: Namespace) -> None:
    password = args.password or getpass("Password: ")
    body = await api.signup(args.name, args.email, password)
    console.print(f"[green]✅ {body['message']}[/green] Welcome, {body['user']['name']}!")


async def cmd_login(api: BlogApiClient, args: Namespace) -> None:
    password = args.password or getpass("Password: ")
    body = await api.login(args.email, password)
    console.print(f"[green]✅ {body['message']}[/green] Signed in as {body['user']['email']}")


async def cmd_logout(api: BlogApiClient, args: Namespace) -> None:
    api.logout()
    console.print("Logged out.")


async def cmd_blogs(api: BlogApiClient, args: Namespace) -> None:
    body = await api.list_blogs(
        page=args.page,
        limit=args.limit,
        search=args.search,
        tags=_tags(args.tags),
    )
    pagination = body["pagination"]
    if not body["blogs"]:
        console.print("[yellow]No blogs found.[/yellow]")
        return
    console.print(
        _blog_table(
            body["blogs"],
            f"Blogs: page {pagination['currentPage']} of {pagination['totalPages']} "
            f"({pagination['totalBlogs']} total)",
        ),
    )


async def cmd_show(api: BlogApiClient, args: Namespace) -> None:
    blog = (await api.get_blog(args.blog_id))["blog"]
    owner = blog.get("user") or {}
    subtitle = f"by {owner.get('name', 'unknown')} · {blog['viewCount']} views"
    if blog.get("tags"):
        subtitle += " · " + " ".join(f"#{tag}" for tag in blog["tags"])
    console.print(Panel(Markdown(blog["content"]), title=blog["title"], subtitle=subtitle))
    if blog.get("img"):
        console.print(f"🖼️  {blog['img']}")

    comments = await api.list_comments(args.blog_id, limit=args.comments)
    total = comments["pagination"]["totalComments"]
    console.print(f"\n[bold]💬 {total} comment(s)[/bold]")
    for comment in comments["comments"]:
        author = (comment.get("author") or {}).get("name", "unknown")
        console.print(f"[cyan]{author}[/cyan] [dim]{comment['createdAt'][:16]}[/dim]")
        console.print(f"  {comment['content']}")


async def cmd_post(api: BlogApiClient, args: Namespace) -> None:
    _require_login(api)
    img = None
    if args.image:
        upload = await api.upload_image(args.image)
        img = upload["imageUrl"]
        console.print(f"🖼️  {upload['message']}")
    blog = (await api.create_blog(args.title, args.content, _tags(args.tags), img))["blog"]
    console.print(f"[green]✅ Published[/green] {blog['title']} ({blog['id']})")


async def cmd_edit(api: BlogApiClient, args: Namespace) -> None:
    _require_login(api)
    fields: dict[str, Any] = {"title": args.title, "content": args.content}
    if args.tags is not None:
        fields["tags"] = _tags(args.tags)
    if args.image:
        fields["img"] = (await api.upload_image(args.image))["imageUrl"]
    elif args.remove_image:
        fields["img"] = None
    blog = (await api.update_blog(args.blog_id, **fields))["blog"]
    console.print(f"[green]✅ Updated[/green] {blog['title']}")


async def cmd_delete(api: BlogApiClient, args: Namespace) -> None:
    _require_login(api)
    body = await api.delete_blog(args.blog_id)
    console.print(f"[green]✅ {body['message']}[/green]")


async def cmd_mine(api: BlogApiClient, args: Namespace) -> None:
    _require_login(api)
    me = api.store.user or {}
    user = (await api.get_user_blogs(me["id"]))["user"]
    if not user["blogs"]:
        console.print("[yellow]You have not written any blogs yet.[/yellow]")
        return
    console.print(_blog_table(user["blogs"], f"Blogs by {user['name']}"))


async def cmd_comment(api: BlogApiClient, args: Namespace) -> None:
    _require_login(api)
    body = await api.add_comment(args.blog_id, args.content)
    console.print(f"[green]✅ {body['message']}[/green]")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="blog-api",
        description="Read and write blogs from the terminal.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--api-url", help="API origin (overrides API_BASE_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    signup = sub.add_parser("signup", help="Create an account")
    signup.add_argument("--name", required=True)
    signup.add_argument("--email", required=True)
    signup.add_argument("--password", help="Prompted when omitted")
    signup.set_defaults(handler=cmd_signup)

    login = sub.add_parser("login", help="Sign in")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted when omitted")
    login.set_defaults(handler=cmd_login)

    sub.add_parser("logout", help="Forget the saved session").set_defaults(handler=cmd_logout)

    blogs = sub.add_parser("blogs", help="List blogs")
    blogs.add_argument("--page", type=int, default=1)
    blogs.add_argument("--limit", type=int, default=10)
    blogs.add_argument("--search")
    blogs.add_argument("--tags", help="Comma-separated tags")
    blogs.set_defaults(handler=cmd_blogs)

    show = sub.add_parser("show", help="Read a blog and its comments")
    show.add_argument("blog_id")
    show.add_argument("--comments", type=int, default=10, help="Comments to display")
    show.set_defaults(handler=cmd_show)

    post = sub.add_parser("post", help="Publish a blog")
    post.add_argument("--title", required=True)
    post.add_argument("--content", required=True)
    post.add_argument("--tags", help="Comma-separated tags")
    post.add_argument("--image", help="Image file to upload as the cover")
    post.set_defaults(handler=cmd_post)

    edit = sub.add_parser("edit", help="Edit one of your blogs")
    edit.add_argument("blog_id")
    edit.add_argument("--title", required=True)
    edit.add_argument("--content", required=True)
    edit.add_argument("--tags", help="Comma-separated tags; replaces existing tags")
    image = edit.add_mutually_exclusive_group()
    image.add_argument("--image", help="New cover image file")
    image.add_argument("--remove-image", action="store_true")
    edit.set_defaults(handler=cmd_edit)

    delete = sub.add_parser("delete", help="Delete one of your blogs")
    delete.add_argument("blog_id")
    delete.set_defaults(handler=cmd_delete)

    sub.add_parser("mine", help="List your blogs").set_defaults(handler=cmd_mine)

    comment = sub.add_parser("comment", help="Comment on a blog")
    comment.add_argument("blog_id")
    comment.add_argument("content")
    comment.set_defaults(handler=cmd_comment)

    return parser


async def run_command(args: Namespace) -> int:
    handler: Command = args.handler
    async with BlogApiClient(base_url=args.api_url) as api:
        try:
            await handler(api, args)
        except SessionExpiredError as e:
            console.print(f"[red]🔒 {e.detail}[/red]")
            return 1
        except ApiError as e:
            console.print(f"[red]❌ {e.detail}[/red]")
            return 1
        except HTTPError as e:
            console.print(f"[red]❌ Cannot reach the API: {e}[/red]")
            return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    sys_exit(asyncio_run(run_command(args)))


if __name__ == "__main__":
    main()
