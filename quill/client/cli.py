"""
Quill command-line client.

Usage:
    quill register alice alice@example.com
    quill login alice@example.com
    quill list --search alice --page 2
    quill show 3
    quill create "Hello World" --content-file post.md
    quill edit 3 --title "A better title"
    quill delete 3
    quill logout

Environment Variables:
    QUILL_API_URL: Server base URL (default: http://127.0.0.1:8000)
    QUILL_SESSION_FILE: Where the login token is kept (default: ~/.quill/session.json)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from collections.abc import Awaitable, Callable
from getpass import getpass
from os import environ
from pathlib import Path
from sys import exit as sys_exit
from sys import stdin
from typing import Any

from httpx import HTTPError
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from quill.client.api import DEFAULT_BASE_URL, ApiError, QuillClient
from quill.client.session import DEFAULT_SESSION_PATH, SessionContext

console = Console()
err_console = Console(stderr=True)

type Command = Callable[[QuillClient, Namespace], Awaitable[None]]


def read_password(args: Namespace) -> str:
    return args.password or getpass("Password: ")


def read_content(args: Namespace) -> str | None:
    """Post body from ``--content``, ``--content-file`` or ``-`` for stdin."""
    if args.content_file == "-":
        return stdin.read()
    if args.content_file:
        return Path(args.content_file).read_text(encoding="utf-8")
    return args.content


def render_post(post: dict[str, Any]) -> Panel:
    subtitle = f"#{post['id']} by {post['author']} at {post['createdAt']}"
    body = Markdown(post["content"])
    if image := post.get("imageURL"):
        subtitle += f"  [link={image}]image[/link]"
    return Panel(body, title=post["title"], subtitle=subtitle, expand=False)


def render_page(page: dict[str, Any]) -> Table:
    table = Table(
        title=f"Posts (page {page['page']} of {page['pages']}, {page['total']} total)",
    )
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Author", style="magenta")
    table.add_column("Created", style="dim")
    for post in page["posts"]:
        table.add_row(str(post["id"]), post["title"], post["author"], post["createdAt"])
    return table


async def cmd_register(client: QuillClient, args: Namespace) -> None:
    data = await client.register(args.username, args.email, read_password(args))
    console.print(f"[green]Registered and logged in as[/green] {data['username']}")


async def cmd_login(client: QuillClient, args: Namespace) -> None:
    data = await client.login(args.email, read_password(args))
    console.print(f"[green]Logged in as[/green] {data['username']}")


async def cmd_logout(client: QuillClient, args: Namespace) -> None:
    client.logout()
    console.print("Logged out")


async def cmd_whoami(client: QuillClient, args: Namespace) -> None:
    if client.session.is_authenticated:
        console.print(client.session.username)
    else:
        console.print("[yellow]Not logged in[/yellow]")


async def cmd_list(client: QuillClient, args: Namespace) -> None:
    page = await client.list_posts(search=args.search, page=args.page, limit=args.limit)
    if not page["posts"]:
        console.print("[yellow]No posts found[/yellow]")
        return
    console.print(render_page(page))


async def cmd_show(client: QuillClient, args: Namespace) -> None:
    console.print(render_post(await client.get_post(args.post_id)))


async def cmd_create(client: QuillClient, args: Namespace) -> None:
    content = read_content(args) or ""
    post = await client.create_post(args.title, content, image_url=args.image_url)
    console.print(f"[green]Created post[/green] #{post['id']}")


async def cmd_edit(client: QuillClient, args: Namespace) -> None:
    changes: dict[str, Any] = {}
    if args.title is not None:
        changes["title"] = args.title
    if (content := read_content(args)) is not None:
        changes["content"] = content
    if args.image_url is not None:
        changes["image_url"] = args.image_url
    if not changes:
        err_console.print("[yellow]Nothing to change[/yellow]")
        return
    post = await client.update_post(args.post_id, **changes)
    console.print(f"[green]Updated post[/green] #{post['id']}")


async def cmd_delete(client: QuillClient, args: Namespace) -> None:
    data = await client.delete_post(args.post_id)
    console.print(data.get("message", "Post deleted"))


def _add_content_args(parser: ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--content", help="Post body")
    group.add_argument("--content-file", help="Read the body from a file, '-' for stdin")
    parser.add_argument("--image-url", help="Cover image URL (empty string removes it)")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="quill",
        description=__doc__,
        formatter_class=RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--api-url",
        default=environ.get("QUILL_API_URL", DEFAULT_BASE_URL),
        help="Server base URL",
    )
    parser.add_argument(
        "--session-file",
        type=Path,
        default=Path(environ.get("QUILL_SESSION_FILE", DEFAULT_SESSION_PATH)),
        help="Where the login token is stored",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("register", help="Create an account")
    p.add_argument("username")
    p.add_argument("email")
    p.add_argument("--password", help="Prompted for when omitted")
    p.set_defaults(handler=cmd_register)

    p = sub.add_parser("login", help="Log in with email and password")
    p.add_argument("email")
    p.add_argument("--password", help="Prompted for when omitted")
    p.set_defaults(handler=cmd_login)

    sub.add_parser("logout", help="Forget the stored token").set_defaults(handler=cmd_logout)
    sub.add_parser("whoami", help="Show the logged in user").set_defaults(handler=cmd_whoami)

    p = sub.add_parser("list", help="List posts, newest first")
    p.add_argument("--search", default="", help="Filter by title or author")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--limit", type=int, default=10)
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("show", help="Show one post")
    p.add_argument("post_id", type=int)
    p.set_defaults(handler=cmd_show)

    p = sub.add_parser("create", help="Publish a post")
    p.add_argument("title")
    _add_content_args(p)
    p.set_defaults(handler=cmd_create)

    p = sub.add_parser("edit", help="Update one of your posts")
    p.add_argument("post_id", type=int)
    p.add_argument("--title")
    _add_content_args(p)
    p.set_defaults(handler=cmd_edit)

    p = sub.add_parser("delete", help="Delete one of your posts")
    p.add_argument("post_id", type=int)
    p.set_defaults(handler=cmd_delete)

    return parser


async def run_command(args: Namespace) -> None:
    session = SessionContext.load(args.session_file)
    async with QuillClient(base_url=args.api_url, session=session) as client:
        handler: Command = args.handler
        await handler(client, args)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``quill`` console script."""
    args = build_parser().parse_args(argv)
    try:
        asyncio_run(run_command(args))
    except ApiError as e:
        err_console.print(f"[red]Error {e.status_code}:[/red] {e.detail}")
        for error in e.errors:
            err_console.print(f"  - {error.get('field')}: {error.get('message')}")
        return 1
    except HTTPError as e:
        err_console.print(f"[red]Could not reach {args.api_url}:[/red] {e}")
        return 2
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys_exit(main())
