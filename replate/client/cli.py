#!/usr/bin/env python3
"""
Command-line board: browse, post and claim listings against a running API.
The token is kept in a file between runs (like the browser's local storage).

  replate-board signup --name "Corner Bakery" --email bakery@example.com --password s3cret
  replate-board login --email bakery@example.com --password s3cret
  replate-board list --filter donor --search bread
  replate-board post --role donor --name "Corner Bakery" --type bakery --quantity "12 loaves" ...
  replate-board claim 3
"""

import argparse
import getpass
import os
import sys
from pathlib import Path

import httpx

from replate.client.api import API_BASE, ApiError, ReplateClient
from replate.client.board import BoardState, render_board, render_listing

DEFAULT_TOKEN_FILE = Path.home() / ".replate" / "token"
LISTING_OPTIONS = ("role", "name", "phone", "address", "type", "quantity", "notes", "safe-by")


def load_token(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8").strip() or None
    except FileNotFoundError:
        return None


def save_token(path: Path, token: str | None) -> None:
    if token is None:
        path.unlink(missing_ok=True)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(token, encoding="utf-8")
    os.chmod(path, 0o600)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="replate-board", description="Replate listing board")
    ap.add_argument("--base-url", default=os.getenv("REPLATE_API", API_BASE), help="API base URL")
    ap.add_argument("--token-file", type=Path, default=DEFAULT_TOKEN_FILE, help="Where the login token is kept")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("signup", help="Create an account")
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--password", help="Prompted if omitted")

    p = sub.add_parser("login", help="Log in and remember the token")
    p.add_argument("--email", required=True)
    p.add_argument("--password", help="Prompted if omitted")

    sub.add_parser("logout", help="Forget the saved token")

    p = sub.add_parser("list", help="Show listings")
    p.add_argument("--filter", default="", help="Exact type or role, e.g. donor")
    p.add_argument("--search", default="", help="Substring of name, address or notes")

    p = sub.add_parser("post", help="Publish a listing (login required)")
    for option in LISTING_OPTIONS:
        p.add_argument(f"--{option}", default=None)

    p = sub.add_parser("claim", help="Claim (remove) a listing (login required)")
    p.add_argument("id")
    return ap


def run(args: argparse.Namespace, client: ReplateClient) -> str:
    state = client.state
    if args.command == "signup":
        return client.signup(args.name, args.email, args.password or getpass.getpass())
    if args.command == "login":
        message = client.login(args.email, args.password or getpass.getpass())
        save_token(args.token_file, state.token)
        return message
    if args.command == "logout":
        client.logout()
        save_token(args.token_file, None)
        return "Logged out successfully!"
    if args.command == "list":
        client.fetch_listings()
        state.tag, state.term = args.filter, args.search
        return render_board(state.visible())
    if args.command == "post":
        fields = {
            ("safeBy" if option == "safe-by" else option): getattr(args, option.replace("-", "_"))
            for option in LISTING_OPTIONS
        }
        listing = client.create_listing({k: v for k, v in fields.items() if v is not None})
        return "Listing created successfully!\n" + render_listing(listing)
    if args.command == "claim":
        return client.claim(args.id)
    raise ValueError(f"unknown command {args.command!r}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    state = BoardState(token=load_token(args.token_file))
    with ReplateClient(state, base_url=args.base_url) as client:
        try:
            print(run(args, client))
        except ApiError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except httpx.HTTPError as e:
            print(f"Cannot reach {args.base_url}: {e!r}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
