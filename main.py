#!/usr/bin/env python3
"""
Postdesk -- admin command line.

Usage:
  python main.py init-db
  python main.py check-tables
  python main.py create-user --username ana --email ana@example.com --password secret --role admin
  python main.py serve --host 127.0.0.1 --port 8000

Environment variables (see core/config.py):
  DATABASE_URL  SQLAlchemy URL of the database (default: sqlite file in the repo root)
  SECRET_KEY    Token signing key, at least 32 characters (or set DEBUG=true)
"""

import argparse
import getpass
import sys

from sqlalchemy import inspect

from core.config import get_settings
from core.database import create_db_engine
from core.errors import Conflict


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create any missing tables. Safe to run repeatedly."""
    url = get_settings().database_url
    engine = create_db_engine(url)
    engine.dispose()
    print(f"Database initialized: {engine.url.render_as_string(hide_password=True)}")
    return 0


def cmd_check_tables(args: argparse.Namespace) -> int:
    """Print the columns of the users and posts tables."""
    engine = create_db_engine(get_settings().database_url)
    try:
        inspector = inspect(engine)
        for table in ("users", "posts"):
            print(f"\n{table}")
            print("─" * 40)
            for col in inspector.get_columns(table):
                nullable = "NULL" if col["nullable"] else "NOT NULL"
                print(f"  {col['name']:<15} {str(col['type']):<15} {nullable}")
    finally:
        engine.dispose()
    return 0


def cmd_create_user(args: argparse.Namespace) -> int:
    # Imported here: auth.tokens reads SECRET_KEY at import time.
    from auth.models import User
    from auth.store import UserStore
    from auth.tokens import hash_password

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("  [!] Password must not be empty.")
        return 1

    store = UserStore(get_settings().database_url)
    try:
        user_id = store.create_user(
            User(username=args.username, email=args.email, password_hash=hash_password(password), role=args.role)
        )
    except Conflict as exc:
        print(f"  [!] {exc.message}")
        return 1
    finally:
        store.close()
    print(f"Created {args.role} '{args.username}' (id={user_id}).")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="postdesk",
        description="Postdesk administration commands.",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = sub.add_parser("init-db", help="Create database tables")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("check-tables", help="Show the users and posts table structure")
    p.set_defaults(func=cmd_check_tables)

    p = sub.add_parser("create-user", help="Create a user account")
    p.add_argument("--username", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--password", help="Prompted for when omitted")
    p.add_argument("--role", choices=["admin", "editor"], default="editor")
    p.set_defaults(func=cmd_create_user)

    p = sub.add_parser("serve", help="Run the web server")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    p.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
