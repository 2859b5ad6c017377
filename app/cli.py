"""CLI for Building Reviews: create tables, users, tokens, demo data; serve."""

from __future__ import annotations

import argparse
import asyncio
import sys


def _database():
    from app.config import get_settings
    from app.db.engine import Database

    return Database(get_settings().database_url)


async def cmd_init_db(args):
    """Create all tables."""
    database = _database()
    await database.create_all()
    await database.dispose()
    print(f"Tables created at {database.url}")


async def cmd_create_user(args):
    """Create a user and print a session token for it."""
    from app.db import crud
    from app.services.auth import issue_session

    database = _database()
    await database.create_all()
    async with database.session_factory() as db:
        if await crud.get_user_by_email(db, args.email):
            print(f"User with email {args.email} already exists")
            await database.dispose()
            sys.exit(1)
        user = await crud.create_user(
            db, email=args.email, first_name=args.first_name,
            last_name=args.last_name, is_admin=args.admin,
        )
        token = await issue_session(db, user)
    await database.dispose()

    print(f"User created: {user.email} (id={user.id}, admin={user.is_admin})")
    print(f"Session token: {token}")


async def cmd_issue_token(args):
    """Issue a new session token for an existing user."""
    from app.db import crud
    from app.services.auth import issue_session

    database = _database()
    async with database.session_factory() as db:
        user = await crud.get_user_by_email(db, args.email)
        if not user:
            print(f"No user with email {args.email}")
            await database.dispose()
            sys.exit(1)
        token = await issue_session(db, user, max_age_days=args.days)
    await database.dispose()
    print(token)


async def cmd_seed(args):
    """Load demo buildings and approved reviews."""
    from app.db.seed import seed_demo_data

    database = _database()
    await database.create_all()
    async with database.session_factory() as db:
        created = await seed_demo_data(db)
    await database.dispose()
    if created:
        print(f"Seeded {created} buildings.")
    else:
        print("Demo data already present, skipping seed.")


def cmd_serve(args):
    import uvicorn

    uvicorn.run("app.main:create_app", factory=True, host=args.host, port=args.port, reload=args.reload)


def main():
    parser = argparse.ArgumentParser(prog="building-reviews", description="Building Reviews CLI")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("init-db", help="Create database tables")

    p_user = sub.add_parser("create-user", help="Create a user and print a session token")
    p_user.add_argument("--email", required=True)
    p_user.add_argument("--first-name", default="")
    p_user.add_argument("--last-name", default="")
    p_user.add_argument("--admin", action="store_true", help="Grant moderation rights")

    p_token = sub.add_parser("issue-token", help="Issue a session token for an existing user")
    p_token.add_argument("--email", required=True)
    p_token.add_argument("--days", type=int, default=None, help="Lifetime in days (default: session_max_age_days setting)")

    sub.add_parser("seed", help="Load demo buildings and reviews")

    p_serve = sub.add_parser("serve", help="Run the API server")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.add_argument("--reload", action="store_true")

    args = parser.parse_args()

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-user":
        asyncio.run(cmd_create_user(args))
    elif args.command == "issue-token":
        asyncio.run(cmd_issue_token(args))
    elif args.command == "seed":
        asyncio.run(cmd_seed(args))
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
