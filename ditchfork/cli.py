"""Command line entrypoint: run the server or manage admin credentials."""
from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError


def _serve(_: argparse.Namespace) -> int:
    from uvicorn import run

    from ditchfork.core.config import get_settings

    settings = get_settings()
    run("ditchfork.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


def parse_credentials(raw: str) -> tuple[str, str]:
    """Split ``username:password`` on the first colon."""
    username, sep, password = raw.partition(":")
    if not sep or not username or not password:
        raise ValueError("--init-admin expects username:password")
    return username, password


async def _create_admin(username: str, password: str) -> None:
    from ditchfork.db.session import get_session, init_db
    from ditchfork.schemas.user import UserCreate
    from ditchfork.services.users import create_user

    await init_db()
    async with get_session() as session:
        await create_user(session, UserCreate(username=username, password=password))
        await session.commit()


def _init_admin(args: argparse.Namespace) -> int:
    try:
        username, password = parse_credentials(args.credentials)
        asyncio.run(_create_admin(username, password))
    except (ValueError, ValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"admin user '{username}' created successfully")
    return 0


def _hash_password(args: argparse.Namespace) -> int:
    from ditchfork.core.security import PasswordHasher

    print(PasswordHasher.hash(args.password))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ditchfork", description="Ditchfork review site")
    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="run the web server")
    serve.set_defaults(handler=_serve)

    init_admin = commands.add_parser("init-admin", help="create an admin user and exit")
    init_admin.add_argument("credentials", metavar="USERNAME:PASSWORD")
    init_admin.set_defaults(handler=_init_admin)

    hash_password = commands.add_parser("hash-password", help="print a password hash")
    hash_password.add_argument("password")
    hash_password.set_defaults(handler=_hash_password)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", _serve)
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
