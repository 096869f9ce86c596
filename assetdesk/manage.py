# /assetdesk/manage.py
from __future__ import annotations

import argparse
import asyncio
from getpass import getpass

from assetdesk.app_logging import get_logger
from assetdesk.core.models import db_helper
from assetdesk.scripts.superuser import create_admin

log = get_logger("manage")


async def _cmd_create_admin() -> None:
    print("Create admin")
    username = input("Username: ").strip()
    full_name = input("Full name (optional): ").strip()
    password = getpass("Password: ")
    email = input("E-mail (optional): ").strip()

    try:
        async with db_helper.session_factory() as session:
            async with session.begin():
                uid = await create_admin(
                    session,
                    username=username,
                    password=password,
                    full_name=full_name or None,
                    email=email or None,
                )
        log.info({"event": "create_admin_ok", "user_id": uid, "username": username})
        print(f"Admin created: id={uid}, username={username}")
    finally:
        await db_helper.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="assetdesk.manage", description="Management commands")
    parser.add_argument("--create_admin", action="store_true", help="Create an admin user")
    args = parser.parse_args(argv)

    if args.create_admin:
        asyncio.run(_cmd_create_admin())
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
