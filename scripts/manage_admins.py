# scripts/manage_admins.py

import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv
from fastapi_users.exceptions import UserAlreadyExists
from sqlalchemy import delete

load_dotenv()

from canteen.auth.admin import create_admin  # noqa: E402
from canteen.core.logging_config import configure_logging  # noqa: E402
from canteen.db import async_session, create_db_and_tables  # noqa: E402
from canteen.models.user import User  # noqa: E402

if sys.platform.startswith('win') and sys.version_info < (3, 10):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


async def seed_admin(email: str, password: str) -> None:
    await create_db_and_tables()
    async with async_session() as session:
        try:
            await create_admin(session, email, password)
            print(f"Created admin: {email}")
        except UserAlreadyExists:
            print(f"Admin '{email}' already exists. Skipping.")


async def delete_admin(email: str) -> None:
    async with async_session() as session:
        result = await session.execute(delete(User).where(User.email == email))
        await session.commit()
        if result.rowcount:
            print(f"Deleted admin: {email}")
        else:
            print(f"No admin found with email: {email}")


if __name__ == "__main__":
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    parser = argparse.ArgumentParser(description="Manage canteen admin accounts")
    parser.add_argument("--create", action="store_true", help="Create an admin (ADMIN_EMAIL / ADMIN_PASSWORD)")
    parser.add_argument("--delete", action="store_true", help="Delete an admin")
    parser.add_argument("--email", type=str, default=os.getenv("ADMIN_EMAIL"))
    parser.add_argument("--password", type=str, default=os.getenv("ADMIN_PASSWORD"))

    args = parser.parse_args()

    if args.create and args.email and args.password:
        asyncio.run(seed_admin(args.email, args.password))
    elif args.delete and args.email:
        asyncio.run(delete_admin(args.email))
    else:
        print("Usage:")
        print("  python -m scripts.manage_admins --create --email admin@canteen.in --password s3cret")
        print("  python -m scripts.manage_admins --delete --email admin@canteen.in")
