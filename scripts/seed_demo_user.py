#!/usr/bin/env python3
"""
Provision the permanent demo login and fill it with demo data.

The account is created if missing; demo data is only seeded when the account
has no notes yet, so the script is safe to run repeatedly.

Usage:
    ENV=staging uv run python scripts/seed_demo_user.py
    ENV=staging uv run python scripts/seed_demo_user.py --username ogsdemo --password demo1234
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment before importing app modules
from dotenv import load_dotenv

env = os.getenv("ENV", "local")
load_dotenv(f".env.{env}")

print(f"Environment: {env}")


async def seed_demo_user(username: str, email: str, password: str) -> None:
    from sqlalchemy import func, select

    from app.db import get_db_session
    from app.models import Note, User
    from app.services.auth.passwords import hash_password
    from app.services.demo_data import demo_data_service

    async with get_db_session() as db:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user is None:
            user = User(
                email=email,
                username=username,
                password_hash=await hash_password(password),
            )
            db.add(user)
            await db.flush()
            print(f"Created demo user {username} (id={user.id})")
        else:
            print(f"Demo user {username} already exists (id={user.id})")

        note_count = (
            await db.execute(select(func.count(Note.id)).where(Note.user_id == user.id))
        ).scalar_one()
        if note_count:
            print(f"Demo user already has {note_count} notes, skipping seed")
            return

        created = await demo_data_service.seed_demo_data(user.id, db)
        print(f"Seeded {created} demo notes")


def main():
    parser = argparse.ArgumentParser(description="Provision the demo login")
    parser.add_argument("--username", default="ogsdemo")
    parser.add_argument("--email", default=None, help="Defaults to the username")
    parser.add_argument("--password", default="demo1234")
    args = parser.parse_args()

    email = (args.email or args.username).lower().strip()
    asyncio.run(seed_demo_user(args.username, email, args.password))


if __name__ == "__main__":
    main()
