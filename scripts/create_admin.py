#!/usr/bin/env python3
"""Create an admin user, or promote an existing one."""

import asyncio

from sqlalchemy import select

from dshop.database import AsyncSessionLocal
from dshop.models.user import User, normalize_email


async def create_admin(
    email: str = "admin@sap.com",
    first_name: str = "D-Shop",
    last_name: str = "Admin",
) -> None:
    """Create an admin user if it doesn't exist, otherwise set its admin flag."""
    email = normalize_email(email)
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.email == email))
        existing = result.scalar_one_or_none()

        if existing:
            existing.is_admin = True
            await session.commit()
            print(f"Promoted existing user to admin: {email}")
        else:
            admin = User(
                email=email,
                first_name=first_name,
                last_name=last_name,
                is_admin=True,
            )
            session.add(admin)
            await session.commit()
            print(f"Created admin user: {email}")

    print("Log in with this e-mail address; set ADMIN_EMAIL for single-admin mode.")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", default="admin@sap.com", help="Admin email")
    parser.add_argument("--first-name", default="D-Shop", help="First name")
    parser.add_argument("--last-name", default="Admin", help="Last name")

    args = parser.parse_args()

    asyncio.run(
        create_admin(
            email=args.email,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    )
