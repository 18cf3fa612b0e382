#!/usr/bin/env python
"""
Create the schema, the default roles and the first Super Admin.
"""

import argparse
import asyncio
import getpass
import sys


# Add src to path for imports
sys.path.insert(0, "src")

from journal.core.auth import hash_password
from journal.core.constants import SUPER_ADMIN_ROLE
from journal.core.database import Base, async_engine, async_session_factory
from journal.modules.roles.repos import RoleRepository
from journal.modules.roles.services import RoleService
from journal.modules.users.models import User
from journal.modules.users.repos import UserRepository


DEMO_USERS = [
    ("Edith Editor", "editor@example.com", "Editor"),
    ("Arthur Author", "author@example.com", "Author"),
    ("Vera Viewer", "viewer@example.com", "Viewer"),
]


async def create_tables() -> None:
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Schema is up to date")


async def create_user(
    users: UserRepository,
    roles: RoleRepository,
    name: str,
    email: str,
    role_name: str,
    password: str,
) -> None:
    if await users.get_by_email(email):
        print(f"User already exists: {email}")
        return

    role = await roles.get_by_name(role_name)
    if role is None:
        print(f"Role not found: {role_name}")
        sys.exit(1)

    await users.create(
        User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role_id=role.id,
            permissions=[],
        )
    )
    print(f"Created {role_name}: {email}")


async def seed(scenario: str, admin_email: str, admin_password: str) -> None:
    """Run the seeding for a scenario."""
    await create_tables()

    async with async_session_factory() as session:
        roles = RoleRepository(session)
        users = UserRepository(session)

        created = await RoleService(repo=roles, users=users).sync_default_roles()
        for role in created:
            print(f"Created role: {role.name}")

        await create_user(
            users, roles, "Super Admin", admin_email, SUPER_ADMIN_ROLE, admin_password
        )

        if scenario == "demo":
            for name, email, role_name in DEMO_USERS:
                await create_user(users, roles, name, email, role_name, admin_password)

        await session.commit()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the journal database")
    parser.add_argument(
        "--scenario",
        "-s",
        choices=["default", "demo"],
        default="default",
        help="default: roles and a Super Admin; demo: also one user per role",
    )
    parser.add_argument("--admin-email", default="admin@example.com")
    parser.add_argument(
        "--admin-password",
        help="Password for seeded accounts (prompted when omitted)",
    )
    args = parser.parse_args()

    password = args.admin_password or getpass.getpass("Password for seeded accounts: ")
    asyncio.run(seed(args.scenario, args.admin_email, password))
