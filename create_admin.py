"""
Create the database tables and the first admin account.

The admin receives a temporary password (printed once) and must change it
on first login.
"""

import asyncio
import sys

from sqlmodel import SQLModel

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.password_service import generate_temporary_password, hash_password
from src.depends import AsyncSessionLocal, engine
from src.domain.entities import User, UserRole


async def main(username: str, email: str, name: str) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            if await uow.users.get_by_username(username):
                print(f"Admin account '{username}' already exists")
                return 1

            temporary_password = generate_temporary_password()
            await uow.users.create(
                User(
                    username=username,
                    email=email,
                    name=name,
                    role=UserRole.admin,
                    password=await hash_password(temporary_password),
                    password_reset_required=True,
                )
            )
            await uow.commit()

    print(f"Admin account '{username}' created")
    print(f"Temporary password: {temporary_password}")
    await engine.dispose()
    return 0


if __name__ == "__main__":
    args = sys.argv[1:] or ["admin", "admin@example.com", "Admin"]
    if len(args) != 3:
        print("usage: python create_admin.py <username> <email> <name>")
        sys.exit(2)
    sys.exit(asyncio.run(main(*args)))
