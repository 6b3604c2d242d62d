"""Seed data script for development.

Creates:
- a landlord and SEED_BIDDERS bidders (password: password123)
- SEED_LISTINGS open listings owned by the landlord
- one listing that already has a tenant

Environment Variables:
    SEED_BIDDERS: Number of bidder accounts (default: 10)
    SEED_LISTINGS: Number of open listings (default: 5)

Usage:
    python -m scripts.seed_data
"""

import asyncio
import os
import random
from decimal import Decimal

SEED_BIDDERS = int(os.getenv("SEED_BIDDERS", "10"))
SEED_LISTINGS = int(os.getenv("SEED_LISTINGS", "5"))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentbid.core.database import async_session_maker, engine
from rentbid.core.security import get_password_hash
from rentbid.models import Listing, User

STREETS = ["Drottninggatan", "Kungsgatan", "Vasagatan", "Linnégatan", "Södra vägen"]


async def seed_users(session: AsyncSession) -> tuple[User, list[User]]:
    """Create the landlord (landlord@test.com) and bidder0001@test.com onwards."""
    print("Seeding users...")

    result = await session.execute(select(User).where(User.email == "landlord@test.com"))
    landlord = result.scalar_one_or_none()
    if landlord:
        print("  Users already exist, skipping...")
        result = await session.execute(select(User).where(User.user_id != landlord.user_id))
        return landlord, list(result.scalars().all())

    # bcrypt is slow; hash once and reuse
    password_hash = get_password_hash("password123")

    landlord = User(
        email="landlord@test.com",
        password_hash=password_hash,
        username="landlord",
        status="active",
    )
    session.add(landlord)

    bidders = []
    for i in range(1, SEED_BIDDERS + 1):
        bidder = User(
            email=f"bidder{i:04d}@test.com",
            password_hash=password_hash,
            username=f"bidder{i:04d}",
            status="active",
        )
        session.add(bidder)
        bidders.append(bidder)

    await session.commit()
    print(f"  Created landlord and {len(bidders)} bidders")
    return landlord, bidders


async def seed_listings(session: AsyncSession, landlord: User, bidders: list[User]) -> None:
    """Create open listings plus one already rented to the first bidder."""
    print("Seeding listings...")

    for i in range(SEED_LISTINGS):
        street = random.choice(STREETS)
        session.add(
            Listing(
                landlord_id=landlord.user_id,
                title=f"{random.randint(1, 4)} rooms on {street}",
                address=f"{street} {random.randint(1, 80)}",
                rent=Decimal(random.randrange(6000, 18000, 250)),
            )
        )

    if bidders:
        session.add(
            Listing(
                landlord_id=landlord.user_id,
                tenant_id=bidders[0].user_id,
                title="Rented studio",
                address=f"{STREETS[0]} 1",
                rent=Decimal("7500"),
            )
        )

    await session.commit()
    print(f"  Created {SEED_LISTINGS} open listings")


async def main():
    async with async_session_maker() as session:
        landlord, bidders = await seed_users(session)
        await seed_listings(session, landlord, bidders)

    print("Seeding complete. Log in as bidder0001@test.com / password123")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
