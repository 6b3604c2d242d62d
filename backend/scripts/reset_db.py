"""Reset database to empty state.

Clears bids, listings and users, then flushes Redis.

Usage:
    python -m scripts.reset_db
"""

import asyncio

from sqlalchemy import text

from rentbid.core.database import async_session_maker, engine
from rentbid.core.redis import close_redis, get_redis


async def reset_database():
    """Clear all data from the database."""
    print("Resetting database...")

    async with async_session_maker() as session:
        # Children first because of foreign keys
        for table in ["bids", "listings", "users"]:
            result = await session.execute(text(f"DELETE FROM {table}"))
            print(f"  Deleted {result.rowcount} rows from {table}")

        await session.commit()


async def reset_redis():
    """Clear all Redis data."""
    print("Resetting Redis...")

    try:
        redis = await get_redis()
        await redis.flushdb()
        print("  Redis flushed")
    except Exception as e:
        print(f"  Warning: Could not clear Redis: {e}")
    finally:
        await close_redis()


async def main():
    await reset_database()
    await reset_redis()
    print("Reset complete. Re-seed with: python -m scripts.seed_data")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
