"""Create (or recreate) the games schema in PostgreSQL.

    python3 data/setup_db.py            # create missing tables
    python3 data/setup_db.py --reset    # drop everything first
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from database.connection import DatabasePool
from database.db_manager import DatabaseManager


async def setup(dsn: str, reset: bool = False):
    pool = DatabasePool()
    await pool.initialize(dsn=dsn, min_size=1, max_size=2)
    db = DatabaseManager(pool.pool)
    try:
        if reset:
            await db.reset_schema()
            print("Dropped and recreated schema 'games'")
        else:
            await db.initialize_schema()
            print("Schema 'games' is ready")
    finally:
        await pool.close()


def main():
    load_dotenv()
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        print("DATABASE_URL is not set (environment or .env)")
        sys.exit(1)

    asyncio.run(setup(dsn, reset="--reset" in sys.argv[1:]))


if __name__ == "__main__":
    main()
