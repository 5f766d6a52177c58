"""
Database connection and pool management
"""

import asyncpg
import logging
from typing import Optional

logger = logging.getLogger(__name__)

USERS_TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS users (
        id UUID PRIMARY KEY,
        name TEXT NOT NULL CHECK (length(name) > 0),
        email TEXT NOT NULL,
        description TEXT,
        password TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""

# Global database pool
db_pool: Optional[asyncpg.Pool] = None

async def init_database(database_url: str, min_size: int = 2, max_size: int = 10) -> asyncpg.Pool:
    """Initialize database connection pool and make sure the users table exists"""
    global db_pool
    db_pool = await asyncpg.create_pool(
        database_url,
        min_size=min_size,
        max_size=max_size,
        command_timeout=60,
        statement_cache_size=0  # pgbouncer compatibility
    )

    async with db_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")
        await conn.execute(USERS_TABLE_DDL)

    logger.info("Database initialized successfully")
    return db_pool


async def close_database():
    """Close database connection pool"""
    global db_pool
    if db_pool:
        await db_pool.close()
        db_pool = None
    logger.info("Database connections closed")

def get_db_pool() -> Optional[asyncpg.Pool]:
    """Get the database pool instance"""
    return db_pool
