"""
User record store implementations
PostgreSQL (asyncpg) for deployments, in-process for local runs and tests.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import asyncpg

from database.connection import get_db_pool

logger = logging.getLogger(__name__)

USER_COLUMNS = ("id", "name", "email", "description", "password", "created_at", "updated_at")
WRITABLE_FIELDS = ("name", "email", "description", "password")


def parse_user_id(user_id: Any) -> Optional[uuid.UUID]:
    """Return the UUID for a user id, or None when it is malformed"""
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except (ValueError, TypeError, AttributeError):
        return None


def _writable(values: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(values) - set(WRITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}")
    return dict(values)


class UserStore(ABC):
    """Persistent collection of user records keyed by UUID"""

    @abstractmethod
    async def ping(self) -> bool:
        ...

    @abstractmethod
    async def list_users(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def create_user(self, values: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def update_user(self, user_id: Any, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def delete_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        ...


class PostgresUserStore(UserStore):
    """User store backed by the shared asyncpg pool"""

    table_name = "users"

    def __init__(self, pool_provider: Callable[[], Optional[asyncpg.Pool]] = get_db_pool):
        self._pool_provider = pool_provider

    def _pool(self) -> asyncpg.Pool:
        db_pool = self._pool_provider()
        if not db_pool:
            raise RuntimeError("Database pool not initialized")
        return db_pool

    async def ping(self) -> bool:
        async with self._pool().acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1

    async def list_users(self) -> List[Dict[str, Any]]:
        query = f"SELECT {', '.join(USER_COLUMNS)} FROM {self.table_name} ORDER BY created_at ASC, id ASC"
        logger.info(f"Executing READ query: {query}")

        async with self._pool().acquire() as conn:
            try:
                rows = await conn.fetch(query)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}")

        return [dict(row) for row in rows]

    async def get_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        record_id = parse_user_id(user_id)
        if record_id is None:
            logger.info(f"Rejecting malformed user id: {user_id!r}")
            return None

        query = f"SELECT {', '.join(USER_COLUMNS)} FROM {self.table_name} WHERE id = $1"
        logger.info(f"Executing READ query: {query}")

        async with self._pool().acquire() as conn:
            try:
                row = await conn.fetchrow(query, record_id)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}")

        return dict(row) if row else None

    async def create_user(self, values: Dict[str, Any]) -> Dict[str, Any]:
        data = _writable(values)
        field_names = ["id"] + list(data.keys())
        params = [uuid.uuid4()] + list(data.values())
        placeholders = [f"${i}" for i in range(1, len(params) + 1)]

        query = (
            f"INSERT INTO {self.table_name} ({', '.join(field_names)}) "
            f"VALUES ({', '.join(placeholders)}) RETURNING *"
        )
        logger.info(f"Executing INSERT: {query}")

        async with self._pool().acquire() as conn:
            async with conn.transaction():
                try:
                    row = await conn.fetchrow(query, *params)
                except asyncpg.PostgresError as e:
                    logger.error(f"Database error during INSERT: {e}")
                    raise RuntimeError(f"Database INSERT failed: {str(e)}")

        if not row:
            raise RuntimeError("Insert operation failed - no data returned")
        return dict(row)

    async def update_user(self, user_id: Any, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        record_id = parse_user_id(user_id)
        if record_id is None:
            logger.info(f"Rejecting malformed user id: {user_id!r}")
            return None

        data = _writable(values)
        if not data:
            return await self.get_user(record_id)

        set_parts = []
        params: List[Any] = []
        for position, (field_name, value) in enumerate(data.items(), start=1):
            set_parts.append(f"{field_name} = ${position}")
            params.append(value)
        set_parts.append("updated_at = NOW()")
        params.append(record_id)

        query = (
            f"UPDATE {self.table_name} SET {', '.join(set_parts)} "
            f"WHERE id = ${len(params)} RETURNING *"
        )
        logger.info(f"Executing UPDATE: {query}")

        async with self._pool().acquire() as conn:
            async with conn.transaction():
                try:
                    row = await conn.fetchrow(query, *params)
                except asyncpg.PostgresError as e:
                    logger.error(f"Database error during UPDATE: {e}")
                    raise RuntimeError(f"Database UPDATE failed: {str(e)}")

        return dict(row) if row else None

    async def delete_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        record_id = parse_user_id(user_id)
        if record_id is None:
            logger.info(f"Rejecting malformed user id: {user_id!r}")
            return None

        query = f"DELETE FROM {self.table_name} WHERE id = $1 RETURNING *"
        logger.info(f"Executing DELETE: {query}")

        async with self._pool().acquire() as conn:
            async with conn.transaction():
                try:
                    row = await conn.fetchrow(query, record_id)
                except asyncpg.PostgresError as e:
                    logger.error(f"Database error during DELETE: {e}")
                    raise RuntimeError(f"Database DELETE failed: {str(e)}")

        return dict(row) if row else None


class InMemoryUserStore(UserStore):
    """Process-local store; records are kept in insertion order"""

    def __init__(self):
        self._records: Dict[uuid.UUID, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def ping(self) -> bool:
        return True

    async def list_users(self) -> List[Dict[str, Any]]:
        return [dict(record) for record in self._records.values()]

    async def get_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        record_id = parse_user_id(user_id)
        record = self._records.get(record_id) if record_id else None
        return dict(record) if record else None

    async def create_user(self, values: Dict[str, Any]) -> Dict[str, Any]:
        data = _writable(values)
        now = datetime.now(timezone.utc)
        record = {
            "id": uuid.uuid4(),
            "name": data.get("name"),
            "email": data.get("email"),
            "description": data.get("description"),
            "password": data.get("password"),
            "created_at": now,
            "updated_at": now,
        }
        async with self._lock:
            self._records[record["id"]] = record
        return dict(record)

    async def update_user(self, user_id: Any, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        record_id = parse_user_id(user_id)
        data = _writable(values)
        async with self._lock:
            record = self._records.get(record_id) if record_id else None
            if record is None:
                return None
            if data:
                record.update(data)
                record["updated_at"] = datetime.now(timezone.utc)
            return dict(record)

    async def delete_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        record_id = parse_user_id(user_id)
        async with self._lock:
            record = self._records.pop(record_id, None) if record_id else None
        return dict(record) if record else None
