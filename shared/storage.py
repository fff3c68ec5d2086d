"""
Durable key/value storage for token alerts.

Two backends share one interface: an in-memory store for tests and local runs,
and a SQLAlchemy table for deployments with DATABASE_URL set. Numbers support
an atomic increment so concurrent invocations never lose a heartbeat tick.
"""
import asyncio
import copy
from typing import Any
from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from shared.models.kv import KeyValueEntry
import structlog

logger = structlog.get_logger()


class MemoryStorage:
    def __init__(self):
        self._json: dict[str, Any] = {}
        self._numbers: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def get_json(self, key: str) -> Any | None:
        value = self._json.get(key)
        return copy.deepcopy(value)

    async def put_json(self, key: str, value: Any):
        self._json[key] = copy.deepcopy(value)

    async def get_number(self, key: str) -> int | None:
        return self._numbers.get(key)

    async def put_number(self, key: str, value: int):
        self._numbers[key] = value

    async def increment_number(self, key: str, by: int = 1) -> int:
        async with self._lock:
            value = self._numbers.get(key, 0) + by
            self._numbers[key] = value
            return value


class DatabaseStorage:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _get(self, db: AsyncSession, key: str) -> KeyValueEntry | None:
        result = await db.execute(select(KeyValueEntry).where(KeyValueEntry.key == key))
        return result.scalar_one_or_none()

    async def get_json(self, key: str) -> Any | None:
        async with self._session_factory() as db:
            entry = await self._get(db, key)
            return entry.json_value if entry else None

    async def put_json(self, key: str, value: Any):
        async with self._session_factory() as db:
            entry = await self._get(db, key)
            if entry is None:
                db.add(KeyValueEntry(key=key, json_value=value))
            else:
                entry.json_value = value
            await db.commit()

    async def get_number(self, key: str) -> int | None:
        async with self._session_factory() as db:
            entry = await self._get(db, key)
            return entry.number_value if entry else None

    async def put_number(self, key: str, value: int):
        async with self._session_factory() as db:
            entry = await self._get(db, key)
            if entry is None:
                db.add(KeyValueEntry(key=key, number_value=value))
            else:
                entry.number_value = value
            await db.commit()

    async def increment_number(self, key: str, by: int = 1) -> int:
        """Single-statement increment; inserts the row on first use."""
        stmt = (
            update(KeyValueEntry)
            .where(KeyValueEntry.key == key)
            .values(number_value=func.coalesce(KeyValueEntry.number_value, 0) + by)
            .returning(KeyValueEntry.number_value)
        )
        async with self._session_factory() as db:
            value = (await db.execute(stmt)).scalar_one_or_none()
            if value is not None:
                await db.commit()
                return value

            db.add(KeyValueEntry(key=key, number_value=by))
            try:
                await db.commit()
                return by
            except IntegrityError:
                # Another invocation inserted the row first
                await db.rollback()
                value = (await db.execute(stmt)).scalar_one()
                await db.commit()
                return value


def get_storage():
    from shared.database import async_session

    if async_session is None:
        logger.warning("database_not_configured", storage="memory")
        return MemoryStorage()
    return DatabaseStorage(async_session)
