"""
Database CRUD operations.

Async functions over the key_value_store table. None of them commit;
transaction boundaries belong to the caller.
"""

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dexkeeper.models.db import KeyValueDB


async def get_value(session: AsyncSession, key: str) -> str | None:
    """
    Get the value stored under a key.

    Returns None if the key does not exist.
    """
    row = await session.get(KeyValueDB, key)
    return row.value if row else None


async def get_values(session: AsyncSession, keys: list[str]) -> dict[str, str]:
    """
    Get the values stored under several keys in one query.

    Keys that do not exist are absent from the result.
    """
    if not keys:
        return {}
    result = await session.execute(select(KeyValueDB).where(KeyValueDB.key.in_(keys)))
    return {row.key: row.value for row in result.scalars().all()}


async def upsert_values(session: AsyncSession, pairs: Iterable[tuple[str, str]]) -> int:
    """
    Insert or update several key-value pairs.

    Existing rows are updated in place, new keys are inserted.
    Returns the number of pairs written.
    """
    values = dict(pairs)
    if not values:
        return 0

    result = await session.execute(select(KeyValueDB).where(KeyValueDB.key.in_(list(values))))
    existing = {row.key: row for row in result.scalars().all()}

    for key, value in values.items():
        row = existing.get(key)
        if row:
            row.value = value
        else:
            session.add(KeyValueDB(key=key, value=value))

    await session.flush()
    return len(values)


async def delete_values(session: AsyncSession, keys: list[str]) -> int:
    """
    Delete several keys.

    Returns the number of deleted records.
    """
    if not keys:
        return 0
    result = await session.execute(delete(KeyValueDB).where(KeyValueDB.key.in_(keys)))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount)  # type: ignore[attr-defined]


async def list_keys(session: AsyncSession, prefix: str | None = None) -> list[str]:
    """List stored keys in key order, optionally restricted to a prefix."""
    query = select(KeyValueDB.key).order_by(KeyValueDB.key)
    if prefix:
        query = query.where(KeyValueDB.key.startswith(prefix, autoescape=True))
    result = await session.execute(query)
    return list(result.scalars().all())
