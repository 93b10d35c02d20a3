"""
Key-value persistence backends.

The progress store talks to storage only through the KeyValueBackend
protocol. Two implementations are provided:

- InMemoryBackend: a dict, for tests and ephemeral sessions
- SqlAlchemyBackend: the key_value_store table via an async session factory

Batched writes (set_many, delete_many) are applied as one unit: the SQL
backend runs them in a single transaction, the in-memory backend in a
single dict update.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from dexkeeper.db import operations


@runtime_checkable
class KeyValueBackend(Protocol):
    """Abstract string key-value store."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def get_many(self, keys: Sequence[str]) -> list[tuple[str, str | None]]: ...

    async def set_many(self, pairs: Iterable[tuple[str, str]]) -> None: ...

    async def delete_many(self, keys: Sequence[str]) -> None: ...

    async def list_keys(self) -> list[str]: ...


class InMemoryBackend:
    """Dict-backed store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def get_many(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        return [(key, self._data.get(key)) for key in keys]

    async def set_many(self, pairs: Iterable[tuple[str, str]]) -> None:
        self._data.update(dict(pairs))

    async def delete_many(self, keys: Sequence[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    async def list_keys(self) -> list[str]:
        return list(self._data)

    def snapshot(self) -> dict[str, str]:
        """Copy of the stored data."""
        return dict(self._data)


class SqlAlchemyBackend:
    """
    Store backed by the key_value_store table.

    Each call opens its own session and commits before returning, so every
    call is one transaction. When given an engine, the backend owns it and
    disposes of it in ``aclose``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = engine

    async def aclose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as session:
            return await operations.get_value(session, key)

    async def set(self, key: str, value: str) -> None:
        async with self._session_factory() as session, session.begin():
            await operations.upsert_values(session, [(key, value)])

    async def get_many(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        async with self._session_factory() as session:
            found = await operations.get_values(session, list(keys))
        return [(key, found.get(key)) for key in keys]

    async def set_many(self, pairs: Iterable[tuple[str, str]]) -> None:
        async with self._session_factory() as session, session.begin():
            await operations.upsert_values(session, pairs)

    async def delete_many(self, keys: Sequence[str]) -> None:
        async with self._session_factory() as session, session.begin():
            await operations.delete_values(session, list(keys))

    async def list_keys(self) -> list[str]:
        async with self._session_factory() as session:
            return await operations.list_keys(session)
