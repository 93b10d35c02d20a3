from dexkeeper.db.backend import InMemoryBackend, KeyValueBackend, SqlAlchemyBackend
from dexkeeper.db.database import (
    create_engine,
    create_session_factory,
    drop_db,
    init_db,
    open_backend,
)
from dexkeeper.db.operations import (
    delete_values,
    get_value,
    get_values,
    list_keys,
    upsert_values,
)

__all__ = [
    "InMemoryBackend",
    "KeyValueBackend",
    "SqlAlchemyBackend",
    "create_engine",
    "create_session_factory",
    "delete_values",
    "drop_db",
    "get_value",
    "get_values",
    "init_db",
    "list_keys",
    "open_backend",
    "upsert_values",
]
