import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dexkeeper.db.backend import InMemoryBackend, SqlAlchemyBackend
from dexkeeper.db.database import create_engine, create_session_factory, drop_db, init_db
from dexkeeper.models.entity import DexEntry, Entity, Form
from dexkeeper.services.progress_store import ProgressStore


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(memory_backend: InMemoryBackend) -> ProgressStore:
    return ProgressStore(memory_backend, key_prefix="pokemon_")


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    await drop_db(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def sql_backend(session_factory) -> SqlAlchemyBackend:
    return SqlAlchemyBackend(session_factory)


@pytest.fixture
def bulbasaur() -> Entity:
    return Entity(
        id=1,
        raw_name="bulbasaur",
        display_name="Bulbasaur",
        types=("grass", "poison"),
        forms=(Form("bulbasaur", "bulbasaur.png", "bulbasaur-shiny.png"),),
    )


@pytest.fixture
def charmander() -> Entity:
    return Entity(
        id=4,
        raw_name="charmander",
        display_name="Charmander",
        types=("fire",),
        forms=(Form("charmander", "charmander.png", "charmander-shiny.png"),),
    )


@pytest.fixture
def sample_entries(bulbasaur: Entity, charmander: Entity) -> list[DexEntry]:
    """Bulbasaur owned and shiny, Charmander missing."""
    return [
        DexEntry(entity=bulbasaur, owned=True, is_variant=True),
        DexEntry(entity=charmander, owned=False, is_variant=False),
    ]
