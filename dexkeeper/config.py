from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DexKeeper"
    debug: bool = False

    # On-device store; any async SQLAlchemy URL works
    database_url: str = "sqlite+aiosqlite:///dexkeeper.db"

    pokeapi_url: str = "https://pokeapi.co/api/v2"
    sprite_base_url: str = (
        "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon"
    )
    http_timeout: float = 30.0

    # Number of entries requested from the catalog listing
    catalog_size: int = 1025

    # Progress records are stored under f"{progress_key_prefix}{entity_id}"
    progress_key_prefix: str = "pokemon_"

    default_music_volume: float = 0.35


settings = Settings()


# =============================================================================
# PREFERENCE KEYS
# =============================================================================

# Stored next to progress records, never matched by the progress prefix
MUSIC_VOLUME_KEY = "music_volume"
