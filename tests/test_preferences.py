import pytest

from dexkeeper.config import MUSIC_VOLUME_KEY, settings
from dexkeeper.db.backend import InMemoryBackend
from dexkeeper.services.preferences import clamp_volume, get_music_volume, set_music_volume


class TestMusicVolume:
    async def test_default_when_unset(self, memory_backend: InMemoryBackend) -> None:
        assert await get_music_volume(memory_backend) == settings.default_music_volume

    async def test_round_trip(self, memory_backend: InMemoryBackend) -> None:
        stored = await set_music_volume(memory_backend, 0.8)

        assert stored == 0.8
        assert await get_music_volume(memory_backend) == 0.8
        assert memory_backend.snapshot() == {MUSIC_VOLUME_KEY: "0.8"}

    @pytest.mark.parametrize("value,expected", [(-1.0, 0.0), (1.5, 1.0), (0.0, 0.0)])
    async def test_clamped_on_write(
        self, memory_backend: InMemoryBackend, value: float, expected: float
    ) -> None:
        assert await set_music_volume(memory_backend, value) == expected

    @pytest.mark.parametrize("raw", ["loud", "nan", "inf", ""])
    async def test_malformed_value_falls_back(self, raw: str) -> None:
        backend = InMemoryBackend({MUSIC_VOLUME_KEY: raw})
        assert await get_music_volume(backend) == settings.default_music_volume

    async def test_out_of_range_value_clamped_on_read(self) -> None:
        backend = InMemoryBackend({MUSIC_VOLUME_KEY: "3"})
        assert await get_music_volume(backend) == 1.0

    def test_clamp_volume(self) -> None:
        assert clamp_volume(0.35) == 0.35
