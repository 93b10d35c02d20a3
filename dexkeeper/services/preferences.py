"""
User preferences stored next to progress records.

Only the music volume is persisted; playback belongs to the presentation
layer, which reads the value at startup and writes it when the slider moves.
"""

import logging
import math

from dexkeeper.config import MUSIC_VOLUME_KEY, settings
from dexkeeper.db.backend import KeyValueBackend

logger = logging.getLogger(__name__)


def clamp_volume(value: float) -> float:
    """Clamp a volume to 0.0..1.0."""
    return max(0.0, min(1.0, value))


async def get_music_volume(backend: KeyValueBackend) -> float:
    """
    Read the stored music volume.

    Returns settings.default_music_volume when nothing is stored or the
    stored value is not a number.
    """
    raw = await backend.get(MUSIC_VOLUME_KEY)
    if raw is None:
        return settings.default_music_volume
    try:
        value = float(raw)
    except ValueError:
        logger.warning("malformed_music_volume", extra={"value": raw[:50]})
        return settings.default_music_volume
    if not math.isfinite(value):
        logger.warning("malformed_music_volume", extra={"value": raw[:50]})
        return settings.default_music_volume
    return clamp_volume(value)


async def set_music_volume(backend: KeyValueBackend, value: float) -> float:
    """Store the music volume, clamped to 0..1. Returns the stored value."""
    volume = clamp_volume(float(value))
    await backend.set(MUSIC_VOLUME_KEY, str(volume))
    return volume
