"""
DexKeeper services.

Collection progress, search, and type effectiveness.
"""

from dexkeeper.services.catalog import (
    adjacent_id,
    build_catalog,
    canonical_forms,
    find_entity,
    join_progress,
    with_detail,
)
from dexkeeper.services.catalog_source import PokeApiCatalogSource
from dexkeeper.services.effectiveness import (
    Effectiveness,
    compute_effectiveness,
    format_multiplier,
)
from dexkeeper.services.name_normalizer import is_real_hyphen_name, normalize_name
from dexkeeper.services.preferences import get_music_volume, set_music_volume
from dexkeeper.services.progress_aggregator import (
    ANY_FORM,
    DexSummary,
    ProgressCounts,
    completion,
    counts,
    format_summary,
    is_owned,
    is_variant,
    summarize,
)
from dexkeeper.services.progress_store import ProgressStore
from dexkeeper.services.query_engine import (
    MISSING_TOKEN,
    NOT_VARIANT_TOKEN,
    VARIANT_TOKEN,
    ParsedQuery,
    filter_entries,
    parse_query,
)

__all__ = [
    # Names
    "is_real_hyphen_name",
    "normalize_name",
    # Progress
    "ProgressStore",
    "ANY_FORM",
    "DexSummary",
    "ProgressCounts",
    "completion",
    "counts",
    "format_summary",
    "is_owned",
    "is_variant",
    "summarize",
    # Search
    "MISSING_TOKEN",
    "NOT_VARIANT_TOKEN",
    "VARIANT_TOKEN",
    "ParsedQuery",
    "filter_entries",
    "parse_query",
    # Type effectiveness
    "Effectiveness",
    "compute_effectiveness",
    "format_multiplier",
    # Catalog
    "PokeApiCatalogSource",
    "adjacent_id",
    "build_catalog",
    "canonical_forms",
    "find_entity",
    "join_progress",
    "with_detail",
    # Preferences
    "get_music_volume",
    "set_music_volume",
]
