"""
Catalog assembly.

Builds Entity objects from the catalog listing, attaches detail once loaded,
and joins the catalog with progress records into the rows the list view
renders and the query engine filters.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace

from dexkeeper.config import settings
from dexkeeper.models.entity import CatalogListing, DexEntry, Entity, EntityDetail
from dexkeeper.models.failure import ContractViolationError
from dexkeeper.models.progress import ALL_CONTEXTS, Context, ProgressRecord, coerce_contexts
from dexkeeper.services.name_normalizer import normalize_name
from dexkeeper.services.progress_aggregator import ANY_FORM, is_owned, is_variant


def sprite_url_for(entity_id: int) -> str:
    """Default list sprite for an entity id."""
    return f"{settings.sprite_base_url}/{entity_id}.png"


def build_catalog(listings: Iterable[CatalogListing]) -> list[Entity]:
    """
    Build entities from the catalog listing.

    Ids come from listing position (index + 1), never from the raw name.
    Types and forms stay empty until detail is loaded.
    """
    entities = []
    for listing in sorted(listings, key=lambda item: item.index):
        entity_id = listing.index + 1
        entities.append(
            Entity(
                id=entity_id,
                raw_name=listing.raw_name,
                display_name=normalize_name(listing.raw_name),
                sprite_url=sprite_url_for(entity_id),
            )
        )
    return entities


def with_detail(entity: Entity, detail: EntityDetail) -> Entity:
    """Return a copy of ``entity`` with types and forms attached."""
    if not detail.forms:
        raise ContractViolationError(
            f"Detail for '{entity.raw_name}' has no forms",
            detail="Loaded entities always have at least one form",
        )
    return replace(entity, types=tuple(detail.types), forms=tuple(detail.forms))


def join_progress(
    entities: Iterable[Entity],
    records: Mapping[int, ProgressRecord],
    contexts: Iterable[Context | str] = ALL_CONTEXTS,
) -> list[DexEntry]:
    """
    Join catalog entities with their progress, in catalog order.

    Flags are entity-level: every recorded form counts.
    """
    selected = coerce_contexts(contexts)
    rows = []
    for entity in entities:
        record = records.get(entity.id)
        rows.append(
            DexEntry(
                entity=entity,
                owned=is_owned(record, ANY_FORM, selected),
                is_variant=is_variant(record, ANY_FORM, selected),
            )
        )
    return rows


def canonical_forms(entities: Iterable[Entity]) -> dict[int, str]:
    """Map entity ids to canonical form keys, for bulk edits."""
    return {entity.id: entity.canonical_form_key for entity in entities}


def adjacent_id(current_id: int, step: int, total: int) -> int:
    """
    Id reached by moving ``step`` entries from ``current_id``.

    Clamped to 1..total, so swiping past either end stays put.
    """
    if total < 1:
        raise ContractViolationError("Cannot navigate an empty catalog")
    return max(1, min(total, current_id + step))


def find_entity(entities: Sequence[Entity], entity_id: int) -> Entity | None:
    """Look up an entity by id; ids are dense, so this is an index."""
    if 1 <= entity_id <= len(entities) and entities[entity_id - 1].id == entity_id:
        return entities[entity_id - 1]
    return next((e for e in entities if e.id == entity_id), None)
