"""
Progress aggregation.

Pure functions over resolved ``id -> ProgressRecord`` mappings. A missing
record is the same as an empty one.

Form selection:
- a specific form key, for per-form detail display
- ANY_FORM, which unions every recorded form of the entity; entity-level
  figures (completion, counts, catalog flags) always use it
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final

from dexkeeper.models.progress import (
    ALL_CONTEXTS,
    Context,
    ContextState,
    ProgressRecord,
    coerce_contexts,
)


class FormSelector(Enum):
    ANY = "any"


ANY_FORM: Final = FormSelector.ANY


@dataclass(frozen=True, slots=True)
class ProgressCounts:
    """Totals across all entities."""

    owned_count: int
    variant_count: int


@dataclass(frozen=True, slots=True)
class DexSummary:
    """Figures shown in the progress header and stats bar."""

    completion: int
    owned_count: int
    variant_count: int
    total_count: int


def _selected_states(
    record: ProgressRecord | None,
    form_key: str | FormSelector,
    contexts: frozenset[Context],
) -> Iterator[ContextState]:
    if record is None:
        return
    if form_key is ANY_FORM:
        form_keys: Iterable[str] = record.form_keys
    else:
        form_keys = (form_key,)
    for key in form_keys:
        for context in contexts:
            yield record.state(key, context)


def is_owned(
    record: ProgressRecord | None,
    form_key: str | FormSelector = ANY_FORM,
    contexts: Iterable[Context | str] = ALL_CONTEXTS,
) -> bool:
    """True if any selected (form, context) state is owned."""
    selected = coerce_contexts(contexts)
    return any(state.owned for state in _selected_states(record, form_key, selected))


def is_variant(
    record: ProgressRecord | None,
    form_key: str | FormSelector = ANY_FORM,
    contexts: Iterable[Context | str] = ALL_CONTEXTS,
) -> bool:
    """True if any selected (form, context) state is variant-flagged."""
    selected = coerce_contexts(contexts)
    return any(state.is_variant for state in _selected_states(record, form_key, selected))


def counts(
    records: Mapping[int, ProgressRecord],
    contexts: Iterable[Context | str] = ALL_CONTEXTS,
) -> ProgressCounts:
    """Count owned and variant entities across all records."""
    selected = coerce_contexts(contexts)
    owned_count = 0
    variant_count = 0
    for record in records.values():
        if is_owned(record, ANY_FORM, selected):
            owned_count += 1
        if is_variant(record, ANY_FORM, selected):
            variant_count += 1
    return ProgressCounts(owned_count=owned_count, variant_count=variant_count)


def _percent(part: int, total: int) -> int:
    # round() with halves rounded up
    if total <= 0:
        return 0
    value = (200 * part + total) // (2 * total)
    return max(0, min(100, value))


def completion(
    records: Mapping[int, ProgressRecord],
    total_entity_count: int,
    contexts: Iterable[Context | str] = ALL_CONTEXTS,
) -> int:
    """
    Percentage of the catalog owned, 0..100.

    An empty catalog is 0% complete. Records for ids beyond the catalog
    size still count, but the result never exceeds 100.
    """
    if total_entity_count <= 0:
        return 0
    owned_count = counts(records, contexts).owned_count
    return _percent(owned_count, total_entity_count)


def summarize(
    records: Mapping[int, ProgressRecord],
    total_entity_count: int,
    contexts: Iterable[Context | str] = ALL_CONTEXTS,
) -> DexSummary:
    """Compute completion and counts in one pass."""
    totals = counts(records, contexts)
    return DexSummary(
        completion=_percent(totals.owned_count, total_entity_count),
        owned_count=totals.owned_count,
        variant_count=totals.variant_count,
        total_count=max(total_entity_count, 0),
    )


def format_summary(summary: DexSummary) -> str:
    """
    Format a summary for the stats bar.

    Example:
        "Dex 12% | 123 owned | 4 shiny"
    """
    return (
        f"Dex {summary.completion}% | "
        f"{summary.owned_count} owned | "
        f"{summary.variant_count} shiny"
    )
