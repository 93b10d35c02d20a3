import pytest

from dexkeeper.models.failure import ContractViolationError
from dexkeeper.models.progress import Context, ProgressField, ProgressRecord
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


def _record(*updates: tuple[str, Context, ProgressField]) -> ProgressRecord:
    record = ProgressRecord()
    for form_key, context, field in updates:
        record = record.with_update(form_key, context, field, True)
    return record


@pytest.fixture
def records() -> dict[int, ProgressRecord]:
    return {
        # Owned in HOME, base form
        1: _record(("bulbasaur", Context.HOME, ProgressField.OWNED)),
        # Shiny mega only, in GO
        3: _record(
            ("venusaur", Context.HOME, ProgressField.OWNED),
            ("venusaur-mega", Context.GO, ProgressField.IS_VARIANT),
        ),
        # Recorded then cleared
        4: ProgressRecord()
        .with_update("charmander", Context.ZA, ProgressField.OWNED, True)
        .with_update("charmander", Context.ZA, ProgressField.OWNED, False),
    }


class TestIsOwned:
    def test_none_record_is_not_owned(self) -> None:
        assert is_owned(None) is False
        assert is_variant(None) is False

    def test_specific_form(self, records: dict[int, ProgressRecord]) -> None:
        assert is_owned(records[3], "venusaur") is True
        assert is_variant(records[3], "venusaur") is False
        assert is_variant(records[3], "venusaur-mega") is True

    def test_any_form_unions_forms(self, records: dict[int, ProgressRecord]) -> None:
        assert is_variant(records[3], ANY_FORM) is True
        assert is_owned(records[3], ANY_FORM) is True

    def test_context_selection(self, records: dict[int, ProgressRecord]) -> None:
        assert is_owned(records[1], ANY_FORM, {Context.HOME}) is True
        assert is_owned(records[1], ANY_FORM, {Context.ZA, Context.GO}) is False
        assert is_variant(records[3], ANY_FORM, ["home", "za"]) is False

    def test_single_context_as_string(self, records: dict[int, ProgressRecord]) -> None:
        assert is_owned(records[1], "bulbasaur", "home") is True

    def test_unknown_form_is_not_owned(self, records: dict[int, ProgressRecord]) -> None:
        assert is_owned(records[1], "bulbasaur-gmax") is False

    def test_cleared_record_is_not_owned(self, records: dict[int, ProgressRecord]) -> None:
        assert is_owned(records[4]) is False

    def test_unknown_context_rejected(self, records: dict[int, ProgressRecord]) -> None:
        with pytest.raises(ContractViolationError):
            is_owned(records[1], ANY_FORM, {"switch"})


class TestCounts:
    def test_counts(self, records: dict[int, ProgressRecord]) -> None:
        assert counts(records) == ProgressCounts(owned_count=2, variant_count=1)

    def test_counts_by_context(self, records: dict[int, ProgressRecord]) -> None:
        assert counts(records, {Context.GO}) == ProgressCounts(owned_count=1, variant_count=1)

    def test_counts_empty(self) -> None:
        assert counts({}) == ProgressCounts(owned_count=0, variant_count=0)


class TestCompletion:
    def test_empty_catalog_is_zero(self, records: dict[int, ProgressRecord]) -> None:
        assert completion(records, 0) == 0
        assert completion({}, 0) == 0

    def test_rounds_to_nearest(self, records: dict[int, ProgressRecord]) -> None:
        # 2 owned of 3
        assert completion(records, 3) == 67
        # 2 owned of 1025
        assert completion(records, 1025) == 0

    def test_half_rounds_up(self) -> None:
        owned = {i: _record(("x", Context.HOME, ProgressField.OWNED)) for i in range(1, 2)}
        assert completion(owned, 200) == 1  # 0.5%

    def test_full(self, records: dict[int, ProgressRecord]) -> None:
        assert completion(records, 2) == 100

    def test_never_exceeds_bounds(self, records: dict[int, ProgressRecord]) -> None:
        for total in range(0, 10):
            assert 0 <= completion(records, total) <= 100

    def test_uses_any_form(self) -> None:
        only_mega = {6: _record(("charizard-mega-x", Context.GO, ProgressField.OWNED))}
        assert completion(only_mega, 1) == 100


class TestSummary:
    def test_summarize(self, records: dict[int, ProgressRecord]) -> None:
        summary = summarize(records, 4)
        assert summary == DexSummary(completion=50, owned_count=2, variant_count=1, total_count=4)

    def test_format_summary(self) -> None:
        summary = DexSummary(completion=12, owned_count=123, variant_count=4, total_count=1025)
        assert format_summary(summary) == "Dex 12% | 123 owned | 4 shiny"
