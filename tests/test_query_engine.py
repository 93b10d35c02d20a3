import pytest

from dexkeeper.models.entity import DexEntry, Entity, Form
from dexkeeper.services.query_engine import (
    MISSING_TOKEN,
    NOT_VARIANT_TOKEN,
    TYPE_ALIASES,
    VARIANT_TOKEN,
    ParsedQuery,
    filter_entries,
    parse_query,
)


def _names(entries: list[DexEntry]) -> list[str]:
    return [entry.entity.display_name for entry in entries]


@pytest.fixture
def catalog(sample_entries: list[DexEntry]) -> list[DexEntry]:
    """Bulbasaur (owned, shiny), Charmander (missing), Charmeleon (owned), Oddish (missing)."""
    charmeleon = Entity(
        id=5,
        raw_name="charmeleon",
        display_name="Charmeleon",
        types=("fire",),
        forms=(Form("charmeleon"),),
    )
    oddish = Entity(
        id=43,
        raw_name="oddish",
        display_name="Oddish",
        types=("grass", "poison"),
        forms=(Form("oddish"),),
    )
    return [
        *sample_entries,
        DexEntry(entity=charmeleon, owned=True, is_variant=False),
        DexEntry(entity=oddish, owned=False, is_variant=False),
    ]


class TestParseQuery:
    def test_splits_trims_and_lowercases(self) -> None:
        parsed = parse_query(" Char ,  FUOCO ")
        assert parsed.text_parts == ("char", "fuoco")
        assert parsed.type_tags == frozenset({"fire"})
        assert parsed.tokens == ()

    def test_special_tokens(self) -> None:
        parsed = parse_query("Variante, mancanti")
        assert parsed.tokens == (VARIANT_TOKEN, MISSING_TOKEN)
        assert parsed.text_parts == ()
        assert parsed.name_prefix is None

    def test_empty_parts_dropped(self) -> None:
        assert parse_query(" , ,") == ParsedQuery()
        assert parse_query("").is_empty

    def test_type_alias_is_not_a_name_prefix(self) -> None:
        parsed = parse_query("fuoco, char")
        assert parsed.text_parts == ("fuoco", "char")
        assert parsed.name_parts == ("char",)
        assert parsed.name_prefix == "char"
        assert parse_query("erba").name_prefix is None

    def test_token_must_match_whole_part(self) -> None:
        parsed = parse_query("variantes")
        assert parsed.tokens == ()
        assert parsed.text_parts == ("variantes",)

    def test_alias_table_covers_every_type(self) -> None:
        assert len(set(TYPE_ALIASES.values())) == 18


class TestFilterEntries:
    def test_variant_token(self, sample_entries: list[DexEntry]) -> None:
        assert _names(filter_entries(sample_entries, "variante")) == ["Bulbasaur"]

    def test_name_prefix(self, sample_entries: list[DexEntry]) -> None:
        assert _names(filter_entries(sample_entries, "char")) == ["Charmander"]

    def test_missing_token(self, sample_entries: list[DexEntry]) -> None:
        assert _names(filter_entries(sample_entries, "mancanti")) == ["Charmander"]

    def test_type_alias(self, sample_entries: list[DexEntry]) -> None:
        assert _names(filter_entries(sample_entries, "erba")) == ["Bulbasaur"]

    def test_not_variant_token(self, catalog: list[DexEntry]) -> None:
        assert _names(filter_entries(catalog, NOT_VARIANT_TOKEN)) == [
            "Charmander",
            "Charmeleon",
            "Oddish",
        ]

    def test_empty_query_keeps_everything(self, catalog: list[DexEntry]) -> None:
        assert filter_entries(catalog, "") == catalog
        assert filter_entries(catalog, " , ") == catalog

    def test_prefix_not_substring(self, catalog: list[DexEntry]) -> None:
        assert filter_entries(catalog, "saur") == []

    def test_tokens_are_conjunctive(self, catalog: list[DexEntry]) -> None:
        assert filter_entries(catalog, "variante, mancanti") == []

    def test_token_combined_with_type(self, catalog: list[DexEntry]) -> None:
        assert _names(filter_entries(catalog, "mancanti, erba")) == ["Oddish"]

    def test_name_or_type(self, catalog: list[DexEntry]) -> None:
        # "odd" matches Oddish by name; "fuoco" matches both fire entries by type
        assert _names(filter_entries(catalog, "odd, fuoco")) == [
            "Charmander",
            "Charmeleon",
            "Oddish",
        ]

    def test_alias_before_name_part(self, sample_entries: list[DexEntry]) -> None:
        assert _names(filter_entries(sample_entries, "erba, char")) == [
            "Bulbasaur",
            "Charmander",
        ]

    def test_only_first_text_part_is_a_name_prefix(self, catalog: list[DexEntry]) -> None:
        assert _names(filter_entries(catalog, "bulb, odd")) == ["Bulbasaur"]

    def test_owned_only(self, catalog: list[DexEntry]) -> None:
        assert _names(filter_entries(catalog, "char", owned_only=True)) == ["Charmeleon"]
        assert _names(filter_entries(catalog, "", owned_only=True)) == [
            "Bulbasaur",
            "Charmeleon",
        ]

    def test_owned_only_with_missing_token(self, catalog: list[DexEntry]) -> None:
        assert filter_entries(catalog, "mancanti", owned_only=True) == []

    def test_preserves_catalog_order(self, catalog: list[DexEntry]) -> None:
        reversed_catalog = list(reversed(catalog))
        assert _names(filter_entries(reversed_catalog, "char, veleno")) == [
            "Oddish",
            "Charmeleon",
            "Charmander",
            "Bulbasaur",
        ]

    def test_case_insensitive_name(self, catalog: list[DexEntry]) -> None:
        assert _names(filter_entries(catalog, "ODD")) == ["Oddish"]

    def test_symbol_names(self) -> None:
        nidoran = Entity(id=29, raw_name="nidoran-f", display_name="Nidoran ♀")
        entries = [DexEntry(entity=nidoran)]
        assert filter_entries(entries, "nidoran ♀") == entries
