from dexkeeper.parsers.pokeapi import (
    PokeApiFormatError,
    VarietyRef,
    parse_form,
    parse_listing,
    parse_species_url,
    parse_type_relations,
    parse_types,
    parse_varieties,
)

__all__ = [
    "PokeApiFormatError",
    "VarietyRef",
    "parse_form",
    "parse_listing",
    "parse_species_url",
    "parse_type_relations",
    "parse_types",
    "parse_varieties",
]
