"""
PokeAPI payload parsers.

Pure functions turning raw JSON payloads into catalog models:

- /pokemon?limit=N      -> list[CatalogListing]
- /pokemon/{name}       -> types, sprites, species URL
- /pokemon-species/{id} -> variety URLs (forms), default first
- /type/{name}          -> TypeRelations

API docs: https://pokeapi.co/docs/v2
"""

from typing import Any, TypedDict

from dexkeeper.models.entity import CatalogListing, Form
from dexkeeper.models.type_relations import TypeRelations


class PokeApiFormatError(ValueError):
    """Raised when a payload is missing fields the catalog relies on."""

    pass


class VarietyRef(TypedDict):
    """A species variety: form key plus the URL of its pokemon payload."""

    name: str
    url: str


def parse_listing(payload: dict[str, Any]) -> list[CatalogListing]:
    """
    Parse the paginated pokemon listing.

    Position in the listing becomes the index; ids are derived from it.
    """
    try:
        results = payload["results"]
        return [
            CatalogListing(raw_name=str(item["name"]), index=i)
            for i, item in enumerate(results)
        ]
    except (KeyError, TypeError) as e:
        raise PokeApiFormatError(f"Malformed listing payload: {e}") from e


def parse_types(pokemon: dict[str, Any]) -> tuple[str, ...]:
    """Extract type tags in slot order."""
    try:
        slots = sorted(pokemon["types"], key=lambda t: t.get("slot", 0))
        return tuple(str(slot["type"]["name"]) for slot in slots)
    except (KeyError, TypeError, AttributeError) as e:
        raise PokeApiFormatError(f"Malformed types in pokemon payload: {e}") from e


def parse_species_url(pokemon: dict[str, Any]) -> str:
    try:
        return str(pokemon["species"]["url"])
    except (KeyError, TypeError) as e:
        raise PokeApiFormatError(f"Missing species URL in pokemon payload: {e}") from e


def parse_form(pokemon: dict[str, Any], form_key: str | None = None) -> Form:
    """
    Build a Form from a pokemon payload.

    Sprites may be null for some varieties; they are kept as None.
    """
    sprites = pokemon.get("sprites") or {}
    name = form_key or pokemon.get("name")
    if not name:
        raise PokeApiFormatError("Pokemon payload has no name")
    return Form(
        form_key=str(name),
        normal_sprite=sprites.get("front_default"),
        variant_sprite=sprites.get("front_shiny"),
    )


def parse_varieties(species: dict[str, Any]) -> list[VarietyRef]:
    """
    Extract species varieties, default variety first.

    Catalog order is kept otherwise.
    """
    try:
        varieties = [
            (
                bool(v.get("is_default")),
                VarietyRef(name=v["pokemon"]["name"], url=v["pokemon"]["url"]),
            )
            for v in species["varieties"]
        ]
    except (KeyError, TypeError) as e:
        raise PokeApiFormatError(f"Malformed species varieties: {e}") from e

    defaults = [ref for is_default, ref in varieties if is_default]
    others = [ref for is_default, ref in varieties if not is_default]
    return defaults + others


def parse_type_relations(type_payload: dict[str, Any]) -> TypeRelations:
    """Extract the defensive damage relations of a type."""
    try:
        relations = type_payload["damage_relations"]
        return TypeRelations.of(
            double_from=(t["name"] for t in relations.get("double_damage_from", [])),
            half_from=(t["name"] for t in relations.get("half_damage_from", [])),
            none_from=(t["name"] for t in relations.get("no_damage_from", [])),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise PokeApiFormatError(f"Malformed type payload: {e}") from e
