"""
Static defensive type chart (generation VI onward).

Mirrors the damage_relations the catalog API reports for each type, so the
effectiveness calculator can run without a network round-trip.
"""

from dexkeeper.models.type_relations import TypeRelations

# Catalog order
ALL_TYPES: tuple[str, ...] = (
    "normal",
    "fighting",
    "flying",
    "poison",
    "ground",
    "rock",
    "bug",
    "ghost",
    "steel",
    "fire",
    "water",
    "grass",
    "electric",
    "psychic",
    "ice",
    "dragon",
    "dark",
    "fairy",
)

STATIC_TYPE_RELATIONS: dict[str, TypeRelations] = {
    "normal": TypeRelations.of(
        double_from=["fighting"],
        none_from=["ghost"],
    ),
    "fighting": TypeRelations.of(
        double_from=["flying", "psychic", "fairy"],
        half_from=["rock", "bug", "dark"],
    ),
    "flying": TypeRelations.of(
        double_from=["rock", "electric", "ice"],
        half_from=["fighting", "bug", "grass"],
        none_from=["ground"],
    ),
    "poison": TypeRelations.of(
        double_from=["ground", "psychic"],
        half_from=["fighting", "poison", "bug", "grass", "fairy"],
    ),
    "ground": TypeRelations.of(
        double_from=["water", "grass", "ice"],
        half_from=["poison", "rock"],
        none_from=["electric"],
    ),
    "rock": TypeRelations.of(
        double_from=["fighting", "ground", "steel", "water", "grass"],
        half_from=["normal", "flying", "poison", "fire"],
    ),
    "bug": TypeRelations.of(
        double_from=["flying", "rock", "fire"],
        half_from=["fighting", "ground", "grass"],
    ),
    "ghost": TypeRelations.of(
        double_from=["ghost", "dark"],
        half_from=["poison", "bug"],
        none_from=["normal", "fighting"],
    ),
    "steel": TypeRelations.of(
        double_from=["fighting", "ground", "fire"],
        half_from=[
            "normal",
            "flying",
            "rock",
            "bug",
            "steel",
            "grass",
            "psychic",
            "ice",
            "dragon",
            "fairy",
        ],
        none_from=["poison"],
    ),
    "fire": TypeRelations.of(
        double_from=["ground", "rock", "water"],
        half_from=["bug", "steel", "fire", "grass", "ice", "fairy"],
    ),
    "water": TypeRelations.of(
        double_from=["grass", "electric"],
        half_from=["steel", "fire", "water", "ice"],
    ),
    "grass": TypeRelations.of(
        double_from=["flying", "poison", "bug", "fire", "ice"],
        half_from=["ground", "water", "grass", "electric"],
    ),
    "electric": TypeRelations.of(
        double_from=["ground"],
        half_from=["flying", "steel", "electric"],
    ),
    "psychic": TypeRelations.of(
        double_from=["bug", "ghost", "dark"],
        half_from=["fighting", "psychic"],
    ),
    "ice": TypeRelations.of(
        double_from=["fighting", "rock", "steel", "fire"],
        half_from=["ice"],
    ),
    "dragon": TypeRelations.of(
        double_from=["ice", "dragon", "fairy"],
        half_from=["fire", "water", "grass", "electric"],
    ),
    "dark": TypeRelations.of(
        double_from=["fighting", "bug", "fairy"],
        half_from=["ghost", "dark"],
        none_from=["psychic"],
    ),
    "fairy": TypeRelations.of(
        double_from=["poison", "steel"],
        half_from=["fighting", "bug", "dark"],
        none_from=["dragon"],
    ),
}
