"""
Type effectiveness calculator.

Given the one or two type tags of an entity, computes the damage multiplier
of every attacking type against it and classifies each attacking type as a
weakness (> 1), a resistance (< 1, immunities included) or neutral (== 1).

Multipliers compound across both types. Immunities ("no damage from") are
categorical: they are collected while multiplying and applied as a final
clamp to 0, so a double-damage relation from the other type can never
re-inflate an immune entry.

Unknown tags, either in the entity's types or inside a relation set, are
neutral; they are logged and otherwise ignored.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from fractions import Fraction

from dexkeeper.data.type_chart import ALL_TYPES, STATIC_TYPE_RELATIONS
from dexkeeper.models.failure import ContractViolationError
from dexkeeper.models.type_relations import TypeRelations

logger = logging.getLogger(__name__)

RelationLookup = Mapping[str, TypeRelations] | Callable[[str], TypeRelations | None]

MAX_TYPES_PER_ENTITY = 2


@dataclass(frozen=True, slots=True)
class Effectiveness:
    """
    Damage multipliers against one entity.

    Attributes:
        multipliers: Attacking type -> multiplier, for every known type
        weaknesses: Types with multiplier > 1, strongest first
        resistances: Types with multiplier < 1, immunities first
        neutral: Types with multiplier == 1, in chart order
    """

    multipliers: dict[str, float] = field(default_factory=dict)
    weaknesses: list[str] = field(default_factory=list)
    resistances: list[str] = field(default_factory=list)
    neutral: list[str] = field(default_factory=list)

    def multiplier(self, tag: str) -> float:
        """Multiplier for an attacking type; unknown types are neutral."""
        return self.multipliers.get(tag, 1.0)

    @property
    def immunities(self) -> list[str]:
        return [tag for tag in self.resistances if self.multipliers[tag] == 0]


def _lookup(relation_lookup: RelationLookup, tag: str) -> TypeRelations | None:
    if callable(relation_lookup):
        try:
            return relation_lookup(tag)
        except KeyError:
            return None
    return relation_lookup.get(tag)


def _unique_tags(type_tags: Sequence[str]) -> list[str]:
    tags = list(dict.fromkeys(tag.lower() for tag in type_tags))
    if not 1 <= len(tags) <= MAX_TYPES_PER_ENTITY:
        raise ContractViolationError(
            f"An entity has one or two types, got {len(tags)}",
            detail=f"types={list(type_tags)!r}",
        )
    return tags


def compute_effectiveness(
    type_tags: Sequence[str],
    relation_lookup: RelationLookup = STATIC_TYPE_RELATIONS,
    all_tags: Iterable[str] = ALL_TYPES,
) -> Effectiveness:
    """
    Compute attack multipliers against an entity with the given types.

    Args:
        type_tags: The entity's one or two type tags
        relation_lookup: Mapping or callable giving each tag's defensive
            relations; a miss (None or KeyError) makes that type neutral
        all_tags: Every attacking type, in display order

    Returns:
        Effectiveness with sorted weakness and resistance lists.

    Raises:
        ContractViolationError: If type_tags has zero or more than two tags.

    Example:
        >>> result = compute_effectiveness(["grass", "poison"])
        >>> result.weaknesses
        ['fire', 'flying', 'ice', 'psychic']
    """
    tags = _unique_tags(type_tags)
    ordered_tags = list(dict.fromkeys(all_tags))
    known = set(ordered_tags)

    # Fractions keep products of halves exact
    multipliers: dict[str, Fraction] = {tag: Fraction(1) for tag in ordered_tags}
    immune: set[str] = set()

    for tag in tags:
        relations = _lookup(relation_lookup, tag)
        if relations is None:
            logger.debug("unknown_type_tag", extra={"tag": tag})
            continue

        for source in sorted(relations.double_from):
            if source in known:
                multipliers[source] *= 2
        for source in sorted(relations.half_from):
            if source in known:
                multipliers[source] /= 2
        immune.update(source for source in relations.none_from if source in known)

        stray = (relations.double_from | relations.half_from | relations.none_from) - known
        if stray:
            logger.debug(
                "unknown_relation_tags",
                extra={"tag": tag, "unknown": sorted(stray)},
            )

    for source in immune:
        multipliers[source] = Fraction(0)

    weaknesses = sorted(
        (t for t in ordered_tags if multipliers[t] > 1),
        key=lambda t: (-multipliers[t], t),
    )
    resistances = sorted(
        (t for t in ordered_tags if multipliers[t] < 1),
        key=lambda t: (multipliers[t], t),
    )
    neutral = [t for t in ordered_tags if multipliers[t] == 1]

    return Effectiveness(
        multipliers={t: float(m) for t, m in multipliers.items()},
        weaknesses=weaknesses,
        resistances=resistances,
        neutral=neutral,
    )


def format_multiplier(value: float) -> str:
    """
    Format a multiplier for display.

    Examples:
        4.0 -> "×4", 0.5 -> "×½", 0.25 -> "×¼", 0.0 -> "×0"
    """
    if value == 0.5:
        return "×½"
    if value == 0.25:
        return "×¼"
    if value == int(value):
        return f"×{int(value)}"
    return f"×{value:g}"
