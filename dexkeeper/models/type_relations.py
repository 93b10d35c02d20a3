from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TypeRelations:
    """
    Defensive damage relations of one type tag.

    Attributes:
        double_from: Attacking types that deal double damage
        half_from: Attacking types that deal half damage
        none_from: Attacking types that deal no damage
    """

    double_from: frozenset[str] = frozenset()
    half_from: frozenset[str] = frozenset()
    none_from: frozenset[str] = frozenset()

    @classmethod
    def of(
        cls,
        double_from: Iterable[str] = (),
        half_from: Iterable[str] = (),
        none_from: Iterable[str] = (),
    ) -> "TypeRelations":
        return cls(
            double_from=frozenset(double_from),
            half_from=frozenset(half_from),
            none_from=frozenset(none_from),
        )
