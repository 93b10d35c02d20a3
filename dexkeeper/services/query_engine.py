"""
Search query engine.

A query is a comma-separated list of parts, e.g. "mancanti, erba".
Each part is trimmed and lowercased, then classified:

- Special tokens are hard constraints on progress flags, all ANDed:
    "variante"      -> variant-flagged
    "non variante"  -> not variant-flagged
    "mancanti"      -> not owned
- Type aliases ("erba", "fuoco", ...) match entities of that type
- Anything else is a name prefix

Name and type matching are alternatives ("search by name or by type" is one
intent): an entity passes if its display name starts with the first part
that is neither a special token nor a type alias, OR any part names one of
its types. A query made only of
special tokens skips that step. The owned-only switch is applied last.

Filtering is stable: results keep catalog order.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from dexkeeper.models.entity import DexEntry

VARIANT_TOKEN = "variante"
NOT_VARIANT_TOKEN = "non variante"
MISSING_TOKEN = "mancanti"

SPECIAL_TOKENS: frozenset[str] = frozenset({VARIANT_TOKEN, NOT_VARIANT_TOKEN, MISSING_TOKEN})

# Localized type name -> type tag
TYPE_ALIASES: dict[str, str] = {
    "normale": "normal",
    "lotta": "fighting",
    "volante": "flying",
    "veleno": "poison",
    "terra": "ground",
    "roccia": "rock",
    "coleottero": "bug",
    "spettro": "ghost",
    "acciaio": "steel",
    "fuoco": "fire",
    "acqua": "water",
    "erba": "grass",
    "elettro": "electric",
    "psico": "psychic",
    "ghiaccio": "ice",
    "drago": "dragon",
    "buio": "dark",
    "folletto": "fairy",
}


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """
    A query split into its predicate classes.

    Attributes:
        tokens: Special tokens present, in query order
        text_parts: Every non-special part (type aliases included), in order
        name_parts: Text parts that are not type aliases, in order
        type_tags: Tags named by type-alias parts
    """

    tokens: tuple[str, ...] = ()
    text_parts: tuple[str, ...] = ()
    name_parts: tuple[str, ...] = ()
    type_tags: frozenset[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not self.tokens and not self.text_parts

    @property
    def name_prefix(self) -> str | None:
        """First name part, matched against display names."""
        return self.name_parts[0] if self.name_parts else None


def parse_query(query: str) -> ParsedQuery:
    """
    Split a search string into special tokens, text parts and type tags.

    Examples:
        >>> parse_query("Mancanti, Erba, char").name_prefix
        'char'
    """
    parts = [part.strip().lower() for part in query.split(",")]
    parts = [part for part in parts if part]

    tokens = tuple(part for part in parts if part in SPECIAL_TOKENS)
    text_parts = tuple(part for part in parts if part not in SPECIAL_TOKENS)
    name_parts = tuple(part for part in text_parts if part not in TYPE_ALIASES)
    type_tags = frozenset(TYPE_ALIASES[part] for part in text_parts if part in TYPE_ALIASES)

    return ParsedQuery(
        tokens=tokens,
        text_parts=text_parts,
        name_parts=name_parts,
        type_tags=type_tags,
    )


def _tokens_hold(entry: DexEntry, tokens: Iterable[str]) -> bool:
    for token in tokens:
        if token == VARIANT_TOKEN and not entry.is_variant:
            return False
        if token == NOT_VARIANT_TOKEN and entry.is_variant:
            return False
        if token == MISSING_TOKEN and entry.owned:
            return False
    return True


def matches(entry: DexEntry, parsed: ParsedQuery) -> bool:
    """Whether one entry satisfies a parsed query (owned-only excluded)."""
    if not _tokens_hold(entry, parsed.tokens):
        return False

    if not parsed.text_parts:
        return True

    prefix = parsed.name_prefix
    name_match = prefix is not None and entry.entity.display_name.lower().startswith(prefix)
    type_match = any(tag in parsed.type_tags for tag in entry.entity.types)
    return name_match or type_match


def filter_entries(
    entries: Iterable[DexEntry],
    query: str,
    *,
    owned_only: bool = False,
) -> list[DexEntry]:
    """
    Filter catalog entries by a search query.

    Args:
        entries: Catalog rows joined with progress, in catalog order
        query: Raw search string
        owned_only: Keep only owned entries

    Returns:
        Matching entries in catalog order.
    """
    parsed = parse_query(query)
    return [
        entry
        for entry in entries
        if matches(entry, parsed) and (not owned_only or entry.owned)
    ]
