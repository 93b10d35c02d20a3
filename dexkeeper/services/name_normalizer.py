"""
Display names for catalog identifiers.

Catalog identifiers are lowercase with hyphens. A hyphen usually introduces a
form suffix ("charizard-mega-x"), which is tracked through the form key and
dropped from the display name. A fixed set of names use the hyphen as part of
the name itself ("mr-mime", "ho-oh"), and a few need symbols that cannot be
derived mechanically ("nidoran-f").

Rules, first match wins:
1. Exact special case
2. Real hyphen name: capitalize each segment
3. Any other hyphenated name: capitalize the part before the first hyphen
4. Capitalize the first letter
"""

SPECIAL_NAMES: dict[str, str] = {
    "nidoran-f": "Nidoran ♀",
    "nidoran-m": "Nidoran ♂",
}

REAL_HYPHEN_NAMES: frozenset[str] = frozenset(
    {
        "mr-mime",
        "mime-jr",
        "ho-oh",
        "porygon-z",
        "mr-rime",
        "type-null",
        "jangmo-o",
        "hakamo-o",
        "kommo-o",
        "tapu-koko",
        "tapu-lele",
        "tapu-bulu",
        "tapu-fini",
        # Paradox
        "great-tusk",
        "scream-tail",
        "brute-bonnet",
        "flutter-mane",
        "slither-wing",
        "sandy-shocks",
        "iron-treads",
        "iron-bundle",
        "iron-hands",
        "iron-jugulis",
        "iron-moth",
        "iron-thorns",
        "roaring-moon",
        "walking-wake",
        "iron-valiant",
        "gouging-fire",
        "raging-bolt",
        "iron-boulder",
        "iron-crown",
        "iron-leaves",
        # Treasures of Ruin
        "wo-chien",
        "chien-pao",
        "ting-lu",
        "chi-yu",
    }
)


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def is_real_hyphen_name(raw_name: str) -> bool:
    """Whether the hyphen in ``raw_name`` belongs to the name itself."""
    return raw_name in REAL_HYPHEN_NAMES


def normalize_name(raw_name: str) -> str:
    """
    Map a raw catalog identifier to its display label.

    Examples:
        >>> normalize_name("pikachu")
        'Pikachu'
        >>> normalize_name("mr-mime")
        'Mr-Mime'
        >>> normalize_name("charizard-mega-x")
        'Charizard'
    """
    special = SPECIAL_NAMES.get(raw_name)
    if special is not None:
        return special

    if raw_name in REAL_HYPHEN_NAMES:
        return "-".join(_capitalize_first(part) for part in raw_name.split("-"))

    base = raw_name.split("-", 1)[0]
    return _capitalize_first(base)
