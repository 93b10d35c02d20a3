from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Form:
    """
    One visually or mechanically distinct variant of an entity.

    Attributes:
        form_key: Variety name from the catalog (e.g., "charizard-mega-x"),
            unique within the entity
        normal_sprite: Default sprite URL, if the catalog has one
        variant_sprite: Shiny sprite URL, if the catalog has one
    """

    form_key: str
    normal_sprite: str | None = None
    variant_sprite: str | None = None


@dataclass(frozen=True, slots=True)
class Entity:
    """
    One catalog entry.

    ``types`` and ``forms`` are empty until detail has been loaded for the
    entry; once loaded, ``forms`` is non-empty and its first element is the
    canonical form.

    Attributes:
        id: 1-based position in the catalog listing
        raw_name: Identifier from the catalog (e.g., "mr-mime")
        display_name: Normalized label (e.g., "Mr-Mime")
        types: One or two type tags, in slot order
        forms: Forms in catalog order
        sprite_url: Default artwork for list display
    """

    id: int
    raw_name: str
    display_name: str
    types: tuple[str, ...] = ()
    forms: tuple[Form, ...] = ()
    sprite_url: str | None = None

    @property
    def detail_loaded(self) -> bool:
        return bool(self.forms)

    @property
    def canonical_form(self) -> Form | None:
        return self.forms[0] if self.forms else None

    @property
    def canonical_form_key(self) -> str:
        """
        Key of the canonical form.

        Before detail is loaded this is the raw name, which the catalog also
        uses for the default variety.
        """
        return self.forms[0].form_key if self.forms else self.raw_name

    def form(self, form_key: str) -> Form | None:
        """Look up a form by key."""
        for candidate in self.forms:
            if candidate.form_key == form_key:
                return candidate
        return None


@dataclass(frozen=True, slots=True)
class DexEntry:
    """A catalog entity joined with its aggregated progress flags."""

    entity: Entity
    owned: bool = False
    is_variant: bool = False


@dataclass(frozen=True, slots=True)
class CatalogListing:
    """One row of the catalog listing: raw name plus 0-based position."""

    raw_name: str
    index: int


@dataclass(frozen=True, slots=True)
class EntityDetail:
    """Per-entity detail fetched from the catalog."""

    types: tuple[str, ...]
    forms: tuple[Form, ...] = ()
