"""
Progress data model.

A ProgressRecord holds, for one entity, the ownership state of every form in
every tracking context:

    {"forms": {"bulbasaur": {"home": {"owned": true, "shiny": false}, ...}}}

That JSON is the persisted representation. The variant flag is called
``is_variant`` in Python and ``shiny`` on disk.

INVARIANT: every ContextState satisfies ``is_variant => owned``.
Mutations go through ``apply_update`` which enforces the rule; persisted
states that violate it are repaired on read.
"""

import logging
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    model_validator,
)

from dexkeeper.models.failure import ContractViolationError, MalformedRecordError

logger = logging.getLogger(__name__)


class Context(str, Enum):
    """Tracking domains in which ownership is recorded independently."""

    HOME = "home"
    ZA = "za"
    GO = "go"


ALL_CONTEXTS: frozenset[Context] = frozenset(Context)


class ProgressField(str, Enum):
    """Mutable flags of a ContextState."""

    OWNED = "owned"
    IS_VARIANT = "is_variant"


class ContextState(BaseModel):
    """Ownership record for one (entity, form, context) triple."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    owned: StrictBool = False
    is_variant: StrictBool = Field(default=False, alias="shiny")

    @model_validator(mode="before")
    @classmethod
    def _repair_variant_without_owned(cls, data: Any) -> Any:
        if isinstance(data, dict):
            variant = data.get("shiny", data.get("is_variant"))
            if variant is True and data.get("owned", False) is False:
                logger.debug("variant_state_repaired", extra={"state": data})
                data = {**data, "owned": True}
        return data


EMPTY_STATE = ContextState()


def apply_update(state: ContextState, field: ProgressField, value: bool) -> ContextState:
    """
    Return a new ContextState with ``field`` set to ``value``.

    Rules:
    - is_variant=True forces owned=True
    - owned=False forces is_variant=False
    - owned=True leaves is_variant unchanged
    - is_variant=False leaves owned unchanged
    """
    if field is ProgressField.IS_VARIANT:
        if value:
            return ContextState(owned=True, is_variant=True)
        return ContextState(owned=state.owned, is_variant=False)

    if value:
        return ContextState(owned=True, is_variant=state.is_variant)
    return ContextState(owned=False, is_variant=False)


class ProgressRecord(BaseModel):
    """
    Persisted progress for one entity, keyed externally by entity id.

    Form order is insertion order. A form or context that is absent is
    equivalent to the empty state.
    """

    model_config = ConfigDict(frozen=True)

    forms: dict[str, dict[Context, ContextState]] = Field(default_factory=dict)

    @property
    def form_keys(self) -> tuple[str, ...]:
        """Form keys in the order they were first recorded."""
        return tuple(self.forms)

    @property
    def first_form_key(self) -> str | None:
        """First recorded form key, or None for an empty record."""
        return next(iter(self.forms), None)

    def is_empty(self) -> bool:
        """True if no form has been recorded."""
        return not self.forms

    def state(self, form_key: str, context: Context) -> ContextState:
        """Get the state for a form/context pair, default-filled."""
        return self.forms.get(form_key, {}).get(context, EMPTY_STATE)

    def with_update(
        self,
        form_key: str,
        context: Context,
        field: ProgressField,
        value: bool,
    ) -> "ProgressRecord":
        """Return a copy with one (form, context) state updated."""
        form_states = dict(self.forms.get(form_key, {}))
        form_states[context] = apply_update(self.state(form_key, context), field, value)

        forms = dict(self.forms)
        forms[form_key] = form_states
        return ProgressRecord(forms=forms)


# =============================================================================
# ARGUMENT COERCION
# =============================================================================


def coerce_context(value: Context | str) -> Context:
    """Coerce a context argument, rejecting anything outside the fixed set."""
    try:
        return Context(value)
    except ValueError as e:
        allowed = ", ".join(c.value for c in Context)
        raise ContractViolationError(
            f"Unknown context {value!r}",
            detail=f"Expected one of: {allowed}",
        ) from e


def coerce_contexts(values: Any) -> frozenset[Context]:
    """Coerce a collection of contexts; a single context is accepted too."""
    if isinstance(values, (Context, str)):
        return frozenset({coerce_context(values)})
    return frozenset(coerce_context(v) for v in values)


def coerce_field(value: ProgressField | str) -> ProgressField:
    """Coerce a field argument, rejecting anything but owned/is_variant."""
    try:
        return ProgressField(value)
    except ValueError as e:
        raise ContractViolationError(
            f"Unknown progress field {value!r}",
            detail="Expected 'owned' or 'is_variant'",
        ) from e


# =============================================================================
# SERIALIZATION
# =============================================================================


def encode_record(record: ProgressRecord) -> str:
    """Serialize a record to the persisted JSON format."""
    return record.model_dump_json(by_alias=True)


def decode_record(key: str, raw: str) -> ProgressRecord:
    """
    Parse a persisted value.

    Raises:
        MalformedRecordError: If the value is not valid JSON or does not
            match the record schema.
    """
    try:
        return ProgressRecord.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedRecordError(key, detail=str(e)) from e
