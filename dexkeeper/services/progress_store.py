"""
Progress store.

Owns the mapping from entity id to ProgressRecord on top of a KeyValueBackend.
Each record is stored as JSON under ``key_prefix + str(entity_id)``.

Every operation performs at most one logical read and one logical write
against the backend. Bulk mutation reads all targets with one get_many and
writes them back with one set_many, so a partially applied bulk edit is
never persisted.

INVARIANT: persistence corruption never reaches the caller. A value that
cannot be decoded is logged and replaced by an empty record.
"""

import logging
from collections.abc import Iterable, Mapping

from dexkeeper.config import settings
from dexkeeper.db.backend import KeyValueBackend
from dexkeeper.models.failure import ContractViolationError, MalformedRecordError
from dexkeeper.models.progress import (
    Context,
    ProgressField,
    ProgressRecord,
    coerce_context,
    coerce_field,
    decode_record,
    encode_record,
)

logger = logging.getLogger(__name__)


def _check_entity_id(entity_id: int) -> int:
    if isinstance(entity_id, bool) or not isinstance(entity_id, int) or entity_id < 1:
        raise ContractViolationError(f"Entity id must be a positive integer, got {entity_id!r}")
    return entity_id


def _check_value(value: bool) -> bool:
    if not isinstance(value, bool):
        raise ContractViolationError(f"Progress value must be a bool, got {value!r}")
    return value


class ProgressStore:
    """Read, mutate, and reset persisted progress records."""

    def __init__(
        self,
        backend: KeyValueBackend,
        key_prefix: str | None = None,
    ) -> None:
        self._backend = backend
        self._key_prefix = key_prefix if key_prefix is not None else settings.progress_key_prefix

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    def key_for(self, entity_id: int) -> str:
        """Backend key of an entity's progress record."""
        return f"{self._key_prefix}{entity_id}"

    def id_from_key(self, key: str) -> int | None:
        """
        Recover the entity id from a backend key.

        Returns None for keys that are not progress records.
        """
        if not key.startswith(self._key_prefix):
            return None
        suffix = key[len(self._key_prefix) :]
        if not (suffix.isascii() and suffix.isdigit()):
            return None
        entity_id = int(suffix)
        return entity_id if entity_id > 0 else None

    def _decode(self, key: str, raw: str) -> ProgressRecord:
        try:
            return decode_record(key, raw)
        except MalformedRecordError as e:
            logger.warning(
                "malformed_progress_record",
                extra={"key": key, "detail": (e.detail or "")[:200]},
            )
            return ProgressRecord()

    async def load(self, ids: Iterable[int]) -> dict[int, ProgressRecord]:
        """
        Load persisted records for the given ids.

        Ids with no stored record are omitted; callers default-fill them.
        Ids whose stored value is malformed map to an empty record.
        """
        unique_ids = list(dict.fromkeys(_check_entity_id(i) for i in ids))
        if not unique_ids:
            return {}

        keys = [self.key_for(i) for i in unique_ids]
        stored = dict(await self._backend.get_many(keys))

        records: dict[int, ProgressRecord] = {}
        for entity_id, key in zip(unique_ids, keys, strict=True):
            raw = stored.get(key)
            if raw is None:
                continue
            records[entity_id] = self._decode(key, raw)
        return records

    async def load_all(self) -> dict[int, ProgressRecord]:
        """Load every persisted progress record."""
        ids = [
            entity_id
            for entity_id in (self.id_from_key(k) for k in await self._backend.list_keys())
            if entity_id is not None
        ]
        return await self.load(sorted(ids))

    async def get(self, entity_id: int) -> ProgressRecord:
        """Load one record, default-filled when absent or malformed."""
        key = self.key_for(_check_entity_id(entity_id))
        raw = await self._backend.get(key)
        if raw is None:
            return ProgressRecord()
        return self._decode(key, raw)

    async def mutate(
        self,
        entity_id: int,
        form_key: str,
        context: Context | str,
        field: ProgressField | str,
        value: bool,
    ) -> ProgressRecord:
        """
        Set one flag of one (form, context) state and persist the record.

        The invariant-preserving update rule is applied:
        variant=True also sets owned, owned=False also clears variant.

        Returns:
            The updated record as written.
        """
        if not form_key:
            raise ContractViolationError("Form key must be a non-empty string")
        ctx = coerce_context(context)
        progress_field = coerce_field(field)
        _check_value(value)

        current = await self.get(entity_id)
        updated = current.with_update(form_key, ctx, progress_field, value)
        await self._backend.set(self.key_for(entity_id), encode_record(updated))

        logger.debug(
            "progress_mutated",
            extra={
                "entity_id": entity_id,
                "form_key": form_key,
                "context": ctx.value,
                "field": progress_field.value,
                "value": value,
            },
        )
        return updated

    async def bulk_mutate(
        self,
        ids: Iterable[int],
        context: Context | str,
        field: ProgressField | str,
        value: bool = True,
        canonical_forms: Mapping[int, str] | None = None,
    ) -> None:
        """
        Mark many entities owned (or owned and variant) in one write.

        Bulk edits operate at entity granularity, so only the canonical form
        of each entity is touched. The form key comes from
        ``canonical_forms[id]`` when given, otherwise from the first form
        already recorded for the entity.

        Setting ``is_variant`` sets ``owned`` in the same write.

        Raises:
            ContractViolationError: If ``value`` is not True, or an id has no
                known canonical form. Nothing is written in that case.
        """
        ctx = coerce_context(context)
        progress_field = coerce_field(field)
        if _check_value(value) is not True:
            raise ContractViolationError(
                "Bulk edits only set flags",
                detail="Use mutate() to clear owned or variant on a single entity",
            )

        unique_ids = list(dict.fromkeys(_check_entity_id(i) for i in ids))
        if not unique_ids:
            return

        current = await self.load(unique_ids)
        forms = canonical_forms or {}

        pairs: list[tuple[str, str]] = []
        for entity_id in unique_ids:
            record = current.get(entity_id, ProgressRecord())
            form_key = forms.get(entity_id) or record.first_form_key
            if not form_key:
                raise ContractViolationError(
                    f"No canonical form known for entity {entity_id}",
                    detail="Pass canonical_forms for entities without stored progress",
                )
            updated = record.with_update(form_key, ctx, progress_field, True)
            pairs.append((self.key_for(entity_id), encode_record(updated)))

        await self._backend.set_many(pairs)

        logger.info(
            "progress_bulk_mutated",
            extra={
                "entity_count": len(pairs),
                "context": ctx.value,
                "field": progress_field.value,
            },
        )

    async def reset_all(self) -> int:
        """
        Delete every persisted progress record.

        Keys outside the progress prefix (e.g., preferences) are kept.
        Returns the number of records removed.
        """
        keys = [k for k in await self._backend.list_keys() if self.id_from_key(k) is not None]
        if keys:
            await self._backend.delete_many(keys)

        logger.info("progress_reset", extra={"removed_count": len(keys)})
        return len(keys)
