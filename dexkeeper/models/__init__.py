from dexkeeper.models.entity import CatalogListing, DexEntry, Entity, EntityDetail, Form
from dexkeeper.models.failure import (
    ContractViolationError,
    FailureDetail,
    FailureKind,
    KnownError,
    MalformedRecordError,
)
from dexkeeper.models.progress import (
    ALL_CONTEXTS,
    Context,
    ContextState,
    ProgressField,
    ProgressRecord,
    apply_update,
    decode_record,
    encode_record,
)
from dexkeeper.models.type_relations import TypeRelations

__all__ = [
    "ALL_CONTEXTS",
    "CatalogListing",
    "Context",
    "ContextState",
    "ContractViolationError",
    "DexEntry",
    "Entity",
    "EntityDetail",
    "FailureDetail",
    "FailureKind",
    "Form",
    "KnownError",
    "MalformedRecordError",
    "ProgressField",
    "ProgressRecord",
    "TypeRelations",
    "apply_update",
    "decode_record",
    "encode_record",
]
