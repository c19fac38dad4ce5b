"""Translation store adapters.

One interface, two key-tree schemas; ``KEY_SCHEMA`` picks the backing.
"""

import os
from typing import Dict, Optional, Type

from sqlmodel import Session

from .base import MessageRecord, TranslationStore
from .hierarchical import HierarchicalStore
from .materialized import MaterializedPathStore

STORES: Dict[str, Type[TranslationStore]] = {
    HierarchicalStore.schema: HierarchicalStore,
    MaterializedPathStore.schema: MaterializedPathStore,
}

KEY_SCHEMA = os.getenv("KEY_SCHEMA", HierarchicalStore.schema)


def build_store(session: Session, schema: Optional[str] = None) -> TranslationStore:
    name = (schema or KEY_SCHEMA).strip().lower()
    try:
        store_cls = STORES[name]
    except KeyError:
        raise ValueError(f"Unknown KEY_SCHEMA {name!r}; expected one of {sorted(STORES)}") from None
    return store_cls(session)


__all__ = [
    "MessageRecord",
    "TranslationStore",
    "HierarchicalStore",
    "MaterializedPathStore",
    "build_store",
]
