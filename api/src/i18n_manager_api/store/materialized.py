from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import delete, or_
from sqlmodel import select

from i18n_models import MaterializedKey, MaterializedTranslation

from i18n_manager_api.errors import KeyNotFound
from .base import TranslationStore


class MaterializedPathStore(TranslationStore):
    """Flat key table: the full dotted path is stored on the row.

    Reads never walk parents and descendants are a prefix range scan. Only
    paths that were written get a row; intermediate segments do not.
    """

    schema = "materialized"
    key_model = MaterializedKey
    translation_model = MaterializedTranslation

    def _find(self, key_path: str) -> Optional[int]:
        return self.session.exec(select(MaterializedKey.id).where(MaterializedKey.key_path == key_path)).first()

    def resolve_existing(self, segments: Sequence[str]) -> Optional[int]:
        return self._find(".".join(segments))

    def resolve_or_create(self, segments: Sequence[str]) -> int:
        key_path = ".".join(segments)
        existing = self._find(key_path)
        if existing is not None:
            return existing
        node = MaterializedKey(key_path=key_path)
        with self.session.begin_nested():
            self.session.add(node)
            self.session.flush()
        return node.id

    def full_path(self, key_id: int) -> str:
        node = self.session.get(MaterializedKey, key_id)
        if node is None:
            raise KeyNotFound(key_id)
        return node.key_path

    def full_paths(self, key_ids: Iterable[int]) -> Dict[int, str]:
        ids = list(set(key_ids))
        if not ids:
            return {}
        rows = self.session.exec(
            select(MaterializedKey.id, MaterializedKey.key_path).where(MaterializedKey.id.in_(ids))
        ).all()
        paths = {row[0]: row[1] for row in rows}
        missing = [key_id for key_id in ids if key_id not in paths]
        if missing:
            raise KeyNotFound(missing[0])
        return paths

    def subtree_ids(self, segments: Sequence[str]) -> List[int]:
        # Intermediate segments have no rows here, so a prefix with nothing
        # stored at it still owns every path underneath.
        key_path = ".".join(segments)
        prefix = key_path + "."
        rows = self.session.exec(
            select(MaterializedKey.id, MaterializedKey.key_path).where(
                or_(
                    MaterializedKey.key_path == key_path,
                    MaterializedKey.key_path.startswith(prefix, autoescape=True),
                )
            )
        ).all()
        exact = [row[0] for row in rows if row[1] == key_path]
        # LIKE is case-insensitive on some backends; re-check the prefix exactly
        nested = sorted(row[0] for row in rows if row[1].startswith(prefix))
        return exact + nested

    def descendant_ids(self, key_id: int) -> List[int]:
        return self.subtree_ids(self.full_path(key_id).split("."))

    def all_key_paths(self) -> List[str]:
        return sorted(self.session.exec(select(MaterializedKey.key_path)).all())

    def delete_keys(self, key_ids: Sequence[int]) -> int:
        if not key_ids:
            return 0
        result = self.session.exec(delete(MaterializedKey).where(MaterializedKey.id.in_(list(key_ids))))
        return result.rowcount or 0
