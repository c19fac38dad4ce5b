from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from sqlalchemy import delete
from sqlmodel import select

from i18n_models import Translation, TranslationKey

from i18n_manager_api.errors import CycleDetected, IntegrityViolation, KeyNotFound
from .base import TranslationStore

# id -> (parent_id, segment)
KeyArena = Dict[int, Tuple[Optional[int], str]]


def walk_path(arena: KeyArena, key_id: int) -> str:
    """Rebuild a dotted path by following parent links up to the root."""
    if key_id not in arena:
        raise KeyNotFound(key_id)
    segments: List[str] = []
    seen: Set[int] = set()
    current: Optional[int] = key_id
    while current is not None:
        if current in seen:
            raise CycleDetected(current)
        seen.add(current)
        node = arena.get(current)
        if node is None:
            raise IntegrityViolation(f"Key node {key_id} has a missing ancestor {current}")
        parent_id, segment = node
        segments.append(segment)
        current = parent_id
    segments.reverse()
    return ".".join(segments)


class HierarchicalStore(TranslationStore):
    """Adjacency-list tree: each node holds one segment and a parent id."""

    schema = "hierarchical"
    key_model = TranslationKey
    translation_model = Translation

    def _find_child(self, parent_id: Optional[int], segment: str) -> Optional[int]:
        stmt = select(TranslationKey.id).where(TranslationKey.key == segment)
        if parent_id is None:
            stmt = stmt.where(TranslationKey.parent_id.is_(None))
        else:
            stmt = stmt.where(TranslationKey.parent_id == parent_id)
        return self.session.exec(stmt).first()

    def resolve_existing(self, segments: Sequence[str]) -> Optional[int]:
        parent_id: Optional[int] = None
        for segment in segments:
            parent_id = self._find_child(parent_id, segment)
            if parent_id is None:
                return None
        return parent_id

    def resolve_or_create(self, segments: Sequence[str]) -> int:
        parent_id: Optional[int] = None
        for segment in segments:
            child_id = self._find_child(parent_id, segment)
            if child_id is None:
                node = TranslationKey(parent_id=parent_id, key=segment)
                # Savepoint: a unique violation only discards this insert
                with self.session.begin_nested():
                    self.session.add(node)
                    self.session.flush()
                child_id = node.id
            parent_id = child_id
        if parent_id is None:
            raise KeyNotFound(".".join(segments))
        return parent_id

    def _load_arena(self) -> KeyArena:
        rows = self.session.exec(
            select(TranslationKey.id, TranslationKey.parent_id, TranslationKey.key)
        ).all()
        return {row[0]: (row[1], row[2]) for row in rows}

    def full_path(self, key_id: int) -> str:
        segments: List[str] = []
        seen: Set[int] = set()
        current: Optional[int] = key_id
        while current is not None:
            if current in seen:
                raise CycleDetected(current)
            seen.add(current)
            node = self.session.get(TranslationKey, current)
            if node is None:
                if current == key_id:
                    raise KeyNotFound(key_id)
                raise IntegrityViolation(f"Key node {key_id} has a missing ancestor {current}")
            segments.append(node.key)
            current = node.parent_id
        segments.reverse()
        return ".".join(segments)

    def full_paths(self, key_ids: Iterable[int]) -> Dict[int, str]:
        ids = set(key_ids)
        if not ids:
            return {}
        arena = self._load_arena()
        return {key_id: walk_path(arena, key_id) for key_id in ids}

    def descendant_ids(self, key_id: int) -> List[int]:
        collected: List[int] = [key_id]
        seen: Set[int] = {key_id}
        frontier: List[int] = [key_id]
        while frontier:
            children = self.session.exec(
                select(TranslationKey.id).where(TranslationKey.parent_id.in_(frontier))
            ).all()
            frontier = []
            for child_id in children:
                if child_id in seen:
                    raise CycleDetected(child_id)
                seen.add(child_id)
                collected.append(child_id)
                frontier.append(child_id)
        return collected

    def all_key_paths(self) -> List[str]:
        arena = self._load_arena()
        return sorted(walk_path(arena, key_id) for key_id in arena)

    def delete_keys(self, key_ids: Sequence[int]) -> int:
        if not key_ids:
            return 0
        # Rows removed by ON DELETE CASCADE are not part of rowcount, and the
        # ids all came from descendant_ids in this transaction.
        self.session.exec(delete(TranslationKey).where(TranslationKey.id.in_(list(key_ids))))
        return len(key_ids)
