import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ClassVar, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Type

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from i18n_models import Language

from i18n_manager_api.errors import DuplicateLanguage, DuplicateTranslation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageRecord:
    id: int
    key_id: int
    key: str
    locale: str
    message: str


class TranslationStore:
    """Narrow persistence interface shared by both key-tree schemas.

    Subclasses supply the key resolution primitives (``resolve_existing``,
    ``resolve_or_create``, ``full_path``, ``full_paths``, ``descendant_ids``,
    ``all_key_paths``, ``delete_keys``); languages and translation rows are
    handled here. Nothing in this class commits except ``transaction``.
    """

    schema: ClassVar[str]
    key_model: ClassVar[Type[SQLModel]]
    translation_model: ClassVar[Type[SQLModel]]

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back everything on any error."""
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    # --- key resolution (schema specific) ---

    def resolve_existing(self, segments: Sequence[str]) -> Optional[int]:
        raise NotImplementedError

    def resolve_or_create(self, segments: Sequence[str]) -> int:
        raise NotImplementedError

    def full_path(self, key_id: int) -> str:
        raise NotImplementedError

    def full_paths(self, key_ids: Iterable[int]) -> Dict[int, str]:
        raise NotImplementedError

    def descendant_ids(self, key_id: int) -> List[int]:
        """Return ``key_id`` and every id nested beneath it."""
        raise NotImplementedError

    def subtree_ids(self, segments: Sequence[str]) -> List[int]:
        """Ids stored at ``segments`` or anywhere below it; empty if none."""
        key_id = self.resolve_existing(segments)
        if key_id is None:
            return []
        return self.descendant_ids(key_id)

    def all_key_paths(self) -> List[str]:
        raise NotImplementedError

    def delete_keys(self, key_ids: Sequence[int]) -> int:
        raise NotImplementedError

    # --- languages ---

    def list_languages(self) -> List[Language]:
        return list(self.session.exec(select(Language).order_by(Language.code)).all())

    def get_language(self, code: str) -> Optional[Language]:
        return self.session.exec(select(Language).where(Language.code == code)).first()

    def add_language(self, code: str, name: str) -> Language:
        if self.get_language(code) is not None:
            raise DuplicateLanguage(code)
        language = Language(code=code, name=name)
        try:
            with self.session.begin_nested():
                self.session.add(language)
                self.session.flush()
        except IntegrityError as exc:
            raise DuplicateLanguage(code) from exc
        return language

    def ensure_language(self, code: str) -> Language:
        """Return the language row, creating it (name = code) if absent."""
        existing = self.get_language(code)
        if existing is not None:
            return existing
        language = Language(code=code, name=code)
        try:
            with self.session.begin_nested():
                self.session.add(language)
                self.session.flush()
        except IntegrityError:
            # Another writer created it first
            existing = self.get_language(code)
            if existing is None:
                raise
            return existing
        logger.info("Language created implicitly", extra={"language_code": code})
        return language

    # --- translations ---

    def get_translation(self, translation_id: int) -> Optional[SQLModel]:
        return self.session.get(self.translation_model, translation_id)

    def find_translation(self, key_id: int, locale: str) -> Optional[SQLModel]:
        model = self.translation_model
        return self.session.exec(
            select(model).where(model.key_id == key_id, model.language_code == locale)
        ).first()

    def insert_translation(self, key_id: int, locale: str, value: str) -> SQLModel:
        row = self.translation_model(key_id=key_id, language_code=locale, value=value)
        try:
            with self.session.begin_nested():
                self.session.add(row)
                self.session.flush()
        except IntegrityError as exc:
            raise DuplicateTranslation(self.full_path(key_id), locale) from exc
        return row

    def update_translation(self, row: SQLModel, value: str) -> SQLModel:
        row.value = value
        self.session.add(row)
        self.session.flush()
        return row

    def delete_translation(self, row: SQLModel) -> None:
        self.session.delete(row)
        self.session.flush()

    def translations_for_keys(self, key_ids: Iterable[int], locale: Optional[str] = None) -> List[SQLModel]:
        ids = list(key_ids)
        if not ids:
            return []
        model = self.translation_model
        stmt = select(model).where(model.key_id.in_(ids))
        if locale is not None:
            stmt = stmt.where(model.language_code == locale)
        return list(self.session.exec(stmt).all())

    def keys_with_translations(self, key_ids: Iterable[int]) -> Set[int]:
        ids = list(key_ids)
        if not ids:
            return set()
        model = self.translation_model
        rows = self.session.exec(select(model.key_id).where(model.key_id.in_(ids)).distinct()).all()
        return set(rows)

    def delete_translations_for_keys(self, key_ids: Sequence[int]) -> int:
        if not key_ids:
            return 0
        model = self.translation_model
        result = self.session.exec(delete(model).where(model.key_id.in_(list(key_ids))))
        return result.rowcount or 0

    def message_records(
        self,
        locale: Optional[str] = None,
        translation_ids: Optional[Iterable[int]] = None,
    ) -> List[MessageRecord]:
        """Join translation rows with the key path projection."""
        model = self.translation_model
        stmt = select(model)
        if locale is not None:
            stmt = stmt.where(model.language_code == locale)
        if translation_ids is not None:
            stmt = stmt.where(model.id.in_(list(translation_ids)))
        rows = list(self.session.exec(stmt).all())
        paths = self.full_paths({r.key_id for r in rows})
        return [
            MessageRecord(
                id=r.id,
                key_id=r.key_id,
                key=paths[r.key_id],
                locale=r.language_code,
                message=r.value,
            )
            for r in rows
        ]
