import pytest
from i18n_manager_api.errors import InvalidImportPayload, KeyConflictError, PathResolutionError
from i18n_manager_api.services import bulk_sync, key_paths
from i18n_manager_api.store import TranslationStore
from sqlmodel import select

from i18n_models import Language


def _value(store, path: str, locale: str):
    key_id = key_paths.resolve_existing(store, path)
    if key_id is None:
        return None
    row = store.find_translation(key_id, locale)
    return row.value if row is not None else None


def test_import_preserves_existing_values(store) -> None:
    bulk_sync.bulk_upsert(store, "de", [("a.b", "X")], overwrite_existing=True)

    result = bulk_sync.import_tree(store, "de", {"a": {"b": "Y"}}, overwrite_existing=False)

    assert (result.inserted, result.updated, result.skipped) == (0, 0, 1)
    assert _value(store, "a.b", "de") == "X"


def test_import_overwrites_existing_values(store) -> None:
    bulk_sync.bulk_upsert(store, "de", [("a.b", "X")], overwrite_existing=True)

    result = bulk_sync.import_tree(store, "de", {"a": {"b": "Y"}}, overwrite_existing=True)

    assert (result.inserted, result.updated, result.skipped) == (0, 1, 0)
    assert result.total == 1
    assert _value(store, "a.b", "de") == "Y"


def test_overwrite_with_same_value_counts_as_skipped(store) -> None:
    bulk_sync.bulk_upsert(store, "de", [("a.b", "X")], overwrite_existing=True)
    result = bulk_sync.bulk_upsert(store, "de", [("a.b", "X")], overwrite_existing=True)
    assert (result.inserted, result.updated, result.skipped) == (0, 0, 1)


def test_bulk_upsert_counts_and_creates_language(store, session) -> None:
    result = bulk_sync.bulk_upsert(
        store,
        "FR",
        [("common.loading", "Chargement..."), ("common.save", "Enregistrer")],
        overwrite_existing=True,
    )
    assert (result.inserted, result.updated, result.skipped) == (2, 0, 0)
    assert [lang.code for lang in session.exec(select(Language)).all()] == ["fr"]
    assert _value(store, "common.save", "fr") == "Enregistrer"


def test_repeated_path_in_batch_last_wins(store) -> None:
    result = bulk_sync.bulk_upsert(store, "en", [("k", "first"), ("k", "second")], overwrite_existing=True)
    assert result.inserted == 1
    assert _value(store, "k", "en") == "second"


def test_empty_input_is_a_no_op(store, session) -> None:
    result = bulk_sync.bulk_upsert(store, "en", [], overwrite_existing=True)
    assert result.total == 0
    assert session.exec(select(Language)).all() == []

    result = bulk_sync.import_tree(store, "en", {}, overwrite_existing=True)
    assert result.total == 0


def test_invalid_path_writes_nothing(store, session) -> None:
    with pytest.raises(PathResolutionError):
        bulk_sync.bulk_upsert(store, "en", [("ok.key", "v"), ("bad..key", "v")], overwrite_existing=True)
    assert session.exec(select(store.key_model)).all() == []


def test_non_string_value_rejected(store) -> None:
    with pytest.raises(InvalidImportPayload):
        bulk_sync.bulk_upsert(store, "en", [("a", 3)], overwrite_existing=True)


def test_conflict_inside_batch_writes_nothing(store, session) -> None:
    with pytest.raises(KeyConflictError):
        bulk_sync.bulk_upsert(store, "en", [("x.y", "1"), ("x", "2")], overwrite_existing=True)
    assert session.exec(select(store.key_model)).all() == []


def test_conflict_with_stored_value_rolls_back_whole_batch(store) -> None:
    bulk_sync.bulk_upsert(store, "en", [("p", "leaf")], overwrite_existing=True)

    with pytest.raises(KeyConflictError):
        bulk_sync.bulk_upsert(store, "en", [("q", "1"), ("p.r", "2")], overwrite_existing=True)

    assert key_paths.resolve_existing(store, "q") is None
    assert _value(store, "p", "en") == "leaf"


def test_empty_value_rejected_and_nothing_written(store, session) -> None:
    with pytest.raises(InvalidImportPayload):
        bulk_sync.import_tree(store, "en", {"a": {"b": "ok", "c": ""}}, overwrite_existing=True)
    assert session.exec(select(store.key_model)).all() == []


@pytest.mark.parametrize(
    ("overwrite_existing", "expected_counts", "expected_value"),
    [(True, (0, 1, 0), "Y"), (False, (0, 0, 1), "X")],
)
def test_row_written_between_lookup_and_insert_follows_policy(
    store, monkeypatch, overwrite_existing, expected_counts, expected_value
) -> None:
    bulk_sync.bulk_upsert(store, "de", [("a.b", "X")], overwrite_existing=True)
    # Lookup misses the row another writer has already committed
    monkeypatch.setattr(TranslationStore, "find_translation", lambda self, key_id, locale: None)

    result = bulk_sync.bulk_upsert(store, "de", [("a.b", "Y")], overwrite_existing=overwrite_existing)

    monkeypatch.undo()
    assert (result.inserted, result.updated, result.skipped) == expected_counts
    assert _value(store, "a.b", "de") == expected_value
