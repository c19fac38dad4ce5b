import pytest
from i18n_manager_api.errors import I18nError
from i18n_manager_api.services import bulk_sync, key_paths
from i18n_manager_api.services import messages as svc
from i18n_manager_api.services.cascade import delete_key_and_descendants


def _seed(store) -> None:
    bulk_sync.bulk_upsert(
        store,
        "en",
        [("a.b.c", "1"), ("a.b.d", "2"), ("a.e", "3"), ("ab", "4")],
        overwrite_existing=True,
    )
    bulk_sync.bulk_upsert(store, "de", [("a.b.c", "eins"), ("a.e", "drei")], overwrite_existing=True)


def test_delete_removes_subtree_and_values(store) -> None:
    _seed(store)

    result = delete_key_and_descendants(store, "a.b")

    assert result.success is True
    assert result.deleted_translation_count == 3
    assert key_paths.resolve_existing(store, "a.b.c") is None
    assert key_paths.resolve_existing(store, "a.b.d") is None
    assert key_paths.resolve_existing(store, "a.b") is None


def test_delete_leaves_ancestors_and_siblings(store) -> None:
    _seed(store)

    delete_key_and_descendants(store, "a.b")

    assert key_paths.resolve_existing(store, "a.e") is not None
    assert key_paths.resolve_existing(store, "ab") is not None
    remaining = sorted((r.key, r.locale) for r in store.message_records())
    assert remaining == [("a.e", "de"), ("a.e", "en"), ("ab", "en")]


def test_delete_counts_key_nodes(tree_store) -> None:
    _seed(tree_store)
    result = delete_key_and_descendants(tree_store, "a.b")
    # a.b, a.b.c, a.b.d
    assert result.deleted_key_count == 3


def test_delete_single_leaf(store) -> None:
    _seed(store)
    result = delete_key_and_descendants(store, "ab")
    assert result.success is True
    assert result.deleted_translation_count == 1
    assert result.deleted_key_count == 1


def test_delete_absent_key_reports_failure(store) -> None:
    _seed(store)
    result = delete_key_and_descendants(store, "nope.nothing")
    assert result.success is False
    assert result.message == "Key not found"
    assert len(store.message_records()) == 6


def test_failure_after_values_deleted_restores_everything(store, monkeypatch) -> None:
    _seed(store)
    before = sorted((r.key, r.locale, r.message) for r in store.message_records())
    cleared = []
    delete_values = type(store).delete_translations_for_keys

    def recording_delete(self, key_ids):
        cleared.append(delete_values(self, key_ids))
        return cleared[-1]

    def failing_delete_keys(self, key_ids):
        raise I18nError("database went away")

    monkeypatch.setattr(type(store), "delete_translations_for_keys", recording_delete)
    monkeypatch.setattr(type(store), "delete_keys", failing_delete_keys)

    with pytest.raises(I18nError):
        delete_key_and_descendants(store, "a.b")

    assert cleared == [3]
    assert sorted((r.key, r.locale, r.message) for r in store.message_records()) == before
    for path in ("a.b", "a.b.c", "a.b.d"):
        assert key_paths.resolve_existing(store, path) is not None


def test_failed_create_leaves_no_key_or_language_behind(store, monkeypatch) -> None:
    def failing_insert(self, key_id, locale, value):
        raise I18nError("database went away")

    monkeypatch.setattr(type(store), "insert_translation", failing_insert)

    with pytest.raises(I18nError):
        svc.create_message(store, "fresh.branch.leaf", "fr", "Bonjour")

    assert key_paths.resolve_existing(store, "fresh") is None
    assert key_paths.resolve_existing(store, "fresh.branch.leaf") is None
    assert store.get_language("fr") is None
    assert store.all_key_paths() == []
