from http import HTTPStatus

from factories import seed_messages
from sqlmodel import select

from i18n_models import Translation, TranslationKey


def test_list_messages_empty(client) -> None:
    response = client.get("/messages/list")
    assert response.status_code == HTTPStatus.OK
    assert response.json() == []


def test_messages_crud_lifecycle(client) -> None:
    # Create
    created = client.post("/messages/item", json={"key": "menu.main.title", "locale": "EN", "message": "Main menu"})
    assert created.status_code == HTTPStatus.CREATED
    body = created.json()
    assert body["key"] == "menu.main.title"
    assert body["locale"] == "en"
    message_id = body["id"]

    # Detail
    got = client.get(f"/messages/item/{message_id}")
    assert got.status_code == HTTPStatus.OK
    assert got.json()["message"] == "Main menu"

    # Update
    updated = client.put(f"/messages/item/{message_id}", json={"message": "Main"})
    assert updated.status_code == HTTPStatus.OK
    assert updated.json() == {"id": message_id, "key": "menu.main.title", "locale": "en", "message": "Main"}

    # Delete
    deleted = client.delete(f"/messages/item/{message_id}")
    assert deleted.status_code == HTTPStatus.NO_CONTENT

    # Detail now 404
    missing = client.get(f"/messages/item/{message_id}")
    assert missing.status_code == HTTPStatus.NOT_FOUND
    assert missing.json()["code"] == "message_not_found"


def test_update_and_delete_unknown_message(client) -> None:
    assert client.put("/messages/item/424242", json={"message": "x"}).status_code == HTTPStatus.NOT_FOUND
    assert client.delete("/messages/item/424242").status_code == HTTPStatus.NOT_FOUND


def test_duplicate_message_conflicts(client) -> None:
    payload = {"key": "common.save", "locale": "en", "message": "Save"}
    assert client.post("/messages/item", json=payload).status_code == HTTPStatus.CREATED
    again = client.post("/messages/item", json={**payload, "message": "Store"})
    assert again.status_code == HTTPStatus.CONFLICT
    assert again.json()["code"] == "duplicate_translation"


def test_empty_key_is_rejected_and_nothing_written(client, session) -> None:
    response = client.post("/messages/item", json={"key": "", "locale": "en", "message": "x"})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.json()["code"] == "invalid_key_path"

    response = client.post("/messages/item", json={"key": "a..b", "locale": "en", "message": "x"})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    assert session.exec(select(TranslationKey)).all() == []
    assert session.exec(select(Translation)).all() == []


def test_invalid_locale_is_rejected(client) -> None:
    response = client.post("/messages/item", json={"key": "a", "locale": "not a locale", "message": "x"})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.json()["code"] == "invalid_language_code"


def test_leaf_prefix_conflict_is_rejected(client) -> None:
    assert client.post("/messages/item", json={"key": "a.b", "locale": "en", "message": "x"}).status_code == 201
    nested = client.post("/messages/item", json={"key": "a.b.c", "locale": "en", "message": "y"})
    assert nested.status_code == HTTPStatus.CONFLICT
    assert nested.json()["code"] == "key_conflict"
    parent = client.post("/messages/item", json={"key": "a", "locale": "de", "message": "z"})
    assert parent.status_code == HTTPStatus.CONFLICT


def test_list_filters_by_key_and_locale(client) -> None:
    seed_messages(client, "en", [("common.loading", "Loading..."), ("common.save", "Save")])
    seed_messages(client, "de", [("common.loading", "Wird geladen...")])

    by_key = client.get("/messages/list", params={"key": "common.loading"}).json()
    assert [(m["key"], m["locale"]) for m in by_key] == [("common.loading", "de"), ("common.loading", "en")]

    by_locale = client.get("/messages/list", params={"locale": "en"}).json()
    assert [m["key"] for m in by_locale] == ["common.loading", "common.save"]

    assert client.get("/messages/list", params={"key": "no.such"}).json() == []


def test_export_and_missing_keys_scenario(client) -> None:
    seed_messages(client, "en", [("common.loading", "Loading...")])
    seed_messages(client, "de", [("common.loading", "Wird geladen...")])
    created = client.post("/languages", json={"code": "fr", "name": "French"})
    assert created.status_code == HTTPStatus.CREATED

    en = client.get("/messages/en.json")
    assert en.status_code == HTTPStatus.OK
    assert en.json() == {"common": {"loading": "Loading..."}}
    assert "attachment" in en.headers["content-disposition"]
    assert 'filename="en.json"' in en.headers["content-disposition"]

    assert client.get("/messages/de.json").json() == {"common": {"loading": "Wird geladen..."}}
    assert client.get("/messages/fr.json").json() == {}

    everything = client.get("/messages").json()
    assert everything == {
        "de": {"common": {"loading": "Wird geladen..."}},
        "en": {"common": {"loading": "Loading..."}},
    }

    report = client.get("/validation/missing-keys", params={"locale": "fr"})
    assert report.status_code == HTTPStatus.OK
    body = report.json()
    assert body["missing_keys"] == ["common.loading"]
    assert body["completeness"] == "0.00%"
    assert body["all_locales"] == ["de", "en", "fr"]
    assert body["key_completeness"] == [{"key": "common.loading", "locales": ["de", "en"], "locale_count": 2}]

    full = client.get("/validation/missing-keys", params={"locale": "en"}).json()
    assert full["missing_keys"] == []
    assert full["completeness"] == "100.00%"


def test_missing_keys_with_no_messages(client) -> None:
    body = client.get("/validation/missing-keys", params={"locale": "en"}).json()
    assert body["completeness"] == "0.00%"
    assert body["total_keys"] == 0


def test_locale_stats(client) -> None:
    seed_messages(client, "en", [("a", "1"), ("b", "2")])
    seed_messages(client, "de", [("a", "eins")])
    stats = {s["locale"]: s for s in client.get("/validation/stats").json()}
    assert stats["en"]["count"] == 2
    assert stats["de"]["missing"] == 1
    assert stats["de"]["percentage"] == 50.0


def test_bulk_import_preserve_then_overwrite(client) -> None:
    seed_messages(client, "de", [("a.b", "X")])

    preserved = client.post(
        "/messages/bulk",
        json={"locale": "de", "messages": [{"key": "a.b", "message": "Y"}], "overwrite_existing": False},
    )
    assert preserved.json() == {"success_count": 1, "inserted": 0, "updated": 0, "skipped": 1}
    assert client.get("/messages/de.json").json() == {"a": {"b": "X"}}

    overwritten = client.post("/messages/import/de", json={"a": {"b": "Y"}})
    assert overwritten.json()["updated"] == 1
    assert client.get("/messages/de.json").json() == {"a": {"b": "Y"}}


def test_import_json_preserve_flag(client) -> None:
    seed_messages(client, "de", [("a.b", "X")])
    response = client.post("/messages/import/de", params={"overwrite_existing": "false"}, json={"a": {"b": "Y", "c": "Z"}})
    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"success_count": 2, "inserted": 1, "updated": 0, "skipped": 1}
    assert client.get("/messages/de.json").json() == {"a": {"b": "X", "c": "Z"}}


def test_import_rejects_conflicting_document(client) -> None:
    seed_messages(client, "en", [("a", "leaf")])
    response = client.post("/messages/import/en", json={"a": {"b": "nested"}})
    assert response.status_code == HTTPStatus.CONFLICT
    assert client.get("/messages/en.json").json() == {"a": "leaf"}


def test_export_filename_uses_normalized_locale(client) -> None:
    seed_messages(client, "pt-BR", [("common.save", "Salvar")])

    response = client.get("/messages/pt_BR.json")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"common": {"save": "Salvar"}}
    assert 'filename="pt-br.json"' in response.headers["content-disposition"]


def test_empty_values_rejected_on_every_write_path(client) -> None:
    bulk = client.post("/messages/bulk", json={"locale": "en", "messages": [{"key": "a", "message": ""}]})
    assert bulk.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    imported = client.post("/messages/import/en", json={"a": {"b": ""}})
    assert imported.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert imported.json()["code"] == "invalid_import_payload"

    created = client.post("/messages/item", json={"key": "a", "locale": "en", "message": ""})
    assert created.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    assert client.get("/messages/list").json() == []
