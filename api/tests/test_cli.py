import json

import httpx
import pytest
from i18n_manager_api import cli


def test_import_posts_file_with_preserve_flag(tmp_path, capsys) -> None:
    source = tmp_path / "de.json"
    source.write_text(json.dumps({"a": {"b": "X"}}), encoding="utf-8")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success_count": 1, "inserted": 1, "updated": 0, "skipped": 0})

    code = cli.main(["--base-url", "http://api.test", "import", "de", str(source), "--preserve"], httpx.MockTransport(handler))

    assert code == 0
    assert seen == {"path": "/messages/import/de", "params": {"overwrite_existing": "false"}, "body": {"a": {"b": "X"}}}
    assert "de: 1 inserted, 0 updated, 0 skipped" in capsys.readouterr().out


def test_export_writes_file(tmp_path) -> None:
    target = tmp_path / "out" / "en.json"
    target.parent.mkdir()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/messages/en.json"
        return httpx.Response(200, json={"common": {"loading": "Загрузка"}})

    cli.main(["--base-url", "http://api.test", "export", "en", "-o", str(target)], httpx.MockTransport(handler))

    assert json.loads(target.read_text(encoding="utf-8")) == {"common": {"loading": "Загрузка"}}


def test_missing_lists_keys(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["locale"] == "fr"
        return httpx.Response(
            200,
            json={"locale": "fr", "missing_keys": ["a", "b"], "missing_count": 2, "completeness": "0.00%"},
        )

    cli.main(["--base-url", "http://api.test", "missing", "fr"], httpx.MockTransport(handler))

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["a", "b"]
    assert "0.00% complete" in captured.err


def test_error_response_exits_nonzero(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"detail": "Invalid language code 'x'", "code": "invalid_language_code"})

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--base-url", "http://api.test", "export", "x"], httpx.MockTransport(handler))

    assert exc_info.value.code == 1
    assert "Invalid language code" in capsys.readouterr().err
