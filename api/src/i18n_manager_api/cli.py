"""Command line client for syncing locale files with a running API.

  i18n-manager import de locales/de.json [--preserve]
  i18n-manager export de [-o locales/de.json]
  i18n-manager missing fr
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"


def _fail(response: httpx.Response) -> None:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = response.text
    print(f"{response.request.method} {response.request.url.path} failed ({response.status_code}): {detail}", file=sys.stderr)
    raise SystemExit(1)


def cmd_import(client: httpx.Client, args: argparse.Namespace) -> None:
    payload = json.loads(Path(args.file).read_text(encoding="utf-8"))
    response = client.post(
        f"/messages/import/{args.locale}",
        json=payload,
        params={"overwrite_existing": "false" if args.preserve else "true"},
    )
    if response.status_code != 200:
        _fail(response)
    body = response.json()
    print(
        f"{args.locale}: {body['inserted']} inserted, {body['updated']} updated, {body['skipped']} skipped"
    )


def cmd_export(client: httpx.Client, args: argparse.Namespace) -> None:
    response = client.get(f"/messages/{args.locale}.json")
    if response.status_code != 200:
        _fail(response)
    text = json.dumps(response.json(), ensure_ascii=False, indent=2) + "\n"
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def cmd_missing(client: httpx.Client, args: argparse.Namespace) -> None:
    response = client.get("/validation/missing-keys", params={"locale": args.locale})
    if response.status_code != 200:
        _fail(response)
    report: Dict[str, Any] = response.json()
    for key in report["missing_keys"]:
        print(key)
    print(f"{report['locale']}: {report['completeness']} complete, {report['missing_count']} missing", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync locale JSON files with the i18n API")
    parser.add_argument(
        "--base-url",
        default=os.getenv("API_BASE_URL", DEFAULT_BASE_URL),
        help="API base URL (env API_BASE_URL)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_ = subparsers.add_parser("import", help="Import a nested JSON file for one locale")
    import_.add_argument("locale")
    import_.add_argument("file")
    import_.add_argument(
        "--preserve",
        action="store_true",
        help="Keep existing values instead of overwriting them",
    )
    import_.set_defaults(func=cmd_import)

    export = subparsers.add_parser("export", help="Export one locale as nested JSON")
    export.add_argument("locale")
    export.add_argument("-o", "--output", help="Write to file instead of stdout")
    export.set_defaults(func=cmd_export)

    missing = subparsers.add_parser("missing", help="List keys without a value in a locale")
    missing.add_argument("locale")
    missing.set_defaults(func=cmd_missing)

    return parser


def main(argv: Optional[List[str]] = None, transport: Optional[httpx.BaseTransport] = None) -> int:
    args = build_parser().parse_args(argv)
    with httpx.Client(base_url=args.base_url, timeout=30.0, transport=transport) as client:
        args.func(client, args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
