# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""serverfn CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from ..client import ServerFnClient
from ..config import FetcherSettings, load_fetcher_settings
from ..errors import categorize_exception, error_category_to_reason
from ..http.models import HttpResponse
from ..log import setup_logging
from ..serializer import start_serializer
from ..signals import NotFoundSignal, RedirectSignal

logger = logging.getLogger(__name__)

CLI_TEXT_TRUNCATION_BYTES = 4096
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_REDIRECT = 2
EXIT_NOT_FOUND = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Call a server function over HTTP and print its result")
    parser.add_argument("url", help="Server function URL (relative URLs use SERVERFN_BASE_URL)")
    parser.add_argument("--method", default="POST", help="HTTP method for structured calls (default: POST)")
    parser.add_argument("--data", help="JSON value sent as the call's data")
    parser.add_argument("--context", help="JSON value sent as the call's context")
    parser.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Extra request header for structured calls (repeatable)",
    )
    parser.add_argument(
        "--positional",
        action="append",
        metavar="JSON",
        help="Send positional arguments instead of a structured call (repeatable, one JSON value each)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of a plain rendering",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for local/self-signed servers)",
    )
    parser.add_argument("--log-level", help="Logging level (default: SERVERFN_LOG_LEVEL or WARNING)")
    return parser


def _parse_json_arg(raw: str | None, name: str) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{name} is not valid JSON: {exc.msg}") from exc


def _parse_headers(raw_headers: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"header must look like 'Name: value', got {raw!r}")
        headers[name.strip()] = value.strip()
    return headers


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max_bytes - len(suffix.encode("utf-8"))
    if keep <= 0:
        return suffix.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def _render(result: Any, *, as_json: bool) -> str:
    if isinstance(result, HttpResponse):
        result = result.text
    if as_json:
        return json.dumps(start_serializer.encode(result), indent=2, sort_keys=True)
    if isinstance(result, str):
        return result
    return json.dumps(start_serializer.encode(result), sort_keys=True)


async def _run(args: argparse.Namespace, settings: FetcherSettings) -> Any:
    async with ServerFnClient(settings=settings) as client:
        if args.positional is not None:
            return await client.call(args.url, *args.positional_values)
        return await client.call_server_fn(
            args.url,
            method=args.method,
            data=args.data_value,
            context=args.context_value,
            headers=args.header_values,
        )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        args.positional_values = [_parse_json_arg(raw, "--positional") for raw in args.positional or []]
        args.data_value = _parse_json_arg(args.data, "--data")
        args.context_value = _parse_json_arg(args.context, "--context")
        args.header_values = _parse_headers(args.header)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    settings = load_fetcher_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    try:
        result = asyncio.run(_run(args, settings))
    except RedirectSignal as signal:
        print(f"Redirect: {signal.to or '-'}")
        return EXIT_REDIRECT
    except NotFoundSignal as signal:
        print(str(signal))
        return EXIT_NOT_FOUND
    except Exception as exc:  # noqa: BLE001
        logger.debug("server function call failed", exc_info=True)
        reason = error_category_to_reason(categorize_exception(exc))
        print(f"error: {reason}: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print(_truncate_text_bytes(_render(result, as_json=args.json), CLI_TEXT_TRUNCATION_BYTES))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
