#!/usr/bin/env python3
"""Command line access to the managers.

Each subcommand maps onto one manager method and prints the JSON result on
stdout. Logs go to stderr as JSON lines.

    boxkit collaborations get 1234 --fields role,status
    boxkit allowlist add-domain example.com both
    boxkit tos user-status 42 --user-id 7
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Any

import httpx
from pydantic import ValidationError

from boxkit.client import BoxClient
from boxkit.config import Config
from boxkit.domain.enums import AllowlistDirection, TermsOfServiceType
from boxkit.errors import BoxError
from boxkit.logging_conf import get_logger, setup_logging

logger = get_logger("boxkit.cli")


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(prog="boxkit", description="Box collaboration and terms of service CLI")
    parser.add_argument("--token", default=os.getenv("BOX_ACCESS_TOKEN"), help="access token")
    parser.add_argument("--base-url", default=None, dest="api_root_url", help="API root URL")
    parser.add_argument("--as-user", default=None, help="act on behalf of this user id")
    parser.add_argument("--timeout", type=float, default=None)
    sub = parser.add_subparsers(dest="resource", required=True)

    collab = sub.add_parser("collaborations", help="collaborations on files and folders")
    collab_sub = collab.add_subparsers(dest="action", required=True)
    get = collab_sub.add_parser("get")
    get.add_argument("id")
    get.add_argument("--fields")
    collab_sub.add_parser("pending")
    delete = collab_sub.add_parser("delete")
    delete.add_argument("id")

    allow = sub.add_parser("allowlist", help="collaboration allowlist")
    allow_sub = allow.add_subparsers(dest="action", required=True)
    for name in ("domains", "exemptions"):
        listing = allow_sub.add_parser(name)
        listing.add_argument("--limit", type=int)
        listing.add_argument("--marker")
    add = allow_sub.add_parser("add-domain")
    add.add_argument("domain")
    add.add_argument("direction", choices=[d.value for d in AllowlistDirection])
    remove = allow_sub.add_parser("remove-domain")
    remove.add_argument("id")

    tos = sub.add_parser("tos", help="terms of service")
    tos_sub = tos.add_subparsers(dest="action", required=True)
    listing = tos_sub.add_parser("list")
    listing.add_argument("--tos-type", choices=[t.value for t in TermsOfServiceType])
    tos_get = tos_sub.add_parser("get")
    tos_get.add_argument("id")
    status = tos_sub.add_parser("user-status")
    status.add_argument("tos_id")
    status.add_argument("--user-id")

    return parser.parse_args(argv)


async def dispatch(client: BoxClient, args: argparse.Namespace) -> Any:
    """Call the manager method a parsed command line names."""
    if args.resource == "collaborations":
        if args.action == "get":
            return await client.collaborations.get(args.id, {"fields": args.fields})
        if args.action == "pending":
            return await client.collaborations.get_pending()
        return await client.collaborations.delete(args.id)

    if args.resource == "allowlist":
        allowlist = client.collaboration_allowlist
        if args.action == "domains":
            return await allowlist.get_all_allowlisted_domains({"limit": args.limit, "marker": args.marker})
        if args.action == "exemptions":
            return await allowlist.get_all_exemptions({"limit": args.limit, "marker": args.marker})
        if args.action == "add-domain":
            return await allowlist.add_domain(args.domain, args.direction)
        return await allowlist.remove_domain(args.id)

    if args.action == "list":
        return await client.terms_of_service.get_all({"tos_type": args.tos_type})
    if args.action == "get":
        return await client.terms_of_service.get(args.id)
    return await client.terms_of_service.get_user_status(args.tos_id, {"user_id": args.user_id})


async def run(args: argparse.Namespace, *, transport: httpx.AsyncBaseTransport | None = None) -> int:
    try:
        config = Config.from_env(
            api_root_url=args.api_root_url,
            as_user=args.as_user,
            timeout=args.timeout,
            access_token=args.token,
        )
    except ValidationError as exc:
        logger.error("cli.bad_config", extra={"event": "cli_bad_config", "error": str(exc)})
        return 2
    if not config.access_token:
        logger.error("cli.no_token", extra={"event": "cli_no_token"})
        return 2
    try:
        async with BoxClient(config, transport=transport) as client:
            result = await dispatch(client, args)
    except BoxError as exc:
        logger.error("cli.failed", extra={"event": "cli_failed", "error": str(exc), "code": exc.code})
        return 1
    except httpx.HTTPError as exc:
        logger.error(
            "cli.failed",
            extra={"event": "cli_failed", "error": str(exc), "code": type(exc).__name__},
        )
        return 1
    if result is not None:
        json.dump(result, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> None:
    setup_logging()
    args = parse_args(sys.argv[1:] if argv is None else argv)
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
