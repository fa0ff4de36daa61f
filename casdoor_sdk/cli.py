"""Command-line wrapper around the Casdoor SDK services.

Examples:
    casdoor-cli --config casdoor.toml users --page 1 --page-size 20
    casdoor-cli user alice
    casdoor-cli user-count --online
    casdoor-cli enforce --permission-id built-in/read alice data1 read
    casdoor-cli verify-token eyJhbGc... --algorithm RS256
"""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Any, List, Optional

import httpx

from casdoor_sdk.config import Config, load_config
from casdoor_sdk.core.authn import SUPPORTED_ALGORITHMS
from casdoor_sdk.core.exceptions import CasdoorError
from casdoor_sdk.core.models import Record, UserQueryArgs
from casdoor_sdk.core.sdk import CasdoorSDK
from casdoor_sdk.models import EnforceArgs, EnforceQueryArgs, QueryUserSet


def _jsonable(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="casdoor-cli", description="Casdoor API helper")
    parser.add_argument("--config", help="TOML config file (default: CASDOOR_* environment variables)")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP calls to stderr")

    sub = parser.add_subparsers(dest="cmd", required=True)

    su = sub.add_parser("users", help="List users of the organization")
    su.add_argument("--page", type=int)
    su.add_argument("--page-size", type=int)

    sn = sub.add_parser("user", help="Show one user")
    sn.add_argument("name")

    sc = sub.add_parser("user-count", help="Count users")
    online = sc.add_mutually_exclusive_group()
    online.add_argument("--online", action="store_true")
    online.add_argument("--offline", action="store_true")

    se = sub.add_parser("enforce", help="Check a casbin request")
    se.add_argument("--permission-id")
    se.add_argument("--model-id")
    se.add_argument("--resource-id")
    se.add_argument("--enforcer-id")
    se.add_argument("request", nargs="+", help="Request values, e.g. alice data1 read")

    sv = sub.add_parser("verify-token", help="Verify a JWT locally and print its claims")
    sv.add_argument("token")
    sv.add_argument("--algorithm", default="RS256", choices=sorted(SUPPORTED_ALGORITHMS))

    return parser


async def _run(args: argparse.Namespace, sdk: CasdoorSDK) -> Any:
    if args.cmd == "users":
        result = await sdk.users.get_users(UserQueryArgs(page=args.page, page_size=args.page_size))
        return {"total": result.total, "items": _jsonable(result.items)}
    if args.cmd == "user":
        user = await sdk.users.get_user_by_name(args.name)
        if user is None:
            raise CasdoorError(f"User '{args.name}' not found", 404)
        return _jsonable(user)
    if args.cmd == "user-count":
        is_online = QueryUserSet.ONLINE if args.online else QueryUserSet.OFFLINE if args.offline else QueryUserSet.ALL
        return {"count": await sdk.users.get_user_count(is_online)}
    if args.cmd == "enforce":
        query = EnforceQueryArgs(
            permission_id=args.permission_id,
            model_id=args.model_id,
            resource_id=args.resource_id,
            enforcer_id=args.enforcer_id,
        )
        result = await sdk.enforcers.enforce(EnforceArgs(casbin_request=args.request, query=query))
        return {"allow": result.allow}
    if args.cmd == "verify-token":
        return _jsonable(sdk.authn.parse_jwt_token(args.token, args.algorithm))
    raise ValueError(f"Unknown command {args.cmd!r}")


def main(argv: Optional[List[str]] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
    """Command-line entry point."""
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = Config.from_toml(args.config) if args.config else load_config()
        output = asyncio.run(_run(args, CasdoorSDK(config, transport=transport)))
    except CasdoorError as e:
        print(f"[casdoor] {e.message}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
