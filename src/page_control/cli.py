from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .clients import PageControlClient
from .config import ConfigError, load_config
from .error_presenter import present_error
from .exceptions import ApiError, InvalidSelectionError, MalformedRegistryState
from .http_client import HttpClient
from .log import get_logger
from .navigation import build_catalog, navigation_forest
from .payload import DEFAULT_STATUS, DEFAULT_USER_IDS
from .permission_cache import PermissionCache
from .provisioning import ProvisioningSession
from .selection import ALL_OPTION
from .submitter import ProvisioningSubmitter
from .telemetry import TelemetryLogger


def _catalog(args: argparse.Namespace):
    if not args.navigation_file:
        return build_catalog(navigation_forest())
    try:
        data = json.loads(Path(args.navigation_file).read_text(encoding="utf-8"))
        forest = navigation_forest(data) if isinstance(data, dict) else data
        return build_catalog(forest)
    except (OSError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid navigation file {args.navigation_file}: {exc}") from exc


def _client(args: argparse.Namespace) -> PageControlClient:
    config = load_config(args.env_file)
    return PageControlClient(http=HttpClient(config), access_token=args.token or config.access_token)


def _session(args: argparse.Namespace, *, submitting: bool = False) -> ProvisioningSession:
    catalog = _catalog(args)
    client = _client(args) if submitting or not args.registry_file else None
    if args.registry_file:
        cache = PermissionCache(client, raw=Path(args.registry_file).read_text(encoding="utf-8"))
    else:
        cache = PermissionCache(client)
        cache.refresh()
    telemetry = TelemetryLogger()
    submitter = ProvisioningSubmitter(client, cache.refresh, telemetry=telemetry) if client else None
    return ProvisioningSession(
        catalog, cache.read(), submitter, user_ids=args.user_ids, status=args.status, telemetry=telemetry
    )


def cmd_catalog(args: argparse.Namespace) -> None:
    print(json.dumps([entry.model_dump() for entry in _catalog(args)], indent=2))


def cmd_options(args: argparse.Namespace) -> None:
    print(json.dumps(_session(args).options(), indent=2))


def cmd_grant(args: argparse.Namespace) -> None:
    session = _session(args, submitting=not args.dry_run)
    session.select(ALL_OPTION if args.all else args.page)
    if args.dry_run:
        print(json.dumps([grant.to_wire() for grant in session.preview()], indent=2))
        return
    result = session.submit()
    print(
        json.dumps(
            {
                "created": result.count,
                "message": result.ack.text or "Page control created successfully!",
                "trace_id": result.trace_id,
                "permissions_refreshed": result.refreshed,
                "navigate_to": result.navigate_to,
            },
            indent=2,
        )
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="page-control", description="Grant console page access to users")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--token", default=None, help="bearer token (defaults to PAGE_CONTROL_ACCESS_TOKEN)")
    parser.add_argument("--navigation-file", default=None, help="JSON sidebar definition (list or sections)")
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    catalog_parser = subparsers.add_parser("catalog", help="list every grantable page")
    catalog_parser.set_defaults(func=cmd_catalog)

    for name, func, help_text in (
        ("options", cmd_options, "list pages not granted yet"),
        ("grant", cmd_grant, "grant one page or all remaining pages"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--registry-file", default=None, help="serialized page permissions instead of fetching them")
        sub.add_argument("--user-ids", default=DEFAULT_USER_IDS)
        sub.add_argument("--status", default=DEFAULT_STATUS)
        sub.set_defaults(func=func)
        if name == "grant":
            target = sub.add_mutually_exclusive_group(required=True)
            target.add_argument("--page", help="page title")
            target.add_argument("--all", action="store_true", help="every page not granted yet")
            sub.add_argument("--dry-run", action="store_true", help="print the grant rows without submitting")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger("page_control", logging.DEBUG if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except (ApiError, InvalidSelectionError) as exc:
        print(json.dumps(present_error(exc).render(), indent=2))
        raise SystemExit(1) from exc
    except MalformedRegistryState as exc:
        print(json.dumps({"title": "Page permissions unavailable", "message": str(exc)}, indent=2))
        raise SystemExit(1) from exc
    except ConfigError as exc:
        print(json.dumps({"title": "Configuration error", "message": str(exc)}, indent=2))
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
