"""Application entry point and composition root."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from grantsync import __version__
from grantsync.application.authorization_api import AuthorizationApi
from grantsync.application.editor import PermissionGrantEditor
from grantsync.application.ports import Transport
from grantsync.application.use_cases.grant.get_grant_details import GetGrantDetailsUseCase
from grantsync.config import Settings, get_settings
from grantsync.domain.entities import Permission
from grantsync.domain.exceptions import GrantSyncError
from grantsync.infrastructure.http.auth import BearerTokenAuth
from grantsync.infrastructure.http.transport import HttpxTransport

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def create_transport(settings: Settings) -> HttpxTransport:
    """Build the HTTP transport with bearer auth from settings."""

    def _on_unauthorized() -> None:
        logger.warning("Authorization API rejected the configured token (401)")

    auth = BearerTokenAuth(
        token_provider=lambda: settings.api_token or None,
        on_unauthorized=_on_unauthorized,
    )
    return HttpxTransport.create(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        auth=auth,
    )


def create_grant_editor(transport: Transport | None = None) -> PermissionGrantEditor:
    """Composition root - editor wired to the configured authorization API."""
    if transport is None:
        transport = create_transport(get_settings())
    return PermissionGrantEditor.from_transport(transport)


async def _show(transport: Transport, args: argparse.Namespace) -> int:
    permission = Permission(id=args.permission_id, name=args.permission)
    grant = await GetGrantDetailsUseCase(transport).execute(permission, args.project)
    print(json.dumps(asdict(grant), indent=2))
    return 0


async def _roles(transport: Transport, args: argparse.Namespace) -> int:
    roles = await AuthorizationApi(transport).list_roles()
    print(json.dumps([asdict(r) for r in roles], indent=2))
    return 0


async def _run(settings: Settings, args: argparse.Namespace) -> int:
    async with create_transport(settings) as transport:
        try:
            return await args.handler(transport, args)
        except GrantSyncError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grantsync",
        description="Inspect permission grants and roles on the authorization API",
    )
    parser.add_argument("--version", action="version", version=f"grantsync v{__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print the grant members of a permission")
    show.add_argument("permission", help="Permission name (e.g. Workers) or wire type")
    show.add_argument("permission_id", type=int, help="Numeric permission id")
    show.add_argument("--project", type=int, default=None, help="Project id for project scope")
    show.set_defaults(handler=_show)

    roles = subparsers.add_parser("roles", help="List available role templates")
    roles.set_defaults(handler=_roles)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    return asyncio.run(_run(settings, args))


if __name__ == "__main__":
    sys.exit(main())
