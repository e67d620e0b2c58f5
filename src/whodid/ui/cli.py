# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from whodid.adapters.identity import StaticIdentityProvider
from whodid.app import build_services, grant_admin, upgrade_database
from whodid.config import configure_logging
from whodid.domain.errors import ValidationError
from whodid.domain.model import MessageStatus, Principal

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from whodid.app import Services

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Moderate whodid providers, claims and messages")
    parser.add_argument(
        "--principal-id",
        type=str,
        help="Principal id to act as (required for moderation commands)",
    )
    parser.add_argument(
        "--principal-email",
        type=str,
        help="Optional email of the acting principal",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    db = subparsers.add_parser("db", help="Database maintenance")
    db_sub = db.add_subparsers(dest="db_command", required=True)
    db_upgrade = db_sub.add_parser("upgrade", help="Apply migrations up to head")
    db_upgrade.add_argument(
        "--database-uri",
        type=str,
        help="Database URI (defaults to DATABASE_URI / the local data dir)",
    )

    profile = subparsers.add_parser("profile", help="Profile management commands")
    profile_sub = profile.add_subparsers(dest="profile_command", required=True)
    grant = profile_sub.add_parser("grant-admin", help="Give a principal the admin role")
    grant.add_argument("user_id", type=str, help="Principal id to promote")

    claims = subparsers.add_parser("claims", help="Provider ownership claims")
    claims_sub = claims.add_subparsers(dest="claims_command", required=True)
    claims_sub.add_parser("list", help="List pending claims, oldest first")
    for name, help_text in (("approve", "Approve a pending claim"), ("reject", "Reject a pending claim")):
        decide = claims_sub.add_parser(name, help=help_text)
        decide.add_argument("claim_id", type=str, help="Claim id")

    messages = subparsers.add_parser("messages", help="Contact message triage")
    messages_sub = messages.add_subparsers(dest="messages_command", required=True)
    messages_sub.add_parser("list", help="List open contact messages")
    set_status = messages_sub.add_parser("set-status", help="Move a message to a new status")
    set_status.add_argument("message_id", type=str, help="Message id")
    set_status.add_argument(
        "status",
        type=str,
        choices=[status.value for status in MessageStatus],
        help="Target status",
    )

    providers = subparsers.add_parser("providers", help="Provider records")
    providers_sub = providers.add_subparsers(dest="providers_command", required=True)
    resolve = providers_sub.add_parser("resolve", help="Find or create a provider")
    resolve.add_argument("--name", type=str, required=True, help="Provider name")
    resolve.add_argument("--zip", type=str, help="Optional ZIP code")
    resolve.add_argument("--service", type=str, help="Optional service type")
    search = providers_sub.add_parser("search", help="Search providers with review averages")
    search.add_argument("--zip-prefix", type=str, help="Only providers whose ZIP starts with this")
    search.add_argument("--service", type=str, help="Only providers offering this service")
    search.add_argument("--limit", type=int, default=50, help="Maximum rows (default: %(default)s)")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _acting_principal(args: argparse.Namespace) -> Principal | None:
    if not args.principal_id:
        return None
    return Principal(id=_parse_uuid(args.principal_id), email=args.principal_email)


def _services_for(principal: Principal | None) -> Services:
    return build_services(StaticIdentityProvider(principal))


def _run_claims(args: argparse.Namespace, principal: Principal | None) -> None:
    services = _services_for(principal)
    if args.claims_command == "list":
        snapshot = services.moderation.refresh(principal)
        for claim in snapshot.pending_claims:
            print(
                f"{claim.claim_id}\t{claim.created_at.isoformat()}\t{claim.provider_name}"
                f"\t{claim.provider_zip or '-'}\t{claim.provider_service or '-'}"
                f"\t{claim.claimant_email or claim.claimant_id}"
                f"\t{'claimed' if claim.provider_claimed else 'unclaimed'}"
            )
        return
    claim_id = _parse_uuid(args.claim_id)
    if args.claims_command == "approve":
        services.moderation.approve_claim(claim_id, principal)
    else:
        services.moderation.reject_claim(claim_id, principal)
    log.info("Claim %s %sd", claim_id, args.claims_command)


def _run_messages(args: argparse.Namespace, principal: Principal | None) -> None:
    services = _services_for(principal)
    if args.messages_command == "list":
        snapshot = services.moderation.refresh(principal)
        for message in snapshot.open_messages:
            print(
                f"{message.id}\t{message.created_at.isoformat()}\t{message.status.value}"
                f"\t{message.name or '-'}\t{message.email or '-'}\t{message.body}"
            )
        return
    message_id = _parse_uuid(args.message_id)
    services.moderation.set_message_status(message_id, MessageStatus(args.status), principal)


def _run_providers(args: argparse.Namespace, principal: Principal | None) -> None:
    services = _services_for(principal)
    if args.providers_command == "resolve":
        print(services.providers.resolve_or_create(args.name, args.zip, args.service))
        return
    for summary in services.providers.search(
        zip_prefix=args.zip_prefix, service=args.service, limit=args.limit
    ):
        print(
            f"{summary.id}\t{summary.name}\t{summary.zip or '-'}\t{summary.service or '-'}"
            f"\t{summary.review_count}\t{summary.pricing}\t{summary.service_score}"
            f"\t{summary.cleanliness}"
        )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        principal = _acting_principal(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "db":
            revision = upgrade_database(database_uri=parsed_args.database_uri)
            print(revision)
        elif parsed_args.command == "profile":
            grant_admin(_parse_uuid(parsed_args.user_id))
        elif parsed_args.command == "claims":
            _run_claims(parsed_args, principal)
        elif parsed_args.command == "messages":
            _run_messages(parsed_args, principal)
        elif parsed_args.command == "providers":
            _run_providers(parsed_args, principal)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ValueError, ValidationError):
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
