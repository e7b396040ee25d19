"""Command-line interface for freshservice-tools.

Usage:
    # Tickets
    freshservice ticket list --updated-since 2026-01-01
    freshservice ticket get 42
    freshservice ticket filter "priority:4 AND status:2"
    freshservice ticket delete 42
    freshservice ticket restore 42

    # Releases
    freshservice release list
    freshservice release restore 7

    # Canned responses
    freshservice canned-response list
    freshservice canned-response folders

    # Onboarding requests
    freshservice onboarding list
    freshservice onboarding tickets 3

    # Configuration
    freshservice config show
    freshservice config setup --base-url https://acme.freshservice.com --api-key KEY
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from freshservice_tools.core.exceptions import FreshserviceError
from freshservice_tools.core.models import Record, Result


def print_records(records: list[Record], title_key: str, as_json: bool) -> None:
    """Print a one-line summary per record, or raw JSON."""
    if as_json:
        print(json.dumps(records, indent=2, default=str))
        return

    if not records:
        print("No records found")
        return

    print(f"Found {len(records)} record(s):\n")
    for record in records:
        print(f"  [{record.get('id')}] {record.get(title_key) or ''}")


def print_record(record: Record, fields: list[str], as_json: bool) -> None:
    """Print selected fields of a record, or raw JSON."""
    if as_json:
        print(json.dumps(record, indent=2, default=str))
        return

    width = max(len(field) for field in fields) + 2
    for field in fields:
        label = f"{field.replace('_', ' ').capitalize()}:"
        print(f"{label:<{width}} {record.get(field)}")


def print_result(result: Result) -> int:
    """Print an operation result and return the exit code."""
    if result.success:
        print(result.message)
        return 0
    print(f"Failed: {result.message}", file=sys.stderr)
    return 1


# =============================================================================
# Ticket Commands
# =============================================================================

TICKET_FIELDS = ["id", "subject", "status", "priority", "requester_id", "created_at", "updated_at"]


def cmd_ticket_list(args: argparse.Namespace) -> int:
    """List tickets."""
    from freshservice_tools.freshservice import TicketClient

    params: dict[str, Any] = {"updated_since": args.updated_since}
    with TicketClient() as tickets:
        records = []
        for record in tickets.iter(params):
            records.append(record)
            if args.limit and len(records) >= args.limit:
                break
        print_records(records, "subject", args.json)

    return 0


def cmd_ticket_get(args: argparse.Namespace) -> int:
    """Get ticket details."""
    from freshservice_tools.freshservice import TicketClient

    with TicketClient() as tickets:
        ticket = tickets.get(args.ticket_id)
        print_record(ticket, TICKET_FIELDS, args.json)

    return 0


def cmd_ticket_filter(args: argparse.Namespace) -> int:
    """Filter tickets with a query expression."""
    from freshservice_tools.freshservice import TicketClient

    with TicketClient() as tickets:
        print_records(list(tickets.filter(args.query)), "subject", args.json)

    return 0


def cmd_ticket_delete(args: argparse.Namespace) -> int:
    """Delete a ticket."""
    from freshservice_tools.freshservice import TicketClient

    with TicketClient() as tickets:
        return print_result(tickets.delete(args.ticket_id))


def cmd_ticket_restore(args: argparse.Namespace) -> int:
    """Restore a deleted ticket."""
    from freshservice_tools.freshservice import TicketClient

    with TicketClient() as tickets:
        return print_result(tickets.restore(args.ticket_id))


# =============================================================================
# Release Commands
# =============================================================================

RELEASE_FIELDS = ["id", "subject", "status", "priority", "planned_start_date", "planned_end_date"]


def cmd_release_list(args: argparse.Namespace) -> int:
    """List releases."""
    from freshservice_tools.freshservice import ReleaseClient

    with ReleaseClient() as releases:
        print_records(releases.list(), "subject", args.json)

    return 0


def cmd_release_get(args: argparse.Namespace) -> int:
    """Get release details."""
    from freshservice_tools.freshservice import ReleaseClient

    with ReleaseClient() as releases:
        print_record(releases.get(args.release_id), RELEASE_FIELDS, args.json)

    return 0


def cmd_release_restore(args: argparse.Namespace) -> int:
    """Restore a deleted release."""
    from freshservice_tools.freshservice import ReleaseClient

    with ReleaseClient() as releases:
        return print_result(releases.restore(args.release_id))


# =============================================================================
# Canned Response Commands
# =============================================================================


def cmd_canned_response_list(args: argparse.Namespace) -> int:
    """List canned responses, optionally from one folder."""
    from freshservice_tools.freshservice import CannedResponseClient

    with CannedResponseClient() as canned:
        if args.folder:
            records = canned.list_folder_responses(args.folder)
        else:
            records = canned.list()
        print_records(records, "title", args.json)

    return 0


def cmd_canned_response_get(args: argparse.Namespace) -> int:
    """Get a canned response."""
    from freshservice_tools.freshservice import CannedResponseClient

    with CannedResponseClient() as canned:
        record = canned.get(args.response_id)
        print_record(record, ["id", "title", "folder_id", "content"], args.json)

    return 0


def cmd_canned_response_folders(args: argparse.Namespace) -> int:
    """List canned response folders."""
    from freshservice_tools.freshservice import CannedResponseClient

    with CannedResponseClient() as canned:
        print_records(canned.list_folders(), "name", args.json)

    return 0


# =============================================================================
# Onboarding Commands
# =============================================================================


def _onboarding_client(args: argparse.Namespace) -> Any:
    from freshservice_tools.freshservice import OffboardingRequestClient, OnboardingRequestClient

    return OffboardingRequestClient() if args.offboarding else OnboardingRequestClient()


def cmd_onboarding_list(args: argparse.Namespace) -> int:
    """List onboarding (or offboarding) requests."""
    with _onboarding_client(args) as client:
        print_records(client.list(), "subject", args.json)

    return 0


def cmd_onboarding_get(args: argparse.Namespace) -> int:
    """Get an onboarding (or offboarding) request."""
    with _onboarding_client(args) as client:
        record = client.get(args.request_id)
        print_record(record, ["id", "subject", "status", "created_at"], args.json)

    return 0


def cmd_onboarding_tickets(args: argparse.Namespace) -> int:
    """List tickets raised by an onboarding (or offboarding) request."""
    with _onboarding_client(args) as client:
        print_records(client.list_tickets(args.request_id), "subject", args.json)

    return 0


# =============================================================================
# Config Commands
# =============================================================================


def cmd_config_show(args: argparse.Namespace) -> int:
    """Show the resolved connection profile."""
    from freshservice_tools.freshservice.credentials import get_credentials

    print("Freshservice Tools Configuration")
    print("=" * 40)

    try:
        creds = get_credentials()
    except ValueError:
        print("\nFreshservice: Not configured")
        print("  Set environment variables or use: freshservice config setup")
        return 0

    key = creds.api_key
    print(f"\nURL:      {creds.base_url}")
    print(f"API key:  {'****' + key[-4:] if key and len(key) > 4 else '(not set)'}")
    print(f"Throttle: {'on' if creds.throttle else 'off'}")

    return 0


def cmd_config_setup(args: argparse.Namespace) -> int:
    """Verify and store a connection profile in the keyring."""
    from freshservice_tools.freshservice import FreshserviceClient
    from freshservice_tools.freshservice.credentials import save_credentials

    print("\nTesting credentials...")
    try:
        with FreshserviceClient(
            base_url=args.base_url, api_key=args.api_key, throttle=args.throttle
        ) as client:
            client.test_connection()
        print("Connection successful!")
    except (FreshserviceError, ValueError) as e:
        print(f"Connection failed: {e}", file=sys.stderr)
        return 1

    save_credentials(args.base_url, args.api_key, throttle=args.throttle)
    print("\nCredentials saved to system keyring.")

    return 0


# =============================================================================
# Main Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="freshservice",
        description="Freshservice API command-line tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  freshservice ticket get 42
  freshservice ticket filter "priority:4 AND status:2"
  freshservice release restore 7
  freshservice onboarding --offboarding list
  freshservice config show
        """,
    )
    parser.add_argument("--version", action="version", version="freshservice-tools 0.1.0")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Shared --json flag
    json_parent = argparse.ArgumentParser(add_help=False)
    json_parent.add_argument("--json", action="store_true", help="Print raw JSON")

    # =========================================================================
    # Ticket subcommands
    # =========================================================================
    ticket_parser = subparsers.add_parser("ticket", help="Ticket commands")
    ticket_sub = ticket_parser.add_subparsers(dest="ticket_command", required=True)

    ticket_list = ticket_sub.add_parser("list", parents=[json_parent], help="List tickets")
    ticket_list.add_argument("--updated-since", help="Only tickets updated since (ISO date)")
    ticket_list.add_argument("--limit", type=int, default=0, help="Stop after N tickets")

    ticket_get = ticket_sub.add_parser("get", parents=[json_parent], help="Get ticket details")
    ticket_get.add_argument("ticket_id", help="Ticket ID")

    ticket_filter = ticket_sub.add_parser("filter", parents=[json_parent], help="Filter tickets")
    ticket_filter.add_argument("query", help='Filter query (e.g., "priority:4 AND status:2")')

    ticket_delete = ticket_sub.add_parser("delete", help="Delete a ticket")
    ticket_delete.add_argument("ticket_id", help="Ticket ID")

    ticket_restore = ticket_sub.add_parser("restore", help="Restore a deleted ticket")
    ticket_restore.add_argument("ticket_id", help="Ticket ID")

    # =========================================================================
    # Release subcommands
    # =========================================================================
    release_parser = subparsers.add_parser("release", help="Release commands")
    release_sub = release_parser.add_subparsers(dest="release_command", required=True)

    release_sub.add_parser("list", parents=[json_parent], help="List releases")

    release_get = release_sub.add_parser("get", parents=[json_parent], help="Get release details")
    release_get.add_argument("release_id", help="Release ID")

    release_restore = release_sub.add_parser("restore", help="Restore a deleted release")
    release_restore.add_argument("release_id", help="Release ID")

    # =========================================================================
    # Canned response subcommands
    # =========================================================================
    canned_parser = subparsers.add_parser("canned-response", help="Canned response commands")
    canned_sub = canned_parser.add_subparsers(dest="canned_command", required=True)

    canned_list = canned_sub.add_parser("list", parents=[json_parent], help="List responses")
    canned_list.add_argument("--folder", help="Only responses in this folder ID")

    canned_get = canned_sub.add_parser("get", parents=[json_parent], help="Get a response")
    canned_get.add_argument("response_id", help="Canned response ID")

    canned_sub.add_parser("folders", parents=[json_parent], help="List folders")

    # =========================================================================
    # Onboarding subcommands
    # =========================================================================
    onboarding_parser = subparsers.add_parser("onboarding", help="Onboarding request commands")
    onboarding_parser.add_argument(
        "--offboarding", action="store_true", help="Work on offboarding requests instead"
    )
    onboarding_sub = onboarding_parser.add_subparsers(dest="onboarding_command", required=True)

    onboarding_sub.add_parser("list", parents=[json_parent], help="List requests")

    onboarding_get = onboarding_sub.add_parser("get", parents=[json_parent], help="Get a request")
    onboarding_get.add_argument("request_id", help="Request display ID")

    onboarding_tickets = onboarding_sub.add_parser(
        "tickets", parents=[json_parent], help="List tickets of a request"
    )
    onboarding_tickets.add_argument("request_id", help="Request display ID")

    # =========================================================================
    # Config subcommands
    # =========================================================================
    config_parser = subparsers.add_parser("config", help="Configuration commands")
    config_sub = config_parser.add_subparsers(dest="config_command", required=True)

    config_sub.add_parser("show", help="Show current configuration")

    config_setup = config_sub.add_parser("setup", help="Store credentials in the keyring")
    config_setup.add_argument("--base-url", required=True, help="https://<name>.freshservice.com")
    config_setup.add_argument("--api-key", required=True, help="Freshservice API key")
    config_setup.add_argument("--throttle", action="store_true", help="Enable self-throttling")

    return parser


COMMANDS = {
    "ticket": (
        "ticket_command",
        {
            "list": cmd_ticket_list,
            "get": cmd_ticket_get,
            "filter": cmd_ticket_filter,
            "delete": cmd_ticket_delete,
            "restore": cmd_ticket_restore,
        },
    ),
    "release": (
        "release_command",
        {
            "list": cmd_release_list,
            "get": cmd_release_get,
            "restore": cmd_release_restore,
        },
    ),
    "canned-response": (
        "canned_command",
        {
            "list": cmd_canned_response_list,
            "get": cmd_canned_response_get,
            "folders": cmd_canned_response_folders,
        },
    ),
    "onboarding": (
        "onboarding_command",
        {
            "list": cmd_onboarding_list,
            "get": cmd_onboarding_get,
            "tickets": cmd_onboarding_tickets,
        },
    ),
    "config": (
        "config_command",
        {
            "show": cmd_config_show,
            "setup": cmd_config_setup,
        },
    ),
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    dest, commands = COMMANDS[args.command]
    try:
        return commands[getattr(args, dest)](args)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except FreshserviceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
