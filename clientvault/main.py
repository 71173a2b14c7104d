"""
Main entry point for ClientVault.

Provides the `clientvault` command for working with a local store from a
terminal: registering the account, listing and adding records, dashboard
figures, export, import and reset.
"""

import sys
import argparse
import getpass
import logging
from typing import List, Optional

from . import config
from .models import Client
from .validation import ValidationError
from .vault import ClientVault

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='clientvault',
        description=f"{config.APP_NAME} v{config.APP_VERSION} - {config.APP_DESCRIPTION}",
    )
    parser.add_argument('--store', help='Path to the store file (default: ~/.clientvault/store.json)')
    parser.add_argument('--username', help='Account username (prompted if omitted)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('register', help='Create the local account')
    subparsers.add_parser('stats', help='Show dashboard statistics')

    parser_clients = subparsers.add_parser('clients', help='List clients')
    parser_clients.add_argument('--search', default='', help='Filter by name, email or phone')

    parser_add = subparsers.add_parser('add-client', help='Add a client')
    parser_add.add_argument('--name', required=True)
    parser_add.add_argument('--email', required=True)
    parser_add.add_argument('--phone', required=True)
    parser_add.add_argument('--notes')

    parser_orders = subparsers.add_parser('orders', help='List orders')
    parser_orders.add_argument('--search', default='', help='Filter by order number or client name')

    parser_export = subparsers.add_parser('export', help='Export all records to plain JSON')
    parser_export.add_argument('path', nargs='?', default=config.EXPORT_FILE_NAME)

    parser_import = subparsers.add_parser('import', help='Replace all records from a JSON export')
    parser_import.add_argument('path')

    parser_reset = subparsers.add_parser('reset', help='Delete all clients, orders and custom fields')
    parser_reset.add_argument('--yes', action='store_true', help='Do not ask for confirmation')

    return parser


def _credentials(args) -> tuple:
    username = args.username or input("Username: ")
    password = getpass.getpass("Password: ")
    return username, password


def _print_stats(vault: ClientVault) -> None:
    stats = vault.stats()
    print(f"Total clients:    {stats.total_clients}")
    print(f"Total orders:     {stats.total_orders}")
    print(f"Total revenue:    {stats.total_revenue:.2f}")
    print(f"Pending orders:   {stats.pending_orders}")
    print(f"Completed orders: {stats.completed_orders}")
    if stats.top_clients:
        print("Top clients:")
        for client in stats.top_clients:
            print(f"  {client.name}: {client.orders} orders, {client.revenue:.2f}")


def run(args, vault: ClientVault) -> int:
    if args.command == 'register':
        username, password = _credentials(args)
        if vault.auth.register(username, password):
            print("Your account has been created successfully!")
            return 0
        print("Registration failed. A user account may already exist.", file=sys.stderr)
        return 1

    username, password = _credentials(args)
    if not vault.auth.login(username, password):
        print("Login failed: invalid username or password.", file=sys.stderr)
        return 1

    if args.command == 'stats':
        _print_stats(vault)

    elif args.command == 'clients':
        for client in vault.clients.search(args.search):
            print(f"{client.id}  {client.name}  {client.email}  {client.phone}")

    elif args.command == 'add-client':
        client = Client.create(args.name, args.email, args.phone, notes=args.notes)
        vault.clients.add(client)
        print(f"Client added: {client.id}")

    elif args.command == 'orders':
        clients = vault.clients.get_all()
        for order in vault.orders.search(args.search, clients):
            name = vault.orders.client_name(order, clients)
            print(f"{order.order_number}  {name}  {order.status}  {order.total:.2f}")

    elif args.command == 'export':
        count = vault.transfer.export_to_file(args.path)
        print(f"Exported {count} records to {args.path} (NOT encrypted)")

    elif args.command == 'import':
        vault.transfer.import_from_file(args.path)
        print("Your data has been imported successfully")

    elif args.command == 'reset':
        if not args.yes:
            answer = input("Are you sure you want to reset the database? This action cannot be undone. [y/N] ")
            if answer.strip().lower() not in ('y', 'yes'):
                print("Reset cancelled")
                return 1
        vault.transfer.reset_all()
        print("Your database has been reset successfully")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=config.LOG_FORMAT)

    vault = ClientVault.open(args.store)

    try:
        return run(args, vault)
    except ValidationError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(f"File error: {e}", exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        vault.auth.logout()


if __name__ == "__main__":
    sys.exit(main())
