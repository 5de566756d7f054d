"""Command line entry point: one subcommand per database operation."""

import argparse
import sys
from decimal import Decimal, InvalidOperation

import psycopg2

from .config import load_settings
from .log_config import setup_logging
from .models import AddressSchema, UserSchema
from .database import (
    add_balance,
    close_pool,
    create_new_column,
    create_tables,
    delete_user_details_by_id,
    get_user_details,
    get_user_details_by_id,
    get_user_info_and_address,
    insert_address_details,
    insert_user_details,
    update_user_email_details_by_id,
)


def _amount(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")


def _print_rows(rows):
    if not rows:
        print("(no rows)")
    for row in rows:
        print(dict(row))


def _run(args) -> int:
    cmd = args.command

    if cmd == "init":
        create_tables()
        print("Created tables users, address")
    elif cmd == "add-balance-column":
        create_new_column()
        print("Added column users.balance")
    elif cmd == "add-user":
        user_id = insert_user_details(UserSchema(args.username, args.email, args.password))
        print(f"Inserted user {user_id}")
    elif cmd == "add-address":
        address_id = insert_address_details(
            AddressSchema(args.user_id, args.city, args.state, args.pincode)
        )
        print(f"Inserted address {address_id}")
    elif cmd == "list-users":
        _print_rows(get_user_details())
    elif cmd == "get-user":
        _print_rows(get_user_details_by_id(args.id))
    elif cmd == "user-address":
        _print_rows(get_user_info_and_address(args.id))
    elif cmd == "update-email":
        count = update_user_email_details_by_id(args.id, args.email)
        print(f"Updated {count} row(s)")
    elif cmd == "delete-user":
        count = delete_user_details_by_id(args.id)
        print(f"Deleted {count} row(s)")
    elif cmd == "add-balance":
        result = add_balance(args.id, args.amount)
        if not result.success:
            print(f"Transaction failed: {result.error}", file=sys.stderr)
            return 1
        print(f"Added {result.amount} to user {result.user_id} ({result.rows_updated} row(s))")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="userstore", description="User and address store")
    parser.add_argument("--env-file", help="Path to a .env file (default: search from cwd)")
    parser.add_argument("--log-level", help="Override USERSTORE_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create the users and address tables")
    sub.add_parser("add-balance-column", help="Add the balance column to users")

    p = sub.add_parser("add-user", help="Insert a user")
    p.add_argument("username")
    p.add_argument("email")
    p.add_argument("password")

    p = sub.add_parser("add-address", help="Insert an address for a user")
    p.add_argument("user_id", type=int)
    p.add_argument("city")
    p.add_argument("state")
    p.add_argument("pincode")

    sub.add_parser("list-users", help="List all users")

    for name, help_text in [
        ("get-user", "Show one user"),
        ("user-address", "Show a user joined with its addresses"),
        ("delete-user", "Delete a user and its addresses"),
    ]:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("id", type=int)

    p = sub.add_parser("update-email", help="Change a user's email")
    p.add_argument("id", type=int)
    p.add_argument("email")

    p = sub.add_parser("add-balance", help="Add an amount to a user's balance")
    p.add_argument("id", type=int)
    p.add_argument("amount", type=_amount)

    return parser


def main(argv=None):
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        setup_logging(load_settings(args.env_file), level=args.log_level)
        code = _run(args)
    except psycopg2.Error as e:
        print(f"Database error: {e}", file=sys.stderr)
        code = 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1
    finally:
        close_pool()

    sys.exit(code)


if __name__ == "__main__":
    main()
