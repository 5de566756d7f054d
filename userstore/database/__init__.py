"""Database access layer: pooled connections, schema DDL, user/address queries."""

from .connection import close_pool, get_cursor, get_pool, release_connection
from .schema import create_address_table, create_new_column, create_tables, create_user_table
from .users_db import (
    BalanceResult,
    add_balance,
    delete_user_details_by_id,
    get_address_details_by_user_id,
    get_user_details,
    get_user_details_by_id,
    get_user_info_and_address,
    insert_address_details,
    insert_user_details,
    update_user_email_details_by_id,
)

__all__ = [
    "close_pool",
    "get_pool",
    "get_cursor",
    "release_connection",
    "create_address_table",
    "create_new_column",
    "create_tables",
    "create_user_table",
    "BalanceResult",
    "add_balance",
    "delete_user_details_by_id",
    "get_address_details_by_user_id",
    "get_user_details",
    "get_user_details_by_id",
    "get_user_info_and_address",
    "insert_address_details",
    "insert_user_details",
    "update_user_email_details_by_id",
]
