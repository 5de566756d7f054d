"""User and address CRUD operations.

Every function borrows its own connection through get_cursor(), runs one
statement, logs the result and returns it. Errors propagate, except in
add_balance which reports them through BalanceResult.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

import psycopg2

from ..models import AddressSchema, UserSchema
from .connection import get_cursor

logger = logging.getLogger(__name__)


@dataclass
class BalanceResult:
    """Outcome of a balance transaction."""
    success: bool
    user_id: int
    amount: Optional[Decimal]
    rows_updated: int
    error: Optional[str] = None


# --- Users ---

def insert_user_details(user: UserSchema) -> int:
    """Insert a user. Password is stored as given."""
    with get_cursor() as cur:
        cur.execute("""
            INSERT INTO users (username, email, password)
            VALUES (%s, %s, %s)
            RETURNING id
        """, (user.username, user.email, user.password))
        user_id = cur.fetchone()["id"]
    logger.info("Inserted user %s (id=%s)", user.username, user_id)
    return user_id


def get_user_details() -> list:
    with get_cursor() as cur:
        cur.execute("SELECT * FROM users")
        rows = cur.fetchall()
    logger.info("get_user_details: %s", rows)
    return rows


def get_user_details_by_id(user_id: int) -> list:
    """Rows matching the id; empty when it does not exist."""
    with get_cursor() as cur:
        cur.execute("SELECT * FROM users WHERE id = %s", (user_id,))
        rows = cur.fetchall()
    logger.info("get_user_details_by_id(%s): %s", user_id, rows)
    return rows


def update_user_email_details_by_id(user_id: int, email: str) -> int:
    """Returns the number of rows updated (0 for an unknown id)."""
    with get_cursor() as cur:
        cur.execute("UPDATE users SET email = %s WHERE id = %s", (email, user_id))
        count = cur.rowcount
    logger.info("Updated email for user %s: %d row(s)", user_id, count)
    return count


def delete_user_details_by_id(user_id: int) -> int:
    """Delete a user; its address rows go with it via ON DELETE CASCADE."""
    with get_cursor() as cur:
        cur.execute("DELETE FROM users WHERE id = %s", (user_id,))
        count = cur.rowcount
    logger.info("Deleted user %s: %d row(s)", user_id, count)
    return count


# --- Addresses ---

def insert_address_details(address: AddressSchema) -> int:
    with get_cursor() as cur:
        cur.execute("""
            INSERT INTO address (userId, city, state, pincode)
            VALUES (%s, %s, %s, %s)
            RETURNING id
        """, (address.user_id, address.city, address.state, address.pincode))
        address_id = cur.fetchone()["id"]
    logger.info("Inserted address %s for user %s", address_id, address.user_id)
    return address_id


def get_address_details_by_user_id(user_id: int) -> list:
    with get_cursor() as cur:
        cur.execute("SELECT * FROM address WHERE userId = %s", (user_id,))
        rows = cur.fetchall()
    logger.info("get_address_details_by_user_id(%s): %s", user_id, rows)
    return rows


def get_user_info_and_address(user_id: int) -> list:
    """One joined row per address; empty when the user has none."""
    with get_cursor() as cur:
        cur.execute("""
            SELECT u.id, u.username, u.email, u.password, a.city, a.state, a.pincode
            FROM users u
            JOIN address a ON u.id = a.userId
            WHERE u.id = %s
        """, (user_id,))
        rows = cur.fetchall()
    logger.info("get_user_info_and_address(%s): %s", user_id, rows)
    return rows


# --- Balance ---

def add_balance(user_id: int, amount) -> BalanceResult:
    """Add `amount` to a user's balance in one transaction.

    A NULL balance counts as zero. An unknown id still commits, with
    rows_updated=0. Any failure (database error, missing configuration,
    unparseable amount) rolls the transaction back and is returned in the
    result rather than raised. `amount` is None when it could not be parsed.
    """
    parsed = None
    try:
        parsed = Decimal(str(amount))
        with get_cursor() as cur:
            cur.execute("""
                UPDATE users SET balance = COALESCE(balance, 0) + %s
                WHERE id = %s
            """, (parsed, user_id))
            count = cur.rowcount
    except (psycopg2.Error, ValueError, InvalidOperation) as e:
        error = f"invalid amount: {amount!r}" if isinstance(e, InvalidOperation) else str(e)
        logger.error("Transaction failed: %s", error)
        return BalanceResult(
            success=False, user_id=user_id, amount=parsed, rows_updated=0, error=error
        )

    logger.info("Added %s to balance of user %s: %d row(s)", parsed, user_id, count)
    return BalanceResult(success=True, user_id=user_id, amount=parsed, rows_updated=count)
