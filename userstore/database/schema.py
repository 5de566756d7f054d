"""DDL for the users and address tables.

None of these guard with IF NOT EXISTS: running one twice raises the
matching psycopg2 error (DuplicateTable, DuplicateColumn).
"""

import logging

from .connection import get_cursor

logger = logging.getLogger(__name__)


USERS_TABLE_DDL = """
    CREATE TABLE users (
        id SERIAL PRIMARY KEY,
        username VARCHAR(50) UNIQUE NOT NULL,
        email VARCHAR(255) UNIQUE NOT NULL,
        password VARCHAR(255) NOT NULL,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
"""

ADDRESS_TABLE_DDL = """
    CREATE TABLE address (
        id SERIAL PRIMARY KEY,
        userId INTEGER NOT NULL,
        city VARCHAR(255) NOT NULL,
        state VARCHAR(255) NOT NULL,
        pincode VARCHAR(20) NOT NULL,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (userId) REFERENCES users(id) ON DELETE CASCADE
    )
"""

BALANCE_COLUMN_DDL = "ALTER TABLE users ADD balance NUMERIC(21, 2)"


def create_user_table():
    with get_cursor() as cur:
        cur.execute(USERS_TABLE_DDL)
        logger.info("create_user_table: %s", cur.statusmessage)


def create_address_table():
    """Create the address table; requires users to exist for the foreign key."""
    with get_cursor() as cur:
        cur.execute(ADDRESS_TABLE_DDL)
        logger.info("create_address_table: %s", cur.statusmessage)


def create_tables():
    """Create users, then address."""
    create_user_table()
    create_address_table()


def create_new_column():
    """Add the nullable balance column to users."""
    with get_cursor() as cur:
        cur.execute(BALANCE_COLUMN_DDL)
        logger.info("create_new_column: %s", cur.statusmessage)
