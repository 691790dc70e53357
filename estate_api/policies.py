"""
PostgreSQL row-level security policies.

These mirror the authorization rules enforced by the services, so a client
connecting with the public key sees the same rows the API would show it.
The acting user is read from the `app.user_id` session setting.
"""

from typing import List, Tuple
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine
import logging

logger = logging.getLogger(__name__)

CURRENT_USER = "current_setting('app.user_id', true)::uuid"

_OWNS_PROPERTY = (
    "EXISTS (SELECT 1 FROM properties p "
    f"WHERE p.id = inquiries.property AND p.owner = {CURRENT_USER})"
)

# (table, policy name, command, USING clause, WITH CHECK clause)
POLICIES: List[Tuple[str, str, str, str, str]] = [
    ("properties", "properties_public_read", "SELECT", "true", ""),
    ("properties", "properties_owner_insert", "INSERT", "", f"owner = {CURRENT_USER}"),
    ("properties", "properties_owner_update", "UPDATE",
     f"owner = {CURRENT_USER}", f"owner = {CURRENT_USER}"),
    ("properties", "properties_owner_delete", "DELETE", f"owner = {CURRENT_USER}", ""),
    ("inquiries", "inquiries_party_read", "SELECT",
     f"sender = {CURRENT_USER} OR {_OWNS_PROPERTY}", ""),
    ("inquiries", "inquiries_sender_insert", "INSERT", "",
     f"sender = {CURRENT_USER} AND NOT {_OWNS_PROPERTY}"),
    ("inquiries", "inquiries_party_delete", "DELETE",
     f"sender = {CURRENT_USER} OR {_OWNS_PROPERTY}", ""),
]


def row_level_security_statements() -> List[str]:
    """
    Build the DDL enabling row-level security on the listing tables.
    Existing policies are dropped first so the statements can be re-applied.
    """
    statements = [
        f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY"
        for table in sorted({policy[0] for policy in POLICIES})
    ]

    for table, name, command, using, check in POLICIES:
        statements.append(f"DROP POLICY IF EXISTS {name} ON {table}")
        statement = f"CREATE POLICY {name} ON {table} FOR {command}"
        if using:
            statement += f" USING ({using})"
        if check:
            statement += f" WITH CHECK ({check})"
        statements.append(statement)

    return statements


async def apply_row_level_security(target_engine: AsyncEngine) -> bool:
    """
    Apply the policies on PostgreSQL. Other dialects have no row-level
    security and are skipped.

    Returns:
        True if the policies were applied
    """
    if target_engine.dialect.name != "postgresql":
        logger.info(f"Skipping row-level security on dialect '{target_engine.dialect.name}'")
        return False

    async with target_engine.begin() as conn:
        for statement in row_level_security_statements():
            await conn.execute(text(statement))

    logger.info(f"Applied {len(POLICIES)} row-level security policies")
    return True
