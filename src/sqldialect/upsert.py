"""Upsert statement planning.

A single-statement upsert is only available where the dialect has native
syntax for it (MERGE, ON CONFLICT, ON DUPLICATE KEY). Everywhere else a caller
checks whether the keyed row exists and then runs an UPDATE or an INSERT.
This module renders whichever statements the chosen strategy needs, so the
execution layer only has to branch on :attr:`UpsertPlan.native`.
"""
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqldialect.dialect import Dialect

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpsertPlan:
    """Statements needed to upsert one row.

    Attributes
        upsert: Native upsert statement, None if the dialect has none
        row_exists: Query returning a row when the key already exists
        insert: INSERT of every field
        update: UPDATE of every field matched on the keys
    """
    upsert: str | None
    row_exists: str
    insert: str
    update: str

    @property
    def native(self) -> bool:
        """True when a single upsert statement is available."""
        return self.upsert is not None


def plan_upsert(dialect: Dialect, table: str, fields: Sequence[str],
                keys: Sequence[str]) -> UpsertPlan:
    """Render the statements needed to insert or update a row.

    Parameters
        dialect: Resolved dialect

        table: Target table name

        fields: All fields of the row, in column order

        keys: Fields identifying the row. Must be a subset of ``fields``.

    Returns
        UpsertPlan with the native upsert (if any) and the fallback
        exists/insert/update statements
    """
    upsert = dialect.build_upsert_sql(table, fields, keys)
    if upsert is None:
        logger.debug(f'{dialect.dialect_name} has no native upsert, '
                     f'{table} falls back to exists/insert/update')
    return UpsertPlan(
        upsert=upsert,
        row_exists=dialect.build_row_exists_sql(table, keys),
        insert=dialect.build_insert_sql(table, fields),
        update=dialect.build_update_sql(table, fields, keys),
        )
