"""
MySQL-specific dialect implementation.

MySQL quotes identifiers with backticks and upserts through
``INSERT ... ON DUPLICATE KEY UPDATE``. The duplicate-key clause fires for
any unique index, so the key fields only decide which columns are left out
of the update assignments.
"""
import logging
from collections.abc import Sequence

from sqldialect.dialect.base import Dialect, non_key_fields, register_dialect
from sqldialect.sql import quote_identifier

logger = logging.getLogger(__name__)


@register_dialect('mysql')
class MySQLDialect(Dialect):
    """MySQL-specific rendering.
    """

    url_prefixes = ('jdbc:mysql:', 'jdbc:mariadb:')

    @property
    def dialect_name(self) -> str:
        return 'mysql'

    def quote_identifier(self, identifier: str) -> str:
        return quote_identifier(identifier, '`')

    def get_limit_clause(self, limit: int) -> str:
        return f'LIMIT {limit}'

    def build_upsert_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str | None:
        """Generate an INSERT ... ON DUPLICATE KEY UPDATE statement.

        Each non-key field is assigned from the row that failed to insert.
        ON DUPLICATE KEY UPDATE needs at least one assignment, so when every
        field is a key the keys are assigned to themselves.
        """
        update_fields = non_key_fields(fields, keys)
        if not update_fields:
            logger.debug(f'No non-key fields to update for {table}, assigning keys')
            update_fields = list(keys)
        update_clause = ', '.join(
            f'{self.quote_identifier(field)}=VALUES({self.quote_identifier(field)})'
            for field in update_fields)
        return f'{self.build_insert_sql(table, fields)} ON DUPLICATE KEY UPDATE {update_clause}'
