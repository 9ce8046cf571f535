"""
PostgreSQL-specific dialect implementation.

Upserts use ``INSERT ... ON CONFLICT (keys)``. The conflict target must match
a unique index or constraint over exactly the key fields.
"""
from collections.abc import Sequence

from sqldialect.dialect.base import Dialect, non_key_fields, register_dialect
from sqldialect.sql import quote_identifier


@register_dialect('postgresql')
class PostgresDialect(Dialect):
    """PostgreSQL-specific rendering.
    """

    url_prefixes = ('jdbc:postgresql:',)

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for PostgreSQL."""
        return 'postgresql'

    def quote_identifier(self, identifier: str) -> str:
        return quote_identifier(identifier)

    def get_limit_clause(self, limit: int) -> str:
        return f'LIMIT {limit}'

    def build_upsert_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str | None:
        """Generate an INSERT ... ON CONFLICT statement.

        Non-key fields are taken from the EXCLUDED pseudo-row. With nothing
        left to update the conflict action is DO NOTHING.
        """
        conflict_cols = self._quote_fields(keys)
        update_exprs = [
            f'{self.quote_identifier(field)}=EXCLUDED.{self.quote_identifier(field)}'
            for field in non_key_fields(fields, keys)
        ]
        if update_exprs:
            conflict_action = f'DO UPDATE SET {", ".join(update_exprs)}'
        else:
            conflict_action = 'DO NOTHING'
        return (f'{self.build_insert_sql(table, fields)} '
                f'ON CONFLICT ({conflict_cols}) {conflict_action}')
