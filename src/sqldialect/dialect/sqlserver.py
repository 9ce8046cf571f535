"""
SQL Server-specific dialect implementation.

Identifiers use bracket quoting. The upsert is a MERGE with a single source
row built from named placeholders; SQL Server requires the MERGE statement
to be terminated with a semicolon.
"""
from collections.abc import Sequence

from sqldialect.dialect.base import Dialect, non_key_fields, register_dialect
from sqldialect.sql import quote_identifier


@register_dialect('sqlserver')
class SQLServerDialect(Dialect):
    """SQL Server-specific rendering.
    """

    url_prefixes = ('jdbc:sqlserver:',)

    @property
    def dialect_name(self) -> str:
        return 'sqlserver'

    def quote_identifier(self, identifier: str) -> str:
        return quote_identifier(identifier, '[', ']')

    def get_limit_clause(self, limit: int) -> str:
        """SQL Server only accepts FETCH after an ORDER BY with OFFSET."""
        return f'OFFSET 0 ROWS FETCH NEXT {limit} ROWS ONLY'

    def build_upsert_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str | None:
        """Generate a MERGE INTO ... USING (SELECT ...) statement.

        Aliases: ``T1`` is the target table, ``T2`` the source row.
        """
        q = self.quote_identifier
        source_cols = ', '.join(f':{field} {q(field)}' for field in fields)
        on_clause = ' AND '.join(f'T1.{q(key)}=T2.{q(key)}' for key in keys)
        update_clause = ', '.join(f'T1.{q(field)}=T2.{q(field)}'
                                  for field in non_key_fields(fields, keys))
        insert_values = ', '.join(f'T2.{q(field)}' for field in fields)

        sql = f'MERGE INTO {q(table)} T1 USING (SELECT {source_cols}) T2 ON ({on_clause})'
        if update_clause:
            sql += f' WHEN MATCHED THEN UPDATE SET {update_clause}'
        sql += (f' WHEN NOT MATCHED THEN INSERT ({self._quote_fields(fields)})'
                f' VALUES ({insert_values});')
        return sql
