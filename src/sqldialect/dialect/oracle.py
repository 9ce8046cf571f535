"""
Oracle-specific dialect implementation.

Oracle has no INSERT ... ON CONFLICT; an upsert is a MERGE whose source row
is selected from DUAL with one named placeholder per field. The statement
layout, including its leading space, unquoted target table and lowercase
``and`` between match conditions, is fixed byte-for-byte.
"""
from collections.abc import Sequence

from sqldialect.dialect.base import Dialect, non_key_fields, register_dialect
from sqldialect.sql import quote_identifier


@register_dialect('oracle')
class OracleDialect(Dialect):
    """Oracle-specific rendering.
    """

    url_prefixes = ('jdbc:oracle:',)

    @property
    def dialect_name(self) -> str:
        return 'oracle'

    def quote_identifier(self, identifier: str) -> str:
        return quote_identifier(identifier)

    def build_upsert_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str | None:
        """Generate a MERGE INTO ... USING (SELECT ... FROM DUAL) statement.

        Aliases: ``t`` is the target table, ``s`` the single source row.
        """
        source_cols = ', '.join(f':{field} {self.quote_identifier(field)}' for field in fields)
        on_clause = ' and '.join(
            f't.{self.quote_identifier(key)}=s.{self.quote_identifier(key)}' for key in keys)
        update_clause = ', '.join(
            f't.{self.quote_identifier(field)}=s.{self.quote_identifier(field)}'
            for field in non_key_fields(fields, keys))
        insert_values = ', '.join(f's.{self.quote_identifier(field)}' for field in fields)

        sql = (f' MERGE INTO {table} t '
               f' USING (SELECT {source_cols} FROM DUAL) s '
               f' ON ({on_clause}) ')
        if update_clause:
            sql += f' WHEN MATCHED THEN UPDATE SET {update_clause}'
        sql += (f' WHEN NOT MATCHED THEN INSERT ({self._quote_fields(fields)})'
                f' VALUES ({insert_values})')
        return sql
