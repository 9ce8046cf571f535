"""
Generic ANSI SQL dialect.

Double-quoted identifiers and no single-statement upsert. Useful for
databases without a dedicated dialect and as the default selection.
"""
from collections.abc import Sequence

from sqldialect.dialect.base import Dialect, register_dialect
from sqldialect.sql import quote_identifier


@register_dialect('ansi')
class AnsiDialect(Dialect):
    """Standard SQL rendering.
    """

    @property
    def dialect_name(self) -> str:
        return 'ansi'

    def quote_identifier(self, identifier: str) -> str:
        return quote_identifier(identifier)

    def build_upsert_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str | None:
        """ANSI SQL has no portable upsert."""
        return None
