"""
Apache Derby dialect.
"""
from collections.abc import Sequence

from sqldialect.dialect.base import Dialect, register_dialect
from sqldialect.sql import quote_identifier


@register_dialect('derby')
class DerbyDialect(Dialect):
    """Derby-specific rendering.

    Derby has no upsert statement; callers fall back to a row-exists query
    followed by an insert or an update.
    """

    url_prefixes = ('jdbc:derby:',)

    @property
    def dialect_name(self) -> str:
        return 'derby'

    def quote_identifier(self, identifier: str) -> str:
        return quote_identifier(identifier)

    def build_upsert_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str | None:
        return None
