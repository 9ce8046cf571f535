"""
Base dialect interface for statement rendering.

Defines the abstract base class that every database-specific dialect inherits
from. A dialect owns two things: how identifiers are quoted and how (or
whether) a single-statement upsert is written. Everything else is shared SQL
that only differs in the quoting applied to table and field names.

Every statement uses named placeholders (``:field``) so the same field can be
bound once per textual occurrence; see :func:`sqldialect.sql.parse_named_statement`
for the positional form.

Callers must pass non-empty field lists with unique names, and key fields
that are a subset of the fields. These preconditions are not checked: a
violation produces well-formed but meaningless SQL.
"""
from abc import ABC, abstractmethod
from collections.abc import Sequence

# Registry of dialect name -> dialect class
# Defined here to avoid circular imports (concrete dialects import from base)
_DIALECT_REGISTRY: dict[str, type['Dialect']] = {}


def register_dialect(name: str):
    """Decorator to register a dialect class under a name.

    Usage:
        @register_dialect('postgresql')
        class PostgresDialect(Dialect):
            ...
    """
    def decorator(cls: type['Dialect']) -> type['Dialect']:
        _DIALECT_REGISTRY[name] = cls
        return cls
    return decorator


class Dialect(ABC):
    """Base class for database-specific statement rendering.
    """

    #: Connection URL prefixes this dialect accepts, e.g. ``jdbc:mysql:``
    url_prefixes: tuple[str, ...] = ()

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier (e.g., 'postgresql', 'oracle')."""

    @abstractmethod
    def quote_identifier(self, identifier: str) -> str:
        """Quote a table or field name.

        Args:
            identifier: Database identifier to be quoted

        Returns
            str: Identifier wrapped in this dialect's quote characters
        """

    @abstractmethod
    def build_upsert_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str | None:
        """Generate dialect-specific upsert SQL.

        Args:
            table: Target table name
            fields: All fields to insert, in column order
            keys: Fields identifying a row, in predicate order

        Returns
            str | None: Complete upsert statement, or None when the dialect
            has no native upsert and callers must check-then-insert-or-update
        """

    def get_limit_clause(self, limit: int) -> str:
        """Return the clause restricting a query to ``limit`` rows.

        Default implementation is the standard SQL fetch clause.
        """
        return f'FETCH FIRST {limit} ROWS ONLY'

    def accepts_url(self, url: str) -> bool:
        """Check whether a connection URL belongs to this dialect."""
        return any(url.startswith(prefix) for prefix in self.url_prefixes)

    def _quote_fields(self, fields: Sequence[str]) -> str:
        return ', '.join(self.quote_identifier(field) for field in fields)

    def _key_predicate(self, keys: Sequence[str]) -> str:
        """Build the ``"k" = :k AND ...`` condition shared by all keyed statements."""
        return ' AND '.join(f'{self.quote_identifier(key)} = :{key}' for key in keys)

    def build_insert_sql(self, table: str, fields: Sequence[str]) -> str:
        """Generate an INSERT statement.

        Args:
            table: Table name
            fields: List of field names

        Returns
            SQL string with one named placeholder per field
        """
        placeholders = ', '.join(f':{field}' for field in fields)
        return (f'INSERT INTO {self.quote_identifier(table)}'
                f'({self._quote_fields(fields)}) VALUES ({placeholders})')

    def build_update_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str]) -> str:
        """Generate an UPDATE statement setting every field.

        Key fields are assigned in the SET clause and matched again in the
        WHERE clause, both times through the same placeholder name.
        """
        set_clause = ', '.join(f'{self.quote_identifier(field)} = :{field}' for field in fields)
        return (f'UPDATE {self.quote_identifier(table)} SET {set_clause} '
                f'WHERE {self._key_predicate(keys)}')

    def build_delete_sql(self, table: str, keys: Sequence[str]) -> str:
        """Generate a DELETE statement matching the key fields."""
        return f'DELETE FROM {self.quote_identifier(table)} WHERE {self._key_predicate(keys)}'

    def build_row_exists_sql(self, table: str, keys: Sequence[str]) -> str:
        """Generate a query returning a row only if the keyed row exists."""
        return f'SELECT 1 FROM {self.quote_identifier(table)} WHERE {self._key_predicate(keys)}'

    def build_select_sql(self, table: str, fields: Sequence[str],
                         keys: Sequence[str] = ()) -> str:
        """Generate a SELECT statement for the specified fields.

        Args:
            table: Table name
            fields: List of fields to select
            keys: Condition fields; the WHERE clause is omitted when empty

        Returns
            SQL query string
        """
        sql = f'SELECT {self._quote_fields(fields)} FROM {self.quote_identifier(table)}'
        if keys:
            sql += f' WHERE {self._key_predicate(keys)}'
        return sql

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.dialect_name}>'


def non_key_fields(fields: Sequence[str], keys: Sequence[str]) -> list[str]:
    """Return the fields not in ``keys``, preserving field order."""
    key_set = set(keys)
    return [field for field in fields if field not in key_set]
