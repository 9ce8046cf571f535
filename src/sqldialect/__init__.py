"""
SQL statement rendering for ANSI, Derby, MySQL, Oracle, PostgreSQL and SQL
Server, and named-to-positional placeholder conversion.

All rendering operations can be called either as:
- Module functions: sqldialect.build_update_sql('oracle', table, fields, keys)
- Dialect methods: get_dialect('oracle').build_update_sql(table, fields, keys)
"""
__version__ = '0.1.0'

from collections.abc import Sequence

from sqldialect.dialect import Dialect, get_available_dialects, get_dialect
from sqldialect.dialect import is_supported_dialect, load_dialect
from sqldialect.exceptions import DialectError, MissingParameterError
from sqldialect.exceptions import NamedStatementError, UnsupportedDialectError
from sqldialect.options import DialectOptions
from sqldialect.sql import NamedStatement, has_named_placeholders
from sqldialect.sql import parse_named_statement, quote_identifier
from sqldialect.upsert import UpsertPlan, plan_upsert


def _resolve(dialect: Dialect | str) -> Dialect:
    if isinstance(dialect, Dialect):
        return dialect
    return get_dialect(dialect)


def build_insert_sql(dialect: Dialect | str, table: str, fields: Sequence[str]) -> str:
    """Generate an INSERT statement with one named placeholder per field.
    """
    return _resolve(dialect).build_insert_sql(table, fields)


def build_update_sql(dialect: Dialect | str, table: str, fields: Sequence[str],
                     keys: Sequence[str]) -> str:
    """Generate an UPDATE statement setting every field, matched on keys.
    """
    return _resolve(dialect).build_update_sql(table, fields, keys)


def build_delete_sql(dialect: Dialect | str, table: str, keys: Sequence[str]) -> str:
    """Generate a DELETE statement matched on keys.
    """
    return _resolve(dialect).build_delete_sql(table, keys)


def build_select_sql(dialect: Dialect | str, table: str, fields: Sequence[str],
                     keys: Sequence[str] = ()) -> str:
    """Generate a SELECT of fields matched on keys.
    """
    return _resolve(dialect).build_select_sql(table, fields, keys)


def build_row_exists_sql(dialect: Dialect | str, table: str, keys: Sequence[str]) -> str:
    """Generate a query that returns a row if the keyed row exists.
    """
    return _resolve(dialect).build_row_exists_sql(table, keys)


def build_upsert_sql(dialect: Dialect | str, table: str, fields: Sequence[str],
                     keys: Sequence[str]) -> str | None:
    """Generate the dialect's native upsert, or None if it has none.
    """
    return _resolve(dialect).build_upsert_sql(table, fields, keys)


__all__ = [
    'Dialect',
    'DialectError',
    'DialectOptions',
    'MissingParameterError',
    'NamedStatement',
    'NamedStatementError',
    'UnsupportedDialectError',
    'UpsertPlan',
    'build_delete_sql',
    'build_insert_sql',
    'build_row_exists_sql',
    'build_select_sql',
    'build_update_sql',
    'build_upsert_sql',
    'get_available_dialects',
    'get_dialect',
    'has_named_placeholders',
    'is_supported_dialect',
    'load_dialect',
    'parse_named_statement',
    'plan_upsert',
    'quote_identifier',
    ]
