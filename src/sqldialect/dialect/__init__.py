"""
Dialect registry for database-specific statement rendering.
"""
import logging
from functools import lru_cache

from sqldialect.dialect.ansi import AnsiDialect as AnsiDialect
from sqldialect.dialect.base import _DIALECT_REGISTRY
from sqldialect.dialect.base import Dialect as Dialect
from sqldialect.dialect.base import register_dialect as register_dialect
from sqldialect.dialect.derby import DerbyDialect as DerbyDialect
from sqldialect.dialect.mysql import MySQLDialect as MySQLDialect
from sqldialect.dialect.oracle import OracleDialect as OracleDialect
from sqldialect.dialect.postgres import PostgresDialect as PostgresDialect
from sqldialect.dialect.sqlserver import SQLServerDialect as SQLServerDialect
from sqldialect.exceptions import UnsupportedDialectError

logger = logging.getLogger(__name__)


def _validate_dialect(name: str) -> None:
    """Raise UnsupportedDialectError if dialect is not registered."""
    if name not in _DIALECT_REGISTRY:
        available = list(_DIALECT_REGISTRY.keys())
        raise UnsupportedDialectError(f'Unsupported dialect: {name}. Available: {available}')


@lru_cache(maxsize=16)
def _get_dialect(name: str) -> Dialect:
    """Get cached dialect instance for a name."""
    _validate_dialect(name)
    return _DIALECT_REGISTRY[name]()


def get_dialect(name: str) -> Dialect:
    """Get dialect instance for a dialect name.

    Names are matched case-insensitively, e.g. ``'Oracle'`` and ``'oracle'``
    return the same instance.
    """
    return _get_dialect(name.lower())


def find_dialect_name(url: str) -> str:
    """Return the registered dialect name accepting a connection URL."""
    for name, cls in _DIALECT_REGISTRY.items():
        if any(url.startswith(prefix) for prefix in cls.url_prefixes):
            return name
    raise UnsupportedDialectError(f'Could not find any dialect for url: {url}')


def load_dialect(url: str) -> Dialect:
    """Get dialect instance for a connection URL such as ``jdbc:oracle://host/db``."""
    name = find_dialect_name(url)
    logger.debug(f'Resolved dialect {name} for url {url}')
    return _get_dialect(name)


def get_available_dialects() -> list[str]:
    """Return list of registered dialect names."""
    return list(_DIALECT_REGISTRY.keys())


def is_supported_dialect(name: str) -> bool:
    """Check if a dialect is supported."""
    return name.lower() in _DIALECT_REGISTRY


def get_dialect_class(name: str) -> type[Dialect]:
    """Get the dialect class for a name without instantiating."""
    _validate_dialect(name.lower())
    return _DIALECT_REGISTRY[name.lower()]
