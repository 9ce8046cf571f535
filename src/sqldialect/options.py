from dataclasses import dataclass

from sqldialect.dialect import Dialect, find_dialect_name, get_available_dialects
from sqldialect.dialect import get_dialect, is_supported_dialect
from sqldialect.exceptions import UnsupportedDialectError

__all__ = ['DialectOptions']


@dataclass
class DialectOptions:
    """Options

    supported dialect names: `ansi`, `derby`, `mysql`, `oracle`, `postgresql`,
    `sqlserver`

    - drivername: Dialect name (default: `ansi`)
    - url: Connection URL such as `jdbc:oracle://host:1521/db`. When given,
      the dialect is resolved from the URL and replaces `drivername`.
    """
    drivername: str = 'ansi'
    url: str = None

    def __post_init__(self):
        if self.url:
            self.drivername = find_dialect_name(self.url)
        self.drivername = self.drivername.lower()
        if not is_supported_dialect(self.drivername):
            available = get_available_dialects()
            raise UnsupportedDialectError(f'drivername must be one of: {available}')

    def get_dialect(self) -> Dialect:
        """Return the dialect these options select."""
        return get_dialect(self.drivername)
