"""
Exception classes for dialect resolution and named statement handling.
"""


class DialectError(Exception):
    """Base class for all sqldialect errors.
    """


class UnsupportedDialectError(DialectError, ValueError):
    """Dialect name or connection URL does not match a registered dialect.
    """


class NamedStatementError(DialectError, ValueError):
    """Malformed named statement.

    Raised for an unterminated quoted region or comment, and for a
    positional placeholder mixed into a named statement.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f'{message} (at offset {position})'
        super().__init__(message)
        self.position = position


class MissingParameterError(DialectError, KeyError):
    """No value supplied for a named parameter.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f'No value for named parameter: {self.name}'
