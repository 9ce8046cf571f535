"""
Named parameter processing for rendered SQL statements.

Statements produced by the dialects bind values by name (``:field``). Drivers
that only understand positional binding need the same statement with ``?``
placeholders and, for every name, the positions it was rewritten to:

    UPDATE "tbl" SET "id" = :id, "name" = :name WHERE "id" = :id
    UPDATE "tbl" SET "id" = ?, "name" = ? WHERE "id" = ?      {'id': (1, 3), 'name': (2,)}

Main entry points:
- `parse_named_statement(sql)` - Rewrite to positional form (cached)
- `NamedStatement.bind(values)` - Order a name -> value mapping by position
- `quote_identifier()` - Quote table/column names
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Any

from sqldialect.cache import cached_result
from sqldialect.exceptions import MissingParameterError, NamedStatementError

logger = logging.getLogger(__name__)

# =============================================================================
# Data Structures
# =============================================================================


class ScanState(Enum):
    """Scanner states. Placeholders are only recognized in NORMAL."""
    NORMAL = auto()
    SINGLE_QUOTE = auto()       # 'string literal'
    DOUBLE_QUOTE = auto()       # "quoted identifier"
    BACKTICK = auto()           # `mysql identifier`
    BRACKET = auto()            # [sql server identifier]
    LINE_COMMENT = auto()       # -- up to newline
    BLOCK_COMMENT = auto()      # /* up to */


_QUOTE_OPENERS = {
    "'": ScanState.SINGLE_QUOTE,
    '"': ScanState.DOUBLE_QUOTE,
    '`': ScanState.BACKTICK,
    '[': ScanState.BRACKET,
    }

_QUOTE_CLOSERS = {
    ScanState.SINGLE_QUOTE: "'",
    ScanState.DOUBLE_QUOTE: '"',
    ScanState.BACKTICK: '`',
    ScanState.BRACKET: ']',
    }

_UNTERMINATED = {
    ScanState.SINGLE_QUOTE: 'string literal',
    ScanState.DOUBLE_QUOTE: 'quoted identifier',
    ScanState.BACKTICK: 'quoted identifier',
    ScanState.BRACKET: 'quoted identifier',
    ScanState.BLOCK_COMMENT: 'block comment',
    }


@dataclass(frozen=True, slots=True)
class NamedStatement:
    """Positional form of a statement with named placeholders.

    Instances are immutable and shared between callers of
    :func:`parse_named_statement`.

    Attributes
        sql: Statement with every ``:name`` replaced by ``?``
        parameters: Read-only mapping of name to the 1-based positions it
            occupies, ascending, names in order of first appearance
    """
    sql: str
    parameters: Mapping[str, tuple[int, ...]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = {name: tuple(positions) for name, positions in self.parameters.items()}
        object.__setattr__(self, 'parameters', MappingProxyType(frozen))

    @property
    def parameter_count(self) -> int:
        """Number of positional placeholders in the statement."""
        return sum(len(positions) for positions in self.parameters.values())

    def positions(self, name: str) -> tuple[int, ...]:
        """Positions bound to ``name``; empty when the name does not occur."""
        return self.parameters.get(name, ())

    def parameter_map(self) -> dict[str, list[int]]:
        """Return a mutable copy of the parameter mapping."""
        return {name: list(positions) for name, positions in self.parameters.items()}

    def bind(self, values: Mapping[str, Any]) -> tuple:
        """Order named values into a positional argument tuple.

        A value is repeated at every position its name occupies. Names in
        ``values`` that do not occur in the statement are ignored.

        Raises
            MissingParameterError: If a name in the statement has no value
        """
        args: list[Any] = [None] * self.parameter_count
        for name, positions in self.parameters.items():
            if name not in values:
                raise MissingParameterError(name)
            for position in positions:
                args[position - 1] = values[name]
        return tuple(args)


# =============================================================================
# Core Functions
# =============================================================================

def _is_name_start(char: str) -> bool:
    return char == '_' or char.isalpha()


def _is_name_part(char: str) -> bool:
    return char == '_' or char.isalnum()


def scan_named_statement(sql: str) -> tuple[str, dict[str, list[int]]]:
    """Rewrite named placeholders to ``?`` in a single left-to-right pass.

    Colons inside string literals, quoted identifiers (double-quoted,
    backtick-quoted and ``[bracketed]``) and comments are copied verbatim. A
    doubled closing character (``''``, ``]]``) inside a quoted region is an
    escape and does not end it. Outside them, a colon not followed by an
    identifier start character (letter or underscore) is copied verbatim, and
    ``::`` is copied as a unit so casts such as ``value::int`` are left alone.

    Parameters
        sql: SQL statement with ``:name`` placeholders

    Returns
        Tuple of (positional SQL, mapping of name to ascending positions)

    Raises
        NamedStatementError: If a quoted region or block comment is not
            terminated, or a ``?`` placeholder appears outside quotes
    """
    output: list[str] = []
    params: dict[str, list[int]] = {}
    position = 0
    state = ScanState.NORMAL
    region_start = 0
    length = len(sql)
    i = 0

    while i < length:
        char = sql[i]

        if state is ScanState.NORMAL:
            if char in _QUOTE_OPENERS:
                state = _QUOTE_OPENERS[char]
                region_start = i
            elif sql.startswith('--', i):
                state = ScanState.LINE_COMMENT
                output.append('--')
                i += 2
                continue
            elif sql.startswith('/*', i):
                state = ScanState.BLOCK_COMMENT
                region_start = i
                output.append('/*')
                i += 2
                continue
            elif char == '?':
                raise NamedStatementError('Positional placeholder in named statement', i)
            elif char == ':':
                if sql.startswith('::', i):
                    output.append('::')
                    i += 2
                    continue
                end = i + 1
                if end < length and _is_name_start(sql[end]):
                    end += 1
                    while end < length and _is_name_part(sql[end]):
                        end += 1
                    position += 1
                    params.setdefault(sql[i + 1:end], []).append(position)
                    output.append('?')
                    i = end
                    continue

        elif state is ScanState.LINE_COMMENT:
            if char == '\n':
                state = ScanState.NORMAL

        elif state is ScanState.BLOCK_COMMENT:
            if sql.startswith('*/', i):
                state = ScanState.NORMAL
                output.append('*/')
                i += 2
                continue

        elif char == _QUOTE_CLOSERS[state]:
            # A doubled closer ('', "", ``, ]]) is an escaped character
            if sql.startswith(char * 2, i):
                output.append(char * 2)
                i += 2
                continue
            state = ScanState.NORMAL

        output.append(char)
        i += 1

    if state in _UNTERMINATED:
        raise NamedStatementError(f'Unterminated {_UNTERMINATED[state]}', region_start)

    return ''.join(output), params


@cached_result('named_statement', maxsize=512)
def parse_named_statement(sql: str) -> NamedStatement:
    """Parse a statement with named placeholders into its positional form.

    Results are cached; identical input returns the same immutable object.

    Every character other than a placeholder is copied verbatim, with one
    exception: a ``?`` outside quotes and comments is rejected rather than
    copied. Mixing positional and named placeholders would make the ``?``
    count differ from the number of named occurrences, so such input is
    treated as malformed.

    Parameters
        sql: SQL statement with ``:name`` placeholders

    Returns
        NamedStatement with the positional SQL and name -> positions mapping

    Raises
        NamedStatementError: If the statement is malformed, see
            :func:`scan_named_statement`
    """
    parsed_sql, params = scan_named_statement(sql)
    logger.debug(f'Parsed {sum(len(p) for p in params.values())} placeholders '
                 f'for {len(params)} names')
    return NamedStatement(parsed_sql, params)


def has_named_placeholders(sql: str | None) -> bool:
    """Check if SQL has at least one named placeholder outside quotes and comments.

    Parameters
        sql: SQL query string

    Returns
        True if a ``:name`` placeholder exists

    Raises
        NamedStatementError: If the statement is malformed, see
            :func:`scan_named_statement`
    """
    if not sql:
        return False
    return bool(parse_named_statement(sql).parameters)


def quote_identifier(identifier: str, open_quote: str = '"',
                     close_quote: str | None = None) -> str:
    """Safely quote database identifiers.

    The closing quote character is doubled inside the identifier.

    Parameters
        identifier: Table or column name
        open_quote: Opening quote character, ``"`` for ANSI SQL
        close_quote: Closing quote character, defaults to ``open_quote``

    Returns
        Quoted identifier
    """
    close_quote = close_quote or open_quote
    return open_quote + identifier.replace(close_quote, close_quote * 2) + close_quote
