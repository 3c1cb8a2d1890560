import operator
import re

from dataclasses import dataclass, field
from enum import Enum
from typing import Self
from collections.abc import Sequence

from . import GoogleSheetsMaxColumnIndex

# the 'A' side of 'A1' notation, letter N is digit N+1 in bijective base 26
ASCII_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# titles that can go in a range without quoting
_PLAIN_SHEET_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
# plain titles that would still read as a cell, A1 style (Q1, FY2024) or R1C1 style
_CELL_LIKE_RE = re.compile(r"^(?:[a-zA-Z]{1,3}\d+|[rR]\d*[cC]\d*)$")


class A1NotationError(ValueError):
    """Base for anything that can't be turned into A1 notation."""
    pass


class ColumnOutOfRangeError(A1NotationError):
    """Column index is outside of A-ZZZ, 0-18277 zero-indexed."""

    def __init__(self, column: int) -> None:
        self.column = column
        super().__init__(f"column index {column} is out of range, "
                         f"must be 0-{GoogleSheetsMaxColumnIndex} (A-ZZZ)")


class RowOutOfRangeError(A1NotationError):
    """Row index is negative."""

    def __init__(self, row: int) -> None:
        self.row = row
        super().__init__(f"row index {row} is out of range, must be >= 0")


class InvalidRangeShapeError(A1NotationError):
    """
    The combination of present/absent start and end coordinates
    doesn't describe a range A1 notation can express.
    """

    def __init__(self, dimensions: tuple[int|None,int|None,int|None,int|None]) -> None:
        self.dimensions = dimensions
        super().__init__(f"invalid A1 range shape (start col, start row, end col, end row): {dimensions}")


class GoogleSheetsRangeShape(Enum):
    """
    The forms of A1 notation that can be generated, named by which
    bounds are present.
    """
    COLUMN_FROM_CELL = "A5:B"
    BOUNDED = "A1:B2"
    COLUMNS = "A:B"
    ROWS_FROM_COLUMN = "5:B9"
    ROWS = "5:9"


def column_notation(column: int) -> str:
    """
    Get the column notation ("A", "CF", "BHH") of a zero-indexed column.

    The letters are a bijective base 26 numeral, there is no zero digit
    so 'A' is 1 and 'Z' is 26, which is why each place is shifted down by
    one before indexing into the letters.  Single letters cover 0-25, two
    letters 26-701 and three letters 702-18277.

    column: Zero-indexed column, 0 is 'A'.

    return: Column letters.

    raises: ColumnOutOfRangeError if the column is negative or past 'ZZZ',
            TypeError if it is not an integer.
    """
    if isinstance(column, bool):
        raise ColumnOutOfRangeError(column)
    c = operator.index(column)
    if c < 0 or c > GoogleSheetsMaxColumnIndex:
        raise ColumnOutOfRangeError(column)
    # A - Z
    if c < 26:
        return ASCII_UPPER[c]
    # AA - ZZ
    elif c < 702:
        return ASCII_UPPER[c // 26 - 1] + ASCII_UPPER[c % 26]
    # AAA - ZZZ
    # the leading two letters are whatever two letter column c // 26 - 1 is
    lead = c // 26 - 1
    return ASCII_UPPER[lead // 26 - 1] + ASCII_UPPER[lead % 26] + ASCII_UPPER[c % 26]


def _row_notation(row: int) -> str:
    if isinstance(row, bool):
        raise RowOutOfRangeError(row)
    r = operator.index(row)
    if r < 0:
        raise RowOutOfRangeError(row)
    return str(r + 1)


def range_shape(start_col: int|None = None, start_row: int|None = None,
                end_col: int|None = None, end_row: int|None = None) -> GoogleSheetsRangeShape:
    """
    Classify a set of zero-indexed bounds into the A1 form it produces.
    Order matters here, 'A5:B' has to be checked before 'A:B' as any
    'A5:B' shape would also satisfy the 'A:B' check.

    raises: InvalidRangeShapeError if no A1 form fits.
    """
    has_sc = start_col is not None
    has_sr = start_row is not None
    has_ec = end_col is not None
    has_er = end_row is not None
    if has_sc and has_ec:
        # exactly one row present, either side, means 'from that row down'
        if has_sr != has_er:
            return GoogleSheetsRangeShape.COLUMN_FROM_CELL
        elif has_sr:
            return GoogleSheetsRangeShape.BOUNDED
        return GoogleSheetsRangeShape.COLUMNS
    elif not has_sc and has_sr and has_er:
        if has_ec:
            return GoogleSheetsRangeShape.ROWS_FROM_COLUMN
        return GoogleSheetsRangeShape.ROWS
    raise InvalidRangeShapeError((start_col, start_row, end_col, end_row))


def a1_notation(start_col: int|None = None, start_row: int|None = None,
                end_col: int|None = None, end_row: int|None = None) -> str:
    """
    Get valid A1 notation from zero-indexed start and end columns and rows,
    None meaning that bound is not present.
    See https://developers.google.com/sheets/api/guides/concepts#expandable-1

    Some examples:
        a1_notation(0, 0, 2, 2)         -> "A1:C3"  top left nine cells
        a1_notation(0, 4, 0, None)      -> "A5:A"   column A from row 5 on
        a1_notation(0, None, 3, None)   -> "A:D"    all of columns A-D
        a1_notation(None, 4, 2, 8)      -> "5:C9"   rows 5-9, up to column C
        a1_notation(None, 4, None, 8)   -> "5:9"    all of rows 5-9

    A start col/end col with only an end row, as in "A:B5", isn't really
    valid but is taken to mean the same as "A5:B".

    return: A1 string, without any sheet title.

    raises: InvalidRangeShapeError if the bounds present can't be expressed,
            ColumnOutOfRangeError/RowOutOfRangeError on bad indexes.
    """
    shape = range_shape(start_col, start_row, end_col, end_row)
    if shape is GoogleSheetsRangeShape.COLUMN_FROM_CELL:
        row = start_row if start_row is not None else end_row
        return f"{column_notation(start_col)}{_row_notation(row)}:{column_notation(end_col)}"
    elif shape is GoogleSheetsRangeShape.BOUNDED:
        return (f"{column_notation(start_col)}{_row_notation(start_row)}:"
                f"{column_notation(end_col)}{_row_notation(end_row)}")
    elif shape is GoogleSheetsRangeShape.COLUMNS:
        return f"{column_notation(start_col)}:{column_notation(end_col)}"
    elif shape is GoogleSheetsRangeShape.ROWS_FROM_COLUMN:
        return f"{_row_notation(start_row)}:{column_notation(end_col)}{_row_notation(end_row)}"
    return f"{_row_notation(start_row)}:{_row_notation(end_row)}"


def sheet_range(sheet: str, notation: str) -> str:
    """
    Qualify A1 notation with a sheet title, as in 'Sheet1!A1:B2'.
    Titles with spaces or other non alphanumeric characters get wrapped
    in single quotes, with any single quotes inside doubled up.  So do
    titles that would otherwise read as a cell, 'Q1'!A1 and not Q1!A1.
    An empty title leaves the notation alone, which means the first sheet.
    """
    title = str(sheet)
    if not title:
        return notation
    if not _PLAIN_SHEET_RE.match(title) or _CELL_LIKE_RE.match(title):
        title = "'" + title.replace("'", "''") + "'"
    return f"{title}!{notation}" if notation else title


@dataclass(frozen=True)
class GoogleSheetsRange():
    """
    Zero-indexed range of a sheet that renders as A1 notation.
    Any bound can be None which means unbounded in that direction,
    as long as the combination is one A1 can express.  Validation
    happens on construction so a bad range never makes it to a request.
    """
    start_col: int|None = field(default=None)
    start_row: int|None = field(default=None)
    end_col: int|None = field(default=None)
    end_row: int|None = field(default=None)
    sheet: str = field(default="")

    def __post_init__(self) -> None:
        # raises on a bad shape or index
        a1_notation(*self.dimensions)

    def __str__(self) -> str:
        return sheet_range(self.sheet, self.a1)

    @classmethod
    def for_values(cls, values: Sequence[Sequence], start_col: int = 0,
                   start_row: int = 0, sheet: str = "") -> Self:
        """
        The bounded range exactly covering a list of rows, with the top left
        at start_col/start_row.  Rows can be ragged, the widest one wins.
        """
        if not values:
            raise InvalidRangeShapeError((start_col, start_row, None, None))
        width = max(len(r) for r in values)
        if not width:
            raise InvalidRangeShapeError((start_col, start_row, None, start_row + len(values) - 1))
        return cls(start_col, start_row, start_col + width - 1, start_row + len(values) - 1, sheet)

    @property
    def dimensions(self) -> tuple[int|None,int|None,int|None,int|None]:
        """(start col, start row, end col, end row)"""
        return (self.start_col, self.start_row, self.end_col, self.end_row)

    @property
    def shape(self) -> GoogleSheetsRangeShape:
        return range_shape(*self.dimensions)

    @property
    def a1(self) -> str:
        """A1 notation without the sheet title"""
        return a1_notation(*self.dimensions)
