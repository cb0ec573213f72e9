"""
Row and result structure adapters over DB-API cursors.

A ResultSet walks a cursor forward one row at a time. Each fetched row is
exposed as a ResultRow with a generic accessor (`get_object`) and typed
accessors (`get_date`, `get_time`, `get_timestamp`, `get_string`).

The typed accessors exist because the generic value is whatever the driver
hands back: pandas Timestamps, numpy datetime64 values, ISO strings from
SQLite, `timedelta` for TIME columns from some MySQL drivers, or datetime
subclasses. The typed accessors normalize those to plain `datetime` objects
without dropping microseconds or tzinfo.
"""
import datetime
import logging
from collections.abc import Iterator, Sequence
from typing import Any

import dateutil.parser
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

_isoparser = dateutil.parser.isoparser()


def _decode(value: Any) -> Any:
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value).decode()
    return value


def to_timestamp(value: Any) -> datetime.datetime | None:
    """Normalize a driver value to a plain datetime.

    >>> to_timestamp('2023-05-15T14:30:45.123456')
    datetime.datetime(2023, 5, 15, 14, 30, 45, 123456)
    >>> to_timestamp(datetime.date(2023, 5, 15))
    datetime.datetime(2023, 5, 15, 0, 0)
    >>> to_timestamp(np.datetime64('NaT')) is None
    True
    """
    value = _decode(value)
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            return None
        value = pd.Timestamp(value)
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime.datetime):
        return datetime.datetime(value.year, value.month, value.day, value.hour,
                                 value.minute, value.second, value.microsecond,
                                 tzinfo=value.tzinfo, fold=value.fold)
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return dateutil.parser.isoparse(value.strip().replace(' ', 'T', 1))
    raise TypeError(f'Cannot read {type(value).__name__} as a timestamp')


def to_date(value: Any) -> datetime.date | None:
    """Normalize a driver value to a plain date.

    >>> to_date('2023-05-15')
    datetime.date(2023, 5, 15)
    >>> to_date(datetime.datetime(2023, 5, 15, 14, 30))
    datetime.date(2023, 5, 15)
    """
    value = _decode(value)
    if value is None:
        return None
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return datetime.date(value.year, value.month, value.day)
    timestamp = to_timestamp(value)
    return timestamp.date() if timestamp is not None else None


def to_time(value: Any) -> datetime.time | None:
    """Normalize a driver value to a plain time of day.

    >>> to_time('14:30:45.5')
    datetime.time(14, 30, 45, 500000)
    >>> to_time(datetime.timedelta(hours=1, minutes=2, seconds=3))
    datetime.time(1, 2, 3)
    """
    value = _decode(value)
    if value is None:
        return None
    if isinstance(value, datetime.time):
        return datetime.time(value.hour, value.minute, value.second,
                             value.microsecond, tzinfo=value.tzinfo, fold=value.fold)
    if isinstance(value, datetime.timedelta):
        return (datetime.datetime.min + value).time()
    if isinstance(value, str) and 'T' not in value and '-' not in value[:5]:
        return _isoparser.parse_isotime(value.strip())
    timestamp = to_timestamp(value)
    return timestamp.timetz() if timestamp is not None else None


class ResultRow:
    """One fetched row with typed, 0-based accessors.
    """

    def __init__(self, values: Sequence[Any]) -> None:
        self.values = values

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f'ResultRow({tuple(self.values)!r})'

    def get_object(self, index: int) -> Any:
        """Get the value exactly as the driver returned it."""
        return self.values[index]

    def get_string(self, index: int) -> str | None:
        value = _decode(self.values[index])
        return None if value is None else str(value)

    def get_date(self, index: int) -> datetime.date | None:
        return to_date(self.values[index])

    def get_time(self, index: int) -> datetime.time | None:
        return to_time(self.values[index])

    def get_timestamp(self, index: int) -> datetime.datetime | None:
        return to_timestamp(self.values[index])


class ResultSet:
    """Forward-only row cursor over a DB-API cursor.

    Usage:
        result_set = ResultSet(cursor)
        while result_set.next():
            value = result_set.row.get_object(0)
    """

    def __init__(self, cursor: Any) -> None:
        self.cursor = cursor
        self.row: ResultRow | None = None

    @property
    def description(self) -> Sequence | None:
        return self.cursor.description

    def next(self) -> bool:
        """Advance to the next row. Returns False once the cursor is exhausted.
        """
        values = self.cursor.fetchone()
        if values is None:
            self.row = None
            return False
        self.row = ResultRow(values)
        return True

    def __iter__(self) -> Iterator[ResultRow]:
        while self.next():
            yield self.row

    def close(self) -> None:
        self.cursor.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
