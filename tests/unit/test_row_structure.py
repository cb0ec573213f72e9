"""
Tests for typed row accessors and the forward-only result set.
"""
import datetime

import numpy as np
import pandas as pd
from dbcommons.adapters.structure import ResultRow, ResultSet, to_date, to_time
from dbcommons.adapters.structure import to_timestamp

from tests.fixtures.mocks import FakeCursor


class TestToTimestamp:

    def test_from_numpy_datetime64(self):
        value = to_timestamp(np.datetime64('2023-05-15T14:30:45.123456'))
        assert value == datetime.datetime(2023, 5, 15, 14, 30, 45, 123456)

    def test_nat_is_none(self):
        assert to_timestamp(np.datetime64('NaT')) is None
        assert to_timestamp(pd.NaT) is None

    def test_space_separated_string_with_offset(self):
        value = to_timestamp('2023-05-15 14:30:45+00:00')
        assert value == datetime.datetime(2023, 5, 15, 14, 30, 45, tzinfo=datetime.timezone.utc)
        assert value.utcoffset() == datetime.timedelta(0)

    def test_datetime_subclass_becomes_plain_datetime(self):
        class DriverDateTime(datetime.datetime):
            pass

        value = to_timestamp(DriverDateTime(2023, 5, 15, 1, 2, 3, 4))
        assert type(value) is datetime.datetime
        assert value == datetime.datetime(2023, 5, 15, 1, 2, 3, 4)

    def test_bytes_decoded(self):
        assert to_timestamp(b'2023-05-15T00:00:00') == datetime.datetime(2023, 5, 15)


class TestToDateAndTime:

    def test_date_from_bytes(self):
        assert to_date(b'2023-05-15') == datetime.date(2023, 5, 15)

    def test_date_subclass_becomes_plain_date(self):
        class DriverDate(datetime.date):
            pass

        value = to_date(DriverDate(2023, 5, 15))
        assert type(value) is datetime.date
        assert value == datetime.date(2023, 5, 15)

    def test_time_from_string(self):
        assert to_time('14:30:45.5') == datetime.time(14, 30, 45, 500000)

    def test_time_keeps_tzinfo_of_timestamp(self):
        original = datetime.datetime(2023, 5, 15, 14, 30, tzinfo=datetime.timezone.utc)
        value = to_time(original)
        assert value == datetime.time(14, 30, tzinfo=datetime.timezone.utc)

    def test_none(self):
        assert to_date(None) is None
        assert to_time(None) is None


class TestResultRow:

    def test_get_object_returns_driver_value(self):
        marker = object()
        assert ResultRow([marker]).get_object(0) is marker

    def test_get_string(self):
        row = ResultRow([None, 5, b'abc'])
        assert row.get_string(0) is None
        assert row.get_string(1) == '5'
        assert row.get_string(2) == 'abc'

    def test_len(self):
        assert len(ResultRow((1, 2, 3))) == 3


class TestResultSet:

    def test_next_walks_rows_until_exhausted(self):
        result_set = ResultSet(FakeCursor([('id',)], [(1,), (2,)]))
        assert result_set.next()
        assert result_set.row.get_object(0) == 1
        assert result_set.next()
        assert result_set.row.get_object(0) == 2
        assert not result_set.next()
        assert result_set.row is None

    def test_iteration(self):
        result_set = ResultSet(FakeCursor([('id',)], [(1,), (2,), (3,)]))
        assert [row.get_object(0) for row in result_set] == [1, 2, 3]

    def test_context_manager_closes_cursor(self):
        cursor = FakeCursor([('id',)], [])
        with ResultSet(cursor) as result_set:
            assert result_set.description == [('id',)]
        assert cursor.closed


if __name__ == '__main__':
    __import__('pytest').main([__file__])
