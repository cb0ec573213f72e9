"""
Integration tests writing records into SQLite and reading them back.
"""
import datetime
import decimal
import sqlite3

import pytest
from dbcommons.drivers import SQLiteDriver, ensure_driver_available, get_driver_registry
from dbcommons.exceptions import DataAccessError
from dbcommons.sink import write_records
from dbcommons.source import select_records

COLUMNS = [
    'smallint_col', 'integer_col', 'bigint_col', 'decimal_col', 'numeric_col',
    'decfloat_col', 'real_col', 'double_col', 'char_col', 'varchar_col',
    'clob_col', 'blob_col', 'date_col', 'time_col', 'timestamp_col',
    ]


def _record(i):
    """Record with loosely typed values, keyed by upper-case field names"""
    name = f'user{i}'
    decimal_value, numeric_value = {1: (4.458, '4.459'), 2: (5.458, '5.459')}[i]
    return {
        'SMALLINT_COL': i,
        'INTEGER_COL': i,
        'BIGINT_COL': 3456987 + i,
        'DECIMAL_COL': decimal_value,
        'NUMERIC_COL': numeric_value,
        'DECFLOAT_COL': 3.456 + i,
        'REAL_COL': 3.457 + i,
        'DOUBLE_COL': 3.456 + i,
        'CHAR_COL': name,
        'VARCHAR_COL': name,
        'CLOB_COL': name.encode(),
        'BLOB_COL': name.encode(),
        'DATE_COL': datetime.date(2023, 5, 15 + i),
        'TIME_COL': datetime.time(14, 30, i),
        'TIMESTAMP_COL': datetime.datetime(2023, 5, 15, 14, 30, 45, 123456 + i),
        }


@pytest.fixture
def sqlite_cn(sqlite_url):
    with ensure_driver_available(SQLiteDriver, sqlite_url, 'sqlite'):
        cn = get_driver_registry().get_connection(sqlite_url)
        try:
            yield cn
        finally:
            cn.close()


@pytest.mark.sqlite
def test_round_trip(sqlite_cn, sqlite_path):
    """Written records read back with the types the table declares"""
    assert write_records(sqlite_cn, 'db_types', [_record(1), _record(2)]) == 2

    records = select_records(sqlite_cn, f'SELECT {", ".join(COLUMNS)} FROM db_types '
                             'ORDER BY smallint_col', COLUMNS, table_name='db_types')

    assert len(records) == 2
    first = records[0]
    assert first.smallint_col == 1
    assert first.integer_col == 1
    assert first.bigint_col == 3456988
    assert first.decimal_col == decimal.Decimal('4.458')
    assert first.numeric_col == decimal.Decimal('4.459')
    assert first.decfloat_col == pytest.approx(4.456)
    assert first.real_col == pytest.approx(4.457)
    assert first.double_col == pytest.approx(4.456)
    assert first.char_col == 'user1'
    assert first.varchar_col == 'user1'
    assert first.clob_col == 'user1'
    assert first.blob_col == b'user1'
    assert first.date_col == datetime.date(2023, 5, 16)
    assert first.time_col == datetime.time(14, 30, 1)
    assert first.timestamp_col == datetime.datetime(2023, 5, 15, 14, 30, 45, 123457)
    assert records[1].varchar_col == 'user2'
    assert records[1].blob_col == b'user2'

    conn = sqlite3.connect(sqlite_path)
    try:
        stored = conn.execute('SELECT typeof(clob_col), typeof(blob_col) FROM db_types').fetchall()
    finally:
        conn.close()
    assert stored == [('text', 'blob'), ('text', 'blob')]


@pytest.mark.sqlite
def test_nulls_written(sqlite_cn):
    write_records(sqlite_cn, 'db_types', [{'smallint_col': 5, 'clob_col': None}],
                  columns=['smallint_col', 'clob_col', 'date_col'])
    records = select_records(sqlite_cn, 'SELECT smallint_col, clob_col, date_col FROM db_types',
                             ['smallint_col', 'clob_col', 'date_col'], table_name='db_types')
    assert records == [{'smallint_col': 5, 'clob_col': None, 'date_col': None}]


@pytest.mark.sqlite
def test_unknown_column_rejected(sqlite_cn, sqlite_path):
    with pytest.raises(DataAccessError, match='no_such_col'):
        write_records(sqlite_cn, 'db_types', [{'smallint_col': 1, 'no_such_col': 2}])

    conn = sqlite3.connect(sqlite_path)
    try:
        assert conn.execute('SELECT COUNT(*) FROM db_types').fetchone() == (0,)
    finally:
        conn.close()
