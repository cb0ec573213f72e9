"""
Tests for reading query results as records.
"""
import datetime
import decimal

import pytest
from dbcommons.adapters.column_matching import MatchPolicy
from dbcommons.adapters.structure import ResultSet
from dbcommons.exceptions import ConfigurationError
from dbcommons.options import pandas_numpy_data_loader
from dbcommons.source import read_records, select_records
from dbcommons.types import ColumnType, SqlType

from tests.fixtures.mocks import FakeCursor

DESCRIPTION = [
    ('id', 23, None, 4, None, None, False),
    ('price', 1700, None, None, 10, 2, True),
    ('created', 1082, None, 4, None, None, True),
    ]

ROWS = [
    (1, decimal.Decimal('12.50'), datetime.date(2023, 5, 15)),
    (2, None, '2023-06-01'),
    ]


def test_select_records(fake_connection):
    cn = fake_connection(DESCRIPTION, ROWS)

    records = select_records(cn, 'SELECT id, price, created FROM items',
                             ['id', 'price', 'created'])

    assert records == [
        {'id': 1, 'price': decimal.Decimal('12.50'), 'created': datetime.date(2023, 5, 15)},
        {'id': 2, 'price': None, 'created': datetime.date(2023, 6, 1)},
        ]
    assert records[0].price == decimal.Decimal('12.50')
    assert cn.cursor().closed


def test_select_records_passes_parameters(fake_connection):
    cn = fake_connection(DESCRIPTION, ROWS[:1])
    select_records(cn, 'SELECT id, price, created FROM items WHERE id = %s',
                   ['id', 'price', 'created'], 1)
    assert cn.cursor().executed == [('SELECT id, price, created FROM items WHERE id = %s', (1,))]


def test_select_records_unsupported_dialect(fake_connection):
    cn = fake_connection(DESCRIPTION, ROWS, dialect='mysql')
    with pytest.raises(ConfigurationError, match='Unsupported dialect: mysql'):
        select_records(cn, 'SELECT id, price, created FROM items', ['id', 'price', 'created'])
    assert cn.cursor().executed == []


def test_select_records_by_name(fake_connection):
    cn = fake_connection(DESCRIPTION, ROWS)

    records = select_records(cn, 'SELECT id, price, created FROM items',
                             ['created', 'id'], policy=MatchPolicy.BY_NAME)

    assert list(records[0]) == ['created', 'id']
    assert records[1] == {'created': datetime.date(2023, 6, 1), 'id': 2}


def test_select_records_column_drift(fake_connection):
    cn = fake_connection(DESCRIPTION, ROWS)
    with pytest.raises(ConfigurationError, match="Missing column 'amount'"):
        select_records(cn, 'SELECT id, price, created FROM items', ['id', 'amount', 'created'])
    assert cn.cursor().closed


def test_select_records_execute_error_closes_cursor(fake_connection, mocker):
    cn = fake_connection(DESCRIPTION, ROWS)
    mocker.patch.object(cn.cursor(), 'execute', side_effect=RuntimeError('syntax error'))

    with pytest.raises(RuntimeError, match='syntax error'):
        select_records(cn, 'SELEC id FROM items', ['id'])
    assert cn.cursor().closed


def test_select_records_data_loader(fake_connection):
    cn = fake_connection(DESCRIPTION, ROWS)
    df = select_records(cn, 'SELECT id, price, created FROM items',
                        ['id', 'price', 'created'], data_loader=pandas_numpy_data_loader)
    assert len(df) == 2
    assert df.attrs['column_types']['price']['kind'] == 'decimal'


def test_read_records_with_positions():
    cursor = FakeCursor([('a',), ('b',)], [('x', 2)])
    column_types = [ColumnType('b', 'int2', SqlType.SMALLINT), ColumnType('a', 'text', SqlType.VARCHAR)]

    records = list(read_records(ResultSet(cursor), column_types, positions=[1, 0]))

    assert records == [{'b': 2, 'a': 'x'}]


if __name__ == '__main__':
    __import__('pytest').main([__file__])
