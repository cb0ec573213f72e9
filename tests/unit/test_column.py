"""
Tests for Column metadata built from cursor descriptions.
"""
import sqlite3

import pytest
from dbcommons.adapters.column_info import Column, columns_from_cursor_description
from dbcommons.types import SqlType


class TestFromCursorDescription:

    def test_postgres_oid(self):
        col = Column.from_cursor_description(('id', 23, None, 4, None, None, None), 'postgresql')
        assert col.name == 'id'
        assert col.type_name == 'int4'
        assert col.sql_type == SqlType.INTEGER
        assert col.internal_size == 4

    def test_numeric_precision_and_scale(self):
        col = Column.from_cursor_description(
            ('price', 1700, None, None, 10, 2, True), 'postgresql')
        assert col.sql_type == SqlType.NUMERIC
        assert (col.precision, col.scale) == (10, 2)
        assert col.nullable is True

    def test_short_description_padded(self):
        col = Column.from_cursor_description(('name', 25), 'postgresql')
        assert col.type_name == 'text'
        assert col.sql_type == SqlType.VARCHAR
        assert col.nullable is None

    def test_sqlite_declared_type(self):
        col = Column.from_cursor_description(
            ('Price', None, None, None, None, None, None), 'sqlite',
            declared_types={'price': 'DECIMAL(10, 2)'})
        assert col.type_code == 'DECIMAL(10, 2)'
        assert col.type_name == 'DECIMAL'
        assert col.sql_type == SqlType.DECIMAL

    def test_missing_type_code_is_other(self):
        col = Column.from_cursor_description(('x', None), 'sqlite')
        assert col.type_name == ''
        assert col.sql_type == SqlType.OTHER


def test_columns_from_sqlite_cursor():
    """Declared types are looked up when the table is known"""
    cn = sqlite3.connect(':memory:')
    try:
        cn.execute('CREATE TABLE items (id INTEGER, qty SMALLINT, created DATE)')
        cursor = cn.execute('SELECT id, qty, created FROM items')

        columns = columns_from_cursor_description(cursor, 'sqlite', 'items', cn)
        assert [col.sql_type for col in columns] == [
            SqlType.INTEGER, SqlType.SMALLINT, SqlType.DATE]

        columns = columns_from_cursor_description(cursor, 'sqlite')
        assert [col.sql_type for col in columns] == [SqlType.OTHER] * 3
    finally:
        cn.close()


def test_columns_from_cursor_without_description(fake_cursor):
    assert columns_from_cursor_description(fake_cursor(), 'postgresql') == []


def test_get_column_by_name():
    columns = [Column('Id', 23, 'int4', SqlType.INTEGER), Column('Name', 25, 'text', SqlType.VARCHAR)]
    assert Column.get_column_by_name(columns, 'name') is columns[1]
    assert Column.get_column_by_name(columns, 'missing') is None
    assert Column.get_names(columns) == ['Id', 'Name']


def test_to_dict():
    col = Column('id', 23, 'int4', SqlType.INTEGER, precision=32)
    data = col.to_dict()
    assert data['sql_type'] == 4
    assert data['type_name'] == 'int4'
    assert data['precision'] == 32
    assert 'INTEGER' in repr(col)


if __name__ == '__main__':
    __import__('pytest').main([__file__])
