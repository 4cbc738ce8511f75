#!/usr/bin/env python3

import sys
import os
import unittest
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hotel.db import DataBase, IntegrityError
from hotel.executor import QueryExecutor
from hotel.records import RecordMapper


class TestQueryExecutor(unittest.TestCase):

    def setUp(self):
        self.lines = []
        self.database = DataBase('sqlite', database=':memory:')
        self.database.connect()
        self.executor = QueryExecutor(self.database, self.lines.append)
        self.executor.run_for_effect(
            'CREATE TABLE guest (id INTEGER PRIMARY KEY, name TEXT NOT NULL, '
            'arrival DATE, paid REAL)')
        for guest in ((1, 'Alice', '2024-06-01', 120.5),
                      (2, 'Bob', None, 99.0),
                      (3, 'Carol', '2024-06-03', None)):
            self.executor.run_for_effect('INSERT INTO guest VALUES (?, ?, ?, ?)', guest)

    def tearDown(self):
        self.database.close()

    def test_run_for_effect_raises_database_error(self):
        with self.assertRaises(IntegrityError):
            self.executor.run_for_effect('INSERT INTO guest VALUES (?, ?, ?, ?)',
                                         (1, 'Dan', None, None))

    def test_run_count_only(self):
        self.assertEqual(self.executor.run_count_only('SELECT * FROM guest'), 3)
        self.assertEqual(self.executor.run_count_only('SELECT * FROM guest WHERE name = ?',
                                                      ('Bob',)), 1)
        self.assertEqual(self.executor.run_count_only('SELECT * FROM guest WHERE id > ?',
                                                      (10,)), 0)

    def test_run_and_collect(self):
        rows = self.executor.run_and_collect('SELECT id, name, arrival, paid FROM guest ORDER BY id')
        self.assertEqual(rows, [['1', 'Alice', '2024-06-01', '120.5'],
                                ['2', 'Bob', '', '99.0'],
                                ['3', 'Carol', '2024-06-03', '']])
        self.assertEqual(self.lines, [])

    def test_run_and_render(self):
        row_count = self.executor.run_and_render('SELECT id, name FROM guest WHERE id < ? ORDER BY id',
                                                 (3,))
        self.assertEqual(row_count, 2)
        self.assertEqual(self.lines, ['id\tname', '1\tAlice', '2\tBob'])

    def test_run_and_render_without_row(self):
        row_count = self.executor.run_and_render('SELECT id, name FROM guest WHERE id > 10')
        self.assertEqual(row_count, 0)
        self.assertEqual(self.lines, [])

    def test_last_generated_id(self):
        self.executor.run_for_effect("INSERT INTO guest (name) VALUES ('Dan')")
        probe = self.executor.sql.generated_id_probe('guest', 'id')
        self.assertEqual(self.executor.last_generated_id(probe), 4)

    def test_last_generated_id_not_found(self):
        self.assertEqual(self.executor.last_generated_id('SELECT id FROM guest WHERE id > 10'),
                         QueryExecutor.NOT_FOUND)
        self.assertEqual(self.executor.last_generated_id('SELECT NULL'), -1)


class FakeCursor:

    def __init__(self, description, rows):
        self.description = description
        self.rows = rows

    def __iter__(self):
        return iter(self.rows)


class TestRecordMapper(unittest.TestCase):

    def test_statement_without_result(self):
        mapper = RecordMapper(FakeCursor(None, []))
        self.assertEqual(mapper.column_names, [])
        self.assertEqual(mapper.collect(), [])
        self.assertEqual(mapper.row_count, 0)

    def test_count_does_not_convert_cells(self):
        class Unprintable:
            def __str__(self):
                raise AssertionError('cell converted')

        mapper = RecordMapper(FakeCursor([('a',)], [(Unprintable(),), (Unprintable(),)]))
        self.assertEqual(mapper.count(), 2)

    def test_header_is_written_once(self):
        lines = []
        mapper = RecordMapper(FakeCursor([('room',), ('price',)], [(101, 120), (102, 99)]))
        self.assertEqual(mapper.render(lines.append), 2)
        self.assertEqual(lines, ['room\tprice', '101\t120', '102\t99'])


if __name__ == '__main__':
    unittest.main()
