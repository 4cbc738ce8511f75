#!/usr/bin/env python3

import sys
import os
import io
import shutil
import tempfile
import unittest
from unittest import mock
from contextlib import redirect_stderr
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from hotel.__main__ import main
from hotel.config import config
from hotel.db import DataBase
from hotel_fixtures import make_console, output, errors


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.current_work_dir = os.getcwd()
        os.chdir(self.tmpdir)
        config.clear_config()

    def tearDown(self):
        config.clear_config()
        os.chdir(self.current_work_dir)
        shutil.rmtree(self.tmpdir)

    def test_wrong_argument_count(self):
        console = make_console()
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            self.assertEqual(main(['hotels', '5432'], console), 0)
        self.assertIn('usage: hotel', stderr.getvalue())
        self.assertNotIn('Connecting', output(console))

    def test_connection_failure(self):
        path = os.path.join(self.tmpdir, 'missing', 'hotel.db')
        console = make_console()
        self.assertEqual(main([path, '5432', 'me', '--provider', 'sqlite'], console), 1)
        self.assertIn('Error - Unable to Connect to Database', errors(console))

    def test_missing_driver(self):
        console = make_console()
        with mock.patch('importlib.import_module', side_effect=ImportError("No module named 'pymysql'")):
            status = main(['hotels', '1', 'me', '--provider', 'mysql', '--host', '127.0.0.1'], console)
        self.assertEqual(status, 1)
        self.assertIn("Error - Driver of the 'mysql' provider is not installed", errors(console))
        self.assertNotIn('Connecting', output(console))

    def test_invalid_configuration(self):
        path = os.path.join(self.tmpdir, 'hotel.json')
        with open(path, 'w') as conf:
            conf.write('{"search_radius": -1}')
        console = make_console()
        self.assertEqual(main(['hotel.db', '0', 'me', '--provider', 'sqlite'], console), 1)
        self.assertIn('search_radius: must be a number', errors(console))

    def test_session(self):
        path = os.path.join(self.tmpdir, 'hotel.db')
        console = make_console('1', 'Alice', 'pw1', '2', '1', 'pw1', '4', '20', '9')
        status = main([path, '0', 'me', '--provider', 'sqlite', '--init-schema'], console)
        self.assertEqual(status, 0)

        text = output(console)
        self.assertIn('User Interface', text)
        self.assertIn('User successfully created with userID = 1', text)
        self.assertIn('You have no booking yet.', text)
        self.assertTrue(text.endswith('Done\n\nBye !\n'))

        with DataBase('sqlite', database=path) as database:
            with database.execute('SELECT name, userType FROM Users') as cursor:
                self.assertEqual(cursor.fetchall(), [('Alice', 'Customer')])

    def test_configuration_file(self):
        with open(os.path.join(self.tmpdir, 'settings.json'), 'w') as conf:
            conf.write('{"database": {"provider": "sqlite"}, "search_radius": 5, "history_limit": 2}')
        console = make_console('9')
        status = main(['hotel.db', '0', 'me', '--conf', 'settings.json', '--init-schema'], console)
        self.assertEqual(status, 0)
        self.assertEqual(config.search_radius, 5.0)
        self.assertTrue(os.path.isfile(os.path.join(self.tmpdir, 'hotel.db')))


if __name__ == '__main__':
    unittest.main()
