#!/usr/bin/env python3

import sys
import os
import unittest
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from werkzeug.security import check_password_hash

from hotel.auth import Accounts, CUSTOMER, MANAGER
from hotel.db import DataBase
from hotel.executor import QueryExecutor
from hotel_fixtures import make_console, make_database, errors


class TestAccounts(unittest.TestCase):

    def setUp(self):
        self.database, self.executor = make_database(seed=False)
        self.console = make_console()
        self.accounts = Accounts(self.executor, self.console)

    def tearDown(self):
        self.database.close()

    def user(self, user_id):
        return self.executor.run_and_collect(
            'SELECT name, password, userType FROM Users WHERE userID = ?', (user_id,))[0]

    def test_create_account(self):
        self.assertEqual(self.accounts.create_account('Alice', 'pw1'), 1)
        self.assertEqual(self.accounts.create_account('Bob', 'pw2'), 2)

        name, password, user_type = self.user(1)
        self.assertEqual(name, 'Alice')
        self.assertEqual(user_type, CUSTOMER)
        self.assertNotEqual(password, 'pw1')
        self.assertTrue(check_password_hash(password, 'pw1'))

    def test_same_password_gives_different_hashes(self):
        self.accounts.create_account('Alice', 'pw')
        self.accounts.create_account('Bob', 'pw')
        self.assertNotEqual(self.user(1)[1], self.user(2)[1])

    def test_create_manager(self):
        user_id = self.accounts.create_account('Mike', 'secret', MANAGER)
        self.assertEqual(self.user(user_id)[2], MANAGER)

    def test_create_account_failure_is_reported(self):
        database = DataBase('sqlite', database=':memory:')
        database.connect()
        try:
            accounts = Accounts(QueryExecutor(database), self.console)
            self.assertIsNone(accounts.create_account('Alice', 'pw1'))
        finally:
            database.close()
        self.assertIn('Unable to create user', errors(self.console))

    def test_authenticate(self):
        user_id = self.accounts.create_account('Alice', 'pw1')
        self.assertEqual(self.accounts.authenticate(user_id, 'pw1'), user_id)
        self.assertEqual(self.accounts.authenticate(str(user_id), 'pw1'), user_id)
        self.assertEqual(self.accounts.authenticate(' {} '.format(user_id), 'pw1'), user_id)

    def test_authenticate_wrong_password(self):
        user_id = self.accounts.create_account('Alice', 'pw1')
        self.assertIsNone(self.accounts.authenticate(user_id, 'pw2'))
        self.assertIsNone(self.accounts.authenticate(user_id, ''))

    def test_authenticate_unknown_user(self):
        self.accounts.create_account('Alice', 'pw1')
        self.assertIsNone(self.accounts.authenticate(42, 'pw1'))

    def test_authenticate_malformed_user_id(self):
        self.assertIsNone(self.accounts.authenticate('Alice', 'pw1'))
        self.assertIsNone(self.accounts.authenticate("1' OR '1'='1", 'pw1'))


if __name__ == '__main__':
    unittest.main()
