#!/usr/bin/env python3
from werkzeug.security import generate_password_hash, check_password_hash

from .db import Error


CUSTOMER = 'Customer'
MANAGER = 'Manager'


class Accounts:
    """
    Create users and check their credentials.

    Passwords are stored as salted hashes, the identity of an authenticated
    user is its userID.
    """

    def __init__(self, executor, console):
        self.executor = executor
        self.console = console

    def create_account(self, name, password, user_type=CUSTOMER):
        """
        Insert a new user and return its userID.

        Failures are reported on the diagnostic stream and None is returned.
        """
        sql = self.executor.sql
        try:
            with self.executor.transaction():
                self.executor.run_for_effect(
                    sql.insert_user(), (name, generate_password_hash(password), user_type))
                user_id = self.executor.last_generated_id(
                    sql.generated_id_probe('Users', 'userID'))
        except Error as error:
            self.console.error('Unable to create user: {}'.format(error))
            return None

        if user_id == self.executor.NOT_FOUND:
            self.console.error('User created but its userID is unknown')
            return None
        return user_id

    def authenticate(self, user_id, password):
        """
        Return the userID when password matches, None otherwise.
        Unknown and malformed userIDs are not distinguished from a wrong password.
        """
        try:
            user_id = int(str(user_id).strip())
        except ValueError:
            return None

        rows = self.executor.run_and_collect(self.executor.sql.user_password(), (user_id,))
        for (password_hash,) in rows:
            if check_password_hash(password_hash, password):
                return user_id
        return None
