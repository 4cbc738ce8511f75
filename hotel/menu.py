#!/usr/bin/env python3
from collections import OrderedDict

from .console import ValidationError
from .db import Error


ANONYMOUS = 'Anonymous'
AUTHENTICATED = 'Authenticated'

EXIT_CHOICE = 9
LOG_OUT_CHOICE = 20


class Menu:
    """
    Two states interactive loop.

    Anonymous users can create an account, log in or exit. Once logged in,
    the user menu is shown until the user logs out. userID holds the
    identity of the logged in user.
    """

    def __init__(self, accounts, workflows, console):
        self.accounts = accounts
        self.workflows = workflows
        self.console = console
        self.user_id = None

        self.main_choices = OrderedDict([
            (1, ('Create user', self.create_user)),
            (2, ('Log in', self.log_in)),
            (EXIT_CHOICE, ('< EXIT', None)),
        ])

        self.user_choices = OrderedDict([
            (1, ('View Hotels within {:g} units'.format(workflows.search_radius),
                 workflows.view_hotels)),
            (2, ('View Rooms', workflows.view_rooms)),
            (3, ('Book a Room', workflows.book_room)),
            (4, ('View recent booking history', workflows.view_recent_bookings)),
            (5, ('Update Room Information', workflows.update_room)),
            (6, ('View {} recent Room Updates Info'.format(workflows.history_limit),
                 workflows.view_recent_updates)),
            (7, ('View booking history of the hotel', workflows.view_hotel_bookings)),
            (8, ('View {} regular Customers'.format(workflows.history_limit),
                 workflows.view_regular_customers)),
            (9, ('Place room repair Request to a company', workflows.place_repair_request)),
            (10, ('View room repair Requests history', workflows.view_repair_requests)),
            (LOG_OUT_CHOICE, ('Log out', self.log_out)),
        ])

    @property
    def state(self):
        return ANONYMOUS if self.user_id is None else AUTHENTICATED

    def show(self, title, choices):
        self.console.write(title)
        self.console.write('-' * len(title))
        for number, (label, _) in choices.items():
            if number == LOG_OUT_CHOICE:
                self.console.write('.........................')
            self.console.write('{}. {}'.format(number, label))

    def run(self):
        """
        Loop until the user chooses to exit or the input is exhausted.
        """
        try:
            while self.step():
                pass
        except EOFError:
            self.console.write()
        self.user_id = None

    def step(self):
        """
        Show the menu of the current state and execute one choice.
        Return False when the user asked to exit.
        """
        if self.state == ANONYMOUS:
            self.show('MAIN MENU', self.main_choices)
            choice = self.console.read_choice()
            if choice == EXIT_CHOICE:
                return False
            self.dispatch(self.main_choices, choice)
        else:
            self.show('USER MENU', self.user_choices)
            self.dispatch(self.user_choices, self.console.read_choice(), self.user_id)
        return True

    def dispatch(self, choices, choice, *args):
        try:
            label, handler = choices[choice]
        except KeyError:
            self.console.write('Unrecognized choice!')
            return
        handler(*args)

    def create_user(self):
        try:
            name = self.console.read_text('\tEnter name: ').strip()
            password = self.console.read_text('\tEnter password: ')
        except ValidationError as error:
            self.console.error(str(error))
            return None

        user_id = self.accounts.create_account(name, password)
        if user_id is not None:
            self.console.write('User successfully created with userID = {}'.format(user_id))
        return user_id

    def log_in(self):
        user_id = self.console.read_line('\tEnter userID: ')
        password = self.console.read_line('\tEnter password: ')
        try:
            self.user_id = self.accounts.authenticate(user_id, password)
        except Error as error:
            self.console.error('Database error: {}'.format(error))
            self.user_id = None

        if self.user_id is None:
            self.console.write('Invalid userID or password.')
        return self.user_id

    def log_out(self, user_id):
        self.user_id = None
