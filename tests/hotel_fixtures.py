#!/usr/bin/env python3
"""
Databases and consoles shared by the test modules.
"""

import io
import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hotel.__main__ import create_schema
from hotel.auth import Accounts, MANAGER
from hotel.console import Console
from hotel.db import DataBase
from hotel.executor import QueryExecutor


MANAGER_ID = 1
CUSTOMER_ID = 2
OTHER_MANAGER_ID = 3

HOTELS = (
    # hotelName, latitude, longitude, managerUserID
    ('Riverside', 0.0, 0.0, MANAGER_ID),
    ('Boundary', 18.0, 24.0, OTHER_MANAGER_ID),   # exactly 30 units from (0, 0)
    ('Faraway', 30.0001, 0.0, OTHER_MANAGER_ID),
)

ROOMS = (
    # hotelID, roomNumber, price, imageURL
    (1, 101, 120.0, 'http://img.example/101.png'),
    (1, 102, 99.5, 'http://img.example/102.png'),
    (1, 103, 150.0, None),
    (2, 1, 80.0, 'http://img.example/b1.png'),
)


def make_console(*lines):
    """
    Console reading lines and writing in memory.
    """
    stdin = io.StringIO(''.join(line + '\n' for line in lines))
    return Console(stdin, io.StringIO(), io.StringIO())


def output(console):
    return console.stdout.getvalue()


def errors(console):
    return console.stderr.getvalue()


def make_database(path=':memory:', seed=True):
    """
    Connected sqlite DataBase with the hotel schema, and its executor.
    """
    database = DataBase('sqlite', database=path)
    database.connect()
    executor = QueryExecutor(database, lambda line: None)
    create_schema(executor)
    if seed:
        seed_database(executor)
    return database, executor


def seed_database(executor):
    accounts = Accounts(executor, make_console())
    accounts.create_account('Mike', 'secret', MANAGER)
    accounts.create_account('Carol', 'carol')
    accounts.create_account('Olga', 'other', MANAGER)

    with executor.transaction():
        for hotel in HOTELS:
            executor.run_for_effect(
                'INSERT INTO Hotels (hotelName, latitude, longitude, managerUserID) '
                'VALUES (?, ?, ?, ?)', hotel)
        for room in ROOMS:
            executor.run_for_effect(
                'INSERT INTO Rooms (hotelID, roomNumber, price, imageURL) VALUES (?, ?, ?, ?)', room)
        executor.run_for_effect(
            'INSERT INTO MaintenanceCompany (name, address, isCertified) VALUES (?, ?, ?)',
            ('FixIt', '1 Repair Street', True))


def insert_booking(executor, customer_id, hotel_id, room_number, booking_date):
    executor.run_for_effect(executor.sql.insert_booking(),
                            (customer_id, hotel_id, room_number, booking_date))
