#!/usr/bin/env python3

from .auth import Accounts
from .config import config, ConfigIsNotValidError
from .console import Console
from .db import DataBase, DatabaseConnectionError, Error, MetaConnectorAdapter
from .executor import QueryExecutor
from .menu import Menu
from .workflows import Workflows
import argparse
import sys
import traceback


GREETING = """

*******************************************************
                     User Interface
*******************************************************
"""


def create_schema(executor):
    """
    Create the tables which don't exist yet.
    """
    with executor.transaction():
        for statement in executor.sql.create_schema():
            executor.run_for_effect(statement)


def connection_parameters(args, database_conf):
    parameters = dict(database=args.dbname,
                      port=args.port,
                      user=args.user,
                      host=args.host or database_conf['host'],
                      password=database_conf['password'])
    if database_conf.get('timeout') is not None:
        parameters['timeout'] = database_conf['timeout']
    return parameters


def run(args, console):
    """
    Connect to the database and run the menu until the user exits.
    """
    if args.path_to_conf is not None:
        config.reload_config(args.path_to_conf)
    provider = args.provider or config.database['provider']

    try:
        database = DataBase(provider, **connection_parameters(args, config.database))
    except ImportError as error:
        console.error("Error - Driver of the '{}' provider is not installed: {}".format(provider, error))
        return 1

    console.write('Connecting to database...')
    try:
        database.connect()
    except DatabaseConnectionError as error:
        console.error('Error - Unable to Connect to Database: {}'.format(error))
        console.write('Make sure you started {} on this machine'.format(provider))
        return 1
    console.write('Done')

    try:
        executor = QueryExecutor(database, console.write)
        if args.init_schema:
            create_schema(executor)

        workflows = Workflows(executor, console,
                              search_radius=config.search_radius,
                              history_limit=config.history_limit)
        Menu(Accounts(executor, console), workflows, console).run()
    finally:
        console.write('Disconnecting from database...', end='')
        database.close()
        console.write('Done\n\nBye !')
    return 0


def main(argv=None, console=None):
    """
    Programme entry point.
    """
    console = console or Console()

    parser = argparse.ArgumentParser('hotel', description='Hotel booking and management console.')
    parser.add_argument('dbname', help='name of the database')
    parser.add_argument('port', help='port of the database server')
    parser.add_argument('user', help='database user')
    parser.add_argument('--provider', choices=sorted(MetaConnectorAdapter.PROVIDERS),
                        help='database provider (default: from configuration, postgresql)')
    parser.add_argument('--host', help='database server host (default: from configuration, localhost)')
    parser.add_argument('--conf', metavar='configuration-file', dest='path_to_conf',
                        help='path to the JSON configuration file')
    parser.add_argument('--init-schema', action='store_true',
                        help='create the missing tables before starting')

    try:
        args = parser.parse_args(argv)
    except SystemExit:
        # Usage was printed, this is not an error.
        return 0

    console.write(GREETING)
    try:
        return run(args, console)
    except (OSError, ValueError, ConfigIsNotValidError, Error) as error:
        console.error('Error - {}'.format(error))
        return 1
    except Exception:
        traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
