#!/usr/bin/env python3
from .sqltranslator import MetaSQLTranslator

from contextlib import contextmanager, suppress
import importlib
import os


class Error(Exception):
    """
    Base class of all database exceptions raised by this module.
    You can use this to catch all errors with one single except statement
    """
    def __init__(self, msg, sql=None, parameters=()):
        super().__init__(msg)
        self.msg = msg
        self.sql = sql
        self.parameters = parameters

    def __str__(self):
        return str(self.msg)


class DatabaseConnectionError(Error):
    """
    Exception raised when the physical connection cannot be opened.
    """


class ExecutionError(Error):
    """
    Exception raised for every fault reported while a statement runs.
    """


class InterfaceError(ExecutionError):
    """
    Exception raised for errors that are related to the database interface
    rather than the database itself, e.g. the connection was closed.
    """


class DatabaseError(ExecutionError):
    """
    Exception raised for errors that are related to the database.
    """


class DataError(DatabaseError):
    """
    Exception raised for errors that are due to problems with the processed data
    like division by zero, numeric value out of range, etc.
    """


class OperationalError(DatabaseError):
    """
    Exception raised for errors that are related to the database's operation and not
    necessarily under the control of the programmer, e.g. an unexpected disconnect occurs.
    """


class IntegrityError(DatabaseError):
    """
    Exception raised when the relational integrity of the database is affected,
    e.g. a unique or foreign key check fails.
    """


class InternalError(DatabaseError):
    """
    Exception raised when the database encounters an internal error,
    e.g. the cursor is not valid anymore, the transaction is out of sync, etc.
    """


class ProgrammingError(DatabaseError):
    """
    Exception raised for programming errors, e.g. table not found,
    syntax error in the SQL statement, wrong number of parameters specified, etc.
    """


class NotSupportedError(DatabaseError):
    """
    Exception raised in case a method or database API was used which is not supported by the database.
    """


PEP_249_ERROR = {
    "Error": ExecutionError,
    "InterfaceError": InterfaceError,
    "DatabaseError": DatabaseError,
    "DataError": DataError,
    "OperationalError": OperationalError,
    "IntegrityError": IntegrityError,
    "InternalError": InternalError,
    "ProgrammingError": ProgrammingError,
    "NotSupportedError": NotSupportedError
}


def translate_error(error, sql_query=None, parameters=()):
    """
    Build the PEP 249 exception of this module matching a driver exception.

    Drivers may raise subclasses of the PEP 249 classes (psycopg2 raises
    UniqueViolation for an IntegrityError), the MRO is walked to find the
    nearest standard name.
    """
    for cls in type(error).__mro__:
        if cls.__name__ in PEP_249_ERROR:
            return PEP_249_ERROR[cls.__name__](str(error).strip(), sql_query, parameters)
    return ExecutionError(str(error).strip(), sql_query, parameters)


class DataBase:
    """
    Own the single connection of the process.

    The connection is opened by connect() and released by close(), use
    the instance as a context manager to get both.
    """

    def __init__(self, provider, **connection_parameters):
        self.provider = provider
        self.connection = None
        self._transaction_depth = 0

        try:
            connector_adapter = MetaConnectorAdapter.PROVIDERS[provider]
        except KeyError:
            raise ValueError("'provider' parameter must be on of {}"
                             .format(', '.join(sorted(MetaConnectorAdapter.PROVIDERS))))

        self.sql_translator = MetaSQLTranslator.PROVIDERS[provider]
        self.connector_adapter = connector_adapter(connection_parameters)
        self.module = importlib.import_module(connector_adapter.PROVIDER_MODULE)
        self.connector = self.module.connect
        self.error = self.module.Error
        self.connection_parameters = self.connector_adapter.connection_parameters

    def connect(self):
        if self.connection is None:
            try:
                self.connection = self.connector(**self.connection_parameters)
            except self.error as error:
                raise DatabaseConnectionError(str(error).strip()) from error
            self.connector_adapter.on_connect(self.connection)
        return self.connection

    def close(self):
        if self.connection is not None:
            connection, self.connection = self.connection, None
            connection.close()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def in_transaction(self):
        return self._transaction_depth > 0

    def _get_connection(self):
        if self.connection is None:
            raise InterfaceError('database is not connected')
        return self.connection

    def _rollback(self, connection):
        # The connection may already be gone, the original error is the one to report.
        with suppress(self.error):
            connection.rollback()

    @contextmanager
    def execute(self, sql_query, parameters=()):
        """
        Execute sql_query and give the cursor to the with block.

        Parameters the driver cannot bind, such as an integer out of the
        column range, raise DataError. The cursor is closed when the block exits. Outside of a transaction
        the statement is committed when the block succeeds and rolled back
        when the driver reports an error.
        """
        connection = self._get_connection()
        cursor = connection.cursor()
        try:
            try:
                cursor.execute(sql_query, parameters)
            except (OverflowError, ValueError) as error:
                # Raised by drivers for parameters they cannot bind.
                if not self.in_transaction:
                    self._rollback(connection)
                raise DataError(str(error).strip(), sql_query, parameters) from error
            yield cursor
            if not self.in_transaction:
                connection.commit()
        except self.error as error:
            if not self.in_transaction:
                self._rollback(connection)
            raise translate_error(error, sql_query, parameters) from error
        finally:
            cursor.close()

    @contextmanager
    def transaction(self):
        """
        Group the statements executed in the with block.

        Commit when the block succeeds, roll back when it raises. A nested
        transaction joins the enclosing one.
        """
        if self.in_transaction:
            yield self
            return

        connection = self._get_connection()
        self._transaction_depth += 1
        try:
            yield self
        except Exception:
            self._rollback(connection)
            raise
        else:
            try:
                connection.commit()
            except self.error as error:
                self._rollback(connection)
                raise translate_error(error, 'COMMIT') from error
        finally:
            self._transaction_depth -= 1


class MetaConnectorAdapter(type):
    """
    Store connector adapter in PROVIDERS attribute. The key of PROVIDERS is
    lower-case class name without ConnectorAdapter suffix

    i.e: SqliteConnectorAdapter --> sqlite
    """

    PROVIDERS = {}

    def __init__(cls, name, bases, attrs):
        if name != 'ConnectorAdapter':
            if name.endswith('ConnectorAdapter'):
                provider_name = name[:-len('ConnectorAdapter')].lower()
                type(cls).PROVIDERS[provider_name] = cls
                cls.PROVIDER = provider_name
            else:
                raise ValueError("{} class name must end with by '{}'"
                                 .format(cls, 'ConnectorAdapter'))

            for attr_name in ('EXPECTED_ARGS', 'OPTIONAL_ARGS'):
                if attr_name not in attrs:
                    raise AttributeError("{} class must have '{}' attribute"
                                         .format(cls, attr_name))

                if not isinstance(attrs[attr_name], dict):
                    raise TypeError('{} {} attribute must be a dict'.format(cls, attr_name))

            # Bound staticmethod and classmethod in the EXPECTED_ARGS and OPTIONAL_ARGS dict.
            for mtd_name, mtd in attrs.items():
                if isinstance(mtd, (staticmethod, classmethod)):
                    for args in (attrs['EXPECTED_ARGS'], attrs['OPTIONAL_ARGS']):
                        for k, v in args.items():
                            if v is mtd:
                                args[k] = getattr(cls, mtd_name)
                                break


class ConnectorAdapter(metaclass=MetaConnectorAdapter):
    """
    Class base to translate parameters of connection to the concrete database connector.
    after instantiation, translated parameters are accessible by connection_parameters attribute.

    A ConnectorAdapter must have EXPECTED_ARGS and OPTIONAL_ARGS class attribute dict.
    The keys are the standards names such as (database, host, port, user, password ...) and
    the values are translated name to connect function parameters. A value can be a callable or
    unbound static or class method which translate parameters.

    Standard names listed in IGNORED_ARGS are accepted and dropped, they
    let the command line give the same arguments to every provider.
    """
    IGNORED_ARGS = ()

    def __init__(self, connection_parameters):
        self.connection_parameters = self.translate_kwargs(connection_parameters)

    @classmethod
    def translate_kwargs(cls, parameters):
        """
        Use EXPECTED_ARGS and OPTIONAL_ARGS class attribute in order to check and translate
        parameters.
        """
        parameters = {k: v for k, v in parameters.items() if k not in cls.IGNORED_ARGS}
        unexpected_kwargs = set(parameters) - (set(cls.EXPECTED_ARGS) | set(cls.OPTIONAL_ARGS))
        if unexpected_kwargs:
            raise TypeError("{} database provider got unexpected keywords arguments ({})"
                            .format(cls.PROVIDER, ', '.join(sorted(unexpected_kwargs))))

        missing_kwargs = set(cls.EXPECTED_ARGS) - set(parameters)
        if missing_kwargs:
            raise TypeError("missing required arguments ({}) to {} database provider"
                            .format(', '.join(sorted(str(e) for e in missing_kwargs)),
                                    cls.PROVIDER))

        translated_kwargs = {}
        for std_name, translated_name in cls.EXPECTED_ARGS.items():
            if callable(translated_name):
                translated_kwargs.update(
                    translated_name(parameters[std_name]))
            else:
                translated_kwargs[translated_name] = parameters[std_name]
        for std_name, translated_name in cls.OPTIONAL_ARGS.items():
            if std_name in parameters:
                if callable(translated_name):
                    translated_kwargs.update(
                        translated_name(parameters[std_name]))
                else:
                    translated_kwargs[translated_name] = parameters[std_name]

        return translated_kwargs

    def on_connect(self, connection):
        """
        Hook called once the connection is open.
        """


class SqliteConnectorAdapter(ConnectorAdapter):

    @staticmethod
    def translate_database(database):
        if database != ':memory:':
            database = os.path.abspath(os.path.expanduser(database))
        return dict(database=database)

    EXPECTED_ARGS = {'database': translate_database}
    OPTIONAL_ARGS = {'timeout': 'timeout'}
    IGNORED_ARGS = ('host', 'port', 'user', 'password')
    PROVIDER_MODULE = 'sqlite3'

    def on_connect(self, connection):
        connection.execute('PRAGMA foreign_keys = ON')


class MysqlConnectorAdapter(ConnectorAdapter):

    @staticmethod
    def translate_port(port):
        return dict(port=int(port))

    EXPECTED_ARGS = {'host': 'host',
                     'port': translate_port,
                     'user': 'user',
                     'password': 'password',
                     'database': 'database'}
    OPTIONAL_ARGS = {'charset': 'charset',
                     'timeout': 'connect_timeout'}
    PROVIDER_MODULE = 'pymysql'


class PostgresqlConnectorAdapter(ConnectorAdapter):
    EXPECTED_ARGS = {'host': 'host',
                     'port': 'port',
                     'user': 'user',
                     'password': 'password',
                     'database': 'dbname'}
    OPTIONAL_ARGS = {'timeout': 'connect_timeout'}
    PROVIDER_MODULE = 'psycopg2'
