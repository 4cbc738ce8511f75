#!/usr/bin/env python3
from .records import RecordMapper


class QueryExecutor:
    """
    Run SQL statements over the connection of a DataBase.

    Every method takes the SQL text and the tuple of values bound to its
    placeholders. Errors raised by the driver come out as hotel.db.Error
    subclasses.
    """

    NOT_FOUND = -1

    def __init__(self, database, write=print):
        self.database = database
        self.write = write

    @property
    def sql(self):
        """
        SQL translator of the database provider.
        """
        return self.database.sql_translator

    def transaction(self):
        return self.database.transaction()

    def run_for_effect(self, statement, parameters=()):
        with self.database.execute(statement, parameters):
            pass

    def run_count_only(self, query, parameters=()):
        with self.database.execute(query, parameters) as cursor:
            return RecordMapper(cursor).count()

    def run_and_render(self, query, parameters=()):
        with self.database.execute(query, parameters) as cursor:
            return RecordMapper(cursor).render(self.write)

    def run_and_collect(self, query, parameters=()):
        with self.database.execute(query, parameters) as cursor:
            return RecordMapper(cursor).collect()

    def last_generated_id(self, probe, parameters=()):
        """
        Return the integer given by the scalar query probe or NOT_FOUND
        when it gives nothing.
        """
        with self.database.execute(probe, parameters) as cursor:
            row = cursor.fetchone()
        if row is None or row[0] is None:
            return self.NOT_FOUND
        return int(row[0])
