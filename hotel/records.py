#!/usr/bin/env python3


class RecordMapper:
    """
    Read the rows of an executed cursor as lists of strings.

    The column names are taken from the cursor description once. row_count
    is the number of rows consumed so far, whatever the mapping used.
    """

    SEPARATOR = '\t'

    def __init__(self, cursor):
        self.cursor = cursor
        self.column_names = [column[0] for column in cursor.description or ()]
        self.row_count = 0

    @staticmethod
    def to_text(value):
        if value is None:
            return ''
        return str(value)

    def _raw_rows(self):
        if not self.column_names:
            return
        for row in self.cursor:
            self.row_count += 1
            yield row

    def rows(self):
        for row in self._raw_rows():
            yield [self.to_text(value) for value in row]

    def count(self):
        for _ in self._raw_rows():
            pass
        return self.row_count

    def collect(self):
        return list(self.rows())

    def render(self, write):
        """
        Give to write a header line then one line per row.
        Nothing is written when the result is empty.
        """
        for row in self.rows():
            if self.row_count == 1:
                write(self.SEPARATOR.join(self.column_names))
            write(self.SEPARATOR.join(row))
        return self.row_count
