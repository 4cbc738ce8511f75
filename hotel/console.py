#!/usr/bin/env python3
from datetime import datetime
import math
import re
import sys


DATE_FORMAT = '%Y-%m-%d'
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


class ValidationError(Exception):
    """
    Raised when a value typed by the user is not acceptable.
    """


def parse_date(text):
    """
    Return text if it is a calendar date written YYYY-MM-DD.
    """
    text = text.strip()
    if DATE_PATTERN.match(text) is None:
        raise ValidationError("Invalid date format! Please enter as 'YYYY-MM-DD'.")
    try:
        datetime.strptime(text, DATE_FORMAT)
    except ValueError:
        raise ValidationError("Invalid date '{}': no such day in the calendar.".format(text))
    return text


class Console:
    """
    Interactive surface: lines are read from stdin, written to stdout and
    diagnostics go to stderr.
    """

    def __init__(self, stdin=None, stdout=None, stderr=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def write(self, text='', end='\n'):
        self.stdout.write(text + end)
        self.stdout.flush()

    def error(self, text):
        self.stderr.write(text + '\n')
        self.stderr.flush()

    def table(self, header, rows):
        self.write('\t'.join(header))
        for row in rows:
            self.write('\t'.join(row))

    def read_line(self, prompt=''):
        """
        Print prompt and return the next line without its line ending.
        Raise EOFError when the input is exhausted.
        """
        self.write(prompt, end='')
        line = self.stdin.readline()
        if not line:
            raise EOFError('end of input')
        return line.rstrip('\r\n')

    def read_choice(self):
        """
        Read menu choices until an integer is typed.
        """
        while True:
            try:
                return int(self.read_line('Please make your choice: '))
            except ValueError:
                self.write('Your input is invalid!')

    def read_text(self, prompt):
        text = self.read_line(prompt)
        if not text.strip():
            raise ValidationError('A value is required.')
        return text

    def read_int(self, prompt):
        text = self.read_line(prompt).strip()
        try:
            return int(text)
        except ValueError:
            raise ValidationError("'{}' is not an integer.".format(text))

    def read_float(self, prompt, minimum=None):
        text = self.read_line(prompt).strip()
        try:
            value = float(text)
        except ValueError:
            raise ValidationError("'{}' is not a number.".format(text))
        if not math.isfinite(value):
            raise ValidationError("'{}' is not a finite number.".format(text))
        if minimum is not None and value < minimum:
            raise ValidationError('{} must be greater than or equal to {}.'.format(value, minimum))
        return value

    def read_date(self, prompt, required=True):
        """
        Read a YYYY-MM-DD date, None is returned for a blank optional date.
        """
        text = self.read_line(prompt)
        if not required and not text.strip():
            return None
        return parse_date(text)
