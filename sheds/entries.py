#
# Sheds - dive club resources library.
#
# Copyright (C) 2018-2024 by Sheds Team
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

"""
Typed tabular entries kept in CSV files of a record store.

Each CSV file has a header row with column names. The columns of entries
are fields of a record type (a named tuple) and every column has a type

date
    ISO 8601 date and time.
str
    Text.
float
    Floating point number.
int
    Integer number.
bool
    One of `true`, `1`, `on`, `yes` (any case) for true, false otherwise.

Empty cells are read as null values. Columns missing from a file are null
as well, columns not known to a record type are ignored.

    >>> from collections import namedtuple
    >>> from sheds.store import MemoryStore
    >>> Fill = namedtuple('Fill', 'bank litres')
    >>> store = MemoryStore({'fills.csv': 'bank,litres\\n2,438.4\\n'})
    >>> fills = Entries(store, 'fills.csv', Fill, {'litres': 'float'})
    >>> fills.load()
    >>> fills[0]
    Fill(bank='2', litres=438.4)
"""

import csv
import datetime
import io
import logging

from .error import EntryError, NotFoundError

logger = logging.getLogger(__name__)

_TRUE = ('true', '1', 'on', 'yes')


def parse_bool(value):
    """
    Convert text into boolean value.

    :param value: Text value.
    """
    return value.strip().lower() in _TRUE


def parse_date(value):
    """
    Convert ISO 8601 text into date and time.

    :param value: Text value.
    """
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.datetime.fromisoformat(value)


PARSERS = {
    'date': parse_date,
    'str': str,
    'float': float,
    'int': int,
    'bool': parse_bool,
}


def format_value(value):
    """
    Convert value of a column into text.

    :param value: Column value.
    """
    if value is None:
        return ''
    elif isinstance(value, bool):
        return 'true' if value else 'false'
    elif isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


class Entries(object):
    """
    Ordered collection of typed records kept in a CSV file of a record
    store.

    The records are loaded on first access. Use `reset` to forget loaded
    records and `reload` to read them from the store again.

    :var store: Record store.
    :var name: Name of the CSV file.
    :var record: Record type (named tuple).
    :var types: Column types, `str` type by default.
    """
    def __init__(self, store, name, record, types=None):
        self.store = store
        self.name = name
        self.record = record
        self.types = {} if types is None else types
        self._records = None


    @property
    def records(self):
        """
        List of records, loaded from the store if necessary.
        """
        if self._records is None:
            self.load()
        return self._records


    def _parse_value(self, field, value):
        if value is None or value == '':
            return None
        parser = PARSERS[self.types.get(field, 'str')]
        try:
            return parser(value)
        except ValueError as ex:
            raise EntryError(
                '{}: invalid {} value {!r}'.format(self.name, field, value)
            ) from ex


    def parse(self, text):
        """
        Parse CSV text into list of records.

        :param text: CSV text with header row.
        """
        reader = csv.DictReader(io.StringIO(text))
        fields = self.record._fields
        unknown = set(reader.fieldnames or ()) - set(fields)
        if unknown:
            logger.warning(
                '{}: ignoring columns {}'.format(self.name, sorted(unknown))
            )
        return [
            self.record(*(self._parse_value(f, row.get(f)) for f in fields))
            for row in reader
        ]


    def serialise(self):
        """
        Convert records into CSV text.
        """
        f = io.StringIO()
        writer = csv.writer(f, lineterminator='\n')
        writer.writerow(self.record._fields)
        for r in self.records:
            writer.writerow([format_value(v) for v in r])
        return f.getvalue()


    def load(self):
        """
        Load records from the store.

        Missing CSV file results in empty list of records.
        """
        try:
            text = self.store.read(self.name)
        except NotFoundError:
            logger.info('{} not found, no records'.format(self.name))
            text = ''
        self._records = self.parse(text)
        logger.info('{} records loaded from {}'.format(
            len(self._records), self.name
        ))


    def save(self):
        """
        Save records in the store.
        """
        self.store.write(self.name, self.serialise())
        logger.info('{} records saved to {}'.format(
            len(self._records or ()), self.name
        ))


    def reset(self):
        """
        Forget loaded records.
        """
        self._records = None


    def reload(self):
        """
        Read records from the store again.
        """
        self.reset()
        self.load()


    def push(self, record):
        """
        Append a record.

        :param record: Record to append.
        """
        self.records.append(record)


    def get(self, index):
        """
        Get record at an index.

        :param index: Index of a record.
        """
        return self.records[index]


    def update(self, index, **kw):
        """
        Replace values of record at an index.

        :param index: Index of a record.
        :param kw: Column values to replace.
        """
        r = self.records[index]._replace(**kw)
        self.records[index] = r
        return r


    def remove(self, record):
        """
        Remove a record.

        :param record: Record to remove.
        """
        self.records.remove(record)


    def find(self, field, value):
        """
        Find first record with column value.

        `KeyError` is raised if there is no such record.

        :param field: Column name.
        :param value: Column value.
        """
        for r in self.records:
            if getattr(r, field) == value:
                return r
        raise KeyError('{}: no record with {}={!r}'.format(self.name, field, value))


    def each(self, f):
        """
        Call function for every record and its index.

        :param f: Function accepting record and its index.
        """
        for i, r in enumerate(self.records):
            f(r, i)


    def last(self):
        """
        Last record or null if there are no records.
        """
        return self.records[-1] if self.records else None


    def __getitem__(self, index):
        return self.records[index]


    def __iter__(self):
        return iter(self.records)


    def __len__(self):
        return len(self.records)


# vim: sw=4:et:ai
