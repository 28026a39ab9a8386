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
Equipment loans.

Loans are recorded in `loans.csv` file. A loan is active until an
operator marks it returned.

A new loan is validated before it is recorded. All fields are checked, so
every invalid field is reported at once

    >>> import datetime
    >>> from unittest import mock
    >>> roles = mock.Mock()
    >>> roles.members.side_effect = {
    ...     'member': ['ann', 'bob'], 'operator': ['cid']
    ... }.get
    >>> now = datetime.datetime(2024, 5, 1)
    >>> loan = LoanRecord('2024-05-02', const.SELECT, '1', 'bob', 'cid', '0', None)
    >>> validate_loan(loan, roles, now)
    LoanValidation(ok=False, invalid_fields=['date', 'item'])
    >>> loan = LoanRecord('2024-04-30', 'Regulator 1: Apeks', '1', 'bob', 'cid', '5', None)
    >>> validate_loan(loan, roles, now)
    LoanValidation(ok=True, invalid_fields=[])
"""

from collections import namedtuple
import datetime
import logging
import math

from .entries import Entries, parse_date
from .error import ShedsError
from . import const

logger = logging.getLogger(__name__)

LOANS_FILE = 'loans.csv'

LoanRecord = namedtuple(
    'LoanRecord', 'date item count borrower lender donation returned'
)
LoanRecord.__doc__ = """
Equipment loan record.

:var date: Date of the loan.
:var item: Loan descriptor of inventory item.
:var count: Number of items borrowed.
:var borrower: Club member borrowing the items.
:var lender: Operator lending the items.
:var donation: Donation paid by the borrower.
:var returned: Operator who received the items back, null while the loan
    is active.
"""

LOAN_TYPES = {
    'date': 'date',
    'count': 'int',
    'donation': 'float',
}

LoanValidation = namedtuple('LoanValidation', 'ok invalid_fields')
LoanValidation.__doc__ = """
Result of loan validation.

:var ok: True if the loan is valid.
:var invalid_fields: List of invalid field names.
"""


def _as_datetime(value):
    """
    Convert loan date into date and time.

    `ValueError` is raised if the value is not a date.
    """
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    if isinstance(value, str):
        return parse_date(value.strip())
    raise ValueError('Not a date: {!r}'.format(value))


def _now(date, now=None):
    """
    Get current time comparable with a date.

    :param date: Date and time, naive or timezone aware.
    :param now: Current time, taken from the clock if null.
    """
    if now is None:
        return datetime.datetime.now(date.tzinfo)
    if now.tzinfo is None and date.tzinfo is not None:
        return now.replace(tzinfo=date.tzinfo)
    if now.tzinfo is not None and date.tzinfo is None:
        return now.astimezone().replace(tzinfo=None)
    return now


def _on_list(roles, role, name):
    """
    Check if a name is on a role list.

    A role list, which cannot be fetched, has no names.
    """
    try:
        return name in roles.members(role)
    except (KeyError, ShedsError) as ex:
        logger.warning('cannot get {} list: {}'.format(role, ex))
        return False


def validate_loan(candidate, roles, now=None):
    """
    Validate a new loan.

    The loan is invalid if

    - its date is in the future or is not a date
    - its item is not picked
    - its count is not a non-negative integer
    - its donation is not a non-negative number
    - its borrower is not a club member
    - its lender is not an operator

    :param candidate: Loan record, values can be text.
    :param roles: Role lookup.
    :param now: Current time, taken from the clock if null.
    """
    invalid = []

    try:
        date = _as_datetime(candidate.date)
        if date > _now(date, now):
            invalid.append('date')
    except (ValueError, TypeError):
        invalid.append('date')

    item = candidate.item
    if item is None or not str(item).strip() or item == const.SELECT:
        invalid.append('item')

    try:
        if int(str(candidate.count).strip()) < 0:
            invalid.append('count')
    except ValueError:
        invalid.append('count')

    try:
        donation = float(candidate.donation)
        if not math.isfinite(donation) or donation < 0:
            invalid.append('donation')
    except (ValueError, TypeError):
        invalid.append('donation')

    if not _on_list(roles, 'member', candidate.borrower):
        invalid.append('borrower')
    if not _on_list(roles, 'operator', candidate.lender):
        invalid.append('lender')

    if __debug__ and invalid:
        logger.debug('invalid loan {}: {}'.format(candidate, invalid))
    return LoanValidation(not invalid, invalid)


def is_active(record):
    """
    Check if a loan is active.

    :param record: Loan record.
    """
    return record.returned is None or record.returned == ''



class LoanLedger(object):
    """
    Ledger of equipment loans.

    :var entries: Loan records.
    :var roles: Role lookup.
    :var loan_return: Loan period [days].
    """
    def __init__(self, entries, roles, loan_return=10):
        self.entries = entries
        self.roles = roles
        self.loan_return = loan_return


    @classmethod
    def from_store(cls, store, roles, config=None):
        """
        Create ledger of loans kept in `loans.csv` file of a store.

        :param store: Record store.
        :param roles: Role lookup.
        :param config: Configuration providing `loan_return` period.
        """
        entries = Entries(store, LOANS_FILE, LoanRecord, LOAN_TYPES)
        loan_return = 10 if config is None else config.get('loan_return', 10)
        return cls(entries, roles, loan_return)


    def add(self, candidate, now=None):
        """
        Validate and record a new loan.

        Valid loan is appended to the ledger, the ledger is saved and
        reloaded. Nothing is recorded for an invalid loan.

        :param candidate: Loan record, values can be text.
        :param now: Current time, taken from the clock if null.
        """
        validation = validate_loan(candidate, self.roles, now)
        if not validation.ok:
            return validation

        record = LoanRecord(
            _as_datetime(candidate.date),
            candidate.item,
            int(str(candidate.count).strip()),
            candidate.borrower,
            candidate.lender,
            float(candidate.donation),
            None,
        )
        self.entries.push(record)
        self.entries.save()
        self.entries.reload()
        logger.info('loan of {} {} to {} recorded'.format(
            record.count, record.item, record.borrower
        ))
        return validation


    def number_on_loan(self, item):
        """
        Get number of items on loan.

        :param item: Loan descriptor of inventory item.
        """
        return sum(
            r.count or 0 for r in self.entries
            if is_active(r) and r.item == item
        )


    def active(self):
        """
        Get active loans as list of index and record pairs.
        """
        return [(i, r) for i, r in enumerate(self.entries) if is_active(r)]


    def late(self, now=None):
        """
        Get active loans older than loan period as list of index and
        record pairs.

        :param now: Current time, taken from the clock if null.
        """
        period = datetime.timedelta(days=self.loan_return)
        return [
            (i, r) for i, r in self.active()
            if r.date is not None and r.date + period < _now(r.date, now)
        ]


    def mark_returned(self, index, operator):
        """
        Mark a loan returned and save the ledger.

        :param index: Index of the loan record.
        :param operator: Operator receiving the items.
        """
        r = self.entries.update(index, returned=operator)
        self.entries.save()
        logger.info('loan of {} returned to {}'.format(r.item, operator))
        return r


# vim: sw=4:et:ai
