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
Club inventory.

Inventory is a snapshot of inventory sheets saved as `inventory.json`
file. Each sheet has a class, column heads and entries, i.e.

    [{"Class": "Regulator", "heads": ["ID", "Make", "Model", "Count"],
      "entries": [["1", "Apeks", "XTX50", 2]]}]

An inventory item is identified in loans by its descriptor

    >>> sheet = {'Class': 'Regulator', 'heads': ['ID', 'Make', 'Model'],
    ...     'entries': [['1', 'Apeks', 'XTX50']]}
    >>> descriptor(sheet, sheet['entries'][0])
    'Regulator 1: Apeks XTX50'
"""

import json
import logging

from .error import EntryError, NotFoundError
from . import const

logger = logging.getLogger(__name__)


def descriptor(sheet, entry):
    """
    Get loan descriptor of an inventory item.

    The descriptor is built from sheet class and first three columns of
    the item.

    :param sheet: Inventory sheet.
    :param entry: Inventory item.
    """
    return '{} {}: {} {}'.format(sheet['Class'], entry[0], entry[1], entry[2])


def can_pick(sheet, entry, ledger):
    """
    Check if an inventory item can be picked for a loan.

    An item with `Count` column can be picked until all of its pieces are
    on loan. An item without `Count` column cannot be picked while it is
    on loan.

    :param sheet: Inventory sheet.
    :param entry: Inventory item.
    :param ledger: Ledger of loans.
    """
    on_loan = ledger.number_on_loan(descriptor(sheet, entry))
    if on_loan <= 0:
        return True

    heads = sheet.get('heads', [])
    if 'Count' not in heads:
        return False
    count = entry[heads.index('Count')]
    try:
        return on_loan < float(count)
    except (TypeError, ValueError):
        logger.warning('invalid count of {}'.format(descriptor(sheet, entry)))
        return False



class Inventory(object):
    """
    Club inventory.

    :var store: Record store.
    :var sheets: List of inventory sheets.
    """
    def __init__(self, store):
        self.store = store
        self.sheets = []


    def load(self):
        """
        Load inventory snapshot from the store.

        Missing snapshot results in empty inventory.
        """
        try:
            text = self.store.read(const.INVENTORY_FILE)
        except NotFoundError:
            logger.info('no inventory in the store')
            self.sheets = []
            return

        try:
            self.sheets = json.loads(text)
        except ValueError as ex:
            raise EntryError('Invalid inventory: {}'.format(ex)) from ex
        logger.info('{} inventory sheets loaded'.format(len(self.sheets)))


    def save(self):
        """
        Save inventory snapshot in the store.
        """
        self.store.write(const.INVENTORY_FILE, json.dumps(self.sheets))


    def sheet(self, cls):
        """
        Find inventory sheet by its class.

        `KeyError` is raised if there is no such sheet.

        :param cls: Sheet class, i.e. `Regulator`.
        """
        for s in self.sheets:
            if s['Class'] == cls:
                return s
        raise KeyError('No inventory sheet {}'.format(cls))


    def items(self):
        """
        Iterate over inventory items as sheet and item pairs.
        """
        for s in self.sheets:
            for e in s.get('entries', []):
                yield s, e


    def available(self, ledger):
        """
        Get loan descriptors of items, which can be picked for a loan.

        :param ledger: Ledger of loans.
        """
        return [
            descriptor(s, e) for s, e in self.items() if can_pick(s, e, ledger)
        ]


# vim: sw=4:et:ai
