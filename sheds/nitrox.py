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
Nitrox fills.

Oxygen drawn from banks is logged in `nitrox.csv` file. Bank pressures
are kept in configuration. The log has the final word on bank pressure,
the pressure left in a bank by its last logged fill replaces configured
pressure when the log is loaded.

A fill is previewed first. Previews plan on copies of the banks, so the
configured banks are not depleted until the fill is committed.
"""

import logging

from .blend import plan_blend, cheapest_price
from .entries import Entries
from .error import BlendError, ConfigError
from .output import NitroxRecord, report_records

logger = logging.getLogger(__name__)

NITROX_FILE = 'nitrox.csv'

NITROX_TYPES = {
    'date': 'date',
    'litres': 'float',
    'bar_left': 'float',
    'cost': 'float',
}


class Nitrox(object):
    """
    Nitrox fill log.

    :var config: Sheds configuration.
    :var entries: Nitrox fill records.
    """
    def __init__(self, store, config):
        self.config = config
        self.entries = Entries(store, NITROX_FILE, NitroxRecord, NITROX_TYPES)


    def reload(self):
        """
        Load nitrox fill log and update pressure of configured banks.
        """
        self.entries.reload()
        for r in self.entries:
            path = 'o2:bank:{}'.format(r.bank)
            if self.config.get(path) is None:
                logger.warning('fill record of unknown bank {}'.format(r.bank))
            elif r.bar_left is not None:
                self.config.set(path + ':bar', r.bar_left)


    def banks(self, bank_ids=None):
        """
        Get configured oxygen banks.

        :param bank_ids: Ids of banks in order of use, all banks if null.
        """
        banks = self.config.banks()
        if bank_ids is None:
            return banks

        index = {b.id: b for b in banks}
        unknown = [k for k in bank_ids if k not in index]
        if unknown:
            raise ConfigError('Unknown oxygen banks {}'.format(unknown))
        return [index[k] for k in bank_ids]


    def preview(self, conditions, bank_ids=None):
        """
        Plan a fill without depleting the configured banks.

        Wasted oxygen is valued at the price of the cheapest configured
        bank, whether it is selected or not.

        :param conditions: Blend conditions.
        :param bank_ids: Ids of banks in order of use, all banks if null.
        """
        price = cheapest_price(self.config.banks())
        conditions = conditions._replace(
            o2_price=conditions.o2_price if price is None else price
        )
        banks = [b.copy() for b in self.banks(bank_ids)]
        return plan_blend(conditions, banks)


    def commit(self, plan, blender, now=None):
        """
        Record a fill in nitrox fill log and save pressure of drawn banks
        in configuration.

        :param plan: Feasible blend plan.
        :param blender: Operator blending the gas.
        :param now: Date of the fill, taken from the clock if null.
        """
        if not plan.feasible:
            raise BlendError('Cannot record a fill, which is not feasible')

        records = list(report_records(plan.actions, blender, now))
        for r in records:
            self.entries.push(r)
            self.config.set('o2:bank:{}:bar'.format(r.bank), r.bar_left)
        self.entries.save()
        self.config.save()
        logger.info('fill by {} recorded, {} banks used'.format(
            blender, len(records)
        ))
        return records


# vim: sw=4:et:ai
