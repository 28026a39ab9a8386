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
Compressor log.

Compressor operators record every session in `<id>_compressor.csv`
file, i.e. `fixed_compressor.csv`. The log tracks compressor runtime
counter and filter changes, which gives remaining filter life.

Humidity of intake air is checked before running compressor. Water vapour
concentration of saturated air at temperature :math:`T` [C] is

    .. math::

        C_{sat} = 2.166 * P_{sat} / (T + 273.16)

        P_{sat} = 610.78 * e^{17.2694 * T / (T + 238.3)}

The water left after drying air down to nitrox limit condenses in the
compressor. The condensate collected between two purges must not exceed
safe limit of the compressor.

    >>> hms(1.5125)
    '01:30:45.00'
"""

import datetime
import logging
import math

from .entries import Entries
from .error import ConfigError
from .filter import CompressorRecord, remaining_filter_life
from . import const

logger = logging.getLogger(__name__)

COMPRESSOR_TYPES = {
    'date': 'date',
    'temperature': 'float',
    'humidity': 'float',
    'runtime': 'float',
    'filters_changed': 'bool',
}


def hms(hours):
    """
    Format duration as `HH:MM:SS.ss` text.

    :param hours: Duration [h].
    """
    h = math.floor(hours)
    minutes = (hours - h) * 60
    m = math.floor(minutes)
    s = (minutes - m) * 60
    return '{:02d}:{:02d}:{:05.2f}'.format(h, m, s)


def condensate(temperature, humidity, air):
    """
    Calculate water condensed from air when drying it for nitrox [ml].

    :param temperature: Intake air temperature [C].
    :param humidity: Intake air relative humidity [%].
    :param air: Volume of air [m^3].
    """
    sat = 610.78 * math.exp(17.2694 * temperature / (temperature + 238.3))
    conc = 2.166 * sat / (temperature + 273.16) * humidity / 100
    if conc <= const.NITROX_WATER_LIMIT:
        return 0.0
    return (conc - const.NITROX_WATER_LIMIT) * air



class Compressor(object):
    """
    Compressor log.

    :var id: Compressor id, i.e. `fixed`.
    :var config: Sheds configuration.
    :var entries: Compressor records.
    """
    def __init__(self, store, config, id):
        self.id = id
        self.config = config
        self.entries = Entries(
            store, '{}_compressor.csv'.format(id), CompressorRecord,
            COMPRESSOR_TYPES
        )


    def _get(self, name):
        value = self.config.get('compressor:{}:{}'.format(self.id, name))
        if value is None:
            raise ConfigError(
                'No {} configuration for compressor {}'.format(name, self.id)
            )
        return value


    def add_record(self, record, now=None):
        """
        Record compressor session and save the log.

        The log is reloaded first to include records saved by other
        operators. The record is stamped with current time. Missing
        runtime defaults to zero and filter change flag to false.

        :param record: Compressor record.
        :param now: Current time, taken from the clock if null.
        """
        if record.runtime is None:
            record = record._replace(runtime=0)
        if record.filters_changed is None:
            record = record._replace(filters_changed=False)

        self.entries.reload()
        record = record._replace(
            date=datetime.datetime.now() if now is None else now
        )
        self.entries.push(record)
        self.entries.save()
        logger.info('{} compressor runtime {}, filter life {:.2f}h'.format(
            self.id, hms(record.runtime), self.remaining_filter_life()
        ))
        return record


    def remaining_filter_life(self):
        """
        Calculate remaining filter life of the compressor [h].
        """
        params = self.config.filter_params(self.id)
        history = [
            r._replace(
                runtime=r.runtime or 0, filters_changed=bool(r.filters_changed)
            )
            for r in self.entries
        ]
        return remaining_filter_life(history, params)


    def last_filters_changed(self):
        """
        Find last record of filter change, null if filters were never
        changed.
        """
        changes = [r for r in self.entries if r.filters_changed]
        return changes[-1] if changes else None


    def runtime(self):
        """
        Get runtime counter of the compressor [h].
        """
        r = self.entries.last()
        return 0 if r is None or r.runtime is None else r.runtime


    def operable(self, temperature, humidity):
        """
        Check if compressor can be run at air temperature and humidity.

        :param temperature: Intake air temperature [C].
        :param humidity: Intake air relative humidity [%].
        """
        air = self._get('pumping_rate') * self._get('purge_freq') / 1000
        water = condensate(temperature, humidity, air)
        limit = self._get('safe_limit')
        if __debug__:
            logger.debug(
                '{}C, {}% humidity, {:.2f}ml of condensate per purge,'
                ' limit {}ml'.format(temperature, humidity, water, limit)
            )
        return water <= limit


# vim: sw=4:et:ai
