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
Sheds configuration.

Configuration is a nested dictionary saved as JSON document in a record
store. Its items are addressed with colon separated key paths

    >>> config = Config(None)
    >>> config.get('compressor:fixed:filter:lifetime')
    40
    >>> config.set('compressor:fixed:filter:lifetime', 35)
    >>> config.get('compressor:fixed:filter:lifetime')
    35
    >>> config.get('compressor:mobile:filter:lifetime', 10)
    10
"""

import copy
import json
import logging

from .blend import OxygenBank
from .error import ConfigError, NotFoundError
from .filter import FilterParams
from . import const

logger = logging.getLogger(__name__)


DEFAULTS = {
    'loan_return': 10,
    'features': {
        'fixed': True,
        'portable': True,
        'loans': True,
        'inventory': True,
        'nitrox': True,
    },
    'o2': {
        'price': 0.01,
        'bank': {
            '1': {'size': 50.2, 'price': 0.02, 'bar': 96},
            '2': {'size': 47.5, 'price': 0.025, 'bar': 190},
            '3': {'size': 15, 'price': 0.03, 'bar': 210},
            '4': {'size': 11, 'price': 0.05, 'bar': 230},
        },
    },
    'compressor': {
        'portable': {
            'filter': {
                'lifetime': 15,
                'a': 1.84879,
                'b': 1.124939,
                'c': 14.60044,
                'd': -0.3252651,
            },
        },
        'fixed': {
            'filter': {
                'lifetime': 40,
                'a': 3.798205,
                'b': 1.149582,
                'c': 11.50844,
                'd': -0.4806983,
            },
            'pumping_rate': 300,
            'purge_freq': 5,
            'safe_limit': 25,
        },
    },
}


class Config(object):
    """
    Sheds configuration.

    :var store: Record store keeping `config.json` file.
    :var data: Configuration data.
    """
    def __init__(self, store, defaults=DEFAULTS):
        self.store = store
        self.data = copy.deepcopy(defaults)


    def load(self):
        """
        Load configuration from the store.

        Top level items of the stored configuration replace the defaults.
        Missing configuration file leaves the defaults in place.
        """
        try:
            text = self.store.read(const.CONFIG_FILE)
        except NotFoundError:
            logger.info('no configuration in the store, using defaults')
            return

        try:
            data = json.loads(text)
        except ValueError as ex:
            raise ConfigError(
                'Invalid configuration file: {}'.format(ex)
            ) from ex
        self.data.update(data)
        logger.info('configuration loaded')


    def save(self):
        """
        Save configuration in the store.
        """
        self.store.write(const.CONFIG_FILE, json.dumps(self.data, indent=1))
        logger.info('configuration saved')


    def get(self, path, default=None):
        """
        Get configuration item.

        :param path: Colon separated key path.
        :param default: Value returned if there is no such item.
        """
        data = self.data
        for k in path.split(':'):
            if not isinstance(data, dict) or k not in data:
                return default
            data = data[k]
        return data


    def set(self, path, value):
        """
        Set configuration item.

        Missing intermediate items are created.

        :param path: Colon separated key path.
        :param value: Item value.
        """
        keys = path.split(':')
        data = self.data
        for k in keys[:-1]:
            data = data.setdefault(k, {})
        data[keys[-1]] = value


    def banks(self):
        """
        Create oxygen banks from configuration.
        """
        banks = self.get('o2:bank', {})
        return [
            OxygenBank(k, float(v['bar']), float(v['size']), float(v['price']))
            for k, v in banks.items()
        ]


    def fix_bank(self, id, bar):
        """
        Set pressure of an oxygen bank.

        `ConfigError` is raised for unknown bank.

        :param id: Bank id.
        :param bar: Bank pressure [bar].
        """
        if self.get('o2:bank:{}'.format(id)) is None:
            raise ConfigError('Unknown oxygen bank {}'.format(id))
        if bar < 0:
            raise ConfigError('Bank pressure cannot be negative')
        self.set('o2:bank:{}:bar'.format(id), bar)
        logger.info('bank {} fixed at {}bar'.format(id, bar))


    def update_banks(self, banks):
        """
        Save pressure of oxygen banks in configuration.

        :param banks: Collection of oxygen banks.
        """
        for b in banks:
            self.set('o2:bank:{}:bar'.format(b.id), b.bar)


    def filter_params(self, compressor):
        """
        Get filter life curve parameters of a compressor.

        :param compressor: Compressor id, i.e. `fixed`.
        """
        cfg = self.get('compressor:{}:filter'.format(compressor))
        if cfg is None:
            raise ConfigError(
                'No filter configuration for compressor {}'.format(compressor)
            )
        return FilterParams(
            cfg['lifetime'], cfg['a'], cfg['b'], cfg['c'], cfg['d']
        )


# vim: sw=4:et:ai
