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
Sheds configuration tests.
"""

import json

from sheds.config import Config, DEFAULTS
from sheds.error import ConfigError
from sheds.filter import FilterParams
from sheds.store import MemoryStore

from .tools import _bank

import unittest


class ConfigTestCase(unittest.TestCase):
    """
    Configuration tests.
    """
    def setUp(self):
        self.store = MemoryStore()
        self.config = Config(self.store)


    def test_defaults(self):
        """
        Test default configuration
        """
        self.assertEqual(10, self.config.get('loan_return'))
        self.assertEqual(0.01, self.config.get('o2:price'))
        self.assertEqual(300, self.config.get('compressor:fixed:pumping_rate'))


    def test_defaults_copy(self):
        """
        Test changing configuration does not change defaults
        """
        self.config.set('o2:bank:1:bar', 10)
        self.assertEqual(96, DEFAULTS['o2']['bank']['1']['bar'])


    def test_get_missing(self):
        """
        Test getting missing configuration item
        """
        self.assertIsNone(self.config.get('o2:bank:9:bar'))
        self.assertEqual(5, self.config.get('o2:bank:9:bar', 5))
        self.assertIsNone(self.config.get('loan_return:days'))


    def test_set(self):
        """
        Test setting configuration items
        """
        self.config.set('loan_return', 14)
        self.config.set('compressor:mobile:filter:lifetime', 20)
        self.assertEqual(14, self.config.get('loan_return'))
        self.assertEqual(
            {'filter': {'lifetime': 20}}, self.config.get('compressor:mobile')
        )


    def test_load(self):
        """
        Test loading configuration from store
        """
        self.store.write('config.json', json.dumps({'loan_return': 7}))
        self.config.load()
        self.assertEqual(7, self.config.get('loan_return'))
        self.assertEqual(0.01, self.config.get('o2:price'))


    def test_load_missing(self):
        """
        Test loading missing configuration
        """
        self.config.load()
        self.assertEqual(10, self.config.get('loan_return'))


    def test_load_invalid(self):
        """
        Test loading invalid configuration
        """
        self.store.write('config.json', '{loan_return')
        self.assertRaises(ConfigError, self.config.load)


    def test_save(self):
        """
        Test saving configuration in store
        """
        self.config.set('loan_return', 14)
        self.config.save()
        data = json.loads(self.store.read('config.json'))
        self.assertEqual(14, data['loan_return'])

        config = Config(self.store)
        config.load()
        self.assertEqual(14, config.get('loan_return'))


    def test_banks(self):
        """
        Test creating oxygen banks from configuration
        """
        banks = self.config.banks()
        self.assertEqual(['1', '2', '3', '4'], [b.id for b in banks])
        b = banks[1]
        self.assertEqual(190, b.bar)
        self.assertEqual(47.5, b.size)
        self.assertEqual(0.025, b.price)


    def test_fix_bank(self):
        """
        Test setting oxygen bank pressure
        """
        self.config.fix_bank('3', 150)
        self.assertEqual(150, self.config.get('o2:bank:3:bar'))


    def test_fix_bank_invalid(self):
        """
        Test setting pressure of unknown oxygen bank
        """
        self.assertRaises(ConfigError, self.config.fix_bank, '9', 150)
        self.assertRaises(ConfigError, self.config.fix_bank, '1', -1)


    def test_update_banks(self):
        """
        Test saving oxygen bank pressures in configuration
        """
        self.config.update_banks([_bank('1', bar=80), _bank('2', bar=100)])
        self.assertEqual(80, self.config.get('o2:bank:1:bar'))
        self.assertEqual(100, self.config.get('o2:bank:2:bar'))
        self.assertEqual(210, self.config.get('o2:bank:3:bar'))


    def test_filter_params(self):
        """
        Test getting filter life curve parameters
        """
        params = self.config.filter_params('fixed')
        self.assertEqual(
            FilterParams(40, 3.798205, 1.149582, 11.50844, -0.4806983), params
        )
        self.assertRaises(ConfigError, self.config.filter_params, 'mobile')


# vim: sw=4:et:ai
