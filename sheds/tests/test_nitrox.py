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
Nitrox fill log tests.
"""

import datetime
import json

from sheds.blend import Bleed, BlendConditions
from sheds.error import BlendError, ConfigError
from sheds.nitrox import Nitrox

from .tools import _store, _config, EAN32_FILL

import unittest

NOW = datetime.datetime(2024, 5, 1, 12, 0)

NITROX_CSV = """\
date,blender,bank,litres,bar_left,cost
2024-04-01T10:00:00,ann,1,438.4,87.27,8.768
2024-04-02T10:00:00,ann,2,100,150,2.5
2024-04-03T10:00:00,cid,1,100,80,2
2024-04-04T10:00:00,cid,9,100,80,2
"""


class NitroxTestCase(unittest.TestCase):
    """
    Nitrox fill log tests.
    """
    def setUp(self):
        self.store = _store()
        self.config = _config(self.store)
        self.nitrox = Nitrox(self.store, self.config)


    def test_reload(self):
        """
        Test loading fill log updates bank pressures
        """
        self.store.write('nitrox.csv', NITROX_CSV)
        self.nitrox.reload()

        self.assertEqual(80, self.config.get('o2:bank:1:bar'))
        self.assertEqual(150, self.config.get('o2:bank:2:bar'))
        self.assertEqual(210, self.config.get('o2:bank:3:bar'))
        self.assertIsNone(self.config.get('o2:bank:9'))


    def test_banks(self):
        """
        Test selecting banks in order of use
        """
        banks = self.nitrox.banks(['3', '1'])
        self.assertEqual(['3', '1'], [b.id for b in banks])
        self.assertRaises(ConfigError, self.nitrox.banks, ['1', '9'])


    def test_preview(self):
        """
        Test fill preview does not change banks
        """
        plan = self.nitrox.preview(EAN32_FILL)

        self.assertTrue(plan.feasible)
        add = plan.actions[0]
        self.assertEqual('1', add.bank_id)
        self.assertAlmostEqual(96 - 438.4 / 50.2, add.left_bar)
        self.assertEqual(96, self.config.get('o2:bank:1:bar'))


    def test_preview_banks(self):
        """
        Test fill preview with selected banks
        """
        plan = self.nitrox.preview(EAN32_FILL, ['4'])
        add = plan.actions[0]
        self.assertEqual('4', add.bank_id)
        self.assertAlmostEqual(438.4 * 0.05, plan.total_cost)


    def test_preview_wasted_cost(self):
        """
        Test fill preview values wasted oxygen at cheapest price
        """
        c = BlendConditions(200, 0.5, 10, 200, 0.32)
        plan = self.nitrox.preview(c, ['4'])
        bleed = plan.actions[0]
        self.assertIsInstance(bleed, Bleed)
        self.assertAlmostEqual(bleed.wasted_litres * 0.02, bleed.wasted_cost)


    def test_preview_infeasible(self):
        """
        Test fill preview with not enough oxygen
        """
        self.config.fix_bank('4', 1)
        plan = self.nitrox.preview(EAN32_FILL, ['4'])
        self.assertFalse(plan.feasible)
        self.assertEqual(1, self.config.get('o2:bank:4:bar'))
        self.assertRaises(BlendError, self.nitrox.commit, plan, 'ann')


    def test_commit(self):
        """
        Test recording a fill
        """
        self.config.fix_bank('1', 5)
        plan = self.nitrox.preview(EAN32_FILL)
        records = self.nitrox.commit(plan, 'ann', NOW)

        self.assertEqual(['1', '2'], [r.bank for r in records])
        self.assertEqual(0, records[0].bar_left)
        self.assertAlmostEqual(251, records[0].litres)
        self.assertEqual('ann', records[1].blender)
        self.assertEqual(NOW, records[1].date)

        self.assertEqual(0, self.config.get('o2:bank:1:bar'))
        left = 190 - (438.4 - 251) / 47.5
        self.assertAlmostEqual(left, self.config.get('o2:bank:2:bar'))

        # fill log and configuration are saved
        config = json.loads(self.store.read('config.json'))
        self.assertAlmostEqual(left, config['o2']['bank']['2']['bar'])

        nitrox = Nitrox(self.store, _config(self.store))
        nitrox.reload()
        self.assertEqual(2, len(nitrox.entries))
        self.assertAlmostEqual(left, nitrox.config.get('o2:bank:2:bar'))


# vim: sw=4:et:ai
