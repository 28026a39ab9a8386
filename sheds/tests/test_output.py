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
Tests for Sheds output functions and coroutines.
"""

import datetime
import io

from sheds.blend import Bleed, AddFromBank, TopOff, Pay, BlendPlan, GasState
from sheds.output import format_action, format_plan, report_records, \
    csv_writer, NitroxRecord
from sheds.flow import collect

import unittest

NOW = datetime.datetime(2024, 5, 1, 12, 0)

ACTIONS = [
    Bleed(720, 209.52, 4.1904),
    AddFromBank('1', 251, 0.0, 5.02),
    AddFromBank('2', 187.4, 186.054737, 4.685),
    TopOff(60.16),
    Pay(9.705),
]


class FormatTestCase(unittest.TestCase):
    """
    Blend action formatting tests.
    """
    def test_bleed(self):
        """
        Test formatting bleed action
        """
        self.assertEqual(
            'Bleed cylinder, releasing 720.00 litres of gas and wasting'
            ' 209.52 litres of oxygen (4.19)',
            format_action(ACTIONS[0])
        )


    def test_add_from_bank(self):
        """
        Test formatting oxygen bank action
        """
        self.assertEqual(
            'Add 187.40 litres of oxygen from bank 2, leaving 186.05 bar'
            ' (cost 4.68)',
            format_action(ACTIONS[2])
        )


    def test_top_off(self):
        """
        Test formatting top-off action
        """
        self.assertEqual(
            'Top off with air, adding 60.16 bar', format_action(ACTIONS[3])
        )


    def test_pay(self):
        """
        Test formatting payment action
        """
        self.assertEqual('Pay 9.71 for the oxygen', format_action(ACTIONS[4]))


    def test_unknown(self):
        """
        Test formatting unknown action
        """
        self.assertRaises(TypeError, format_action, ('Bleed', 10))


    def test_plan(self):
        """
        Test formatting blend plan
        """
        plan = BlendPlan(ACTIONS, True, 9.705, GasState(200, 0.32, 10), 0)
        lines = format_plan(plan).split('\n')
        self.assertEqual(5, len(lines))
        self.assertTrue(lines[0].startswith('1. Bleed'))
        self.assertTrue(lines[4].startswith('5. Pay'))


    def test_infeasible_plan(self):
        """
        Test formatting infeasible blend plan
        """
        plan = BlendPlan(ACTIONS[1:2], False, 5.02, GasState(125, 0.4, 10), 187.4)
        self.assertEqual(
            '1. Add 251.00 litres of oxygen from bank 1, leaving 0.00 bar'
            ' (cost 5.02)\n'
            'Not enough oxygen in the banks, 187.40 litres short',
            format_plan(plan)
        )



class ReportTestCase(unittest.TestCase):
    """
    Nitrox fill records tests.
    """
    def test_report_records(self):
        """
        Test converting blend actions into fill records
        """
        records = list(report_records(ACTIONS, 'ann', NOW))
        self.assertEqual([
            NitroxRecord(NOW, 'ann', '1', 251, 0.0, 5.02),
            NitroxRecord(NOW, 'ann', '2', 187.4, 186.054737, 4.685),
        ], records)


    def test_report_no_oxygen(self):
        """
        Test no fill records when no oxygen drawn
        """
        records = list(report_records([ACTIONS[0], ACTIONS[3]], 'ann', NOW))
        self.assertEqual([], records)


    def test_write_csv(self):
        """
        Test saving fill records in CSV file
        """
        f = io.StringIO()
        data = []
        writer = csv_writer(f, collect(data))
        for r in report_records(ACTIONS, 'ann', NOW):
            writer.send(r)

        st = f.getvalue().split('\n')
        self.assertEqual(4, len(st))
        self.assertEqual('date,blender,bank,litres,bar_left,cost', st[0])
        self.assertEqual('2024-05-01T12:00:00,ann,1,251,0.0,5.02', st[1])
        self.assertEqual('', st[-1])
        self.assertEqual(2, len(data))


# vim: sw=4:et:ai
