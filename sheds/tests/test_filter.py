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
Compressor filter life tests.
"""

from sheds.filter import FilterParams, eq_filter_factor, remaining_filter_life

from .tools import _record

import unittest
from unittest import mock

PORTABLE = FilterParams(15, 1.84879, 1.124939, 14.60044, -0.3252651)


class FilterFactorTestCase(unittest.TestCase):
    """
    Filter life factor tests.
    """
    def test_factor_at_c(self):
        """
        Test filter life factor at curve parameter c temperature
        """
        v = eq_filter_factor(14.60044, *PORTABLE[1:])
        self.assertAlmostEqual((1.84879 - 0.3252651) / 2, v)


    def test_factor_decreasing(self):
        """
        Test filter life factor decreases with temperature
        """
        values = [eq_filter_factor(t, *PORTABLE[1:]) for t in (5, 15, 25, 35)]
        self.assertEqual(sorted(values, reverse=True), values)



class RemainingFilterLifeTestCase(unittest.TestCase):
    """
    Remaining filter life tests.
    """
    def test_no_history(self):
        """
        Test remaining filter life without compressor records
        """
        self.assertEqual(15, remaining_filter_life([], PORTABLE))


    def test_run(self):
        """
        Test remaining filter life after 2 hours at 15C
        """
        v = remaining_filter_life([_record(15, 2)], PORTABLE)
        self.assertAlmostEqual(12.3164, v, 4)


    def test_runs(self):
        """
        Test remaining filter life after two runs
        """
        h1 = [_record(15, 2)]
        h2 = [_record(15, 1), _record(15, 2)]
        self.assertAlmostEqual(
            remaining_filter_life(h1, PORTABLE),
            remaining_filter_life(h2, PORTABLE)
        )


    def test_hot_run(self):
        """
        Test filter is used faster in hot weather
        """
        v1 = remaining_filter_life([_record(10, 2)], PORTABLE)
        v2 = remaining_filter_life([_record(30, 2)], PORTABLE)
        self.assertGreater(v1, v2)


    def test_filters_changed(self):
        """
        Test filter change resets remaining filter life
        """
        history = [
            _record(25, 10),
            _record(None, 10, filters_changed=True),
        ]
        self.assertEqual(15, remaining_filter_life(history, PORTABLE))

        history.append(_record(15, 12))
        v = remaining_filter_life(history, PORTABLE)
        self.assertAlmostEqual(12.3164, v, 4)


    def test_overdue(self):
        """
        Test remaining filter life is negative when change is overdue
        """
        v = remaining_filter_life([_record(25, 100)], PORTABLE)
        self.assertLess(v, 0)


    def test_runtime_reset(self):
        """
        Test runtime counter going back uses no filter life
        """
        history = [_record(15, 2), _record(15, 1)]
        v = remaining_filter_life(history, PORTABLE)
        self.assertAlmostEqual(12.3164, v, 4)

        # counting restarts from the lower runtime
        history.append(_record(15, 2))
        v = remaining_filter_life(history, PORTABLE)
        self.assertLess(v, 12.3164)


    @mock.patch('sheds.filter.logger')
    def test_no_temperature(self, logger):
        """
        Test nominal temperature used when temperature is not recorded
        """
        v1 = remaining_filter_life([_record(None, 2)], PORTABLE)
        v2 = remaining_filter_life([_record(20, 2)], PORTABLE)
        self.assertEqual(v1, v2)
        self.assertTrue(logger.warning.called)


    def test_deterministic(self):
        """
        Test remaining filter life is the same for the same history
        """
        history = [_record(12, 1.5), _record(18, 3.25), _record(22, 4)]
        v1 = remaining_filter_life(history, PORTABLE)
        v2 = remaining_filter_life(list(history), PORTABLE)
        self.assertEqual(v1, v2)


# vim: sw=4:et:ai
