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
Compressor filter life estimation.

A compressor filter absorbs moisture from pumped air. The warmer the
intake air, the more water it carries and the faster the filter is
consumed. The consumption rate depends on temperature according to
empirical four parameter logistic curve

    .. math::

        f(T) = d + (a - d) / (1 + (T / c)^b)

The filter life at temperature :math:`T` is :math:`L * f(T)`, where
:math:`L` is average filter lifetime [h]. Running compressor for
:math:`dt` hours at temperature :math:`T` uses

    .. math::

        L * dt / (L * f(T))

hours of the filter life.

Example
~~~~~~~
Filter of portable compressor, 15h average lifetime, compressor run for
2 hours at 15C

    >>> params = FilterParams(15, 1.84879, 1.124939, 14.60044, -0.3252651)
    >>> history = [CompressorRecord(None, 'ann', 15, None, 2, False)]
    >>> round(remaining_filter_life(history, params), 4)
    12.3164
"""

from collections import namedtuple
import logging

from . import const

logger = logging.getLogger(__name__)


FilterParams = namedtuple('FilterParams', 'lifetime a b c d')
FilterParams.__doc__ = """
Filter life curve parameters.

:var lifetime: Average filter lifetime [h].
:var a: Curve parameter `a`.
:var b: Curve parameter `b`.
:var c: Curve parameter `c`.
:var d: Curve parameter `d`.
"""

CompressorRecord = namedtuple(
    'CompressorRecord',
    'date operator temperature humidity runtime filters_changed'
)
CompressorRecord.__doc__ = """
Compressor operator session record.

:var date: Date of the record.
:var operator: Compressor operator.
:var temperature: Intake air temperature [C].
:var humidity: Intake air relative humidity [%].
:var runtime: Compressor runtime counter [h].
:var filters_changed: True if filters were changed.
"""


def eq_filter_factor(temperature, a, b, c, d):
    """
    Calculate filter life factor at a temperature.

    :param temperature: Intake air temperature [C].
    :param a: Curve parameter `a`.
    :param b: Curve parameter `b`.
    :param c: Curve parameter `c`.
    :param d: Curve parameter `d`.
    """
    return d + (a - d) / (1 + (temperature / c) ** b)


def remaining_filter_life(history, params):
    """
    Calculate remaining filter life after the last compressor record [h].

    The value is negative when filter change is overdue.

    :param history: Compressor records in order of insertion.
    :param params: Filter life curve parameters.
    """
    life = params.lifetime
    flr = life
    runtime = 0
    for r in history:
        if r.filters_changed:
            flr = life
            if __debug__:
                logger.debug('filters changed, life {}h'.format(flr))
        else:
            dt = r.runtime - runtime
            if dt > 0:
                t = r.temperature
                if t is None:
                    logger.warning(
                        'no temperature for record {}, using {}C'
                        .format(r, const.TEMPERATURE)
                    )
                    t = const.TEMPERATURE
                factor = eq_filter_factor(
                    t, params.a, params.b, params.c, params.d
                )
                hours = life * factor
                used = life * dt / hours
                flr -= used
                if __debug__:
                    logger.debug(
                        'run {:.4f}h at {}C used {:.4f}h of filter life,'
                        ' {:.4f}h left'.format(dt, t, used, flr)
                    )
        runtime = r.runtime
    return flr


# vim: sw=4:et:ai
