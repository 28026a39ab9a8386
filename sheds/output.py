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
Sheds output functions and coroutines.

Blend actions are rendered as text for blenders, one function per action
type

    >>> from sheds.blend import AddFromBank, TopOff
    >>> format_action(AddFromBank('2', 438.4, 180.77052, 8.768))
    'Add 438.40 litres of oxygen from bank 2, leaving 180.77 bar (cost 8.77)'
    >>> format_action(TopOff(67.36))
    'Top off with air, adding 67.36 bar'

Oxygen drawn from banks is recorded in nitrox fill log

- converting blend actions into nitrox fill records
- saving nitrox fill records in CSV file
"""

from collections import namedtuple
import csv
import datetime
import logging

from .blend import Bleed, AddFromBank, TopOff, Pay
from .entries import format_value
from .flow import coroutine
from . import const

logger = logging.getLogger(__name__)


NitroxRecord = namedtuple(
    'NitroxRecord', 'date blender bank litres bar_left cost'
)
NitroxRecord.__doc__ = """
Nitrox fill log record, one per oxygen bank drawn from.

:var date: Date of the fill.
:var blender: Operator blending the gas.
:var bank: Oxygen bank id.
:var litres: Oxygen drawn from the bank [litres].
:var bar_left: Bank pressure after the fill [bar].
:var cost: Price of the oxygen drawn.
"""


def about(value):
    """
    Format value with presentation precision.

    :param value: Value to format.
    """
    return '{:.{}f}'.format(value, const.SCALE)


def _bleed(a):
    return 'Bleed cylinder, releasing {} litres of gas and wasting {}' \
        ' litres of oxygen ({})'.format(
            about(a.drained_litres), about(a.wasted_litres),
            about(a.wasted_cost)
        )


def _add_from_bank(a):
    return 'Add {} litres of oxygen from bank {}, leaving {} bar' \
        ' (cost {})'.format(
            about(a.used_litres), a.bank_id, about(a.left_bar), about(a.cost)
        )


def _top_off(a):
    return 'Top off with air, adding {} bar'.format(about(a.added_bar))


def _pay(a):
    return 'Pay {} for the oxygen'.format(about(a.cost))


RENDERERS = {
    Bleed: _bleed,
    AddFromBank: _add_from_bank,
    TopOff: _top_off,
    Pay: _pay,
}


def format_action(action):
    """
    Render blend action as text.

    :param action: Blend action.
    """
    try:
        render = RENDERERS[type(action)]
    except KeyError:
        raise TypeError('Unknown blend action {!r}'.format(action)) from None
    return render(action)


def format_plan(plan):
    """
    Render blend plan as numbered list of steps.

    :param plan: Blend plan.
    """
    lines = [
        '{}. {}'.format(k, format_action(a))
        for k, a in enumerate(plan.actions, 1)
    ]
    if not plan.feasible:
        lines.append(
            'Not enough oxygen in the banks, {} litres short'
            .format(about(plan.shortfall))
        )
    return '\n'.join(lines)


def report_records(actions, blender, now=None):
    """
    Convert blend actions into nitrox fill records.

    A record is generated for every oxygen bank drawn from.

    :param actions: Blend actions.
    :param blender: Operator blending the gas.
    :param now: Date of the fill, taken from the clock if null.
    """
    date = datetime.datetime.now() if now is None else now
    for a in actions:
        if isinstance(a, AddFromBank):
            yield NitroxRecord(
                date, blender, a.bank_id, a.used_litres, a.left_bar, a.cost
            )


@coroutine
def csv_writer(f, target=None):
    """
    Write nitrox fill records into a CSV file.

    :param f: File object.
    :param target: Optional coroutine to forward nitrox fill records to.
    """
    fcsv = csv.writer(f, lineterminator='\n')
    fcsv.writerow(NitroxRecord._fields)

    while True:
        record = yield
        fcsv.writerow([format_value(v) for v in record])

        if target:
            target.send(record)


# vim: sw=4:et:ai
