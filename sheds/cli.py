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
Sheds command line interface.
"""

import argparse
import logging
import sys

from .blend import BlendConditions, mod
from .compressor import Compressor, hms
from .error import ShedsError
from .loans import LoanLedger
from .nitrox import Nitrox
from .output import format_plan, about
from .roles import Roles
from . import create, const

logger = logging.getLogger(__name__)


def cmd_blend(args, store, config):
    """
    Plan a nitrox fill, optionally record it.
    """
    conditions = BlendConditions(
        args.start_pressure, args.start_mix / 100, args.size,
        args.target_pressure, args.target_mix / 100, args.temperature
    )
    bank_ids = args.banks.split(',') if args.banks else None

    nitrox = Nitrox(store, config)
    nitrox.reload()
    plan = nitrox.preview(conditions, bank_ids)

    if conditions.target_mix > 0:
        print('MOD {}m at ppO2 {}'.format(
            mod(args.ppo2, conditions.target_mix), args.ppo2
        ))
    print(format_plan(plan))

    if args.commit:
        nitrox.commit(plan, args.commit)
        print('Fill recorded')
    return 0 if plan.feasible else 2


def cmd_filter(args, store, config):
    """
    Show remaining filter life of a compressor.
    """
    compressor = Compressor(store, config, args.compressor)
    life = compressor.remaining_filter_life()
    changed = compressor.last_filters_changed()

    print('Runtime: {}'.format(hms(compressor.runtime())))
    if changed is not None:
        print('Filters changed: {}'.format(changed.date))
    if life < 0:
        print('Filter change overdue by {}'.format(hms(-life)))
    else:
        print('Remaining filter life: {}'.format(hms(life)))

    if args.check:
        temperature, humidity = args.check
        ok = compressor.operable(temperature, humidity)
        print('Compressor {} be run at {}C and {}% humidity'.format(
            'can' if ok else 'cannot', temperature, humidity
        ))
    return 0


def cmd_loans(args, store, config):
    """
    List active loans.
    """
    ledger = LoanLedger.from_store(store, Roles.from_store(store), config)
    late = {i for i, _ in ledger.late()}
    loans = ledger.late() if args.late else ledger.active()
    for i, r in loans:
        print('{:>4} {} {} x{} {} ({}, {}){}'.format(
            i, r.date.date() if r.date else '?', r.item, r.count,
            r.borrower, r.lender, about(r.donation or 0),
            ' LATE' if i in late else ''
        ))
    return 0


def cmd_fix_bank(args, store, config):
    """
    Set pressure of an oxygen bank.
    """
    config.fix_bank(args.bank, args.bar)
    config.save()
    print('Bank {} at {} bar'.format(args.bank, args.bar))
    return 0


def parser():
    """
    Create command line parser.
    """
    p = argparse.ArgumentParser(description='Sheds - dive club resources')
    p.add_argument(
        '--store', default='.',
        help='record store directory or URL (default current directory)'
    )
    p.add_argument('--user', help='record store user')
    p.add_argument('--password', help='record store password')
    p.add_argument(
        '--debug', action='store_true', default=False,
        help='log debug messages'
    )
    sub = p.add_subparsers(dest='command')
    sub.required = True

    b = sub.add_parser('blend', help='plan nitrox fill')
    b.add_argument('start_pressure', type=float, help='cylinder pressure [bar]')
    b.add_argument('start_mix', type=float, help='cylinder O2 [%%]')
    b.add_argument('size', type=float, help='cylinder size [l]')
    b.add_argument('target_pressure', type=float, help='target pressure [bar]')
    b.add_argument('target_mix', type=float, help='target O2 [%%]')
    b.add_argument(
        '--temperature', type=float, default=const.TEMPERATURE,
        help='ambient temperature [C]'
    )
    b.add_argument('--banks', help='comma separated bank ids in order of use')
    b.add_argument(
        '--ppo2', type=float, default=const.PPO2_MAX,
        help='maximum ppO2 for MOD (default %(default)s)'
    )
    b.add_argument('--commit', metavar='BLENDER', help='record the fill')
    b.set_defaults(func=cmd_blend)

    f = sub.add_parser('filter', help='show remaining filter life')
    f.add_argument('compressor', help='compressor id, i.e. fixed')
    f.add_argument(
        '--check', nargs=2, type=float, metavar=('TEMPERATURE', 'HUMIDITY'),
        help='check if compressor can be run'
    )
    f.set_defaults(func=cmd_filter)

    ln = sub.add_parser('loans', help='list active loans')
    ln.add_argument(
        '--late', action='store_true', default=False,
        help='list late loans only'
    )
    ln.set_defaults(func=cmd_loans)

    fb = sub.add_parser('fix-bank', help='set oxygen bank pressure')
    fb.add_argument('bank', help='bank id')
    fb.add_argument('bar', type=float, help='bank pressure [bar]')
    fb.set_defaults(func=cmd_fix_bank)
    return p


def main(argv=None):
    """
    Run Sheds command.

    :param argv: Command line arguments, `sys.argv` if null.
    """
    args = parser().parse_args(argv)

    level = logging.DEBUG if args.debug else logging.WARN
    logging.basicConfig(level=level)

    try:
        config = create(args.store, user=args.user, password=args.password)
        return args.func(args, config.store, config)
    except ShedsError as ex:
        if __debug__:
            logger.debug('{} failed'.format(args.command), exc_info=True)
        print('sheds: {}'.format(ex), file=sys.stderr)
        return 1


# vim: sw=4:et:ai
