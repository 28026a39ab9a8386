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
Basic Usage
-----------

Sheds library manages resources of a dive club: oxygen banks and nitrox
fills, compressor filters and equipment loans. All records are kept in a
record store, which is a directory or HTTP server with CSV and JSON
files.

Configuration of the club is created with :func:`~sheds.create` function.
The configuration knows oxygen banks of the club, so we can preview a
nitrox fill. A 10 litre cylinder with 96 bar of air is filled with EAN32
to 200 bar::

    >>> import sheds
    >>> from sheds.store import MemoryStore
    >>> config = sheds.create(store=MemoryStore())
    >>> nitrox = sheds.Nitrox(config.store, config)
    >>> c = sheds.BlendConditions(96, 0.21, 10, 200, 0.32)
    >>> plan = nitrox.preview(c)
    >>> print(sheds.format_plan(plan))
    1. Add 438.40 litres of oxygen from bank 1, leaving 87.27 bar (cost 8.77)
    2. Top off with air, adding 60.16 bar
    3. Pay 8.77 for the oxygen

Preview does not change the banks until the fill is recorded::

    >>> config.get('o2:bank:1:bar')
    96
    >>> records = nitrox.commit(plan, 'ann')
    >>> round(config.get('o2:bank:1:bar'), 2)
    87.27

The blend planner can be used directly with any oxygen banks, see
:func:`~sheds.blend.plan_blend`. Remaining compressor filter life is
calculated with :func:`~sheds.filter.remaining_filter_life` and loans are
validated with :func:`~sheds.loans.validate_loan`.
"""

from .blend import BlendConditions, OxygenBank, plan_blend, mod
from .compressor import Compressor
from .config import Config
from .filter import FilterParams, CompressorRecord, remaining_filter_life
from .loans import LoanRecord, LoanLedger, validate_loan
from .nitrox import Nitrox
from .output import format_plan
from .roles import Roles
from .store import create_store

__version__ = '0.1.0'


def create(url=None, store=None, user=None, password=None):
    """
    Create Sheds configuration loaded from a record store.

    Usage

    >>> import sheds
    >>> from sheds.store import MemoryStore
    >>> config = sheds.create(store=MemoryStore())
    >>> config.get('loan_return')
    10

    :param url: Location of the record store.
    :param store: Record store, created for `url` if null.
    :param user: User name to access the store.
    :param password: User password.
    """
    if store is None:
        store = create_store(url)
    if user:
        store.set_credentials(user, password)

    config = Config(store)
    config.load()
    return config


__all__ = [
    'create', 'BlendConditions', 'OxygenBank', 'plan_blend', 'mod',
    'Compressor', 'Config', 'FilterParams', 'CompressorRecord',
    'remaining_filter_life', 'LoanRecord', 'LoanLedger', 'validate_loan',
    'Nitrox', 'format_plan', 'Roles',
]

# vim: sw=4:et:ai
