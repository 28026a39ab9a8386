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
Sheds exceptions.
"""

class ShedsError(Exception):
    """
    Base class for all Sheds errors.
    """


class ConfigError(ShedsError):
    """
    Invalid configuration or calculation parameters.
    """


class BlendError(ShedsError):
    """
    Blend planning error.
    """


class InfeasibleBlendError(BlendError):
    """
    Target gas cannot be blended with available oxygen bank stock.

    :var shortfall: Oxygen missing after all banks were used [litres].
    """
    def __init__(self, shortfall):
        super().__init__(
            'Not enough oxygen in banks, {:.2f} litres short'.format(shortfall)
        )
        self.shortfall = shortfall


class StoreError(ShedsError):
    """
    Record store read or write failure.
    """


class NotFoundError(StoreError):
    """
    Data does not exist in a record store.
    """


class EntryError(ShedsError):
    """
    Tabular entry value cannot be converted to its column type.
    """


# vim: sw=4:et:ai
