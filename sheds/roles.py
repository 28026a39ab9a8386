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
Club roles.

Role lists are kept in `roles.csv` file with `role` and `list` columns,
the list is comma separated list of names, i.e.

    role,list
    member,"ann,bob,cid"
    operator,"ann,cid"

Loans are borrowed by members and lent by operators.
"""

from collections import namedtuple

from .entries import Entries

ROLES_FILE = 'roles.csv'

RoleRecord = namedtuple('RoleRecord', 'role list')
RoleRecord.__doc__ = """
Role list record.

:var role: Role name, i.e. `member`.
:var list: Comma separated list of names.
"""


class Roles(object):
    """
    Role lookup.

    :var entries: Role list records.
    """
    def __init__(self, entries):
        self.entries = entries


    @classmethod
    def from_store(cls, store):
        """
        Create role lookup reading `roles.csv` file of a store.

        :param store: Record store.
        """
        return cls(Entries(store, ROLES_FILE, RoleRecord))


    def find(self, field, value):
        """
        Find role list record.

        `KeyError` is raised if there is no such record.

        :param field: Column name, i.e. `role`.
        :param value: Column value, i.e. `member`.
        """
        return self.entries.find(field, value)


    def members(self, role):
        """
        Get list of names having a role.

        :param role: Role name.
        """
        row = self.find('role', role)
        return [n.strip() for n in (row.list or '').split(',') if n.strip()]


# vim: sw=4:et:ai
