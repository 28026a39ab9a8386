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
Sheds constants.
"""

# O2 fraction of air used for top-off
AIR_O2 = 0.209

# O2 fraction of the gas stored in oxygen banks
BANK_O2 = 1.0

# nominal ambient temperature [C]
TEMPERATURE = 20

# default maximum partial pressure of oxygen [bar]
PPO2_MAX = 1.4

# amounts of gas [litre-bar] below this value are treated as zero
EPSILON = 10 ** -10

# rounding scale for presented values
SCALE = 2

# nitrox condensate limit [g/m^3]
NITROX_WATER_LIMIT = 0.02

# placeholder value of an unpicked loan field
SELECT = 'SeLeCt'

# config file name in a store
CONFIG_FILE = 'config.json'

# inventory snapshot file name in a store
INVENTORY_FILE = 'inventory.json'

# vim: sw=4:et:ai
