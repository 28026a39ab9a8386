#!/usr/bin/env python3
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

import re

from setuptools import setup, find_packages

with open('sheds/__init__.py') as f:
    VERSION = re.search(r"__version__ = '(.+)'", f.read()).group(1)

setup(
    name='sheds',
    version=VERSION,
    description='Sheds - dive club resources library',
    author='Sheds Team',
    packages=find_packages('.'),
    scripts=('bin/sheds',),
    include_package_data=True,
    long_description=\
"""\
Sheds is Python library to manage resources of a dive club: nitrox
blending from oxygen banks, compressor filter life and equipment loans.
""",
    classifiers=[
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
    ],
    keywords='diving nitrox blending compressor',
    license='GPL',
    python_requires='>=3.7',
    install_requires=['requests'],
    extras_require={
        'test': ['pytest'],
        'doc': ['sphinx', 'sphinx_rtd_theme'],
    },
)

# vim: sw=4:et:ai
