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
Sheds data flow functions and coroutines.

Blend actions generated by a blender are pushed through coroutines to
validate, format or record them, i.e.

    >>> data = []
    >>> f = sender(lambda n: iter(range(n)), lambda: collect(data))
    >>> list(f(3))
    [0, 1, 2]
    >>> data
    [0, 1, 2]
"""

from functools import wraps


def coroutine(func):
    """
    Decorator for a coroutine function.

    Advances a coroutine to its first ``(yield)`` statement.
    """
    @wraps(func)
    def start(*args, **kwargs):
        cr = func(*args, **kwargs)
        next(cr)
        return cr
    return start


@coroutine
def collect(data):
    """
    Coroutine to append every received value to `data` list.

    :param data: List receiving the values.
    """
    while True:
        v = yield
        data.append(v)


def sender(gen, *factories):
    """
    Decorate generator function `gen` to send all its values to coroutines
    created by functions from `factories` list.

    The coroutines are created each time the decorated generator function
    is called, so every calculation gets fresh coroutines. Each value is
    sent to the coroutines in the order of `factories` list before it is
    yielded.

    :param gen: Generator function.
    :param factories: List of functions creating coroutines.
    """
    @wraps(gen)
    def _send(*a, **kw):
        targets = [f() for f in factories]
        for v in gen(*a, **kw):
            for c in targets:
                c.send(v)
            yield v
    return _send


# vim: sw=4:et:ai
