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
Record stores.

A record store reads and writes named text blobs, i.e. CSV files of
compressor log or JSON configuration. Failures are reported with
`StoreError` exception.

    >>> store = MemoryStore()
    >>> store.write('loans.csv', 'date,item\\n')
    >>> store.read('loans.csv')
    'date,item\\n'
"""

import logging
import os.path

import requests

from .error import StoreError, NotFoundError

logger = logging.getLogger(__name__)


class Store(object):
    """
    Base class for record stores.

    :var url: Location of the store.
    """
    def __init__(self):
        self.url = None


    def connect(self, url):
        """
        Connect to the store.

        :param url: Location of the store.
        """
        self.url = url
        logger.info('store at {}'.format(url))


    def disconnect(self):
        """
        Disconnect from the store.
        """
        self.url = None


    def set_credentials(self, user, password):
        """
        Set credentials used to access the store.

        The credentials are ignored by stores without access control.

        :param user: User name.
        :param password: User password.
        """


    def read(self, name):
        """
        Read text data.

        :param name: Name of the data, i.e. `loans.csv`.
        """
        raise NotImplementedError()


    def write(self, name, data):
        """
        Write text data.

        :param name: Name of the data, i.e. `loans.csv`.
        :param data: Text data.
        """
        raise NotImplementedError()



class MemoryStore(Store):
    """
    Store keeping data in memory.

    :var data: Dictionary of stored text data.
    """
    def __init__(self, data=None):
        super().__init__()
        self.data = {} if data is None else dict(data)


    def read(self, name):
        try:
            return self.data[name]
        except KeyError:
            raise NotFoundError('{} not found'.format(name))


    def write(self, name, data):
        self.data[name] = data



class FileStore(Store):
    """
    Store keeping data in files of a directory.
    """
    def _path(self, name):
        if self.url is None:
            raise StoreError('File store is not connected')
        return os.path.join(self.url, name)


    def read(self, name):
        path = self._path(name)
        try:
            with open(path, encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError as ex:
            raise NotFoundError('{} not found'.format(path)) from ex
        except OSError as ex:
            raise StoreError('Cannot read {}: {}'.format(path, ex)) from ex


    def write(self, name, data):
        path = self._path(name)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(data)
        except OSError as ex:
            raise StoreError('Cannot write {}: {}'.format(path, ex)) from ex
        if __debug__:
            logger.debug('{} saved'.format(path))



class GetPostStore(Store):
    """
    Store on HTTP server, which reads files with GET and writes them with
    POST requests.

    Basic authentication is used when credentials are set.

    :var auth: User name and password pair or null.
    :var timeout: Request timeout [s].
    """
    def __init__(self, timeout=30):
        super().__init__()
        self.auth = None
        self.timeout = timeout


    def set_credentials(self, user, password):
        self.auth = (user, password)


    def disconnect(self):
        super().disconnect()
        self.auth = None


    def _url(self, name):
        if self.url is None:
            raise StoreError('HTTP store is not connected')
        return '{}/{}'.format(self.url.rstrip('/'), name)


    def read(self, name):
        url = self._url(name)
        if __debug__:
            logger.debug('GET {}'.format(url))
        try:
            response = requests.get(url, auth=self.auth, timeout=self.timeout)
            if response.status_code == 404:
                raise NotFoundError('{} not found'.format(url))
            response.raise_for_status()
        except requests.exceptions.RequestException as ex:
            raise StoreError('Cannot read {}: {}'.format(url, ex)) from ex
        return response.text


    def write(self, name, data):
        url = self._url(name)
        if __debug__:
            logger.debug('POST {}'.format(url))
        try:
            response = requests.post(
                url, data=data.encode('utf-8'), auth=self.auth,
                headers={'Content-Type': 'text/plain; charset=utf-8'},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as ex:
            raise StoreError('Cannot write {}: {}'.format(url, ex)) from ex


def create_store(url):
    """
    Create and connect a store for a location.

    HTTP store is created for `http://` and `https://` URLs, file store
    otherwise.

    :param url: Location of the store.
    """
    if url.startswith(('http://', 'https://')):
        store = GetPostStore()
    else:
        store = FileStore()
    store.connect(url)
    return store


# vim: sw=4:et:ai
