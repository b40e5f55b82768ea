# This file is part of the WMSLayer project.
# Copyright (C) 2026 The WMSLayer Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Service requests with a fixed parameter order.
"""
from urllib.parse import quote


def url_delimiter(url):
    """
    Return the string that separates `url` from a query string.

    >>> url_delimiter('http://example.org/wms')
    '?'
    >>> url_delimiter('http://example.org/wms?')
    ''
    >>> url_delimiter('http://example.org/wms?map=foo')
    '&'
    >>> url_delimiter('http://example.org/wms?map=foo&')
    ''
    """
    if url[-1] in '?&':
        return ''
    if '?' in url:
        return '&'
    return '?'


class BaseRequest(object):
    """
    This class represents a request with a URL and key-value parameters.

    Parameters are kept in insertion order, some services depend on it.

    :param params: list of ``(key, value)`` tuples
    :param url: The service URL for the request.
    """
    def __init__(self, params=None, url=''):
        self.params = list(params or [])
        self.url = url

    def __str__(self):
        return self.complete_url

    @property
    def query_string(self):
        """
        >>> BaseRequest([('FOO', 'egg'), ('BAR', 'ham eggs'), ('SRS', 'EPSG:4326')]).query_string
        'FOO=egg&BAR=ham%20eggs&SRS=EPSG:4326'
        """
        kv_pairs = []
        for key, value in self.params:
            if value is None:
                value = ''
            kv_pairs.append(key + '=' + quote(str(value).encode('utf-8'), safe=',:/'))
        return '&'.join(kv_pairs)

    @property
    def complete_url(self):
        """
        The complete request as URL.
        """
        if not self.url:
            return self.query_string
        return self.url + url_delimiter(self.url) + self.query_string

    def __repr__(self):
        return '%s(params=%r, url=%r)' % (self.__class__.__name__, self.params, self.url)
