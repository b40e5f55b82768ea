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
Per-layer service configuration (base URL, layers, SRS, format).
"""

from wmslayer.config import base_config
from wmslayer.exception import InvalidConfig
from wmslayer.srs import clean_srs_code


def split_layers(layers):
    """
    Return the layer names as an ordered tuple without duplicates.

    >>> split_layers('roads,rivers,roads')
    ('roads', 'rivers')
    >>> split_layers(['a', 'b'])
    ('a', 'b')
    >>> split_layers('')
    ()
    >>> split_layers(None)
    ()
    """
    if layers is None:
        return ()
    if isinstance(layers, str):
        layers = layers.split(',')
    result = []
    for name in layers:
        name = name.strip()
        if name and name not in result:
            result.append(name)
    return tuple(result)


def srs_name(srs):
    """
    Return the ``AUTHORITY:CODE`` name of `srs`.

    Only the syntax is normalized, codes that pyproj does not know are
    kept as they are. Whether the service supports the code is checked
    against its capabilities.

    >>> srs_name('epsg:4326')
    'EPSG:4326'
    >>> srs_name(3857)
    'EPSG:3857'
    >>> srs_name('AUTO:42001')
    'AUTO:42001'
    """
    if srs is None:
        raise InvalidConfig('SRS cannot be None')
    if isinstance(srs, str):
        srs = srs.strip()
        if not srs:
            raise InvalidConfig('SRS cannot be empty')
    return clean_srs_code(srs)


class ServiceConfig(object):
    """
    The WMS request parameters of a tile layer.

    Values are checked for syntax only. Checks against the capabilities
    of the service are done by `wmslayer.wms.validator`.
    """
    def __init__(self, base_url=None, layers=None, srs=None, format=None):
        wms_conf = base_config().wms
        self._base_url = None
        if base_url is not None:
            self.base_url = base_url
        self.layers = layers
        self.srs_name = srs_name(srs if srs is not None else wms_conf.srs)
        self.format = format if format is not None else wms_conf.format

    @property
    def base_url(self):
        return self._base_url

    @base_url.setter
    def base_url(self, value):
        if value is None:
            raise InvalidConfig('base URL cannot be None')
        if value == '':
            raise InvalidConfig('base URL cannot be empty')
        self._base_url = value

    @property
    def layers(self):
        return self._layers

    @layers.setter
    def layers(self, value):
        self._layers = split_layers(value)

    @property
    def layers_param(self):
        """
        The layers as comma separated list.
        """
        return ','.join(self._layers)

    @property
    def format(self):
        return self._format

    @format.setter
    def format(self, value):
        if value is None:
            raise InvalidConfig('format cannot be None')
        self._format = value

    def __repr__(self):
        return 'ServiceConfig(%r, layers=%r, srs=%r, format=%r)' % (
            self._base_url, self.layers_param, self.srs_name, self._format)
