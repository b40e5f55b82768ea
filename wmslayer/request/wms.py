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
WMS 1.1.1 GetCapabilities and GetMap requests.
"""
from wmslayer.request.base import BaseRequest
from wmslayer.util.bbox import format_bbox


WMS_VERSION = '1.1.1'


class WMS111CapabilitiesRequest(BaseRequest):
    """
    >>> WMS111CapabilitiesRequest('http://localhost/service?').complete_url
    'http://localhost/service?SERVICE=WMS&REQUEST=GetCapabilities&VERSION=1.1.1'
    """
    def __init__(self, url):
        BaseRequest.__init__(self, [
            ('SERVICE', 'WMS'),
            ('REQUEST', 'GetCapabilities'),
            ('VERSION', WMS_VERSION),
        ], url=url)


class WMS111MapRequest(BaseRequest):
    """
    GetMap request for a single tile.

    :param layers: list of layer names or comma separated string
    :param srs: ``AUTHORITY:CODE`` of the bbox
    :param bbox: ``(minx, miny, maxx, maxy)``
    :param size: ``(width, height)`` in pixel
    """
    def __init__(self, url, layers, srs, bbox, size, format):
        if not isinstance(layers, str):
            layers = ','.join(layers)
        self.layers = layers
        self.srs = srs
        self.bbox = tuple(bbox)
        self.size = tuple(size)
        self.format = format
        BaseRequest.__init__(self, [
            ('SERVICE', 'WMS'),
            ('REQUEST', 'GetMap'),
            ('VERSION', WMS_VERSION),
            ('LAYERS', layers),
            ('STYLES', ''),
            ('SRS', srs),
            ('BBOX', format_bbox(self.bbox)),
            ('WIDTH', self.size[0]),
            ('HEIGHT', self.size[1]),
            ('FORMAT', format),
        ], url=url)
