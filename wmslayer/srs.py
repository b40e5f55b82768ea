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
Spatial reference systems and transformation of coordinates.
"""
import threading

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError


def get_epsg_num(epsg_code):
    """
    >>> get_epsg_num('ePsG:4326')
    4326
    >>> get_epsg_num(4313)
    4313
    >>> get_epsg_num('31466')
    31466
    >>> get_epsg_num('IGNF:ETRS89UTM28') is None
    True
    """
    if isinstance(epsg_code, str):
        if ':' in epsg_code and epsg_code.upper().startswith('EPSG'):
            epsg_code = int(epsg_code.split(':')[1])
        elif epsg_code.isdigit():
            epsg_code = int(epsg_code)
        else:
            return
    return epsg_code


def get_authority(srs_code):
    """
    >>> get_authority('IAU:1000')
    ('IAU', '1000')
    """
    if isinstance(srs_code, str) and ':' in srs_code:
        auth_name, auth_id = srs_code.rsplit(':', 1)
        return auth_name, auth_id


def clean_srs_code(code):
    """
    >>> clean_srs_code(4326)
    'EPSG:4326'
    >>> clean_srs_code('31466')
    'EPSG:31466'
    >>> clean_srs_code('crs:84')
    'CRS:84'
    """
    if isinstance(code, _SRS):
        return code.srs_code
    if isinstance(code, str) and ':' in code:
        return code.upper()
    else:
        return 'EPSG:' + str(code)


_thread_local = threading.local()


def SRS(srs_code):
    """
    Return the (cached) `_SRS` for `srs_code`.

    :raises ValueError: for unknown codes
    """
    if isinstance(srs_code, _SRS):
        return srs_code

    srs_code = clean_srs_code(srs_code)

    if not hasattr(_thread_local, 'srs_cache'):
        _thread_local.srs_cache = {}

    if srs_code in _thread_local.srs_cache:
        return _thread_local.srs_cache[srs_code]
    else:
        srs = _SRS(srs_code)
        _thread_local.srs_cache[srs_code] = srs
        return srs


WEBMERCATOR_EPSG = set(('EPSG:900913', 'EPSG:3857',
                        'EPSG:102100', 'EPSG:102113'))


class _SRS(object):
    """
    This class represents a Spatial Reference System.

    Abstracts transformations between different projections.
    Uses the Proj API via pyproj.
    """

    def __init__(self, srs_code):
        """
        Create a new SRS with the given `srs_code` code.
        """
        self.srs_code = srs_code

        if srs_code in WEBMERCATOR_EPSG:
            epsg_num = 3857
        elif srs_code == 'CRS:84':
            epsg_num = 4326
        else:
            epsg_num = get_epsg_num(srs_code)

        try:
            if epsg_num is not None:
                self.proj = CRS.from_epsg(epsg_num)
            else:
                authority = get_authority(srs_code)
                if authority is None:
                    raise ValueError('no authority in SRS code %r' % (srs_code, ))
                self.proj = CRS.from_authority(*authority)
        except CRSError as ex:
            raise ValueError('unknown SRS %r: %s' % (srs_code, ex))

        self._transformers = {}

    def _transformer(self, other_srs):
        if other_srs in self._transformers:
            return self._transformers[other_srs]

        t = Transformer.from_crs(self.proj, other_srs.proj, always_xy=True)
        self._transformers[other_srs] = t
        return t

    def transform_to(self, other_srs, points):
        """
        :type points: ``(x, y)`` or ``[(x1, y1), (x2, y2), …]``

        >>> srs1 = SRS(4326)
        >>> srs2 = SRS(900913)
        >>> [str(round(x, 5)) for x in srs1.transform_to(srs2, (8.22, 53.15))]
        ['915046.21432', '7010792.20171']
        >>> srs1.transform_to(srs1, (8.25, 53.5))
        (8.25, 53.5)
        """
        if self == other_srs:
            return points

        transformer = self._transformer(other_srs)
        if isinstance(points[0], (int, float)) and len(points) == 2:
            return transformer.transform(*points)

        x = [p[0] for p in points]
        y = [p[1] for p in points]
        transf_pts = transformer.transform(x, y)
        return list(zip(transf_pts[0], transf_pts[1]))

    def __eq__(self, other):
        """
        >>> SRS(4326) == SRS("EpsG:4326")
        True
        >>> SRS(4326) == SRS("4326")
        True
        >>> SRS(4326) == SRS(3857)
        False
        """
        if isinstance(other, _SRS):
            return self.proj.srs == other.proj.srs
        else:
            return NotImplemented

    def __ne__(self, other):
        equal_result = self.__eq__(other)
        if equal_result is NotImplemented:
            return NotImplemented
        else:
            return not equal_result

    def __str__(self):
        return "SRS %s ('%s')" % (self.srs_code, self.proj.srs)

    def __repr__(self):
        """
        >>> repr(SRS(4326))
        "SRS('EPSG:4326')"
        """
        return "SRS('%s')" % (self.srs_code,)

    def __hash__(self):
        return hash(self.srs_code)


class CoordinateTransform(object):
    """
    Two-way transformation between the geographic system of the map
    (lon/lat) and its planar display system (meters).

    Tile layers only call `to_planar` and `to_geographic`; any object with
    these methods can be used instead.

    >>> t = CoordinateTransform('EPSG:4326', 'EPSG:3857')
    >>> [round(v, 2) for v in t.to_planar((180.0, 0.0))]
    [20037508.34, 0.0]
    >>> [round(v, 6) for v in t.to_geographic((0.0, 0.0))]
    [0.0, 0.0]
    """
    def __init__(self, geographic_srs='EPSG:4326', planar_srs='EPSG:3857'):
        self.geographic_srs = SRS(geographic_srs)
        self.planar_srs = SRS(planar_srs)

    def to_planar(self, point):
        return tuple(self.geographic_srs.transform_to(self.planar_srs, tuple(point)))

    def to_geographic(self, point):
        return tuple(self.planar_srs.transform_to(self.geographic_srs, tuple(point)))

    def __repr__(self):
        return 'CoordinateTransform(%r, %r)' % (
            self.geographic_srs.srs_code, self.planar_srs.srs_code)
