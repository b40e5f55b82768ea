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
Slippy-map tile addressing. Level `z` is a square grid of ``2**z`` tiles
on each axis, tile (0, 0) is the north-west corner.
"""
import math


class GridError(Exception):
    pass


NORTH = 'north'
SOUTH = 'south'
EAST = 'east'
WEST = 'west'

DIRECTIONS = (NORTH, SOUTH, EAST, WEST)

spheroid_a = 6378137.0
earth_circumference = 2 * math.pi * spheroid_a


def _check_zoom(zoom):
    if zoom < 0 or int(zoom) != zoom:
        raise GridError('zoom must be a whole number >= 0, got %r' % (zoom, ))
    return int(zoom)


def tile_count(zoom):
    """
    Number of tiles on each axis for `zoom`.

    >>> tile_count(0)
    (1, 1)
    >>> tile_count(3)
    (8, 8)
    """
    zoom = _check_zoom(zoom)
    n = 2 ** zoom
    return n, n


def wgs84_to_tile(lon, lat, zoom):
    """
    Return the tile (x, y) that contains the geographic point.
    Points outside the grid are clamped to the border tiles.

    >>> wgs84_to_tile(0.0, 0.0, 1)
    (1, 1)
    >>> wgs84_to_tile(-179.9, 85.0, 2)
    (0, 0)
    >>> wgs84_to_tile(180.0, -85.0, 2)
    (3, 3)
    """
    n = tile_count(zoom)[0]
    x = int(math.floor((lon + 180.0) / 360.0 * n))
    lat_rad = math.radians(lat)
    y = int(math.floor((1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * n))
    x = min(max(x, 0), n - 1)
    y = min(max(y, 0), n - 1)
    return x, y


def tile_to_wgs84(x, y, zoom):
    """
    Return the geographic position of the tile origin (north-west corner).

    >>> tile_to_wgs84(0, 0, 0)[0]
    -180.0
    >>> round(tile_to_wgs84(0, 0, 0)[1], 10)
    85.0511287798
    >>> tile_to_wgs84(1, 1, 1)
    (0.0, 0.0)
    """
    n = float(tile_count(zoom)[0])
    lon = x / n * 360.0 - 180.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * y / n))))
    return lon, lat


def meters_per_pixel(zoom, tile_resolution=256):
    """
    Ground resolution of the spherical mercator grid at `zoom`.

    >>> '%.5f' % meters_per_pixel(0)
    '156543.03393'
    >>> '%.5f' % meters_per_pixel(1, 512)
    '39135.75848'
    """
    zoom = _check_zoom(zoom)
    return earth_circumference / (tile_resolution * 2 ** zoom)
