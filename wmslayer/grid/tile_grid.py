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

from collections import namedtuple

from wmslayer.config import base_config
from wmslayer.grid import (
    GridError, NORTH, SOUTH, EAST, WEST,
    tile_count, wgs84_to_tile, tile_to_wgs84, meters_per_pixel,
)
from wmslayer.srs import CoordinateTransform


NeighbourTile = namedtuple('NeighbourTile', ['ok', 'tile_x', 'tile_y', 'offset_x', 'offset_z'])

NO_NEIGHBOUR = NeighbourTile(False, 0, 0, 0.0, 0.0)


class MapView(object):
    """
    The state of the map that hosts the tile layer.

    :ivar center_wgs84: map center as ``(lon, lat)``
    :ivar zoom: current zoom, may be fractional
    :ivar tile_resolution: tile size in pixel
    :ivar tile_edge_length: length of a tile edge in scene units
    :ivar transform: geographic <-> planar `CoordinateTransform`
    """
    def __init__(self, center_wgs84=(0.0, 0.0), zoom=0, tile_resolution=None,
                 tile_edge_length=1.0, transform=None):
        grid_conf = base_config().grid
        self.center_wgs84 = tuple(center_wgs84)
        self.zoom = zoom
        self.tile_resolution = tile_resolution or grid_conf.tile_resolution
        self.tile_edge_length = tile_edge_length
        if transform is None:
            transform = CoordinateTransform(grid_conf.geographic_srs, grid_conf.planar_srs)
        self.transform = transform

    @property
    def rounded_zoom(self):
        return int(round(self.zoom))

    @property
    def rounded_meters_per_pixel(self):
        return meters_per_pixel(self.rounded_zoom, self.tile_resolution)

    @property
    def tile_size_meters(self):
        return self.tile_resolution * self.rounded_meters_per_pixel

    @property
    def scale_multiplier(self):
        """
        Scene units per planar meter at the rounded zoom.
        """
        return self.tile_edge_length / self.tile_size_meters

    @property
    def center_planar(self):
        return self.transform.to_planar(self.center_wgs84)

    def __repr__(self):
        return 'MapView(center_wgs84=%r, zoom=%r, tile_resolution=%r)' % (
            self.center_wgs84, self.zoom, self.tile_resolution)


def center_tile(view):
    """
    Return ``(tile_x, tile_y, offset_x, offset_z)`` of the tile under the
    map center. The offsets place the tile origin relative to the view
    center in scene units.
    """
    zoom = view.rounded_zoom
    tile_x, tile_y = wgs84_to_tile(view.center_wgs84[0], view.center_wgs84[1], zoom)
    tile_origin = view.transform.to_planar(tile_to_wgs84(tile_x, tile_y, zoom))
    center = view.center_planar
    scale = view.scale_multiplier
    half_edge = view.tile_edge_length / 2.0

    offset_x = half_edge - (center[0] - tile_origin[0]) * scale
    offset_z = -half_edge - (center[1] - tile_origin[1]) * scale
    return tile_x, tile_y, offset_x, offset_z


def neighbour_tile(tile_x, tile_y, offset_x, offset_z, tile_count_x, tile_count_y,
                   direction, tile_edge_length):
    """
    Return the `NeighbourTile` next to the given tile.

    North and south stop at the grid border (``ok`` is False), east and
    west always return a tile, the caller handles horizontal wrapping.

    >>> neighbour_tile(0, 0, 0.0, 0.0, 2, 2, 'north', 1.0).ok
    False
    >>> neighbour_tile(0, 0, 0.0, 0.0, 2, 2, 'south', 1.0)
    NeighbourTile(ok=True, tile_x=0, tile_y=1, offset_x=0.0, offset_z=-1.0)
    >>> neighbour_tile(0, 0, 0.0, 0.0, 2, 2, 'west', 1.0)
    NeighbourTile(ok=True, tile_x=-1, tile_y=0, offset_x=-1.0, offset_z=0.0)
    """
    if direction == SOUTH:
        if tile_y + 1 < tile_count_y:
            return NeighbourTile(True, tile_x, tile_y + 1, offset_x, offset_z - tile_edge_length)
        return NO_NEIGHBOUR
    elif direction == NORTH:
        if tile_y > 0:
            return NeighbourTile(True, tile_x, tile_y - 1, offset_x, offset_z + tile_edge_length)
        return NO_NEIGHBOUR
    elif direction == EAST:
        return NeighbourTile(True, tile_x + 1, tile_y, offset_x + tile_edge_length, offset_z)
    elif direction == WEST:
        return NeighbourTile(True, tile_x - 1, tile_y, offset_x - tile_edge_length, offset_z)
    raise GridError('unknown direction %r' % (direction, ))


def tile_bbox(tile_x, tile_y, zoom, tile_size_meters, transform):
    """
    Geographic bbox ``(min_lon, min_lat, max_lon, max_lat)`` of a tile.

    The tile size is defined in planar meters. The edges are offsets from
    the projected grid origin, converted back to geographic coordinates
    one axis at a time, so neighbouring tiles share identical edges.
    """
    origin_x, origin_y = transform.to_planar(tile_to_wgs84(0, 0, zoom))
    left = origin_x + tile_x * tile_size_meters
    right = origin_x + (tile_x + 1) * tile_size_meters
    top = origin_y - tile_y * tile_size_meters
    bottom = origin_y - (tile_y + 1) * tile_size_meters

    min_x = transform.to_geographic((left, origin_y))[0]
    max_x = transform.to_geographic((right, origin_y))[0]
    min_y = transform.to_geographic((origin_x, bottom))[1]
    max_y = transform.to_geographic((origin_x, top))[1]
    return min_x, min_y, max_x, max_y


class TileGrid(object):
    """
    Tile grid bound to a `MapView`. All calls use the current state of
    the view.
    """
    def __init__(self, view):
        self.view = view

    def tile_count(self):
        return tile_count(self.view.rounded_zoom)

    def center_tile(self):
        return center_tile(self.view)

    def neighbour_tile(self, tile_x, tile_y, offset_x, offset_z, tile_count_x, tile_count_y, direction):
        return neighbour_tile(tile_x, tile_y, offset_x, offset_z, tile_count_x, tile_count_y,
                              direction, self.view.tile_edge_length)

    def tile_bbox(self, tile_x, tile_y, zoom):
        """
        Bbox of the tile at `zoom`. The tile size is taken from the
        resolution at `zoom`, not from the current zoom of the view.
        """
        size = self.view.tile_resolution * meters_per_pixel(zoom, self.view.tile_resolution)
        return tile_bbox(tile_x, tile_y, zoom, size, self.view.transform)
