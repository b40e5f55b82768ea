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
Tile layer backed by a WMS 1.1.1 service.
"""
import time

from wmslayer.config.service import ServiceConfig, srs_name
from wmslayer.exception import UnknownLayer, UnsupportedSRS
from wmslayer.grid.tile_grid import TileGrid
from wmslayer.request.wms import WMS111MapRequest
from wmslayer.srs import SRS
from wmslayer.util.async_ import Dispatcher, run_non_blocking
from wmslayer.wms import validator
from wmslayer.wms.fetcher import CapabilityFetcher

import logging
log = logging.getLogger('wmslayer.capabilities')


class WMSTileLayer(object):
    """
    Provides tile URLs for a tiled map and keeps the configuration in
    sync with the capabilities of the service.

    The layer is driven by its owner: `update` must be called regularly
    from the owner thread. It starts the capabilities request after the
    base URL changed and delivers the results of background work.

    :param map_view: `MapView` of the hosting map
    :param on_update: called with the layer when the content should be
        rendered
    """
    def __init__(self, map_view, base_url=None, layers=None, srs=None, format=None,
                 http_client=None, on_update=None, dispatcher=None,
                 runner=run_non_blocking):
        self.map_view = map_view
        self.grid = TileGrid(map_view)
        self.config = ServiceConfig(base_url=base_url, layers=layers, srs=srs, format=format)
        self.dispatcher = dispatcher or Dispatcher()
        self.fetcher = CapabilityFetcher(self.dispatcher, http_client=http_client,
                                         on_ready=self._on_capabilities, runner=runner)
        self.on_update = on_update
        self._is_ready = False
        self._needs_update = False
        self._base_url_changed = base_url is not None

    @property
    def base_url(self):
        return self.config.base_url

    @base_url.setter
    def base_url(self, value):
        self.config.base_url = value
        self._base_url_changed = True

    @property
    def layers(self):
        """
        The layer names as comma separated string.
        """
        return self.config.layers_param

    @layers.setter
    def layers(self, value):
        self.config.layers = value
        validator.check_layers(self.config.layers, self.capabilities)

    @property
    def srs(self):
        """
        The `SRS` of the layer. Raises ValueError for codes that are not
        known to pyproj, `srs_name` works for all codes.
        """
        return SRS(self.config.srs_name)

    @srs.setter
    def srs(self, value):
        self.config.srs_name = srs_name(value)
        validator.check_srs(self.config.srs_name, self.capabilities)

    @property
    def srs_name(self):
        return self.config.srs_name

    @property
    def format(self):
        return self.config.format

    @format.setter
    def format(self, value):
        self.config.format = value

    @property
    def capabilities(self):
        """
        The last `CapabilitiesDocument` or None.
        """
        return self.fetcher.document

    @property
    def is_ready(self):
        return self._is_ready

    @property
    def fetch_state(self):
        return self.fetcher.state

    def update(self):
        """
        Deliver finished background work and start a capabilities request
        if the base URL changed. Call this from the owner thread.
        """
        self.dispatcher.process()
        self._start_fetch()

    def _start_fetch(self):
        if not self._base_url_changed or self.fetcher.in_flight:
            return
        if not self.config.base_url:
            log.error('no base URL set, unable to request capabilities')
            return
        self._base_url_changed = False
        self.fetcher.start(self.config.base_url)

    def wait_ready(self, timeout=None):
        """
        Run `update` until the layer is ready or the capabilities request
        stopped. Returns `is_ready`.
        """
        deadline = None
        if timeout is not None:
            deadline = time.time() + timeout
        self.update()
        while not self._is_ready and self.fetcher.in_flight:
            remaining = None
            if deadline is not None:
                remaining = deadline - time.time()
                if remaining <= 0:
                    break
            self.dispatcher.process(block=True, timeout=remaining)
            self._start_fetch()
        return self._is_ready

    def update_content(self):
        """
        Request a render of the layer. The request is kept until the
        layer is ready and replayed once.
        """
        if not self._is_ready:
            self._needs_update = True
            return False
        if self.on_update:
            self.on_update(self)
        return True

    def _on_capabilities(self, doc):
        try:
            validator.check_layers(self.config.layers, doc)
        except UnknownLayer as ex:
            log.error('%s (%s)', ex, self.config.base_url)
        try:
            validator.check_srs(self.config.srs_name, doc)
        except UnsupportedSRS as ex:
            log.error('%s (%s)', ex, self.config.base_url)

        self._is_ready = True
        if self._needs_update:
            self._needs_update = False
            self.update_content()

    def get_tile_count_per_axis(self):
        return self.grid.tile_count()

    def get_center_tile(self):
        """
        Return ``(tile_x, tile_y, offset_x, offset_z)`` of the tile under
        the center of the map.
        """
        return self.grid.center_tile()

    def get_neighbour_tile(self, tile_x, tile_y, offset_x, offset_z,
                           tile_count_x, tile_count_y, direction):
        """
        Return the `NeighbourTile` in `direction` (``'north'``,
        ``'south'``, ``'east'`` or ``'west'``).
        """
        return self.grid.neighbour_tile(tile_x, tile_y, offset_x, offset_z,
                                        tile_count_x, tile_count_y, direction)

    def get_tile_bbox(self, tile_x, tile_y, zoom):
        return self.grid.tile_bbox(tile_x, tile_y, zoom)

    def get_tile_url(self, tile_x, tile_y, zoom):
        """
        Return the GetMap URL of the tile.
        """
        bbox = self.grid.tile_bbox(tile_x, tile_y, zoom)
        res = self.map_view.tile_resolution
        req = WMS111MapRequest(self.config.base_url, self.config.layers_param,
                               self.config.srs_name, bbox, (res, res), self.config.format)
        return req.complete_url

    def __repr__(self):
        return '<WMSTileLayer %r ready=%s state=%s>' % (
            self.config, self._is_ready, self.fetcher.state)
