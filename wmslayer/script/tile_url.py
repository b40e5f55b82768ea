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

import sys
import optparse

from wmslayer.config.loader import load_configuration
from wmslayer.config.service import ServiceConfig
from wmslayer.exception import WMSLayerError, InvalidConfig
from wmslayer.grid import tile_count
from wmslayer.grid.tile_grid import MapView
from wmslayer.layer import WMSTileLayer
from wmslayer.wms.fetcher import FAILED
from wmslayer.wms.validator import check_layers, check_srs


def log_error(msg, *args):
    print(msg % args, file=sys.stderr)


def parse_tile_coord(args):
    """
    >>> parse_tile_coord(['3', '4', '2'])
    (3, 4, 2)
    """
    z, x, y = [int(v) for v in args]
    if z < 0:
        raise ValueError('zoom must be >= 0')
    n = tile_count(z)[0]
    if not (0 <= x < n and 0 <= y < n):
        raise ValueError('tile %d/%d outside of grid for zoom %d (%d tiles per axis)' % (x, y, z, n))
    return z, x, y


def service_config(options):
    if options.config_file:
        return load_configuration(options.config_file)
    return ServiceConfig(base_url=options.url, layers=options.layers,
                         srs=options.srs, format=options.format)


def validate_layer(layer, timeout):
    """
    Fetch the capabilities and check the configuration of `layer`.
    Returns a list of errors.
    """
    if not layer.wait_ready(timeout=timeout):
        if layer.fetch_state == FAILED:
            return ['unable to fetch capabilities: %s' % (layer.fetcher.last_error, )]
        return ['no capabilities from %s after %ss' % (layer.base_url, timeout)]

    if layer.capabilities is None:
        return ['invalid capabilities: %s' % (layer.fetcher.last_error, )]

    errors = []
    for check, value in ((check_layers, layer.config.layers), (check_srs, layer.srs_name)):
        try:
            check(value, layer.capabilities)
        except WMSLayerError as ex:
            errors.append(str(ex))
    return errors


def tile_url_command(args=None):
    parser = optparse.OptionParser("%prog tile-url [options] Z X Y",
        description="Print the WMS 1.1.1 GetMap URL of a tile.")
    parser.add_option("-f", "--config", dest="config_file",
        help="layer configuration (YAML)")
    parser.add_option("--url", dest="url", help="base URL of the WMS")
    parser.add_option("--layers", dest="layers",
        help="comma separated list of layers")
    parser.add_option("--srs", dest="srs", default=None, help="SRS of the request")
    parser.add_option("--format", dest="format", default=None,
        help="image format of the request")
    parser.add_option("--validate", dest="validate", action="store_true", default=False,
        help="check layers and SRS against the capabilities of the service")
    parser.add_option("--timeout", dest="timeout", type="float", default=30.0,
        help="max seconds to wait for the capabilities (with --validate)")

    if args:
        args = args[1:] # remove script name

    (options, args) = parser.parse_args(args)
    if len(args) != 3:
        parser.print_help()
        sys.exit(2)

    if not options.config_file and not options.url:
        log_error('ERROR: --config or --url required')
        sys.exit(2)

    try:
        z, x, y = parse_tile_coord(args)
    except ValueError as ex:
        log_error('ERROR: %s', ex)
        sys.exit(2)

    try:
        conf = service_config(options)
    except InvalidConfig as ex:
        log_error('ERROR: %s', ex)
        sys.exit(2)

    view = MapView(zoom=z)
    layer = WMSTileLayer(view, base_url=conf.base_url, layers=conf.layers,
                         srs=conf.srs_name, format=conf.format)

    if options.validate:
        errors = validate_layer(layer, options.timeout)
        if errors:
            for error in errors:
                log_error('ERROR: %s', error)
            sys.exit(1)

    print(layer.get_tile_url(x, y, z))
