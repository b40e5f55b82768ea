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

wms = dict(
    srs = 'EPSG:4326',
    format = 'image/png',
)

grid = dict(
    tile_resolution = 256,
    geographic_srs = 'EPSG:4326',
    planar_srs = 'EPSG:3857',
)

http = dict(
    ssl_ca_certs = None,
    ssl_no_cert_checks = False,
    # None uses the transport default
    client_timeout = None,
    headers = {},
)
