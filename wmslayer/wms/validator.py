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
Checks of the layer configuration against the capabilities of a service.

Both checks pass when no capabilities are known. They only raise, a
failed check never changes the configuration.
"""

from wmslayer.config.service import split_layers
from wmslayer.exception import UnknownLayer, UnsupportedSRS


def check_layers(layers, doc):
    """
    Check that each layer in `layers` is a named layer of `doc`.

    :param layers: list of layer names or comma separated string
    :param doc: `CapabilitiesDocument` or None
    :raises UnknownLayer: for the first layer that is not in `doc`
    """
    if doc is None or doc.root_layer is None:
        return
    known = set(doc.layer_names())
    for name in split_layers(layers):
        if name not in known:
            raise UnknownLayer(name)


def check_srs(srs_name, doc):
    """
    Check that `srs_name` is supported by the root layer of `doc`.

    :raises UnsupportedSRS: if the SRS is not in ``doc.supported_srs``
    """
    if doc is None or not doc.supported_srs:
        return
    if srs_name.upper() not in doc.supported_srs:
        raise UnsupportedSRS(srs_name)
