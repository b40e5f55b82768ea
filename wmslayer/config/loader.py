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
Configuration loading of a tile layer from a YAML file.
"""
import os

from wmslayer.config.config import base_config, finish_base_config, load_config
from wmslayer.config.service import ServiceConfig
from wmslayer.config.validator import validate
from wmslayer.exception import InvalidConfig
from wmslayer.util.yaml import load_yaml_file, YAMLError

import logging
log = logging.getLogger('wmslayer.config')


GLOBAL_SECTIONS = ('http', 'grid', 'wms')


def load_configuration(layer_conf):
    """
    Load the layer configuration from the YAML file `layer_conf`.

    The ``http``, ``grid`` and ``wms`` sections are merged into the
    `base_config`.

    :raises InvalidConfig: with all errors of the file
    :rtype: `ServiceConfig`
    """
    log.info('reading: %s', layer_conf)
    try:
        conf_dict = load_yaml_file(layer_conf)
    except (YAMLError, OSError) as ex:
        raise InvalidConfig(ex)

    errors = validate(conf_dict)
    for error in errors:
        log.warning(error)
    if errors:
        raise InvalidConfig('invalid configuration in %s: %s' % (layer_conf, '; '.join(errors)))

    global_dict = dict((k, conf_dict[k]) for k in GLOBAL_SECTIONS if k in conf_dict)
    if global_dict:
        bc = base_config()
        load_config(bc, config_dict=global_dict)
        bc.conf_base_dir = os.path.abspath(os.path.dirname(layer_conf))
        finish_base_config(bc)

    layer = conf_dict['layer']
    return ServiceConfig(
        base_url=layer['base_url'],
        layers=layer.get('layers'),
        srs=layer.get('srs'),
        format=layer.get('format'),
    )
