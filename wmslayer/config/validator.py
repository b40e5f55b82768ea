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

import json
import os.path
from typing import Iterable

from jsonschema.exceptions import ValidationError
from jsonschema.validators import Draft202012Validator

from wmslayer.srs import SRS

import logging
log = logging.getLogger('wmslayer.config')


with open(os.path.join(os.path.dirname(__file__), 'config-schema.json')) as schema_file:
    schema = json.load(schema_file)


def get_error_messages(errors: Iterable[ValidationError]) -> list[str]:
    msgs = []
    for error in errors:
        path = error.json_path.replace('$', 'root')
        msg = f'{error.message} in {path}'
        msgs.append(msg)
        if error.context is not None:
            msgs += get_error_messages(error.context)
    return msgs


def validate(conf_dict: dict) -> list[str]:
    """
    Return all errors of the configuration `conf_dict`. An empty list
    means the configuration is valid.
    """
    validator = Draft202012Validator(schema=schema)
    errors = get_error_messages(validator.iter_errors(conf_dict))
    if errors:
        return errors

    return _validate_srs(conf_dict)


def _validate_srs(conf_dict: dict) -> list[str]:
    errors = []
    srs_values = [
        ('layer.srs', conf_dict.get('layer', {}).get('srs')),
        ('grid.geographic_srs', conf_dict.get('grid', {}).get('geographic_srs')),
        ('grid.planar_srs', conf_dict.get('grid', {}).get('planar_srs')),
    ]
    for path, srs_code in srs_values:
        if srs_code is None:
            continue
        try:
            SRS(srs_code)
        except ValueError as ex:
            errors.append(f'{ex} in root.{path}')
    return errors
