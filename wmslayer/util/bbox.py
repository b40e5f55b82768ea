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

from decimal import Decimal


def format_coord(value):
    """
    Shortest string that reads back as the same float, never in
    exponent notation.

    >>> format_coord(53.0676266423887)
    '53.0676266423887'
    >>> format_coord(3.346485212890511e-14)
    '0.00000000000003346485212890511'
    >>> format_coord(-1e+16)
    '-10000000000000000'
    """
    value = repr(float(value))
    if 'e' in value:
        value = format(Decimal(value), 'f')
    return value


def format_bbox(bbox):
    """
    Serialize a bbox for a WMS request without losing precision.

    >>> format_bbox((-180.0, -85.05112877980659, 180, 85.0511287798066))
    '-180.0,-85.05112877980659,180.0,85.0511287798066'
    >>> format_bbox((0, 1e-05, 180, 90))
    '0.0,0.00001,180.0,90.0'
    """
    return ','.join(format_coord(x) for x in bbox)
