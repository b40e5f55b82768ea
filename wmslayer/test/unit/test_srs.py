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

import pytest

from wmslayer.srs import SRS, CoordinateTransform, get_epsg_num


class TestSRS(object):
    def test_epsg_code(self):
        assert SRS(4326).srs_code == 'EPSG:4326'
        assert SRS('epsg:3857').srs_code == 'EPSG:3857'
        assert get_epsg_num('EPSG:25832') == 25832

    def test_cached(self):
        assert SRS(4326) is SRS('EPSG:4326')

    def test_webmercator_aliases(self):
        assert SRS(900913) == SRS(3857)

    def test_unknown(self):
        with pytest.raises(ValueError):
            SRS('EPSG:99999999')

    def test_transform_list(self):
        points = SRS(4326).transform_to(SRS(3857), [(0.0, 0.0), (180.0, 0.0)])
        assert points[0] == pytest.approx((0.0, 0.0), abs=1e-6)
        assert points[1] == pytest.approx((20037508.342789244, 0.0), abs=1e-6)


class TestCoordinateTransform(object):
    def test_round_trip(self):
        t = CoordinateTransform()
        planar = t.to_planar((8.22, 53.15))
        assert planar == pytest.approx((915046.21432, 7010792.20171), abs=1e-3)
        assert t.to_geographic(planar) == pytest.approx((8.22, 53.15))

    def test_returns_tuples(self):
        t = CoordinateTransform('EPSG:4326', 'EPSG:3857')
        assert isinstance(t.to_planar([0.0, 0.0]), tuple)
        assert isinstance(t.to_geographic([0.0, 0.0]), tuple)
