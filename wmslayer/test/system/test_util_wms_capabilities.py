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

import os

import pytest

from wmslayer.script.wms_capabilities import wms_capabilities_command
from wmslayer.test.helper import capture
from wmslayer.test.http import mock_httpd


TESTSERVER_ADDRESS = ("127.0.0.1", 56424)
TESTSERVER_URL = "http://%s:%s" % TESTSERVER_ADDRESS
CAPABILITIES111_FILE = os.path.join(
    os.path.dirname(__file__), "fixture", "util_wms_capabilities111.xml"
)
CAPABILITIES130_FILE = os.path.join(
    os.path.dirname(__file__), "fixture", "util_wms_capabilities130.xml"
)
CAPABILITIES_PATH = "/service?SERVICE=WMS&REQUEST=GetCapabilities&VERSION=1.1.1"


class TestUtilWMSCapabilities(object):

    def setup_method(self):
        self.args = ["command_dummy", "--host", TESTSERVER_URL + "/service"]

    def test_http_error(self):
        self.args = ["command_dummy", "--host", "http://foo.doesnotexist"]
        with capture() as (out, err):
            with pytest.raises(SystemExit):
                wms_capabilities_command(self.args)
        assert err.getvalue().startswith("ERROR:")

        self.args[2] = "/no/valid/url"
        with capture() as (out, err):
            with pytest.raises(SystemExit):
                wms_capabilities_command(self.args)
        assert err.getvalue().startswith("ERROR:")

    def test_request_not_parsable(self):
        with mock_httpd(
            TESTSERVER_ADDRESS,
            [({"path": CAPABILITIES_PATH, "method": "GET"}, {"status": "200", "body": b""})],
        ):
            with capture() as (out, err):
                with pytest.raises(SystemExit) as exc:
                    wms_capabilities_command(self.args)
        assert exc.value.code == 1
        error_msg = err.getvalue().rsplit("-" * 80, 1)[1].strip()
        assert error_msg.startswith("Not a capabilities document")

    def test_wms_130_rejected(self):
        with mock_httpd(
            TESTSERVER_ADDRESS,
            [({"path": CAPABILITIES_PATH}, {"status": "200", "body_file": CAPABILITIES130_FILE})],
        ):
            with capture() as (out, err):
                with pytest.raises(SystemExit):
                    wms_capabilities_command(self.args)
        assert "unknown start tag" in err.getvalue()

    def test_parse_capabilities(self):
        self.args = ["command_dummy", TESTSERVER_URL + "/service?REQUEST=GetMap&map=foo"]
        with mock_httpd(
            TESTSERVER_ADDRESS,
            [({"path": "/service?map=foo&SERVICE=WMS&REQUEST=GetCapabilities&VERSION=1.1.1"},
              {"status": "200", "body_file": CAPABILITIES111_FILE})],
        ):
            with capture() as (out, err):
                wms_capabilities_command(self.args)

        lines = out.getvalue().split("\n")
        assert lines[0] == "Capabilities Document Version 1.1.1"
        assert "    title: Roads and Rivers" in lines
        assert "        person: Jane Doe" in lines
        assert "Root-Layer:" in lines
        assert "  - title: Root Layer" in lines
        assert "      - name: roads" in lines
        assert "          - name: rivers" in lines
        assert "        srs: ['EPSG:25832', 'EPSG:3857', 'EPSG:4326', 'EPSG:900913']" in lines

    def test_missing_url(self):
        with capture() as (out, err):
            with pytest.raises(SystemExit) as exc:
                wms_capabilities_command(["command_dummy"])
        assert exc.value.code == 2
