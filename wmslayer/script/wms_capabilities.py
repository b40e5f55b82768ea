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

from urllib.parse import urlparse, parse_qsl

from wmslayer.client.http import open_url, HTTPClientError
from wmslayer.exception import DecodeFailed
from wmslayer.request.base import BaseRequest
from wmslayer.request.wms import WMS111CapabilitiesRequest
from wmslayer.wms.capabilities import parse_capabilities


class PrettyPrinter(object):
    def __init__(self, indent=4, version='1.1.1'):
        self.indent = indent
        self.print_order = ['name', 'title', 'abstract', 'srs', 'llbbox', 'queryable', 'opaque']
        self.marker = '- '
        self.version = version

    def print_line(self, indent, key, value=None, mark_first=False):
        marker = ''
        if value is None:
            value = ''
        if mark_first:
            indent = indent - len(self.marker)
            marker = self.marker
        print(("%s%s%s: %s" % (' '*indent, marker, key, value)))

    def _format_output(self, key, value, indent, mark_first=False):
        if isinstance(value, (set, frozenset)):
            value = sorted(value)
        elif isinstance(value, tuple):
            value = list(value)
        self.print_line(indent, key, value=value, mark_first=mark_first)

    def print_service(self, doc):
        print('Capabilities Document Version %s' % (doc.version, ))
        print('Service:')
        for key, value in doc.service._asdict().items():
            if key == 'contact' or not value:
                continue
            self.print_line(self.indent, key, value)
        contact = [(k, v) for k, v in doc.service.contact._asdict().items() if v]
        if contact:
            self.print_line(self.indent, 'contact')
            for key, value in contact:
                self.print_line(self.indent*2, key, value)

    def print_layers(self, capabilities, indent=None, root=False):
        if root:
            self.print_service(capabilities)
            print('Root-Layer:')
            if capabilities.root_layer is None:
                return
            layer_list = [capabilities.root_layer]
        else:
            layer_list = capabilities.layers

        indent = indent or self.indent
        for layer in layer_list:
            marked_first = False
            for item in self.print_order:
                value = getattr(layer, item)
                if value:
                    self._format_output(item, value, indent, mark_first=not marked_first)
                    marked_first = True
            if layer.layers:
                self.print_line(indent, 'layers')
                self.print_layers(layer, indent=indent+self.indent)


def log_error(msg, *args):
    print(msg % args, file=sys.stderr)


def wms_capabilities_url(url):
    """
    Return the GetCapabilities URL for `url`. Other query parameters of
    `url` are kept.

    >>> wms_capabilities_url('http://example.org/service?map=foo&REQUEST=GetMap')
    'http://example.org/service?map=foo&SERVICE=WMS&REQUEST=GetCapabilities&VERSION=1.1.1'
    """
    base_url = url.split('?', 1)[0]
    params = [
        (key, value) for key, value in parse_qsl(urlparse(url).query, keep_blank_values=True)
        if key.lower() not in ('service', 'request', 'version')
    ]
    if params:
        base_url = BaseRequest(params, url=base_url).complete_url
    return WMS111CapabilitiesRequest(base_url).complete_url


def parse_capabilities_url(url):
    try:
        capabilities_url = wms_capabilities_url(url)
        capabilities_response = open_url(capabilities_url)
        body = capabilities_response.read()
    except HTTPClientError as ex:
        log_error('ERROR: %s', ex.args[0])
        sys.exit(1)

    try:
        return parse_capabilities(body)
    except DecodeFailed as ex:
        log_error('%s\n%s\n%s\n%s\nNot a capabilities document: %s', 'Received document:',
                  '-'*80, body.decode('utf-8', 'replace'), '-'*80, ex.args[0])
        sys.exit(1)


def wms_capabilities_command(args=None):
    parser = optparse.OptionParser("%prog wms-capabilities [options] URL",
        description="Read and parse WMS 1.1.1 capabilities and print out"
        " information about the service and each layer.")
    parser.add_option("--host", dest="capabilities_url",
        help="WMS Capabilites URL")

    if args:
        args = args[1:] # remove script name

    (options, args) = parser.parse_args(args)
    if not options.capabilities_url:
        if len(args) != 1:
            parser.print_help()
            sys.exit(2)
        else:
            options.capabilities_url = args[0]

    doc = parse_capabilities_url(options.capabilities_url)
    printer = PrettyPrinter(indent=4, version=doc.version)
    printer.print_layers(doc, root=True)
