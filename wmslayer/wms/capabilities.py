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
Parser for WMS 1.1.1 capabilities documents.

The parsed document is made of immutable values and can be handed from
a worker thread to the owner of a layer without copying.
"""
import re
from collections import namedtuple

from xml.etree import ElementTree as etree

from wmslayer.exception import DecodeFailed


Contact = namedtuple('Contact', [
    'person', 'organization', 'position', 'address', 'city', 'postcode',
    'country', 'phone', 'fax', 'email',
])

ServiceMetadata = namedtuple('ServiceMetadata', [
    'name', 'title', 'abstract', 'fees', 'access_constraints',
    'online_resource', 'contact',
])

Layer = namedtuple('Layer', [
    'name', 'title', 'abstract', 'srs', 'llbbox', 'queryable', 'opaque', 'layers',
])
Layer.__doc__ = """
A layer of the layer tree. `srs` contains the inherited codes of all
parent layers, `layers` is a tuple of child layers. Layers without a
`name` only group other layers and can't be requested.
"""


class CapabilitiesDocument(object):
    """
    Parsed capabilities of a WMS.

    :ivar version: version of the document, e.g. ``1.1.1``
    :ivar service: `ServiceMetadata`
    :ivar root_layer: top `Layer` of the layer tree, or None
    :ivar supported_srs: frozenset of the SRS codes of the root layer
    :ivar requests: dict with the ``GetMap`` URL and image formats
    """
    def __init__(self, version, service, root_layer, requests=None):
        self.version = version
        self.service = service
        self.root_layer = root_layer
        if root_layer is not None:
            self.supported_srs = root_layer.srs
        else:
            self.supported_srs = frozenset()
        self.requests = requests or {}

    def iter_layers(self):
        """
        Iterate over all layers of the tree, depth first.
        """
        if self.root_layer is None:
            return
        stack = [self.root_layer]
        while stack:
            layer = stack.pop()
            yield layer
            stack.extend(reversed(layer.layers))

    def layers_list(self):
        """
        Return all named layers in document order.
        """
        return [layer for layer in self.iter_layers() if layer.name]

    def layer_names(self):
        return [layer.name for layer in self.layers_list()]

    def find_layer(self, name):
        for layer in self.iter_layers():
            if layer.name == name:
                return layer
        return None

    def __repr__(self):
        return '<CapabilitiesDocument version=%s title=%r layers=%d>' % (
            self.version, self.service.title, len(self.layers_list()))


xpath_elem = re.compile(r'(^|/)([^/]+:)?([^/]+)')


def resolve_ns(xpath, namespaces, default=None):
    """
    Resolve namespaces in xpath to absolute URL as required by etree.

    >>> resolve_ns('Service/OnlineResource', {})
    'Service/OnlineResource'
    >>> resolve_ns('xlink:href', {'xlink': 'http://www.w3.org/1999/xlink'})
    '{http://www.w3.org/1999/xlink}href'
    """
    def repl(match):
        ns = match.group(2)
        if ns:
            abs_ns = namespaces.get(ns[:-1], default)
        else:
            abs_ns = default

        if not abs_ns:
            return '%s%s' % (match.group(1), match.group(3))
        else:
            return '%s{%s}%s' % (match.group(1), abs_ns, match.group(3))

    return xpath_elem.sub(repl, xpath)


class WMS111CapabilitiesParser(object):
    version = '1.1.1'
    root_tag = 'WMT_MS_Capabilities'

    _default_namespace = None
    _namespaces = {
        'xlink': 'http://www.w3.org/1999/xlink',
    }

    def __init__(self, tree):
        self.tree = tree

    def resolve_ns(self, xpath):
        return resolve_ns(xpath, self._namespaces, self._default_namespace)

    def findtext(self, tree, xpath):
        text = tree.findtext(self.resolve_ns(xpath))
        if text is not None:
            text = text.strip()
        return text

    def find(self, tree, xpath):
        return tree.find(self.resolve_ns(xpath))

    def findall(self, tree, xpath):
        return tree.findall(self.resolve_ns(xpath))

    def attrib(self, elem, name):
        return elem.attrib.get(self.resolve_ns(name))

    def document(self):
        root_elem = self.find(self.tree, 'Capability/Layer')
        if root_elem is not None:
            root_layer = self.parse_layer(root_elem, None)
        else:
            root_layer = None
        version = self.tree.attrib.get('version') or self.version
        return CapabilitiesDocument(version, self.metadata(), root_layer, self.requests())

    def metadata(self):
        online_resource = None
        elem = self.find(self.tree, 'Service/OnlineResource')
        if elem is not None:
            online_resource = self.attrib(elem, 'xlink:href')

        return ServiceMetadata(
            name=self.findtext(self.tree, 'Service/Name'),
            title=self.findtext(self.tree, 'Service/Title'),
            abstract=self.findtext(self.tree, 'Service/Abstract'),
            fees=self.findtext(self.tree, 'Service/Fees'),
            access_constraints=self.findtext(self.tree, 'Service/AccessConstraints'),
            online_resource=online_resource,
            contact=self.parse_contact(),
        )

    def parse_contact(self):
        elem = self.find(self.tree, 'Service/ContactInformation')
        if elem is None:
            elem = etree.Element('ContactInformation')
        return Contact(
            person=self.findtext(elem, 'ContactPersonPrimary/ContactPerson'),
            organization=self.findtext(elem, 'ContactPersonPrimary/ContactOrganization'),
            position=self.findtext(elem, 'ContactPosition'),
            address=self.findtext(elem, 'ContactAddress/Address'),
            city=self.findtext(elem, 'ContactAddress/City'),
            postcode=self.findtext(elem, 'ContactAddress/PostCode'),
            country=self.findtext(elem, 'ContactAddress/Country'),
            phone=self.findtext(elem, 'ContactVoiceTelephone'),
            fax=self.findtext(elem, 'ContactFacsimileTelephone'),
            email=self.findtext(elem, 'ContactElectronicMailAddress'),
        )

    def requests(self):
        requests = {}
        requests_elem = self.find(self.tree, 'Capability/Request')
        if requests_elem is None:
            return requests
        get_map = self.find(requests_elem, 'GetMap')
        if get_map is not None:
            resource = self.find(get_map, 'DCPType/HTTP/Get/OnlineResource')
            if resource is not None:
                requests['GetMap'] = self.attrib(resource, 'xlink:href')
            requests['GetMap.formats'] = tuple(
                e.text.strip() for e in self.findall(get_map, 'Format') if e.text)
        return requests

    def parse_layer(self, layer_elem, parent_layer):
        srs = self.layer_srs(layer_elem, parent_layer)
        llbbox = self.layer_llbbox(layer_elem, parent_layer)
        # child layers inherit SRS and bbox, pass a partial layer down
        partial = Layer(None, None, None, srs, llbbox, False, False, ())
        child_layers = tuple(
            self.parse_layer(child_elem, partial)
            for child_elem in self.findall(layer_elem, 'Layer')
        )
        return Layer(
            name=self.findtext(layer_elem, 'Name'),
            title=self.findtext(layer_elem, 'Title'),
            abstract=self.findtext(layer_elem, 'Abstract'),
            srs=srs,
            llbbox=llbbox,
            queryable=layer_elem.attrib.get('queryable') == '1',
            opaque=layer_elem.attrib.get('opaque') == '1',
            layers=child_layers,
        )

    def layer_llbbox(self, elem, parent_layer):
        llbbox_elem = self.find(elem, 'LatLonBoundingBox')
        llbbox = None
        if llbbox_elem is not None:
            try:
                llbbox = tuple(float(llbbox_elem.attrib[k])
                               for k in ('minx', 'miny', 'maxx', 'maxy'))
            except (KeyError, ValueError) as ex:
                raise DecodeFailed('invalid LatLonBoundingBox: %s' % (ex, ))
        elif parent_layer is not None:
            llbbox = parent_layer.llbbox
        return llbbox

    def layer_srs(self, elem, parent_layer):
        srs_codes = set()
        for srs in self.findall(elem, 'SRS'):
            if not srs.text:
                continue
            # multiple codes in one SRS tag (WMS 1.1.1 7.1.4.5.5)
            srs_codes.update(srs.text.strip().upper().split())

        if parent_layer is not None:
            srs_codes.update(parent_layer.srs)
        return frozenset(srs_codes)


def parse_capabilities(fileobj):
    """
    Parse a WMS 1.1.1 capabilities document.

    :param fileobj: file object, filename or the document as bytes
    :raises DecodeFailed: for malformed documents and other versions
    :rtype: `CapabilitiesDocument`
    """
    if isinstance(fileobj, bytes):
        try:
            root = etree.fromstring(fileobj)
        except etree.ParseError as ex:
            raise DecodeFailed('unable to parse capabilities: %s' % (ex, ))
    else:
        try:
            root = etree.parse(fileobj).getroot()
        except etree.ParseError as ex:
            raise DecodeFailed('unable to parse capabilities: %s' % (ex, ))

    if root.tag != WMS111CapabilitiesParser.root_tag:
        raise DecodeFailed('unknown start tag in capabilities: ' + root.tag)
    return WMS111CapabilitiesParser(root).document()
