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
Layer errors (configuration, capabilities retrieval, validation).
"""


class WMSLayerError(Exception):
    """
    Base class for all errors raised by the WMS tile layer.
    """
    pass


class InvalidConfig(WMSLayerError, ValueError):
    """
    Rejected configuration value. Raised by the setter, before any
    network activity.
    """
    pass


class FetchFailed(WMSLayerError):
    """
    The GetCapabilities request failed (transport error, HTTP error status).

    :ivar url: the requested URL
    :ivar response_code: the HTTP status if the server answered
    """
    def __init__(self, message, url=None, response_code=None):
        WMSLayerError.__init__(self, message)
        self.url = url
        self.response_code = response_code


class DecodeFailed(WMSLayerError):
    """
    The capabilities response is not a WMS 1.1.1 capabilities document.
    """
    pass


class ValidationError(WMSLayerError, ValueError):
    """
    A configured value is not offered by the service.

    :ivar name: the offending layer or SRS name
    """
    def __init__(self, message, name):
        WMSLayerError.__init__(self, message)
        self.name = name


class UnknownLayer(ValidationError):
    def __init__(self, name):
        ValidationError.__init__(self, "layer '%s' doesn't exist" % (name, ), name)


class UnsupportedSRS(ValidationError):
    def __init__(self, name):
        ValidationError.__init__(self, "SRS '%s' isn't supported" % (name, ), name)
