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
Retrieval of WMS capabilities in the background.

`CapabilityFetcher` is owned by a single thread. The request and the
parsing run on worker threads, their results are handed back through
the owner's `Dispatcher`, so all state changes happen in the thread
that calls `Dispatcher.process`.

::

    IDLE -> FETCHING -> PARSING -> READY
                     \\-> FAILED

READY and FAILED accept new fetches like IDLE. A fetch that can't decode
the document still ends in READY, with ``document`` set to None.
"""
import sys

from wmslayer.client.http import HTTPClient, HTTPClientError, auth_data_from_url
from wmslayer.exception import FetchFailed, DecodeFailed
from wmslayer.request.wms import WMS111CapabilitiesRequest
from wmslayer.util.async_ import run_non_blocking
from wmslayer.util.py import reraise_exception
from wmslayer.wms.capabilities import parse_capabilities

import logging
log = logging.getLogger('wmslayer.capabilities')


IDLE = 'idle'
FETCHING = 'fetching'
PARSING = 'parsing'
READY = 'ready'
FAILED = 'failed'


class CapabilityFetcher(object):
    """
    Fetches and parses the capabilities of one service at a time.

    :param dispatcher: `Dispatcher` of the owner thread
    :param http_client: client with a ``read(url)`` method, by default an
        `HTTPClient` with the credentials of the base URL is used
    :param on_ready: called with the new document (or None) after parsing
    :param on_failure: called with the `FetchFailed` error
    :param runner: `run_non_blocking` or `run_blocking`
    """
    def __init__(self, dispatcher, http_client=None, on_ready=None, on_failure=None,
                 runner=run_non_blocking):
        self.dispatcher = dispatcher
        self.http_client = http_client
        self.on_ready = on_ready
        self.on_failure = on_failure
        self.runner = runner
        self.state = IDLE
        self.document = None
        self.last_error = None
        self.url = None

    @property
    def in_flight(self):
        return self.state in (FETCHING, PARSING)

    def start(self, base_url):
        """
        Request the capabilities of `base_url`.

        Returns False and does nothing if a fetch is already in flight.
        """
        if self.in_flight:
            log.debug('capabilities request for %s already in flight', self.url)
            return False

        base_url, (username, password) = auth_data_from_url(base_url)
        self.url = WMS111CapabilitiesRequest(base_url).complete_url
        http_client = self.http_client or HTTPClient(self.url, username, password)
        self.last_error = None
        self.state = FETCHING
        log.debug('requesting capabilities from %s', self.url)
        self.runner(self._fetch, (http_client, self.url), self._on_fetched, self.dispatcher,
                    name='capabilities-fetch')
        return True

    def _fetch(self, http_client, url):
        try:
            return http_client.read(url)
        except HTTPClientError as ex:
            reraise_exception(
                FetchFailed(str(ex), url=url, response_code=ex.response_code),
                sys.exc_info())
        except (OSError, ValueError) as ex:
            reraise_exception(FetchFailed(str(ex), url=url), sys.exc_info())

    def _decode(self, body):
        try:
            return parse_capabilities(body)
        except DecodeFailed:
            raise
        except Exception as ex:
            reraise_exception(DecodeFailed('unable to parse capabilities: %r' % (ex, )),
                              sys.exc_info())

    def _on_fetched(self, result):
        if result.failed:
            err = result.exception
            if not isinstance(err, FetchFailed):
                err = FetchFailed(str(err), url=self.url)
            self.state = FAILED
            self.last_error = err
            # existing document stays valid
            log.warning('unable to fetch capabilities: %s', err)
            if self.on_failure:
                self.on_failure(err)
            return

        self.state = PARSING
        self.runner(self._decode, (result.result, ), self._on_decoded, self.dispatcher,
                    name='capabilities-decode')

    def _on_decoded(self, result):
        if result.failed:
            self.last_error = result.exception
            self.document = None
            log.warning('invalid capabilities from %s: %s', self.url, result.exception)
        else:
            self.document = result.result
            log.info('capabilities from %s: %d layers, %d SRS', self.url,
                     len(self.document.layers_list()), len(self.document.supported_srs))
        self.state = READY
        if self.on_ready:
            self.on_ready(self.document)

    def __repr__(self):
        return '<CapabilityFetcher state=%s url=%r>' % (self.state, self.url)
