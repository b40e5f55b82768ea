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
Background tasks with results handed back to a single owner thread.

Workers never touch the state of their owner. They post a callback with
an `AsyncResult` to a `Dispatcher` and the owner runs it from
`Dispatcher.process`.
"""

import queue
import sys
import threading

import logging
log_system = logging.getLogger('wmslayer.system')


class AsyncResult(object):
    def __init__(self, result=None, exception=None):
        self.result = result
        self.exception = exception

    @property
    def failed(self):
        return self.exception is not None

    def __repr__(self):
        return "<AsyncResult result='%s' exception='%s'>" % (
            self.result, self.exception)


class Dispatcher(object):
    """
    Single-consumer queue of callbacks.

    `dispatch` can be called from any thread, `process` must only be called
    from the owner thread.
    """
    def __init__(self):
        self._queue = queue.Queue()

    def dispatch(self, func, *args):
        self._queue.put((func, args))

    def process(self, block=False, timeout=None):
        """
        Run all queued callbacks. Returns the number of callbacks.

        :param block: wait up to `timeout` seconds for the first callback
        """
        processed = 0
        while True:
            try:
                if block and processed == 0:
                    func, args = self._queue.get(timeout=timeout)
                else:
                    func, args = self._queue.get(block=False)
            except queue.Empty:
                return processed
            func(*args)
            processed += 1


class ThreadWorker(threading.Thread):
    """
    Runs `func(*args)` once and dispatches `callback(AsyncResult)`.
    """
    def __init__(self, func, args, callback, dispatcher, name=None):
        threading.Thread.__init__(self, name=name)
        self.daemon = True
        self.func = func
        self.args = args
        self.callback = callback
        self.dispatcher = dispatcher

    def run(self):
        try:
            result = AsyncResult(result=self.func(*self.args))
        except Exception:
            exc_info = sys.exc_info()
            log_system.debug('task %s failed', self.name, exc_info=exc_info)
            result = AsyncResult(exception=exc_info[1])
        self.dispatcher.dispatch(self.callback, result)


def run_non_blocking(func, args, callback, dispatcher, name=None):
    """
    Start `func` on a worker thread, `callback` receives the `AsyncResult`
    on the owner thread.
    """
    worker = ThreadWorker(func, args, callback, dispatcher, name=name)
    worker.start()
    return worker


def run_blocking(func, args, callback, dispatcher, name=None):
    """
    Same contract as `run_non_blocking`, but runs `func` in the calling
    thread. The callback is still delivered through the `dispatcher`.
    """
    try:
        result = AsyncResult(result=func(*args))
    except Exception as ex:
        result = AsyncResult(exception=ex)
    dispatcher.dispatch(callback, result)
