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

import threading

from wmslayer.util.async_ import Dispatcher, run_blocking, run_non_blocking


class TestDispatcher(object):
    def test_process_in_order(self):
        d = Dispatcher()
        result = []
        d.dispatch(result.append, 1)
        d.dispatch(result.append, 2)
        assert d.process() == 2
        assert result == [1, 2]
        assert d.process() == 0

    def test_process_empty(self):
        assert Dispatcher().process() == 0
        assert Dispatcher().process(block=True, timeout=0.01) == 0


class TestRunner(object):
    def test_blocking(self):
        d = Dispatcher()
        results = []
        run_blocking(lambda a, b: a + b, (1, 2), results.append, d)
        assert results == []
        d.process()
        assert len(results) == 1
        assert results[0].result == 3
        assert not results[0].failed

    def test_blocking_exception(self):
        d = Dispatcher()
        results = []
        run_blocking(lambda: 1/0, (), results.append, d)
        d.process()
        assert results[0].failed
        assert isinstance(results[0].exception, ZeroDivisionError)

    def test_non_blocking_runs_callback_in_owner_thread(self):
        d = Dispatcher()
        threads = []

        def work():
            threads.append(threading.current_thread())
            return 42

        results = []

        def callback(result):
            threads.append(threading.current_thread())
            results.append(result)

        worker = run_non_blocking(work, (), callback, d, name='test-worker')
        worker.join(5)
        assert d.process(block=True, timeout=5) == 1
        assert results[0].result == 42
        assert threads[0] is worker
        assert threads[1] is threading.current_thread()

    def test_non_blocking_exception(self):
        d = Dispatcher()
        results = []

        def work():
            raise ValueError('broken')

        run_non_blocking(work, (), results.append, d).join(5)
        d.process(block=True, timeout=5)
        assert isinstance(results[0].exception, ValueError)
