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
import re
import sys
import tempfile
import logging
from contextlib import contextmanager
from io import StringIO


class TempFiles(object):
    """
    This class is a context manager for temporary files.

    >>> with TempFiles(n=2, suffix='.yaml') as tmp:
    ...     for f in tmp:
    ...         assert os.path.exists(f)
    >>> for f in tmp:
    ...     assert not os.path.exists(f)
    """
    def __init__(self, n=1, suffix='', no_create=False):
        self.n = n
        self.suffix = suffix
        self.no_create = no_create
        self.tmp_files = []

    def __enter__(self):
        for _ in range(self.n):
            fd, tmp_file = tempfile.mkstemp(suffix=self.suffix)
            os.close(fd)
            self.tmp_files.append(tmp_file)
            if self.no_create:
                os.remove(tmp_file)
        return self.tmp_files

    def __exit__(self, exc_type, exc_val, exc_tb):
        for tmp_file in self.tmp_files:
            if os.path.exists(tmp_file):
                os.remove(tmp_file)
        self.tmp_files = []


class TempFile(TempFiles):
    def __init__(self, suffix='', no_create=False):
        TempFiles.__init__(self, suffix=suffix, no_create=no_create)

    def __enter__(self):
        return TempFiles.__enter__(self)[0]


class LogMock(logging.Handler):
    """
    Collects the records of a logger.

    >>> log = logging.getLogger('wmslayer.test.helper')
    >>> with LogMock(log) as mock:
    ...     log.warning('Unable to connect')
    >>> mock.assert_log('warning', 'unable to')
    """
    def __init__(self, logger, level=logging.DEBUG):
        logging.Handler.__init__(self, level=level)
        self.logger = logger
        self.orig_level = None
        self.logged_msgs = []

    def __enter__(self):
        self.orig_level = self.logger.level
        self.logger.setLevel(self.level)
        self.logger.addHandler(self)
        return self

    def emit(self, record):
        self.logged_msgs.append((record.levelname.lower(), record.getMessage()))

    def assert_log(self, type, msg):
        assert self.logged_msgs, 'expected %s log message, but nothing was logged' % (type, )
        log_type, log_msg = self.logged_msgs.pop(0)
        assert log_type == type, 'expected %s log message, but was %s' % (type, log_type)
        assert msg in log_msg.lower(), "expected string '%s' in log message '%s'" % \
            (msg, log_msg)

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.removeHandler(self)
        self.logger.setLevel(self.orig_level)


def assert_re(value, regex):
    """
    >>> assert_re('hello', 'l+')
    >>> assert_re('hello', 'l{3}')
    Traceback (most recent call last):
        ...
    AssertionError: hello ~= l{3}
    """
    match = re.search(regex, value)
    assert match is not None, '%s ~= %s' % (value, regex)


@contextmanager
def capture():
    """
    Capture stdout and stderr.

    >>> with capture() as (out, err):
    ...     print('hello')
    >>> out.getvalue()
    'hello\\n'
    """
    backup_stdout = sys.stdout
    backup_stderr = sys.stderr
    out, err = StringIO(), StringIO()
    try:
        sys.stdout = out
        sys.stderr = err
        yield out, err
    except Exception:
        backup_stdout.write(out.getvalue())
        backup_stderr.write(err.getvalue())
        raise
    finally:
        sys.stdout = backup_stdout
        sys.stderr = backup_stderr
