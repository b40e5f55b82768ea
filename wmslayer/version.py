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

from importlib import metadata


def version_string():
    """
    Return the current version number of WMSLayer.
    """
    try:
        return metadata.version('WMSLayer')
    except metadata.PackageNotFoundError:
        return 'unknown_version'

__version__ = version = version_string()

if __name__ == '__main__':
    print(__version__)
