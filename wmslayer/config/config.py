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
System-wide configuration.
"""
import os
import copy
import contextlib

from werkzeug.local import LocalStack

from wmslayer.util.yaml import load_yaml_file


class Options(dict):
    """
    Dictionary with attribute style access.

    >>> o = Options(bar='foo')
    >>> o.bar
    'foo'
    """
    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, dict.__repr__(self))

    def __getattr__(self, name):
        if name in self:
            return self[name]
        else:
            raise AttributeError(name)

    __setattr__ = dict.__setitem__

    def update(self, other=None, **kw):
        if other is not None:
            if hasattr(other, 'items'):
                it = other.items()
            else:
                it = iter(other)
        else:
            it = kw.items()
        for key, value in it:
            if key in self and isinstance(self[key], Options):
                self[key].update(value)
            else:
                self[key] = value

    def __deepcopy__(self, memo):
        return Options(copy.deepcopy(list(self.items()), memo))


_config = LocalStack()


def base_config():
    """
    Returns the thread-local configuration. Loads the defaults if the
    current thread has none.
    """
    config = _config.top
    if config is None:
        config = load_default_config()
        config.conf_base_dir = os.getcwd()
        finish_base_config(config)
        _config.push(config)
    return config


@contextlib.contextmanager
def local_base_config(conf):
    """
    Temporarily replace the configuration returned by `base_config` in
    the current thread.
    """
    _config.push(conf)
    try:
        yield
    finally:
        _config.pop()


def _to_options_map(mapping):
    if isinstance(mapping, dict):
        opt = Options()
        for key, value in mapping.items():
            opt[key] = _to_options_map(value)
        return opt
    elif isinstance(mapping, list):
        return [_to_options_map(m) for m in mapping]
    else:
        return mapping


def abspath(path, base_path=None):
    """
    Convert path to absolute path. Uses ``conf_base_dir`` as base, if
    path is relative and ``base_path`` is not set.
    """
    if base_path:
        return os.path.abspath(os.path.join(base_path, path))
    return os.path.join(base_config().conf_base_dir, path)


def finish_base_config(bc=None):
    bc = bc or base_config()
    if 'http' in bc and bc.http.get('ssl_ca_certs') and 'conf_base_dir' in bc:
        bc.http.ssl_ca_certs = abspath(bc.http.ssl_ca_certs, bc.conf_base_dir)


def load_base_config(config_file=None, config_dict=None, clear_existing=False):
    """
    Load system wide base configuration.

    :param config_file: the file name of a YAML configuration.
                        if ``None``, load the internal defaults
    :param clear_existing: if ``True`` remove the existing configuration settings,
                           else overwrite the settings.
    """
    if config_file is None:
        conf_base_dir = os.getcwd()
        if config_dict is None:
            config_dict = _defaults_dict()
        load_config(base_config(), config_dict=config_dict, clear_existing=clear_existing)
    else:
        conf_base_dir = os.path.abspath(os.path.dirname(config_file))
        load_config(base_config(), config_file=config_file, clear_existing=clear_existing)

    bc = base_config()
    bc.conf_base_dir = conf_base_dir
    finish_base_config(bc)


def _defaults_dict():
    from wmslayer.config import defaults
    config_dict = {}
    for k, v in defaults.__dict__.items():
        if k.startswith('_'): continue
        config_dict[k] = copy.deepcopy(v)
    return config_dict


def load_default_config():
    default_conf = Options()
    load_config(default_conf, config_dict=_defaults_dict())
    return default_conf


def load_config(config, config_file=None, config_dict=None, clear_existing=False):
    if clear_existing:
        for key in list(config.keys()):
            del config[key]

    if config_dict is None:
        config_dict = load_yaml_file(config_file)

    defaults = _to_options_map(config_dict)

    if defaults:
        for key, value in defaults.items():
            if key in config and hasattr(config[key], 'update'):
                config[key].update(value)
            else:
                config[key] = value
