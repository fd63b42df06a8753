import logging

from os import environ, path

import yaml

import rdfxml

logger = logging.getLogger(__name__)

default_config_dir = environ.get(
        'RDFXML_CONFIG_DIR', path.join(rdfxml.basedir, 'etc.defaults'))
"""
Default configuration directory.

This value falls back to the provided ``etc.defaults`` directory if the
``RDFXML_CONFIG_DIR`` environment variable is not set.

This value can still be overridden by custom applications by passing the
``config_dir`` value to :func:`parse_config` explicitly.
"""


def parse_config(config_dir=None):
    """
    Parse configuration from a directory.

    The directory must have the same structure as the one provided in
    ``etc.defaults``.

    :param config_dir: Location on the filesystem of the configuration
        directory. The default is set by the ``RDFXML_CONFIG_DIR`` environment
        variable or, if this is not set, the ``etc.defaults`` stock directory.

    :rtype: dict
    """
    configs = (
        'application',
        'logging',
        'namespaces',
    )

    if not config_dir:
        config_dir = default_config_dir

    # This will hold a dict of all configuration values.
    _config = {}

    logger.debug(f'Reading configuration at {config_dir}')

    for cname in configs:
        fname = path.join(config_dir, f'{cname}.yml')
        with open(fname, 'r') as fh:
            _config[cname] = yaml.load(fh, yaml.SafeLoader) or {}

    # Fill in missing application values so that a partial custom
    # configuration still works.
    app_conf = _config['application']
    app_conf.setdefault('parser', {})
    app_conf['parser'].setdefault('max_workers', None)
    app_conf['parser'].setdefault('blank_node_start', 0)
    app_conf.setdefault('writer', {})
    app_conf['writer'].setdefault('indent', '  ')

    logger.debug('Parser workers: {}'.format(
        app_conf['parser']['max_workers']))

    return _config
