import logging

from os import path


logger = logging.getLogger(__name__)

version = '1.0 alpha'
release = '1.0.0a1'

basedir = path.dirname(path.realpath(__file__))
"""
Base directory for the module.

This can be used by modules looking for configuration and data files to be
referenced with a known path relative to the package root.

:rtype: str
"""

class Env:
    """
    rdfxml environment.

    Holds the configuration used by the parser, the writer and the admin
    command. The configuration is loaded lazily from the default directory
    if :meth:`setup` has not been called.
    """

    def setup(self, config_dir=None, config=None):
        """
        Set the environment up.

        This method will warn and not do anything if it has already been
        called in the same runtime environment.

        :param str config_dir: Path to a directory containing the
            configuration ``.yml`` files. If this and ``config`` are omitted,
            the configuration files are read from the default directory defined
            in :py:meth:`~rdfxml.config_parser.parse_config()`.

        :param dict config: Fully-formed configuration as a dictionary. If
            this is provided, ``config_dir`` is ignored.
        """
        if hasattr(self, '_config'):
            logger.warning('The environment is already set up.')
            return

        if not config:
            from .config_parser import parse_config
            config = parse_config(config_dir)

        self._config = config


    @property
    def config(self):
        """
        Current configuration.

        :rtype: dict
        """
        if not hasattr(self, '_config'):
            self.setup()

        return self._config


env = Env()
"""
Object for storing the global configuration.

e.g.::

    >>> from rdfxml import env
    >>> env.setup('/my/config/dir')
    >>> env.config['application']['writer']['indent']
    '  '

:rtype: Env
"""


from rdfxml.loader import load_from_path, load_from_reader
from rdfxml.writer.rdf_writer import triples_to_string, write_to_file

__all__ = [
    'env',
    'load_from_path',
    'load_from_reader',
    'triples_to_string',
    'write_to_file',
]
