import logging

from rdfxml.parser.rdf_parser import Parser
from rdfxml.reader.xml_reader import BlockReader


logger = logging.getLogger(__name__)


def load_from_path(fpath, namespace_hints=None, **parser_opts):
    '''
    Parse an RDF/XML file.

    :param str fpath: Path to the file.
    :param dict namespace_hints: See
        :meth:`~rdfxml.parser.rdf_parser.Parser.parse`.
    :param parser_opts: Keyword arguments for
        :class:`~rdfxml.parser.rdf_parser.Parser`.

    :rtype: rdfxml.parser.rdf_parser.ParseResult
    :raise OSError: if the file cannot be read.
    '''
    logger.info(f'Loading {fpath}')
    root_block = BlockReader.from_path(fpath).read()

    return Parser(**parser_opts).parse(root_block, namespace_hints)


def load_from_reader(stream, namespace_hints=None, **parser_opts):
    '''
    Parse RDF/XML from a stream or a string.

    The stream is not closed.

    :param stream: Text or binary stream, string or bytes.

    :rtype: rdfxml.parser.rdf_parser.ParseResult
    '''
    root_block = BlockReader(stream).read()

    return Parser(**parser_opts).parse(root_block, namespace_hints)
