import logging
import re

from urllib.parse import urlsplit

from rdflib import URIRef as RdflibURIRef

from rdfxml.exceptions import InvalidURIError


logger = logging.getLogger(__name__)

__doc__ = '''
Minimal URI reference helper.

A :class:`URIRef` always ends with ``#`` unless it carries a fragment, so that
namespace bases and fragments can be joined without duplicating separators::

    >>> base = parse('https://spdx.org/rdf/terms')
    >>> str(base)
    'https://spdx.org/rdf/terms#'
    >>> str(base.add_fragment('#Snippet'))
    'https://spdx.org/rdf/terms#Snippet'
'''

# Same set of characters rdflib warns about in URIRefs.
_invalid_chars = set('<>" {}|\\^`')
_bad_escape_ptn = re.compile(r'%(?![0-9A-Fa-f]{2})')


def _check(s):
    if any(c in _invalid_chars for c in s):
        return False
    if _bad_escape_ptn.search(s):
        return False
    try:
        urlsplit(s)
    except ValueError:
        return False

    return True


def parse(s):
    '''
    Validate a string and return it as a URI reference ending with ``#``.

    :param str s: URI string.

    :rtype: URIRef
    :raise InvalidURIError: if the string is empty or malformed.
    '''
    if not s:
        raise InvalidURIError(s, 'A URI cannot be empty.')
    if not _check(s):
        raise InvalidURIError(s)

    if not s.endswith('#'):
        s += '#'

    return URIRef(s)


class URIRef:
    '''
    Immutable URI reference.

    Instances compare and hash by their string value.
    '''
    __slots__ = ('_uri',)

    def __init__(self, uri=''):
        self._uri = uri


    def add_fragment(self, fragment):
        '''
        Append a fragment to the URI.

        A leading ``#`` in ``fragment`` is stripped so that repeated
        separators never appear. An invalid fragment yields an empty URI.

        :param str fragment: Fragment to append.

        :rtype: URIRef
        '''
        fragment = fragment.lstrip('#')
        if not _check(fragment):
            logger.debug(f'Invalid fragment: {fragment!r}')
            return URIRef()

        base = self._uri if self._uri.endswith('#') else self._uri + '#'
        return URIRef(base + fragment)


    def to_rdflib(self):
        '''
        Return the equivalent :class:`rdflib.URIRef`.
        '''
        return RdflibURIRef(self._uri)


    def __str__(self):
        return self._uri

    def __repr__(self):
        return f'URIRef({self._uri!r})'

    def __eq__(self, other):
        if isinstance(other, URIRef):
            return self._uri == other._uri
        return NotImplemented

    def __hash__(self):
        return hash(self._uri)
