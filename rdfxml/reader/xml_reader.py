import io
import logging

from rdfxml.exceptions import (
        EndOfInputError, TagMismatchError, XMLSyntaxError)
from rdfxml.model.block import Attribute, Block, Tag


logger = logging.getLogger(__name__)

__doc__ = '''
Character-level reader for the subset of XML used by RDF/XML documents.

The reader walks the input one character at a time and builds a tree of
:class:`~rdfxml.model.block.Block` objects. It understands a single prolog,
CDATA sections, self-closed tags and ``prefix:name`` qualified names; it does
not handle entities, DTDs or comments.

e.g.::

    >>> root = BlockReader('<rdf:RDF xmlns:rdf="..."></rdf:RDF>').read()
    >>> root.opening_tag.qname
    'rdf:RDF'
'''

WHITESPACE = frozenset('\t\n\r ')
"""Characters skipped between tokens."""

CDATA_OPENING = '<![CDATA['
CDATA_CLOSING = ']]>'


class BlockReader:
    '''
    Read a document tag by tag.

    The input is consumed exactly once through a single cursor. Any syntax
    error aborts the read with an :class:`~rdfxml.exceptions.XMLSyntaxError`.
    '''

    chunk_size = 8192
    """Number of characters pulled from the stream at a time."""

    def __init__(self, source):
        '''
        :param source: Input document. It may be a string, a bytes object,
            a text stream or a binary stream. Bytes are decoded as UTF-8.
        '''
        if isinstance(source, (bytes, bytearray)):
            source = source.decode('utf-8')
        if isinstance(source, str):
            source = io.StringIO(source)
        elif isinstance(source.read(0), bytes):
            source = io.TextIOWrapper(source, encoding='utf-8')

        self._stream = source
        self._fh = None
        self._buf = ''
        self._pos = 0
        self._eof = False


    @classmethod
    def from_path(cls, fpath):
        '''
        Create a reader for a file on disk.

        The file is closed by :meth:`read` or :meth:`close`.

        :param str fpath: Path to the document.

        :rtype: BlockReader
        :raise OSError: if the file cannot be opened.
        '''
        fh = open(fpath, 'r', encoding='utf-8')
        reader = cls(fh)
        reader._fh = fh

        return reader


    def close(self):
        '''
        Close the file opened by :meth:`from_path`, if any.
        '''
        if self._fh is not None:
            self._fh.close()
            self._fh = None


    def read(self):
        '''
        Read the root block of the document.

        Only whitespace may follow the root block.

        :rtype: rdfxml.model.block.Block
        '''
        try:
            root = self.read_block()
            self.skip_whitespace()
            next_rune = self.peek_rune()
            if next_rune is not None:
                raise XMLSyntaxError(
                    'Unexpected characters after the root block. '
                    f'Found: {next_rune!r}')
        finally:
            self.close()

        logger.debug(f'Read root block {root.opening_tag.qname}.')

        return root


    ## Blocks and tags.

    def read_block(self):
        '''
        Read a full block, including its children and its closing tag.

        :rtype: rdfxml.model.block.Block
        '''
        opening_tag, is_prolog, block_complete = self.read_opening_tag()
        if is_prolog:
            # The prolog carries no data; the actual block follows.
            return self.read_block()

        block = Block(opening_tag)
        if block_complete:
            return block

        self.skip_whitespace()
        next_rune = self.peek_rune()
        if next_rune is None:
            raise EndOfInputError(
                f'Input ended inside block {opening_tag.qname}.')

        if next_rune != '<':
            # <tag>value</tag>
            block.value = self.read_till({'<'})
        elif self.peek_n(2) == '<!':
            block.value = self.read_cdata()
        else:
            while self.peek_n(2) != '</':
                block.children.append(self.read_block())
                self.skip_whitespace()
                if self.peek_rune() is None:
                    raise EndOfInputError(
                        f'Input ended inside block {opening_tag.qname}.')

        self.skip_whitespace()
        closing_tag = self.read_closing_tag()
        if (
                opening_tag.name != closing_tag.name or
                opening_tag.schema_name != closing_tag.schema_name):
            raise TagMismatchError(opening_tag, closing_tag)

        return block


    def read_opening_tag(self):
        '''
        Read an opening tag.

        An opening tag is either ``<[prefix:]tag [attr="val"]... >`` or a
        self-closed ``<[prefix:]tag [attr="val"]... />``. A prolog
        (``<?...?>``) is consumed and reported without producing a tag.

        :rtype: tuple(rdfxml.model.block.Tag, bool, bool)
        :return: The tag (None for a prolog), whether a prolog was read and
            whether the block was self-closed.
        '''
        self.skip_whitespace()

        stray = self.read_till({'<'})
        if self.peek_rune() is None:
            if stray:
                raise XMLSyntaxError('Found stray characters at end of input.')
            raise EndOfInputError()
        if stray:
            raise XMLSyntaxError(
                f'Found stray characters before tag start: {stray!r}')

        self.read_rune()  # <
        self.skip_whitespace()

        next_rune = self._require_rune()
        if next_rune == '/':
            raise XMLSyntaxError('Unexpected closing tag.')
        if next_rune == '?':
            self._read_prolog()
            return None, True, False

        schema_name, name = self.read_colon_pair(WHITESPACE | {'>', '/'})
        if not name:
            raise XMLSyntaxError('Expected a tag name after <.')
        tag = Tag(name, schema_name)

        self.skip_whitespace()
        next_rune = self._require_rune()
        while next_rune not in ('>', '/'):
            tag.attrs.append(self.read_attribute())
            self.skip_whitespace()
            next_rune = self._require_rune()

        self.read_rune()
        block_complete = False
        if next_rune == '/':
            block_complete = True
            if self.read_rune() != '>':
                raise XMLSyntaxError('Expected > after /.')

        return tag, False, block_complete


    def read_closing_tag(self):
        '''
        Read a closing tag of the form ``</[prefix:]tag>``.

        Whitespace before the tag must already be skipped.

        :rtype: rdfxml.model.block.Tag
        '''
        if self.read_n(2) != '</':
            raise XMLSyntaxError('Expected a closing tag.')

        schema_name, name = self.read_colon_pair(WHITESPACE | {'>'})
        self.skip_whitespace()
        if self.read_rune() != '>':
            raise XMLSyntaxError('Expected > at the end of closing tag.')

        return Tag(name, schema_name)


    def read_attribute(self):
        '''
        Read an attribute of the form ``[prefix:]name="value"``.

        The cursor must point to the first character of the name.

        :rtype: rdfxml.model.block.Attribute
        '''
        schema_name, name = self.read_colon_pair(WHITESPACE | {'='})
        self.skip_whitespace()

        if self.read_rune() != '=':
            raise XMLSyntaxError(
                f'Expected an assignment sign (=) after attribute {name}.')

        self.skip_whitespace()
        quote = self.read_rune()
        if quote not in ('"', "'"):
            raise XMLSyntaxError(
                'Assignment operator must be followed by a value enclosed '
                'within quotes.')

        value = self.read_till(WHITESPACE | {quote})
        if self.read_rune() != quote:
            raise XMLSyntaxError(
                f'Unexpected blank character in value of attribute {name}. '
                'Expected a closing quote.')

        return Attribute(name, schema_name, value)


    def read_cdata(self):
        '''
        Read a ``<![CDATA[...]]>`` section.

        :rtype: str
        :return: The whole section, delimiters included.
        '''
        opening = self.read_n(len(CDATA_OPENING))
        if opening != CDATA_OPENING:
            raise XMLSyntaxError(
                f'Not a valid CDATA tag. Expected: {CDATA_OPENING}, '
                f'found: {opening}')

        try:
            data = self.read_till_string(CDATA_CLOSING)
        except EndOfInputError:
            raise EndOfInputError('Unterminated CDATA section.')
        self.read_n(len(CDATA_CLOSING))

        return CDATA_OPENING + data + CDATA_CLOSING


    def read_colon_pair(self, delims):
        '''
        Read a ``prefix:name`` or a plain ``name`` up to a delimiter.

        :rtype: tuple(str, str)
        :return: Prefix (empty if absent) and name.
        '''
        word = self.read_till(delims)
        if ':' not in word:
            return '', word

        schema_name, _, name = word.partition(':')
        if not name:
            raise XMLSyntaxError(f'Expected a word after colon in {word!r}.')

        return schema_name, name


    def _read_prolog(self):
        self.read_rune()  # ?
        self.read_till({'?'})
        if self.peek_rune() is None:
            raise EndOfInputError('Unterminated prolog.')
        self.read_rune()  # ?
        self.skip_whitespace()
        next_rune = self._require_rune()
        if next_rune != '>':
            raise XMLSyntaxError(
                f'Expected a > character after ?. Found {next_rune!r}')
        self.read_rune()


    ## Cursor primitives.

    def _fill(self, n):
        '''
        Make sure at least ``n`` characters are buffered, if available.

        :rtype: bool
        :return: Whether ``n`` characters are available.
        '''
        while len(self._buf) - self._pos < n and not self._eof:
            chunk = self._stream.read(self.chunk_size)
            if not chunk:
                self._eof = True
                break
            self._buf = self._buf[self._pos:] + chunk
            self._pos = 0

        return len(self._buf) - self._pos >= n


    def peek_rune(self):
        '''
        Next character without advancing the cursor; None at end of input.
        '''
        if not self._fill(1):
            return None
        return self._buf[self._pos]


    def read_rune(self):
        '''
        Read one character and advance the cursor.
        '''
        if not self._fill(1):
            raise EndOfInputError()
        r = self._buf[self._pos]
        self._pos += 1

        return r


    def peek_n(self, n):
        '''
        Next ``n`` characters without advancing the cursor.

        Fewer characters are returned near the end of input.
        '''
        self._fill(n)
        return self._buf[self._pos:self._pos + n]


    def read_n(self, n):
        '''
        Read exactly ``n`` characters.
        '''
        if not self._fill(n):
            raise EndOfInputError(f'Expected {n} more characters.')
        s = self._buf[self._pos:self._pos + n]
        self._pos += n

        return s


    def read_till(self, delims):
        '''
        Read until any of ``delims`` or the end of input.

        The delimiter is not consumed.

        :param delims: Set of single characters.

        :rtype: str
        '''
        chars = []
        while True:
            r = self.peek_rune()
            if r is None or r in delims:
                return ''.join(chars)
            chars.append(r)
            self._pos += 1


    def read_till_string(self, delim):
        '''
        Read until a literal string. The delimiter is not consumed.

        :rtype: str
        :raise EndOfInputError: if the delimiter is never found.
        '''
        chars = []
        while True:
            s = self.peek_n(len(delim))
            if len(s) < len(delim):
                raise EndOfInputError(f'{delim} not found before end of input.')
            if s == delim:
                return ''.join(chars)
            chars.append(s[0])
            self._pos += 1


    def skip_whitespace(self):
        '''
        Advance the cursor past whitespace.

        :rtype: int
        :return: Number of characters skipped.
        '''
        count = 0
        while self.peek_rune() in WHITESPACE:
            self._pos += 1
            count += 1

        return count


    def _require_rune(self):
        r = self.peek_rune()
        if r is None:
            raise EndOfInputError()
        return r
