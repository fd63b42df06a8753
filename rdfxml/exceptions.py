''' Put all exceptions here. '''

class RdfXmlError(RuntimeError):
    '''
    Base class for all errors raised while decoding or encoding RDF/XML.
    '''
    def __init__(self, msg=None):
        self.msg = msg

    def __str__(self):
        return self.msg or 'RDF/XML error.'



class XMLSyntaxError(RdfXmlError):
    '''
    Raised when the input text is not well formed for the XML subset read by
    :class:`~rdfxml.reader.xml_reader.BlockReader`.

    The read is aborted and no block tree is returned.
    '''
    def __str__(self):
        return self.msg or 'Malformed XML.'



class EndOfInputError(XMLSyntaxError):
    '''
    Raised when the input ends while a tag or block is still expected.
    '''
    def __str__(self):
        return self.msg or 'Unexpected end of input.'



class TagMismatchError(XMLSyntaxError):
    '''
    Raised when a closing tag does not match the opening tag of its block.
    '''
    def __init__(self, opening_tag, closing_tag):
        self.opening_tag = opening_tag
        self.closing_tag = closing_tag

    def __str__(self):
        return (
            'Opening and closing tags do not match: opening tag: {}, '
            'closing tag: {}.'.format(
                self.opening_tag.qname, self.closing_tag.qname))



class NamespaceError(RdfXmlError):
    '''
    Raised when a namespace prefix is undefined or a namespace URI is
    malformed.
    '''
    def __init__(self, prefix, msg=None):
        self.prefix = prefix
        self.msg = msg

    def __str__(self):
        return self.msg or 'Undefined namespace prefix: {}'.format(
                self.prefix)



class InvalidURIError(RdfXmlError):
    '''
    Raised when a string cannot be used as a URI reference.
    '''
    def __init__(self, uri, msg=None):
        self.uri = uri
        self.msg = msg

    def __str__(self):
        return self.msg or 'Invalid URI: {!r}'.format(self.uri)



class GraphError(RdfXmlError):
    '''
    Raised when a graph structure built from triples is inconsistent.
    '''
    def __str__(self):
        return self.msg or 'Inconsistent graph.'



class SerializationError(RdfXmlError):
    '''
    Raised when a triple set cannot be written as RDF/XML.

    Usually this means that a subject does not have exactly one ``rdf:type``,
    has several ``rdf:nodeID`` values, or uses a URI that cannot be shortened
    with the namespaces provided.
    '''
    def __str__(self):
        return self.msg or 'Triples cannot be serialized.'
