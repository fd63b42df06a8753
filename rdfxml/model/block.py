from collections import namedtuple

__doc__ = '''
XML structures produced by :class:`~rdfxml.reader.xml_reader.BlockReader`.

A block is a valid piece of XML, for example::

    <tag />
    <tag attr="value" />
    <tag>value</tag>
    <parent><child>value</child></parent>
'''


class Attribute(namedtuple('Attribute', ('name', 'schema_name', 'value'))):
    '''
    Attribute of an opening tag, of the form ``schema_name:name="value"``.

    E.g. ``xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"`` has
    ``schema_name='xmlns'``, ``name='rdf'`` and the URI as value.
    '''
    __slots__ = ()

    @property
    def qname(self):
        return (
            f'{self.schema_name}:{self.name}' if self.schema_name
            else self.name)



class Tag:
    '''
    Opening or closing tag.
    '''
    def __init__(self, name='', schema_name='', attrs=None):
        self.name = name
        self.schema_name = schema_name
        self.attrs = attrs if attrs is not None else []


    @property
    def qname(self):
        '''
        Qualified name as found in the document, e.g. ``rdf:Description``.
        '''
        return (
            f'{self.schema_name}:{self.name}' if self.schema_name
            else self.name)


    def get_attr(self, schema_name, name):
        '''
        Return the first attribute matching a prefix and a name, or None.
        '''
        for attr in self.attrs:
            if attr.schema_name == schema_name and attr.name == name:
                return attr

        return None


    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return (
            self.name == other.name and self.schema_name == other.schema_name
            and self.attrs == other.attrs)

    def __repr__(self):
        return f'<Tag {self.qname} attrs={self.attrs!r}>'



class Block:
    '''
    A tag with either a text value or a list of child blocks.

    A self-closed tag has neither.
    '''
    def __init__(self, opening_tag, value='', children=None):
        self.opening_tag = opening_tag
        self.value = value
        self.children = children if children is not None else []


    @property
    def is_leaf(self):
        return not self.children

    def __repr__(self):
        return '<Block {} value={!r} children={}>'.format(
                self.opening_tag.qname, self.value, len(self.children))
