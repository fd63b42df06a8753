from rdfxml import uri


class Namespace:
    '''
    Namespace built on a base URI.

    e.g.::

        >>> spdx = Namespace('https://spdx.org/rdf/terms')
        >>> str(spdx['Snippet'])
        'https://spdx.org/rdf/terms#Snippet'
    '''
    def __init__(self, base):
        self.base = base if isinstance(base, uri.URIRef) else uri.parse(base)


    def get(self, fragment):
        '''
        Append a fragment to the namespace base.

        :rtype: rdfxml.uri.URIRef
        '''
        return self.base.add_fragment(fragment)


    def __getitem__(self, fragment):
        return self.get(fragment)

    def __str__(self):
        return str(self.base)
