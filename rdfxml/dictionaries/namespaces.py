from rdflib.namespace import RDF

from rdfxml import env, uri
from rdfxml.namespace import Namespace

RDF_NS = str(RDF)
"""Standard RDF namespace URI."""

rdf_ns = Namespace(RDF_NS)

RDF_TYPE = str(rdf_ns['type'])
RDF_NODE_ID = str(rdf_ns['nodeID'])


def ns_collection():
    '''
    Default namespaces from the ``namespaces.yml`` configuration.

    :rtype: dict(str, rdfxml.uri.URIRef)
    '''
    return {
            pfx: uri.parse(ns)
            for pfx, ns in env.config['namespaces'].items()}
