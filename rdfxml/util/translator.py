import logging

from rdflib import BNode, Graph, Literal, URIRef

from rdfxml import uri
from rdfxml.dictionaries.namespaces import RDF_TYPE
from rdfxml.model.node import Node, NodeType, Triple


logger = logging.getLogger(__name__)

__doc__ = ''' Convert triples to and from rdflib graphs. '''


def to_term(node):
    '''
    Convert a node to an rdflib term.

    :rtype: rdflib.term.Identifier
    '''
    if node.node_type in (NodeType.IRI, NodeType.RESOURCELITERAL):
        return URIRef(node.id)
    if node.node_type in (NodeType.BNODE, NodeType.NODEIDLITERAL):
        return BNode(node.id)
    return Literal(node.id)


def to_graph(triples, namespaces=None):
    '''
    Build an rdflib graph from triples.

    :param list triples: Triples to convert.
    :param dict namespaces: Prefixes to bind in the graph.

    :rtype: rdflib.Graph
    '''
    gr = Graph()
    for pfx, ns in (namespaces or {}).items():
        gr.bind(pfx, ns.to_rdflib() if isinstance(ns, uri.URIRef) else ns)
    for trp in triples:
        gr.add((to_term(trp.subject), to_term(trp.predicate), to_term(trp.object)))

    return gr


def from_graph(gr):
    '''
    Convert an rdflib graph to triples.

    URI objects of predicates other than ``rdf:type`` become resource
    references, as they would be read from ``rdf:resource``.

    :rtype: list(rdfxml.model.node.Triple)
    '''
    triples = []
    for s, p, o in gr:
        if isinstance(o, Literal):
            obj = Node(NodeType.LITERAL, str(o))
        elif isinstance(o, BNode):
            obj = Node(NodeType.BNODE, str(o))
        elif str(p) == RDF_TYPE:
            obj = Node(NodeType.IRI, str(o))
        else:
            obj = Node(NodeType.RESOURCELITERAL, str(o))
        subj = Node(
                NodeType.BNODE if isinstance(s, BNode) else NodeType.IRI,
                str(s))
        triples.append(Triple(subj, Node(NodeType.IRI, str(p)), obj))

    logger.debug(f'Converted {len(triples)} triples from graph.')

    return triples
