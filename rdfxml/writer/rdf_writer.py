import io
import logging

from rdfxml import env
from rdfxml.dictionaries.namespaces import RDF_NODE_ID, RDF_NS, RDF_TYPE
from rdfxml.exceptions import SerializationError
from rdfxml.model.node import NodeType
from rdfxml.writer.graph_utils import (
        filter_triples, get_node_to_triples, get_root_nodes,
        topological_sort_triples)


logger = logging.getLogger(__name__)

__doc__ = '''
Serialize triples as RDF/XML.

Each root node of the graph is written as a block named after its
``rdf:type``; its other triples become predicate elements, and objects that
are subjects of further triples are nested inside them::

    <rdf:RDF
      xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
      xmlns:spdx="http://spdx.org/rdf/terms#">
      <spdx:Snippet rdf:about="http://example.org/doc#snippet">
        <spdx:name>main.py</spdx:name>
      </spdx:Snippet>
    </rdf:RDF>
'''

_rdf_base = RDF_NS.rstrip('#')


def triples_to_string(triples, namespaces, indent=None):
    '''
    Serialize triples to an RDF/XML string.

    :param list triples: Triples to serialize.
    :param dict namespaces: Prefix to namespace URI mapping. Every URI used
        as a type or predicate must belong to one of these namespaces. An
        ``rdf`` prefix is added if the RDF namespace is missing.
    :param str indent: String repeated once per nesting level. Defaults to
        the ``writer.indent`` configuration.

    :rtype: str
    :raise rdfxml.exceptions.SerializationError: if the triples cannot be
        expressed as RDF/XML with the given namespaces.
    '''
    if indent is None:
        indent = env.config['application']['writer']['indent']

    sorted_triples = topological_sort_triples(triples)

    namespaces = {
            pfx: str(ns) for pfx, ns in (namespaces or {}).items()}
    inverted = invert_namespaces(namespaces)
    if _rdf_base not in inverted:
        pfx = 'rdf'
        while pfx in namespaces:
            pfx += '_'
        namespaces[pfx] = RDF_NS
        inverted[_rdf_base] = pfx

    node_to_triples = get_node_to_triples(sorted_triples)
    # Type edges are not nesting edges: a class described in the same
    # document is still written at the top level.
    root_nodes = get_root_nodes(sorted_triples, (RDF_TYPE,))
    # A component made only of cycles has no parentless node; its first node
    # in sorted order is written as a root.
    reached = _reachable(root_nodes, node_to_triples)
    for node, trps in node_to_triples.items():
        if trps and node not in reached:
            root_nodes.append(node)
            reached |= _reachable([node], node_to_triples)

    out = ''
    for node in root_nodes:
        out += stringify(node, node_to_triples, inverted, 1, indent) + '\n'

    rdf = inverted[_rdf_base]
    logger.debug(f'Serialized {len(root_nodes)} root nodes.')

    return '{}\n{}</{}:RDF>'.format(
            root_tag(namespaces, rdf, indent), out, rdf)


def write_to_file(stream, triples, namespaces, indent=None):
    '''
    Serialize triples and write them to a stream.

    Nothing is written if serialization fails.

    :param stream: Text or binary stream. Binary streams receive UTF-8.
    '''
    out = triples_to_string(triples, namespaces, indent)
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        out = out.encode('utf-8')
    stream.write(out)
    logger.info(f'Wrote {len(triples)} triples.')


def stringify(node, node_to_triples, inverted, depth, indent, path=None):
    '''
    Serialize a node and, recursively, the nodes it points to.

    A node that is already being serialized further up the same branch is
    written as a reference instead of being nested again.

    :param rdfxml.model.node.Node node: Subject to serialize.
    :param dict node_to_triples: Output of
        :func:`~rdfxml.writer.graph_utils.get_node_to_triples`.
    :param dict inverted: Namespace URI (without trailing ``#``) to prefix.
    :param int depth: Nesting level of the node.
    :param str indent: Indentation unit.
    :param frozenset path: Nodes being serialized in the enclosing blocks.

    :rtype: str
    '''
    triples = node_to_triples.get(node, [])
    rdf = inverted.get(_rdf_base, 'rdf')
    path = (path or frozenset()) | {node}

    opening_tag, closing_tag = _tags(node, triples, rdf, inverted, depth, indent)

    child_tabs = indent * (depth + 1)
    children = []
    for trp in triples:
        if trp.predicate.id in (RDF_TYPE, RDF_NODE_ID):
            continue
        pred = shorten_uri(trp.predicate.id, inverted)
        obj = trp.object

        if obj.node_type == NodeType.RESOURCELITERAL:
            children.append(
                    f'{child_tabs}<{pred} {rdf}:resource="{obj.id}"/>')
        elif obj.node_type == NodeType.NODEIDLITERAL:
            children.append(
                    f'{child_tabs}<{pred} {rdf}:nodeID="{obj.id}"/>')
        elif not node_to_triples.get(obj):
            children.append(f'{child_tabs}<{pred}>{obj.id}</{pred}>')
        elif obj in path:
            logger.debug(f'Cycle on {obj}; writing a reference.')
            attr = 'resource' if obj.node_type == NodeType.IRI else 'nodeID'
            children.append(
                    f'{child_tabs}<{pred} {rdf}:{attr}="{obj.id}"/>')
        else:
            nested = stringify(
                    obj, node_to_triples, inverted, depth + 2, indent, path)
            children.append(
                    f'{child_tabs}<{pred}>\n{nested}\n{child_tabs}</{pred}>')

    return '{}\n{}\n{}'.format(opening_tag, '\n'.join(children), closing_tag)


def shorten_uri(uri, inverted):
    '''
    Abbreviate a URI to a ``prefix:fragment`` name.

    e.g. ``http://www.w3.org/1999/02/22-rdf-syntax-ns#Description`` becomes
    ``rdf:Description``. A namespace bound to the empty prefix yields the
    bare fragment.

    :rtype: str
    '''
    split_idx = uri.rfind('#')
    if split_idx == -1:
        raise SerializationError(
                f'URI {uri} is not of the form namespace#fragment.')

    base = uri[:split_idx].strip('#')
    fragment = uri[split_idx + 1:].strip()
    if not fragment:
        raise SerializationError(f'Missing fragment in URI {uri}.')

    prefix = inverted.get(base)
    if prefix is None:
        raise SerializationError(
                f'Undefined namespace: {base} is not declared.')

    return f'{prefix}:{fragment}' if prefix else fragment


def invert_namespaces(namespaces):
    '''
    Map namespace URIs, without trailing ``#``, to their prefixes.

    :rtype: dict(str, str)
    '''
    return {str(ns).strip('#'): pfx for pfx, ns in namespaces.items()}


def root_tag(namespaces, rdf='rdf', indent='  '):
    '''
    Opening ``rdf:RDF`` tag declaring all namespaces, sorted by prefix.

    :rtype: str
    '''
    tag = f'<{rdf}:RDF'
    for pfx in sorted(namespaces):
        attr = f'xmlns:{pfx}' if pfx else 'xmlns'
        tag += f'\n{indent}{attr}="{namespaces[pfx]}"'

    return tag + '>'


def _reachable(nodes, node_to_triples):
    '''
    Nodes nested, directly or not, in the blocks of the given nodes.
    '''
    seen = set()
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        stack.extend(
                trp.object for trp in node_to_triples.get(node, [])
                if trp.predicate.id != RDF_TYPE
                and node_to_triples.get(trp.object))

    return seen


def _tags(node, triples, rdf, inverted, depth, indent):
    type_triples = filter_triples(triples, predicate=RDF_TYPE)
    if len(type_triples) != 1:
        raise SerializationError(
                'Every subject node must have exactly one rdf:type triple. '
                f'Found {len(type_triples)} for {node}.')
    node_id_triples = filter_triples(triples, predicate=RDF_NODE_ID)
    if len(node_id_triples) > 1:
        raise SerializationError(
                'A subject node can have at most one rdf:nodeID. '
                f'Found {len(node_id_triples)} for {node}.')

    attrs = ''
    if node_id_triples:
        attrs += f' {rdf}:nodeID="{node_id_triples[0].object.id}"'
    if node.node_type == NodeType.IRI:
        attrs += f' {rdf}:about="{node.id}"'

    tag_name = shorten_uri(type_triples[0].object.id, inverted)
    tabs = indent * depth

    return f'{tabs}<{tag_name}{attrs}>', f'{tabs}</{tag_name}>'
