import logging

from rdfxml.exceptions import GraphError


logger = logging.getLogger(__name__)

__doc__ = '''
Graph structures derived from a list of triples.

Triples are the edges of a directed graph; for a ``(subject, predicate,
object)`` triple the edge goes from the subject to the object::

                  predicate
    (subject) ---------------> (object)

All mappings are keyed by node value, so equal nodes coming from different
triples share a single entry. Keys are ordered by first appearance.
'''


def filter_triples(triples, subject=None, predicate=None, object=None):
    '''
    Return the triples matching the given node IDs.

    Any of ``subject``, ``predicate`` or ``object`` may be None to match any
    value.

    :param list triples: Triples to filter.
    :param str subject: Subject ID.
    :param str predicate: Predicate ID.
    :param str object: Object ID.

    :rtype: list(rdfxml.model.node.Triple)
    '''
    return [
        trp for trp in triples
        if (subject is None or subject == trp.subject.id)
        and (predicate is None or predicate == trp.predicate.id)
        and (object is None or object == trp.object.id)]


def get_adjacency_list(triples):
    '''
    Map each node to the list of nodes it points to.

    Every subject and every object has a key, even with no neighbors.

    :rtype: dict(rdfxml.model.node.Node, list(rdfxml.model.node.Node))
    '''
    adj_list = {}
    for trp in triples:
        adj_list.setdefault(trp.subject, []).append(trp.object)
        adj_list.setdefault(trp.object, [])

    return adj_list


def get_node_to_triples(triples):
    '''
    Map each node to the unique triples having it as subject.

    Objects are given a key with an empty list if they are not subjects of
    any triple.

    :rtype: dict(rdfxml.model.node.Node, list(rdfxml.model.node.Triple))
    '''
    node_to_triples = {}
    seen = set()
    for trp in triples:
        subj_triples = node_to_triples.setdefault(trp.subject, [])
        key = trp.hash_str()
        if key not in seen:
            seen.add(key)
            subj_triples.append(trp)
        node_to_triples.setdefault(trp.object, [])

    return node_to_triples


def disjoint_set(triples):
    '''
    Map each node to a parent node.

    For every triple the subject becomes the parent of the object; a later
    triple overrides an earlier one. Subjects which are never objects have
    a parent of None.

    :rtype: dict(rdfxml.model.node.Node, rdfxml.model.node.Node)
    '''
    parent = {}
    for trp in triples:
        parent[trp.object] = trp.subject
        if trp.subject not in parent:
            parent[trp.subject] = None

    return parent


def get_root_nodes(triples, exclude_predicates=()):
    '''
    Subjects without a parent in the :func:`disjoint_set` of the triples.

    There is one such node per weakly connected component that has an entry
    point; a component made of a single cycle has none.

    :param list triples: Triples to inspect.
    :param exclude_predicates: Predicate IDs whose triples are not parent
        edges. Subjects of such triples are still candidates.

    :rtype: list(rdfxml.model.node.Node)
    :return: Root nodes in order of first appearance as subjects.
    '''
    parent = disjoint_set([
        trp for trp in triples
        if trp.predicate.id not in exclude_predicates])
    roots = {}
    for trp in triples:
        if parent.get(trp.subject) is None:
            roots.setdefault(trp.subject, None)

    return list(roots)


def topological_sort(adj_list):
    '''
    Depth-first post-order of the nodes of an adjacency list.

    Nodes are listed after all the nodes they point to, i.e. in reverse
    topological order. Visited nodes are never visited again, so cycles do
    not prevent the sort from completing.

    :param dict adj_list: Output of :func:`get_adjacency_list`.

    :rtype: list(rdfxml.model.node.Node)
    :raise rdfxml.exceptions.GraphError: if a neighbor is not a key of the
        adjacency list.
    '''
    visited = set()
    sorted_nodes = []

    for start in adj_list:
        if start in visited:
            continue
        visited.add(start)
        stack = [(start, iter(adj_list[start]))]
        while stack:
            node, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor not in adj_list:
                    raise GraphError(
                            f'Node {neighbor} does not exist in the graph.')
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append((neighbor, iter(adj_list[neighbor])))
                    break
            else:
                stack.pop()
                sorted_nodes.append(node)

    return sorted_nodes


def topological_sort_triples(triples):
    '''
    Order triples by the topological order of their subjects.

    Triples with the same subject keep their relative order.

    :rtype: list(rdfxml.model.node.Triple)
    '''
    sorted_nodes = topological_sort(get_adjacency_list(triples))
    node_to_triples = get_node_to_triples(triples)
    logger.debug(f'Sorted {len(sorted_nodes)} nodes.')

    return [
        trp for node in sorted_nodes for trp in node_to_triples[node]]
