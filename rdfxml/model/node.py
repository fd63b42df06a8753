from collections import namedtuple
from enum import Enum
from threading import Lock


class NodeType(str, Enum):
    '''
    Kinds of RDF terms.
    '''
    IRI = 'IRI'
    LITERAL = 'LITERAL'
    BNODE = 'BNODE'
    RESOURCELITERAL = 'RESOURCELITERAL'
    NODEIDLITERAL = 'NODEIDLITERAL'



class Node(namedtuple('Node', ('node_type', 'id'))):
    '''
    RDF term.

    Two nodes are the same logical node if their type and ID are equal; node
    maps and sets throughout the package rely on this value equality.
    '''
    __slots__ = ()

    def __str__(self):
        return f'({self.node_type.value}, {self.id})'



class Triple(namedtuple('Triple', ('subject', 'predicate', 'object'))):
    '''
    Subject, predicate, object statement. The predicate is always an IRI.
    '''
    __slots__ = ()

    def hash_str(self):
        '''
        Canonical string used to deduplicate triples.

        :rtype: str
        '''
        return f'{{{self.subject}; {self.predicate}; {self.object}}}'

    def __str__(self):
        return self.hash_str()



class BlankNodeGetter:
    '''
    Blank node factory.

    IDs are ``N<k>`` from a counter that is incremented before each node is
    issued, so a fresh getter issues ``N1``, ``N2``... and a getter seeded
    with ``last_id=k`` issues ``N<k+1>`` first.
    '''
    def __init__(self, last_id=0):
        self.last_id = last_id
        self._lock = Lock()


    def get(self):
        '''
        Return a new anonymous blank node.

        :rtype: Node
        '''
        with self._lock:
            self.last_id += 1
            last_id = self.last_id

        return Node(NodeType.BNODE, f'N{last_id}')


    def get_from_id(self, node_id):
        '''
        Return the blank node named by an ``rdf:nodeID`` value.

        :rtype: Node
        '''
        return Node(NodeType.BNODE, f'N{node_id}')
