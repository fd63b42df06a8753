import logging

from collections import namedtuple
from threading import Lock

from rdfxml import env, uri
from rdfxml.dictionaries.namespaces import RDF_NS, RDF_TYPE, rdf_ns
from rdfxml.exceptions import InvalidURIError, NamespaceError
from rdfxml.model.node import BlankNodeGetter, Node, NodeType, Triple
from rdfxml.util.task_group import TaskGroup


logger = logging.getLogger(__name__)

__doc__ = """
Turn a block tree into RDF triples.

Sample RDF/XML input with an IRI subject and a literal object::

    <spdx:License rdf:about="http://spdx.org/licenses/Apache-2.0">
        <spdx:licenseId>Apache-2.0</spdx:licenseId>
    </spdx:License>

yields::

    (IRI, http://spdx.org/licenses/Apache-2.0)
        rdf:type (IRI, http://spdx.org/rdf/terms#License)
    (IRI, http://spdx.org/licenses/Apache-2.0)
        spdx:licenseId (LITERAL, Apache-2.0)

If the ``rdf:about`` attribute is removed, the subject becomes a blank node.
"""


class ParseResult(namedtuple('ParseResult', ('triples', 'namespaces'))):
    '''
    Output of a parse.

    ``triples`` is a list of unique :class:`~rdfxml.model.node.Triple`
    objects in the order they were first found; ``namespaces`` maps each
    prefix declared in the document root to a :class:`~rdfxml.uri.URIRef`.
    '''
    __slots__ = ()



class ParserContext:
    '''
    Mutable state of a single parse.

    The triple set and the node cache are shared by all the tasks of the
    parse and each is guarded by its own lock.
    '''
    def __init__(self, namespaces, bnode_getter, tasks):
        self.namespaces = namespaces
        self.bnode_getter = bnode_getter
        self.tasks = tasks
        self.triples = []

        self._triple_keys = set()
        self._triple_lock = Lock()
        self._nodes = {}
        self._node_lock = Lock()


    def append_triple(self, triple):
        '''
        Add a triple unless an equal one is already present.

        :rtype: bool
        :return: Whether the triple was added.
        '''
        key = triple.hash_str()
        with self._triple_lock:
            if key in self._triple_keys:
                return False
            self._triple_keys.add(key)
            self.triples.append(triple)

        return True


    def resolve_node(self, node):
        '''
        Return the first seen node equal to ``node``.
        '''
        with self._node_lock:
            return self._nodes.setdefault(node, node)



class Parser:
    '''
    RDF/XML parser.

    A parser holds no document state and may be reused; each call to
    :meth:`parse` creates its own :class:`ParserContext`.
    '''
    def __init__(self, max_workers=None, blank_node_start=None):
        '''
        :param int max_workers: Number of threads used to parse nested
            subjects. Defaults to the ``parser.max_workers`` configuration.
        :param int blank_node_start: Initial value of the blank node counter.
            Defaults to the ``parser.blank_node_start`` configuration.
        '''
        parser_conf = env.config['application']['parser']
        self.max_workers = (
                max_workers if max_workers is not None
                else parser_conf['max_workers'])
        self.blank_node_start = (
                blank_node_start if blank_node_start is not None
                else parser_conf['blank_node_start'])


    def parse(self, root_block, namespace_hints=None):
        '''
        Parse a document's root block.

        :param rdfxml.model.block.Block root_block: Root block as read by
            :class:`~rdfxml.reader.xml_reader.BlockReader`.
        :param dict namespace_hints: Prefix to URI (string or
            :class:`~rdfxml.uri.URIRef`) mapping used for prefixes that the
            root tag does not declare.

        :rtype: ParseResult
        :raise rdfxml.exceptions.NamespaceError: if a prefix is undefined or a
            namespace URI is malformed.
        '''
        namespaces = self.parse_header(root_block, namespace_hints)
        last_uri = namespaces.get('')

        with TaskGroup(self.max_workers) as tasks:
            ctx = ParserContext(
                    namespaces, BlankNodeGetter(self.blank_node_start), tasks)
            for child in root_block.children:
                tasks.spawn(self._parse_subject, child, last_uri, ctx)

        logger.info('Parsed {} triples from {} top-level blocks.'.format(
                len(ctx.triples), len(root_block.children)))

        return ParseResult(ctx.triples, namespaces)


    def parse_header(self, root_block, namespace_hints=None):
        '''
        Collect the namespace declarations of the root tag.

        An ``rdf`` prefix for the standard RDF namespace is added if no
        declared prefix maps to it.

        :rtype: dict(str, rdfxml.uri.URIRef)
        '''
        namespaces = {}
        for attr in root_block.opening_tag.attrs:
            prefix = self._declared_prefix(attr)
            if prefix is None:
                continue
            try:
                namespaces[prefix] = uri.parse(attr.value)
            except InvalidURIError as e:
                raise NamespaceError(
                        prefix, f'Namespace URI for prefix {prefix!r} does '
                        f'not conform to URI rules: {e}')

        for prefix, ns in (namespace_hints or {}).items():
            if prefix in namespaces or isinstance(ns, uri.URIRef):
                namespaces.setdefault(prefix, ns)
                continue
            try:
                namespaces[prefix] = uri.parse(ns)
            except InvalidURIError as e:
                raise NamespaceError(
                        prefix, f'Namespace hint for prefix {prefix!r} does '
                        f'not conform to URI rules: {e}')

        rdf_uri = uri.parse(RDF_NS)
        if 'rdf' not in namespaces and rdf_uri not in namespaces.values():
            namespaces['rdf'] = rdf_uri

        logger.debug(f'Namespaces: {namespaces}')

        return namespaces


    def node_from_tag(self, tag, last_uri, ctx):
        '''
        Build the node described by an opening tag.

        ``rdf:ID="x"`` is read as ``rdf:about="#x"``. ``rdf:about`` gives an
        IRI node, resolved against ``last_uri`` if it starts with ``#``;
        otherwise ``rdf:nodeID`` gives a named blank node; otherwise a new
        blank node is issued.

        :param rdfxml.model.block.Tag tag: Opening tag.
        :param rdfxml.uri.URIRef last_uri: Nearest default namespace.
        :param ParserContext ctx: Current parse context.

        :rtype: rdfxml.model.node.Node
        '''
        about = None
        node_id = None
        for attr in tag.attrs:
            attr_uri = self._attr_uri(attr, ctx)
            if about is None:
                if attr_uri == rdf_ns['about']:
                    about = attr.value
                elif attr_uri == rdf_ns['ID']:
                    about = '#' + attr.value
            if node_id is None and attr_uri == rdf_ns['nodeID']:
                node_id = attr.value

        if about is not None:
            if about.startswith('#'):
                base = last_uri if last_uri is not None else uri.URIRef()
                about = str(base.add_fragment(about))
            node = Node(NodeType.IRI, about)
        elif node_id is not None:
            node = ctx.bnode_getter.get_from_id(node_id)
        else:
            node = ctx.bnode_getter.get()

        return ctx.resolve_node(node)


    def parse_block(self, block, subject, last_uri, ctx):
        '''
        Emit the triples of a subject block.

        Each nested object block is scheduled as a new subject in the parse
        task group.

        :param rdfxml.model.block.Block block: Subject block.
        :param rdfxml.model.node.Node subject: Node of the subject block.
        :param rdfxml.uri.URIRef last_uri: Nearest default namespace.
        :param ParserContext ctx: Current parse context.
        '''
        last_uri = self._default_ns(block.opening_tag, last_uri)
        rdf_type = ctx.resolve_node(Node(NodeType.IRI, RDF_TYPE))
        type_triple = Triple(
                subject, rdf_type, ctx.resolve_node(Node(
                    NodeType.IRI, self.tag_uri(block.opening_tag, last_uri, ctx))))
        ctx.append_triple(type_triple)

        for pred_block in block.children:
            pred_tag = pred_block.opening_tag
            pred_last_uri = self._default_ns(pred_tag, last_uri)
            predicate = ctx.resolve_node(Node(
                    NodeType.IRI, self.tag_uri(pred_tag, pred_last_uri, ctx)))
            # Duplicate; discarded by the triple set.
            ctx.append_triple(type_triple)

            if pred_block.is_leaf:
                obj = ctx.resolve_node(self._leaf_object(pred_block, ctx))
                ctx.append_triple(Triple(subject, predicate, obj))
                continue

            for obj_block in pred_block.children:
                obj_last_uri = self._default_ns(
                        obj_block.opening_tag, pred_last_uri)
                obj = self.node_from_tag(
                        obj_block.opening_tag, obj_last_uri, ctx)
                ctx.append_triple(Triple(subject, predicate, obj))
                ctx.tasks.spawn(
                        self.parse_block, obj_block, obj, obj_last_uri, ctx)


    def tag_uri(self, tag, last_uri, ctx):
        '''
        Expand a tag name to a full URI string.

        Unprefixed names use the nearest default namespace.

        :rtype: str
        '''
        if tag.schema_name:
            base = ctx.namespaces.get(tag.schema_name)
        else:
            base = last_uri
        if base is None:
            raise NamespaceError(tag.schema_name)

        return str(base.add_fragment(tag.name))


    def _parse_subject(self, block, last_uri, ctx):
        last_uri = self._default_ns(block.opening_tag, last_uri)
        subject = self.node_from_tag(block.opening_tag, last_uri, ctx)
        self.parse_block(block, subject, last_uri, ctx)


    def _leaf_object(self, pred_block, ctx):
        resource = None
        node_id = None
        for attr in pred_block.opening_tag.attrs:
            attr_uri = self._attr_uri(attr, ctx)
            if resource is None and attr_uri == rdf_ns['resource']:
                resource = attr.value
            elif node_id is None and attr_uri == rdf_ns['nodeID']:
                node_id = attr.value

        if resource is not None:
            return Node(NodeType.RESOURCELITERAL, resource)
        if node_id is not None:
            return Node(NodeType.NODEIDLITERAL, node_id)
        return Node(NodeType.LITERAL, pred_block.value)


    def _attr_uri(self, attr, ctx):
        '''
        Expand a prefixed attribute name; None for unprefixed attributes,
        ``xml:`` attributes and namespace declarations.
        '''
        if (
                attr.schema_name in ('', 'xml') or
                self._declared_prefix(attr) is not None):
            return None
        base = ctx.namespaces.get(attr.schema_name)
        if base is None:
            raise NamespaceError(attr.schema_name)

        return base.add_fragment(attr.name)


    def _default_ns(self, tag, last_uri):
        '''
        Default namespace redeclared by a tag, or the inherited one.
        '''
        attr = tag.get_attr('', 'xmlns')
        if attr is None:
            return last_uri
        try:
            return uri.parse(attr.value)
        except InvalidURIError as e:
            raise NamespaceError('', f'Malformed default namespace: {e}')


    @staticmethod
    def _declared_prefix(attr):
        '''
        Prefix declared by an ``xmlns`` attribute ('' for the default
        namespace), or None if the attribute is not a declaration.
        '''
        if attr.schema_name == 'xmlns':
            return attr.name
        if not attr.schema_name and attr.name == 'xmlns':
            return ''
        return None
