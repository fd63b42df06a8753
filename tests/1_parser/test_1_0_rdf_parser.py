import pytest

from rdfxml import uri
from rdfxml.dictionaries.namespaces import RDF_NS, RDF_TYPE
from rdfxml.exceptions import NamespaceError
from rdfxml.model.block import Attribute, Tag
from rdfxml.model.node import BlankNodeGetter, Node, NodeType, Triple
from rdfxml.parser.rdf_parser import Parser, ParserContext
from rdfxml.reader.xml_reader import BlockReader


EX_NS = 'http://example.org/terms#'


def _parse(data, **kwargs):
    hints = kwargs.pop('namespace_hints', None)
    return Parser(**kwargs).parse(BlockReader(data).read(), hints)


def _iri(s):
    return Node(NodeType.IRI, s)


@pytest.fixture
def rdf_type():
    return _iri(RDF_TYPE)


@pytest.fixture
def ctx():
    return ParserContext({}, BlankNodeGetter(), None)



class TestParseHeader:
    '''
    Test namespace collection from the root tag.
    '''
    def test_empty_document(self, rdf_ns):
        res = _parse(f"<rdf:RDF xmlns:rdf='{rdf_ns}'></rdf:RDF>")

        assert res.triples == []
        assert res.namespaces == {'rdf': uri.parse(rdf_ns)}


    def test_declared(self):
        res = _parse(
                '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-'
                'ns#" xmlns:ex="https://example.com" xmlns="http://b.org/"/>')

        assert str(res.namespaces['ex']) == 'https://example.com#'
        assert str(res.namespaces['']) == 'http://b.org/#'
        assert len(res.namespaces) == 3


    def test_rdf_added(self):
        res = _parse(f'<ex:Root xmlns:ex="{EX_NS}"/>')

        assert res.namespaces['rdf'] == uri.parse(RDF_NS)


    def test_rdf_under_other_prefix(self):
        res = _parse(f'<r:RDF xmlns:r="{RDF_NS}"/>')

        assert 'rdf' not in res.namespaces
        assert res.namespaces['r'] == uri.parse(RDF_NS)


    def test_malformed_uri(self):
        with pytest.raises(NamespaceError) as exc:
            _parse('<rdf:RDF xmlns:ex="%%"/>')
        assert exc.value.prefix == 'ex'

        with pytest.raises(NamespaceError):
            _parse('<rdf:RDF xmlns:ex=""/>')


    def test_hints(self):
        data = (
                '<rdf:RDF><rdf:Description rdf:about="http://a.org/x">'
                '<ex:name>x</ex:name></rdf:Description></rdf:RDF>')
        with pytest.raises(NamespaceError):
            _parse(data)

        res = _parse(data, namespace_hints={'ex': EX_NS})
        assert res.namespaces['ex'] == uri.parse(EX_NS)
        assert Triple(
                _iri('http://a.org/x'), _iri(EX_NS + 'name'),
                Node(NodeType.LITERAL, 'x')) in res.triples


    def test_malformed_hint(self):
        with pytest.raises(NamespaceError) as exc:
            _parse('<rdf:RDF/>', namespace_hints={'x': 'bad uri'})
        assert exc.value.prefix == 'x'


    def test_declared_over_hints(self):
        res = _parse(
                '<rdf:RDF xmlns:ex="http://declared.org/ns#"/>',
                namespace_hints={
                    'ex': EX_NS, 'dc': uri.parse('http://purl.org/dc/')})

        assert str(res.namespaces['ex']) == 'http://declared.org/ns#'
        assert str(res.namespaces['dc']) == 'http://purl.org/dc/#'



class TestParse:
    '''
    Test triple generation.
    '''
    def test_blank_subject(self, rdf_ns, rdf_type):
        res = _parse(
                f"<rdf:RDF xmlns:rdf='{rdf_ns}' "
                "xmlns:ex='https://example.com#'><rdf:Description>"
                "<ex:Tag>Name</ex:Tag></rdf:Description></rdf:RDF>")

        bnode = Node(NodeType.BNODE, 'N1')
        assert res.triples == [
            Triple(bnode, rdf_type, _iri(rdf_ns + 'Description')),
            Triple(
                bnode, _iri('https://example.com#Tag'),
                Node(NodeType.LITERAL, 'Name')),
        ]


    def test_sample(self, sample_rdf, rdf_ns, rdf_type):
        res = _parse(sample_rdf)

        subj = _iri('https://www.other_domain/another_sample')
        custom = 'http://www.example.com/sample#'
        assert len(res.triples) == 5
        assert res.triples[0] == Triple(
                subj, rdf_type, _iri(rdf_ns + 'Description'))
        assert Triple(
                subj, _iri(custom + 'Title'),
                Node(NodeType.LITERAL, 'First Tag')) in res.triples
        assert Triple(
                subj, _iri(custom + 'BlankTag'),
                Node(NodeType.LITERAL, '')) in res.triples
        assert Triple(
                subj, _iri(custom + 'END'), Node(
                    NodeType.RESOURCELITERAL,
                    'https://www.end.com/end_tag')) in res.triples

        content = [
                trp for trp in res.triples
                if trp.predicate == _iri(custom + 'Content')]
        assert len(content) == 1
        assert content[0].object.node_type == NodeType.LITERAL
        assert content[0].object.id.startswith('Some\n')


    def test_cdata_literal(self):
        res = _parse(
                f'<rdf:RDF xmlns:ex="{EX_NS}"><ex:Doc rdf:about="http://a.org/d">'
                '<ex:body><![CDATA[<b>bold</b>]]></ex:body></ex:Doc></rdf:RDF>')

        assert res.triples[-1].object == Node(
                NodeType.LITERAL, '<![CDATA[<b>bold</b>]]>')


    def test_nested(self, rdf_type):
        res = _parse(f'''
            <rdf:RDF xmlns:ex="{EX_NS}">
              <ex:Doc rdf:about="http://example.org/doc">
                <ex:part>
                  <ex:Section>
                    <ex:title>Intro</ex:title>
                  </ex:Section>
                </ex:part>
              </ex:Doc>
            </rdf:RDF>''')

        doc = _iri('http://example.org/doc')
        section = Node(NodeType.BNODE, 'N1')
        assert set(res.triples) == {
            Triple(doc, rdf_type, _iri(EX_NS + 'Doc')),
            Triple(doc, _iri(EX_NS + 'part'), section),
            Triple(section, rdf_type, _iri(EX_NS + 'Section')),
            Triple(
                section, _iri(EX_NS + 'title'),
                Node(NodeType.LITERAL, 'Intro')),
        }


    def test_several_objects(self, rdf_type):
        res = _parse(f'''
            <rdf:RDF xmlns:ex="{EX_NS}">
              <ex:List rdf:about="http://example.org/list">
                <ex:item>
                  <ex:Entry rdf:about="http://example.org/1"/>
                  <ex:Entry rdf:about="http://example.org/2"/>
                </ex:item>
              </ex:List>
            </rdf:RDF>''')

        lst = _iri('http://example.org/list')
        item = _iri(EX_NS + 'item')
        entry_type = _iri(EX_NS + 'Entry')
        assert len(res.triples) == 5
        for entry in ('http://example.org/1', 'http://example.org/2'):
            assert Triple(lst, item, _iri(entry)) in res.triples
            assert Triple(_iri(entry), rdf_type, entry_type) in res.triples


    def test_duplicates(self):
        res = _parse(f'''
            <rdf:RDF xmlns:ex="{EX_NS}">
              <ex:Doc rdf:about="http://example.org/doc">
                <ex:tag>a</ex:tag>
                <ex:tag>a</ex:tag>
              </ex:Doc>
              <ex:Doc rdf:about="http://example.org/doc">
                <ex:tag>a</ex:tag>
              </ex:Doc>
            </rdf:RDF>''')

        assert len(res.triples) == 2
        assert len({trp.hash_str() for trp in res.triples}) == 2


    def test_node_id(self):
        res = _parse(f'''
            <rdf:RDF xmlns:ex="{EX_NS}">
              <ex:Doc rdf:nodeID="abc">
                <ex:seeAlso rdf:nodeID="abc"/>
              </ex:Doc>
            </rdf:RDF>''')

        subj = Node(NodeType.BNODE, 'Nabc')
        assert {trp.subject for trp in res.triples} == {subj}
        assert res.triples[-1].object == Node(NodeType.NODEIDLITERAL, 'abc')


    def test_resource_over_node_id(self):
        res = _parse(f'''
            <rdf:RDF xmlns:ex="{EX_NS}">
              <ex:Doc rdf:about="http://example.org/doc">
                <ex:link rdf:nodeID="abc" rdf:resource="http://a.org/r"/>
              </ex:Doc>
            </rdf:RDF>''')

        assert res.triples[-1].object == Node(
                NodeType.RESOURCELITERAL, 'http://a.org/r')


    def test_rdf_id(self):
        res = _parse(f'''
            <rdf:RDF xmlns="http://example.org/base" xmlns:ex="{EX_NS}">
              <ex:Doc rdf:ID="thing">
                <name>Thing</name>
              </ex:Doc>
            </rdf:RDF>''')

        subj = _iri('http://example.org/base#thing')
        assert {trp.subject for trp in res.triples} == {subj}
        assert Triple(
                subj, _iri('http://example.org/base#name'),
                Node(NodeType.LITERAL, 'Thing')) in res.triples


    def test_relative_about(self):
        res = _parse(
                f'<rdf:RDF xmlns:ex="{EX_NS}">'
                '<ex:Doc rdf:about="#frag"/></rdf:RDF>')

        assert res.triples[0].subject == _iri('#frag')


    def test_default_ns_redeclared(self):
        res = _parse(f'''
            <rdf:RDF xmlns="http://example.org/base" xmlns:ex="{EX_NS}">
              <ex:Doc rdf:about="#a" xmlns="http://other.org/ns">
                <title>A</title>
              </ex:Doc>
              <ex:Doc rdf:about="#b"/>
            </rdf:RDF>''')

        subjects = {trp.subject for trp in res.triples}
        assert subjects == {
                _iri('http://other.org/ns#a'),
                _iri('http://example.org/base#b')}
        assert Triple(
                _iri('http://other.org/ns#a'), _iri('http://other.org/ns#title'),
                Node(NodeType.LITERAL, 'A')) in res.triples


    def test_nested_default_ns(self, rdf_type):
        '''
        An object block resolves names against its own default namespace,
        nested or not.
        '''
        res = _parse(f'''
            <rdf:RDF xmlns="http://outer.org/o" xmlns:ex="{EX_NS}">
              <ex:Doc rdf:about="http://example.org/doc">
                <ex:p>
                  <Thing xmlns="http://inner.org/i" rdf:about="#x">
                    <name>X</name>
                  </Thing>
                </ex:p>
              </ex:Doc>
              <Thing xmlns="http://inner.org/i" rdf:about="#y"/>
            </rdf:RDF>''')

        nested = _iri('http://inner.org/i#x')
        thing = _iri('http://inner.org/i#Thing')
        assert set(res.triples) == {
            Triple(_iri('http://example.org/doc'), rdf_type, _iri(EX_NS + 'Doc')),
            Triple(_iri('http://example.org/doc'), _iri(EX_NS + 'p'), nested),
            Triple(nested, rdf_type, thing),
            Triple(
                nested, _iri('http://inner.org/i#name'),
                Node(NodeType.LITERAL, 'X')),
            Triple(_iri('http://inner.org/i#y'), rdf_type, thing),
        }


    def test_unprefixed_without_default(self):
        with pytest.raises(NamespaceError):
            _parse('<rdf:RDF><Doc/></rdf:RDF>')


    def test_undefined_prefix(self):
        with pytest.raises(NamespaceError) as exc:
            _parse('<rdf:RDF><foo:Bar/></rdf:RDF>')
        assert exc.value.prefix == 'foo'


    def test_undefined_attribute_prefix(self):
        with pytest.raises(NamespaceError):
            _parse(
                    f'<rdf:RDF xmlns:ex="{EX_NS}">'
                    '<ex:Doc foo:about="x"/></rdf:RDF>')


    def test_nested_error(self):
        '''
        An error in a nested subject fails the whole parse.
        '''
        with pytest.raises(NamespaceError):
            _parse(f'''
                <rdf:RDF xmlns:ex="{EX_NS}">
                  <ex:Doc rdf:about="http://example.org/doc">
                    <ex:part><foo:Section/></ex:part>
                  </ex:Doc>
                </rdf:RDF>''')


    def test_blank_node_start(self):
        res = _parse(
                f'<rdf:RDF xmlns:ex="{EX_NS}"><ex:Doc/></rdf:RDF>',
                blank_node_start=5)

        assert res.triples[0].subject == Node(NodeType.BNODE, 'N6')


    @pytest.mark.parametrize('max_workers', (1, 8))
    def test_workers(self, max_workers):
        '''
        The triple set does not depend on the number of workers.
        '''
        docs = ''.join(f'''
              <ex:Doc rdf:about="http://example.org/{i}">
                <ex:part>
                  <ex:Section rdf:about="http://example.org/{i}/s">
                    <ex:title>Section {i}</ex:title>
                  </ex:Section>
                </ex:part>
              </ex:Doc>''' for i in range(20))
        res = _parse(
                f'<rdf:RDF xmlns:ex="{EX_NS}">{docs}</rdf:RDF>',
                max_workers=max_workers)

        assert len(res.triples) == 80
        assert Triple(
                _iri('http://example.org/7/s'), _iri(EX_NS + 'title'),
                Node(NodeType.LITERAL, 'Section 7')) in res.triples



class TestNodeFromTag:
    '''
    Test subject resolution from a single tag.
    '''
    @pytest.fixture
    def rdf_ctx(self):
        return ParserContext(
                {'rdf': uri.parse(RDF_NS)}, BlankNodeGetter(), None)


    def test_about_before_id(self, rdf_ctx):
        tag = Tag('Doc', 'ex', [
            Attribute('about', 'rdf', 'http://a.org/x'),
            Attribute('ID', 'rdf', 'y'),
        ])
        node = Parser().node_from_tag(tag, uri.parse('http://b.org'), rdf_ctx)

        assert node == _iri('http://a.org/x')
        # The tag is not modified.
        assert tag.get_attr('rdf', 'ID').value == 'y'


    def test_id_before_about(self, rdf_ctx):
        tag = Tag('Doc', 'ex', [
            Attribute('ID', 'rdf', 'y'),
            Attribute('about', 'rdf', 'http://a.org/x'),
        ])
        node = Parser().node_from_tag(tag, uri.parse('http://b.org'), rdf_ctx)

        assert node == _iri('http://b.org#y')


    def test_fresh_blank_nodes(self, rdf_ctx):
        parser = Parser()
        first = parser.node_from_tag(Tag('Doc', 'ex'), None, rdf_ctx)
        second = parser.node_from_tag(Tag('Doc', 'ex'), None, rdf_ctx)

        assert first == Node(NodeType.BNODE, 'N1')
        assert second == Node(NodeType.BNODE, 'N2')


    def test_identity(self, rdf_ctx):
        parser = Parser()
        tag = Tag('Doc', 'ex', [Attribute('nodeID', 'rdf', 'x')])
        first = parser.node_from_tag(tag, None, rdf_ctx)

        assert parser.node_from_tag(tag, None, rdf_ctx) is first



class TestParserContext:
    '''
    Test the shared state of a parse.
    '''
    def test_append_triple(self, ctx):
        trp = Triple(
                Node(NodeType.BNODE, 'N1'), _iri(EX_NS + 'p'),
                Node(NodeType.LITERAL, 'x'))

        assert ctx.append_triple(trp)
        assert not ctx.append_triple(Triple(*trp))
        assert ctx.triples == [trp]


    def test_resolve_node(self, ctx):
        first = Node(NodeType.IRI, 'http://a.org/x')
        second = Node(NodeType.IRI, 'http://a.org/x')

        assert ctx.resolve_node(first) is first
        assert ctx.resolve_node(second) is first
        assert ctx.resolve_node(
                Node(NodeType.LITERAL, 'http://a.org/x')) is not first
