import logging
import pytest

from rdfxml import env
from rdfxml.config_parser import parse_config


env.setup(config=parse_config())


@pytest.fixture
def rdf_ns():
    return 'http://www.w3.org/1999/02/22-rdf-syntax-ns#'


@pytest.fixture
def sample_rdf():
    '''
    Small document with an IRI subject and literal objects.
    '''
    return '''
<rdf:RDF
    xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
    xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"
    xmlns:custom="http://www.example.com/sample#">
    <rdf:Description rdf:about="https://www.other_domain/another_sample">
        <custom:Title>First Tag</custom:Title>
        <custom:Content>Some
                        Multiline
                        Content
        </custom:Content>
        <custom:BlankTag></custom:BlankTag>
        <custom:END rdf:resource="https://www.end.com/end_tag" />
    </rdf:Description>
</rdf:RDF>
'''


@pytest.fixture(autouse=True)
def disable_logging():
    """Disable logging in all tests."""
    logging.disable(logging.INFO)
