__doc__ = """
Model for the structures shared by the codec layers: XML blocks, RDF nodes
and triples.

- :py:mod:`rdfxml.model.block`
- :py:mod:`rdfxml.model.node`
"""
