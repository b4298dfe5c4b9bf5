"""
Graph helpers for tests that exercise the readers below the converter.
"""

from rdflib import Graph

from formats.owl import OntologyGraph


def build_ontology_graph(ttl: str) -> OntologyGraph:
    """Parse Turtle content and wrap it in the read-only graph facade."""
    graph = Graph()
    graph.parse(data=ttl, format="turtle")
    return OntologyGraph(graph)
