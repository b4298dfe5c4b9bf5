"""
Unit tests for indexed oneOf/allOf/items resolution.
"""

import pytest

from fixtures import build_ontology_graph
from formats.owl import CompositionSequenceResolver, FineSchemaBuilder
from shared.models import InlineRef, NamedRef, SchemaNode

PREFIXES = """
@prefix : <http://example.org/api#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
"""


def make_resolver(ttl: str):
    graph = build_ontology_graph(PREFIXES + ttl)
    builder = FineSchemaBuilder(graph)
    return graph, builder.resolver


@pytest.mark.unit
class TestCompositionSequenceResolver:
    """Test suite for CompositionSequenceResolver"""

    def test_stops_at_first_gap(self):
        graph, resolver = make_resolver("""
            :Shape :oneOfRef_0 "Circle" ;
                   :oneOfRef_1 "Square" ;
                   :oneOfRef_2 "Triangle" ;
                   :oneOfRef_4 "Hexagon" .
        """)
        sequence = resolver.resolve(graph.term("Shape"), "oneOf")
        assert sequence == [NamedRef("Circle"), NamedRef("Square"), NamedRef("Triangle")]

    def test_missing_index_zero_gives_empty_sequence(self):
        graph, resolver = make_resolver("""
            :Shape :allOfRef_1 "Base" .
        """)
        assert resolver.resolve(graph.term("Shape"), "allOf") == []

    def test_mixes_named_and_inline_elements_in_index_order(self):
        graph, resolver = make_resolver("""
            :Shape :allOfRef_0 "Base" ;
                   :hasInlineSchema_allOf_inline_1 [ :schemaType "object" ;
                       :hasSchemaProperty [ :propertyName "extra" ; :propertyType "integer" ] ] .
        """)
        sequence = resolver.resolve(graph.term("Shape"), "allOf")

        assert sequence[0] == NamedRef("Base")
        assert isinstance(sequence[1], InlineRef)
        assert sequence[1].to_dict() == {
            "type": "object",
            "properties": {"extra": {"type": "integer"}},
        }

    def test_named_reference_wins_over_inline_in_same_slot(self):
        graph, resolver = make_resolver("""
            :Shape :oneOfRef_0 "Named" ;
                   :hasInlineSchema_oneOf_inline_0 [ :schemaType "string" ] .
        """)
        assert resolver.resolve(graph.term("Shape"), "oneOf") == [NamedRef("Named")]

    def test_inline_uri_target_stays_named(self):
        graph, resolver = make_resolver("""
            :Shape :hasInlineSchema_oneOf_inline_0 :Circle .
            :Circle :schemaType "object" .
        """)
        assert resolver.resolve(graph.term("Shape"), "oneOf") == [NamedRef("Circle")]

    def test_operators_are_independent(self):
        graph, resolver = make_resolver("""
            :Shape :oneOfRef_0 "A" ; :allOfRef_0 "B" ; :allOfRef_1 "C" .
        """)
        node = graph.term("Shape")
        assert resolver.resolve(node, "oneOf") == [NamedRef("A")]
        assert resolver.resolve(node, "allOf") == [NamedRef("B"), NamedRef("C")]


@pytest.mark.unit
class TestItemsResolution:
    """Test suite for array item resolution"""

    def test_items_ref(self):
        graph, resolver = make_resolver(':List :itemsRef "Pet" .')
        assert resolver.resolve_items(graph.term("List")) == NamedRef("Pet")

    def test_items_primitive_type(self):
        graph, resolver = make_resolver(':List :itemsType "string" ; :itemsFormat "uuid" .')
        items = resolver.resolve_items(graph.term("List"))
        assert items.to_dict() == {"type": "string", "format": "uuid"}

    def test_items_inline(self):
        graph, resolver = make_resolver(':List :hasInlineSchema_items [ :schemaType "number" ] .')
        assert resolver.resolve_items(graph.term("List")).to_dict() == {"type": "number"}

    def test_items_untyped_when_nothing_declared(self):
        graph, resolver = make_resolver(':List :schemaType "array" .')
        items = resolver.resolve_items(graph.term("List"))
        assert isinstance(items, InlineRef)
        assert items.node == SchemaNode.untyped()

    def test_custom_build_ref_callback(self):
        graph = build_ontology_graph(PREFIXES + ':List :hasInlineSchema_items :Target .')
        seen = []

        def build_ref(target):
            seen.append(graph.stable_name(target))
            return InlineRef(SchemaNode.primitive("boolean"))

        resolver = CompositionSequenceResolver(graph, build_ref)
        assert resolver.resolve_items(graph.term("List")).to_dict() == {"type": "boolean"}
        assert seen == ["Target"]
