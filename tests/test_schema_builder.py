"""
Unit tests for the coarse and fine schema builders.
"""

import pytest

from fixtures import COARSE_TTL, FINE_TTL, SCENARIO_SCHEMA_TTL, build_ontology_graph
from formats.owl import CoarseSchemaBuilder, FineSchemaBuilder, SchemaBuilderProtocol
from shared.models import InlineRef, NamedRef, SchemaNode

PREFIXES = """
@prefix : <http://example.org/api#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
"""


class Recorder:
    """Collects skip and warning callbacks."""

    def __init__(self):
        self.skipped = []
        self.warnings = []

    def skip(self, item_type, name, reason, uri):
        self.skipped.append((item_type, name, reason))

    def warn(self, message):
        self.warnings.append(message)


@pytest.mark.unit
class TestCoarseSchemaBuilder:
    """Test suite for CoarseSchemaBuilder"""

    @pytest.fixture
    def builder(self):
        return CoarseSchemaBuilder(build_ontology_graph(COARSE_TTL))

    def test_satisfies_protocol(self, builder):
        assert isinstance(builder, SchemaBuilderProtocol)
        assert builder.convention == "coarse"

    def test_string_fields_and_required(self):
        graph = build_ontology_graph(SCENARIO_SCHEMA_TTL)
        schema = CoarseSchemaBuilder(graph).build_schema(graph.term("Person"))

        assert schema.to_dict() == {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "string"},
            },
        }

    def test_string_array_and_relations(self, builder):
        schema = builder.build_schema(builder.graph.term("Order"))
        result = schema.to_dict()

        assert result["properties"]["id"] == {"type": "string"}
        assert result["properties"]["notes"] == {"type": "array", "items": {"type": "string"}}
        assert result["properties"]["Item"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/Item"},
        }
        assert result["properties"]["Address"] == {"$ref": "#/components/schemas/Address"}
        assert result["properties"]["data"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/Order_data"},
        }
        assert "required" not in result

    def test_required_match_is_exact(self):
        graph = build_ontology_graph(PREFIXES + """
            :Thing :field_string "Name,id" ; :field_required "name,id,ghost" .
        """)
        schema = CoarseSchemaBuilder(graph).build_schema(graph.term("Thing"))
        assert schema.required_fields == ["id"]

    def test_unannotated_node_is_empty_object(self, builder):
        schema = builder.build_schema(builder.graph.term("nowhere"))
        assert schema.to_dict() == {"type": "object"}

    def test_required_is_subset_of_properties(self, builder):
        graph = builder.graph
        for node in graph.subclasses_of("schemas"):
            schema = builder.build_schema(node)
            assert set(schema.required_fields) <= set(schema.properties)


@pytest.mark.unit
class TestFineSchemaBuilder:
    """Test suite for FineSchemaBuilder"""

    @pytest.fixture
    def recorder(self):
        return Recorder()

    @pytest.fixture
    def builder(self, recorder):
        return FineSchemaBuilder(
            build_ontology_graph(FINE_TTL),
            skip_callback=recorder.skip,
            warning_callback=recorder.warn,
        )

    def test_object_schema(self, builder, recorder):
        schema = builder.build_schema(builder.graph.term("Pet"))
        result = schema.to_dict()

        assert result["type"] == "object"
        assert result["description"] == "A pet"
        assert result["required"] == ["name"]
        assert list(result["properties"]) == ["address", "born", "name", "owner", "status", "tags"]
        assert result["properties"]["status"] == {"type": "string", "enum": ["available", "sold"]}
        assert result["properties"]["owner"] == {"$ref": "#/components/schemas/Owner"}
        assert result["properties"]["tags"] == {"type": "array", "items": {"type": "string"}}
        assert result["properties"]["born"] == {
            "type": "string",
            "format": "date-time",
            "description": "Birth date",
        }
        assert result["properties"]["address"] == {
            "type": "object",
            "description": "Home address",
            "properties": {"city": {"type": "string"}},
        }

    def test_property_without_name_is_skipped(self, builder, recorder):
        builder.build_schema(builder.graph.term("Pet"))
        assert [item[0] for item in recorder.skipped] == ["property"]

    def test_array_property_of_references(self, builder):
        schema = builder.build_schema(builder.graph.term("Owner"))
        assert schema.properties["pets"] == InlineRef(SchemaNode.array_of(NamedRef("Pet")))

    def test_composition_without_type(self, builder):
        schema = builder.build_schema(builder.graph.term("Animal"))

        assert schema.type is None
        assert schema.one_of[0] == NamedRef("Pet")
        assert schema.one_of[1].to_dict() == {"type": "string"}
        assert schema.one_of[2] == NamedRef("Owner")
        assert len(schema.one_of) == 3

    def test_array_schema(self, builder):
        schema = builder.build_schema(builder.graph.term("PetList"))
        assert schema.to_dict() == {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}

    def test_enum_schema(self, builder):
        schema = builder.build_schema(builder.graph.term("Status"))
        assert schema.to_dict() == {"type": "string", "enum": ["on", "off"]}

    def test_untyped_schema_with_items_becomes_array(self):
        graph = build_ontology_graph(PREFIXES + ':List :itemsType "integer" .')
        schema = FineSchemaBuilder(graph).build_schema(graph.term("List"))
        assert schema.to_dict() == {"type": "array", "items": {"type": "integer"}}

    def test_property_without_type_is_untyped(self):
        graph = build_ontology_graph(PREFIXES + ':Thing :hasSchemaProperty [ :propertyName "any" ] .')
        schema = FineSchemaBuilder(graph).build_schema(graph.term("Thing"))
        assert schema.to_dict() == {"type": "object", "properties": {"any": {}}}

    def test_cyclic_blank_nodes_terminate(self, recorder):
        graph = build_ontology_graph(PREFIXES + """
            :Loop :hasSchemaProperty [ :propertyName "next" ; :hasInlineSchema _:n1 ] .
            _:n1 :schemaType "object" ;
                 :hasSchemaProperty [ :propertyName "again" ; :hasInlineSchema _:n1 ] .
        """)
        builder = FineSchemaBuilder(graph, warning_callback=recorder.warn)
        schema = builder.build_schema(graph.term("Loop"))

        inner = schema.properties["next"].node
        assert inner.properties["again"].node == SchemaNode()
        assert len(recorder.warnings) == 1
        assert "Cyclic inline schema" in recorder.warnings[0]

    def test_depth_limit(self, recorder):
        graph = build_ontology_graph(PREFIXES + """
            :Deep :hasSchemaProperty [ :propertyName "a" ; :hasInlineSchema [
                :hasSchemaProperty [ :propertyName "b" ; :hasInlineSchema [
                    :hasSchemaProperty [ :propertyName "c" ; :hasInlineSchema [ :schemaType "string" ] ]
                ] ]
            ] ] .
        """)
        builder = FineSchemaBuilder(graph, warning_callback=recorder.warn, max_depth=2)
        schema = builder.build_schema(graph.term("Deep"))

        level_b = schema.properties["a"].node.properties["b"].node
        assert level_b.properties["c"].node == SchemaNode()
        assert any("exceeds 2 levels" in w for w in recorder.warnings)

    def test_build_ref_named_and_inline(self, builder):
        graph = builder.graph
        assert builder.build_ref(graph.term("Pet")) == NamedRef("Pet")
