"""
Tests for the OpenAPI to TTL exporter (openapi_to_ttl.py).

This module tests:
- OpenAPIToTTLConverter class
- compare_documents function
- round_trip_test function
"""

import copy
import json

import pytest
from rdflib import Graph, Literal, Namespace, RDFS

from fixtures import PETSTORE_DOCUMENT
from formats.owl import (
    OpenAPIToTTLConverter,
    compare_documents,
    export_openapi_to_ttl,
    parse_owl_content,
    round_trip_test,
)

API = Namespace("http://example.org/api#")


def parse_ttl(ttl: str) -> Graph:
    graph = Graph()
    graph.parse(data=ttl, format="turtle")
    return graph


def minimal_document(**paths):
    return {
        "openapi": "3.0.1",
        "info": {"title": "Mini", "version": "1.0.0"},
        "paths": paths,
        "components": {"schemas": {}},
    }


@pytest.mark.unit
class TestOpenAPIToTTLConverter:
    """Tests for OpenAPIToTTLConverter class."""

    def test_binds_default_prefix(self, petstore_document):
        ttl = OpenAPIToTTLConverter().convert(petstore_document)
        assert "@prefix : <http://example.org/api#>" in ttl

    def test_schemas_become_classes(self, petstore_document):
        graph = parse_ttl(OpenAPIToTTLConverter().convert(petstore_document))

        for name in ("Pet", "Owner", "Animal", "Error"):
            assert (API[name], RDFS.subClassOf, API.schemas) in graph
        assert (API.Pet, API.schemaRequiredFields, Literal("id,name")) in graph
        assert (API.Animal, API.oneOfRef_0, Literal("Pet")) in graph
        assert (API.Animal, API.oneOfRef_1, Literal("Owner")) in graph

    def test_operations_become_path_classes(self, petstore_document):
        graph = parse_ttl(OpenAPIToTTLConverter().convert(petstore_document))

        assert (API.listPets, RDFS.subClassOf, API.paths) in graph
        assert (API.listPets, API.path, Literal("/pets")) in graph
        assert (API.listPets, API.method, Literal("get")) in graph
        assert (API.createPet, API.requestBodyRequired, Literal("true")) in graph

    def test_info_and_servers(self, petstore_document):
        petstore_document["info"]["x-ds-service"] = ["pets", "store"]
        graph = parse_ttl(OpenAPIToTTLConverter().convert(petstore_document))

        assert (API.info, API.title, Literal("Pet Store")) in graph
        assert (API.info, API["x-ds-service"], Literal("pets,store")) in graph
        assert (API.server_0, API.url, Literal("https://api.example.com/v1")) in graph

    def test_schema_names_are_sanitized(self):
        document = minimal_document()
        document["components"]["schemas"] = {
            "My Schema": {"type": "object"},
            "1st": {"type": "object"},
        }
        graph = parse_ttl(OpenAPIToTTLConverter().convert(document))

        assert (API.My_Schema, RDFS.subClassOf, API.schemas) in graph
        assert (API.S_1st, RDFS.subClassOf, API.schemas) in graph

    def test_operation_names_are_unique(self):
        operation = {"operationId": "op", "responses": {"200": {"description": "ok"}}}
        document = minimal_document(**{
            "/a": {"get": dict(operation)},
            "/b": {"get": dict(operation)},
        })
        graph = parse_ttl(OpenAPIToTTLConverter().convert(document))

        assert (API.op, API.path, Literal("/a")) in graph
        assert (API.op_2, API.path, Literal("/b")) in graph

    def test_operation_name_without_id(self):
        document = minimal_document(**{"/a": {"get": {"responses": {}}}})
        graph = parse_ttl(OpenAPIToTTLConverter().convert(document))
        assert (API.get__a, RDFS.subClassOf, API.paths) in graph

    def test_non_method_keys_ignored(self):
        document = minimal_document(**{
            "/a": {"parameters": [], "summary": "shared", "get": {"responses": {}}},
        })
        graph = parse_ttl(OpenAPIToTTLConverter().convert(document))
        assert len(list(graph.subjects(RDFS.subClassOf, API.paths))) == 1

    def test_unsupported_constructs_warn(self):
        document = minimal_document(**{
            "/a": {"post": {
                "parameters": [{"$ref": "#/components/parameters/Limit"}],
                "requestBody": {"content": {"application/json": {}}},
                "responses": {},
            }},
        })
        converter = OpenAPIToTTLConverter()
        converter.convert(document)

        assert len(converter.warnings) == 2
        assert "#/components/parameters/Limit" in converter.warnings[0]

    def test_state_reset_between_runs(self):
        converter = OpenAPIToTTLConverter()
        converter.convert(minimal_document(**{"/a": {"get": {"parameters": [{"in": "query"}]}}}))
        assert converter.warnings

        converter.convert(minimal_document())
        assert converter.warnings == []

    def test_rejects_non_object(self):
        with pytest.raises(TypeError):
            OpenAPIToTTLConverter().convert(["not", "a", "document"])

    def test_convert_file(self, temp_openapi_file, tmp_path):
        output = tmp_path / "petstore.ttl"
        ttl = OpenAPIToTTLConverter().convert_file(temp_openapi_file, str(output))

        assert output.read_text(encoding="utf-8") == ttl

    def test_export_function(self, petstore_document, tmp_path):
        output = tmp_path / "exported.ttl"
        ttl = export_openapi_to_ttl(petstore_document, str(output))

        assert output.exists()
        assert len(parse_ttl(ttl)) > 0

    def test_export_rejects_wrong_extension(self, petstore_document, tmp_path):
        with pytest.raises(ValueError):
            export_openapi_to_ttl(petstore_document, str(tmp_path / "exported.json"))

    def test_exported_ttl_converts_back(self, petstore_document):
        ttl = OpenAPIToTTLConverter().convert(petstore_document)
        document = parse_owl_content(ttl, inline_references=False)

        assert document["info"]["version"] == "1.2.0"
        assert document["servers"] == [{"url": "https://api.example.com/v1"}]
        assert document["components"]["schemas"]["Pet"]["properties"]["owner"] == {
            "$ref": "#/components/schemas/Owner"
        }


@pytest.mark.unit
class TestCompareDocuments:
    """Tests for compare_documents function."""

    def test_identical_documents(self, petstore_document):
        result = compare_documents(petstore_document, copy.deepcopy(petstore_document))

        assert result["matches"] is True
        assert result["is_equivalent"] is True
        assert result["schemas"]["count1"] == 4
        assert result["operations"]["count2"] == 3

    def test_missing_schema(self, petstore_document):
        other = copy.deepcopy(petstore_document)
        del other["components"]["schemas"]["Error"]

        result = compare_documents(petstore_document, other)
        assert result["schemas"]["only_in_first"] == ["Error"]
        assert result["matches"] is False

    def test_schema_body_mismatch(self, petstore_document):
        other = copy.deepcopy(petstore_document)
        other["components"]["schemas"]["Error"]["required"] = ["message"]

        result = compare_documents(petstore_document, other)
        assert result["schema_mismatches"] == ["Error"]

    def test_operation_shape_mismatch(self, petstore_document):
        other = copy.deepcopy(petstore_document)
        other["paths"]["/pets"]["get"]["parameters"] = []

        result = compare_documents(petstore_document, other)
        assert result["operation_mismatches"] == ["GET /pets"]
        assert result["operations"]["match"] is True

    def test_extra_operation(self, petstore_document):
        other = copy.deepcopy(petstore_document)
        other["paths"]["/pets/{petId}"]["delete"] = {"responses": {"204": {"description": "Gone"}}}

        result = compare_documents(petstore_document, other)
        assert result["operations"]["only_in_second"] == ["DELETE /pets/{petId}"]

    def test_ref_siblings_and_enum_types_ignored(self):
        first = minimal_document()
        first["components"]["schemas"] = {
            "A": {"properties": {"b": {"$ref": "#/components/schemas/B", "description": "x"}}},
            "Level": {"type": "integer", "enum": [1, 2]},
        }
        second = copy.deepcopy(first)
        second["components"]["schemas"]["A"]["properties"]["b"] = {"$ref": "#/components/schemas/B"}
        second["components"]["schemas"]["Level"]["enum"] = ["1", "2"]

        assert compare_documents(first, second)["matches"] is True

    def test_empty_documents(self):
        result = compare_documents({}, {})
        assert result["matches"] is True
        assert result["info_match"] is True


@pytest.mark.integration
class TestRoundTrip:
    """Tests for round-trip conversion OpenAPI -> TTL -> OpenAPI."""

    def test_petstore_round_trip(self, petstore_document):
        result = round_trip_test(petstore_document)

        assert result["success"] is True
        assert result["comparison"]["is_equivalent"] is True, json.dumps(result["comparison"], indent=2)
        assert result["warnings"] == []
        assert result["reconstructed"]["info"]["title"] == "Pet Store"

    def test_round_trip_keeps_fixture_untouched(self):
        before = copy.deepcopy(PETSTORE_DOCUMENT)
        round_trip_test(PETSTORE_DOCUMENT)
        assert PETSTORE_DOCUMENT == before

    def test_error_only_operation_gains_success_response(self):
        document = minimal_document(**{
            "/x": {"get": {"responses": {"404": {"description": "Missing"}}}},
        })
        result = round_trip_test(document)

        assert result["success"] is True
        assert sorted(result["reconstructed"]["paths"]["/x"]["get"]["responses"]) == ["200", "404"]
        assert result["comparison"]["operation_mismatches"] == ["GET /x"]
        assert result["comparison"]["is_equivalent"] is False

    def test_invalid_input_reported(self):
        result = round_trip_test(["not", "a", "document"])

        assert result["success"] is False
        assert result["comparison"] is None
        assert "must be an object" in result["error"]
