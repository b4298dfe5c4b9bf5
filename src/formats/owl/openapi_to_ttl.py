"""
OpenAPI 3.0 to RDF TTL Exporter

This module converts an OpenAPI 3.0 document (as parsed JSON) into an
ontology using the fine, per-attribute annotation vocabulary, so that
OWLToOpenAPIConverter can rebuild the document from it.

Named component schemas become classes under ``:schemas``; operations become
classes under ``:paths``; everything anonymous (property, parameter and
response descriptors, inline schemas) becomes a blank node.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from rdflib import Graph, Namespace, RDF, RDFS, OWL, XSD, URIRef, BNode
from rdflib.term import Literal as RDFLiteral, Node

from constants import ConventionConfig, OntologyVocabulary, OpenAPIDefaults
from core.validators import InputValidator

logger = logging.getLogger(__name__)

__all__ = [
    'OpenAPIToTTLConverter',
    'compare_documents',
    'round_trip_test',
    'export_openapi_to_ttl',
]

SIMPLE_PROPERTY_KEYS = {"type", "format", "enum", "description"}
SIMPLE_ITEMS_KEYS = {"type", "format"}
ARRAY_PROPERTY_KEYS = {"type", "items", "description"}


def _ref_name(ref: str) -> str:
    """``#/components/schemas/Pet`` -> ``Pet``."""
    return ref.rsplit('/', 1)[-1]


def _is_primitive(schema: Dict[str, Any], allowed_keys: Set[str]) -> bool:
    return (
        schema.get("type") in OpenAPIDefaults.PRIMITIVE_TYPES
        and set(schema) <= allowed_keys
    )


class OpenAPIToTTLConverter:
    """
    Converts OpenAPI 3.0 documents to annotated RDF TTL.
    """

    def __init__(self, base_namespace: str = OntologyVocabulary.DEFAULT_NAMESPACE) -> None:
        """
        Initialize the converter.

        Args:
            base_namespace: Namespace URI bound to the default prefix
        """
        self.base_namespace: str = base_namespace
        self.graph: Graph = Graph()
        self.ns: Namespace = Namespace(base_namespace)
        self.used_names: Set[str] = set()
        self.warnings: List[str] = []

    def _setup_namespaces(self) -> None:
        """Setup common namespaces in the graph."""
        self.graph.bind("", self.ns)
        self.graph.bind("owl", OWL)
        self.graph.bind("rdfs", RDFS)
        self.graph.bind("rdf", RDF)
        self.graph.bind("xsd", XSD)

    @staticmethod
    def _sanitize_name(name: str) -> str:
        """Sanitize a name for use as a URI local name."""
        sanitized = ''.join(c if c.isalnum() or c in '_-.' else '_' for c in name)
        if sanitized and not (sanitized[0].isalpha() or sanitized[0] == '_'):
            sanitized = 'S_' + sanitized
        return sanitized or 'Unnamed'

    def _schema_uri(self, name: str) -> URIRef:
        return self.ns[self._sanitize_name(name)]

    def _unique_name(self, candidate: str) -> str:
        name = self._sanitize_name(candidate)
        unique = name
        counter = 2
        while unique in self.used_names:
            unique = f"{name}_{counter}"
            counter += 1
        self.used_names.add(unique)
        return unique

    def _add_literal(self, subject: Node, predicate_name: str, value: Any) -> None:
        if value is None or value == "" or value == []:
            return
        self.graph.add((subject, self.ns[predicate_name], RDFLiteral(str(value))))

    def _add_warning(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def _add_link(self, subject: Node, predicate_name: str, target: Node) -> None:
        self.graph.add((subject, self.ns[predicate_name], target))

    def _declare_class(self, node: URIRef, parent_name: str) -> None:
        self.graph.add((node, RDF.type, OWL.Class))
        self.graph.add((node, RDFS.subClassOf, self.ns[parent_name]))

    def _schema_target(self, schema: Dict[str, Any]) -> Node:
        """URI of a referenced schema, or a new blank node describing an inline one."""
        if "$ref" in schema:
            return self._schema_uri(_ref_name(schema["$ref"]))
        node = BNode()
        self._add_schema(node, schema)
        return node

    # ------------------------------------------------------------------
    # Schemas
    # ------------------------------------------------------------------

    def _add_schema(self, node: Node, schema: Dict[str, Any]) -> None:
        """Describe a schema object on ``node`` with the schema predicates."""
        vocab = OntologyVocabulary

        if "$ref" in schema:
            # A bare reference where a schema body is expected: single-member allOf
            self._add_literal(node, vocab.composition_ref("allOf", 0), self._sanitize_name(_ref_name(schema["$ref"])))
            return

        self._add_literal(node, vocab.SCHEMA_TYPE, schema.get("type"))
        self._add_literal(node, vocab.SCHEMA_FORMAT, schema.get("format"))
        self._add_literal(node, vocab.SCHEMA_TITLE, schema.get("title"))
        self._add_literal(node, vocab.SCHEMA_DESCRIPTION, schema.get("description"))
        if schema.get("enum"):
            self._add_literal(node, vocab.SCHEMA_ENUM, vocab.ENUM_SEPARATOR.join(str(v) for v in schema["enum"]))
        if schema.get("required"):
            self._add_literal(node, vocab.SCHEMA_REQUIRED_FIELDS, vocab.LIST_SEPARATOR.join(schema["required"]))

        for prop_name, prop_schema in (schema.get("properties") or {}).items():
            prop_node = BNode()
            self._add_link(node, vocab.HAS_SCHEMA_PROPERTY, prop_node)
            self._add_literal(prop_node, vocab.PROPERTY_NAME, prop_name)
            self._add_property(prop_node, prop_schema or {})

        items = schema.get("items")
        if isinstance(items, dict) and items:
            if "$ref" in items:
                self._add_literal(node, vocab.ITEMS_REF, self._sanitize_name(_ref_name(items["$ref"])))
            elif _is_primitive(items, SIMPLE_ITEMS_KEYS):
                self._add_literal(node, vocab.ITEMS_TYPE, items["type"])
                self._add_literal(node, vocab.ITEMS_FORMAT, items.get("format"))
            else:
                self._add_link(node, vocab.HAS_INLINE_ITEMS, self._schema_target(items))

        for operator in vocab.COMPOSITION_OPERATORS:
            for index, member in enumerate(schema.get(operator) or []):
                if "$ref" in member:
                    self._add_literal(
                        node,
                        vocab.composition_ref(operator, index),
                        self._sanitize_name(_ref_name(member["$ref"])),
                    )
                else:
                    self._add_link(node, vocab.composition_inline(operator, index), self._schema_target(member))

    def _add_property(self, prop_node: Node, schema: Dict[str, Any]) -> None:
        """Describe one property schema on its property node."""
        vocab = OntologyVocabulary

        if "$ref" in schema:
            self._add_literal(prop_node, vocab.PROPERTY_REF, self._sanitize_name(_ref_name(schema["$ref"])))
            return

        if schema.get("type") == "array" and set(schema) <= ARRAY_PROPERTY_KEYS:
            self._add_literal(prop_node, vocab.PROPERTY_TYPE, "array")
            self._add_literal(prop_node, vocab.PROPERTY_DESCRIPTION, schema.get("description"))
            items = schema.get("items") or {}
            if "$ref" in items:
                self._add_literal(prop_node, vocab.PROPERTY_REF, self._sanitize_name(_ref_name(items["$ref"])))
            elif _is_primitive(items, SIMPLE_ITEMS_KEYS):
                self._add_literal(prop_node, vocab.PROPERTY_ITEMS_TYPE, items["type"])
                self._add_literal(prop_node, vocab.PROPERTY_ITEMS_FORMAT, items.get("format"))
            elif items:
                self._add_link(prop_node, vocab.HAS_INLINE_SCHEMA, self._schema_target(items))
            return

        if _is_primitive(schema, SIMPLE_PROPERTY_KEYS):
            self._add_literal(prop_node, vocab.PROPERTY_TYPE, schema["type"])
            self._add_literal(prop_node, vocab.PROPERTY_FORMAT, schema.get("format"))
            if schema.get("enum"):
                self._add_literal(prop_node, vocab.PROPERTY_ENUM, vocab.ENUM_SEPARATOR.join(str(v) for v in schema["enum"]))
            self._add_literal(prop_node, vocab.PROPERTY_DESCRIPTION, schema.get("description"))
            return

        if schema:
            self._add_link(prop_node, vocab.HAS_INLINE_SCHEMA, self._schema_target(schema))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _add_parameter(self, op_node: URIRef, parameter: Dict[str, Any]) -> None:
        vocab = OntologyVocabulary
        if "$ref" in parameter or not parameter.get("name"):
            self._add_warning(f"Skipping unsupported parameter {parameter.get('$ref') or parameter}")
            return
        schema = parameter.get("schema") or {}
        param_node = BNode()
        self._add_link(op_node, vocab.HAS_PARAMETER, param_node)
        self._add_literal(param_node, vocab.PARAMETER_NAME, parameter["name"])
        self._add_literal(param_node, vocab.PARAMETER_IN, parameter.get("in", OpenAPIDefaults.DEFAULT_PARAMETER_LOCATION))
        self._add_literal(param_node, vocab.PARAMETER_REQUIRED, "true" if parameter.get("required") else "false")
        self._add_literal(param_node, vocab.PARAMETER_TYPE, schema.get("type"))
        self._add_literal(param_node, vocab.PARAMETER_FORMAT, schema.get("format"))
        if schema.get("enum"):
            self._add_literal(param_node, vocab.PARAMETER_ENUM, vocab.ENUM_SEPARATOR.join(str(v) for v in schema["enum"]))
        self._add_literal(param_node, vocab.PARAMETER_DESCRIPTION, parameter.get("description"))

    @staticmethod
    def _first_media(content: Optional[Dict[str, Any]]):
        """Return (content type, schema) of the first media type entry, or (None, None)."""
        for content_type, media in (content or {}).items():
            return content_type, (media or {}).get("schema")
        return None, None

    def _add_request_body(self, op_node: URIRef, request_body: Dict[str, Any]) -> None:
        vocab = OntologyVocabulary
        content_type, schema = self._first_media(request_body.get("content"))
        if schema is None:
            self._add_warning("Skipping request body without a schema")
            return
        self._add_link(op_node, vocab.HAS_REQUEST_BODY, self._schema_target(schema))
        self._add_literal(op_node, vocab.REQUEST_BODY_REQUIRED, "true" if request_body.get("required", True) else "false")
        self._add_literal(op_node, vocab.REQUEST_BODY_CONTENT_TYPE, content_type)

    def _add_response(self, op_node: URIRef, code: str, response: Dict[str, Any]) -> None:
        vocab = OntologyVocabulary
        response_node = BNode()
        relation = vocab.HAS_RESPONSE if str(code).startswith("2") else vocab.HAS_ERROR
        self._add_link(op_node, relation, response_node)
        self._add_literal(response_node, vocab.RESPONSE_CODE, code)
        self._add_literal(response_node, vocab.RESPONSE_DESCRIPTION, response.get("description"))
        content_type, schema = self._first_media(response.get("content"))
        if schema is not None:
            self._add_literal(response_node, vocab.RESPONSE_CONTENT_TYPE, content_type)
            self._add_link(response_node, vocab.HAS_RESPONSE_SCHEMA, self._schema_target(schema))

    def _add_operation(self, path: str, method: str, operation: Dict[str, Any]) -> None:
        vocab = OntologyVocabulary
        name = self._unique_name(operation.get("operationId") or f"{method}_{path}")
        op_node = self.ns[name]
        self._declare_class(op_node, vocab.PATHS)

        self._add_literal(op_node, vocab.PATH, path)
        self._add_literal(op_node, vocab.METHOD, method)
        self._add_literal(op_node, vocab.SUMMARY, operation.get("summary"))
        self._add_literal(op_node, vocab.DESCRIPTION, operation.get("description"))
        self._add_literal(op_node, vocab.OPERATION_ID, operation.get("operationId"))
        if operation.get("tags"):
            self._add_literal(op_node, vocab.TAGS, vocab.LIST_SEPARATOR.join(operation["tags"]))

        for parameter in operation.get("parameters") or []:
            self._add_parameter(op_node, parameter)
        if operation.get("requestBody"):
            self._add_request_body(op_node, operation["requestBody"])
        for code, response in (operation.get("responses") or {}).items():
            self._add_response(op_node, str(code), response or {})

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def _add_info(self, info: Dict[str, Any]) -> None:
        vocab = OntologyVocabulary
        info_node = self.ns[vocab.INFO]
        self.graph.add((info_node, RDF.type, OWL.Class))
        self._add_literal(info_node, vocab.TITLE, info.get("title"))
        self._add_literal(info_node, vocab.VERSION, info.get("version"))
        self._add_literal(info_node, vocab.DESCRIPTION, info.get("description"))
        services = info.get(vocab.DS_SERVICE)
        if isinstance(services, list):
            services = vocab.LIST_SEPARATOR.join(str(s) for s in services)
        self._add_literal(info_node, vocab.DS_SERVICE, services)
        self._add_literal(info_node, vocab.DS_COPYRIGHT, info.get(vocab.DS_COPYRIGHT))

    def convert(self, openapi_document: Dict[str, Any]) -> str:
        """
        Convert an OpenAPI document to TTL.

        Args:
            openapi_document: The OpenAPI 3.0 document (parsed JSON)

        Returns:
            TTL string using the fine annotation vocabulary

        Raises:
            TypeError: If the document is not a JSON object
        """
        if not isinstance(openapi_document, dict):
            raise TypeError(f"OpenAPI document must be an object, got {type(openapi_document).__name__}")

        vocab = OntologyVocabulary
        self.graph = Graph()
        self.used_names = set()
        self.warnings = []
        self._setup_namespaces()

        for structural in (vocab.PATHS, vocab.SERVERS, vocab.SCHEMA_PARENTS[0]):
            self.graph.add((self.ns[structural], RDF.type, OWL.Class))

        self._add_info(openapi_document.get("info") or {})

        for index, server in enumerate(openapi_document.get("servers") or []):
            server_node = self.ns[self._unique_name(f"server_{index}")]
            self._declare_class(server_node, vocab.SERVERS)
            self._add_literal(server_node, vocab.URL, server.get("url"))

        schemas = (openapi_document.get("components") or {}).get("schemas") or {}
        for name in schemas:
            self.used_names.add(self._sanitize_name(name))
        for name, schema in schemas.items():
            schema_node = self._schema_uri(name)
            self._declare_class(schema_node, vocab.SCHEMA_PARENTS[0])
            self._add_schema(schema_node, schema or {})

        operation_count = 0
        for path, path_item in (openapi_document.get("paths") or {}).items():
            for method, operation in (path_item or {}).items():
                if method.lower() not in OpenAPIDefaults.HTTP_METHODS:
                    continue
                self._add_operation(path, method.lower(), operation or {})
                operation_count += 1

        logger.info(
            f"Converting {len(schemas)} schemas and {operation_count} operations to TTL"
        )
        ttl_output = self.graph.serialize(format='turtle')
        logger.info(f"Generated TTL with {len(self.graph)} triples")
        return ttl_output

    def convert_file(self, input_path: Union[str, Path], output_path: Optional[str] = None) -> str:
        """
        Convert an OpenAPI JSON file to TTL.

        Args:
            input_path: Path to the OpenAPI JSON document
            output_path: Optional path to write the TTL output

        Raises:
            ValueError: If path traversal detected or invalid extension
            FileNotFoundError: If input file not found
            PermissionError: If file not readable/writable
        """
        validated_input_path = InputValidator.validate_input_openapi_path(input_path)

        with open(validated_input_path, 'r', encoding='utf-8') as f:
            openapi_document = json.load(f)

        ttl_output = self.convert(openapi_document)

        if output_path:
            validated_output_path = InputValidator.validate_output_file_path(
                output_path,
                allowed_extensions=InputValidator.TTL_OUTPUT_EXTENSIONS,
            )
            with open(validated_output_path, 'w', encoding='utf-8') as f:
                f.write(ttl_output)
            logger.info(f"Saved TTL to {validated_output_path}")

        return ttl_output


def _normalize_schema(schema: Any) -> Any:
    """Comparable view of a schema: $ref siblings dropped, enum values as strings."""
    if isinstance(schema, list):
        return [_normalize_schema(item) for item in schema]
    if not isinstance(schema, dict):
        return schema
    if "$ref" in schema:
        return {"$ref": schema["$ref"]}
    normalized: Dict[str, Any] = {}
    for key, value in schema.items():
        if key == "enum":
            normalized[key] = [str(v) for v in value]
        elif key == "properties":
            normalized[key] = {name: _normalize_schema(sub) for name, sub in value.items()}
        else:
            normalized[key] = _normalize_schema(value)
    return normalized


def _operations(document: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    found: Dict[str, Dict[str, Any]] = {}
    for path, path_item in (document.get("paths") or {}).items():
        for method, operation in (path_item or {}).items():
            if method.lower() in OpenAPIDefaults.HTTP_METHODS:
                found[f"{method.upper()} {path}"] = operation or {}
    return found


def _set_comparison(first: Set[str], second: Set[str]) -> Dict[str, Any]:
    return {
        "count1": len(first),
        "count2": len(second),
        "only_in_first": sorted(first - second),
        "only_in_second": sorted(second - first),
        "match": first == second,
    }


def compare_documents(original: Dict[str, Any], reconstructed: Dict[str, Any]) -> Dict[str, Any]:
    """
    Compare two OpenAPI documents and return differences.

    Schemas are compared by name and by normalized body; operations by
    (method, path), parameter names, response codes and request body
    presence.

    Returns:
        Dict with comparison results including:
        - matches / is_equivalent: bool
        - schemas: name set comparison
        - schema_mismatches: names present in both whose bodies differ
        - operations: (method, path) set comparison
        - operation_mismatches: operations present in both whose shape differs
    """
    schemas1 = (original.get("components") or {}).get("schemas") or {}
    schemas2 = (reconstructed.get("components") or {}).get("schemas") or {}

    schema_mismatches = sorted(
        name for name in set(schemas1) & set(schemas2)
        if _normalize_schema(schemas1[name]) != _normalize_schema(schemas2[name])
    )

    operations1 = _operations(original)
    operations2 = _operations(reconstructed)

    def shape(operation: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "parameters": sorted(
                p.get("name", "") for p in operation.get("parameters") or [] if isinstance(p, dict)
            ),
            "responses": sorted(str(code) for code in (operation.get("responses") or {})),
            "request_body": "requestBody" in operation,
        }

    operation_mismatches = sorted(
        key for key in set(operations1) & set(operations2)
        if shape(operations1[key]) != shape(operations2[key])
    )

    result: Dict[str, Any] = {
        "schemas": _set_comparison(set(schemas1), set(schemas2)),
        "schema_mismatches": schema_mismatches,
        "operations": _set_comparison(set(operations1), set(operations2)),
        "operation_mismatches": operation_mismatches,
        "info_match": (original.get("info") or {}).get("title") == (reconstructed.get("info") or {}).get("title"),
    }
    result["matches"] = (
        result["schemas"]["match"]
        and not schema_mismatches
        and result["operations"]["match"]
        and not operation_mismatches
    )
    result["is_equivalent"] = result["matches"]
    return result


def round_trip_test(
    openapi_document: Dict[str, Any],
    base_namespace: str = OntologyVocabulary.DEFAULT_NAMESPACE,
) -> Dict[str, Any]:
    """
    Perform a round-trip test: OpenAPI -> TTL -> OpenAPI and compare.

    Returns:
        Dict with ``success``, ``comparison`` (from compare_documents),
        ``exported_ttl`` and ``reconstructed``; on failure ``success`` is
        False and ``error`` holds the message.
    """
    from .owl_converter import OWLToOpenAPIConverter

    try:
        exporter = OpenAPIToTTLConverter(base_namespace=base_namespace)
        exported_ttl = exporter.convert(openapi_document)
        logger.info("Round-trip test: Exported document to TTL")

        converter = OWLToOpenAPIConverter(
            convention=ConventionConfig.FINE,
            inline_references=False,
            base_namespace=base_namespace,
        )
        result = converter.convert(exported_ttl)
        reconstructed = result.document.to_dict()
        logger.info("Round-trip test: Reconstructed document from TTL")

        return {
            "success": True,
            "comparison": compare_documents(openapi_document, reconstructed),
            "exported_ttl": exported_ttl,
            "reconstructed": reconstructed,
            "warnings": exporter.warnings + result.warnings,
        }
    except (ValueError, TypeError, KeyError, MemoryError) as e:
        logger.error(f"Round-trip test failed: {e}")
        return {
            "success": False,
            "error": str(e),
            "comparison": None,
        }


def export_openapi_to_ttl(
    openapi_document: Dict[str, Any],
    output_path: Optional[str] = None,
    base_namespace: str = OntologyVocabulary.DEFAULT_NAMESPACE,
) -> str:
    """
    Export an OpenAPI document to TTL.

    Raises:
        ValueError: If path traversal detected in output_path
        PermissionError: If output directory not writable
    """
    converter = OpenAPIToTTLConverter(base_namespace=base_namespace)
    ttl_output = converter.convert(openapi_document)

    if output_path:
        validated_output_path = InputValidator.validate_output_file_path(
            output_path,
            allowed_extensions=InputValidator.TTL_OUTPUT_EXTENSIONS,
        )
        with open(validated_output_path, 'w', encoding='utf-8') as f:
            f.write(ttl_output)
        logger.info(f"Exported ontology to {output_path}")

    return ttl_output
