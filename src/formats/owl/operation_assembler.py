"""
Operation Assembler Module

Builds one Operation per path node (a subclass of ``:paths``): method and
descriptive fields, parameters, request body and the response map.

Components:
- infer_error_status_code: status code heuristic for error schemas
- CoarseParameterReader / FineParameterReader: header or typed parameters
- OperationAssembler: assembles complete operations for either convention
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from rdflib.term import Node

from constants import ConventionConfig, OntologyVocabulary, OpenAPIDefaults
from shared.models import (
    HttpMethod,
    NamedRef,
    Operation,
    Parameter,
    ParameterLocation,
    RequestBody,
    Response,
    SchemaNode,
    SchemaRef,
)

from .graph_access import OntologyGraph, parse_bool_literal, parse_list_literal

logger = logging.getLogger(__name__)

SkipCallback = Callable[[str, str, str, str], None]


def infer_error_status_code(name: str) -> str:
    """
    Infer the HTTP status of an error schema from its name.

    The first of "401", "403", "404", "500" found as a substring wins;
    anything else maps to "400".

    >>> infer_error_status_code("NotFoundError_404")
    '404'
    >>> infer_error_status_code("GenericError")
    '400'
    """
    for code in OpenAPIDefaults.ERROR_STATUS_CODES:
        if code in name:
            return code
    return OpenAPIDefaults.DEFAULT_ERROR_CODE


class CoarseParameterReader:
    """
    Reads ``hasHeader`` nodes into header parameters.

    Each header node lists names in ``field_string``, ``field_bool`` and
    ``field_integer``; a token ``name:anything`` contributes ``name``.
    A parameter is required when its name appears in ``field_required``
    (case-insensitive).
    """

    TYPED_FIELDS = (
        (OntologyVocabulary.FIELD_STRING, "string"),
        (OntologyVocabulary.FIELD_BOOL, "boolean"),
        (OntologyVocabulary.FIELD_INTEGER, "integer"),
    )

    @staticmethod
    def token_name(token: str) -> str:
        return token.split(":", 1)[0].strip()

    @classmethod
    def read(cls, graph: OntologyGraph, path_node: Node) -> List[Parameter]:
        parameters: List[Parameter] = []
        for header_node in graph.objects(path_node, OntologyVocabulary.HAS_HEADER):
            required = {
                name.lower()
                for name in parse_list_literal(
                    graph.literal(header_node, OntologyVocabulary.FIELD_REQUIRED)
                )
            }
            for predicate_name, type_name in cls.TYPED_FIELDS:
                for token in parse_list_literal(graph.literal(header_node, predicate_name)):
                    name = cls.token_name(token)
                    if not name:
                        continue
                    parameters.append(Parameter(
                        name=name,
                        location=ParameterLocation.HEADER,
                        required=name.lower() in required,
                        schema=SchemaNode.primitive(type_name),
                    ))
        return parameters


class FineParameterReader:
    """Reads ``hasParameter`` nodes carrying one predicate per attribute."""

    @staticmethod
    def read(
        graph: OntologyGraph,
        path_node: Node,
        skip_callback: Optional[SkipCallback] = None,
    ) -> List[Parameter]:
        vocab = OntologyVocabulary
        parameters: List[Parameter] = []
        for param_node in graph.objects(path_node, vocab.HAS_PARAMETER):
            name = graph.literal(param_node, vocab.PARAMETER_NAME)
            if not name or not name.strip():
                if skip_callback:
                    skip_callback(
                        "parameter",
                        graph.stable_name(param_node),
                        "Parameter node has no parameterName",
                        str(param_node),
                    )
                continue

            location = ParameterLocation.parse(graph.literal(param_node, vocab.PARAMETER_IN))
            required = parse_bool_literal(graph.literal(param_node, vocab.PARAMETER_REQUIRED))
            if location == ParameterLocation.PATH:
                required = True

            parameters.append(Parameter(
                name=name.strip(),
                location=location,
                required=required,
                schema=SchemaNode.primitive(
                    graph.literal(param_node, vocab.PARAMETER_TYPE) or "string",
                    format=graph.literal(param_node, vocab.PARAMETER_FORMAT),
                    enum_values=parse_list_literal(
                        graph.literal(param_node, vocab.PARAMETER_ENUM), vocab.ENUM_SEPARATOR
                    ),
                ),
                description=graph.literal(param_node, vocab.PARAMETER_DESCRIPTION),
            ))

        location_order = list(ParameterLocation)
        parameters.sort(key=lambda p: (location_order.index(p.location), p.name))
        return parameters


class OperationAssembler:
    """
    Assembles Operations from path nodes.

    Args:
        graph: Graph facade to query
        convention: "coarse" or "fine"
        build_ref: Turns the target of a schema relation into a SchemaRef.
            Defaults to a NamedRef on the target's name.
        skip_callback: Optional callback for skipped items (item_type, name, reason, uri)
    """

    def __init__(
        self,
        graph: OntologyGraph,
        convention: str = ConventionConfig.COARSE,
        build_ref: Optional[Callable[[Node], SchemaRef]] = None,
        skip_callback: Optional[SkipCallback] = None,
    ) -> None:
        self.graph = graph
        self.convention = convention
        self.build_ref = build_ref or (lambda target: NamedRef(graph.stable_name(target)))
        self.skip_callback = skip_callback

    @property
    def is_fine(self) -> bool:
        return self.convention == ConventionConfig.FINE

    def _skip(self, item_type: str, name: str, reason: str, uri: str) -> None:
        if self.skip_callback:
            self.skip_callback(item_type, name, reason, uri)

    def path_nodes(self) -> List[Node]:
        """Distinct subclasses of ``:paths``."""
        return self.graph.subclasses_of(OntologyVocabulary.PATHS)

    def assemble(self, path_node: Node) -> Optional[Operation]:
        """
        Build the operation described by one path node.

        Returns:
            The Operation, or None if the node has no ``:path`` literal
        """
        vocab = OntologyVocabulary
        graph = self.graph
        node_name = graph.stable_name(path_node)

        path = graph.literal(path_node, vocab.PATH)
        if not path or not path.strip():
            self._skip("path", node_name, "Path node has no path literal", str(path_node))
            return None

        operation = Operation(
            method=HttpMethod.parse(graph.literal(path_node, vocab.METHOD)),
            path=path.strip(),
            summary=graph.literal(path_node, vocab.SUMMARY),
            description=graph.literal(path_node, vocab.DESCRIPTION),
            operation_id=graph.literal(path_node, vocab.OPERATION_ID),
            tags=parse_list_literal(graph.literal(path_node, vocab.TAGS)),
        )

        if self.is_fine:
            operation.parameters = FineParameterReader.read(graph, path_node, self.skip_callback)
        else:
            operation.parameters = CoarseParameterReader.read(graph, path_node)

        operation.request_body = self._request_body(path_node)
        operation.responses = self._responses(path_node)

        logger.debug(
            f"Assembled {operation.method.value.upper()} {operation.path} "
            f"({len(operation.parameters)} parameters, {len(operation.responses)} responses)"
        )
        return operation

    def _request_body(self, path_node: Node) -> Optional[RequestBody]:
        vocab = OntologyVocabulary
        target = self.graph.first_object(path_node, vocab.HAS_REQUEST_BODY)
        if target is None:
            return None

        body = RequestBody(schema=self.build_ref(target))
        if self.is_fine:
            required = self.graph.literal(path_node, vocab.REQUEST_BODY_REQUIRED)
            if required is not None:
                body.required = parse_bool_literal(required)
            body.content_type = (
                self.graph.literal(path_node, vocab.REQUEST_BODY_CONTENT_TYPE)
                or OpenAPIDefaults.CONTENT_TYPE
            )
        return body

    def _responses(self, path_node: Node) -> Dict[str, Response]:
        if self.is_fine:
            responses = self._fine_responses(path_node)
        else:
            responses = self._coarse_responses(path_node)
        return dict(sorted(responses.items()))

    def _coarse_responses(self, path_node: Node) -> Dict[str, Response]:
        vocab = OntologyVocabulary
        responses: Dict[str, Response] = {}

        # Every hasResponse target claims "200"; the last one wins
        for target in self.graph.objects(path_node, vocab.HAS_RESPONSE):
            responses[OpenAPIDefaults.SUCCESS_CODE] = Response(
                description=OpenAPIDefaults.SUCCESS_DESCRIPTION,
                schema=self.build_ref(target),
            )
        if OpenAPIDefaults.SUCCESS_CODE not in responses:
            responses[OpenAPIDefaults.SUCCESS_CODE] = Response(
                description=OpenAPIDefaults.EMPTY_SUCCESS_DESCRIPTION,
            )

        for target in self.graph.objects(path_node, vocab.HAS_ERROR):
            code = infer_error_status_code(self.graph.stable_name(target))
            responses[code] = Response(description=f"Error {code}", schema=self.build_ref(target))
        return responses

    def _is_response_node(self, node: Node) -> bool:
        vocab = OntologyVocabulary
        return (
            self.graph.literal(node, vocab.RESPONSE_CODE) is not None
            or self.graph.literal(node, vocab.RESPONSE_DESCRIPTION) is not None
            or self.graph.first_object(node, vocab.HAS_RESPONSE_SCHEMA) is not None
        )

    def _read_response_node(
        self,
        node: Node,
        default_code: str,
        describe: Callable[[str], str],
    ) -> Tuple[str, Response]:
        vocab = OntologyVocabulary
        graph = self.graph
        code = (graph.literal(node, vocab.RESPONSE_CODE) or default_code).strip()
        schema_target = graph.first_object(node, vocab.HAS_RESPONSE_SCHEMA)
        response = Response(
            description=graph.literal(node, vocab.RESPONSE_DESCRIPTION) or describe(code),
            schema=self.build_ref(schema_target) if schema_target is not None else None,
            content_type=(
                graph.literal(node, vocab.RESPONSE_CONTENT_TYPE) or OpenAPIDefaults.CONTENT_TYPE
            ),
        )
        return code, response

    def _fine_responses(self, path_node: Node) -> Dict[str, Response]:
        vocab = OntologyVocabulary
        graph = self.graph
        responses: Dict[str, Response] = {}

        for target in graph.objects(path_node, vocab.HAS_RESPONSE):
            if self._is_response_node(target):
                code, response = self._read_response_node(
                    target,
                    OpenAPIDefaults.SUCCESS_CODE,
                    lambda _code: OpenAPIDefaults.SUCCESS_DESCRIPTION,
                )
            else:
                # A schema linked directly stands for the success payload
                code = OpenAPIDefaults.SUCCESS_CODE
                response = Response(
                    description=OpenAPIDefaults.SUCCESS_DESCRIPTION,
                    schema=self.build_ref(target),
                )
            responses[code] = response

        for target in graph.objects(path_node, vocab.HAS_ERROR):
            inferred = infer_error_status_code(graph.stable_name(target))
            if self._is_response_node(target):
                code, response = self._read_response_node(
                    target, inferred, lambda explicit: f"Error {explicit}"
                )
            else:
                code = inferred
                response = Response(description=f"Error {code}", schema=self.build_ref(target))
            responses[code] = response

        if not any(code.startswith("2") for code in responses):
            responses[OpenAPIDefaults.SUCCESS_CODE] = Response(
                description=OpenAPIDefaults.EMPTY_SUCCESS_DESCRIPTION,
            )
        return responses
