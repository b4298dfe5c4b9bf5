"""
OpenAPI 3.0 document types.

This module defines the operation-level object model that the converter
assembles around the schema tree: parameters, request bodies, responses,
operations grouped by path, and the top-level document.

Reference:
    https://spec.openapis.org/oas/v3.0.3
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from constants import OpenAPIDefaults

from .schema_types import ComponentTable, SchemaNode, SchemaRef

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    """HTTP methods supported as OpenAPI operations."""
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    HEAD = "head"
    OPTIONS = "options"

    @classmethod
    def parse(cls, value: Optional[str]) -> "HttpMethod":
        """
        Parse a method literal, case-insensitively.

        Missing or unrecognized values fall back to GET.
        """
        if not value:
            return cls.GET
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.debug(f"Unrecognized HTTP method '{value}', defaulting to get")
            return cls.GET


class ParameterLocation(str, Enum):
    """Where an operation parameter is carried."""
    HEADER = "header"
    QUERY = "query"
    PATH = "path"
    COOKIE = "cookie"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ParameterLocation":
        """Parse a location literal; unknown values fall back to query."""
        if not value:
            return cls(OpenAPIDefaults.DEFAULT_PARAMETER_LOCATION)
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.debug(f"Unrecognized parameter location '{value}', defaulting to query")
            return cls(OpenAPIDefaults.DEFAULT_PARAMETER_LOCATION)


def _media_content(schema: SchemaRef, content_type: str) -> Dict[str, Any]:
    return {content_type: {"schema": schema.to_dict()}}


@dataclass
class Parameter:
    """
    A single operation parameter.

    Attributes:
        name: Parameter name.
        location: header / query / path / cookie.
        required: Whether the parameter is mandatory.
        schema: Primitive schema (type, format, enum).
        description: Optional description.
    """
    name: str
    location: ParameterLocation
    required: bool = False
    schema: SchemaNode = field(default_factory=lambda: SchemaNode.primitive("string"))
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to OpenAPI parameter object."""
        result: Dict[str, Any] = {
            "name": self.name,
            "in": self.location.value,
        }
        if self.description:
            result["description"] = self.description
        if self.required:
            result["required"] = True
        result["schema"] = self.schema.to_dict()
        return result


@dataclass
class RequestBody:
    """Request body of an operation."""
    schema: SchemaRef
    required: bool = True
    content_type: str = OpenAPIDefaults.CONTENT_TYPE
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.description:
            result["description"] = self.description
        result["content"] = _media_content(self.schema, self.content_type)
        if self.required:
            result["required"] = True
        return result


@dataclass
class Response:
    """One response entry; ``schema`` is None for responses without a body."""
    description: str
    schema: Optional[SchemaRef] = None
    content_type: str = OpenAPIDefaults.CONTENT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"description": self.description}
        if self.schema is not None:
            result["content"] = _media_content(self.schema, self.content_type)
        return result


@dataclass
class Operation:
    """
    Represents one API operation (a method on a path).

    Attributes:
        method: HTTP method.
        path: URL template, e.g. ``/users/{id}``.
        summary: Short summary.
        description: Long description.
        operation_id: Unique operation identifier.
        tags: Tag names, in declaration order.
        parameters: Ordered parameter list.
        request_body: Optional request body.
        responses: Status code string to response.
    """
    method: HttpMethod
    path: str
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    parameters: List[Parameter] = field(default_factory=list)
    request_body: Optional[RequestBody] = None
    responses: Dict[str, Response] = field(default_factory=dict)

    @property
    def has_success_response(self) -> bool:
        """True if any 2xx response is defined."""
        return any(code.startswith("2") for code in self.responses)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to OpenAPI operation object."""
        result: Dict[str, Any] = {}
        if self.tags:
            result["tags"] = list(self.tags)
        if self.summary:
            result["summary"] = self.summary
        if self.description:
            result["description"] = self.description
        if self.operation_id:
            result["operationId"] = self.operation_id
        if self.parameters:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        if self.request_body is not None:
            result["requestBody"] = self.request_body.to_dict()
        result["responses"] = {
            code: response.to_dict() for code, response in self.responses.items()
        }
        return result


@dataclass
class PathItem:
    """Operations sharing one path, keyed by method (at most one per method)."""
    operations: Dict[HttpMethod, Operation] = field(default_factory=dict)

    def set_operation(self, operation: Operation) -> None:
        """Add an operation; an existing operation for the same method is replaced."""
        if operation.method in self.operations:
            logger.debug(
                f"Operation {operation.method.value.upper()} {operation.path} "
                f"defined more than once, last definition wins"
            )
        self.operations[operation.method] = operation

    def to_dict(self) -> Dict[str, Any]:
        return {
            method.value: self.operations[method].to_dict()
            for method in HttpMethod
            if method in self.operations
        }


@dataclass
class Server:
    """A server entry."""
    url: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"url": self.url}
        if self.description:
            result["description"] = self.description
        return result


@dataclass
class ApiInfo:
    """
    The ``info`` block.

    ``extensions`` holds ``x-*`` vendor extensions, written after the
    standard fields.
    """
    title: str = OpenAPIDefaults.DEFAULT_TITLE
    version: str = OpenAPIDefaults.DEFAULT_VERSION
    description: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"title": self.title}
        if self.description:
            result["description"] = self.description
        result["version"] = self.version
        result.update(self.extensions)
        return result


@dataclass
class OpenAPIDocument:
    """
    A complete OpenAPI 3.0 document.

    Example:
        >>> doc = OpenAPIDocument()
        >>> doc.add_operation(Operation(method=HttpMethod.GET, path="/ping"))
        >>> sorted(doc.to_dict()["paths"])
        ['/ping']
    """
    info: ApiInfo = field(default_factory=ApiInfo)
    servers: List[Server] = field(default_factory=list)
    paths: Dict[str, PathItem] = field(default_factory=dict)
    components: ComponentTable = field(default_factory=ComponentTable)
    openapi: str = OpenAPIDefaults.OPENAPI_VERSION

    def add_operation(self, operation: Operation) -> None:
        """Attach an operation under its path, creating the path item if needed."""
        path_item = self.paths.setdefault(operation.path, PathItem())
        path_item.set_operation(operation)

    def get_operation(self, path: str, method: HttpMethod) -> Optional[Operation]:
        path_item = self.paths.get(path)
        if path_item is None:
            return None
        return path_item.operations.get(method)

    @property
    def operation_count(self) -> int:
        return sum(len(item.operations) for item in self.paths.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the OpenAPI JSON object."""
        result: Dict[str, Any] = {
            "openapi": self.openapi,
            "info": self.info.to_dict(),
        }
        if self.servers:
            result["servers"] = [s.to_dict() for s in self.servers]
        result["paths"] = {path: item.to_dict() for path, item in self.paths.items()}
        result["components"] = {"schemas": self.components.to_dict()}
        return result
