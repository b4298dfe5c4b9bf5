"""
Schema data types.

This module defines the language-neutral schema tree produced by the
ontology readers and consumed by the OpenAPI document model:

- SchemaNode: one schema (primitive, array, object or composition)
- NamedRef / InlineRef: the two shapes a reference to a schema can take
- ComponentTable: run-scoped registry of named (shared) schemas

Reference:
    https://spec.openapis.org/oas/v3.0.3#schema-object
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from constants import OpenAPIDefaults

logger = logging.getLogger(__name__)


class SchemaKind(str, Enum):
    """Structural category of a schema node."""
    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"
    COMPOSED = "composed"


@dataclass(frozen=True)
class NamedRef:
    """
    Reference to a schema registered in the component table.

    Only the name is stored; resolution happens through the table so that
    self-referential and mutually-referential schemas never form object cycles.

    Example:
        >>> NamedRef("User").to_dict()
        {'$ref': '#/components/schemas/User'}
    """
    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to OpenAPI reference object."""
        return {"$ref": f"{OpenAPIDefaults.SCHEMA_REF_PREFIX}{self.name}"}


@dataclass
class InlineRef:
    """A schema embedded at its use site (originates from an anonymous node)."""
    node: "SchemaNode"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an inline OpenAPI schema object."""
        return self.node.to_dict()


SchemaRef = Union[NamedRef, InlineRef]


@dataclass
class SchemaNode:
    """
    Represents one schema in the reconstructed API description.

    Attributes:
        type: Type tag ("string", "integer", "number", "boolean", "array",
            "object"), or None for pure compositions and untyped schemas.
        format: Optional format qualifier (e.g. "date-time", "int64").
        title: Optional title.
        description: Optional description.
        enum_values: Allowed values, in declaration order.
        properties: Property name to schema reference, in insertion order.
        items: Item schema for arrays.
        required_fields: Names of required properties. Always a subset of
            the keys of ``properties``.
        one_of: Ordered ``oneOf`` alternatives.
        all_of: Ordered ``allOf`` members.

    Example:
        >>> node = SchemaNode()
        >>> node.add_property("name", InlineRef(SchemaNode.primitive("string")))
        >>> node.add_required("name")
        True
        >>> node.to_dict()
        {'type': 'object', 'required': ['name'], 'properties': {'name': {'type': 'string'}}}
    """
    type: Optional[str] = "object"
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    enum_values: List[str] = field(default_factory=list)
    properties: Dict[str, SchemaRef] = field(default_factory=dict)
    items: Optional[SchemaRef] = None
    required_fields: List[str] = field(default_factory=list)
    one_of: List[SchemaRef] = field(default_factory=list)
    all_of: List[SchemaRef] = field(default_factory=list)

    @classmethod
    def primitive(
        cls,
        type_name: str,
        format: Optional[str] = None,
        enum_values: Optional[List[str]] = None,
    ) -> "SchemaNode":
        """Create a primitive schema such as ``{"type": "string"}``."""
        return cls(type=type_name, format=format, enum_values=list(enum_values or []))

    @classmethod
    def array_of(cls, items: SchemaRef) -> "SchemaNode":
        """Create an array schema with the given item schema."""
        return cls(type="array", items=items)

    @classmethod
    def untyped(cls) -> "SchemaNode":
        """Create an empty schema (serializes to ``{}``)."""
        return cls(type=None)

    @property
    def kind(self) -> SchemaKind:
        """Structural kind derived from the populated attributes."""
        if self.one_of or self.all_of:
            return SchemaKind.COMPOSED
        if self.type == "array":
            return SchemaKind.ARRAY
        if self.type in OpenAPIDefaults.PRIMITIVE_TYPES:
            return SchemaKind.PRIMITIVE
        return SchemaKind.OBJECT

    def add_property(self, name: str, ref: SchemaRef) -> None:
        """Add or overwrite a property. Overwrites keep the original position."""
        if name in self.properties:
            logger.debug(f"Property '{name}' redefined, last definition wins")
        self.properties[name] = ref

    def add_required(self, name: str) -> bool:
        """
        Mark a property as required.

        Returns:
            True if the name was recorded, False if it is not a property
            (such names are ignored).
        """
        if name not in self.properties:
            logger.debug(f"Ignoring required field '{name}': no such property")
            return False
        if name not in self.required_fields:
            self.required_fields.append(name)
        return True

    def child_refs(self) -> Iterator[Tuple[str, SchemaRef]]:
        """Yield ``(slot, ref)`` for every directly nested schema reference."""
        for name, ref in self.properties.items():
            yield f"properties.{name}", ref
        if self.items is not None:
            yield "items", self.items
        for index, ref in enumerate(self.one_of):
            yield f"oneOf[{index}]", ref
        for index, ref in enumerate(self.all_of):
            yield f"allOf[{index}]", ref

    def named_refs(self) -> List[str]:
        """Names of all NamedRefs reachable from this node (depth-first, without duplicates)."""
        found: List[str] = []
        stack: List[SchemaRef] = [ref for _, ref in self.child_refs()]
        while stack:
            ref = stack.pop(0)
            if isinstance(ref, NamedRef):
                if ref.name not in found:
                    found.append(ref.name)
            else:
                stack.extend(child for _, child in ref.node.child_refs())
        return found

    def to_dict(self) -> Dict[str, Any]:
        """Convert to OpenAPI schema object."""
        result: Dict[str, Any] = {}
        if self.type:
            result["type"] = self.type
        if self.format:
            result["format"] = self.format
        if self.title:
            result["title"] = self.title
        if self.description:
            result["description"] = self.description
        if self.enum_values:
            result["enum"] = list(self.enum_values)
        if self.required_fields:
            result["required"] = list(self.required_fields)
        if self.properties:
            result["properties"] = {
                name: ref.to_dict() for name, ref in self.properties.items()
            }
        if self.items is not None:
            result["items"] = self.items.to_dict()
        if self.one_of:
            result["oneOf"] = [ref.to_dict() for ref in self.one_of]
        if self.all_of:
            result["allOf"] = [ref.to_dict() for ref in self.all_of]
        return result


class ComponentTable:
    """
    Run-scoped registry of named schemas (``components/schemas``).

    Names are unique and the table is append-only: registering a name that
    already exists keeps the first definition.
    """

    def __init__(self) -> None:
        self._schemas: Dict[str, SchemaNode] = {}

    def register(self, name: str, node: SchemaNode) -> bool:
        """
        Register a named schema.

        Returns:
            True if added, False if the name was already present.
        """
        if not name:
            raise ValueError("Schema name cannot be empty")
        if name in self._schemas:
            logger.debug(f"Schema '{name}' already registered, keeping first definition")
            return False
        self._schemas[name] = node
        return True

    def get(self, name: str) -> Optional[SchemaNode]:
        return self._schemas.get(name)

    def names(self) -> List[str]:
        return list(self._schemas)

    def items(self) -> List[Tuple[str, SchemaNode]]:
        return list(self._schemas.items())

    def dangling_refs(self) -> Dict[str, List[str]]:
        """Map each schema name to the referenced names missing from the table."""
        missing: Dict[str, List[str]] = {}
        for name, node in self._schemas.items():
            absent = [ref for ref in node.named_refs() if ref not in self._schemas]
            if absent:
                missing[name] = absent
        return missing

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComponentTable):
            return NotImplemented
        return self._schemas == other._schemas

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``components/schemas`` mapping."""
        return {name: node.to_dict() for name, node in self._schemas.items()}
