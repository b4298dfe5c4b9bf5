"""
Schema Node Builder Module

Reads the annotation facts attached to one graph node and produces a
SchemaNode. Two strategies exist, one per annotation convention:

- CoarseSchemaBuilder: comma-separated ``field_*`` lists plus ``has*``
  relations (object and array properties referencing other schemas)
- FineSchemaBuilder: one predicate per attribute, explicit property nodes,
  indexed ``oneOf``/``allOf`` families and nested anonymous schemas

A run selects one strategy and uses it for every schema node.
"""

import logging
from typing import Callable, List, Optional, Protocol, Set, Tuple, runtime_checkable

from rdflib.term import Node

from constants import OntologyVocabulary, ProcessingLimits
from shared.models import InlineRef, NamedRef, SchemaNode, SchemaRef

from .composition_resolver import CompositionSequenceResolver
from .graph_access import OntologyGraph, parse_list_literal
from .property_mapper import PropertyRelationMapper

logger = logging.getLogger(__name__)

SkipCallback = Callable[[str, str, str, str], None]
WarningCallback = Callable[[str], None]


@runtime_checkable
class SchemaBuilderProtocol(Protocol):
    """Builds the schema for one graph node."""

    convention: str

    def build_schema(self, node: Node) -> SchemaNode:
        ...


class CoarseSchemaBuilder:
    """
    Builds schemas from the comma-separated ``field_*`` annotations.

    Handles:
    - ``field_string``: string properties
    - ``field_stringArray``: array-of-string properties
    - ``field_required``: required names (exact match)
    - ``field_array`` + ``has*`` relations: nested schema references
    """

    convention = "coarse"

    def __init__(
        self,
        graph: OntologyGraph,
        skip_callback: Optional[SkipCallback] = None,
        warning_callback: Optional[WarningCallback] = None,
    ) -> None:
        self.graph = graph
        self.skip_callback = skip_callback
        self.warning_callback = warning_callback

    def _add_fields(
        self,
        schema: SchemaNode,
        names: List[str],
        required: List[str],
        make_schema: Callable[[], SchemaNode],
    ) -> None:
        for name in names:
            schema.add_property(name, InlineRef(make_schema()))
            if name in required:
                schema.add_required(name)

    def build_schema(self, node: Node) -> SchemaNode:
        schema = SchemaNode()
        vocab = OntologyVocabulary

        required = parse_list_literal(self.graph.literal(node, vocab.FIELD_REQUIRED))

        self._add_fields(
            schema,
            parse_list_literal(self.graph.literal(node, vocab.FIELD_STRING)),
            required,
            lambda: SchemaNode.primitive("string"),
        )
        self._add_fields(
            schema,
            parse_list_literal(self.graph.literal(node, vocab.FIELD_STRING_ARRAY)),
            required,
            lambda: SchemaNode.array_of(InlineRef(SchemaNode.primitive("string"))),
        )

        array_properties = PropertyRelationMapper.normalize_array_properties(
            parse_list_literal(self.graph.literal(node, vocab.FIELD_ARRAY))
        )
        PropertyRelationMapper.map_relations(self.graph, node, schema, array_properties)

        logger.debug(
            f"Built coarse schema {self.graph.stable_name(node)} "
            f"with {len(schema.properties)} properties"
        )
        return schema


class FineSchemaBuilder:
    """
    Builds schemas from the per-attribute annotation predicates.

    Anonymous (blank) nodes reached through ``hasInlineSchema*`` relations are
    built recursively and embedded as InlineRefs; URI targets of the same
    relations stay NamedRefs. Recursion is bounded by the set of blank nodes
    currently on the build path and by ``max_depth``.
    """

    convention = "fine"

    def __init__(
        self,
        graph: OntologyGraph,
        skip_callback: Optional[SkipCallback] = None,
        warning_callback: Optional[WarningCallback] = None,
        max_depth: int = ProcessingLimits.MAX_INLINE_DEPTH,
    ) -> None:
        self.graph = graph
        self.skip_callback = skip_callback
        self.warning_callback = warning_callback
        self.max_depth = max_depth
        self.resolver = CompositionSequenceResolver(graph, self.build_ref)
        self._inline_path: List[Node] = []
        self._inline_path_set: Set[Node] = set()

    def _warn(self, message: str) -> None:
        if self.warning_callback:
            self.warning_callback(message)
        else:
            logger.warning(message)

    def _skip(self, item_type: str, name: str, reason: str, uri: str) -> None:
        if self.skip_callback:
            self.skip_callback(item_type, name, reason, uri)
        else:
            logger.warning(f"Skipping {item_type} {name}: {reason}")

    def build_ref(self, target: Node) -> SchemaRef:
        """
        Turn the target of an inline relation into a SchemaRef.

        Named targets become references; blank nodes are built in place.
        """
        if not self.graph.is_anonymous(target):
            return NamedRef(self.graph.stable_name(target))
        return InlineRef(self.build_inline(target))

    def build_inline(self, node: Node) -> SchemaNode:
        """Build an anonymous schema node, guarding against cycles and runaway depth."""
        name = self.graph.stable_name(node)
        if node in self._inline_path_set:
            self._warn(f"Cyclic inline schema at {name}, replaced by an empty object")
            return SchemaNode()
        if len(self._inline_path) >= self.max_depth:
            self._warn(
                f"Inline schema nesting exceeds {self.max_depth} levels at {name}, "
                f"replaced by an empty object"
            )
            return SchemaNode()

        self._inline_path.append(node)
        self._inline_path_set.add(node)
        try:
            return self.build_schema(node)
        finally:
            self._inline_path.pop()
            self._inline_path_set.discard(node)

    def build_schema(self, node: Node) -> SchemaNode:
        vocab = OntologyVocabulary
        graph = self.graph

        schema = SchemaNode(
            type=graph.literal(node, vocab.SCHEMA_TYPE),
            format=graph.literal(node, vocab.SCHEMA_FORMAT),
            title=graph.literal(node, vocab.SCHEMA_TITLE),
            description=graph.literal(node, vocab.SCHEMA_DESCRIPTION),
            enum_values=parse_list_literal(
                graph.literal(node, vocab.SCHEMA_ENUM), vocab.ENUM_SEPARATOR
            ),
        )

        # Property nodes are usually blank, so order by property name
        built_properties = []
        for prop_node in graph.objects(node, vocab.HAS_SCHEMA_PROPERTY):
            built = self.build_property(prop_node)
            if built is not None:
                built_properties.append(built)
        for prop_name, ref in sorted(built_properties, key=lambda pair: pair[0]):
            schema.add_property(prop_name, ref)

        for name in parse_list_literal(graph.literal(node, vocab.SCHEMA_REQUIRED_FIELDS)):
            schema.add_required(name)

        schema.one_of = self.resolver.resolve(node, "oneOf")
        schema.all_of = self.resolver.resolve(node, "allOf")

        if schema.type == "array" or (schema.type is None and self._declares_items(node)):
            schema.type = "array"
            schema.items = self.resolver.resolve_items(node)
        elif schema.type is None and not (schema.one_of or schema.all_of):
            schema.type = "object"

        return schema

    def _declares_items(self, node: Node) -> bool:
        vocab = OntologyVocabulary
        return (
            self.graph.literal(node, vocab.ITEMS_REF) is not None
            or self.graph.literal(node, vocab.ITEMS_TYPE) is not None
            or self.graph.first_object(node, vocab.HAS_INLINE_ITEMS) is not None
        )

    def build_property(self, prop_node: Node) -> Optional[Tuple[str, SchemaRef]]:
        """
        Build one property from a property node.

        Returns:
            Tuple of (property name, schema reference), or None if the node
            has no ``propertyName``
        """
        vocab = OntologyVocabulary
        graph = self.graph

        name = graph.literal(prop_node, vocab.PROPERTY_NAME)
        if not name or not name.strip():
            self._skip(
                "property",
                graph.stable_name(prop_node),
                "Property node has no propertyName",
                str(prop_node),
            )
            return None
        name = name.strip()

        prop_type = graph.literal(prop_node, vocab.PROPERTY_TYPE)
        ref_name = graph.literal(prop_node, vocab.PROPERTY_REF)
        inline_target = graph.first_object(prop_node, vocab.HAS_INLINE_SCHEMA)
        description = graph.literal(prop_node, vocab.PROPERTY_DESCRIPTION)

        if prop_type == "array":
            if ref_name:
                items: SchemaRef = NamedRef(ref_name.strip())
            elif inline_target is not None:
                items = self.build_ref(inline_target)
            else:
                items_type = graph.literal(prop_node, vocab.PROPERTY_ITEMS_TYPE)
                if items_type:
                    items = InlineRef(SchemaNode.primitive(
                        items_type,
                        format=graph.literal(prop_node, vocab.PROPERTY_ITEMS_FORMAT),
                    ))
                else:
                    items = InlineRef(SchemaNode.untyped())
            array_node = SchemaNode.array_of(items)
            array_node.description = description
            return name, InlineRef(array_node)

        if ref_name:
            return name, NamedRef(ref_name.strip())

        if inline_target is not None:
            ref = self.build_ref(inline_target)
            if isinstance(ref, InlineRef) and description and not ref.node.description:
                ref.node.description = description
            return name, ref

        if prop_type:
            node = SchemaNode.primitive(
                prop_type,
                format=graph.literal(prop_node, vocab.PROPERTY_FORMAT),
                enum_values=parse_list_literal(
                    graph.literal(prop_node, vocab.PROPERTY_ENUM), vocab.ENUM_SEPARATOR
                ),
            )
        else:
            node = SchemaNode.untyped()
        node.description = description
        return name, InlineRef(node)
