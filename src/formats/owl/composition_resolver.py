"""
Composition Sequence Resolver

Reconstructs ordered ``oneOf``/``allOf`` lists that were serialized as
indexed predicate families:

    :Pet :oneOfRef_0 "Cat" ;
         :oneOfRef_1 "Dog" ;
         :hasInlineSchema_oneOf_inline_2 [ :schemaType "string" ] .

Reading starts at index 0 and stops at the first index that has neither a
named-reference literal nor an inline-schema relation. Indices are expected
to be dense; anything after a gap is not read.
"""

import logging
from typing import Callable, List, Optional

from rdflib.term import Node

from constants import OntologyVocabulary
from shared.models import InlineRef, NamedRef, SchemaNode, SchemaRef

from .graph_access import OntologyGraph

logger = logging.getLogger(__name__)


class CompositionSequenceResolver:
    """
    Reads indexed predicate families into ordered SchemaRef lists.

    Args:
        graph: Graph facade to query
        build_ref: Callback turning an inline-relation target into a SchemaRef
    """

    def __init__(
        self,
        graph: OntologyGraph,
        build_ref: Callable[[Node], SchemaRef],
    ) -> None:
        self.graph = graph
        self.build_ref = build_ref

    def resolve_element(
        self,
        node: Node,
        ref_predicate: str,
        inline_predicate: str,
    ) -> Optional[SchemaRef]:
        """
        Resolve a single slot from a named-reference literal or an inline relation.

        The named reference wins when both are present. Returns None if the
        slot is empty.
        """
        ref_name = self.graph.literal(node, ref_predicate)
        if ref_name:
            return NamedRef(ref_name.strip())
        target = self.graph.first_object(node, inline_predicate)
        if target is not None:
            return self.build_ref(target)
        return None

    def resolve(self, node: Node, operator: str) -> List[SchemaRef]:
        """
        Reconstruct the sequence for one composition operator.

        Args:
            node: Schema node carrying the indexed predicates
            operator: "oneOf" or "allOf"

        Returns:
            SchemaRefs in index order, truncated at the first missing index
        """
        sequence: List[SchemaRef] = []
        index = 0
        while True:
            element = self.resolve_element(
                node,
                OntologyVocabulary.composition_ref(operator, index),
                OntologyVocabulary.composition_inline(operator, index),
            )
            if element is None:
                break
            sequence.append(element)
            index += 1

        if sequence:
            logger.debug(
                f"Resolved {operator} with {len(sequence)} elements "
                f"on {self.graph.stable_name(node)}"
            )
        return sequence

    def resolve_items(self, node: Node) -> SchemaRef:
        """
        Resolve the item schema of an array node.

        ``itemsRef`` and ``hasInlineSchema_items`` are read like one slot of an
        indexed family; otherwise ``itemsType``/``itemsFormat`` give a
        primitive item schema; with none of them the items are untyped.
        """
        element = self.resolve_element(
            node,
            OntologyVocabulary.ITEMS_REF,
            OntologyVocabulary.HAS_INLINE_ITEMS,
        )
        if element is not None:
            return element
        items_type = self.graph.literal(node, OntologyVocabulary.ITEMS_TYPE)
        if items_type:
            return InlineRef(SchemaNode.primitive(
                items_type.strip(),
                format=self.graph.literal(node, OntologyVocabulary.ITEMS_FORMAT),
            ))
        return InlineRef(SchemaNode.untyped())
