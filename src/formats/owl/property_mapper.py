"""
Property / Relation Mapper

Turns ``has*`` relations of a coarse schema node into object properties.
The target's local name decides the shape of the property:

    Order_data     -> "data":    array of $ref Order_data
    Order_results  -> "results": array of $ref Order_results
    Address        -> "Address": $ref Address (array if listed in field_array)
"""

import logging
from typing import Iterable, Optional, Set, Tuple

from rdflib.term import Node

from constants import OntologyVocabulary
from shared.models import InlineRef, NamedRef, SchemaNode, SchemaRef

from .graph_access import OntologyGraph

logger = logging.getLogger(__name__)


class PropertyRelationMapper:
    """
    Maps relation targets to (property name, schema reference) pairs.

    The suffix rules take priority over the ``field_array`` declaration.
    """

    DATA_SUFFIX = "_data"
    RESULTS_SUFFIX = "_results"

    @staticmethod
    def normalize_array_properties(names: Iterable[str]) -> Set[str]:
        """Lower-case the ``field_array`` declaration for case-insensitive lookup."""
        return {name.lower() for name in names}

    @classmethod
    def map_target(
        cls,
        target_name: str,
        array_properties: Set[str],
    ) -> Tuple[str, SchemaRef]:
        """
        Decide the property for one relation target.

        Args:
            target_name: Stable name of the relation target
            array_properties: Lower-cased names declared in ``field_array``

        Returns:
            Tuple of (property name, schema reference)
        """
        lowered = target_name.lower()
        ref = NamedRef(target_name)

        if lowered.endswith(cls.DATA_SUFFIX):
            return "data", InlineRef(SchemaNode.array_of(ref))
        if lowered.endswith(cls.RESULTS_SUFFIX):
            return "results", InlineRef(SchemaNode.array_of(ref))
        if lowered in array_properties:
            return target_name, InlineRef(SchemaNode.array_of(ref))
        return target_name, ref

    @classmethod
    def map_relations(
        cls,
        graph: OntologyGraph,
        node: Node,
        schema: SchemaNode,
        array_properties: Optional[Set[str]] = None,
    ) -> int:
        """
        Add a property to ``schema`` for every ``has*`` relation of ``node``.

        Relations are visited in (predicate, target) order; when two of them
        map to the same property name the later one replaces the earlier.

        Returns:
            Number of relations mapped
        """
        array_properties = array_properties or set()
        mapped = 0
        for predicate_name, target in graph.relations(node, OntologyVocabulary.RELATION_PREFIX):
            target_name = graph.stable_name(target)
            if not target_name:
                continue
            prop_name, ref = cls.map_target(target_name, array_properties)
            schema.add_property(prop_name, ref)
            mapped += 1
            logger.debug(f"Mapped {predicate_name} -> {target_name} as property '{prop_name}'")
        return mapped
