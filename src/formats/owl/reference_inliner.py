"""
Reference Inliner Module

Expands NamedRefs into the full bodies of the schemas they point to, so each
component schema becomes self-contained:

    {"properties": {"address": {"$ref": "#/components/schemas/Address"}}}
    ->
    {"properties": {"address": {"type": "object", "properties": {...}}}}

The inliner is pure: it builds new SchemaNodes and never touches the input
table. References are resolved by name through the table, so a cycle shows
up as a name already on the current expansion path; such a reference is
left as a NamedRef. References to names missing from the table are also
left as they are.
"""

import logging
from typing import List, Optional, Set, Tuple

from shared.models import ComponentTable, InlineRef, NamedRef, SchemaNode, SchemaRef

logger = logging.getLogger(__name__)


class ReferenceInliner:
    """
    Inlines named references against a component table.

    Attributes:
        table: Component table references are resolved against
        warnings: Messages about cycles and dangling references found
            while inlining, each reported once per (entry schema, name)
    """

    def __init__(self, table: ComponentTable) -> None:
        self.table = table
        self.warnings: List[str] = []
        self._reported: Set[Tuple[str, str, str]] = set()
        self._entry: str = ""

    def _warn_once(self, kind: str, name: str, message: str) -> None:
        key = (self._entry, kind, name)
        if key in self._reported:
            return
        self._reported.add(key)
        self.warnings.append(message)
        logger.warning(message)

    def inline_ref(self, ref: SchemaRef, stack: Optional[List[str]] = None) -> SchemaRef:
        """
        Return ``ref`` with every reachable NamedRef expanded.

        Args:
            ref: Reference to expand
            stack: Names currently being expanded on this path
        """
        stack = stack if stack is not None else []

        if isinstance(ref, InlineRef):
            return InlineRef(self.inline_node(ref.node, stack))

        target = self.table.get(ref.name)
        if target is None:
            self._warn_once(
                "dangling", ref.name,
                f"Reference to undefined schema '{ref.name}' in '{self._entry}' left as $ref",
            )
            return ref
        if ref.name in stack:
            self._warn_once(
                "cycle", ref.name,
                f"Reference cycle {' -> '.join(stack + [ref.name])} "
                f"broken, '{ref.name}' left as $ref",
            )
            return ref

        stack.append(ref.name)
        try:
            return InlineRef(self.inline_node(target, stack))
        finally:
            stack.pop()

    def inline_node(self, node: SchemaNode, stack: Optional[List[str]] = None) -> SchemaNode:
        """Return a copy of ``node`` whose child references are expanded."""
        stack = stack if stack is not None else []
        copy = SchemaNode(
            type=node.type,
            format=node.format,
            title=node.title,
            description=node.description,
            enum_values=list(node.enum_values),
        )
        for name, ref in node.properties.items():
            copy.properties[name] = self.inline_ref(ref, stack)
        copy.required_fields = list(node.required_fields)
        if node.items is not None:
            copy.items = self.inline_ref(node.items, stack)
        copy.one_of = [self.inline_ref(ref, stack) for ref in node.one_of]
        copy.all_of = [self.inline_ref(ref, stack) for ref in node.all_of]
        return copy

    def inline_schema(self, name: str) -> SchemaNode:
        """Inline one registered schema; its own name starts the expansion path."""
        node = self.table.get(name)
        if node is None:
            raise KeyError(f"Schema '{name}' is not registered")
        self._entry = name
        return self.inline_node(node, [name])

    def inline_table(self) -> ComponentTable:
        """
        Inline every schema of the table.

        Returns:
            A new ComponentTable with the same names in the same order
        """
        result = ComponentTable()
        for name in self.table.names():
            result.register(name, self.inline_schema(name))
        self._entry = ""
        logger.info(
            f"Inlined references in {len(result)} schemas"
            + (f" ({len(self.warnings)} warnings)" if self.warnings else "")
        )
        return result
