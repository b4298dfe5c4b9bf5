"""
Graph Access Module

Read-only facade over an rdflib graph used by every reader in this package.
Annotation predicates are addressed by local name and resolved against the
ontology namespace; nodes are identified by a stable name derived from
their URI (or a synthesized id for blank nodes).

The facade never mutates the underlying graph.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from rdflib import Graph, RDFS, URIRef, BNode, Literal
from rdflib.term import Node

from constants import OntologyVocabulary

logger = logging.getLogger(__name__)


def parse_list_literal(value: Optional[str], separator: str = OntologyVocabulary.LIST_SEPARATOR) -> List[str]:
    """
    Split a separated literal into trimmed, non-empty tokens.

    >>> parse_list_literal(" name, age ,,")
    ['name', 'age']
    """
    if not value:
        return []
    return [token.strip() for token in value.split(separator) if token.strip()]


def parse_bool_literal(value: Optional[str]) -> bool:
    """Boolean-like literal: "true" in any letter case is True, anything else False."""
    if value is None:
        return False
    return value.strip().lower() == "true"


def uri_to_name(node: Node) -> str:
    """
    Derive the stable local name of a node.

    - URI nodes: text after the last '#', else after the last '/', else the whole URI
    - Blank nodes: ``bnode_<id>``
    - Literals: empty string (they have no identity)
    """
    if isinstance(node, URIRef):
        uri = str(node)
        idx = uri.rfind('#')
        if 0 <= idx < len(uri) - 1:
            return uri[idx + 1:]
        idx = uri.rfind('/')
        if 0 <= idx < len(uri) - 1:
            return uri[idx + 1:]
        return uri
    if isinstance(node, BNode):
        return f"bnode_{node}"
    return ""


class OntologyGraph:
    """
    Pattern-matching access to the ontology triples.

    Attributes:
        graph: The underlying rdflib graph (treated as immutable).
        namespace: Namespace URI that annotation local names resolve against.
    """

    def __init__(self, graph: Graph, namespace: Optional[str] = None) -> None:
        self.graph = graph
        self.namespace = namespace or self.detect_namespace(graph)
        logger.debug(f"Resolving annotation predicates against <{self.namespace}>")

    @staticmethod
    def detect_namespace(
        graph: Graph,
        fallback: str = OntologyVocabulary.DEFAULT_NAMESPACE,
    ) -> str:
        """Return the namespace bound to the default (empty) prefix, or the fallback."""
        for prefix, uri in graph.namespaces():
            if prefix == "":
                return str(uri)
        return fallback

    def __len__(self) -> int:
        return len(self.graph)

    def term(self, local_name: str) -> URIRef:
        """URI of an annotation predicate or structural class."""
        return URIRef(f"{self.namespace}{local_name}")

    @staticmethod
    def stable_name(node: Node) -> str:
        return uri_to_name(node)

    @staticmethod
    def is_anonymous(node: Node) -> bool:
        return isinstance(node, BNode)

    @staticmethod
    def _sorted(nodes: Iterable[Node]) -> List[Node]:
        return sorted(set(nodes), key=lambda n: (uri_to_name(n), str(n)))

    def literal(self, subject: Node, predicate_name: str) -> Optional[str]:
        """
        The literal object for (subject, predicate), or None.

        Non-literal objects are ignored; if several literals exist the
        lexically smallest one is returned.
        """
        values = sorted(
            str(obj)
            for obj in self.graph.objects(subject, self.term(predicate_name))
            if isinstance(obj, Literal)
        )
        return values[0] if values else None

    def objects(self, subject: Node, predicate_name: str) -> List[Node]:
        """All non-literal objects for (subject, predicate), ordered by stable name."""
        return self._sorted(
            obj
            for obj in self.graph.objects(subject, self.term(predicate_name))
            if not isinstance(obj, Literal)
        )

    def first_object(self, subject: Node, predicate_name: str) -> Optional[Node]:
        """The first non-literal object for (subject, predicate), or None."""
        found = self.objects(subject, predicate_name)
        return found[0] if found else None

    def subjects(self, predicate_name: str, obj: Node) -> List[Node]:
        """All subjects for (predicate, object), ordered by stable name."""
        return self._sorted(self.graph.subjects(self.term(predicate_name), obj))

    def subclasses_of(self, class_name: str) -> List[Node]:
        """Distinct subjects declared ``rdfs:subClassOf`` the named class."""
        return self._sorted(self.graph.subjects(RDFS.subClassOf, self.term(class_name)))

    def relations(self, subject: Node, prefix: str) -> List[Tuple[str, Node]]:
        """
        Outgoing relations of a node whose predicate local name starts with prefix.

        Literal objects are skipped. Returned as ``(predicate_name, target)``
        sorted by predicate name, then target name.
        """
        found = set()
        for predicate, obj in self.graph.predicate_objects(subject):
            if isinstance(obj, Literal) or not isinstance(predicate, URIRef):
                continue
            predicate_name = uri_to_name(predicate)
            if predicate_name.startswith(prefix):
                found.add((predicate_name, obj))
        return sorted(found, key=lambda pair: (pair[0], uri_to_name(pair[1]), str(pair[1])))

    def has_predicate(self, predicate_name: str) -> bool:
        """True if any triple uses the predicate."""
        for _ in self.graph.triples((None, self.term(predicate_name), None)):
            return True
        return False

    def contains_node(self, node: Node) -> bool:
        """True if the node occurs as the subject of any triple."""
        for _ in self.graph.triples((node, None, None)):
            return True
        return False
