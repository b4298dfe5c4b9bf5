"""
OWL/RDF to OpenAPI 3.0 Converter

This module rebuilds an OpenAPI 3.0 document from an ontology that encodes
an HTTP API as annotated classes.

Architecture:
    The converter is a facade over focused components:
    - graph_loader: RDF parsing with memory management
    - graph_access: read-only queries by annotation local name
    - schema_builder: coarse and fine schema strategies
    - composition_resolver: indexed oneOf/allOf/items families
    - property_mapper: has* relations to object/array properties
    - reference_inliner: expansion of named references
    - operation_assembler: paths, parameters, request bodies, responses
    - metadata_extractor: info and servers

One instance can convert any number of inputs sequentially; run-scoped
state is reset at the start of every conversion.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from rdflib import Graph
from rdflib.term import Node
from tqdm import tqdm

from constants import ConventionConfig, OntologyVocabulary, ProcessingLimits
from core.validators import InputValidator
from shared.models import (
    BaseConverter,
    ComponentTable,
    ConversionResult,
    OpenAPIDocument,
    SkippedItem,
)

from .graph_access import OntologyGraph
from .graph_loader import OntologyGraphLoader
from .metadata_extractor import MetadataExtractor
from .operation_assembler import OperationAssembler
from .reference_inliner import ReferenceInliner
from .schema_builder import CoarseSchemaBuilder, FineSchemaBuilder, SchemaBuilderProtocol

logger = logging.getLogger(__name__)

__all__ = [
    'OWLToOpenAPIConverter',
    'detect_convention',
    'parse_owl_content',
    'parse_owl_file',
    'convert_owl_file',
]


def detect_convention(graph: OntologyGraph) -> str:
    """Return "fine" when any per-attribute predicate occurs in the graph, else "coarse"."""
    for predicate_name in OntologyVocabulary.fine_markers():
        if graph.has_predicate(predicate_name):
            logger.debug(f"Found '{predicate_name}', using the fine convention")
            return ConventionConfig.FINE
    return ConventionConfig.COARSE


class OWLToOpenAPIConverter(BaseConverter):
    """
    Converts annotated OWL/RDF ontologies to OpenAPI 3.0 documents.

    Args:
        convention: "auto", "coarse" or "fine"
        inline_references: Inline named references into component schemas.
            None means the convention default (coarse: on, fine: off).
        base_namespace: Namespace for annotation predicates when the
            ontology binds no default prefix
    """

    def __init__(
        self,
        convention: str = ConventionConfig.DEFAULT,
        inline_references: Optional[bool] = None,
        base_namespace: str = OntologyVocabulary.DEFAULT_NAMESPACE,
    ) -> None:
        super().__init__(base_namespace=base_namespace)
        if convention not in ConventionConfig.CHOICES:
            raise ValueError(
                f"Unknown convention '{convention}'. "
                f"Expected one of: {', '.join(ConventionConfig.CHOICES)}"
            )
        self.convention = convention
        self.inline_references = inline_references
        self.components = ComponentTable()
        self.skipped_items: List[SkippedItem] = []
        self.conversion_warnings: List[str] = []

    def _reset_state(self) -> None:
        """Reset converter state for a fresh conversion."""
        self.components = ComponentTable()
        self.skipped_items = []
        self.conversion_warnings = []

    def _add_skipped_item(self, item_type: str, name: str, reason: str, uri: str) -> None:
        """Track a skipped item during conversion."""
        self.skipped_items.append(SkippedItem(
            item_type=item_type,
            name=name,
            reason=reason,
            uri=uri
        ))
        logger.warning(f"Skipped {item_type} '{name}': {reason}")

    def _add_warning(self, message: str) -> None:
        """Track a warning during conversion."""
        self.conversion_warnings.append(message)
        logger.warning(message)

    def _resolve_convention(self, graph: OntologyGraph) -> str:
        if self.convention == ConventionConfig.AUTO:
            return detect_convention(graph)
        return self.convention

    def _should_inline(self, convention: str) -> bool:
        if self.inline_references is not None:
            return self.inline_references
        return convention == ConventionConfig.COARSE

    def _make_builder(self, graph: OntologyGraph, convention: str) -> SchemaBuilderProtocol:
        builder_class = FineSchemaBuilder if convention == ConventionConfig.FINE else CoarseSchemaBuilder
        return builder_class(
            graph,
            skip_callback=self._add_skipped_item,
            warning_callback=self._add_warning,
        )

    def _schema_nodes(self, graph: OntologyGraph) -> List[Node]:
        """Subclasses of the schema parent classes, in parent order, without duplicates."""
        nodes: List[Node] = []
        seen = set()
        for parent in OntologyVocabulary.SCHEMA_PARENTS:
            for node in graph.subclasses_of(parent):
                if node not in seen:
                    seen.add(node)
                    nodes.append(node)
        return nodes

    def _build_components(self, graph: OntologyGraph, builder: SchemaBuilderProtocol) -> None:
        schema_nodes = self._schema_nodes(graph)
        logger.info(f"Found {len(schema_nodes)} schema classes")

        for node in tqdm(
            schema_nodes,
            desc="Building schemas",
            unit="schema",
            disable=len(schema_nodes) < ProcessingLimits.PROGRESS_BAR_THRESHOLD,
        ):
            name = graph.stable_name(node)
            if graph.is_anonymous(node):
                self._add_skipped_item(
                    "schema", name, "Schema classes must be named, not blank nodes", str(node)
                )
                continue
            self.components.register(name, builder.build_schema(node))
            logger.debug(f"Registered schema: {name}")

    def _assemble_paths(self, graph: OntologyGraph, document: OpenAPIDocument,
                        builder: SchemaBuilderProtocol, convention: str) -> None:
        build_ref = builder.build_ref if isinstance(builder, FineSchemaBuilder) else None
        assembler = OperationAssembler(
            graph,
            convention=convention,
            build_ref=build_ref,
            skip_callback=self._add_skipped_item,
        )
        path_nodes = assembler.path_nodes()
        logger.info(f"Found {len(path_nodes)} path classes")

        for path_node in tqdm(
            path_nodes,
            desc="Assembling operations",
            unit="path",
            disable=len(path_nodes) < ProcessingLimits.PROGRESS_BAR_THRESHOLD,
        ):
            operation = assembler.assemble(path_node)
            if operation is not None:
                document.add_operation(operation)

    def convert_graph(self, graph: Graph, triple_count: Optional[int] = None) -> ConversionResult:
        """
        Convert an already-parsed graph.

        Args:
            graph: rdflib graph holding the ontology
            triple_count: Number of triples, reported in the result

        Returns:
            ConversionResult with the document and detailed tracking
        """
        self._reset_state()

        ontology = OntologyGraph(graph, OntologyGraph.detect_namespace(graph, self.base_namespace))
        convention = self._resolve_convention(ontology)
        logger.info(f"Using the {convention} annotation convention")

        builder = self._make_builder(ontology, convention)
        document = OpenAPIDocument(
            info=MetadataExtractor.extract_info(ontology),
            servers=MetadataExtractor.extract_servers(ontology),
        )

        self._assemble_paths(ontology, document, builder, convention)
        self._build_components(ontology, builder)

        if self._should_inline(convention):
            inliner = ReferenceInliner(self.components)
            document.components = inliner.inline_table()
            self.conversion_warnings.extend(inliner.warnings)
        else:
            document.components = self.components
            for name, missing in self.components.dangling_refs().items():
                self._add_warning(
                    f"Schema '{name}' references undefined schemas: {', '.join(missing)}"
                )

        logger.info(
            f"Converted {len(document.components)} schemas and "
            f"{document.operation_count} operations"
        )
        if self.skipped_items:
            logger.info(f"Skipped {len(self.skipped_items)} items during conversion")

        return ConversionResult(
            document=document,
            convention=convention,
            skipped_items=self.skipped_items.copy(),
            warnings=self.conversion_warnings.copy(),
            triple_count=len(graph) if triple_count is None else triple_count,
        )

    def convert(
        self,
        content: str,
        rdf_format: Optional[str] = None,
        force_large_file: bool = False,
        **kwargs: Any,
    ) -> ConversionResult:
        """
        Convert serialized ontology content.

        Args:
            content: RDF content (Turtle unless rdf_format says otherwise)
            rdf_format: rdflib parser name
            force_large_file: If True, skip memory safety checks

        Raises:
            ValueError: If content is empty or has invalid syntax
            MemoryError: If insufficient memory is available
        """
        content = InputValidator.validate_rdf_content(content)
        graph, triple_count = OntologyGraphLoader.parse_content(
            content, rdf_format=rdf_format, force_large_file=force_large_file
        )
        return self.convert_graph(graph, triple_count)

    def convert_file(
        self,
        file_path: Union[str, Path],
        rdf_format: Optional[str] = None,
        force_large_file: bool = False,
    ) -> ConversionResult:
        """
        Convert an ontology file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            PermissionError: If the file is not readable
            ValueError: If the path or content is invalid
            MemoryError: If insufficient memory is available
        """
        validated_path = InputValidator.validate_input_ontology_path(file_path)
        graph, triple_count = OntologyGraphLoader.parse_file(
            validated_path, rdf_format=rdf_format, force_large_file=force_large_file
        )
        return self.convert_graph(graph, triple_count)


def parse_owl_content(
    content: str,
    convention: str = ConventionConfig.DEFAULT,
    inline_references: Optional[bool] = None,
    rdf_format: Optional[str] = None,
    force_large_file: bool = False,
) -> Dict[str, Any]:
    """
    Convert ontology content and return the OpenAPI document as a dict.

    Raises:
        ValueError: If content is empty or invalid
        MemoryError: If insufficient memory is available
    """
    converter = OWLToOpenAPIConverter(convention=convention, inline_references=inline_references)
    result = converter.convert(content, rdf_format=rdf_format, force_large_file=force_large_file)
    return result.document.to_dict()


def parse_owl_file(
    file_path: Union[str, Path],
    convention: str = ConventionConfig.DEFAULT,
    inline_references: Optional[bool] = None,
    rdf_format: Optional[str] = None,
    force_large_file: bool = False,
) -> Dict[str, Any]:
    """Convert an ontology file and return the OpenAPI document as a dict."""
    return convert_owl_file(
        file_path,
        convention=convention,
        inline_references=inline_references,
        rdf_format=rdf_format,
        force_large_file=force_large_file,
    ).document.to_dict()


def convert_owl_file(
    file_path: Union[str, Path],
    convention: str = ConventionConfig.DEFAULT,
    inline_references: Optional[bool] = None,
    base_namespace: str = OntologyVocabulary.DEFAULT_NAMESPACE,
    rdf_format: Optional[str] = None,
    force_large_file: bool = False,
) -> ConversionResult:
    """Convert an ontology file and return the full ConversionResult."""
    converter = OWLToOpenAPIConverter(
        convention=convention,
        inline_references=inline_references,
        base_namespace=base_namespace,
    )
    return converter.convert_file(file_path, rdf_format=rdf_format, force_large_file=force_large_file)
