"""
Metadata Extractor Module

Copies the document-level metadata out of the ontology:

- ``:info``: title, version, description and the ``x-ds-service`` /
  ``x-ds-copyright`` vendor extensions
- ``:Lifecycle :openapi``: API version used when no ``:info`` node exists
- subclasses of ``:servers`` carrying a ``:url``
"""

import logging
from typing import List

from constants import OntologyVocabulary, OpenAPIDefaults
from shared.models import ApiInfo, Server

from .graph_access import OntologyGraph, parse_list_literal

logger = logging.getLogger(__name__)


class MetadataExtractor:
    """Reads info and servers from the graph."""

    @staticmethod
    def extract_info(graph: OntologyGraph) -> ApiInfo:
        vocab = OntologyVocabulary
        info = ApiInfo()

        lifecycle_version = graph.literal(graph.term(vocab.LIFECYCLE), vocab.OPENAPI)
        if lifecycle_version:
            info.version = lifecycle_version

        info_node = graph.term(vocab.INFO)
        if not graph.contains_node(info_node):
            logger.debug("No info node found, using default title")
            return info

        info.title = graph.literal(info_node, vocab.TITLE) or OpenAPIDefaults.DEFAULT_TITLE
        info.version = graph.literal(info_node, vocab.VERSION) or OpenAPIDefaults.DEFAULT_VERSION
        info.description = graph.literal(info_node, vocab.DESCRIPTION)

        services = graph.literal(info_node, vocab.DS_SERVICE)
        if services:
            info.extensions[vocab.DS_SERVICE] = parse_list_literal(services)
        copyright_notice = graph.literal(info_node, vocab.DS_COPYRIGHT)
        if copyright_notice:
            info.extensions[vocab.DS_COPYRIGHT] = copyright_notice

        logger.debug(f"API info: {info.title} {info.version}")
        return info

    @staticmethod
    def extract_servers(graph: OntologyGraph) -> List[Server]:
        servers: List[Server] = []
        for server_node in graph.subclasses_of(OntologyVocabulary.SERVERS):
            url = graph.literal(server_node, OntologyVocabulary.URL)
            if url:
                servers.append(Server(url=url.strip()))
            else:
                logger.debug(f"Server {graph.stable_name(server_node)} has no url, ignored")
        return servers
