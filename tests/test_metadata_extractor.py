"""
Unit tests for info and server extraction.
"""

import pytest

from fixtures import COARSE_TTL, FINE_TTL, LIFECYCLE_ONLY_TTL, SCENARIO_SCHEMA_TTL, build_ontology_graph
from formats.owl import MetadataExtractor
from shared.models import Server


@pytest.mark.unit
class TestExtractInfo:
    """Test suite for MetadataExtractor.extract_info"""

    def test_info_node_fields(self):
        info = MetadataExtractor.extract_info(build_ontology_graph(COARSE_TTL))

        assert info.to_dict() == {
            "title": "Pet Store",
            "description": "Coarse sample API",
            "version": "2.1.0",
            "x-ds-service": ["pets", "store"],
            "x-ds-copyright": "ACME Corp",
        }

    def test_info_node_takes_precedence_over_lifecycle(self):
        info = MetadataExtractor.extract_info(build_ontology_graph(COARSE_TTL))
        assert info.version == "2.1.0"

    def test_lifecycle_version_without_info(self):
        info = MetadataExtractor.extract_info(build_ontology_graph(LIFECYCLE_ONLY_TTL))
        assert info.title == "Default Title"
        assert info.version == "3.2.1"
        assert info.extensions == {}

    def test_defaults_without_metadata(self):
        info = MetadataExtractor.extract_info(build_ontology_graph(SCENARIO_SCHEMA_TTL))
        assert info.to_dict() == {"title": "Default Title", "version": "1.0.0"}

    def test_info_without_extensions(self):
        info = MetadataExtractor.extract_info(build_ontology_graph(FINE_TTL))
        assert info.to_dict() == {"title": "Fine API", "version": "1.0.0"}


@pytest.mark.unit
class TestExtractServers:
    """Test suite for MetadataExtractor.extract_servers"""

    def test_servers_without_url_are_ignored(self):
        servers = MetadataExtractor.extract_servers(build_ontology_graph(COARSE_TTL))
        assert servers == [Server(url="https://api.example.com/v1")]

    def test_no_servers(self):
        assert MetadataExtractor.extract_servers(build_ontology_graph(FINE_TTL)) == []
