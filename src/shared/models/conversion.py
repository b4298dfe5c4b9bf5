"""
Conversion result tracking.

Holds the produced OpenAPI document together with what was skipped and
which warnings were raised while reading the ontology.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .openapi_types import OpenAPIDocument


@dataclass
class SkippedItem:
    """Represents a graph item that was skipped during conversion."""
    item_type: str  # "schema", "property", "parameter", "path", "response"
    name: str
    reason: str
    uri: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.item_type,
            "name": self.name,
            "reason": self.reason,
            "uri": self.uri
        }


@dataclass
class ConversionResult:
    """
    Results of an ontology to OpenAPI conversion with detailed tracking.

    Provides the document, the annotation convention that drove the run,
    skipped items and warnings encountered during the conversion process.
    """
    document: OpenAPIDocument
    convention: str
    skipped_items: List[SkippedItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    triple_count: int = 0

    @property
    def schema_count(self) -> int:
        return len(self.document.components)

    @property
    def operation_count(self) -> int:
        return self.document.operation_count

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage of items successfully converted."""
        total = self.schema_count + self.operation_count + len(self.skipped_items)
        if total == 0:
            return 100.0
        successful = self.schema_count + self.operation_count
        return (successful / total) * 100

    @property
    def has_skipped_items(self) -> bool:
        """Check if any items were skipped during conversion."""
        return len(self.skipped_items) > 0

    @property
    def skipped_by_type(self) -> Dict[str, int]:
        """Get count of skipped items grouped by type."""
        counts: Dict[str, int] = {}
        for item in self.skipped_items:
            counts[item.item_type] = counts.get(item.item_type, 0) + 1
        return counts

    def get_summary(self) -> str:
        """Generate human-readable summary of conversion results."""
        lines = [
            "Conversion Summary:",
            f"  Convention: {self.convention}",
            f"  ✓ Schemas: {self.schema_count}",
            f"  ✓ Operations: {self.operation_count}",
        ]

        if self.skipped_items:
            lines.append(f"  ⚠ Skipped: {len(self.skipped_items)}")

            for item_type, count in self.skipped_by_type.items():
                lines.append(f"      - {item_type}s: {count}")

            lines.append("    Details (first 5):")
            for item in self.skipped_items[:5]:
                lines.append(f"      - {item.item_type}: {item.name}")
                lines.append(f"        Reason: {item.reason}")

            if len(self.skipped_items) > 5:
                lines.append(f"      ... and {len(self.skipped_items) - 5} more")

        if self.warnings:
            lines.append(f"  ⚠ Warnings: {len(self.warnings)}")
            for warning in self.warnings[:3]:
                lines.append(f"      - {warning}")
            if len(self.warnings) > 3:
                lines.append(f"      ... and {len(self.warnings) - 3} more")

        lines.append(f"  Success Rate: {self.success_rate:.1f}%")

        if self.triple_count > 0:
            lines.append(f"  Total RDF Triples: {self.triple_count}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize conversion statistics (not the document) to a dictionary."""
        return {
            "convention": self.convention,
            "schemas_count": self.schema_count,
            "operations_count": self.operation_count,
            "skipped_items_count": len(self.skipped_items),
            "skipped_items": [item.to_dict() for item in self.skipped_items],
            "warnings": self.warnings,
            "success_rate": self.success_rate,
            "triple_count": self.triple_count
        }
