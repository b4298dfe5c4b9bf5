"""
Unit tests for reference inlining: expansion, cycles, dangling refs, idempotence.
"""

import pytest

from formats.owl import ReferenceInliner
from shared.models import ComponentTable, InlineRef, NamedRef, SchemaNode

REF_A = {"$ref": "#/components/schemas/A"}


def object_with(**properties):
    node = SchemaNode()
    for name, ref in properties.items():
        node.add_property(name, ref)
    return node


def string():
    return InlineRef(SchemaNode.primitive("string"))


@pytest.mark.unit
class TestReferenceInliner:
    """Test suite for ReferenceInliner"""

    def test_expands_nested_references(self):
        table = ComponentTable()
        table.register("Order", object_with(address=NamedRef("Address")))
        table.register("Address", object_with(street=string()))

        inlined = ReferenceInliner(table).inline_table()

        assert inlined.to_dict()["Order"] == {
            "type": "object",
            "properties": {
                "address": {"type": "object", "properties": {"street": {"type": "string"}}},
            },
        }

    def test_self_reference_terminates(self):
        table = ComponentTable()
        table.register("A", object_with(x=string(), A=NamedRef("A")))

        inliner = ReferenceInliner(table)
        result = inliner.inline_table().to_dict()

        assert result["A"]["properties"]["A"] == REF_A
        assert len(inliner.warnings) == 1
        assert "cycle" in inliner.warnings[0].lower()

    def test_mutual_reference_breaks_at_repeat(self):
        table = ComponentTable()
        table.register("A", object_with(b=NamedRef("B")))
        table.register("B", object_with(a=NamedRef("A")))

        result = ReferenceInliner(table).inline_table().to_dict()

        assert result["A"]["properties"]["b"]["properties"]["a"] == REF_A
        assert result["B"]["properties"]["a"]["properties"]["b"] == {"$ref": "#/components/schemas/B"}

    def test_dangling_reference_kept_and_reported_once(self):
        node = object_with(one=NamedRef("Missing"), two=NamedRef("Missing"))
        table = ComponentTable()
        table.register("Holder", node)

        inliner = ReferenceInliner(table)
        result = inliner.inline_table().to_dict()

        assert result["Holder"]["properties"]["one"] == {"$ref": "#/components/schemas/Missing"}
        assert len(inliner.warnings) == 1
        assert "Missing" in inliner.warnings[0]

    def test_does_not_mutate_input_table(self):
        table = ComponentTable()
        original = object_with(address=NamedRef("Address"))
        table.register("Order", original)
        table.register("Address", object_with(street=string()))

        ReferenceInliner(table).inline_table()

        assert table.get("Order").properties["address"] == NamedRef("Address")

    def test_idempotent_on_fully_inlined_tables(self):
        table = ComponentTable()
        table.register("Order", object_with(address=NamedRef("Address"), lines=InlineRef(
            SchemaNode.array_of(NamedRef("Line"))
        )))
        table.register("Address", object_with(street=string()))
        table.register("Line", SchemaNode(type=None, one_of=[NamedRef("Address"), string()]))

        once = ReferenceInliner(table).inline_table()
        assert all(not node.named_refs() for _, node in once.items())

        twice = ReferenceInliner(once).inline_table()
        assert twice == once
        assert twice.names() == ["Order", "Address", "Line"]

    def test_inline_node_without_references_is_unchanged(self):
        node = object_with(name=string(), nested=InlineRef(object_with(flag=string())))
        node.add_required("name")
        assert ReferenceInliner(ComponentTable()).inline_node(node) == node

    def test_expands_compositions_and_items(self):
        table = ComponentTable()
        table.register("Pet", object_with(name=string()))
        table.register("List", SchemaNode.array_of(NamedRef("Pet")))
        table.register("Any", SchemaNode(type=None, all_of=[NamedRef("Pet")]))

        result = ReferenceInliner(table).inline_table().to_dict()

        pet = {"type": "object", "properties": {"name": {"type": "string"}}}
        assert result["List"] == {"type": "array", "items": pet}
        assert result["Any"] == {"allOf": [pet]}

    def test_inline_schema_unknown_name(self):
        with pytest.raises(KeyError):
            ReferenceInliner(ComponentTable()).inline_schema("Nope")
