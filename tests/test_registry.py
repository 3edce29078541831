"""Tests for PrimitiveRegistry."""

import pytest

from privacy_sdk import PrimitiveRegistry, Workflow

from helpers import make_primitive


def test_register_and_get(registry):
    primitive = make_primitive("encrypt", category="encryption")
    registry.register(primitive)

    assert registry.get("encrypt") is primitive
    assert "encrypt" in registry
    assert len(registry) == 1
    assert registry.get_all_ids() == ["encrypt"]
    assert registry.get_all() == [primitive]


def test_register_rejects_non_primitive(registry):
    class LooksLikePrimitive:
        id = "fake"
        name = "Fake"
        category = "test"

        async def execute(self, input):
            return {}

    with pytest.raises(TypeError, match="Expected a PrivacyPrimitive"):
        registry.register(LooksLikePrimitive())
    assert registry.get("fake") is None


def test_reregister_same_id_overwrites_without_duplicating_category(registry):
    first = make_primitive("hash", category="hash", name="First")
    second = make_primitive("hash", category="hash", name="Second")

    registry.register(first)
    registry.register(second)

    assert registry.get_all_ids() == ["hash"]
    assert registry.get("hash") is second
    assert [p.id for p in registry.get_by_category("hash")] == ["hash"]
    assert registry.get_metadata("hash").name == "Second"


def test_reregister_moves_primitive_to_new_category(registry):
    registry.register(make_primitive("p1", category="old"))
    registry.register(make_primitive("p1", category="new"))

    assert registry.get_by_category("old") == []
    assert [p.id for p in registry.get_by_category("new")] == ["p1"]
    assert registry.get_primitive_count_by_category() == {"old": 0, "new": 1}


def test_reregister_refreshes_updated_at_and_keeps_created_at(registry):
    registry.register(make_primitive("p1"))
    before = registry.get_metadata("p1")

    registry.register(make_primitive("p1"))
    after = registry.get_metadata("p1")

    assert after.created_at == before.created_at
    assert after.updated_at >= before.updated_at


def test_get_by_category_keeps_registration_order(registry):
    for pid in ("c", "a", "b"):
        registry.register(make_primitive(pid, category="zk-proof"))
    registry.register(make_primitive("other", category="encryption"))

    assert [p.id for p in registry.get_by_category("zk-proof")] == ["c", "a", "b"]
    assert registry.get_by_category("missing") == []
    assert registry.get_categories() == ["zk-proof", "encryption"]


def test_unregister_removes_everything(registry):
    registry.register(make_primitive("p1", category="hash"))

    assert registry.unregister("p1") is True
    assert registry.get("p1") is None
    assert registry.get_metadata("p1") is None
    assert registry.get_by_category("hash") == []


def test_unregister_unknown_id_is_noop(registry):
    registry.register(make_primitive("p1", category="hash"))
    before = registry.get_primitive_count_by_category()

    assert registry.unregister("never-registered") is False
    assert registry.get_primitive_count_by_category() == before
    assert registry.get_all_ids() == ["p1"]


def test_lookups_return_none_for_missing_ids(registry):
    assert registry.get("nope") is None
    assert registry.get_metadata("nope") is None
    assert registry.get_workflow("nope") is None


def test_search_matches_name_description_and_tags_case_insensitively(registry):
    registry.register(make_primitive("a", name="Range Proof", description="zk"))
    registry.register(make_primitive("b", name="Encrypt", description="AES symmetric cipher"))
    registry.register(make_primitive("c", name="Hash", tags=("Obfuscation",)))
    registry.register(make_primitive("d", name="Unrelated"))

    assert [p.id for p in registry.search("RANGE")] == ["a"]
    assert [p.id for p in registry.search("symmetric")] == ["b"]
    assert [p.id for p in registry.search("obfusc")] == ["c"]
    assert registry.search("nothing-matches") == []


def test_search_returns_insertion_order(registry):
    registry.register(make_primitive("z", tags=("privacy",)))
    registry.register(make_primitive("a", tags=("privacy",)))

    assert [p.id for p in registry.search("privacy")] == ["z", "a"]


def test_update_metadata_merges_fields(registry):
    registry.register(make_primitive("p1", version="1.0.0"))
    before = registry.get_metadata("p1").updated_at

    assert registry.update_metadata("p1", version="1.1.0", tags=["new"]) is True

    metadata = registry.get_metadata("p1")
    assert metadata.version == "1.1.0"
    assert metadata.tags == ["new"]
    assert metadata.updated_at >= before


def test_update_metadata_ignores_identity_fields(registry):
    registry.register(make_primitive("p1"))

    registry.update_metadata("p1", id="other", not_a_field=1)

    assert registry.get_metadata("p1").id == "p1"


def test_update_metadata_unknown_id(registry):
    assert registry.update_metadata("missing", version="2.0.0") is False


def test_workflow_registration(registry):
    workflow = Workflow(id="wf", name="Workflow", operations=[make_primitive("p1")])
    registry.register_workflow(workflow)

    assert registry.get_workflow("wf") is workflow
    assert registry.get_all_workflows() == [workflow]
    assert registry.unregister_workflow("wf") is True
    assert registry.unregister_workflow("wf") is False


def test_registries_are_isolated():
    first, second = PrimitiveRegistry(), PrimitiveRegistry()
    first.register(make_primitive("p1"))

    assert second.get("p1") is None
