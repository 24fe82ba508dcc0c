"""
Tests for inheriting opcode maps.
"""

import pytest

from sfzparse.core.errors import BuilderError
from sfzparse.core.ir import Opcode, OpcodeMap


@pytest.fixture
def chain() -> tuple[OpcodeMap, OpcodeMap, OpcodeMap]:
    root = OpcodeMap()
    root.add_opcode(Opcode("volume", -6.0))
    root.add_opcode(Opcode("pan", 0.0))
    middle = OpcodeMap(root.freeze())
    middle.add_opcode(Opcode("pan", 20.0))
    leaf = OpcodeMap(middle.freeze())
    leaf.add_opcode(Opcode("key", 60))
    return root, middle, leaf


class TestLookup:
    def test_local_and_inherited(self, chain):
        _, _, leaf = chain
        assert leaf["key"].value == 60
        assert leaf["pan"].value == 20.0
        assert leaf["volume"].value == -6.0

    def test_missing(self, chain):
        _, _, leaf = chain
        assert "tune" not in leaf
        assert leaf.get("tune") is None
        with pytest.raises(KeyError):
            leaf["tune"]

    def test_value_helper(self, chain):
        _, _, leaf = chain
        assert leaf.value("volume") == -6.0
        assert leaf.value("tune", 0) == 0

    def test_resolved_and_local(self, chain):
        _, _, leaf = chain
        assert {k: o.value for k, o in leaf.resolved().items()} == {
            "volume": -6.0,
            "pan": 20.0,
            "key": 60,
        }
        assert list(leaf.local()) == ["key"]
        assert len(leaf) == 3
        assert set(leaf) == {"volume", "pan", "key"}

    def test_ancestors(self, chain):
        root, middle, leaf = chain
        assert list(leaf.ancestors()) == [middle, root]
        assert root.parent is None


class TestMutation:
    def test_upsert_replaces_local(self):
        m = OpcodeMap()
        m.add_opcode(Opcode("key", 60))
        m.add_opcode(Opcode("key", 62))
        assert m["key"].value == 62
        assert len(m.local()) == 1

    def test_override_does_not_touch_parent(self, chain):
        root, middle, _ = chain
        assert root["pan"].value == 0.0
        assert middle["pan"].value == 20.0

    def test_cc_opcodes_have_distinct_identity(self):
        m = OpcodeMap()
        m.add_opcode(Opcode("locc", 0, cc=1))
        m.add_opcode(Opcode("locc", 64, cc=64))
        assert m["locc1"].value == 0
        assert m["locc64"].value == 64

    def test_frozen_rejects_mutation(self):
        m = OpcodeMap().freeze()
        assert m.frozen
        with pytest.raises(BuilderError, match="frozen"):
            m.add_opcode(Opcode("key", 60))


class TestEquality:
    def test_structural(self, chain):
        _, _, leaf = chain
        root = OpcodeMap()
        root.add_opcode(Opcode("volume", -6.0))
        root.add_opcode(Opcode("pan", 0.0))
        middle = OpcodeMap(root)
        middle.add_opcode(Opcode("pan", 20.0))
        other = OpcodeMap(middle)
        other.add_opcode(Opcode("key", 60))
        assert other == leaf

    def test_different_values(self):
        a, b = OpcodeMap(), OpcodeMap()
        a.add_opcode(Opcode("key", 60))
        b.add_opcode(Opcode("key", 61))
        assert a != b

    def test_open_map_is_unhashable(self):
        with pytest.raises(TypeError):
            hash(OpcodeMap())

    def test_frozen_maps_hash_by_content(self):
        a = OpcodeMap()
        a.add_opcode(Opcode("key", 60))
        a.add_opcode(Opcode("pan", 10.0))
        b = OpcodeMap()
        b.add_opcode(Opcode("pan", 10.0))
        b.add_opcode(Opcode("key", 60))
        assert a.freeze() == b.freeze()
        assert hash(a) == hash(b)
        assert len({a, b}) == 1
