"""
Tests for TermRegistry and the default population.

Verifies:
  - Default registry size, category order and per-category counts
  - Lookup of unknown names returns None / ""
  - Duplicate registration overwrites, keeps the count, warns, calls hook
  - Listing follows registration order with the stored category
  - A key may differ from term.name; one instance may sit under two keys
"""

import logging

import pytest

from uqff.registry import TermRegistry, RESONANCE_CATEGORY
from uqff.terms import PhysicsTerm
from uqff.terms.compressed import MUGECompressedBase


class ConstantTerm(PhysicsTerm):
    category = "test"

    def __init__(self, name, value):
        self.name = name
        self.value = value

    def evaluate(self, t, params):
        return self.value


class TestDefaultRegistry:
    """build_default_registry() population."""

    def test_term_count(self, registry):
        assert registry.count() == 61
        assert len(registry) == 61

    def test_category_order(self, registry):
        assert registry.categories() == [
            "gravity_wolfram", "unified_field", "muge", "astrophysics",
            "helper", "muge_compressed", "muge_resonance",
        ]

    def test_category_sizes(self, registry):
        sizes = {cat: len(registry.names_by_category(cat))
                 for cat in registry.categories()}
        assert sizes == {
            "gravity_wolfram": 14,
            "unified_field": 2,
            "muge": 2,
            "astrophysics": 7,
            "helper": 14,
            "muge_compressed": 9,
            "muge_resonance": 13,
        }

    def test_registration_order(self, registry):
        names = registry.all_names()
        assert names[0] == "UniversalGravity1"
        assert names[-1] == "FullUnifiedFieldSource6"
        assert names.index("CompressedMUGE") < names.index("SGR1745Magnetar")

    def test_resonance_membership(self, registry):
        assert registry.is_resonance("MUGEResonanceADPM")
        assert registry.is_resonance("MUGEResonanceWormhole")
        assert not registry.is_resonance("ResonanceMUGE")
        assert not registry.is_resonance("UniversalGravity1")

    def test_describe_groups_by_category(self, registry):
        text = registry.describe()
        assert text.startswith("Registered physics terms: 61")
        assert "[muge_resonance] (13 terms)" in text
        assert "MUGECompressedBase" in text


class TestLookup:
    """get / category / membership."""

    def test_unknown_name(self, registry):
        assert registry.get("NoSuchTerm") is None
        assert registry.category("NoSuchTerm") == ""
        assert "NoSuchTerm" not in registry

    def test_known_name(self, registry):
        term = registry.get("MUGECompressedBase")
        assert isinstance(term, MUGECompressedBase)
        assert registry.category("MUGECompressedBase") == "muge_compressed"

    def test_list_all_metadata(self, registry):
        items = registry.list_all()
        assert len(items) == 61
        assert [i["name"] for i in items] == registry.all_names()
        assert all(set(i) >= {"name", "category", "description", "defaults"} for i in items)


class TestRegister:
    """Registration rules."""

    def test_category_override(self):
        reg = TermRegistry()
        reg.register("a", ConstantTerm("a", 1.0), category=RESONANCE_CATEGORY)
        assert reg.category("a") == RESONANCE_CATEGORY
        assert reg.list_all()[0]["category"] == RESONANCE_CATEGORY

    def test_empty_name_rejected(self):
        reg = TermRegistry()
        with pytest.raises(ValueError):
            reg.register("", ConstantTerm("", 1.0))

    def test_duplicate_overwrites(self, caplog):
        seen = []
        reg = TermRegistry(on_duplicate=lambda name, old, new: seen.append((name, old, new)))
        first = ConstantTerm("a", 1.0)
        second = ConstantTerm("a", 2.0)
        reg.register("a", first)
        reg.register("b", ConstantTerm("b", 3.0))
        with caplog.at_level(logging.WARNING, logger="uqff.registry"):
            reg.register("a", second)

        assert reg.count() == 2
        assert reg.get("a") is second
        assert reg.all_names() == ["a", "b"]
        assert seen == [("a", first, second)]
        assert "registered twice" in caplog.text

    def test_duplicate_in_default_registry_keeps_count(self, registry):
        registry.register("MUGECompressedBase", MUGECompressedBase(M=1.0))
        assert registry.count() == 61
        assert registry.get("MUGECompressedBase").M == 1.0

    def test_same_instance_under_two_names(self):
        reg = TermRegistry()
        term = ConstantTerm("a", 1.0)
        reg.register("a", term)
        reg.register("alias", term, RESONANCE_CATEGORY)

        assert reg.count() == 2
        assert reg.get("a") is reg.get("alias") is term
        assert reg.category("a") == "test"
        assert reg.category("alias") == RESONANCE_CATEGORY
        assert [i["name"] for i in reg.list_all()] == ["a", "alias"]

    def test_key_differs_from_term_name(self):
        reg = TermRegistry()
        reg.register("MUGE_CompressedBase", MUGECompressedBase())
        assert "MUGE_CompressedBase" in reg
        assert "MUGECompressedBase" not in reg
        assert reg.list_all()[0]["name"] == "MUGE_CompressedBase"
