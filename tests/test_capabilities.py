"""Tests for sf_prompt.capabilities — capability matrix and selection filter."""

from __future__ import annotations

import pytest

from sf_prompt.capabilities import (
    CAPABILITY_MATRIX,
    allowed_artifacts,
    allowed_work_products,
    capability_rule,
    correct_selection,
    normalize_request,
    presentable_options,
)
from sf_prompt.schemas import ArtifactType, Persona, RequestDescriptor, Selection, WorkProductType

_PERSONAS = [p.value for p in Persona]


# ---------------------------------------------------------------------------
# Capability matrix
# ---------------------------------------------------------------------------


class TestCapabilityMatrix:
    def test_every_persona_has_a_rule(self) -> None:
        assert set(CAPABILITY_MATRIX) == set(Persona)

    @pytest.mark.parametrize("persona", _PERSONAS)
    def test_allowed_sets_non_empty(self, persona: str) -> None:
        assert allowed_work_products(persona)
        assert allowed_artifacts(persona)

    def test_business_analyst(self) -> None:
        assert allowed_work_products("Business Analyst") == ("Story",)
        assert allowed_artifacts("Business Analyst") == ("Flow", "Object")

    def test_architect(self) -> None:
        assert allowed_work_products("Architect") == ("Design",)
        assert allowed_artifacts("Architect") == ("LWC", "Apex", "Flow", "Object")

    def test_developer(self) -> None:
        assert allowed_work_products("Developer") == ("Build", "Story", "Design")
        assert allowed_artifacts("Developer") == ("LWC", "Apex", "TestClass", "Flow", "Object")

    def test_accepts_enum_member(self) -> None:
        assert allowed_work_products(Persona.ARCHITECT) == ("Design",)

    @pytest.mark.parametrize("persona", ["", "Product Owner", "developer"])
    def test_unknown_persona_defaults_to_developer(self, persona: str) -> None:
        assert capability_rule(persona) == CAPABILITY_MATRIX[Persona.DEVELOPER]
        assert allowed_work_products(persona) == allowed_work_products("Developer")

    def test_only_known_values_in_matrix(self) -> None:
        for rule in CAPABILITY_MATRIX.values():
            assert all(isinstance(wp, WorkProductType) for wp in rule.work_products)
            assert all(isinstance(a, ArtifactType) for a in rule.artifacts)


# ---------------------------------------------------------------------------
# Selection filter
# ---------------------------------------------------------------------------


class TestCorrectSelection:
    def test_business_analyst_design_forced_to_story(self) -> None:
        result = correct_selection("Business Analyst", ["Flow", "Object"], "Design")
        assert result.work_product == "Story"
        assert result.artifacts == ["Flow", "Object"]

    def test_disallowed_artifacts_removed_in_order(self) -> None:
        result = correct_selection("Architect", ["TestClass", "Flow", "LWC"], "Design")
        assert result.artifacts == ["Flow", "LWC"]

    def test_empty_selection_gets_first_allowed(self) -> None:
        result = correct_selection("Business Analyst", [], "Story")
        assert result.artifacts == ["Flow"]

    def test_all_disallowed_gets_first_allowed(self) -> None:
        result = correct_selection("Business Analyst", ["LWC", "Apex"], "Story")
        assert result.artifacts == ["Flow"]

    def test_none_inputs(self) -> None:
        result = correct_selection("Developer", None, None)
        assert result == Selection(artifacts=["LWC"], work_product="Build")

    def test_valid_selection_unchanged(self) -> None:
        result = correct_selection("Developer", ["Object", "Apex"], "Design")
        assert result.artifacts == ["Object", "Apex"]
        assert result.work_product == "Design"

    def test_duplicates_collapse(self) -> None:
        result = correct_selection("Developer", ["Apex", "LWC", "Apex"], "Build")
        assert result.artifacts == ["Apex", "LWC"]

    def test_enum_members_accepted(self) -> None:
        result = correct_selection(
            Persona.ARCHITECT, [ArtifactType.APEX], WorkProductType.DESIGN,
        )
        assert result.artifacts == ["Apex"]
        assert result.work_product == "Design"

    def test_unknown_persona_uses_developer_rules(self) -> None:
        result = correct_selection("Tester", ["TestClass"], "Story")
        assert result.artifacts == ["TestClass"]
        assert result.work_product == "Story"

    @pytest.mark.parametrize("persona", _PERSONAS + ["Unknown"])
    @pytest.mark.parametrize(
        "artifacts,work_product",
        [
            ([], ""),
            (["LWC", "TestClass"], "Build"),
            (["Object", "Flow", "Apex"], "Story"),
            (["Bogus"], "Design"),
        ],
    )
    def test_result_contained_and_idempotent(
        self, persona: str, artifacts: list[str], work_product: str,
    ) -> None:
        once = correct_selection(persona, artifacts, work_product)
        assert once.artifacts
        assert set(once.artifacts) <= set(allowed_artifacts(persona))
        assert once.work_product in allowed_work_products(persona)

        twice = correct_selection(persona, once.artifacts, once.work_product)
        assert twice == once


class TestPresentableOptions:
    def test_business_analyst_visibility(self) -> None:
        options = presentable_options("Business Analyst")
        wp = {o.value: o.allowed for o in options.work_products}
        art = {o.value: o.allowed for o in options.artifacts}
        assert wp == {"Story": True, "Design": False, "Build": False}
        assert art == {
            "LWC": False, "Apex": False, "TestClass": False, "Flow": True, "Object": True,
        }

    def test_labels_use_display_names(self) -> None:
        options = presentable_options("Developer")
        labels = {o.value: o.label for o in options.artifacts}
        assert labels["LWC"] == "Lightning Web Component (LWC)"
        assert labels["Object"] == "Object / Data Model"

    def test_lists_every_option(self) -> None:
        options = presentable_options("Architect")
        assert [o.value for o in options.work_products] == ["Story", "Design", "Build"]
        assert len(options.artifacts) == len(ArtifactType)


class TestNormalizeRequest:
    def test_returns_same_instance_when_valid(self) -> None:
        descriptor = RequestDescriptor(persona="Developer", artifacts=["LWC"], work_product="Build")
        assert normalize_request(descriptor) is descriptor

    def test_repairs_invalid_selection(self) -> None:
        descriptor = normalize_request({
            "persona": "Business Analyst",
            "artifacts": ["Flow", "Object"],
            "workProduct": "Design",
            "goal": "keep me",
        })
        assert descriptor.work_product == "Story"
        assert descriptor.artifacts == ["Flow", "Object"]
        assert descriptor.goal == "keep me"
