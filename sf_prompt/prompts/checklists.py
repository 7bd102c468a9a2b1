"""Static guidance tables: artifact checklists, work-product and org-mode records.

Every string in this module is part of the rendered prompt and is matched
byte-for-byte by downstream consumers; edit with care.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from sf_prompt.schemas import (
    ArtifactType,
    OrgModeGuidance,
    OutputStyle,
    WorkProductGuidance,
    WorkProductType,
)

# ---------------------------------------------------------------------------
# Always-on lists
# ---------------------------------------------------------------------------

STANDARD_CONSTRAINTS: tuple[str, ...] = (
    "No hardcoded record IDs, profile IDs, or endpoint URLs. Use metadata, Custom Metadata/Settings, Named Credentials, and labels where appropriate.",
    "Be governor-limit aware and bulk-safe (especially for Apex and record-triggered automation).",
    "Follow Salesforce best practices and the org's established patterns and naming conventions.",
    "Prefer secure-by-default design: least privilege, CRUD/FLS, sharing, input validation, and safe error messages.",
)

BASE_GUARDRAILS: tuple[str, ...] = (
    "Do NOT invent org-specific names/IDs. If missing, ask questions or state assumptions explicitly.",
    "If requirements conflict, call out the conflict and propose options rather than guessing.",
    "If any information is missing or ambiguous, first list clarifying questions and assumptions before writing any code.",
    "If you cannot safely proceed, output clarifying questions instead of code.",
    "Do not explain the prompt back to me or talk about being an AI. Go straight to the engineering spec.",
    "Output must be copy/paste ready and organized using clear headings and checklists.",
)

SALESFORCE_GUARDRAILS: tuple[str, ...] = (
    "Explain how the solution aligns with Salesforce best practices and what trade-offs were made.",
)

REQUIRED_FINAL_CHECKS: tuple[str, ...] = (
    "Confirm you met the goal and each requirement.",
    "List any assumptions and open questions.",
    "List security considerations (CRUD/FLS/sharing/PII).",
    "List testing approach (unit + manual).",
    "If generating code/metadata, ensure naming is consistent and all referenced fields/objects are defined.",
)

OUTPUT_STYLE_NOTES: Mapping[OutputStyle, str] = MappingProxyType({
    OutputStyle.MARKDOWN: "Format the output in Markdown with clear headings and bullet lists.",
    OutputStyle.JIRA: "Format the output to be Jira-ready (concise headings + acceptance criteria).",
    OutputStyle.ENGINEERING: "Format the output as an engineering spec with crisp sections and decision logs.",
})

# ---------------------------------------------------------------------------
# Per-artifact guidance
# ---------------------------------------------------------------------------

ARTIFACT_DISPLAY_NAMES: Mapping[ArtifactType, str] = MappingProxyType({
    ArtifactType.LWC: "Lightning Web Component (LWC)",
    ArtifactType.APEX: "Apex",
    ArtifactType.TEST_CLASS: "Apex Test Class",
    ArtifactType.FLOW: "Flow",
    ArtifactType.OBJECT: "Object / Data Model",
})

ARTIFACT_CHECKLISTS: Mapping[ArtifactType, tuple[str, ...]] = MappingProxyType({
    ArtifactType.LWC: (
        "Use Lightning Design System patterns; ensure accessibility (ARIA, keyboard navigation).",
        "Prefer Lightning Data Service where appropriate; otherwise call Apex via @wire / imperative calls with clear error states.",
        "Follow LWC best practices: small components, clear public APIs, tracked state, avoid unnecessary rerenders.",
        "Security: enforce CRUD/FLS in Apex, sanitize user input, avoid exposing sensitive fields.",
        "Testing: include Jest tests for UI logic where useful and Apex tests for server-side behavior.",
        "Performance: avoid N+1 call patterns; cache read-only data where appropriate; minimize DOM work.",
    ),
    ArtifactType.APEX: (
        "Bulk-safe, governor-limit aware, no SOQL/DML in loops.",
        "CRUD/FLS enforcement and sharing model alignment (with sharing / without sharing justified).",
        "Use service-layer patterns; keep triggers thin (if triggers are involved).",
        "Use Named Credentials for callouts; handle retries/timeouts; surface errors safely.",
        "Use meaningful exceptions, logs (as appropriate), and deterministic behavior.",
        "Provide clear unit test strategy and test data setup.",
    ),
    ArtifactType.TEST_CLASS: (
        "Deterministic tests with clear arrange/act/assert; assert outcomes, not implementation details.",
        "Use realistic test data; prefer factory methods; avoid SeeAllData unless explicitly required.",
        "Cover success and failure paths; validate exceptions/messages when relevant.",
        "Exercise bulk behavior (200 records) where applicable.",
        "Validate security behavior (sharing, CRUD/FLS) if part of requirements.",
    ),
    ArtifactType.FLOW: (
        "Choose the right flow type (screen/record-triggered/scheduled/autolaunched) based on requirements.",
        "Use clear naming conventions; document inputs/outputs; avoid hardcoding IDs.",
        "Design for performance: minimize queries/loops; prefer Get Records with selective filters.",
        "Use fault paths; user-friendly error handling; avoid data loss and partial updates.",
        "Use subflows for reuse; keep flows maintainable; include versioning notes.",
    ),
    ArtifactType.OBJECT: (
        "Model for reporting, scale, and maintainability; choose lookup vs master-detail intentionally.",
        "Define field types, validation rules, record types, page layouts, and automation boundaries.",
        "Plan security: OWD, role hierarchy effects, sharing rules, permission sets, FLS.",
        "Consider data lifecycle, ownership, audit fields, and integration identifiers.",
        "Avoid redundant automation; define where logic lives (Flow vs Apex) and why.",
    ),
})

# ---------------------------------------------------------------------------
# Per-work-product guidance
# ---------------------------------------------------------------------------

WORK_PRODUCT_GUIDANCE: Mapping[WorkProductType, WorkProductGuidance] = MappingProxyType({
    WorkProductType.STORY: WorkProductGuidance(
        outcomes=(
            "A well-formed story with title, narrative, scope, assumptions, acceptance criteria, and out-of-scope items.",
            "A validation checklist (security/perf/governor limits/testing/UX).",
            "Explicit dependencies and questions if information is missing.",
        ),
        output_format=(
            "Title",
            "Narrative (As a / I want / So that)",
            "In scope / Out of scope",
            "Acceptance Criteria (bullet list)",
            "Non-functional requirements",
            "Dependencies & Risks",
            "Open Questions",
        ),
    ),
    WorkProductType.DESIGN: WorkProductGuidance(
        outcomes=(
            "A technical design with components, data model, automation boundaries, and integration approach.",
            "Trade-offs, risks, and mitigations.",
            "A build plan with sequencing and test strategy.",
        ),
        output_format=(
            "Context & Goals",
            "Assumptions",
            "Proposed Solution (components + responsibilities)",
            "Data Model / Security Model",
            "Automation & Integration",
            "Error Handling / Observability",
            "Testing Strategy",
            "Risks & Alternatives",
            "Implementation Plan",
        ),
    ),
    WorkProductType.BUILD: WorkProductGuidance(
        outcomes=(
            "Correct, production-ready implementation artifacts aligned to Salesforce best practices.",
            "Explanation of key decisions and how they meet constraints/guardrails.",
            "A test plan (and tests where applicable).",
        ),
        output_format=(
            "Overview",
            "Implementation (code / metadata)",
            "Configuration steps (if any)",
            "Testing (unit + manual)",
            "Notes / Trade-offs",
        ),
    ),
})

# ---------------------------------------------------------------------------
# Org-mode guidance
# ---------------------------------------------------------------------------

EXISTING_ORG_ADDENDUM: tuple[str, ...] = (
    "This is an existing Salesforce org (Brownfield). Before building anything, you MUST first propose an inventory/analysis plan to understand the current state and avoid duplicating functionality.",
    "You MUST identify existing components that can be reused or extended, and you MUST call out dependencies/impacts.",
)

EXISTING_ORG_FIRST_STEP: tuple[str, ...] = (
    "Step 0 (Discovery): list exactly what you need to inspect (objects/fields, flows, LWCs, Apex classes, permission sets, sharing model, managed packages, naming conventions, integrations) and the questions you must answer before implementation.",
    "If any information is missing or ambiguous, first list clarifying questions and assumptions before writing any code.",
    "Only after discovery should you propose the solution and generate code/metadata.",
)

GREENFIELD_ADDENDUM: tuple[str, ...] = (
    "This is a greenfield build for the described scope. You may propose sensible defaults, but you MUST label assumptions and keep them minimal.",
)

GREENFIELD_FIRST_STEP: tuple[str, ...] = (
    "Step 0 (Clarifying Questions & Assumptions): if any information is missing or ambiguous, first list clarifying questions and assumptions before writing any code.",
    "Only proceed with clearly stated assumptions after listing what's missing.",
)


def org_mode_guidance(
    existing_org: bool,
    known_components: str = "",
    known_integrations: str = "",
    org_complexity: str = "",
) -> OrgModeGuidance:
    """Return the org-mode guidance record.

    For an existing org, each non-empty discovery field becomes a labeled
    fact (``"Known components: ..."``). Empty fields produce no line at all.
    Greenfield guidance ignores the discovery fields.

    The assembler renders each fact as a bullet under ``## Context``
    (``- Known integrations: ...``), the same way as the addendum lines.
    """
    if not existing_org:
        return OrgModeGuidance(
            context_addendum=GREENFIELD_ADDENDUM,
            first_step=GREENFIELD_FIRST_STEP,
        )

    facts: list[str] = []
    if known_components:
        facts.append(f"Known components: {known_components}")
    if known_integrations:
        facts.append(f"Known integrations: {known_integrations}")
    if org_complexity:
        facts.append(f"Org complexity: {org_complexity}")

    return OrgModeGuidance(
        context_addendum=EXISTING_ORG_ADDENDUM,
        discovery_facts=tuple(facts),
        first_step=EXISTING_ORG_FIRST_STEP,
    )
