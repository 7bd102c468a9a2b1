"""Prompt assembler: renders a RequestDescriptor into the final instruction document."""

from __future__ import annotations

from typing import Iterable

from sf_prompt.prompts._utils import NONE_SELECTED, NOT_PROVIDED, bulletize, clean, join_bullets
from sf_prompt.prompts.checklists import (
    ARTIFACT_DISPLAY_NAMES,
    BASE_GUARDRAILS,
    OUTPUT_STYLE_NOTES,
    REQUIRED_FINAL_CHECKS,
    SALESFORCE_GUARDRAILS,
    WORK_PRODUCT_GUIDANCE,
    org_mode_guidance,
)
from sf_prompt.prompts.composer import build_constraints, compose_guidance
from sf_prompt.schemas import (
    ArtifactType,
    OutputStyle,
    RequestDescriptor,
    WorkProductGuidance,
    WorkProductType,
    _coerce,
)

EXISTING_ORG_LABEL = "Existing Org (Brownfield - analyze first)"
GREENFIELD_LABEL = "Greenfield (build from scratch)"


def artifact_name(artifact: str) -> str:
    """Human-readable name for *artifact*; unknown values pass through unchanged."""
    member = _coerce(ArtifactType, artifact)
    if member is None:
        return artifact
    return ARTIFACT_DISPLAY_NAMES[member]


def artifact_names(artifacts: Iterable[str]) -> str:
    names = [artifact_name(a) for a in artifacts]
    if not names:
        return NONE_SELECTED
    return ", ".join(names)


def work_product_guidance(work_product: str) -> WorkProductGuidance:
    """Guidance record for *work_product*, falling back to Build."""
    member = _coerce(WorkProductType, work_product) or WorkProductType.BUILD
    return WORK_PRODUCT_GUIDANCE[member]


def output_style_note(output_style: str) -> str:
    member = _coerce(OutputStyle, output_style) or OutputStyle.MARKDOWN
    return OUTPUT_STYLE_NOTES[member]


def prompt_meta(descriptor: RequestDescriptor) -> str:
    """One-line summary: persona, artifacts, org mode and work product."""
    org = "Brownfield" if descriptor.is_existing_org else "Greenfield"
    return " • ".join([
        clean(descriptor.persona),
        artifact_names(descriptor.artifacts),
        org,
        clean(descriptor.work_product),
    ])


def _section(heading: str, body: str) -> str:
    return f"{heading}\n{body}"


def _context_block(d: RequestDescriptor, artifacts_text: str, work_product: str) -> str:
    org = org_mode_guidance(
        d.is_existing_org,
        known_components=clean(d.existing_components),
        known_integrations=clean(d.known_integrations),
        org_complexity=clean(d.org_complexity),
    )

    lines: list[str] = []
    date = clean(d.date)
    if date:
        lines.append(f"- Date: {date}")
    lines.extend([
        f"- Artifact type(s): {artifacts_text}",
        f"- Work product: {work_product}",
        f"- Org mode: {EXISTING_ORG_LABEL if d.is_existing_org else GREENFIELD_LABEL}",
        f"- Goal: {clean(d.goal) or NOT_PROVIDED}",
        f"- Primary object(s): {clean(d.objects) or NOT_PROVIDED}",
        f"- Users/personas: {clean(d.users) or NOT_PROVIDED}",
    ])
    lines.extend(f"- {line}" for line in org.context_addendum)
    # Discovery facts only exist for fields that were filled in.
    lines.extend(f"- {fact}" for fact in org.discovery_facts)

    return _section("## Context", "\n".join(lines))


def _output_format_block(guidance: WorkProductGuidance, output_style: str) -> str:
    lines = [
        f"- {output_style_note(output_style)}",
        "- Use exactly the following section headings in this order:",
    ]
    lines.extend(f"  {i}. {name}" for i, name in enumerate(guidance.output_format, start=1))
    return _section("## Output format", "\n".join(lines))


def assemble(descriptor: RequestDescriptor) -> str:
    """Render *descriptor* into the prompt document.

    The selection is used as given; callers are expected to have run it
    through :func:`sf_prompt.capabilities.correct_selection` first.

    Every fixed section is always present. Optional blocks (org details,
    integration notes) are left out entirely when empty. Blocks are
    separated by exactly one blank line and the result ends with a single
    newline.
    """
    d = descriptor
    persona = clean(d.persona)
    work_product = clean(d.work_product)
    artifacts_text = artifact_names(d.artifacts)

    guidance = work_product_guidance(work_product)
    org = org_mode_guidance(d.is_existing_org)
    org_details = clean(d.org_details)
    integration = clean(d.integration)

    blocks = [
        f"You are a senior Salesforce {persona} and an expert AI pair-programmer.",
        _section(
            "## Role",
            f"Act as a Salesforce {persona}. Your goal is to help produce a high-quality "
            f"{work_product} for: {artifacts_text}.",
        ),
        _context_block(d, artifacts_text, work_product),
        _section("### Requirements", join_bullets(bulletize(d.requirements))),
        _section("### Org details", org_details) if org_details else "",
        _section("### Data / integration", integration) if integration else "",
        _section("## Constraints", join_bullets(build_constraints(d.constraints))),
        _section(
            "## Guardrails",
            join_bullets([*BASE_GUARDRAILS, *SALESFORCE_GUARDRAILS, *compose_guidance(d.artifacts)]),
        ),
        _section("## Outcomes (definition of done)", join_bullets(guidance.outcomes)),
        _section("## Process", join_bullets(org.first_step)),
        _output_format_block(guidance, d.output_style),
        _section("## Required final checks", join_bullets(REQUIRED_FINAL_CHECKS)),
    ]

    return "\n\n".join(b for b in blocks if b).strip() + "\n"
