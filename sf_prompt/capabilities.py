"""Persona capability matrix and the selection filter built on top of it."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from sf_prompt.prompts.checklists import ARTIFACT_DISPLAY_NAMES
from sf_prompt.schemas import (
    ArtifactType,
    CapabilityRule,
    OptionState,
    Persona,
    PresentableOptions,
    RequestDescriptor,
    Selection,
    WorkProductType,
    _coerce,
)

logger = logging.getLogger(__name__)

DEFAULT_PERSONA = Persona.DEVELOPER

CAPABILITY_MATRIX: Mapping[Persona, CapabilityRule] = MappingProxyType({
    Persona.BUSINESS_ANALYST: CapabilityRule(
        work_products=(WorkProductType.STORY,),
        artifacts=(ArtifactType.FLOW, ArtifactType.OBJECT),
    ),
    Persona.ARCHITECT: CapabilityRule(
        work_products=(WorkProductType.DESIGN,),
        artifacts=(ArtifactType.LWC, ArtifactType.APEX, ArtifactType.FLOW, ArtifactType.OBJECT),
    ),
    Persona.DEVELOPER: CapabilityRule(
        work_products=(WorkProductType.BUILD, WorkProductType.STORY, WorkProductType.DESIGN),
        artifacts=(
            ArtifactType.LWC,
            ArtifactType.APEX,
            ArtifactType.TEST_CLASS,
            ArtifactType.FLOW,
            ArtifactType.OBJECT,
        ),
    ),
})


def capability_rule(persona: str | Persona) -> CapabilityRule:
    """Return the rule for *persona*; unrecognized personas get the Developer rule."""
    member = _coerce(Persona, persona)
    if member is None:
        logger.debug("Unknown persona %r, using %s rules", persona, DEFAULT_PERSONA.value)
        member = DEFAULT_PERSONA
    return CAPABILITY_MATRIX[member]


def allowed_work_products(persona: str | Persona) -> tuple[str, ...]:
    return tuple(wp.value for wp in capability_rule(persona).work_products)


def allowed_artifacts(persona: str | Persona) -> tuple[str, ...]:
    return tuple(a.value for a in capability_rule(persona).artifacts)


def correct_selection(
    persona: str | Persona,
    artifacts: Iterable[str] | None,
    work_product: str | None,
) -> Selection:
    """Repair a selection so it only holds values *persona* may select.

    1. A disallowed work product is replaced by the first allowed one.
    2. Disallowed artifacts are removed, keeping the order of the rest.
    3. If no artifact survives, the first allowed artifact is selected.

    Repeated artifacts collapse to their first occurrence. Applying the
    filter to its own output returns the same selection.
    """
    allowed_wp = allowed_work_products(persona)
    allowed_art = allowed_artifacts(persona)

    work_product = getattr(work_product, "value", work_product)
    artifacts = [getattr(a, "value", a) for a in artifacts or ()]

    wp = work_product if work_product in allowed_wp else allowed_wp[0]

    kept = [a for a in dict.fromkeys(artifacts) if a in allowed_art]
    if not kept:
        kept = [allowed_art[0]]

    return Selection(artifacts=kept, work_product=wp)


def presentable_options(persona: str | Persona) -> PresentableOptions:
    """Report which work products and artifacts are selectable for *persona*."""
    allowed_wp = set(allowed_work_products(persona))
    allowed_art = set(allowed_artifacts(persona))
    return PresentableOptions(
        persona=persona.value if isinstance(persona, Persona) else str(persona),
        work_products=[
            OptionState(value=wp.value, label=wp.value, allowed=wp.value in allowed_wp)
            for wp in WorkProductType
        ],
        artifacts=[
            OptionState(
                value=a.value,
                label=ARTIFACT_DISPLAY_NAMES[a],
                allowed=a.value in allowed_art,
            )
            for a in ArtifactType
        ],
    )


def normalize_request(request: dict[str, Any] | RequestDescriptor) -> RequestDescriptor:
    """Validate *request* and repair its selection against the persona's rules."""
    descriptor = (
        request if isinstance(request, RequestDescriptor)
        else RequestDescriptor.model_validate(request)
    )
    selection = correct_selection(descriptor.persona, descriptor.artifacts, descriptor.work_product)
    if (
        selection.artifacts == descriptor.artifacts
        and selection.work_product == descriptor.work_product
    ):
        return descriptor
    logger.debug(
        "Corrected selection for %s: %s/%s -> %s/%s",
        descriptor.persona,
        descriptor.artifacts, descriptor.work_product,
        selection.artifacts, selection.work_product,
    )
    return descriptor.model_copy(
        update={"artifacts": selection.artifacts, "work_product": selection.work_product},
    )
