"""Checklist composition and constraint-set building."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from sf_prompt.prompts._utils import bulletize
from sf_prompt.prompts.checklists import ARTIFACT_CHECKLISTS, STANDARD_CONSTRAINTS
from sf_prompt.schemas import ArtifactType, _coerce

logger = logging.getLogger(__name__)


def compose_guidance(artifacts: Iterable[str]) -> list[str]:
    """Merge the guidance checklists of *artifacts* into one ordered list.

    Artifacts are visited in the order given; a statement is kept only the
    first time its exact text is seen. Unknown artifact values contribute
    nothing. An empty input yields an empty list; rendering a placeholder is
    the caller's job.
    """
    seen: dict[str, None] = {}
    for artifact in artifacts:
        member = _coerce(ArtifactType, artifact)
        if member is None:
            logger.debug("No guidance checklist for artifact %r", artifact)
            continue
        for statement in ARTIFACT_CHECKLISTS[member]:
            seen.setdefault(statement, None)
    return list(seen)


def build_constraints(custom_text: Any = "") -> list[str]:
    """Return the standard constraints followed by the parsed custom ones."""
    return [*STANDARD_CONSTRAINTS, *bulletize(custom_text)]
