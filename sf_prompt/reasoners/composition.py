"""Prompt composition reasoners.

Thin wrappers that expose the composition engine on the AgentField node.
They accept and return plain dicts; all logic lives in ``sf_prompt.capabilities``
and ``sf_prompt.prompts``.
"""

from __future__ import annotations

import logging

from sf_prompt.capabilities import correct_selection as _correct_selection
from sf_prompt.capabilities import normalize_request
from sf_prompt.capabilities import presentable_options as _presentable_options
from sf_prompt.prompts.assembler import assemble, prompt_meta
from sf_prompt.prompts.composer import build_constraints as _build_constraints
from sf_prompt.prompts.composer import compose_guidance as _compose_guidance
from sf_prompt.schemas import PromptResult, Selection
from sf_prompt.storage import export_filename

from . import router

logger = logging.getLogger(__name__)


def _note(message: str, tags: list[str] | None = None) -> None:
    """Log to router if attached, otherwise to the module logger."""
    try:
        router.note(message, tags=tags or [])
    except RuntimeError:
        logger.info(message)


@router.reasoner()
async def correct_selection(
    persona: str,
    artifacts: list[str] | None = None,
    work_product: str = "",
) -> dict:
    """Repair an artifact/work-product selection for *persona*."""
    return _correct_selection(persona, artifacts, work_product).model_dump(by_alias=True)


@router.reasoner()
async def selectable_options(persona: str) -> dict:
    """Report which options the UI should show for *persona*."""
    return _presentable_options(persona).model_dump()


@router.reasoner()
async def compose_guidance(artifacts: list[str]) -> list[str]:
    """Deduplicated guidance checklist for *artifacts*, first-selected wins."""
    return _compose_guidance(artifacts)


@router.reasoner()
async def build_constraints(custom_text: str = "") -> list[str]:
    """Standard constraints followed by the bulletized *custom_text*."""
    return _build_constraints(custom_text)


@router.reasoner()
async def assemble_prompt(request: dict) -> dict:
    """Correct the selection in *request* and render the prompt document.

    Returns:
        PromptResult with the prompt text, the one-line meta summary, the
        export file name and the selection actually used.
    """
    descriptor = normalize_request(request)
    prompt = assemble(descriptor)
    meta = prompt_meta(descriptor)
    _note(f"Assembled prompt: {meta}", tags=["sf_prompt", "assemble"])
    return PromptResult(
        prompt=prompt,
        meta=meta,
        filename=export_filename(descriptor),
        selection=Selection(artifacts=descriptor.artifacts, work_product=descriptor.work_product),
    ).model_dump(by_alias=True)
