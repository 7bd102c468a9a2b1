"""sf_prompt — rule-based Salesforce prompt composer.

The composition engine is pure: ``correct_selection`` repairs a selection for
a persona, ``compose_guidance`` and ``build_constraints`` expand selections
into guidance text, and ``assemble`` renders a RequestDescriptor into the
final prompt document.
"""

from sf_prompt.capabilities import (
    allowed_artifacts,
    allowed_work_products,
    correct_selection,
    normalize_request,
    presentable_options,
)
from sf_prompt.prompts import assemble, build_constraints, compose_guidance, prompt_meta
from sf_prompt.schemas import RequestDescriptor, Selection

__all__ = [
    "RequestDescriptor",
    "Selection",
    "allowed_artifacts",
    "allowed_work_products",
    "assemble",
    "build_constraints",
    "compose_guidance",
    "correct_selection",
    "normalize_request",
    "presentable_options",
    "prompt_meta",
]
