"""Guidance tables, checklist composition and prompt assembly."""

from sf_prompt.prompts.assembler import (
    artifact_name,
    artifact_names,
    assemble,
    prompt_meta,
)
from sf_prompt.prompts.composer import build_constraints, compose_guidance

__all__ = [
    "artifact_name",
    "artifact_names",
    "assemble",
    "build_constraints",
    "compose_guidance",
    "prompt_meta",
]
