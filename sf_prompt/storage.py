"""Persistence of the last request and export of rendered prompts.

Both are boundary concerns: failures here are logged and swallowed so the
caller can fall back to the built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from sf_prompt.prompts.assembler import assemble
from sf_prompt.schemas import RequestDescriptor

logger = logging.getLogger(__name__)


class DescriptorStore:
    """Stores one RequestDescriptor as JSON in its camelCase wire form."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, descriptor: RequestDescriptor) -> bool:
        """Write *descriptor*; returns False (and logs) if the write fails."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(descriptor.to_wire(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save request to %s: %s", self.path, e)
            return False
        return True

    def load(self) -> RequestDescriptor | None:
        """Read the saved descriptor, or None if absent or unreadable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read saved request %s: %s", self.path, e)
            return None

        try:
            return RequestDescriptor.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning("Ignoring malformed saved request %s: %s", self.path, e)
            return None

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove saved request %s: %s", self.path, e)


def export_filename(descriptor: RequestDescriptor) -> str:
    """Derive the export file name from artifacts, org mode and work product.

    Example: ``prompt_lwc-apex_greenfield_build.md``.
    """
    artifact_part = "-".join(descriptor.artifacts).lower() if descriptor.artifacts else "none"
    parts = [
        "prompt",
        artifact_part,
        "existing-org" if descriptor.is_existing_org else "greenfield",
        descriptor.work_product.lower(),
    ]
    return "_".join(parts) + ".md"


def write_export(descriptor: RequestDescriptor, directory: str | Path) -> Path:
    """Render *descriptor* and write it under :func:`export_filename` in *directory*."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(descriptor)
    path.write_text(assemble(descriptor), encoding="utf-8")
    logger.info("Wrote prompt to %s", path)
    return path
