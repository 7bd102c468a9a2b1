"""Pydantic schemas and enumerations for the prompt composition engine."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Persona(str, Enum):
    """Professional role the downstream assistant is asked to emulate."""

    BUSINESS_ANALYST = "Business Analyst"
    ARCHITECT = "Architect"
    DEVELOPER = "Developer"


class ArtifactType(str, Enum):
    """Category of Salesforce deliverable."""

    LWC = "LWC"
    APEX = "Apex"
    TEST_CLASS = "TestClass"
    FLOW = "Flow"
    OBJECT = "Object"


class WorkProductType(str, Enum):
    """Shape of the requested deliverable."""

    STORY = "Story"
    DESIGN = "Design"
    BUILD = "Build"


class OrgMode(str, Enum):
    GREENFIELD = "Greenfield"
    EXISTING_ORG = "ExistingOrg"


class OutputStyle(str, Enum):
    MARKDOWN = "Markdown"
    JIRA = "Jira"
    ENGINEERING = "Engineering"


def _coerce(enum_cls: type[Enum], value: Any) -> Enum | None:
    """Return the enum member for *value*, or None if it is not a member."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Static guidance records
# ---------------------------------------------------------------------------


class CapabilityRule(BaseModel):
    """What a persona may select. The first entry of each tuple is the fallback."""

    model_config = ConfigDict(frozen=True)

    work_products: tuple[WorkProductType, ...]
    artifacts: tuple[ArtifactType, ...]

    @field_validator("work_products", "artifacts")
    @classmethod
    def _non_empty(cls, v: tuple) -> tuple:
        if not v:
            raise ValueError("capability sets must be non-empty")
        return v


class WorkProductGuidance(BaseModel):
    """Definition-of-done outcomes and the ordered output headings for a work product."""

    model_config = ConfigDict(frozen=True)

    outcomes: tuple[str, ...]
    output_format: tuple[str, ...]


class OrgModeGuidance(BaseModel):
    """Context addendum and first-step instructions for an org mode."""

    model_config = ConfigDict(frozen=True)

    context_addendum: tuple[str, ...]
    discovery_facts: tuple[str, ...] = ()
    first_step: tuple[str, ...]


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------

# Select-style fields: a blank stored value falls back to the default, the same
# way an empty form control would.
_SELECT_FIELDS: tuple[str, ...] = (
    "persona",
    "workProduct",
    "work_product",
    "orgMode",
    "org_mode",
    "outputStyle",
    "output_style",
)


class RequestDescriptor(BaseModel):
    """Everything the assembler needs to render one prompt.

    Wire names are the camelCase keys used by the persisted form state;
    snake_case attribute names are accepted as well. Persona, artifact,
    work product and output style values are kept as plain strings so that
    unrecognized values degrade to defaults instead of failing validation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    persona: str = Persona.DEVELOPER.value
    artifacts: list[str] = Field(default_factory=lambda: [ArtifactType.LWC.value])
    work_product: str = Field(WorkProductType.BUILD.value, alias="workProduct")
    org_mode: str = Field(OrgMode.GREENFIELD.value, alias="orgMode")

    goal: str = ""
    objects: str = ""
    users: str = ""
    requirements: str = ""
    constraints: str = ""
    org_details: str = Field("", alias="orgDetails")
    integration: str = ""

    existing_components: str = Field("", alias="existingComponents")
    known_integrations: str = Field("", alias="knownIntegrations")
    org_complexity: str = Field("", alias="orgComplexity")

    output_style: str = Field(OutputStyle.MARKDOWN.value, alias="outputStyle")
    date: str = ""

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        """Drop null values and promote the legacy single ``artifact`` key."""
        if not isinstance(data, dict):
            return data
        cleaned = {k: v for k, v in data.items() if v is not None}
        for key in _SELECT_FIELDS:
            if isinstance(cleaned.get(key), str) and not cleaned[key].strip():
                cleaned.pop(key)
        if "artifacts" not in cleaned and cleaned.get("artifact"):
            cleaned["artifacts"] = [cleaned["artifact"]]
        cleaned.pop("artifact", None)
        return cleaned

    @field_validator("artifacts", mode="before")
    @classmethod
    def _listify_artifacts(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v

    @property
    def is_existing_org(self) -> bool:
        return self.org_mode.strip() == OrgMode.EXISTING_ORG.value

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the persisted camelCase keys."""
        return self.model_dump(by_alias=True)


class Selection(BaseModel):
    """A persona-valid artifact/work-product selection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    artifacts: list[str]
    work_product: str = Field(alias="workProduct")


class OptionState(BaseModel):
    """Whether a single option may be shown and selected for the current persona."""

    value: str
    label: str
    allowed: bool


class PresentableOptions(BaseModel):
    persona: str
    work_products: list[OptionState]
    artifacts: list[OptionState]


class PromptResult(BaseModel):
    """Output of the ``assemble_prompt`` reasoner."""

    prompt: str
    meta: str
    filename: str
    selection: Selection
