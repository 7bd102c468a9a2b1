"""Runtime configuration for the sf-prompt node and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_STATE_PATH = Path.home() / ".sf_prompt" / "last_request.json"


def state_path_from_env() -> Path:
    """Saved-request location, honouring ``SF_PROMPT_STATE``."""
    return Path(os.getenv("SF_PROMPT_STATE", str(DEFAULT_STATE_PATH))).expanduser()


@dataclass
class ForgeConfig:
    """Settings read from the environment at startup."""

    node_id: str = "sf-prompt"
    agentfield_server: str = "http://localhost:8080"
    api_key: str | None = None
    port: int = 8005
    state_path: Path = field(default_factory=lambda: DEFAULT_STATE_PATH)

    @classmethod
    def from_env(cls) -> "ForgeConfig":
        return cls(
            node_id=os.getenv("NODE_ID", "sf-prompt"),
            agentfield_server=os.getenv("AGENTFIELD_SERVER", "http://localhost:8080"),
            api_key=os.getenv("AGENTFIELD_API_KEY"),
            port=int(os.getenv("PORT", "8005")),
            state_path=state_path_from_env(),
        )
