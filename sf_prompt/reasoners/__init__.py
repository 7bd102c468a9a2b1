from agentfield import AgentRouter

router = AgentRouter(tags=["sf-prompt"])

from . import composition  # noqa: E402, F401 — registers prompt composition reasoners

__all__ = ["router"]
