"""AgentField app for the Salesforce prompt composer.

Exposes:
  - ``app``: Agent instance with node_id from ``NODE_ID`` (default ``sf-prompt``)
  - the composition reasoners registered on ``sf_prompt.reasoners.router``
  - ``main``: entry point for ``sf-prompt serve``
"""

from __future__ import annotations

from agentfield import Agent

from sf_prompt.config import ForgeConfig
from sf_prompt.reasoners import router

config = ForgeConfig.from_env()
NODE_ID = config.node_id

app = Agent(
    node_id=NODE_ID,
    version="1.0.0",
    description="Rule-based Salesforce prompt composer",
    agentfield_server=config.agentfield_server,
    api_key=config.api_key,
)

app.include_router(router)


def main() -> None:
    """Entry point for ``sf-prompt serve``."""
    app.run(port=config.port, host="0.0.0.0")


if __name__ == "__main__":
    main()
