# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
In-process model providers for tests.

FakeProvider runs the real ModelProvider lifecycle but backs it with
LangChain's FakeListChatModel, so no network access or API keys are needed.
"""

from typing import List, Optional

from langchain_core.language_models.fake_chat_models import FakeListChatModel

from edge_agent.core.models.modes import AgentMode
from edge_agent.core.models.providers import ModelProvider
from edge_agent.core.models.schemas import ChatMessage, ChatOptions, ChatResponse


class FakeProvider(ModelProvider):
    """
    Provider with canned answers and optional failures.

    Args:
        name: Provider name
        responses: Answers returned in turn (defaults to "response from <name>")
        fail_init: Make client construction raise during initialize()
        fail_chat: Exception raised from every chat() call
    """

    def __init__(
        self,
        name: str,
        responses: Optional[List[str]] = None,
        fail_init: bool = False,
        fail_chat: Optional[Exception] = None
    ):
        super().__init__()
        self.name = name
        self.models = {
            AgentMode.ARCHITECT: f"{name}-large",
            AgentMode.WORKER: f"{name}-medium",
            AgentMode.INTERN: f"{name}-small",
        }
        self.responses = responses or [f"response from {name}"]
        self.fail_init = fail_init
        self.fail_chat = fail_chat
        self.calls: List[tuple] = []

    def _create_client(self, model: str, temperature: float, max_tokens: int):
        if self.fail_init:
            raise RuntimeError(f"{self.name} rejected credentials")
        return FakeListChatModel(responses=self.responses)

    async def chat(self, messages: List[ChatMessage], options: Optional[ChatOptions] = None) -> ChatResponse:
        self.calls.append((list(messages), options))
        if self.fail_chat is not None:
            raise self.fail_chat
        return await super().chat(messages, options)


SAMPLE_MANIFESTS = {
    "durable-objects": """---
name: durable-objects
description: Stateful coordination with Durable Objects
triggers:
  - durable object
  - rate limit
  - websocket
---

## Instructions
Use a Durable Object per key.
""",
    "cloudflare-workers": """---
name: cloudflare-workers
description: Deploying Cloudflare Workers
triggers:
  - worker
  - deploy
  - wrangler
---

## Instructions
Deploy with wrangler.
""",
    "better-auth": """---
name: better-auth
description: Authentication with better-auth
triggers:
  - auth
  - oauth
  - session
---
""",
}


def write_skill(base_dir, dir_name: str, text: str):
    """Write a SKILL.md into `<base_dir>/<dir_name>/` and return its path."""
    skill_dir = base_dir / dir_name
    skill_dir.mkdir(parents=True, exist_ok=True)
    path = skill_dir / "SKILL.md"
    path.write_text(text, encoding="utf-8")
    return path
