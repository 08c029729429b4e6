# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
UI Specialist - handles UI-flavored tasks with a fixed persona.

Bypasses skill matching entirely and calls the harness directly with a
low temperature for accurate component props.
"""

import logging
from typing import List, Optional

from edge_agent.core.agents.personas import UI_KEYWORDS, UI_SPECIALIST_PROMPT
from edge_agent.core.models.harness import ModelHarness
from edge_agent.core.models.modes import UI_CONFIG
from edge_agent.core.models.schemas import ChatMessage, ChatOptions

logger = logging.getLogger(__name__)


def requires_ui(task: str) -> bool:
    """Check if a task mentions any UI keyword."""
    task_lower = task.lower()
    return any(kw in task_lower for kw in UI_KEYWORDS)


class UISpecialist:
    """UI persona sub-routine used by the orchestrator."""

    def __init__(self, harness: ModelHarness):
        self._harness = harness

    def build_messages(self, task: str, context: Optional[str] = None) -> List[ChatMessage]:
        user_content = f"Task: {task}\n"
        if context:
            user_content += f"Context: {context}\n"
        user_content += "\nPlease provide a detailed UI solution with code examples."

        return [
            ChatMessage.system(UI_SPECIALIST_PROMPT),
            ChatMessage.user(user_content),
        ]

    async def handle(self, task: str, context: Optional[str] = None) -> str:
        """
        Answer a UI task.

        Returns:
            Response text, or a readable error message if every provider failed
        """
        messages = self.build_messages(task, context)
        options = ChatOptions(
            max_tokens=UI_CONFIG['max_tokens'],
            temperature=UI_CONFIG['temperature']
        )

        try:
            response = await self._harness.chat(messages, UI_CONFIG['mode'], options)
        except Exception as e:
            logger.error(f"UI specialist failed: {e}")
            return f"❌ UI Error: {e}"

        return response.content
