# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Edge Stack Agent - single entry point for task handling.

Per task:
1. UI gate: UI-flavored tasks go to the UI specialist (no skill matching)
2. Skill selection: trigger matching against the loaded registry
3. Prompt assembly: mode persona + skills menu + guidelines, optional
   context message, then the task
4. Dispatch through the model harness with mode-dependent sampling
5. Provider failures come back as a readable error string

The agent is an explicit context object: construct it once with a harness
and a skill registry and pass it to whatever needs it.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from edge_agent.core.agents.personas import GUIDELINES, MODE_PERSONAS, NO_SKILLS_MATCHED
from edge_agent.core.agents.ui_specialist import UISpecialist, requires_ui
from edge_agent.core.models.harness import ModelHarness
from edge_agent.core.models.modes import AgentMode, DEFAULT_MODE, MODE_CONFIGS
from edge_agent.core.models.schemas import ChatMessage, ChatOptions
from edge_agent.core.skills.matcher import MatchResult, SkillMatcher, validate_task
from edge_agent.core.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)

BEADS_COMMAND_PATTERN = re.compile(r"bd \w+")


@dataclass(frozen=True)
class AgentStatus:
    """Snapshot of agent configuration."""
    mode: AgentMode
    skills: Tuple[str, ...]
    providers: Tuple[str, ...]
    active_providers: Tuple[str, ...]
    primary: Optional[str]

    @property
    def skill_count(self) -> int:
        return len(self.skills)


class EdgeStackAgent:
    """
    Routes tasks to skills and model providers.

    Example usage:
        agent = EdgeStackAgent(harness, registry)
        agent.set_mode("architect")
        answer = await agent.handle_task("design a rate limiter", context="API gateway")
    """

    def __init__(
        self,
        harness: ModelHarness,
        registry: SkillRegistry,
        mode: Union[AgentMode, str] = DEFAULT_MODE,
        ui_specialist: Optional[UISpecialist] = None,
        max_skills: Optional[int] = None,
        max_tokens: Optional[int] = None
    ):
        """
        Args:
            harness: Initialized model harness
            registry: Loaded skill registry
            mode: Starting agent mode
            ui_specialist: UI sub-routine (defaults to one on the same harness)
            max_skills: Cap on skills listed in the prompt (None lists all matches)
            max_tokens: Override the per-mode max token default
        """
        self._harness = harness
        self._registry = registry
        self._mode = AgentMode.parse(mode)
        self._ui_specialist = ui_specialist or UISpecialist(harness)
        self._matcher = SkillMatcher(registry, max_results=max_skills)
        self._max_tokens = max_tokens

    @property
    def mode(self) -> AgentMode:
        return self._mode

    def set_mode(self, mode: Union[AgentMode, str]) -> None:
        """
        Switch agent mode for subsequent tasks.

        Raises:
            InvalidModeError: If the mode is unknown
        """
        self._mode = AgentMode.parse(mode)
        logger.info(f"🤖 Agent mode set to: {self._mode.value}")

    def requires_ui(self, task: str) -> bool:
        return requires_ui(task)

    def select_skills(self, task: str) -> List[MatchResult]:
        """Rank the registry's skills for a task."""
        return self._matcher.match(task)

    def build_system_prompt(self, matches: List[MatchResult]) -> str:
        """Build system prompt from the mode persona and matched skills."""
        if matches:
            skills_info = "\n".join(
                f"- {m.skill.name}: {m.skill.description}" for m in matches
            )
        else:
            skills_info = NO_SKILLS_MATCHED

        return f"""{MODE_PERSONAS[self._mode]}

## Available Skills
{skills_info}

{GUIDELINES}"""

    def build_messages(
        self,
        task: str,
        matches: List[MatchResult],
        context: Optional[str] = None
    ) -> List[ChatMessage]:
        messages = [ChatMessage.system(self.build_system_prompt(matches))]

        if context:
            messages.append(ChatMessage.user(f"Context: {context}"))

        messages.append(ChatMessage.user(task))
        return messages

    def chat_options(self) -> ChatOptions:
        """Sampling options for the current mode."""
        config = MODE_CONFIGS[self._mode]
        return ChatOptions(
            max_tokens=self._max_tokens or config['max_tokens'],
            temperature=config['temperature']
        )

    async def handle_task(self, task: str, context: Optional[str] = None) -> str:
        """
        Handle a task request.

        Args:
            task: Free-text task description
            context: Optional extra context sent ahead of the task

        Returns:
            Model response text, or a readable error message if every
            provider failed

        Raises:
            InvalidTaskError: If the task is empty or whitespace-only
        """
        validate_task(task)
        logger.info(f"🎯 Handling task: {task}")

        if self.requires_ui(task):
            logger.info("🎨 Delegating to UI specialist...")
            return await self._ui_specialist.handle(task, context=context)

        matches = self.select_skills(task)
        logger.info(f"📎 Selected skills: {', '.join(m.skill.name for m in matches) or 'none'}")

        messages = self.build_messages(task, matches, context)

        try:
            response = await self._harness.chat(messages, self._mode, self.chat_options())
        except Exception as e:
            logger.error(f"Task failed on every provider: {e}")
            return f"❌ Error: {e}"

        bd_matches = BEADS_COMMAND_PATTERN.findall(response.content)
        if bd_matches:
            logger.info(f"📝 Beads commands found: {', '.join(bd_matches)}")

        return response.content

    def get_status(self) -> AgentStatus:
        """Get current configuration."""
        return AgentStatus(
            mode=self._mode,
            skills=tuple(self._registry.names()),
            providers=tuple(self._harness.get_available_providers()),
            active_providers=tuple(self._harness.get_active_providers()),
            primary=self._harness.get_primary_provider()
        )
