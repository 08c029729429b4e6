# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Integration Tests for the Edge Stack Agent

Uses a real harness and registry backed by in-process fake providers:
1. UI gate and UI specialist prompt
2. Skill selection and system prompt assembly
3. Mode-dependent sampling
4. Error strings on provider exhaustion
5. Status snapshots
"""

import pytest

from edge_agent.core.agents.orchestrator import EdgeStackAgent
from edge_agent.core.agents.personas import GUIDELINES, MODE_PERSONAS, NO_SKILLS_MATCHED, UI_SPECIALIST_PROMPT
from edge_agent.core.agents.ui_specialist import requires_ui
from edge_agent.core.exceptions import InvalidModeError, InvalidTaskError
from edge_agent.core.models.harness import ModelHarness
from edge_agent.core.models.modes import AgentMode
from edge_agent.core.models.providers import ProviderConfig
from tests.fakes import FakeProvider

NON_UI_TASK = "implement a rate limit with durable object storage"


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def provider():
    return FakeProvider("primary", responses=["Use a Durable Object. Then run bd done bd-a1b2"])


@pytest.fixture
def harness(provider):
    return ModelHarness([provider, FakeProvider("backup")])


async def make_agent(harness, registry, **kwargs):
    await harness.initialize({
        "primary": ProviderConfig(api_key="k1"),
        "backup": ProviderConfig(api_key="k2"),
    })
    return EdgeStackAgent(harness, registry, **kwargs)


# =============================================================================
# UI Gate
# =============================================================================

class TestRequiresUI:
    @pytest.mark.parametrize("task", [
        "add a button component",
        "Fix the Tailwind styling",
        "make the LAYOUT responsive",
    ])
    def test_ui_tasks(self, task):
        assert requires_ui(task)

    def test_non_ui_task(self):
        assert not requires_ui(NON_UI_TASK)

    @pytest.mark.asyncio
    async def test_ui_task_bypasses_skills(self, harness, registry, provider):
        agent = await make_agent(harness, registry, mode="architect")

        answer = await agent.handle_task("add a button component", context="dashboard page")

        assert answer == provider.responses[0]
        messages, options = provider.calls[0]
        assert len(messages) == 2
        assert messages[0].content == UI_SPECIALIST_PROMPT
        assert "Task: add a button component" in messages[1].content
        assert "Context: dashboard page" in messages[1].content
        assert "## Available Skills" not in messages[0].content
        # UI work always runs on worker models at low temperature
        assert options.model == "primary-medium"
        assert options.temperature == 0.3
        assert options.max_tokens == 4096

    @pytest.mark.asyncio
    async def test_ui_failure_returns_ui_error(self, registry):
        harness = ModelHarness([FakeProvider("primary", fail_chat=RuntimeError("quota exceeded"))])
        await harness.initialize({"primary": ProviderConfig(api_key="k")})
        agent = EdgeStackAgent(harness, registry)

        answer = await agent.handle_task("add a button component")
        assert answer == "❌ UI Error: quota exceeded"


# =============================================================================
# Prompt Assembly
# =============================================================================

class TestPromptAssembly:
    @pytest.mark.asyncio
    async def test_system_prompt_lists_matched_skills(self, harness, registry, provider):
        agent = await make_agent(harness, registry)

        await agent.handle_task(NON_UI_TASK)

        messages, _ = provider.calls[0]
        system = messages[0].content
        assert messages[0].role == "system"
        assert system.startswith(MODE_PERSONAS[AgentMode.WORKER])
        assert "## Available Skills\n- durable-objects: Stateful coordination with Durable Objects" in system
        assert "cloudflare-workers" not in system
        assert system.endswith(GUIDELINES)
        assert messages[-1].content == NON_UI_TASK

    @pytest.mark.asyncio
    async def test_no_match_placeholder(self, harness, registry, provider):
        agent = await make_agent(harness, registry)
        await agent.handle_task("write a haiku about queues")
        system = provider.calls[0][0][0].content
        assert NO_SKILLS_MATCHED in system

    @pytest.mark.asyncio
    async def test_context_message_precedes_task(self, harness, registry, provider):
        agent = await make_agent(harness, registry)
        await agent.handle_task(NON_UI_TASK, context="API gateway for tenants")

        messages = provider.calls[0][0]
        assert [m.role for m in messages] == ["system", "user", "user"]
        assert messages[1].content == "Context: API gateway for tenants"
        assert messages[2].content == NON_UI_TASK

    def test_skills_ordered_by_score(self, registry):
        agent = EdgeStackAgent(ModelHarness(), registry)
        matches = agent.select_skills("deploy the worker and add oauth session handling")
        prompt = agent.build_system_prompt(matches)
        assert prompt.index("better-auth") < prompt.index("cloudflare-workers")

    def test_max_skills_limits_prompt(self, registry):
        agent = EdgeStackAgent(ModelHarness(), registry, max_skills=1)
        matches = agent.select_skills("deploy the worker and add oauth session handling")
        assert len(matches) == 1


# =============================================================================
# Modes
# =============================================================================

class TestModes:
    @pytest.mark.asyncio
    async def test_architect_runs_hotter(self, harness, registry, provider):
        agent = await make_agent(harness, registry, mode=AgentMode.ARCHITECT)
        await agent.handle_task(NON_UI_TASK)

        messages, options = provider.calls[0]
        assert options.temperature == 0.8
        assert options.model == "primary-large"
        assert messages[0].content.startswith(MODE_PERSONAS[AgentMode.ARCHITECT])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode,model", [("worker", "primary-medium"), ("intern", "primary-small")])
    async def test_worker_and_intern(self, harness, registry, provider, mode, model):
        agent = await make_agent(harness, registry)
        agent.set_mode(mode)
        await agent.handle_task(NON_UI_TASK)

        _, options = provider.calls[0]
        assert options.temperature == 0.5
        assert options.model == model

    def test_invalid_mode(self, registry):
        agent = EdgeStackAgent(ModelHarness(), registry)
        with pytest.raises(InvalidModeError):
            agent.set_mode("overlord")
        assert agent.mode == AgentMode.WORKER

    def test_max_tokens_override(self, registry):
        agent = EdgeStackAgent(ModelHarness(), registry, max_tokens=1024)
        assert agent.chat_options().max_tokens == 1024


# =============================================================================
# Errors and Status
# =============================================================================

class TestHandleTaskErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("task", ["", "   \n"])
    async def test_blank_task_rejected(self, harness, registry, provider, task):
        agent = await make_agent(harness, registry)
        with pytest.raises(InvalidTaskError):
            await agent.handle_task(task)
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_all_providers_failing_returns_error_string(self, registry):
        harness = ModelHarness([
            FakeProvider("a", fail_chat=RuntimeError("first down")),
            FakeProvider("b", fail_chat=RuntimeError("second down")),
        ])
        await harness.initialize({"a": ProviderConfig(api_key="k"), "b": ProviderConfig(api_key="k")})
        agent = EdgeStackAgent(harness, registry)

        answer = await agent.handle_task(NON_UI_TASK)
        assert answer == "❌ Error: second down"

    @pytest.mark.asyncio
    async def test_fallback_answer_returned(self, registry):
        harness = ModelHarness([
            FakeProvider("a", fail_chat=RuntimeError("down")),
            FakeProvider("b", responses=["fallback answer"]),
        ])
        await harness.initialize({"a": ProviderConfig(api_key="k"), "b": ProviderConfig(api_key="k")})
        agent = EdgeStackAgent(harness, registry)

        assert await agent.handle_task(NON_UI_TASK) == "fallback answer"


class TestStatus:
    @pytest.mark.asyncio
    async def test_status_snapshot(self, harness, registry):
        agent = await make_agent(harness, registry, mode="intern")
        status = agent.get_status()

        assert status.mode == AgentMode.INTERN
        assert status.skill_count == 3
        assert status.skills == ("better-auth", "cloudflare-workers", "durable-objects")
        assert status.providers == ("primary", "backup")
        assert status.active_providers == ("primary", "backup")
        assert status.primary == "primary"

    @pytest.mark.asyncio
    async def test_status_is_idempotent(self, harness, registry):
        agent = await make_agent(harness, registry)
        assert agent.get_status() == agent.get_status()
