# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Model layer - agent modes, provider adapters and the fallback harness.
"""

from edge_agent.core.models.modes import AgentMode, DEFAULT_MODE, MODE_CONFIGS, UI_CONFIG
from edge_agent.core.models.schemas import ChatMessage, ChatOptions, ChatResponse, TokenUsage
from edge_agent.core.models.providers import (
    ModelProvider,
    ProviderConfig,
    AnthropicProvider,
    OpenAIProvider,
    GoogleProvider,
    LocalProvider,
    default_providers,
)
from edge_agent.core.models.harness import ModelHarness, create_default_harness

__all__ = [
    "AgentMode",
    "DEFAULT_MODE",
    "MODE_CONFIGS",
    "UI_CONFIG",
    "ChatMessage",
    "ChatOptions",
    "ChatResponse",
    "TokenUsage",
    "ModelProvider",
    "ProviderConfig",
    "AnthropicProvider",
    "OpenAIProvider",
    "GoogleProvider",
    "LocalProvider",
    "default_providers",
    "ModelHarness",
    "create_default_harness",
]
