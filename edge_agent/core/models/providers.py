# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Model Providers

Interchangeable chat backends behind one interface, so the agent is not
locked into a single vendor. Each provider maps the three agent modes to
its own model identifiers and wraps a LangChain chat model.

Supports:
- Anthropic (Claude) via langchain-anthropic
- OpenAI (GPT) via langchain-openai
- Google (Gemini) via langchain-google-genai
- Local models (Ollama, LM Studio, vLLM) via their OpenAI-compatible endpoint

Example:
    >>> provider = AnthropicProvider()
    >>> await provider.initialize(ProviderConfig(api_key="sk-ant-..."))
    >>> response = await provider.chat(
    ...     [ChatMessage.user("hello")],
    ...     ChatOptions(model=provider.model_for(AgentMode.INTERN))
    ... )
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel
from langchain_core.language_models import BaseChatModel
from langchain_anthropic import ChatAnthropic
from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI

from edge_agent.core.exceptions import ProviderInitializationError, ProviderNotInitializedError
from edge_agent.core.models.modes import AgentMode
from edge_agent.core.models.schemas import (
    ChatMessage,
    ChatOptions,
    ChatResponse,
    to_langchain_messages,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7
DEFAULT_LOCAL_URL = "http://localhost:11434"


class ProviderConfig(BaseModel):
    """Credentials and defaults for one provider."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout: Optional[float] = None


# =============================================================================
# Provider Interface
# =============================================================================

class ModelProvider(ABC):
    """
    Base class for model providers.

    A provider must be initialized exactly once before `chat` is called.
    Subclasses declare `name` and `models` and build the backend client.
    """

    name: str = ""
    models: Dict[AgentMode, str] = {}
    requires_api_key: bool = True

    def __init__(self):
        self.config: Optional[ProviderConfig] = None
        self.initialized = False
        self._clients: Dict[Tuple[str, float, int], BaseChatModel] = {}

    @property
    def mode_model_map(self) -> Dict[AgentMode, str]:
        return dict(self.models)

    def model_for(self, mode: AgentMode) -> str:
        """Model identifier this provider uses for a mode."""
        return self.models[AgentMode.parse(mode)]

    async def initialize(self, config: ProviderConfig) -> None:
        """
        Validate configuration and create the default client.

        Raises:
            ProviderInitializationError: On missing credentials, a second
                initialization, or a client construction failure
        """
        if self.initialized:
            raise ProviderInitializationError(self.name, "re-initialization is not supported")

        if self.requires_api_key and not config.api_key:
            raise ProviderInitializationError(self.name, "API key is required")

        self.config = config
        try:
            self._get_client(self.default_model, config.temperature, config.max_tokens)
        except Exception as e:
            self.config = None
            self._clients.clear()
            raise ProviderInitializationError(self.name, str(e)) from e

        self.initialized = True
        logger.info(f"✅ Initialized {self.name} provider")

    @property
    def default_model(self) -> str:
        return self.models[AgentMode.WORKER]

    async def chat(self, messages: List[ChatMessage], options: Optional[ChatOptions] = None) -> ChatResponse:
        """
        Send messages to the backend and return its reply.

        Raises:
            ProviderNotInitializedError: If called before initialize()
        """
        if not self.initialized or self.config is None:
            raise ProviderNotInitializedError(self.name)

        options = options or ChatOptions()
        model = options.model or self.default_model
        temperature = options.temperature if options.temperature is not None else self.config.temperature
        max_tokens = options.max_tokens or self.config.max_tokens

        llm = self._get_client(model, temperature, max_tokens)
        result = await llm.ainvoke(to_langchain_messages(messages))
        return ChatResponse.from_ai_message(result, provider=self.name, model=model)

    def _get_client(self, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
        key = (model, temperature, max_tokens)
        if key not in self._clients:
            logger.debug(f"Initializing {self.name} client for model: {model}")
            self._clients[key] = self._create_client(model, temperature, max_tokens)
        return self._clients[key]

    @abstractmethod
    def _create_client(self, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
        """Create the LangChain chat model for a model identifier."""

    def __repr__(self) -> str:
        state = "initialized" if self.initialized else "uninitialized"
        return f"<{self.__class__.__name__} {self.name} ({state})>"


# =============================================================================
# Providers
# =============================================================================

class AnthropicProvider(ModelProvider):
    """Anthropic Provider (Claude)"""

    name = "anthropic"
    models = {
        AgentMode.ARCHITECT: "claude-opus-4-5",
        AgentMode.WORKER: "claude-sonnet-4-5",
        AgentMode.INTERN: "claude-haiku-4-5",
    }

    def _create_client(self, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
        params = {
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "api_key": self.config.api_key,
            "timeout": self.config.timeout,
        }
        if self.config.base_url:
            params["base_url"] = self.config.base_url
        return ChatAnthropic(**params)


class OpenAIProvider(ModelProvider):
    """OpenAI Provider (GPT)"""

    name = "openai"
    models = {
        AgentMode.ARCHITECT: "gpt-4.1",
        AgentMode.WORKER: "gpt-4o",
        AgentMode.INTERN: "gpt-4o-mini",
    }

    def _create_client(self, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
        params = {
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "api_key": self.config.api_key,
            "timeout": self.config.timeout,
        }
        if self.config.base_url:
            params["base_url"] = self.config.base_url
        return ChatOpenAI(**params)


class GoogleProvider(ModelProvider):
    """Google Provider (Gemini)"""

    name = "google"
    models = {
        AgentMode.ARCHITECT: "gemini-2.5-pro",
        AgentMode.WORKER: "gemini-2.5-pro",
        AgentMode.INTERN: "gemini-2.5-flash",
    }

    def _create_client(self, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
        return ChatGoogleGenerativeAI(
            model=model,
            temperature=temperature,
            max_output_tokens=max_tokens,
            google_api_key=self.config.api_key,
            timeout=self.config.timeout,
        )


class LocalProvider(ModelProvider):
    """
    Local Provider (Ollama, LM Studio, vLLM)

    Talks to the server's OpenAI-compatible `/v1` endpoint; no API key needed.
    """

    name = "local"
    requires_api_key = False
    models = {
        AgentMode.ARCHITECT: "llama3.1:70b",
        AgentMode.WORKER: "llama3.1:8b",
        AgentMode.INTERN: "llama3.1:8b",
    }

    @property
    def default_model(self) -> str:
        if self.config and self.config.model:
            return self.config.model
        return super().default_model

    def model_for(self, mode: AgentMode) -> str:
        """LOCAL_LLM_MODEL, when set, replaces the worker and intern models."""
        mode = AgentMode.parse(mode)
        if mode != AgentMode.ARCHITECT and self.config and self.config.model:
            return self.config.model
        return super().model_for(mode)

    def _create_client(self, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
        base_url = (self.config.base_url or DEFAULT_LOCAL_URL).rstrip("/")
        if not base_url.endswith("/v1"):
            base_url = f"{base_url}/v1"

        return ChatOpenAI(
            model=model,
            base_url=base_url,
            api_key=self.config.api_key or "not-needed",
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=self.config.timeout,
        )


def default_providers() -> List[ModelProvider]:
    """Fresh instances of every built-in provider, in registration order."""
    return [AnthropicProvider(), OpenAIProvider(), GoogleProvider(), LocalProvider()]
