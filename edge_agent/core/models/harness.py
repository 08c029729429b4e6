# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Model Harness

Provider registry plus dispatch with automatic fallback.

Initialization walks providers in registration order: the first one that
initializes becomes primary, later successes become the fallback chain in
the order they succeed, and failures are dropped for the process lifetime.

Dispatch tries primary then each fallback with identical messages and
options, resolving the model for the requested mode from whichever provider
is being attempted. It stops at the first success; if every provider fails
the last error is re-raised.

Usage:
    harness = create_default_harness()
    await harness.initialize(build_provider_configs())
    response = await harness.chat(messages, AgentMode.ARCHITECT)
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from edge_agent.core.exceptions import AllProvidersFailedError
from edge_agent.core.models.modes import AgentMode
from edge_agent.core.models.providers import ModelProvider, ProviderConfig, default_providers
from edge_agent.core.models.schemas import ChatMessage, ChatOptions, ChatResponse

logger = logging.getLogger(__name__)


class ModelHarness:
    """
    Holds registered providers and routes chat requests across them.

    The primary/fallback chain is written once by initialize() and only
    read afterwards, so dispatch needs no locking.
    """

    def __init__(self, providers: Optional[List[ModelProvider]] = None):
        self._providers: Dict[str, ModelProvider] = {}
        self._primary: Optional[ModelProvider] = None
        self._fallbacks: List[ModelProvider] = []
        self._initialized = False

        for provider in providers or []:
            self.register(provider)

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def register(self, provider: ModelProvider) -> None:
        """
        Register a provider. Registration order is initialization order.

        Raises:
            ValueError: If a provider with the same name is already registered
        """
        if not provider.name:
            raise ValueError("Provider must have a name")
        if provider.name in self._providers:
            raise ValueError(f"Provider '{provider.name}' is already registered")
        if self._initialized:
            raise ValueError("Cannot register providers after initialization")
        self._providers[provider.name] = provider

    def get_provider(self, name: str) -> Optional[ModelProvider]:
        return self._providers.get(name)

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    async def initialize(self, configs: Dict[str, ProviderConfig]) -> None:
        """
        Initialize every registered provider that has a configuration.

        Args:
            configs: ProviderConfig by provider name; providers without an
                entry are skipped

        Raises:
            AllProvidersFailedError: If no provider initialized successfully
        """
        if self._initialized:
            logger.warning("Model harness already initialized; ignoring re-initialization")
            return

        attempted = []

        for name, provider in self._providers.items():
            config = configs.get(name)
            if config is None:
                logger.debug(f"No configuration for {name} provider, skipping")
                continue

            attempted.append(name)
            try:
                await provider.initialize(config)
            except Exception as e:
                logger.warning(f"⚠️  Failed to initialize {name}: {e}")
                continue

            # Primary is the first successful initialization
            if self._primary is None:
                self._primary = provider
            else:
                self._fallbacks.append(provider)

        if self._primary is None:
            raise AllProvidersFailedError(attempted=attempted)

        self._initialized = True
        logger.info(
            f"Primary provider: {self._primary.name}; "
            f"fallbacks: {[p.name for p in self._fallbacks] or 'none'}"
        )

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def primary(self) -> Optional[ModelProvider]:
        return self._primary

    @property
    def fallbacks(self) -> Tuple[ModelProvider, ...]:
        return tuple(self._fallbacks)

    def _chain(self) -> List[ModelProvider]:
        if self._primary is None:
            return []
        return [self._primary, *self._fallbacks]

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def chat(
        self,
        messages: List[ChatMessage],
        mode: Union[AgentMode, str],
        options: Optional[ChatOptions] = None
    ) -> ChatResponse:
        """
        Send messages to the first provider that answers.

        Args:
            messages: Conversation to send
            mode: Agent mode; each provider resolves its own model for it
            options: Sampling options shared by every attempt

        Returns:
            Response from the first successful provider

        Raises:
            AllProvidersFailedError: If the harness has no active providers
            Exception: The last provider error when every provider fails
        """
        mode = AgentMode.parse(mode)
        options = options or ChatOptions()
        chain = self._chain()

        if not chain:
            raise AllProvidersFailedError("No model providers available; initialize the harness first")

        last_error: Optional[Exception] = None

        for index, provider in enumerate(chain):
            model = provider.model_for(mode)
            attempt = options.model_copy(update={"model": model})
            try:
                response = await provider.chat(messages, attempt)
            except Exception as e:
                role = "Primary provider" if index == 0 else f"Fallback {provider.name}"
                logger.warning(f"{role} failed ({model}): {e}")
                last_error = e
                continue

            if index > 0:
                logger.info(f"Fallback {provider.name} answered with {model}")
            return response

        raise last_error

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def get_available_providers(self) -> List[str]:
        """Names of all registered providers, in registration order."""
        return list(self._providers.keys())

    def get_active_providers(self) -> List[str]:
        """Names of initialized providers: primary first, then fallbacks."""
        return [p.name for p in self._chain()]

    def get_primary_provider(self) -> Optional[str]:
        return self._primary.name if self._primary else None


def create_default_harness() -> ModelHarness:
    """Create a harness with all built-in providers registered."""
    return ModelHarness(default_providers())
