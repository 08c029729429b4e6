# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Edge Stack Agent Configuration
Reads provider credentials and runtime options from the environment or a .env file
"""
from pydantic_settings import BaseSettings
from typing import Dict, List, Optional, TYPE_CHECKING
import os
from dotenv import load_dotenv

if TYPE_CHECKING:
    from edge_agent.core.models.providers import ProviderConfig

# Load .env file from the current project root
load_dotenv(os.path.join(os.getcwd(), ".env"))


# Environment variables each provider reads, in provider registration order.
# An unset credential means the provider is skipped during initialization.
PROVIDER_ENV_VARS: Dict[str, List[str]] = {
    "anthropic": ["ANTHROPIC_API_KEY"],
    "openai": ["OPENAI_API_KEY", "OPENAI_API_BASE"],
    "google": ["GOOGLE_API_KEY", "GEMINI_API_KEY"],
    "local": ["LOCAL_LLM_URL", "LOCAL_LLM_MODEL"],
}

PROVIDER_DESCRIPTIONS: Dict[str, str] = {
    "anthropic": "For Claude",
    "openai": "For GPT",
    "google": "For Gemini",
    "local": "For local models (Ollama, LM Studio)",
}


class Settings(BaseSettings):
    """Runtime settings for the agent, providers and beads sync"""

    debug: bool = False

    # Provider credentials
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_api_base: Optional[str] = None
    google_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    local_llm_url: Optional[str] = None
    local_llm_model: str = "llama3.1:8b"

    # Skills
    skills_dir: str = "skills"
    include_builtin_skills: bool = True

    # Defaults
    default_mode: str = "worker"
    max_tokens: int = 4096
    request_timeout: Optional[float] = 120.0  # seconds, None waits indefinitely

    # Beads (external task tracker)
    beads_binary: str = "bd"

    @property
    def GOOGLE_API_KEY(self) -> Optional[str]:
        """Google/Gemini API key, accepting either variable name"""
        return self.google_api_key or self.gemini_api_key

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields from .env file


def build_provider_configs(config: Optional[Settings] = None) -> Dict[str, "ProviderConfig"]:
    """
    Build per-provider configuration from settings.

    Only providers whose credential is present get an entry, so the harness
    skips the others without treating them as failures.

    Args:
        config: Settings to read (defaults to the global settings)

    Returns:
        Mapping of provider name to ProviderConfig
    """
    from edge_agent.core.models.providers import ProviderConfig

    config = config or settings
    common = {"max_tokens": config.max_tokens, "timeout": config.request_timeout}
    configs: Dict[str, ProviderConfig] = {}

    if config.anthropic_api_key:
        configs["anthropic"] = ProviderConfig(api_key=config.anthropic_api_key, **common)

    if config.openai_api_key:
        configs["openai"] = ProviderConfig(
            api_key=config.openai_api_key,
            base_url=config.openai_api_base,
            **common
        )

    if config.GOOGLE_API_KEY:
        configs["google"] = ProviderConfig(api_key=config.GOOGLE_API_KEY, **common)

    if config.local_llm_url:
        configs["local"] = ProviderConfig(
            base_url=config.local_llm_url,
            model=config.local_llm_model,
            **common
        )

    return configs


# Global settings instance
settings = Settings()
