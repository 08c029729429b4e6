# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Custom Exception Hierarchy for Edge Stack Agent

Provides standardized exceptions for consistent error handling across the
task-routing layer.

Usage:
    from edge_agent.core.exceptions import InvalidTaskError, AllProvidersFailedError

    if not task.strip():
        raise InvalidTaskError("Task description must not be empty")

Architecture:
- Base EdgeAgentException for all custom exceptions
- Input exceptions (InvalidTask, InvalidMode)
- Resource exceptions (SkillLoad, ScriptNotFound)
- Provider exceptions (initialization, not initialized, exhaustion)
- External tool exceptions (beads command failures)
- The orchestrator converts these to readable strings, the CLI to exit codes
"""

from typing import Optional, Dict, Any, List


# =============================================================================
# Base Exception
# =============================================================================

class EdgeAgentException(Exception):
    """
    Base exception for all Edge Stack Agent custom exceptions.

    All custom exceptions should inherit from this class to ensure
    consistent error handling at the orchestrator and CLI boundaries.
    """

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        self.message = message
        self.detail = detail or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "detail": self.detail
        }


# =============================================================================
# Input Validation
# =============================================================================

class InvalidTaskError(EdgeAgentException):
    """Task text is empty or otherwise unusable for routing."""

    def __init__(self, message: str = "Task description must not be empty", detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail=detail)


class InvalidModeError(EdgeAgentException):
    """Requested agent mode is not one of the known modes."""

    def __init__(self, mode: Any, valid_modes: List[str], detail: Optional[Dict[str, Any]] = None):
        message = f"Invalid mode '{mode}'. Use one of: {', '.join(valid_modes)}"
        detail = detail or {}
        detail["mode"] = str(mode)
        detail["valid_modes"] = list(valid_modes)
        super().__init__(message, detail=detail)


# =============================================================================
# Skills
# =============================================================================

class SkillLoadError(EdgeAgentException):
    """A single skill manifest could not be read or parsed."""

    def __init__(self, source_path: str, reason: str, detail: Optional[Dict[str, Any]] = None):
        message = f"Failed to load skill from {source_path}: {reason}"
        detail = detail or {}
        detail["source_path"] = source_path
        super().__init__(message, detail=detail)


class ScriptNotFoundError(EdgeAgentException):
    """No runnable script exists at the skill script convention path."""

    def __init__(self, skill_name: str, script_name: str, searched: List[str]):
        message = f"No script '{script_name}' found for skill '{skill_name}'"
        super().__init__(message, detail={"searched": searched})


# =============================================================================
# Providers
# =============================================================================

class ProviderInitializationError(EdgeAgentException):
    """A model provider failed to initialize (bad or missing credentials)."""

    def __init__(self, provider_name: str, reason: str):
        self.provider_name = provider_name
        message = f"Provider '{provider_name}' failed to initialize: {reason}"
        super().__init__(message, detail={"provider": provider_name})


class ProviderNotInitializedError(EdgeAgentException):
    """A model provider was invoked before successful initialization."""

    def __init__(self, provider_name: str):
        self.provider_name = provider_name
        message = f"Provider '{provider_name}' used before initialization"
        super().__init__(message, detail={"provider": provider_name})


class AllProvidersFailedError(EdgeAgentException):
    """No model provider is available to serve requests."""

    def __init__(
        self,
        message: str = "No model providers initialized successfully",
        attempted: Optional[List[str]] = None
    ):
        super().__init__(message, detail={"attempted": attempted or []})


# =============================================================================
# External Tools
# =============================================================================

class BeadsCommandError(EdgeAgentException):
    """The beads (bd) command exited with an error or could not be started."""

    def __init__(self, command_args: List[str], returncode: Optional[int], stderr: str = ""):
        command = " ".join(command_args)
        message = f"Command '{command}' failed"
        if returncode is not None:
            message += f" with exit code {returncode}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message, detail={"returncode": returncode})
