# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Agent modes: the three task-complexity tiers.

Each mode selects a persona prompt, a model per provider, and sampling
defaults. Architectural reasoning runs hotter; implementation work favors
determinism.
"""

from enum import Enum
from typing import Any, Dict, Union

from edge_agent.core.exceptions import InvalidModeError


class AgentMode(str, Enum):
    """Agent modes ordered by reasoning depth."""
    ARCHITECT = "architect"  # high-end reasoning
    WORKER = "worker"        # general implementation
    INTERN = "intern"        # simple, well-defined tasks

    @classmethod
    def parse(cls, value: Union["AgentMode", str]) -> "AgentMode":
        """
        Convert a string to an AgentMode.

        Raises:
            InvalidModeError: If the value is not a known mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidModeError(value, cls.values())

    @classmethod
    def values(cls) -> list:
        return [mode.value for mode in cls]


DEFAULT_MODE = AgentMode.WORKER

# Sampling defaults by mode
MODE_CONFIGS: Dict[AgentMode, Dict[str, Any]] = {
    AgentMode.ARCHITECT: {
        'temperature': 0.8,
        'max_tokens': 4096,
    },
    AgentMode.WORKER: {
        'temperature': 0.5,
        'max_tokens': 4096,
    },
    AgentMode.INTERN: {
        'temperature': 0.5,
        'max_tokens': 4096,
    },
}

# UI specialist runs on the worker models with a low temperature for accuracy
UI_CONFIG: Dict[str, Any] = {
    'mode': AgentMode.WORKER,
    'temperature': 0.3,
    'max_tokens': 4096,
}
