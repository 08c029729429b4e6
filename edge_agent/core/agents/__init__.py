# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Agents - task orchestration and the UI specialist persona.
"""

from edge_agent.core.agents.orchestrator import EdgeStackAgent, AgentStatus
from edge_agent.core.agents.ui_specialist import UISpecialist, requires_ui

__all__ = [
    "EdgeStackAgent",
    "AgentStatus",
    "UISpecialist",
    "requires_ui",
]
