# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Core task-routing modules.

This package contains the components on the routing path:

- skills: manifest loading, registry and trigger matching
- models: agent modes, provider adapters and the fallback harness
- agents: the task orchestrator and the UI specialist
- exceptions: the exception hierarchy shared by all of the above
"""
