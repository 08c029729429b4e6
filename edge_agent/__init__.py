# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Edge Stack Agent - skill-aware task routing across interchangeable LLM providers.
"""

__version__ = "2.0.0"
