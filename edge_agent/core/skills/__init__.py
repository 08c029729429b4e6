# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skills System - Declarative, trigger-activated capabilities for the agent.

This module provides:
- SkillLoader: Parse SKILL.md manifests from pluggable sources
- SkillRegistry: Ordered in-memory registry with unique names
- SkillMatcher: Trigger-keyword matching and ranking
"""

from edge_agent.core.skills.loader import (
    SkillLoader,
    Skill,
    SkillSource,
    ManifestSource,
    FilesystemSkillSource,
    EmbeddedSkillSource,
    builtin_skills_path,
)
from edge_agent.core.skills.registry import SkillRegistry
from edge_agent.core.skills.matcher import (
    SkillMatcher,
    MatchResult,
    match_skills,
    get_matching_skill_names,
)

__all__ = [
    "SkillLoader",
    "Skill",
    "SkillSource",
    "ManifestSource",
    "FilesystemSkillSource",
    "EmbeddedSkillSource",
    "builtin_skills_path",
    "SkillRegistry",
    "SkillMatcher",
    "MatchResult",
    "match_skills",
    "get_matching_skill_names",
]
