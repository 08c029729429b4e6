# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Registry - In-memory registry fed by explicit manifest sources.

Responsible for:
- Holding loaded skills in a stable order for matching
- Enforcing unique skill names (first registration wins)
- Providing lookup APIs (by name, listing)
"""

import logging
from typing import Dict, List, Optional

from edge_agent.core.skills.loader import (
    FilesystemSkillSource,
    Skill,
    SkillLoader,
    SkillSource,
)

logger = logging.getLogger(__name__)


class SkillRegistry:
    """
    Central registry for skills.

    Sources are registered explicitly and loaded once; the resulting skill
    set is immutable until the next `load()`.

    Usage:
        registry = SkillRegistry()
        registry.register_source(FilesystemSkillSource("skills/"))
        registry.load()

        skill = registry.get("durable-objects")
    """

    def __init__(self, loader: Optional[SkillLoader] = None):
        self._loader = loader or SkillLoader()
        self._sources: List[SkillSource] = []
        self._skills: Dict[str, Skill] = {}  # name -> Skill, insertion ordered

    @classmethod
    def from_directories(cls, *directories: str) -> "SkillRegistry":
        """Build and load a registry from one or more skill directories."""
        registry = cls()
        for directory in directories:
            registry.register_source(FilesystemSkillSource(directory))
        registry.load()
        return registry

    def register_source(self, source: SkillSource) -> None:
        """Add a manifest source; takes effect on the next load()."""
        self._sources.append(source)

    @property
    def sources(self) -> List[SkillSource]:
        return list(self._sources)

    def load(self) -> int:
        """
        (Re)load skills from all registered sources.

        Returns:
            Number of skills loaded
        """
        skills: Dict[str, Skill] = {}

        for skill in self._loader.load_sources(self._sources):
            if skill.name in skills:
                logger.warning(
                    f"⚠️ Duplicate skill '{skill.name}' at {skill.source_path} "
                    f"ignored (already loaded from {skills[skill.name].source_path})"
                )
                continue
            skills[skill.name] = skill

        self._skills = skills
        logger.info(f"✅ Loaded {len(skills)} skills")
        return len(skills)

    def get(self, name: str) -> Optional[Skill]:
        return self._skills.get(name)

    def list_all(self) -> List[Skill]:
        return list(self._skills.values())

    def names(self) -> List[str]:
        return list(self._skills.keys())

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, name: object) -> bool:
        return name in self._skills
