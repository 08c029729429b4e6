# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Loader - Parses SKILL.md manifests into Skill records.

Responsible for:
- Discovering manifests through pluggable sources (filesystem, embedded)
- Parsing frontmatter (YAML, or the plain key/list line grammar) + markdown content
- Falling back to the directory name when `name` is missing
- Skipping unreadable or malformed manifests without failing the whole load

SKILL.md Format:
```markdown
---
name: durable-objects
description: "Stateful coordination with Durable Objects"
triggers:
  - rate limit
  - durable object
  - websocket
---

## Instructions
[Free-form body, passed through verbatim as skill content]
```
"""

import os
import re
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Dict, Any, Tuple
from dataclasses import dataclass, field

import yaml

from edge_agent.core.exceptions import SkillLoadError

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
FRONTMATTER_DELIMITER = "---"

# Line grammar used when the block is not valid YAML
KEY_VALUE_PATTERN = re.compile(r"^(\w[\w-]*):\s*(.*)$")
LIST_ITEM_PATTERN = re.compile(r"^\s*-\s+(.*)$")


@dataclass(frozen=True)
class Skill:
    """A named, trigger-activated capability loaded from a manifest."""
    name: str
    description: str
    triggers: Tuple[str, ...]
    source_path: str
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ManifestSource:
    """Raw manifest text plus where it came from."""
    fallback_name: str  # used when the manifest has no `name` field
    source_path: str
    text: str


class SkillSource(ABC):
    """A place skill manifests can be discovered from."""

    @abstractmethod
    def discover(self) -> List[ManifestSource]:
        """Return every manifest this source can currently provide."""


class FilesystemSkillSource(SkillSource):
    """
    Discover SKILL.md manifests in the immediate subdirectories of a folder.

    Unreadable entries are logged and skipped; a missing base directory
    yields no manifests.
    """

    def __init__(self, directory: str):
        self.directory = str(directory)

    def discover(self) -> List[ManifestSource]:
        discovered = []

        try:
            entries = sorted(os.scandir(self.directory), key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"⚠️ Skills directory not found: {self.directory} ({e})")
            return []

        for entry in entries:
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                continue

            skill_file = os.path.join(entry.path, SKILL_FILENAME)
            try:
                with open(skill_file, 'r', encoding='utf-8') as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"⚠️ Failed to read skill {entry.name}: {e}")
                continue

            discovered.append(ManifestSource(
                fallback_name=entry.name,
                source_path=skill_file,
                text=text
            ))

        logger.debug(f"Discovered {len(discovered)} skill manifests in {self.directory}")
        return discovered

    def __repr__(self) -> str:
        return f"FilesystemSkillSource({self.directory!r})"


class EmbeddedSkillSource(SkillSource):
    """Manifests held in memory, keyed by fallback name."""

    def __init__(self, manifests: Dict[str, str], origin: str = "<embedded>"):
        self.manifests = dict(manifests)
        self.origin = origin

    def discover(self) -> List[ManifestSource]:
        return [
            ManifestSource(
                fallback_name=name,
                source_path=f"{self.origin}/{name}/{SKILL_FILENAME}",
                text=text
            )
            for name, text in self.manifests.items()
        ]


def builtin_skills_path() -> str:
    """Get path for the skills shipped with the package."""
    # edge_agent/skills/builtin/
    return str(Path(__file__).parent.parent.parent / "skills" / "builtin")


def _strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


class SkillLoader:
    """
    Parse manifests from one or more sources into Skill records.

    Example usage:
        loader = SkillLoader()
        skills = loader.load("skills/")
        for skill in skills:
            print(skill.name, skill.triggers)
    """

    def load(self, directory: str) -> List[Skill]:
        """
        Load every skill found in the subdirectories of `directory`.

        Args:
            directory: Folder whose subdirectories each hold a SKILL.md

        Returns:
            Skills in directory-name order; bad manifests are skipped
        """
        return self.load_sources([FilesystemSkillSource(directory)])

    def load_sources(self, sources: List[SkillSource]) -> List[Skill]:
        """Load skills from each source in order, skipping failed entries."""
        skills: List[Skill] = []

        for source in sources:
            try:
                manifests = source.discover()
            except Exception as e:
                logger.warning(f"⚠️ Skill source {source!r} failed: {e}")
                continue

            for manifest in manifests:
                try:
                    skill = self.build_skill(manifest)
                except SkillLoadError as e:
                    logger.warning(f"⚠️ {e.message}")
                    continue

                logger.debug(f"📚 Loaded skill: {skill.name}")
                skills.append(skill)

        return skills

    def build_skill(self, manifest: ManifestSource) -> Skill:
        """
        Build a Skill from a single manifest.

        Raises:
            SkillLoadError: If the manifest has no valid frontmatter block
        """
        frontmatter = self.parse_frontmatter(manifest.text)
        if frontmatter is None:
            raise SkillLoadError(manifest.source_path, "missing or invalid frontmatter")

        name = self._as_text(frontmatter.get('name')) or manifest.fallback_name
        if not name:
            raise SkillLoadError(manifest.source_path, "skill has no name")

        metadata = {
            key: value for key, value in frontmatter.items()
            if key not in ('name', 'description', 'triggers')
        }

        return Skill(
            name=name,
            description=self._as_text(frontmatter.get('description')),
            triggers=self._parse_triggers(frontmatter.get('triggers')),
            source_path=manifest.source_path,
            content=manifest.text,
            metadata=metadata
        )

    @staticmethod
    def parse_frontmatter(content: str) -> Optional[Dict[str, Any]]:
        """
        Parse the YAML frontmatter block of a manifest.

        The block opens with a `---` line at the very start of the file and
        closes at the next `---` line. Scalars are kept as strings, so
        triggers such as `on` or `yes` are not turned into booleans. A block
        that is not valid YAML (e.g. an unquoted `: ` inside a value) is
        read line by line as `key: value` scalars and `- item` lists.

        Args:
            content: Full SKILL.md file content

        Returns:
            Frontmatter mapping, or None if absent or unparseable
        """
        lines = content.lstrip('\ufeff').splitlines()
        if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
            return None

        for end_idx in range(1, len(lines)):
            if lines[end_idx].strip() == FRONTMATTER_DELIMITER:
                break
        else:
            return None

        block = lines[1:end_idx]

        try:
            frontmatter = yaml.load('\n'.join(block), Loader=yaml.BaseLoader) or {}
        except yaml.YAMLError as e:
            logger.debug(f"Frontmatter is not valid YAML, reading it line by line: {e}")
            return SkillLoader._parse_simple_frontmatter(block) or None

        if not isinstance(frontmatter, dict):
            return None

        return {str(key): value for key, value in frontmatter.items()}

    @staticmethod
    def _parse_simple_frontmatter(lines: List[str]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        list_key: Optional[str] = None

        for line in lines:
            item = LIST_ITEM_PATTERN.match(line)
            if item and list_key:
                result[list_key].append(_strip_quotes(item.group(1)))
                continue

            pair = KEY_VALUE_PATTERN.match(line)
            if not pair:
                continue

            key, value = pair.group(1), pair.group(2).strip()
            if value in ("", "|", ">"):
                list_key = key
                result[key] = []
            else:
                list_key = None
                result[key] = _strip_quotes(value)

        return result

    @staticmethod
    def _as_text(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _parse_triggers(value: Any) -> Tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            items = value
        else:
            items = [value]
        return tuple(
            str(item).strip() for item in items
            if item is not None and str(item).strip()
        )
