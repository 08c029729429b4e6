# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Matcher - Trigger-keyword skill selection.

Responsible for:
- Case-insensitive substring matching of skill triggers against task text
- Scoring matches by trigger specificity
- Ranking skills by relevance (stable on ties)

Scoring:
    score = sum(len(trigger) for each matched trigger) / len(task)

Longer, more specific triggers score higher than short generic ones, and
normalizing by task length keeps scores comparable across tasks.
"""

import logging
from typing import List, Optional, Iterable, TYPE_CHECKING
from dataclasses import dataclass

from edge_agent.core.exceptions import InvalidTaskError
from edge_agent.core.skills.loader import Skill, SkillLoader

if TYPE_CHECKING:
    from edge_agent.core.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """A skill match with the triggers that fired and its relevance score."""
    skill: Skill
    matched_triggers: List[str]
    score: float


def validate_task(task: Optional[str]) -> str:
    """
    Reject empty or whitespace-only task text.

    Raises:
        InvalidTaskError: If there is nothing to match against
    """
    if task is None or not task.strip():
        raise InvalidTaskError("Task description must not be empty")
    return task


def match_skills(task: str, skills: Iterable[Skill]) -> List[MatchResult]:
    """
    Match a task description to skills by trigger keywords.

    Args:
        task: Free-text task description
        skills: Candidate skills, in registry order

    Returns:
        MatchResult list sorted by score (highest first); input order is
        preserved among equal scores

    Raises:
        InvalidTaskError: If the task is empty or whitespace-only
    """
    validate_task(task)
    task_lower = task.lower()
    results: List[MatchResult] = []

    for skill in skills:
        matched: List[str] = []
        seen = set()

        for trigger in skill.triggers:
            key = trigger.lower()
            if not key or key in seen:
                continue
            if key in task_lower:
                matched.append(trigger)
                seen.add(key)

        if matched:
            results.append(MatchResult(
                skill=skill,
                matched_triggers=matched,
                score=sum(len(t) for t in matched) / len(task)
            ))

    # list.sort is stable, so ties keep registry order
    results.sort(key=lambda m: m.score, reverse=True)
    return results


class SkillMatcher:
    """
    Match tasks against the skills of a registry.

    Example usage:
        matcher = SkillMatcher(registry)
        for match in matcher.match("design a rate limiter"):
            print(f"{match.skill.name}: {match.score:.2f} {match.matched_triggers}")
    """

    def __init__(
        self,
        registry: "SkillRegistry",
        max_results: Optional[int] = None,
        min_score: float = 0.0
    ):
        """
        Args:
            registry: Skill registry to match against
            max_results: Keep only the top N matches (None keeps all)
            min_score: Drop matches scoring below this value
        """
        self._registry = registry
        self.max_results = max_results
        self.min_score = min_score

    def match(self, task: str) -> List[MatchResult]:
        """Rank the registry's skills for a task."""
        results = [
            m for m in match_skills(task, self._registry.list_all())
            if m.score >= self.min_score
        ]
        if self.max_results is not None:
            results = results[:self.max_results]

        logger.debug(
            f"Matched {len(results)} skill(s) for task: {task[:50]}"
        )
        return results


def get_matching_skill_names(task: str, skills_dir: str = "skills/") -> List[str]:
    """Load skills from a directory and return the names matching a task."""
    skills = SkillLoader().load(skills_dir)
    return [m.skill.name for m in match_skills(task, skills)]
