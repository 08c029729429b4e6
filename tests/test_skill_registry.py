# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for the skill registry."""
import logging

from edge_agent.core.skills.loader import EmbeddedSkillSource, FilesystemSkillSource
from edge_agent.core.skills.registry import SkillRegistry
from tests.fakes import write_skill


class TestSkillRegistry:
    def test_from_directories_loads(self, skills_dir):
        registry = SkillRegistry.from_directories(str(skills_dir))
        assert len(registry) == 3
        assert "durable-objects" in registry
        assert registry.get("durable-objects").triggers[0] == "durable object"

    def test_unknown_name(self, registry):
        assert registry.get("missing") is None
        assert "missing" not in registry

    def test_empty_before_load(self, skills_dir):
        registry = SkillRegistry()
        registry.register_source(FilesystemSkillSource(str(skills_dir)))
        assert len(registry) == 0
        assert registry.load() == 3
        assert registry.names() == ["better-auth", "cloudflare-workers", "durable-objects"]

    def test_first_registration_wins(self, skills_dir, tmp_path, caplog):
        overrides = tmp_path / "project"
        write_skill(overrides, "do-override", "---\nname: durable-objects\ndescription: project copy\n---\n")

        registry = SkillRegistry.from_directories(str(overrides), str(skills_dir))

        with caplog.at_level(logging.WARNING):
            registry.load()

        assert len(registry) == 3
        assert registry.get("durable-objects").description == "project copy"
        assert "Duplicate skill 'durable-objects'" in caplog.text

    def test_sources_in_registration_order(self, skills_dir):
        registry = SkillRegistry()
        embedded = EmbeddedSkillSource({"inline": "---\ntriggers: [kv]\n---\n"})
        filesystem = FilesystemSkillSource(str(skills_dir))
        registry.register_source(embedded)
        registry.register_source(filesystem)
        registry.load()

        assert registry.sources == [embedded, filesystem]
        assert registry.names()[0] == "inline"

    def test_reload_picks_up_new_skills(self, skills_dir, registry):
        write_skill(skills_dir, "new-skill", "---\ntriggers: [queue]\n---\n")
        assert registry.load() == 4
        assert "new-skill" in registry

    def test_list_all_is_a_copy(self, registry):
        skills = registry.list_all()
        skills.clear()
        assert len(registry) == 3
