# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Pytest Configuration and Fixtures for Edge Stack Agent Tests.

Provides temporary skill directories, loaded registries and a clean
provider environment so tests never pick up real credentials.
"""

import pytest

from edge_agent.config import PROVIDER_ENV_VARS
from edge_agent.core.skills.registry import SkillRegistry
from tests.fakes import SAMPLE_MANIFESTS, write_skill


@pytest.fixture
def skills_dir(tmp_path):
    """Skills directory with three well-formed manifests."""
    base = tmp_path / "skills"
    base.mkdir()
    for name, text in SAMPLE_MANIFESTS.items():
        write_skill(base, name, text)
    return base


@pytest.fixture
def registry(skills_dir):
    """Registry loaded from the sample skills directory."""
    return SkillRegistry.from_directories(str(skills_dir))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every provider and agent variable from the environment."""
    names = [var for env_vars in PROVIDER_ENV_VARS.values() for var in env_vars]
    names += ["DEBUG", "SKILLS_DIR", "DEFAULT_MODE", "MAX_TOKENS", "REQUEST_TIMEOUT", "BEADS_BINARY"]
    for name in names:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
