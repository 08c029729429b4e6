# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Beads Client

Thin async wrapper around the beads (`bd`) command-line task tracker.
Only the done / claim / sync contract used by the sync adapter is exposed.
"""

import asyncio
import logging
import re
from typing import List, Optional

from edge_agent.core.exceptions import BeadsCommandError

logger = logging.getLogger(__name__)

BEADS_ID_PATTERN = re.compile(r"bd-[a-z0-9]+", re.IGNORECASE)


def extract_beads_ids(text: str) -> List[str]:
    """Extract beads task IDs (bd-xxx) from text, de-duplicated in order."""
    seen = []
    for match in BEADS_ID_PATTERN.findall(text or ""):
        if match not in seen:
            seen.append(match)
    return seen


class BeadsClient:
    """
    Run beads commands as subprocesses.

    Usage:
        client = BeadsClient()
        if await client.is_available():
            await client.claim("bd-a1b2")
            await client.done("bd-a1b2")
            await client.sync()
    """

    def __init__(self, binary: str = "bd", cwd: Optional[str] = None):
        self.binary = binary
        self.cwd = cwd

    async def run(self, *args: str) -> str:
        """
        Run `bd <args>` and return its stdout.

        Raises:
            BeadsCommandError: If the command cannot start or exits non-zero
        """
        command = [self.binary, *args]
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd
            )
        except OSError as e:
            raise BeadsCommandError(command, None, str(e)) from e

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise BeadsCommandError(command, process.returncode, stderr.decode(errors="replace"))

        return stdout.decode(errors="replace")

    async def is_available(self) -> bool:
        """Check if beads is installed and runnable."""
        try:
            await self.run("--version")
        except BeadsCommandError as e:
            logger.debug(f"Beads not available: {e}")
            return False
        return True

    async def done(self, task_id: str) -> None:
        """Mark a beads task as done."""
        await self.run("done", task_id)

    async def claim(self, task_id: str) -> None:
        """Claim a beads task (mark as in_progress)."""
        await self.run("update", task_id, "--status", "in_progress")

    async def sync(self) -> None:
        """Sync beads tasks with git."""
        await self.run("sync")

    async def ready(self, limit: int = 5) -> str:
        """List tasks that are ready to work on."""
        return await self.run("ready", "--limit", str(limit))
