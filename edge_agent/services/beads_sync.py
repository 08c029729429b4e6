# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Beads Sync Adapter

Mirrors todo-list lifecycle events into beads for cross-session persistence.
When a todo item containing a beads ID (bd-xxx) is marked completed, the
task is marked done in beads; when it goes in_progress, the task is claimed.

This is a one-way, best-effort side channel: every tracker failure is
logged and swallowed, and nothing here affects task routing.

Events:
    tool-execution-completed  data: {"todos": [{"content", "status"}, ...]}
    session-started           probe whether beads is installed
    session-ended             final `bd sync`

Usage:
    adapter = BeadsSyncAdapter(BeadsClient(), worktree=".")
    await adapter.handle_event({"type": "session-started"})
    await adapter.handle_event({
        "type": "tool-execution-completed",
        "tool": "TodoWrite",
        "data": {"todos": [{"content": "bd-a1b2 add auth", "status": "completed"}]}
    })
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Set, Union

from pydantic import BaseModel, Field, ValidationError

from edge_agent.services.beads import BeadsClient, extract_beads_ids

logger = logging.getLogger(__name__)

# File-based state so repeated events do not re-sync the same task
BEADS_DIR = ".beads"
STATE_FILE = ".plugin-state.json"

TOOL_EXECUTION_COMPLETED = "tool-execution-completed"
SESSION_STARTED = "session-started"
SESSION_ENDED = "session-ended"


class TodoItem(BaseModel):
    content: str
    status: Literal["pending", "in_progress", "completed"]
    active_form: Optional[str] = Field(default=None, alias="activeForm")

    model_config = {"populate_by_name": True}


class LifecycleEvent(BaseModel):
    type: str
    tool: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class SyncState(BaseModel):
    synced_done: List[str] = Field(default_factory=list, alias="syncedDone")
    synced_in_progress: List[str] = Field(default_factory=list, alias="syncedInProgress")

    model_config = {"populate_by_name": True}


class BeadsSyncAdapter:
    """
    Lifecycle-event listener that keeps beads in step with the todo list.

    Each task ID is marked done (or claimed) at most once; the IDs already
    synced are persisted under `<worktree>/.beads/`.
    """

    def __init__(self, client: BeadsClient, worktree: Union[str, Path] = "."):
        self.client = client
        self.worktree = Path(worktree)
        self.available: Optional[bool] = None  # unknown until probed

        state = self._load_state()
        self._synced_done: Set[str] = set(state.synced_done)
        self._synced_in_progress: Set[str] = set(state.synced_in_progress)

    @property
    def state_path(self) -> Path:
        return self.worktree / BEADS_DIR / STATE_FILE

    @property
    def synced_done(self) -> Set[str]:
        return set(self._synced_done)

    @property
    def synced_in_progress(self) -> Set[str]:
        return set(self._synced_in_progress)

    async def handle_event(self, event: Union[LifecycleEvent, Dict[str, Any]]) -> None:
        """
        Process one lifecycle event. Never raises.
        """
        try:
            if not isinstance(event, LifecycleEvent):
                event = LifecycleEvent.model_validate(event)

            if event.type == SESSION_STARTED:
                if await self._probe():
                    await self._show_ready()
            elif event.type == TOOL_EXECUTION_COMPLETED:
                await self.on_todos_updated(event.data.get("todos"))
            elif event.type == SESSION_ENDED:
                if await self._ensure_available():
                    await self._sync()
            else:
                logger.debug(f"Ignoring lifecycle event: {event.type}")
        except Exception as e:
            logger.warning(f"Beads sync failed for event: {e}")

    async def on_todos_updated(self, todos: Optional[List[Any]]) -> int:
        """
        Sync a batch of todo items.

        Returns:
            Number of tracker updates that succeeded
        """
        if not todos or not await self._ensure_available():
            return 0

        changed = 0
        for raw in todos:
            try:
                todo = raw if isinstance(raw, TodoItem) else TodoItem.model_validate(raw)
            except ValidationError as e:
                logger.debug(f"Skipping malformed todo item: {e}")
                continue

            for task_id in extract_beads_ids(todo.content):
                if todo.status == "completed" and task_id not in self._synced_done:
                    if await self._mark_done(task_id):
                        self._synced_done.add(task_id)
                        changed += 1
                elif todo.status == "in_progress" and task_id not in self._synced_in_progress:
                    if await self._claim(task_id):
                        self._synced_in_progress.add(task_id)
                        changed += 1

        # Only sync with git if we actually made changes
        if changed:
            await self._sync()
            self._save_state()

        return changed

    async def _probe(self) -> bool:
        self.available = await self.client.is_available()
        if not self.available:
            logger.info("Beads (bd) not installed; todo sync disabled")
        return self.available

    async def _show_ready(self) -> None:
        try:
            ready = (await self.client.ready(limit=5)).strip()
        except Exception as e:
            logger.debug(f"Could not list ready beads tasks: {e}")
            return
        if ready:
            logger.info(f"📋 Available beads tasks:\n{ready}")
            logger.info("Use 'bd show <id>' for details or include task ID in your work.")

    async def _ensure_available(self) -> bool:
        if self.available is None:
            return await self._probe()
        return self.available

    async def _mark_done(self, task_id: str) -> bool:
        try:
            await self.client.done(task_id)
        except Exception as e:
            logger.warning(f"⚠️ Failed to sync {task_id}: {e}")
            return False
        logger.info(f"✅ Synced: {task_id} marked done in beads")
        return True

    async def _claim(self, task_id: str) -> bool:
        try:
            await self.client.claim(task_id)
        except Exception as e:
            logger.warning(f"⚠️ Failed to claim {task_id}: {e}")
            return False
        logger.info(f"📋 Claimed: {task_id} marked in_progress in beads")
        return True

    async def _sync(self) -> None:
        try:
            await self.client.sync()
        except Exception as e:
            logger.debug(f"Beads sync ignored failure: {e}")

    def _load_state(self) -> SyncState:
        try:
            if self.state_path.exists():
                return SyncState.model_validate(json.loads(self.state_path.read_text(encoding="utf-8")))
        except (OSError, ValueError) as e:
            logger.debug(f"Could not read beads sync state: {e}")
        return SyncState()

    def _save_state(self) -> None:
        state = SyncState(
            synced_done=sorted(self._synced_done),
            synced_in_progress=sorted(self._synced_in_progress)
        )
        try:
            self.state_path.parent.mkdir(parents=True, exist_ok=True)
            self.state_path.write_text(
                json.dumps(state.model_dump(by_alias=True), indent=2),
                encoding="utf-8"
            )
        except OSError as e:
            logger.debug(f"Could not persist beads sync state: {e}")
