# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Script Runner

Runs a skill's helper script from the convention path
`<skills_dir>/<skill>/scripts/<script>` (default script: `validate`).
The interpreter is chosen from the file extension.

Watch mode re-runs the script whenever a file inside the skill directory
changes, using the watchdog library with debouncing so an editor's burst
of writes triggers a single run.
"""

import logging
import os
import subprocess
import sys
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional

from edge_agent.core.exceptions import ScriptNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT = "validate"

# Extension -> interpreter command, in lookup order
INTERPRETERS: Dict[str, List[str]] = {
    ".py": [sys.executable],
    ".js": ["node"],
    ".mjs": ["node"],
    ".ts": ["bun"],
    ".sh": ["bash"],
}


def resolve_script(skills_dir: str, skill_name: str, script_name: Optional[str] = None) -> Path:
    """
    Find the script file for a skill.

    An exact filename wins; otherwise each known extension is tried in order.

    Raises:
        ScriptNotFoundError: If nothing runnable exists at the convention path
    """
    script_name = script_name or DEFAULT_SCRIPT
    scripts_dir = Path(skills_dir) / skill_name / "scripts"

    candidates = [scripts_dir / script_name]
    candidates.extend(scripts_dir / f"{script_name}{ext}" for ext in INTERPRETERS)

    for candidate in candidates:
        if candidate.is_file() and candidate.suffix in INTERPRETERS:
            return candidate

    raise ScriptNotFoundError(skill_name, script_name, [str(c) for c in candidates])


def build_command(script_path: Path, args: Optional[List[str]] = None) -> List[str]:
    """Interpreter command line for a script."""
    return [*INTERPRETERS[script_path.suffix], str(script_path), *(args or [])]


def run_script(script_path: Path, args: Optional[List[str]] = None, cwd: Optional[str] = None) -> int:
    """
    Run a script to completion with inherited stdio.

    Raises:
        subprocess.CalledProcessError: If the script exits non-zero
    """
    command = build_command(script_path, args)
    logger.info(f"🏃 Running {script_path}...")
    result = subprocess.run(command, cwd=cwd, check=True)
    return result.returncode


class ScriptWatchHandler:
    """
    Decides which file events should re-run the script.

    Ignores directories, editor swap files, and events arriving within the
    debounce window of the previous run.
    """

    IGNORED_SUFFIXES = (".swp", ".swx", ".tmp", "~")
    IGNORED_PARTS = ("__pycache__", "node_modules", ".git")

    def __init__(self, debounce_seconds: float = 1.0):
        self.debounce_seconds = debounce_seconds
        self._last_trigger: Optional[float] = None
        self._lock = threading.Lock()

    def should_trigger(self, file_path: str, now: Optional[float] = None) -> bool:
        path = Path(file_path)
        if path.name.endswith(self.IGNORED_SUFFIXES):
            return False
        if any(part in self.IGNORED_PARTS for part in path.parts):
            return False

        now = time.monotonic() if now is None else now
        with self._lock:
            if self._last_trigger is not None:
                elapsed = now - self._last_trigger
                if elapsed < self.debounce_seconds:
                    logger.debug(
                        f"Debounced change to {file_path} "
                        f"(elapsed: {elapsed:.1f}s < {self.debounce_seconds}s)"
                    )
                    return False
            self._last_trigger = now
        return True


def watch_script(
    script_path: Path,
    watch_dir: Path,
    args: Optional[List[str]] = None,
    debounce_seconds: float = 1.0,
    stop_event: Optional[threading.Event] = None
) -> None:
    """
    Run the script, then re-run it on every change under `watch_dir`.

    Blocks until interrupted (Ctrl+C) or `stop_event` is set. Script failures
    are logged and watching continues.
    """
    from watchdog.observers import Observer
    from watchdog.events import FileSystemEventHandler

    handler = ScriptWatchHandler(debounce_seconds)
    rerun = threading.Event()
    stop_event = stop_event or threading.Event()

    class WatchdogHandler(FileSystemEventHandler):
        def on_any_event(self, event):
            if event.is_directory or event.event_type not in ("created", "modified", "moved"):
                return
            changed = getattr(event, "dest_path", "") or event.src_path
            if handler.should_trigger(os.fsdecode(changed)):
                logger.info(f"Change detected: {changed}")
                rerun.set()

    observer = Observer()
    observer.schedule(WatchdogHandler(), str(watch_dir), recursive=True)
    observer.start()
    logger.info(f"👀 Watching {watch_dir} (running {script_path.name} on change)...")

    try:
        rerun.set()
        while not stop_event.is_set():
            if rerun.wait(timeout=0.5):
                rerun.clear()
                try:
                    run_script(script_path, args)
                except subprocess.CalledProcessError as e:
                    logger.error(f"❌ Script exited with code {e.returncode}")
                except OSError as e:
                    logger.error(f"❌ Failed to run script: {e}")
    except KeyboardInterrupt:
        logger.info("Stopped watching")
    finally:
        observer.stop()
        observer.join(timeout=5)
