# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for skill script resolution, execution and watch debouncing."""
import subprocess
import time
import threading

import pytest

from edge_agent.core.exceptions import ScriptNotFoundError
from edge_agent.services.script_runner import (
    ScriptWatchHandler,
    build_command,
    resolve_script,
    run_script,
    watch_script,
)


@pytest.fixture
def scripts_dir(tmp_path):
    path = tmp_path / "skills" / "durable-objects" / "scripts"
    path.mkdir(parents=True)
    return path


class TestResolveScript:
    def test_default_script_is_validate(self, scripts_dir, tmp_path):
        (scripts_dir / "validate.py").write_text("print('ok')")
        resolved = resolve_script(str(tmp_path / "skills"), "durable-objects")
        assert resolved == scripts_dir / "validate.py"

    def test_extension_lookup_order(self, scripts_dir, tmp_path):
        (scripts_dir / "design.sh").write_text("echo sh")
        (scripts_dir / "design.js").write_text("console.log('js')")
        resolved = resolve_script(str(tmp_path / "skills"), "durable-objects", "design")
        assert resolved.suffix == ".js"

    def test_exact_filename_wins(self, scripts_dir, tmp_path):
        (scripts_dir / "design.sh").write_text("echo sh")
        (scripts_dir / "design.py").write_text("print('py')")
        resolved = resolve_script(str(tmp_path / "skills"), "durable-objects", "design.sh")
        assert resolved.name == "design.sh"

    def test_missing_script_raises(self, scripts_dir, tmp_path):
        with pytest.raises(ScriptNotFoundError) as exc:
            resolve_script(str(tmp_path / "skills"), "durable-objects", "deploy")
        assert "deploy" in exc.value.message
        assert exc.value.detail["searched"]

    def test_unknown_extension_not_runnable(self, scripts_dir, tmp_path):
        (scripts_dir / "notes.txt").write_text("hello")
        with pytest.raises(ScriptNotFoundError):
            resolve_script(str(tmp_path / "skills"), "durable-objects", "notes.txt")


class TestRunScript:
    def test_build_command_uses_interpreter(self, tmp_path):
        script = tmp_path / "validate.ts"
        assert build_command(script, ["--fix"]) == ["bun", str(script), "--fix"]

    def test_python_script_runs(self, tmp_path):
        marker = tmp_path / "ran.txt"
        script = tmp_path / "validate.py"
        script.write_text(f"open({str(marker)!r}, 'w').write('done')")

        assert run_script(script) == 0
        assert marker.read_text() == "done"

    def test_failing_script_raises(self, tmp_path):
        script = tmp_path / "validate.py"
        script.write_text("import sys; sys.exit(3)")
        with pytest.raises(subprocess.CalledProcessError) as exc:
            run_script(script)
        assert exc.value.returncode == 3


class TestScriptWatchHandler:
    def test_first_change_triggers(self):
        assert ScriptWatchHandler().should_trigger("/skills/x/scripts/validate.py", now=10.0)

    def test_debounces_bursts(self):
        handler = ScriptWatchHandler(debounce_seconds=1.0)
        assert handler.should_trigger("a.py", now=10.0)
        assert not handler.should_trigger("a.py", now=10.4)
        assert handler.should_trigger("a.py", now=11.5)

    @pytest.mark.parametrize("path", [
        "/skills/x/.validate.py.swp",
        "/skills/x/validate.py~",
        "/skills/x/node_modules/pkg/index.js",
        "/skills/x/__pycache__/validate.cpython-312.pyc",
    ])
    def test_ignored_paths(self, path):
        assert not ScriptWatchHandler().should_trigger(path, now=1.0)


class TestWatchScript:
    def test_runs_once_then_stops(self, tmp_path):
        marker = tmp_path / "count.txt"
        skill_dir = tmp_path / "durable-objects"
        script = skill_dir / "scripts" / "validate.py"
        script.parent.mkdir(parents=True)
        script.write_text(
            f"import pathlib; p = pathlib.Path({str(marker)!r}); "
            "p.write_text(str(int(p.read_text()) + 1) if p.exists() else '1')"
        )

        stop = threading.Event()
        worker = threading.Thread(target=watch_script, args=(script, skill_dir), kwargs={"stop_event": stop})
        worker.start()
        try:
            for _ in range(100):
                if marker.exists():
                    break
                time.sleep(0.1)
        finally:
            stop.set()
            worker.join(timeout=10)

        assert not worker.is_alive()
        assert marker.read_text() == "1"
