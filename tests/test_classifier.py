"""
Tests for the file classifier.
"""

from pathlib import Path

from conftest import write_script

from dotkit.core.classifier import (
    has_script_marker,
    interpreter_argv,
    is_command,
    is_script_source,
    read_first_line,
)


class TestIsCommand:
    """Tests for command classification."""

    def test_executable_with_marker(self, tmp_path, base_config):
        path = write_script(tmp_path / "status")
        assert is_command(path, base_config) is True

    def test_executable_without_marker(self, tmp_path, base_config):
        """Executable bit alone is enough."""
        path = write_script(tmp_path / "run", marker="#!/bin/sh\n")
        assert is_command(path, base_config) is True

    def test_marker_without_executable_bit(self, tmp_path, base_config):
        """A recognized shebang is enough even without the executable bit."""
        path = write_script(tmp_path / "status", executable=False)
        assert is_command(path, base_config) is True

    def test_plain_file(self, tmp_path, base_config):
        path = write_script(tmp_path / "notes.txt", executable=False, marker="")
        assert is_command(path, base_config) is False

    def test_unrecognized_shebang_not_executable(self, tmp_path, base_config):
        path = write_script(tmp_path / "tool", executable=False, marker="#!/usr/bin/env ruby\n")
        assert is_command(path, base_config) is False

    def test_missing_path(self, tmp_path, base_config):
        assert is_command(tmp_path / "nope", base_config) is False

    def test_directory(self, tmp_path, base_config):
        directory = tmp_path / "group"
        directory.mkdir()
        assert is_command(directory, base_config) is False

    def test_custom_markers(self, tmp_path, base_config):
        cfg = base_config.model_copy(update={"script_markers": ["#!/usr/bin/env zsh"]})
        path = write_script(tmp_path / "z", executable=False, marker="#!/usr/bin/env zsh\n")
        assert is_command(path, cfg) is True
        assert is_command(path, base_config) is False


class TestScriptMarker:
    """Tests for first-line marker detection."""

    def test_reads_only_first_line(self, tmp_path):
        path = tmp_path / "f"
        path.write_text("echo hi\n#!/usr/bin/env bash\n")
        assert has_script_marker(path, ["#!/usr/bin/env bash"]) is False

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty"
        path.write_text("")
        assert read_first_line(path) == ""
        assert has_script_marker(path, ["#!/usr/bin/env bash"]) is False

    def test_crlf_line(self, tmp_path):
        path = tmp_path / "dos"
        path.write_bytes(b"#!/usr/bin/env bash\r\necho hi\r\n")
        assert read_first_line(path) == "#!/usr/bin/env bash"

    def test_missing_file(self, tmp_path):
        assert read_first_line(tmp_path / "missing") == ""


class TestScriptSource:
    """Tests for script-source detection used by linters."""

    def test_sh_extension_without_marker(self, tmp_path, base_config):
        path = write_script(tmp_path / "lib.sh", executable=False, marker="")
        assert is_script_source(path, base_config) is True

    def test_marker_without_extension(self, tmp_path, base_config):
        path = write_script(tmp_path / "tool", executable=False)
        assert is_script_source(path, base_config) is True

    def test_marker_on_any_line(self, tmp_path, base_config):
        path = write_script(tmp_path / "tool", executable=False,
                            marker="# header\n#!/usr/bin/env bash\n")
        assert is_script_source(path, base_config) is True
        assert is_command(path, base_config) is False

    def test_extension_ignored_when_disabled(self, tmp_path, base_config):
        path = write_script(tmp_path / "lib.sh", executable=False, marker="")
        assert is_script_source(path, base_config, match_extension=False) is False

    def test_executable_binary_is_not_source(self, tmp_path, base_config):
        path = write_script(tmp_path / "bin", marker="\x7fELF")
        assert is_script_source(path, base_config) is False


class TestInterpreterArgv:
    """Tests for building the argv used to run a script."""

    def test_executable_runs_directly(self, tmp_path):
        path = write_script(tmp_path / "status")
        assert interpreter_argv(path) == [str(path)]

    def test_non_executable_uses_shebang(self, tmp_path):
        path = write_script(tmp_path / "status", executable=False)
        assert interpreter_argv(path) == ["/usr/bin/env", "bash", str(path)]

    def test_non_executable_without_shebang(self, tmp_path):
        path = Path(write_script(tmp_path / "x", executable=False, marker=""))
        assert interpreter_argv(path) == [str(path)]
