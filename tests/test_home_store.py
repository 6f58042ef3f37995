"""Tests for the recorder home directory."""

import io
import os
import sys

import pytest

from recorder.home.store import RecorderHome, RecorderHomeError, parse_properties


@pytest.fixture
def home(tmp_path):
    """A home backed by a temporary directory."""
    return RecorderHome(tmp_path / "recorder_home")


class TestRecorderHomeValidation:
    """Constructor checks on the home directory."""

    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "nested" / "home"
        home = RecorderHome(target)
        assert target.is_dir()
        assert home.directory == target.absolute()

    def test_accepts_str_path(self, tmp_path):
        home = RecorderHome(str(tmp_path))
        assert home.directory == tmp_path.absolute()

    def test_rejects_none(self):
        with pytest.raises(RecorderHomeError, match="should not be None"):
            RecorderHome(None)

    def test_rejects_space_in_path(self, tmp_path):
        with pytest.raises(RecorderHomeError, match="should not contain space"):
            RecorderHome(tmp_path / "with space")
        assert not (tmp_path / "with space").exists()

    def test_rejects_existing_file(self, tmp_path):
        blocker = tmp_path / "home_file"
        blocker.write_text("not a directory")
        with pytest.raises(RecorderHomeError, match="is not directory"):
            RecorderHome(blocker)

    def test_uncreatable_directory(self, tmp_path):
        blocker = tmp_path / "home_file"
        blocker.write_text("not a directory")
        with pytest.raises(RecorderHomeError, match="is not created"):
            RecorderHome(blocker / "child")

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_rejects_read_only_directory(self, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        try:
            with pytest.raises(RecorderHomeError, match="is not writable"):
                RecorderHome(locked)
        finally:
            locked.chmod(0o700)

    def test_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RECORDER_HOME", str(tmp_path / "env_home"))
        home = RecorderHome.from_env()
        assert home.directory == (tmp_path / "env_home").absolute()


class TestRecorderHomeFiles:
    """File helpers resolved against the home."""

    def test_get_file_and_log_directory(self, home):
        assert home.get_file("conf/agent.conf") == home.directory / "conf" / "agent.conf"
        assert home.log_directory == home.directory / "log"

    def test_copy_file_uses_only_file_name(self, home, tmp_path):
        copied = home.copy_file_to(io.BytesIO(b"payload"), tmp_path / "elsewhere" / "a.jar")
        assert copied == home.directory / "a.jar"
        assert copied.read_bytes() == b"payload"

    def test_copy_file_keeps_existing_file(self, home):
        home.copy_file_to(io.BytesIO(b"first"), "a.jar")
        home.copy_file_to(io.BytesIO(b"second"), "a.jar")
        assert home.get_file("a.jar").read_bytes() == b"first"

    def test_copy_file_overwrite(self, home):
        home.copy_file_to(io.BytesIO(b"first"), "a.jar")
        home.copy_file_to(io.BytesIO(b"second"), "a.jar", overwrite=True)
        assert home.get_file("a.jar").read_bytes() == b"second"

    def test_copy_file_failure(self, home):
        home.get_file("a.jar").mkdir()
        with pytest.raises(RecorderHomeError, match="Failed to write"):
            home.copy_file_to(io.BytesIO(b"x"), "a.jar", overwrite=True)


class TestProperties:
    """Properties load and save."""

    def test_save_then_load(self, home):
        home.save_properties(
            "conf/recorder.properties",
            {"proxy.port": 10288, "controller.host": "10.0.0.1"},
        )
        lines = home.get_file("conf/recorder.properties").read_text().splitlines()
        assert lines[0].startswith("#")
        assert lines[1:] == ["controller.host=10.0.0.1", "proxy.port=10288"]
        assert home.get_properties("conf/recorder.properties") == {
            "controller.host": "10.0.0.1",
            "proxy.port": "10288",
        }

    def test_missing_file_is_empty(self, home):
        assert home.get_properties("absent.properties") == {}

    def test_save_failure_is_logged_not_raised(self, home, log_output):
        home.get_file("blocked").write_text("file in the way")
        home.save_properties("blocked/recorder.properties", {"a": "b"})
        assert "Could not save property file" in log_output.getvalue()

    def test_parse_formats(self):
        text = "\n".join(
            [
                "# comment",
                "! also a comment",
                "",
                "  plain = value with spaces  ",
                "colon:separated",
                "whitespace separated",
                "empty=",
                "bare",
                "long=first \\",
                "    second",
            ]
        )
        assert parse_properties(text) == {
            "plain": "value with spaces",
            "colon": "separated",
            "whitespace": "separated",
            "empty": "",
            "bare": "",
            "long": "first second",
        }
