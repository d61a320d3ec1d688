"""Tests for java_locator.py — candidate probing and platform strategies."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from mc_runner import java_locator
from mc_runner.java_locator import (
    BUNDLED_JRE_PARTS,
    FOLDERID_PROGRAM_FILES_X86,
    PROGRAM_FILES_X86_FALLBACK,
    locate,
    posix_candidates,
    probe_java,
    windows_candidates,
)


class TestProbeJava:
    @patch("mc_runner.java_locator.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["java", "-version"], 0, "", 'openjdk version "21"')
        assert probe_java(Path("java")) is True
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == ["java", "-version"]

    @patch("mc_runner.java_locator.subprocess.run")
    def test_non_zero_exit(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["java", "-version"], 1, "", "broken")
        assert probe_java(Path("java")) is False

    @patch("mc_runner.java_locator.subprocess.run", side_effect=FileNotFoundError("java"))
    def test_spawn_failure(self, mock_run):
        assert probe_java(Path("/nope/java")) is False

    @patch("mc_runner.java_locator.subprocess.run", side_effect=PermissionError("denied"))
    def test_permission_denied(self, mock_run):
        assert probe_java(Path("/nope/java")) is False


class TestLocate:
    def test_first_working_candidate_wins(self):
        probe = MagicMock(side_effect=[False, True, True])
        found = locate([Path("a"), Path("b"), Path("c")], probe=probe)
        assert found == Path("b")
        assert probe.call_count == 2

    def test_none_when_all_fail(self):
        probe = MagicMock(return_value=False)
        assert locate([Path("a"), Path("b")], probe=probe) is None
        assert probe.call_count == 2

    def test_configured_java_path_tried_first(self):
        probe = MagicMock(return_value=True)
        found = locate([Path("java")], probe=probe, java_path=Path("/opt/jdk/bin/java"))
        assert found == Path("/opt/jdk/bin/java")
        probe.assert_called_once_with(Path("/opt/jdk/bin/java"))

    def test_configured_java_path_falls_through(self):
        probe = MagicMock(side_effect=[False, True])
        found = locate([Path("java")], probe=probe, java_path=Path("/opt/jdk/bin/java"))
        assert found == Path("java")

    def test_defaults_to_platform_strategy(self):
        probe = MagicMock(return_value=False)
        with patch.object(java_locator, "PLATFORM_CANDIDATES", return_value=[Path("x")]) as strategy:
            assert locate(probe=probe) is None
        strategy.assert_called_once()
        probe.assert_called_once_with(Path("x"))


class TestStrategies:
    def test_posix_candidates(self):
        candidates = posix_candidates()
        assert candidates[0] == Path(java_locator.JAVA)
        assert candidates[1] == Path("/usr/bin") / java_locator.JAVA

    def test_windows_candidates_use_known_folder(self):
        lookup = MagicMock(return_value=r"D:\Programs86")
        candidates = windows_candidates(known_folder=lookup)
        lookup.assert_called_once_with(FOLDERID_PROGRAM_FILES_X86)
        assert candidates[0] == Path(java_locator.JAVA)
        assert candidates[1] == Path(r"D:\Programs86", *BUNDLED_JRE_PARTS, java_locator.JAVA)

    def test_windows_candidates_fallback_root(self):
        candidates = windows_candidates(known_folder=lambda _folder: None)
        assert candidates[1] == Path(PROGRAM_FILES_X86_FALLBACK, *BUNDLED_JRE_PARTS, java_locator.JAVA)

    def test_default_strategy_by_platform(self):
        with patch("mc_runner.java_locator.sys.platform", "win32"):
            assert java_locator.default_strategy() is windows_candidates
        with patch("mc_runner.java_locator.sys.platform", "linux"):
            assert java_locator.default_strategy() is posix_candidates
