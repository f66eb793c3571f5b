"""
Tests for terminal capability detection.
"""

import io

from calperm.ui.primitives import CapabilityMode, detect_capability
from calperm.ui.primitives import terminal


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestDetectCapability:
    """Decision order: override, NO_COLOR, tty, platform, TERM."""

    def test_override_wins(self):
        env = {"CALPERM_COLOR": "4bit", "NO_COLOR": "1"}
        assert detect_capability(env=env, stream=io.StringIO()) is CapabilityMode.ANSI_4BIT

    def test_unknown_override_ignored(self):
        env = {"CALPERM_COLOR": "rainbow", "TERM": "xterm-256color"}
        assert detect_capability(env=env, stream=FakeTTY(), platform="linux") is CapabilityMode.ANSI_8BIT

    def test_no_color_env(self):
        env = {"NO_COLOR": "", "TERM": "xterm-256color"}
        assert detect_capability(env=env, stream=FakeTTY(), platform="linux") is CapabilityMode.NO_COLOR

    def test_not_a_tty(self):
        env = {"TERM": "xterm-256color"}
        assert detect_capability(env=env, stream=io.StringIO(), platform="linux") is CapabilityMode.NO_COLOR

    def test_dumb_terminal(self):
        assert detect_capability(env={"TERM": "dumb"}, stream=FakeTTY(), platform="linux") is CapabilityMode.NO_COLOR
        assert detect_capability(env={}, stream=FakeTTY(), platform="linux") is CapabilityMode.NO_COLOR

    def test_256_color_terminal(self):
        env = {"TERM": "screen-256color"}
        assert detect_capability(env=env, stream=FakeTTY(), platform="darwin") is CapabilityMode.ANSI_8BIT

    def test_colorterm_means_8bit(self):
        env = {"TERM": "xterm", "COLORTERM": "truecolor"}
        assert detect_capability(env=env, stream=FakeTTY(), platform="linux") is CapabilityMode.ANSI_8BIT

    def test_basic_terminal_is_4bit(self):
        assert detect_capability(env={"TERM": "xterm"}, stream=FakeTTY(), platform="linux") is CapabilityMode.ANSI_4BIT

    def test_windows_terminal_host(self):
        env = {"WT_SESSION": "abc"}
        assert detect_capability(env=env, stream=FakeTTY(), platform="win32") is CapabilityMode.ANSI_8BIT

    def test_legacy_windows_console(self, monkeypatch):
        monkeypatch.setattr(terminal, "enable_virtual_terminal", lambda: False)
        assert detect_capability(env={}, stream=FakeTTY(), platform="win32") is CapabilityMode.NATIVE_COLOR

    def test_windows_with_vt_processing(self, monkeypatch):
        monkeypatch.setattr(terminal, "enable_virtual_terminal", lambda: True)
        assert detect_capability(env={}, stream=FakeTTY(), platform="win32") is CapabilityMode.ANSI_8BIT

    def test_failure_means_no_color(self):
        class Broken:
            def isatty(self):
                raise OSError("closed")

        assert detect_capability(env={}, stream=Broken(), platform="linux") is CapabilityMode.NO_COLOR


class TestCapabilityMode:

    def test_only_ansi_modes_use_escapes(self):
        assert CapabilityMode.ANSI_4BIT.uses_escapes
        assert CapabilityMode.ANSI_8BIT.uses_escapes
        assert not CapabilityMode.NO_COLOR.uses_escapes
        assert not CapabilityMode.NATIVE_COLOR.uses_escapes
