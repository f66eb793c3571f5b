"""
Tests for the styled text renderer.

Covers colour fallback policy, numeric colour ranges per mode, style
variants, line layout options and the log sink.
"""

import warnings
from datetime import datetime

import pytest

from calperm.core.errors import ColorSpecError, RenderWarning
from calperm.ui.primitives import (
    PALETTE,
    CapabilityMode,
    ForAllSegments,
    PerSegment,
    RenderRequest,
    Style,
    StyledTextRenderer,
    brighten,
    resolve_log_path,
)


def fg8(name):
    return f"\x1b[38;5;{PALETTE[name].ansi8}m"


def bg8(name):
    return f"\x1b[48;5;{PALETTE[name].ansi8}m"


class TestNoColorMode:
    """Plain text only."""

    def test_segments_are_concatenated(self, make_renderer, stream):
        r = make_renderer(CapabilityMode.NO_COLOR)
        out = r.render(RenderRequest(texts=["ab", "cd"], colors=["Red", "Blue"], backgrounds=["Green"]))
        assert out == "abcd\n"
        assert stream.getvalue() == "abcd\n"

    def test_styles_are_dropped(self, make_renderer):
        r = make_renderer(CapabilityMode.NO_COLOR)
        out = r.render(RenderRequest(texts=["x"], styles=ForAllSegments((Style.BOLD,)), line_styles=(Style.UNDERLINE,)))
        assert "\x1b" not in out

    def test_bad_color_type_still_raises(self, make_renderer):
        r = make_renderer(CapabilityMode.NO_COLOR)
        with pytest.raises(ColorSpecError):
            r.render(RenderRequest(texts=["x"], colors=[1.5]))


class TestForegroundFallback:
    """Trailing segments without a colour take the first colour."""

    def test_first_color_reused_for_all_trailing_segments(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a", "b", "c"], colors=["Red"]))
        assert out.count(fg8("Red")) == 3

    def test_first_not_last_color_is_reused(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a", "b", "c"], colors=["Red", "Blue"]))
        assert out.count(fg8("Red")) == 2
        assert out.count(fg8("Blue")) == 1
        assert out.endswith(f"{fg8('Red')}c\x1b[0m\n")

    def test_default_color_only_without_colors(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a", "b"], default_color="Cyan"))
        assert out.count(fg8("Cyan")) == 2

        out = r.render(RenderRequest(texts=["a", "b"], colors=["Red"], default_color="Cyan"))
        assert fg8("Cyan") not in out

    def test_gray_when_nothing_is_configured(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a", "b"]))
        assert out.count(fg8("Gray")) == 2

    def test_color_names_are_case_insensitive(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        assert fg8("DarkYellow") in r.render(RenderRequest(texts=["a"], colors=["darkyellow"]))

    def test_unknown_name_warns_and_uses_default(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        with pytest.warns(RenderWarning):
            out = r.render(RenderRequest(texts=["a"], colors=["Chartreuse"]))
        assert fg8("Gray") in out


class TestBackgroundFallback:
    """Backgrounds are never carried over to trailing segments."""

    def test_trailing_segments_have_no_background(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a", "b", "c"], backgrounds=["Blue"]))
        assert out.count(bg8("Blue")) == 1
        assert out.count("\x1b[48;") == 1

    def test_none_means_no_background(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a"], backgrounds=["None"]))
        assert "\x1b[48;" not in out

    def test_out_of_range_background_is_silently_dropped(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            out = r.render(RenderRequest(texts=["a"], backgrounds=[999]))
        assert "\x1b[48;" not in out

    def test_4bit_background_uses_offset_code(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_4BIT)
        out = r.render(RenderRequest(texts=["a"], backgrounds=["DarkRed"]))
        assert f"\x1b[{PALETTE['DarkRed'].ansi4 + 10}m" in out


class TestNumericColors:
    """Numeric codes are validated against the active mode's range."""

    def test_8bit_accepts_full_range(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a", "b"], colors=[0, 255]))
        assert "\x1b[38;5;0m" in out
        assert "\x1b[38;5;255m" in out

    def test_8bit_rejects_256(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        with pytest.warns(RenderWarning):
            out = r.render(RenderRequest(texts=["a"], colors=[256]))
        assert fg8("Gray") in out

    @pytest.mark.parametrize("code", [30, 37, 90, 97])
    def test_4bit_accepts_sgr_codes(self, make_renderer, code):
        r = make_renderer(CapabilityMode.ANSI_4BIT)
        assert f"\x1b[{code}m" in r.render(RenderRequest(texts=["a"], colors=[code]))

    @pytest.mark.parametrize("code", [29, 38, 89, 98, 200])
    def test_4bit_rejects_other_codes(self, make_renderer, code):
        r = make_renderer(CapabilityMode.ANSI_4BIT)
        with pytest.warns(RenderWarning):
            out = r.render(RenderRequest(texts=["a"], colors=[code]))
        assert f"\x1b[{PALETTE['Gray'].ansi4}m" in out

    @pytest.mark.parametrize("bad", [1.5, True, object(), b"Red"])
    def test_non_name_non_number_raises(self, make_renderer, bad):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        with pytest.raises(ColorSpecError):
            r.render(RenderRequest(texts=["a"], colors=[bad]))

    def test_color_spec_error_is_a_type_error(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        with pytest.raises(TypeError):
            r.render(RenderRequest(texts=["a"], backgrounds=3.0))


class TestStyles:
    """Style variants and bold handling."""

    def test_for_all_segments(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_4BIT)
        out = r.render(RenderRequest(texts=["a", "b"], styles=ForAllSegments((Style.UNDERLINE,))))
        assert out.count("\x1b[4m") == 2

    def test_per_segment_first_only(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_4BIT)
        out = r.render(RenderRequest(texts=["a", "b"], styles=PerSegment(((Style.ITALIC,),))))
        assert out.count("\x1b[3m") == 1
        assert out.index("\x1b[3m") < out.index("a")

    def test_style_names_are_accepted(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a"], styles=ForAllSegments(("CrossedOut",))))
        assert "\x1b[9m" in out

    def test_unsupported_style_warns(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        with pytest.warns(RenderWarning):
            r.render(RenderRequest(texts=["a"], styles=ForAllSegments(("Sparkle",))))

    def test_bold_line_brightens_8bit_colors(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a"], colors=["DarkRed"], line_styles=(Style.BOLD,)))
        assert brighten("DarkRed") == "Red"
        assert fg8("Red") in out
        assert "\x1b[1m" in out

    def test_bold_line_uses_bright_4bit_code(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_4BIT)
        out = r.render(RenderRequest(texts=["a"], colors=["DarkGreen"], line_styles=(Style.BOLD,)))
        assert f"\x1b[{PALETTE['DarkGreen'].ansi4_bright}m" in out

    def test_segments_are_reset(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.render(RenderRequest(texts=["a"], colors=["Red"]))
        assert out == f"{fg8('Red')}a\x1b[0m\n"


class FakeConsole:
    def __init__(self):
        self.calls = []

    def set_attributes(self, fg, bg):
        self.calls.append(("set", fg, bg))

    def reset(self):
        self.calls.append(("reset",))


class TestNativeMode:
    """Colours go through console attribute calls; output stays plain."""

    def test_attributes_set_per_colored_segment(self, stream, tmp_path):
        console = FakeConsole()
        r = StyledTextRenderer(CapabilityMode.NATIVE_COLOR, stream=stream, log_dir=tmp_path, console=console)
        out = r.render(RenderRequest(texts=["a", "b"], colors=["Red", None], backgrounds=["Blue"]))
        assert out == "ab\n"
        assert stream.getvalue() == "ab\n"
        assert console.calls == [("set", PALETTE["Red"].native, PALETTE["Blue"].native), ("reset",)]

    def test_bold_sets_intensity_bit(self, stream, tmp_path):
        console = FakeConsole()
        r = StyledTextRenderer(CapabilityMode.NATIVE_COLOR, stream=stream, log_dir=tmp_path, console=console)
        r.render(RenderRequest(texts=["a"], colors=["DarkRed"], line_styles=(Style.BOLD,)))
        assert console.calls[0] == ("set", PALETTE["DarkRed"].native | 0x08, None)


class TestLineOptions:
    """Prefixes, suffixes and the blank line override."""

    def test_spaces_and_tabs(self, make_renderer):
        r = make_renderer()
        assert r.render(RenderRequest(texts=["x"], tabs=1, spaces=2)) == "\t  x\n"

    def test_center(self, make_renderer):
        r = make_renderer(width=20)
        assert r.render(RenderRequest(texts=["abcd"], center=True)) == " " * 8 + "abcd\n"

    def test_center_ignored_when_too_wide(self, make_renderer):
        r = make_renderer(width=4)
        assert r.render(RenderRequest(texts=["abcdef"], center=True)) == "abcdef\n"

    def test_lines_before_and_after(self, make_renderer):
        r = make_renderer()
        assert r.render(RenderRequest(texts=["x"], lines_before=2, lines_after=1)) == "\n\nx\n\n"

    def test_no_newline(self, make_renderer):
        r = make_renderer()
        assert r.render(RenderRequest(texts=["x"], no_newline=True)) == "x"

    def test_blank_line_overrides_everything(self, make_renderer):
        r = make_renderer()
        assert r.render(RenderRequest(texts=["x"], blank_line=True, lines_before=3, spaces=4)) == "\n"

    def test_timestamp(self, stream, tmp_path):
        clock = lambda: datetime(2024, 5, 1, 9, 30, 0)
        r = StyledTextRenderer(CapabilityMode.NO_COLOR, stream=stream, log_dir=tmp_path, clock=clock)
        assert r.render(RenderRequest(texts=["x"], spaces=1, timestamp=True)) == " [2024-05-01 09:30:00] x\n"

    def test_echo_false_writes_nothing(self, make_renderer, stream):
        r = make_renderer()
        assert r.render(RenderRequest(texts=["x"], echo=False)) == "x\n"
        assert stream.getvalue() == ""

    def test_line_helper_builds_segments(self, make_renderer):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        out = r.line("plain ", ("red", "Red"), ("bold", None, None, (Style.BOLD,)), spaces=1)
        assert out.startswith(" plain ")
        assert f"{fg8('Red')}red" in out
        assert "\x1b[1mbold" in out


class TestLogSink:
    """Plain copies of lines appended to a log file."""

    def test_bare_name_goes_to_log_dir(self, tmp_path):
        assert resolve_log_path("audit", tmp_path) == tmp_path / "audit.log"
        assert resolve_log_path("audit.txt", tmp_path) == tmp_path / "audit.txt"

    def test_path_is_used_as_given(self, tmp_path):
        target = tmp_path / "sub" / "x.log"
        assert resolve_log_path(str(target), tmp_path / "elsewhere") == target

    def test_line_appended_without_escapes(self, make_renderer, tmp_path):
        r = make_renderer(CapabilityMode.ANSI_8BIT)
        r.render(RenderRequest(texts=["granted ", "Editor"], colors=["Green"], log_file="audit",
                               log_level="info", log_timestamp=False))
        r.render(RenderRequest(texts=["second"], log_file="audit", log_timestamp=False))
        assert (tmp_path / "audit.log").read_text(encoding="utf-8") == "[INFO] granted Editor\nsecond\n"

    def test_unwritable_log_warns_and_continues(self, make_renderer, stream, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        r = make_renderer()
        with pytest.warns(RenderWarning):
            out = r.render(RenderRequest(texts=["x"], log_file=str(blocker / "x.log"), log_retries=3))
        assert out == "x\n"
        assert stream.getvalue() == "x\n"
