"""
Tests for the interactive menu, confirm dialog and validated input prompt.
"""

import pytest

from calperm.ui.primitives import KEY_DOWN, KEY_ENTER, KEY_ESC, KEY_LEFT, KEY_RIGHT, KEY_UP, CapabilityMode
from calperm.ui.widgets import (
    ConfirmDialog,
    InputPrompt,
    Menu,
    MenuItem,
    MenuOutcome,
    ValidationKind,
    pause,
)


def three_items():
    return [MenuItem("Alpha"), MenuItem("Beta"), MenuItem("Gamma")]


class TestMenuNavigation:
    """Arrow keys move with wraparound; Enter and Esc end the menu."""

    def test_enter_selects_first_item(self, make_ctx):
        result = Menu(title="Pick", items=three_items()).run(make_ctx([KEY_ENTER]))
        assert result.outcome is MenuOutcome.SELECT
        assert result.index == 0
        assert result.value == "Alpha"

    def test_up_from_top_wraps_to_bottom(self, make_ctx):
        result = Menu(items=three_items()).run(make_ctx([KEY_UP, KEY_ENTER]))
        assert result.value == "Gamma"

    def test_down_from_bottom_wraps_to_top(self, make_ctx):
        result = Menu(items=three_items()).run(make_ctx([KEY_DOWN, KEY_DOWN, KEY_DOWN, KEY_ENTER]))
        assert result.value == "Alpha"

    def test_left_and_right_move_like_up_and_down(self, make_ctx):
        assert Menu(items=three_items()).run(make_ctx([KEY_RIGHT, KEY_ENTER])).value == "Beta"
        assert Menu(items=three_items()).run(make_ctx([KEY_LEFT, KEY_ENTER])).value == "Gamma"

    def test_other_keys_are_ignored(self, make_ctx):
        result = Menu(items=three_items()).run(make_ctx(["x", " ", KEY_DOWN, KEY_ENTER]))
        assert result.value == "Beta"

    def test_initial_index(self, make_ctx):
        assert Menu(items=three_items()).run(make_ctx([KEY_ENTER]), initial_index=2).value == "Gamma"

    def test_out_of_range_initial_index_starts_at_top(self, make_ctx):
        assert Menu(items=three_items()).run(make_ctx([KEY_ENTER]), initial_index=9).value == "Alpha"

    def test_esc_cancels(self, make_ctx):
        result = Menu(items=three_items()).run(make_ctx([KEY_DOWN, KEY_ESC]))
        assert result.outcome is MenuOutcome.CANCEL
        assert result.item is None
        assert not result.selected

    def test_values_can_be_objects(self, make_ctx):
        items = [MenuItem("One", value=1), MenuItem("Two", value=2)]
        assert Menu(items=items).run(make_ctx([KEY_DOWN, KEY_ENTER])).value == 2

    def test_no_entries_is_an_error(self, make_ctx):
        with pytest.raises(ValueError):
            Menu(title="Empty").run(make_ctx([KEY_ENTER]))


class TestBackAndQuit:
    """Back / Quit entries exist only when enabled."""

    def test_no_extra_entries_by_default(self):
        assert [e.label for e in Menu(items=three_items()).entries()] == ["Alpha", "Beta", "Gamma"]

    def test_back_and_quit_appended_in_order(self):
        menu = Menu(items=three_items(), allow_back=True, allow_quit=True)
        assert [e.label for e in menu.entries()] == ["Alpha", "Beta", "Gamma", "Back", "Quit"]

    def test_back_outcome(self, make_ctx):
        menu = Menu(items=three_items(), allow_back=True)
        result = menu.run(make_ctx([KEY_UP, KEY_ENTER]))
        assert result.outcome is MenuOutcome.BACK

    def test_quit_outcome(self, make_ctx):
        menu = Menu(items=three_items(), allow_back=True, allow_quit=True)
        result = menu.run(make_ctx([KEY_UP, KEY_ENTER]))
        assert result.outcome is MenuOutcome.QUIT

    def test_back_only_menu_still_runs(self, make_ctx):
        result = Menu(title="Nothing here", allow_back=True).run(make_ctx([KEY_ENTER]))
        assert result.outcome is MenuOutcome.BACK


class TestMenuRendering:
    """What each frame looks like."""

    def test_title_and_items_drawn(self, make_ctx, stream):
        Menu(title="Pick one", items=three_items()).run(make_ctx([KEY_ENTER]))
        out = stream.getvalue()
        assert "Pick one" in out
        assert "▸ Alpha" in out
        assert "Gamma" in out

    def test_box_fits_terminal_width(self, make_ctx, stream):
        ctx = make_ctx([KEY_ENTER])
        ctx.renderer._width = 30
        Menu(items=[MenuItem("x" * 80)]).run(ctx)
        box_lines = [line for line in stream.getvalue().splitlines() if line.startswith(("╭", "│", "╰"))]
        assert box_lines
        assert all(len(line) == 28 for line in box_lines)

    def test_box_rows_share_one_width(self, make_ctx, stream):
        Menu(title="T", items=[MenuItem("short"), MenuItem("a much longer label", description="details")]).run(
            make_ctx([KEY_ENTER]))
        widths = {len(line) for line in stream.getvalue().splitlines() if line.startswith(("╭", "│", "├", "╰"))}
        assert len(widths) == 1

    def test_decorations_in_order(self, make_ctx, stream):
        ctx = make_ctx([KEY_ENTER])
        ctx.state.set(action="Add permission")
        menu = Menu(
            title="Level",
            items=three_items(),
            preview=[[("sample line", "Cyan")]],
            summary=[("User", "bob@contoso.com")],
        )
        menu.run(ctx)
        out = stream.getvalue()
        assert out.index("Action: Add permission") < out.index("sample line") < out.index("bob@contoso.com") < out.index("Level")

    def test_preview_follows_highlighted_item(self, make_ctx, stream):
        menu = Menu(items=three_items(), preview=lambda item: [[(f"preview of {item.label}", None)]])
        menu.run(make_ctx([KEY_DOWN, KEY_ENTER]))
        out = stream.getvalue()
        assert "preview of Alpha" in out
        assert "preview of Beta" in out
        assert "preview of Gamma" not in out

    def test_status_bar_can_be_hidden(self, make_ctx, stream):
        ctx = make_ctx([KEY_ENTER])
        ctx.state.set(action="View permissions")
        Menu(items=three_items(), show_status=False).run(ctx)
        assert "Action:" not in stream.getvalue()

    def test_renders_with_escapes_in_8bit(self, make_ctx, stream):
        Menu(title="Colour", items=three_items(), allow_back=True).run(make_ctx([KEY_ENTER], CapabilityMode.ANSI_8BIT))
        assert "\x1b[38;5;" in stream.getvalue()


class TestConfirmDialog:
    """Yes/No dialog; Esc means no."""

    def test_defaults_to_no(self, make_ctx):
        assert ConfirmDialog("Sure?").run(make_ctx([KEY_ENTER])) is False

    def test_choose_yes(self, make_ctx):
        assert ConfirmDialog("Sure?").run(make_ctx([KEY_DOWN, KEY_ENTER])) is True

    def test_default_yes(self, make_ctx):
        assert ConfirmDialog("Sure?", default_yes=True).run(make_ctx([KEY_ENTER])) is True

    def test_esc_is_no(self, make_ctx):
        assert ConfirmDialog("Sure?", default_yes=True).run(make_ctx([KEY_ESC])) is False


class TestInputPrompt:
    """input -> validate -> Confirm / Retry / Cancel."""

    def email_prompt(self, **kwargs):
        return InputPrompt(prompt="Mailbox", validation=ValidationKind.EMAIL, **kwargs)

    def test_confirmed_value(self, make_ctx):
        result = self.email_prompt().run(make_ctx(["alice@contoso.com", KEY_ENTER]))
        assert result.ok
        assert result.value == "alice@contoso.com"

    def test_value_is_stripped(self, make_ctx):
        result = self.email_prompt().run(make_ctx(["  alice@contoso.com  ", KEY_ENTER]))
        assert result.value == "alice@contoso.com"

    def test_invalid_email_asks_again(self, make_ctx, stream):
        ctx = make_ctx(["a@@b.com", "not-an-email", "a@b.com", KEY_ENTER])
        result = self.email_prompt().run(ctx)
        assert result.value == "a@b.com"
        assert "'a@@b.com' is not a valid email address." in stream.getvalue()
        assert ctx.keys.remaining == []

    def test_retry_returns_to_input(self, make_ctx):
        result = self.email_prompt().run(make_ctx(["a@b.com", KEY_DOWN, KEY_ENTER, "c@d.com", KEY_ENTER]))
        assert result.value == "c@d.com"

    def test_cancel_in_confirm_menu(self, make_ctx):
        result = self.email_prompt().run(make_ctx(["a@b.com", KEY_UP, KEY_ENTER]))
        assert result.cancelled
        assert result.value is None

    def test_esc_in_confirm_menu_cancels(self, make_ctx):
        assert self.email_prompt().run(make_ctx(["a@b.com", KEY_ESC])).cancelled

    def test_esc_while_typing_cancels(self, make_ctx):
        assert self.email_prompt().run(make_ctx([KEY_ESC])).cancelled

    def test_empty_rejected_by_default(self, make_ctx, stream):
        result = InputPrompt(prompt="Name").run(make_ctx(["", "Bob", KEY_ENTER]))
        assert result.value == "Bob"
        assert "A value is required." in stream.getvalue()

    def test_empty_allowed(self, make_ctx):
        result = InputPrompt(prompt="Note", allow_empty=True).run(make_ctx(["", KEY_ENTER]))
        assert result.ok
        assert result.value == ""

    def test_validate_is_pure(self):
        prompt = self.email_prompt()
        assert prompt.validate("a@b.com") is None
        assert prompt.validate("a@b.com") is None
        assert prompt.validate("nope") is not None


class TestPause:

    def test_returns_pressed_key(self, make_ctx, stream):
        assert pause(make_ctx(["q"])) == "q"
        assert "Press any key to continue..." in stream.getvalue()
