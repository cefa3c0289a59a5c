"""
Unit tests for sidebar views and keyboard shortcuts.
"""

import pytest

from scribe.logging import Severity, TerminalBuffer
from scribe.ui import (
    DEFAULT_KEYBINDINGS,
    KeyAction,
    KeyBindingMap,
    SidebarView,
    key_combo,
)


class TestSidebarView:
    """Tests for SidebarView."""

    def test_next_wraps(self) -> None:
        assert SidebarView.EXPLORER.next() == SidebarView.GIT
        assert SidebarView.SETTINGS.next() == SidebarView.EXPLORER


class TestKeyCombo:
    """Tests for key_combo."""

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"key": "Enter", "ctrl": True}, "Ctrl+Enter"),
            ({"key": "f", "ctrl": True, "shift": True}, "Ctrl+Shift+F"),
            ({"key": " ", "alt": True}, "Alt+Space"),
            ({"key": "k", "meta": True, "alt": True}, "Meta+Alt+K"),
            ({"key": "Escape"}, "Escape"),
        ],
    )
    def test_combinations(self, kwargs, expected) -> None:
        assert key_combo(**kwargs) == expected

    def test_modifier_alone(self) -> None:
        assert key_combo("Shift", shift=True) is None
        assert key_combo("Control", ctrl=True) is None


class TestKeyBindingMap:
    """Tests for KeyBindingMap."""

    def test_defaults(self) -> None:
        keys = KeyBindingMap()

        assert keys.keys_for(KeyAction.RUN) == "Ctrl+Enter"
        assert keys.resolve("Ctrl+Shift+G").action == KeyAction.FOCUS_GIT
        assert keys.resolve("Ctrl+Q") is None
        assert len(keys.bindings) == len(DEFAULT_KEYBINDINGS)

    def test_rebind_reports_and_reset_restores(self) -> None:
        """Test rebinding a shortcut and restoring defaults."""
        terminal = TerminalBuffer(mirror=False)
        keys = KeyBindingMap(sink=terminal)

        updated = keys.rebind("kb-run", "Ctrl+R")
        assert updated.keys == "Ctrl+R"
        assert keys.resolve("Ctrl+Enter") is None
        assert terminal.entries[-1].severity == Severity.SYSTEM
        assert terminal.texts()[-1] == "Shortcut updated: Ctrl+R"

        keys.reset()
        assert keys.keys_for(KeyAction.RUN) == "Ctrl+Enter"

    def test_rebind_unknown(self) -> None:
        with pytest.raises(KeyError):
            KeyBindingMap().rebind("kb-missing", "Ctrl+X")

    def test_dispatch(self) -> None:
        calls = []
        handlers = {action: (lambda a=action: calls.append(a)) for action in KeyAction}
        keys = KeyBindingMap()

        assert keys.dispatch("Ctrl+B", handlers) == KeyAction.TOGGLE_SIDEBAR
        assert keys.dispatch("Ctrl+Z", handlers) is None
        assert calls == [KeyAction.TOGGLE_SIDEBAR]

    def test_dispatch_requires_every_handler(self) -> None:
        """Test that a handler table missing an action is refused."""
        handlers = {KeyAction.RUN: lambda: None}
        with pytest.raises(ValueError, match="explain"):
            KeyBindingMap().dispatch("Ctrl+Enter", handlers)
