"""
Editor UI variants: sidebar views and keyboard shortcuts.

Views and shortcut actions are closed enums so that every dispatch site can
be checked for exhaustiveness.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional

from .logging import Severity, TerminalSink

MODIFIER_KEYS = frozenset({"Control", "Shift", "Alt", "Meta"})


class SidebarView(str, Enum):
    """Panels the sidebar can show, in toggle order."""

    EXPLORER = "explorer"
    GIT = "git"
    CHAT = "chat"
    EXTENSIONS = "extensions"
    SETTINGS = "settings"

    def next(self) -> "SidebarView":
        """The view after this one, wrapping around."""
        views = list(SidebarView)
        return views[(views.index(self) + 1) % len(views)]


class KeyAction(str, Enum):
    """Actions that can be bound to a key combination."""

    RUN = "run"
    EXPLAIN = "explain"
    FIX = "fix"
    TOGGLE_SIDEBAR = "toggle_sidebar"
    FOCUS_GIT = "focus_git"


@dataclass(frozen=True)
class KeyBinding:
    """A key combination bound to an action."""

    id: str
    action: KeyAction
    label: str
    keys: str


DEFAULT_KEYBINDINGS: List[KeyBinding] = [
    KeyBinding("kb-run", KeyAction.RUN, "Run Code", "Ctrl+Enter"),
    KeyBinding("kb-explain", KeyAction.EXPLAIN, "Explain Code", "Ctrl+E"),
    KeyBinding("kb-fix", KeyAction.FIX, "Fix Code", "Ctrl+Shift+F"),
    KeyBinding("kb-toggle-sidebar", KeyAction.TOGGLE_SIDEBAR, "Toggle Sidebar", "Ctrl+B"),
    KeyBinding("kb-focus-git", KeyAction.FOCUS_GIT, "Focus Source Control", "Ctrl+Shift+G"),
]


def key_combo(
    key: str,
    ctrl: bool = False,
    meta: bool = False,
    alt: bool = False,
    shift: bool = False,
) -> Optional[str]:
    """
    Build a combination string such as "Ctrl+Shift+F" from a key event.

    Single characters are upper-cased, the space bar becomes "Space", and
    named keys ("Enter", "Escape") are kept as given. A press of a modifier
    on its own yields None.
    """
    if key in MODIFIER_KEYS:
        return None

    parts = []
    if ctrl:
        parts.append("Ctrl")
    if meta:
        parts.append("Meta")
    if alt:
        parts.append("Alt")
    if shift:
        parts.append("Shift")

    if key == " ":
        main = "Space"
    elif len(key) == 1:
        main = key.upper()
    else:
        main = key
    parts.append(main)
    return "+".join(parts)


class KeyBindingMap:
    """The active set of key bindings."""

    def __init__(
        self,
        bindings: Optional[List[KeyBinding]] = None,
        sink: Optional[TerminalSink] = None,
    ):
        self._defaults = list(bindings if bindings is not None else DEFAULT_KEYBINDINGS)
        self._bindings = list(self._defaults)
        self.sink = sink

    @property
    def bindings(self) -> List[KeyBinding]:
        return list(self._bindings)

    def resolve(self, combo: str) -> Optional[KeyBinding]:
        for binding in self._bindings:
            if binding.keys == combo:
                return binding
        return None

    def keys_for(self, action: KeyAction) -> Optional[str]:
        for binding in self._bindings:
            if binding.action == action:
                return binding.keys
        return None

    def rebind(self, binding_id: str, keys: str) -> KeyBinding:
        """
        Assign a new key combination to a binding.

        Raises:
            KeyError: If no binding has this id
        """
        for index, binding in enumerate(self._bindings):
            if binding.id == binding_id:
                updated = replace(binding, keys=keys)
                self._bindings[index] = updated
                if self.sink is not None:
                    self.sink.emit(Severity.SYSTEM, f"Shortcut updated: {keys}")
                return updated
        raise KeyError(binding_id)

    def reset(self) -> None:
        self._bindings = list(self._defaults)

    def dispatch(
        self, combo: str, handlers: Mapping[KeyAction, Callable[[], Any]]
    ) -> Optional[KeyAction]:
        """
        Run the handler bound to `combo`.

        Args:
            combo: Key combination from `key_combo`
            handlers: One handler per KeyAction

        Returns:
            The action that ran, or None if the combination is unbound

        Raises:
            ValueError: If `handlers` does not cover every action
        """
        missing = [action.value for action in KeyAction if action not in handlers]
        if missing:
            raise ValueError(f"No handler for actions: {', '.join(missing)}")

        binding = self.resolve(combo)
        if binding is None:
            return None
        handlers[binding.action]()
        return binding.action
