"""Keyboard and pointer input for an open slideshow"""

import logging
from typing import Callable, List, NamedTuple

from PySide6.QtCore import QCoreApplication, QEvent, QObject, Qt, QTimer, Signal

log = logging.getLogger(__name__)

CONTROLS_HIDE_DELAY = 3000  # milliseconds of pointer inactivity


class KeyBinding(NamedTuple):
    key: int
    action: Callable[[], None]
    label: str


class InputController(QObject):
    """Routes key presses and pointer movement to the player.

    All bindings are installed together as one application-wide event
    filter on ``open`` and removed together on ``close``.
    """

    controlsVisibilityChanged = Signal(bool)

    def __init__(self, on_previous, on_next, on_toggle_play, on_toggle_mute, on_close, parent=None):
        super().__init__(parent)
        self.bindings: List[KeyBinding] = [
            KeyBinding(Qt.Key_Left, on_previous, "Previous slide"),
            KeyBinding(Qt.Key_Right, on_next, "Next slide"),
            KeyBinding(Qt.Key_Space, on_toggle_play, "Play/Pause"),
            KeyBinding(Qt.Key_M, on_toggle_mute, "Mute"),
            KeyBinding(Qt.Key_Escape, on_close, "Exit"),
        ]
        self.active = False
        self.controls_visible = True
        self.event_source = None

        self.hide_timer = QTimer(self)
        self.hide_timer.setSingleShot(True)
        self.hide_timer.setInterval(CONTROLS_HIDE_DELAY)
        self.hide_timer.timeout.connect(self.hide_controls)

    def open(self) -> None:
        """Start listening for input"""
        if self.active:
            return
        self.event_source = QCoreApplication.instance()
        if self.event_source is not None:
            self.event_source.installEventFilter(self)
        self.active = True
        self.pointer_moved()

    def close(self) -> None:
        """Stop listening for input and cancel the inactivity timer"""
        if not self.active:
            return
        self.active = False
        self.hide_timer.stop()
        if self.event_source is not None:
            self.event_source.removeEventFilter(self)
            self.event_source = None

    def key_pressed(self, key: int) -> bool:
        """Run the action bound to ``key``; return True if one was bound"""
        if not self.active:
            return False
        for binding in self.bindings:
            if key == binding.key:
                log.debug("Key binding: %s", binding.label)
                binding.action()
                return True
        return False

    def pointer_moved(self) -> None:
        """Show the controls and restart the inactivity countdown"""
        if not self.active:
            return
        self.set_controls_visible(True)
        self.hide_timer.start()

    def hide_controls(self) -> None:
        self.set_controls_visible(False)

    def set_controls_visible(self, visible: bool) -> None:
        if self.controls_visible == visible:
            return
        self.controls_visible = visible
        self.controlsVisibilityChanged.emit(visible)

    def eventFilter(self, watched, event) -> bool:
        """Handle key presses and pointer movement anywhere in the application"""
        event_type = event.type()
        if event_type == QEvent.KeyPress:
            # Consume handled keys so Space does not also press a focused button
            return self.key_pressed(event.key())
        if event_type == QEvent.MouseMove:
            self.pointer_moved()
        return False
