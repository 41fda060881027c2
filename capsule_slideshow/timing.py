"""Timed auto-advance of slides.

The driver owns the 100 ms tick timer. Every change of slide or play state
goes through ``_reset_timer`` so that at most one timer is ever running.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from PySide6.QtCore import QObject, QTimer, Signal

from .slides import Slide, SlideType

log = logging.getLogger(__name__)

TICK_INTERVAL = 100  # milliseconds
DEFAULT_SLIDE_DURATION = 5000  # milliseconds

# Media slides stay up longer so native playback is not cut short
DURATION_MULTIPLIERS = {
    SlideType.VIDEO: 3,
    SlideType.AUDIO: 2,
}


def slide_duration(slide_type: SlideType, base_duration: int = DEFAULT_SLIDE_DURATION) -> int:
    """Milliseconds a slide of the given type stays on screen"""
    return base_duration * DURATION_MULTIPLIERS.get(slide_type, 1)


@dataclass
class PlaybackState:
    index: int = 0
    playing: bool = True
    muted: bool = False
    progress: float = 0.0  # percent of the current slide's duration
    controls_visible: bool = True


class TimingDriver(QObject):
    """Advances slides on a fixed tick while playing"""

    slideChanged = Signal(int)
    progressChanged = Signal(float)
    playingChanged = Signal(bool)

    def __init__(self, slides: Sequence[Slide], state: PlaybackState,
                 base_duration: int = DEFAULT_SLIDE_DURATION, parent=None):
        super().__init__(parent)
        if not slides:
            raise ValueError("A slideshow needs at least one slide")
        if base_duration <= 0:
            raise ValueError("Slide duration must be positive")

        self.slides = list(slides)
        self.state = state
        self.base_duration = base_duration
        self.elapsed = 0
        self.active = False

        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL)
        self.tick_timer.timeout.connect(self.tick)

    @property
    def current_duration(self) -> int:
        return slide_duration(self.slides[self.state.index].type, self.base_duration)

    def start(self) -> None:
        """Begin timing the current slide"""
        self.active = True
        self._reset_timer(reset_progress=True)

    def stop(self) -> None:
        """Tear down the timer; nothing ticks until ``start`` is called again"""
        self.active = False
        self.tick_timer.stop()

    def _reset_timer(self, reset_progress: bool) -> None:
        """Clear any running timer and start a fresh one if playing"""
        self.tick_timer.stop()

        if reset_progress:
            self.elapsed = 0
            self._set_progress(0.0)

        if self.active and self.state.playing:
            self.tick_timer.start()

    def _set_progress(self, progress: float) -> None:
        self.state.progress = progress
        self.progressChanged.emit(progress)

    def tick(self) -> None:
        """Advance progress by one tick, moving to the next slide when complete"""
        duration = self.current_duration
        if self.elapsed < duration:
            self.elapsed = min(self.elapsed + TICK_INTERVAL, duration)
            self._set_progress(self.elapsed * 100.0 / duration)

        if self.elapsed >= duration:
            log.debug("Slide %d finished after %d ms", self.state.index, duration)
            self.next()

    def complete(self) -> None:
        """Mark the current slide finished; the next tick moves on"""
        self.elapsed = self.current_duration
        self._set_progress(100.0)

    def go_to(self, index: int) -> None:
        """Show the slide at ``index`` (wrapping) with progress reset"""
        self.state.index = index % len(self.slides)
        self._reset_timer(reset_progress=True)
        self.slideChanged.emit(self.state.index)

    def next(self) -> None:
        """Show the next slide, wrapping from last to first"""
        self.go_to(self.state.index + 1)

    def previous(self) -> None:
        """Show the previous slide, wrapping from first to last"""
        self.go_to(self.state.index - 1)

    def set_playing(self, playing: bool) -> None:
        """Pause or resume without touching progress"""
        if self.state.playing == playing:
            return
        self.state.playing = playing
        self._reset_timer(reset_progress=False)
        self.playingChanged.emit(playing)

    def toggle_play(self) -> None:
        """Toggle between playing and paused"""
        self.set_playing(not self.state.playing)

    def restart(self) -> None:
        """Go back to the first slide and play"""
        self.set_playing(True)
        self.go_to(0)

    @property
    def is_running(self) -> bool:
        return self.tick_timer.isActive()
