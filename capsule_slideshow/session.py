"""One open slideshow: playback state plus the parts that act on it.

A ``PlayerSession`` owns its timing driver, audio coordinator and input
controller. Everything is created on ``open`` and torn down on ``close``;
``closed`` fires once per open session.
"""

import logging
from typing import Optional, Sequence

from PySide6.QtCore import QObject, Signal

from .audio import AudioCoordinator, BackgroundTrack, default_has_audio
from .controls import InputController
from .media import BackgroundMusic
from .slides import Slide
from .timing import DEFAULT_SLIDE_DURATION, PlaybackState, TimingDriver
from .transitions import DEFAULT_EFFECT, DEFAULT_SPEED, TransitionSpec, get_transition_variants

log = logging.getLogger(__name__)


class PlayerSession(QObject):

    closed = Signal()
    slideChanged = Signal(int)
    progressChanged = Signal(float)
    playingChanged = Signal(bool)
    mutedChanged = Signal(bool)
    controlsVisibilityChanged = Signal(bool)

    def __init__(self, slides: Sequence[Slide],
                 transition_effect: str = DEFAULT_EFFECT,
                 transition_speed: str = DEFAULT_SPEED,
                 slide_duration: int = DEFAULT_SLIDE_DURATION,
                 background_music: Optional[BackgroundMusic] = None,
                 track_factory=BackgroundTrack,
                 has_audio=default_has_audio,
                 parent=None):
        super().__init__(parent)
        self.slides = list(slides)
        self.state = PlaybackState()
        self.is_open = False

        self.transition: TransitionSpec = get_transition_variants(transition_effect, transition_speed)

        self.timing = TimingDriver(self.slides, self.state, slide_duration, parent=self)
        self.timing.slideChanged.connect(self._on_slide_changed)
        self.timing.progressChanged.connect(self.progressChanged)
        self.timing.playingChanged.connect(self.playingChanged)

        self.audio = AudioCoordinator(background_music, track_factory=track_factory,
                                      has_audio=has_audio, parent=self)

        self.input = InputController(
            on_previous=self.previous_slide,
            on_next=self.next_slide,
            on_toggle_play=self.toggle_play,
            on_toggle_mute=self.toggle_mute,
            on_close=self.close,
            parent=self,
        )
        self.input.controlsVisibilityChanged.connect(self._on_controls_visibility)

    @property
    def current_slide(self) -> Slide:
        return self.slides[self.state.index]

    def open(self) -> None:
        """Start playback from the first slide"""
        if self.is_open:
            return
        self.is_open = True
        self.state.index = 0
        self.timing.set_playing(True)
        log.info("Opening slideshow with %d slides", len(self.slides))

        self.audio.open(muted=self.state.muted)
        self.audio.slide_changed(self.current_slide.type)
        self.input.open()
        self.timing.start()

    def close(self) -> None:
        """Stop everything and signal the caller"""
        if not self.is_open:
            return
        self.is_open = False
        self.timing.stop()
        self.input.close()
        self.audio.close()
        log.info("Slideshow closed")
        self.closed.emit()

    def next_slide(self) -> None:
        if self.is_open:
            self.timing.next()

    def previous_slide(self) -> None:
        if self.is_open:
            self.timing.previous()

    def go_to_slide(self, index: int) -> None:
        if self.is_open:
            self.timing.go_to(index)

    def toggle_play(self) -> None:
        if self.is_open:
            self.timing.toggle_play()

    def toggle_mute(self) -> None:
        self.set_muted(not self.state.muted)

    def set_muted(self, muted: bool) -> None:
        if not self.is_open or self.state.muted == muted:
            return
        self.state.muted = muted
        self.audio.set_muted(muted)
        self.mutedChanged.emit(muted)

    def restart(self) -> None:
        """Back to the first slide with music from the start"""
        if not self.is_open:
            return
        self.timing.restart()
        self.audio.restart()

    def video_started(self, video) -> None:
        """The active video slide began playing"""
        if self.is_open:
            self.audio.video_started(video)

    def video_paused(self) -> None:
        if self.is_open:
            self.audio.video_paused()

    def video_ended(self) -> None:
        """The active video reached its end; move on at the next tick"""
        if not self.is_open:
            return
        self.audio.video_ended()
        self.timing.complete()

    def audio_ended(self) -> None:
        """The active audio clip finished playing"""
        if self.is_open:
            self.timing.next()

    def pointer_moved(self) -> None:
        self.input.pointer_moved()

    def _on_slide_changed(self, index: int) -> None:
        slide_type = self.slides[index].type
        log.debug("Showing slide %d (%s)", index, slide_type.value)
        self.audio.slide_changed(slide_type)
        self.slideChanged.emit(index)

    def _on_controls_visibility(self, visible: bool) -> None:
        self.state.controls_visible = visible
        self.controlsVisibilityChanged.emit(visible)
