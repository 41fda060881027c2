"""Background music for a slideshow session"""

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QUrl, Signal
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

from .media import BackgroundMusic
from .slides import SlideType

log = logging.getLogger(__name__)

BASE_VOLUME = 0.3
DUCK_RATIO = 0.4  # share of the base volume kept while a video plays sound

# Until media is loaded QMediaPlayer cannot tell whether it has audio
_UNDECIDED_STATUSES = (
    QMediaPlayer.MediaStatus.NoMedia,
    QMediaPlayer.MediaStatus.LoadingMedia,
    QMediaPlayer.MediaStatus.InvalidMedia,
)


def default_has_audio(video) -> bool:
    """Best-effort check for an audio track on a video player.

    Returns True whenever the answer is unknown, so background music is
    ducked rather than played over the video's own sound.
    """
    has_audio = getattr(video, 'hasAudio', None)
    if has_audio is None:
        return True
    media_status = getattr(video, 'mediaStatus', None)
    if media_status is not None and media_status() in _UNDECIDED_STATUSES:
        return True
    return bool(has_audio())


class BackgroundTrack(QObject):
    """A looping music track played through QtMultimedia"""

    failed = Signal(str)

    def __init__(self, url: str, loop: bool = True, parent=None):
        super().__init__(parent)
        self.audio_output = QAudioOutput(self)
        self.player = QMediaPlayer(self)
        self.player.setAudioOutput(self.audio_output)
        if loop:
            self.player.setLoops(QMediaPlayer.Loops.Infinite)
        self.player.errorOccurred.connect(self._on_error)
        self.player.setSource(QUrl(url))

    def _on_error(self, error, message: str) -> None:
        self.failed.emit(message or str(error))

    def play(self) -> None:
        self.player.play()

    def stop(self) -> None:
        self.player.stop()

    def rewind(self) -> None:
        self.player.setPosition(0)

    def volume(self) -> float:
        return self.audio_output.volume()

    def set_volume(self, volume: float) -> None:
        self.audio_output.setVolume(volume)

    def is_muted(self) -> bool:
        return self.audio_output.isMuted()

    def set_muted(self, muted: bool) -> None:
        self.audio_output.setMuted(muted)


class AudioCoordinator(QObject):
    """Plays background music and ducks it under video sound.

    The track only exists between ``open`` and ``close``. Once the player
    has moved onto a video slide the music stays ducked across further
    video slides and is restored when the video pauses or ends, or when a
    non-video slide comes up.
    """

    def __init__(self, music: Optional[BackgroundMusic],
                 track_factory: Callable[..., BackgroundTrack] = BackgroundTrack,
                 has_audio: Callable[[object], bool] = default_has_audio,
                 parent=None):
        super().__init__(parent)
        self.music = music
        self.track_factory = track_factory
        self.has_audio = has_audio
        self.track = None
        self.muted = False
        self.ducked = False
        self.on_video_slide = False

    def open(self, muted: bool = False) -> None:
        """Start the looping background track, if there is one"""
        self.muted = muted
        if self.music is None or self.track is not None:
            return

        track = self.track_factory(self.music.url, loop=True, parent=self)
        track.set_volume(BASE_VOLUME)
        track.set_muted(muted)
        track.failed.connect(self._on_track_failed)
        self.track = track
        self.ducked = False
        log.info("Playing background music: %s", self.music.title or self.music.url)
        self._play()

    def close(self) -> None:
        """Stop and release the background track"""
        if self.track is None:
            return
        self.track.stop()
        self._release_track()

    def _play(self) -> None:
        try:
            self.track.play()
        except Exception as e:
            self._on_track_failed(str(e))

    def _on_track_failed(self, message: str) -> None:
        log.error("Background music playback failed: %s", message)
        if self.track is not None:
            self._release_track()

    def _release_track(self) -> None:
        track = self.track
        self.track = None
        self.ducked = False
        track.failed.disconnect(self._on_track_failed)
        track.deleteLater()

    @property
    def volume(self) -> Optional[float]:
        if self.track is None:
            return None
        return self.track.volume()

    def set_muted(self, muted: bool) -> None:
        """Mirror the player's mute flag on the background track"""
        self.muted = muted
        if self.track is not None:
            self.track.set_muted(muted)

    def slide_changed(self, slide_type: SlideType) -> None:
        """React to the active slide changing type"""
        self.on_video_slide = slide_type == SlideType.VIDEO
        if not self.on_video_slide:
            self._restore()

    def video_started(self, video) -> None:
        """Duck the music when the active video plays with sound"""
        if not self.on_video_slide:
            return
        if self.has_audio(video):
            self._duck()

    def video_paused(self) -> None:
        self._restore()

    def video_ended(self) -> None:
        self._restore()

    def restart(self) -> None:
        """Play the background track again from the start"""
        if self.track is None:
            return
        self.track.rewind()
        self._play()

    def _duck(self) -> None:
        if self.track is None or self.ducked:
            return
        self.track.set_volume(BASE_VOLUME * DUCK_RATIO)
        self.ducked = True

    def _restore(self) -> None:
        if self.track is None or not self.ducked:
            return
        self.track.set_volume(BASE_VOLUME)
        self.ducked = False
