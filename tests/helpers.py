from PySide6.QtCore import QObject, Signal

from capsule_slideshow.media import MediaFile, MediaType

EXTENSIONS = {'image': 'jpg', 'video': 'mp4', 'audio': 'mp3'}


class FakeTrack(QObject):
    """Stands in for BackgroundTrack without a media backend"""

    failed = Signal(str)
    instances = []

    def __init__(self, url, loop=True, parent=None):
        super().__init__(parent)
        self.url = url
        self.loop = loop
        self.play_count = 0
        self.stopped = False
        self.rewound = False
        self._volume = 1.0
        self._muted = False
        FakeTrack.instances.append(self)

    def play(self):
        self.play_count += 1

    def stop(self):
        self.stopped = True

    def rewind(self):
        self.rewound = True

    def volume(self):
        return self._volume

    def set_volume(self, volume):
        self._volume = volume

    def is_muted(self):
        return self._muted

    def set_muted(self, muted):
        self._muted = muted


class FailingTrack(FakeTrack):
    def play(self):
        super().play()
        raise RuntimeError("autoplay blocked")


class FakeVideo:
    def __init__(self, has_audio=True):
        self._has_audio = has_audio

    def hasAudio(self):
        return self._has_audio


def make_media(media_type, name=None):
    name = name or f"clip.{EXTENSIONS[media_type]}"
    return MediaFile(type=MediaType(media_type), url=f"https://example.com/{name}", name=name, size=1024)
