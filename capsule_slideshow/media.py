"""Media files shown by the capsule slideshow."""

import enum
import logging
import random
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from PySide6.QtCore import QUrl

log = logging.getLogger(__name__)

# Supported media formats
IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp']
VIDEO_EXTENSIONS = ['.mp4', '.mov', '.webm', '.mkv', '.avi', '.m4v']
AUDIO_EXTENSIONS = ['.mp3', '.wav', '.ogg', '.m4a', '.aac', '.flac']


class MediaType(str, enum.Enum):
    IMAGE = 'image'
    VIDEO = 'video'
    AUDIO = 'audio'


def classify_media(path: Path) -> Optional[MediaType]:
    """Return the media type for a file name, or None if unsupported"""
    suffix = Path(path).suffix.lower()
    if suffix in IMAGE_EXTENSIONS:
        return MediaType.IMAGE
    if suffix in VIDEO_EXTENSIONS:
        return MediaType.VIDEO
    if suffix in AUDIO_EXTENSIONS:
        return MediaType.AUDIO
    return None


@dataclass(frozen=True)
class MediaFile:
    """One uploaded asset.

    ``handle`` is the local file backing the asset, or None when the asset
    only exists at a remote ``url``.
    """
    type: MediaType
    url: str
    name: str
    size: int = 0
    handle: Optional[Path] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_path(cls, path: Path) -> 'MediaFile':
        """Create a media file from a local path.

        Raises ValueError if the extension is not a supported media type.
        """
        path = Path(path)
        media_type = classify_media(path)
        if media_type is None:
            raise ValueError(f"Unsupported media file: {path.name}")
        return cls(
            type=media_type,
            url=QUrl.fromLocalFile(str(path.resolve())).toString(),
            name=path.name,
            size=path.stat().st_size,
            handle=path,
        )

    @classmethod
    def from_url(cls, url: str, media_type: Optional[MediaType] = None,
                 name: Optional[str] = None, size: int = 0) -> 'MediaFile':
        """Create a media file for a remote asset"""
        qurl = QUrl(url)
        file_name = name or qurl.fileName() or url
        if media_type is None:
            media_type = classify_media(Path(qurl.path()))
            if media_type is None:
                raise ValueError(f"Cannot tell the media type of {url}")
        return cls(type=MediaType(media_type), url=url, name=file_name, size=size)

    @property
    def qurl(self) -> QUrl:
        return QUrl(self.url)


@dataclass(frozen=True)
class BackgroundMusic:
    """A looping track played behind the slides"""
    url: str
    title: str = ''
    genre: str = ''
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_location(cls, location: str, title: str = '', genre: str = '') -> 'BackgroundMusic':
        """Create background music from a local path or a URL"""
        path = Path(location)
        if path.exists():
            url = QUrl.fromLocalFile(str(path.resolve())).toString()
            return cls(url=url, title=title or path.stem, genre=genre)
        return cls(url=location, title=title or QUrl(location).fileName(), genre=genre)


def media_from_paths(paths: Iterable[Path]) -> List[MediaFile]:
    """Build media files from paths in the given order, skipping unsupported files"""
    media = []
    for path in paths:
        path = Path(path)
        if not path.is_file():
            log.warning("Skipping missing media file: %s", path)
            continue
        if classify_media(path) is None:
            log.warning("Skipping unsupported media file: %s", path.name)
            continue
        media.append(MediaFile.from_path(path))
    return media


def load_media_folder(folder: Path, shuffle: bool = False) -> List[MediaFile]:
    """Load every supported media file in a folder.

    Files are sorted by name unless ``shuffle`` is set.
    """
    folder_path = Path(folder)
    if not folder_path.exists() or not folder_path.is_dir():
        raise FileNotFoundError(f"Folder not found: {folder_path}")

    # Compare lower-cased suffixes so .JPG and .jpg both match on every platform
    paths = [p for p in folder_path.iterdir() if p.is_file() and classify_media(p) is not None]

    if shuffle:
        random.shuffle(paths)
    else:
        paths.sort()

    return media_from_paths(paths)
