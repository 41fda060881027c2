"""Slideshow configuration: defaults, capsule files and command-line overrides"""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .media import BackgroundMusic, MediaFile, MediaType, load_media_folder, media_from_paths
from .slides import DEFAULT_DELIVERY_DATE, Slide, build_slides
from .styles import (DEFAULT_BACKGROUND, DEFAULT_FONT, DEFAULT_GRADIENT_DIRECTION, DEFAULT_MESSAGE_SIZE,
                     DEFAULT_SECONDARY, DEFAULT_TITLE_SIZE, SlideStyle)
from .timing import DEFAULT_SLIDE_DURATION
from .transitions import DEFAULT_EFFECT, DEFAULT_SPEED, EFFECTS, SPEEDS

log = logging.getLogger(__name__)

# Configuration Constants
DEFAULT_CONFIG = {
    'title': '',
    'message': '',
    'sender': '',
    'delivery_date': DEFAULT_DELIVERY_DATE,
    'folder': None,
    'media': [],
    'shuffle': False,
    'transition': DEFAULT_EFFECT,
    'speed': DEFAULT_SPEED,
    'duration': DEFAULT_SLIDE_DURATION,
    'music': None,
    'music_title': '',
    'title_font': DEFAULT_FONT,
    'message_font': DEFAULT_FONT,
    'title_size': DEFAULT_TITLE_SIZE,
    'message_size': DEFAULT_MESSAGE_SIZE,
    'background_color': DEFAULT_BACKGROUND,
    'background_type': 'solid',
    'gradient_direction': DEFAULT_GRADIENT_DIRECTION,
    'secondary_color': DEFAULT_SECONDARY,
    'monitor': 0,
    'windowed': False,
}

TRANSITION_CHOICES = sorted(EFFECTS)
SPEED_CHOICES = list(SPEEDS)
BACKGROUND_TYPES = ['solid', 'gradient']
GRADIENT_CHOICES = ['to-b', 'to-r', 'to-br', 'to-bl', 'radial']


class ConfigError(Exception):
    """Raised when the slideshow cannot be configured"""


def load_capsule_file(path: Path) -> dict:
    """Read capsule settings from a JSON file.

    Relative media and music paths are resolved against the file's folder.
    """
    path = Path(path)
    try:
        with path.open(encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read capsule file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Capsule file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Capsule file {path} must contain a JSON object")

    unknown = set(data) - set(DEFAULT_CONFIG)
    if unknown:
        log.warning("Ignoring unknown capsule settings: %s", ", ".join(sorted(unknown)))

    settings = {key: value for key, value in data.items() if key in DEFAULT_CONFIG}
    base = path.parent
    if 'media' in settings:
        settings['media'] = [_resolve_entry(entry, base) for entry in settings['media']]
    if isinstance(settings.get('music'), str):
        settings['music'] = _resolve_location(settings['music'], base)
    elif isinstance(settings.get('music'), dict) and 'url' in settings['music']:
        settings['music'] = dict(settings['music'], url=_resolve_location(settings['music']['url'], base))
    if settings.get('folder'):
        settings['folder'] = _resolve_location(settings['folder'], base)
    return settings


def _resolve_location(location: str, base: Path) -> str:
    if '://' in location or Path(location).is_absolute():
        return location
    return str(base / location)


def _resolve_entry(entry, base: Path):
    if isinstance(entry, dict):
        if 'url' in entry:
            return dict(entry, url=_resolve_location(entry['url'], base))
        return entry
    return _resolve_location(str(entry), base)


def build_config(args=None, capsule: Optional[dict] = None) -> dict:
    """Merge defaults, capsule file settings and command-line arguments.

    Arguments left as None on the command line do not override anything.
    """
    config = DEFAULT_CONFIG.copy()
    if capsule:
        config.update(capsule)

    if args is not None:
        for key in DEFAULT_CONFIG:
            value = getattr(args, key, None)
            if value is None:
                continue
            # Flags and lists only override when actually given
            if value is False or value == []:
                continue
            config[key] = value

    try:
        duration = int(config['duration'])
    except (TypeError, ValueError):
        duration = 0
    if duration <= 0:
        raise ConfigError("Slide duration must be a positive number of milliseconds")
    config['duration'] = duration
    return config


def _media_entry(entry) -> Optional[MediaFile]:
    if isinstance(entry, dict):
        url = entry.get('url')
        if not url:
            log.warning("Skipping media entry without a url")
            return None
        if Path(url).is_file():
            return MediaFile.from_path(Path(url))
        media_type = MediaType(entry['type']) if entry.get('type') else None
        return MediaFile.from_url(url, media_type, entry.get('name'), entry.get('size', 0))

    if '://' in entry:
        return MediaFile.from_url(entry)
    found = media_from_paths([Path(entry)])
    return found[0] if found else None


def load_media(config: dict) -> List[MediaFile]:
    """Media files from the configured folder followed by explicit entries"""
    media = []
    if config['folder']:
        try:
            media.extend(load_media_folder(Path(config['folder']), shuffle=config['shuffle']))
        except FileNotFoundError as e:
            raise ConfigError(str(e)) from e

    for entry in config['media']:
        try:
            media_file = _media_entry(entry)
        except ValueError as e:
            log.warning("Skipping media entry: %s", e)
            continue
        if media_file is not None:
            media.append(media_file)
    return media


def load_music(config: dict) -> Optional[BackgroundMusic]:
    """Background music from the configuration, if any"""
    music = config['music']
    if not music:
        return None
    if isinstance(music, dict):
        if not music.get('url'):
            raise ConfigError("Background music needs a url")
        track = BackgroundMusic.from_location(music['url'], music.get('title', ''), music.get('genre', ''))
        if music.get('id'):
            track = replace(track, id=music['id'])
        return track
    return BackgroundMusic.from_location(music, config['music_title'])


def build_style(config: dict) -> SlideStyle:
    return SlideStyle(
        title_font=config['title_font'],
        message_font=config['message_font'],
        title_size=config['title_size'],
        message_size=config['message_size'],
        background_color=config['background_color'],
        background_type=config['background_type'],
        gradient_direction=config['gradient_direction'],
        secondary_color=config['secondary_color'],
    )


def build_capsule_slides(config: dict, media: List[MediaFile]) -> List[Slide]:
    if not (config['title'] or config['message'] or media):
        raise ConfigError("Nothing to show: give a title, a message or some media")
    return build_slides(config['title'], config['message'], config['sender'], media,
                        config['delivery_date'])
