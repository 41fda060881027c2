"""
Capsule Slideshow

Plays a time capsule full screen: a title slide, the capsule's photos,
videos and audio clips, and a closing slide, with timed auto-advance,
animated transitions and optional background music.

Usage:
    capsule-slideshow [OPTIONS] [MEDIA ...]
    python -m capsule_slideshow [OPTIONS] [MEDIA ...]

Controls:
    Left/Right   - Previous/next slide
    Space        - Play/Pause
    M            - Mute
    ESC          - Close
    F            - Toggle fullscreen
"""

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from .config import (BACKGROUND_TYPES, GRADIENT_CHOICES, SPEED_CHOICES, TRANSITION_CHOICES, ConfigError,
                     build_capsule_slides, build_config, build_style, load_capsule_file, load_media,
                     load_music)
from .session import PlayerSession
from .window import SlideshowWindow


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="Time capsule slideshow")
    parser.add_argument("media", nargs="*", help="Media files to show, in order")
    parser.add_argument("--capsule", help="JSON file with capsule settings", default=None)

    content = parser.add_argument_group("content")
    content.add_argument("--title", help="Title slide heading", default=None)
    content.add_argument("--message", help="Title slide message", default=None)
    content.add_argument("--sender", help="Name shown on the closing slide", default=None)
    content.add_argument("--delivery-date", dest="delivery_date", help="Delivery date label", default=None)
    content.add_argument("--folder", help="Folder with media files to show", default=None)
    content.add_argument("--shuffle", action="store_true", help="Randomize the order of folder media")

    playback = parser.add_argument_group("playback")
    playback.add_argument("--transition", help="Transition effect", choices=TRANSITION_CHOICES, default=None)
    playback.add_argument("--speed", help="Transition speed", choices=SPEED_CHOICES, default=None)
    playback.add_argument("--duration", type=int, help="Milliseconds to show each slide", default=None)
    playback.add_argument("--music", help="Background music file or URL", default=None)
    playback.add_argument("--music-title", dest="music_title", help="Background music title", default=None)

    style = parser.add_argument_group("style")
    style.add_argument("--title-font", dest="title_font", default=None)
    style.add_argument("--message-font", dest="message_font", default=None)
    style.add_argument("--title-size", dest="title_size", help="Tailwind text size, e.g. text-5xl", default=None)
    style.add_argument("--message-size", dest="message_size", help="Tailwind text size", default=None)
    style.add_argument("--background-color", dest="background_color", default=None)
    style.add_argument("--background-type", dest="background_type", choices=BACKGROUND_TYPES, default=None)
    style.add_argument("--gradient-direction", dest="gradient_direction", choices=GRADIENT_CHOICES, default=None)
    style.add_argument("--secondary-color", dest="secondary_color", default=None)

    display = parser.add_argument_group("display")
    display.add_argument("--monitor", type=int, help="Monitor index to use", default=None)
    display.add_argument("--windowed", action="store_true", help="Start in a window instead of full screen")
    display.add_argument("--log-level", dest="log_level", default="WARNING",
                         choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> dict:
    """Build the configuration from a capsule file and the command line"""
    capsule = load_capsule_file(args.capsule) if args.capsule else None
    return build_config(args, capsule)


def main(argv=None):
    """Main function"""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    app = QApplication(sys.argv[:1])

    try:
        config = load_settings(args)
        media = load_media(config)
        slides = build_capsule_slides(config, media)
        music = load_music(config)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Found {len(media)} media files")

    session = PlayerSession(
        slides,
        transition_effect=config['transition'],
        transition_speed=config['speed'],
        slide_duration=config['duration'],
        background_music=music,
    )
    window = SlideshowWindow(session, build_style(config), config)
    session.closed.connect(app.quit)
    window.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
