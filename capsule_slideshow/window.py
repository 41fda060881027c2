"""Full-screen window that renders a capsule slideshow.

Slides are painted into pixmaps so transitions can move, scale, rotate
and fade them with QPainter. Video and audio slides get a media player
once their enter transition has finished.
"""

import logging
import math
from typing import Optional

from PySide6.QtCore import QElapsedTimer, QEvent, QObject, QRectF, QSize, Qt, QTimer
from PySide6.QtGui import (QColor, QFontMetricsF, QGuiApplication, QKeyEvent, QMouseEvent,
                           QPainter, QPainterPath, QPixmap, QTextOption)
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QPushButton, QWidget

from .session import PlayerSession
from .slides import ClosingSlide, MediaSlide, Slide, SlideType, TitleSlide
from .styles import SlideStyle, text_pixel_size
from .transitions import Frame

log = logging.getLogger(__name__)

# Window Settings
INITIAL_WINDOW_WIDTH = 1024
INITIAL_WINDOW_HEIGHT = 640

# Layout
CONTENT_MARGIN = 32
TITLE_MAX_WIDTH = 896
CLOSING_MAX_WIDTH = 672
PROGRESS_BAR_HEIGHT = 4

# Animation
FRAME_INTERVAL = 16  # milliseconds between transition frames

# Cache Settings
MAX_CACHE_SIZE = 10  # Maximum number of scaled images to cache

# Colors
TITLE_COLOR = QColor('#1f2937')
TEXT_COLOR = QColor('#374151')
MUTED_TEXT_COLOR = QColor('#6b7280')

BUTTON_STYLE = (
    "QPushButton { background-color: rgba(0, 0, 0, 128); color: white; border: none;"
    " border-radius: 22px; font-size: 18px; }"
    "QPushButton:hover { background-color: rgba(0, 0, 0, 180); }"
)
INDICATOR_STYLE = (
    "QPushButton { background-color: rgba(255, 255, 255, %d); border: none; border-radius: 6px; }"
)
LEGEND_STYLE = (
    "QLabel { background-color: rgba(0, 0, 0, 128); color: white; font-size: 11px;"
    " border-radius: 8px; padding: 10px; }"
)


class TransitionManager(QObject):
    """Paints the outgoing slide's exit and then the incoming slide's enter"""

    def __init__(self, transition, parent=None):
        super().__init__(parent)
        self.transition = transition
        self.current_pixmap = None
        self.next_pixmap = None

    def set_images(self, current: Optional[QPixmap], next_img: QPixmap) -> None:
        """Set the outgoing and incoming slide images"""
        self.current_pixmap = current
        self.next_pixmap = next_img

    @property
    def total_time(self) -> float:
        """Seconds the whole transition takes"""
        phase = self.transition.animation_time
        return phase * 2 if self.current_pixmap is not None else phase

    def draw(self, painter: QPainter, rect: QRectF, elapsed: float) -> None:
        """Draw the transition ``elapsed`` seconds after it started"""
        if self.next_pixmap is None:
            return

        phase = self.transition.animation_time
        if self.current_pixmap is not None:
            if elapsed < phase:
                draw_frame(painter, self.current_pixmap, rect, self.transition.exit_frame(elapsed))
                return
            elapsed -= phase

        draw_frame(painter, self.next_pixmap, rect, self.transition.enter_frame(elapsed))


def draw_frame(painter: QPainter, pixmap: QPixmap, rect: QRectF, frame: Frame) -> None:
    """Draw a full-size slide pixmap transformed by a transition frame"""
    opacity = min(max(frame.opacity, 0.0), 1.0)
    scale_x = frame.scale * math.cos(math.radians(frame.rotate_y))
    scale_y = frame.scale * frame.scale_y * math.cos(math.radians(frame.rotate_x))
    if opacity <= 0.0 or abs(scale_x) < 1e-3 or abs(scale_y) < 1e-3:
        return

    center_x = rect.center().x()
    if frame.origin == 'top':
        origin_y = rect.top()
    elif frame.origin == 'bottom':
        origin_y = rect.bottom()
    else:
        origin_y = rect.center().y()

    painter.save()
    painter.setOpacity(opacity)
    painter.translate(center_x + frame.x, origin_y + frame.y)
    painter.rotate(frame.rotate)
    painter.scale(scale_x, scale_y)
    source = blurred(pixmap, frame.blur) if frame.blur >= 0.5 else pixmap
    target = QRectF(rect.left() - center_x, rect.top() - origin_y, rect.width(), rect.height())
    painter.drawPixmap(target, source, QRectF(source.rect()))
    painter.restore()


def blurred(pixmap: QPixmap, radius: float) -> QPixmap:
    """Cheap blur: shrink the pixmap and scale it back up smoothly"""
    factor = 1.0 + radius / 2.0
    small = pixmap.scaled(max(1, int(pixmap.width() / factor)), max(1, int(pixmap.height() / factor)),
                          Qt.IgnoreAspectRatio, Qt.SmoothTransformation)
    return small.scaled(pixmap.size(), Qt.IgnoreAspectRatio, Qt.SmoothTransformation)


class SlideRenderer:
    """Paints slide content (without background) into pixmaps"""

    def __init__(self, style: SlideStyle):
        self.style = style
        # Cache for loaded images
        self.image_cache = {}
        self.cache_size = MAX_CACHE_SIZE

    def clear_cache(self) -> None:
        """Clear the image cache"""
        self.image_cache.clear()

    def render(self, slide: Slide, size: QSize) -> QPixmap:
        """Render a slide into a transparent pixmap of the given size"""
        pixmap = QPixmap(size)
        pixmap.fill(Qt.transparent)
        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        painter.setRenderHint(QPainter.TextAntialiasing)

        rect = QRectF(0, 0, size.width(), size.height()).adjusted(
            CONTENT_MARGIN, CONTENT_MARGIN, -CONTENT_MARGIN, -CONTENT_MARGIN)

        if isinstance(slide, TitleSlide):
            self.draw_title(painter, rect, slide)
        elif isinstance(slide, ClosingSlide):
            self.draw_closing(painter, rect, slide)
        elif slide.type == SlideType.IMAGE:
            self.draw_image(painter, rect, slide)
        elif slide.type == SlideType.AUDIO:
            self.draw_audio(painter, rect, slide)
        else:
            self.draw_video_placeholder(painter, rect)

        painter.end()
        return pixmap

    def draw_text_block(self, painter: QPainter, blocks, rect: QRectF, max_width: float,
                        spacing: float = 32) -> None:
        """Draw (text, font, color) blocks stacked and centered in ``rect``"""
        width = min(rect.width(), max_width)
        heights = [QFontMetricsF(font).boundingRect(QRectF(0, 0, width, 100000),
                                                    Qt.TextWordWrap, text).height()
                   for text, font, _ in blocks]
        total = sum(heights) + spacing * max(len(blocks) - 1, 0)
        y = rect.center().y() - total / 2
        x = rect.center().x() - width / 2

        option = QTextOption(Qt.AlignHCenter)
        option.setWrapMode(QTextOption.WordWrap)
        for (text, font, color), height in zip(blocks, heights):
            painter.setFont(font)
            painter.setPen(color)
            painter.drawText(QRectF(x, y, width, height), text, option)
            y += height + spacing

    def draw_title(self, painter: QPainter, rect: QRectF, slide: TitleSlide) -> None:
        """Title and message centered on the slide"""
        blocks = []
        if slide.title:
            blocks.append((slide.title, self.style.title_qfont(), TITLE_COLOR))
        if slide.message:
            blocks.append((slide.message, self.style.message_qfont(), TEXT_COLOR))
        self.draw_text_block(painter, blocks, rect, TITLE_MAX_WIDTH)

    def draw_closing(self, painter: QPainter, rect: QRectF, slide: ClosingSlide) -> None:
        """Heart badge, sign-off, sender and delivery date"""
        badge = 96
        line_font = self.style.message_qfont(pixel_size=text_pixel_size('text-lg'))
        heading_font = self.style.title_qfont()
        heading_font.setPixelSize(text_pixel_size('text-4xl'))
        footer_font = self.style.message_qfont(pixel_size=text_pixel_size('text-sm'))
        footer_font.setItalic(True)

        blocks = [
            ("With Love", heading_font, TITLE_COLOR),
            (f"{slide.sender_line}\n{slide.delivery_line}", line_font, TEXT_COLOR),
            ("Created with MementoLocker", footer_font, MUTED_TEXT_COLOR),
        ]
        text_rect = rect.adjusted(0, badge + 32, 0, 0)
        self.draw_text_block(painter, blocks, text_rect, CLOSING_MAX_WIDTH)

        badge_rect = QRectF(rect.center().x() - badge / 2, rect.top() + (rect.height() - badge) / 4,
                            badge, badge)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor('#f87171'))
        painter.drawEllipse(badge_rect)
        painter.setPen(QColor('white'))
        heart_font = self.style.title_qfont()
        heart_font.setPixelSize(badge // 2)
        painter.setFont(heart_font)
        painter.drawText(badge_rect, Qt.AlignCenter, "♥")

    def load_image(self, slide: MediaSlide, size: QSize) -> QPixmap:
        """Load and scale an image slide, using the cache when possible"""
        cache_key = (slide.media.id, size.width(), size.height())
        if cache_key in self.image_cache:
            return self.image_cache[cache_key]

        source = str(slide.media.handle) if slide.media.handle else slide.media.qurl.toLocalFile()
        pixmap = QPixmap(source) if source else QPixmap()
        if pixmap.isNull():
            log.warning("Failed to load image: %s", slide.media.name)
            return pixmap

        scaled = pixmap.scaled(size, Qt.KeepAspectRatio, Qt.SmoothTransformation)

        # Check cache size before adding new image
        while len(self.image_cache) >= self.cache_size:
            # Remove oldest entry
            self.image_cache.pop(next(iter(self.image_cache)))
        self.image_cache[cache_key] = scaled
        return scaled

    def draw_image(self, painter: QPainter, rect: QRectF, slide: MediaSlide) -> None:
        """Image scaled to fit with rounded corners"""
        pixmap = self.load_image(slide, rect.size().toSize())
        if pixmap.isNull():
            self.draw_caption(painter, rect, slide.media.name)
            return
        x = rect.center().x() - pixmap.width() / 2
        y = rect.center().y() - pixmap.height() / 2
        target = QRectF(x, y, pixmap.width(), pixmap.height())
        path = QPainterPath()
        path.addRoundedRect(target, 8, 8)
        painter.save()
        painter.setClipPath(path)
        painter.drawPixmap(target.topLeft(), pixmap)
        painter.restore()

    def draw_audio(self, painter: QPainter, rect: QRectF, slide: MediaSlide) -> None:
        """Speaker disc with the clip name under it"""
        disc = 256
        disc_rect = QRectF(rect.center().x() - disc / 2, rect.center().y() - disc / 2 - 40, disc, disc)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor('#c084fc'))
        painter.drawEllipse(disc_rect)
        inner = disc_rect.adjusted(disc / 4, disc / 4, -disc / 4, -disc / 4)
        painter.setBrush(QColor(255, 255, 255, 51))
        painter.drawEllipse(inner)
        painter.setPen(QColor('white'))
        icon_font = self.style.title_qfont()
        icon_font.setPixelSize(64)
        painter.setFont(icon_font)
        painter.drawText(inner, Qt.AlignCenter, "♪")

        name_rect = QRectF(rect.left(), disc_rect.bottom() + 32, rect.width(), 48)
        name_font = self.style.title_qfont()
        name_font.setPixelSize(text_pixel_size('text-2xl'))
        painter.setFont(name_font)
        painter.setPen(TITLE_COLOR)
        painter.drawText(name_rect, Qt.AlignCenter, slide.media.name)

    def draw_video_placeholder(self, painter: QPainter, rect: QRectF) -> None:
        """Dark panel standing in for a video until its player is shown"""
        panel = QRectF(rect)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(0, 0, 0, 200))
        painter.drawRoundedRect(panel, 8, 8)

    def draw_caption(self, painter: QPainter, rect: QRectF, text: str) -> None:
        painter.setPen(TEXT_COLOR)
        painter.setFont(self.style.message_qfont())
        painter.drawText(rect, Qt.AlignCenter, text)


class VideoSurface(QVideoWidget):
    """Video output that pauses and resumes its player on click"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.player = None

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if self.player is not None and event.button() == Qt.LeftButton:
            if self.player.playbackState() == QMediaPlayer.PlaybackState.PlayingState:
                self.player.pause()
            else:
                self.player.play()
            event.accept()
            return
        super().mousePressEvent(event)


class SlideMedia(QObject):
    """Playback handle for the video or audio slide on screen"""

    def __init__(self, slide: MediaSlide, session: PlayerSession, video_surface: Optional[VideoSurface],
                 parent=None):
        super().__init__(parent)
        self.slide = slide
        self.session = session
        self.is_video = slide.type == SlideType.VIDEO

        self.audio_output = QAudioOutput(self)
        self.audio_output.setMuted(session.state.muted)
        self.player = QMediaPlayer(self)
        self.player.setAudioOutput(self.audio_output)
        if self.is_video and video_surface is not None:
            self.player.setVideoOutput(video_surface)
            video_surface.player = self.player

        self.player.playbackStateChanged.connect(self.on_playback_state)
        self.player.mediaStatusChanged.connect(self.on_media_status)
        self.player.errorOccurred.connect(self.on_error)
        session.mutedChanged.connect(self.audio_output.setMuted)
        self.player.setSource(slide.media.qurl)

    def play(self) -> None:
        self.player.play()

    def release(self) -> None:
        """Stop playback and detach from the session"""
        self.session.mutedChanged.disconnect(self.audio_output.setMuted)
        self.player.playbackStateChanged.disconnect(self.on_playback_state)
        self.player.mediaStatusChanged.disconnect(self.on_media_status)
        self.player.stop()
        self.player.setVideoOutput(None)
        self.deleteLater()

    def on_playback_state(self, state) -> None:
        if not self.is_video:
            return
        if state == QMediaPlayer.PlaybackState.PlayingState:
            self.session.video_started(self.player)
        elif state == QMediaPlayer.PlaybackState.PausedState:
            self.session.video_paused()

    def on_media_status(self, status) -> None:
        if status != QMediaPlayer.MediaStatus.EndOfMedia:
            return
        if self.is_video:
            self.session.video_ended()
        else:
            self.session.audio_ended()

    def on_error(self, error, message: str) -> None:
        log.error("Playback failed for %s: %s", self.slide.media.name, message or error)
        if self.is_video:
            self.session.video_paused()


class SlideshowWidget(QWidget):
    """Stage that paints the background, slides, transitions and progress bar"""

    def __init__(self, session: PlayerSession, style: SlideStyle, parent=None):
        super().__init__(parent)
        self.session = session
        self.style = style
        self.renderer = SlideRenderer(style)
        self.transition_mgr = TransitionManager(session.transition, self)

        self.current_pixmap = None
        self.in_transition = False
        self.media = None

        # Animation timer
        self.animation_clock = QElapsedTimer()
        self.animation_timer = QTimer(self)
        self.animation_timer.timeout.connect(self.update_animation)

        self.video_surface = VideoSurface(self)
        self.video_surface.hide()

        self.setMouseTracking(True)
        session.slideChanged.connect(self.show_slide)
        session.progressChanged.connect(lambda _: self.update())

    def content_rect(self) -> QRectF:
        return QRectF(self.rect()).adjusted(CONTENT_MARGIN, CONTENT_MARGIN,
                                            -CONTENT_MARGIN, -CONTENT_MARGIN)

    def show_slide(self, index: int) -> None:
        """Switch to a slide, animating out the previous one"""
        self.release_media()
        slide = self.session.slides[index]
        next_pixmap = self.renderer.render(slide, self.size())

        self.transition_mgr.set_images(self.current_pixmap, next_pixmap)
        self.current_pixmap = next_pixmap
        self.start_transition()

    def start_transition(self) -> None:
        """Start the transition animation"""
        self.in_transition = True
        self.animation_clock.start()
        self.animation_timer.start(FRAME_INTERVAL)
        self.update()

    def update_animation(self) -> None:
        """Update the animation progress"""
        if self.animation_clock.elapsed() / 1000.0 >= self.transition_mgr.total_time:
            self.finish_transition()
        self.update()

    def finish_transition(self) -> None:
        self.animation_timer.stop()
        self.in_transition = False
        self.start_media()

    def start_media(self) -> None:
        """Attach a player to a video or audio slide once it is fully shown"""
        slide = self.session.current_slide
        if not isinstance(slide, MediaSlide) or slide.type == SlideType.IMAGE:
            return
        is_video = slide.type == SlideType.VIDEO
        if is_video:
            self.video_surface.setGeometry(self.content_rect().toRect())
            self.video_surface.show()
        self.media = SlideMedia(slide, self.session, self.video_surface if is_video else None, self)
        self.media.play()

    def release_media(self) -> None:
        if self.media is not None:
            self.media.release()
            self.media = None
        self.video_surface.hide()
        self.video_surface.player = None

    def stop(self) -> None:
        """Stop animations and media playback"""
        self.animation_timer.stop()
        self.in_transition = False
        self.release_media()
        self.renderer.clear_cache()

    def paintEvent(self, event) -> None:
        """Paint the widget"""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)

        rect = QRectF(self.rect())
        painter.fillRect(rect, self.style.background_brush(rect))

        if self.in_transition:
            elapsed = self.animation_clock.elapsed() / 1000.0
            self.transition_mgr.draw(painter, rect, elapsed)
        elif self.current_pixmap is not None and not self.video_surface.isVisible():
            painter.drawPixmap(0, 0, self.current_pixmap)

        self.draw_progress(painter, rect)

    def draw_progress(self, painter: QPainter, rect: QRectF) -> None:
        """One segment per slide across the top edge"""
        count = len(self.session.slides)
        segment = rect.width() / count
        current = self.session.state.index
        painter.fillRect(QRectF(0, 0, rect.width(), PROGRESS_BAR_HEIGHT), QColor(0, 0, 0, 51))
        for i in range(count):
            track = QRectF(i * segment + 1, 0, segment - 2, PROGRESS_BAR_HEIGHT)
            painter.fillRect(track, QColor(255, 255, 255, 77))
            if i < current:
                fill = 1.0
            elif i == current:
                fill = self.session.state.progress / 100.0
            else:
                fill = 0.0
            if fill > 0:
                painter.fillRect(QRectF(track.x(), 0, track.width() * fill, PROGRESS_BAR_HEIGHT),
                                 QColor('white'))

    def resizeEvent(self, event) -> None:
        """Handle resize events"""
        super().resizeEvent(event)
        # Clear cache when window is resized
        self.renderer.clear_cache()
        if self.session.is_open:
            self.current_pixmap = self.renderer.render(self.session.current_slide, self.size())
            if self.in_transition:
                self.transition_mgr.set_images(None, self.current_pixmap)
        if self.video_surface.isVisible():
            self.video_surface.setGeometry(self.content_rect().toRect())

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Left click for next slide, right click for previous"""
        if event.button() == Qt.LeftButton:
            self.session.next_slide()
        elif event.button() == Qt.RightButton:
            self.session.previous_slide()
        else:
            super().mousePressEvent(event)


class ControlsOverlay(QObject):
    """Buttons, slide indicators and key legend drawn over the stage"""

    def __init__(self, session: PlayerSession, stage: QWidget, legend, parent=None):
        super().__init__(parent)
        self.session = session
        self.stage = stage

        self.restart_button = self.make_button("⟲", session.restart)
        self.play_button = self.make_button("❚❚", session.toggle_play)
        self.mute_button = self.make_button("🔊", session.toggle_mute)
        self.close_button = self.make_button("✕", session.close)
        self.prev_button = self.make_button("‹", session.previous_slide)
        self.next_button = self.make_button("›", session.next_slide)

        self.action_bar = QWidget(stage)
        layout = QHBoxLayout(self.action_bar)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)
        for button in (self.restart_button, self.play_button, self.mute_button, self.close_button):
            button.setParent(self.action_bar)
            layout.addWidget(button)

        self.indicators = []
        for i in range(len(session.slides)):
            dot = QPushButton(stage)
            dot.setFixedSize(12, 12)
            dot.setFocusPolicy(Qt.NoFocus)
            dot.setCursor(Qt.PointingHandCursor)
            dot.clicked.connect(lambda checked=False, index=i: session.go_to_slide(index))
            self.indicators.append(dot)

        self.legend = QLabel("\n".join(legend), stage)
        self.legend.setStyleSheet(LEGEND_STYLE)

        session.playingChanged.connect(self.update_play_button)
        session.mutedChanged.connect(self.update_mute_button)
        session.slideChanged.connect(self.update_indicators)
        session.controlsVisibilityChanged.connect(self.set_visible)

        self.update_indicators(session.state.index)
        stage.installEventFilter(self)

    def eventFilter(self, watched, event) -> bool:
        if watched is self.stage and event.type() == QEvent.Resize:
            self.reposition()
        return False

    def make_button(self, text: str, action) -> QPushButton:
        button = QPushButton(text, self.stage)
        button.setFixedSize(44, 44)
        button.setFocusPolicy(Qt.NoFocus)
        button.setCursor(Qt.PointingHandCursor)
        button.setStyleSheet(BUTTON_STYLE)
        button.clicked.connect(action)
        return button

    def widgets(self):
        return [self.action_bar, self.legend, self.prev_button, self.next_button] + self.indicators

    def reposition(self) -> None:
        """Position everything against the stage edges"""
        width = self.stage.width()
        height = self.stage.height()

        self.action_bar.adjustSize()
        self.action_bar.move(width - self.action_bar.width() - 16, 16)

        self.prev_button.move(16, (height - self.prev_button.height()) // 2)
        self.next_button.move(width - self.next_button.width() - 16, (height - self.next_button.height()) // 2)

        count = len(self.indicators)
        if count > 1:
            span = width - 64 - 12
            for i, dot in enumerate(self.indicators):
                dot.move(32 + int(span * i / (count - 1)), height - 28)

        self.legend.adjustSize()
        self.legend.move(16, height - self.legend.height() - 48)

    def update_play_button(self, playing: bool) -> None:
        self.play_button.setText("❚❚" if playing else "▶")

    def update_mute_button(self, muted: bool) -> None:
        self.mute_button.setText("🔇" if muted else "🔊")

    def update_indicators(self, index: int) -> None:
        for i, dot in enumerate(self.indicators):
            dot.setStyleSheet(INDICATOR_STYLE % (255 if i == index else 128))

    def set_visible(self, visible: bool) -> None:
        """Show or hide every control together"""
        for widget in self.widgets():
            widget.setVisible(visible)
        self.stage.setCursor(Qt.ArrowCursor if visible else Qt.BlankCursor)


class SlideshowWindow(QMainWindow):
    """Main window for a capsule slideshow"""

    def __init__(self, session: PlayerSession, style: SlideStyle, config: dict):
        super().__init__()
        self.session = session
        self.style = style
        self.config = config
        self.is_fullscreen = False

        self.init_ui()

        session.slideChanged.connect(self.update_status)
        session.playingChanged.connect(self.update_status)
        session.closed.connect(self.close)

    def init_ui(self) -> None:
        """Initialize the user interface"""
        self.setWindowTitle(self.config.get('title') or "Capsule Slideshow")

        # Set a reasonable initial size that's not too large
        self.resize(INITIAL_WINDOW_WIDTH, INITIAL_WINDOW_HEIGHT)

        self.slideshow_widget = SlideshowWidget(self.session, self.style, self)
        self.setCentralWidget(self.slideshow_widget)
        self.controls = ControlsOverlay(self.session, self.slideshow_widget,
                                        ["← → Navigate", "Space Play/Pause", "M Mute", "Esc Exit"], self)

        self.statusBar().showMessage("Press 'F' for fullscreen, 'ESC' to quit")

        # Pointer movement over any child must reach the input controller
        self.setMouseTracking(True)
        for child in self.findChildren(QWidget):
            child.setMouseTracking(True)

        # Set focus policy to accept keyboard events
        self.setFocusPolicy(Qt.StrongFocus)

    def start(self) -> None:
        """Open the session and show the window"""
        self.session.open()
        self.controls.set_visible(True)
        self.slideshow_widget.show_slide(self.session.state.index)
        self.update_status()

        if self.config.get('windowed'):
            self.toggle_fullscreen(False)
        else:
            self.move_to_monitor()
            self.toggle_fullscreen(True)

    def move_to_monitor(self) -> None:
        """Move the window to the selected monitor"""
        screens = QGuiApplication.screens()
        if not screens:
            return

        # Validate monitor index
        monitor_index = self.config.get('monitor', 0)
        if monitor_index >= len(screens):
            log.warning("Monitor %d not available. Using primary monitor.", monitor_index)
            monitor_index = 0

        # Move and resize window to fill the screen
        self.setGeometry(screens[monitor_index].geometry())

    def toggle_fullscreen(self, fullscreen: bool = None) -> None:
        """Toggle fullscreen mode"""
        if fullscreen is None:
            fullscreen = not self.is_fullscreen

        if fullscreen:
            self.showFullScreen()
            self.statusBar().hide()
        else:
            self.showNormal()
            self.statusBar().show()

        self.is_fullscreen = fullscreen

    def update_status(self, *args) -> None:
        """Show the slide number in the status bar"""
        state = self.session.state
        slide = self.session.current_slide
        label = slide.media.name if isinstance(slide, MediaSlide) else slide.type.value.capitalize()
        if len(label) > 30:
            label = label[:27] + "..."
        paused = "" if state.playing else " (paused)"
        self.statusBar().showMessage(f"Slide {state.index + 1} of {len(self.session.slides)}: {label}{paused}")

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Handle keys the input controller does not bind"""
        if event.key() == Qt.Key_F:
            self.toggle_fullscreen()
        else:
            super().keyPressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        """Handle mouse double-click events"""
        if event.button() == Qt.LeftButton:
            self.toggle_fullscreen()

    def closeEvent(self, event) -> None:
        """Handle window close event"""
        self.slideshow_widget.stop()
        self.session.close()
        event.accept()
