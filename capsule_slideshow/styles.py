"""Colors, fonts and text sizes chosen for a capsule"""

import re
from dataclasses import dataclass

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QBrush, QColor, QFont, QLinearGradient, QRadialGradient

DEFAULT_FONT = 'Georgia'
DEFAULT_TITLE_SIZE = 'text-4xl'
DEFAULT_MESSAGE_SIZE = 'text-lg'
DEFAULT_BACKGROUND = '#fdf2f8'
DEFAULT_SECONDARY = '#fce7f3'

# Tailwind text size classes in pixels
TEXT_SIZES = {
    'text-xs': 12,
    'text-sm': 14,
    'text-base': 16,
    'text-lg': 18,
    'text-xl': 20,
    'text-2xl': 24,
    'text-3xl': 30,
    'text-4xl': 36,
    'text-5xl': 48,
    'text-6xl': 60,
    'text-7xl': 72,
    'text-8xl': 96,
    'text-9xl': 128,
}

_SIZE_CLASS = re.compile(r'(?:^|:)(text-(?:xs|sm|base|lg|[2-9]?xl))$')

# Gradient directions as (start, end) points on a unit square
GRADIENT_DIRECTIONS = {
    'to-b': ((0.0, 0.0), (0.0, 1.0)),
    'to-r': ((0.0, 0.0), (1.0, 0.0)),
    'to-br': ((0.0, 0.0), (1.0, 1.0)),
    'to-bl': ((1.0, 0.0), (0.0, 1.0)),
}
DEFAULT_GRADIENT_DIRECTION = 'to-b'


def text_pixel_size(size_classes: str, default: int = TEXT_SIZES['text-base']) -> int:
    """Pixel size for a string of Tailwind classes; the last size class wins"""
    size = default
    for token in (size_classes or '').split():
        match = _SIZE_CLASS.search(token)
        if match:
            size = TEXT_SIZES[match.group(1)]
    return size


@dataclass(frozen=True)
class SlideStyle:
    title_font: str = DEFAULT_FONT
    message_font: str = DEFAULT_FONT
    title_size: str = DEFAULT_TITLE_SIZE
    message_size: str = DEFAULT_MESSAGE_SIZE
    background_color: str = DEFAULT_BACKGROUND
    background_type: str = 'solid'  # solid or gradient
    gradient_direction: str = DEFAULT_GRADIENT_DIRECTION
    secondary_color: str = DEFAULT_SECONDARY

    def title_qfont(self, scale: float = 1.0) -> QFont:
        font = QFont(self.title_font)
        font.setPixelSize(max(1, round(text_pixel_size(self.title_size) * scale)))
        font.setBold(True)
        return font

    def message_qfont(self, scale: float = 1.0, pixel_size: int = None) -> QFont:
        font = QFont(self.message_font)
        size = pixel_size if pixel_size is not None else text_pixel_size(self.message_size)
        font.setPixelSize(max(1, round(size * scale)))
        return font

    def background_brush(self, rect: QRectF) -> QBrush:
        """Brush painting the slide background across ``rect``"""
        gradient = self.background_gradient(rect)
        if gradient is None:
            return QBrush(_color(self.background_color, DEFAULT_BACKGROUND))
        return QBrush(gradient)

    def background_gradient(self, rect: QRectF):
        """Gradient for a gradient background, or None for a solid one"""
        if self.background_type != 'gradient':
            return None

        primary = _color(self.background_color, DEFAULT_BACKGROUND)
        secondary = _color(self.secondary_color, DEFAULT_SECONDARY)
        if self.gradient_direction == 'radial':
            radius = max(rect.width(), rect.height()) / 2
            gradient = QRadialGradient(rect.center(), radius)
        else:
            start, end = GRADIENT_DIRECTIONS.get(self.gradient_direction,
                                                 GRADIENT_DIRECTIONS[DEFAULT_GRADIENT_DIRECTION])
            gradient = QLinearGradient(_point(rect, start), _point(rect, end))
        gradient.setColorAt(0.0, primary)
        gradient.setColorAt(1.0, secondary)
        return gradient


def _color(value: str, fallback: str) -> QColor:
    color = QColor(value)
    if not color.isValid():
        color = QColor(fallback)
    return color


def _point(rect: QRectF, unit: tuple) -> QPointF:
    return QPointF(rect.left() + rect.width() * unit[0], rect.top() + rect.height() * unit[1])
