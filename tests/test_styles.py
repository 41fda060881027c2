"""Tests for capsule styling."""

import pytest
from PySide6.QtCore import QRectF
from PySide6.QtGui import QLinearGradient, QRadialGradient

from capsule_slideshow.styles import SlideStyle, text_pixel_size

pytestmark = pytest.mark.usefixtures("qapp")

RECT = QRectF(0, 0, 400, 200)


@pytest.mark.parametrize("classes,expected", [
    ("text-4xl", 36),
    ("text-lg", 18),
    ("text-3xl md:text-5xl", 48),
    ("font-bold text-gray-800 text-xl", 20),
    ("", 16),
    ("text-huge", 16),
])
def test_text_pixel_size(classes, expected):
    assert text_pixel_size(classes) == expected


def test_solid_background():
    style = SlideStyle(background_color="#ff0000")
    assert style.background_gradient(RECT) is None
    assert style.background_brush(RECT).color().name() == "#ff0000"


def test_invalid_color_falls_back():
    brush = SlideStyle(background_color="not-a-color").background_brush(RECT)
    assert brush.color().isValid()


@pytest.mark.parametrize("direction,start,end", [
    ("to-b", (0, 0), (0, 200)),
    ("to-r", (0, 0), (400, 0)),
    ("to-br", (0, 0), (400, 200)),
    ("to-bl", (400, 0), (0, 200)),
    ("diagonal", (0, 0), (0, 200)),
])
def test_linear_gradients(direction, start, end):
    style = SlideStyle(background_type="gradient", gradient_direction=direction,
                       background_color="#ffffff", secondary_color="#000000")
    gradient = style.background_gradient(RECT)
    assert isinstance(gradient, QLinearGradient)
    assert (gradient.start().x(), gradient.start().y()) == start
    assert (gradient.finalStop().x(), gradient.finalStop().y()) == end
    assert gradient.stops()[0][1].name() == "#ffffff"
    assert gradient.stops()[-1][1].name() == "#000000"


def test_radial_gradient():
    style = SlideStyle(background_type="gradient", gradient_direction="radial")
    gradient = style.background_gradient(RECT)
    assert isinstance(gradient, QRadialGradient)
    assert gradient.radius() == 200


def test_fonts_follow_style():
    style = SlideStyle(title_font="Courier", title_size="text-5xl", message_size="text-sm")
    assert style.title_qfont().pixelSize() == 48
    assert style.title_qfont().bold()
    assert style.message_qfont().pixelSize() == 14
