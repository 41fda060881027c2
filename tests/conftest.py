import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from capsule_slideshow.media import BackgroundMusic
from capsule_slideshow.slides import build_slides
from tests.helpers import FakeTrack, make_media


@pytest.fixture
def fake_track():
    FakeTrack.instances = []
    yield FakeTrack
    FakeTrack.instances = []


@pytest.fixture
def music():
    return BackgroundMusic(url="https://example.com/theme.mp3", title="Theme", genre="piano", id="m1")


@pytest.fixture
def mixed_slides():
    media = [make_media('image', 'a.jpg'), make_media('video', 'b.mp4'), make_media('audio', 'c.mp3')]
    return build_slides("Sophie's 10th Birthday", "Happy Birthday!", "Mom", media, "March 1, 2025")
