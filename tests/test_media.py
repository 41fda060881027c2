"""Tests for media classification and loading."""

import pytest

from capsule_slideshow.media import (BackgroundMusic, MediaFile, MediaType, classify_media,
                                     load_media_folder, media_from_paths)


@pytest.fixture
def media_folder(tmp_path):
    for name in ("b.jpg", "a.PNG", "c.mp4", "d.mp3", "notes.txt"):
        (tmp_path / name).write_bytes(b"x" * 10)
    return tmp_path


@pytest.mark.parametrize("name,expected", [
    ("photo.jpg", MediaType.IMAGE),
    ("photo.JPEG", MediaType.IMAGE),
    ("clip.mov", MediaType.VIDEO),
    ("song.m4a", MediaType.AUDIO),
    ("readme.md", None),
])
def test_classify_media(name, expected):
    assert classify_media(name) is expected


def test_from_path(media_folder):
    media = MediaFile.from_path(media_folder / "c.mp4")
    assert media.type is MediaType.VIDEO
    assert media.name == "c.mp4"
    assert media.size == 10
    assert media.url.startswith("file://")
    assert media.handle == media_folder / "c.mp4"


def test_from_path_rejects_unsupported(media_folder):
    with pytest.raises(ValueError):
        MediaFile.from_path(media_folder / "notes.txt")


def test_ids_are_unique(media_folder):
    first = MediaFile.from_path(media_folder / "b.jpg")
    second = MediaFile.from_path(media_folder / "b.jpg")
    assert first.id != second.id


def test_from_url_guesses_type():
    media = MediaFile.from_url("https://cdn.example.com/capsules/42/beach.webm")
    assert media.type is MediaType.VIDEO
    assert media.name == "beach.webm"
    assert media.handle is None


def test_from_url_needs_a_type():
    with pytest.raises(ValueError):
        MediaFile.from_url("https://cdn.example.com/stream")
    assert MediaFile.from_url("https://cdn.example.com/stream", "audio").type is MediaType.AUDIO


def test_load_folder_sorted(media_folder):
    names = [m.name for m in load_media_folder(media_folder)]
    assert names == ["a.PNG", "b.jpg", "c.mp4", "d.mp3"]


def test_load_folder_shuffled_has_same_files(media_folder):
    names = sorted(m.name for m in load_media_folder(media_folder, shuffle=True))
    assert names == ["a.PNG", "b.jpg", "c.mp4", "d.mp3"]


def test_load_missing_folder(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_media_folder(tmp_path / "missing")


def test_media_from_paths_skips_bad_entries(media_folder, caplog):
    media = media_from_paths([media_folder / "d.mp3", media_folder / "notes.txt",
                              media_folder / "gone.jpg", media_folder / "b.jpg"])
    assert [m.name for m in media] == ["d.mp3", "b.jpg"]
    assert "notes.txt" in caplog.text
    assert "gone.jpg" in caplog.text


def test_background_music_from_file(media_folder):
    music = BackgroundMusic.from_location(str(media_folder / "d.mp3"))
    assert music.url.startswith("file://")
    assert music.title == "d"


def test_background_music_from_url():
    music = BackgroundMusic.from_location("https://example.com/tracks/calm.mp3", genre="ambient")
    assert music.url == "https://example.com/tracks/calm.mp3"
    assert music.title == "calm.mp3"
    assert music.genre == "ambient"
