"""Tests for the player session lifecycle."""

import pytest
from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent

from capsule_slideshow.audio import BASE_VOLUME, DUCK_RATIO
from capsule_slideshow.session import PlayerSession
from capsule_slideshow.transitions import get_transition_variants
from tests.helpers import FakeVideo

pytestmark = pytest.mark.usefixtures("qapp")


@pytest.fixture
def session(mixed_slides, fake_track, music):
    session = PlayerSession(mixed_slides, transition_effect='spiral', transition_speed='fast',
                            background_music=music, track_factory=fake_track)
    session.open()
    yield session
    session.close()


def press(qapp, key):
    qapp.sendEvent(qapp, QKeyEvent(QEvent.KeyPress, key, Qt.NoModifier))


def test_open_starts_everything(session, fake_track):
    assert session.is_open
    assert session.state.index == 0
    assert session.state.playing
    assert session.timing.is_running
    assert session.input.active
    assert fake_track.instances[0].play_count == 1


def test_transition_is_resolved_once(session):
    assert session.transition is get_transition_variants('spiral', 'fast')


def test_escape_closes_exactly_once(session, qapp, qtbot, fake_track):
    closed = []
    session.closed.connect(lambda: closed.append(True))

    press(qapp, Qt.Key_Escape)
    press(qapp, Qt.Key_Escape)
    session.close()

    assert closed == [True]
    assert not session.timing.is_running
    assert not session.input.active
    assert fake_track.instances[0].stopped


def test_keys_do_nothing_after_close(session, qapp):
    session.close()
    press(qapp, Qt.Key_Right)
    press(qapp, Qt.Key_Space)
    press(qapp, Qt.Key_M)
    assert session.state.index == 0
    assert session.state.playing
    assert not session.state.muted


def test_keyboard_navigation(session, qapp):
    press(qapp, Qt.Key_Right)
    assert session.state.index == 1
    press(qapp, Qt.Key_Left)
    press(qapp, Qt.Key_Left)
    assert session.state.index == len(session.slides) - 1


def test_space_toggles_play(session, qapp):
    press(qapp, Qt.Key_Space)
    assert not session.state.playing
    assert not session.timing.is_running
    press(qapp, Qt.Key_Space)
    assert session.state.playing


def test_mute_toggles_music(session, qapp, fake_track):
    track = fake_track.instances[0]
    press(qapp, Qt.Key_M)
    assert session.state.muted and track.is_muted()
    press(qapp, Qt.Key_M)
    assert not session.state.muted and not track.is_muted()


def test_mute_signal(session, qtbot):
    with qtbot.waitSignal(session.mutedChanged) as blocker:
        session.toggle_mute()
    assert blocker.args == [True]


def test_video_slide_ducks_music(session):
    session.go_to_slide(2)
    session.video_started(FakeVideo())
    assert session.audio.volume == pytest.approx(BASE_VOLUME * DUCK_RATIO)

    session.next_slide()
    assert session.current_slide.type.value == 'audio'
    assert session.audio.volume == pytest.approx(BASE_VOLUME)


def test_video_end_completes_slide(session):
    session.go_to_slide(2)
    session.video_started(FakeVideo())
    session.video_ended()
    assert session.state.progress == 100
    assert session.audio.volume == pytest.approx(BASE_VOLUME)
    session.timing.tick()
    assert session.state.index == 3


def test_audio_end_moves_on(session):
    session.go_to_slide(3)
    session.audio_ended()
    assert session.state.index == 4


def test_restart(session, fake_track):
    session.go_to_slide(3)
    session.toggle_play()
    session.restart()
    assert session.state.index == 0
    assert session.state.playing
    assert fake_track.instances[0].rewound


def test_controls_visibility_is_tracked(session):
    session.input.hide_controls()
    assert session.state.controls_visible is False
    session.pointer_moved()
    assert session.state.controls_visible is True


def test_session_without_music(mixed_slides, fake_track):
    session = PlayerSession(mixed_slides, track_factory=fake_track)
    session.open()
    session.close()
    assert fake_track.instances == []


def test_reopen_starts_from_first_slide(session):
    session.go_to_slide(3)
    session.close()
    session.open()
    assert session.state.index == 0
    assert session.state.progress == 0
    assert session.timing.is_running


def test_reopen_after_pause_reports_playing(session, qtbot):
    session.toggle_play()
    session.close()
    with qtbot.waitSignal(session.playingChanged) as blocker:
        session.open()
    assert blocker.args == [True]
    assert session.state.playing
    assert session.timing.is_running
