"""Tests for timed slide advance."""

import pytest

from capsule_slideshow.slides import SlideType, build_slides
from capsule_slideshow.timing import (TICK_INTERVAL, PlaybackState, TimingDriver,
                                      slide_duration)
from tests.helpers import make_media

pytestmark = pytest.mark.usefixtures("qapp")


def make_driver(slides, base_duration=5000):
    driver = TimingDriver(slides, PlaybackState(), base_duration)
    driver.start()
    return driver


def ticks_for(milliseconds):
    return milliseconds // TICK_INTERVAL


@pytest.mark.parametrize("slide_type,expected", [
    (SlideType.TITLE, 5000),
    (SlideType.IMAGE, 5000),
    (SlideType.CLOSING, 5000),
    (SlideType.VIDEO, 15000),
    (SlideType.AUDIO, 10000),
])
def test_slide_duration_policy(slide_type, expected):
    assert slide_duration(slide_type, 5000) == expected


def test_starts_playing_on_first_slide(mixed_slides):
    driver = make_driver(mixed_slides)
    assert driver.state.index == 0
    assert driver.state.playing is True
    assert driver.state.progress == 0
    assert driver.is_running
    assert driver.tick_timer.interval() == TICK_INTERVAL


def test_title_slide_advances_after_base_duration(mixed_slides):
    driver = make_driver(mixed_slides)
    for _ in range(ticks_for(5000) - 1):
        driver.tick()
    assert driver.state.index == 0
    assert driver.state.progress == pytest.approx(98.0)

    driver.tick()
    assert driver.state.index == 1
    assert driver.state.progress == 0


def test_video_slide_waits_three_times_base_duration(mixed_slides):
    driver = make_driver(mixed_slides)
    driver.go_to(2)
    assert mixed_slides[2].type == SlideType.VIDEO

    for _ in range(ticks_for(15000) - 1):
        driver.tick()
    assert driver.state.index == 2

    driver.tick()
    assert driver.state.index == 3


def test_audio_slide_waits_twice_base_duration(mixed_slides):
    driver = make_driver(mixed_slides, base_duration=1000)
    driver.go_to(3)
    for _ in range(ticks_for(2000) - 1):
        driver.tick()
    assert driver.state.index == 3
    driver.tick()
    assert driver.state.index == 4


def test_auto_advance_wraps_to_first(mixed_slides):
    driver = make_driver(mixed_slides, base_duration=200)
    driver.go_to(len(mixed_slides) - 1)
    driver.tick()
    driver.tick()
    assert driver.state.index == 0


@pytest.mark.parametrize("start", range(5))
def test_next_wraps_around(mixed_slides, start):
    driver = make_driver(mixed_slides)
    driver.go_to(start)
    for _ in range(len(mixed_slides)):
        driver.next()
    assert driver.state.index == start


def test_previous_from_first_goes_to_last(mixed_slides):
    driver = make_driver(mixed_slides)
    driver.previous()
    assert driver.state.index == len(mixed_slides) - 1


def test_manual_navigation_resets_progress(mixed_slides):
    driver = make_driver(mixed_slides)
    for _ in range(10):
        driver.tick()
    assert driver.state.progress > 0

    driver.previous()
    assert driver.state.progress == 0
    for _ in range(10):
        driver.tick()
    driver.next()
    assert driver.state.progress == 0


def test_pause_keeps_progress_and_stops_timer(mixed_slides):
    driver = make_driver(mixed_slides)
    for _ in range(20):
        driver.tick()
    progress = driver.state.progress

    driver.toggle_play()
    assert driver.state.playing is False
    assert not driver.is_running
    assert driver.state.progress == progress

    driver.toggle_play()
    assert driver.state.playing is True
    assert driver.is_running
    driver.tick()
    assert driver.state.progress == pytest.approx(progress + 2.0)


def test_navigation_while_paused_stays_paused(mixed_slides):
    driver = make_driver(mixed_slides)
    driver.set_playing(False)
    driver.next()
    assert driver.state.index == 1
    assert not driver.is_running


def test_complete_advances_on_next_tick(mixed_slides):
    driver = make_driver(mixed_slides)
    driver.go_to(2)
    driver.tick()
    driver.complete()
    assert driver.state.progress == 100
    assert driver.state.index == 2

    driver.tick()
    assert driver.state.index == 3


def test_restart_plays_from_first_slide(mixed_slides):
    driver = make_driver(mixed_slides)
    driver.go_to(3)
    driver.set_playing(False)
    driver.restart()
    assert driver.state.index == 0
    assert driver.state.playing is True
    assert driver.state.progress == 0
    assert driver.is_running


def test_stop_tears_down_timer(mixed_slides):
    driver = make_driver(mixed_slides)
    driver.stop()
    assert not driver.is_running
    driver.next()
    assert not driver.is_running


def test_signals(mixed_slides, qtbot):
    driver = make_driver(mixed_slides)
    with qtbot.waitSignal(driver.slideChanged) as blocker:
        driver.next()
    assert blocker.args == [1]
    with qtbot.waitSignal(driver.playingChanged) as blocker:
        driver.toggle_play()
    assert blocker.args == [False]


def test_timer_drives_ticks(qtbot):
    slides = build_slides("T", "M", "S", [make_media('image')])
    driver = make_driver(slides, base_duration=300)
    with qtbot.waitSignal(driver.slideChanged, timeout=2000) as blocker:
        pass
    assert blocker.args == [1]


def test_rejects_empty_slides():
    with pytest.raises(ValueError):
        TimingDriver([], PlaybackState())


def test_rejects_non_positive_duration(mixed_slides):
    with pytest.raises(ValueError):
        TimingDriver(mixed_slides, PlaybackState(), 0)


def test_restart_while_playing_keeps_quiet(mixed_slides, qtbot):
    driver = make_driver(mixed_slides)
    driver.go_to(2)
    with qtbot.assertNotEmitted(driver.playingChanged):
        driver.restart()
    assert driver.state.index == 0


def test_restart_after_pause_reports_playing(mixed_slides, qtbot):
    driver = make_driver(mixed_slides)
    driver.set_playing(False)
    with qtbot.waitSignal(driver.playingChanged) as blocker:
        driver.restart()
    assert blocker.args == [True]
