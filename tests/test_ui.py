"""Tests for the timer card and the main window's side-channel wiring."""

import pytest

from breakbank.app import BreakBankApp, BREAK_OVER_BODY
from breakbank.ui.styles import DARK_PALETTE, LIGHT_PALETTE
from breakbank.ui.timer_widget import TimerWidget, format_time
from breakbank.timer.engine import TimerState

from helpers import run_ticks, work_for


class TestFormatTime:

    @pytest.mark.parametrize("seconds, expected", [
        (0, "0:00"),
        (5, "0:05"),
        (65, "1:05"),
        (3599, "59:59"),
        (3600, "1:00:00"),
        (7325, "2:02:05"),
        (-10, "0:00"),
    ])
    def test_format(self, seconds, expected):
        assert format_time(seconds) == expected


class TestTimerWidget:

    def test_idle_buttons(self, engine_no_db):
        w = TimerWidget(engine_no_db)
        assert not w._work_btn.isHidden()
        assert not w._break_btn.isHidden()
        assert not w._break_btn.isEnabled()
        assert w._pause_btn.isHidden()

    def test_working_buttons(self, engine_no_db):
        w = TimerWidget(engine_no_db)
        engine_no_db.start_work()
        assert w._work_btn.isHidden()
        assert not w._pause_btn.isHidden()
        assert not w._reset_btn.isHidden()
        assert w._state_label.text() == "WORKING"

    def test_clock_shows_elapsed_while_working(self, engine_no_db, clock):
        w = TimerWidget(engine_no_db)
        engine_no_db.start_work()
        run_ticks(engine_no_db, clock, [65_000])
        assert w._clock_label.text() == "1:05"
        assert w._bank_label.text() == "Break bank 0:16"

    def test_clock_counts_down_on_break(self, engine_no_db, clock):
        w = TimerWidget(engine_no_db)
        work_for(engine_no_db, clock, 400)
        assert w._break_btn.isEnabled()
        engine_no_db.start_break()
        run_ticks(engine_no_db, clock, [30_000])
        assert w._clock_label.text() == "1:10"
        assert not w._progress.isHidden()
        assert w._progress.value() == 300


@pytest.fixture
def window(engine_no_db, tmp_path, monkeypatch):
    monkeypatch.setattr("breakbank.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("breakbank.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")

    class FakeWakeLock:
        def __init__(self):
            self.held = False

        def acquire(self):
            self.held = True
            return True

        def release(self):
            self.held = False

    monkeypatch.setattr("breakbank.app.WakeLock", FakeWakeLock)
    return BreakBankApp(engine=engine_no_db)


class TestMainWindow:

    def test_starts_in_light_mode(self, window):
        assert LIGHT_PALETTE["bg"] in window.styleSheet()

    def test_dark_mode_while_active(self, window, engine_no_db, clock):
        engine_no_db.start_work()
        assert DARK_PALETTE["bg"] in window.styleSheet()
        assert window._wake_lock.held
        clock.advance(400)
        engine_no_db.pause()
        assert LIGHT_PALETTE["bg"] in window.styleSheet()
        assert not window._wake_lock.held

    def test_break_expiry_plays_beep(self, window, engine_no_db, clock):
        played = []

        class FakeSounds:
            def play(self, name):
                played.append(name)

        window._sound_manager = FakeSounds()
        work_for(engine_no_db, clock, 400)
        engine_no_db.start_break()
        run_ticks(engine_no_db, clock, [100_000])
        assert played == ["break_over"]
        assert window._status_bar.currentMessage() == BREAK_OVER_BODY
        assert engine_no_db.state == TimerState.IDLE

    def test_broken_sound_does_not_stop_timer(self, window, engine_no_db, clock):
        class BrokenSounds:
            def play(self, name):
                raise RuntimeError("no audio device")

        window._sound_manager = BrokenSounds()
        work_for(engine_no_db, clock, 400)
        engine_no_db.start_break()
        run_ticks(engine_no_db, clock, [100_000])
        assert engine_no_db.state == TimerState.IDLE
        assert engine_no_db.ledger.break_time == 0
