"""Main application window for BreakBank.

The window is a presentation shell around ``TimerEngine``: it renders
state and wires the engine's outbound signals to the optional side
channels (beep, tray notification, wake lock, dark display mode).  A
failure in any side channel is logged and otherwise ignored.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QIcon, QImage, QPainter, QColor, QPen, QPixmap, QKeySequence
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout,
    QStatusBar, QMessageBox, QSystemTrayIcon, QMenu,
)

from .timer.engine import TimerEngine, TimerState
from .ui.timer_widget import TimerWidget, format_time
from .ui.styles import build_stylesheet, palette_for
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager
from .platform.wake_lock import WakeLock

log = logging.getLogger(__name__)

BREAK_OVER_TITLE = "Break time is over!"
BREAK_OVER_BODY = "Time to get back to work!"

STATUS_MESSAGES: dict[TimerState, str] = {
    TimerState.IDLE:    "Ready when you are",
    TimerState.WORKING: "Working — earning break time",
    TimerState.BREAK:   "On break",
}


# ── tray‑icon image generation ────────────────────────────────────────────


def _make_tray_icon(state: TimerState) -> QIcon:
    """Generate a monochrome template icon for the macOS menu bar.

    - IDLE:     thin circle outline
    - WORKING:  filled circle
    - BREAK:    circle outline with a centre dot
    """
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)

    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if state == TimerState.WORKING:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        if state == TimerState.BREAK:
            p.setPen(Qt.PenStyle.NoPen)
            p.setBrush(colour)
            dot_r = 6
            p.drawEllipse(cx - dot_r, cy - dot_r, dot_r * 2, dot_r * 2)

    p.end()
    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class BreakBankApp(QMainWindow):
    """Main application window."""

    def __init__(self, engine: TimerEngine | None = None) -> None:
        super().__init__()
        self.setWindowTitle("BreakBank")
        self.setMinimumSize(380, 420)

        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = load_settings()

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = engine or TimerEngine(self, db_enabled=True)

        # ── side channels ─────────────────────────────────────────────
        self._sound_manager: SoundManager | None = None
        try:
            self._sound_manager = SoundManager(parent=self)
            self._sound_manager.set_volume(self._settings.sound_volume)
            self._sound_manager.set_enabled(self._settings.sound_enabled)
        except Exception:
            log.warning("Audio unavailable, break-over beep disabled", exc_info=True)
        self._wake_lock = WakeLock()

        # ── layout ────────────────────────────────────────────────────
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        self._timer_widget = TimerWidget(self._timer_engine, central)
        layout.addWidget(self._timer_widget)
        self.setCentralWidget(central)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

        # ── system tray icon ──────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(_make_tray_icon(TimerState.IDLE))
        self._tray_icon.setToolTip("BreakBank — Ready")
        self._tray_icon.activated.connect(self._on_tray_activated)
        self._build_tray_menu()
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        # ── wire signals ──────────────────────────────────────────────
        engine = self._timer_engine
        engine.state_changed.connect(self._on_state_changed)
        engine.tick.connect(self._on_tick)
        engine.break_expired.connect(self._on_break_expired)
        engine.break_rejected.connect(self._on_break_rejected)
        engine.entered_active_session.connect(self._on_entered_active_session)
        engine.exited_active_session.connect(self._on_exited_active_session)

        self._apply_display_mode(engine.is_active)
        self._on_state_changed(engine.state)

        self._restore_geometry()
        self._setup_shortcuts()

    # ══════════════════════════════════════════════════════════════════
    #  SIDE CHANNELS
    # ══════════════════════════════════════════════════════════════════

    def _play_sound(self, name: str) -> None:
        if self._sound_manager is None:
            return
        try:
            self._sound_manager.play(name)
        except Exception:
            log.warning("Could not play %s", name, exc_info=True)

    def _send_notification(self, title: str, body: str) -> None:
        """Show a desktop notification via the tray icon."""
        if not self._settings.notifications_enabled:
            return
        if not self._tray_icon.isVisible():
            return
        try:
            self._tray_icon.showMessage(title, body)
        except Exception:
            log.warning("Could not show notification", exc_info=True)

    def _apply_display_mode(self, active: bool) -> None:
        self.setStyleSheet(build_stylesheet(palette_for(active)))

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: TimerState) -> None:
        self._status_bar.showMessage(STATUS_MESSAGES[state])
        self._tray_icon.setIcon(_make_tray_icon(state))
        self._tray_toggle_action.setText("Start Work" if state == TimerState.IDLE else "Pause")
        self._tray_break_action.setEnabled(state == TimerState.IDLE)
        if state == TimerState.IDLE:
            self._tray_icon.setToolTip(
                f"BreakBank — {format_time(self._timer_engine.ledger.break_time)} banked"
            )

    def _on_tick(self, elapsed: int) -> None:
        state = self._timer_engine.state
        if state == TimerState.WORKING:
            self._tray_icon.setToolTip(f"BreakBank — Working {format_time(elapsed)}")
        elif state == TimerState.BREAK:
            left = format_time(self._timer_engine.break_remaining)
            self._tray_icon.setToolTip(f"BreakBank — Break {left} left")

    def _on_break_expired(self) -> None:
        self._play_sound("break_over")
        self._send_notification(BREAK_OVER_TITLE, BREAK_OVER_BODY)
        self._status_bar.showMessage(BREAK_OVER_BODY)

    def _on_break_rejected(self) -> None:
        self._status_bar.showMessage("No break time banked yet — work first!")

    def _on_entered_active_session(self) -> None:
        self._apply_display_mode(True)
        if self._settings.keep_awake:
            self._wake_lock.acquire()

    def _on_exited_active_session(self) -> None:
        self._apply_display_mode(False)
        self._wake_lock.release()

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        """Create the right-click context menu for the tray icon."""
        menu = QMenu(self)

        self._tray_toggle_action = menu.addAction("Start Work")
        self._tray_toggle_action.triggered.connect(self._timer_engine.toggle)

        self._tray_break_action = menu.addAction("Take Break")
        self._tray_break_action.triggered.connect(self._timer_engine.start_break)

        menu.addSeparator()

        show_action = menu.addAction("Show BreakBank")
        show_action.triggered.connect(self._show_window)

        menu.addSeparator()

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_with_confirm)

        self._tray_icon.setContextMenu(menu)

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Left-click on tray icon → show the window."""
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        self._timer_engine.shutdown()
        self._wake_lock.release()
        self._tray_icon.hide()
        QApplication.instance().quit()

    def _quit_with_confirm(self) -> None:
        """Quit, but ask first if a session is running."""
        if self._timer_engine.is_active:
            reply = QMessageBox.question(
                self,
                "Quit BreakBank?",
                "A session is still running and will not be saved. Quit anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return
        self._save_geometry()
        self._quit_app()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        try:
            save_settings(self._settings)
        except OSError:
            log.warning("Could not save settings", exc_info=True)

    def _schedule_geometry_save(self) -> None:
        """Save geometry once moves and resizes settle for 500 ms."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _setup_shortcuts(self) -> None:
        """Ctrl+B takes a break (Space/Esc handled via keyPressEvent)."""
        take_break = QAction("Take Break", self)
        take_break.setShortcut(QKeySequence("Ctrl+B"))
        take_break.triggered.connect(self._timer_engine.start_break)
        self.addAction(take_break)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Hide to the tray when there is one, otherwise quit."""
        self._save_geometry()
        if self._tray_icon.isVisible():
            event.ignore()
            self.hide()
        else:
            event.accept()
            self._quit_app()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space starts work or pauses; Escape abandons the session."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._timer_engine.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)
