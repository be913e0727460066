"""Main timer card.

Layout (top → bottom):
    - State label
    - Big clock (session elapsed while working, break left on a break)
    - Bank / today / cycles summary
    - Break progress bar (only during a break)
    - Button row: Start Work, Take Break, Pause, Reset
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QProgressBar,
)

from ..timer.engine import TimerEngine, TimerState
from ..timer.ledger import Ledger
from .styles import STATE_COLORS


STATE_LABELS: dict[TimerState, str] = {
    TimerState.IDLE:    "READY",
    TimerState.WORKING: "WORKING",
    TimerState.BREAK:   "ON BREAK",
}


def format_time(seconds: int) -> str:
    """``H:MM:SS`` from one hour up, ``M:SS`` below."""
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class TimerWidget(QWidget):
    """The timer card shown in the main window."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._state_label = QLabel(card)
        self._state_label.setObjectName("stateLabel")
        self._state_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._state_label)

        self._clock_label = QLabel("0:00", card)
        self._clock_label.setObjectName("clockLabel")
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock_label)

        self._bank_label = QLabel(card)
        self._bank_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._bank_label)

        self._stats_label = QLabel(card)
        self._stats_label.setObjectName("statLabel")
        self._stats_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._stats_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._work_btn = QPushButton("Start Work", card)
        self._work_btn.setObjectName("primaryButton")

        self._break_btn = QPushButton("Take Break", card)

        self._pause_btn = QPushButton("Pause", card)
        self._pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)

        for btn in (self._work_btn, self._break_btn, self._pause_btn, self._reset_btn):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._work_btn.clicked.connect(self._engine.start_work)
        self._break_btn.clicked.connect(self._engine.start_break)
        self._pause_btn.clicked.connect(self._engine.pause)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.tick.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.ledger_changed.connect(self._on_ledger_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        self._state_label.setText(STATE_LABELS[state])
        self._clock_label.setStyleSheet(f"color: {STATE_COLORS[state]};")

        idle = state is TimerState.IDLE
        self._work_btn.setVisible(idle)
        self._break_btn.setVisible(idle)
        self._pause_btn.setVisible(not idle)
        self._reset_btn.setVisible(not idle)
        self._progress.setVisible(state is TimerState.BREAK)

        self._on_ledger_changed(self._engine.ledger)
        self._refresh_display(self._engine.elapsed)

    def _on_ledger_changed(self, ledger: Ledger) -> None:
        self._break_btn.setEnabled(ledger.break_time > 0)
        self._stats_label.setText(
            f"Today {format_time(ledger.total_work_today)}"
            f"  ·  Cycles {ledger.cycle_count}"
        )

    def _refresh_display(self, elapsed: int) -> None:
        state = self._engine.state
        if state is TimerState.BREAK:
            self._clock_label.setText(format_time(self._engine.break_remaining))
        else:
            self._clock_label.setText(format_time(elapsed))

        self._bank_label.setText(f"Break bank {format_time(self._engine.display_break)}")
        self._progress.setValue(round(self._engine.percent_complete * 1000))
