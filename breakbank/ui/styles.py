"""QSS stylesheets and state colors for BreakBank.

The window is light while idle and switches to the dark palette for the
whole of an active session (work or break).
"""

from __future__ import annotations

from ..timer.engine import TimerState

# ── state accent colors ───────────────────────────────────────────────────

STATE_COLORS: dict[TimerState, str] = {
    TimerState.WORKING: "#FF6B6B",   # warm coral
    TimerState.BREAK:   "#4ECDC4",   # cool teal
    TimerState.IDLE:    "#7A7A9A",   # neutral
}

# ── palettes ──────────────────────────────────────────────────────────────

LIGHT_PALETTE: dict[str, str] = {
    "bg":           "#F5F5FA",
    "bg_secondary": "#E8E8F0",
    "accent":       "#7B68EE",
    "text":         "#1E1E2E",
    "text_muted":   "#6C6F85",
    "border":       "#CCD0DA",
}

DARK_PALETTE: dict[str, str] = {
    "bg":           "#11111B",
    "bg_secondary": "#1E1E2E",
    "accent":       "#CBA6F7",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "border":       "#313154",
}


def palette_for(active: bool) -> dict[str, str]:
    return dict(DARK_PALETTE if active else LIGHT_PALETTE)


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    /* ── buttons ────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 16px;
        padding: 12px 32px;
    }}

    /* ── labels ─────────────────────────────────── */
    QLabel#clockLabel {{
        font-size: 56px;
        font-weight: 700;
    }}

    QLabel#stateLabel {{
        color: {p['text_muted']};
        font-size: 13px;
        letter-spacing: 2px;
    }}

    QLabel#statLabel {{
        color: {p['text_muted']};
        font-size: 13px;
    }}

    /* ── break progress ─────────────────────────── */
    QProgressBar {{
        background-color: {p['bg_secondary']};
        border: none;
        border-radius: 4px;
        max-height: 8px;
    }}

    QProgressBar::chunk {{
        background-color: {p['accent']};
        border-radius: 4px;
    }}
    """
