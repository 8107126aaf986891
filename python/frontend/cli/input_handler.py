"""Single-keypress reader for the terminal frontend.

Keys are returned as action strings so the game loop never deals with
raw escape sequences.  Works on macOS / Linux (tty+termios+select) and
Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys

_KEY_MAP: dict[str, str] = {
    " ": "draw",
    "d": "draw",
    "D": "draw",
    "o": "open",
    "O": "open",
    "c": "cancel",
    "C": "cancel",
    "n": "hint",
    "N": "hint",
    "r": "restart",
    "R": "restart",
    "y": "yes",
    "Y": "yes",
    "h": "help",
    "?": "help",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string.

    Digits and other unmapped printable characters come back unchanged.
    """
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


# -- platform readers ----------------------------------------------------------


def _read_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return {"H": "up", "P": "down", "M": "right", "K": "left"}.get(
            msvcrt.getwch(), ""
        )
    if ch == "\x1b":
        return "quit"
    return _resolve(ch)


def _read_unix() -> str:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def _next(wait: float | None) -> str:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return ""
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        ch = _next(None)
        # Arrow keys arrive as ESC [ A/B/C/D; a lone ESC quits.
        if ch == "\x1b":
            if _next(0.1) != "[":
                return "quit"
            return _ARROW_MAP.get(_next(0.1), "")
        return _resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action string.

    Possible return values:
        "draw"                         space / d
        "open"                         o (select the open pile's top)
        "1".."4"                       holding columns
        "5".."8"                       collection slots
        "cancel"                       c (drop the current selection)
        "hint"                         n
        "restart"                      r
        "yes"                          y (confirm)
        "help"                         h / ?
        "quit"                         q / Ctrl-C / Escape
        "left", "right", "up", "down"  arrow keys
        "enter"                        Enter / Return
        ""                             unrecognised key
    """
    return _read()
