"""Raw tty key decoding.

Turns bytes from a raw-mode terminal into string tokens: printable text,
named keys (``UP``, ``PGDN``, ``ENTER``...), and SGR mouse events formatted as
``MOUSE_<KIND>:<col>:<row>`` with 1-based coordinates.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "5": "PGUP",
    "6": "PGDN",
    "7": "HOME",
    "8": "END",
}

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x15": "CTRL_U",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
}


def _read_byte(fd: int, timeout_ms: int | None = None) -> bytes:
    if timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return b""
    return os.read(fd, 1)


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_sgr_mouse(fd: int) -> str:
    """Decode ``ESC [ < btn ; col ; row (M|m)`` after the ``<`` byte."""
    payload: list[bytes] = []
    while True:
        part = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if not part:
            return "ESC"
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return "ESC"
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return "ESC"
    if btn == 64:
        return f"MOUSE_WHEEL_UP:{col}:{row}"
    if btn == 65:
        return f"MOUSE_WHEEL_DOWN:{col}:{row}"
    if btn & 0b11 == 0 and not btn & 32:
        suffix = "DOWN" if part == b"M" else "UP"
        return f"MOUSE_LEFT_{suffix}:{col}:{row}"
    return "MOUSE"


def _decode_escape(fd: int) -> str:
    seq = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq not in {b"[", b"O"}:
        return "ESC"
    final = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if not final:
        return "ESC"
    if final in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[final]
    if seq == b"[" and final == b"<":
        return _decode_sgr_mouse(fd)
    if seq == b"[" and final.isdigit():
        digits = [final.decode("ascii")]
        while True:
            part = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if not part:
                return "ESC"
            if part == b"~":
                return _CSI_TILDE_KEYS.get("".join(digits), "ESC")
            if not part.isdigit() and part != b";":
                return "ESC"
            digits.append(part.decode("ascii"))
            if len(digits) > 8:
                return "ESC"
    return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; return ``""`` on timeout or EOF."""
    ch = _read_byte(fd, timeout_ms)
    if not ch:
        return ""
    if ch == b"\x1b":
        return _decode_escape(fd)
    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    data = bytearray(ch)
    for _ in range(_utf8_length(ch[0]) - 1):
        part = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if not part:
            break
        data.extend(part)
    return data.decode("utf-8", errors="replace")
