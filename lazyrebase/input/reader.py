"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into key and mouse events.
Handles ESC-sequence timing, modifier combos, and SGR mouse reports.
"""

from __future__ import annotations

import os
import select

from .events import KeyEvent, KeyModifiers, MouseEvent, MouseKind

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "Up",
    b"B": "Down",
    b"C": "Right",
    b"D": "Left",
    b"H": "Home",
    b"F": "End",
    b"Z": "BackTab",
}
_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "Home",
    "2": "Insert",
    "3": "Delete",
    "4": "End",
    "5": "PageUp",
    "6": "PageDown",
    "7": "Home",
    "8": "End",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _xterm_modifiers(param: int) -> KeyModifiers:
    """Decode the ``1;<param>`` modifier field of xterm key sequences."""
    bits = max(0, param - 1)
    modifiers = KeyModifiers.NONE
    if bits & 1:
        modifiers |= KeyModifiers.SHIFT
    if bits & 2:
        modifiers |= KeyModifiers.ALT
    if bits & 4:
        modifiers |= KeyModifiers.CONTROL
    return modifiers


def _decode_utf8(fd: int, first: bytes) -> str:
    lead = first[0]
    if lead < 0x80:
        return first.decode("ascii")
    if lead >> 5 == 0b110:
        extra = 1
    elif lead >> 4 == 0b1110:
        extra = 2
    elif lead >> 3 == 0b11110:
        extra = 3
    else:
        return "�"
    data = first
    for _ in range(extra):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")[:1]


def _read_mouse(fd: int) -> MouseEvent | KeyEvent:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("Esc")
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return KeyEvent("Esc")
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return KeyEvent("Esc")
    modifiers = KeyModifiers.NONE
    if btn & 0b0000_0100:
        modifiers |= KeyModifiers.SHIFT
    if btn & 0b0000_1000:
        modifiers |= KeyModifiers.ALT
    if btn & 0b0001_0000:
        modifiers |= KeyModifiers.CONTROL
    button = btn & 0b11
    if btn & 0b0100_0000:
        kind = (
            MouseKind.WHEEL_UP,
            MouseKind.WHEEL_DOWN,
            MouseKind.WHEEL_LEFT,
            MouseKind.WHEEL_RIGHT,
        )[button]
    elif button == 0:
        kind = MouseKind.LEFT_DOWN if part == b"M" else MouseKind.LEFT_UP
    else:
        kind = MouseKind.OTHER
    return MouseEvent(kind, col, row, modifiers)


def _read_csi(fd: int) -> MouseEvent | KeyEvent:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("Esc")
    if seq == b"<":
        return _read_mouse(fd)
    if seq in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[seq])
    if not seq.isdigit():
        return KeyEvent("Esc")

    params = seq
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("Esc")
        if part.isdigit() or part == b";":
            params += part
            if len(params) > 16:
                return KeyEvent("Esc")
            continue
        final = part
        break

    fields = params.decode("ascii", errors="replace").split(";")
    modifiers = KeyModifiers.NONE
    if len(fields) > 1 and fields[1].isdigit():
        modifiers = _xterm_modifiers(int(fields[1]))
    if final == b"~" and fields[0] in _CSI_TILDE_KEYS:
        return KeyEvent(_CSI_TILDE_KEYS[fields[0]], modifiers)
    if final in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[final], modifiers)
    return KeyEvent("Esc")


def read_event(fd: int, timeout_ms: int | None = None) -> KeyEvent | MouseEvent | None:
    """Decode one key or mouse event, or return ``None`` on timeout.

    Raises ``EOFError`` once the input fd is closed; a closed terminal never
    produces another event.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            raise EOFError("terminal input closed")

    if ch in {b"\r", b"\n"}:
        return KeyEvent("Enter")
    if ch == b"\t":
        return KeyEvent("Tab")
    if ch in {b"\x08", b"\x7f"}:
        return KeyEvent("Backspace")
    if b"\x01" <= ch <= b"\x1a":
        return KeyEvent(chr(ord(ch) + 0x60), KeyModifiers.CONTROL)

    if ch != b"\x1b":
        return KeyEvent(_decode_utf8(fd, ch))

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("Esc")
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final in _CSI_FINAL_KEYS:
            return KeyEvent(_CSI_FINAL_KEYS[final])
        return KeyEvent("Esc")
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return KeyEvent("Esc")
    if b" " <= seq < b"\x7f":
        return KeyEvent(seq.decode("ascii"), KeyModifiers.ALT)
    _PENDING_BYTES.append(seq)
    return KeyEvent("Esc")


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "_PENDING_BYTES", "read_event"]
