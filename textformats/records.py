"""
Record readers: group raw input lines into per-sentence records.

A stream is anything with a ``readline()`` method returning ``str`` or UTF-8
``bytes`` and an empty value at end of stream.
"""

from __future__ import annotations

from typing import IO, Optional, Tuple, Union

BLOCK = "block"
LINE = "line"
RECORD_MODES = (BLOCK, LINE)

Stream = IO


def _read_line(stream: Stream) -> Optional[str]:
    """Read one line without its terminator; None at end of stream."""
    raw: Union[str, bytes] = stream.readline()
    if not raw:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


def read_block_record(stream: Stream) -> Tuple[str, bool]:
    """Read lines up to the next blank line (consumed, not returned)."""
    parts = []
    line = _read_line(stream)
    while line:
        parts.append(line)
        parts.append("\n")
        line = _read_line(stream)
    record = "".join(parts)
    return record, line is not None or bool(record)


def read_line_record(stream: Stream) -> Tuple[str, bool]:
    line = _read_line(stream)
    if line is None:
        return "", False
    return line, True


def read_record(stream: Stream, mode: str = BLOCK) -> Tuple[str, bool]:
    if mode == BLOCK:
        return read_block_record(stream)
    if mode == LINE:
        return read_line_record(stream)
    raise ValueError(f"Unknown record mode '{mode}'. Expected one of: {', '.join(RECORD_MODES)}")

