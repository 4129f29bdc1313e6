"""Console-friendly formatting utilities."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional, Sequence, TextIO

GIB = 1024**3


def format_gb(num: int) -> int:
    """Whole gibibytes, rounded down."""
    return int(num) // GIB


def format_duration(seconds: int) -> str:
    """Render a duration as ``"1h 2m 5s"``; hours are never rolled into days."""
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")
    return " ".join(parts)


def logo_width(logo: Sequence[str]) -> int:
    return max((len(line.rstrip(" ")) for line in logo), default=0)


def render_columns(logo: Sequence[str], info: Sequence[str]) -> List[str]:
    """Place ``info`` to the right of ``logo``, left-aligned in two columns.

    The logo column is padded to its widest right-stripped line, followed by a
    single space. Whichever sequence is shorter is padded with empty cells.
    """
    width = logo_width(logo)
    rows = []
    for index in range(max(len(logo), len(info))):
        logo_line = logo[index].rstrip(" ") if index < len(logo) else ""
        info_line = info[index] if index < len(info) else ""
        rows.append(_format_row(logo_line, info_line, width))
    return rows


def print_block(lines: Iterable[str], stream: Optional[TextIO] = None) -> None:
    out = stream if stream is not None else sys.stdout
    for line in lines:
        out.write(line + "\n")
    out.flush()


def _format_row(logo_line: str, info_line: str, width: int) -> str:
    if not info_line:
        return logo_line
    if not width:
        return info_line
    return f"{logo_line.ljust(width)} {info_line}"
