from __future__ import annotations
from typing import Tuple
from dataclasses import dataclass
from pathlib import Path

from shsniff.smell import LineEnding, FinalEOL
from shsniff.tables import ClassificationTables


CHUNK_BYTE_SIZE = 1024 * 1024 # 1 MB

MAX_BOM_LENGTH = 5


@dataclass(frozen=True)
class Head:
    """
    What a single forward read of a file's first line reveals.
    `first_line` excludes any leading byte order mark.
    """
    bom: bool
    first_line: bytes
    line_ending: LineEnding


def classify_line_ending(line: bytes) -> LineEnding:
    # A line ending in a bare CR can only come back from a read that
    # reached EOF without meeting a single LF.
    if line.endswith(b"\r\n"):
        return LineEnding.CRLF
    if line.endswith(b"\n"):
        return LineEnding.LF
    if line.endswith(b"\r"):
        return LineEnding.CR
    return LineEnding.NONE


def read_head(file: Path, tables: ClassificationTables) -> Head:
    """
    Peeks for a byte order mark, then reads up to and including the first LF.

    CR-ended, binary and single line files are read in their entirety.
    Reaching EOF is the expected outcome for those, not an error.
    """
    with file.open('rb') as f:
        bom_length = tables.match_bom(f.peek(MAX_BOM_LENGTH)[:MAX_BOM_LENGTH])
        if bom_length:
            f.read(bom_length)
        line = f.readline()

    return Head(bom=bom_length > 0, first_line=line, line_ending=classify_line_ending(line))


def probe_final_eol(file: Path, size: int) -> FinalEOL:
    """
    Reads the last one or two bytes of a non-empty file.
    Only a trailing LF not preceded by CR counts as a POSIX final end of line.
    """
    if size <= 0:
        raise ValueError(f"Cannot probe the end of empty file {file}")

    tail_length = 2 if size >= 2 else 1
    with file.open('rb') as f:
        f.seek(size - tail_length)
        tail = f.read(tail_length)

    if tail.endswith(b"\n") and (len(tail) < 2 or tail[0:1] != b"\r"):
        return FinalEOL.PRESENT
    return FinalEOL.ABSENT


def contains_cr(file: Path) -> bool:
    with file.open('rb') as f:
        while True:
            chunk = f.read(CHUNK_BYTE_SIZE)
            if not chunk:
                return False
            if b"\r" in chunk:
                return True


def split_shebang(line: bytes) -> Tuple[bool, str]:
    """
    Returns (parseable, text) for a candidate shebang line.

    `#!` lines are parseable. `!#` lines are a common typo and are returned
    as text so lint rules can flag them, but are not parsed.
    Anything else yields (False, "").
    """
    if line.startswith(b"#!"):
        return True, line.rstrip(b"\r\n").decode('utf-8', errors='replace')
    if line.startswith(b"!#"):
        return False, line.rstrip(b"\r\n").decode('utf-8', errors='replace')
    return False, ""
