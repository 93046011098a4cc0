from pathlib import Path

import pytest

from shsniff.content import classify_line_ending, read_head, probe_final_eol, contains_cr, split_shebang
from shsniff.smell import LineEnding, FinalEOL
from shsniff.tables import DEFAULT_TABLES


def write(tmp_path: Path, content: bytes) -> Path:
    path = tmp_path / "file"
    path.write_bytes(content)
    return path


@pytest.mark.parametrize("line, ending", [
    (b"echo\n", LineEnding.LF),
    (b"echo\r\n", LineEnding.CRLF),
    (b"echo\r", LineEnding.CR),
    (b"echo", LineEnding.NONE),
    (b"", LineEnding.NONE),
])
def test_classify_line_ending(line, ending):
    assert classify_line_ending(line) == ending


def test_read_head_strips_bom(tmp_path):
    head = read_head(write(tmp_path, b"\xef\xbb\xbf#!/bin/sh\necho\n"), DEFAULT_TABLES)
    assert head.bom
    assert head.first_line == b"#!/bin/sh\n"
    assert head.line_ending == LineEnding.LF


def test_read_head_single_line(tmp_path):
    head = read_head(write(tmp_path, b"#!/bin/sh"), DEFAULT_TABLES)
    assert not head.bom
    assert head.first_line == b"#!/bin/sh"
    assert head.line_ending == LineEnding.NONE


@pytest.mark.parametrize("content, eol", [
    (b"x\n", FinalEOL.PRESENT),
    (b"\n", FinalEOL.PRESENT),
    (b"x", FinalEOL.ABSENT),
    (b"x\r\n", FinalEOL.ABSENT),
    (b"x\r", FinalEOL.ABSENT),
])
def test_probe_final_eol(tmp_path, content, eol):
    assert probe_final_eol(write(tmp_path, content), len(content)) == eol


def test_contains_cr(tmp_path):
    assert contains_cr(write(tmp_path, b"a\nb\r\n"))
    assert not contains_cr(write(tmp_path, b"a\nb\n"))
    assert not contains_cr(write(tmp_path, b""))


def test_split_shebang():
    assert split_shebang(b"#!/bin/sh\r\n") == (True, "#!/bin/sh")
    assert split_shebang(b"!#/bin/sh\n") == (False, "!#/bin/sh")
    assert split_shebang(b"echo hi\n") == (False, "")


def test_probe_final_eol_rejects_empty_files(tmp_path):
    with pytest.raises(ValueError):
        probe_final_eol(write(tmp_path, b""), 0)
