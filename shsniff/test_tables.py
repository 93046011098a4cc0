import pytest

from shsniff.tables import DEFAULT_TABLES, ClassificationTables


def test_lookups_ignore_case():
    assert DEFAULT_TABLES.extension_posixy(".SH") is True
    assert DEFAULT_TABLES.filename_posixy("MAKEFILE") is False
    assert DEFAULT_TABLES.interpreter_posixy("Bash")
    assert DEFAULT_TABLES.extension_interpreter(".ZSH") == "zsh"


def test_unknown_keys_have_no_opinion():
    assert DEFAULT_TABLES.extension_posixy(".unknown") is None
    assert DEFAULT_TABLES.filename_posixy("whatever") is None
    assert DEFAULT_TABLES.extension_interpreter("") is None
    assert not DEFAULT_TABLES.interpreter_posixy("generic-sh")


def test_lksh_is_an_alternative_shell():
    assert DEFAULT_TABLES.extension_posixy(".lksh") is False
    assert not DEFAULT_TABLES.interpreter_posixy("lksh")
    assert DEFAULT_TABLES.is_alt_shell("lksh", "", "")


def test_config_files():
    assert DEFAULT_TABLES.is_config(".zshrc", ".zshrc")
    assert DEFAULT_TABLES.is_config("", "profile")
    assert not DEFAULT_TABLES.is_config(".sh", "hello.sh")


def test_dialect_families():
    assert DEFAULT_TABLES.is_full_bash("bash4")
    assert not DEFAULT_TABLES.is_full_bash("ash")
    assert DEFAULT_TABLES.is_ksh("pdksh")
    assert not DEFAULT_TABLES.is_ksh("zsh")


def test_alt_shell_by_filename():
    assert DEFAULT_TABLES.is_alt_shell("", "", "csh.login")
    assert DEFAULT_TABLES.is_alt_shell("", ".TCSH", "x.TCSH")
    assert not DEFAULT_TABLES.is_alt_shell("sh", ".sh", "x.sh")


@pytest.mark.parametrize("head, length", [
    (b"\xef\xbb\xbf#!/bin/sh", 3),
    (b"\xfe\xff\x00#", 2),
    (b"\xff\xfe\x00\x00", 2),  # shorter marks win
    (b"\x00\x00\xfe\xff", 4),
    (b"\x2b\x2f\x76\x38\x3d", 4),
    (b"\xef\xbb", 0),
    (b"#!/bin/sh", 0),
    (b"", 0),
])
def test_match_bom(head, length):
    assert DEFAULT_TABLES.match_bom(head) == length


def test_five_byte_bom_is_reachable():
    tables = ClassificationTables(boms=frozenset({b"\x01\x02\x03\x04\x05"}))
    assert tables.match_bom(b"\x01\x02\x03\x04\x05rest") == 5


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TABLES.posixy_by_extension[".new"] = True
