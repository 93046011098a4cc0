import os
import threading
from pathlib import Path

import pytest

from shsniff import validators
from shsniff.smell import Smell
from shsniff.sniff import SniffConfig
from shsniff.tasks.advise import advise_rewrites
from shsniff.tasks.dump import dump_smells
from shsniff.tasks.find import FindMode, find_scripts, matches
from shsniff.tasks.lint import LintOptions, ScriptLinter, lint_scripts
from shsniff.tasks.walk import sniff_paths


def write(path: Path, text: str, mode: int = 0o644) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    os.chmod(path, mode)
    return path


@pytest.fixture
def tree(tmp_path):
    write(tmp_path / "hello.sh", "#!/bin/sh\necho hi\n")
    write(tmp_path / "tool", "#!/bin/bash\necho hi\n", 0o755)
    write(tmp_path / "notes.txt", "hi\n")
    write(tmp_path / "config.fish", "set -x A 1\n")
    write(tmp_path / "pre-commit.sample", "#!/bin/sh\necho hi\n", 0o755)
    write(tmp_path / "run.py", "#!/usr/bin/env python3\nprint(1)\n", 0o755)
    write(tmp_path / ".git" / "hooks" / "post-merge", "#!/bin/sh\n", 0o755)
    return tmp_path


@pytest.fixture
def no_validators(monkeypatch):
    monkeypatch.setattr(validators, "check_syntax", lambda smell: None)


def found(tree, mode, excluded=None):
    paths = []
    assert find_scripts([str(tree)], mode, excluded, printer=paths.append)
    return [os.path.basename(path) for path in paths]


def test_find_modes(tree):
    assert found(tree, FindMode.POSIXY) == ["hello.sh", "tool"]
    assert found(tree, FindMode.PURE_SH) == ["hello.sh"]
    assert found(tree, FindMode.ALT_SHELL) == ["config.fish"]
    assert found(tree, FindMode.POSIXY, ["bash"]) == ["hello.sh"]


def test_find_reports_unreadable_roots(tmp_path):
    assert not find_scripts([str(tmp_path / "missing")], printer=lambda path: None)


def test_pure_sh_includes_generic_scripts():
    assert matches(Smell.from_dict({"posixy": True, "interpreter": "generic-sh"}), FindMode.PURE_SH)
    assert not matches(Smell.from_dict({"posixy": True, "interpreter": "dash"}), FindMode.PURE_SH)


def test_dump(tree, capsys):
    assert dump_smells([str(tree)], SniffConfig(eol_check=True))
    lines = capsys.readouterr().out.splitlines()
    smells = {os.path.basename(smell.path): smell for smell in map(Smell.from_json, lines)}
    assert sorted(smells) == ["config.fish", "hello.sh", "notes.txt", "pre-commit.sample", "run.py", "tool"]
    assert smells["tool"].bash
    assert smells["pre-commit.sample"].machine_generated


def test_dump_pretty(tmp_path, capsys):
    path = write(tmp_path / "a.sh", "echo hi\n")
    assert dump_smells([str(path)], pretty=True)
    assert '\n  "posixy": true,' in capsys.readouterr().out


def test_lint_clean_script(tmp_path, no_validators, capsys):
    write(tmp_path / "clean", "#!/bin/sh\nunset IFS\nset -euf\necho hi\n", 0o755)
    write(tmp_path / "lib.sh", "#!/bin/sh\ngreet() {\n    echo hi\n}\n")
    assert not lint_scripts([str(tmp_path)])
    assert capsys.readouterr().out == ""


def test_lint_reports_issues(tmp_path, no_validators, capsys):
    write(tmp_path / "messy", "#!/bin/sh -e\r\necho hi", 0o644)
    assert lint_scripts([str(tmp_path)])
    out = capsys.readouterr().out
    assert "Missing final end of line sequence." in out
    assert "CR/CRLF line ending detected." in out
    assert "Ambiguous launch style." in out
    assert "messy" in out


def test_lint_options_disable_probes(tmp_path, no_validators, capsys):
    write(tmp_path / "messy", "#!/bin/sh\r\nunset IFS\r\nset -euf\r\necho hi", 0o755)
    assert not lint_scripts([str(tmp_path)], LintOptions(eol_check=False, cr_check=False))


def test_linter_skips_machine_generated_and_non_shell(no_validators):
    linter = ScriptLinter()
    assert len(linter.lint(Smell(path="hook.sample", posixy=True, machine_generated=True))) == 0
    assert len(linter.lint(Smell(path="run.py"))) == 0


def test_lint_stops_at_syntax_errors(tmp_path, monkeypatch):
    def fail(smell):
        raise validators.SyntaxCheckFailed("sh", "unexpected EOF")

    monkeypatch.setattr(validators, "check_syntax", fail)
    smell = Smell(path=str(write(tmp_path / "broken", "#!/bin/sh\nif\n", 0o755)), shebang="#!/bin/sh",
                  permissions=0o755, owner_executable=True, posixy=True)
    issues = list(ScriptLinter().lint(smell))
    assert [issue.issue_type.message for issue in issues] == ["{interpreter} syntax error: {output}"]


def test_advise(tree, capsys):
    assert advise_rewrites([str(tree)])
    out = capsys.readouterr().out
    assert "Rewrite POSIX script in Ruby or other safer general purpose scripting language" in out
    assert "hello.sh" in out
    assert "run.py" not in out


def test_advise_nothing_to_rewrite(tmp_path):
    write(tmp_path / "notes.txt", "hi\n")
    assert not advise_rewrites([str(tmp_path)])


@pytest.fixture
def locked(tmp_path, monkeypatch):
    """Makes any directory named `locked` unlistable."""
    listdir = os.listdir

    def locked_listdir(path):
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        return listdir(path)

    monkeypatch.setattr(os, "listdir", locked_listdir)
    write(tmp_path / "locked" / "hidden.sh", "echo hi\n")
    write(tmp_path / "hello.sh", "echo hi\n")
    return tmp_path / "locked"


def test_unlistable_directory_is_reported(tmp_path, locked):
    results = list(sniff_paths([str(tmp_path)], SniffConfig()))
    assert [smell.path for smell, _ in results] == [str(tmp_path / "hello.sh"), str(locked)]
    assert results[0][1] is None
    assert "Could not list" in str(results[1][1])
    assert results[1][0].directory


def test_front_ends_survive_unlistable_directories(tmp_path, locked, no_validators, capsys):
    paths = []
    assert not find_scripts([str(tmp_path)], printer=paths.append)
    assert paths == [str(tmp_path / "hello.sh")]

    assert not dump_smells([str(tmp_path)])
    assert lint_scripts([str(tmp_path)])
    assert advise_rewrites([str(tmp_path)])


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs named pipes")
def test_lint_never_opens_fifos(tmp_path, no_validators):
    os.mkfifo(tmp_path / "pipe.sh")
    paths = []
    results = []

    linter = threading.Thread(target=lambda: results.append(lint_scripts([str(tmp_path)])), daemon=True)
    linter.start()
    linter.join(timeout=5)
    assert not linter.is_alive(), "lint blocked on a named pipe"
    assert results == [False]

    assert find_scripts([str(tmp_path)], printer=paths.append)
    assert paths == []


def test_lint_skips_symlinks(tmp_path, no_validators, capsys):
    target = write(tmp_path / "clean", "#!/bin/sh\nunset IFS\nset -euf\necho hi\n", 0o755)
    (tmp_path / "link.sh").symlink_to(target)
    assert not lint_scripts([str(tmp_path)])
    assert capsys.readouterr().out == ""


def test_lint_reports_scripts_that_vanish(tmp_path, monkeypatch, capsys):
    def delete(smell):
        os.remove(smell.path)

    monkeypatch.setattr(validators, "check_syntax", delete)
    write(tmp_path / "gone", "#!/bin/sh\nunset IFS\nset -euf\necho hi\n", 0o755)
    write(tmp_path / "later", "#!/bin/sh\nunset IFS\nset -euf\necho hi\n", 0o755)

    assert lint_scripts([str(tmp_path)])
    out = capsys.readouterr().out
    assert f"{tmp_path / 'gone'} > Could not read script: No such file or directory." in out
    assert f"{tmp_path / 'later'} > Could not read script" in out
