import subprocess

import pytest

from shsniff import validators
from shsniff.smell import Smell, KnownInterpreter, GenericPosix


@pytest.fixture
def commands(monkeypatch):
    """Records subprocess invocations, failing any that mention `bad`."""
    calls = []

    def run(command, capture_output, text):
        calls.append(command)
        if "bad" in command[-1]:
            return subprocess.CompletedProcess(command, 1, stdout="", stderr="line 1: unexpected EOF\n")
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    monkeypatch.setattr(validators.subprocess, "run", run)
    monkeypatch.setattr(validators.shutil, "which", lambda name: f"/usr/bin/{name}")
    return calls


def test_posix_sh_uses_shellcheck(commands):
    validators.check_syntax(Smell(path="ok.sh", interpreter=KnownInterpreter("sh")))
    validators.check_syntax(Smell(path="ok", interpreter=GenericPosix()))
    assert commands == [
        ["shellcheck", "--shell=sh", "--severity=error", "ok.sh"],
        ["shellcheck", "--shell=sh", "--severity=error", "ok"],
    ]


@pytest.mark.parametrize("interpreter, command", [
    ("bash", ["bash", "-n", "x"]),
    ("zsh", ["zsh", "-n", "x"]),
    ("perl", ["perl", "-c", "x"]),
    ("php", ["php", "-l", "x"]),
    ("python3", ["python3", "-m", "py_compile", "x"]),
    ("gawk", ["gawk", "--lint", "-f", "x"]),
    ("go", ["gofmt", "-e", "x"]),
])
def test_validator_commands(commands, interpreter, command):
    validators.check_syntax(Smell(path="x", interpreter=KnownInterpreter(interpreter)))
    assert commands == [command]


def test_syntax_error(commands):
    with pytest.raises(validators.SyntaxCheckFailed) as excinfo:
        validators.check_syntax(Smell(path="bad.sh", interpreter=KnownInterpreter("bash")))
    assert excinfo.value.interpreter == "bash"
    assert excinfo.value.output == "line 1: unexpected EOF"


def test_unknown_validator(commands):
    with pytest.raises(validators.UnknownValidator):
        validators.check_syntax(Smell(path="x", interpreter=KnownInterpreter("cobol")))
    assert commands == []


def test_missing_interpreter(monkeypatch):
    monkeypatch.setattr(validators.shutil, "which", lambda name: None)
    with pytest.raises(validators.InterpreterNotFound, match="shellcheck"):
        validators.check_syntax(Smell(path="x.sh", interpreter=KnownInterpreter("sh")))


def test_required_executable():
    assert validators.required_executable(Smell(interpreter=KnownInterpreter("dash"))) == "dash"
    assert validators.required_executable(Smell(interpreter=GenericPosix())) == "shellcheck"
    assert validators.required_executable(Smell(interpreter=KnownInterpreter("go"))) == "gofmt"
