"""
External syntax validators, keyed by interpreter name.

The classifier only names the interpreter; everything here runs
third-party tools as subprocesses.
"""
from typing import Callable, Dict, List
import shutil
import subprocess

from shsniff.smell import Smell, GENERIC_SH


class ValidationError(Exception):
    pass


class UnknownValidator(ValidationError):
    pass


class InterpreterNotFound(ValidationError):
    pass


class SyntaxCheckFailed(ValidationError):
    def __init__(self, interpreter: str, output: str) -> None:
        super().__init__(f"{interpreter} syntax error: {output}" if output else f"{interpreter} syntax error")
        self.interpreter = interpreter
        self.output = output


def _run(interpreter: str, command: List[str]) -> None:
    result = subprocess.run(command, capture_output=True, text=True)
    if result.returncode != 0:
        output = (result.stderr or result.stdout).strip()
        raise SyntaxCheckFailed(interpreter, output)


def posix_sh_check_syntax(smell: Smell) -> None:
    """Strict POSIX sh grammar, independent of whichever shell /bin/sh happens to be."""
    _run("shellcheck", ["shellcheck", "--shell=sh", "--severity=error", smell.path])


def unix_check_syntax(smell: Smell) -> None:
    _run(smell.interpreter_name, [smell.interpreter_name, "-n", smell.path])


def perlish_check_syntax(smell: Smell) -> None:
    _run(smell.interpreter_name, [smell.interpreter_name, "-c", smell.path])


def php_check_syntax(smell: Smell) -> None:
    _run(smell.interpreter_name, [smell.interpreter_name, "-l", smell.path])


def python_check_syntax(smell: Smell) -> None:
    _run(smell.interpreter_name, [smell.interpreter_name, "-m", "py_compile", smell.path])


def gnu_awk_check_syntax(smell: Smell) -> None:
    _run(smell.interpreter_name, [smell.interpreter_name, "--lint", "-f", smell.path])


def go_check_syntax(smell: Smell) -> None:
    _run("gofmt", ["gofmt", "-e", smell.path])


VALIDATORS: Dict[str, Callable[[Smell], None]] = {
    "ash":      unix_check_syntax,
    "bash":     unix_check_syntax,
    "bash4":    unix_check_syntax,
    "bmake":    unix_check_syntax,
    "bosh":     unix_check_syntax,
    "csh":      unix_check_syntax,
    "dash":     unix_check_syntax,
    "elvish":   unix_check_syntax,
    "fish":     unix_check_syntax,
    "gawk":     gnu_awk_check_syntax,
    GENERIC_SH: posix_sh_check_syntax,
    "gmake":    unix_check_syntax,
    "go":       go_check_syntax,
    "iojs":     perlish_check_syntax,
    "ksh":      unix_check_syntax,
    "ksh88":    unix_check_syntax,
    "ksh93":    unix_check_syntax,
    "lksh":     unix_check_syntax,
    "make":     unix_check_syntax,
    "mksh":     unix_check_syntax,
    "node":     perlish_check_syntax,
    "oksh":     unix_check_syntax,
    "oil":      unix_check_syntax,
    "osh":      unix_check_syntax,
    "pdksh":    unix_check_syntax,
    "perl":     perlish_check_syntax,
    "perl6":    perlish_check_syntax,
    "php":      php_check_syntax,
    "pmake":    unix_check_syntax,
    "posh":     unix_check_syntax,
    "python":   python_check_syntax,
    "python3":  python_check_syntax,
    "rc":       unix_check_syntax,
    "rksh":     unix_check_syntax,
    "ruby":     perlish_check_syntax,
    "sh":       posix_sh_check_syntax,
    "tcsh":     unix_check_syntax,
    "yash":     unix_check_syntax,
    "ysh":      unix_check_syntax,
    "zsh":      unix_check_syntax,
}


def required_executable(smell: Smell) -> str:
    validator = VALIDATORS[smell.interpreter_name]
    if validator is posix_sh_check_syntax:
        return "shellcheck"
    if validator is go_check_syntax:
        return "gofmt"
    return smell.interpreter_name


def check_syntax(smell: Smell) -> None:
    """
    Validates the script with the tool matching its interpreter.
    Raises a ValidationError subclass when the script cannot be validated or is invalid.
    """
    name = smell.interpreter_name
    if name not in VALIDATORS:
        raise UnknownValidator(f"Unknown validator for interpreter {name!r}: {smell.path}")

    executable = required_executable(smell)
    if shutil.which(executable) is None:
        raise InterpreterNotFound(f"{executable} not found: {smell.path}")

    VALIDATORS[name](smell)
