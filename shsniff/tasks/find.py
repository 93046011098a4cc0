"""
Recursively identifies shell scripts in large, complex directories, so
their paths can be fed into linters that lack recursion or language
detection of their own.
"""
from typing import Callable, Iterable, List, Optional
import enum
import sys

from shsniff.ignore import IgnoreSet
from shsniff.smell import Smell, GENERIC_SH
from shsniff.sniff import SniffConfig
from shsniff.tasks.walk import sniff_paths


class FindMode(enum.Enum):
    POSIXY = "posixy"   # any POSIX-like shell script
    PURE_SH = "sh"      # specifically sh-interpreted scripts
    ALT_SHELL = "alt"   # non-POSIX low level shells


def write_line(path: str) -> None:
    sys.stdout.write(path + "\n")


def write_null(path: str) -> None:
    # For xargs -0
    sys.stdout.write(path + "\0")


def matches(smell: Smell, mode: FindMode, excluded_interpreters: Iterable[str] = ()) -> bool:
    if smell.machine_generated:
        return False
    if smell.interpreter_name in excluded_interpreters:
        return False

    match mode:
        case FindMode.PURE_SH:
            return smell.posixy and smell.interpreter_name in ("sh", GENERIC_SH)
        case FindMode.ALT_SHELL:
            return smell.alt_shell_script
        case FindMode.POSIXY:
            return smell.posixy


def find_scripts(
        roots: List[str],
        mode: FindMode = FindMode.POSIXY,
        excluded_interpreters: Optional[List[str]] = None,
        printer: Callable[[str], None] = write_line,
        ignore: Optional[IgnoreSet] = None) -> bool:
    """
    Prints the path of every matching script. Returns False if any path
    could not be classified.
    """
    excluded = [e for e in (excluded_interpreters or []) if e]
    ok = True
    for smell, err in sniff_paths(roots, SniffConfig(), ignore):
        if err is not None:
            ok = False
            continue
        if matches(smell, mode, excluded):
            printer(smell.path)
    return ok
