# -*- coding: utf-8 -*-
from typing import List, Optional, Tuple
from pathlib import Path
import re

from shsniff.checks.base import ScriptCheck, Issue, IssueType, IssueList, Severity
from shsniff.smell import Smell


E_IFS_NOT_RESET   = IssueType("9d3e7a1c-4f8b-4c26-8e0a-3b5d9f1c7a01", "Tokenize like `unset IFS` at the top of executable scripts.", Severity.WARNING)
E_NO_SAFETY_FLAGS = IssueType("e5b0c8f4-2a7d-4e93-9c1b-7f3a5d0e8b02", "Control program flow like `set -euf` at the top of executable scripts.", Severity.WARNING)
E_EXEC_TRAPS      = IssueType("3f8a1d6e-9b2c-4a57-b0e4-1c7f3a9d5e03", "exec discards traps.", Severity.WARNING)
E_ZSH_LIST_TRAPS  = IssueType("b1d4f7a0-6e3c-4b89-a2f5-8d0c4e6b1f04", "List traps deprecated in favor of function traps.", Severity.WARNING)
E_BASH_ERRTRACE   = IssueType("7c2e5b9d-0f4a-4d1e-8b36-2a9e6c0f3d05", "Missing `set -E` / `set -o errtrace` to guard traps.", Severity.WARNING)
E_SUBSHELL_TRAPS  = IssueType("4a9f0e3b-7c5d-4f62-9e18-5b1d7a3c9f06", "Traps may reset in subshells.", Severity.WARNING)
E_UNREADABLE_SCRIPT = IssueType("8e2d6f1a-5c3b-4a90-b7d4-0f6e2a8c4b07", "Could not read script: {error}.")

UNSET_IFS_PATTERN = re.compile(r"^(\s)*unset(\s)+IFS(\s+(#.*)?)?$")
LIST_TRAP_PATTERN = re.compile(r"^trap +.+$")
FUNCTION_TRAP_PATTERN = re.compile(r"^TRAP.+\(\).+$")
EXEC_PATTERN = re.compile(r"^exec .+$")
SET_PATTERN = re.compile(r"^set (?P<flags>.+)$")
ERRTRACE_FLAG_PATTERN = re.compile(r"^(-[^\s]*E)|-[^\s]*o errtrace$")


def read_lines(path: str) -> List[str]:
    return Path(path).read_bytes().decode('utf-8', errors='replace').splitlines()


def strip_comment(line: str) -> str:
    index = line.find("#")
    if index != -1:
        line = line[:index]
    return line.strip()


def first_statement(lines: List[str], skip_prefixes: Tuple[str, ...]) -> Optional[Tuple[int, str]]:
    """
    Finds the first line (1-based, stripped) that is not blank, a comment,
    or one of `skip_prefixes`.
    """
    for i, line in enumerate(lines):
        line = line.strip()
        if line == "" or line.startswith(("#",) + skip_prefixes):
            continue
        return i + 1, line
    return None


class IFSResetCheck(ScriptCheck):
    """
    Executable scripts should reset IFS near the top to avoid tokenization surprises.
    """
    def check(self, smell: Smell) -> List[Issue]:
        if not smell.posixy or smell.library:
            return []

        for i, line in enumerate(read_lines(smell.path)):
            if UNSET_IFS_PATTERN.match(line):
                return []
            if line.strip() == "" or line.startswith(("#", "set", "unset")):
                continue

            assignment = strip_comment(line).split("=")
            if assignment[0].strip() != "IFS":
                return [E_IFS_NOT_RESET.at(smell.path, line=i + 1)]
            return []
        return []


class SafetyFlagsCheck(ScriptCheck):
    """
    Executable scripts should enable `set` safety flags near the top.
    """
    def check(self, smell: Smell) -> List[Issue]:
        if not smell.posixy or smell.library:
            return []

        found = first_statement(read_lines(smell.path), ("IFS", "unset"))
        if found is None:
            return []

        line_nr, candidate = found
        parts = strip_comment(candidate).split(" ")
        if parts[0].strip() != "set":
            return [E_NO_SAFETY_FLAGS.at(smell.path, line=line_nr)]
        return []


class TrapHazardsCheck(ScriptCheck):
    """
    Traps collide with exec and subshells, and differ between shell dialects.
    """
    def check(self, smell: Smell) -> List[Issue]:
        if not smell.posixy:
            return []

        has_list_trap = False
        has_trap = False
        exec_lines: List[int] = []
        has_errtrace_flag = False

        for i, line in enumerate(read_lines(smell.path)):
            line = line.strip()
            if line == "" or line.startswith("#"):
                continue

            if LIST_TRAP_PATTERN.match(line):
                has_list_trap = True
                has_trap = True
            if FUNCTION_TRAP_PATTERN.match(line):
                has_trap = True
            if EXEC_PATTERN.match(line):
                exec_lines.append(i + 1)

            m = SET_PATTERN.match(line)
            if m and ERRTRACE_FLAG_PATTERN.search(m.group("flags")):
                has_errtrace_flag = True

        if not has_trap:
            return []

        issues = IssueList()
        for line_nr in exec_lines:
            issues.append(E_EXEC_TRAPS.at(smell.path, line=line_nr))

        interpreter = smell.interpreter_name
        if interpreter == "zsh":
            if has_list_trap:
                issues.append(E_ZSH_LIST_TRAPS.at(smell.path))
        elif interpreter.startswith("bash"):
            if not has_errtrace_flag:
                issues.append(E_BASH_ERRTRACE.at(smell.path))
        else:
            issues.append(E_SUBSHELL_TRAPS.at(smell.path))

        return list(issues)
