from typing import List
import stat

from shsniff.checks.base import ScriptCheck, Issue, IssueType, Severity
from shsniff.smell import Smell, FinalEOL
from shsniff.tables import ClassificationTables, DEFAULT_TABLES
from shsniff import validators


E_MISSING_FINAL_EOL     = IssueType("5f0c3a55-7f0e-4a7e-9a59-0c6a3f1d2b11", "Missing final end of line sequence.", Severity.WARNING)
E_CR_LINE_ENDING        = IssueType("c2b1e1f4-3d52-4b8e-8f6e-7d1a9b2c4e20", "CR/CRLF line ending detected.", Severity.WARNING)
E_LEADING_BOM           = IssueType("0e6f9d3a-91b4-4d7c-a0c5-2f8e4b6a1d33", "Leading BOM reduces portability.", Severity.WARNING)
E_MISSING_SHEBANG       = IssueType("8a4d2c1e-6b3f-4e59-9d7a-1c0b5e8f3a44", "Missing shebang.", Severity.WARNING)
E_FLIPPED_SHEBANG       = IssueType("3b7e9f02-4c1d-4a86-b5e3-9f2d6c8a0b55", "Shebang appears to be flipped.", Severity.WARNING)
E_RELATIVE_SHEBANG      = IssueType("d4c8a1b7-2e9f-4f03-8c6d-5a3b7e1f9c66", "Shebang application should be absolute and non-nested.", Severity.WARNING)
E_COMMENTED_SHEBANG     = IssueType("71e3b5d9-8a2c-4b6f-9e04-3d7f1a5c8b77", "Commented shebangs may be unparsable.", Severity.WARNING)
E_SHEBANG_FLAGS         = IssueType("a9f2c6e4-5b8d-4c17-a3e9-6f0b2d4a7c88", "Risk of parse error for interpreter space / secondary argument. Any safety flags will be ignored on `{interpreter} <script>` launch.", Severity.WARNING)
E_SOURCEABLE_EXECUTABLE = IssueType("1c5e8b3f-7d0a-4e92-b6c4-8a2f5d9e1b99", "Sourceable script features executable mode bits.", Severity.WARNING)
E_AMBIGUOUS_LAUNCH      = IssueType("6e0a4d7c-9f3b-4d28-8b1e-4c6a0f2e5daa", "Ambiguous launch style. Either feature a file extension, or else feature executable bits.", Severity.WARNING)
E_MODULINO              = IssueType("f3a7c0e2-1d6b-4f85-9c2a-7e4b8d0f6ebb", "Modulino ambiguity. Either have owner executable permissions with no extension, or else remove executable bits and use an extension like .lib.sh.", Severity.WARNING)
E_UNKNOWN_VALIDATOR     = IssueType("2d6b9e4a-8c1f-4a3d-b7e0-5f9c1a3e7dcc", "Unknown validator for interpreter {interpreter}.", Severity.WARNING)
E_INTERPRETER_NOT_FOUND = IssueType("b8e1d5f3-0a4c-4e6b-9f2d-6a0e4c8b2fdd", "Interpreter not found: {executable}.", Severity.WARNING)
E_SYNTAX_ERROR          = IssueType("47c0f8a6-3e5d-4b19-a8f1-0b7d3e9c5aee", "{interpreter} syntax error: {output}")

ANY_EXECUTE = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _is_config(smell: Smell, tables: ClassificationTables) -> bool:
    return tables.is_config(smell.extension, smell.filename)


class FinalEOLCheck(ScriptCheck):
    def check(self, smell: Smell) -> List[Issue]:
        if smell.final_eol == FinalEOL.ABSENT:
            return [E_MISSING_FINAL_EOL.at(smell.path)]
        return []


class CarriageReturnCheck(ScriptCheck):
    def check(self, smell: Smell) -> List[Issue]:
        if smell.contains_cr:
            return [E_CR_LINE_ENDING.at(smell.path)]
        return []


class BOMCheck(ScriptCheck):
    def check(self, smell: Smell) -> List[Issue]:
        if smell.bom:
            return [E_LEADING_BOM.at(smell.path)]
        return []


class ShebangCheck(ScriptCheck):
    """
    Flags shebang oddities, reporting only the first one found.

    Shell safety flags are risky in shebangs, but many non-POSIX languages
    (sed, awk, Emacs Lisp, Octave, ...) require them, so this check can be
    unactionable outside of shell scripts.
    """
    def __init__(self, tables: ClassificationTables = DEFAULT_TABLES):
        self.tables = tables

    def check(self, smell: Smell) -> List[Issue]:
        if _is_config(smell, self.tables):
            return []

        shebang = smell.shebang
        if shebang == "":
            return [E_MISSING_SHEBANG.at(smell.path)]
        if not shebang.startswith("#!"):
            return [E_FLIPPED_SHEBANG.at(smell.path)]
        if not shebang.startswith("#!/"):
            return [E_RELATIVE_SHEBANG.at(smell.path)]
        if "#" in shebang[2:]:
            return [E_COMMENTED_SHEBANG.at(smell.path)]
        if smell.interpreter_flags:
            return [E_SHEBANG_FLAGS.make(interpreter=smell.interpreter_name).at(smell.path)]
        return []


class PermissionsCheck(ScriptCheck):
    def check(self, smell: Smell) -> List[Issue]:
        if smell.library and smell.permissions & ANY_EXECUTE:
            return [E_SOURCEABLE_EXECUTABLE.at(smell.path)]

        if (smell.extension == "" and not smell.permissions & stat.S_IXUSR) or \
            (smell.extension != "" and smell.permissions & ANY_EXECUTE):
            return [E_AMBIGUOUS_LAUNCH.at(smell.path)]
        return []


class ModulinoCheck(ScriptCheck):
    """
    Enforces a strict split between applications (owner executable, no
    extension) and libraries (extension, no executable bits).
    """
    def __init__(self, tables: ClassificationTables = DEFAULT_TABLES):
        self.tables = tables

    def check(self, smell: Smell) -> List[Issue]:
        if _is_config(smell, self.tables):
            return []

        if (smell.extension == "" and not smell.owner_executable) or \
            (smell.extension != "" and smell.permissions & ANY_EXECUTE):
            return [E_MODULINO.at(smell.path)]
        return []


class SyntaxCheck(ScriptCheck):
    def check(self, smell: Smell) -> List[Issue]:
        if not smell.posixy:
            return []

        try:
            validators.check_syntax(smell)
        except validators.UnknownValidator:
            return [E_UNKNOWN_VALIDATOR.make(interpreter=smell.interpreter_name).at(smell.path)]
        except validators.InterpreterNotFound:
            return [E_INTERPRETER_NOT_FOUND.make(executable=validators.required_executable(smell)).at(smell.path)]
        except validators.SyntaxCheckFailed as e:
            return [E_SYNTAX_ERROR.make(interpreter=e.interpreter, output=e.output).at(smell.path)]
        return []
