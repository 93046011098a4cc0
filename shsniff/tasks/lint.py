from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import logging

from shsniff.checks.base import ScriptCheck, Issue, IssueList, Severity
from shsniff.checks.script_content import E_UNREADABLE_SCRIPT, IFSResetCheck, SafetyFlagsCheck, TrapHazardsCheck
from shsniff.checks.script_properties import (
    FinalEOLCheck, CarriageReturnCheck, BOMCheck, ShebangCheck,
    PermissionsCheck, ModulinoCheck, SyntaxCheck,
)
from shsniff.ignore import IgnoreSet
from shsniff.messages import error, warning, info
from shsniff.smell import Smell
from shsniff.sniff import SniffConfig
from shsniff.tasks.walk import sniff_paths


@dataclass(frozen=True)
class LintOptions:
    eol_check: bool = True
    cr_check: bool = True
    modulino_check: bool = False


def report(issue: Issue) -> None:
    match issue.issue_type.severity:
        case Severity.ERROR:
            error(issue.describe())
        case Severity.WARNING:
            warning(issue.describe())
        case Severity.INFO:
            info(issue.describe())


class ScriptLinter:
    """
    Runs the lint rules over POSIXy and alternative shell scripts.
    Content rules only run once the script is known to parse.
    """
    def __init__(self, options: LintOptions = LintOptions()):
        self.options = options
        self.property_checks: List[ScriptCheck] = []
        if options.eol_check:
            self.property_checks.append(FinalEOLCheck())
        if options.cr_check:
            self.property_checks.append(CarriageReturnCheck())
        if options.modulino_check:
            self.property_checks.append(ModulinoCheck())
        self.property_checks += [BOMCheck(), ShebangCheck(), PermissionsCheck()]

        self.syntax_check: ScriptCheck = SyntaxCheck()
        self.content_checks: List[ScriptCheck] = [IFSResetCheck(), SafetyFlagsCheck(), TrapHazardsCheck()]

    @property
    def sniff_config(self) -> SniffConfig:
        return SniffConfig(eol_check=self.options.eol_check, cr_check=self.options.cr_check)

    def lint(self, smell: Smell) -> IssueList:
        issues = IssueList()
        # Symlinked scripts are linted once, at their target.
        if smell.machine_generated or smell.symlink or smell.directory:
            return issues
        if not (smell.posixy or smell.alt_shell_script):
            return issues

        for check in self.property_checks:
            issues.extend(check.check(smell))

        syntax_issues = self.syntax_check.check(smell)
        issues.extend(syntax_issues)
        if syntax_issues:
            return issues

        for check in self.content_checks:
            try:
                issues.extend(check.check(smell))
            except OSError as e:
                logging.warning(f"Could not read {smell.path}: {e}")
                issues.append(E_UNREADABLE_SCRIPT.make(error=e.strerror or str(e)).at(smell.path))
                break
        return issues


def lint_scripts(roots: List[str], options: LintOptions = LintOptions(), ignore: Optional[IgnoreSet] = None) -> bool:
    """
    Lints every shell script below the roots. Returns True when any issue
    was found or any path could not be classified.
    """
    linter = ScriptLinter(options)
    found = False
    for smell, err in sniff_paths(roots, linter.sniff_config, ignore):
        if err is not None:
            found = True
            continue
        for issue in linter.lint(smell):
            report(issue)
            found = True
    return found
