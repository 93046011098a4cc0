"""
Classifies files as POSIX shell scripts, alternative shell scripts,
shell configuration, or something else, from cheap local signals.
"""

__version__ = "0.1.0"

from shsniff.smell import Smell, LineEnding, FinalEOL, Interpreter, KnownInterpreter, GenericPosix, Unresolved
from shsniff.sniff import SniffConfig, SniffError, PathNotFound, PathPermissionDenied, ProbeIOError, sniff, sniff_partial
from shsniff.tables import ClassificationTables, DEFAULT_TABLES

__all__ = [
    "ClassificationTables",
    "DEFAULT_TABLES",
    "FinalEOL",
    "GenericPosix",
    "Interpreter",
    "KnownInterpreter",
    "LineEnding",
    "PathNotFound",
    "PathPermissionDenied",
    "ProbeIOError",
    "Smell",
    "SniffConfig",
    "SniffError",
    "Unresolved",
    "sniff",
    "sniff_partial",
]
