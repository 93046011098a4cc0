from __future__ import annotations
from typing import Dict, FrozenSet, Mapping, Optional, Tuple
from dataclasses import dataclass, field
from types import MappingProxyType


# ============================================================
# POSIXy-ness by Extension (keys are lower case)
# ============================================================
_POSIXY_BY_EXTENSION: Dict[str, bool] = {
    # -- POSIX shells and their dotfiles --
    ".ash":          True,
    ".bash":         True,
    ".bash4":        True,
    ".bash_login":   True,
    ".bash_logout":  True,
    ".bash_profile": True,
    ".bashrc":       True,
    ".bosh":         True,
    ".dash":         True,
    ".hsh":          True,
    ".ksh":          True,
    ".ksh88":        True,
    ".ksh93":        True,
    ".kshrc":        True,
    ".mksh":         True,
    ".oksh":         True,
    ".pdksh":        True,
    ".posh":         True,
    ".rksh":         True,
    ".sh":           True,
    ".shinit":       True,
    ".shrc":         True,
    ".yash":         True,
    ".zlogin":       True,
    ".zlogout":      True,
    ".zprofile":     True,
    ".zsh":          True,
    ".zshenv":       True,
    ".zshrc":        True,

    # -- Alternative shells --
    ".csh":          False,
    ".cshrc":        False,
    ".elv":          False,
    ".etsh":         False,
    ".fish":         False,
    ".ionrc":        False,
    ".lksh":         False, # lksh tracks mksh, but with legacy non-POSIX quirks
    ".psh":          False,
    ".rc":           False,
    ".tcsh":         False,
    ".tcshrc":       False,
    ".tsh":          False,

    # -- Other programming languages --
    ".ada":          False,
    ".bat":          False,
    ".c":            False,
    ".cl":           False,
    ".cmd":          False,
    ".e":            False,
    ".erl":          False,
    ".escript":      False,
    ".expect":       False,
    ".fth":          False,
    ".groovy":       False,
    ".j":            False,
    ".js":           False,
    ".lisp":         False,
    ".lua":          False,
    ".mf":           False,
    ".php":          False,
    ".pike":         False,
    ".pl":           False,
    ".py":           False,
    ".pyw":          False,
    ".rb":           False,
    ".rkt":          False,
    ".scala":        False,
    ".sf":           False,
    ".txr":          False,
    ".vbs":          False,
    ".zkl":          False,

    # -- Data, documents and media --
    ".bin":          False,
    ".bmp":          False,
    ".conf":         False,
    ".doc":          False,
    ".docx":         False,
    ".ds_store":     False,
    ".exe":          False,
    ".flv":          False,
    ".gif":          False,
    ".gitignore":    False,
    ".gitkeep":      False,
    ".gitmodules":   False,
    ".jpeg":         False,
    ".jpg":          False,
    ".json":         False,
    ".log":          False,
    ".markdown":     False,
    ".md":           False,
    ".mov":          False,
    ".mp3":          False,
    ".mp4":          False,
    ".pdf":          False,
    ".png":          False,
    ".properties":   False,
    ".svg":          False,
    ".swp":          False,
    ".tiff":         False,
    ".txt":          False,
    ".wav":          False,
    ".xml":          False,
    ".yaml":         False,
    ".yml":          False,
}

# ============================================================
# POSIXy-ness by Filename (keys are lower case)
# ============================================================
_POSIXY_BY_FILENAME: Dict[str, bool] = {
    ".profile":      True,
    "bash_login":    True,
    "bash_logout":   True,
    "login":         True,
    "logout":        True,
    "oilrc":         True,
    "oshrc":         True,
    "profile":       True,
    "shinit":        True,
    "shrc":          True,
    "zlogin":        True,
    "zlogout":       True,
    "zprofile":      True,
    "zshenv":        True,
    "zshrc":         True,

    "changelog":     False,
    "csh.login":     False,
    "csh.logout":    False,
    "makefile":      False,
    "rc.elv":        False,
    "rcrc":          False,
    "readme":        False,
    "tcsh.login":    False,
    "tcsh.logout":   False,
    "thumbs.db":     False,
    "yshrc":         False,
}

# ============================================================
# Shell configuration files (sourced by a login or interactive shell)
# ============================================================
_CONFIG_EXTENSIONS: FrozenSet[str] = frozenset({
    ".ashrc", ".bash_login", ".bash_logout", ".bash_profile", ".bashrc",
    ".cshrc", ".dashrc", ".fishrc", ".ionrc", ".kshrc", ".profile",
    ".rcrc", ".shinit", ".shrc", ".tcshrc", ".zlogin", ".zlogout",
    ".zprofile", ".zshenv", ".zshrc",
})

_CONFIG_FILENAMES: FrozenSet[str] = frozenset({
    "bash_login", "bash_logout", "csh.login", "csh.logout", "login",
    "logout", "oilrc", "oshrc", "profile", "rc.elv", "rcrc", "shinit",
    "shrc", "tcsh.login", "tcsh.logout", "yshrc", "zlogin", "zlogout",
    "zprofile", "zshenv", "zshrc",
})

# ============================================================
# Interpreter by Extension / Filename (keys are lower case)
# ============================================================
_INTERPRETER_BY_EXTENSION: Dict[str, str] = {
    ".ashrc":        "ash",
    ".awk":          "awk",
    ".bash":         "bash",
    ".bash_login":   "bash",
    ".bash_logout":  "bash",
    ".bash_profile": "bash",
    ".bashrc":       "bash",
    ".bsdmakefile":  "bmake",
    ".csh":          "csh",
    ".cshrc":        "csh",
    ".dash":         "dash",
    ".dashrc":       "dash",
    ".elv":          "elvish",
    ".fish":         "fish",
    ".fishrc":       "fish",
    ".gawk":         "gawk",
    ".gnumakefile":  "gmake",
    ".hsh":          "hsh",
    ".ion":          "ion",
    ".ionrc":        "ion",
    ".ksh":          "ksh",
    ".ksh88":        "ksh",
    ".ksh93":        "ksh93",
    ".ksh93rc":      "ksh93",
    ".kshrc":        "ksh",
    ".lkshrc":       "lksh",
    ".lua":          "lua",
    ".makefile":     "make",
    ".mf":           "make",
    ".mksh":         "mksh",
    ".mkshrc":       "mksh",
    ".osh":          "osh",
    ".pdksh":        "pdksh",
    ".pdkshrc":      "pdksh",
    ".php":          "php",
    ".pmakefile":    "pmake",
    ".poshrc":       "posh",
    ".profile":      "sh",
    ".rc":           "rc",
    ".rcrc":         "rc",
    ".sed":          "sed",
    ".sh":           "sh",
    ".shinit":       "sh",
    ".shrc":         "sh",
    ".tcsh":         "tcsh",
    ".tcshrc":       "tcsh",
    ".ysh":          "ysh",
    ".zlogin":       "zsh",
    ".zlogout":      "zsh",
    ".zprofile":     "zsh",
    ".zsh":          "zsh",
    ".zshenv":       "zsh",
    ".zshprofile":   "zsh",
    ".zshrc":        "zsh",
}

_INTERPRETER_BY_FILENAME: Dict[str, str] = {
    ".ashrc":        "ash",
    ".bashrc":       "bash",
    ".cshrc":        "csh",
    ".dashrc":       "dash",
    ".fishrc":       "fish",
    ".ionrc":        "ion",
    ".ksh93rc":      "ksh93",
    ".kshrc":        "ksh",
    ".lkshrc":       "lksh",
    ".login":        "sh",
    ".logout":       "sh",
    ".mkshrc":       "mksh",
    ".pdkshrc":      "pdksh",
    ".poshrc":       "posh",
    ".rcrc":         "rc",
    ".shinit":       "sh",
    ".shrc":         "sh",
    ".tcshrc":       "tcsh",
    ".zlogin":       "zsh",
    ".zlogout":      "zsh",
    ".zprofile":     "zsh",
    ".zshenv":       "zsh",
    ".zshrc":        "zsh",
    "bsdmakefile":   "bmake",
    "csh.login":     "csh",
    "csh.logout":    "csh",
    "gnumakefile":   "gmake",
    "makefile":      "make",
    "oilrc":         "osh",
    "oshrc":         "osh",
    "pmakefile":     "pmake",
    "profile":       "sh",
    "rc.elv":        "elvish",
    "tcsh.login":    "tcsh",
    "tcsh.logout":   "tcsh",
    "yshrc":         "ysh",
    "zlogin":        "zsh",
    "zlogout":       "zsh",
    "zprofile":      "zsh",
    "zshenv":        "zsh",
    "zshrc":         "zsh",
}

# ============================================================
# POSIXy-ness by Interpreter
# ============================================================
_POSIXY_BY_INTERPRETER: Dict[str, bool] = {
    "ash":    True,
    "bash":   True,
    "bash4":  True,
    "bosh":   True,
    "dash":   True,
    "hsh":    True,
    "ksh":    True,
    "ksh88":  True,
    "ksh93":  True,
    "mksh":   True,
    "oil":    True,
    "oksh":   True,
    "osh":    True,
    "pdksh":  True,
    "posh":   True,
    "rksh":   True,
    "sh":     True,
    "yash":   True,
    "zsh":    True,

    "awk":    False,
    "csh":    False,
    "elvish": False,
    "etsh":   False,
    "expect": False,
    "fish":   False,
    "gawk":   False,
    "ion":    False,
    "jruby":  False,
    "jython": False,
    "lksh":   False,
    "lua":    False,
    "node":   False,
    "perl":   False,
    "perl6":  False,
    "php":    False,
    "python": False,
    "rc":     False,
    "ruby":   False,
    "sed":    False,
    "stash":  False,
    "swift":  False,
    "tclsh":  False,
    "tcsh":   False,
    "tsh":    False,
    "ysh":    False,
}

# Shells with the full modern bash feature set, as opposed to subsets such as ash or dash.
_FULL_BASH_INTERPRETERS: FrozenSet[str] = frozenset({"bash", "bash4"})

_KSH_INTERPRETERS: FrozenSet[str] = frozenset({
    "ksh", "ksh88", "ksh93", "mksh", "oksh", "pdksh", "rksh",
})

# ============================================================
# Alternative (non-POSIX, low level) shells
# ============================================================
_ALT_INTERPRETERS: FrozenSet[str] = frozenset({
    "csh", "elvish", "etsh", "fish", "ion", "lksh", "rc", "tcsh", "tsh",
})

_ALT_EXTENSIONS: FrozenSet[str] = frozenset({
    ".csh", ".cshrc", ".elv", ".etsh", ".fish", ".fishrc", ".ion",
    ".ionrc", ".lksh", ".rc", ".rcrc", ".tcsh", ".tcshrc", ".tsh",
})

_ALT_FILENAMES: FrozenSet[str] = frozenset({"csh.login", "csh.logout", "rc.elv"})

# Files produced by tools rather than written by script authors.
_MACHINE_EXTENSIONS: FrozenSet[str] = frozenset({
    ".sample", # git hook templates
})

# ============================================================
# Byte order marks (see https://en.wikipedia.org/wiki/Byte_order_mark)
# ============================================================
_BOMS: FrozenSet[bytes] = frozenset({
    b"\xFE\xFF",                 # UTF-16 BE
    b"\xFF\xFE",                 # UTF-16 LE
    b"\xEF\xBB\xBF",             # UTF-8
    b"\xF7\x64\x4C",             # UTF-1
    b"\x0E\xFE\xFF",             # SCSU
    b"\xFB\xEE\x28",             # BOCU-1
    b"\x00\x00\xFE\xFF",         # UTF-32 BE
    b"\xFF\xFE\x00\x00",         # UTF-32 LE
    b"\x2B\x2F\x76\x2B",         # UTF-7
    b"\x2B\x2F\x76\x2F",         # UTF-7
    b"\x2B\x2F\x76\x38",         # UTF-7
    b"\x2B\x2F\x76\x39",         # UTF-7
    b"\xDD\x73\x66\x73",         # UTF-EBCDIC
    b"\x84\x31\x95\x33",         # GB-18030
    b"\x2B\x2F\x76\x38\x3D",     # UTF-7, empty payload
})

BOM_LENGTHS: Tuple[int, ...] = (2, 3, 4, 5)


def _frozen(mapping: Mapping[str, object]) -> Mapping:
    for key in mapping:
        assert key == key.lower(), f"Table key is not lower case: {key}"
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ClassificationTables:
    """
    Read-only lookup tables driving classification.

    Every key is stored lower case and every lookup lowercases its probe,
    so callers never need to normalize names themselves.
    """
    posixy_by_extension: Mapping[str, bool] = field(default_factory=lambda: _frozen(_POSIXY_BY_EXTENSION))
    posixy_by_filename: Mapping[str, bool] = field(default_factory=lambda: _frozen(_POSIXY_BY_FILENAME))
    config_extensions: FrozenSet[str] = _CONFIG_EXTENSIONS
    config_filenames: FrozenSet[str] = _CONFIG_FILENAMES
    interpreter_by_extension: Mapping[str, str] = field(default_factory=lambda: _frozen(_INTERPRETER_BY_EXTENSION))
    interpreter_by_filename: Mapping[str, str] = field(default_factory=lambda: _frozen(_INTERPRETER_BY_FILENAME))
    posixy_by_interpreter: Mapping[str, bool] = field(default_factory=lambda: _frozen(_POSIXY_BY_INTERPRETER))
    full_bash_interpreters: FrozenSet[str] = _FULL_BASH_INTERPRETERS
    ksh_interpreters: FrozenSet[str] = _KSH_INTERPRETERS
    alt_interpreters: FrozenSet[str] = _ALT_INTERPRETERS
    alt_extensions: FrozenSet[str] = _ALT_EXTENSIONS
    alt_filenames: FrozenSet[str] = _ALT_FILENAMES
    machine_extensions: FrozenSet[str] = _MACHINE_EXTENSIONS
    boms: FrozenSet[bytes] = _BOMS

    def extension_posixy(self, extension: str) -> Optional[bool]:
        """None means the table has no opinion, which is not the same as False."""
        return self.posixy_by_extension.get(extension.lower())

    def filename_posixy(self, filename: str) -> Optional[bool]:
        return self.posixy_by_filename.get(filename.lower())

    def interpreter_posixy(self, interpreter: str) -> bool:
        return self.posixy_by_interpreter.get(interpreter.lower(), False)

    def is_config(self, extension: str, filename: str) -> bool:
        return extension.lower() in self.config_extensions or filename.lower() in self.config_filenames

    def extension_interpreter(self, extension: str) -> Optional[str]:
        return self.interpreter_by_extension.get(extension.lower())

    def filename_interpreter(self, filename: str) -> Optional[str]:
        return self.interpreter_by_filename.get(filename.lower())

    def is_machine_generated(self, extension: str) -> bool:
        return extension.lower() in self.machine_extensions

    def is_full_bash(self, interpreter: str) -> bool:
        return interpreter.lower() in self.full_bash_interpreters

    def is_ksh(self, interpreter: str) -> bool:
        return interpreter.lower() in self.ksh_interpreters

    def is_alt_shell(self, interpreter: str, extension: str, filename: str) -> bool:
        return interpreter.lower() in self.alt_interpreters or \
            extension.lower() in self.alt_extensions or \
            filename.lower() in self.alt_filenames

    def match_bom(self, head: bytes) -> int:
        """
        Returns the length of the byte order mark leading `head`, or 0.
        Shorter marks are tried first.
        """
        for length in BOM_LENGTHS:
            if length > len(head):
                break
            if head[:length] in self.boms:
                return length
        return 0


DEFAULT_TABLES = ClassificationTables()
