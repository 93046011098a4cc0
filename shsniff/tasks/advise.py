from typing import List, Optional

from shsniff.ignore import IgnoreSet
from shsniff.messages import warning
from shsniff.sniff import SniffConfig
from shsniff.tasks.walk import sniff_paths


def advise_rewrites(roots: List[str], ignore: Optional[IgnoreSet] = None) -> bool:
    """
    Suggests moving every POSIX shell script to a safer general purpose
    scripting language. Returns True when any script was found or any
    path could not be classified.
    """
    found = False
    for smell, err in sniff_paths(roots, SniffConfig(), ignore):
        if err is not None:
            found = True
        elif smell.posixy:
            warning(f"Rewrite POSIX script in Ruby or other safer general purpose scripting language: {smell.path}")
            found = True
    return found
