from typing import List, Optional

from shsniff.ignore import IgnoreSet
from shsniff.sniff import SniffConfig
from shsniff.tasks.walk import sniff_paths


def dump_smells(roots: List[str], config: SniffConfig = SniffConfig(), pretty: bool = False, ignore: Optional[IgnoreSet] = None) -> bool:
    """
    Prints one JSON classification record per file. Returns False if any
    path could not be classified.
    """
    ok = True
    for smell, err in sniff_paths(roots, config, ignore):
        if err is not None:
            ok = False
            continue
        if smell.directory:
            continue
        print(smell.to_json(pretty=pretty))
    return ok
