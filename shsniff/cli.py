from typing import Any, List, Optional, TypeAlias
import sys
import argparse
from pathlib import Path
import logging

from shsniff import __version__

##################################################################################################
# Main
##################################################################################################

ArgParser: TypeAlias = argparse.ArgumentParser


class Commands:
    def __init__(self, parser: ArgParser) -> None:
        self.root_parser = parser
        self.subparsers = parser.add_subparsers(dest='command')

    class Command:
        def __init__(self, commands: 'Commands', name: str, help: str) -> None:
            self.parser = commands.subparsers.add_parser(name, help=help)
            self.parser.add_argument('paths', type=str, nargs='*', default=['.'], help='Files or directories to scan (default: current directory).')
            self.parser.add_argument('--ignore-file', type=Path, help='Extra gitignore-style patterns of paths to skip.')

        def __enter__(self) -> ArgParser:
            return self.parser

        def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
            pass

    def __call__(self, name: str, help: str) -> 'Commands.Command':
        return Commands.Command(self, name, help)


def build_parser() -> ArgParser:
    parser = argparse.ArgumentParser(prog='shsniff', description='Identify and lint shell scripts.')
    parser.add_argument('--version', action='version', version=__version__)
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    commands = Commands(parser)

    with commands('find', help='Print the paths of shell scripts.') as cmd:
        mode = cmd.add_mutually_exclusive_group()
        mode.add_argument('--sh', action='store_true', help='Limit results to specifically bare POSIX sh scripts.')
        mode.add_argument('--alt', action='store_true', help='Limit results to alternative, non-POSIX low level shell scripts.')
        cmd.add_argument('--exclude-interpreters', type=str, default='', help='Remove results with the given interpreter(s) (comma separated).')
        cmd.add_argument('--print0', action='store_true', help='Delimit results with a null terminator for xargs -0.')

    with commands('dump', help='Print classification records as JSON.') as cmd:
        cmd.add_argument('--pretty', action='store_true', help='Prettyprint records.')
        cmd.add_argument('--eol', action='store_true', help='Report presence/absence of a final end of line sequence.')
        cmd.add_argument('--cr', action='store_true', help='Report presence/absence of any CR/CRLF.')

    with commands('lint', help='Lint shell scripts for portability, safety and security.') as cmd:
        cmd.add_argument('--no-eol', action='store_true', help='Skip the final end of line check.')
        cmd.add_argument('--no-cr', action='store_true', help='Skip the CR/CRLF check.')
        cmd.add_argument('--modulino', action='store_true', help='Enforce strict separation of application scripts vs. library scripts.')

    with commands('advise', help='Suggest rewriting POSIX shell scripts in a general purpose language.') as cmd:
        pass

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    from shsniff.ignore import default_ignores, read_ignore_file
    ignore = default_ignores()
    if args.ignore_file is not None:
        ignore = ignore + read_ignore_file(args.ignore_file)

    match args.command:
        case 'find':
            from shsniff.tasks.find import FindMode, find_scripts, write_line, write_null
            if args.sh:    mode = FindMode.PURE_SH
            elif args.alt: mode = FindMode.ALT_SHELL
            else:          mode = FindMode.POSIXY
            ok = find_scripts(
                args.paths,
                mode=mode,
                excluded_interpreters=args.exclude_interpreters.split(','),
                printer=write_null if args.print0 else write_line,
                ignore=ignore)
            return 0 if ok else 1

        case 'dump':
            from shsniff.sniff import SniffConfig
            from shsniff.tasks.dump import dump_smells
            config = SniffConfig(eol_check=args.eol, cr_check=args.cr)
            return 0 if dump_smells(args.paths, config, pretty=args.pretty, ignore=ignore) else 1

        case 'lint':
            from shsniff.tasks.lint import LintOptions, lint_scripts
            options = LintOptions(
                eol_check=not args.no_eol,
                cr_check=not args.no_cr,
                modulino_check=args.modulino)
            return 1 if lint_scripts(args.paths, options, ignore=ignore) else 0

        case 'advise':
            from shsniff.tasks.advise import advise_rewrites
            return 1 if advise_rewrites(args.paths, ignore=ignore) else 0

        case _:
            raise ValueError(f"Unknown command: {args.command}")


if __name__ == '__main__':
    sys.exit(main())
