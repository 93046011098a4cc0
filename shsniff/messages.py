from termcolor import colored

###############################################################################
# Output prefixes
###############################################################################

def _mark(symbol: str, color: str) -> str:
    return '[' + colored(symbol, color) + ']'


def _message(symbol: str, color: str, *args) -> None:
    prefix = _mark(symbol, color)
    indent = ' ' * len(f"[{symbol}]")
    msg = '\n'.join(str(arg) for arg in args)
    for i, line in enumerate(msg.split('\n')):
        print(f"{prefix if i == 0 else indent} {line}")


def error(*msg) -> None:
    _message("✗", "red", *msg)


def warning(*msg) -> None:
    _message("?", "yellow", *msg)


def info(*msg) -> None:
    _message("i", "blue", *msg)
