import sys

RED = "\033[31m"
CYAN = "\033[36m"
WHITE = "\033[37m"
YELLOW = "\033[33m"

BOLD = "\033[1m"
UNDERLINE = "\033[4m"
RESET = "\033[0m"


def indent(text: str, indent: int = 4) -> str:
    return " " * indent + text.replace("\n", "\n" + " " * indent)


def title(text: str):
    print(f"{BOLD+WHITE+UNDERLINE}{text}{RESET}")


def subtitle(text: str):
    print(f"{BOLD+WHITE}{text}{RESET}:")


def _report(color: str, label: str, msg: str) -> None:
    print(f"{color}{label}:{RESET} {msg}\n", file=sys.stderr)


def error(msg: str) -> None:
    _report(RED, "Error", msg)


def warning(msg: str) -> None:
    _report(YELLOW, "Warning", msg)
