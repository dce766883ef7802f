import re

from typing import Any, Optional
from switchkit.errors import ParseError
from switchkit.option import Option, OptionType

NUMERIC = re.compile(r"\d*\.\d+|\d+", re.ASCII)


def takesToken(option: Option, peek: Optional[str]) -> bool:
    """Checks if the option consumes the token following it."""
    if option.type is OptionType.DEFAULT:
        return peek is not None and not peek.startswith("-")
    return option.takesArgument()


def parseNumeric(switch: str, arg: str) -> int | float:
    """
    Parses an unsigned integer or decimal literal spanning the whole token.
    """
    if not NUMERIC.fullmatch(arg):
        raise ParseError(f"expected numeric value for '{switch}'; got {arg!r}")
    return float(arg) if "." in arg else int(arg)


def parseHash(arg: str) -> dict[str, Optional[str]]:
    """
    Parses "name:string age:integer" into {"name": "string", "age": "integer"}.

    A pair without ':' maps to None; the last occurrence of a key wins.
    """
    res: dict[str, Optional[str]] = {}
    for pair in arg.split():
        key, sep, value = pair.partition(":")
        res[key] = value if sep else None
    return res


def parseArray(arg: str) -> list[str]:
    """Parses "[a, b, c]" (brackets optional) into ["a", "b", "c"]."""
    if arg.startswith("["):
        arg = arg[1:]
    if arg.endswith("]"):
        arg = arg[:-1]
    if not arg.strip():
        return []
    items = [item.strip() for item in arg.split(",")]
    # trailing empty fields are dropped, inner ones kept
    while items and not items[-1]:
        items.pop()
    return items


def convert(
    option: Option, switch: str, token: Optional[str], negated: bool = False
) -> Any:
    """
    Converts the token consumed by a switch into its typed value.

    Args:
        option: The option the switch designates.
        switch: The switch as it appeared, used in error messages.
        token: The consumed token, None if the switch consumed nothing.
        negated: True if the switch was an automatic `--no-X` negation.
    """
    if option.type is OptionType.BOOLEAN:
        return not negated

    if option.type is OptionType.DEFAULT:
        return True if token is None else token

    assert token is not None

    if option.type is OptionType.STRING:
        return token
    elif option.type is OptionType.NUMERIC:
        return parseNumeric(switch, token)
    elif option.type is OptionType.HASH:
        return parseHash(token)
    elif option.type is OptionType.ARRAY:
        return parseArray(token)

    raise ValueError(f"Unknown option type {option.type}")
