from enum import Enum
import re
import dataclasses as dt

from typing import Optional
from switchkit.registry import Registry

SQUASHED = re.compile(r"-([a-zA-Z]{2,})")
INLINE = re.compile(r"(--\w[\w-]*|-[a-zA-Z])=(.*)", re.ASCII | re.DOTALL)
SHORT_NUM = re.compile(r"(-[a-zA-Z])([\d.]*\d[\d.]*)", re.ASCII)
LONG = re.compile(r"--\w[\w-]*", re.ASCII)
SHORT = re.compile(r"-[a-zA-Z]")


class Shape(Enum):
    """
    The syntactic shapes a switch token can take, in matching priority.
    """

    SQUASHED = 0
    INLINE = 1
    LONG = 2
    SHORT = 3


@dt.dataclass(frozen=True)
class Match:
    """
    A token recognized as switch-shaped.

    Attributes:
        shape: Which shape the token matched.
        switch: The switch form (e.g., "-l" for "-l3"); the whole token for squashed clusters.
        value: The value split off an inline-value token, None otherwise.
    """

    shape: Shape
    switch: str
    value: Optional[str] = None

    def expand(self) -> list[str]:
        """Returns the tokens this match stands for, to be pushed back onto the stream."""
        if self.shape is Shape.SQUASHED:
            return [f"-{c}" for c in self.switch[1:]]
        if self.value is not None:
            return [self.switch, self.value]
        return [self.switch]


def classify(token: str) -> Optional[Match]:
    """Classifies a token by shape alone, without consulting any registry."""
    if SQUASHED.fullmatch(token):
        return Match(Shape.SQUASHED, token)

    m = INLINE.fullmatch(token) or SHORT_NUM.fullmatch(token)
    if m:
        return Match(Shape.INLINE, m.group(1), m.group(2))

    if LONG.fullmatch(token):
        return Match(Shape.LONG, token)

    if SHORT.fullmatch(token):
        return Match(Shape.SHORT, token)

    return None


def _isBoolShort(registry: Registry, form: str) -> bool:
    option = registry.lookup(form)
    return option is not None and option.isBool()


def isSwitch(token: Optional[str], registry: Registry) -> bool:
    """
    Checks if a token is a switch known to the registry; anything else is a
    positional argument.
    """
    if token is None:
        return False

    m = classify(token)
    if m is None:
        return False

    if m.shape is Shape.SQUASHED:
        return all(_isBoolShort(registry, f) for f in m.expand())

    return registry.isSwitch(m.switch)
