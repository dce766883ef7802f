from enum import Enum
import re
import dataclasses as dt

from typing import Any, Optional, Sequence
from switchkit import utils

LONG_FORM = re.compile(r"--\w[\w-]*", re.ASCII)
SHORT_FORM = re.compile(r"-[a-zA-Z]")

# --- Types ------------------------------------------------------------------ #


class OptionType(Enum):
    """
    The kind of value a switch carries.
    """

    DEFAULT = "default"
    STRING = "string"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    HASH = "hash"
    ARRAY = "array"

    def takesArgument(self) -> bool:
        """Checks if a switch of this type must be followed by a value."""
        return self in (
            OptionType.STRING,
            OptionType.NUMERIC,
            OptionType.HASH,
            OptionType.ARRAY,
        )


def _normalizeName(name: str) -> str:
    long = name if name.startswith("--") else f"--{name}"
    if not LONG_FORM.fullmatch(long):
        raise ValueError(f"Invalid switch name '{name}'")
    return long


def _normalizeAlias(alias: str) -> str:
    if not alias.startswith("-"):
        alias = f"-{alias}" if len(alias) == 1 else f"--{alias}"
    if not SHORT_FORM.fullmatch(alias) and not LONG_FORM.fullmatch(alias):
        raise ValueError(f"Invalid switch alias '{alias}'")
    return alias


# --- Option ----------------------------------------------------------------- #


@dt.dataclass(frozen=True)
class Option:
    """
    Describes one switch.

    Attributes:
        name: The long form (e.g., "--level"); the leading dashes may be omitted.
        type: The kind of value the switch carries.
        default: The value used when the switch is absent, None for no default.
        required: True if parsing must fail when the switch is absent.
        aliases: Explicit extra forms (e.g., "-l"); a short form is derived when empty.
        description: A description of the switch.
    """

    name: str
    type: OptionType = OptionType.BOOLEAN
    default: Any = None
    required: bool = False
    aliases: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "name", _normalizeName(self.name))
        object.__setattr__(self, "type", OptionType(self.type))
        aliases = [_normalizeAlias(a) for a in utils.asList(self.aliases)]
        object.__setattr__(self, "aliases", tuple(utils.uniq(aliases)))

    @property
    def canonicalName(self) -> str:
        """Returns the key under which the value is stored (e.g., "level" for "--level")."""
        return self.name[2:]

    def takesArgument(self) -> bool:
        return self.type.takesArgument()

    def isBool(self) -> bool:
        return self.type is OptionType.BOOLEAN

    def sample(self) -> Optional[str]:
        """Returns the placeholder shown after '=' in a usage line, if any."""
        if self.isBool():
            return None

        if self.default is not None:
            if isinstance(self.default, dict):
                return " ".join(f"{k}:{v}" for k, v in self.default.items())
            if isinstance(self.default, (list, tuple)):
                return ",".join(str(v) for v in self.default)
            if isinstance(self.default, bool):
                return None
            return str(self.default)

        return {
            OptionType.STRING: self.canonicalName.upper(),
            OptionType.NUMERIC: "N",
            OptionType.HASH: "key:value",
            OptionType.ARRAY: "one,two,three",
        }.get(self.type)

    def usage(self) -> str:
        sample = self.sample()
        res = f"{self.name}={sample}" if sample else self.name
        return res if self.required else f"[{res}]"

    @staticmethod
    def parse(key: str | Sequence[str], value: Any = None) -> "Option":
        """
        Builds an option from the shorthand `{"--level": "numeric"}` style.

        Args:
            key: The long name, or a sequence of the long name followed by aliases.
            value: An `OptionType` or its name, "required" for a required string,
                "optional" for a default-typed switch, or a default value whose
                Python type selects the option type.
        """
        if isinstance(key, str):
            name, aliases = key, []
        else:
            name, *aliases = key

        def make(type: OptionType, default: Any = None, required: bool = False):
            return Option(name, type, default, required, tuple(aliases))

        if value is None:
            return make(OptionType.BOOLEAN)
        if isinstance(value, OptionType):
            return make(value)
        if value == "required":
            return make(OptionType.STRING, required=True)
        if value == "optional":
            return make(OptionType.DEFAULT)
        if isinstance(value, str) and value in {t.value for t in OptionType}:
            return make(OptionType(value))

        if isinstance(value, bool):
            return make(OptionType.BOOLEAN, value)
        elif isinstance(value, (int, float)):
            return make(OptionType.NUMERIC, value)
        elif isinstance(value, str):
            return make(OptionType.STRING, value)
        elif isinstance(value, dict):
            return make(OptionType.HASH, value)
        elif isinstance(value, (list, tuple)):
            return make(OptionType.ARRAY, list(value))

        raise ValueError(f"Cannot derive a switch type from {value!r}")
