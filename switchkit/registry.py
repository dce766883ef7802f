import re
import logging

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional
from switchkit.option import Option

_logger = logging.getLogger(__name__)

NEGATED = re.compile(r"--no-(\w[\w-]*)", re.ASCII)


class Registry:
    """
    Indexes options by every textual form they can be spelled with.

    A registry is built once per set of options and never mutated afterward,
    so one instance can serve any number of parses.
    """

    _switches: dict[str, Option]
    _shorts: dict[str, str]
    _defaults: dict[str, Any]

    def __init__(self):
        self._switches = {}
        self._shorts = {}
        self._defaults = {}

    @staticmethod
    def build(options: Iterable[Option]) -> "Registry":
        """Builds a registry from a list of options."""
        r = Registry()

        for option in options:
            if option.name in r._switches:
                raise ValueError(f"Switch '{option.name}' is already defined")

            if option.default is not None:
                r._defaults[option.canonicalName] = option.default

            shorts = list(option.aliases)
            name = option.canonicalName
            if not shorts and len(name) > 1 and name[0].isalpha():
                shorts.append(f"-{name[0]}")

            for short in shorts:
                owner = r._shorts.setdefault(short, option.name)
                if owner != option.name:
                    _logger.debug(
                        f"Dropping shortcut '{short}' of '{option.name}', already taken by '{owner}'"
                    )

            r._switches[option.name] = option

        # a long form always wins over a shortcut spelled the same way
        for short in list(r._shorts.keys()):
            if short in r._switches:
                _logger.debug(f"Dropping shortcut '{short}', it is a switch name")
                del r._shorts[short]

        return r

    @property
    def options(self) -> list[Option]:
        return list(self._switches.values())

    @property
    def defaults(self) -> Mapping[str, Any]:
        return MappingProxyType(self._defaults)

    @property
    def forms(self) -> Mapping[str, Option]:
        """Returns every recognized form mapped to its option."""
        res = dict(self._switches)
        for short, name in self._shorts.items():
            res[short] = self._switches[name]
        return MappingProxyType(res)

    def normalize(self, form: str) -> str:
        """Resolves a shortcut to the long form it stands for."""
        return self._shorts.get(form, form)

    def lookup(self, form: str) -> Optional[Option]:
        """
        Returns the option a form designates, following shortcuts and the
        `--no-X` negation of a boolean `X`, where `--X` may be a long alias.
        """
        form = self.normalize(form)
        if form in self._switches:
            return self._switches[form]

        m = NEGATED.fullmatch(form)
        if m:
            option = self._switches.get(self.normalize(f"--{m.group(1)}"))
            if option and option.isBool():
                return option

        return None

    def isNegation(self, form: str) -> bool:
        """Checks if a form is an automatic `--no-X` negation."""
        form = self.normalize(form)
        return form not in self._switches and self.lookup(form) is not None

    def isSwitch(self, form: str) -> bool:
        return self.lookup(form) is not None

    def usage(self) -> str:
        return " ".join(o.usage() for o in self._switches.values())
