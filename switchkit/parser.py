import copy
import logging
import dataclasses as dt

from collections import deque
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Sequence
from switchkit import coerce, grammar, utils
from switchkit.errors import ParseError
from switchkit.grammar import Shape
from switchkit.option import Option
from switchkit.registry import Registry

__all__ = ["Parser", "ParseResult", "ParseError", "Values"]

_logger = logging.getLogger(__name__)

# --- Result ----------------------------------------------------------------- #


class Values(Mapping[str, Any]):
    """
    A read-only mapping of canonical names to parsed values.

    Keys are looked up indifferently: "dry-run", "dry_run" and the attribute
    `values.dry_run` all designate the same entry. Attribute access does not
    reach entries named like mapping methods (`items`, `keys`, `values`,
    `get`); subscript those instead.
    """

    _data: dict[str, Any]

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data = dict(data or {})

    def _key(self, key: str) -> str:
        if key in self._data:
            return key
        dashed = utils.dashCase(key)
        if dashed in self._data:
            return dashed
        return utils.snakeCase(key)

    def __getitem__(self, key: str) -> Any:
        return self._data[self._key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"Values({self._data!r})"


@dt.dataclass(frozen=True)
class ParseResult:
    """
    The outcome of a successful parse.

    Attributes:
        values: Parsed values, pre-filled with defaults.
        leading: Positional arguments found before the first switch.
        trailing: Everything left after the last switch.
    """

    values: Values
    leading: tuple[str, ...] = ()
    trailing: tuple[str, ...] = ()

    @property
    def positionals(self) -> list[str]:
        return list(self.leading + self.trailing)


# --- Parser ----------------------------------------------------------------- #


class _State:
    """
    The token cursor of a single parse.
    """

    _registry: Registry
    _stack: deque[str]

    def __init__(self, registry: Registry, args: Sequence[str]):
        self._registry = registry
        self._stack = deque(args)

    def peek(self) -> Optional[str]:
        return self._stack[0] if self._stack else None

    def shift(self) -> str:
        return self._stack.popleft()

    def unshift(self, args: list[str]) -> None:
        self._stack.extendleft(reversed(args))

    def rest(self) -> tuple[str, ...]:
        return tuple(self._stack)

    def currentIsSwitch(self) -> bool:
        return grammar.isSwitch(self.peek(), self._registry)


class Parser:
    """
    Parses token streams against a fixed set of options.
    """

    registry: Registry

    def __init__(self, options: Iterable[Option] | Registry):
        if isinstance(options, Registry):
            self.registry = options
        else:
            self.registry = Registry.build(options)

    def usage(self) -> str:
        return self.registry.usage()

    def parse(self, args: Sequence[str], skipLeading: bool = True) -> ParseResult:
        """
        Parses a list of arguments.

        Args:
            args: The tokens to parse, left untouched.
            skipLeading: Collect positional arguments found before the first
                switch instead of stopping on them.

        Raises:
            ParseError: A switch is missing its value, a value is malformed, or
                a required switch is absent.
        """
        state = _State(self.registry, args)
        values: dict[str, Any] = copy.deepcopy(dict(self.registry.defaults))

        leading: list[str] = []
        if skipLeading:
            while state.peek() is not None and not state.currentIsSwitch():
                leading.append(state.shift())

        while state.currentIsSwitch():
            match = grammar.classify(state.shift())
            assert match is not None

            if match.shape is Shape.SQUASHED:
                state.unshift(match.expand())
                continue

            if match.value is not None:
                state.unshift([match.value])

            switch = self.registry.normalize(match.switch)
            option = self.registry.lookup(switch)
            assert option is not None

            if option.takesArgument():
                peek = state.peek()
                if peek is None:
                    raise ParseError(f"no value provided for argument '{switch}'")
                if state.currentIsSwitch():
                    raise ParseError(f"cannot pass switch '{peek}' as an argument")

            token = state.shift() if coerce.takesToken(option, state.peek()) else None
            value = coerce.convert(
                option, switch, token, self.registry.isNegation(switch)
            )
            _logger.debug(f"Matched '{switch}' -> {option.canonicalName}={value!r}")
            values[option.canonicalName] = value

        for option in self.registry.options:
            if option.required and values.get(option.canonicalName) is None:
                raise ParseError(
                    f"no value provided for required argument '{option.name}'"
                )

        return ParseResult(Values(values), tuple(leading), state.rest())
