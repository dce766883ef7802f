from typing import Iterable, TypeVar, cast, Optional, Union

T = TypeVar("T")


def uniq(l: Iterable[T]) -> list[T]:
    """Keeps the first occurrence of every item, preserving order."""
    result: list[T] = []
    for i in l:
        if i not in result:
            result.append(i)
    return result


def asList(i: Optional[Union[T, list[T], tuple[T, ...]]]) -> list[T]:
    if i is None:
        return []
    if isinstance(i, (list, tuple)):
        return cast(list[T], list(i))
    return [i]


def dashCase(s: str) -> str:
    return s.replace("_", "-")


def snakeCase(s: str) -> str:
    return s.replace("-", "_")
