"""Input normalization for the public access control surface."""

from typing import Iterable, List, Optional, Union

Name = Union[str, int]
Names = Union[Name, Iterable[Name]]


def make_list(value: Optional[Names]) -> List[str]:
    """Normalize a single name or a collection of names to a list of strings.

    ``None`` becomes an empty list. Order is kept and duplicates are dropped.
    """
    if value is None:
        return []
    if isinstance(value, (str, int)):
        return [str(value)]

    result: List[str] = []
    for item in value:
        name = str(item)
        if name not in result:
            result.append(name)
    return result


def make_optional_list(value: Optional[Names]) -> Optional[List[str]]:
    """Like :func:`make_list` but keeps ``None`` as "not given"."""
    if value is None:
        return None
    return make_list(value)
