"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import locale
from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Optional

from .environment import ArgumentError
from .extra import override


class StringComparer(ABC):
    """
    Decides whether two strings are equal.

    Equality is derived from a match key such that two strings are equal if and only if their keys are equal. Keys
    are hashable, which allows looking up equal strings in a dictionary. `None` is a value of its own, distinct from
    the empty string.
    """

    @abstractmethod
    def _key(self, value: str) -> Hashable: ...

    def key(self, value: Optional[str]) -> Hashable:
        "Returns a hashable key such that equal strings have equal keys."

        if value is None:
            return None
        return self._key(value)

    def equals(self, left: Optional[str], right: Optional[str]) -> bool:
        if left is right:
            return True
        if left is None or right is None:
            return False
        return self._key(left) == self._key(right)


class OrdinalComparer(StringComparer):
    "Compares strings code point by code point."

    @override
    def _key(self, value: str) -> Hashable:
        return value

    @override
    def equals(self, left: Optional[str], right: Optional[str]) -> bool:
        return left == right


class OrdinalIgnoreCaseComparer(StringComparer):
    "Compares strings code point by code point after Unicode case folding."

    @override
    def _key(self, value: str) -> Hashable:
        return value.casefold()


class CurrentCultureComparer(StringComparer):
    """
    Compares strings with the collation rules of the current locale (`LC_COLLATE`).

    Strings whose transformed forms are identical collate as equal. Strings with an embedded NUL character cannot be
    transformed, and are compared code point by code point.
    """

    ignore_case: bool

    def __init__(self, *, ignore_case: bool = False) -> None:
        self.ignore_case = ignore_case

    @override
    def _key(self, value: str) -> Hashable:
        if self.ignore_case:
            value = value.casefold()
        if "\0" in value:
            # a tuple never equals a transformed string
            return (value,)
        return locale.strxfrm(value)


ORDINAL = OrdinalComparer()
ORDINAL_IGNORE_CASE = OrdinalIgnoreCaseComparer()
CURRENT_CULTURE = CurrentCultureComparer()
CURRENT_CULTURE_IGNORE_CASE = CurrentCultureComparer(ignore_case=True)

_COMPARERS: dict[str, StringComparer] = {
    "ordinal": ORDINAL,
    "ordinal-ignore-case": ORDINAL_IGNORE_CASE,
    "current-culture": CURRENT_CULTURE,
    "current-culture-ignore-case": CURRENT_CULTURE_IGNORE_CASE,
}

STRING_COMPARER_NAMES = tuple(_COMPARERS.keys())


def get_string_comparer(name: str) -> StringComparer:
    """
    Looks up a string comparer by name.

    :param name: One of `ordinal`, `ordinal-ignore-case`, `current-culture` or `current-culture-ignore-case`.
    :returns: A string comparer instance.
    """

    comparer = _COMPARERS.get(name.lower().replace("_", "-"))
    if comparer is None:
        raise ArgumentError(f"unknown string comparer: {name}; expected one of: {', '.join(STRING_COMPARER_NAMES)}")
    return comparer
