"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import unittest
from typing import Optional, Union

from .compare import deep_equals
from .formatting import describe_mismatch
from .nodes import Node
from .options import ComparisonOptions
from .strings import StringComparer


class XmlAssertions(unittest.TestCase):
    "Assertions that compare document trees for structural equivalence."

    def assertXmlEquivalent(
        self,
        first: Optional[Node],
        second: Optional[Node],
        options: Union[ComparisonOptions, int] = ComparisonOptions.NONE,
        comparer: Optional[StringComparer] = None,
        msg: Optional[str] = None,
    ) -> None:
        mismatch = deep_equals(first, second, options, comparer)
        if mismatch is not None:
            standardMsg = describe_mismatch(mismatch)
            self.fail(self._formatMessage(msg, standardMsg))

    def assertXmlNotEquivalent(
        self,
        first: Optional[Node],
        second: Optional[Node],
        options: Union[ComparisonOptions, int] = ComparisonOptions.NONE,
        comparer: Optional[StringComparer] = None,
        msg: Optional[str] = None,
    ) -> None:
        if deep_equals(first, second, options, comparer) is None:
            standardMsg = "document trees are equivalent"
            self.fail(self._formatMessage(msg, standardMsg))
