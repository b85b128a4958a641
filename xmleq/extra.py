"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import sys

if sys.version_info >= (3, 12):
    from typing import override as override  # noqa: F401
else:
    from typing_extensions import override as override  # noqa: F401

if sys.version_info >= (3, 11):
    from typing import LiteralString as LiteralString  # noqa: F401
else:
    from typing_extensions import LiteralString as LiteralString  # noqa: F401
