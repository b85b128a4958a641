"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import os


class ArgumentError(ValueError):
    "Raised when wrong arguments are passed to a function call."


class ParseError(RuntimeError):
    "Raised when an XML document cannot be parsed."


class ComparisonEnvironment:
    """
    Defaults for comparing XML documents, acquired from explicit arguments or environment variables.

    :param preset: Name of a predefined set of comparison options, e.g. `standard` or `semantic`.
    :param string_comparer: Name of the string comparer to use, e.g. `ordinal` or `current-culture`.
    """

    preset: str | None
    string_comparer: str | None

    def __init__(
        self,
        preset: str | None = None,
        string_comparer: str | None = None,
    ) -> None:
        opt_preset = preset or os.getenv("XMLEQ_PRESET")
        opt_string_comparer = string_comparer or os.getenv("XMLEQ_STRING_COMPARER")

        if opt_preset is not None and not opt_preset.strip():
            raise ArgumentError("comparison preset must not be blank")
        if opt_string_comparer is not None and not opt_string_comparer.strip():
            raise ArgumentError("string comparer name must not be blank")

        self.preset = opt_preset.strip().lower() if opt_preset else None
        self.string_comparer = opt_string_comparer.strip().lower() if opt_string_comparer else None
