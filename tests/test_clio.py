"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import unittest
from argparse import ArgumentParser
from dataclasses import dataclass, field
from io import StringIO
from typing import Literal

from xmleq.clio import add_arguments, boolean_option, composite_option, get_options, value_option
from xmleq.options import ComparisonOptions, ComparisonSettings


@dataclass
class CompositeOption:
    int_val: int = field(default=12, metadata=value_option("Help text for integer option."))
    optional_int_val: int | None = field(default=None, metadata=value_option("Help text for optional integer option."))
    str_val: str = field(default="string", metadata=value_option("Help text for string option."))
    literal_val: Literal["one", "two", "three"] = field(
        default="two",
        metadata=value_option("Help text for choice option."),
    )
    untracked_val: str = "untracked"


@dataclass
class Options:
    ignore_flag: bool = field(
        default=False,
        metadata=boolean_option(
            "Help text for the case when flag is enabled.",
            "Help text for the case when flag is disabled.",
        ),
    )
    bool_flag: bool = field(
        default=True,
        metadata=boolean_option(
            "Help text for the case when flag is enabled.",
            "Help text for the case when flag is disabled.",
        ),
    )
    untracked_value: str = "untracked"
    untracked_class: CompositeOption = field(default_factory=CompositeOption)


@dataclass
class NestedOptions(Options):
    nested: CompositeOption = field(default_factory=CompositeOption, metadata=composite_option())


@dataclass
class FlatOptions(Options):
    flat: CompositeOption = field(default_factory=CompositeOption, metadata=composite_option(flatten=True))


class TestCommandLine(unittest.TestCase):
    def test_hierarchical(self) -> None:
        parser = ArgumentParser()
        add_arguments(parser, NestedOptions)

        s = StringIO()
        parser.print_help(file=s)
        text = s.getvalue()
        self.assertIn("usage:", text)
        self.assertIn("--ignore-flag", text)
        self.assertIn("--compare-flag", text)
        self.assertIn("--bool-flag", text)
        self.assertIn("--no-bool-flag", text)
        self.assertIn("--nested-int-val INT", text)

        args = parser.parse_args(
            [
                "--nested-int-val=23",
                "--nested-optional-int-val=45",
                "--nested-str-val=text",
                "--nested-literal-val=three",
                "--ignore-flag",
                "--no-bool-flag",
            ]
        )
        options = get_options(args, NestedOptions)

        self.assertTrue(options.ignore_flag)
        self.assertFalse(options.bool_flag)
        self.assertEqual(options.nested.int_val, 23)
        self.assertEqual(options.nested.optional_int_val, 45)
        self.assertEqual(options.nested.str_val, "text")
        self.assertEqual(options.nested.literal_val, "three")
        self.assertEqual(options.nested.untracked_val, "untracked")

    def test_flat(self) -> None:
        parser = ArgumentParser()
        add_arguments(parser, FlatOptions)

        s = StringIO()
        parser.print_help(file=s)
        text = s.getvalue()
        self.assertIn("--int-val INT", text)
        self.assertNotIn("--flat-int-val", text)

        args = parser.parse_args(["--int-val=23", "--optional-int-val=45", "--str-val=text", "--literal-val=one", "--compare-flag"])
        options = get_options(args, FlatOptions)

        self.assertFalse(options.ignore_flag)
        self.assertTrue(options.bool_flag)
        self.assertEqual(options.flat.int_val, 23)
        self.assertEqual(options.flat.optional_int_val, 45)
        self.assertEqual(options.flat.str_val, "text")
        self.assertEqual(options.flat.literal_val, "one")

    def test_defaults(self) -> None:
        parser = ArgumentParser()
        add_arguments(parser, FlatOptions)
        options = get_options(parser.parse_args([]), FlatOptions)
        self.assertEqual(options, FlatOptions())

    def test_comparison_settings(self) -> None:
        parser = ArgumentParser()
        add_arguments(parser, ComparisonSettings)

        s = StringIO()
        parser.print_help(file=s)
        text = s.getvalue()
        self.assertIn("--preset", text)
        self.assertIn("--processing-instructions", text)
        self.assertIn("--ignore-text-outside-children", text)
        self.assertIn("--compare-text-outside-children", text)
        self.assertNotIn("--levels-", text)

        args = parser.parse_args(["--preset=legacy", "--elements=ignore-order", "--document-types=ignore-additional", "--string-comparer=ordinal"])
        settings = get_options(args, ComparisonSettings)
        self.assertEqual(settings.preset, "legacy")
        self.assertEqual(settings.string_comparer, "ordinal")
        self.assertEqual(settings.levels.elements, "ignore-order")
        self.assertEqual(settings.levels.document_types, "ignore-additional")
        self.assertEqual(settings.levels.comments, "significant")
        self.assertEqual(
            settings.to_options(),
            ComparisonOptions.LEGACY | ComparisonOptions.IGNORE_ELEMENT_ORDER | ComparisonOptions.IGNORE_ADDITIONAL_DOCUMENT_TYPES,
        )

    def test_rejects_unknown_choice(self) -> None:
        parser = ArgumentParser()
        add_arguments(parser, ComparisonSettings)
        with self.assertRaises(SystemExit):
            parser.parse_args(["--document-types=ignore-order"])


if __name__ == "__main__":
    unittest.main()
