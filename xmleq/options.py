"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import enum
from dataclasses import dataclass, field
from typing import Literal

from .clio import boolean_option, composite_option, value_option
from .environment import ArgumentError


class ComparisonOptions(enum.IntFlag):
    """
    Controls which differences between two document trees are significant.

    Stronger settings of a family imply weaker ones: ignoring all items of a kind implies ignoring additional items,
    which in turn implies ignoring their order. Composite members carry the bits of the settings they imply.
    """

    NONE = 0

    IGNORE_ATTRIBUTE_ORDER = 1 << 0
    IGNORE_ADDITIONAL_ATTRIBUTES = IGNORE_ATTRIBUTE_ORDER | 1 << 1
    IGNORE_ATTRIBUTES = 1 << 2

    IGNORE_ELEMENT_ORDER = 1 << 3
    IGNORE_ADDITIONAL_ELEMENTS = IGNORE_ELEMENT_ORDER | 1 << 4
    IGNORE_ELEMENTS = 1 << 5

    IGNORE_COMMENT_ORDER = 1 << 6
    IGNORE_ADDITIONAL_COMMENTS = IGNORE_COMMENT_ORDER | 1 << 7
    IGNORE_COMMENTS = 1 << 8

    IGNORE_TEXT_ORDER = 1 << 9
    IGNORE_ADDITIONAL_TEXT = IGNORE_TEXT_ORDER | 1 << 10
    IGNORE_TEXT_OUTSIDE_OF_CHILDREN = 1 << 11
    IGNORE_TEXT = 1 << 12

    IGNORE_PROCESSING_INSTRUCTION_ORDER = 1 << 13
    IGNORE_ADDITIONAL_PROCESSING_INSTRUCTIONS = IGNORE_PROCESSING_INSTRUCTION_ORDER | 1 << 14
    IGNORE_PROCESSING_INSTRUCTIONS = 1 << 15

    IGNORE_ADDITIONAL_DOCUMENT_TYPES = 1 << 16
    IGNORE_DOCUMENT_TYPES = 1 << 17

    # presets
    EXACT = NONE
    STANDARD = (
        IGNORE_COMMENTS | IGNORE_PROCESSING_INSTRUCTIONS | IGNORE_DOCUMENT_TYPES | IGNORE_TEXT_OUTSIDE_OF_CHILDREN | IGNORE_ATTRIBUTE_ORDER
    )
    NORMALISED = IGNORE_ATTRIBUTE_ORDER | IGNORE_ELEMENT_ORDER | IGNORE_COMMENT_ORDER | IGNORE_TEXT_ORDER | IGNORE_PROCESSING_INSTRUCTION_ORDER
    LOOSE = NORMALISED | STANDARD
    IGNORE_ADDITIONAL = (
        IGNORE_ADDITIONAL_ATTRIBUTES
        | IGNORE_ADDITIONAL_ELEMENTS
        | IGNORE_ADDITIONAL_COMMENTS
        | IGNORE_ADDITIONAL_TEXT
        | IGNORE_ADDITIONAL_PROCESSING_INSTRUCTIONS
        | IGNORE_ADDITIONAL_DOCUMENT_TYPES
    )
    LEGACY = IGNORE_COMMENTS | IGNORE_PROCESSING_INSTRUCTIONS | IGNORE_DOCUMENT_TYPES
    SEMANTIC = IGNORE_ADDITIONAL | STANDARD


_PRESETS: dict[str, ComparisonOptions] = {
    "exact": ComparisonOptions.EXACT,
    "standard": ComparisonOptions.STANDARD,
    "normalised": ComparisonOptions.NORMALISED,
    "loose": ComparisonOptions.LOOSE,
    "ignore-additional": ComparisonOptions.IGNORE_ADDITIONAL,
    "legacy": ComparisonOptions.LEGACY,
    "semantic": ComparisonOptions.SEMANTIC,
}

PRESET_NAMES = tuple(_PRESETS.keys())


def get_preset(name: str) -> ComparisonOptions:
    "Looks up a predefined set of comparison options by name."

    options = _PRESETS.get(name.lower().replace("_", "-"))
    if options is None:
        raise ArgumentError(f"unknown comparison preset: {name}; expected one of: {', '.join(PRESET_NAMES)}")
    return options


def _has(options: ComparisonOptions, flag: ComparisonOptions) -> bool:
    return options & flag == flag


@dataclass(frozen=True)
class FamilyOptions:
    """
    Comparison settings of a single family of nodes (e.g. elements or comments).

    :param ignore_all: Items of this kind are not compared at all.
    :param ignore_extra: Items that occur only in the second tree are not reported.
    :param ignore_order: The relative order of items is not significant.
    """

    ignore_all: bool = False
    ignore_extra: bool = False
    ignore_order: bool = False

    def __post_init__(self) -> None:
        if self.ignore_all and not self.ignore_extra:
            raise ArgumentError("ignoring all items implies ignoring additional items")
        if self.ignore_extra and not self.ignore_order:
            raise ArgumentError("ignoring additional items implies ignoring item order")

    @classmethod
    def from_flags(
        cls,
        options: ComparisonOptions,
        ignore_all: ComparisonOptions,
        ignore_extra: ComparisonOptions,
        ignore_order: ComparisonOptions | None = None,
    ) -> "FamilyOptions":
        """
        Derives the cascaded settings of a family from raw flags.

        :param options: Raw flags.
        :param ignore_all: Flag to ignore all items of the family.
        :param ignore_extra: Flag to ignore additional items in the second tree.
        :param ignore_order: Flag to ignore item order, or `None` if the family has no such setting.
        """

        all_ = _has(options, ignore_all)
        extra = all_ or _has(options, ignore_extra)
        order = extra or (ignore_order is not None and _has(options, ignore_order))
        return cls(ignore_all=all_, ignore_extra=extra, ignore_order=order)


@dataclass(frozen=True)
class NormalizedOptions:
    """
    Comparison options with cascades resolved into explicit settings.

    :param attributes: Settings for attributes of elements.
    :param elements: Settings for child elements.
    :param comments: Settings for comments.
    :param text: Settings for text and CDATA.
    :param processing_instructions: Settings for processing instructions.
    :param document_types: Settings for document type declarations.
    :param ignore_text_outside_children: Whether to drop text that is a sibling of child elements.
    """

    attributes: FamilyOptions = FamilyOptions()
    elements: FamilyOptions = FamilyOptions()
    comments: FamilyOptions = FamilyOptions()
    text: FamilyOptions = FamilyOptions()
    processing_instructions: FamilyOptions = FamilyOptions()
    document_types: FamilyOptions = FamilyOptions()
    ignore_text_outside_children: bool = False

    @property
    def child_families(self) -> tuple[FamilyOptions, ...]:
        return (self.elements, self.text, self.comments, self.processing_instructions, self.document_types)

    @property
    def ignore_all_child_kinds(self) -> bool:
        "True if none of the children of a container are compared."

        return all(family.ignore_all for family in self.child_families)

    @property
    def all_child_order_significant(self) -> bool:
        "True if children of a container can be compared strictly by position."

        return not self.ignore_text_outside_children and not any(family.ignore_order for family in self.child_families)


def normalize(options: ComparisonOptions) -> NormalizedOptions:
    "Expands raw comparison flags into explicit per-family settings."

    flags = ComparisonOptions
    text = FamilyOptions.from_flags(options, flags.IGNORE_TEXT, flags.IGNORE_ADDITIONAL_TEXT, flags.IGNORE_TEXT_ORDER)
    return NormalizedOptions(
        attributes=FamilyOptions.from_flags(options, flags.IGNORE_ATTRIBUTES, flags.IGNORE_ADDITIONAL_ATTRIBUTES, flags.IGNORE_ATTRIBUTE_ORDER),
        elements=FamilyOptions.from_flags(options, flags.IGNORE_ELEMENTS, flags.IGNORE_ADDITIONAL_ELEMENTS, flags.IGNORE_ELEMENT_ORDER),
        comments=FamilyOptions.from_flags(options, flags.IGNORE_COMMENTS, flags.IGNORE_ADDITIONAL_COMMENTS, flags.IGNORE_COMMENT_ORDER),
        text=text,
        processing_instructions=FamilyOptions.from_flags(
            options,
            flags.IGNORE_PROCESSING_INSTRUCTIONS,
            flags.IGNORE_ADDITIONAL_PROCESSING_INSTRUCTIONS,
            flags.IGNORE_PROCESSING_INSTRUCTION_ORDER,
        ),
        document_types=FamilyOptions.from_flags(options, flags.IGNORE_DOCUMENT_TYPES, flags.IGNORE_ADDITIONAL_DOCUMENT_TYPES),
        ignore_text_outside_children=text.ignore_all or _has(options, flags.IGNORE_TEXT_OUTSIDE_OF_CHILDREN),
    )


FamilyLevel = Literal["significant", "ignore-order", "ignore-additional", "ignore"]
DocumentTypeLevel = Literal["significant", "ignore-additional", "ignore"]

_LEVEL_FLAGS: dict[str, tuple[ComparisonOptions, ComparisonOptions, ComparisonOptions]] = {
    "attributes": (
        ComparisonOptions.IGNORE_ATTRIBUTE_ORDER,
        ComparisonOptions.IGNORE_ADDITIONAL_ATTRIBUTES,
        ComparisonOptions.IGNORE_ATTRIBUTES,
    ),
    "elements": (
        ComparisonOptions.IGNORE_ELEMENT_ORDER,
        ComparisonOptions.IGNORE_ADDITIONAL_ELEMENTS,
        ComparisonOptions.IGNORE_ELEMENTS,
    ),
    "comments": (
        ComparisonOptions.IGNORE_COMMENT_ORDER,
        ComparisonOptions.IGNORE_ADDITIONAL_COMMENTS,
        ComparisonOptions.IGNORE_COMMENTS,
    ),
    "text": (
        ComparisonOptions.IGNORE_TEXT_ORDER,
        ComparisonOptions.IGNORE_ADDITIONAL_TEXT,
        ComparisonOptions.IGNORE_TEXT,
    ),
    "processing_instructions": (
        ComparisonOptions.IGNORE_PROCESSING_INSTRUCTION_ORDER,
        ComparisonOptions.IGNORE_ADDITIONAL_PROCESSING_INSTRUCTIONS,
        ComparisonOptions.IGNORE_PROCESSING_INSTRUCTIONS,
    ),
    "document_types": (
        ComparisonOptions.NONE,
        ComparisonOptions.IGNORE_ADDITIONAL_DOCUMENT_TYPES,
        ComparisonOptions.IGNORE_DOCUMENT_TYPES,
    ),
}


def _level_flags(family: str, level: str) -> ComparisonOptions:
    order, additional, all_ = _LEVEL_FLAGS[family]
    if level == "significant":
        return ComparisonOptions.NONE
    elif level == "ignore-order":
        return order
    elif level == "ignore-additional":
        return additional
    elif level == "ignore":
        return all_
    else:
        raise ArgumentError(f"unknown comparison level for {family.replace('_', ' ')}: {level}")


@dataclass
class FamilyLevels:
    """
    How each family of nodes is compared.

    :param attributes: How to compare attributes of elements.
    :param elements: How to compare child elements.
    :param comments: How to compare comments.
    :param text: How to compare text and CDATA.
    :param processing_instructions: How to compare processing instructions.
    :param document_types: How to compare document type declarations.
    """

    attributes: FamilyLevel = field(default="significant", metadata=value_option("How to compare attributes of elements."))
    elements: FamilyLevel = field(default="significant", metadata=value_option("How to compare child elements."))
    comments: FamilyLevel = field(default="significant", metadata=value_option("How to compare comments."))
    text: FamilyLevel = field(default="significant", metadata=value_option("How to compare text and CDATA sections."))
    processing_instructions: FamilyLevel = field(default="significant", metadata=value_option("How to compare processing instructions."))
    document_types: DocumentTypeLevel = field(default="significant", metadata=value_option("How to compare document type declarations."))

    def to_options(self) -> ComparisonOptions:
        options = ComparisonOptions.NONE
        for family in _LEVEL_FLAGS:
            options |= _level_flags(family, getattr(self, family))
        return options


@dataclass
class ComparisonSettings:
    """
    Comparison options as set by a user.

    Per-family levels and flags are added on top of the preset, they never relax it.

    :param preset: Predefined set of comparison options to start from.
    :param levels: How each family of nodes is compared.
    :param ignore_text_outside_children: Whether to drop text that is a sibling of child elements.
    :param string_comparer: Name of the string comparer for names and values.
    """

    preset: Literal["exact", "standard", "normalised", "loose", "ignore-additional", "legacy", "semantic", None] = field(
        default=None,
        metadata=value_option("Predefined set of comparison options to start from."),
    )
    levels: FamilyLevels = field(default_factory=FamilyLevels, metadata=composite_option(flatten=True))
    ignore_text_outside_children: bool = field(
        default=False,
        metadata=boolean_option(
            "Ignore formatting text that is a sibling of child elements.",
            "Compare text that is a sibling of child elements.",
        ),
    )
    string_comparer: Literal["ordinal", "ordinal-ignore-case", "current-culture", "current-culture-ignore-case", None] = field(
        default=None,
        metadata=value_option("String comparer for names and values."),
    )

    def to_options(self) -> ComparisonOptions:
        "Combines the preset with the per-family settings."

        options = get_preset(self.preset) if self.preset is not None else ComparisonOptions.NONE
        options |= self.levels.to_options()
        if self.ignore_text_outside_children:
            options |= ComparisonOptions.IGNORE_TEXT_OUTSIDE_OF_CHILDREN
        return options
