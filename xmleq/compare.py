"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import NamedTuple, Optional, TypeVar, Union, cast

from .collection import MultisetPool
from .formatting import describe_mismatch
from .nodes import (
    Attribute,
    ChildNode,
    Comment,
    ContainerNode,
    DocumentType,
    Element,
    Node,
    NodeKind,
    ProcessingInstruction,
    Text,
)
from .options import ComparisonOptions, FamilyOptions, NormalizedOptions, normalize
from .strings import CURRENT_CULTURE, StringComparer

LOGGER = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


class Mismatch(NamedTuple):
    """
    The first pair of corresponding nodes at which two trees diverge.

    :param first: Node in the first tree, or `None` if the node is missing from the first tree.
    :param second: Node in the second tree, or `None` if the node is missing from the second tree.
    """

    first: Optional[Node]
    second: Optional[Node]

    def __str__(self) -> str:
        return describe_mismatch(self)


NodePair = tuple[Optional[Node], Optional[Node]]


@dataclass
class _Partition:
    "Children of a container split by kind, as needed for mixed ordered and unordered comparison."

    document_type: Optional[DocumentType] = None
    residue: list[ChildNode] = field(default_factory=list)
    elements: Optional[list[Element]] = None
    text: Optional[list[Text]] = None
    comments: Optional[list[Comment]] = None
    processing_instructions: Optional[list[ProcessingInstruction]] = None
    has_elements: bool = False
    has_text: bool = False

    def strip_text(self) -> None:
        """
        Drops text nodes from the order-significant residue, where they are only formatting between elements.

        Text matched irrespective of order is kept in the text pool.
        """

        self.residue = [node for node in self.residue if not isinstance(node, Text)]


class TreeComparator:
    """
    Compares two document trees for structural equivalence.

    The trees are walked with an explicit stack of node pairs such that arbitrarily deep trees can be compared.
    Comparison stops at the first mismatch.

    :param options: Which differences are significant.
    :param comparer: Decides equality of names and values; defaults to the collation of the current locale.
    """

    options: NormalizedOptions
    comparer: StringComparer

    def __init__(
        self,
        options: Union[ComparisonOptions, int] = ComparisonOptions.NONE,
        comparer: Optional[StringComparer] = None,
    ) -> None:
        self.options = normalize(ComparisonOptions(options))
        self.comparer = comparer if comparer is not None else CURRENT_CULTURE

    def compare(self, first: Optional[Node], second: Optional[Node]) -> Optional[Mismatch]:
        """
        Finds the first point of divergence between two trees.

        :param first: Root of the first tree.
        :param second: Root of the second tree.
        :returns: `None` if the trees are equivalent, or the first pair of diverging nodes.
        """

        stack: list[NodePair] = [(first, second)]
        visited = 0
        while stack:
            node1, node2 = stack.pop()
            visited += 1

            if node1 is node2:
                continue
            if node1 is None or node2 is None or node1.kind is not node2.kind:
                return self._report(Mismatch(node1, node2), visited)

            mismatch = self._compare_nodes(node1, node2, stack)
            if mismatch is not None:
                return self._report(mismatch, visited)

        LOGGER.debug("Trees are equivalent after comparing %d node pairs", visited)
        return None

    def _report(self, mismatch: Mismatch, visited: int) -> Mismatch:
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("Trees diverge after comparing %d node pairs: %s", visited, describe_mismatch(mismatch))
        return mismatch

    def _compare_nodes(self, node1: Node, node2: Node, stack: list[NodePair]) -> Optional[Mismatch]:
        "Compares two nodes of the same kind, and schedules descendants for comparison."

        options = self.options
        kind = node1.kind
        if kind is NodeKind.DOCUMENT:
            return self._compare_children(cast(ContainerNode, node1), cast(ContainerNode, node2), stack)

        elif kind is NodeKind.ELEMENT:
            element1 = cast(Element, node1)
            element2 = cast(Element, node2)
            if not self.comparer.equals(element1.name, element2.name):
                return Mismatch(element1, element2)
            if not options.attributes.ignore_all:
                mismatch = self._compare_attributes(element1, element2)
                if mismatch is not None:
                    return mismatch
            return self._compare_children(element1, element2, stack)

        elif kind is NodeKind.ATTRIBUTE:
            if not options.attributes.ignore_all and not self._attributes_equal(cast(Attribute, node1), cast(Attribute, node2)):
                return Mismatch(node1, node2)

        elif kind is NodeKind.PROCESSING_INSTRUCTION:
            if not options.processing_instructions.ignore_all and not self._processing_instructions_equal(
                cast(ProcessingInstruction, node1), cast(ProcessingInstruction, node2)
            ):
                return Mismatch(node1, node2)

        elif kind is NodeKind.DOCUMENT_TYPE:
            if not options.document_types.ignore_all and not self._document_types_equal(
                cast(DocumentType, node1), cast(DocumentType, node2)
            ):
                return Mismatch(node1, node2)

        elif kind is NodeKind.TEXT or kind is NodeKind.CDATA:
            if not options.text.ignore_all and not self.comparer.equals(cast(Text, node1).value, cast(Text, node2).value):
                return Mismatch(node1, node2)

        elif kind is NodeKind.COMMENT:
            if not options.comments.ignore_all and not self.comparer.equals(cast(Comment, node1).value, cast(Comment, node2).value):
                return Mismatch(node1, node2)

        else:
            raise NotImplementedError("match not exhaustive")

        return None

    def _attributes_equal(self, attribute1: Attribute, attribute2: Attribute) -> bool:
        return self.comparer.equals(attribute1.name, attribute2.name) and self.comparer.equals(attribute1.value, attribute2.value)

    def _processing_instructions_equal(self, pi1: ProcessingInstruction, pi2: ProcessingInstruction) -> bool:
        return self.comparer.equals(pi1.target, pi2.target) and self.comparer.equals(pi1.data, pi2.data)

    def _document_types_equal(self, doctype1: DocumentType, doctype2: DocumentType) -> bool:
        equals = self.comparer.equals
        return (
            equals(doctype1.name, doctype2.name)
            and equals(doctype1.public_id, doctype2.public_id)
            and equals(doctype1.system_id, doctype2.system_id)
            and equals(doctype1.internal_subset, doctype2.internal_subset)
        )

    def _compare_attributes(self, element1: Element, element2: Element) -> Optional[Mismatch]:
        "Compares attributes of two elements immediately, without deferring to the stack."

        if not self.options.attributes.ignore_order:
            for attribute1, attribute2 in zip_longest(element1.attributes, element2.attributes):
                if attribute1 is None or attribute2 is None or not self._attributes_equal(attribute1, attribute2):
                    return Mismatch(attribute1, attribute2)
            return None

        pool = MultisetPool(element2.attributes, self._name_key)
        for attribute1 in element1.attributes:
            attribute2 = pool.take(self._name_key(attribute1))
            if attribute2 is None or not self.comparer.equals(attribute1.value, attribute2.value):
                return Mismatch(attribute1, attribute2)

        if not self.options.attributes.ignore_extra and pool:
            return Mismatch(None, pool.first())
        return None

    def _compare_children(self, container1: ContainerNode, container2: ContainerNode, stack: list[NodePair]) -> Optional[Mismatch]:
        options = self.options
        if options.ignore_all_child_kinds:
            return None

        pending: list[NodePair] = []
        if options.all_child_order_significant:
            mismatch = _compare_positional(container1.children, container2.children, pending)
            if mismatch is not None:
                return mismatch
            stack.extend(reversed(pending))
            return None

        partition1 = self._partition(container1)
        partition2 = self._partition(container2)

        if (
            options.ignore_text_outside_children
            and (partition1.has_elements or partition2.has_elements)
            and (partition1.has_text or partition2.has_text)
        ):
            partition1.strip_text()
            partition2.strip_text()

        # a document type always precedes the root element, its position is never compared
        if not options.document_types.ignore_all:
            doctype1 = partition1.document_type
            doctype2 = partition2.document_type
            if doctype1 is not None:
                if doctype2 is None or not self._document_types_equal(doctype1, doctype2):
                    return Mismatch(doctype1, doctype2)
            elif doctype2 is not None and not options.document_types.ignore_extra:
                return Mismatch(None, doctype2)

        mismatch = _compare_positional(partition1.residue, partition2.residue, pending)
        if mismatch is not None:
            return mismatch

        if partition1.elements is not None and partition2.elements is not None:
            mismatch = _match_pool(partition1.elements, partition2.elements, options.elements, self._name_key, pending)
            if mismatch is not None:
                return mismatch

        if partition1.text is not None and partition2.text is not None:
            mismatch = _match_pool(partition1.text, partition2.text, options.text, self._value_key)
            if mismatch is not None:
                return mismatch

        if partition1.comments is not None and partition2.comments is not None:
            mismatch = _match_pool(partition1.comments, partition2.comments, options.comments, self._value_key)
            if mismatch is not None:
                return mismatch

        if partition1.processing_instructions is not None and partition2.processing_instructions is not None:
            mismatch = _match_pool(
                partition1.processing_instructions,
                partition2.processing_instructions,
                options.processing_instructions,
                self._processing_instruction_key,
            )
            if mismatch is not None:
                return mismatch

        stack.extend(reversed(pending))
        return None

    def _partition(self, container: ContainerNode) -> _Partition:
        options = self.options
        partition = _Partition(
            elements=_pool_or_none(options.elements),
            text=_pool_or_none(options.text),
            comments=_pool_or_none(options.comments),
            processing_instructions=_pool_or_none(options.processing_instructions),
        )

        for child in container.children:
            if isinstance(child, Element):
                partition.has_elements = True
                _place(child, partition.elements, options.elements, partition.residue)
            elif isinstance(child, Text):
                partition.has_text = True
                _place(child, partition.text, options.text, partition.residue)
            elif isinstance(child, Comment):
                _place(child, partition.comments, options.comments, partition.residue)
            elif isinstance(child, ProcessingInstruction):
                _place(child, partition.processing_instructions, options.processing_instructions, partition.residue)
            elif isinstance(child, DocumentType):
                if not options.document_types.ignore_all:
                    partition.document_type = child

        return partition

    def _name_key(self, node: Union[Element, Attribute]) -> Hashable:
        return self.comparer.key(node.name)

    def _value_key(self, node: Union[Text, Comment]) -> Hashable:
        return self.comparer.key(node.value)

    def _processing_instruction_key(self, node: ProcessingInstruction) -> Hashable:
        return (self.comparer.key(node.target), self.comparer.key(node.data))


def _pool_or_none(family: FamilyOptions) -> Optional[list]:
    "An empty pool if items of the family are compared irrespective of order, or `None` otherwise."

    return [] if family.ignore_order and not family.ignore_all else None


def _place(node: N, pool: Optional[list[N]], family: FamilyOptions, residue: list) -> None:
    if pool is not None:
        pool.append(node)
    elif not family.ignore_all:
        residue.append(node)


def _compare_positional(nodes1: Sequence[Node], nodes2: Sequence[Node], pending: list[NodePair]) -> Optional[Mismatch]:
    "Pairs up nodes by position, and schedules pairs of the same kind for comparison."

    for node1, node2 in zip_longest(nodes1, nodes2):
        if node1 is None or node2 is None or node1.kind is not node2.kind:
            return Mismatch(node1, node2)
        pending.append((node1, node2))
    return None


def _match_pool(
    nodes1: list[N],
    nodes2: list[N],
    family: FamilyOptions,
    key: Callable[[N], Hashable],
    pending: Optional[list[NodePair]] = None,
) -> Optional[Mismatch]:
    """
    Matches nodes irrespective of order.

    :param nodes1: Nodes in the first tree.
    :param nodes2: Nodes in the second tree.
    :param family: Settings that determine whether additional nodes in the second tree are reported.
    :param key: Derives the match key of a node.
    :param pending: Receives matched pairs that need structural comparison, or `None` if the match key covers the
        entire node.
    """

    pool = MultisetPool(nodes2, key)
    for node1 in nodes1:
        node2 = pool.take(key(node1))
        if node2 is None:
            return Mismatch(node1, None)
        if pending is not None:
            pending.append((node1, node2))

    if not family.ignore_extra and pool:
        return Mismatch(None, pool.first())
    return None


def deep_equals(
    first: Optional[Node],
    second: Optional[Node],
    options: Union[ComparisonOptions, int] = ComparisonOptions.NONE,
    comparer: Optional[StringComparer] = None,
) -> Optional[Mismatch]:
    """
    Compares two document trees for structural equivalence.

    :param first: Root of the first tree.
    :param second: Root of the second tree.
    :param options: Which differences are significant; by default, all differences are.
    :param comparer: Decides equality of names and values; defaults to the collation of the current locale.
    :returns: `None` if the trees are equivalent, or the first pair of diverging nodes.
    """

    return TreeComparator(options, comparer).compare(first, second)


def is_equivalent(
    first: Optional[Node],
    second: Optional[Node],
    options: Union[ComparisonOptions, int] = ComparisonOptions.NONE,
    comparer: Optional[StringComparer] = None,
) -> bool:
    "True if two document trees are structurally equivalent."

    return deep_equals(first, second, options, comparer) is None
