"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Optional, Union


@enum.unique
class NodeKind(enum.Enum):
    "Discriminates the variants of a document tree node."

    DOCUMENT = "document"
    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    TEXT = "text"
    CDATA = "cdata"
    COMMENT = "comment"
    PROCESSING_INSTRUCTION = "processing-instruction"
    DOCUMENT_TYPE = "document-type"


@dataclass(eq=False)
class Node:
    """
    Base class of document tree nodes.

    Nodes compare by identity. The parent link is maintained by the owning container.
    """

    kind: ClassVar[NodeKind]

    parent: Optional["ContainerNode"] = field(default=None, init=False, repr=False)


@dataclass(eq=False)
class Attribute(Node):
    """
    An attribute owned by an element. Attributes are not traversal children.

    :param name: Attribute name, in Clark notation for qualified names.
    :param value: Attribute value.
    """

    kind = NodeKind.ATTRIBUTE

    name: str
    value: str


@dataclass(eq=False)
class Text(Node):
    """
    Character data.

    :param value: Text content.
    """

    kind = NodeKind.TEXT

    value: str


@dataclass(eq=False)
class CData(Text):
    "Character data that originates from a CDATA section."

    kind = NodeKind.CDATA


@dataclass(eq=False)
class Comment(Node):
    kind = NodeKind.COMMENT

    value: str


@dataclass(eq=False)
class ProcessingInstruction(Node):
    """
    A processing instruction.

    :param target: Processing instruction target, e.g. `xml-stylesheet`.
    :param data: Content that follows the target.
    """

    kind = NodeKind.PROCESSING_INSTRUCTION

    target: str
    data: Optional[str] = None


@dataclass(eq=False)
class DocumentType(Node):
    """
    A document type declaration.

    Absent identifiers are `None`, which is a distinct value from an empty string.

    :param name: Name of the document element.
    :param public_id: Public identifier.
    :param system_id: System identifier (URL).
    :param internal_subset: Declarations enclosed in square brackets.
    """

    kind = NodeKind.DOCUMENT_TYPE

    name: str
    public_id: Optional[str] = None
    system_id: Optional[str] = None
    internal_subset: Optional[str] = None


ChildNode = Union["Element", Text, Comment, ProcessingInstruction, DocumentType]


class ContainerNode(Node):
    "A node that owns an ordered sequence of child nodes."

    children: list[ChildNode]

    def __post_init__(self) -> None:
        self.children = list(self.children)
        for child in self.children:
            child.parent = self

    def append(self, child: ChildNode) -> ChildNode:
        "Adds a node as the last child of this container."

        child.parent = self
        self.children.append(child)
        return child

    def extend(self, children: Iterable[ChildNode]) -> None:
        for child in children:
            self.append(child)


@dataclass(eq=False)
class Element(ContainerNode):
    """
    A named container with ordered attributes.

    :param name: Element name, in Clark notation for qualified names.
    :param attributes: Attributes in declaration order.
    :param children: Child nodes in document order.
    """

    kind = NodeKind.ELEMENT

    name: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list[ChildNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.attributes = list(self.attributes)
        for attribute in self.attributes:
            attribute.parent = self


@dataclass(eq=False)
class Document(ContainerNode):
    "Root container of a document tree."

    kind = NodeKind.DOCUMENT

    children: list[ChildNode] = field(default_factory=list)

    @property
    def document_type(self) -> Optional[DocumentType]:
        for child in self.children:
            if isinstance(child, DocumentType):
                return child
        return None

    @property
    def root(self) -> Optional["Element"]:
        "The document element."

        for child in self.children:
            if isinstance(child, Element):
                return child
        return None
