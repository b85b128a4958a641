"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
import re
from pathlib import Path
from typing import Union

import lxml.etree as ET

from .environment import ParseError
from .nodes import Attribute, ChildNode, Comment, Document, DocumentType, Element, Node, ProcessingInstruction, Text

LOGGER = logging.getLogger(__name__)

ElementType = ET._Element  # pyright: ignore [reportPrivateUsage]
ElementTreeType = ET._ElementTree  # pyright: ignore [reportPrivateUsage]

_INTERNAL_SUBSET = re.compile(r"<!DOCTYPE[^\[>]*\[(.*?)\]\s*>", re.DOTALL)


def _get_parser() -> ET.XMLParser:
    "A parser that keeps every node that participates in a structural comparison."

    return ET.XMLParser(
        remove_blank_text=False,
        remove_comments=False,
        remove_pis=False,
        strip_cdata=False,
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
    )


def _shallow_node(element: ElementType) -> ChildNode:
    "Converts an lxml node without its descendants."

    if isinstance(element, ET._Comment):  # pyright: ignore [reportPrivateUsage]
        return Comment(element.text or "")
    elif isinstance(element, ET._ProcessingInstruction):  # pyright: ignore [reportPrivateUsage]
        return ProcessingInstruction(element.target, element.text)
    elif isinstance(element, ET._Entity):  # pyright: ignore [reportPrivateUsage]
        return Text(element.text)
    else:
        return Element(
            str(element.tag),
            attributes=[Attribute(str(name), value) for name, value in element.attrib.items()],
        )


def node_from_element(element: ElementType) -> ChildNode:
    """
    Builds a document tree node from an lxml element.

    The text and tail of lxml elements become text nodes in document order. Entity references that have not been
    resolved by the parser become text nodes with the entity reference as their value.

    :param element: An lxml element, comment, processing instruction or entity reference.
    :returns: A node whose descendants mirror the lxml subtree.
    """

    root = _shallow_node(element)
    if not isinstance(root, Element):
        return root

    # iterative conversion permits arbitrarily deep trees
    stack: list[tuple[ElementType, Element]] = [(element, root)]
    while stack:
        source, target = stack.pop()
        if source.text:
            target.append(Text(source.text))
        for child in source:
            node = _shallow_node(child)
            target.append(node)
            if isinstance(node, Element):
                stack.append((child, node))
            if child.tail:
                target.append(Text(child.tail))

    return root


def _internal_subset(tree: ElementTreeType) -> str | None:
    if tree.docinfo.internalDTD is None:
        return None

    xml = ET.tostring(tree, encoding="unicode")
    m = _INTERNAL_SUBSET.search(xml)
    if m:
        return m.group(1).strip()
    else:
        return None


def document_from_tree(tree: ElementTreeType) -> Document:
    """
    Builds a document tree from an lxml element tree.

    The document type declaration is reconstructed from document information, and comments and processing
    instructions that precede or follow the document element are kept.

    :param tree: An lxml element tree, as returned by `lxml.etree.parse`.
    :returns: A document node.
    """

    document = Document()

    docinfo = tree.docinfo
    if docinfo.doctype:
        document.append(
            DocumentType(
                docinfo.root_name or "",
                public_id=docinfo.public_id,
                system_id=docinfo.system_url,
                internal_subset=_internal_subset(tree),
            )
        )

    root = tree.getroot()
    if root is not None:
        preceding = list(root.itersiblings(preceding=True))
        preceding.reverse()
        for sibling in preceding:
            document.append(node_from_element(sibling))
        document.append(node_from_element(root))
        for sibling in root.itersiblings():
            document.append(node_from_element(sibling))

    return document


def from_lxml(obj: Union[ElementType, ElementTreeType]) -> Node:
    "Builds a document tree node from either an lxml element tree or an lxml element."

    if isinstance(obj, ET._ElementTree):  # pyright: ignore [reportPrivateUsage]
        return document_from_tree(obj)
    else:
        return node_from_element(obj)


def parse_string(content: Union[str, bytes]) -> Document:
    """
    Parses an XML document from a string.

    Strings are parsed as UTF-8 unless the XML declaration specifies otherwise.

    :param content: XML document as a string.
    :returns: A document node.
    """

    if isinstance(content, str):
        content = content.encode("utf-8")

    try:
        root = ET.fromstring(content, parser=_get_parser())
    except ET.XMLSyntaxError as ex:
        raise ParseError(f"invalid XML: {ex}") from ex

    return document_from_tree(root.getroottree())


def parse_file(path: Path) -> Document:
    """
    Parses an XML document from a file.

    :param path: Path to an XML file.
    :returns: A document node.
    """

    LOGGER.debug("Parsing XML file: %s", path)
    try:
        tree = ET.parse(str(path), parser=_get_parser())
    except ET.XMLSyntaxError as ex:
        raise ParseError(f"invalid XML in file {path}: {ex}") from ex

    return document_from_tree(tree)
