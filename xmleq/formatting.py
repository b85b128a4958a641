"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from typing import Optional

from .nodes import Attribute, Comment, ContainerNode, Document, DocumentType, Element, Node, ProcessingInstruction, Text

MAX_VALUE_LENGTH = 40


def _shorten(value: Optional[str], max_length: int = MAX_VALUE_LENGTH) -> str:
    if value is None:
        return "None"
    if len(value) > max_length:
        value = value[: max_length - 3] + "..."
    return repr(value)


def _step(node: Node) -> str:
    "Location step of a node relative to its parent."

    if isinstance(node, Attribute):
        return f"@{node.name}"
    elif isinstance(node, Element):
        test = node.name
    elif isinstance(node, Text):
        test = "text()"
    elif isinstance(node, Comment):
        test = "comment()"
    elif isinstance(node, ProcessingInstruction):
        test = f"processing-instruction({node.target!r})"
    elif isinstance(node, DocumentType):
        return "doctype()"
    else:
        raise NotImplementedError("match not exhaustive")

    parent = node.parent
    if not isinstance(parent, ContainerNode):
        return test

    position = 0
    for sibling in parent.children:
        if _step_matches(sibling, node):
            position += 1
        if sibling is node:
            break
    return f"{test}[{position}]"


def _step_matches(sibling: Node, node: Node) -> bool:
    if isinstance(node, Element):
        return isinstance(sibling, Element) and sibling.name == node.name
    elif isinstance(node, ProcessingInstruction):
        return isinstance(sibling, ProcessingInstruction) and sibling.target == node.target
    else:
        return isinstance(sibling, type(node)) or isinstance(node, type(sibling))


def node_path(node: Node) -> str:
    """
    Returns an XPath-like location of a node within its tree, e.g. `/html/body[1]/p[2]/text()[1]`.

    :param node: A node in a document tree.
    :returns: Location steps from the root of the tree to the node.
    """

    if isinstance(node, Document):
        return "/"

    steps: list[str] = []
    current: Optional[Node] = node
    while current is not None and not isinstance(current, Document):
        steps.append(_step(current))
        current = current.parent
    steps.reverse()
    return "/" + "/".join(steps)


def describe_node(node: Optional[Node]) -> str:
    "A short human-readable description of a node, including its location."

    if node is None:
        return "missing"
    elif isinstance(node, Document):
        return "document"
    elif isinstance(node, Element):
        summary = f"element <{node.name}>"
    elif isinstance(node, Attribute):
        summary = f"attribute {node.name}={_shorten(node.value)}"
    elif isinstance(node, Text):
        summary = f"{node.kind.value} {_shorten(node.value)}"
    elif isinstance(node, Comment):
        summary = f"comment {_shorten(node.value)}"
    elif isinstance(node, ProcessingInstruction):
        summary = f"processing instruction {node.target} {_shorten(node.data)}"
    elif isinstance(node, DocumentType):
        summary = f"document type {node.name} (public: {_shorten(node.public_id)}, system: {_shorten(node.system_id)})"
    else:
        raise NotImplementedError("match not exhaustive")

    return f"{summary} at {node_path(node)}"


def describe_mismatch(mismatch: tuple[Optional[Node], Optional[Node]]) -> str:
    """
    Describes the first point of divergence between two trees.

    :param mismatch: A pair of nodes, where either side may be missing.
    :returns: A message that identifies both nodes.
    """

    first, second = mismatch
    return f"{describe_node(first)} does not match {describe_node(second)}"
