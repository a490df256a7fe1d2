"""JavaScript parser backed by tree-sitter.

tree-sitter never fails outright on bad input; it recovers and marks the
damage with ERROR and MISSING nodes. Unless the tolerant option is set, this
parser turns the first such node into a ParseError in the familiar
``Line <n>: Unexpected <token>`` form, e.g. ``Line 1: Unexpected identifier``.

The line is where tree-sitter's recovery starts. The token described is the
first one inside the damaged region, which is not always the token a
JavaScript engine would blame: ``var = 1;`` reports ``Unexpected token var``
where an engine says ``Unexpected token =``.
"""

import logging
from collections.abc import Mapping
from threading import RLock
from typing import Optional

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ParseError
from .base_parser import BaseParser

logger = logging.getLogger(__name__)

IDENTIFIER_TYPES = {
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "statement_identifier",
}

# Parents whose tokens are reported as one literal
LITERAL_PARENTS = {
    "string": "string",
    "template_string": "template string",
}


class TreeSitterParser(BaseParser):
    """Parser for JavaScript using the tree-sitter-javascript grammar."""

    language = "javascript"

    def __init__(self):
        """Initialize the tree-sitter parser."""
        self._lock = RLock()
        self._parser = Parser(Language(tree_sitter_javascript.language()))
        logger.debug("Initialized tree-sitter JavaScript parser")

    def parse(self, code: str, options: Optional[Mapping] = None) -> Tree:
        """Parse JavaScript source code.

        Args:
            code: JavaScript source
            options: ``loc`` must not be false; ``tolerant`` returns trees
                containing error nodes instead of raising

        Returns:
            tree-sitter Tree

        Raises:
            ParseError: If the code is invalid and ``tolerant`` is not set
            ValueError: If location tracking is disabled
        """
        options = options or {}
        if not options.get("loc", True):
            raise ValueError("tree-sitter trees always carry locations; loc cannot be disabled")

        with self._lock:
            tree = self._parser.parse(code.encode("utf-8"))

        if tree.root_node.has_error and not options.get("tolerant", False):
            raise self._describe_error(tree.root_node)
        return tree

    def _describe_error(self, root: Node) -> ParseError:
        """Build a ParseError for the first error or missing node."""
        culprit = _find_first_error(root)
        if culprit is None:
            # has_error without a visible culprit; report the start of the tree
            return ParseError("Unexpected token ILLEGAL", root.start_point[0] + 1, 1)

        if culprit.is_missing:
            token = _next_leaf(culprit)
        else:
            token = _first_leaf(culprit)

        if token is None:
            line = root.end_point[0] + 1
            return ParseError("Unexpected end of input", line, root.end_point[1] + 1)

        line = token.start_point[0] + 1
        column = token.start_point[1] + 1
        return ParseError(_describe_token(token), line, column)


def _find_first_error(root: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing or node.type == "ERROR":
            return node
        stack.extend(
            child for child in reversed(node.children) if child.has_error or child.is_missing
        )
    return None


def _first_leaf(node: Node) -> Optional[Node]:
    while node.child_count > 0:
        node = node.children[0]
    if node.type == "ERROR" or node.end_byte > node.start_byte:
        return node
    return _next_leaf(node)


def _next_leaf(node: Node) -> Optional[Node]:
    """Return the first non-empty leaf after the given node."""
    current = node
    while current is not None:
        sibling = current.next_sibling
        while sibling is not None:
            leaf = _first_leaf(sibling)
            if leaf is not None:
                return leaf
            sibling = sibling.next_sibling
        current = current.parent
    return None


def _describe_token(token: Node) -> str:
    """Describe an unexpected token the way JavaScript parsers do."""
    parent = token.parent
    if parent is not None and parent.type in LITERAL_PARENTS:
        return f"Unexpected {LITERAL_PARENTS[parent.type]}"
    if token.type in IDENTIFIER_TYPES:
        return "Unexpected identifier"
    if token.type == "number":
        return "Unexpected number"
    if token.type == "string_fragment":
        return "Unexpected string"

    text = token.text.decode("utf-8", errors="replace") if token.text else ""
    if not text:
        return "Unexpected end of input"
    return f"Unexpected token {text}"
