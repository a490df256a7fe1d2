"""Walker adapter for tree-sitter JavaScript syntax trees.

The walker is what lets the complexity analyser stay independent of the tree
shape: it traverses a tree-sitter tree and, for every node, reports a
NodeSyntax describing what the node contributes to the metrics (logical
lines, cyclomatic branches, Halstead operators and operands, dependencies)
and whether it opens a new function scope.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .config import AnalysisSettings

logger = logging.getLogger(__name__)

SCOPE_TYPES = {
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
}

# Declarations whose own name field names the scope
NAMED_SCOPE_TYPES = {
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "method_definition",
}

LOGICAL_LINE_TYPES = {
    "expression_statement",
    "if_statement",
    "else_clause",
    "for_statement",
    "for_in_statement",
    "while_statement",
    "do_statement",
    "return_statement",
    "throw_statement",
    "break_statement",
    "continue_statement",
    "try_statement",
    "catch_clause",
    "finally_clause",
    "switch_statement",
    "switch_case",
    "switch_default",
    "variable_declarator",
    "function_declaration",
    "generator_function_declaration",
    "debugger_statement",
    "labeled_statement",
    "import_statement",
}

BRANCH_TYPES = {
    "if_statement",
    "ternary_expression",
    "for_statement",
    "while_statement",
    "do_statement",
}

LOGICAL_OPERATORS = {"&&", "||", "??"}
LOGICAL_ASSIGNMENT_OPERATORS = {"&&=", "||=", "??="}

# Literals reported as a single operand without descending into them
LITERAL_TYPES = {"string", "template_string", "regex"}

DELIMITERS = {";", ",", "(", ")", "[", "]", "{", "}", ":"}

SKIPPED_TYPES = {"comment", "hash_bang_line"}


@dataclass(frozen=True)
class NodeSyntax:
    """What a single syntax node contributes to the complexity metrics."""

    lloc: int = 0
    cyclomatic: int = 0
    operators: Tuple[str, ...] = ()
    operands: Tuple[str, ...] = ()
    new_scope: bool = False
    is_leaf: bool = False
    dependencies: Tuple[Tuple[str, str], ...] = ()  # (path, type)


class WalkerCallbacks(ABC):
    """Receiver of walker events, implemented by analysers."""

    @abstractmethod
    def process_node(self, node: Any, syntax: NodeSyntax) -> None:
        """Called once for every node, before its children."""
        pass

    @abstractmethod
    def create_scope(self, name: str, node: Any, param_count: int) -> None:
        """Called when entering a function scope, after process_node."""
        pass

    @abstractmethod
    def pop_scope(self) -> None:
        """Called when leaving a function scope."""
        pass


class TreeSitterWalker:
    """Stateless walker for trees produced by TreeSitterParser."""

    language = "javascript"

    def walk(self, tree: Any, settings: Any, callbacks: WalkerCallbacks) -> None:
        """Traverse a tree depth-first in source order.

        Args:
            tree: tree-sitter Tree or Node
            settings: AnalysisSettings or an options mapping
            callbacks: Receiver of node and scope events
        """
        settings = AnalysisSettings.from_options(settings)
        root = getattr(tree, "root_node", tree)
        self._visit(root, settings, callbacks)

    def _visit(self, root, settings: AnalysisSettings, callbacks: WalkerCallbacks) -> None:
        # Explicit stack; deep expressions exceed the interpreter's recursion limit
        stack = [(root, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                callbacks.pop_scope()
                continue
            if node.type in SKIPPED_TYPES:
                continue
            if node.type == "ERROR":
                logger.debug(f"Walking error node at line {node.start_point[0] + 1}")

            syntax = self.syntax_for(node, settings)
            callbacks.process_node(node, syntax)

            if syntax.new_scope:
                callbacks.create_scope(scope_name(node), node, count_parameters(node))
                stack.append((node, True))

            if not syntax.is_leaf:
                stack.extend((child, False) for child in reversed(node.children))

    def line_range(self, node) -> Tuple[int, int]:
        """Return the 1-based first and last line covered by a node."""
        return node.start_point[0] + 1, node.end_point[0] + 1

    def syntax_for(self, node, settings: AnalysisSettings) -> NodeSyntax:
        """Classify a node according to the JavaScript syntax definitions."""
        node_type = node.type

        if node_type in LITERAL_TYPES:
            return NodeSyntax(operands=(node_text(node),), is_leaf=True)

        if node.child_count == 0:
            if node.is_named:
                return NodeSyntax(operands=(node_text(node),), is_leaf=True)
            if node_type in DELIMITERS or node.is_missing:
                return NodeSyntax(is_leaf=True)
            return NodeSyntax(operators=(node_type,), is_leaf=True)

        lloc = 1 if node_type in LOGICAL_LINE_TYPES else 0
        if node_type == "export_statement" and node.child_by_field_name("declaration") is None:
            lloc = 1

        return NodeSyntax(
            lloc=lloc,
            cyclomatic=self._cyclomatic(node, settings),
            new_scope=node_type in SCOPE_TYPES,
            dependencies=self._dependencies(node),
        )

    def _cyclomatic(self, node, settings: AnalysisSettings) -> int:
        node_type = node.type
        if node_type in BRANCH_TYPES:
            return 1
        if node_type == "for_in_statement":
            return 1 if settings.forin else 0
        if node_type == "catch_clause":
            return 1 if settings.trycatch else 0
        if node_type == "switch_case":
            return 1 if settings.switchcase else 0
        if node_type == "binary_expression":
            return 1 if settings.logicalor and operator_of(node) in LOGICAL_OPERATORS else 0
        if node_type == "augmented_assignment_expression":
            return 1 if settings.logicalor and operator_of(node) in LOGICAL_ASSIGNMENT_OPERATORS else 0
        return 0

    def _dependencies(self, node) -> Tuple[Tuple[str, str], ...]:
        node_type = node.type
        if node_type in ("import_statement", "export_statement"):
            source = node.child_by_field_name("source")
            if source is not None:
                return ((string_value(source), "ESM"),)
            return ()

        if node_type != "call_expression":
            return ()

        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if function is None or arguments is None:
            return ()
        args = [a for a in arguments.named_children if a.type not in SKIPPED_TYPES]
        if not args:
            return ()

        if function.type == "import" and args[0].type == "string":
            return ((string_value(args[0]), "ESM"),)
        if function.type != "identifier":
            return ()

        name = node_text(function)
        if name == "require" and args[0].type == "string":
            return ((string_value(args[0]), "CommonJS"),)
        if name == "define" and args[0].type == "array":
            return tuple(
                (string_value(element), "AMD")
                for element in args[0].named_children
                if element.type == "string"
            )
        return ()


def node_text(node) -> str:
    """Decode the source text covered by a node."""
    text = node.text
    if text is None:
        return ""
    return text.decode("utf-8", errors="replace")


def string_value(node) -> str:
    """Return the contents of a string literal without its quotes."""
    text = node_text(node)
    if len(text) >= 2 and text[0] in "\"'`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def operator_of(node) -> Optional[str]:
    """Extract the operator token of a binary or assignment expression."""
    operator = node.child_by_field_name("operator")
    if operator is not None:
        return operator.type
    for child in node.children:
        if not child.is_named:
            return child.type
    return None


def count_parameters(node) -> int:
    """Count the declared parameters of a function-like node."""
    single = node.child_by_field_name("parameter")
    if single is not None:
        return 1
    params = node.child_by_field_name("parameters")
    if params is None:
        return 0
    return sum(1 for child in params.named_children if child.type not in SKIPPED_TYPES)


def scope_name(node) -> str:
    """Work out a human readable name for a function scope."""
    if node.type in NAMED_SCOPE_TYPES:
        name = node.child_by_field_name("name")
        if name is not None:
            return node_text(name)

    parent = node.parent
    if parent is None:
        return "<anonymous>"
    if parent.type == "variable_declarator":
        target = parent.child_by_field_name("name")
    elif parent.type == "pair":
        target = parent.child_by_field_name("key")
    elif parent.type == "assignment_expression":
        target = parent.child_by_field_name("left")
    elif parent.type in ("field_definition", "public_field_definition"):
        target = parent.child_by_field_name("property")
    else:
        target = None

    if target is None:
        return "<anonymous>"
    return string_value(target) if target.type == "string" else node_text(target)
