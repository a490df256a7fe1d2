"""Parsers that turn JavaScript source into syntax trees."""

from .base_parser import BaseParser
from .tree_sitter_parser import TreeSitterParser

__all__ = ["BaseParser", "TreeSitterParser"]
