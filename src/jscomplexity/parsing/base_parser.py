"""Abstract base class for source parsers.

The adapter only relies on this narrow interface, so any parser that turns a
code string into a syntax tree and raises ParseError on malformed input can
be plugged in.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class BaseParser(ABC):
    """Abstract interface for parsers consumed by the adapter."""

    #: Identifier for the language the parser understands.
    language: str = "unknown"

    @abstractmethod
    def parse(self, code: str, options: Mapping) -> Any:
        """Parse source code into a syntax tree.

        Args:
            code: Source code to parse
            options: Parse options; ``loc`` is always requested

        Returns:
            Syntax tree carrying source locations

        Raises:
            ParseError: If the code is syntactically invalid
        """
        pass
