"""Exception types raised by jscomplexity."""

from typing import Optional


class JSComplexityError(Exception):
    """Base class for all jscomplexity errors."""


class ParseError(JSComplexityError):
    """Raised by a parser when source code is syntactically invalid.

    The message follows the familiar ``Line <n>: <description>`` format,
    e.g. ``Line 1: Unexpected identifier``.
    """

    def __init__(self, description: str, line: Optional[int] = None, column: Optional[int] = None):
        self.description = description
        self.line = line
        self.column = column
        if line is None:
            message = description
        else:
            message = f"Line {line}: {description}"
        super().__init__(message)


class SourceParseError(ParseError):
    """A parse failure attributed to a named source unit.

    The message is ``<path>: <parser message>`` so that the offending file
    can be located straight from the traceback.
    """

    def __init__(self, path: str, error: Exception):
        self.path = path
        self.parser_message = str(error)
        line = getattr(error, "line", getattr(error, "lineno", None))
        column = getattr(error, "column", getattr(error, "offset", None))
        description = getattr(error, "description", self.parser_message)
        super().__init__(description, line, column)
        # Replace the formatted message built by ParseError
        self.args = (f"{path}: {self.parser_message}",)
