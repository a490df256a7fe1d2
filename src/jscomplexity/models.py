"""Input and intermediate data structures for the analysis adapter."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class SourceUnit:
    """One named piece of JavaScript source text."""

    path: str
    code: str

    @classmethod
    def coerce(cls, value: Any) -> "SourceUnit":
        """Build a SourceUnit from a SourceUnit, a mapping or a path/code object.

        The value passed in is never modified.

        Raises:
            TypeError: If the value does not provide string ``path`` and ``code``
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, Mapping):
            path = value.get("path")
            code = value.get("code")
        else:
            path = getattr(value, "path", None)
            code = getattr(value, "code", None)

        if not isinstance(path, str) or not isinstance(code, str):
            raise TypeError(
                f"Source units need string 'path' and 'code' values, got {type(value).__name__}"
            )
        return cls(path=path, code=code)


@dataclass(frozen=True)
class ParsedUnit:
    """The syntax tree produced for one SourceUnit."""

    path: str
    ast: Any


@dataclass(frozen=True)
class SingleSource:
    """An anonymous code string."""

    code: str


@dataclass(frozen=True)
class MultipleSources:
    """An ordered sequence of named source units."""

    units: Tuple[SourceUnit, ...]


SourceInput = Union[SingleSource, MultipleSources]
