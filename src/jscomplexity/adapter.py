"""Adapter between JavaScript sources and the complexity analyser.

The adapter accepts either a single code string or an ordered sequence of
``{path, code}`` units, parses each through the injected parser and hands the
result to the injected analyser together with the walker and the caller's
options. The analyser's result is returned unchanged.
"""

import logging
from collections.abc import Iterable, Mapping
from threading import RLock
from typing import Any, List, Optional

from .errors import ParseError, SourceParseError
from .models import MultipleSources, ParsedUnit, SingleSource, SourceInput, SourceUnit

logger = logging.getLogger(__name__)

IGNORE_ERRORS_KEY = "ignoreErrors"

# Failures a parser raises for malformed source; anything else propagates
PARSE_FAILURES = (ParseError, SyntaxError)


def parse_options() -> dict:
    """Options passed to the parser for every unit.

    A fresh dict per call so a parser cannot leak changes between units.
    """
    return {"loc": True, "tolerant": False}


def classify_source(source: Any) -> SourceInput:
    """Resolve the caller's source argument into its tagged form.

    Args:
        source: A code string or an iterable of source units

    Returns:
        SingleSource or MultipleSources

    Raises:
        TypeError: If the source has neither shape
    """
    if isinstance(source, str):
        return SingleSource(code=source)

    if isinstance(source, (bytes, bytearray, Mapping)) or not isinstance(source, Iterable):
        raise TypeError(
            f"Source must be a code string or a sequence of path/code units, got {type(source).__name__}"
        )

    return MultipleSources(units=tuple(SourceUnit.coerce(unit) for unit in source))


def ignore_errors(options: Any) -> bool:
    """Read the ignoreErrors flag from an options mapping or object.

    Raises:
        ValueError: If the flag is set to something other than a boolean
    """
    if options is None:
        return False
    if isinstance(options, Mapping):
        value = options.get(IGNORE_ERRORS_KEY)
    else:
        value = getattr(options, "ignore_errors", None)

    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"Option '{IGNORE_ERRORS_KEY}' must be a boolean, got {value!r}")
    return value


class Adapter:
    """Parses sources and forwards the trees to a complexity analyser.

    The parser, analyser and walker are injected so that any backend (or a
    test double) can be used. The adapter keeps no state between calls.
    """

    def __init__(self, parser: Any, analyser: Any, walker: Any):
        """Initialize the adapter with its collaborators.

        Args:
            parser: Object with ``parse(code, options)``
            analyser: Object with ``analyse(units, walker, options)``
            walker: Walker adapter passed through to the analyser
        """
        self.parser = parser
        self.analyser = analyser
        self.walker = walker

    def analyse(self, source: Any = None, options: Any = None) -> Any:
        """Parse the source and return the analyser's result.

        Args:
            source: A code string, a sequence of ``{path, code}`` units, or None
            options: Options forwarded verbatim to the analyser; its
                ``ignoreErrors`` flag suppresses parse failures

        Returns:
            The analyser's result, or None when there was nothing to analyse

        Raises:
            SourceParseError: If a unit fails to parse and errors are not ignored
            ParseError: If a single code string fails to parse and errors are not ignored
            TypeError: If the source has an unsupported shape
            ValueError: If ``ignoreErrors`` is not a boolean
        """
        if source is None:
            logger.debug("No source given; nothing to analyse")
            return None

        resolved = classify_source(source)
        suppress = ignore_errors(options)

        if isinstance(resolved, SingleSource):
            return self._analyse_single(resolved, options, suppress)
        return self._analyse_multiple(resolved, options, suppress)

    def _analyse_single(self, source: SingleSource, options: Any, suppress: bool) -> Any:
        try:
            tree = self.parser.parse(source.code, parse_options())
        except PARSE_FAILURES as e:
            if not suppress:
                raise
            logger.warning(f"Ignoring unparseable source: {e}")
            return None

        return self.analyser.analyse(tree, self.walker, options)

    def _analyse_multiple(self, source: MultipleSources, options: Any, suppress: bool) -> Any:
        parsed: List[ParsedUnit] = []
        for unit in source.units:
            tree = self._parse_unit(unit, suppress)
            if tree is not None:
                parsed.append(ParsedUnit(path=unit.path, ast=tree))

        logger.debug(f"Parsed {len(parsed)} of {len(source.units)} unit(s)")
        return self.analyser.analyse(parsed, self.walker, options)

    def _parse_unit(self, unit: SourceUnit, suppress: bool) -> Optional[Any]:
        """Parse one unit; None means it failed and the failure was suppressed."""
        try:
            return self.parser.parse(unit.code, parse_options())
        except PARSE_FAILURES as e:
            if not suppress:
                raise SourceParseError(unit.path, e) from e
            logger.warning(f"Skipping {unit.path}: {e}")
            return None


_default_adapter: Optional[Adapter] = None
_default_lock = RLock()


def get_default_adapter() -> Adapter:
    """Return the process-wide adapter wired with the tree-sitter backend.

    Built on first use so that importing the package does not load the
    grammar.
    """
    global _default_adapter

    if _default_adapter is not None:
        return _default_adapter

    with _default_lock:
        if _default_adapter is None:
            from .complexity_analysis import ComplexityAnalyzer
            from .parsing import TreeSitterParser
            from .walker import TreeSitterWalker

            try:
                parser = TreeSitterParser()
            except Exception as e:
                logger.error(f"Failed to initialize tree-sitter parser: {e}")
                raise

            _default_adapter = Adapter(
                parser=parser,
                analyser=ComplexityAnalyzer(),
                walker=TreeSitterWalker(),
            )
            logger.info("Initialized default tree-sitter adapter")
    return _default_adapter


def analyse(source: Any = None, options: Any = None) -> Any:
    """Analyse JavaScript source with the default collaborators.

    Args:
        source: A code string, a sequence of ``{path, code}`` units, or None
        options: Options mapping forwarded to the analyser

    Returns:
        ModuleComplexity for a string, ProjectComplexity for a sequence,
        None when no source was given
    """
    if source is None:
        return None
    return get_default_adapter().analyse(source, options)
