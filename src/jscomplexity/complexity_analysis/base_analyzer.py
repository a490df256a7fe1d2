"""Abstract base class for complexity analysers.

This module provides the interface the adapter hands parsed syntax trees to.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, List, Optional

from ..config import AnalysisSettings
from ..models import ParsedUnit

logger = logging.getLogger(__name__)


class BaseComplexityAnalyzer(ABC):
    """Abstract base class for complexity analysers.

    An analyser receives either a single syntax tree or an ordered list of
    ParsedUnit records, together with a walker that knows how to traverse
    the trees and the caller's options.
    """

    def analyse(self, units: Any, walker: Any, options: Optional[Any] = None) -> Any:
        """Analyse one tree or a list of parsed units.

        Args:
            units: A bare syntax tree, or a sequence of ParsedUnit
            walker: Walker adapter for the tree shape
            options: Options mapping, or None for defaults

        Returns:
            Module result for a bare tree, project result for a sequence
        """
        settings = AnalysisSettings.from_options(options)

        if isinstance(units, Sequence) and not isinstance(units, (str, bytes)):
            logger.debug(f"Analysing project of {len(units)} module(s)")
            return self.analyse_project(list(units), walker, settings)

        return self.analyse_module(units, walker, settings)

    @abstractmethod
    def analyse_module(
        self,
        tree: Any,
        walker: Any,
        settings: AnalysisSettings,
        path: Optional[str] = None
    ) -> Any:
        """Analyse a single syntax tree.

        Args:
            tree: Syntax tree
            walker: Walker adapter for the tree shape
            settings: Analysis settings
            path: Module path, None for anonymous source

        Returns:
            Module result
        """
        pass

    @abstractmethod
    def analyse_project(
        self,
        units: List[ParsedUnit],
        walker: Any,
        settings: AnalysisSettings
    ) -> Any:
        """Analyse a list of parsed units.

        Args:
            units: Parsed units in input order
            walker: Walker adapter for the tree shape
            settings: Analysis settings

        Returns:
            Project result
        """
        pass
