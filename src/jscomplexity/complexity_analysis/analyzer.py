"""Walker-driven complexity analyser.

The analyser never looks at node types itself. It asks the walker to
traverse each tree and accumulates what the walker reports into per-function
and per-module metrics, then derives project-level measures from the
dependencies between modules.
"""

import logging
import posixpath
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..config import AnalysisSettings
from ..models import ParsedUnit
from ..walker import NodeSyntax, WalkerCallbacks
from .base_analyzer import BaseComplexityAnalyzer
from .metrics import ComplexityMetrics
from .models import Dependency, FunctionComplexity, ModuleComplexity, ProjectComplexity

logger = logging.getLogger(__name__)

MODULE_EXTENSIONS = (".js", ".mjs", ".cjs", ".jsx")


@dataclass
class _Scope:
    """Running totals for one function scope or a whole module."""

    name: str
    line_start: int
    line_end: int
    params: int = 0
    lloc: int = 0
    cyclomatic: int = 1
    operators: Counter = field(default_factory=Counter)
    operands: Counter = field(default_factory=Counter)

    def add(self, syntax: NodeSyntax) -> None:
        self.lloc += syntax.lloc
        self.cyclomatic += syntax.cyclomatic
        self.operators.update(syntax.operators)
        self.operands.update(syntax.operands)

    def finish(self) -> FunctionComplexity:
        return FunctionComplexity(
            name=self.name,
            line_start=self.line_start,
            line_end=self.line_end,
            params=self.params,
            cyclomatic=self.cyclomatic,
            sloc_logical=self.lloc,
            halstead=ComplexityMetrics.calculate_halstead(self.operators, self.operands),
        )


class _ModuleCollector(WalkerCallbacks):
    """Collects walker events for a single module."""

    def __init__(self, walker: Any):
        self.walker = walker
        self.aggregate: Optional[_Scope] = None
        self.scopes: List[_Scope] = []
        self.dependencies: List[Dependency] = []
        self._stack: List[_Scope] = []

    def process_node(self, node: Any, syntax: NodeSyntax) -> None:
        if self.aggregate is None:
            # The root node comes first and spans the whole module
            line_start, line_end = self.walker.line_range(node)
            self.aggregate = _Scope("<module>", line_start, line_end)

        self.aggregate.add(syntax)
        if self._stack:
            self._stack[-1].add(syntax)

        if syntax.dependencies:
            line = self.walker.line_range(node)[0]
            for path, dependency_type in syntax.dependencies:
                self.dependencies.append(Dependency(line=line, path=path, type=dependency_type))

    def create_scope(self, name: str, node: Any, param_count: int) -> None:
        line_start, line_end = self.walker.line_range(node)
        scope = _Scope(name, line_start, line_end, params=param_count)
        self.scopes.append(scope)
        self._stack.append(scope)
        self.aggregate.params += param_count

    def pop_scope(self) -> None:
        self._stack.pop()


class ComplexityAnalyzer(BaseComplexityAnalyzer):
    """Default analyser producing cyclomatic, Halstead and maintainability metrics."""

    def __init__(self):
        self.metrics = ComplexityMetrics()

    def analyse_module(
        self,
        tree: Any,
        walker: Any,
        settings: AnalysisSettings,
        path: Optional[str] = None
    ) -> ModuleComplexity:
        """Analyse a single syntax tree.

        Args:
            tree: Syntax tree understood by the walker
            walker: Walker adapter
            settings: Analysis settings
            path: Module path, None for anonymous source

        Returns:
            ModuleComplexity with all metrics
        """
        collector = _ModuleCollector(walker)
        walker.walk(tree, settings, collector)

        aggregate_scope = collector.aggregate or _Scope("<module>", 1, 1)
        aggregate = aggregate_scope.finish()
        functions = [scope.finish() for scope in collector.scopes]

        # Averages are per function; a module without functions uses its aggregate
        basis = functions or [aggregate]
        count = len(basis)
        params = sum(f.params for f in basis) / count
        loc = sum(f.sloc_logical for f in basis) / count
        cyclomatic = sum(f.cyclomatic for f in basis) / count
        effort = sum(f.halstead.effort for f in basis) / count

        result = ModuleComplexity(
            path=path,
            aggregate=aggregate,
            functions=functions,
            dependencies=collector.dependencies,
            maintainability=self.metrics.calculate_maintainability_index(
                effort, cyclomatic, loc, newmi=settings.newmi
            ),
            params=params,
            loc=loc,
            cyclomatic=cyclomatic,
            effort=effort,
            newmi=settings.newmi,
        )
        result.recommendations = result.generate_recommendations()

        logger.debug(
            f"Analysed {path or '<source>'}: {len(functions)} function(s), "
            f"cyclomatic={aggregate.cyclomatic}, mi={result.maintainability:.2f}"
        )
        return result

    def analyse_project(
        self,
        units: List[ParsedUnit],
        walker: Any,
        settings: AnalysisSettings
    ) -> ProjectComplexity:
        """Analyse a list of parsed units.

        Args:
            units: Parsed units in input order
            walker: Walker adapter
            settings: Analysis settings

        Returns:
            ProjectComplexity with one report per unit
        """
        reports = [
            self.analyse_module(unit.ast, walker, settings, path=unit.path)
            for unit in units
        ]
        project = ProjectComplexity(reports=reports)

        if reports:
            count = len(reports)
            project.loc = sum(r.loc for r in reports) / count
            project.cyclomatic = sum(r.cyclomatic for r in reports) / count
            project.effort = sum(r.effort for r in reports) / count
            project.params = sum(r.params for r in reports) / count
            project.maintainability = sum(r.maintainability for r in reports) / count

        if settings.skip_calculation:
            return project

        adjacency = self._adjacency_matrix(reports)
        visibility = self.metrics.calculate_visibility_matrix(adjacency)
        project.adjacency_matrix = adjacency
        project.first_order_density = self.metrics.calculate_density(adjacency)
        project.visibility_matrix = visibility
        project.change_cost = self.metrics.calculate_density(visibility)

        if not settings.no_core_size:
            project.core_size = self.metrics.calculate_core_size(visibility)

        return project

    def _adjacency_matrix(self, reports: List[ModuleComplexity]) -> List[List[int]]:
        """Build the direct dependency matrix between modules."""
        index: Dict[str, int] = {}
        for position, report in enumerate(reports):
            if report.path is not None:
                index.setdefault(posixpath.normpath(report.path), position)

        size = len(reports)
        matrix = [[0] * size for _ in range(size)]
        for row, report in enumerate(reports):
            if report.path is None:
                continue
            for dependency in report.dependencies:
                column = self._resolve(report.path, dependency.path, index)
                if column is not None and column != row:
                    matrix[row][column] = 1
        return matrix

    def _resolve(self, from_path: str, dependency: str, index: Dict[str, int]) -> Optional[int]:
        """Find the module a relative dependency refers to."""
        if not dependency.startswith("."):
            return None

        base = posixpath.normpath(posixpath.join(posixpath.dirname(from_path), dependency))
        for candidate in self._candidates(base):
            if candidate in index:
                return index[candidate]
        return None

    @staticmethod
    def _candidates(base: str) -> Tuple[str, ...]:
        if base.endswith(MODULE_EXTENSIONS):
            return (base,)
        return (
            base,
            *(base + ext for ext in MODULE_EXTENSIONS),
            *(posixpath.join(base, "index" + ext) for ext in MODULE_EXTENSIONS),
        )
