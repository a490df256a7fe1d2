"""Common metrics and calculation utilities for complexity analysis.

This module provides the formulas used by the analyser: Halstead metrics,
the maintainability index and the dependency-matrix measures for projects.
"""

import math
from collections import Counter
from typing import List, Sequence

import numpy as np

from .models import HalsteadMetrics


class ComplexityMetrics:
    """Utility class for calculating various complexity metrics."""

    @staticmethod
    def calculate_halstead_volume(
        operators: int,
        operands: int,
        unique_operators: int,
        unique_operands: int
    ) -> float:
        """Calculate Halstead volume metric.

        Halstead Volume = N * log2(n)
        Where N = total operators + operands
        And n = unique operators + operands

        Args:
            operators: Total number of operators
            operands: Total number of operands
            unique_operators: Number of unique operators
            unique_operands: Number of unique operands

        Returns:
            Halstead volume
        """
        total_items = operators + operands
        unique_items = unique_operators + unique_operands

        if unique_items == 0:
            return 0.0

        return total_items * math.log2(unique_items)

    @staticmethod
    def calculate_halstead_difficulty(
        unique_operators: int,
        unique_operands: int,
        total_operands: int
    ) -> float:
        """Calculate Halstead difficulty metric.

        Difficulty = (n1 / 2) * (N2 / n2)
        Where n1 = unique operators, N2 = total operands, n2 = unique operands

        Args:
            unique_operators: Number of unique operators
            unique_operands: Number of unique operands
            total_operands: Total number of operands

        Returns:
            Halstead difficulty
        """
        if unique_operands == 0:
            return 0.0

        return (unique_operators / 2) * (total_operands / unique_operands)

    @staticmethod
    def calculate_halstead(operators: Counter, operands: Counter) -> HalsteadMetrics:
        """Calculate the full set of Halstead metrics from token counts.

        Args:
            operators: Occurrences of each operator
            operands: Occurrences of each operand

        Returns:
            HalsteadMetrics
        """
        n1 = len(operators)
        n2 = len(operands)
        total_operators = sum(operators.values())
        total_operands = sum(operands.values())

        volume = ComplexityMetrics.calculate_halstead_volume(total_operators, total_operands, n1, n2)
        difficulty = ComplexityMetrics.calculate_halstead_difficulty(n1, n2, total_operands)
        effort = difficulty * volume

        return HalsteadMetrics(
            distinct_operators=n1,
            distinct_operands=n2,
            total_operators=total_operators,
            total_operands=total_operands,
            length=total_operators + total_operands,
            vocabulary=n1 + n2,
            difficulty=difficulty,
            volume=volume,
            effort=effort,
            bugs=volume / 3000,
            time=effort / 18,
        )

    @staticmethod
    def calculate_maintainability_index(
        average_effort: float,
        average_cyclomatic: float,
        average_loc: float,
        newmi: bool = False
    ) -> float:
        """Calculate maintainability index.

        MI = 171 - 3.42 * ln(E) - 0.23 * ln(CC) - 16.2 * ln(LLOC)

        Where E, CC and LLOC are the per-function averages of Halstead effort,
        cyclomatic complexity and logical lines. Zero averages contribute
        nothing. The result is capped at 171; with newmi it is rescaled to
        the 0-100 range.

        Args:
            average_effort: Average Halstead effort
            average_cyclomatic: Average cyclomatic complexity
            average_loc: Average logical lines of code
            newmi: Rescale to 0-100

        Returns:
            Maintainability index (higher is better)
        """
        def safe_log(value: float) -> float:
            return math.log(value) if value > 0 else 0.0

        mi = (
            171
            - 3.42 * safe_log(average_effort)
            - 0.23 * safe_log(average_cyclomatic)
            - 16.2 * safe_log(average_loc)
        )
        mi = min(mi, 171.0)

        if newmi:
            mi = max(0.0, (mi * 100) / 171)

        return mi

    @staticmethod
    def calculate_density(matrix: Sequence[Sequence[int]]) -> float:
        """Percentage of set cells in a square matrix."""
        size = len(matrix)
        if size == 0:
            return 0.0
        return float(np.asarray(matrix, dtype=np.int64).sum()) / (size * size) * 100

    @staticmethod
    def calculate_visibility_matrix(adjacency: Sequence[Sequence[int]]) -> List[List[int]]:
        """Transitive closure of an adjacency matrix.

        Cell [i][j] is 1 when module i depends on module j directly or
        through any chain of other modules.
        """
        size = len(adjacency)
        if size == 0:
            return []

        reach = np.asarray(adjacency, dtype=bool)
        for k in range(size):
            reach = reach | (reach[:, k:k + 1] & reach[k:k + 1, :])
        return reach.astype(int).tolist()

    @staticmethod
    def calculate_core_size(visibility: Sequence[Sequence[int]]) -> float:
        """Percentage of modules that are both widely depended on and widely dependent.

        A module is in the core when its fan-in and fan-out in the visibility
        matrix are non-zero and at least the respective medians.
        """
        size = len(visibility)
        if size == 0:
            return 0.0

        matrix = np.asarray(visibility, dtype=np.int64)
        fan_out = matrix.sum(axis=1)
        fan_in = matrix.sum(axis=0)
        median_out = float(np.median(fan_out))
        median_in = float(np.median(fan_in))

        core = (fan_in > 0) & (fan_in >= median_in) & (fan_out > 0) & (fan_out >= median_out)
        return float(core.sum()) / size * 100
