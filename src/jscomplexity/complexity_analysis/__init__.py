"""Complexity analysis of JavaScript syntax trees.

The adapter only needs an object with an ``analyse(units, walker, options)``
method; this package provides the interface and the default implementation
together with the metric formulas and result models.
"""

from .analyzer import ComplexityAnalyzer
from .base_analyzer import BaseComplexityAnalyzer
from .metrics import ComplexityMetrics
from .models import (
    ComplexityClassification,
    ComplexityGrade,
    Dependency,
    FunctionComplexity,
    HalsteadMetrics,
    ModuleComplexity,
    ProjectComplexity,
)

__all__ = [
    "BaseComplexityAnalyzer",
    "ComplexityAnalyzer",
    "ComplexityMetrics",
    "ComplexityClassification",
    "ComplexityGrade",
    "Dependency",
    "FunctionComplexity",
    "HalsteadMetrics",
    "ModuleComplexity",
    "ProjectComplexity",
]
