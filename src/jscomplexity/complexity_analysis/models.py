"""Data models for complexity analysis results.

Provides the structures returned by the default analyser for a single
module and for a whole project.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ComplexityGrade(Enum):
    """Letter grades for code complexity based on maintainability index."""

    A = "A"  # Excellent (MI >= 80)
    B = "B"  # Good (MI >= 60)
    C = "C"  # Fair (MI >= 40)
    D = "D"  # Poor (MI >= 20)
    F = "F"  # Very Poor (MI < 20)

    @classmethod
    def from_maintainability_index(cls, mi: float) -> "ComplexityGrade":
        """Calculate grade from a 0-100 maintainability index score."""
        if mi >= 80:
            return cls.A
        elif mi >= 60:
            return cls.B
        elif mi >= 40:
            return cls.C
        elif mi >= 20:
            return cls.D
        else:
            return cls.F

    @classmethod
    def from_complexity(cls, complexity: int) -> "ComplexityGrade":
        """Calculate grade from cyclomatic complexity."""
        if complexity <= 5:
            return cls.A
        elif complexity <= 10:
            return cls.B
        elif complexity <= 20:
            return cls.C
        elif complexity <= 30:
            return cls.D
        else:
            return cls.F


class ComplexityClassification(Enum):
    """Classification of code complexity levels."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    VERY_COMPLEX = "very-complex"

    @classmethod
    def from_complexity(cls, complexity: int) -> "ComplexityClassification":
        """Classify based on cyclomatic complexity score."""
        if complexity <= 5:
            return cls.SIMPLE
        elif complexity <= 10:
            return cls.MODERATE
        elif complexity <= 20:
            return cls.COMPLEX
        else:
            return cls.VERY_COMPLEX


@dataclass
class HalsteadMetrics:
    """Halstead software science metrics."""

    distinct_operators: int = 0  # n1
    distinct_operands: int = 0  # n2
    total_operators: int = 0  # N1
    total_operands: int = 0  # N2
    length: int = 0
    vocabulary: int = 0
    difficulty: float = 0.0
    volume: float = 0.0
    effort: float = 0.0
    bugs: float = 0.0
    time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "operators": {"distinct": self.distinct_operators, "total": self.total_operators},
            "operands": {"distinct": self.distinct_operands, "total": self.total_operands},
            "length": self.length,
            "vocabulary": self.vocabulary,
            "difficulty": round(self.difficulty, 3),
            "volume": round(self.volume, 3),
            "effort": round(self.effort, 3),
            "bugs": round(self.bugs, 4),
            "time": round(self.time, 3),
        }


@dataclass
class FunctionComplexity:
    """Complexity metrics for a single function, or for a whole module's aggregate."""

    name: str
    line_start: int
    line_end: int
    params: int
    cyclomatic: int  # Cyclomatic complexity
    sloc_logical: int
    halstead: HalsteadMetrics = field(default_factory=HalsteadMetrics)

    @property
    def lines_of_code(self) -> int:
        """Physical lines spanned by this function."""
        return self.line_end - self.line_start + 1

    @property
    def cyclomatic_density(self) -> float:
        """Cyclomatic complexity as a percentage of logical lines."""
        if self.sloc_logical == 0:
            return 0.0
        return (self.cyclomatic / self.sloc_logical) * 100

    @property
    def rank(self) -> str:
        return ComplexityGrade.from_complexity(self.cyclomatic).value

    @property
    def classification(self) -> str:
        return ComplexityClassification.from_complexity(self.cyclomatic).value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "params": self.params,
            "cyclomatic": self.cyclomatic,
            "cyclomatic_density": round(self.cyclomatic_density, 3),
            "sloc": {"physical": self.lines_of_code, "logical": self.sloc_logical},
            "halstead": self.halstead.to_dict(),
            "rank": self.rank,
            "classification": self.classification,
        }


@dataclass
class Dependency:
    """A module dependency declared through import, require or define."""

    line: int
    path: str
    type: str  # CommonJS/ESM/AMD

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.line, "path": self.path, "type": self.type}


@dataclass
class ModuleComplexity:
    """Complete complexity analysis result for one module."""

    path: Optional[str]
    aggregate: FunctionComplexity
    functions: List[FunctionComplexity] = field(default_factory=list)
    dependencies: List[Dependency] = field(default_factory=list)
    maintainability: float = 0.0
    params: float = 0.0  # Average parameters per function
    loc: float = 0.0  # Average logical lines per function
    cyclomatic: float = 0.0  # Average cyclomatic complexity per function
    effort: float = 0.0  # Average Halstead effort per function
    recommendations: List[str] = field(default_factory=list)
    newmi: bool = False

    @property
    def grade(self) -> str:
        """Letter grade from the maintainability index rescaled to 0-100."""
        mi = self.maintainability if self.newmi else max(0.0, self.maintainability * 100 / 171)
        return ComplexityGrade.from_maintainability_index(mi).value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "path": self.path,
            "aggregate": self.aggregate.to_dict(),
            "functions": [f.to_dict() for f in self.functions],
            "dependencies": [d.to_dict() for d in self.dependencies],
            "maintainability": round(self.maintainability, 3),
            "grade": self.grade,
            "params": round(self.params, 3),
            "loc": round(self.loc, 3),
            "cyclomatic": round(self.cyclomatic, 3),
            "effort": round(self.effort, 3),
            "recommendations": self.recommendations,
        }

    def generate_recommendations(self) -> List[str]:
        """Generate recommendations based on complexity metrics."""
        recommendations = []

        # Check for very complex functions
        very_complex = [f for f in self.functions if f.cyclomatic > 20]
        if very_complex:
            for func in very_complex[:3]:  # Top 3
                recommendations.append(
                    f"Urgent: Refactor '{func.name}' (complexity: {func.cyclomatic})"
                )

        # Check for complex functions
        complex_funcs = [f for f in self.functions if 10 < f.cyclomatic <= 20]
        if complex_funcs and not very_complex:
            for func in complex_funcs[:3]:  # Top 3
                recommendations.append(
                    f"Consider refactoring '{func.name}' (complexity: {func.cyclomatic})"
                )

        # Check maintainability
        grade = self.grade
        if grade == "F":
            recommendations.append(
                "Low maintainability index. Code needs significant refactoring"
            )
        elif grade == "D":
            recommendations.append(
                "Moderate maintainability index. Consider improving code structure"
            )

        # Long parameter lists
        many_params = [f for f in self.functions if f.params > 4]
        if many_params:
            recommendations.append(
                f"{len(many_params)} function(s) take more than 4 parameters. "
                "Consider passing an options object"
            )

        # Positive feedback if code is good
        if not recommendations and grade in ["A", "B"]:
            recommendations.append("Code complexity is within acceptable limits")

        return recommendations


@dataclass
class ProjectComplexity:
    """Complexity analysis result for a set of modules."""

    reports: List[ModuleComplexity] = field(default_factory=list)
    adjacency_matrix: Optional[List[List[int]]] = None
    first_order_density: Optional[float] = None
    visibility_matrix: Optional[List[List[int]]] = None
    change_cost: Optional[float] = None
    core_size: Optional[float] = None
    loc: float = 0.0
    cyclomatic: float = 0.0
    effort: float = 0.0
    params: float = 0.0
    maintainability: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            "reports": [r.to_dict() for r in self.reports],
            "loc": round(self.loc, 3),
            "cyclomatic": round(self.cyclomatic, 3),
            "effort": round(self.effort, 3),
            "params": round(self.params, 3),
            "maintainability": round(self.maintainability, 3),
        }
        if self.adjacency_matrix is not None:
            result["adjacency_matrix"] = self.adjacency_matrix
            result["first_order_density"] = round(self.first_order_density, 3)
            result["visibility_matrix"] = self.visibility_matrix
            result["change_cost"] = round(self.change_cost, 3)
        if self.core_size is not None:
            result["core_size"] = round(self.core_size, 3)
        return result
