"""jscomplexity - complexity analysis for JavaScript source code."""

__version__ = "0.1.0"

from .adapter import Adapter, analyse, classify_source, get_default_adapter
from .config import AnalysisSettings
from .errors import JSComplexityError, ParseError, SourceParseError
from .models import MultipleSources, ParsedUnit, SingleSource, SourceUnit

__all__ = [
    "Adapter",
    "AnalysisSettings",
    "JSComplexityError",
    "MultipleSources",
    "ParseError",
    "ParsedUnit",
    "SingleSource",
    "SourceParseError",
    "SourceUnit",
    "analyse",
    "classify_source",
    "get_default_adapter",
    "__version__",
]
