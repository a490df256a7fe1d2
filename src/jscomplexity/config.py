"""Configuration for jscomplexity."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

# Option key (as passed in the options mapping) for each settings field
OPTION_KEYS = {
    "logicalor": "logicalor",
    "switchcase": "switchcase",
    "forin": "forin",
    "trycatch": "trycatch",
    "newmi": "newmi",
    "skip_calculation": "skipCalculation",
    "no_core_size": "noCoreSize",
    "ignore_errors": "ignoreErrors",
}

ENV_PREFIX = "JSCOMPLEXITY_"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class AnalysisSettings:
    """Typed view of the options mapping understood by the default analyser.

    The options mapping itself is forwarded untouched through the adapter;
    this class only reads it.
    """

    logicalor: bool = True
    switchcase: bool = True
    forin: bool = False
    trycatch: bool = False
    newmi: bool = False
    skip_calculation: bool = False
    no_core_size: bool = False
    ignore_errors: bool = False

    @classmethod
    def from_options(cls, options: Optional[Mapping] = None) -> "AnalysisSettings":
        """
        Create settings from an options mapping.

        Args:
            options: Mapping using the camelCase option keys, or None

        Returns:
            AnalysisSettings instance

        Raises:
            ValueError: If a recognised option is not a boolean
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise ValueError(f"Options must be a mapping, got {type(options).__name__}")

        values: Dict[str, bool] = {}
        for field_name, key in OPTION_KEYS.items():
            if key not in options or options[key] is None:
                continue
            value = options[key]
            if not isinstance(value, bool):
                raise ValueError(f"Option '{key}' must be a boolean, got {value!r}")
            values[field_name] = value
        return cls(**values)

    @classmethod
    def from_env(cls) -> "AnalysisSettings":
        """
        Create settings from JSCOMPLEXITY_* environment variables.

        Unset variables keep their defaults.

        Returns:
            AnalysisSettings instance
        """
        values: Dict[str, bool] = {}
        for field in fields(cls):
            raw = os.getenv(f"{ENV_PREFIX}{field.name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            values[field.name] = raw.strip().lower() in TRUTHY
        return cls(**values)

    def to_options(self) -> Dict[str, Any]:
        """Convert back to an options mapping with camelCase keys."""
        return {key: getattr(self, field_name) for field_name, key in OPTION_KEYS.items()}
