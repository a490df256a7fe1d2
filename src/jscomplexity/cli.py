"""Command-line interface for jscomplexity."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Literal, Optional, Sequence

from .adapter import analyse
from .complexity_analysis import ModuleComplexity, ProjectComplexity
from .config import AnalysisSettings
from .errors import ParseError, SourceParseError
from .models import SourceUnit

# Configure logging - default to WARNING to reduce verbosity
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = {".js", ".mjs", ".cjs", ".jsx"}
IGNORED_DIRS = {"node_modules"}

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_USAGE = 2


def collect_sources(paths: Sequence[str], ignore_errors: bool = False) -> List[SourceUnit]:
    """
    Read JavaScript sources from files and directories.

    Directories are searched recursively, skipping node_modules and hidden
    directories. Files found in a directory are sorted by path.

    Args:
        paths: Files or directories
        ignore_errors: Skip files that are not valid UTF-8 instead of failing

    Returns:
        Source units in command-line order

    Raises:
        FileNotFoundError: If a path does not exist
        SourceParseError: If a file is not valid UTF-8 and errors are not ignored
    """
    units: List[SourceUnit] = []
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.is_file():
            files = [path]
        else:
            files = sorted(
                p for p in path.rglob("*")
                if p.is_file()
                and p.suffix.lower() in SOURCE_EXTENSIONS
                and not any(
                    part in IGNORED_DIRS or part.startswith(".")
                    for part in p.relative_to(path).parts[:-1]
                )
            )

        for file_path in files:
            logger.debug(f"Reading {file_path}")
            try:
                code = file_path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                if not ignore_errors:
                    raise SourceParseError(file_path.as_posix(), e) from e
                logger.warning(f"Skipping {file_path.as_posix()}: {e}")
                continue
            units.append(SourceUnit(path=file_path.as_posix(), code=code))
    return units


def format_text_report(result: ProjectComplexity) -> str:
    """Render a project result as a human readable report."""
    lines = []
    for report in result.reports:
        lines.extend(_format_module(report))
        lines.append("")

    lines.append("Project:")
    lines.append(f"  Modules: {len(result.reports)}")
    lines.append(f"  Mean maintainability: {result.maintainability:.2f}")
    lines.append(f"  Mean cyclomatic: {result.cyclomatic:.2f}")
    lines.append(f"  Mean effort: {result.effort:.2f}")
    if result.first_order_density is not None:
        lines.append(f"  First-order density: {result.first_order_density:.2f}%")
        lines.append(f"  Change cost: {result.change_cost:.2f}%")
    if result.core_size is not None:
        lines.append(f"  Core size: {result.core_size:.2f}%")
    return "\n".join(lines)


def _format_module(report: ModuleComplexity) -> List[str]:
    lines = [
        f"{report.path or '<source>'}",
        f"  Maintainability: {report.maintainability:.2f} (grade {report.grade})",
        f"  Cyclomatic: {report.aggregate.cyclomatic}  "
        f"Logical LOC: {report.aggregate.sloc_logical}  "
        f"Functions: {len(report.functions)}",
    ]
    ranked = sorted(report.functions, key=lambda f: f.cyclomatic, reverse=True)
    for func in ranked[:5]:
        lines.append(
            f"    {func.name} (L{func.line_start}-L{func.line_end}): "
            f"cyclomatic={func.cyclomatic} params={func.params}"
        )
    for recommendation in report.recommendations:
        lines.append(f"  - {recommendation}")
    return lines


def main(
    paths: Sequence[str],
    settings: AnalysisSettings,
    output_format: Literal["text", "json"] = "text",
) -> int:
    """
    Analyse the given paths and print a report.

    Args:
        paths: Files or directories to analyse
        settings: Analysis settings
        output_format: Report format

    Returns:
        Exit code: 0 for success, 1 for a parse or decode failure, 2 for bad input
    """
    try:
        units = collect_sources(paths, ignore_errors=settings.ignore_errors)
    except FileNotFoundError as e:
        print(f"File not found: {e}", file=sys.stderr)
        return EXIT_USAGE
    except SourceParseError as e:
        print(str(e), file=sys.stderr)
        return EXIT_PARSE_ERROR

    if not units:
        print("No JavaScript sources found", file=sys.stderr)
        return EXIT_USAGE

    try:
        result = analyse(units, settings.to_options())
    except ParseError as e:
        print(str(e), file=sys.stderr)
        return EXIT_PARSE_ERROR

    if output_format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_text_report(result))
    return EXIT_OK


def cli(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line interface for jscomplexity."""
    defaults = AnalysisSettings.from_env()

    parser = argparse.ArgumentParser(
        prog="jscomplexity",
        description="Complexity analysis for JavaScript source code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyse a single file
  jscomplexity src/app.js

  # Analyse a directory tree as one project, JSON output
  jscomplexity --format json src/

  # Keep going past files that do not parse
  jscomplexity --ignore-errors src/

Environment variables (JSCOMPLEXITY_FORIN, JSCOMPLEXITY_IGNORE_ERRORS, ...)
provide defaults for the corresponding flags.
        """,
    )
    parser.add_argument("paths", nargs="+", help="JavaScript files or directories")
    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # Metric switches
    parser.add_argument(
        "--ignore-errors",
        action="store_true",
        default=defaults.ignore_errors,
        help="Skip files that fail to parse instead of aborting",
    )
    parser.add_argument(
        "--no-logicalor",
        dest="logicalor",
        action="store_false",
        default=defaults.logicalor,
        help="Do not count &&, || and ?? as branches",
    )
    parser.add_argument(
        "--no-switchcase",
        dest="switchcase",
        action="store_false",
        default=defaults.switchcase,
        help="Do not count switch cases as branches",
    )
    parser.add_argument(
        "--forin",
        action="store_true",
        default=defaults.forin,
        help="Count for...in / for...of loops as branches",
    )
    parser.add_argument(
        "--trycatch",
        action="store_true",
        default=defaults.trycatch,
        help="Count catch clauses as branches",
    )
    parser.add_argument(
        "--newmi",
        action="store_true",
        default=defaults.newmi,
        help="Report the maintainability index on a 0-100 scale",
    )
    parser.add_argument(
        "--skip-calculation",
        action="store_true",
        default=defaults.skip_calculation,
        help="Skip project-level dependency matrices",
    )
    parser.add_argument(
        "--no-core-size",
        action="store_true",
        default=defaults.no_core_size,
        help="Skip the core size calculation",
    )

    # Verbosity
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Set logging level based on verbose flag
    if args.verbose:
        logging.getLogger("jscomplexity").setLevel(logging.DEBUG)

    settings = AnalysisSettings(
        logicalor=args.logicalor,
        switchcase=args.switchcase,
        forin=args.forin,
        trycatch=args.trycatch,
        newmi=args.newmi,
        skip_calculation=args.skip_calculation,
        no_core_size=args.no_core_size,
        ignore_errors=args.ignore_errors,
    )
    return main(args.paths, settings, output_format=args.format)
