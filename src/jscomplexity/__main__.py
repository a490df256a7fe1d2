"""Allow running as ``python -m jscomplexity``."""

from .cli import cli

if __name__ == "__main__":
    raise SystemExit(cli())
