"""Shared pytest fixtures for all tests."""

from unittest.mock import Mock

import pytest

from jscomplexity import Adapter
from jscomplexity.config import AnalysisSettings
from jscomplexity.errors import ParseError


@pytest.fixture
def walker():
    """Opaque walker stand-in; only its identity matters to the adapter."""
    return object()


@pytest.fixture
def parser():
    """Parser double returning a fixed tree and rejecting 'foo foo'."""
    def parse(code, options):
        if code == "foo foo":
            raise ParseError("Unexpected identifier", line=1, column=5)
        return "parser.parse result"

    mock = Mock(name="parser")
    mock.parse.side_effect = parse
    return mock


@pytest.fixture
def analyser():
    """Analyser double returning a fixed result."""
    mock = Mock(name="analyser")
    mock.analyse.return_value = "analyser.analyse result"
    return mock


@pytest.fixture
def adapter(parser, analyser, walker):
    """Adapter wired with test doubles."""
    return Adapter(parser=parser, analyser=analyser, walker=walker)


@pytest.fixture
def ts_parser():
    """Real tree-sitter JavaScript parser."""
    from jscomplexity.parsing import TreeSitterParser

    return TreeSitterParser()


@pytest.fixture
def ts_walker():
    """Real tree-sitter walker."""
    from jscomplexity.walker import TreeSitterWalker

    return TreeSitterWalker()


@pytest.fixture
def settings():
    """Default analysis settings."""
    return AnalysisSettings()
