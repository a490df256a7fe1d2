"""Tests for the analysis adapter."""

from unittest.mock import Mock, patch

import pytest

import jscomplexity
from jscomplexity import Adapter, ParsedUnit, SourceUnit
from jscomplexity.adapter import classify_source, ignore_errors, parse_options
from jscomplexity.errors import ParseError, SourceParseError
from jscomplexity.models import MultipleSources, SingleSource


class TestModuleSurface:
    """Test the package-level analyse function."""

    def test_analyse_is_exported(self):
        """Test that analyse is available from the package."""
        assert callable(jscomplexity.analyse)

    def test_analyse_without_arguments_does_not_raise(self):
        """Test that calling analyse() with nothing is a no-op."""
        assert jscomplexity.analyse() is None

    def test_analyse_without_arguments_builds_nothing(self):
        """Test that no collaborator is created or called for an empty call."""
        with patch("jscomplexity.adapter.get_default_adapter") as mock_factory:
            jscomplexity.analyse()
        mock_factory.assert_not_called()

    def test_analyse_delegates_to_default_adapter(self):
        """Test that analyse forwards source and options to the default adapter."""
        options = {}
        with patch("jscomplexity.adapter.get_default_adapter") as mock_factory:
            mock_factory.return_value.analyse.return_value = "result"
            result = jscomplexity.analyse("x;", options)

        assert result == "result"
        mock_factory.return_value.analyse.assert_called_once_with("x;", options)


class TestNoSource:
    """Test the degenerate call without a source."""

    def test_returns_none(self, adapter):
        assert adapter.analyse() is None

    def test_parser_was_not_called(self, adapter, parser):
        adapter.analyse()
        assert parser.parse.call_count == 0

    def test_analyser_was_not_called(self, adapter, analyser):
        adapter.analyse()
        assert analyser.analyse.call_count == 0


class TestArraySource:
    """Test analysing an ordered sequence of source units."""

    @pytest.fixture
    def options(self):
        return {}

    @pytest.fixture
    def result(self, adapter, options):
        return adapter.analyse(
            [
                {"path": "/foo.js", "code": 'console.log("foo");'},
                {"path": "../bar.js", "code": '"bar";'},
            ],
            options,
        )

    def test_parser_was_called_twice(self, result, parser):
        assert parser.parse.call_count == 2

    def test_parser_was_given_sources_in_order(self, result, parser):
        first, second = parser.parse.call_args_list
        assert len(first.args) == 2
        assert first.args[0] == 'console.log("foo");'
        assert len(second.args) == 2
        assert second.args[0] == '"bar";'

    def test_parser_was_given_location_options(self, result, parser):
        for call in parser.parse.call_args_list:
            parse_opts = call.args[1]
            assert isinstance(parse_opts, dict)
            assert parse_opts["loc"] is True
            assert len(parse_opts) == 2

    def test_analyser_was_called_once(self, result, analyser):
        assert analyser.analyse.call_count == 1

    def test_analyser_was_passed_three_arguments(self, result, analyser):
        assert len(analyser.analyse.call_args.args) == 3
        assert analyser.analyse.call_args.kwargs == {}

    def test_analyser_was_given_parsed_units(self, result, analyser):
        units = analyser.analyse.call_args.args[0]
        assert isinstance(units, list)
        assert units == [
            ParsedUnit(path="/foo.js", ast="parser.parse result"),
            ParsedUnit(path="../bar.js", ast="parser.parse result"),
        ]

    def test_parsed_units_have_exactly_path_and_ast(self, result, analyser):
        from dataclasses import fields

        unit = analyser.analyse.call_args.args[0][0]
        assert [f.name for f in fields(unit)] == ["path", "ast"]

    def test_analyser_was_given_walker(self, result, analyser, walker):
        assert analyser.analyse.call_args.args[1] is walker

    def test_analyser_was_given_options(self, result, analyser, options):
        assert analyser.analyse.call_args.args[2] is options

    def test_result_is_returned_unchanged(self, result):
        assert result == "analyser.analyse result"

    def test_source_units_are_not_mutated(self, adapter):
        units = [{"path": "/foo.js", "code": "a;"}, SourceUnit(path="b.js", code="b;")]
        snapshot = [dict(units[0]), units[1]]

        adapter.analyse(units, {})

        assert units[0] == snapshot[0]
        assert units[1] is snapshot[1]

    def test_empty_sequence_still_calls_analyser(self, adapter, parser, analyser, walker):
        options = {}
        adapter.analyse([], options)

        assert parser.parse.call_count == 0
        analyser.analyse.assert_called_once_with([], walker, options)

    def test_tuple_and_generator_sources(self, adapter, analyser):
        adapter.analyse(({"path": "a.js", "code": "a;"},))
        adapter.analyse(unit for unit in [SourceUnit("b.js", "b;")])

        first = analyser.analyse.call_args_list[0].args[0]
        second = analyser.analyse.call_args_list[1].args[0]
        assert [u.path for u in first] == ["a.js"]
        assert [u.path for u in second] == ["b.js"]

    def test_options_may_be_omitted(self, adapter, analyser, walker):
        adapter.analyse([{"path": "a.js", "code": "a;"}])
        assert analyser.analyse.call_args.args[2] is None

    def test_each_call_gets_fresh_parse_options(self, adapter, parser):
        adapter.analyse([{"path": "a.js", "code": "a;"}, {"path": "b.js", "code": "b;"}])
        first, second = parser.parse.call_args_list
        assert first.args[1] is not second.args[1]


class TestArraySourceWithBadCode:
    """Test the parse failure policy for sequences."""

    @pytest.fixture
    def code(self):
        return [{"path": "/foo.js", "code": "foo foo"}, {"path": "../bar.js", "code": '"bar";'}]

    def test_raises_with_default_options(self, adapter, code):
        with pytest.raises(SourceParseError, match="/foo.js: Line 1: Unexpected identifier"):
            adapter.analyse(code, {})

    def test_error_carries_path_and_cause(self, adapter, code):
        with pytest.raises(SourceParseError) as exc_info:
            adapter.analyse(code, {})

        error = exc_info.value
        assert error.path == "/foo.js"
        assert error.line == 1
        assert error.column == 5
        assert isinstance(error.__cause__, ParseError)
        assert str(error) == "/foo.js: Line 1: Unexpected identifier"

    def test_stops_at_first_failure(self, adapter, parser, analyser, code):
        with pytest.raises(SourceParseError):
            adapter.analyse(code, {})

        assert parser.parse.call_count == 1
        assert analyser.analyse.call_count == 0

    def test_raises_when_options_omitted(self, adapter, code):
        with pytest.raises(SourceParseError):
            adapter.analyse(code)

    def test_swallows_error_with_ignore_errors(self, adapter, code):
        adapter.analyse(code, {"ignoreErrors": True})

    def test_ignore_errors_skips_failed_unit(self, adapter, parser, analyser, walker, code):
        options = {"ignoreErrors": True}
        result = adapter.analyse(code, options)

        assert parser.parse.call_count == 2
        analyser.analyse.assert_called_once_with(
            [ParsedUnit(path="../bar.js", ast="parser.parse result")], walker, options
        )
        assert result == "analyser.analyse result"

    def test_ignore_errors_logs_skipped_unit(self, adapter, code, caplog):
        with caplog.at_level("WARNING", logger="jscomplexity.adapter"):
            adapter.analyse(code, {"ignoreErrors": True})

        assert "Skipping /foo.js: Line 1: Unexpected identifier" in caplog.text

    def test_other_parser_failures_propagate(self, analyser, walker):
        parser = Mock()
        parser.parse.side_effect = RuntimeError("grammar not loaded")
        adapter = Adapter(parser=parser, analyser=analyser, walker=walker)

        with pytest.raises(RuntimeError, match="grammar not loaded"):
            adapter.analyse([{"path": "a.js", "code": "a;"}], {"ignoreErrors": True})

    def test_analyser_failures_propagate(self, parser, walker):
        analyser = Mock()
        analyser.analyse.side_effect = ValueError("bad options")
        adapter = Adapter(parser=parser, analyser=analyser, walker=walker)

        with pytest.raises(ValueError, match="bad options"):
            adapter.analyse([{"path": "a.js", "code": "a;"}])


class TestStringSource:
    """Test analysing a single code string."""

    @pytest.fixture
    def options(self):
        return {}

    @pytest.fixture
    def result(self, adapter, options):
        return adapter.analyse("foo bar baz", options)

    def test_parser_was_called_once(self, result, parser):
        assert parser.parse.call_count == 1

    def test_parser_was_given_source_and_options(self, result, parser):
        args = parser.parse.call_args.args
        assert len(args) == 2
        assert args[0] == "foo bar baz"
        assert args[1]["loc"] is True
        assert len(args[1]) == 2

    def test_analyser_was_given_bare_tree(self, result, analyser, walker, options):
        analyser.analyse.assert_called_once_with("parser.parse result", walker, options)

    def test_result_is_returned_unchanged(self, result):
        assert result == "analyser.analyse result"

    def test_parse_failure_propagates_unchanged(self, adapter, analyser):
        with pytest.raises(ParseError) as exc_info:
            adapter.analyse("foo foo", {})

        assert not isinstance(exc_info.value, SourceParseError)
        assert str(exc_info.value) == "Line 1: Unexpected identifier"
        assert analyser.analyse.call_count == 0

    def test_parse_failure_ignored(self, adapter, analyser):
        assert adapter.analyse("foo foo", {"ignoreErrors": True}) is None
        assert analyser.analyse.call_count == 0


class TestSourceClassification:
    """Test resolution of the source argument into its tagged form."""

    def test_string_is_single_source(self):
        assert classify_source("a;") == SingleSource(code="a;")

    def test_sequence_is_multiple_sources(self):
        resolved = classify_source([{"path": "a.js", "code": "a;"}])
        assert resolved == MultipleSources(units=(SourceUnit(path="a.js", code="a;"),))

    def test_objects_with_path_and_code(self):
        unit = Mock(path="a.js", code="a;")
        assert classify_source([unit]).units == (SourceUnit(path="a.js", code="a;"),)

    @pytest.mark.parametrize("source", [b"a;", 42, {"path": "a.js", "code": "a;"}])
    def test_unsupported_shapes_raise(self, source):
        with pytest.raises(TypeError):
            classify_source(source)

    @pytest.mark.parametrize(
        "unit",
        [{"path": "a.js"}, {"code": "a;"}, {"path": 1, "code": "a;"}, "a;"],
    )
    def test_incomplete_units_raise(self, unit):
        with pytest.raises(TypeError):
            classify_source([unit])

    def test_bad_unit_raises_before_parsing(self, adapter, parser, analyser):
        with pytest.raises(TypeError):
            adapter.analyse([{"path": "a.js", "code": "a;"}, {"path": "b.js"}])
        assert parser.parse.call_count == 0
        assert analyser.analyse.call_count == 0


class TestHelpers:
    """Test the small adapter helpers."""

    def test_parse_options(self):
        assert parse_options() == {"loc": True, "tolerant": False}

    @pytest.mark.parametrize(
        "options, expected",
        [
            (None, False),
            ({}, False),
            ({"ignoreErrors": False}, False),
            ({"ignoreErrors": True}, True),
        ],
    )
    def test_ignore_errors(self, options, expected):
        assert ignore_errors(options) is expected

    def test_ignore_errors_from_settings(self):
        from jscomplexity.config import AnalysisSettings

        assert ignore_errors(AnalysisSettings(ignore_errors=True)) is True


class TestSyntaxErrorFromParser:
    """Test parsers that signal bad code with the built-in SyntaxError."""

    @pytest.fixture
    def syntax_error_parser(self):
        def parse(code, options):
            if code == "foo foo":
                raise SyntaxError("Line 1: Unexpected identifier")
            return "parser.parse result"

        mock = Mock(name="parser")
        mock.parse.side_effect = parse
        return mock

    @pytest.fixture
    def adapter(self, syntax_error_parser, analyser, walker):
        return Adapter(parser=syntax_error_parser, analyser=analyser, walker=walker)

    @pytest.fixture
    def code(self):
        return [{"path": "/foo.js", "code": "foo foo"}, {"path": "../bar.js", "code": '"bar";'}]

    def test_message_is_prefixed_with_path(self, adapter, code):
        with pytest.raises(SourceParseError) as exc_info:
            adapter.analyse(code, {})

        assert str(exc_info.value) == "/foo.js: Line 1: Unexpected identifier"
        assert isinstance(exc_info.value.__cause__, SyntaxError)

    def test_ignore_errors_skips_failed_unit(self, adapter, analyser, walker, code):
        options = {"ignoreErrors": True}
        adapter.analyse(code, options)

        analyser.analyse.assert_called_once_with(
            [ParsedUnit(path="../bar.js", ast="parser.parse result")], walker, options
        )

    def test_string_source_propagates(self, adapter, analyser):
        with pytest.raises(SyntaxError, match="Line 1: Unexpected identifier"):
            adapter.analyse("foo foo", {})
        assert analyser.analyse.call_count == 0

    def test_string_source_ignored(self, adapter, analyser):
        assert adapter.analyse("foo foo", {"ignoreErrors": True}) is None
        assert analyser.analyse.call_count == 0


class TestIgnoreErrorsValidation:
    """Test that the ignoreErrors flag must be a boolean."""

    @pytest.mark.parametrize("value", [1, "yes", 0])
    def test_non_boolean_flag(self, value):
        with pytest.raises(ValueError, match="'ignoreErrors' must be a boolean"):
            ignore_errors({"ignoreErrors": value})

    def test_none_is_unset(self):
        assert ignore_errors({"ignoreErrors": None}) is False

    def test_rejected_before_parsing(self, adapter, parser, analyser):
        with pytest.raises(ValueError):
            adapter.analyse([{"path": "/foo.js", "code": "foo foo"}], {"ignoreErrors": 1})

        assert parser.parse.call_count == 0
        assert analyser.analyse.call_count == 0
