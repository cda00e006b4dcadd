# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the annotation classifier."""

import logging

import pytest

from tryouts.model import ExpectationType, WarningKind
from tryouts.parser.classifier import classify_comment
from tryouts.parser.diagnostics import WarningCollector
from tryouts.parser.tokens import Token, TokenKind

# ###############
# Test Helpers
# ###############


def _classify(text: str, line_number: int = 1) -> Token:
    return classify_comment(text, line_number)


# ###############
# Descriptions
# ###############


class TestDescriptions:
    def test_double_hash_is_description(self) -> None:
        token = _classify("## Adds two numbers")
        assert token.kind == TokenKind.DESCRIPTION
        assert token.content == "Adds two numbers"

    def test_double_hash_without_space(self) -> None:
        token = _classify("##Adds two numbers")
        assert token.kind == TokenKind.DESCRIPTION
        assert token.content == "Adds two numbers"

    def test_double_hash_keeps_test_prefix_text(self) -> None:
        token = _classify("## TEST: add")
        assert token.kind == TokenKind.DESCRIPTION
        assert token.content == "TEST: add"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("# TEST 1: addition works", "addition works"),
            ("# TEST: no number", "no number"),
            ("#TEST 12:   padded  ", "padded"),
        ],
    )
    def test_numbered_test_header_is_description(self, text: str, expected: str) -> None:
        token = _classify(text)
        assert token.kind == TokenKind.DESCRIPTION
        assert token.content == expected

    def test_line_is_zero_based(self) -> None:
        token = _classify("## something", line_number=7)
        assert token.line == 6


# ###############
# Expectations
# ###############


class TestExpectations:
    @pytest.mark.parametrize(
        ("text", "expected_type"),
        [
            ("#=> 2", ExpectationType.REGULAR),
            ("#=!> isinstance(error, ValueError)", ExpectationType.EXCEPTION),
            ("#=<> 3", ExpectationType.INTENTIONAL_FAILURE),
            ("#==> result > 0", ExpectationType.TRUE),
            ("#=/=> result < 0", ExpectationType.FALSE),
            ("#=|> result == 1", ExpectationType.BOOLEAN),
            ("#=*>", ExpectationType.NON_NIL),
            ("#=:> int", ExpectationType.RESULT_TYPE),
            (r"#=~> r'\d+'", ExpectationType.REGEX_MATCH),
            ("#=%> 100", ExpectationType.PERFORMANCE_TIME),
            ("#=?> result", ExpectationType.DIAGNOSTIC),
            ("#=1> hello", ExpectationType.OUTPUT),
        ],
    )
    def test_marker_maps_to_type(self, text: str, expected_type: ExpectationType) -> None:
        token = _classify(text)
        assert token.kind == TokenKind.EXPECTATION
        assert token.expectation_type == expected_type

    def test_content_is_trimmed_text_after_marker(self) -> None:
        token = _classify("#=>    [1, 2, 3]   ")
        assert token.content == "[1, 2, 3]"

    def test_space_between_hash_and_marker(self) -> None:
        token = _classify("# => 4")
        assert token.kind == TokenKind.EXPECTATION
        assert token.expectation_type == ExpectationType.REGULAR
        assert token.content == "4"

    def test_stdout_pipe(self) -> None:
        token = _classify("#=1> hello")
        assert token.pipe == 1
        assert token.content == "hello"

    def test_stderr_pipe(self) -> None:
        token = _classify("#=2> oops")
        assert token.pipe == 2
        assert token.content == "oops"

    def test_multi_digit_pipe(self) -> None:
        token = _classify("#=10> x")
        assert token.expectation_type == ExpectationType.OUTPUT
        assert token.pipe == 10

    def test_non_output_has_no_pipe(self) -> None:
        assert _classify("#=> 1").pipe is None

    def test_empty_content_is_valid(self) -> None:
        token = _classify("#=?>")
        assert token.kind == TokenKind.EXPECTATION
        assert token.expectation_type == ExpectationType.DIAGNOSTIC
        assert token.content == ""

    def test_empty_output_content_is_valid(self) -> None:
        token = _classify("#=1>")
        assert token.expectation_type == ExpectationType.OUTPUT
        assert token.content == ""

    def test_true_marker_not_confused_with_regular(self) -> None:
        token = _classify("#==> x")
        assert token.expectation_type == ExpectationType.TRUE
        assert token.content == "x"


# ###############
# Disabled Expectations
# ###############


class TestDisabledExpectations:
    def test_double_hash_arrow_is_comment(self) -> None:
        token = _classify("##=> 2")
        assert token.kind == TokenKind.COMMENT
        assert token.content == "=> 2"

    def test_double_hash_space_arrow_is_comment(self) -> None:
        token = _classify("## => 2")
        assert token.kind == TokenKind.COMMENT

    def test_double_hash_other_markers_are_comments(self) -> None:
        assert _classify("##=!> error").kind == TokenKind.COMMENT
        assert _classify("##=1> out").kind == TokenKind.COMMENT


# ###############
# Malformed Expectations
# ###############


class TestMalformedExpectations:
    def test_invalid_marker_is_malformed(self) -> None:
        token = _classify("#=BOGUS> 2")
        assert token.kind == TokenKind.MALFORMED_EXPECTATION
        assert token.content == "2"
        assert token.expectation_type is None

    def test_warning_recorded(self) -> None:
        warnings = WarningCollector("example_try.py")
        classify_comment("#=BOGUS> 2", 5, context="x = 1  #=BOGUS> 2", warnings=warnings)
        recorded = list(warnings)
        assert len(recorded) == 1
        assert recorded[0].kind == WarningKind.MALFORMED_EXPECTATION
        assert recorded[0].line_number == 5
        assert recorded[0].context == "x = 1  #=BOGUS> 2"
        assert "#=BOGUS>" in recorded[0].message

    def test_context_defaults_to_comment_text(self) -> None:
        warnings = WarningCollector()
        classify_comment("  #=oops> 1  ", 2, warnings=warnings)
        assert list(warnings)[0].context == "#=oops> 1"

    def test_warning_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        warnings = WarningCollector("example_try.py")
        with caplog.at_level(logging.WARNING):
            classify_comment("#=abc> 2", 3, warnings=warnings)
        assert any("example_try.py:3" in r.message for r in caplog.records)

    def test_without_collector_no_error(self) -> None:
        assert _classify("#=xyz> 1").kind == TokenKind.MALFORMED_EXPECTATION

    @pytest.mark.parametrize("text", ["#=>", "#==>", "#=:>", "#=!>", "#=~>", "#=%>", "#=*>", "#=|>", "#=/=>"])
    def test_valid_markers_are_not_malformed(self, text: str) -> None:
        warnings = WarningCollector()
        token = classify_comment(f"{text} 1", 1, warnings=warnings)
        assert token.kind == TokenKind.EXPECTATION
        assert len(warnings) == 0


# ###############
# Bare Comments
# ###############


class TestBareComments:
    def test_single_hash_is_potential_description(self) -> None:
        token = _classify("# should add numbers together")
        assert token.kind == TokenKind.POTENTIAL_DESCRIPTION
        assert token.content == "should add numbers together"

    def test_empty_comment_is_potential_description(self) -> None:
        token = _classify("#")
        assert token.kind == TokenKind.POTENTIAL_DESCRIPTION
        assert token.content == ""

    def test_equals_without_arrow_is_plain(self) -> None:
        token = _classify("# a = b")
        assert token.kind == TokenKind.POTENTIAL_DESCRIPTION

    def test_text_without_hash_is_comment(self) -> None:
        token = _classify("not a hash comment")
        assert token.kind == TokenKind.COMMENT
        assert token.content == "not a hash comment"
