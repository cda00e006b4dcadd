# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for test-boundary resolution of bare comments."""

import pytest

from tryouts.config import ParserConfig
from tryouts.parser.boundaries import (
    BoundarySpan,
    find_boundary_spans,
    looks_like_description,
    resolve_boundaries,
)
from tryouts.parser.extractor import extract_tokens
from tryouts.parser.tokens import Token, TokenKind

# ###############
# Test Helpers
# ###############


def _resolve(source: str, config: ParserConfig | None = None) -> list[Token]:
    tokens, _ = resolve_boundaries(extract_tokens(source), config)
    return tokens


def _kind_at(source: str, line: int, config: ParserConfig | None = None) -> TokenKind:
    """Kind of the last token on a 0-based line after resolution."""
    return [t for t in _resolve(source, config) if t.line == line][-1].kind


# ###############
# Content Heuristic
# ###############


class TestLooksLikeDescription:
    def test_keyword_and_length(self) -> None:
        assert looks_like_description("should add numbers", ParserConfig())

    def test_exactly_minimum_length_is_too_short(self) -> None:
        assert len("test it ok") == 10
        assert not looks_like_description("test it ok", ParserConfig())

    def test_one_over_minimum_length(self) -> None:
        assert looks_like_description("test it now", ParserConfig())

    def test_no_keyword(self) -> None:
        assert not looks_like_description("a regular remark here", ParserConfig())

    def test_keyword_is_case_insensitive(self) -> None:
        assert looks_like_description("Verify the total amount", ParserConfig())

    def test_keyword_must_start_a_word(self) -> None:
        assert not looks_like_description("contest results are in", ParserConfig())

    def test_keyword_prefix_of_longer_word(self) -> None:
        assert looks_like_description("testing the parser", ParserConfig())

    def test_custom_keywords(self) -> None:
        config = ParserConfig(description_keywords=("scenario",))
        assert looks_like_description("Scenario: empty basket", config)
        assert not looks_like_description("should add numbers", config)

    def test_custom_minimum_length(self) -> None:
        config = ParserConfig(min_description_length=0)
        assert looks_like_description("test", config)


# ###############
# Boundary Spans
# ###############


class TestFindBoundarySpans:
    def test_span_runs_to_last_expectation(self) -> None:
        tokens = extract_tokens("## Adds\nx = 1\nx + 1\n#=> 2\n#=:> int\ny = 3\n")
        assert find_boundary_spans(tokens) == [BoundarySpan(0, 4)]

    def test_span_stops_at_next_description(self) -> None:
        tokens = extract_tokens("## First\n1\n#=> 1\n## Second\n2\n#=> 2\n")
        assert find_boundary_spans(tokens) == [BoundarySpan(0, 2), BoundarySpan(3, 5)]

    def test_description_without_expectation_has_no_span(self) -> None:
        tokens = extract_tokens("## Only code\nx = 1\n## Real\n1\n#=> 1\n")
        assert find_boundary_spans(tokens) == [BoundarySpan(2, 4)]

    def test_no_descriptions(self) -> None:
        assert find_boundary_spans(extract_tokens("1\n#=> 1\n")) == []

    def test_contains_is_inclusive(self) -> None:
        span = BoundarySpan(2, 5)
        assert span.contains(2)
        assert span.contains(5)
        assert not span.contains(1)
        assert not span.contains(6)


# ###############
# Promotion
# ###############


class TestPromotion:
    def test_bare_comment_heading_a_test_is_promoted(self) -> None:
        source = "# should add numbers\n1 + 1\n#=> 2\n"
        assert _kind_at(source, 0) == TokenKind.DESCRIPTION

    def test_promotion_creates_a_span(self) -> None:
        _, spans = resolve_boundaries(extract_tokens("# should add numbers\n1 + 1\n#=> 2\n"))
        assert spans == [BoundarySpan(0, 2)]

    def test_blank_lines_do_not_count_toward_window(self) -> None:
        source = "# should skip blank lines\n\n\n\n\n\n\nx = 1\n#=> 1\n"
        assert _kind_at(source, 0) == TokenKind.DESCRIPTION

    def test_comments_do_not_count_toward_window(self) -> None:
        source = "# should skip comments\n# a\n# b\n# c\n# d\n# e\nx = 1\n#=> 1\n"
        assert _kind_at(source, 0) == TokenKind.DESCRIPTION

    def test_promoted_comment_content_preserved(self) -> None:
        tokens = _resolve("# should add numbers\n1 + 1\n#=> 2\n")
        assert tokens[0].content == "should add numbers"


# ###############
# Demotion
# ###############


class TestDemotion:
    def test_short_comment_is_demoted(self) -> None:
        assert _kind_at("# check it\n1\n#=> 1\n", 0) == TokenKind.COMMENT

    def test_comment_without_keyword_is_demoted(self) -> None:
        assert _kind_at("# a regular remark here\n1\n#=> 1\n", 0) == TokenKind.COMMENT

    def test_comment_after_code_is_demoted(self) -> None:
        source = "x = 1\n# should be demoted now\n1 + 1\n#=> 2\n"
        assert _kind_at(source, 1) == TokenKind.COMMENT

    def test_inline_comment_is_demoted(self) -> None:
        source = "x = 1  # should test this thing\nx\n#=> 1\n"
        assert _kind_at(source, 0) == TokenKind.COMMENT

    def test_comment_inside_explicit_test_is_demoted(self) -> None:
        source = "## Explicit test\nx = 1\n\n# should verify the value\nx\n#=> 1\n"
        assert _kind_at(source, 3) == TokenKind.COMMENT

    def test_no_expectation_within_window(self) -> None:
        source = "# should do something here\na = 1\nb = 2\nc = 3\nd = 4\ne = 5\nf = 6\n#=> 1\n"
        assert _kind_at(source, 0) == TokenKind.COMMENT

    def test_wider_window_finds_expectation(self) -> None:
        source = "# should do something here\na = 1\nb = 2\nc = 3\nd = 4\ne = 5\nf = 6\n#=> 1\n"
        assert _kind_at(source, 0, ParserConfig(lookahead_window=10)) == TokenKind.DESCRIPTION

    def test_expectation_without_code_is_demoted(self) -> None:
        assert _kind_at("# should only expect\n#=> 1\n", 0) == TokenKind.COMMENT

    def test_lookahead_stops_at_next_description(self) -> None:
        source = "# should do something\n## Next test\nx = 1\n#=> 1\n"
        assert _kind_at(source, 0) == TokenKind.COMMENT

    def test_comment_at_end_of_file(self) -> None:
        assert _kind_at("x = 1\n\n# should be the last line\n", 2) == TokenKind.COMMENT


# ###############
# Resolution Output
# ###############


@pytest.mark.parametrize(
    "source",
    [
        "# should add numbers\n1 + 1\n#=> 2\n",
        "x = 1  # remark\n# another\n",
        "## Explicit\n# should verify x\nx = 1\n#=> 1\n",
    ],
)
def test_no_potential_descriptions_remain(source: str) -> None:
    assert all(t.kind != TokenKind.POTENTIAL_DESCRIPTION for t in _resolve(source))


def test_non_potential_tokens_untouched() -> None:
    original = extract_tokens("## Explicit\nx = 1\n#=> 1\n")
    resolved, _ = resolve_boundaries(original)
    assert resolved == original
