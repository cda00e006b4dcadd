# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Test-boundary resolution for bare comments.

A bare ``# text`` comment may head a test case or may just be a comment in
ordinary code. Each one is promoted to a description only when the content
reads like one and a code line plus an expectation follow shortly after;
otherwise it is demoted to a plain comment.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import re
from dataclasses import dataclass

from tryouts.config import ParserConfig
from tryouts.parser.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class BoundarySpan:
    """Lines from a description to the last expectation before the next description.

    Attributes:
        start_line: 0-based line of the description.
        end_line: 0-based line of the last expectation.
    """

    start_line: int
    end_line: int

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


def find_boundary_spans(tokens: list[Token]) -> list[BoundarySpan]:
    """Return one span per DESCRIPTION token that is followed by an expectation."""
    spans: list[BoundarySpan] = []
    for index, token in enumerate(tokens):
        if token.kind is not TokenKind.DESCRIPTION:
            continue
        end_line = _find_test_end(tokens, index)
        if end_line is not None:
            spans.append(BoundarySpan(token.line, end_line))
    return spans


def looks_like_description(content: str, config: ParserConfig) -> bool:
    """Content heuristic: long enough and containing a descriptive keyword."""
    if len(content) <= config.min_description_length:
        return False
    return _keyword_pattern(config.description_keywords).search(content) is not None


def resolve_boundaries(
    tokens: list[Token],
    config: ParserConfig | None = None,
) -> tuple[list[Token], list[BoundarySpan]]:
    """Resolve every POTENTIAL_DESCRIPTION token to DESCRIPTION or COMMENT.

    A bare comment is promoted only if all of these hold:

    - it does not fall inside the span of an explicit (``##``) test case;
    - the token right before it is not CODE;
    - its text passes :func:`looks_like_description`;
    - within the next ``config.lookahead_window`` meaningful tokens (blank
      lines and comments skipped, stopping at the next description) there
      is at least one CODE token and at least one EXPECTATION token.

    Returns:
        The resolved token list (no POTENTIAL_DESCRIPTION tokens remain) and
        the boundary spans of the confirmed test cases.
    """
    config = config or ParserConfig()
    explicit_spans = find_boundary_spans(tokens)

    resolved: list[Token] = []
    for index, token in enumerate(tokens):
        if token.kind is not TokenKind.POTENTIAL_DESCRIPTION:
            resolved.append(token)
            continue
        if _should_promote(tokens, index, explicit_spans, config):
            logger.debug("Line %d: bare comment promoted to description: %r", token.line + 1, token.content)
            resolved.append(dataclasses.replace(token, kind=TokenKind.DESCRIPTION))
        else:
            resolved.append(dataclasses.replace(token, kind=TokenKind.COMMENT))

    spans = find_boundary_spans(resolved)
    logger.debug("Resolved %d test boundaries", len(spans))
    return resolved, spans


# ################
# Implementation
# ################

_SKIPPED_KINDS = frozenset(
    {TokenKind.BLANK, TokenKind.COMMENT, TokenKind.POTENTIAL_DESCRIPTION, TokenKind.MALFORMED_EXPECTATION}
)


@functools.lru_cache(maxsize=8)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(k) for k in keywords)
    return re.compile(rf"\b(?:{alternation})", re.IGNORECASE)


def _find_test_end(tokens: list[Token], start_index: int) -> int | None:
    """Line of the last expectation before the next description, or None."""
    last_expectation_line: int | None = None
    for token in tokens[start_index + 1 :]:
        if token.kind is TokenKind.DESCRIPTION:
            break
        if token.is_expectation:
            last_expectation_line = token.line
    return last_expectation_line


def _should_promote(
    tokens: list[Token],
    index: int,
    explicit_spans: list[BoundarySpan],
    config: ParserConfig,
) -> bool:
    token = tokens[index]
    if any(span.contains(token.line) for span in explicit_spans):
        return False
    if index > 0 and tokens[index - 1].is_code:
        return False
    if not looks_like_description(token.content, config):
        return False

    window: list[Token] = []
    for following in tokens[index + 1 :]:
        if following.kind is TokenKind.DESCRIPTION:
            break
        if following.kind in _SKIPPED_KINDS:
            continue
        window.append(following)
        if len(window) >= config.lookahead_window:
            break

    has_code = any(t.is_code for t in window)
    has_expectation = any(t.is_expectation for t in window)
    return has_code and has_expectation
