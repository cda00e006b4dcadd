# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Annotation classifier: maps one comment's text to a typed token.

Grammar, first match wins:

    ##=> anything        disabled expectation   -> COMMENT
    ## text              description            -> DESCRIPTION
    # TEST 3: text       description            -> DESCRIPTION
    #=> expr             expectation            -> EXPECTATION (see _MARKER_TYPES)
    #=BOGUS> expr        malformed marker       -> MALFORMED_EXPECTATION + warning
    # text               bare comment           -> POTENTIAL_DESCRIPTION
    anything else                               -> COMMENT
"""

from __future__ import annotations

import re

from tryouts.model.types import ExpectationType
from tryouts.model.warnings import ParserWarning
from tryouts.parser.diagnostics import WarningCollector
from tryouts.parser.tokens import Token, TokenKind

# ###############
# Public Interface
# ###############


def classify_comment(
    text: str,
    line_number: int,
    *,
    context: str = "",
    warnings: WarningCollector | None = None,
) -> Token:
    """Classify a single comment.

    Args:
        text: The comment text, starting at its ``#``. Surrounding whitespace
            is ignored.
        line_number: 1-based line number of the comment.
        context: The full source line, used in warnings. Defaults to *text*.
        warnings: Collector that receives a MALFORMED_EXPECTATION warning
            when the comment looks like a broken expectation marker.

    Returns:
        A Token whose ``line`` is the 0-based index ``line_number - 1``.
    """
    content = text.strip()
    line = line_number - 1

    if _DISABLED_RE.match(content):
        return Token(TokenKind.COMMENT, content.lstrip("#").strip(), line)

    match = _DESCRIPTION_RE.match(content) or _TEST_HEADER_RE.match(content)
    if match:
        return Token(TokenKind.DESCRIPTION, match.group("text").strip(), line)

    match = _EXPECTATION_RE.match(content)
    if match:
        pipe = match.group("pipe")
        if pipe is not None:
            return Token(
                TokenKind.EXPECTATION,
                match.group("content").strip(),
                line,
                expectation_type=ExpectationType.OUTPUT,
                pipe=int(pipe),
            )
        return Token(
            TokenKind.EXPECTATION,
            match.group("content").strip(),
            line,
            expectation_type=_MARKER_TYPES[match.group("marker")],
        )

    match = _MALFORMED_RE.match(content)
    if match:
        syntax = match.group("syntax")
        if warnings is not None:
            warnings.add(
                ParserWarning.malformed_expectation(
                    line_number=line_number,
                    syntax=syntax,
                    context=(context or text).strip(),
                )
            )
        return Token(TokenKind.MALFORMED_EXPECTATION, match.group("content").strip(), line)

    match = _BARE_COMMENT_RE.match(content)
    if match:
        return Token(TokenKind.POTENTIAL_DESCRIPTION, match.group("text").strip(), line)

    # Only reachable for text passed in without its leading "#".
    return Token(TokenKind.COMMENT, content, line)


# ################
# Implementation
# ################

_MARKER_TYPES: dict[str, ExpectationType] = {
    ">": ExpectationType.REGULAR,
    "!>": ExpectationType.EXCEPTION,
    "<>": ExpectationType.INTENTIONAL_FAILURE,
    "=>": ExpectationType.TRUE,
    "/=>": ExpectationType.FALSE,
    "|>": ExpectationType.BOOLEAN,
    "*>": ExpectationType.NON_NIL,
    ":>": ExpectationType.RESULT_TYPE,
    "~>": ExpectationType.REGEX_MATCH,
    "%>": ExpectationType.PERFORMANCE_TIME,
    "?>": ExpectationType.DIAGNOSTIC,
}

_MARKER_ALTERNATION = "|".join(re.escape(m) for m in sorted(_MARKER_TYPES, key=len, reverse=True))

_DISABLED_RE = re.compile(rf"^##\s*=(?:{_MARKER_ALTERNATION}|\d+>)")
_DESCRIPTION_RE = re.compile(r"^##\s*(?P<text>.*)$")
_TEST_HEADER_RE = re.compile(r"^#\s*TEST\s*\d*:\s*(?P<text>.*)$")
_EXPECTATION_RE = re.compile(rf"^#\s*=(?:(?P<pipe>\d+)>|(?P<marker>{_MARKER_ALTERNATION}))\s*(?P<content>.*)$")
_MALFORMED_RE = re.compile(r"^#\s*=(?P<syntax>[^>=:!~%*|/\s]+)>\s*(?P<content>.*)$")
_BARE_COMMENT_RE = re.compile(r"^#\s*(?P<text>.*)$")
