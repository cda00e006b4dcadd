# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Non-fatal advisories recorded while parsing a tryout file."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############


class WarningKind(Enum):
    """Categories of parser warnings."""

    UNNAMED_TEST = "unnamed_test"
    AMBIGUOUS_BOUNDARY = "ambiguous_boundary"
    MALFORMED_EXPECTATION = "malformed_expectation"


class ParserWarning(BaseModel):
    """A recoverable condition found in a tryout file.

    Attributes:
        kind: The warning category.
        message: Human-readable summary.
        line_number: 1-based line number, for display.
        context: The offending source line, stripped.
        suggestion: How to fix the annotation.
    """

    model_config = ConfigDict(frozen=True)

    kind: WarningKind
    message: str
    line_number: int
    context: str
    suggestion: str

    @classmethod
    def unnamed_test(cls, *, line_number: int, context: str) -> ParserWarning:
        return cls(
            kind=WarningKind.UNNAMED_TEST,
            message="Test case without explicit description",
            line_number=line_number,
            context=context,
            suggestion="Add a test description using '## Description' prefix",
        )

    @classmethod
    def ambiguous_boundary(cls, *, line_number: int, context: str) -> ParserWarning:
        return cls(
            kind=WarningKind.AMBIGUOUS_BOUNDARY,
            message="Ambiguous test case boundary detected",
            line_number=line_number,
            context=context,
            suggestion="Use explicit '## Description' to clarify test structure",
        )

    @classmethod
    def malformed_expectation(cls, *, line_number: int, syntax: str, context: str) -> ParserWarning:
        return cls(
            kind=WarningKind.MALFORMED_EXPECTATION,
            message=f"Malformed expectation syntax '#={syntax}>' at line {line_number}",
            line_number=line_number,
            context=context,
            suggestion="Use valid expectation syntax like #=>, #==>, #=:>, #=!>, etc.",
        )
