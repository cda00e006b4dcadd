# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line-addressed tokens flowing between the parser stages."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from tryouts.model.types import ExpectationType

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """Classification of one source line (or one comment on a line)."""

    BLANK = "blank"
    CODE = "code"
    DESCRIPTION = "description"
    # Bare comment awaiting the boundary resolver's verdict.
    POTENTIAL_DESCRIPTION = "potential_description"
    EXPECTATION = "expectation"
    MALFORMED_EXPECTATION = "malformed_expectation"
    COMMENT = "comment"


@dataclass(frozen=True)
class Token:
    """A classified unit of a tryout file.

    Attributes:
        kind: What the line (or comment) is.
        content: Code text, description text, or expectation expression,
            depending on ``kind``. Empty for blank lines.
        line: 0-based source line index.
        expectation_type: Set for EXPECTATION tokens only.
        pipe: Output stream number for OUTPUT expectations (1=stdout, 2=stderr).
    """

    kind: TokenKind
    content: str
    line: int
    expectation_type: ExpectationType | None = None
    pipe: int | None = None

    @property
    def is_expectation(self) -> bool:
        return self.kind is TokenKind.EXPECTATION

    @property
    def is_code(self) -> bool:
        return self.kind is TokenKind.CODE

    @property
    def is_context(self) -> bool:
        """True for tokens that carry no test semantics (blanks, comments, malformed markers)."""
        return self.kind in (TokenKind.BLANK, TokenKind.COMMENT, TokenKind.MALFORMED_EXPECTATION)
