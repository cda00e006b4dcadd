# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value types shared by the tryouts semantic model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

# ###############
# Public Interface
# ###############


class ExpectationType(Enum):
    """The closed set of expectation kinds an annotation can declare."""

    REGULAR = "regular"
    EXCEPTION = "exception"
    BOOLEAN = "boolean"
    TRUE = "true"
    FALSE = "false"
    RESULT_TYPE = "result_type"
    REGEX_MATCH = "regex_match"
    PERFORMANCE_TIME = "performance_time"
    INTENTIONAL_FAILURE = "intentional_failure"
    OUTPUT = "output"
    NON_NIL = "non_nil"
    DIAGNOSTIC = "diagnostic"


class LineRange(BaseModel):
    """An inclusive range of 0-based source line indexes."""

    model_config = ConfigDict(frozen=True)

    first: int
    last: int

    @model_validator(mode="after")
    def _check_order(self) -> LineRange:
        if self.last < self.first:
            raise ValueError(f"line range end {self.last} precedes start {self.first}")
        return self

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.first <= line <= self.last

    def __len__(self) -> int:
        return self.last - self.first + 1

    def overlaps(self, other: LineRange) -> bool:
        """Return True if the two ranges share at least one line."""
        return not (self.last < other.first or other.last < self.first)
