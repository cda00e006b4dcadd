# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Core entities produced by parsing a tryout file."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import Field as _Field

from tryouts.model.types import ExpectationType, LineRange
from tryouts.model.warnings import ParserWarning, WarningKind

# ###############
# Public Interface
# ###############


class Expectation(BaseModel):
    """One typed check attached to a test case.

    ``pipe`` is set for output expectations only: 1 for stdout, 2 for stderr.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    type: ExpectationType
    pipe: int | None = None

    @model_validator(mode="after")
    def _check_pipe(self) -> Expectation:
        if self.type is ExpectationType.OUTPUT and self.pipe is None:
            raise ValueError("output expectations require a pipe number")
        if self.type is not ExpectationType.OUTPUT and self.pipe is not None:
            raise ValueError(f"{self.type.value} expectations do not take a pipe number")
        return self

    @property
    def is_regular(self) -> bool:
        return self.type is ExpectationType.REGULAR

    @property
    def is_exception(self) -> bool:
        return self.type is ExpectationType.EXCEPTION

    @property
    def is_boolean(self) -> bool:
        return self.type is ExpectationType.BOOLEAN

    @property
    def is_true(self) -> bool:
        return self.type is ExpectationType.TRUE

    @property
    def is_false(self) -> bool:
        return self.type is ExpectationType.FALSE

    @property
    def is_result_type(self) -> bool:
        return self.type is ExpectationType.RESULT_TYPE

    @property
    def is_regex_match(self) -> bool:
        return self.type is ExpectationType.REGEX_MATCH

    @property
    def is_performance_time(self) -> bool:
        return self.type is ExpectationType.PERFORMANCE_TIME

    @property
    def is_intentional_failure(self) -> bool:
        return self.type is ExpectationType.INTENTIONAL_FAILURE

    @property
    def is_output(self) -> bool:
        return self.type is ExpectationType.OUTPUT

    @property
    def is_non_nil(self) -> bool:
        return self.type is ExpectationType.NON_NIL

    @property
    def is_diagnostic(self) -> bool:
        return self.type is ExpectationType.DIAGNOSTIC

    @property
    def is_stdout(self) -> bool:
        return self.pipe == 1

    @property
    def is_stderr(self) -> bool:
        return self.pipe == 2


class TestCase(BaseModel):
    """A described piece of code together with the expectations it must meet.

    Locations shown to users should come from ``first_expectation_line``
    (see :attr:`display_line`), never from ``line_range.last``.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True)

    description: str
    code: str
    expectations: tuple[Expectation, ...] = ()
    line_range: LineRange
    path: str
    source_lines: tuple[str, ...] = ()
    first_expectation_line: int

    @property
    def is_empty(self) -> bool:
        return not self.code

    @property
    def has_expectations(self) -> bool:
        return bool(self.expectations)

    @property
    def has_exception_expectations(self) -> bool:
        return any(e.is_exception for e in self.expectations)

    @property
    def regular_expectations(self) -> tuple[Expectation, ...]:
        return tuple(e for e in self.expectations if e.is_regular)

    @property
    def exception_expectations(self) -> tuple[Expectation, ...]:
        return tuple(e for e in self.expectations if e.is_exception)

    @property
    def display_line(self) -> int:
        """1-based line used when reporting this test's location."""
        return self.first_expectation_line + 1


class Setup(BaseModel):
    """Code run once before the first test case."""

    model_config = ConfigDict(frozen=True)

    code: str = ""
    line_range: LineRange = LineRange(first=0, last=0)
    path: str

    @property
    def is_empty(self) -> bool:
        return not self.code


class Teardown(BaseModel):
    """Code run once after the last test case."""

    model_config = ConfigDict(frozen=True)

    code: str = ""
    line_range: LineRange = LineRange(first=0, last=0)
    path: str

    @property
    def is_empty(self) -> bool:
        return not self.code


class ParseMetadata(BaseModel):
    """Which parser produced a result, and when."""

    model_config = ConfigDict(frozen=True)

    parser: str
    parsed_at: datetime


class ParseResult(BaseModel):
    """Top-level model for one parsed tryout file."""

    model_config = ConfigDict(frozen=True)

    setup: Setup
    test_cases: tuple[TestCase, ...] = ()
    teardown: Teardown
    source_file: str
    metadata: ParseMetadata
    warnings: tuple[ParserWarning, ...] = _Field(default_factory=tuple)

    @property
    def total_tests(self) -> int:
        return len(self.test_cases)

    @property
    def is_empty(self) -> bool:
        return not self.test_cases

    def warnings_of(self, kind: WarningKind) -> tuple[ParserWarning, ...]:
        """Return the recorded warnings of one kind, in source order of recording."""
        return tuple(w for w in self.warnings if w.kind is kind)
