# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Selecting test cases by source line, e.g. ``basics_try.py:19-45``.

User-facing line specs are 1-based; test case line ranges are 0-based.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tryouts.model.entities import ParseResult, TestCase
from tryouts.model.types import LineRange

# ###############
# Public Interface
# ###############


class NoMatchingTestsError(Exception):
    """Raised when a line spec selects none of a file's test cases."""

    def __init__(self, source_file: str, spec: LineSpec) -> None:
        super().__init__(f"{source_file}: no test cases found matching line specification {spec}")
        self.source_file = source_file
        self.spec = spec


@dataclass(frozen=True)
class LineSpec:
    """A single 1-based line or an inclusive 1-based line range."""

    start: int
    end: int

    @classmethod
    def parse(cls, text: str) -> LineSpec | None:
        """Parse ``19``, ``19-45``, ``L19``, ``L19-45`` or ``L19-L45``.

        Returns None if *text* is not a valid spec (non-numeric, zero, or a
        range whose start exceeds its end).
        """
        match = _SPEC_RE.match(text.strip())
        if not match:
            return None
        start = int(match.group("start"))
        end = int(match.group("end")) if match.group("end") else start
        if start <= 0 or end <= 0 or start > end:
            return None
        return cls(start, end)

    @property
    def is_single_line(self) -> bool:
        return self.start == self.end

    def to_line_range(self) -> LineRange:
        """The 0-based LineRange covered by this spec."""
        return LineRange(first=self.start - 1, last=self.end - 1)

    def matches(self, test_case: TestCase) -> bool:
        """True if the spec's line falls in the test's range, or the ranges overlap."""
        if self.is_single_line:
            return self.start - 1 in test_case.line_range
        return test_case.line_range.overlaps(self.to_line_range())

    def __str__(self) -> str:
        return str(self.start) if self.is_single_line else f"{self.start}-{self.end}"


def split_path_spec(path_with_spec: str) -> tuple[str, LineSpec | None]:
    """Split ``path:spec`` into the path and its LineSpec.

    The split happens on the last colon. When the suffix is not a valid spec
    (or is a single drive letter) the whole string is returned as the path.
    """
    path, sep, suffix = path_with_spec.rpartition(":")
    if not sep or not path or re.fullmatch(r"[A-Za-z]", suffix):
        return path_with_spec, None
    spec = LineSpec.parse(suffix)
    if spec is None:
        return path_with_spec, None
    return path, spec


def select_test_cases(result: ParseResult, spec: LineSpec | None) -> ParseResult:
    """Return a copy of *result* keeping only the test cases that *spec* matches.

    Setup, teardown, metadata and warnings are preserved. A None spec
    selects everything.

    Raises:
        NoMatchingTestsError: If no test case matches.
    """
    if spec is None:
        return result
    selected = tuple(tc for tc in result.test_cases if spec.matches(tc))
    if not selected:
        raise NoMatchingTestsError(result.source_file, spec)
    return result.model_copy(update={"test_cases": selected})


# ################
# Implementation
# ################

_SPEC_RE = re.compile(r"^[Ll]?(?P<start>\d+)(?:-[Ll]?(?P<end>\d+))?$")
