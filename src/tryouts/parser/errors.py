# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Fatal errors raised while parsing a tryout file."""

from __future__ import annotations

from tryouts.model.warnings import ParserWarning

# ###############
# Public Interface
# ###############


class SourceSyntaxError(Exception):
    """Raised by the comment extractor when the source does not parse as Python.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.reason = message
        self.line = line
        self.column = column


class TryoutSyntaxError(Exception):
    """The single structured error surfaced to callers when a parse is aborted.

    Attributes:
        line_number: 1-based line number of the offending line (0 when the
            file could not be read at all).
        context: The offending source line.
        source_file: Path of the file being parsed, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: int,
        context: str,
        source_file: str | None = None,
    ) -> None:
        location = f"{source_file}:{line_number}" if source_file else f"line {line_number}"
        super().__init__(f"{message} at {location}: {context}")
        self.reason = message
        self.line_number = line_number
        self.context = context
        self.source_file = source_file


class StrictModeViolation(TryoutSyntaxError):
    """Raised in strict mode when a warning class that strict mode forbids was recorded."""

    def __init__(self, warning: ParserWarning, *, source_file: str | None = None) -> None:
        super().__init__(
            f"{warning.message} (strict mode). {warning.suggestion}",
            line_number=warning.line_number,
            context=warning.context,
            source_file=source_file,
        )
        self.warning = warning
        self.suggestion = warning.suggestion
