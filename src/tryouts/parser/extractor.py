# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Comment-aware token extraction for tryout files.

Comment spans come from the Python tokenizer rather than from scanning raw
lines, so text inside string literals (including triple-quoted strings
that contain ``#=>``-like lines) is never mistaken for an annotation.
"""

from __future__ import annotations

import ast
import io
import logging
import tokenize

from tryouts.parser.classifier import classify_comment
from tryouts.parser.diagnostics import WarningCollector
from tryouts.parser.errors import SourceSyntaxError
from tryouts.parser.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def split_lines(source: str) -> list[str]:
    """Split source text into physical lines without their line terminators.

    A single trailing newline does not produce an extra empty line.
    """
    lines = [line.removesuffix("\r") for line in source.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def extract_tokens(source: str, *, warnings: WarningCollector | None = None) -> list[Token]:
    """Tokenize tryout source into one classified token per line (or per comment).

    A line with an inline comment yields a CODE token for the text before the
    comment followed by the classified comment token. A line whose only
    content is a comment yields the comment token alone. Lines inside a
    multi-line string literal are always CODE, even when blank.

    Args:
        source: Full text of a tryout file.
        warnings: Collector for warnings raised by comment classification.

    Returns:
        Tokens ordered by line, then by column.

    Raises:
        SourceSyntaxError: If the source is not valid Python. No tokens are
            produced in that case.
    """
    return _Extractor(source, warnings).extract()


# ################
# Implementation
# ################

# f-strings (3.12+) and t-strings (3.14+) are split into start/middle/end tokens.
_SPLIT_STRING_STARTS = frozenset(
    getattr(tokenize, name) for name in ("FSTRING_START", "TSTRING_START") if hasattr(tokenize, name)
)
_SPLIT_STRING_ENDS = frozenset(
    getattr(tokenize, name) for name in ("FSTRING_END", "TSTRING_END") if hasattr(tokenize, name)
)


class _Extractor:
    """Single-use extractor bound to one source text."""

    def __init__(self, source: str, warnings: WarningCollector | None) -> None:
        self._source = source
        self._lines = split_lines(source)
        self._warnings = warnings
        # 1-based row -> [(column, comment text)]
        self._comments: dict[int, list[tuple[int, str]]] = {}
        # 1-based rows that lie inside a multi-line string literal
        self._literal_rows: set[int] = set()

    def extract(self) -> list[Token]:
        """Check syntax, scan comments, then emit tokens line by line."""
        self._check_syntax()
        self._scan()

        tokens: list[Token] = []
        for index, line in enumerate(self._lines):
            tokens.extend(self._tokens_for_line(index, line))

        logger.debug(
            "Extracted %d tokens (%d comments) from %d lines",
            len(tokens),
            sum(len(c) for c in self._comments.values()),
            len(self._lines),
        )
        return tokens

    # ------------------------------------------------------------------
    # Source analysis
    # ------------------------------------------------------------------

    def _check_syntax(self) -> None:
        """Reject sources the Python parser does not accept."""
        try:
            ast.parse(self._source)
        except SyntaxError as exc:
            raise SourceSyntaxError(exc.msg, exc.lineno or 1, exc.offset or 1) from exc
        except ValueError as exc:
            # Older interpreters report NUL bytes as ValueError.
            raise SourceSyntaxError(str(exc), 1, 1) from exc

    def _scan(self) -> None:
        """Collect comment spans and multi-line string rows from the tokenizer."""
        open_strings: list[int] = []
        try:
            for tok in tokenize.generate_tokens(io.StringIO(self._source).readline):
                if tok.type == tokenize.COMMENT:
                    row, col = tok.start
                    self._comments.setdefault(row, []).append((col, tok.string))
                elif tok.type == tokenize.STRING:
                    self._mark_literal(tok.start[0], tok.end[0])
                elif tok.type in _SPLIT_STRING_STARTS:
                    open_strings.append(tok.start[0])
                elif tok.type in _SPLIT_STRING_ENDS and open_strings:
                    self._mark_literal(open_strings.pop(), tok.end[0])
        except (tokenize.TokenError, SyntaxError) as exc:
            line, column = _error_position(exc)
            raise SourceSyntaxError(str(exc.args[0]) if exc.args else str(exc), line, column) from exc

    def _mark_literal(self, start_row: int, end_row: int) -> None:
        self._literal_rows.update(range(start_row + 1, end_row + 1))

    # ------------------------------------------------------------------
    # Per-line emission
    # ------------------------------------------------------------------

    def _tokens_for_line(self, index: int, line: str) -> list[Token]:
        row = index + 1
        comments = self._comments.get(row)
        if comments:
            return self._tokens_for_commented_line(index, line, sorted(comments))
        if row in self._literal_rows:
            return [Token(TokenKind.CODE, line, index)]
        if not line.strip():
            return [Token(TokenKind.BLANK, "", index)]
        return [Token(TokenKind.CODE, line, index)]

    def _tokens_for_commented_line(self, index: int, line: str, comments: list[tuple[int, str]]) -> list[Token]:
        tokens: list[Token] = []
        emitted_code = False
        for column, text in comments:
            code_part = line[:column]
            if not emitted_code and code_part.strip():
                tokens.append(Token(TokenKind.CODE, code_part.rstrip(), index))
                emitted_code = True
            tokens.append(classify_comment(text, index + 1, context=line, warnings=self._warnings))
        return tokens


def _error_position(exc: Exception) -> tuple[int, int]:
    """Best-effort (line, column) for a tokenizer failure, both 1-based."""
    if isinstance(exc, SyntaxError):
        return exc.lineno or 1, exc.offset or 1
    if len(exc.args) > 1 and isinstance(exc.args[1], tuple):
        line, column = exc.args[1]
        return line or 1, column + 1
    return 1, 1
