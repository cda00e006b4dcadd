# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of classified blocks into the immutable ParseResult model."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from tryouts.config import ParserConfig
from tryouts.model.entities import (
    Expectation,
    ParseMetadata,
    ParseResult,
    Setup,
    Teardown,
    TestCase,
)
from tryouts.model.types import LineRange
from tryouts.model.warnings import ParserWarning, WarningKind
from tryouts.parser.assembler import Block, BlockKind
from tryouts.parser.diagnostics import WarningCollector
from tryouts.parser.errors import StrictModeViolation
from tryouts.parser.tokens import Token

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

PARSER_NAME = "tokenize"


def build_parse_result(
    blocks: list[Block],
    *,
    lines: list[str],
    path: str,
    warnings: WarningCollector,
    config: ParserConfig | None = None,
) -> ParseResult:
    """Build the ParseResult for a file from its classified blocks.

    Records an UNNAMED_TEST warning for every test block without a
    description. In strict mode, once all warnings are known, the first
    such warning is raised as a StrictModeViolation.

    Args:
        blocks: Finalized blocks from the assembler.
        lines: The file's physical lines, for ``source_lines`` and warning context.
        path: Source file identifier stored on every entity.
        warnings: Collector holding the warnings recorded so far.
        config: Parser options; only ``strict`` is consulted here.

    Raises:
        StrictModeViolation: In strict mode, if any test case is unnamed.
    """
    config = config or ParserConfig()

    test_cases: list[TestCase] = []
    for block in blocks:
        if block.kind is not BlockKind.TEST:
            continue
        test_case = _build_test_case(block, lines, path)
        if not test_case.description:
            warnings.add(
                ParserWarning.unnamed_test(
                    line_number=test_case.line_range.first + 1,
                    context=_line_at(lines, test_case.line_range.first).strip(),
                )
            )
        test_cases.append(test_case)

    if config.strict:
        unnamed = warnings.of_kind(WarningKind.UNNAMED_TEST)
        if unnamed:
            raise StrictModeViolation(unnamed[0], source_file=path)

    setup_code, setup_range = _section(blocks, BlockKind.SETUP)
    teardown_code, teardown_range = _section(blocks, BlockKind.TEARDOWN)
    result = ParseResult(
        setup=Setup(code=setup_code, line_range=setup_range, path=path),
        test_cases=tuple(test_cases),
        teardown=Teardown(code=teardown_code, line_range=teardown_range, path=path),
        source_file=path,
        metadata=ParseMetadata(parser=PARSER_NAME, parsed_at=datetime.now(timezone.utc)),
        warnings=warnings.freeze(),
    )
    logger.debug(
        "%s: %d test cases, %d warnings, %d preamble blocks dropped",
        path,
        result.total_tests,
        len(result.warnings),
        sum(1 for b in blocks if b.kind is BlockKind.PREAMBLE),
    )
    return result


def to_expectation(token: Token) -> Expectation:
    """Map an EXPECTATION token to its Expectation value.

    Raises:
        ValueError: If the token is not an expectation.
    """
    if not token.is_expectation or token.expectation_type is None:
        raise ValueError(f"line {token.line + 1}: {token.kind.value} token is not an expectation")
    return Expectation(content=token.content, type=token.expectation_type, pipe=token.pipe)


# ################
# Implementation
# ################


def _build_test_case(block: Block, lines: list[str], path: str) -> TestCase:
    start_line, end_line = _block_range(block)
    first_expectation_line = block.expectation_tokens[0].line if block.expectation_tokens else start_line
    return TestCase(
        description=block.description,
        code=block.code,
        expectations=tuple(to_expectation(t) for t in block.expectation_tokens),
        line_range=LineRange(first=start_line, last=end_line),
        path=path,
        source_lines=tuple(lines[start_line : end_line + 1]),
        first_expectation_line=first_expectation_line,
    )


def _section(blocks: list[Block], kind: BlockKind) -> tuple[str, LineRange]:
    """Code and line range for setup or teardown, spanning every block of *kind*."""
    selected = [b for b in blocks if b.kind is kind]
    if not selected:
        return "", LineRange(first=0, last=0)

    first, _ = _block_range(selected[0])
    _, last = _block_range(selected[-1])
    code = "\n".join(b.code for b in selected if b.has_code)
    return code, LineRange(first=first, last=last)


def _block_range(block: Block) -> tuple[int, int]:
    if block.start_line is None or block.end_line is None:
        raise ValueError("block has not been finalized")
    return block.start_line, block.end_line


def _line_at(lines: list[str], index: int) -> str:
    return lines[index] if 0 <= index < len(lines) else ""
