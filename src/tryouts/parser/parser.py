# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tryout file parser.

Runs the full pipeline over one file:

    source -> tokens (extractor + classifier)
           -> resolved tokens + boundary spans (boundary resolver)
           -> classified blocks (assembler)
           -> ParseResult (builder)

Each call owns its own token list, block list and warning collector, so
independent files can be parsed concurrently.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tryouts.config import ParserConfig
from tryouts.model.entities import ParseResult
from tryouts.parser.assembler import assemble_blocks
from tryouts.parser.boundaries import resolve_boundaries
from tryouts.parser.builder import build_parse_result
from tryouts.parser.diagnostics import WarningCollector
from tryouts.parser.errors import SourceSyntaxError, TryoutSyntaxError
from tryouts.parser.extractor import extract_tokens, split_lines

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def parse(source: str, path: str = "<string>", config: ParserConfig | None = None) -> ParseResult:
    """Parse tryout source text into setup, test cases and teardown.

    Args:
        source: The full text of a tryout file.
        path: Identifier recorded on the result and used in error messages.
        config: Parser options. Defaults to ``ParserConfig()``.

    Returns:
        A ParseResult. Recoverable problems are listed in its ``warnings``.

    Raises:
        TryoutSyntaxError: If the source is not valid Python.
        StrictModeViolation: In strict mode, if a test case has no description.
    """
    config = config or ParserConfig()
    # A leading byte-order mark is not part of the module text.
    source = source.removeprefix("\ufeff")
    lines = split_lines(source)
    warnings = WarningCollector(path)

    try:
        tokens = extract_tokens(source, warnings=warnings)
    except SourceSyntaxError as exc:
        context = lines[exc.line - 1] if 0 < exc.line <= len(lines) else ""
        raise TryoutSyntaxError(
            exc.reason,
            line_number=exc.line,
            context=context,
            source_file=path,
        ) from exc

    tokens, spans = resolve_boundaries(tokens, config)
    blocks = assemble_blocks(tokens, spans=spans, warnings=warnings)
    return build_parse_result(blocks, lines=lines, path=path, warnings=warnings, config=config)


def parse_file(path: Path | str, config: ParserConfig | None = None) -> ParseResult:
    """Read a UTF-8 tryout file and parse it.

    Raises:
        TryoutSyntaxError: If the file cannot be read or decoded, or is not
            valid Python.
        StrictModeViolation: In strict mode, if a test case has no description.
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise TryoutSyntaxError("File not found", line_number=0, context="", source_file=str(path)) from None
    except (OSError, UnicodeDecodeError) as exc:
        raise TryoutSyntaxError(
            f"Cannot read file: {exc}", line_number=0, context="", source_file=str(path)
        ) from exc

    logger.debug("Parsing %s (%d bytes)", path, len(source))
    return parse(source, str(path), config)
