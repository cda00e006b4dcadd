# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Block assembly: groups resolved tokens into setup, test, teardown and preamble blocks.

The open block is always in one of four states, derived from what it holds:

    EMPTY        nothing but blank lines or comments
    DESCRIPTION  description text, no code, no expectations
    CODE         at least one code line, no expectations
    CLOSED       at least one expectation; only expectations extend it

Every (state, token class) pair maps to exactly one action in
``_TRANSITIONS``. Assembly is total: any token stream produces a block list.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from tryouts.model.warnings import ParserWarning
from tryouts.parser.boundaries import BoundarySpan
from tryouts.parser.diagnostics import WarningCollector
from tryouts.parser.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class BlockKind(enum.Enum):
    """Role of a finalized block."""

    SETUP = "setup"
    TEST = "test"
    TEARDOWN = "teardown"
    PREAMBLE = "preamble"


class BlockState(enum.Enum):
    """State of the block currently being filled."""

    EMPTY = "empty"
    DESCRIPTION = "description"
    CODE = "code"
    CLOSED = "closed"


class TokenClass(enum.Enum):
    """Token kinds as the state machine sees them."""

    DESCRIPTION = "description"
    CODE = "code"
    EXPECTATION = "expectation"
    # Blank lines, comments and malformed expectation markers.
    CONTEXT = "context"


class Action(enum.Enum):
    """What the assembler does with one token."""

    EXTEND_DESCRIPTION = "extend_description"
    START_WITH_DESCRIPTION = "start_with_description"
    APPEND_CODE = "append_code"
    START_WITH_CODE = "start_with_code"
    APPEND_EXPECTATION = "append_expectation"
    ATTACH_TO_CODE = "attach_to_code"
    ATTACH_TRAILING = "attach_trailing"


@dataclass
class Block:
    """A contiguous group of tokens, filled token by token then classified once.

    Attributes:
        description: Description text; consecutive description lines are
            joined with a single space.
        code_tokens: Code lines plus any blank lines and comments seen before
            the first expectation.
        expectation_tokens: Expectation tokens in source order.
        comment_tokens: Blank lines and comments seen after the first expectation.
        start_line: 0-based line of the first description, code or expectation.
        end_line: 0-based line of the last code line or expectation; set on
            finalization.
        kind: Role assigned on finalization.
    """

    description: str = ""
    code_tokens: list[Token] = field(default_factory=list)
    expectation_tokens: list[Token] = field(default_factory=list)
    comment_tokens: list[Token] = field(default_factory=list)
    start_line: int | None = None
    end_line: int | None = None
    kind: BlockKind | None = None

    @property
    def state(self) -> BlockState:
        if self.expectation_tokens:
            return BlockState.CLOSED
        if self.has_code:
            return BlockState.CODE
        if self.description:
            return BlockState.DESCRIPTION
        return BlockState.EMPTY

    @property
    def has_code(self) -> bool:
        return any(t.is_code for t in self.code_tokens)

    @property
    def code(self) -> str:
        """The block's code lines joined with newlines; comments and blanks excluded."""
        return "\n".join(t.content for t in self.code_tokens if t.is_code)

    @property
    def has_content(self) -> bool:
        return bool(self.description or self.code_tokens or self.expectation_tokens)


def classify_token(token: Token) -> TokenClass:
    """Map a resolved token to the class the state machine dispatches on.

    Raises:
        ValueError: For POTENTIAL_DESCRIPTION tokens, which must be resolved first.
    """
    if token.kind is TokenKind.POTENTIAL_DESCRIPTION:
        raise ValueError(f"line {token.line + 1}: unresolved potential description")
    return _TOKEN_CLASSES[token.kind]


def transition(state: BlockState, token_class: TokenClass) -> Action:
    """Return the action for a token of *token_class* arriving in *state*."""
    return _TRANSITIONS[(state, token_class)]


def assemble_blocks(
    tokens: list[Token],
    *,
    spans: list[BoundarySpan] | None = None,
    warnings: WarningCollector | None = None,
) -> list[Block]:
    """Group resolved tokens into classified blocks.

    Args:
        tokens: Output of the boundary resolver.
        spans: Confirmed test spans. Code that follows an expectation inside
            a span starts a new block and records an AMBIGUOUS_BOUNDARY warning.
        warnings: Collector for AMBIGUOUS_BOUNDARY warnings.

    Returns:
        Finalized blocks in source order, each with ``kind`` and ``end_line`` set.
    """
    return _Assembler(spans or [], warnings).assemble(tokens)


# ################
# Implementation
# ################

_TOKEN_CLASSES: dict[TokenKind, TokenClass] = {
    TokenKind.DESCRIPTION: TokenClass.DESCRIPTION,
    TokenKind.CODE: TokenClass.CODE,
    TokenKind.EXPECTATION: TokenClass.EXPECTATION,
    TokenKind.BLANK: TokenClass.CONTEXT,
    TokenKind.COMMENT: TokenClass.CONTEXT,
    TokenKind.MALFORMED_EXPECTATION: TokenClass.CONTEXT,
}

_TRANSITIONS: dict[tuple[BlockState, TokenClass], Action] = {
    (BlockState.EMPTY, TokenClass.DESCRIPTION): Action.START_WITH_DESCRIPTION,
    (BlockState.EMPTY, TokenClass.CODE): Action.APPEND_CODE,
    (BlockState.EMPTY, TokenClass.EXPECTATION): Action.APPEND_EXPECTATION,
    (BlockState.EMPTY, TokenClass.CONTEXT): Action.ATTACH_TO_CODE,
    (BlockState.DESCRIPTION, TokenClass.DESCRIPTION): Action.EXTEND_DESCRIPTION,
    (BlockState.DESCRIPTION, TokenClass.CODE): Action.APPEND_CODE,
    (BlockState.DESCRIPTION, TokenClass.EXPECTATION): Action.APPEND_EXPECTATION,
    (BlockState.DESCRIPTION, TokenClass.CONTEXT): Action.ATTACH_TO_CODE,
    (BlockState.CODE, TokenClass.DESCRIPTION): Action.START_WITH_DESCRIPTION,
    (BlockState.CODE, TokenClass.CODE): Action.APPEND_CODE,
    (BlockState.CODE, TokenClass.EXPECTATION): Action.APPEND_EXPECTATION,
    (BlockState.CODE, TokenClass.CONTEXT): Action.ATTACH_TO_CODE,
    (BlockState.CLOSED, TokenClass.DESCRIPTION): Action.START_WITH_DESCRIPTION,
    (BlockState.CLOSED, TokenClass.CODE): Action.START_WITH_CODE,
    (BlockState.CLOSED, TokenClass.EXPECTATION): Action.APPEND_EXPECTATION,
    (BlockState.CLOSED, TokenClass.CONTEXT): Action.ATTACH_TRAILING,
}


class _Assembler:
    """Runs the block state machine over one token stream."""

    def __init__(self, spans: list[BoundarySpan], warnings: WarningCollector | None) -> None:
        self._spans = spans
        self._warnings = warnings
        self._blocks: list[Block] = []
        self._current = Block()

    def assemble(self, tokens: list[Token]) -> list[Block]:
        for token in tokens:
            self._step(token)
        self._flush()
        _finalize(self._blocks)
        logger.debug(
            "Assembled %d blocks: %s",
            len(self._blocks),
            ", ".join(b.kind.value for b in self._blocks if b.kind is not None),
        )
        return self._blocks

    def _step(self, token: Token) -> None:
        block = self._current
        action = transition(block.state, classify_token(token))

        if action is Action.EXTEND_DESCRIPTION:
            block.description = f"{block.description} {token.content}".strip()
        elif action is Action.START_WITH_DESCRIPTION:
            self._flush()
            self._current = Block(description=token.content, start_line=token.line)
        elif action is Action.APPEND_CODE:
            block.code_tokens.append(token)
            if block.start_line is None:
                block.start_line = token.line
        elif action is Action.START_WITH_CODE:
            self._blocks.append(block)
            self._current = Block(code_tokens=[token], start_line=token.line)
            self._check_ambiguous(token)
        elif action is Action.APPEND_EXPECTATION:
            block.expectation_tokens.append(token)
            if block.start_line is None:
                block.start_line = token.line
        elif action is Action.ATTACH_TO_CODE:
            block.code_tokens.append(token)
        elif action is Action.ATTACH_TRAILING:
            block.comment_tokens.append(token)

    def _flush(self) -> None:
        """Close the current block, keeping it only if it holds anything."""
        if self._current.has_content:
            self._blocks.append(self._current)
        self._current = Block()

    def _check_ambiguous(self, token: Token) -> None:
        if self._warnings is None:
            return
        if any(span.contains(token.line) for span in self._spans):
            self._warnings.add(
                ParserWarning.ambiguous_boundary(line_number=token.line + 1, context=token.content.strip())
            )


def _finalize(blocks: list[Block]) -> None:
    """Assign line ranges and roles once every token has been consumed."""
    last_index = len(blocks) - 1
    for index, block in enumerate(blocks):
        if block.start_line is None:
            block.start_line = min((t.line for t in block.code_tokens), default=0)
        block.end_line = _end_line(block, block.start_line)

        if block.expectation_tokens:
            block.kind = BlockKind.TEST
        elif index == 0:
            block.kind = BlockKind.SETUP
        elif index == last_index:
            block.kind = BlockKind.TEARDOWN
        else:
            block.kind = BlockKind.PREAMBLE


def _end_line(block: Block, start_line: int) -> int:
    lines = [t.line for t in block.code_tokens if t.is_code]
    lines.extend(t.line for t in block.expectation_tokens)
    return max(lines, default=start_line)
