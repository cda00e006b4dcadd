# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for parsed tryout files (setup, test cases, teardown, warnings)."""

from tryouts.model.entities import (
    Expectation,
    ParseMetadata,
    ParseResult,
    Setup,
    Teardown,
    TestCase,
)
from tryouts.model.types import ExpectationType, LineRange
from tryouts.model.warnings import ParserWarning, WarningKind

__all__ = [
    # Value types
    "ExpectationType",
    "LineRange",
    # Warnings
    "ParserWarning",
    "WarningKind",
    # Entities
    "Expectation",
    "TestCase",
    "Setup",
    "Teardown",
    "ParseMetadata",
    "ParseResult",
]
