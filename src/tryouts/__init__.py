# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Literate test files: expectations written as comments next to ordinary Python code."""

from tryouts.config import (
    CONFIG_FILE_NAME,
    ParserConfig,
    ParserConfigError,
    find_parser_config,
    load_parser_config,
)
from tryouts.model import (
    Expectation,
    ExpectationType,
    LineRange,
    ParseMetadata,
    ParseResult,
    ParserWarning,
    Setup,
    Teardown,
    TestCase,
    WarningKind,
)
from tryouts.parser import (
    SourceSyntaxError,
    StrictModeViolation,
    TryoutSyntaxError,
    parse,
    parse_file,
)
from tryouts.selection import LineSpec, NoMatchingTestsError, select_test_cases, split_path_spec

__all__ = [
    # Parsing
    "parse",
    "parse_file",
    "SourceSyntaxError",
    "StrictModeViolation",
    "TryoutSyntaxError",
    # Configuration
    "CONFIG_FILE_NAME",
    "ParserConfig",
    "ParserConfigError",
    "find_parser_config",
    "load_parser_config",
    # Model
    "Expectation",
    "ExpectationType",
    "LineRange",
    "ParseMetadata",
    "ParseResult",
    "ParserWarning",
    "Setup",
    "Teardown",
    "TestCase",
    "WarningKind",
    # Selection
    "LineSpec",
    "NoMatchingTestsError",
    "select_test_cases",
    "split_path_spec",
]
