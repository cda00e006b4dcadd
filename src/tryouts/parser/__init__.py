# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Comment extraction, annotation classification and block assembly for tryout files."""

from tryouts.parser.errors import SourceSyntaxError, StrictModeViolation, TryoutSyntaxError
from tryouts.parser.parser import parse, parse_file

__all__ = [
    "parse",
    "parse_file",
    "SourceSyntaxError",
    "StrictModeViolation",
    "TryoutSyntaxError",
]
