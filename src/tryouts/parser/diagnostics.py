# Copyright 2026 Tryouts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Warning collection for a single parse invocation."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from tryouts.model.warnings import ParserWarning, WarningKind

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class WarningCollector:
    """Append-only list of parser warnings owned by one parse.

    Every warning is also logged at WARNING level as ``path:line: message``.
    """

    def __init__(self, source_file: str = "<string>") -> None:
        self.source_file = source_file
        self._warnings: list[ParserWarning] = []

    def add(self, warning: ParserWarning) -> None:
        """Record a warning."""
        self._warnings.append(warning)
        logger.warning("%s:%d: %s", self.source_file, warning.line_number, warning.message)

    def of_kind(self, kind: WarningKind) -> list[ParserWarning]:
        """Return the recorded warnings of one kind, in recording order."""
        return [w for w in self._warnings if w.kind is kind]

    def freeze(self) -> tuple[ParserWarning, ...]:
        """Return an immutable snapshot of the recorded warnings."""
        return tuple(self._warnings)

    def __iter__(self) -> Iterator[ParserWarning]:
        return iter(self._warnings)

    def __len__(self) -> int:
        return len(self._warnings)
