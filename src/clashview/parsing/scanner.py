#!/usr/bin/env python3
"""
CLASHVIEW SCANNER - Section Walker
----------------------------------
Walks a subscription document line by line and isolates the single-line
node records living under the top-level `proxies:` header.

The section-exit rule is an indentation and colon heuristic, not a
structural parse. It may keep a section open longer than a real YAML
parser would; that is accepted behaviour.

Author: ClashView Team
Date: 2026-10-17
"""

import re
import logging
from typing import List

from clashview.core.models import RawRecordLine

logger = logging.getLogger("clashview.scanner")


class SectionScanner:
    """
    Tracks whether the cursor is inside the node-list section and emits
    the body of every `- { ... }` line found there.
    """

    SECTION_HEADER = "proxies:"

    # Group 1: record body (no closing brace allowed inside)
    RECORD_PATTERN = re.compile(r'^- \{\s*([^}]+?)\s*\}$')

    def __init__(self):
        self.in_section = False
        self.entered_section = False

    def _is_section_exit(self, line: str, stripped: str) -> bool:
        """A new top-level key: flush-left, has a colon, not a list item or comment."""
        if not stripped or stripped.startswith('#') or stripped.startswith('-'):
            return False
        return ':' in stripped and not line[:1].isspace()

    def scan(self, document: str) -> List[RawRecordLine]:
        # --- RESET GATE ---
        self.in_section = False
        self.entered_section = False

        records = []
        for i, line in enumerate(document.split('\n'), 1):
            stripped = line.strip()

            if not self.in_section:
                if stripped == self.SECTION_HEADER:
                    self.in_section = True
                    self.entered_section = True
                continue

            if self._is_section_exit(line, stripped):
                logger.debug("section closed at line %d by '%s'", i, stripped)
                self.in_section = False
                continue

            match = self.RECORD_PATTERN.match(stripped)
            if match:
                records.append(RawRecordLine(line_no=i, body=match.group(1), raw_line=line))

        logger.debug("scan complete: %d record line(s), section_seen=%s",
                     len(records), self.entered_section)
        return records
