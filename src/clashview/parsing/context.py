#!/usr/bin/env python3
"""
CLASHVIEW EXTRACTION CONTEXT
----------------------------
The record of one extraction pass: the cleaned input, the candidate lines
the scanner found, the accepted nodes and the dropped-record diagnostics.

Author: ClashView Team
Date: 2026-10-17
"""

from dataclasses import dataclass, field
from typing import List
from clashview.core.models import DroppedRecord, NodeRecord, RawRecordLine

@dataclass
class ExtractionContext:
    """
    Built fresh by the ExtractionPipeline for every run; never shared.
    """
    raw_text: str                                                   # Input after artifact cleanup
    record_lines: List[RawRecordLine] = field(default_factory=list) # Candidate `- { ... }` lines
    nodes: List[NodeRecord] = field(default_factory=list)           # Validated nodes, document order
    dropped: List[DroppedRecord] = field(default_factory=list)      # Records rejected by validation
    entered_section: bool = False                                   # Whether `proxies:` was ever seen

    @property
    def is_empty(self) -> bool:
        return not self.nodes
