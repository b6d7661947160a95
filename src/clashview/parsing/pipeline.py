#!/usr/bin/env python3
"""
CLASHVIEW EXTRACTION PIPELINE
-----------------------------
Central coordinator for the extraction phase. Runs the scanner and the
extractor in a strict order over the full document text and returns an
ExtractionContext.

Every run builds its own scanner and extractor, so the pipeline holds no
state between calls and may be used from several threads at once.

Author: ClashView Team
Date: 2026-10-17
"""

import logging
from typing import List

from clashview.core.models import NodeRecord
from clashview.parsing.context import ExtractionContext
from clashview.parsing.extractor import RecordExtractor
from clashview.parsing.scanner import SectionScanner

logger = logging.getLogger("clashview.pipeline")


class ExtractionPipeline:
    """
    The Orchestrator: cleanup, section scan, record extraction.
    """

    def _clean_artifacts(self, text: str) -> str:
        """
        Removes invisible UTF-8 BOM markers and standardizes line endings.
        """
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n')

    def run(self, document: str) -> ExtractionContext:
        # --- PHASE 1: ARTIFACT CLEANUP ---
        cleaned = self._clean_artifacts(document or "")

        # --- PHASE 2: SECTION SCAN ---
        scanner = SectionScanner()
        record_lines = scanner.scan(cleaned)

        # --- PHASE 3: RECORD EXTRACTION ---
        extractor = RecordExtractor()
        nodes = extractor.extract_all(record_lines)

        context = ExtractionContext(
            raw_text=cleaned,
            record_lines=record_lines,
            nodes=nodes,
            dropped=list(extractor.dropped),
            entered_section=scanner.entered_section,
        )

        logger.debug(
            "extraction: %d candidate line(s), %d node(s), %d dropped",
            len(record_lines), len(nodes), len(context.dropped),
        )
        return context


def parse_clash_nodes(document: str) -> List[NodeRecord]:
    """Shortcut returning only the accepted nodes."""
    return ExtractionPipeline().run(document).nodes
