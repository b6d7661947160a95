#!/usr/bin/env python3
"""
CLASHVIEW ENGINE - The Orchestrator
-----------------------------------
The ViewerEngine drives a subscription through fetch, extraction and
export. It turns every outcome, failures included, into a plain report
dict that the CLI can render.

Author: ClashView Team
Date: 2026-10-17
"""

import os
import time
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from clashview.core.config import ViewerConfig, load_config_from_env
from clashview.core.models import NodeRecord
from clashview.export.exporter import NodeExporter
from clashview.fetch.fetcher import ConfigFetcher, FetchError
from clashview.parsing.pipeline import ExtractionPipeline

logger = logging.getLogger("clashview.engine")

EMPTY_RESULT_MESSAGE = (
    "No Clash nodes found or unable to parse from the provided URL. "
    "Please check the URL and content format."
)


class ViewerEngine:
    """
    Principal orchestrator. One engine can serve any number of sources;
    each source gets its own pipeline run and its own report.
    """

    def __init__(self, config: Optional[ViewerConfig] = None):
        self.config = config or load_config_from_env()
        self.fetcher = ConfigFetcher(
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
            verify_ssl=self.config.verify_ssl,
        )
        self.pipeline = ExtractionPipeline()
        self.exporter = NodeExporter()

    @staticmethod
    def is_url(source: str) -> bool:
        return "://" in source

    def read_source(self, source: str) -> str:
        """Fetches URLs; reads anything else as a local file (BOM-aware)."""
        if self.is_url(source):
            return self.fetcher.fetch(source)
        return Path(source).read_text(encoding='utf-8-sig')

    def load_source(self, source: str) -> Dict[str, Any]:
        """
        Full fetch-and-extract cycle for a single source.
        """
        source = (source or "").strip()
        if not source:
            return self._source_error(source, "FETCH_FAILED", "Please enter a valid URL.")
        if not self.is_url(source) and not Path(source).is_file():
            return self._source_error(source, "FILE_NOT_FOUND", f"Path missing: {source}")

        try:
            raw_text = self.read_source(source)
        except FetchError as e:
            logger.error(f"Fetch failed for {source}: {e}")
            return self._source_error(source, "FETCH_FAILED", str(e))
        except OSError as e:
            logger.error(f"Unable to read {source}: {e}")
            return self._source_error(source, "FILE_NOT_FOUND", str(e))

        try:
            context = self.pipeline.run(raw_text)
        except Exception as e:
            logger.exception(f"Extraction crashed for {source}")
            return self._source_error(source, "ENGINE_ERROR", str(e))

        found = not context.is_empty
        return {
            "source": source,
            "status": "NODES_FOUND" if found else "EMPTY",
            "success": found,
            "nodes": context.nodes,
            "node_count": len(context.nodes),
            "dropped": context.dropped,
            "section_found": context.entered_section,
            "error": None,
            "message": None if found else EMPTY_RESULT_MESSAGE,
            "timestamp": time.time(),
        }

    def load_sources(self, sources: List[str]) -> List[Dict[str, Any]]:
        return [self.load_source(s) for s in sources]

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        if not reports:
            return {
                "total_sources": 0, "successful": 0, "total_nodes": 0,
                "dropped_records": 0, "errors": 0,
            }

        return {
            "total_sources": len(reports),
            "successful": sum(1 for r in reports if r.get("success", False)),
            "total_nodes": sum(r.get("node_count", 0) for r in reports),
            "dropped_records": sum(len(r.get("dropped") or []) for r in reports),
            "errors": sum(1 for r in reports if r.get("error")),
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def export_nodes(self, nodes: List[NodeRecord], target: str, fmt: str = "yaml") -> Path:
        """Renders nodes and writes them atomically to `target`."""
        content = self.exporter.export(nodes, fmt)
        target_path = Path(target).resolve()
        self._atomic_write(target_path, content)
        logger.info(f"Exported {len(nodes)} node(s) to {target_path}")
        return target_path

    def _atomic_write(self, target_path: Path, content: str):
        if not target_path.parent.exists():
            target_path.parent.mkdir(parents=True, exist_ok=True)
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_name(target_path.name + '.clashview.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except Exception as e:
            if temp_file.exists(): temp_file.unlink()
            raise IOError(f"Atomic write failed: {str(e)}")

    def _source_error(self, source: str, status: str, error: str) -> Dict[str, Any]:
        return {
            "source": source, "status": status, "error": error,
            "success": False, "nodes": [], "node_count": 0, "dropped": [],
            "section_found": False, "message": error, "timestamp": time.time(),
        }
