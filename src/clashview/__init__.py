"""ClashView - Clash subscription node extractor."""

from clashview.core.models import DroppedRecord, NodeDetail, NodeRecord, RawRecordLine
from clashview.parsing.pipeline import ExtractionPipeline, parse_clash_nodes

__version__ = "1.0.0"

__all__ = [
    "DroppedRecord",
    "ExtractionPipeline",
    "NodeDetail",
    "NodeRecord",
    "RawRecordLine",
    "parse_clash_nodes",
]
