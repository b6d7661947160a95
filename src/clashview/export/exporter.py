#!/usr/bin/env python3
"""
CLASHVIEW EXPORTER - Clean Re-Emission
--------------------------------------
Writes extracted nodes back out as a `proxies:` document (one flow
mapping per line, readable by the scanner again) or as JSON.

Author: ClashView Team
Date: 2026-10-17
"""

import io
import json
from typing import List

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from clashview.core.models import NodeRecord

SUPPORTED_FORMATS = ("yaml", "json")


class NodeExporter:
    """
    The Reconstructor: converts NodeRecords into text.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        # Clash convention: list items indented 2 under the section key
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        # Wide enough that no flow record is ever wrapped onto a second line
        self.yaml.width = 4096
        self.preferred_order = ["name", "type", "server", "port"]

    def _to_flow_map(self, node: NodeRecord) -> CommentedMap:
        props = node.properties
        keys = list(props.keys())

        def sort_logic(key):
            if key in self.preferred_order:
                return self.preferred_order.index(key)
            return len(self.preferred_order) + keys.index(key)

        flow = CommentedMap()
        for key in sorted(keys, key=sort_logic):
            flow[key] = props[key]
        flow.fa.set_flow_style()
        return flow

    def to_yaml(self, nodes: List[NodeRecord]) -> str:
        seq = CommentedSeq(self._to_flow_map(n) for n in nodes)
        doc = CommentedMap()
        doc["proxies"] = seq
        stream = io.StringIO()
        self.yaml.dump(doc, stream)
        return stream.getvalue()

    def to_json(self, nodes: List[NodeRecord]) -> str:
        return json.dumps([n.to_dict() for n in nodes], indent=2, ensure_ascii=False)

    def export(self, nodes: List[NodeRecord], fmt: str = "yaml") -> str:
        fmt = (fmt or "yaml").lower()
        if fmt == "yaml":
            return self.to_yaml(nodes)
        if fmt == "json":
            return self.to_json(nodes)
        raise ValueError(f"Unsupported export format '{fmt}'. Choose from: {', '.join(SUPPORTED_FORMATS)}")
