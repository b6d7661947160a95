#!/usr/bin/env python3
"""
CLASHVIEW CORE MODELS
---------------------
Defines the fundamental data structures used across the ClashView engine.
These models represent the lowest level of subscription abstraction.

Author: ClashView Team
Date: 2026-10-17
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

# Closed variant for every value a record property can hold
PropertyValue = Union[str, int, float, bool]
Property = Tuple[str, PropertyValue]

REQUIRED_FIELDS = ("name", "type", "server", "port")


@dataclass
class RawRecordLine:
    """
    A single-line flow record found inside the `proxies:` section.

    Only the inner body of `- { <body> }` is kept; it is handed
    to the extractor without any further interpretation.
    """
    line_no: int            # The original line number in the document
    body: str               # Text between the braces
    raw_line: str = ""      # The original unmutated line for debugging


@dataclass
class NodeDetail:
    """A labelled value ready for display."""
    label: str
    value: PropertyValue


@dataclass
class NodeRecord:
    """
    A validated proxy node.

    Backed by an insertion-ordered mapping so unknown keys pass through
    untouched. The four required properties are guaranteed by the extractor.
    """
    properties: Dict[str, PropertyValue] = field(default_factory=dict)
    line_no: int = 0

    @property
    def name(self) -> PropertyValue:
        return self.properties["name"]

    @property
    def type(self) -> PropertyValue:
        return self.properties["type"]

    @property
    def server(self) -> PropertyValue:
        return self.properties["server"]

    @property
    def port(self) -> PropertyValue:
        return self.properties["port"]

    @property
    def extras(self) -> Dict[str, PropertyValue]:
        """Every property other than the required four, in source order."""
        return {k: v for k, v in self.properties.items() if k not in REQUIRED_FIELDS}

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.properties.get(key, default)

    def __getitem__(self, key: str) -> PropertyValue:
        return self.properties[key]

    def __contains__(self, key: object) -> bool:
        return key in self.properties

    def to_dict(self) -> Dict[str, PropertyValue]:
        return dict(self.properties)

    def details(self) -> List[NodeDetail]:
        """
        Builds the ordered label/value list used by the node cards.
        Primary fields always come first; optional ones only when set.
        """
        props = self.properties
        details = [
            NodeDetail("Name", self.name),
            NodeDetail("Type", self.type),
            NodeDetail("Server", self.server),
            NodeDetail("Port", self.port),
        ]

        for key, label in (("cipher", "Cipher"), ("uuid", "UUID"),
                           ("network", "Network"), ("ws-path", "WS Path")):
            if props.get(key):
                details.append(NodeDetail(label, props[key]))

        for key, label in (("tls", "TLS"), ("udp-relay", "UDP Relay")):
            if key in props:
                details.append(NodeDetail(label, "Yes" if props[key] else "No"))

        if props.get("password"):
            details.append(NodeDetail("Password", props["password"]))
        if "alterId" in props:
            details.append(NodeDetail("Alter ID", props["alterId"]))

        return details


@dataclass
class DroppedRecord:
    """
    Diagnostic notice for a record line that failed validation.
    Carries the partial mapping and the source line for debugging.
    """
    line_no: int
    properties: Dict[str, PropertyValue]
    raw_line: str
    missing: List[str] = field(default_factory=list)

    def describe(self) -> str:
        return (f"line {self.line_no}: missing {', '.join(self.missing)} "
                f"-> {self.raw_line.strip()}")
