#!/usr/bin/env python3
"""
CLASHVIEW VALIDATOR - The Gatekeeper
------------------------------------
Decides whether an assembled property mapping is a usable proxy node.
Nothing reaches the caller as a NodeRecord without passing through here.

Author: ClashView Team
Date: 2026-10-17
"""

import logging
from typing import Any, Dict, List, Tuple

logger = logging.getLogger("clashview.validator")


class NodeValidator:
    """
    Enforces the minimum identity of a proxy node.

    `name`, `type` and `server` must be truthy. `port` only has to be
    defined, so 0 passes while an empty string does not.
    """

    def __init__(self):
        self.truthy_fields = ["name", "type", "server"]
        self.defined_fields = ["port"]

    def missing_fields(self, properties: Dict[str, Any]) -> List[str]:
        missing = [f for f in self.truthy_fields if not properties.get(f)]
        for f in self.defined_fields:
            value = properties.get(f)
            if value is None or value == "":
                missing.append(f)
        return missing

    def validate(self, properties: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """Returns (is_valid, missing_field_names)."""
        missing = self.missing_fields(properties)
        return not missing, missing
