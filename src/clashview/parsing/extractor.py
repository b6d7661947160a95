#!/usr/bin/env python3
"""
CLASHVIEW EXTRACTOR - Record Assembly
-------------------------------------
Turns a RawRecordLine into a typed NodeRecord:
tokenize -> strip quotes -> coerce -> assemble -> validate.

Rejected records never abort the run. They are collected as
DroppedRecord notices and logged at WARNING level.

Author: ClashView Team
Date: 2026-10-17
"""

import re
import math
import logging
from typing import Dict, List, Optional, Union

from clashview.core.models import DroppedRecord, NodeRecord, PropertyValue, RawRecordLine
from clashview.parsing.lexer import strip_quotes, tokenize
from clashview.validator.validator import NodeValidator

logger = logging.getLogger("clashview.extractor")

NUMBER_PATTERN = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')


def parse_number(value: str) -> Optional[Union[int, float]]:
    """
    Returns an int or float for a finite numeric literal, else None.
    Surrounding whitespace is ignored; integral values come back as int.
    """
    value = value.strip()
    if not NUMBER_PATTERN.match(value):
        return None
    if re.match(r'^[+-]?\d+$', value):
        return int(value)
    number = float(value)
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def coerce_value(key: str, value: str) -> PropertyValue:
    """
    Priority order matters: a `port` that is not numeric still gets a
    chance to become a boolean.
    """
    if key == "port":
        number = parse_number(value)
        if number is not None:
            return number
    if value == "true":
        return True
    if value == "false":
        return False
    return value


class RecordExtractor:
    """
    Assembles and validates records. Keeps a per-instance list of
    dropped records so callers can inspect diagnostics after a run.
    """

    def __init__(self, validator: Optional[NodeValidator] = None):
        self.validator = validator or NodeValidator()
        self.dropped: List[DroppedRecord] = []

    def assemble(self, body: str) -> Dict[str, PropertyValue]:
        props: Dict[str, PropertyValue] = {}
        for key, raw_value in tokenize(body):
            props[key] = coerce_value(key, strip_quotes(raw_value))
        return props

    def extract(self, record: RawRecordLine) -> Optional[NodeRecord]:
        props = self.assemble(record.body)
        valid, missing = self.validator.validate(props)
        if not valid:
            logger.warning(
                "Skipping incomplete node (missing %s): %s %s",
                ", ".join(missing), props, record.raw_line.strip(),
            )
            self.dropped.append(DroppedRecord(
                line_no=record.line_no,
                properties=props,
                raw_line=record.raw_line,
                missing=missing,
            ))
            return None
        return NodeRecord(properties=props, line_no=record.line_no)

    def extract_all(self, records: List[RawRecordLine]) -> List[NodeRecord]:
        nodes = []
        for record in records:
            node = self.extract(record)
            if node is not None:
                nodes.append(node)
        return nodes
