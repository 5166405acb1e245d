#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Classifier

Decides per work whether the long-form horizontal flow must replace the
declared orientation. Vertical (top-to-bottom, right-to-left) columns use
page width in proportion to line count, so long works overflow a fixed
page in that mode.

The decision is presentation-time only: records are never modified.

Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.constants import LONG_POEM_MAX_CHARS, LONG_POEM_MAX_LINES
from inkverse.contracts import LayoutMode, PoemRecord


class FlowVariant(Enum):
    """Text-flow strategy a renderer must use for one work"""
    LONG_FORM = "long_form"                  # horizontal, justified paragraph flow
    SHORT_VERTICAL = "short_vertical"        # artistic vertical-rl columns
    SHORT_HORIZONTAL = "short_horizontal"    # centered horizontal lines


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one work's body"""
    force_horizontal: bool
    char_count: int
    line_count: int

    def flow_for(self, layout: LayoutMode) -> FlowVariant:
        """Resolve the flow variant for a record's declared layout"""
        if self.force_horizontal:
            return FlowVariant.LONG_FORM
        if layout == LayoutMode.VERTICAL:
            return FlowVariant.SHORT_VERTICAL
        return FlowVariant.SHORT_HORIZONTAL


class LayoutClassifier:
    """
    Long/short classifier for poem bodies.

    A work is long when it has more than `max_chars` characters or more
    than `max_lines` lines. Characters are Unicode code points; lines are
    the newline-separated segments of the body.

    Usage:
        classifier = LayoutClassifier()
        result = classifier.classify(record.content)
        if result.force_horizontal:
            ...
    """

    def __init__(
        self,
        max_chars: int = LONG_POEM_MAX_CHARS,
        max_lines: int = LONG_POEM_MAX_LINES,
    ):
        self.max_chars = max_chars
        self.max_lines = max_lines

    def classify(self, content: Optional[str]) -> Classification:
        if not content:
            return Classification(force_horizontal=False, char_count=0, line_count=0)

        char_count = len(content)
        line_count = len(content.split("\n"))
        is_long = char_count > self.max_chars or line_count > self.max_lines

        return Classification(
            force_horizontal=is_long,
            char_count=char_count,
            line_count=line_count,
        )

    def classify_record(self, record: PoemRecord) -> Classification:
        return self.classify(record.content)

    @classmethod
    def from_settings(cls, settings) -> 'LayoutClassifier':
        return cls(
            max_chars=settings.long_poem_max_chars,
            max_lines=settings.long_poem_max_lines,
        )
